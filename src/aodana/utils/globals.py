"""Module which contains all global variables shared across the project."""

# Invalid index value of an index column (no associated row)
INVAL_IDX = -1

# Particle masses in GeV/c^2
ELEC_MASS = 0.00051099895  # Electron
MUON_MASS = 0.1056583755   # Muon
PION_MASS = 0.13957039     # Charged pion
KAON_MASS = 0.493677       # Charged kaon
PROT_MASS = 0.93827208816  # Proton
DEUT_MASS = 1.87561294257  # Deuteron
TRIT_MASS = 2.80892113298  # Triton
HE3_MASS  = 2.80839160743  # Helium-3
ALPH_MASS = 3.7273794066   # Alpha

# PDG codes of the species selected by the efficiency tasks
PION_PDG   = 211
APROT_PDG  = -2212
AHE3_PDG   = -1000020030

# Speed of light in cm/ps (TOF length in cm, TOF time in ps)
SPEED_OF_LIGHT = 299792458.0 * 1e-10

# Parametrization of the mean of the TPC helium-3 n-sigma, subtracted from
# the raw value as A * exp(B * p_inner)
HE3_NSIGMA_SHIFT = (94.222101, -0.905203)

# Default binning of the transverse-momentum spectra in GeV/c
PT_BINNING = (
    0.0, 0.05, 0.1, 0.15, 0.2, 0.3, 0.4, 0.6, 0.8, 1.0, 1.2, 1.4, 1.6,
    1.8, 2.0, 2.2, 2.4, 2.8, 3.2, 3.6, 4., 5., 6., 8., 10., 12., 14.
)

# Labels used for momenta in histogram titles
P_LABEL  = "#it{p} (GeV/#it{c})"
PT_LABEL = "#it{p}_{T} (GeV/#it{c})"
