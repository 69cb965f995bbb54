"""Reconstruction efficiency of light (anti-)nuclei.

The efficiency is the ratio of the reconstructed transverse-momentum spectrum
(`histRecPt*` of `nuclei_efficiency_rec`) to the generated one
(`histGenPt*` of `nuclei_efficiency_gen`), for charged pions, anti-protons
and anti-helium-3.
"""

import numpy as np

from aodana.ana.base import TaskBase
from aodana.hist import HistType
from aodana.utils.enums import SpeciesEnum
from aodana.utils.globals import (
    AHE3_PDG,
    APROT_PDG,
    HE3_NSIGMA_SHIFT,
    PION_PDG,
    PT_BINNING,
    PT_LABEL,
)
from aodana.utils.kinematics import rapidity, tof_beta

__all__ = [
    "NucleiEfficiencyVertexTask",
    "NucleiEfficiencyGenTask",
    "NucleiEfficiencyRecTask",
]

# (histogram suffix, PDG code, mass hypothesis, pt scale) of each species.
# Helium-3 tracks are reconstructed with charge one: their momentum is doubled
SPECIES = (
    ("Pion", PION_PDG, SpeciesEnum.PION, 1.0),
    ("Proton", APROT_PDG, SpeciesEnum.PROTON, 1.0),
    ("He3", AHE3_PDG, SpeciesEnum.HELIUM3, 2.0),
)


def corrected_he3_n_sigma(track):
    """TPC helium-3 n-sigma of a track, recentred around zero.

    Parameters
    ----------
    track : Track
        Reconstructed track

    Returns
    -------
    float
        Recentred helium-3 n-sigma
    """
    scale, slope = HE3_NSIGMA_SHIFT
    return track.tpc_n_sigma_he + scale * np.exp(slope * track.tpc_inner_param)


class NucleiEfficiencyVertexTask(TaskBase):
    """Fills the true z position of the generated collisions.

    .. code-block:: yaml

        ana:
          nuclei_efficiency_vtx:
            priority: 2
    """

    name = "nuclei_efficiency_vtx"
    source = "mc_collisions"

    def book(self):
        """Books the vertex histogram."""
        self.hists.add(
            "histVertexTrueZ",
            "MC true z position of z-vertex; vertex z (cm)",
            HistType.TH1F,
            [(200, -20.0, 20.0)],
        )

    def process(self, entry):
        """Fills the vertex position of one MC collision.

        Parameters
        ----------
        entry : dict
            MC collision entry
        """
        self.hists.fill("histVertexTrueZ", entry["mc_collision"].pos_z)


class NucleiEfficiencyGenTask(TaskBase):
    """Fills the transverse momentum of the generated primary particles of
    each species, within one unit of rapidity around zero.

    .. code-block:: yaml

        ana:
          nuclei_efficiency_gen:
            max_rapidity: 0.5
    """

    name = "nuclei_efficiency_gen"
    source = "mc_collisions"

    def __init__(self, max_rapidity=0.5):
        """Initialize the task.

        Parameters
        ----------
        max_rapidity : float, default 0.5
            Maximum absolute rapidity of the particles to count
        """
        super().__init__()
        self.max_rapidity = max_rapidity
        self.update_keys({"mc_particles": True})

    def book(self):
        """Books one generated spectrum per species."""
        for label, *_ in SPECIES:
            self.hists.add(
                f"histGenPt{label}",
                "generated particles",
                HistType.TH1F,
                [(PT_BINNING, PT_LABEL)],
            )

    def process(self, entry):
        """Fills the generated spectra of one MC collision.

        Parameters
        ----------
        entry : dict
            MC collision entry, with its `mc_particles`
        """
        for particle in entry["mc_particles"]:
            if not particle.is_physical_primary:
                continue
            if abs(particle.y) > self.max_rapidity:
                continue

            for label, pdg_code, *_ in SPECIES:
                if particle.pdg_code == pdg_code:
                    self.hists.fill(f"histGenPt{label}", particle.pt)


class NucleiEfficiencyRecTask(TaskBase):
    """Fills the transverse momentum of the reconstructed tracks of each
    species, along with the track quality histograms.

    A track enters the spectrum of a species if its TPC n-sigma for that
    species lies in an open window, if it is matched to a generated particle
    of that species (perfect PID) and if its rapidity under that mass
    hypothesis lies in ]-0.5, 0.5[.

    .. code-block:: yaml

        ana:
          nuclei_efficiency_rec:
            cut_vertex: 10.0
            cut_eta: 0.8
            nsigma_cut_low: -20.0
            nsigma_cut_high: 20.0
    """

    name = "nuclei_efficiency_rec"
    source = "collisions"

    def __init__(
        self,
        cut_vertex=10.0,
        cut_eta=0.8,
        nsigma_cut_low=-20.0,
        nsigma_cut_high=20.0,
        max_rapidity=0.5,
    ):
        """Initialize the task.

        Parameters
        ----------
        cut_vertex : float, default 10.0
            Accepted range of the collision z position (cm)
        cut_eta : float, default 0.8
            Accepted pseudorapidity range of the tracks. Not applied to the
            efficiency spectra, which only rely on the rapidity cut.
        nsigma_cut_low : float, default -20.0
            Lower bound of the n-sigma window (excluded)
        nsigma_cut_high : float, default 20.0
            Upper bound of the n-sigma window (excluded)
        max_rapidity : float, default 0.5
            Maximum absolute rapidity of the tracks (excluded)
        """
        super().__init__()
        assert nsigma_cut_low < nsigma_cut_high, (
            "The lower bound of the n-sigma window must be below its upper bound."
        )

        self.cut_vertex = cut_vertex
        self.cut_eta = cut_eta
        self.nsigma_cut_low = nsigma_cut_low
        self.nsigma_cut_high = nsigma_cut_high
        self.max_rapidity = max_rapidity

        self.update_keys({"tracks": True, "mc_particles": True})

    def book(self):
        """Books the spectra and the track quality histograms."""
        pt_axis = (PT_BINNING, PT_LABEL)
        add = self.hists.add
        add("histEvSel", "eventselection", HistType.TH1D, [(10, -0.5, 9.5)])
        add(
            "histRecVtxZ",
            "collision z position",
            HistType.TH1F,
            [(200, -20.0, 20.0, "z position (cm)")],
        )
        for label, *_ in SPECIES:
            add(f"histRecPt{label}", "reconstructed particles", HistType.TH1F, [pt_axis])

        add(
            "histTpcSignal",
            "Specific energy loss",
            HistType.TH2F,
            [
                (600, -6.0, 6.0, "#it{p/z} (GeV/#it{c})"),
                (1400, 0.0, 1400.0, "d#it{E} / d#it{X} (a. u.)"),
            ],
        )
        add(
            "histTofSignalData",
            "TOF signal",
            HistType.TH2F,
            [(600, -6.0, 6.0, "#it{p} (GeV/#it{c})"), (500, 0.0, 1.2, "#beta (TOF)")],
        )
        for tag in ("He3", "Pr", "Pi"):
            short = tag[:2]
            add(
                f"histTpcNsigma{tag}",
                f"n-sigma{tag} TPC",
                HistType.TH2F,
                [pt_axis, (200, -100.0, 100.0, f"n#sigma_{{{short}}} (a. u.)")],
            )

        add(
            "histItsClusters",
            "number of ITS clusters",
            HistType.TH1F,
            [(10, -0.5, 9.5, "number of ITS clusters")],
        )
        for origin in ("primary", "secondary"):
            add(
                f"histDcaXY{origin}",
                f"dca XY {origin} particles",
                HistType.TH1F,
                [(200, -1.0, 1.0, "dca XY (cm)")],
            )

    def process(self, entry):
        """Fills the histograms of one reconstructed collision.

        Parameters
        ----------
        entry : dict
            Collision entry, with its `tracks`
        """
        # Collisions outside of the accepted vertex range are not considered
        collision = entry["collision"]
        if abs(collision.pos_z) >= self.cut_vertex:
            return

        # Check the event selection
        self.hists.fill_label("histEvSel", "all")
        if not collision.sel8:
            return
        self.hists.fill_label("histEvSel", "sel8")

        self.hists.fill("histRecVtxZ", collision.pos_z)

        # Loop over the tracks of the collision
        particles = self.store["mc_particles"]
        for track in entry["tracks"]:
            if track.its_n_cls == 0:
                continue

            n_sigmas = {
                "Pion": track.tpc_n_sigma_pi,
                "Proton": track.tpc_n_sigma_pr,
                "He3": corrected_he3_n_sigma(track),
            }
            self.fill_qa(track, n_sigmas)

            # Fetch the generated particle the track is matched to, if any
            particle = None
            if 0 <= track.mc_particle_id < len(particles):
                particle = particles[track.mc_particle_id]
                origin = "primary" if particle.is_physical_primary else "secondary"
                self.hists.fill(f"histDcaXY{origin}", track.dca_xy)

            if particle is None:
                continue

            for label, pdg_code, species, scale in SPECIES:
                if not self.nsigma_cut_low < n_sigmas[label] < self.nsigma_cut_high:
                    continue
                if particle.pdg_code != pdg_code:
                    continue
                if label != "He3" and not particle.is_physical_primary:
                    continue

                pt = track.pt * scale
                y = rapidity(pt, track.eta, species.mass)
                if -self.max_rapidity < y < self.max_rapidity:
                    self.hists.fill(f"histRecPt{label}", pt)

    def fill_qa(self, track, n_sigmas):
        """Fills the track quality histograms of one track.

        Parameters
        ----------
        track : Track
            Reconstructed track
        n_sigmas : Dict[str, float]
            TPC n-sigma of the track under each species hypothesis
        """
        p_inner = track.tpc_inner_param
        self.hists.fill("histTpcSignal", p_inner * track.sign, track.tpc_signal)
        self.hists.fill("histTpcNsigmaPi", p_inner, n_sigmas["Pion"])
        self.hists.fill("histTpcNsigmaPr", p_inner, n_sigmas["Proton"])
        self.hists.fill("histTpcNsigmaHe3", p_inner, n_sigmas["He3"])
        self.hists.fill("histItsClusters", track.its_n_cls)

        if track.has_tof and track.tof_signal > 0.0:
            beta = tof_beta(track.length, track.tof_signal)
            self.hists.fill("histTofSignalData", p_inner * track.sign, beta)
