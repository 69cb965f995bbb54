"""Module which contains enumerated variables shared across the project."""

from enum import IntEnum

from .globals import *

__all__ = ["SpeciesEnum", "enum_factory"]


class SpeciesEnum(IntEnum):
    """Enumerates the particle species with a TPC n-sigma column.

    The order matches the order of the `tpc_n_sigma_*` track columns.
    """

    ELECTRON = 0
    MUON = 1
    PION = 2
    KAON = 3
    PROTON = 4
    DEUTERON = 5
    TRITON = 6
    HELIUM3 = 7
    ALPHA = 8

    @property
    def short(self):
        """Two-letter species tag used in column and histogram names."""
        return SPECIES_TAGS[self][0]

    @property
    def label(self):
        """Species label used in histogram titles."""
        return SPECIES_TAGS[self][1]

    @property
    def mass(self):
        """Species mass in GeV/c^2."""
        return SPECIES_TAGS[self][2]


# Short tag, title label and mass of each species
SPECIES_TAGS = {
    SpeciesEnum.ELECTRON: ("El", "e", ELEC_MASS),
    SpeciesEnum.MUON: ("Mu", "#mu", MUON_MASS),
    SpeciesEnum.PION: ("Pi", "#pi", PION_MASS),
    SpeciesEnum.KAON: ("Ka", "K", KAON_MASS),
    SpeciesEnum.PROTON: ("Pr", "p", PROT_MASS),
    SpeciesEnum.DEUTERON: ("De", "d", DEUT_MASS),
    SpeciesEnum.TRITON: ("Tr", "t", TRIT_MASS),
    SpeciesEnum.HELIUM3: ("He", "^{3}He", HE3_MASS),
    SpeciesEnum.ALPHA: ("Al", "#alpha", ALPH_MASS),
}


def enum_factory(value):
    """Parses species from string name(s) to enumerated value(s).

    Parameters
    ----------
    value : Union[str, List[str]]
        Name or names of the species (from config), e.g. `pion` or `Pi`

    Returns
    -------
    Union[SpeciesEnum, List[SpeciesEnum]]
        Species or list of species
    """
    if not isinstance(value, str):
        return [enum_factory(v) for v in value]

    for species in SpeciesEnum:
        if value.upper() == species.name or value == species.short:
            return species

    raise ValueError(
        f"Species not recognized: {value}. Must be one "
        f"of {[e.name.lower() for e in SpeciesEnum]}."
    )
