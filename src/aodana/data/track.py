"""Module with a data class which represents reconstructed tracks."""

from dataclasses import dataclass

from aodana.utils.enums import SpeciesEnum
from aodana.utils.kinematics import momentum

from .base import DataBase

__all__ = ["Track"]


@dataclass(eq=False)
class Track(DataBase):
    """Reconstructed track with its PID information.

    Attributes
    ----------
    collision_id : int
        Index of the collision the track is associated with
    mc_particle_id : int
        Index of the generated particle the track is matched to (-1 if none)
    pt : float
        Transverse momentum (GeV/c)
    eta : float
        Pseudorapidity
    phi : float
        Azimuthal angle
    sign : int
        Charge sign
    tpc_inner_param : float
        Momentum at the inner wall of the TPC (GeV/c)
    tpc_signal : float
        TPC specific energy loss (a.u.)
    its_n_cls : int
        Number of ITS clusters
    has_tof : bool
        Whether the track has a TOF measurement
    tof_signal : float
        TOF time (ps)
    length : float
        Track length up to the TOF (cm)
    dca_xy : float
        Transverse distance of closest approach to the vertex (cm)
    tpc_n_sigma_el, ..., tpc_n_sigma_al : float
        TPC n-sigma of each species hypothesis (see :class:`SpeciesEnum`)
    """

    collision_id: int = -1
    mc_particle_id: int = -1
    pt: float = 0.0
    eta: float = 0.0
    phi: float = 0.0
    sign: int = 0
    tpc_inner_param: float = 0.0
    tpc_signal: float = 0.0
    its_n_cls: int = 0
    has_tof: bool = False
    tof_signal: float = 0.0
    length: float = 0.0
    dca_xy: float = 0.0
    tpc_n_sigma_el: float = -999.0
    tpc_n_sigma_mu: float = -999.0
    tpc_n_sigma_pi: float = -999.0
    tpc_n_sigma_ka: float = -999.0
    tpc_n_sigma_pr: float = -999.0
    tpc_n_sigma_de: float = -999.0
    tpc_n_sigma_tr: float = -999.0
    tpc_n_sigma_he: float = -999.0
    tpc_n_sigma_al: float = -999.0

    _index_attrs = (
        ("collision_id", "collisions"),
        ("mc_particle_id", "mc_particles"),
    )

    @property
    def p(self):
        """Total momentum (GeV/c)."""
        return momentum(self.pt, self.eta)

    def tpc_n_sigma(self, species):
        """TPC n-sigma of one species hypothesis.

        Parameters
        ----------
        species : SpeciesEnum
            Species hypothesis

        Returns
        -------
        float
            Number of standard deviations from the expected energy loss
        """
        return getattr(self, f"tpc_n_sigma_{SpeciesEnum(species).short.lower()}")

    @property
    def tpc_n_sigmas(self):
        """TPC n-sigma of all species, in :class:`SpeciesEnum` order."""
        return [self.tpc_n_sigma(s) for s in SpeciesEnum]
