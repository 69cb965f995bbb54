"""Module with data classes which represent Monte Carlo truth information."""

from dataclasses import dataclass

from .base import DataBase

__all__ = ["McCollision", "McParticle"]


@dataclass(eq=False)
class McCollision(DataBase):
    """Generated collision.

    Attributes
    ----------
    pos_x : float
        True vertex x position (cm)
    pos_y : float
        True vertex y position (cm)
    pos_z : float
        True vertex z position (cm)
    impact_parameter : float
        Generated impact parameter (fm)
    """

    pos_x: float = 0.0
    pos_y: float = 0.0
    pos_z: float = 0.0
    impact_parameter: float = -1.0


@dataclass(eq=False)
class McParticle(DataBase):
    """Generated particle.

    Attributes
    ----------
    mc_collision_id : int
        Index of the generated collision the particle belongs to
    pdg_code : int
        PDG code of the particle species
    pt : float
        Transverse momentum (GeV/c)
    eta : float
        Pseudorapidity
    phi : float
        Azimuthal angle
    y : float
        Rapidity
    is_physical_primary : bool
        Whether the particle is a physical primary
    """

    mc_collision_id: int = -1
    pdg_code: int = 0
    pt: float = 0.0
    eta: float = 0.0
    phi: float = 0.0
    y: float = 0.0
    is_physical_primary: bool = False

    _index_attrs = (("mc_collision_id", "mc_collisions"),)
