"""Module with data classes which represent collisions and bunch crossings."""

from dataclasses import dataclass

from .base import DataBase

__all__ = ["BunchCrossing", "Collision"]


@dataclass(eq=False)
class BunchCrossing(DataBase):
    """Beam bunch crossing.

    Attributes
    ----------
    run_number : int
        Run the bunch crossing belongs to
    global_bc : int
        Global bunch crossing number since the start of the fill
    """

    run_number: int = -1
    global_bc: int = -1

    # Store the global bunch crossing number on 64 bits
    _dtypes = (("global_bc", "i8"),)


@dataclass(eq=False)
class Collision(DataBase):
    """Reconstructed collision (primary vertex).

    Attributes
    ----------
    bc_id : int
        Index of the bunch crossing the collision was recorded in
    pos_x : float
        Vertex x position (cm)
    pos_y : float
        Vertex y position (cm)
    pos_z : float
        Vertex z position (cm)
    num_contrib : int
        Number of tracks used to fit the vertex
    sel8 : bool
        Whether the collision passes the standard event selection
    mc_collision_id : int
        Index of the matched generated collision (-1 in real data)
    """

    bc_id: int = -1
    pos_x: float = 0.0
    pos_y: float = 0.0
    pos_z: float = 0.0
    num_contrib: int = 0
    sel8: bool = False
    mc_collision_id: int = -1

    _index_attrs = (("bc_id", "bcs"), ("mc_collision_id", "mc_collisions"))
