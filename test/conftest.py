"""Sets up fixtures general to the entire test suite of this package.

This file is read during the collection phase of pytest when running anything
inside this directory.

The shared fixtures describe one small processing pass:
- 3 bunch crossings, 3 collisions (one outside of the vertex range, one which
  fails the event selection) and 2 generated collisions
- 5 generated particles and 5 tracks
- 3 reconstructed EMCAL clusters (two matched, one ambiguous)
"""

import os

import h5py
import pytest

from aodana.data import (
    BunchCrossing,
    Collision,
    EventStore,
    McCollision,
    McParticle,
    RawCluster,
    Table,
    Track,
)


def build_tables():
    """Builds the tables of the synthetic processing pass.

    Returns
    -------
    List[Table]
        Closed input tables
    """
    bcs = Table(BunchCrossing, "bcs")
    bcs.extend(BunchCrossing(run_number=300000, global_bc=bc) for bc in (100, 200, 300))

    mc_collisions = Table(McCollision, "mc_collisions")
    mc_collisions.append(McCollision(pos_z=1.5, impact_parameter=3.0))
    mc_collisions.append(McCollision(pos_z=-25.0, impact_parameter=8.0))

    collisions = Table(Collision, "collisions", parents={"bcs": bcs, "mc_collisions": mc_collisions})
    collisions.append(Collision(bc_id=0, pos_z=1.0, num_contrib=12, sel8=True, mc_collision_id=0))
    collisions.append(Collision(bc_id=1, pos_z=12.0, num_contrib=4, sel8=True, mc_collision_id=1))
    collisions.append(Collision(bc_id=2, pos_z=-3.0, num_contrib=2, sel8=False))

    mc_particles = Table(McParticle, "mc_particles", parents={"mc_collisions": mc_collisions})
    mc_particles.extend(
        [
            McParticle(mc_collision_id=0, pdg_code=211, pt=0.5, eta=0.1, y=0.1, is_physical_primary=True),
            McParticle(mc_collision_id=0, pdg_code=-2212, pt=1.1, eta=0.2, y=0.2, is_physical_primary=True),
            McParticle(mc_collision_id=0, pdg_code=-1000020030, pt=2.5, eta=0.3, y=0.3, is_physical_primary=True),
            McParticle(mc_collision_id=0, pdg_code=211, pt=0.7, eta=1.0, y=0.9, is_physical_primary=True),
            McParticle(mc_collision_id=1, pdg_code=-2212, pt=1.5, eta=0.0, y=0.0, is_physical_primary=False),
        ]
    )

    tracks = Table(Track, "tracks", parents={"collisions": collisions, "mc_particles": mc_particles})
    tracks.extend(
        [
            Track(
                collision_id=0, mc_particle_id=0, pt=0.5, eta=0.1, sign=1,
                tpc_inner_param=0.5, tpc_signal=60.0, its_n_cls=5, has_tof=True,
                tof_signal=13713.4, length=370.0, dca_xy=0.01, tpc_n_sigma_pi=0.5,
            ),
            Track(
                collision_id=0, mc_particle_id=1, pt=1.1, eta=0.2, sign=-1,
                tpc_inner_param=1.1, tpc_signal=80.0, its_n_cls=4, dca_xy=-0.02,
                tpc_n_sigma_pr=1.0,
            ),
            Track(
                collision_id=0, mc_particle_id=2, pt=1.25, eta=0.3, sign=-1,
                tpc_inner_param=2.0, tpc_signal=400.0, its_n_cls=6, dca_xy=0.005,
                tpc_n_sigma_he=-5.0,
            ),
            Track(collision_id=0, pt=0.8, eta=1.2, sign=1, tpc_inner_param=0.8, its_n_cls=0),
            Track(
                collision_id=1, mc_particle_id=4, pt=1.5, eta=0.0, sign=-1,
                tpc_inner_param=1.5, its_n_cls=3, tpc_n_sigma_pr=0.2,
            ),
        ]
    )

    raw_clusters = Table(RawCluster, "emcal_clusters_raw", parents={"collisions": collisions, "bcs": bcs})
    raw_clusters.extend(
        [
            RawCluster(id=0, collision_id=0, bc_id=0, energy=1.25, eta=0.3, phi=1.1, n_cells=9, m02=0.3, time=5.0),
            RawCluster(id=1, bc_id=1, energy=0.8, eta=-0.2, phi=2.0, n_cells=3, is_exotic=True),
            RawCluster(id=2, collision_id=2, bc_id=2, energy=3.0, eta=0.1, phi=4.0, n_cells=12, definition=11),
        ]
    )

    tables = [bcs, mc_collisions, collisions, mc_particles, tracks, raw_clusters]
    for table in tables:
        table.close()

    return tables


@pytest.fixture(name="event_store")
def fixture_event_store():
    """Synthetic processing pass with all the input tables."""
    return EventStore(build_tables(), index=0, source="synthetic")


@pytest.fixture(name="ao2d_file")
def fixture_ao2d_file(tmp_path):
    """Writes the synthetic processing pass to an HDF5 input file.

    Parameters
    ----------
    tmp_path : str
       Generic pytest fixture used to handle temporary test files
    """
    path = os.path.join(tmp_path, "AO2D_test.h5")
    with h5py.File(path, "w") as out_file:
        for table in build_tables():
            out_file.create_dataset(table.name, data=table.to_array())

    return path
