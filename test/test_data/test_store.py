"""Test that the event store resolves the table relations as intended."""

import pytest

from aodana.construct import ClusterTableBuilder
from aodana.data import Collision, EventStore, Table


def test_store_add_and_require(event_store):
    """Tables are stored under their name, and cannot be added twice."""
    assert set(event_store.keys()) == {
        "bcs",
        "collisions",
        "mc_collisions",
        "mc_particles",
        "tracks",
        "emcal_clusters_raw",
    }
    event_store.require(["collisions", "tracks"])
    with pytest.raises(KeyError):
        event_store.require(["emcal_clusters"])
    with pytest.raises(ValueError):
        event_store.add(Table(Collision, "collisions"))


def test_iterate_collisions(event_store):
    """Collision entries hold their parents and their children."""
    entries = list(event_store.iterate("collisions"))
    assert [e["index"] for e in entries] == [0, 1, 2]

    first = entries[0]
    assert first["collision"].pos_z == 1.0
    assert first["bc"].global_bc == 100
    assert first["mc_collision"].pos_z == 1.5
    assert [t.pt for t in first["tracks"]] == [0.5, 1.1, 1.25, 0.8]
    assert [c.id for c in first["emcal_clusters_raw"]] == [0]

    # Real data collisions have no generated collision
    assert "mc_collision" not in entries[2]
    assert entries[2]["tracks"] == []


def test_iterate_mc_collisions(event_store):
    """Generated collision entries hold their generated particles."""
    entries = list(event_store.iterate("mc_collisions"))
    assert [len(e["mc_particles"]) for e in entries] == [4, 1]
    assert [len(e["collisions"]) for e in entries] == [1, 1]


def test_iterate_tracks(event_store):
    """Track entries hold their collision and generated particle."""
    entries = list(event_store.iterate("tracks"))
    assert len(entries) == 5
    assert entries[0]["collision"].pos_z == 1.0
    assert entries[0]["mc_particle"].pdg_code == 211
    assert "mc_particle" not in entries[3]


def test_iterate_cluster_tables(event_store):
    """Cluster entries hold their collision or bunch crossing."""
    ClusterTableBuilder()(event_store)

    matched = list(event_store.iterate("emcal_clusters"))
    assert [e["collision"].pos_z for e in matched] == [1.0, -3.0]
    assert all("bc" not in e for e in matched)

    ambiguous = list(event_store.iterate("emcal_ambiguous_clusters"))
    assert [e["bc"].global_bc for e in ambiguous] == [200]

    collisions = list(event_store.iterate("collisions"))
    assert [len(e["emcal_clusters"]) for e in collisions] == [1, 0, 1]
    bcs = list(event_store.iterate("bcs"))
    assert [len(e["emcal_ambiguous_clusters"]) for e in bcs] == [0, 1, 0]


def test_iterate_missing_table():
    """Iterating over a missing table raises."""
    with pytest.raises(KeyError):
        list(EventStore().iterate("tracks"))
