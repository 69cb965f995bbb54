"""Test that the HDF5 reader builds processing passes from files."""

import os
import shutil

import pytest

from aodana.construct import ClusterTableBuilder
from aodana.data import AssociationKind, ClusterTable
from aodana.io import reader_factory
from aodana.io.read import HDF5Reader
from aodana.io.write import HDF5Writer


def test_hdf5_reader(ao2d_file):
    """A file with tables at its top level is one processing pass."""
    reader = HDF5Reader(ao2d_file)
    assert reader.file_paths == [ao2d_file]
    assert len(reader) == 1
    assert reader.cfg is None

    store = reader[0]
    assert store.index == 0
    assert store.source == ao2d_file
    assert set(store) == {
        "bcs",
        "collisions",
        "mc_collisions",
        "mc_particles",
        "tracks",
        "emcal_clusters_raw",
    }
    assert len(store["tracks"]) == 5
    assert store["tracks"].closed
    assert store["collisions"][1].pos_z == 12.0
    assert store["tracks"][2].tpc_n_sigma_he == -5.0

    with pytest.raises(IndexError):
        reader.get(1)


def test_hdf5_reader_tables(ao2d_file):
    """Only the requested tables are loaded."""
    reader = HDF5Reader(ao2d_file, tables=["collisions", "tracks"])
    assert set(reader[0]) == {"collisions", "tracks"}

    with pytest.raises(ValueError):
        HDF5Reader(ao2d_file, tables=["bogus"])


def test_hdf5_reader_files(ao2d_file, tmp_path):
    """Files are found with glob patterns or listed in a text file, each
    file being its own processing pass."""
    for i in (1, 2):
        shutil.copy(ao2d_file, os.path.join(tmp_path, f"AO2D_test_{i}.h5"))

    reader = HDF5Reader(os.path.join(tmp_path, "AO2D_*.h5"), limit_num_files=2)
    assert len(reader) == 2

    reader = HDF5Reader(os.path.join(tmp_path, "AO2D_*.h5"), n_entry=1, n_skip=2)
    assert reader.pass_index == [2]
    assert reader[0].source == reader.file_paths[2]

    list_path = os.path.join(tmp_path, "files.txt")
    with open(list_path, "w", encoding="utf-8") as f:
        f.write(f"{ao2d_file}\n\n{reader.file_paths[1]}\n")
    assert len(HDF5Reader(list_path)) == 2

    with pytest.raises(FileNotFoundError):
        HDF5Reader(os.path.join(tmp_path, "missing_*.h5"))

    with pytest.raises(ValueError):
        HDF5Reader(ao2d_file, n_skip=1)


def test_reader_factory(ao2d_file):
    """Readers are built from their configuration block."""
    reader = reader_factory({"name": "hdf5", "file_keys": ao2d_file, "n_entry": 1})
    assert isinstance(reader, HDF5Reader)
    assert len(reader) == 1


def test_hdf5_reader_cluster_tables(event_store, tmp_path):
    """Cluster tables are rebuilt with their association kind."""
    ClusterTableBuilder()(event_store)
    path = os.path.join(tmp_path, "clusters.h5")
    writer = HDF5Writer(path, tables=["emcal_clusters", "emcal_ambiguous_clusters"])
    writer.write_pass(0, event_store)
    writer.write_pass(1, event_store)

    reader = HDF5Reader(path)
    assert len(reader) == 2

    store = reader[1]
    matched = store["emcal_clusters"]
    ambiguous = store["emcal_ambiguous_clusters"]
    assert isinstance(matched, ClusterTable)
    assert matched.association == AssociationKind.COLLISION
    assert ambiguous.association == AssociationKind.BUNCH_CROSSING
    assert len(matched) == 2 and len(ambiguous) == 1
    assert ambiguous[0].bc_id == 1
    assert matched[0].energy == 1.25
    assert reader.cfg is None
