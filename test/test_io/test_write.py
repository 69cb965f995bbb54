"""Test that the HDF5 writer stores tables and histograms."""

import os

import h5py
import numpy as np
import pytest

from aodana.hist import HistogramRegistry, HistType
from aodana.io import writer_factory
from aodana.io.write import HDF5Writer
from aodana.version import __version__


@pytest.fixture(name="hdf5_output")
def fixture_hdf5_output(tmp_path):
    """Create a dummy output path for an HDF5 file.

    Parameters
    ----------
    tmp_path : str
       Generic pytest fixture used to handle temporary test files
    """
    return os.path.join(tmp_path, "dummy.h5")


@pytest.fixture(name="registries")
def fixture_registries():
    """Histogram registries of two tasks."""
    first = HistogramRegistry("first")
    first.add("sel", "selection", HistType.TH1D, [(3, -0.5, 2.5)])
    first.fill_label("sel", "all")
    first.fill_label("sel", "good")
    first.fill_label("sel", "all")

    second = HistogramRegistry("second")
    second.add("p/Pi", "#pi;#it{p} (GeV/#it{c})", HistType.TH1F, [(10, 0.0, 1.0)])
    second.add("xy", "xy;x;y", HistType.TH2F, [(2, 0.0, 2.0), ([0.0, 1.0, 5.0],)])
    second.fill("p/Pi", [0.05, 0.15, 2.0], weight=2.0)
    second.fill("xy", 0.5, 3.0)

    return {"first": first, "second": second}


def test_hdf5_writer_tables(event_store, hdf5_output):
    """Requested tables are stored in one group per processing pass."""
    cfg = {"io": {"writer": {"name": "hdf5"}}}
    writer = HDF5Writer(hdf5_output, tables=["collisions", "tracks"])
    writer.write_pass(0, event_store, cfg)
    writer.write_pass(3, event_store, cfg)

    with h5py.File(hdf5_output, "r") as f:
        assert f["info"].attrs["version"] == __version__
        assert "writer" in f["info"].attrs["cfg"]
        assert set(f.keys()) == {"info", "df_0", "df_3"}
        assert set(f["df_3"].keys()) == {"collisions", "tracks"}

        tracks = f["df_0/tracks"][()]
        assert len(tracks) == 5
        np.testing.assert_array_equal(tracks["pt"], event_store["tracks"].column("pt"))


def test_hdf5_writer_missing_table(event_store, hdf5_output):
    """Tables which are not in the processing pass cannot be stored."""
    writer = HDF5Writer(hdf5_output, tables=["emcal_clusters"])
    with pytest.raises(KeyError):
        writer.write_pass(0, event_store)


def test_hdf5_writer_histograms(registries, hdf5_output):
    """Histograms are stored with their binning, labels and contents."""
    writer = HDF5Writer(hdf5_output)
    writer.finalize(registries)

    with h5py.File(hdf5_output, "r") as f:
        assert set(f["histograms"].keys()) == {"first", "second"}

        sel = f["histograms/first/sel"]
        assert sel.attrs["kind"] == "TH1D"
        assert sel.attrs["entries"] == 3
        np.testing.assert_array_equal(sel["counts"][()], [0, 2, 1, 0, 0])
        assert list(sel["edges_0"].attrs["bin_labels"]) == ["all", "good"]

        spectrum = f["histograms/second/p/Pi"]
        assert spectrum.attrs["title"] == "#pi"
        assert spectrum["edges_0"].attrs["label"] == "#it{p} (GeV/#it{c})"
        np.testing.assert_array_equal(spectrum["counts"][()][:3], [0.0, 2.0, 2.0])
        assert spectrum["counts"][()][-1] == 2.0
        assert spectrum["sumw2"][()][1] == 4.0

        xy = f["histograms/second/xy"]
        assert xy["counts"].shape == (4, 4)
        np.testing.assert_array_equal(xy["edges_1"][()], [0.0, 1.0, 5.0])
        assert xy["counts"][1, 2] == 1.0


def test_hdf5_writer_existing_file(hdf5_output):
    """Existing files are only replaced on request."""
    HDF5Writer(hdf5_output).create()
    with pytest.raises(FileExistsError):
        HDF5Writer(hdf5_output)

    writer = HDF5Writer(hdf5_output, overwrite=True)
    assert writer.file_name == hdf5_output


def test_writer_factory(tmp_path):
    """Writers are built from their configuration block, the output name
    defaults to the input file prefix."""
    prefix = os.path.join(tmp_path, "AO2D")
    writer = writer_factory({"name": "hdf5"}, prefix=prefix)
    assert isinstance(writer, HDF5Writer)
    assert writer.file_name == f"{prefix}_ana.h5"
    assert writer.tables == []
