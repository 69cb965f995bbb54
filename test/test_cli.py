"""Test the command-line interface."""

import os

import h5py
import pytest

from aodana.bin.cli import apply_config_overrides, apply_workflow_options, cli
from aodana.config import ConfigPathError


@pytest.fixture(name="ana_cfg")
def fixture_ana_cfg():
    """Configuration with all the configurable analysis tasks."""
    return {
        "ana": {
            "nuclei_efficiency_vtx": None,
            "gen": {"name": "nuclei_efficiency_gen"},
            "nuclei_efficiency_rec": {"cut_vertex": 5.0},
            "tpc_spectra": None,
        }
    }


def test_apply_workflow_options(ana_cfg):
    """Disabled tasks are removed, by block key or by task name."""
    cfg = apply_workflow_options(ana_cfg, add_vertex=0, add_gen=0, add_tof_histos=1)

    assert list(cfg["ana"]) == ["nuclei_efficiency_rec", "tpc_spectra"]
    assert cfg["ana"]["tpc_spectra"] == {"add_tof_histos": True}


def test_apply_workflow_options_defaults(ana_cfg):
    """By default all the configured tasks are kept."""
    cfg = apply_workflow_options(ana_cfg)

    assert len(cfg["ana"]) == 4
    assert cfg["ana"]["tpc_spectra"]["add_tof_histos"] is False
    assert apply_workflow_options({"io": {}}) == {"io": {}}


def test_apply_config_overrides():
    """Overrides are parsed and set at their nested location."""
    cfg = apply_config_overrides({}, ["ana.tpc_spectra.nsigma_cut=2", "base.verbosity = debug"])
    assert cfg == {
        "ana": {"tpc_spectra": {"nsigma_cut": 2}},
        "base": {"verbosity": "debug"},
    }

    with pytest.raises(ValueError):
        apply_config_overrides({}, ["ana.tpc_spectra.nsigma_cut"])


def test_cli_definitions(capsys):
    """The cluster definitions are listed."""
    assert cli(["definitions"]) == 0

    out = capsys.readouterr().out
    for name in ["kV1Default", "kV3Default", "kV3Variation2"]:
        assert name in out


def test_cli_no_command(capsys):
    """Without a command, the help is printed."""
    assert cli([]) == 1
    assert "usage" in capsys.readouterr().out


def test_cli_run(ao2d_file, tmp_path):
    """Run the analysis from a configuration file, with command-line
    overrides."""
    config = tmp_path / "config.yaml"
    config.write_text(
        """
base:
  verbosity: warning
io:
  reader:
    name: hdf5
    file_keys: placeholder.h5
emcal:
  definition: kV3Default
ana:
  nuclei_efficiency_vtx:
  nuclei_efficiency_gen:
  tpc_spectra:
    nsigma_cut: 3.0
"""
    )
    output = os.path.join(tmp_path, "out.h5")

    argv = ["run", "-c", str(config), "-s", ao2d_file, "-o", output, "-n", "1"]
    argv += ["--add-gen", "0", "--add-tof-histos", "1"]
    argv += ["--set", "ana.tpc_spectra.nsigma_cut=5"]
    assert cli(argv) == 0

    with h5py.File(output, "r") as f:
        assert set(f["histograms"].keys()) == {"nuclei_efficiency_vtx", "tpc_spectra"}
        spectra = f["histograms/tpc_spectra"]
        assert "tof" in spectra
        assert spectra["p/He"]["counts"][()].sum() == 1.0
        assert "nsigma_cut: 5" in f["info"].attrs["cfg"]


def test_cli_run_errors(tmp_path):
    """The configuration must exist and hold a reader block."""
    with pytest.raises(ConfigPathError):
        cli(["run", "-c", str(tmp_path / "missing.yaml")])

    config = tmp_path / "config.yaml"
    config.write_text("base:\n  verbosity: warning\n")
    with pytest.raises(KeyError):
        cli(["run", "-c", str(config)])
