#!/usr/bin/env python3
"""Command-line entry point of aodana."""

import argparse
import os
import pathlib
import sys
from typing import List

from aodana.config import load_config, parse_value, resolve_config_path, set_nested_value

# Analysis task toggled by each workflow option
WORKFLOW_TASKS = {
    "add_vertex": "nuclei_efficiency_vtx",
    "add_gen": "nuclei_efficiency_gen",
    "add_rec": "nuclei_efficiency_rec",
}


def apply_config_overrides(cfg: dict, config_overrides: List[str]):
    """Applies a list of `key.path=value` overrides to a configuration.

    Parameters
    ----------
    cfg : dict
        Configuration dictionary
    config_overrides : List[str]
        List of config overrides in the form "key.path=value"

    Returns
    -------
    dict
        Updated configuration dictionary
    """
    for override in config_overrides or []:
        if "=" not in override:
            raise ValueError(
                f"Invalid --set format: '{override}'. "
                f"Expected format: 'key.path=value'"
            )

        key_path, value_str = override.split("=", 1)
        cfg = set_nested_value(cfg, key_path.strip(), parse_value(value_str.strip()))

    return cfg


def apply_workflow_options(
    cfg: dict,
    add_vertex: int = 1,
    add_gen: int = 1,
    add_rec: int = 1,
    add_tof_histos: int = 0,
):
    """Enables or disables the configured analysis tasks.

    A task whose option is 0 is removed from the `ana` block. Tasks which
    are not configured are never added. The TOF histograms of the TPC
    spectra task are enabled if `add_tof_histos` is not 0.

    Parameters
    ----------
    cfg : dict
        Configuration dictionary
    add_vertex : int, default 1
        Keep the generated vertex task
    add_gen : int, default 1
        Keep the generated spectra task
    add_rec : int, default 1
        Keep the reconstructed spectra task
    add_tof_histos : int, default 0
        Fill the TOF histograms of the TPC spectra task

    Returns
    -------
    dict
        Updated configuration dictionary
    """
    ana = cfg.get("ana")
    if not ana:
        return cfg

    options = {"add_vertex": add_vertex, "add_gen": add_gen, "add_rec": add_rec}
    for key in list(ana.keys()):
        block = ana[key] or {}
        task = block.get("name", key)
        for option, name in WORKFLOW_TASKS.items():
            if task == name and not options[option]:
                del ana[key]

        if task in ("tpc_spectra", "tpcspectra") and key in ana:
            ana[key] = dict(block, add_tof_histos=bool(add_tof_histos))

    return cfg


def main(
    config: str,
    source: List[str],
    source_list: str,
    output: str,
    n: int,
    nskip: int,
    config_overrides: List[str],
    add_vertex: int = 1,
    add_gen: int = 1,
    add_rec: int = 1,
    add_tof_histos: int = 0,
):
    """Main driver for the analysis.

    Performs these basic functions:
    - Update the configuration with the command-line arguments
    - Run the analysis

    Parameters
    ----------
    config : str
        Path to the configuration file
    source : List[str]
        List of paths to the input files
    source_list : str
        Path to a text file containing a list of data file paths
    output : str
        Path to the output file
    n : int
        Number of processing passes to run
    nskip : int
        Number of processing passes to skip
    config_overrides : List[str]
        List of config overrides in the form "key.path=value"
    add_vertex, add_gen, add_rec, add_tof_histos : int
        Workflow options, see :func:`apply_workflow_options`
    """
    # Load the configuration file
    cfg_file = resolve_config_path(config, current_dir=os.getcwd())
    cfg = load_config(cfg_file)

    # If there is no base block, build one
    if "base" not in cfg or cfg["base"] is None:
        cfg["base"] = {}

    # Propagate the configuration parent directory to enable relative paths
    cfg["base"]["parent_path"] = str(pathlib.Path(cfg_file).parent)

    # The configuration must minimally contain an IO block with a reader
    if "io" not in cfg or "reader" not in (cfg["io"] or {}):
        raise KeyError("Configuration file must contain an `io.reader` block.")

    # Override the input command-line information into the configuration
    io_mapping = {
        "file_keys": source if source is not None else source_list,
        "n_entry": n,
        "n_skip": nskip,
    }
    for io_key, io_value in io_mapping.items():
        if io_value is not None:
            cfg["io"]["reader"][io_key] = io_value

    # Override the output path if provided
    if output is not None:
        if cfg["io"].get("writer") is None:
            cfg["io"]["writer"] = {"name": "hdf5"}
        cfg["io"]["writer"]["file_name"] = output

    # Apply the workflow options, then any generic override from --set
    cfg = apply_workflow_options(cfg, add_vertex, add_gen, add_rec, add_tof_histos)
    cfg = apply_config_overrides(cfg, config_overrides)

    # Run the main function
    from aodana.main import run

    run(cfg)


def list_definitions():
    """Prints the table of known EMCAL cluster definitions."""
    from aodana.data.emcal import CLUSTER_DEFINITIONS

    header = f"{'name':<15}{'id':>4}  {'algorithm':<10}{'E seed':>8}{'E cell':>8}{'exotic':>8}"
    print(header)
    print("-" * len(header))
    for definition in CLUSTER_DEFINITIONS.values():
        print(
            f"{definition.name:<15}{definition.id:>4}  "
            f"{definition.algorithm.name:<10}{definition.energy_threshold:>8.2f}"
            f"{definition.cell_energy_threshold:>8.2f}"
            f"{definition.exoticity_threshold:>8.2f}"
        )


def get_version():
    """Get the aodana version without importing the analysis modules."""
    from aodana.version import __version__

    return __version__


def build_parser():
    """Builds the command-line argument parser.

    Returns
    -------
    argparse.ArgumentParser
        Argument parser
    """
    parser = argparse.ArgumentParser(
        description="aodana - histogram-based analysis of collision tables",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  aodana definitions                           List the EMCAL cluster definitions
  aodana run -c config.yaml                    Run the analysis with a config file
  aodana run -c config.yaml -s data/*.h5 -o out.h5
  aodana run -c config.yaml --add-gen 0        Disable the generated spectra task
  aodana run -c config.yaml --set ana.tpc_spectra.nsigma_cut=2
""",
    )

    parser.add_argument(
        "--version", "-v", action="version", version=f"aodana {get_version()}"
    )

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("definitions", help="List the EMCAL cluster definitions")

    run_parser = subparsers.add_parser("run", help="Run the analysis")
    run_parser.add_argument(
        "-c", "--config", required=True, help="Path to the configuration file"
    )

    # Add mutually exclusive group for source input
    group = run_parser.add_mutually_exclusive_group()
    group.add_argument(
        "-s", "--source", nargs="+", type=str, help="List of paths to the input files"
    )
    group.add_argument(
        "-S",
        "--source-list",
        help="Path to a text file containing a list of data file paths",
    )

    run_parser.add_argument("-o", "--output", help="Path to the output file")
    run_parser.add_argument(
        "-n", "--iterations", type=int, help="Number of processing passes to run"
    )
    run_parser.add_argument(
        "--nskip", type=int, help="Number of processing passes to skip"
    )

    # Workflow options
    run_parser.add_argument("--add-vertex", type=int, default=1, help="Vertex plots")
    run_parser.add_argument("--add-gen", type=int, default=1, help="Generated plots")
    run_parser.add_argument("--add-rec", type=int, default=1, help="Reconstructed plots")
    run_parser.add_argument(
        "--add-tof-histos",
        type=int,
        default=0,
        help="Generate TPC with TOF histograms",
    )

    # Add option to dynamically override any config parameter using dot notation
    run_parser.add_argument(
        "--set",
        action="append",
        dest="config_overrides",
        metavar="KEY=VALUE",
        help="Override any config parameter using dot notation "
        "(e.g., --set ana.tpc_spectra.nsigma_cut=2). "
        "Can be used multiple times for multiple overrides.",
    )

    return parser


def cli(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "definitions":
        list_definitions()
        return 0

    main(
        config=args.config,
        source=args.source,
        source_list=args.source_list,
        output=args.output,
        n=args.iterations,
        nskip=args.nskip,
        config_overrides=args.config_overrides,
        add_vertex=args.add_vertex,
        add_gen=args.add_gen,
        add_rec=args.add_rec,
        add_tof_histos=args.add_tof_histos,
    )

    return 0


if __name__ == "__main__":
    sys.exit(cli())
