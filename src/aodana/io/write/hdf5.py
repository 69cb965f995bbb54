"""Module to write the tables and histograms of an analysis to file."""

import os

import h5py
import numpy as np
import yaml

from aodana.utils.logger import logger
from aodana.version import __version__

__all__ = ["HDF5Writer"]


class HDF5Writer:
    """Writes tables and histograms to an HDF5 file.

    The output file is structured as follows:
      - `info`: empty dataset whose attributes hold the release version and
        the configuration used to produce the file
      - `df_<i>`: one group per processing pass, with one structured dataset
        per stored table
      - `histograms/<task>/<name>`: one group per histogram, with its bin
        contents (`counts`, including under/overflow bins), the sum of squared
        weights (`sumw2`) and one `edges_<i>` dataset per axis

    Typical configuration should look like:

    .. code-block:: yaml

        io:
          ...
          writer:
            name: hdf5
            file_name: output.h5
            tables:
              - emcal_clusters
              - emcal_ambiguous_clusters
    """

    name = "hdf5"

    def __init__(self, file_name=None, tables=None, overwrite=False, prefix=None):
        """Initializes the basics of the output file.

        Parameters
        ----------
        file_name : str, optional
            Name of the output HDF5 file
        tables : List[str], optional
            Names of the tables to store in each processing pass. If not
            specified, only the histograms are stored
        overwrite : bool, default False
            If `True`, overwrite the output file if it already exists
        prefix : str, optional
            Input file prefix. It will be use to form the output file name,
            provided that no file_name is explicitely provided
        """
        # If the output file name is not provided, use the input file prefix
        if not file_name:
            assert prefix is not None, (
                "If the output `file_name` is not provided, must provide "
                "the input file `prefix` to build it from."
            )
            file_name = f"{prefix}_ana.h5"

        # Check that the output file does not already exist, if requested
        if not overwrite and os.path.isfile(file_name):
            raise FileExistsError(f"File with name {file_name} already exists.")

        self.file_name = file_name
        self.tables = list(tables) if tables is not None else []
        self.ready = False

    def create(self, cfg=None):
        """Create the output file and its information dataset.

        Parameters
        ----------
        cfg : dict, optional
            Dictionary containing the complete configuration
        """
        with h5py.File(self.file_name, "w") as out_file:
            out_file.create_dataset("info", (0,), maxshape=(None,), dtype=None)
            out_file["info"].attrs["version"] = __version__
            if cfg is not None:
                out_file["info"].attrs["cfg"] = yaml.dump(cfg)

        self.ready = True

    def write_pass(self, idx, store, cfg=None):
        """Stores the requested tables of one processing pass.

        Parameters
        ----------
        idx : int
            Index of the processing pass
        store : EventStore
            Tables of the processing pass
        cfg : dict, optional
            Dictionary containing the complete configuration
        """
        if not self.ready:
            self.create(cfg)
        if not self.tables:
            return

        store.require(self.tables)
        with h5py.File(self.file_name, "a") as out_file:
            group = out_file.create_group(f"df_{idx}")
            for name in self.tables:
                group.create_dataset(name, data=store[name].to_array())

    def finalize(self, registries, cfg=None):
        """Stores the histograms of all the analysis tasks.

        Parameters
        ----------
        registries : Dict[str, HistogramRegistry]
            Histogram registry of each analysis task
        cfg : dict, optional
            Dictionary containing the complete configuration
        """
        if not self.ready:
            self.create(cfg)

        with h5py.File(self.file_name, "a") as out_file:
            root = out_file.require_group("histograms")
            for task, registry in registries.items():
                for name, hist in registry.items():
                    group = root.create_group(f"{task}/{name}")
                    group.attrs["title"] = hist.title
                    group.attrs["kind"] = hist.kind.name
                    group.attrs["entries"] = hist.entries
                    group.create_dataset("counts", data=hist.counts)
                    group.create_dataset("sumw2", data=hist.sumw2)
                    for i, axis in enumerate(hist.axes):
                        edges = group.create_dataset(f"edges_{i}", data=axis.edges)
                        edges.attrs["label"] = axis.label
                        if axis.bin_labels:
                            edges.attrs["bin_labels"] = np.array(
                                axis.bin_labels, dtype=h5py.string_dtype()
                            )

        logger.info("Wrote the output to %s", self.file_name)
