"""Contains a reader class dedicated to loading tables from HDF5 files."""

import h5py
import yaml

from aodana.data import TABLE_CLASSES, AssociationKind, ClusterTable, EventStore, Table
from aodana.utils.logger import logger

from .base import ReaderBase

__all__ = ["HDF5Reader"]

# Cluster tables, which are rebuilt with their association kind
CLUSTER_TABLES = {kind.table_name: kind for kind in AssociationKind}


class HDF5Reader(ReaderBase):
    """Class which reads tables stored in HDF5 files.

    Each table is stored as a structured dataset, one field per column. The
    files must be structured in one of two ways:
      - One dataset per table at the top level of the file: the whole file
        is one processing pass
      - One `df_<i>` group per processing pass, each with one dataset per
        table (this is the layout produced by :class:`HDF5Writer`)

    Typical configuration should look like:

    .. code-block:: yaml

        io:
          reader:
            name: hdf5
            file_keys: /path/to/AO2D_*.h5
            tables: [collisions, tracks]
    """

    name = "hdf5"

    def __init__(
        self,
        file_keys,
        limit_num_files=None,
        max_print_files=10,
        n_entry=None,
        n_skip=None,
        tables=None,
    ):
        """Initalize the HDF5 file reader.

        Parameters
        ----------
        file_keys : Union[str, List[str]]
            List of paths to the HDF5 files to be read
        limit_num_files : int, optional
            Integer limiting number of files to be taken per data directory
        max_print_files : int, default 10
            Maximum number of loaded file names to be printed
        n_entry : int, optional
            Maximum number of processing passes to load
        n_skip : int, optional
            Number of processing passes to skip at the beginning
        tables : List[str], optional
            Names of the tables to load. If not specified, load every known
            table found in the file
        """
        # Process the list of files
        self.process_file_paths(file_keys, limit_num_files, max_print_files)

        # Check that the requested tables are known
        known = list(TABLE_CLASSES) + list(CLUSTER_TABLES)
        if tables is not None:
            for name in tables:
                if name not in known:
                    raise ValueError(
                        f"Table `{name}` not recognized. Must be one of {known}."
                    )
        self.tables = tables

        # Loop over the input files, build the list of processing passes
        self.passes = []
        for i, path in enumerate(self.file_paths):
            with h5py.File(path, "r") as in_file:
                groups = sorted(
                    (k for k in in_file.keys() if k.startswith("df_")),
                    key=lambda k: int(k[3:]),
                )
                if groups:
                    self.passes.extend((i, g) for g in groups)
                else:
                    self.passes.append((i, None))

        logger.info("Total number of processing passes: %d\n", len(self.passes))

        # Process the pass list
        self.process_pass_list(len(self.passes), n_entry, n_skip)

        # Process the configuration used to produce the first file, if any
        self.cfg = self.process_cfg()

    def process_cfg(self):
        """Fetches the configuration used to produce the HDF5 file, if it
        was produced by this package.

        Returns
        -------
        dict
            Configuration dictionary
        """
        with h5py.File(self.file_paths[0], "r") as in_file:
            if "info" not in in_file or "cfg" not in in_file["info"].attrs:
                return None

            return yaml.safe_load(in_file["info"].attrs["cfg"])

    def get(self, idx):
        """Returns the tables of one processing pass.

        Parameters
        ----------
        idx : int
            Integer processing pass ID to access

        Returns
        -------
        EventStore
            Tables of the processing pass
        """
        if idx < 0 or idx >= len(self.pass_index):
            raise IndexError(
                f"Processing pass {idx} out of range ({len(self.pass_index)})."
            )

        file_idx, group = self.passes[self.pass_index[idx]]
        path = self.file_paths[file_idx]
        store = EventStore(index=idx, source=path)
        with h5py.File(path, "r") as in_file:
            node = in_file if group is None else in_file[group]
            for name in node.keys():
                if self.tables is not None and name not in self.tables:
                    continue
                if not isinstance(node[name], h5py.Dataset):
                    continue

                array = node[name][()]
                if name in CLUSTER_TABLES:
                    store.add(ClusterTable.from_array(array, CLUSTER_TABLES[name]))
                elif name in TABLE_CLASSES:
                    store.add(Table.from_array(TABLE_CLASSES[name], array, name))

        if self.tables is not None:
            store.require(self.tables)

        return store
