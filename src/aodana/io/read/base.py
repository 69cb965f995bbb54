"""Contains the data reader base class.

Data readers are used to extract the tables of one processing pass from
files and store them into an :class:`EventStore` to be used downstream.
"""

import glob
import os

from aodana.utils.logger import logger


class ReaderBase:
    """Parent reader class which provides common functions between all readers.

    This class provides these basic functions:
    1. Method to parse the requested file list or file list file into a list of
       paths to existing files (throws if nothing is found)
    2. Method to restrict the list of processing passes to a subset
    3. Essential `__len__` and `__getitem__` methods. Must define the
       `get` function in the inheriting class for both of them to work.

    Attributes
    ----------
    name : str
        Name of the reader, as requested in the configuration
    file_paths : List[str]
        List of files to read data from
    pass_index : List[int]
        List of processing pass indexes to cycle through
    """

    name = ""
    file_paths = None
    pass_index = None

    def __len__(self):
        """Returns the number of processing passes to read.

        Returns
        -------
        int
            Number of processing passes
        """
        return len(self.pass_index)

    def __getitem__(self, idx):
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
        return self.get(idx)

    def get(self, idx):
        """Placeholder to be defined by the daughter class."""
        raise NotImplementedError

    def process_file_paths(self, file_keys, limit_num_files=None, max_print_files=10):
        """Process list of files.

        Parameters
        ----------
        file_keys : Union[str, List[str]]
            Path or list of paths (or glob patterns) to the files to be read,
            or path to a text file which lists them
        limit_num_files : int, optional
            Integer limiting number of files to be taken per data directory
        max_print_files : int, default 10
            Maximum number of loaded file names to be printed
        """
        # Some basic checks
        assert file_keys is not None, "No input `file_keys` provided, abort."
        assert (
            limit_num_files is None or limit_num_files > 0
        ), "If `limit_num_files` is provided, it must be larger than 0."

        # If the file_keys points to a single text file, it must be a text
        # file containing a list of file paths. Parse it to a list.
        if isinstance(file_keys, str) and os.path.splitext(file_keys)[-1] == ".txt":
            assert os.path.isfile(file_keys), (
                "If the `file_keys` are specified as a single string, "
                "it must be the path to a text file with a file list."
            )
            with open(file_keys, "r", encoding="utf-8") as f:
                file_keys = [l for l in f.read().splitlines() if l.strip()]

        # Convert the file keys to a list of file paths with glob
        self.file_paths = []
        if isinstance(file_keys, str):
            file_keys = [file_keys]
        for file_key in file_keys:
            file_paths = sorted(glob.glob(file_key))
            if not file_paths:
                raise FileNotFoundError(
                    f"File key {file_key} yielded no compatible path."
                )
            for path in file_paths:
                if (
                    limit_num_files is not None
                    and len(self.file_paths) >= limit_num_files
                ):
                    break
                self.file_paths.append(path)

        self.file_paths = sorted(self.file_paths)

        # Print out the list of loaded files
        num_files = len(self.file_paths)
        file_list = " - " + "\n - ".join(self.file_paths[:max_print_files])
        file_list += "\n ... \n" if num_files > max_print_files else "\n"
        logger.info("Will load %d file(s):\n%s", num_files, file_list)

    def process_pass_list(self, num_passes, n_entry=None, n_skip=None):
        """Create the list of processing passes that can be accessed by
        :meth:`__getitem__`.

        Parameters
        ----------
        num_passes : int
            Total number of processing passes available
        n_entry : int, optional
            Maximum number of processing passes to load
        n_skip : int, optional
            Number of processing passes to skip at the beginning
        """
        assert n_entry is None or n_entry > 0, (
            f"If `n_entry` is provided, it must be positive, got {n_entry}."
        )
        assert n_skip is None or n_skip >= 0, (
            f"If `n_skip` is provided, it must not be negative, got {n_skip}."
        )

        start = n_skip or 0
        if start >= num_passes:
            raise ValueError(
                f"Cannot skip {start} processing pass(es): there are only "
                f"{num_passes} available."
            )

        end = num_passes if n_entry is None else min(start + n_entry, num_passes)
        self.pass_index = list(range(start, end))
