"""aodana driver class.

Takes care of everything in one centralized place:
- Table loading
- EMCAL cluster-table construction
- Analysis task execution
- Writing output to file
"""

import os
import platform
from datetime import datetime

import psutil
import yaml

from .ana import AnaManager
from .construct import ClusterTableBuilder
from .io import reader_factory, writer_factory
from .utils.logger import logger
from .utils.stopwatch import StopwatchManager
from .version import __version__

__all__ = ["Driver"]


class Driver:
    """Central aodana driver.

    Processes global configuration and runs the appropriate modules on each
    processing pass:
      1. Read the tables of the pass
      2. Sort the EMCAL clusters into their tables
      3. Run the analysis tasks
      4. Write the requested tables to file

    Once all the passes are processed, the histograms of the analysis tasks
    are written to file.

    It takes a configuration dictionary of the form:

    .. code-block:: yaml

        base:
          <Base driver configuration>
        io:
          <Input/output configuration>
        emcal:
          <EMCAL cluster-table construction>
        ana:
          <Analysis tasks>
    """

    def __init__(self, cfg):
        """Initializes the class attributes.

        Parameters
        ----------
        cfg : dict
            Global configuration dictionary
        """
        # Initialize the timers and the configuration dictionary
        self.watch = StopwatchManager()
        self.watch.initialize("iteration")

        # Process the full configuration dictionary and store it
        base, io, emcal, ana = self.process_config(**cfg)

        # Initialize the base driver configuration parameters
        self.initialize_base(**base)

        # Initialize the input/output
        self.initialize_io(**io)

        # Initialize the EMCAL cluster-table builder
        self.builder = None
        if emcal is not None:
            self.watch.initialize("emcal")
            self.builder = ClusterTableBuilder(**emcal)

        # Initialize the analysis tasks
        self.ana = None
        if ana is not None:
            self.watch.initialize("ana")
            self.ana = AnaManager(ana)

    def process_config(self, io, base=None, emcal=None, ana=None):
        """Reads the configuration and dumps it to the logger.

        Parameters
        ----------
        io : dict
            I/O configuration dictionary
        base : dict, optional
            Base driver configuration dictionary
        emcal : dict, optional
            EMCAL cluster-table construction configuration dictionary
        ana : dict, optional
            Analysis task configuration dictionary

        Returns
        -------
        dict
            Processed configuration
        """
        # If there is no base configuration, make it empty (will use defaults)
        if base is None:
            base = {}

        # Set the verbosity of the logger
        verbosity = base.get("verbosity", "info")
        logger.setLevel(verbosity.upper())

        # Rebuild global configuration dictionary
        self.cfg = {"base": base, "io": io}
        if emcal is not None:
            self.cfg["emcal"] = emcal
        if ana is not None:
            self.cfg["ana"] = ana

        # Log environment information
        logger.info("Release version: %s\n", __version__)
        logger.info("Configuration processed at: %s\n", " ".join(platform.uname()))

        # Log configuration
        logger.info(yaml.dump(self.cfg, default_flow_style=None, sort_keys=False))

        return base, io, emcal, ana

    def initialize_base(self, iterations=None, log_step=1, parent_path=None, verbosity="info"):
        """Initialize the base driver parameters.

        Parameters
        ----------
        iterations : int, optional
            Number of processing passes to run (-1 means all passes)
        log_step : int, default 1
            Number of passes before the progress is logged (1: every pass)
        parent_path : str, optional
            Path to the parent directory of the configuration file
        verbosity : int, default 'info'
            Verbosity level to pass to the `logging` module. Pick one of
            'debug', 'info', 'warning', 'error', 'critical'.
        """
        assert log_step > 0, f"`log_step` must be positive, got {log_step}."
        self.iterations = iterations
        self.log_step = log_step
        self.parent_path = parent_path

    def initialize_io(self, reader, writer=None):
        """Initializes the input/output scripts.

        Parameters
        ----------
        reader : dict
            Reader configuration dictionary
        writer : dict, optional
            Writer configuration dictionary
        """
        # Initialize the reader
        self.watch.initialize("read")
        self.reader = reader_factory(reader)

        # Fetch an appropriate common prefix for all input files
        self.prefix = self.get_prefix(self.reader.file_paths)

        # Initialize the data writer, if provided
        self.writer = None
        if writer is not None:
            self.watch.initialize("write")
            self.writer = writer_factory(writer, prefix=self.prefix)

        # Harmonize the number of iterations with the number of passes
        if self.iterations is None or self.iterations < 0:
            self.iterations = len(self.reader)
        self.iterations = min(self.iterations, len(self.reader))

    @staticmethod
    def get_prefix(file_paths):
        """Builds an output prefix based on the list of input files.

        Parameters
        ----------
        file_paths : List[str]
            List of input file paths

        Returns
        -------
        str
            Shared input summary string to be used to prefix outputs
        """
        # Fetch file base names (ignore where they live)
        file_names = [os.path.splitext(os.path.basename(f))[0] for f in file_paths]

        # Get the shared prefix of all files in the list
        prefix = os.path.commonprefix(file_names).rstrip("_-")
        if len(file_names) == 1 or prefix:
            return prefix or file_names[0]

        return f"{file_names[0]}--{len(file_names) - 1}"

    def __len__(self):
        """Returns the number of processing passes to run.

        Returns
        -------
        int
            Number of processing passes
        """
        return self.iterations

    def __iter__(self):
        """Resets the counter and returns itself.

        Returns
        -------
        Driver
            The Driver itself
        """
        self.counter = 0
        return self

    def __next__(self):
        """Defines how to process the next processing pass in the iterator.

        Returns
        -------
        EventStore
            Tables of the processed pass
        """
        if self.counter < len(self):
            store = self.process(self.counter)
            self.counter += 1
            return store

        raise StopIteration

    def run(self):
        """Loop over the requested number of passes, process them, then write
        the histograms to file."""
        for iteration in range(len(self)):
            store = self.process(iteration)
            if (iteration + 1) % self.log_step == 0:
                self.log(store, iteration)

        self.finalize()

    def process(self, iteration):
        """Process one processing pass.

        Parameters
        ----------
        iteration : int
            Index of the processing pass

        Returns
        -------
        EventStore
            Tables of the processed pass
        """
        self.watch.start("iteration")

        # 1. Read the tables
        self.watch.start("read")
        store = self.reader[iteration]
        self.watch.stop("read")

        # 2. Sort the clusters into their tables, if requested
        if self.builder is not None:
            self.watch.start("emcal")
            self.builder(store)
            self.watch.stop("emcal")

        # 3. Run the analysis tasks, if requested
        if self.ana is not None:
            self.watch.start("ana")
            self.ana(store)
            self.watch.stop("ana")
            self.watch.update(self.ana.watch, "ana")

        # 4. Write the tables to file, if requested
        if self.writer is not None:
            self.watch.start("write")
            self.writer.write_pass(iteration, store, self.cfg)
            self.watch.stop("write")

        self.watch.stop("iteration")

        return store

    def finalize(self):
        """Writes the histograms of the analysis tasks and the timing summary."""
        if self.writer is not None:
            registries = self.ana.registries if self.ana is not None else {}
            self.writer.finalize(registries, self.cfg)

        if self.ana is not None:
            lines = []
            for key, watch in self.ana.watch.items():
                time_sum = watch.time_sum
                lines.append(
                    f"  {key:<30} {time_sum.wall:0.3f} s (CPU: {time_sum.cpu:0.3f} s)"
                )
            logger.info("Analysis task timing:\n%s", "\n".join(lines))

    def log(self, store, iteration):
        """Log the progress of the processing to stdout.

        Parameters
        ----------
        store : EventStore
            Tables of the processed pass
        iteration : int
            Iteration counter
        """
        tstamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        mem = psutil.virtual_memory()
        t_iter = self.watch.time("iteration").wall
        rows = ", ".join(f"{k}: {len(v)}" for k, v in store.items())

        logger.info(
            "Pass %d/%d @ %s (%s)\n  | Time: %0.2f s | CPU memory: %0.2f GB (%0.2f %%) |\n"
            "  | Tables: %s |\n",
            iteration + 1,
            len(self),
            tstamp,
            store.source,
            t_iter,
            mem.used / 1.0e9,
            mem.percent,
            rows,
        )
