"""Base class of all analysis tasks."""

from abc import ABC, abstractmethod

from aodana.hist import HistogramRegistry


class TaskBase(ABC):
    """Parent class of all analysis tasks.

    This base class performs the following functions:
    - Ensures that the necessary methods exist
    - Checks that the task is provided the tables it needs
    - Holds the histograms the task fills

    A task loops over the rows of one table of a processing pass (its
    `source`). Each row comes with the rows it refers to and the rows which
    refer to it (see :meth:`EventStore.iterate`).

    Attributes
    ----------
    name : str
        Name of the analysis task (to call it from a configuration file)
    source : str
        Name of the table the task loops over
    hists : HistogramRegistry
        Histograms of the task
    """

    # Name of the analysis task (as specified in the configuration)
    name = None

    # Alternative allowed names of the analysis task
    aliases = ()

    # Name of the table the task loops over
    source = None

    # Set of tables needed for this task to operate
    _keys = ()

    def __init__(self):
        """Initialize default analysis task properties."""
        # The source table is always needed
        self.update_keys({self.source: True})

        # Initialize the histogram registry, filled by the children classes
        self.hists = HistogramRegistry(self.name)
        self.store = None

    @property
    def keys(self):
        """Dictionary of (key, necessity) pairs which determine which tables
        are needed/optional for the task to run.

        Returns
        -------
        Dict[str, bool]
            Dictionary of (key, necessity) pairs to be used
        """
        return dict(self._keys)

    @keys.setter
    def keys(self, keys):
        """Converts a dictionary of keys to an immutable tuple.

        Parameters
        ----------
        Dict[str, bool]
            Dictionary of (key, necessity) pairs to be used
        """
        self._keys = tuple(keys.items())

    def update_keys(self, update_dict):
        """Update the underlying set of keys and their necessity in place.

        Parameters
        ----------
        update_dict : Dict[str, bool]
            Dictionary of (key, necessity) pairs to update the keys with
        """
        if len(update_dict) > 0:
            keys = self.keys
            keys.update(update_dict)
            self._keys = tuple(keys.items())

    def initialize(self):
        """Books the histograms of the task and fixes them.

        Must be called once, before the first processing pass.
        """
        if self.hists.locked:
            return

        self.book()
        self.hists.lock()

    def __call__(self, store):
        """Runs the analysis task on one processing pass.

        Parameters
        ----------
        store : EventStore
            Tables of the processing pass
        """
        # Book the histograms, if not done yet
        self.initialize()

        # Check that all the essential tables are present
        store.require([k for k, req in self.keys.items() if req])

        # Loop over the rows of the source table
        self.store = store
        try:
            for entry in store.iterate(self.source):
                self.process(entry)
        finally:
            self.store = None

    @abstractmethod
    def book(self):
        """Place-holder method to be defined in each analysis task.

        Books the histograms of the task in `self.hists`.
        """
        raise NotImplementedError("Must define the `book` function")

    @abstractmethod
    def process(self, entry):
        """Place-holder method to be defined in each analysis task.

        Parameters
        ----------
        entry : dict
            One row of the source table with its related rows
        """
        raise NotImplementedError("Must define the `process` function")
