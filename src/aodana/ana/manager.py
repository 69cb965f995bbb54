"""Manages the operation of analysis tasks."""

from collections import OrderedDict
from copy import deepcopy

import numpy as np

from aodana.utils.stopwatch import StopwatchManager

from .factories import ana_task_factory


class AnaManager:
    """Manager class to initialize and execute analysis tasks.

    Analysis tasks loop over the tables of each processing pass and fill
    histograms.

    It loads all the analysis tasks, books their histograms and feeds them
    the tables of each processing pass, in decreasing order of priority.
    """

    def __init__(self, cfg):
        """Initialize the analysis manager.

        Parameters
        ----------
        cfg : dict
            Analysis task configurations
        """
        # Parse the analysis block configuration
        self.parse_config(**cfg)

    def parse_config(self, **modules):
        """Parse the analysis task configuration.

        Parameters
        ----------
        **modules : dict
            List of analysis task modules
        """
        # Loop over the analysis tasks and get their priorities
        modules = deepcopy(modules)
        keys = np.array(list(modules.keys()))
        priorities = -np.ones(len(keys), dtype=np.int32)
        for i, k in enumerate(keys):
            if modules[k] is None:
                modules[k] = {}
            if "priority" in modules[k]:
                priorities[i] = modules[k].pop("priority")

        # Add the tasks to a task list in decreasing order of priority
        self.watch = StopwatchManager()
        self.modules = OrderedDict()
        keys = keys[np.argsort(-priorities, kind="stable")]
        for k in keys:
            # Profile the task
            self.watch.initialize(k)

            # Append
            self.modules[k] = ana_task_factory(k, modules[k])
            self.modules[k].initialize()

    def __len__(self):
        return len(self.modules)

    def __call__(self, store):
        """Pass the tables of one processing pass through the analysis tasks.

        Parameters
        ----------
        store : EventStore
            Tables of the processing pass
        """
        for key, module in self.modules.items():
            self.watch.start(key)
            module(store)
            self.watch.stop(key)

    @property
    def registries(self):
        """Histogram registries of the analysis tasks, by task key.

        Returns
        -------
        Dict[str, HistogramRegistry]
            Histogram registry of each task
        """
        return OrderedDict((k, m.hists) for k, m in self.modules.items())
