"""Top-level module of the aodana source code."""

# Import main workflow entry point
from .driver import Driver
from .version import __version__

# Import commonly used data structures
from .data import ClusterRecord, ClusterTable, EventStore, Table
from .data.emcal import get_cluster_definition, resolve
