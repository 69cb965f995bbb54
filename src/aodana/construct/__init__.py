"""Construction of derived tables from the input tables of a pass."""

from .emcal import ClusterTableBuilder
