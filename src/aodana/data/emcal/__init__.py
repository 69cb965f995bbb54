"""EMCAL cluster tables and cluster definitions.

- `definition`: closed registry of named clustering configurations
- `cluster`: cluster row class and the matched/ambiguous cluster tables
"""

from .cluster import *
from .definition import *
