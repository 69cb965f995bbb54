"""Writers of the output files."""

from .hdf5 import *
