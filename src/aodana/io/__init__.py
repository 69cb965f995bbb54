"""I/O tools: readers of the input tables and writers of the analysis output.

- `read`: readers which build one :class:`EventStore` per processing pass
- `write`: writers of the stored tables and of the histograms
"""

from .factories import reader_factory, writer_factory
