"""Binned histograms filled by the analysis tasks.

- `Axis`: uniform or variable binning with under/overflow and named bins
- `Histogram`: 1-D or 2-D counter (`TH1F`, `TH1D`, `TH2F`, `TH2D`)
- `HistogramRegistry`: histograms of one task, fixed once booked
"""

from .axis import *
from .histogram import *
from .registry import *
