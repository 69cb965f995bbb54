"""Analysis tasks.

Analysis tasks loop over one table of each processing pass and fill
histograms. This module contains the following tasks:
- `nuclei`: reconstruction efficiency of light (anti-)nuclei
- `spectra`: identified particle spectra from the TPC energy loss
- `emcal`: EMCAL cluster quality assurance
"""

from .manager import AnaManager
