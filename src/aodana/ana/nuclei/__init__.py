"""Light (anti-)nuclei analysis tasks.

- `nuclei_efficiency_vtx`: true vertex position of the generated collisions
- `nuclei_efficiency_gen`: generated spectra of pions, anti-protons and
  anti-helium-3
- `nuclei_efficiency_rec`: reconstructed spectra of the same species, with
  the track quality histograms
"""

from .efficiency import *
