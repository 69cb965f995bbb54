"""Momentum spectra of identified particles using the TPC energy loss."""

from aodana.ana.base import TaskBase
from aodana.hist import HistType
from aodana.utils.enums import SpeciesEnum
from aodana.utils.globals import P_LABEL, PT_LABEL
from aodana.utils.kinematics import tof_beta

__all__ = ["TPCSpectraTask"]


class TPCSpectraTask(TaskBase):
    """Fills the total and transverse momentum spectra of all tracks, and of
    the tracks compatible with each species hypothesis.

    A track is compatible with a species if the absolute value of its TPC
    n-sigma for that species does not exceed `nsigma_cut`. A track can be
    compatible with several species.

    .. code-block:: yaml

        ana:
          tpc_spectra:
            nsigma_cut: 3.0
            cut_vertex: 10.0
            cut_eta: 0.8
            add_tof_histos: false
    """

    name = "tpc_spectra"
    aliases = ("tpcspectra",)
    source = "tracks"

    # Binning of the momentum spectra
    binning = (100, 0.0, 20.0)

    def __init__(self, nsigma_cut=3.0, cut_vertex=10.0, cut_eta=0.8, add_tof_histos=False):
        """Initialize the task.

        Parameters
        ----------
        nsigma_cut : float, default 3.0
            Maximum absolute TPC n-sigma of a track for a species
        cut_vertex : float, default 10.0
            Accepted range of the collision z position (cm). Only applied to
            tracks associated with a collision.
        cut_eta : float, default 0.8
            Accepted pseudorapidity range of the tracks
        add_tof_histos : bool, default False
            If `True`, also fill the TOF velocity of the tracks
        """
        super().__init__()
        self.nsigma_cut = nsigma_cut
        self.cut_vertex = cut_vertex
        self.cut_eta = cut_eta
        self.add_tof_histos = bool(add_tof_histos)

        self.update_keys({"collisions": False})

    def book(self):
        """Books the unselected and per-species spectra."""
        self.hists.add("p/Unselected", f"Unselected;{P_LABEL}", HistType.TH1F, [self.binning])
        self.hists.add("pt/Unselected", f"Unselected;{PT_LABEL}", HistType.TH1F, [self.binning])
        for species in SpeciesEnum:
            self.hists.add(
                f"p/{species.short}",
                f"{species.label};{P_LABEL}",
                HistType.TH1F,
                [self.binning],
            )
            self.hists.add(
                f"pt/{species.short}",
                f"{species.label};{PT_LABEL}",
                HistType.TH1F,
                [self.binning],
            )

        if self.add_tof_histos:
            self.hists.add(
                "tof/beta",
                "TOF signal",
                HistType.TH2F,
                [(600, -6.0, 6.0, "#it{p/z} (GeV/#it{c})"), (500, 0.0, 1.2, "#beta (TOF)")],
            )

    def process(self, entry):
        """Fills the spectra with one track.

        Parameters
        ----------
        entry : dict
            Track entry, with its `collision` if it has one
        """
        track = entry["track"]
        if abs(track.eta) >= self.cut_eta:
            return

        collision = entry.get("collision")
        if collision is not None and abs(collision.pos_z) >= self.cut_vertex:
            return

        p = track.p
        self.hists.fill("p/Unselected", p)
        self.hists.fill("pt/Unselected", track.pt)
        for species, n_sigma in zip(SpeciesEnum, track.tpc_n_sigmas):
            if abs(n_sigma) > self.nsigma_cut:
                continue
            self.hists.fill(f"p/{species.short}", p)
            self.hists.fill(f"pt/{species.short}", track.pt)

        if self.add_tof_histos and track.has_tof and track.tof_signal > 0.0:
            beta = tof_beta(track.length, track.tof_signal)
            self.hists.fill("tof/beta", p * track.sign, beta)
