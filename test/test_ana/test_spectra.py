"""Test that the TPC spectra task fills the expected histograms."""

from aodana.ana.spectra import TPCSpectraTask
from aodana.utils.enums import SpeciesEnum


def test_tpc_spectra_booking():
    """One momentum and one transverse momentum spectrum per species."""
    task = TPCSpectraTask()
    task.initialize()

    names = task.hists.names()
    assert names[:2] == ["p/Unselected", "pt/Unselected"]
    assert len(names) == 2 + 2 * len(SpeciesEnum)
    assert "p/He" in names and "pt/Al" in names
    assert "tof/beta" not in names

    hist = task.hists.get("p/He")
    assert hist.title == "^{3}He"
    assert hist.axes[0].label == "#it{p} (GeV/#it{c})"
    assert (hist.axes[0].nbins, hist.axes[0].low, hist.axes[0].high) == (100, 0.0, 20.0)


def test_tpc_spectra(event_store):
    """Tracks are selected on eta and on their collision vertex, then
    sorted by n-sigma."""
    task = TPCSpectraTask()
    task(event_store)
    hists = task.hists

    assert hists.get("p/Unselected").entries == 3
    assert hists.get("pt/Unselected").entries == 3
    assert hists.get("pt/Pi").integral() == 1.0
    assert hists.get("pt/Pr").integral() == 1.0
    for short in ["El", "Mu", "Ka", "De", "Tr", "He", "Al"]:
        assert hists.get(f"p/{short}").integral() == 0.0


def test_tpc_spectra_cuts(event_store):
    """Looser cuts select more tracks."""
    task = TPCSpectraTask(nsigma_cut=5.0, cut_vertex=20.0, cut_eta=2.0)
    task(event_store)

    assert task.hists.get("p/Unselected").entries == 5
    assert task.hists.get("p/He").integral() == 1.0
    assert task.hists.get("p/Pr").integral() == 2.0


def test_tpc_spectra_tof(event_store):
    """The TOF velocity is filled for the tracks which reach the TOF."""
    task = TPCSpectraTask(add_tof_histos=True)
    task(event_store)

    beta = task.hists.get("tof/beta")
    assert beta.entries == 1
    assert beta.integral() == 1.0
