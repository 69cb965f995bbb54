"""Test that the light nuclei efficiency tasks fill the expected histograms."""

import pytest

from aodana.ana.nuclei import (
    NucleiEfficiencyGenTask,
    NucleiEfficiencyRecTask,
    NucleiEfficiencyVertexTask,
)
from aodana.ana.nuclei.efficiency import corrected_he3_n_sigma
from aodana.data import Track


def test_vertex_task(event_store):
    """The true vertex position of every MC collision is filled."""
    task = NucleiEfficiencyVertexTask()
    task(event_store)

    hist = task.hists.get("histVertexTrueZ")
    assert hist.axes[0].label == "vertex z (cm)"
    assert hist.entries == 2
    assert hist.integral() == 1.0
    assert hist.integral(flow=True) == 2.0


def test_gen_task(event_store):
    """Only physical primaries within the rapidity window are counted."""
    task = NucleiEfficiencyGenTask()
    task(event_store)

    assert task.hists.names() == ["histGenPtPion", "histGenPtProton", "histGenPtHe3"]
    for name in task.hists.names():
        assert task.hists.get(name).integral() == 1.0

    he3 = task.hists.get("histGenPtHe3")
    assert he3.values()[he3.axes[0].find_bin(2.5) - 1] == 1.0


def test_rec_task(event_store):
    """Reconstructed spectra only count the truth-matched tracks of the
    selected collisions."""
    task = NucleiEfficiencyRecTask()
    task(event_store)
    hists = task.hists

    # Event selection: the collision outside of the vertex range is skipped
    ev_sel = hists.get("histEvSel")
    assert ev_sel.axes[0].bin_labels == ["all", "sel8"]
    assert list(ev_sel.values()[:2]) == [2.0, 1.0]
    assert hists.get("histRecVtxZ").entries == 1

    # Track quality, tracks without ITS clusters are skipped
    for name in ["histTpcSignal", "histTpcNsigmaPi", "histTpcNsigmaPr", "histTpcNsigmaHe3"]:
        assert hists.get(name).entries == 3
    assert hists.get("histItsClusters").entries == 3
    assert hists.get("histTofSignalData").entries == 1
    assert hists.get("histDcaXYprimary").entries == 3
    assert hists.get("histDcaXYsecondary").entries == 0

    # Spectra, helium-3 is counted at twice its reconstructed momentum
    for name, pt in [("Pion", 0.5), ("Proton", 1.1), ("He3", 2.5)]:
        hist = hists.get(f"histRecPt{name}")
        assert hist.integral() == 1.0
        assert hist.values()[hist.axes[0].find_bin(pt) - 1] == 1.0


def test_rec_task_nsigma_window(event_store):
    """Tracks outside of the n-sigma window are not counted."""
    task = NucleiEfficiencyRecTask(nsigma_cut_low=-0.1, nsigma_cut_high=0.1)
    task(event_store)

    for name in ["Pion", "Proton", "He3"]:
        assert task.hists.get(f"histRecPt{name}").integral() == 0.0

    with pytest.raises(AssertionError):
        NucleiEfficiencyRecTask(nsigma_cut_low=1.0, nsigma_cut_high=-1.0)


def test_rec_task_missing_table(event_store):
    """The task needs the generated particles to match tracks."""
    del event_store["mc_particles"]
    with pytest.raises(KeyError):
        NucleiEfficiencyRecTask()(event_store)


def test_corrected_he3_n_sigma():
    """The helium-3 n-sigma is shifted by its momentum-dependent mean."""
    track = Track(tpc_inner_param=2.0, tpc_n_sigma_he=-5.0)
    assert corrected_he3_n_sigma(track) == pytest.approx(10.4136, abs=1e-3)


def test_histograms_are_fixed(event_store):
    """Histograms are booked once, the registry is locked afterwards."""
    task = NucleiEfficiencyVertexTask()
    task(event_store)
    task(event_store)

    assert task.hists.locked
    assert len(task.hists) == 1
    assert task.hists.get("histVertexTrueZ").entries == 4
