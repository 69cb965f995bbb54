"""Test that the EMCAL cluster QA task fills the expected histograms."""

import pytest

from aodana.ana.emcal import ClusterQATask
from aodana.construct import ClusterTableBuilder
from aodana.data.emcal import UnknownClusterDefinitionError


@pytest.fixture(name="cluster_store")
def fixture_cluster_store(event_store):
    """Processing pass with its cluster tables built."""
    ClusterTableBuilder("kV3Default")(event_store)

    return event_store


def test_cluster_qa(cluster_store):
    """Only the clusters of the selected definition are filled."""
    task = ClusterQATask("kV3Default")
    task(cluster_store)

    energy = task.hists.get("clusterE")
    assert energy.entries == 1
    assert energy.axes[0].label == "#it{E} (GeV)"
    assert task.hists.get("clusterNCells").values()[9] == 1.0
    assert task.hists.get("clusterAssociation").axes[0].bin_labels == ["collision"]


def test_cluster_qa_other_definition(cluster_store):
    """Clusters of another definition are ignored."""
    task = ClusterQATask("kV3Variation1")
    task(cluster_store)
    assert task.hists.get("clusterE").entries == 1

    task = ClusterQATask("kV1Default")
    task(cluster_store)
    assert task.hists.get("clusterE").entries == 0


def test_cluster_qa_ambiguous(cluster_store):
    """Ambiguous clusters are filled on request."""
    task = ClusterQATask(include_ambiguous=True)
    assert task.keys["emcal_ambiguous_clusters"]
    task(cluster_store)

    assert task.hists.get("clusterE").entries == 2
    assert task.hists.get("clusterExotic").values()[1] == 1.0
    assert task.hists.get("clusterAssociation").axes[0].bin_labels == [
        "collision",
        "bunch_crossing",
    ]


def test_cluster_qa_requires_tables(event_store):
    """The cluster tables must be built before running the task."""
    with pytest.raises(KeyError):
        ClusterQATask()(event_store)


def test_cluster_qa_bad_definition():
    """Unknown definitions are rejected when the task is configured."""
    with pytest.raises(UnknownClusterDefinitionError):
        ClusterQATask("kV3default")
