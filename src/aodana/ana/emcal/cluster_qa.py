"""Quality assurance histograms of the EMCAL clusters."""

import numpy as np

from aodana.ana.base import TaskBase
from aodana.data.emcal import AssociationKind, get_cluster_definition
from aodana.hist import HistType

__all__ = ["ClusterQATask"]


class ClusterQATask(TaskBase):
    """Fills the basic properties of the EMCAL clusters produced with one
    cluster definition.

    Clusters produced with any other definition are ignored.

    .. code-block:: yaml

        ana:
          emcal_cluster_qa:
            definition: kV3Default
            include_ambiguous: false
    """

    name = "emcal_cluster_qa"
    source = AssociationKind.COLLISION.table_name

    def __init__(self, definition="kV3Default", include_ambiguous=False):
        """Initialize the task.

        Parameters
        ----------
        definition : str, default 'kV3Default'
            Name of the cluster definition to select
        include_ambiguous : bool, default False
            If `True`, also fill the clusters which are not matched to a
            collision
        """
        super().__init__()
        self.definition = get_cluster_definition(definition)
        self.include_ambiguous = include_ambiguous
        if include_ambiguous:
            self.update_keys({AssociationKind.BUNCH_CROSSING.table_name: True})

    def book(self):
        """Books the cluster property histograms."""
        add = self.hists.add
        add("clusterE", "Energy of cluster;#it{E} (GeV)", HistType.TH1F, [(400, 0.0, 100.0)])
        add(
            "clusterEtaPhi",
            "Eta and phi of cluster;#eta;#phi",
            HistType.TH2F,
            [(100, -1.0, 1.0), (100, 0.0, 2 * np.pi)],
        )
        add("clusterM02", "M02 of cluster;M02", HistType.TH1F, [(400, 0.0, 5.0)])
        add("clusterM20", "M20 of cluster;M20", HistType.TH1F, [(400, 0.0, 2.5)])
        add("clusterNCells", "Number of cells in cluster;#it{N}_{cells}", HistType.TH1F, [(50, -0.5, 49.5)])
        add("clusterTime", "Time of cluster;#it{t} (ns)", HistType.TH1F, [(500, -250.0, 250.0)])
        add("clusterExotic", "Exotic flag of cluster;exotic", HistType.TH1F, [(2, -0.5, 1.5)])
        add("clusterAssociation", "Association of cluster", HistType.TH1F, [(2, -0.5, 1.5)])

    def __call__(self, store):
        """Runs the task on the matched clusters of one processing pass, and
        on its ambiguous clusters if requested.

        Parameters
        ----------
        store : EventStore
            Tables of the processing pass
        """
        super().__call__(store)
        if self.include_ambiguous:
            for cluster in store[AssociationKind.BUNCH_CROSSING.table_name]:
                self.fill(cluster)

    def process(self, entry):
        """Fills the histograms with one matched cluster.

        Parameters
        ----------
        entry : dict
            Cluster entry
        """
        self.fill(entry["emcal_cluster"])

    def fill(self, cluster):
        """Fills the histograms with one cluster, if it was produced with
        the selected definition.

        Parameters
        ----------
        cluster : ClusterRecord
            Cluster row
        """
        if not self.definition.accepts(cluster):
            return

        self.hists.fill("clusterE", cluster.energy)
        self.hists.fill("clusterEtaPhi", cluster.eta, cluster.phi)
        self.hists.fill("clusterM02", cluster.m02)
        self.hists.fill("clusterM20", cluster.m20)
        self.hists.fill("clusterNCells", cluster.n_cells)
        self.hists.fill("clusterTime", cluster.time)
        self.hists.fill("clusterExotic", int(cluster.is_exotic))
        self.hists.fill_label("clusterAssociation", cluster.association.name.lower())
