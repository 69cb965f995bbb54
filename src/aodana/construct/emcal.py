"""Builds the EMCAL cluster tables of one processing pass."""

from aodana.data import ClusterTable
from aodana.data.emcal import AssociationKind, get_cluster_definition
from aodana.utils.logger import logger

__all__ = ["ClusterTableBuilder"]


class ClusterTableBuilder:
    """Sorts the reconstructed clusters of a processing pass into the matched
    (`emcal_clusters`) and ambiguous (`emcal_ambiguous_clusters`) tables.

    Typical configuration should look like:

    .. code-block:: yaml

        emcal:
          definition: kV3Default
          store_ambiguous: true
    """

    # Name of the input table of reconstructed clusters
    source = "emcal_clusters_raw"

    def __init__(self, definition="kV3Default", store_ambiguous=True, source=None):
        """Initialize the builder.

        Parameters
        ----------
        definition : str, default 'kV3Default'
            Name of the cluster definition assigned to clusters which do not
            carry one already
        store_ambiguous : bool, default True
            If `False`, clusters which are not matched to a collision are
            dropped instead of being stored in the ambiguous table
        source : str, optional
            Name of the input table of reconstructed clusters
        """
        # Resolve the definition now, so that a bad name stops the workflow
        self.definition = get_cluster_definition(definition)
        self.store_ambiguous = store_ambiguous
        if source is not None:
            self.source = source

    def __call__(self, store):
        """Builds the cluster tables of one processing pass.

        The two new tables are closed and added to the store.

        Parameters
        ----------
        store : EventStore
            Tables of the processing pass
        """
        store.require([self.source])
        matched = ClusterTable.matched(store.get("collisions"))
        ambiguous = ClusterTable.ambiguous(store.get("bcs"))
        for raw in store[self.source]:
            record = raw.to_record(self.definition.id)
            if record.association == AssociationKind.COLLISION:
                matched.append(record)
            elif self.store_ambiguous:
                ambiguous.append(record)

        matched.close()
        ambiguous.close()
        store.add(matched)
        store.add(ambiguous)

        logger.debug(
            "Pass %d: %d matched and %d ambiguous cluster(s) (definition: %s)",
            store.index,
            len(matched),
            len(ambiguous),
            self.definition.name,
        )

        return matched, ambiguous
