"""Module with the EMCAL cluster data classes and cluster tables.

Clusters which could be matched to a collision are stored in the
`emcal_clusters` table and reference that collision. Clusters which could
not be matched are stored in the `emcal_ambiguous_clusters` table and
reference the bunch crossing they were recorded in instead. Both tables
share a single row class, :class:`ClusterRecord`, whose `association`
attribute tells which of the two references its `ref_id` holds.
"""

from dataclasses import dataclass
from enum import IntEnum

from aodana.utils.globals import INVAL_IDX

from ..base import DataBase
from ..table import Table
from .definition import ClusterDefinition, get_cluster_definition

__all__ = ["AssociationKind", "ClusterRecord", "RawCluster", "ClusterTable"]


class AssociationKind(IntEnum):
    """Enumerates what a cluster is associated with."""

    COLLISION = 0
    BUNCH_CROSSING = 1

    @property
    def parent_table(self):
        """Name of the table referenced by the clusters."""
        return ("collisions", "bcs")[self]

    @property
    def parent_key(self):
        """Name of the referenced row in an entry."""
        return ("collision", "bc")[self]

    @property
    def table_name(self):
        """Name of the cluster table of this association kind."""
        return ("emcal_clusters", "emcal_ambiguous_clusters")[self]


@dataclass(eq=False)
class ClusterBase(DataBase):
    """Shared attributes of all EMCAL cluster representations.

    Attributes
    ----------
    id : int
        Cluster ID, identifies the cluster in the event
    energy : float
        Cluster energy (GeV)
    core_energy : float
        Cluster core energy (GeV)
    eta : float
        Cluster pseudorapidity (calculated using the vertex)
    phi : float
        Cluster azimuthal angle (calculated using the vertex)
    m02 : float
        Shower shape long axis
    m20 : float
        Shower shape short axis
    n_cells : int
        Number of cells in the cluster
    time : float
        Cluster time (ns)
    is_exotic : bool
        Whether the cluster is flagged as exotic
    distance_to_bad_channel : float
        Distance to the closest bad channel
    nlm : int
        Number of local maxima
    definition : int
        ID of the cluster definition (see :class:`ClusterDefinition`)
    """

    id: int = -1
    energy: float = 0.0
    core_energy: float = 0.0
    eta: float = 0.0
    phi: float = 0.0
    m02: float = 0.0
    m20: float = 0.0
    n_cells: int = 0
    time: float = 0.0
    is_exotic: bool = False
    distance_to_bad_channel: float = 0.0
    nlm: int = 0
    definition: int = -1

    def cluster_dict(self):
        """Returns the shared cluster attributes as a dictionary.

        Returns
        -------
        dict
            Dictionary of shared cluster attribute names and their values
        """
        return {k: getattr(self, k) for k in ClusterBase.columns()}


@dataclass(eq=False)
class ClusterRecord(ClusterBase):
    """One row of an EMCAL cluster table.

    Attributes
    ----------
    association : AssociationKind
        Whether `ref_id` refers to a collision or to a bunch crossing
    ref_id : int
        Index of the collision or bunch crossing the cluster belongs to
    """

    association: AssociationKind = AssociationKind.COLLISION
    ref_id: int = -1

    _dtypes = (("ref_id", "i8"),)

    @property
    def collision_id(self):
        """Index of the collision of the cluster (-1 if ambiguous)."""
        if self.association == AssociationKind.COLLISION:
            return self.ref_id

        return INVAL_IDX

    @property
    def bc_id(self):
        """Index of the bunch crossing of the cluster (-1 if matched)."""
        if self.association == AssociationKind.BUNCH_CROSSING:
            return self.ref_id

        return INVAL_IDX

    def index_refs(self):
        """Fetches the reference of this cluster to its collision or bunch
        crossing.

        Returns
        -------
        Dict[str, Tuple[str, int]]
            Maps the name of the referenced row onto a (table name, row
            index) pair
        """
        if self.ref_id == INVAL_IDX:
            return {}

        kind = self.association
        return {kind.parent_key: (kind.parent_table, self.ref_id)}


@dataclass(eq=False)
class RawCluster(ClusterBase):
    """EMCAL cluster as delivered by the reconstruction, before it is sorted
    into the matched or ambiguous cluster table.

    Attributes
    ----------
    collision_id : int
        Index of the matched collision (-1 if the cluster is not matched)
    bc_id : int
        Index of the bunch crossing the cluster was recorded in
    """

    collision_id: int = -1
    bc_id: int = -1

    _index_attrs = (("collision_id", "collisions"), ("bc_id", "bcs"))

    @property
    def association(self):
        """Association kind of the cluster, given its matching status."""
        if self.collision_id != INVAL_IDX:
            return AssociationKind.COLLISION

        return AssociationKind.BUNCH_CROSSING

    def to_record(self, definition=None):
        """Converts the raw cluster to a cluster table row.

        Parameters
        ----------
        definition : int, optional
            Definition ID to assign to the cluster if it does not have one

        Returns
        -------
        ClusterRecord
            Cluster table row
        """
        kind = self.association
        ref_id = self.collision_id if kind == AssociationKind.COLLISION else self.bc_id
        attrs = self.cluster_dict()
        if attrs["definition"] < 0 and definition is not None:
            attrs["definition"] = definition

        return ClusterRecord(association=kind, ref_id=ref_id, **attrs)


class ClusterTable(Table):
    """Append-only table of EMCAL clusters of one association kind.

    Attributes
    ----------
    association : AssociationKind
        Association kind shared by all the rows of the table
    """

    def __init__(self, association, parent=None, name=None, capacity=64):
        """Initialize an empty, open cluster table.

        Parameters
        ----------
        association : Union[AssociationKind, int]
            Association kind of the rows of the table
        parent : Table, optional
            Collision or bunch crossing table the rows refer to. If provided,
            appended references are checked against its length.
        name : str, optional
            Name of the table. If not specified, derived from the association
        capacity : int, default 64
            Initial number of rows allocated
        """
        self.association = AssociationKind(association)
        parents = None
        if parent is not None:
            parents = {self.association.parent_table: parent}

        super().__init__(
            ClusterRecord,
            name=name or self.association.table_name,
            parents=parents,
            capacity=capacity,
        )

    @classmethod
    def matched(cls, collisions=None, **kwargs):
        """Builds an empty table of clusters matched to a collision.

        Parameters
        ----------
        collisions : Table, optional
            Collision table the clusters refer to
        **kwargs : dict, optional
            Additional arguments passed to the table constructor

        Returns
        -------
        ClusterTable
            Empty `emcal_clusters` table
        """
        return cls(AssociationKind.COLLISION, parent=collisions, **kwargs)

    @classmethod
    def ambiguous(cls, bcs=None, **kwargs):
        """Builds an empty table of clusters not matched to a collision.

        Parameters
        ----------
        bcs : Table, optional
            Bunch crossing table the clusters refer to
        **kwargs : dict, optional
            Additional arguments passed to the table constructor

        Returns
        -------
        ClusterTable
            Empty `emcal_ambiguous_clusters` table
        """
        return cls(AssociationKind.BUNCH_CROSSING, parent=bcs, **kwargs)

    @classmethod
    def from_array(cls, array, association, name=None, **kwargs):
        """Builds a closed cluster table from a structured array.

        Parameters
        ----------
        array : np.ndarray
            Structured array with one field per column
        association : Union[AssociationKind, int]
            Association kind of the rows of the table
        name : str, optional
            Name of the table
        **kwargs : dict, optional
            Additional arguments passed to the table constructor

        Returns
        -------
        ClusterTable
            Closed cluster table which holds the content of the array
        """
        table = cls(association, name=name, capacity=len(array), **kwargs)
        table.extend(ClusterRecord.from_record(record) for record in array)
        table.close()

        return table

    def validate(self, row):
        """Checks that a row has the association kind of the table and that
        its reference points to an existing row.

        Parameters
        ----------
        row : ClusterRecord
            Row to check
        """
        if row.association != self.association:
            raise ValueError(
                f"Table `{self.name}` stores clusters associated with a "
                f"{self.association.parent_key}, got a cluster associated "
                f"with a {AssociationKind(row.association).parent_key}."
            )

        self.check_reference("ref_id", self.association.parent_table, row.ref_id)

    def references(self):
        """Index column of the table.

        Returns
        -------
        List[Tuple[str, str, str]]
            (index column, referenced table name, entry key) triplet
        """
        kind = self.association
        return [("ref_id", kind.parent_table, kind.parent_key)]

    def select(self, definition):
        """Returns the clusters produced with a given definition.

        Parameters
        ----------
        definition : Union[ClusterDefinition, str, int]
            Cluster definition, definition name or definition id

        Returns
        -------
        List[ClusterRecord]
            Clusters of the table produced with that definition
        """
        if isinstance(definition, str):
            definition = get_cluster_definition(definition)
        if isinstance(definition, ClusterDefinition):
            definition = definition.id

        return self.rows((self.column("definition") == definition).nonzero()[0])
