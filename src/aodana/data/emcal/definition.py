"""EMCAL cluster definitions.

A cluster definition identifies the clustering algorithm variant that
produced a cluster. Every cluster row stores the `id` of its definition in
its `definition` column.

The set of definitions is closed: it is built once at import time and can
only be extended by adding a new named constant to this module.
"""

from dataclasses import asdict, dataclass
from enum import IntEnum
from types import MappingProxyType

from aodana.config.errors import ConfigValueError

__all__ = [
    "ClusterAlgorithm",
    "ClusterDefinition",
    "DefinitionLookup",
    "UnknownClusterDefinitionError",
    "CLUSTER_DEFINITIONS",
    "resolve",
    "get_cluster_definition",
    "definition_from_id",
]


class ClusterAlgorithm(IntEnum):
    """Enumerates the clustering algorithms."""

    V1 = 1
    V3 = 3


class UnknownClusterDefinitionError(ConfigValueError):
    """Raised when a cluster definition name or id is not recognized."""


@dataclass(frozen=True)
class ClusterDefinition:
    """Parameters of one clustering algorithm variant.

    Attributes
    ----------
    algorithm : ClusterAlgorithm
        Clustering algorithm
    id : int
        Identifier stored in the `definition` column of the cluster tables
    version : int
        Version of the definition
    name : str
        Name of the definition, as used in configuration files
    energy_threshold : float
        Minimum energy of the seed cell of a cluster (GeV)
    cell_energy_threshold : float
        Minimum energy of a cell to be aggregated to a cluster (GeV)
    time_min : float
        Lower bound of the accepted cell time window (ns)
    time_max : float
        Upper bound of the accepted cell time window (ns)
    exoticity_threshold : float
        Energy gradient cut used to flag exotic clusters
    """

    algorithm: ClusterAlgorithm
    id: int
    version: int
    name: str
    energy_threshold: float
    cell_energy_threshold: float
    time_min: float
    time_max: float
    exoticity_threshold: float

    def accepts(self, cluster):
        """Whether a cluster row was produced with this definition.

        Parameters
        ----------
        cluster : ClusterRecord
            Cluster row

        Returns
        -------
        bool
            `True` if the cluster definition column matches this definition
        """
        return cluster.definition == self.id

    def as_dict(self):
        """Returns the definition as a dictionary of (key, value) pairs.

        Returns
        -------
        dict
            Dictionary of attribute names and their values
        """
        return asdict(self)


@dataclass(frozen=True)
class DefinitionLookup:
    """Outcome of a cluster definition lookup.

    Holds either the definition that was found, or the error describing
    why nothing was found. Callers can branch on `ok` or call `unwrap`.

    Attributes
    ----------
    key : Union[str, int]
        Name or id which was looked up
    value : ClusterDefinition, optional
        Definition found, if any
    error : UnknownClusterDefinitionError, optional
        Error describing the failed lookup, if any
    """

    key: object
    value: ClusterDefinition = None
    error: UnknownClusterDefinitionError = None

    @property
    def ok(self):
        """Whether a definition was found."""
        return self.error is None

    def __bool__(self):
        return self.ok

    def unwrap(self):
        """Returns the definition, raises the lookup error if there is none.

        Returns
        -------
        ClusterDefinition
            Definition found
        """
        if self.error is not None:
            raise self.error

        return self.value


# Global cluster definitions. The V1 algorithm is not yet implemented, but
# the V3 algorithm is. New definitions should be added here!
V1_DEFAULT = ClusterDefinition(
    ClusterAlgorithm.V1, 0, 1, "kV1Default", 0.1, 0.5, -10000, 10000, 0.03
)
V1_VARIATION_1 = ClusterDefinition(
    ClusterAlgorithm.V3, 1, 1, "kV1Variation1", 0.1, 0.3, -10000, 10000, 0.03
)
V1_VARIATION_2 = ClusterDefinition(
    ClusterAlgorithm.V3, 2, 1, "kV1Variation2", 0.1, 0.2, -10000, 10000, 0.03
)
V3_DEFAULT = ClusterDefinition(
    ClusterAlgorithm.V3, 10, 1, "kV3Default", 0.1, 0.5, -10000, 10000, 0.03
)
V3_VARIATION_1 = ClusterDefinition(
    ClusterAlgorithm.V3, 11, 1, "kV3Variation1", 0.1, 0.3, -10000, 10000, 0.03
)
V3_VARIATION_2 = ClusterDefinition(
    ClusterAlgorithm.V3, 12, 1, "kV3Variation2", 0.1, 0.2, -10000, 10000, 0.03
)

# Read-only registries of the definitions by name and by id
CLUSTER_DEFINITIONS = MappingProxyType(
    {
        d.name: d
        for d in (
            V1_DEFAULT,
            V1_VARIATION_1,
            V1_VARIATION_2,
            V3_DEFAULT,
            V3_VARIATION_1,
            V3_VARIATION_2,
        )
    }
)
_DEFINITIONS_BY_ID = MappingProxyType({d.id: d for d in CLUSTER_DEFINITIONS.values()})


def resolve(name):
    """Looks up a cluster definition by name.

    The name must match one of the known definition names exactly.

    Parameters
    ----------
    name : str
        Name of the cluster definition (e.g. `kV3Default`)

    Returns
    -------
    DefinitionLookup
        Lookup outcome, which holds the definition if the name is known
    """
    definition = CLUSTER_DEFINITIONS.get(name) if isinstance(name, str) else None
    if definition is None:
        return DefinitionLookup(
            name,
            error=UnknownClusterDefinitionError(
                f"Cluster definition name not recognized: {name!r}. Must be "
                f"one of {list(CLUSTER_DEFINITIONS.keys())}."
            ),
        )

    return DefinitionLookup(name, value=definition)


def get_cluster_definition(name):
    """Fetches a cluster definition by name, raises if it is not known.

    Parameters
    ----------
    name : str
        Name of the cluster definition (e.g. `kV3Default`)

    Returns
    -------
    ClusterDefinition
        Cluster definition
    """
    return resolve(name).unwrap()


def definition_from_id(def_id):
    """Looks up a cluster definition by the id stored in the cluster tables.

    Parameters
    ----------
    def_id : int
        Identifier of the cluster definition

    Returns
    -------
    DefinitionLookup
        Lookup outcome, which holds the definition if the id is known
    """
    definition = _DEFINITIONS_BY_ID.get(def_id)
    if definition is None:
        return DefinitionLookup(
            def_id,
            error=UnknownClusterDefinitionError(
                f"Cluster definition id not recognized: {def_id}. Must be "
                f"one of {list(_DEFINITIONS_BY_ID.keys())}."
            ),
        )

    return DefinitionLookup(def_id, value=definition)
