"""Test that the EMCAL cluster definition registry works as intended."""

import dataclasses

import pytest

from aodana.config import ConfigError, ConfigValueError
from aodana.data.emcal import (
    CLUSTER_DEFINITIONS,
    ClusterAlgorithm,
    ClusterDefinition,
    ClusterRecord,
    UnknownClusterDefinitionError,
    definition_from_id,
    get_cluster_definition,
    resolve,
)

NAMES = (
    "kV1Default",
    "kV1Variation1",
    "kV1Variation2",
    "kV3Default",
    "kV3Variation1",
    "kV3Variation2",
)


@pytest.mark.parametrize("name", NAMES)
def test_resolve_known_names(name):
    """Every registered name resolves to the definition of that name."""
    lookup = resolve(name)
    assert lookup.ok
    assert lookup
    assert lookup.error is None
    assert lookup.value.name == name
    assert lookup.unwrap() is CLUSTER_DEFINITIONS[name]
    assert get_cluster_definition(name) is lookup.value


def test_registry_content():
    """The registry holds exactly the six built-in definitions, with unique ids."""
    assert tuple(CLUSTER_DEFINITIONS.keys()) == NAMES
    ids = [d.id for d in CLUSTER_DEFINITIONS.values()]
    assert ids == [0, 1, 2, 10, 11, 12]
    for name, definition in CLUSTER_DEFINITIONS.items():
        assert definition.name == name
        assert definition.version == 1


def test_definition_literals():
    """The definitions carry the parameters they are declared with."""
    v1 = resolve("kV1Default").value
    assert v1 == ClusterDefinition(
        ClusterAlgorithm.V1, 0, 1, "kV1Default", 0.1, 0.5, -10000, 10000, 0.03
    )

    v3 = resolve("kV3Variation2").value
    assert v3.algorithm == ClusterAlgorithm.V3
    assert v3.id == 12
    assert v3.energy_threshold == 0.1
    assert v3.cell_energy_threshold == 0.2
    assert (v3.time_min, v3.time_max) == (-10000, 10000)
    assert v3.exoticity_threshold == 0.03

    # The V1 variations run the V3 algorithm
    assert resolve("kV1Variation1").value.algorithm == ClusterAlgorithm.V3
    assert resolve("kV1Variation2").value.algorithm == ClusterAlgorithm.V3


@pytest.mark.parametrize("name", ["unknown", "", "kv3default", "kV3Default ", "kV3"])
def test_resolve_unknown_names(name):
    """Unknown names (including case or partial matches) fail to resolve."""
    before = dict(CLUSTER_DEFINITIONS)

    lookup = resolve(name)
    assert not lookup.ok
    assert not lookup
    assert lookup.value is None
    assert isinstance(lookup.error, UnknownClusterDefinitionError)
    with pytest.raises(UnknownClusterDefinitionError):
        lookup.unwrap()
    with pytest.raises(UnknownClusterDefinitionError):
        get_cluster_definition(name)

    # The failed lookup has no side effect on the registry
    assert dict(CLUSTER_DEFINITIONS) == before


def test_resolve_non_string():
    """Non-string keys never resolve."""
    assert not resolve(10)
    assert not resolve(None)


def test_unknown_definition_error_hierarchy():
    """The lookup error can be caught as a configuration or value error."""
    assert issubclass(UnknownClusterDefinitionError, ConfigValueError)
    assert issubclass(UnknownClusterDefinitionError, ConfigError)
    assert issubclass(UnknownClusterDefinitionError, ValueError)
    with pytest.raises(ValueError, match="not recognized"):
        get_cluster_definition("kV2Default")


def test_registry_is_read_only():
    """Definitions can neither be registered nor modified at runtime."""
    with pytest.raises(TypeError):
        CLUSTER_DEFINITIONS["kV4Default"] = CLUSTER_DEFINITIONS["kV3Default"]

    definition = CLUSTER_DEFINITIONS["kV3Default"]
    with pytest.raises(dataclasses.FrozenInstanceError):
        definition.cell_energy_threshold = 1.0


def test_definition_from_id():
    """The storage id of a definition resolves back to it."""
    for definition in CLUSTER_DEFINITIONS.values():
        assert definition_from_id(definition.id).unwrap() is definition

    lookup = definition_from_id(3)
    assert not lookup.ok
    with pytest.raises(UnknownClusterDefinitionError):
        lookup.unwrap()


def test_definition_accepts():
    """A definition accepts the clusters stamped with its id only."""
    definition = get_cluster_definition("kV3Default")
    assert definition.accepts(ClusterRecord(definition=10))
    assert not definition.accepts(ClusterRecord(definition=11))
    assert definition.as_dict()["name"] == "kV3Default"
