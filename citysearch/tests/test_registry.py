import pytest

from citysearch.search.errors import InvalidCriteria
from citysearch.search.models import (
    Criterion,
    CriterionType,
    DistanceCriterionConfig,
    TextCriterionConfig,
)
from citysearch.search.registry import CriterionRegistry

CRITERIA = {
    "name": {"type": "text", "weight": 0.6, "config": {"secondary_search_malus": 0.1}},
    "distance": {
        "type": "distance",
        "weight": 0.8,
        "config": {"latitude_attr": "lat", "longitude_attr": "long", "limit_km": 1000},
    },
}


def test_registry_keeps_definition_order():
    registry = CriterionRegistry(CRITERIA)

    assert registry.names == ["name", "distance"]
    assert len(registry) == 2
    assert "distance" in registry
    assert "population" not in registry


def test_criteria_are_typed():
    registry = CriterionRegistry(CRITERIA)

    name = registry.get("name")
    assert name.type is CriterionType.text
    assert isinstance(name.config, TextCriterionConfig)
    assert name.config.secondary_search_malus == 0.1

    distance = registry.get("distance")
    assert distance.type is CriterionType.distance
    assert distance.config == DistanceCriterionConfig(
        latitude_attr="lat", longitude_attr="long", limit_km=1000
    )


def test_defaults_apply_when_config_is_missing():
    registry = CriterionRegistry({
        "name": {"type": "text", "weight": 1.0},
        "distance": {"type": "distance", "weight": 1.0},
    })

    assert registry.get("name").config.secondary_search_malus == 0.0
    distance = registry.get("distance").config
    assert distance.latitude_attr == "latitude"
    assert distance.longitude_attr == "longitude"
    assert distance.limit_km == 10.0


def test_camel_case_config_keys_are_accepted():
    registry = CriterionRegistry({
        "name": {"type": "text", "weight": 0.6, "config": {"secondarySearchMalus": 0.2}},
        "distance": {
            "type": "distance",
            "weight": 0.8,
            "config": {"latitudeName": "lat", "longitudeName": "long", "limit": 500},
        },
    })

    assert registry.get("name").config.secondary_search_malus == 0.2
    assert registry.get("distance").config.limit_km == 500


def test_prebuilt_criterion_is_accepted():
    criterion = Criterion(
        name="name", type=CriterionType.text, weight=0.5, config=TextCriterionConfig()
    )
    registry = CriterionRegistry({"name": criterion})
    assert registry.get("name") is criterion


@pytest.mark.parametrize(
    "criteria",
    [
        [],
        {},
        "name",
        None,
        {"name": "text"},
        {"name": {"type": "fuzzy", "weight": 0.5}},
        {"name": {"type": "text"}},
        {"name": {"type": "text", "weight": 0}},
        {"name": {"type": "text", "weight": -1}},
        {"name": {"type": "text", "weight": 1, "config": {"limit_km": 3}}},
        {"distance": {"type": "distance", "weight": 1, "config": {"limit_km": 0}}},
        {"distance": {"type": "distance", "weight": 1, "config": {"secondary_search_malus": 0.1}}},
    ],
)
def test_malformed_criteria_are_rejected(criteria):
    with pytest.raises(InvalidCriteria):
        CriterionRegistry(criteria)


def test_mismatched_criterion_name_is_rejected():
    criterion = Criterion(
        name="title", type=CriterionType.text, weight=0.5, config=TextCriterionConfig()
    )
    with pytest.raises(InvalidCriteria):
        CriterionRegistry({"name": criterion})


def test_config_model_must_match_type():
    with pytest.raises(InvalidCriteria):
        CriterionRegistry({
            "name": {"type": "text", "weight": 0.5, "config": DistanceCriterionConfig()}
        })
