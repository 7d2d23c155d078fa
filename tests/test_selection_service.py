from dataclasses import replace

import pytest

from materialwise.services.selection_service import SelectionData, SelectionService


@pytest.fixture
def service():
    return SelectionService(weight_tolerance=0.001)


def test_valid_selection(service, hot_water_selection) -> None:
    ok, issues = service.validate(hot_water_selection)
    assert ok
    assert issues == []


def test_empty_selection(service) -> None:
    data = SelectionData(network="Alimentation", subtype="EF", pn=10, material_names=[], criteria_keys=[])
    ok, issues = service.validate(data)
    assert not ok
    assert "Select at least one material." in issues
    assert "Select at least one criterion." in issues


def test_weights_must_sum_to_one(service, hot_water_selection) -> None:
    data = replace(hot_water_selection, weights={"temp": 0.4, "cout": 0.5})
    ok, issues = service.validate(data)
    assert not ok
    assert issues == ["Weights sum to 0.900; they must sum to 1.00."]


def test_weight_sum_within_tolerance(service, hot_water_selection) -> None:
    data = replace(hot_water_selection, weights={"temp": 0.4, "cout": 0.6005})
    assert service.validate(data)[0]


def test_weights_must_be_between_zero_and_one(service, hot_water_selection) -> None:
    data = replace(hot_water_selection, weights={"temp": 1.5, "cout": -0.5})
    ok, issues = service.validate(data)
    assert not ok
    assert issues == ["Enter a weight between 0 and 1 for: temp, cout."]


def test_missing_weight(service, hot_water_selection) -> None:
    data = replace(hot_water_selection, weights={"temp": 1.0})
    ok, issues = service.validate(data)
    assert not ok
    assert "cout" in issues[0]


@pytest.mark.parametrize("costs", [{"Cuivre": 120.0}, {"Cuivre": 120.0, "PER": -1.0}, {"Cuivre": 120.0, "PER": "abc"}])
def test_costs_must_be_non_negative_numbers(service, hot_water_selection, costs) -> None:
    data = replace(hot_water_selection, costs=costs)
    ok, issues = service.validate(data)
    assert not ok
    assert issues == ["Enter a valid non-negative cost for: PER."]


def test_material_must_fit_network(service, hot_water_selection) -> None:
    data = replace(
        hot_water_selection,
        material_names=["Cuivre", "Fonte"],
        costs={"Cuivre": 120.0, "Fonte": 200.0},
    )
    ok, issues = service.validate(data)
    assert not ok
    assert issues == ["Materials not available for this network: Fonte."]


def test_criterion_must_fit_network(service, hot_water_selection) -> None:
    data = replace(hot_water_selection, subtype="EF")
    ok, issues = service.validate(data)
    assert not ok
    assert issues == ["Criteria not applicable to this network: temp."]


def test_build_input_keeps_selection_order(service, hot_water_selection) -> None:
    data = replace(hot_water_selection, material_names=["PER", "Cuivre"], criteria_keys=["cout", "temp"])
    kwargs = service.build_input(data)

    assert [m.name for m in kwargs["materials"]] == ["PER", "Cuivre"]
    assert kwargs["criteria_keys"] == ["cout", "temp"]
    assert [c.key for c in kwargs["criteria_catalog"]] == [c.key for c in service.selectable_criteria("Alimentation", "ECS")]
    assert kwargs["cost_by_material"] == {"PER": 60.0, "Cuivre": 120.0}
    assert kwargs["weight_by_criterion"] == {"cout": 0.6, "temp": 0.4}


@pytest.mark.parametrize("n", range(1, 10))
def test_default_weights_sum_to_one(service, n) -> None:
    keys = [f"c{i}" for i in range(n)]
    weights = service.default_weights(keys)

    assert list(weights) == keys
    assert abs(sum(weights.values()) - 1.0) <= service.weight_tolerance


def test_default_weights_remainder_on_last(service) -> None:
    weights = service.default_weights(["a", "b", "c", "d", "e", "f"])

    assert weights["a"] == 0.167
    assert weights["f"] == 0.165
    assert service.default_weights([]) == {}
