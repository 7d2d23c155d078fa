import pytest

from materialwise.core.catalog import COST_KEY, Criterion, Material
from materialwise.services.selection_service import SelectionData


def _make_material(name, **attributes):
    return Material(name=name, network_types=("EF",), pressure_ratings=(10,), attributes=attributes)


@pytest.fixture
def make_material():
    return _make_material


@pytest.fixture
def benefit_x():
    return Criterion("x", "X", True)


@pytest.fixture
def toy_catalog():
    return [
        Criterion("x", "X", True),
        Criterion("y", "Y", True),
        Criterion(COST_KEY, "Cost", False),
    ]


@pytest.fixture
def hot_water_selection():
    return SelectionData(
        network="Alimentation",
        subtype="ECS",
        pn=16,
        material_names=["Cuivre", "PER"],
        criteria_keys=["temp", "cout"],
        costs={"Cuivre": 120.0, "PER": 60.0},
        weights={"temp": 0.4, "cout": 0.6},
    )
