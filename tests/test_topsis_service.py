import logging
import math
from dataclasses import replace

import numpy as np
import pytest

from materialwise.services.selection_service import SelectionService
from materialwise.services.topsis_service import SelectionError, TopsisService


@pytest.fixture
def service():
    return TopsisService(SelectionService(weight_tolerance=0.001))


def test_run_ranks_cheaper_material_first(service, hot_water_selection) -> None:
    run = service.run(hot_water_selection)

    assert [r.name for r in run.results] == ["PER", "Cuivre"]
    assert run.best().name == "PER"
    assert run.best().score == pytest.approx(1.0)

    ranking = run.ranking()
    assert list(ranking.columns) == ["rank", "material", "score"]
    assert ranking["rank"].tolist() == [1, 2]
    assert ranking["material"].tolist() == ["PER", "Cuivre"]


def test_matrix_frames_follow_selection_order(service, hot_water_selection) -> None:
    run = service.run(hot_water_selection)

    init = run.initial_matrix()
    assert init.index.tolist() == ["Cuivre", "PER"]
    assert init.columns.tolist() == ["Max temperature (°C)", "Cost (MAD/m)"]
    assert init.loc["PER", "Cost (MAD/m)"] == 60.0

    norm = run.normalized_matrix()
    assert np.allclose(norm["Max temperature (°C)"], [math.sqrt(0.5), math.sqrt(0.5)])
    assert np.array_equal(run.weighted_matrix().values, run.artifacts.weighted_matrix)


def test_trail_frames_match_scores(service, hot_water_selection) -> None:
    run = service.run(hot_water_selection)

    dist = run.distances().set_index("material")
    for r in run.results:
        assert dist.loc[r.name, "c_star"] == pytest.approx(r.score)

    ideals = run.ideals()
    assert ideals["criterion"].tolist() == ["Max temperature (°C)", "Cost (MAD/m)"]
    # equal temperatures: ideal and anti-ideal coincide
    assert ideals.loc[0, "pos_ideal"] == pytest.approx(ideals.loc[0, "neg_ideal"])
    assert ideals.loc[1, "pos_ideal"] < ideals.loc[1, "neg_ideal"]


def test_single_material_has_no_best(service, hot_water_selection) -> None:
    data = replace(
        hot_water_selection,
        material_names=["Cuivre"],
        criteria_keys=["temp"],
        weights={"temp": 1.0},
    )
    run = service.run(data)

    assert run.best() is None
    assert len(run.results) == 1
    assert math.isnan(run.ranking().loc[0, "score"])


def test_invalid_selection_raises(service, hot_water_selection) -> None:
    data = replace(hot_water_selection, weights={"temp": 0.2, "cout": 0.2})

    with pytest.raises(SelectionError) as exc:
        service.run(data)
    assert exc.value.issues == ["Weights sum to 0.400; they must sum to 1.00."]
    assert isinstance(exc.value, ValueError)


def test_run_logs_winner(service, hot_water_selection, caplog) -> None:
    with caplog.at_level(logging.INFO, logger="materialwise.services.topsis_service"):
        service.run(hot_water_selection)
    assert "best is PER" in caplog.text


def test_weights_used_lists_selected_weights(service, hot_water_selection) -> None:
    run = service.run(hot_water_selection)

    weights = run.weights_used()
    assert list(weights.columns) == ["criterion", "weight", "direction"]
    assert weights["criterion"].tolist() == ["Max temperature (°C)", "Cost (MAD/m)"]
    assert weights["weight"].tolist() == [0.4, 0.6]
    assert weights["direction"].tolist() == ["benefit", "cost"]
