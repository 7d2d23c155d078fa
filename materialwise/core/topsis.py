# materialwise/core/topsis.py
import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Mapping, Sequence

import numpy as np

from materialwise.core.catalog import COST_KEY, Criterion, Material

logger = logging.getLogger(__name__)


class UnknownCriterionError(ValueError):
    """Raised when a selected criterion key has no entry in the criteria catalog."""


@dataclass(frozen=True)
class TopsisArtifacts:
    initial_matrix: np.ndarray     # x_ij
    normalized_matrix: np.ndarray  # r_ij
    weighted_matrix: np.ndarray    # v_ij
    pis: np.ndarray                # A*
    nis: np.ndarray                # A-
    s_pos: np.ndarray              # S*
    s_neg: np.ndarray              # S-
    c_star: np.ndarray             # C*


@dataclass(frozen=True)
class TopsisResult:
    name: str
    score: float                   # NaN when S* + S- == 0
    material: Material
    calculated_values: Dict[str, float]
    artifacts: TopsisArtifacts


def _read_only(a: np.ndarray) -> np.ndarray:
    a.setflags(write=False)
    return a


def compute_topsis(
    matrix: np.ndarray,
    weights: np.ndarray,
    directions: List[str],
) -> TopsisArtifacts:
    """
    matrix: shape (m, n)
    weights: shape (n,), used as given (no normalization)
    directions: list of 'benefit' or 'cost', length n

    A column whose norm is 0 normalizes to 0. A row with S* + S- == 0 gets C* = NaN.
    """
    if matrix.ndim != 2:
        raise ValueError("matrix must be 2D")
    m, n = matrix.shape
    if weights.shape != (n,):
        raise ValueError("weights must have shape (n,)")
    if len(directions) != n:
        raise ValueError("directions length must match number of criteria")

    x = np.array(matrix, dtype=float)

    denom = np.sqrt((x ** 2).sum(axis=0))
    denom = np.where(denom == 0, 1.0, denom)
    r = x / denom

    v = r * weights

    pis = np.zeros(n, dtype=float)
    nis = np.zeros(n, dtype=float)
    for j, d in enumerate(directions):
        col = v[:, j]
        if d == "benefit":
            pis[j] = np.max(col)
            nis[j] = np.min(col)
        elif d == "cost":
            pis[j] = np.min(col)
            nis[j] = np.max(col)
        else:
            raise ValueError("direction must be 'benefit' or 'cost'")

    s_pos = np.sqrt(((v - pis) ** 2).sum(axis=1))
    s_neg = np.sqrt(((v - nis) ** 2).sum(axis=1))

    total = s_pos + s_neg
    c_star = np.where(total == 0, np.nan, s_neg / np.where(total == 0, 1.0, total))

    return TopsisArtifacts(
        initial_matrix=_read_only(x),
        normalized_matrix=_read_only(r),
        weighted_matrix=_read_only(v),
        pis=_read_only(pis),
        nis=_read_only(nis),
        s_pos=_read_only(s_pos),
        s_neg=_read_only(s_neg),
        c_star=_read_only(c_star),
    )


def build_decision_matrix(
    materials: Sequence[Material],
    criteria_keys: Sequence[str],
    cost_by_material: Mapping[str, float],
) -> np.ndarray:
    missing_costs = []
    rows = []
    for material in materials:
        row = []
        for key in criteria_keys:
            if key == COST_KEY:
                if material.name not in cost_by_material:
                    missing_costs.append(material.name)
                row.append(float(cost_by_material.get(material.name, 0.0)))
            else:
                row.append(float(material.value(key)))
        rows.append(row)

    if missing_costs:
        logger.warning("No cost given for %s; using 0", ", ".join(missing_costs))

    return np.array(rows, dtype=float).reshape(len(materials), len(criteria_keys))


def _sort_key(result: TopsisResult):
    if math.isnan(result.score):
        return (1, 0.0)
    return (0, -result.score)


def run_topsis(
    materials: Sequence[Material],
    criteria_keys: Sequence[str],
    criteria_catalog: Sequence[Criterion],
    cost_by_material: Mapping[str, float],
    weight_by_criterion: Mapping[str, float],
) -> List[TopsisResult]:
    """
    Rank materials with TOPSIS.

    Rows follow the order of `materials`, columns the order of `criteria_keys`.
    Costs fill the `cout` column. Missing costs and weights count as 0.
    The returned list is sorted best-first with NaN scores last; every result
    carries the same read-only TopsisArtifacts for the run.
    """
    if not materials or not criteria_keys:
        return []

    by_key = {c.key: c for c in criteria_catalog}
    unknown = [k for k in criteria_keys if k not in by_key]
    if unknown:
        raise UnknownCriterionError(f"criteria not in catalog: {', '.join(unknown)}")

    missing_weights = [k for k in criteria_keys if k not in weight_by_criterion]
    if missing_weights:
        logger.warning("No weight given for %s; using 0", ", ".join(missing_weights))

    matrix = build_decision_matrix(materials, criteria_keys, cost_by_material)
    weights = np.array([float(weight_by_criterion.get(k, 0.0)) for k in criteria_keys], dtype=float)
    directions = ["benefit" if by_key[k].is_benefit else "cost" for k in criteria_keys]

    artifacts = compute_topsis(matrix=matrix, weights=weights, directions=directions)
    logger.debug("TOPSIS over %d materials x %d criteria", len(materials), len(criteria_keys))

    results = []
    for i, material in enumerate(materials):
        results.append(TopsisResult(
            name=material.name,
            score=float(artifacts.c_star[i]),
            material=material,
            calculated_values={k: float(matrix[i, j]) for j, k in enumerate(criteria_keys)},
            artifacts=artifacts,
        ))

    results.sort(key=_sort_key)
    return results
