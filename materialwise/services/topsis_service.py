import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np
import pandas as pd

from materialwise.core.catalog import get_criterion
from materialwise.core.topsis import TopsisArtifacts, TopsisResult, run_topsis
from materialwise.services.selection_service import SelectionData, SelectionService

logger = logging.getLogger(__name__)


class SelectionError(ValueError):
    def __init__(self, issues: List[str]):
        super().__init__("; ".join(issues))
        self.issues = issues


@dataclass(frozen=True)
class TopsisRun:
    results: List[TopsisResult]      # best first
    material_names: List[str]        # selection order, matches matrix rows
    criteria_keys: List[str]         # selection order, matches matrix columns
    weights: Dict[str, float] = field(default_factory=dict)

    @property
    def artifacts(self) -> Optional[TopsisArtifacts]:
        return self.results[0].artifacts if self.results else None

    @property
    def criteria_labels(self) -> List[str]:
        return [get_criterion(k).label for k in self.criteria_keys]

    def best(self) -> Optional[TopsisResult]:
        if not self.results or math.isnan(self.results[0].score):
            return None
        return self.results[0]

    def ranking(self) -> pd.DataFrame:
        rows = [
            {"rank": idx, "material": r.name, "score": r.score}
            for idx, r in enumerate(self.results, start=1)
        ]
        return pd.DataFrame(rows, columns=["rank", "material", "score"])

    def _matrix_frame(self, values: Optional[np.ndarray]) -> pd.DataFrame:
        if values is None:
            return pd.DataFrame()
        df = pd.DataFrame(values, index=self.material_names, columns=self.criteria_labels)
        df.index.name = "material"
        return df

    def initial_matrix(self) -> pd.DataFrame:
        return self._matrix_frame(self.artifacts.initial_matrix if self.artifacts else None)

    def normalized_matrix(self) -> pd.DataFrame:
        return self._matrix_frame(self.artifacts.normalized_matrix if self.artifacts else None)

    def weighted_matrix(self) -> pd.DataFrame:
        return self._matrix_frame(self.artifacts.weighted_matrix if self.artifacts else None)

    def ideals(self) -> pd.DataFrame:
        a = self.artifacts
        if a is None:
            return pd.DataFrame()
        return pd.DataFrame({
            "criterion": self.criteria_labels,
            "pos_ideal": a.pis,
            "neg_ideal": a.nis,
        })

    def weights_used(self) -> pd.DataFrame:
        rows = []
        for k in self.criteria_keys:
            c = get_criterion(k)
            rows.append({
                "criterion": c.label,
                "weight": float(self.weights.get(k, 0.0)),
                "direction": "benefit" if c.is_benefit else "cost",
            })
        return pd.DataFrame(rows, columns=["criterion", "weight", "direction"])

    def distances(self) -> pd.DataFrame:
        a = self.artifacts
        if a is None:
            return pd.DataFrame()
        return pd.DataFrame({
            "material": self.material_names,
            "s_pos": a.s_pos,
            "s_neg": a.s_neg,
            "c_star": a.c_star,
        })


class TopsisService:
    def __init__(self, selection_service: Optional[SelectionService] = None):
        self.selection_service = selection_service or SelectionService()

    def run(self, data: SelectionData) -> TopsisRun:
        ok, issues = self.selection_service.validate(data)
        if not ok:
            raise SelectionError(issues)

        results = run_topsis(**self.selection_service.build_input(data))

        topsis_run = TopsisRun(
            results=results,
            material_names=list(data.material_names),
            criteria_keys=list(data.criteria_keys),
            weights={k: float(data.weights[k]) for k in data.criteria_keys},
        )

        best = topsis_run.best()
        if best is None:
            logger.info("TOPSIS run over %d materials has no usable score", len(results))
        else:
            logger.info("TOPSIS run over %d materials: best is %s (%.4f)", len(results), best.name, best.score)

        return topsis_run
