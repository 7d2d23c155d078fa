import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from materialwise.config import get_settings
from materialwise.core import catalog
from materialwise.core.catalog import Criterion, Material


@dataclass(frozen=True)
class SelectionData:
    network: Optional[str]
    subtype: Optional[str]
    pn: Optional[int]
    material_names: List[str]        # selection order = matrix row order
    criteria_keys: List[str]         # selection order = matrix column order
    costs: Dict[str, float] = field(default_factory=dict)
    weights: Dict[str, float] = field(default_factory=dict)


def _is_number(x: Any) -> bool:
    try:
        return math.isfinite(float(x))
    except (TypeError, ValueError):
        return False


class SelectionService:
    def __init__(self, weight_tolerance: Optional[float] = None):
        if weight_tolerance is None:
            weight_tolerance = get_settings().weight_tolerance
        self.weight_tolerance = float(weight_tolerance)

    def available_materials(self, network: Optional[str], subtype: Optional[str], pn: Optional[int]) -> List[Material]:
        return catalog.available_materials(network, subtype, pn)

    def selectable_criteria(self, network: Optional[str], subtype: Optional[str]) -> List[Criterion]:
        return catalog.selectable_criteria(network, subtype)

    def default_weights(self, criteria_keys: List[str], ndigits: int = 3) -> Dict[str, float]:
        """Equal weights rounded to `ndigits`; the last criterion takes the rounding remainder."""
        if not criteria_keys:
            return {}
        share = round(1.0 / len(criteria_keys), ndigits)
        weights = {k: share for k in criteria_keys[:-1]}
        weights[criteria_keys[-1]] = round(1.0 - share * (len(criteria_keys) - 1), ndigits)
        return weights

    def validate(self, data: SelectionData) -> Tuple[bool, List[str]]:
        issues: List[str] = []

        if not data.material_names:
            issues.append("Select at least one material.")
        if not data.criteria_keys:
            issues.append("Select at least one criterion.")

        available = {m.name for m in self.available_materials(data.network, data.subtype, data.pn)}
        not_available = [n for n in data.material_names if n not in available]
        if not_available:
            issues.append(f"Materials not available for this network: {', '.join(not_available)}.")

        selectable = {c.key for c in self.selectable_criteria(data.network, data.subtype)}
        not_selectable = [k for k in data.criteria_keys if k not in selectable]
        if not_selectable:
            issues.append(f"Criteria not applicable to this network: {', '.join(not_selectable)}.")

        bad_costs = [
            n for n in data.material_names
            if not _is_number(data.costs.get(n)) or float(data.costs[n]) < 0
        ]
        if bad_costs:
            issues.append(f"Enter a valid non-negative cost for: {', '.join(bad_costs)}.")

        bad_weights = [
            k for k in data.criteria_keys
            if not _is_number(data.weights.get(k)) or not 0.0 <= float(data.weights[k]) <= 1.0
        ]
        if bad_weights:
            issues.append(f"Enter a weight between 0 and 1 for: {', '.join(bad_weights)}.")
        elif data.criteria_keys:
            total = sum(float(data.weights[k]) for k in data.criteria_keys)
            if abs(total - 1.0) > self.weight_tolerance:
                issues.append(f"Weights sum to {total:.3f}; they must sum to 1.00.")

        return (len(issues) == 0), issues

    def build_input(self, data: SelectionData) -> Dict[str, Any]:
        """Keyword arguments for run_topsis, materials and criteria in selection order."""
        return {
            "materials": catalog.materials_by_names(data.material_names),
            "criteria_keys": list(data.criteria_keys),
            "criteria_catalog": self.selectable_criteria(data.network, data.subtype),
            "cost_by_material": {n: float(data.costs[n]) for n in data.material_names if n in data.costs},
            "weight_by_criterion": {k: float(data.weights[k]) for k in data.criteria_keys if k in data.weights},
        }
