# materialwise/core/catalog.py
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

COST_KEY = "cout"

ALIMENTATION = "Alimentation"
EVACUATION = "Evacuation"

NETWORK_SUBTYPES: Dict[str, List[str]] = {
    ALIMENTATION: ["EF", "ECS"],
    EVACUATION: ["Eaux usées et vannes", "Eaux pluviales"],
}

PRESSURE_NOMINAL_VALUES: List[int] = [6, 10, 16, 20, 25, 40]


@dataclass(frozen=True)
class Material:
    name: str
    network_types: Tuple[str, ...]   # EF, ECS, EV
    pressure_ratings: Tuple[int, ...]
    attributes: Dict[str, float] = field(default_factory=dict)

    def value(self, key: str) -> float:
        try:
            return self.attributes[key]
        except KeyError:
            raise KeyError(f"material {self.name!r} has no attribute {key!r}") from None


@dataclass(frozen=True)
class Criterion:
    key: str
    label: str
    is_benefit: bool  # False: lower is better (cost)


def _material(name, network_types, pn, temp, corrosion, vie, pose, acoustique, feu, environnement, surpression):
    return Material(
        name=name,
        network_types=tuple(network_types),
        pressure_ratings=tuple(pn),
        attributes={
            "temp": temp,
            "corrosion": corrosion,
            "vie": vie,
            "pose": pose,
            "acoustique": acoustique,
            "feu": feu,
            "environnement": environnement,
            "surpression": surpression,
        },
    )


MATERIALS: Tuple[Material, ...] = (
    _material("Cuivre", ["EF", "ECS"], [10, 16, 20, 25], 90, 10, 70, 3, 7, 7, 3, 10),
    _material("PER", ["EF", "ECS"], [6, 10, 16], 90, 7, 50, 9, 7, 5, 5, 3),
    _material("PP-R", ["EF", "ECS"], [10, 16, 20, 25], 95, 9, 50, 6, 7, 7, 5, 7),
    _material("Fonte", ["EV"], [10, 16, 25, 40], 80, 9, 100, 3, 10, 9, 3, 10),
    _material("CPVC", ["EF", "ECS"], [10, 16, 20, 25], 95, 10, 60, 9, 7, 9, 5, 10),
    _material("PEHD", ["EF", "EV"], [6, 10, 16, 20, 25], 80, 10, 100, 8, 7, 5, 5, 9),
    _material("PVC", ["EV"], [6, 10, 16, 25], 60, 8, 50, 9, 6, 5, 5, 6),
)

CRITERIA: Tuple[Criterion, ...] = (
    Criterion("temp", "Max temperature (°C)", True),
    Criterion("corrosion", "Corrosion resistance", True),
    Criterion("vie", "Lifespan (years)", True),
    Criterion("pose", "Ease of installation", True),
    Criterion("acoustique", "Acoustic performance", True),
    Criterion("feu", "Fire resistance", True),
    Criterion("environnement", "Environmental impact", True),
    Criterion("surpression", "Overpressure resistance", True),
    Criterion(COST_KEY, "Cost (MAD/m)", False),
)


def get_material(name: str) -> Material:
    for m in MATERIALS:
        if m.name == name:
            return m
    raise KeyError(f"unknown material: {name}")


def materials_by_names(names: Sequence[str]) -> List[Material]:
    return [get_material(n) for n in names]


def get_criterion(key: str) -> Criterion:
    for c in CRITERIA:
        if c.key == key:
            return c
    raise KeyError(f"unknown criterion: {key}")


def available_materials(network: Optional[str], subtype: Optional[str], pn: Optional[int]) -> List[Material]:
    """
    Materials that fit a network choice.

    Drainage takes every EV material and ignores PN. Supply needs both the
    subtype tag (EF/ECS) and the PN rating; without a PN nothing is available yet.
    """
    if network == EVACUATION:
        return [m for m in MATERIALS if "EV" in m.network_types]
    if network == ALIMENTATION and subtype and pn is not None:
        return [m for m in MATERIALS if subtype in m.network_types and pn in m.pressure_ratings]
    return []


def selectable_criteria(network: Optional[str], subtype: Optional[str]) -> List[Criterion]:
    criteria = list(CRITERIA)
    # max temperature only matters for hot water
    if subtype != "ECS":
        criteria = [c for c in criteria if c.key != "temp"]
    if network == EVACUATION:
        criteria = [c for c in criteria if c.key != "surpression"]
    return criteria
