"""
Advisory cost-range suggestions for the cost step of the wizard.

Asks an OpenAI model for a "min-max MAD/m" range for a material at a given
pressure rating. The answer only pre-fills the cost input; any failure is
logged and returns None so the wizard never depends on it.
"""
import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from materialwise.config import Settings, get_settings

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a helpful assistant that suggests a cost range (min and max) for a given "
    "plumbing pipe material and pressure rating (PN). The cost range is in Moroccan "
    "Dirham per meter (MAD/m)."
)

USER_PROMPT = (
    "Material type: {material}\n"
    "Pressure rating (PN): {pn}\n\n"
    'Respond with a cost range in the format "min-max MAD/m" (e.g. "50-100 MAD/m"). '
    "Do not add any other text."
)

_RANGE_RE = re.compile(r"(\d+(?:[.,]\d+)?)\s*[-–]\s*(\d+(?:[.,]\d+)?)")


class CostRangeOutput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    cost_range: str = Field(description="Suggested cost range, e.g. '50-100 MAD/m'.")


@dataclass(frozen=True)
class CostSuggestion:
    material: str
    pressure_rating: int
    cost_range: str
    low: Optional[float] = None
    high: Optional[float] = None

    @property
    def midpoint(self) -> Optional[float]:
        if self.low is None or self.high is None:
            return None
        return (self.low + self.high) / 2.0


def parse_cost_range(text: str) -> Optional[Tuple[float, float]]:
    match = _RANGE_RE.search(text or "")
    if not match:
        return None
    low = float(match.group(1).replace(",", "."))
    high = float(match.group(2).replace(",", "."))
    if low > high:
        return None
    return low, high


class CostSuggestionClient:
    def __init__(self, settings: Optional[Settings] = None, client: Any = None):
        self.settings = settings or get_settings()
        self._client = client

    @property
    def enabled(self) -> bool:
        return self._client is not None or self.settings.cost_suggestions_enabled

    def _get_client(self):
        if self._client is None:
            from openai import OpenAI

            self._client = OpenAI(
                api_key=self.settings.openai_api_key,
                timeout=self.settings.llm_timeout_seconds,
            )
        return self._client

    def _request(self, material: str, pressure_rating: int) -> str:
        schema = CostRangeOutput.model_json_schema()
        response = self._get_client().responses.create(
            model=self.settings.llm_model,
            input=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": USER_PROMPT.format(material=material, pn=pressure_rating)},
            ],
            text={
                "format": {
                    "type": "json_schema",
                    "name": "cost_range",
                    "schema": schema,
                    "strict": True,
                }
            },
        )
        return str(getattr(response, "output_text", "") or "").strip()

    def suggest(self, material: str, pressure_rating: Optional[int]) -> Optional[CostSuggestion]:
        if pressure_rating is None:
            logger.info("No pressure rating for %s; skipping cost suggestion", material)
            return None
        if not self.enabled:
            logger.info("OPENAI_API_KEY not set; cost suggestions disabled")
            return None

        try:
            raw_text = self._request(material, pressure_rating)
        except Exception:
            logger.exception("Cost suggestion request failed for %s PN%s", material, pressure_rating)
            return None

        try:
            output = CostRangeOutput.model_validate(json.loads(raw_text))
        except (json.JSONDecodeError, ValidationError) as exc:
            logger.warning("Invalid cost suggestion for %s: %s", material, exc)
            return None

        bounds = parse_cost_range(output.cost_range)
        if bounds is None:
            logger.warning("Unparsable cost range for %s: %r", material, output.cost_range)
        low, high = bounds if bounds else (None, None)

        return CostSuggestion(
            material=material,
            pressure_rating=int(pressure_rating),
            cost_range=output.cost_range.strip(),
            low=low,
            high=high,
        )
