# materialwise/config.py
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


# -------------------------
# Load .env automatically
# -------------------------
def load_env(env_path: Optional[Path] = None) -> None:
    if env_path is None:
        env_path = Path(__file__).resolve().parents[1] / ".env"  # project root
    if not env_path.exists():
        return
    for line in env_path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        k, v = line.split("=", 1)
        os.environ.setdefault(k.strip(), v.strip())


load_env()


@dataclass(frozen=True)
class Settings:
    openai_api_key: Optional[str]
    llm_model: str = "gpt-4o-mini"
    llm_timeout_seconds: float = 30.0
    weight_tolerance: float = 0.001
    log_level: str = "INFO"

    @property
    def cost_suggestions_enabled(self) -> bool:
        return bool(self.openai_api_key)


_settings: Optional[Settings] = None


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be a number, got {raw!r}") from None


def read_settings() -> Settings:
    return Settings(
        openai_api_key=os.getenv("OPENAI_API_KEY") or None,
        llm_model=os.getenv("MATERIALWISE_LLM_MODEL", "gpt-4o-mini"),
        llm_timeout_seconds=_float_env("MATERIALWISE_LLM_TIMEOUT", 30.0),
        weight_tolerance=_float_env("MATERIALWISE_WEIGHT_TOLERANCE", 0.001),
        log_level=os.getenv("MATERIALWISE_LOG_LEVEL", "INFO").upper(),
    )


def get_settings() -> Settings:
    global _settings
    if _settings is not None:
        return _settings

    _settings = read_settings()
    return _settings


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=level or get_settings().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
