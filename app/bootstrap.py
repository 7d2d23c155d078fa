# app/bootstrap.py
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]  # project root
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from materialwise.config import configure_logging  # noqa: E402

configure_logging()
