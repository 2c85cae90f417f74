"""Runtime defaults for the forecasting engine.

Values can be overridden through environment variables so batch runs can be
tuned without touching code.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Optional

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"Environment variable {name} must be an integer, got {raw!r}") from exc


DEFAULT_NUM_SIMULATIONS: int = _env_int("EPIFORECAST_SIMULATIONS", 1000)  # type: ignore[assignment]
DEFAULT_PREDICTION_DAYS: int = _env_int("EPIFORECAST_PREDICTION_DAYS", 30)  # type: ignore[assignment]
DEFAULT_RANDOM_SEED: Optional[int] = _env_int("EPIFORECAST_SEED", 42)
DEFAULT_PROGRESS_INTERVAL = 100

# Column names of the COVID-19 Bangladesh daily report.
DEFAULT_FIELD_MAP: Dict[str, str] = {
    "date": "date",
    "total_cases": "total_confirmed",
    "new_cases": "new_confirmed",
}

OUTPUT_ROOT = Path(os.environ.get("EPIFORECAST_OUTPUT_ROOT", PROJECT_ROOT / "output"))


__all__ = [
    "DEFAULT_FIELD_MAP",
    "DEFAULT_NUM_SIMULATIONS",
    "DEFAULT_PREDICTION_DAYS",
    "DEFAULT_PROGRESS_INTERVAL",
    "DEFAULT_RANDOM_SEED",
    "OUTPUT_ROOT",
    "PROJECT_ROOT",
]
