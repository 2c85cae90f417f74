"""Error types and input validation utilities."""

from __future__ import annotations

from typing import Dict, Iterable

import numpy as np
import pandas as pd


class ForecastError(Exception):
    """Base class for forecasting failures."""


class InvalidInputError(ForecastError, ValueError):
    """Raised for malformed series, mappings or run sizes."""


class EstimationError(ForecastError):
    """Raised when a statistic cannot be estimated from the available data."""


def validate_field_mapping(field_map: Dict[str, str], dataframe: pd.DataFrame) -> None:
    """Ensure every required field is mapped to a column present in the dataframe."""
    required_fields = {"date", "total_cases", "new_cases"}
    missing = required_fields - field_map.keys()
    if missing:
        raise InvalidInputError(f"Missing required field mapping(s): {', '.join(sorted(missing))}")

    for target_field in sorted(required_fields):
        source_column = field_map[target_field]
        if source_column not in dataframe.columns:
            raise InvalidInputError(
                f"Field mapping for {target_field!r} references missing column "
                f"{source_column!r}"
            )


def validate_positive_int(value: int, name: str) -> int:
    """Return ``value`` as int, rejecting zero, negatives and non-integers."""
    if isinstance(value, bool):
        raise InvalidInputError(f"{name} must be an integer, got {value!r}")
    try:
        as_int = int(value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise InvalidInputError(f"{name} must be an integer, got {value!r}") from exc
    if as_int != value:
        raise InvalidInputError(f"{name} must be an integer, got {value!r}")
    if as_int <= 0:
        raise InvalidInputError(f"{name} must be positive, got {value}")
    return as_int


def validate_case_counts(values: Iterable[float], name: str) -> np.ndarray:
    """Coerce case counts to a float array and reject NaN, inf and negatives."""
    array = np.asarray(list(values), dtype=float)
    if array.ndim != 1:
        raise InvalidInputError(f"{name} must be one-dimensional")
    if not np.all(np.isfinite(array)):
        raise InvalidInputError(f"{name} contains missing or non-finite values")
    if np.any(array < 0):
        raise InvalidInputError(f"{name} contains negative values")
    return array


def validate_initial_total(initial_total: float) -> float:
    """The starting cumulative count must be a finite non-negative number."""
    value = float(initial_total)
    if not np.isfinite(value) or value < 0:
        raise InvalidInputError(f"initial_total must be finite and non-negative, got {initial_total!r}")
    return value
