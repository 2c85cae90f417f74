"""Estimation of growth-rate and new-case statistics from history."""

from __future__ import annotations

import logging
from typing import Sequence, Union

import numpy as np

from ..models.parameters import EstimatedParameters
from ..models.series import HistoricalSeries
from .validator import EstimationError

LOGGER = logging.getLogger(__name__)


def growth_rate_sample(total_cases: Union[Sequence[float], np.ndarray]) -> np.ndarray:
    """
    Fractional day-over-day growth for strictly increasing day pairs.

    Pairs whose earlier total is zero, or whose total stays flat or falls,
    are excluded, so the sample only describes days with measured growth.
    """
    totals = np.asarray(total_cases, dtype=float)
    if totals.size < 2:
        return np.empty(0, dtype=float)
    earlier = totals[:-1]
    later = totals[1:]
    mask = (earlier > 0) & (later > earlier)
    return (later[mask] - earlier[mask]) / earlier[mask]


def _mean_and_std(sample: np.ndarray, description: str) -> tuple[float, float]:
    """Sample mean and N-1 std; a single observation has zero spread."""
    if sample.size == 0:
        raise EstimationError(f"no {description} found")
    if sample.size == 1:
        return float(sample[0]), 0.0
    return float(np.mean(sample)), float(np.std(sample, ddof=1))


def estimate_parameters(series: HistoricalSeries) -> EstimatedParameters:
    """
    Derive the simulation parameters from a historical series.

    Parameters
    ----------
    series:
        Validated daily history with at least two points.

    Raises
    ------
    EstimationError
        If no strictly increasing day pair or no day with positive new
        cases exists.
    """
    growth = growth_rate_sample(series.total_cases)
    mean_growth, std_growth = _mean_and_std(growth, "monotonically increasing day pairs")

    positive_new = series.new_cases[series.new_cases > 0]
    mean_new, std_new = _mean_and_std(positive_new, "days with positive new cases")

    params = EstimatedParameters(
        mean_growth_rate=mean_growth,
        std_growth_rate=std_growth,
        mean_new_cases=mean_new,
        std_new_cases=std_new,
        growth_sample_size=int(growth.size),
        new_case_sample_size=int(positive_new.size),
    )
    LOGGER.info(
        "Mean daily growth rate: %.4f +/- %.4f (%d pairs)",
        params.mean_growth_rate,
        params.std_growth_rate,
        params.growth_sample_size,
    )
    LOGGER.info(
        "Mean new cases per day: %.1f +/- %.1f (%d days)",
        params.mean_new_cases,
        params.std_new_cases,
        params.new_case_sample_size,
    )
    return params


__all__ = ["estimate_parameters", "growth_rate_sample"]
