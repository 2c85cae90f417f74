"""Reduction of a simulated ensemble into summary statistics."""

from __future__ import annotations

import numpy as np
import pandas as pd

from ..models.results import SummaryStatistics
from .ensemble import Ensemble
from .validator import InvalidInputError, validate_initial_total

PERCENTILE_METHOD = "linear"
RISK_MULTIPLIER = 1.5


def summarize_ensemble(
    ensemble: Ensemble,
    initial_total: float,
    *,
    risk_multiplier: float = RISK_MULTIPLIER,
) -> SummaryStatistics:
    """
    Compute per-day and final-day statistics across simulation rows.

    Standard deviations use the population denominator (``ddof=0``) and
    percentiles use linear interpolation between order statistics. The
    ensemble arrays are only read.
    """
    initial_total = validate_initial_total(initial_total)
    totals = np.asarray(ensemble.totals, dtype=float)
    daily_new = np.asarray(ensemble.daily_new, dtype=float)
    if totals.ndim != 2 or totals.shape[0] == 0 or totals.shape[1] == 0:
        raise InvalidInputError("Ensemble must contain at least one run and one day")
    if daily_new.shape != totals.shape:
        raise InvalidInputError(
            f"Ensemble matrices disagree in shape: {totals.shape} vs {daily_new.shape}"
        )
    if not np.all(np.isfinite(totals)) or not np.all(np.isfinite(daily_new)):
        raise InvalidInputError("Ensemble contains missing or non-finite values")

    num_simulations, prediction_days = totals.shape
    p05, median, p95 = np.percentile(totals, [5, 50, 95], axis=0, method=PERCENTILE_METHOD)
    daily = pd.DataFrame(
        {
            "day": np.arange(1, prediction_days + 1),
            "mean": totals.mean(axis=0),
            "std": totals.std(axis=0, ddof=0),
            "p05": p05,
            "median": median,
            "p95": p95,
            "new_cases_mean": daily_new.mean(axis=0),
            "new_cases_std": daily_new.std(axis=0, ddof=0),
        }
    )

    final_totals = totals[:, -1].copy()
    risk_threshold = initial_total * risk_multiplier
    risk_probability = float(np.count_nonzero(final_totals > risk_threshold)) / num_simulations

    return SummaryStatistics(
        daily=daily,
        final_distribution=final_totals,
        initial_total=initial_total,
        num_simulations=num_simulations,
        prediction_days=prediction_days,
        risk_threshold=risk_threshold,
        risk_probability=risk_probability,
        best_case=float(final_totals.min()),
        worst_case=float(final_totals.max()),
    )


__all__ = ["PERCENTILE_METHOD", "RISK_MULTIPLIER", "summarize_ensemble"]
