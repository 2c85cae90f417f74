"""Validation helpers for simulated case ensembles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Sequence

import numpy as np
import pandas as pd


@dataclass
class ValidationResult:
    """Basic container for validation outcomes."""

    status: str
    failed_checks: Sequence[str]
    warnings: Sequence[str]

    def to_dict(self) -> Dict[str, object]:
        return {
            "status": self.status,
            "failed_checks": list(self.failed_checks),
            "warnings": list(self.warnings),
        }


def validate_case_paths(
    totals: np.ndarray,
    daily_new: np.ndarray,
    *,
    initial_total: Optional[float] = None,
) -> ValidationResult:
    """Run sanity checks on simulated trajectories."""
    failed: list[str] = []
    warnings: list[str] = []

    if totals.size == 0:
        failed.append("empty_ensemble")
        return ValidationResult(status="FAIL", failed_checks=failed, warnings=warnings)

    if not np.all(np.isfinite(totals)) or not np.all(np.isfinite(daily_new)):
        failed.append("nan_or_inf_cases")
    if np.any(daily_new < 0):
        failed.append("negative_new_cases")
    if totals.shape[1] > 1 and np.any(np.diff(totals, axis=1) < 0):
        failed.append("decreasing_totals")
    if initial_total is not None and np.any(totals[:, 0] < initial_total):
        failed.append("totals_below_start")

    if initial_total:
        final_max = float(np.nanmax(totals[:, -1]))
        if final_max > 100.0 * initial_total:
            warnings.append("explosive_growth")

    status = "PASS" if not failed else "FAIL"
    return ValidationResult(status=status, failed_checks=failed, warnings=warnings)


def validate_distribution(
    final_totals: Sequence[float],
    *,
    initial_total: Optional[float] = None,
) -> ValidationResult:
    """Validate ordering and dispersion of final-day totals."""
    failed: list[str] = []
    warnings: list[str] = []
    series = pd.Series(final_totals, dtype=float)
    if series.empty:
        failed.append("no_final_totals")
        return ValidationResult(status="FAIL", failed_checks=failed, warnings=warnings)

    percentiles = series.quantile([0.05, 0.25, 0.50, 0.75, 0.95])
    if not percentiles.is_monotonic_increasing:
        failed.append("percentile_ordering")

    if series.size > 1:
        std = float(series.std(ddof=1))
        mean = float(series.mean())
        if std <= 0:
            warnings.append("degenerate_distribution")
        elif mean != 0 and std / abs(mean) > 0.50:
            warnings.append("high_volatility")

    if initial_total:
        prob_doubling = float((series > 2.0 * initial_total).mean())
        if prob_doubling > 0.5:
            warnings.append("majority_paths_double")

    status = "PASS" if not failed else "FAIL"
    return ValidationResult(status=status, failed_checks=failed, warnings=warnings)


__all__ = ["ValidationResult", "validate_case_paths", "validate_distribution"]
