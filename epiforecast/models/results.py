"""Result data models handed to reporting and visualization."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd
from pydantic import BaseModel, ConfigDict, Field

from .parameters import EstimatedParameters


class SummaryStatistics(BaseModel):
    """Per-day ensemble statistics plus final-day risk metrics."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    daily: pd.DataFrame = Field(
        ...,
        description=(
            "Per-day statistics with columns: "
            "['day', 'mean', 'std', 'p05', 'median', 'p95', "
            "'new_cases_mean', 'new_cases_std']"
        ),
    )
    final_distribution: np.ndarray = Field(
        ..., description="Final-day total of every simulation (histogram input)"
    )
    initial_total: float = Field(..., ge=0.0)
    num_simulations: int = Field(..., gt=0)
    prediction_days: int = Field(..., gt=0)
    risk_threshold: float = Field(..., description="Final-day total treated as high risk")
    risk_probability: float = Field(..., ge=0.0, le=1.0)
    best_case: float = Field(..., description="Lowest final-day total in the ensemble")
    worst_case: float = Field(..., description="Highest final-day total in the ensemble")

    def final_day(self) -> Dict[str, float]:
        """Statistics for the last day of the horizon."""
        row = self.daily.iloc[-1]
        return {
            "mean": float(row["mean"]),
            "median": float(row["median"]),
            "p05": float(row["p05"]),
            "p95": float(row["p95"]),
            "std": float(row["std"]),
        }


class ScenarioResult(BaseModel):
    """Mean trajectory of one sensitivity scenario."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    scenario_id: str = Field(..., description="Scenario identifier")
    label: str = Field(..., description="Display label, e.g. 'Conservative'")
    multiplier: float = Field(..., description="Factor applied to the base mean growth rate")
    mean_growth_rate: float = Field(..., description="Effective mean growth rate of the scenario")
    num_runs: int = Field(..., gt=0)
    mean_trajectory: np.ndarray = Field(
        ..., description="Per-day mean cumulative total across the scenario runs"
    )


class ForecastResults(BaseModel):
    """Everything a forecast run exposes to presentation layers."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    parameters: EstimatedParameters
    summary: SummaryStatistics
    future_dates: pd.DatetimeIndex
    scenarios: List[ScenarioResult] = Field(default_factory=list)
    percentile_ladder: Optional[pd.DataFrame] = None
    validation: Dict[str, Any] = Field(default_factory=dict)
    metadata: Dict[str, Any] = Field(default_factory=dict)

    def prediction_frame(self) -> pd.DataFrame:
        """Per-day statistics indexed by calendar date."""
        frame = self.summary.daily.copy()
        frame.insert(0, "date", self.future_dates)
        return frame

    def scenario_frame(self) -> pd.DataFrame:
        """Scenario mean trajectories side by side, one column per label."""
        if not self.scenarios:
            return pd.DataFrame()
        horizon = len(self.scenarios[0].mean_trajectory)
        payload: Dict[str, Any] = {"day": np.arange(1, horizon + 1)}
        for scenario in self.scenarios:
            payload[scenario.label] = scenario.mean_trajectory
        return pd.DataFrame(payload)
