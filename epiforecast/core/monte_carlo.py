"""Monte Carlo configuration and stochastic case path generation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterable, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from ..config import (
    DEFAULT_NUM_SIMULATIONS,
    DEFAULT_PREDICTION_DAYS,
    DEFAULT_PROGRESS_INTERVAL,
    DEFAULT_RANDOM_SEED,
)
from ..models.parameters import EstimatedParameters
from .validator import InvalidInputError, validate_initial_total, validate_positive_int


class NewCaseStrategy(str, Enum):
    """Models that can produce a day's new cases."""

    GROWTH = "growth"    # current total times |growth draw|
    AVERAGE = "average"  # historical new-case draw


@dataclass
class MonteCarloConfig:
    """Configuration bundle for the main case simulation."""

    num_simulations: int = DEFAULT_NUM_SIMULATIONS
    prediction_days: int = DEFAULT_PREDICTION_DAYS
    random_seed: Optional[int] = DEFAULT_RANDOM_SEED
    growth_clamp: Tuple[float, float] = (-0.10, 0.30)
    growth_model_probability: float = 0.70
    noise_std: float = 0.10
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL

    def __post_init__(self) -> None:
        self.num_simulations = validate_positive_int(self.num_simulations, "num_simulations")
        self.prediction_days = validate_positive_int(self.prediction_days, "prediction_days")
        self.progress_interval = validate_positive_int(self.progress_interval, "progress_interval")
        low, high = (float(v) for v in self.growth_clamp)
        if low > high:
            raise InvalidInputError(f"growth_clamp lower bound {low} exceeds upper bound {high}")
        self.growth_clamp = (low, high)
        if not 0.0 <= self.growth_model_probability <= 1.0:
            raise InvalidInputError("growth_model_probability must lie in [0, 1]")
        if self.noise_std < 0:
            raise InvalidInputError("noise_std must be non-negative")

    def to_metadata(self) -> Dict[str, object]:
        """Serialise into plain metadata for result bundles."""
        return {
            "num_simulations": int(self.num_simulations),
            "prediction_days": int(self.prediction_days),
            "random_seed": self.random_seed,
            "growth_clamp": list(self.growth_clamp),
            "growth_model_probability": float(self.growth_model_probability),
            "noise_std": float(self.noise_std),
            "progress_interval": int(self.progress_interval),
        }

    @classmethod
    def from_metadata(cls, metadata: Dict[str, object]) -> "MonteCarloConfig":
        """Rehydrate a configuration from metadata."""
        clamp = metadata.get("growth_clamp", (-0.10, 0.30))
        return MonteCarloConfig(
            num_simulations=int(metadata.get("num_simulations", DEFAULT_NUM_SIMULATIONS)),
            prediction_days=int(metadata.get("prediction_days", DEFAULT_PREDICTION_DAYS)),
            random_seed=metadata.get("random_seed", DEFAULT_RANDOM_SEED),
            growth_clamp=(float(clamp[0]), float(clamp[1])),
            growth_model_probability=float(metadata.get("growth_model_probability", 0.70)),
            noise_std=float(metadata.get("noise_std", 0.10)),
            progress_interval=int(metadata.get("progress_interval", DEFAULT_PROGRESS_INTERVAL)),
        )


@dataclass(frozen=True, eq=False)
class SimulationPath:
    """One simulated future: cumulative totals and new cases per day."""

    totals: np.ndarray
    daily_new: np.ndarray
    strategies: Tuple[NewCaseStrategy, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return int(self.totals.size)

    def pairs(self) -> Iterable[Tuple[float, float]]:
        """Yield ``(current_total, daily_new)`` for each day."""
        return zip(self.totals.tolist(), self.daily_new.tolist())


def _growth_estimate(current_total: float, growth: float, new_cases_draw: float) -> float:
    return current_total * abs(growth)


def _average_estimate(current_total: float, growth: float, new_cases_draw: float) -> float:
    return new_cases_draw


NEW_CASE_ESTIMATORS: Dict[NewCaseStrategy, Callable[[float, float, float], float]] = {
    NewCaseStrategy.GROWTH: _growth_estimate,
    NewCaseStrategy.AVERAGE: _average_estimate,
}


def choose_strategy(rng: np.random.Generator, growth_probability: float) -> NewCaseStrategy:
    """Draw the new-case model for one day; growth wins with ``growth_probability``."""
    if rng.random() < growth_probability:
        return NewCaseStrategy.GROWTH
    return NewCaseStrategy.AVERAGE


def simulate_path(
    initial_total: float,
    horizon_days: int,
    params: EstimatedParameters,
    rng: np.random.Generator,
    config: Optional[MonteCarloConfig] = None,
) -> SimulationPath:
    """
    Generate a single stochastic case trajectory.

    Each day draws, in order: a growth rate (clamped to
    ``config.growth_clamp``), a non-negative new-case count, the model
    choice, and a multiplicative noise factor ``1 + N(0, noise_std)``.
    New cases are floored at zero so totals never decrease.
    """
    config = config or MonteCarloConfig()
    current_total = validate_initial_total(initial_total)
    horizon_days = validate_positive_int(horizon_days, "horizon_days")
    low, high = config.growth_clamp

    totals = np.empty(horizon_days, dtype=float)
    daily_new = np.empty(horizon_days, dtype=float)
    strategies = []

    for day in range(horizon_days):
        random_growth = rng.normal(params.mean_growth_rate, params.std_growth_rate)
        random_new_cases = max(0.0, rng.normal(params.mean_new_cases, params.std_new_cases))
        random_growth = min(max(random_growth, low), high)

        strategy = choose_strategy(rng, config.growth_model_probability)
        new_cases_today = NEW_CASE_ESTIMATORS[strategy](current_total, random_growth, random_new_cases)

        noise_factor = 1.0 + rng.normal(0.0, config.noise_std)
        new_cases_today = max(0.0, new_cases_today * noise_factor)

        current_total += new_cases_today
        totals[day] = current_total
        daily_new[day] = new_cases_today
        strategies.append(strategy)

    return SimulationPath(totals=totals, daily_new=daily_new, strategies=tuple(strategies))


def future_dates(last_date: pd.Timestamp, prediction_days: int) -> pd.DatetimeIndex:
    """Calendar dates for horizon days 1..N after ``last_date``."""
    prediction_days = validate_positive_int(prediction_days, "prediction_days")
    start = pd.Timestamp(last_date) + pd.Timedelta(days=1)
    return pd.date_range(start=start, periods=prediction_days, freq="D")


def build_percentile_table(
    values: Sequence[float],
    *,
    percentiles: Iterable[int] = range(5, 100, 5),
) -> pd.DataFrame:
    """Return a percentile ladder of final-day totals as a dataframe."""
    array = np.asarray(values, dtype=float)
    ladder = [
        {"percentile": p, "total_cases": float(np.percentile(array, p))}
        for p in percentiles
    ]
    return pd.DataFrame(ladder)


__all__ = [
    "MonteCarloConfig",
    "NEW_CASE_ESTIMATORS",
    "NewCaseStrategy",
    "SimulationPath",
    "build_percentile_table",
    "choose_strategy",
    "future_dates",
    "simulate_path",
]
