"""Growth-rate sensitivity sweep.

The sweep uses a deliberately lighter recurrence than the main simulator:
growth draws only, a narrower noise band and tighter clamp, no model
mixture and no multiplicative noise.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np

from ..models.results import ScenarioResult
from ..models.scenario import GrowthScenario, ScenarioSet
from .ensemble import spawn_run_generators
from .scenario_generator import assemble_growth_scenarios
from .validator import InvalidInputError, validate_initial_total, validate_positive_int

LOGGER = logging.getLogger(__name__)


@dataclass
class SensitivityConfig:
    """Settings for the what-if sweep."""

    runs_per_scenario: int = 100
    horizon_days: int = 30
    std_scale: float = 0.5
    growth_clamp: Tuple[float, float] = (-0.05, 0.20)
    random_seed: Optional[int] = None

    def __post_init__(self) -> None:
        self.runs_per_scenario = validate_positive_int(self.runs_per_scenario, "runs_per_scenario")
        self.horizon_days = validate_positive_int(self.horizon_days, "horizon_days")
        if self.std_scale < 0:
            raise InvalidInputError("std_scale must be non-negative")
        low, high = (float(v) for v in self.growth_clamp)
        if low > high:
            raise InvalidInputError(f"growth_clamp lower bound {low} exceeds upper bound {high}")
        self.growth_clamp = (low, high)

    def to_metadata(self) -> Dict[str, object]:
        return {
            "runs_per_scenario": int(self.runs_per_scenario),
            "horizon_days": int(self.horizon_days),
            "std_scale": float(self.std_scale),
            "growth_clamp": list(self.growth_clamp),
            "random_seed": self.random_seed,
        }


def simulate_growth_only_path(
    initial_total: float,
    horizon_days: int,
    mean_growth_rate: float,
    growth_std: float,
    rng: np.random.Generator,
    growth_clamp: Tuple[float, float] = (-0.05, 0.20),
) -> np.ndarray:
    """Compound ``total += total * |g|`` with a clamped normal ``g`` each day."""
    low, high = growth_clamp
    current_total = float(initial_total)
    trajectory = np.empty(horizon_days, dtype=float)
    for day in range(horizon_days):
        random_growth = rng.normal(mean_growth_rate, growth_std)
        random_growth = min(max(random_growth, low), high)
        current_total += current_total * abs(random_growth)
        trajectory[day] = current_total
    return trajectory


def run_scenario(
    scenario: GrowthScenario,
    base_mean_growth: float,
    std_growth_rate: float,
    initial_total: float,
    config: SensitivityConfig,
    seed_sequence: np.random.SeedSequence,
) -> ScenarioResult:
    """Simulate one scenario and average its runs day by day."""
    mean_growth = scenario.growth_rate(base_mean_growth)
    growth_std = std_growth_rate * config.std_scale
    runs = np.empty((config.runs_per_scenario, config.horizon_days), dtype=float)
    for run_index, rng in enumerate(spawn_run_generators(config.runs_per_scenario, seed_sequence)):
        runs[run_index, :] = simulate_growth_only_path(
            initial_total,
            config.horizon_days,
            mean_growth,
            growth_std,
            rng,
            config.growth_clamp,
        )
    return ScenarioResult(
        scenario_id=scenario.scenario_id,
        label=scenario.label,
        multiplier=scenario.multiplier,
        mean_growth_rate=mean_growth,
        num_runs=config.runs_per_scenario,
        mean_trajectory=runs.mean(axis=0),
    )


def run_sensitivity_sweep(
    mean_growth_rate: float,
    std_growth_rate: float,
    initial_total: float,
    config: Optional[SensitivityConfig] = None,
    *,
    scenarios: Optional[ScenarioSet] = None,
    seed_sequence: Optional[np.random.SeedSequence] = None,
) -> List[ScenarioResult]:
    """
    Re-run a small ensemble under each growth scenario.

    Returns one labelled mean trajectory per scenario, in scenario order.
    """
    config = config or SensitivityConfig()
    initial_total = validate_initial_total(initial_total)
    if not np.isfinite(mean_growth_rate) or not np.isfinite(std_growth_rate) or std_growth_rate < 0:
        raise InvalidInputError("Growth statistics must be finite with a non-negative std")
    if scenarios is None:
        scenarios = assemble_growth_scenarios()
    if not len(scenarios):
        raise InvalidInputError("Scenario set must contain at least one scenario")
    if seed_sequence is None:
        seed_sequence = np.random.SeedSequence(config.random_seed)

    LOGGER.info("Running sensitivity analysis over %d scenarios", len(scenarios))
    results: List[ScenarioResult] = []
    for scenario, child in zip(scenarios.scenarios, seed_sequence.spawn(len(scenarios))):
        result = run_scenario(
            scenario, mean_growth_rate, std_growth_rate, initial_total, config, child
        )
        LOGGER.info(
            "Scenario %s (growth %.4f): day %d mean %.0f",
            result.label,
            result.mean_growth_rate,
            config.horizon_days,
            float(result.mean_trajectory[-1]),
        )
        results.append(result)
    return results


__all__ = [
    "SensitivityConfig",
    "run_scenario",
    "run_sensitivity_sweep",
    "simulate_growth_only_path",
]
