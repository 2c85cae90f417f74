"""Factory helpers for standard growth scenarios."""

from __future__ import annotations

from typing import Dict, Optional

from ..models.scenario import GrowthScenario, ScenarioSet

STANDARD_MULTIPLIERS: Dict[str, float] = {
    "Conservative": 0.5,
    "Expected": 1.0,
    "Aggressive": 1.5,
}


def build_growth_scenario(label: str, multiplier: float) -> GrowthScenario:
    """Create a scenario scaling the mean growth rate by ``multiplier``."""
    return GrowthScenario(
        scenario_id=label.strip().lower().replace(" ", "_"),
        label=label,
        multiplier=multiplier,
    )


def assemble_growth_scenarios(
    multipliers: Optional[Dict[str, float]] = None,
) -> ScenarioSet:
    """Build the ordered scenario set; defaults to conservative/expected/aggressive."""
    scenario_set = ScenarioSet()
    for label, multiplier in (multipliers or STANDARD_MULTIPLIERS).items():
        scenario_set.add(build_growth_scenario(label, multiplier))
    return scenario_set


__all__ = ["STANDARD_MULTIPLIERS", "assemble_growth_scenarios", "build_growth_scenario"]
