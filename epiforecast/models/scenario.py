"""Growth scenario data models."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class GrowthScenario(BaseModel):
    """A what-if assumption that scales the estimated mean growth rate."""

    scenario_id: str = Field(..., description="Unique scenario identifier")
    label: str = Field(..., description="Human-readable scenario name")
    multiplier: float = Field(..., ge=0.0, description="Factor applied to mean growth")

    def growth_rate(self, base_mean_growth: float) -> float:
        """Return the scenario's mean growth rate."""
        return base_mean_growth * self.multiplier


class ScenarioSet(BaseModel):
    """Ordered container of scenarios to sweep."""

    scenarios: List[GrowthScenario] = Field(
        default_factory=list, description="Scenarios to evaluate"
    )

    def add(self, scenario: GrowthScenario) -> None:
        """Register a new scenario."""
        if any(s.scenario_id == scenario.scenario_id for s in self.scenarios):
            raise ValueError(f"Scenario {scenario.scenario_id!r} already exists")
        self.scenarios.append(scenario)

    def get(self, scenario_id: str) -> GrowthScenario:
        """Fetch a scenario by identifier."""
        for scenario in self.scenarios:
            if scenario.scenario_id == scenario_id:
                return scenario
        raise KeyError(f"Scenario {scenario_id!r} not found")

    def __len__(self) -> int:
        return len(self.scenarios)
