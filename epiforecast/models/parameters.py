"""Estimated simulation parameters."""

from __future__ import annotations

import math
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EstimatedParameters(BaseModel):
    """Growth-rate and new-case statistics derived once from history."""

    model_config = ConfigDict(frozen=True)

    mean_growth_rate: float = Field(..., description="Mean fractional daily growth")
    std_growth_rate: float = Field(..., ge=0.0, description="Sample std of daily growth")
    mean_new_cases: float = Field(..., ge=0.0, description="Mean of positive daily new cases")
    std_new_cases: float = Field(..., ge=0.0, description="Sample std of positive daily new cases")
    growth_sample_size: int = Field(
        0, ge=0, description="Number of strictly increasing day pairs used"
    )
    new_case_sample_size: int = Field(
        0, ge=0, description="Number of days with positive new cases used"
    )

    @field_validator(
        "mean_growth_rate", "std_growth_rate", "mean_new_cases", "std_new_cases"
    )
    @classmethod
    def _require_finite(cls, value: float) -> float:
        """NaN or infinite statistics must never reach the simulator."""
        if not math.isfinite(value):
            raise ValueError("parameter must be a finite number")
        return float(value)

    def with_overrides(self, **updates: Any) -> "EstimatedParameters":
        """Return a validated copy with selected fields replaced."""
        payload: Dict[str, Any] = self.model_dump()
        payload.update(updates)
        return EstimatedParameters(**payload)
