"""Data models for Monte Carlo progress reporting."""

from __future__ import annotations

from dataclasses import dataclass, field

import time


@dataclass(frozen=True)
class SimulationProgressEvent:
    """
    Periodic progress update emitted while an ensemble is being generated.

    Observers receive the event after every ``progress_interval`` completed
    runs and once more when the batch finishes.
    """

    completed: int
    total: int
    running_final_mean: float
    timestamp: float = field(default_factory=time.time)

    @property
    def fraction(self) -> float:
        return self.completed / self.total if self.total else 1.0


__all__ = ["SimulationProgressEvent"]
