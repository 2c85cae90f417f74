"""Ensemble generation: many independent simulated case paths."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

import numpy as np

from ..models.monte_carlo import SimulationProgressEvent
from ..models.parameters import EstimatedParameters
from .monte_carlo import MonteCarloConfig, simulate_path
from .validator import validate_initial_total

LOGGER = logging.getLogger(__name__)

ProgressObserver = Callable[[SimulationProgressEvent], None]


@dataclass(eq=False)
class Ensemble:
    """
    Simulated trajectories, one row per run and one column per horizon day.

    Rows are reserved up front so each run writes only to its own slot.
    """

    totals: np.ndarray
    daily_new: np.ndarray

    @classmethod
    def allocate(cls, num_simulations: int, prediction_days: int) -> "Ensemble":
        shape = (num_simulations, prediction_days)
        return cls(totals=np.zeros(shape, dtype=float), daily_new=np.zeros(shape, dtype=float))

    @property
    def num_simulations(self) -> int:
        return int(self.totals.shape[0])

    @property
    def prediction_days(self) -> int:
        return int(self.totals.shape[1])

    def freeze(self) -> "Ensemble":
        """Mark both matrices read-only once the batch is complete."""
        self.totals.setflags(write=False)
        self.daily_new.setflags(write=False)
        return self


def spawn_run_generators(
    num_simulations: int, seed_sequence: np.random.SeedSequence
) -> List[np.random.Generator]:
    """One independent generator per run so trajectories stay uncorrelated."""
    return [np.random.default_rng(child) for child in seed_sequence.spawn(num_simulations)]


def _notify(observer: Optional[ProgressObserver], event: SimulationProgressEvent) -> None:
    if observer is None:
        return
    try:
        observer(event)
    except Exception as exc:
        LOGGER.warning("Progress observer failed at run %d: %s", event.completed, exc)


def run_ensemble(
    initial_total: float,
    params: EstimatedParameters,
    config: Optional[MonteCarloConfig] = None,
    *,
    seed_sequence: Optional[np.random.SeedSequence] = None,
    progress_observer: Optional[ProgressObserver] = None,
) -> Ensemble:
    """
    Run ``config.num_simulations`` independent path simulations.

    Any exception from a single run aborts the whole batch; a partial
    ensemble is never returned. Progress events go to ``progress_observer``
    every ``config.progress_interval`` runs and once at the end.
    """
    config = config or MonteCarloConfig()
    initial_total = validate_initial_total(initial_total)
    if seed_sequence is None:
        seed_sequence = np.random.SeedSequence(config.random_seed)

    num_simulations = config.num_simulations
    ensemble = Ensemble.allocate(num_simulations, config.prediction_days)
    generators = spawn_run_generators(num_simulations, seed_sequence)

    LOGGER.info("Running %d Monte Carlo simulations", num_simulations)
    for sim_index, rng in enumerate(generators):
        path = simulate_path(initial_total, config.prediction_days, params, rng, config)
        ensemble.totals[sim_index, :] = path.totals
        ensemble.daily_new[sim_index, :] = path.daily_new

        completed = sim_index + 1
        if completed % config.progress_interval == 0 or completed == num_simulations:
            running_mean = float(np.mean(ensemble.totals[:completed, -1]))
            LOGGER.info("Completed %d/%d simulations", completed, num_simulations)
            _notify(
                progress_observer,
                SimulationProgressEvent(
                    completed=completed,
                    total=num_simulations,
                    running_final_mean=running_mean,
                ),
            )

    return ensemble.freeze()


__all__ = ["Ensemble", "ProgressObserver", "run_ensemble", "spawn_run_generators"]
