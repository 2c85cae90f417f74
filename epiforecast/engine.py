"""High-level orchestration for the case forecasting engine."""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

import numpy as np
import pandas as pd

from .core.data_loader import DataLoader, LoadResult
from .core.ensemble import Ensemble, ProgressObserver, run_ensemble
from .core.estimator import estimate_parameters
from .core.monte_carlo import MonteCarloConfig, build_percentile_table, future_dates
from .core.monte_carlo_validation import validate_case_paths, validate_distribution
from .core.scenario_generator import assemble_growth_scenarios
from .core.sensitivity import SensitivityConfig, run_sensitivity_sweep
from .core.summarizer import summarize_ensemble
from .core.validator import EstimationError, InvalidInputError
from .models.parameters import EstimatedParameters
from .models.results import ForecastResults
from .models.scenario import ScenarioSet
from .models.series import HistoricalSeries

LOGGER = logging.getLogger(__name__)


class ForecastEngine:
    """Primary entry point for configuring and running a case forecast."""

    def __init__(self, config: Optional[MonteCarloConfig] = None) -> None:
        self.series: Optional[HistoricalSeries] = None
        self._config = config or MonteCarloConfig()
        self._sensitivity_config: Optional[SensitivityConfig] = SensitivityConfig(
            horizon_days=self._config.prediction_days
        )
        self._scenario_set: ScenarioSet = assemble_growth_scenarios()
        self._parameters: Optional[EstimatedParameters] = None
        self._ensemble: Optional[Ensemble] = None

    # --------------------------------------------------------------------- Data
    def load_data(self, file_path: str, field_map: Optional[Dict[str, str]] = None) -> LoadResult:
        """Load the historical series from CSV."""
        result = DataLoader().load_series(file_path, field_map)
        self.set_series(result.series)
        return result

    def load_dataframe(
        self, dataframe: pd.DataFrame, field_map: Optional[Dict[str, str]] = None
    ) -> LoadResult:
        """Load the historical series from an existing dataframe."""
        result = DataLoader().load_series_from_dataframe(dataframe, field_map)
        self.set_series(result.series)
        return result

    def set_series(self, series: HistoricalSeries) -> None:
        """Register a validated series; clears any cached estimates."""
        self.series = series
        self._parameters = None
        self._ensemble = None

    # ------------------------------------------------------------ Configuration
    def set_monte_carlo_config(self, config: MonteCarloConfig) -> None:
        """Register the simulation settings; the sweep follows the new horizon."""
        self._config = config
        self._ensemble = None
        if self._sensitivity_config is not None:
            self._sensitivity_config.horizon_days = config.prediction_days

    def monte_carlo_config(self) -> MonteCarloConfig:
        return self._config

    def set_sensitivity_config(self, config: Optional[SensitivityConfig]) -> None:
        """Configure the what-if sweep; ``None`` disables it."""
        self._sensitivity_config = config

    def set_scenarios(self, scenario_set: ScenarioSet) -> None:
        if not len(scenario_set):
            raise InvalidInputError("Scenario set must contain at least one scenario")
        self._scenario_set = scenario_set

    # --------------------------------------------------------------- Execution
    def estimate(self) -> EstimatedParameters:
        """Estimate (and cache) the simulation parameters."""
        if self.series is None:
            raise InvalidInputError("No historical series loaded.")
        if self._parameters is None:
            self._parameters = estimate_parameters(self.series)
        return self._parameters

    def ensemble(self) -> Ensemble:
        """Return the most recent ensemble."""
        if self._ensemble is None:
            raise ValueError("No ensemble available; call run_forecast() first.")
        return self._ensemble

    def run_forecast(
        self,
        progress_observer: Optional[ProgressObserver] = None,
        progress_callback: Optional[Callable[[int, int, str], None]] = None,
    ) -> ForecastResults:
        """Estimate, simulate, summarise and sweep."""
        params = self.estimate()
        assert self.series is not None
        config = self._config
        initial_total = self.series.initial_total

        def observer(event) -> None:
            if progress_observer:
                progress_observer(event)
            if progress_callback:
                progress_callback(
                    event.completed,
                    event.total,
                    f"Completed {event.completed}/{event.total} simulations",
                )

        root_seed = np.random.SeedSequence(config.random_seed)
        ensemble_seed, sweep_seed = root_seed.spawn(2)

        ensemble = run_ensemble(
            initial_total,
            params,
            config,
            seed_sequence=ensemble_seed,
            progress_observer=observer,
        )

        path_check = validate_case_paths(
            ensemble.totals, ensemble.daily_new, initial_total=initial_total
        )
        if path_check.status != "PASS":
            raise EstimationError(
                "Simulated ensemble failed validation: " + ", ".join(path_check.failed_checks)
            )
        self._ensemble = ensemble

        LOGGER.info("Analyzing Monte Carlo results")
        summary = summarize_ensemble(ensemble, initial_total)
        dist_check = validate_distribution(summary.final_distribution, initial_total=initial_total)
        for warning in list(path_check.warnings) + list(dist_check.warnings):
            LOGGER.warning("Ensemble validation warning: %s", warning)

        scenarios = []
        if self._sensitivity_config is not None:
            scenarios = run_sensitivity_sweep(
                params.mean_growth_rate,
                params.std_growth_rate,
                initial_total,
                self._sensitivity_config,
                scenarios=self._scenario_set,
                seed_sequence=sweep_seed,
            )

        metadata = {
            "config": config.to_metadata(),
            "history_days": len(self.series),
            "last_date": self.series.last_date.isoformat(),
        }
        if self._sensitivity_config is not None:
            metadata["sensitivity"] = self._sensitivity_config.to_metadata()

        return ForecastResults(
            parameters=params,
            summary=summary,
            future_dates=future_dates(self.series.last_date, config.prediction_days),
            scenarios=scenarios,
            percentile_ladder=build_percentile_table(summary.final_distribution),
            validation={
                "paths": path_check.to_dict(),
                "distribution": dist_check.to_dict(),
            },
            metadata=metadata,
        )


__all__ = ["ForecastEngine"]
