"""Visualization utilities for case forecasts."""

from __future__ import annotations

from .fan_chart import build_fan_chart
from .forecast_plots import plot_forecast_overview, plot_sensitivity_scenarios, save_figure

__all__ = [
    "build_fan_chart",
    "plot_forecast_overview",
    "plot_sensitivity_scenarios",
    "save_figure",
]
