"""Matplotlib charts for case forecasts."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import matplotlib.pyplot as plt
from matplotlib.ticker import FuncFormatter
import numpy as np

from ..models.results import ForecastResults
from ..models.series import HistoricalSeries

SCENARIO_COLORS = ["#1F4788", "#FF5252", "#06A77D", "#FF6F00", "#757575"]


def _count_formatter() -> FuncFormatter:
    return FuncFormatter(lambda value, _pos: f"{value:,.0f}")


def plot_forecast_overview(
    history: HistoricalSeries,
    results: ForecastResults,
    *,
    bins: int = 30,
) -> plt.Figure:
    """
    Four-panel overview of a forecast.

    Panels: history with mean prediction and 5th-95th band, daily new
    cases with a one-std band, prediction std by horizon day, and the
    final-day distribution.
    """
    daily = results.summary.daily
    dates = results.future_dates
    days = daily["day"].to_numpy()
    horizon = results.summary.prediction_days

    fig, axes = plt.subplots(2, 2, figsize=(12, 8))
    ax1, ax2, ax3, ax4 = axes.ravel()

    ax1.plot(history.dates, history.total_cases, color="blue", linewidth=2, label="Historical Data")
    ax1.plot(dates, daily["mean"], color="red", linewidth=2, label="Mean Prediction")
    ax1.fill_between(
        dates,
        daily["p05"].to_numpy(),
        daily["p95"].to_numpy(),
        color="red",
        alpha=0.2,
        linewidth=0,
        label="90% Confidence Interval",
    )
    ax1.set_xlabel("Date")
    ax1.set_ylabel("Total Confirmed Cases")
    ax1.set_title("Cases: Historical Data and Monte Carlo Prediction")
    ax1.yaxis.set_major_formatter(_count_formatter())
    ax1.legend(loc="upper left")

    new_mean = daily["new_cases_mean"].to_numpy()
    new_std = daily["new_cases_std"].to_numpy()
    ax2.plot(dates, new_mean, color="green", linewidth=2, label="Mean Prediction")
    ax2.fill_between(
        dates,
        new_mean - new_std,
        new_mean + new_std,
        color="green",
        alpha=0.2,
        linewidth=0,
        label="±1 Standard Deviation",
    )
    ax2.set_xlabel("Date")
    ax2.set_ylabel("Daily New Cases")
    ax2.set_title("Predicted Daily New Cases")
    ax2.legend(loc="best")

    ax3.plot(days, daily["std"], "mo-", linewidth=2)
    ax3.set_xlabel("Days into Future")
    ax3.set_ylabel("Standard Deviation")
    ax3.set_title("Prediction Uncertainty Over Time")

    ax4.hist(results.summary.final_distribution, bins=bins, color="cyan", alpha=0.7, edgecolor="#424242")
    ax4.set_xlabel(f"Total Cases after {horizon} days")
    ax4.set_ylabel("Frequency")
    ax4.set_title(f"Distribution of {horizon}-day Predictions")
    ax4.xaxis.set_major_formatter(_count_formatter())

    for ax in axes.ravel():
        ax.grid(True, alpha=0.3)
    fig.autofmt_xdate()
    fig.tight_layout()
    return fig


def plot_sensitivity_scenarios(
    results: ForecastResults,
    *,
    title: str = "Sensitivity Analysis: Different Growth Rate Scenarios",
) -> plt.Figure:
    """Mean trajectory of each growth scenario by horizon day."""
    if not results.scenarios:
        raise ValueError("Sensitivity results are required")

    fig, ax = plt.subplots(figsize=(10, 6))
    for index, scenario in enumerate(results.scenarios):
        days = np.arange(1, len(scenario.mean_trajectory) + 1)
        ax.plot(
            days,
            scenario.mean_trajectory,
            color=SCENARIO_COLORS[index % len(SCENARIO_COLORS)],
            linewidth=2,
            label=f"{scenario.label} (×{scenario.multiplier:g})",
        )
    ax.set_xlabel("Days into Future")
    ax.set_ylabel("Total Cases")
    ax.set_title(title, fontsize=14, fontweight="bold")
    ax.yaxis.set_major_formatter(_count_formatter())
    ax.legend(loc="upper left")
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    return fig


def save_figure(fig: plt.Figure, output_path: Path, *, dpi: Optional[int] = 150) -> Path:
    """Persist matplotlib figure to disk."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=dpi, bbox_inches="tight")
    plt.close(fig)
    return output_path


__all__ = ["plot_forecast_overview", "plot_sensitivity_scenarios", "save_figure"]
