"""Typer-based command line interface for running case forecasts."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

import typer
from rich.console import Console
from rich.progress import BarColumn, Progress, TextColumn
from rich.table import Table

from ..config import (
    DEFAULT_FIELD_MAP,
    DEFAULT_NUM_SIMULATIONS,
    DEFAULT_PREDICTION_DAYS,
    DEFAULT_RANDOM_SEED,
    OUTPUT_ROOT,
)
from ..core.monte_carlo import MonteCarloConfig
from ..core.validator import ForecastError
from ..engine import ForecastEngine
from ..models.parameters import EstimatedParameters
from ..models.results import ForecastResults

app = typer.Typer(help="Monte Carlo forecasting of epidemic case counts")
console = Console()


@app.callback()
def cli() -> None:
    """Case forecasting commands."""


def _format_count(value: Optional[float]) -> str:
    """Format case counts for console output."""
    return f"{value:,.0f}" if value is not None else "N/A"


def _print_parameters(params: EstimatedParameters) -> None:
    console.print("\n[bold]Historical Parameters[/bold]")
    console.print(
        f"Mean daily growth rate: {params.mean_growth_rate:.4f} ± {params.std_growth_rate:.4f} "
        f"({params.growth_sample_size} increasing day pairs)"
    )
    console.print(
        f"Mean new cases per day: {params.mean_new_cases:.1f} ± {params.std_new_cases:.1f} "
        f"({params.new_case_sample_size} days)"
    )


def _print_summary(results: ForecastResults) -> None:
    """Print final-day predictions and risk analysis."""
    summary = results.summary
    final = summary.final_day()
    horizon = summary.prediction_days

    console.print("\n[bold]=== MONTE CARLO SIMULATION RESULTS ===[/bold]")
    console.print(f"Prediction Period: {horizon} days")
    console.print(f"Number of Simulations: {summary.num_simulations}")
    console.print(f"Current Total Cases: {_format_count(summary.initial_total)}")

    table = Table(title=f"{horizon}-Day Predictions", show_lines=False)
    table.add_column("Statistic")
    table.add_column("Total Cases", justify="right")
    table.add_row("Mean", _format_count(final["mean"]))
    table.add_row("Median", _format_count(final["median"]))
    table.add_row("5th percentile", _format_count(final["p05"]))
    table.add_row("95th percentile", _format_count(final["p95"]))
    table.add_row("Best case", _format_count(summary.best_case))
    table.add_row("Worst case", _format_count(summary.worst_case))
    console.print(table)

    console.print(
        f"Probability of exceeding {_format_count(summary.risk_threshold)} cases: "
        f"{summary.risk_probability * 100:.1f}%"
    )


def _print_scenarios(results: ForecastResults) -> None:
    if not results.scenarios:
        return
    table = Table(title="Sensitivity Analysis", show_lines=False)
    table.add_column("Scenario")
    table.add_column("Multiplier", justify="right")
    table.add_column("Mean Growth", justify="right")
    table.add_column("Final Mean Total", justify="right")
    for scenario in results.scenarios:
        table.add_row(
            scenario.label,
            f"{scenario.multiplier:g}",
            f"{scenario.mean_growth_rate:.4f}",
            _format_count(float(scenario.mean_trajectory[-1])),
        )
    console.print(table)


def _export_charts(engine: ForecastEngine, results: ForecastResults, plots_dir: Path) -> Dict[str, Path]:
    # matplotlib and plotly are only imported when charts are requested.
    from ..visualization import (
        build_fan_chart,
        plot_forecast_overview,
        plot_sensitivity_scenarios,
        save_figure,
    )

    assert engine.series is not None
    paths: Dict[str, Path] = {}
    paths["overview"] = save_figure(
        plot_forecast_overview(engine.series, results), plots_dir / "forecast_overview.png"
    )
    if results.scenarios:
        paths["sensitivity"] = save_figure(
            plot_sensitivity_scenarios(results), plots_dir / "sensitivity_scenarios.png"
        )
    fan_path = plots_dir / "fan_chart.html"
    build_fan_chart(results, history=engine.series).write_html(str(fan_path))
    paths["fan_chart"] = fan_path
    return paths


@app.command()
def forecast(
    file_path: Path = typer.Argument(..., help="CSV file with daily case reports"),
    simulations: int = typer.Option(DEFAULT_NUM_SIMULATIONS, help="Number of Monte Carlo runs"),
    days: int = typer.Option(DEFAULT_PREDICTION_DAYS, help="Prediction horizon in days"),
    seed: int = typer.Option(
        DEFAULT_RANDOM_SEED, help="Random seed (EPIFORECAST_SEED overrides the default)"
    ),
    no_seed: bool = typer.Option(
        False, "--no-seed", help="Draw fresh OS entropy instead of a fixed seed"
    ),
    date_column: str = typer.Option(DEFAULT_FIELD_MAP["date"], help="Column holding the report date"),
    total_column: str = typer.Option(
        DEFAULT_FIELD_MAP["total_cases"], help="Column holding cumulative confirmed cases"
    ),
    new_column: str = typer.Option(
        DEFAULT_FIELD_MAP["new_cases"], help="Column holding daily new confirmed cases"
    ),
    skip_sensitivity: bool = typer.Option(False, help="Skip the growth scenario sweep"),
    plots: bool = typer.Option(False, help="Render charts to the output directory"),
    output_dir: Path = typer.Option(OUTPUT_ROOT, help="Directory for rendered charts"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable INFO logging"),
) -> None:
    """Estimate parameters from history and project case totals."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if not file_path.exists():
        raise typer.BadParameter(f"File not found: {file_path}")

    field_map = {"date": date_column, "total_cases": total_column, "new_cases": new_column}
    try:
        config = MonteCarloConfig(
            num_simulations=simulations,
            prediction_days=days,
            random_seed=None if no_seed else seed,
        )
        engine = ForecastEngine(config)
        if skip_sensitivity:
            engine.set_sensitivity_config(None)
        load_result = engine.load_data(str(file_path), field_map)
        console.print(f"Data loaded: {len(load_result.series)} days of case data")
        if load_result.dropped_rows:
            console.print(f"[yellow]Skipped {load_result.dropped_rows} invalid rows.[/yellow]")

        _print_parameters(engine.estimate())

        with Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TextColumn("{task.completed}/{task.total}"),
            console=console,
            transient=True,
        ) as progress:
            task = progress.add_task("Simulating", total=simulations)
            results = engine.run_forecast(
                progress_callback=lambda done, _total, _msg: progress.update(task, completed=done)
            )
    except ForecastError as exc:
        console.print(f"[red]Forecast failed: {exc}[/red]")
        raise typer.Exit(code=1) from exc

    _print_summary(results)
    _print_scenarios(results)

    if plots:
        chart_paths = _export_charts(engine, results, output_dir)
        console.print("Generated charts:")
        for name, path in chart_paths.items():
            console.print(f"  - {name}: {path}")
    console.print("\n[bold green]Simulation completed successfully![/bold green]")


def main() -> None:
    """Entry point for CLI execution."""
    app()


if __name__ == "__main__":
    main()
