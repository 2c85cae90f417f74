import tempfile
import unittest
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import numpy as np  # noqa: E402
import plotly.graph_objects as go  # noqa: E402

from epiforecast.core.monte_carlo import MonteCarloConfig  # noqa: E402
from epiforecast.engine import ForecastEngine  # noqa: E402
from epiforecast.models.series import HistoricalSeries  # noqa: E402
from epiforecast.visualization import (  # noqa: E402
    build_fan_chart,
    plot_forecast_overview,
    plot_sensitivity_scenarios,
    save_figure,
)


class ForecastPlotTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        totals = np.round(800.0 * 1.04 ** np.arange(30)) + np.arange(30)
        cls.series = HistoricalSeries.from_counts(totals)
        engine = ForecastEngine(MonteCarloConfig(num_simulations=60, prediction_days=10, random_seed=8))
        engine.set_series(cls.series)
        cls.results = engine.run_forecast()

    def test_overview_has_four_panels(self) -> None:
        fig = plot_forecast_overview(self.series, self.results)
        self.assertEqual(len(fig.axes), 4)
        self.assertIn("10-day", fig.axes[3].get_title())

    def test_sensitivity_chart_has_one_line_per_scenario(self) -> None:
        fig = plot_sensitivity_scenarios(self.results)
        self.assertEqual(len(fig.axes[0].get_lines()), 3)

    def test_save_figure_writes_file(self) -> None:
        fig = plot_sensitivity_scenarios(self.results)
        with tempfile.TemporaryDirectory() as tmp:
            path = save_figure(fig, Path(tmp) / "charts" / "sensitivity.png", dpi=50)
            self.assertTrue(path.exists())

    def test_fan_chart_traces(self) -> None:
        figure = build_fan_chart(self.results, history=self.series)
        self.assertIsInstance(figure, go.Figure)
        self.assertEqual([trace.name for trace in figure.data], ["Historical", "P95", "P05 to P95", "Median", "Mean"])


if __name__ == "__main__":
    unittest.main()
