import unittest

import numpy as np
import pandas as pd

from epiforecast.core.estimator import estimate_parameters
from epiforecast.core.monte_carlo import (
    MonteCarloConfig,
    NewCaseStrategy,
    build_percentile_table,
    choose_strategy,
    future_dates,
    simulate_path,
)
from epiforecast.core.validator import InvalidInputError
from epiforecast.models.parameters import EstimatedParameters
from epiforecast.models.series import HistoricalSeries


def _deterministic_config(growth_probability: float) -> MonteCarloConfig:
    return MonteCarloConfig(
        num_simulations=1,
        prediction_days=1,
        growth_model_probability=growth_probability,
        noise_std=0.0,
    )


class SimulatePathTests(unittest.TestCase):
    def setUp(self) -> None:
        self.params = EstimatedParameters(
            mean_growth_rate=0.05,
            std_growth_rate=0.03,
            mean_new_cases=400.0,
            std_new_cases=150.0,
        )

    def test_zero_variance_growth_branch(self) -> None:
        series = HistoricalSeries.from_counts([100, 120, 150])
        params = estimate_parameters(series).with_overrides(
            std_growth_rate=0.0, std_new_cases=0.0
        )
        self.assertAlmostEqual(params.mean_growth_rate, 0.225)

        path = simulate_path(
            150, 1, params, np.random.default_rng(0), _deterministic_config(1.0)
        )
        self.assertAlmostEqual(path.daily_new[0], 33.75)
        self.assertAlmostEqual(path.totals[0], 183.75)
        self.assertEqual(path.strategies, (NewCaseStrategy.GROWTH,))

    def test_zero_variance_average_branch(self) -> None:
        params = self.params.with_overrides(std_growth_rate=0.0, std_new_cases=0.0)
        path = simulate_path(
            1000, 3, params, np.random.default_rng(0), _deterministic_config(0.0)
        )
        np.testing.assert_allclose(path.daily_new, [400.0, 400.0, 400.0])
        np.testing.assert_allclose(path.totals, [1400.0, 1800.0, 2200.0])

    def test_growth_draw_is_clamped_above(self) -> None:
        params = self.params.with_overrides(mean_growth_rate=0.9, std_growth_rate=0.0)
        path = simulate_path(100, 1, params, np.random.default_rng(0), _deterministic_config(1.0))
        self.assertAlmostEqual(path.daily_new[0], 30.0)

    def test_negative_growth_is_clamped_and_mirrored(self) -> None:
        params = self.params.with_overrides(mean_growth_rate=-0.5, std_growth_rate=0.0)
        path = simulate_path(100, 1, params, np.random.default_rng(0), _deterministic_config(1.0))
        self.assertAlmostEqual(path.daily_new[0], 10.0)

    def test_totals_never_decrease(self) -> None:
        config = MonteCarloConfig(prediction_days=200)
        for seed in range(5):
            path = simulate_path(5000, 200, self.params, np.random.default_rng(seed), config)
            self.assertEqual(len(path), 200)
            self.assertTrue(np.all(path.daily_new >= 0))
            self.assertTrue(np.all(np.diff(path.totals) >= 0))
            self.assertGreaterEqual(path.totals[0], 5000)

    def test_same_draws_give_same_path(self) -> None:
        first = simulate_path(5000, 30, self.params, np.random.default_rng(7))
        second = simulate_path(5000, 30, self.params, np.random.default_rng(7))
        np.testing.assert_array_equal(first.totals, second.totals)
        np.testing.assert_array_equal(first.daily_new, second.daily_new)
        self.assertEqual(first.strategies, second.strategies)

    def test_pairs_follow_day_order(self) -> None:
        path = simulate_path(5000, 4, self.params, np.random.default_rng(1))
        pairs = list(path.pairs())
        self.assertEqual(len(pairs), 4)
        self.assertEqual(pairs[-1][0], path.totals[-1])

    def test_invalid_inputs_are_rejected(self) -> None:
        rng = np.random.default_rng(0)
        with self.assertRaises(InvalidInputError):
            simulate_path(100, 0, self.params, rng)
        with self.assertRaises(InvalidInputError):
            simulate_path(-1, 5, self.params, rng)


class StrategySamplerTests(unittest.TestCase):
    def test_mixture_frequency(self) -> None:
        rng = np.random.default_rng(123)
        draws = [choose_strategy(rng, 0.7) for _ in range(20000)]
        share = draws.count(NewCaseStrategy.GROWTH) / len(draws)
        self.assertAlmostEqual(share, 0.7, delta=0.02)

    def test_degenerate_probabilities(self) -> None:
        rng = np.random.default_rng(0)
        self.assertEqual(choose_strategy(rng, 1.0), NewCaseStrategy.GROWTH)
        self.assertEqual(choose_strategy(rng, 0.0), NewCaseStrategy.AVERAGE)


class MonteCarloConfigTests(unittest.TestCase):
    def test_defaults(self) -> None:
        config = MonteCarloConfig(random_seed=42)
        self.assertEqual(config.growth_clamp, (-0.10, 0.30))
        self.assertAlmostEqual(config.growth_model_probability, 0.70)
        self.assertAlmostEqual(config.noise_std, 0.10)

    def test_non_positive_sizes_are_rejected(self) -> None:
        with self.assertRaises(InvalidInputError):
            MonteCarloConfig(num_simulations=0)
        with self.assertRaises(InvalidInputError):
            MonteCarloConfig(prediction_days=-3)

    def test_non_integer_sizes_are_rejected(self) -> None:
        for bad in (float("nan"), float("inf"), None, "abc", 2.5, True):
            with self.subTest(value=bad):
                with self.assertRaises(InvalidInputError):
                    MonteCarloConfig(num_simulations=bad)

    def test_integral_float_size_is_accepted(self) -> None:
        self.assertEqual(MonteCarloConfig(num_simulations=200.0).num_simulations, 200)

    def test_metadata_restores_config(self) -> None:
        config = MonteCarloConfig(num_simulations=250, prediction_days=14, random_seed=9)
        restored = MonteCarloConfig.from_metadata(config.to_metadata())
        self.assertEqual(restored, config)


class HelperTests(unittest.TestCase):
    def test_future_dates_start_the_day_after(self) -> None:
        dates = future_dates(pd.Timestamp("2020-06-30"), 3)
        self.assertEqual(list(dates.strftime("%Y-%m-%d")), ["2020-07-01", "2020-07-02", "2020-07-03"])

    def test_percentile_table(self) -> None:
        table = build_percentile_table(np.arange(101, dtype=float))
        self.assertEqual(list(table["percentile"]), list(range(5, 100, 5)))
        self.assertAlmostEqual(float(table.loc[table["percentile"] == 50, "total_cases"].iloc[0]), 50.0)


if __name__ == "__main__":
    unittest.main()
