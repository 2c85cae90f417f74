import math
import unittest

import numpy as np

from epiforecast.core.estimator import estimate_parameters, growth_rate_sample
from epiforecast.core.validator import EstimationError, InvalidInputError
from epiforecast.models.parameters import EstimatedParameters
from epiforecast.models.series import HistoricalSeries


class GrowthRateSampleTests(unittest.TestCase):
    def test_only_strictly_increasing_pairs_are_used(self) -> None:
        sample = growth_rate_sample([100, 90, 120, 120, 150])
        np.testing.assert_allclose(sample, [30 / 90, 0.25])

    def test_pairs_starting_from_zero_are_skipped(self) -> None:
        sample = growth_rate_sample([0, 10, 20])
        np.testing.assert_allclose(sample, [1.0])

    def test_short_input_yields_empty_sample(self) -> None:
        self.assertEqual(growth_rate_sample([5]).size, 0)


class EstimateParametersTests(unittest.TestCase):
    def test_three_point_series(self) -> None:
        series = HistoricalSeries.from_counts([100, 120, 150])
        params = estimate_parameters(series)
        self.assertAlmostEqual(params.mean_growth_rate, 0.225)
        self.assertAlmostEqual(params.std_growth_rate, np.std([0.20, 0.25], ddof=1))
        self.assertAlmostEqual(params.mean_new_cases, 50.0)
        self.assertAlmostEqual(params.std_new_cases, math.sqrt(1900.0))
        self.assertEqual(params.growth_sample_size, 2)
        self.assertEqual(params.new_case_sample_size, 3)

    def test_zero_new_case_days_are_excluded(self) -> None:
        series = HistoricalSeries.from_counts(
            [100, 100, 130, 130, 160], new_cases=[100, 0, 30, 0, 30]
        )
        params = estimate_parameters(series)
        self.assertEqual(params.new_case_sample_size, 3)
        self.assertAlmostEqual(params.mean_new_cases, np.mean([100, 30, 30]))

    def test_noisy_totals_do_not_break_estimation(self) -> None:
        series = HistoricalSeries.from_counts([100, 90, 120, 118, 150, 180])
        params = estimate_parameters(series)
        self.assertTrue(math.isfinite(params.std_growth_rate))
        self.assertGreaterEqual(params.std_growth_rate, 0.0)
        self.assertGreaterEqual(params.std_new_cases, 0.0)
        self.assertEqual(params.growth_sample_size, 3)

    def test_flat_series_raises_estimation_error(self) -> None:
        series = HistoricalSeries.from_counts([100, 100, 100])
        with self.assertRaises(EstimationError) as ctx:
            estimate_parameters(series)
        self.assertIn("no monotonically increasing day pairs found", str(ctx.exception))

    def test_single_increasing_pair_has_zero_spread(self) -> None:
        series = HistoricalSeries.from_counts([100, 120], new_cases=[0, 20])
        params = estimate_parameters(series)
        self.assertAlmostEqual(params.mean_growth_rate, 0.2)
        self.assertEqual(params.std_growth_rate, 0.0)
        self.assertEqual(params.mean_new_cases, 20.0)
        self.assertEqual(params.std_new_cases, 0.0)

    def test_no_positive_new_cases_raises_estimation_error(self) -> None:
        series = HistoricalSeries.from_counts([10, 20, 40], new_cases=[0, 0, 0])
        with self.assertRaises(EstimationError) as ctx:
            estimate_parameters(series)
        self.assertIn("positive new cases", str(ctx.exception))


class HistoricalSeriesTests(unittest.TestCase):
    def test_initial_total_is_last_value(self) -> None:
        series = HistoricalSeries.from_counts([1, 3, 7])
        self.assertEqual(series.initial_total, 7.0)
        self.assertEqual(len(series), 3)

    def test_missing_values_are_rejected(self) -> None:
        with self.assertRaises(InvalidInputError):
            HistoricalSeries.from_counts([1, float("nan"), 7])

    def test_single_point_is_rejected(self) -> None:
        with self.assertRaises(InvalidInputError):
            HistoricalSeries.from_counts([10])

    def test_mismatched_lengths_are_rejected(self) -> None:
        with self.assertRaises(InvalidInputError):
            HistoricalSeries.from_counts([1, 2, 3], new_cases=[1, 1])

    def test_arrays_are_read_only(self) -> None:
        series = HistoricalSeries.from_counts([1, 3, 7])
        with self.assertRaises(ValueError):
            series.total_cases[0] = 99


class EstimatedParametersTests(unittest.TestCase):
    def test_non_finite_values_are_rejected(self) -> None:
        with self.assertRaises(ValueError):
            EstimatedParameters(
                mean_growth_rate=float("nan"),
                std_growth_rate=0.1,
                mean_new_cases=10.0,
                std_new_cases=1.0,
            )

    def test_with_overrides_returns_copy(self) -> None:
        params = EstimatedParameters(
            mean_growth_rate=0.1, std_growth_rate=0.02, mean_new_cases=10.0, std_new_cases=1.0
        )
        zeroed = params.with_overrides(std_growth_rate=0.0)
        self.assertEqual(zeroed.std_growth_rate, 0.0)
        self.assertEqual(params.std_growth_rate, 0.02)


if __name__ == "__main__":
    unittest.main()
