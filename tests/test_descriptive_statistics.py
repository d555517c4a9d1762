from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

import numpy as np
import pandas as pd
from scipy.integrate import trapezoid

from core.distribution_plots import compute_distribution_summary
from descriptive_statistics import (
    case_1_geyser_distributions,
    case_2_sampling_and_fitting,
    case_3_hypothesis_tests,
    case_4_classification_metrics,
)
from descriptive_statistics.analysis import (
    correlation_table,
    fit_normal,
    histogram_edges,
    kde_scaled_to_counts,
    one_sample_ttest,
    sample_binomial,
    sample_normal,
    sqrt_bin_count,
)


def _geyser_frame(n: int = 120) -> pd.DataFrame:
    rng = np.random.default_rng(11)
    eruptions = np.concatenate([rng.normal(2.0, 0.3, n // 2), rng.normal(4.4, 0.4, n - n // 2)])
    waiting = 33.0 + 10.7 * eruptions + rng.normal(0.0, 5.0, n)
    return pd.DataFrame({"eruptions": eruptions, "waiting": waiting})


class TestAnalysisHelpers(unittest.TestCase):
    def test_sqrt_bin_count(self) -> None:
        self.assertEqual(sqrt_bin_count(272), 17)
        self.assertEqual(sqrt_bin_count(100), 10)
        with self.assertRaises(ValueError):
            sqrt_bin_count(0)

    def test_scaled_kde_integrates_to_expected_counts(self) -> None:
        values = np.random.default_rng(0).normal(size=2_000)
        grid, scaled = kde_scaled_to_counts(values, 0.1)
        area = trapezoid(scaled, grid)
        # Integral of density * n * width equals n * width.
        self.assertAlmostEqual(area, values.size * 0.1, delta=values.size * 0.1 * 0.02)

    def test_histogram_edges_use_the_kde_scale_width(self) -> None:
        values = sample_normal(100_000, random_state=0)
        edges = histogram_edges(values, 0.1)
        np.testing.assert_allclose(np.diff(edges), 0.1)
        self.assertLessEqual(edges[0], values.min())
        self.assertGreater(edges[-1], values.max())

        counts, _ = np.histogram(values, bins=edges)
        self.assertEqual(counts.sum(), values.size)
        _, scaled = kde_scaled_to_counts(values, 0.1)
        self.assertAlmostEqual(counts.max() / scaled.max(), 1.0, delta=0.05)

    def test_histogram_edges_cover_exact_multiples(self) -> None:
        edges = histogram_edges([0.0, 0.3], 0.1)
        counts, _ = np.histogram([0.0, 0.3], bins=edges)
        self.assertEqual(counts.sum(), 2)
        with self.assertRaises(ValueError):
            histogram_edges([1.0, 2.0], 0.0)
        with self.assertRaises(ValueError):
            histogram_edges([np.nan], 0.1)

    def test_scaled_kde_rejects_tiny_samples(self) -> None:
        with self.assertRaises(ValueError):
            kde_scaled_to_counts([1.0], 0.1)
        with self.assertRaises(ValueError):
            kde_scaled_to_counts([1.0, 2.0, 3.0], 0.0)

    def test_fit_normal_recovers_parameters(self) -> None:
        values = np.random.default_rng(1).normal(3.0, 2.0, size=20_000)
        mu, sigma = fit_normal(values)
        self.assertAlmostEqual(mu, 3.0, delta=0.05)
        self.assertAlmostEqual(sigma, 2.0, delta=0.05)

    def test_binomial_sample_range(self) -> None:
        draws = sample_binomial(1_000, 40, 0.5, random_state=2)
        self.assertTrue(((draws >= 0) & (draws <= 40)).all())

    def test_one_sample_ttest_interval_contains_mean(self) -> None:
        values = np.random.default_rng(3).normal(5.0, 1.0, size=500)
        result = one_sample_ttest(values, 0.0)
        self.assertLess(result["p_value"], 1e-6)
        self.assertLess(result["ci_low"], result["mean"])
        self.assertGreater(result["ci_high"], result["mean"])
        self.assertEqual(result["df"], 499)

    def test_correlation_table(self) -> None:
        x = np.arange(50, dtype=float)
        table = correlation_table(x, 2 * x + 1)
        self.assertEqual(table["method"].tolist(), ["spearman", "pearson"])
        np.testing.assert_allclose(table["r"], [1.0, 1.0])

    def test_distribution_summary(self) -> None:
        summary = compute_distribution_summary(pd.Series([1.0, 2.0, 3.0, 4.0, np.nan]))
        self.assertEqual(summary["count"], 4)
        self.assertAlmostEqual(summary["median"], 2.5)


class TestDescriptiveStatisticsCases(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.frame = _geyser_frame()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_geyser_distributions_case(self) -> None:
        case_dir = case_1_geyser_distributions.run_case(frame=self.frame, output_root=self.tmp, save_plots=False)
        meta = json.loads((case_dir / "meta.json").read_text(encoding="utf-8"))
        self.assertEqual(meta["sqrt_bins"], 11)
        self.assertEqual(meta["bin_width"], 0.2)
        eruptions = self.frame["eruptions"]
        expected_bins = int(np.floor((eruptions.max() - eruptions.min()) / 0.2)) + 1
        self.assertIn(meta["histogram_bins"], (expected_bins, expected_bins + 1))
        self.assertTrue((case_dir / "eruption_kde.csv").exists())

    def test_geyser_case_requires_columns(self) -> None:
        with self.assertRaises(KeyError):
            case_1_geyser_distributions.run_case(
                frame=self.frame.rename(columns={"waiting": "wait"}), output_root=self.tmp, save_plots=False
            )

    def test_sampling_and_fitting_case(self) -> None:
        case_dir = case_2_sampling_and_fitting.run_case(
            frame=self.frame,
            output_root=self.tmp,
            large_sample_size=2_000,
            small_sample_size=200,
            save_plots=False,
        )
        samples = pd.read_csv(case_dir / "sample_summary.csv")
        self.assertEqual(samples["size"].tolist(), [2_000, 2_000])
        self.assertEqual(samples["bin_width"].tolist(), [0.1, 0.5])
        fits = pd.read_csv(case_dir / "normal_fits.csv").set_index("data")
        self.assertAlmostEqual(fits.loc["uniform", "mu"], 0.5, delta=0.06)
        self.assertAlmostEqual(fits.loc["eruptions", "mu"], self.frame["eruptions"].mean())

    def test_hypothesis_tests_case(self) -> None:
        case_dir = case_3_hypothesis_tests.run_case(frame=self.frame, output_root=self.tmp, save_plots=False)
        correlations = pd.read_csv(case_dir / "correlations.csv")
        self.assertTrue((correlations["r"] > 0.5).all())

    def test_classification_metrics_case(self) -> None:
        case_dir = case_4_classification_metrics.run_case(output_root=self.tmp)
        meta = json.loads((case_dir / "meta.json").read_text(encoding="utf-8"))
        self.assertAlmostEqual(meta["recall"], 5 / 7)
        self.assertAlmostEqual(meta["precision"], 5 / 6)
        self.assertAlmostEqual(meta["accuracy"], 5 / 8)
        self.assertEqual((meta["tp"], meta["tn"], meta["fp"], meta["fn"]), (5, 0, 1, 2))


if __name__ == "__main__":
    unittest.main()
