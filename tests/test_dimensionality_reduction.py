from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

import numpy as np
import pandas as pd

from dimensionality_reduction import case_1_pca_projection, case_2_tsne_embedding, case_3_umap_embedding
from dimensionality_reduction.embeddings import (
    encode_labels,
    euclidean_distance_matrix,
    fit_pca,
    manual_projection,
    observation_correlation,
    pca_report,
    prepare_cars,
    reconstruction_error,
    standardize,
    tsne_embedding,
)
from dimensionality_reduction.settings import CARS_FEATURES


def _cars(n: int = 60) -> pd.DataFrame:
    rng = np.random.default_rng(2)
    weight = rng.uniform(1_800, 5_000, size=n)
    frame = pd.DataFrame(
        {
            "Name": [f"car {i}" for i in range(n)],
            "Miles_per_Gallon": 50 - weight / 150 + rng.normal(0, 2, n),
            "Cylinders": np.where(weight > 3_500, 8, 4),
            "Displacement": weight / 15 + rng.normal(0, 10, n),
            "Horsepower": weight / 30 + rng.normal(0, 8, n),
            "Weight_in_lbs": weight,
            "Acceleration": rng.normal(15, 2, n),
            "Origin": np.where(weight > 3_500, "USA", np.where(np.arange(n) % 2 == 0, "Europe", "Japan")),
        }
    )
    frame.loc[3, "Horsepower"] = np.nan
    return frame


class TestPreparation(unittest.TestCase):
    def test_standardize_has_unit_variance(self) -> None:
        scaled = standardize(pd.DataFrame({"a": [1.0, 2.0, 3.0, 4.0], "b": [5.0, 5.0, 5.0, 5.0]}))
        self.assertAlmostEqual(scaled["a"].std(ddof=1), 1.0)
        self.assertAlmostEqual(scaled["a"].mean(), 0.0)
        self.assertTrue((scaled["b"] == 0.0).all())

    def test_encode_labels_first_appearance(self) -> None:
        codes, labels = encode_labels(["USA", "Japan", "USA", "Europe"])
        np.testing.assert_array_equal(codes, [1, 2, 1, 3])
        self.assertEqual(labels, ["USA", "Japan", "Europe"])

    def test_prepare_cars_drops_incomplete_rows(self) -> None:
        features, codes, origins = prepare_cars(_cars())
        self.assertEqual(features.shape, (59, len(CARS_FEATURES)))
        self.assertEqual(len(codes), 59)
        self.assertEqual(len(origins), len(set(origins)))
        self.assertFalse(features.isna().any().any())

    def test_prepare_cars_requires_columns(self) -> None:
        with self.assertRaises(KeyError):
            prepare_cars(_cars().drop(columns=["Origin"]))


class TestEmbeddings(unittest.TestCase):
    def setUp(self) -> None:
        self.features, self.codes, _ = prepare_cars(_cars())

    def test_manual_projection_matches_transform(self) -> None:
        pca, projection = fit_pca(self.features, 2)
        manual = manual_projection(pca, self.features.iloc[5].to_numpy())
        np.testing.assert_allclose(manual, projection[5], atol=1e-10)

    def test_reconstruction_error_vanishes_with_all_components(self) -> None:
        pca_small, projection_small = fit_pca(self.features, 2)
        pca_full, projection_full = fit_pca(self.features, len(CARS_FEATURES))
        self.assertGreater(reconstruction_error(pca_small, self.features, projection_small), 0.0)
        self.assertLess(reconstruction_error(pca_full, self.features, projection_full), 1e-8)

    def test_pca_report_layout(self) -> None:
        pca, _ = fit_pca(self.features, 3)
        report = pca_report(pca, CARS_FEATURES)
        self.assertEqual(list(report.columns), ["PC1", "PC2", "PC3"])
        self.assertEqual(report.index[-1], "explained_variance_ratio")

    def test_observation_matrices_are_square(self) -> None:
        n = len(self.features)
        correlation = observation_correlation(self.features)
        distances = euclidean_distance_matrix(self.features)
        self.assertEqual(correlation.shape, (n, n))
        np.testing.assert_allclose(np.diag(correlation), 1.0)
        np.testing.assert_allclose(np.diag(distances), 0.0)
        np.testing.assert_allclose(distances, distances.T)

    def test_tsne_rejects_large_perplexity(self) -> None:
        with self.assertRaises(ValueError):
            tsne_embedding(self.features.iloc[:10], perplexity=20.0)

    def test_tsne_shape(self) -> None:
        embedding = tsne_embedding(self.features, perplexity=10.0, random_state=0)
        self.assertEqual(embedding.shape, (len(self.features), 2))


class TestDimensionalityReductionCases(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.cars = _cars()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_pca_case(self) -> None:
        case_dir = case_1_pca_projection.run_case(frame=self.cars, output_root=self.tmp, save_plots=False)
        summary = pd.read_csv(case_dir / "pca_summary.csv")
        self.assertEqual(summary["n_components"].tolist(), [2, 3])
        self.assertTrue(summary["manual_projection_matches"].all())
        self.assertTrue((case_dir / "pca_3_projection_matrix.csv").exists())

    def test_tsne_case(self) -> None:
        case_dir = case_2_tsne_embedding.run_case(
            frame=self.cars, perplexity=10.0, early_exaggeration=12.0, output_root=self.tmp, save_plots=False
        )
        embedding = pd.read_csv(case_dir / "tsne_embedding.csv")
        self.assertEqual(list(embedding.columns), ["tsne_1", "tsne_2", "Origin"])
        self.assertEqual(len(embedding), 59)

    def test_umap_case(self) -> None:
        case_dir = case_3_umap_embedding.run_case(
            frame=self.cars, n_neighbors=10, output_root=self.tmp, save_plots=False
        )
        for label in ("correlation", "distance"):
            embedding = pd.read_csv(case_dir / f"umap_{label}_embedding.csv")
            self.assertEqual(embedding.shape, (59, 3))


if __name__ == "__main__":
    unittest.main()
