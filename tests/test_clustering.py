from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

import numpy as np
import pandas as pd

from clustering import case_1_price_buckets_kmeans, case_2_distance_matrix_methods
from clustering.algorithms import (
    cluster_sizes,
    dbscan_assignments,
    euclidean_distances,
    hierarchical_assignments,
    kmeans_assignments,
    kmedoids_assignments,
    price_buckets,
    subsample,
)

CENTRES = np.array([[34.0, -118.0], [37.5, -122.0], [40.0, -121.0]])


def _blobs(per_blob: int = 30, spread: float = 0.02, seed: int = 0) -> np.ndarray:
    rng = np.random.default_rng(seed)
    return np.vstack([centre + rng.normal(0.0, spread, size=(per_blob, 2)) for centre in CENTRES])


def _houses(per_blob: int = 30) -> pd.DataFrame:
    points = _blobs(per_blob)
    rng = np.random.default_rng(1)
    return pd.DataFrame(
        {
            "latitude": points[:, 0],
            "longitude": points[:, 1],
            "median_house_value": rng.uniform(20_000, 500_000, size=len(points)),
        }
    )


def _same_partition(labels: np.ndarray, per_blob: int) -> bool:
    blocks = [set(labels[i * per_blob:(i + 1) * per_blob]) for i in range(len(CENTRES))]
    return all(len(block) == 1 for block in blocks) and len(set.union(*blocks)) == len(CENTRES)


class TestClusteringAlgorithms(unittest.TestCase):
    def setUp(self) -> None:
        self.points = _blobs()
        self.distances = euclidean_distances(self.points)

    def test_price_buckets(self) -> None:
        np.testing.assert_array_equal(price_buckets([0, 49_999, 50_000, 175_000]), [0, 0, 1, 3])
        with self.assertRaises(ValueError):
            price_buckets([1.0], 0)

    def test_kmeans_recovers_blobs(self) -> None:
        labels, centres = kmeans_assignments(self.points, 3, random_state=0)
        self.assertEqual(set(labels), {1, 2, 3})
        self.assertEqual(centres.shape, (3, 2))
        self.assertTrue(_same_partition(labels, 30))

    def test_kmedoids_assignments_are_consistent(self) -> None:
        labels, medoids, cost = kmedoids_assignments(self.distances, 3, random_state=3)
        self.assertEqual(len(set(medoids.tolist())), 3)
        np.testing.assert_array_equal(labels[medoids], [1, 2, 3])
        expected_cost = self.distances[:, medoids].min(axis=1).sum()
        self.assertAlmostEqual(cost, expected_cost)
        self.assertTrue(((labels >= 1) & (labels <= 3)).all())

    def test_kmedoids_single_cluster_cost(self) -> None:
        labels, medoids, cost = kmedoids_assignments(self.distances, 1, random_state=0)
        self.assertTrue((labels == 1).all())
        expected = self.distances.sum(axis=1).min()
        self.assertAlmostEqual(cost, expected)

    def test_kmedoids_recovers_blobs_reproducibly(self) -> None:
        labels, medoids, _ = kmedoids_assignments(self.distances, 3, random_state=7)
        self.assertTrue(_same_partition(labels, 30))
        again, again_medoids, _ = kmedoids_assignments(self.distances, 3, random_state=7)
        np.testing.assert_array_equal(labels, again)
        np.testing.assert_array_equal(medoids, again_medoids)

    def test_kmedoids_rejects_bad_input(self) -> None:
        with self.assertRaises(ValueError):
            kmedoids_assignments(np.ones((3, 4)), 2)
        with self.assertRaises(ValueError):
            kmedoids_assignments(self.distances, 0)

    def test_hierarchical_recovers_blobs(self) -> None:
        labels = hierarchical_assignments(self.distances, 3)
        self.assertEqual(labels.min(), 1)
        self.assertTrue(_same_partition(labels, 30))

    def test_dbscan_marks_outlier_as_noise(self) -> None:
        points = np.vstack([self.points, [[45.0, -100.0]]])
        labels = dbscan_assignments(euclidean_distances(points), eps=0.2, min_samples=5)
        self.assertEqual(labels[-1], -1)
        self.assertTrue(_same_partition(labels[:-1], 30))

    def test_subsample(self) -> None:
        frame = pd.DataFrame({"a": range(100)})
        sample = subsample(frame, 10, random_state=0)
        self.assertEqual(len(sample), 10)
        self.assertTrue(sample["a"].is_monotonic_increasing)
        self.assertEqual(len(subsample(frame, 500)), 100)

    def test_cluster_sizes(self) -> None:
        sizes = cluster_sizes(pd.DataFrame({"m": [1, 1, 2]}))
        self.assertEqual(sizes["size"].tolist(), [2, 1])


class TestClusteringCases(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.houses = _houses()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_price_bucket_kmeans_case(self) -> None:
        case_dir = case_1_price_buckets_kmeans.run_case(
            frame=self.houses, n_clusters=3, output_root=self.tmp, save_plots=False
        )
        result = pd.read_csv(case_dir / "houses_with_clusters.csv")
        self.assertIn("cprice", result.columns)
        self.assertEqual(set(result["cluster_means"]), {1, 2, 3})
        self.assertEqual(len(pd.read_csv(case_dir / "kmeans_centres.csv")), 3)

    def test_distance_matrix_case(self) -> None:
        case_dir = case_2_distance_matrix_methods.run_case(
            frame=self.houses,
            n_clusters=3,
            sample_size=60,
            eps=0.01,
            min_samples=5,
            output_root=self.tmp,
            save_plots=False,
        )
        result = pd.read_csv(case_dir / "houses_with_clusters.csv")
        self.assertEqual(len(result), 60)
        for column in ("cluster_medoids", "cluster_hca", "cluster_dbscan"):
            self.assertIn(column, result.columns)
        self.assertEqual(len(pd.read_csv(case_dir / "medoids.csv")), 3)
        meta = json.loads((case_dir / "meta.json").read_text(encoding="utf-8"))
        self.assertEqual(meta["sample_size"], 60)

    def test_cases_require_coordinates(self) -> None:
        with self.assertRaises(KeyError):
            case_1_price_buckets_kmeans.run_case(
                frame=self.houses.drop(columns=["latitude"]), output_root=self.tmp, save_plots=False
            )


if __name__ == "__main__":
    unittest.main()
