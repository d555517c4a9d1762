from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

import joblib
import numpy as np
import pandas as pd
from sklearn.neighbors import KNeighborsClassifier

from classification import case_1_regularized_regression, case_2_tree_models, case_4_model_comparison
from classification._shared import accuracy_lookup
from classification.models import build_model, fit_and_score, prepare_iris
from classification.settings import ALL_MODEL_NAMES
from config import KNN_NEIGHBOURS
from core.data_fetch import load_iris_frame
from core.model_evaluation import train_test_split


class TestNearestNeighbourModel(unittest.TestCase):
    def setUp(self) -> None:
        self.X = np.array([[0.0], [0.1], [0.2], [5.0], [5.1], [5.2]])
        self.y = np.array([1, 1, 1, 2, 2, 2])

    def test_registered_as_kd_tree_classifier(self) -> None:
        model = build_model("kNN")
        self.assertIsInstance(model, KNeighborsClassifier)
        self.assertEqual(model.get_params()["n_neighbors"], KNN_NEIGHBOURS)
        self.assertEqual(model.get_params()["algorithm"], "kd_tree")

    def test_predicts_majority_label(self) -> None:
        model = build_model("kNN").set_params(n_neighbors=3).fit(self.X, self.y)
        np.testing.assert_array_equal(model.predict([[0.05], [5.05]]), [1, 2])

    def test_neighbours_sorted_by_distance(self) -> None:
        model = build_model("kNN").set_params(n_neighbors=3).fit(self.X, self.y)
        distances, indices = model.kneighbors([[5.19]])
        self.assertEqual(indices[0, 0], 5)
        self.assertTrue(np.all(np.diff(distances[0]) >= 0))

    def test_too_few_training_points(self) -> None:
        with self.assertRaises(ValueError):
            build_model("kNN").fit(self.X[:3], self.y[:3]).predict([[0.0]])


class TestIrisModels(unittest.TestCase):
    def setUp(self) -> None:
        self.frame = load_iris_frame()
        self.X, self.y, self.names = prepare_iris(self.frame)

    def test_prepare_iris_codes_follow_first_appearance(self) -> None:
        self.assertEqual(self.names, ["setosa", "versicolor", "virginica"])
        self.assertEqual(set(self.y), {1, 2, 3})
        self.assertEqual(self.X.shape, (150, 4))

    def test_prepare_iris_requires_columns(self) -> None:
        with self.assertRaises(KeyError):
            prepare_iris(self.frame.drop(columns=["Species"]))

    def test_build_model_rejects_unknown_name(self) -> None:
        with self.assertRaises(KeyError):
            build_model("Perceptron")

    def test_build_model_returns_fresh_estimators(self) -> None:
        self.assertIsNot(build_model("RF"), build_model("RF"))
        self.assertIsNot(build_model("kNN"), build_model("kNN"))

    def test_every_model_beats_chance(self) -> None:
        train_idx, test_idx = train_test_split(self.y, 0.7, random_state=42)
        for name in ALL_MODEL_NAMES:
            result = fit_and_score(name, self.X, self.y, train_idx, test_idx, random_state=42)
            self.assertGreater(result.accuracy, 0.7, msg=name)
            self.assertTrue(set(np.unique(result.predictions)) <= {1, 2, 3}, msg=name)

    def test_fit_and_score_rejects_empty_split(self) -> None:
        with self.assertRaises(ValueError):
            fit_and_score("DT", self.X, self.y, np.arange(150), np.array([], dtype=int))


class TestClassificationCases(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_regularized_regression_case(self) -> None:
        case_dir = case_1_regularized_regression.run_case(output_root=self.tmp)
        accuracies = accuracy_lookup(case_dir)
        self.assertEqual(set(accuracies), {"Lasso", "Ridge", "Elastic Net"})

    def test_tree_models_case(self) -> None:
        case_dir = case_2_tree_models.run_case(output_root=self.tmp)
        predictions = pd.read_csv(case_dir / "test_predictions.csv")
        self.assertEqual(list(predictions.columns), ["row", "y", "DT", "RF"])

    def test_model_comparison_persists_best_model(self) -> None:
        case_dir = case_4_model_comparison.run_case(output_root=self.tmp)
        meta = json.loads((case_dir / "meta.json").read_text(encoding="utf-8"))
        accuracies = accuracy_lookup(case_dir)
        self.assertEqual(len(accuracies), len(ALL_MODEL_NAMES))
        self.assertEqual(accuracies[meta["best_model"]], max(accuracies.values()))

        model = joblib.load(case_dir / meta["model_file"])
        X, y, _ = prepare_iris(load_iris_frame())
        self.assertGreater(np.mean(np.asarray(model.predict(X)).round() == y), 0.7)


if __name__ == "__main__":
    unittest.main()
