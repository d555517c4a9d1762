from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

import joblib
import numpy as np
import pandas as pd

from core.model_evaluation import (
    assign_class,
    assign_classes,
    binary_outcome_counts,
    binary_recall_precision,
    build_accuracy_table,
    confusion_summary,
    find_accuracy,
    persist_model,
    train_test_split,
)
from core.shared_utils import resolve_output_dir, save_dataframe, write_case_metadata


class TestTrainTestSplit(unittest.TestCase):
    def setUp(self) -> None:
        self.labels = np.repeat([1, 2, 3], 200)

    def test_split_partitions_every_position(self) -> None:
        train_idx, test_idx = train_test_split(self.labels, 0.7, random_state=0)
        self.assertEqual(len(np.intersect1d(train_idx, test_idx)), 0)
        combined = np.sort(np.concatenate([train_idx, test_idx]))
        np.testing.assert_array_equal(combined, np.arange(len(self.labels)))

    def test_split_keeps_class_proportions_roughly(self) -> None:
        train_idx, _ = train_test_split(self.labels, 0.7, random_state=1)
        for label in (1, 2, 3):
            share = np.mean(self.labels[train_idx] == label)
            self.assertAlmostEqual(share, 1 / 3, delta=0.06)

    def test_split_is_reproducible(self) -> None:
        first = train_test_split(self.labels, 0.5, random_state=4)
        second = train_test_split(self.labels, 0.5, random_state=4)
        np.testing.assert_array_equal(first[0], second[0])

    def test_extreme_ratios(self) -> None:
        train_idx, test_idx = train_test_split(self.labels, 1.0, random_state=0)
        self.assertEqual(len(train_idx), len(self.labels))
        self.assertEqual(len(test_idx), 0)
        train_idx, test_idx = train_test_split(self.labels, 0.0, random_state=0)
        self.assertEqual(len(train_idx), 0)

    def test_invalid_ratio(self) -> None:
        with self.assertRaises(ValueError):
            train_test_split(self.labels, 1.5)


class TestScoring(unittest.TestCase):
    def test_find_accuracy(self) -> None:
        self.assertAlmostEqual(find_accuracy([1, 2, 3, 3], [1, 2, 3, 1]), 0.75)
        with self.assertRaises(ValueError):
            find_accuracy([1, 2], [1])
        with self.assertRaises(ValueError):
            find_accuracy([], [])

    def test_assign_class_rounds_to_nearest_code(self) -> None:
        self.assertEqual(assign_class(0.2), 1)
        self.assertEqual(assign_class(2.4), 2)
        self.assertEqual(assign_class(7.0), 3)
        np.testing.assert_array_equal(assign_classes([1.6, 2.9, -3.0]), [2, 3, 1])

    def test_confusion_summary_rows_are_actual(self) -> None:
        counts, normalised, accuracy = confusion_summary([1, 1, 2, 2], [1, 2, 2, 2])
        self.assertEqual(int(counts.loc[1, 2]), 1)
        self.assertEqual(int(counts.loc[2, 1]), 0)
        np.testing.assert_allclose(normalised.sum(axis=1), [1.0, 1.0])
        self.assertAlmostEqual(accuracy, 0.75)

    def test_binary_recall_precision(self) -> None:
        recall, precision = binary_recall_precision([1, 1, 0, 0], [1, 0, 1, 0])
        self.assertAlmostEqual(recall, 0.5)
        self.assertAlmostEqual(precision, 0.5)

    def test_binary_outcome_counts(self) -> None:
        outcomes = binary_outcome_counts([1, 1, 1, 1, 1, 1, 1, 0], [1, 1, 0, 0, 1, 1, 1, 1])
        self.assertEqual(outcomes, {"tp": 5, "tn": 0, "fp": 1, "fn": 2})
        absent_negative = binary_outcome_counts([1, 1], [1, 1])
        self.assertEqual(absent_negative, {"tp": 2, "tn": 0, "fp": 0, "fn": 0})

    def test_accuracy_table_sorted_descending(self) -> None:
        table = build_accuracy_table({"a": 0.5, "b": 0.9, "c": 0.7})
        self.assertEqual(table["model"].tolist(), ["b", "c", "a"])


class TestArtifacts(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_persist_model_roundtrip(self) -> None:
        path = persist_model({"coef": [1, 2]}, self.tmp / "models", "model.joblib")
        self.assertEqual(joblib.load(path), {"coef": [1, 2]})

    def test_resolve_output_dir_creates_case_folder(self) -> None:
        case_dir = resolve_output_dir("case_9", self.tmp / "default", self.tmp / "override")
        self.assertEqual(case_dir, self.tmp / "override" / "case_9")
        self.assertTrue(case_dir.is_dir())

    def test_write_case_metadata_serialises_numpy(self) -> None:
        save_dataframe(pd.DataFrame({"x": [1, 2]}), self.tmp, "values.csv")
        path = write_case_metadata(
            case_dir=self.tmp,
            case_id="case_1",
            case_name="demo",
            package="core",
            dataset="toy",
            features=["x"],
            target="y",
            models=("m",),
            extras={"score": np.float64(0.5), "shape": np.array([2, 3])},
        )
        meta = json.loads(path.read_text(encoding="utf-8"))
        self.assertEqual(meta["case_id"], "case_1")
        self.assertEqual(meta["score"], 0.5)
        self.assertEqual(meta["shape"], [2, 3])
        self.assertEqual(meta["artifacts"], ["values.csv"])
        self.assertEqual(meta["models_used"], ["m"])


if __name__ == "__main__":
    unittest.main()
