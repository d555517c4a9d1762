"""Model evaluation utilities (splits, accuracy, confusion matrices)."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Mapping, Sequence

import joblib
import numpy as np
import pandas as pd
from sklearn.metrics import confusion_matrix, precision_score, recall_score


def train_test_split(
    y: Sequence[int] | np.ndarray,
    train_ratio: float,
    *,
    random_state: int | np.random.Generator | None = None,
) -> tuple[np.ndarray, np.ndarray]:
    """Split positions of ``y`` into train and test indices, class by class.

    Every position of a class is kept for training independently with
    probability ``train_ratio``, so class proportions are preserved in
    expectation. Test indices are the sorted complement of the train indices.
    """

    if not 0.0 <= train_ratio <= 1.0:
        raise ValueError("train_ratio must lie within [0, 1]")

    labels = np.asarray(y)
    rng = (
        random_state
        if isinstance(random_state, np.random.Generator)
        else np.random.default_rng(random_state)
    )

    train_segments: list[np.ndarray] = []
    for label in pd.unique(labels):
        idxs = np.flatnonzero(labels == label)
        keep = rng.random(len(idxs)) < train_ratio
        train_segments.append(idxs[keep])

    train_idx = np.concatenate(train_segments) if train_segments else np.empty(0, dtype=int)
    test_idx = np.setdiff1d(np.arange(len(labels)), train_idx)
    return train_idx, test_idx


def find_accuracy(y_hat: Iterable, y: Iterable) -> float:
    """Share of predictions equal to the ground truth."""

    predicted = np.asarray(list(y_hat))
    actual = np.asarray(list(y))
    if predicted.shape != actual.shape:
        raise ValueError("y_hat and y must have the same length")
    if actual.size == 0:
        raise ValueError("accuracy requires at least one observation")
    return float(np.mean(predicted == actual))


def assign_class(value: float, classes: Sequence[int] = (1, 2, 3)) -> int:
    """Return the class code closest to a continuous prediction."""

    codes = np.asarray(classes)
    if codes.size == 0:
        raise ValueError("classes must not be empty")
    return int(codes[int(np.argmin(np.abs(value - codes)))])


def assign_classes(values: Iterable[float], classes: Sequence[int] = (1, 2, 3)) -> np.ndarray:
    return np.array([assign_class(value, classes) for value in values], dtype=int)


def confusion_summary(
    y: Sequence,
    y_hat: Sequence,
    labels: Sequence | None = None,
) -> tuple[pd.DataFrame, pd.DataFrame, float]:
    """Confusion matrix (rows = actual), its row-normalised form and accuracy."""

    label_list = list(labels) if labels is not None else sorted(set(y) | set(y_hat))
    counts = confusion_matrix(y, y_hat, labels=label_list)
    cm_df = pd.DataFrame(counts, index=label_list, columns=label_list)
    cm_df.index.name = "actual"

    row_sums = counts.sum(axis=1, keepdims=True)
    with np.errstate(divide="ignore", invalid="ignore"):
        normalised = np.where(row_sums > 0, counts / row_sums, 0.0)
    normalised_df = pd.DataFrame(normalised, index=label_list, columns=label_list)
    normalised_df.index.name = "actual"

    accuracy = float(np.trace(counts) / counts.sum()) if counts.sum() else float("nan")
    return cm_df, normalised_df, accuracy


def binary_recall_precision(y: Sequence[int], y_hat: Sequence[int], *, positive: int = 1) -> tuple[float, float]:
    recall = recall_score(y, y_hat, pos_label=positive, zero_division=0)
    precision = precision_score(y, y_hat, pos_label=positive, zero_division=0)
    return float(recall), float(precision)


def binary_outcome_counts(
    y: Sequence[int],
    y_hat: Sequence[int],
    *,
    positive: int = 1,
    negative: int = 0,
) -> dict[str, int]:
    """True/false positive and negative counts of a binary prediction."""

    tn, fp, fn, tp = confusion_matrix(y, y_hat, labels=[negative, positive]).ravel()
    return {"tp": int(tp), "tn": int(tn), "fp": int(fp), "fn": int(fn)}


def build_accuracy_table(accuracies: Mapping[str, float]) -> pd.DataFrame:
    table = pd.DataFrame({"model": list(accuracies), "accuracy": list(accuracies.values())})
    return table.sort_values("accuracy", ascending=False, kind="stable").reset_index(drop=True)


def persist_model(model: object, output_dir: Path, filename: str) -> Path:
    """Dump an estimator with joblib and return its path."""

    output_dir.mkdir(parents=True, exist_ok=True)
    model_path = output_dir / filename
    joblib.dump(model, model_path)
    return model_path


__all__ = [
    "assign_class",
    "assign_classes",
    "binary_outcome_counts",
    "binary_recall_precision",
    "build_accuracy_table",
    "confusion_summary",
    "find_accuracy",
    "persist_model",
    "train_test_split",
]
