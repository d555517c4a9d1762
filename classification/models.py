"""Model fitting helpers for the iris classification cases."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np
import pandas as pd
from sklearn.base import clone

from classification.settings import ALL_MODEL_NAMES, CLASS_CODES, FEATURE_COLUMNS, LABEL_COLUMN
from config import MODEL_DICT, REGRESSION_CLASSIFIER_SPECS
from core.model_evaluation import assign_classes, find_accuracy
from core.shared_utils import require_columns


@dataclass
class ModelResult:
    name: str
    model: object
    predictions: np.ndarray
    accuracy: float


def prepare_iris(frame: pd.DataFrame) -> tuple[np.ndarray, np.ndarray, list[str]]:
    """Feature matrix, class codes ``1..k`` in first-appearance order, class names."""

    require_columns(frame, [*FEATURE_COLUMNS, LABEL_COLUMN], label="iris data")
    complete = frame.dropna(subset=[*FEATURE_COLUMNS, LABEL_COLUMN])
    codes, names = pd.factorize(complete[LABEL_COLUMN], sort=False)
    X = complete.loc[:, list(FEATURE_COLUMNS)].to_numpy(dtype=float)
    return X, codes + 1, [str(name) for name in names]


def build_model(name: str, *, random_state: int | None = None) -> object:
    """Fresh, unfitted model for one of the registered names."""

    if name in REGRESSION_CLASSIFIER_SPECS:
        estimator_cls, params = REGRESSION_CLASSIFIER_SPECS[name]
        return estimator_cls(**params)
    if name in MODEL_DICT:
        model = clone(MODEL_DICT[name])
        if random_state is not None and "random_state" in model.get_params():
            model.set_params(random_state=random_state)
        return model
    raise KeyError(f"Unknown model name: {name}. Available: {', '.join(ALL_MODEL_NAMES)}")


def fit_and_score(
    name: str,
    X: np.ndarray,
    y: np.ndarray,
    train_idx: np.ndarray,
    test_idx: np.ndarray,
    *,
    classes: Sequence[int] = CLASS_CODES,
    random_state: int | None = None,
) -> ModelResult:
    """Fit one model on the train indices and score it on the test indices.

    Regression models predict continuous values, which are mapped to the
    nearest class code before scoring.
    """

    if len(train_idx) == 0 or len(test_idx) == 0:
        raise ValueError("Both train and test index sets must be non-empty")

    model = build_model(name, random_state=random_state)
    model.fit(X[train_idx], y[train_idx])
    predictions = np.asarray(model.predict(X[test_idx]))
    if name in REGRESSION_CLASSIFIER_SPECS:
        predictions = assign_classes(predictions, classes)
    accuracy = find_accuracy(predictions, y[test_idx])
    return ModelResult(name=name, model=model, predictions=predictions, accuracy=accuracy)


def evaluate_models(
    names: Sequence[str],
    X: np.ndarray,
    y: np.ndarray,
    train_idx: np.ndarray,
    test_idx: np.ndarray,
    *,
    random_state: int | None = None,
) -> dict[str, ModelResult]:
    results: dict[str, ModelResult] = {}
    for name in names:
        result = fit_and_score(name, X, y, train_idx, test_idx, random_state=random_state)
        print(f"{name:<12} accuracy = {result.accuracy:.4f}")
        results[name] = result
    return results


def predictions_frame(
    results: dict[str, ModelResult],
    y_test: np.ndarray,
    test_idx: np.ndarray,
) -> pd.DataFrame:
    frame = pd.DataFrame({"row": test_idx, "y": y_test})
    for name, result in results.items():
        frame[name] = result.predictions
    return frame


__all__ = [
    "ModelResult",
    "build_model",
    "evaluate_models",
    "fit_and_score",
    "predictions_frame",
    "prepare_iris",
]
