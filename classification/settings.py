"""Configuration for the classification package."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

DEFAULT_OUTPUT_ROOT = Path("classification") / "outputs"
FEATURE_COLUMNS: tuple[str, ...] = ("SepalLength", "SepalWidth", "PetalLength", "PetalWidth")
LABEL_COLUMN: str = "Species"
TRAIN_RATIO: float = 0.7
CLASS_CODES: tuple[int, ...] = (1, 2, 3)
REGRESSION_MODEL_NAMES: tuple[str, ...] = ("Lasso", "Ridge", "Elastic Net")
TREE_MODEL_NAMES: tuple[str, ...] = ("DT", "RF")
NEIGHBOUR_MODEL_NAMES: tuple[str, ...] = ("kNN", "SVM")
ALL_MODEL_NAMES: tuple[str, ...] = REGRESSION_MODEL_NAMES + TREE_MODEL_NAMES + NEIGHBOUR_MODEL_NAMES
BEST_MODEL_FILENAME: str = "best_model.joblib"


@dataclass(frozen=True)
class CaseConfig:
    """Descriptor for a classification case."""

    case_id: str
    name: str
    description: str | None = None


CLASSIFICATION_CASES: Mapping[str, CaseConfig] = {
    "case_1": CaseConfig(
        case_id="case_1",
        name="Case 1: regularised regression classifiers on iris",
        description="Lasso, Ridge and Elastic Net fit on class codes, rounded to the nearest class.",
    ),
    "case_2": CaseConfig(
        case_id="case_2",
        name="Case 2: decision tree and random forest on iris",
        description="Depth-2 decision tree and a 20-tree random forest.",
    ),
    "case_3": CaseConfig(
        case_id="case_3",
        name="Case 3: nearest neighbours and SVM on iris",
        description="KD-tree 5-nearest-neighbour majority vote and an RBF support vector machine.",
    ),
    "case_4": CaseConfig(
        case_id="case_4",
        name="Case 4: iris classifier comparison",
        description="Accuracy table for all seven models on one split; the best model is persisted.",
    ),
}


def get_case_config(case_id: str) -> CaseConfig:
    try:
        return CLASSIFICATION_CASES[case_id]
    except KeyError as exc:
        raise KeyError(f"Unknown classification case id: {case_id}") from exc


AVAILABLE_CASE_IDS: tuple[str, ...] = tuple(CLASSIFICATION_CASES.keys())
