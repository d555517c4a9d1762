"""Workflow shared by the iris classification case studies."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import pandas as pd

from classification.models import evaluate_models, predictions_frame, prepare_iris
from classification.settings import BEST_MODEL_FILENAME, DEFAULT_OUTPUT_ROOT, FEATURE_COLUMNS, LABEL_COLUMN
from core.data_fetch import load_iris_frame
from core.model_evaluation import build_accuracy_table, confusion_summary, persist_model, train_test_split
from core.shared_utils import resolve_output_dir, save_dataframe, write_case_metadata


def run_classifier_workflow(
    *,
    case_id: str,
    case_name: str,
    model_names: Sequence[str],
    frame: pd.DataFrame | None,
    train_ratio: float,
    output_root: Path | str | None,
    random_state: int,
    persist_best: bool = False,
) -> Path:
    """Split iris per class, fit ``model_names`` and save accuracies and predictions."""

    case_output_dir = resolve_output_dir(case_id, DEFAULT_OUTPUT_ROOT, output_root)
    data = frame if frame is not None else load_iris_frame()

    print(f"=== Running {case_id}: {case_name} ===")
    X, y, class_names = prepare_iris(data)
    print("Class codes: " + ", ".join(f"{code}={name}" for code, name in enumerate(class_names, start=1)))

    train_idx, test_idx = train_test_split(y, train_ratio, random_state=random_state)
    print(f"Train/test sizes: {len(train_idx)}/{len(test_idx)} (train ratio {train_ratio})")

    results = evaluate_models(model_names, X, y, train_idx, test_idx, random_state=random_state)
    accuracy_table = build_accuracy_table({name: result.accuracy for name, result in results.items()})
    print("\nAccuracy ranking:")
    print(accuracy_table.to_string(index=False))

    accuracy_path = save_dataframe(accuracy_table, case_output_dir, "accuracy.csv")
    predictions_path = save_dataframe(
        predictions_frame(results, y[test_idx], test_idx), case_output_dir, "test_predictions.csv"
    )

    best_name = str(accuracy_table.iloc[0]["model"])
    confusion, _, _ = confusion_summary(
        y[test_idx], results[best_name].predictions, labels=list(range(1, len(class_names) + 1))
    )
    confusion_path = save_dataframe(confusion.reset_index(), case_output_dir, "best_model_confusion.csv")

    extras: dict[str, object] = {
        "train_ratio": train_ratio,
        "train_size": int(len(train_idx)),
        "test_size": int(len(test_idx)),
        "classes": class_names,
        "best_model": best_name,
        "accuracy_csv": accuracy_path.name,
        "predictions_csv": predictions_path.name,
        "confusion_csv": confusion_path.name,
    }
    if persist_best:
        model_path = persist_model(results[best_name].model, case_output_dir, BEST_MODEL_FILENAME)
        extras["model_file"] = model_path.name
        print(f"Best model ({best_name}) saved to: {model_path}")

    metadata_path = write_case_metadata(
        case_dir=case_output_dir,
        case_id=case_id,
        case_name=case_name,
        package="classification",
        dataset="sklearn::load_iris",
        features=list(FEATURE_COLUMNS),
        target=LABEL_COLUMN,
        models=tuple(model_names),
        extras=extras,
    )
    print(f"Metadata written to: {metadata_path}")
    return case_output_dir


def accuracy_lookup(case_dir: Path) -> dict[str, float]:
    """Read back the accuracy table written by :func:`run_classifier_workflow`."""

    table = pd.read_csv(case_dir / "accuracy.csv")
    return {str(row.model): float(row.accuracy) for row in table.itertuples(index=False)}


__all__ = ["accuracy_lookup", "run_classifier_workflow"]
