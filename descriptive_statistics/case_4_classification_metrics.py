"""Case study 4: confusion matrices, accuracy, binary outcome counts, recall and precision."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

if __package__ in (None, ""):
    import sys
    from pathlib import Path as _Path

    sys.path.append(str(_Path(__file__).resolve().parents[1]))

from core.model_evaluation import (
    binary_outcome_counts,
    binary_recall_precision,
    confusion_summary,
    find_accuracy,
)
from core.shared_utils import resolve_output_dir, save_dataframe, write_case_metadata
from descriptive_statistics.settings import (
    BINARY_PRED,
    BINARY_TRUE,
    DEFAULT_OUTPUT_ROOT,
    DESCRIPTIVE_STATISTICS_CASES,
    MULTICLASS_PRED,
    MULTICLASS_TRUE,
)

CASE_ID = "case_4"
CASE_CONFIG = DESCRIPTIVE_STATISTICS_CASES[CASE_ID]
CASE_NAME = CASE_CONFIG.name


def run_case(
    *,
    y_true: Sequence[int] = MULTICLASS_TRUE,
    y_pred: Sequence[int] = MULTICLASS_PRED,
    binary_true: Sequence[int] = BINARY_TRUE,
    binary_pred: Sequence[int] = BINARY_PRED,
    output_root: Path | str | None = None,
) -> Path:
    """Score toy prediction vectors against their targets."""

    case_output_dir = resolve_output_dir(CASE_ID, DEFAULT_OUTPUT_ROOT, output_root)

    print(f"=== Running {CASE_ID}: {CASE_NAME} ===")

    counts, normalised, accuracy = confusion_summary(list(y_true), list(y_pred))
    print("Confusion matrix (rows = actual, columns = predicted):")
    print(counts)
    print("\nRow-normalised confusion matrix:")
    print(normalised.round(4))
    print(f"\nAccuracy = {accuracy:.4f} (matches direct count: {accuracy == find_accuracy(y_pred, y_true)})")

    counts_path = save_dataframe(counts.reset_index(), case_output_dir, "confusion_matrix.csv")
    normalised_path = save_dataframe(normalised.reset_index(), case_output_dir, "confusion_matrix_normalised.csv")

    outcomes = binary_outcome_counts(list(binary_true), list(binary_pred), positive=1, negative=0)
    print("\nBinary outcomes: " + ", ".join(f"{key.upper()}={value}" for key, value in outcomes.items()))
    recall, precision = binary_recall_precision(list(binary_true), list(binary_pred), positive=1)
    print(f"Recall = {recall:.4f}")
    print(f"Precision = {precision:.4f}")

    metadata_path = write_case_metadata(
        case_dir=case_output_dir,
        case_id=CASE_ID,
        case_name=CASE_NAME,
        package="descriptive_statistics",
        dataset="toy label vectors",
        features=["y", "y_hat"],
        target="y",
        models=(),
        extras={
            "accuracy": accuracy,
            "recall": recall,
            "precision": precision,
            **outcomes,
            "confusion_csv": counts_path.name,
            "confusion_normalised_csv": normalised_path.name,
        },
    )
    print(f"Metadata written to: {metadata_path}")
    return case_output_dir


if __name__ == "__main__":
    run_case()
