"""Case study 1: solving a linear system, checking LU, QR and Cholesky, and matrix structure."""

from __future__ import annotations

from pathlib import Path

if __package__ in (None, ""):
    import sys
    from pathlib import Path as _Path

    sys.path.append(str(_Path(__file__).resolve().parents[1]))

import numpy as np
import pandas as pd

from config import RANDOM_SEED
from core.shared_utils import resolve_output_dir, save_dataframe, write_case_metadata
from linear_algebra.operations import (
    factorization_report,
    is_positive_definite,
    solve_system,
    structure_report,
)
from linear_algebra.settings import DEFAULT_OUTPUT_ROOT, LINEAR_ALGEBRA_CASES, MATRIX_SIZE

CASE_ID = "case_1"
CASE_CONFIG = LINEAR_ALGEBRA_CASES[CASE_ID]
CASE_NAME = CASE_CONFIG.name


def run_case(
    *,
    matrix: np.ndarray | None = None,
    rhs: np.ndarray | None = None,
    output_root: Path | str | None = None,
    random_state: int = RANDOM_SEED,
) -> Path:
    """Solve ``Ax = b`` for a random square system and factorize ``A``."""

    case_output_dir = resolve_output_dir(CASE_ID, DEFAULT_OUTPUT_ROOT, output_root)
    rng = np.random.default_rng(random_state)
    A = np.asarray(matrix, dtype=float) if matrix is not None else rng.random((MATRIX_SIZE, MATRIX_SIZE))
    b = np.asarray(rhs, dtype=float) if rhs is not None else rng.random(A.shape[0])

    print(f"=== Running {CASE_ID}: {CASE_NAME} ===")
    print(f"A shape: {A.shape}, transpose is a view: {np.shares_memory(A, A.T)}")
    print(f"A positive definite: {is_positive_definite(A)}")
    print(f"A Aᵀ positive definite: {is_positive_definite(A @ A.T)}")

    x, residual = solve_system(A, b)
    print(f"Solved Ax = b, ||Ax - b|| = {residual:.3e}")

    solution_path = save_dataframe(
        pd.DataFrame({"b": b, "x": x}), case_output_dir, "linear_system_solution.csv"
    )

    report = factorization_report(A)
    print("\nFactorization residuals (should be near zero):")
    print(report.to_string(index=False))
    report_path = save_dataframe(report, case_output_dir, "factorization_residuals.csv")

    structure = structure_report(
        {
            "A": A,
            "AAᵀ": A @ A.T,
            "triu(A)": np.triu(A),
            "[A b]": np.column_stack([A, b]),
        }
    )
    print("\nMatrix structure and the factorization it dispatches to:")
    print(structure.to_string(index=False))
    structure_path = save_dataframe(structure, case_output_dir, "matrix_structure.csv")

    metadata_path = write_case_metadata(
        case_dir=case_output_dir,
        case_id=CASE_ID,
        case_name=CASE_NAME,
        package="linear_algebra",
        dataset="random uniform matrix",
        features=[f"shape={A.shape[0]}x{A.shape[1]}"],
        target=None,
        models=("LU", "QR", "Cholesky"),
        extras={
            "solve_residual": residual,
            "max_factorization_residual": float(report["residual"].max()),
            "solution_csv": solution_path.name,
            "residuals_csv": report_path.name,
            "structure_csv": structure_path.name,
            "factorization_of_A": str(structure.loc[0, "factorization"]),
        },
    )
    print(f"Metadata written to: {metadata_path}")
    return case_output_dir


if __name__ == "__main__":
    run_case()
