"""Case study 2: diagonal, identity and sparse matrices."""

from __future__ import annotations

from pathlib import Path

if __package__ in (None, ""):
    import sys
    from pathlib import Path as _Path

    sys.path.append(str(_Path(__file__).resolve().parents[1]))

import numpy as np
import pandas as pd
from scipy import sparse

from config import RANDOM_SEED
from core.shared_utils import resolve_output_dir, save_dataframe, write_case_metadata
from linear_algebra.operations import sparse_footprint, sparse_random
from linear_algebra.settings import (
    DEFAULT_OUTPUT_ROOT,
    DIAGONAL_VALUES,
    LINEAR_ALGEBRA_CASES,
    MATRIX_SIZE,
    SPARSE_DENSITY,
    SPARSE_SHAPE,
)

CASE_ID = "case_2"
CASE_CONFIG = LINEAR_ALGEBRA_CASES[CASE_ID]
CASE_NAME = CASE_CONFIG.name


def run_case(
    *,
    output_root: Path | str | None = None,
    random_state: int = RANDOM_SEED,
) -> Path:
    """Build structured matrices and compare dense against sparse storage."""

    case_output_dir = resolve_output_dir(CASE_ID, DEFAULT_OUTPUT_ROOT, output_root)
    rng = np.random.default_rng(random_state)

    print(f"=== Running {CASE_ID}: {CASE_NAME} ===")

    D = np.diag(DIAGONAL_VALUES)
    D_sparse = sparse.diags(DIAGONAL_VALUES)
    print(f"Diagonal matrix:\n{D}")
    print(f"Sparse diagonal stores {D_sparse.nnz} values instead of {D.size}")

    A = rng.random((MATRIX_SIZE, MATRIX_SIZE))
    identity = np.eye(MATRIX_SIZE)
    shifted_once = A + identity
    shifted_twice = A + 2 * identity
    print(f"Diagonal shift A + I adds {np.trace(shifted_once - A):.0f} to the trace")
    print(f"Diagonal shift A + 2I adds {np.trace(shifted_twice - A):.0f} to the trace")

    S = sparse_random(SPARSE_SHAPE, SPARSE_DENSITY, random_state=random_state)
    footprint = sparse_footprint(S)
    print(f"There are {footprint['rows']} rows in the matrix.")
    print(f"There are {footprint['cols']} columns in the matrix.")
    print(f"Non-zero values: {np.round(S.tocsc().data, 4).tolist()}")
    print(f"Regular matrix = {footprint['dense_bytes']} bytes.")
    print(f"Sparse matrix = {footprint['sparse_bytes']} bytes.")

    dense_path = save_dataframe(
        pd.DataFrame(S.toarray()), case_output_dir, "sparse_matrix_dense_view.csv"
    )
    footprint_path = save_dataframe(
        pd.DataFrame([footprint]), case_output_dir, "sparse_footprint.csv"
    )

    metadata_path = write_case_metadata(
        case_dir=case_output_dir,
        case_id=CASE_ID,
        case_name=CASE_NAME,
        package="linear_algebra",
        dataset="generated matrices",
        features=["diagonal", "identity", "sparse"],
        target=None,
        models=(),
        extras={
            "sparse_density": SPARSE_DENSITY,
            "footprint": footprint,
            "dense_csv": dense_path.name,
            "footprint_csv": footprint_path.name,
        },
    )
    print(f"Metadata written to: {metadata_path}")
    return case_output_dir


if __name__ == "__main__":
    run_case()
