"""Case study 3: XLSX sheets and binary array formats (HDF5, NPZ, MAT)."""

from __future__ import annotations

from pathlib import Path

if __package__ in (None, ""):
    import sys
    from pathlib import Path as _Path

    sys.path.append(str(_Path(__file__).resolve().parents[1]))

import numpy as np
import pandas as pd
import requests

from config import RANDOM_SEED
from core.data_fetch import fetch_dataset
from core.shared_utils import display_dataframe, resolve_output_dir, save_dataframe, write_case_metadata
from data_handling.file_formats import read_excel_range, read_excel_table, roundtrip_arrays
from data_handling.settings import (
    DATA_HANDLING_CASES,
    DEFAULT_OUTPUT_ROOT,
    ROUNDTRIP_KEY,
    ROUNDTRIP_SHAPE,
    ZILLOW_CELL_RANGE,
    ZILLOW_FILENAME,
    ZILLOW_SHEET,
)

CASE_ID = "case_3"
CASE_CONFIG = DATA_HANDLING_CASES[CASE_ID]
CASE_NAME = CASE_CONFIG.name


def _resolve_workbook(workbook_path: Path | str | None) -> Path | None:
    if workbook_path is not None:
        path = Path(workbook_path)
        return path if path.exists() else None
    try:
        return fetch_dataset(ZILLOW_FILENAME)
    except requests.RequestException as exc:
        print(f"Failed to download {ZILLOW_FILENAME}: {exc}")
        return None


def run_case(
    *,
    workbook_path: Path | str | None = None,
    matrix: np.ndarray | None = None,
    output_root: Path | str | None = None,
    include_workbook: bool = True,
) -> Path:
    """Inspect the Zillow workbook and round-trip a matrix through array formats."""

    case_output_dir = resolve_output_dir(CASE_ID, DEFAULT_OUTPUT_ROOT, output_root)

    print(f"=== Running {CASE_ID}: {CASE_NAME} ===")

    workbook_summary: dict[str, object] = {"workbook": None}
    workbook = _resolve_workbook(workbook_path) if include_workbook else None
    if workbook is None:
        print("Workbook not available; skipping the XLSX part of the case.")
    else:
        cells = read_excel_range(workbook, ZILLOW_SHEET, ZILLOW_CELL_RANGE)
        print(f"\nCells {ZILLOW_CELL_RANGE} of '{ZILLOW_SHEET}':")
        print(pd.DataFrame(cells).to_string(index=False, header=False))

        table = read_excel_table(workbook, ZILLOW_SHEET)
        display_dataframe(table, f"Sheet '{ZILLOW_SHEET}' as a table")
        print(f"Last 10 columns: {list(table.columns[-10:])}")
        head_path = save_dataframe(table.head(20), case_output_dir, "sale_counts_city_head.csv")
        workbook_summary = {
            "workbook": str(workbook),
            "sheet": ZILLOW_SHEET,
            "sheet_shape": list(table.shape),
            "sheet_head_csv": head_path.name,
        }

    if matrix is None:
        rng = np.random.default_rng(RANDOM_SEED)
        matrix = rng.random(ROUNDTRIP_SHAPE)

    results = roundtrip_arrays({ROUNDTRIP_KEY: matrix}, case_output_dir)
    rows = []
    for extension, result in results.items():
        rows.append({"format": extension, "path": Path(result["path"]).name, "equal": bool(result["equal"])})
        print(f"{extension.upper():>4}: written to {result['path']} | identical after reload: {result['equal']}")
    roundtrip_path = save_dataframe(pd.DataFrame(rows), case_output_dir, "format_roundtrip.csv")

    metadata_path = write_case_metadata(
        case_dir=case_output_dir,
        case_id=CASE_ID,
        case_name=CASE_NAME,
        package="data_handling",
        dataset=workbook_summary["workbook"],
        features=[ROUNDTRIP_KEY],
        target=None,
        models=(),
        extras={
            **workbook_summary,
            "matrix_shape": list(np.shape(matrix)),
            "roundtrip_csv": roundtrip_path.name,
        },
    )
    print(f"Metadata written to: {metadata_path}")
    return case_output_dir


if __name__ == "__main__":
    run_case()
