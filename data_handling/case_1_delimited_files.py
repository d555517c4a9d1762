"""Case study 1: the programming languages CSV as a matrix and as a DataFrame."""

from __future__ import annotations

import argparse
import time
from pathlib import Path

if __package__ in (None, ""):
    import sys
    from pathlib import Path as _Path

    sys.path.append(str(_Path(__file__).resolve().parents[1]))

import pandas as pd

from core.data_fetch import fetch_dataset
from core.shared_utils import display_dataframe, resolve_output_dir, save_dataframe, write_case_metadata
from data_handling.lookups import read_delimited, write_delimited
from data_handling.settings import (
    BENCHMARK_REPEATS,
    DATA_HANDLING_CASES,
    DEFAULT_OUTPUT_ROOT,
    LANGUAGES_FILENAME,
    MATRIX_DELIMITER,
)

CASE_ID = "case_1"
CASE_CONFIG = DATA_HANDLING_CASES[CASE_ID]
CASE_NAME = CASE_CONFIG.name


def _best_time(func, repeats: int) -> float:
    timings = []
    for _ in range(max(1, repeats)):
        start = time.perf_counter()
        func()
        timings.append(time.perf_counter() - start)
    return min(timings)


def run_case(
    *,
    csv_path: Path | str | None = None,
    output_root: Path | str | None = None,
    repeats: int = BENCHMARK_REPEATS,
) -> Path:
    """Load the languages CSV two ways, write it back and compare reader speed."""

    case_output_dir = resolve_output_dir(CASE_ID, DEFAULT_OUTPUT_ROOT, output_root)
    source = Path(csv_path) if csv_path is not None else fetch_dataset(LANGUAGES_FILENAME)

    print(f"=== Running {CASE_ID}: {CASE_NAME} ===")
    print(f"Dataset: {source}")

    data, header = read_delimited(source, ",")
    print(f"Header: {list(header)}")
    print(f"Matrix shape: {data.shape}")

    matrix_path = write_delimited(
        data, case_output_dir / "programminglanguages_dlm.txt", MATRIX_DELIMITER
    )
    print(f"Matrix written with '{MATRIX_DELIMITER}' delimiter to: {matrix_path}")

    df = pd.read_csv(source)
    display_dataframe(df, "First 10 rows", rows=10)
    print(f"\nColumns: {list(df.columns)}")
    if "year" in df.columns:
        print(f"'year' column dtype: {df['year'].dtype}")

    csv_out = save_dataframe(df, case_output_dir, "programminglanguages_CSV.csv")
    print(f"DataFrame written to: {csv_out}")

    description = df.describe(include="all").transpose().reset_index().rename(columns={"index": "column"})
    description_path = save_dataframe(description, case_output_dir, "describe.csv")
    print(description)

    matrix_seconds = _best_time(lambda: read_delimited(source, ","), repeats)
    frame_seconds = _best_time(lambda: pd.read_csv(source), repeats)
    timings = pd.DataFrame(
        {
            "reader": ["delimited_matrix", "pandas_read_csv"],
            "best_seconds": [matrix_seconds, frame_seconds],
        }
    )
    timings_path = save_dataframe(timings, case_output_dir, "reader_timings.csv")
    print(f"\nReader timings (best of {repeats}):")
    print(timings.to_string(index=False))

    metadata_path = write_case_metadata(
        case_dir=case_output_dir,
        case_id=CASE_ID,
        case_name=CASE_NAME,
        package="data_handling",
        dataset=source,
        features=[str(col) for col in header],
        target=None,
        models=(),
        extras={
            "rows": int(data.shape[0]),
            "matrix_txt": matrix_path.name,
            "csv": csv_out.name,
            "describe_csv": description_path.name,
            "timings_csv": timings_path.name,
        },
    )
    print(f"Metadata written to: {metadata_path}")
    return case_output_dir


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=CASE_NAME)
    parser.add_argument("--csv", dest="csv_path", default=None, help="Local CSV path (downloaded when omitted).")
    parser.add_argument("--output-root", dest="output_root", default=None, help="Override the output directory.")
    return parser.parse_args()


if __name__ == "__main__":
    args = _parse_args()
    run_case(csv_path=args.csv_path, output_root=args.output_root)
