"""Case study 2: listings vs sales per US state (Zillow, February 2020)."""

from __future__ import annotations

import argparse
from pathlib import Path

if __package__ in (None, ""):
    import sys
    from pathlib import Path as _Path

    sys.path.append(str(_Path(__file__).resolve().parents[1]))

import pandas as pd
import requests

from core.data_fetch import fetch_dataset
from core.shared_utils import display_dataframe, resolve_output_dir, save_dataframe, write_case_metadata
from core.visualization import plot_small_multiples
from data_handling.file_formats import read_excel_table
from regression.fitting import fit_state_models, prepare_zillow, top_states
from regression.settings import (
    DEFAULT_OUTPUT_ROOT,
    LISTING_COLUMN,
    LISTINGS_SHEET,
    PLOT_LIMITS,
    REGRESSION_CASES,
    SALES_COLUMN,
    SALES_SHEET,
    STATE_COLUMN,
    TOP_STATES,
    ZILLOW_FILENAME,
)

CASE_ID = "case_2"
CASE_CONFIG = REGRESSION_CASES[CASE_ID]
CASE_NAME = CASE_CONFIG.name


def load_zillow_sheets(workbook_path: Path | str | None = None) -> tuple[pd.DataFrame, pd.DataFrame]:
    """Monthly listings and sale counts sheets of the Zillow workbook."""

    path = Path(workbook_path) if workbook_path is not None else fetch_dataset(ZILLOW_FILENAME)
    return read_excel_table(path, LISTINGS_SHEET), read_excel_table(path, SALES_SHEET)


def run_case(
    *,
    listings: pd.DataFrame | None = None,
    sales: pd.DataFrame | None = None,
    workbook_path: Path | str | None = None,
    n_states: int = TOP_STATES,
    output_root: Path | str | None = None,
    save_plots: bool = True,
) -> Path:
    case_output_dir = resolve_output_dir(CASE_ID, DEFAULT_OUTPUT_ROOT, output_root)
    if listings is None or sales is None:
        try:
            listings, sales = load_zillow_sheets(workbook_path)
        except (requests.RequestException, FileNotFoundError) as exc:
            print(f"Zillow workbook unavailable ({exc}); aborting case.")
            return case_output_dir

    print(f"=== Running {CASE_ID}: {CASE_NAME} ===")
    joined = prepare_zillow(listings, sales)
    display_dataframe(joined, "Listings joined with sales")
    states = top_states(joined, n_states)
    print(f"Top {len(states)} states by number of regions: {', '.join(states)}")

    joined_path = save_dataframe(joined, case_output_dir, "listings_vs_sales.csv")

    tables: dict[str, str] = {}
    plot_paths: list[str] = []
    for label, intercept in (("with_intercept", True), ("no_intercept", False)):
        coefficients, panels = fit_state_models(joined, states, intercept=intercept)
        print(f"\nPer-state fits ({label.replace('_', ' ')}):")
        print(coefficients.round(4).to_string(index=False))
        tables[label] = save_dataframe(coefficients, case_output_dir, f"state_fits_{label}.csv").name
        if save_plots and panels:
            plot_paths.append(
                plot_small_multiples(
                    panels,
                    title=f"Listings vs sales per state ({label.replace('_', ' ')})",
                    limits=PLOT_LIMITS,
                    output_dir=case_output_dir,
                ).name
            )

    metadata_path = write_case_metadata(
        case_dir=case_output_dir,
        case_id=CASE_ID,
        case_name=CASE_NAME,
        package="regression",
        dataset=ZILLOW_FILENAME,
        features=[LISTING_COLUMN],
        target=SALES_COLUMN,
        models=("ols: Y ~ X", "ols: Y ~ 0 + X"),
        extras={
            "rows": int(len(joined)),
            "group_column": STATE_COLUMN,
            "states": states,
            "joined_csv": joined_path.name,
            "fit_tables": tables,
            "plots": plot_paths,
        },
    )
    print(f"Metadata written to: {metadata_path}")
    return case_output_dir


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=CASE_NAME)
    parser.add_argument("--workbook", type=Path, default=None, help="Path to the Zillow workbook")
    parser.add_argument("--states", type=int, default=TOP_STATES)
    parser.add_argument("--output-root", type=Path, default=None)
    return parser.parse_args()


if __name__ == "__main__":
    args = _parse_args()
    run_case(workbook_path=args.workbook, n_states=args.states, output_root=args.output_root)
