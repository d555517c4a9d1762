"""Case study 2: joining two small tables and dropping missing rows."""

from __future__ import annotations

from pathlib import Path

if __package__ in (None, ""):
    import sys
    from pathlib import Path as _Path

    sys.path.append(str(_Path(__file__).resolve().parents[1]))

import numpy as np
import pandas as pd

from core.data_fetch import fetch_dataset
from core.shared_utils import display_dataframe, resolve_output_dir, save_dataframe, write_case_metadata
from data_handling.lookups import blank_first_year, drop_missing, read_delimited
from data_handling.settings import DATA_HANDLING_CASES, DEFAULT_OUTPUT_ROOT, LANGUAGES_FILENAME

CASE_ID = "case_2"
CASE_CONFIG = DATA_HANDLING_CASES[CASE_ID]
CASE_NAME = CASE_CONFIG.name

FOODS = ("Apple", "Cucumber", "Tomato", "Banana")
CALORIES = (105, 47, 22, 105)
PRICES = (0.85, 1.6, 0.8, 0.6)


def build_food_tables() -> tuple[pd.DataFrame, pd.DataFrame]:
    calories = pd.DataFrame({"Item": list(FOODS), "Calories": list(CALORIES)})
    prices = pd.DataFrame({"Item": list(FOODS), "Price": list(PRICES)})
    return calories, prices


def join_on_item(calories: pd.DataFrame, prices: pd.DataFrame) -> pd.DataFrame:
    return calories.merge(prices, on="Item", how="inner")


def run_case(
    *,
    language_matrix: np.ndarray | None = None,
    output_root: Path | str | None = None,
) -> Path:
    """Inner join calories with prices, then drop rows with a missing year."""

    case_output_dir = resolve_output_dir(CASE_ID, DEFAULT_OUTPUT_ROOT, output_root)

    print(f"=== Running {CASE_ID}: {CASE_NAME} ===")

    calories, prices = build_food_tables()
    combined = join_on_item(calories, prices)
    display_dataframe(combined, "Calories joined with prices")
    joined_path = save_dataframe(combined, case_output_dir, "food_calories_prices.csv")
    print(f"Joined table saved to: {joined_path}")

    if language_matrix is None:
        language_matrix, _ = read_delimited(fetch_dataset(LANGUAGES_FILENAME), ",")

    with_missing = blank_first_year(language_matrix)
    cleaned = drop_missing(with_missing)
    print(
        f"\nLanguages with a blanked first year: {len(with_missing)} rows, "
        f"{len(cleaned)} after dropping missing values"
    )
    cleaned_path = save_dataframe(cleaned, case_output_dir, "languages_without_missing.csv")

    metadata_path = write_case_metadata(
        case_dir=case_output_dir,
        case_id=CASE_ID,
        case_name=CASE_NAME,
        package="data_handling",
        dataset=LANGUAGES_FILENAME,
        features=["Item", "Calories", "Price"],
        target=None,
        models=(),
        extras={
            "joined_rows": int(len(combined)),
            "rows_before_dropna": int(len(with_missing)),
            "rows_after_dropna": int(len(cleaned)),
            "cleaned_csv": cleaned_path.name,
        },
    )
    print(f"Metadata written to: {metadata_path}")
    return case_output_dir


if __name__ == "__main__":
    run_case()
