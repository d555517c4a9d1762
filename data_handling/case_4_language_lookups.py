"""Case study 4: the same lookups against a matrix, a DataFrame and a dictionary."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

if __package__ in (None, ""):
    import sys
    from pathlib import Path as _Path

    sys.path.append(str(_Path(__file__).resolve().parents[1]))

import numpy as np
import pandas as pd

from core.data_fetch import fetch_dataset
from core.shared_utils import resolve_output_dir, save_dataframe, write_case_metadata
from data_handling.lookups import (
    build_language_index,
    langs_per_year_frame,
    langs_per_year_index,
    langs_per_year_matrix,
    matrix_to_frame,
    read_delimited,
    year_created_frame,
    year_created_index,
    year_created_matrix,
)
from data_handling.settings import (
    DATA_HANDLING_CASES,
    DEFAULT_OUTPUT_ROOT,
    LANGUAGES_FILENAME,
    LOOKUP_LANGUAGES,
    LOOKUP_YEARS,
)

CASE_ID = "case_4"
CASE_CONFIG = DATA_HANDLING_CASES[CASE_ID]
CASE_NAME = CASE_CONFIG.name


def _safe_lookup(func, *args) -> int | None:
    try:
        return func(*args)
    except KeyError as exc:
        print(f"Lookup failed: {exc}")
        return None


def run_case(
    *,
    language_matrix: np.ndarray | None = None,
    languages: Sequence[str] = LOOKUP_LANGUAGES,
    years: Sequence[int] = LOOKUP_YEARS,
    output_root: Path | str | None = None,
) -> Path:
    """Compare answers from the three table representations."""

    case_output_dir = resolve_output_dir(CASE_ID, DEFAULT_OUTPUT_ROOT, output_root)

    print(f"=== Running {CASE_ID}: {CASE_NAME} ===")

    if language_matrix is None:
        language_matrix, _ = read_delimited(fetch_dataset(LANGUAGES_FILENAME), ",")

    frame = matrix_to_frame(language_matrix)
    index = build_language_index(language_matrix)
    print(f"Distinct years: {len(index)} (matrix unique count: {len(pd.unique(language_matrix[:, 0]))})")

    records: list[dict[str, object]] = []
    for language in languages:
        answers = {
            "matrix": _safe_lookup(year_created_matrix, language_matrix, language),
            "dataframe": _safe_lookup(year_created_frame, frame, language),
            "dictionary": _safe_lookup(year_created_index, index, language),
        }
        if answers["matrix"] is not None:
            print(f"{language} was created in {answers['matrix']}.")
        records.append({"question": "year_created", "argument": language, **answers})

    for year in years:
        answers = {
            "matrix": langs_per_year_matrix(language_matrix, year),
            "dataframe": langs_per_year_frame(frame, year),
            "dictionary": langs_per_year_index(index, year),
        }
        print(f"In {year}, {answers['matrix']} language(s) was/were created.")
        records.append({"question": "langs_per_year", "argument": year, **answers})

    answers_df = pd.DataFrame(records)
    answers_df["consistent"] = answers_df[["matrix", "dataframe", "dictionary"]].nunique(axis=1, dropna=False) == 1
    answers_path = save_dataframe(answers_df, case_output_dir, "lookup_answers.csv")
    print(f"Lookup answers saved to: {answers_path}")

    metadata_path = write_case_metadata(
        case_dir=case_output_dir,
        case_id=CASE_ID,
        case_name=CASE_NAME,
        package="data_handling",
        dataset=LANGUAGES_FILENAME,
        features=["Year", "Language"],
        target=None,
        models=(),
        extras={
            "languages": list(languages),
            "years": [int(year) for year in years],
            "all_consistent": bool(answers_df["consistent"].all()),
        },
    )
    print(f"Metadata written to: {metadata_path}")
    return case_output_dir


if __name__ == "__main__":
    run_case()
