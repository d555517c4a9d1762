"""Configuration for the data_handling package."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

DEFAULT_OUTPUT_ROOT = Path("data_handling") / "outputs"
LANGUAGES_FILENAME: str = "programming_languages.csv"
ZILLOW_FILENAME: str = "zillow_data_download_april2020.xlsx"
ZILLOW_SHEET: str = "Sale_counts_city"
ZILLOW_CELL_RANGE: str = "A1:F9"
MATRIX_DELIMITER: str = "-"
BENCHMARK_REPEATS: int = 5
ROUNDTRIP_SHAPE: tuple[int, int] = (4, 5)
ROUNDTRIP_KEY: str = "tempdata"
LOOKUP_LANGUAGES: tuple[str, ...] = ("Julia", "COBOL")
LOOKUP_YEARS: tuple[int, ...] = (1988, 2006)


@dataclass(frozen=True)
class CaseConfig:
    """Descriptor for a data handling case."""

    case_id: str
    name: str
    description: str | None = None


DATA_HANDLING_CASES: Mapping[str, CaseConfig] = {
    "case_1": CaseConfig(
        case_id="case_1",
        name="Case 1: delimited files as matrix and DataFrame",
        description="Read and write the programming languages CSV with a delimited reader and pandas.",
    ),
    "case_2": CaseConfig(
        case_id="case_2",
        name="Case 2: joining tables and dropping missing rows",
        description="Inner join two small tables and drop incomplete rows.",
    ),
    "case_3": CaseConfig(
        case_id="case_3",
        name="Case 3: spreadsheet and binary array formats",
        description="Read an XLSX sheet and round-trip a matrix through HDF5, NPZ and MAT files.",
    ),
    "case_4": CaseConfig(
        case_id="case_4",
        name="Case 4: lookups over matrix, DataFrame and dictionary",
        description="Answer 'when was X created' and 'how many languages per year' three ways.",
    ),
}


def get_case_config(case_id: str) -> CaseConfig:
    try:
        return DATA_HANDLING_CASES[case_id]
    except KeyError as exc:
        raise KeyError(f"Unknown data handling case id: {case_id}") from exc


AVAILABLE_CASE_IDS: tuple[str, ...] = tuple(DATA_HANDLING_CASES.keys())

__all__ = [
    "AVAILABLE_CASE_IDS",
    "BENCHMARK_REPEATS",
    "CaseConfig",
    "DATA_HANDLING_CASES",
    "DEFAULT_OUTPUT_ROOT",
    "LANGUAGES_FILENAME",
    "LOOKUP_LANGUAGES",
    "LOOKUP_YEARS",
    "MATRIX_DELIMITER",
    "ROUNDTRIP_KEY",
    "ROUNDTRIP_SHAPE",
    "ZILLOW_CELL_RANGE",
    "ZILLOW_FILENAME",
    "ZILLOW_SHEET",
    "get_case_config",
]
