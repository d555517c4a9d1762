"""Language/year lookups over three representations of the same table.

The programming languages table holds one row per language with the year it
was created. The same questions are answered against a raw object matrix
(year in column 0, language in column 1), a ``DataFrame`` with ``Year`` and
``Language`` columns, and a dictionary mapping each year to its languages.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Dict, List

import numpy as np
import pandas as pd


def read_delimited(path: Path | str, delimiter: str = ",") -> tuple[np.ndarray, np.ndarray]:
    """Read a delimited file with a header row into an object matrix.

    Numeric-looking cells become ``int``/``float``, everything else stays a
    string. Returns ``(data, header)``.
    """

    with Path(path).open(newline="", encoding="utf-8") as fh:
        rows = list(csv.reader(fh, delimiter=delimiter))
    if not rows:
        raise ValueError(f"No rows found in {path}")

    header = np.array(rows[0], dtype=object)
    body = [[_parse_cell(cell) for cell in row] for row in rows[1:] if row]
    data = np.empty((len(body), len(header)), dtype=object)
    for idx, row in enumerate(body):
        if len(row) != len(header):
            raise ValueError(f"Row {idx + 2} has {len(row)} fields, expected {len(header)}")
        data[idx, :] = row
    return data, header


def _parse_cell(cell: str) -> object:
    text = cell.strip()
    for caster in (int, float):
        try:
            return caster(text)
        except ValueError:
            continue
    return text


def write_delimited(data: np.ndarray, path: Path | str, delimiter: str = "-") -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    np.savetxt(target, np.asarray(data, dtype=object), delimiter=delimiter, fmt="%s")
    return target


def year_created_matrix(data: np.ndarray, language: str) -> int:
    matches = np.flatnonzero(data[:, 1] == language)
    if matches.size == 0:
        raise KeyError(f"Language not found: {language}")
    return data[matches[0], 0]


def langs_per_year_matrix(data: np.ndarray, year: int) -> int:
    return int(np.count_nonzero(data[:, 0] == year))


def matrix_to_frame(data: np.ndarray) -> pd.DataFrame:
    """Convert the raw matrix into a typed ``Year``/``Language`` frame."""

    return pd.DataFrame(
        {
            "Year": pd.Series(data[:, 0]).astype("Int64"),
            "Language": pd.Series(data[:, 1]).astype(str),
        }
    )


def year_created_frame(df: pd.DataFrame, language: str) -> int:
    matches = df.index[df["Language"] == language]
    if len(matches) == 0:
        raise KeyError(f"Language not found: {language}")
    return int(df.loc[matches[0], "Year"])


def langs_per_year_frame(df: pd.DataFrame, year: int) -> int:
    return int((df["Year"] == year).sum())


def build_language_index(data: np.ndarray) -> Dict[int, List[str]]:
    """Map each year to the languages created in it, keeping row order."""

    index: Dict[int, List[str]] = {}
    for year, language in data[:, :2]:
        index.setdefault(year, []).append(language)
    return index


def year_created_index(index: Dict[int, List[str]], language: str) -> int:
    for year, languages in index.items():
        if language in languages:
            return year
    raise KeyError(f"Language not found: {language}")


def langs_per_year_index(index: Dict[int, List[str]], year: int) -> int:
    return len(index.get(year, []))


def blank_first_year(data: np.ndarray) -> pd.DataFrame:
    """Return the language frame with the first year removed (set to missing)."""

    frame = pd.DataFrame({"Year": data[:, 0], "Language": data[:, 1]})
    frame["Year"] = frame["Year"].astype("Int64")
    if not frame.empty:
        frame.loc[0, "Year"] = pd.NA
    return frame


def drop_missing(df: pd.DataFrame) -> pd.DataFrame:
    return df.dropna().reset_index(drop=True)


__all__ = [
    "blank_first_year",
    "build_language_index",
    "drop_missing",
    "langs_per_year_frame",
    "langs_per_year_index",
    "langs_per_year_matrix",
    "matrix_to_frame",
    "read_delimited",
    "write_delimited",
    "year_created_frame",
    "year_created_index",
    "year_created_matrix",
]
