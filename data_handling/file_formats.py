"""Thin wrappers around array and spreadsheet file formats."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Callable, Dict, Mapping

import h5py
import numpy as np
import pandas as pd
from scipy.io import loadmat, savemat

_CELL_RANGE = re.compile(r"^([A-Z]+)(\d+):([A-Z]+)(\d+)$")


def save_hdf5(path: Path | str, arrays: Mapping[str, np.ndarray]) -> Path:
    """Write named arrays into an HDF5 container (the layout JLD files use)."""

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    with h5py.File(target, "w") as fh:
        for key, value in arrays.items():
            fh.create_dataset(key, data=np.asarray(value))
    return target


def load_hdf5(path: Path | str) -> Dict[str, np.ndarray]:
    with h5py.File(Path(path), "r") as fh:
        return {key: fh[key][()] for key in fh.keys() if isinstance(fh[key], h5py.Dataset)}


def save_npz(path: Path | str, arrays: Mapping[str, np.ndarray]) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    np.savez(target, **{key: np.asarray(value) for key, value in arrays.items()})
    return target


def load_npz(path: Path | str) -> Dict[str, np.ndarray]:
    with np.load(Path(path), allow_pickle=False) as data:
        return {key: data[key] for key in data.files}


def save_mat(path: Path | str, arrays: Mapping[str, np.ndarray]) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    savemat(target, {key: np.asarray(value) for key, value in arrays.items()})
    return target


def load_mat(path: Path | str) -> Dict[str, np.ndarray]:
    raw = loadmat(Path(path))
    return {key: value for key, value in raw.items() if not key.startswith("__")}


FORMAT_HANDLERS: Dict[str, tuple[Callable, Callable]] = {
    "h5": (save_hdf5, load_hdf5),
    "npz": (save_npz, load_npz),
    "mat": (save_mat, load_mat),
}


def roundtrip_arrays(
    arrays: Mapping[str, np.ndarray],
    output_dir: Path,
    *,
    stem: str = "mywrite",
) -> Dict[str, Dict[str, object]]:
    """Write and reload ``arrays`` in every registered format.

    Returns per-format ``path``, ``loaded`` arrays and an ``equal`` flag telling
    whether every reloaded array matches its original.
    """

    results: Dict[str, Dict[str, object]] = {}
    for extension, (saver, loader) in FORMAT_HANDLERS.items():
        path = saver(output_dir / f"{stem}.{extension}", arrays)
        loaded = loader(path)
        equal = all(
            key in loaded and np.array_equal(np.asarray(loaded[key]), np.asarray(value))
            for key, value in arrays.items()
        )
        results[extension] = {"path": path, "loaded": loaded, "equal": equal}
    return results


def _column_index(letters: str) -> int:
    index = 0
    for letter in letters:
        index = index * 26 + (ord(letter) - ord("A") + 1)
    return index - 1


def parse_cell_range(cell_range: str) -> tuple[int, int, int, int]:
    """Convert ``"A1:F9"`` into zero-based ``(first_row, last_row, first_col, last_col)``."""

    match = _CELL_RANGE.match(cell_range.strip().upper())
    if match is None:
        raise ValueError(f"Invalid cell range: {cell_range}")
    col_start, row_start, col_end, row_end = match.groups()
    first_row, last_row = int(row_start) - 1, int(row_end) - 1
    first_col, last_col = _column_index(col_start), _column_index(col_end)
    if first_row > last_row or first_col > last_col:
        raise ValueError(f"Cell range must run top-left to bottom-right: {cell_range}")
    return first_row, last_row, first_col, last_col


def read_excel_range(path: Path | str, sheet: str, cell_range: str) -> np.ndarray:
    """Return the raw cell values of ``cell_range`` as an object matrix."""

    first_row, last_row, first_col, last_col = parse_cell_range(cell_range)
    raw = pd.read_excel(
        path,
        sheet_name=sheet,
        header=None,
        skiprows=first_row,
        nrows=last_row - first_row + 1,
        engine="openpyxl",
    )
    return raw.iloc[:, first_col : last_col + 1].to_numpy(dtype=object)


def read_excel_table(path: Path | str, sheet: str) -> pd.DataFrame:
    return pd.read_excel(path, sheet_name=sheet, engine="openpyxl")


__all__ = [
    "FORMAT_HANDLERS",
    "load_hdf5",
    "load_mat",
    "load_npz",
    "parse_cell_range",
    "read_excel_range",
    "read_excel_table",
    "roundtrip_arrays",
    "save_hdf5",
    "save_mat",
    "save_npz",
]
