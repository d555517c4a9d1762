"""Sample dataset download and loading utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

import pandas as pd
import requests
from sklearn.datasets import fetch_california_housing, load_iris
from statsmodels.datasets import get_rdataset

from config import DATASET_URLS, RAW_DATA_DIR

_CHUNK_SIZE = 1 << 16
_TIMEOUT = 60


def download_file(url: str, destination: Path | str, *, overwrite: bool = False) -> Path:
    """Download ``url`` into ``destination`` unless the file already exists."""

    target = Path(destination)
    if target.exists() and not overwrite:
        return target

    target.parent.mkdir(parents=True, exist_ok=True)
    response = requests.get(url, stream=True, timeout=_TIMEOUT)
    response.raise_for_status()

    partial = target.with_suffix(target.suffix + ".part")
    with partial.open("wb") as fh:
        for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
            fh.write(chunk)
    partial.replace(target)
    return target


def dataset_path(filename: str, data_dir: Path | str | None = None) -> Path:
    root = Path(data_dir) if data_dir is not None else RAW_DATA_DIR
    return root / filename


def fetch_dataset(filename: str, data_dir: Path | str | None = None) -> Path:
    """Return the local path of a registered dataset, downloading it on first use."""

    try:
        url = DATASET_URLS[filename]
    except KeyError as exc:
        raise KeyError(f"Unknown dataset file: {filename}") from exc
    return download_file(url, dataset_path(filename, data_dir))


def download_all(filenames: Iterable[str] | None = None) -> List[Path]:
    """Download every registered dataset, skipping files that fail."""

    selected = list(filenames) if filenames is not None else list(DATASET_URLS)
    downloaded: List[Path] = []
    for filename in selected:
        print(f"Data download: {filename}")
        try:
            downloaded.append(fetch_dataset(filename))
        except requests.RequestException as exc:
            print(f"Failed to download {filename}: {exc}")
    return downloaded


def load_faithful() -> pd.DataFrame:
    """Old Faithful geyser eruptions (``eruptions`` and ``waiting`` in minutes)."""

    frame = get_rdataset("faithful", "datasets").data
    return frame.loc[:, ["eruptions", "waiting"]].reset_index(drop=True)


def load_cats() -> pd.DataFrame:
    """Body and heart weights of cats from the R ``MASS`` package."""

    frame = get_rdataset("cats", "MASS").data
    return frame.loc[:, ["Sex", "Bwt", "Hwt"]].reset_index(drop=True)


def load_cars(data_dir: Path | str | None = None) -> pd.DataFrame:
    return pd.read_json(fetch_dataset("cars.json", data_dir))


def load_iris_frame() -> pd.DataFrame:
    """Iris measurements with the species name as a string column."""

    bunch = load_iris(as_frame=True)
    frame = bunch.frame.drop(columns=["target"])
    frame.columns = ["SepalLength", "SepalWidth", "PetalLength", "PetalWidth"]
    frame["Species"] = pd.Categorical.from_codes(bunch.target, bunch.target_names).astype(str)
    return frame


def load_california_houses() -> pd.DataFrame:
    """California housing blocks with coordinates and median value in dollars."""

    frame = fetch_california_housing(as_frame=True).frame
    houses = frame.rename(
        columns={
            "Longitude": "longitude",
            "Latitude": "latitude",
            "HouseAge": "housing_median_age",
            "MedInc": "median_income",
        }
    )
    houses["median_house_value"] = (houses.pop("MedHouseVal") * 100_000).round()
    return houses


__all__ = [
    "dataset_path",
    "download_all",
    "download_file",
    "fetch_dataset",
    "load_california_houses",
    "load_cars",
    "load_cats",
    "load_faithful",
    "load_iris_frame",
]
