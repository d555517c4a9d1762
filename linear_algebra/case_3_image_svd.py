"""Case study 3: image channels, grayscale conversion and low-rank SVD."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

if __package__ in (None, ""):
    import sys
    from pathlib import Path as _Path

    sys.path.append(str(_Path(__file__).resolve().parents[1]))

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import requests
from PIL import Image
from sklearn.datasets import load_sample_image

from core.data_fetch import fetch_dataset
from core.shared_utils import resolve_output_dir, save_dataframe, write_case_metadata
from core.visualization import plot_grayscale_images
from linear_algebra.operations import (
    as_unit_float,
    isolate_channel,
    low_rank_approximation,
    split_rgb_channels,
    to_grayscale,
)
from linear_algebra.settings import (
    DEFAULT_OUTPUT_ROOT,
    FALLBACK_SAMPLE_IMAGE,
    IMAGE_FILENAME,
    LINEAR_ALGEBRA_CASES,
    SVD_RANKS,
)

CASE_ID = "case_3"
CASE_CONFIG = LINEAR_ALGEBRA_CASES[CASE_ID]
CASE_NAME = CASE_CONFIG.name


def load_image() -> tuple[np.ndarray, str]:
    """Return the course photo, or scikit-learn's bundled sample when offline."""

    try:
        path = fetch_dataset(IMAGE_FILENAME)
    except requests.RequestException as exc:
        print(f"Failed to download {IMAGE_FILENAME}: {exc}; using {FALLBACK_SAMPLE_IMAGE}")
        return load_sample_image(FALLBACK_SAMPLE_IMAGE), FALLBACK_SAMPLE_IMAGE
    with Image.open(path) as photo:
        return np.asarray(photo.convert("RGB")), str(path)


def _save_channel_images(image: np.ndarray, output_dir: Path) -> list[Path]:
    paths = []
    for channel in ("red", "green", "blue"):
        path = output_dir / f"channel_{channel}.png"
        plt.imsave(path, np.clip(isolate_channel(image, channel), 0.0, 1.0))
        paths.append(path)
    return paths


def run_case(
    *,
    image: np.ndarray | None = None,
    ranks: Sequence[int] = SVD_RANKS,
    output_root: Path | str | None = None,
    save_plots: bool = True,
) -> Path:
    """Decompose an RGB image and rebuild its grayscale version at several ranks."""

    case_output_dir = resolve_output_dir(CASE_ID, DEFAULT_OUTPUT_ROOT, output_root)
    source = "provided array"
    if image is None:
        image, source = load_image()

    print(f"=== Running {CASE_ID}: {CASE_NAME} ===")
    print(f"Image source: {source}")

    rgb = as_unit_float(image)
    channels = split_rgb_channels(rgb)
    print(f"Image shape: {rgb.shape}")
    print(f"First pixel (r, g, b): {tuple(round(float(channels[c][0, 0]), 4) for c in channels)}")

    gray = to_grayscale(rgb)
    _, full_error = low_rank_approximation(gray, min(gray.shape))
    print(f"Full-rank SVD reconstruction error: {full_error:.3e}")

    records = []
    approximations: dict[str, np.ndarray] = {"original": gray}
    for rank in ranks:
        approx, error = low_rank_approximation(gray, rank)
        stored_values = rank * (gray.shape[0] + gray.shape[1] + 1)
        records.append(
            {
                "rank": int(rank),
                "frobenius_error": error,
                "relative_error": error / float(np.linalg.norm(gray)),
                "stored_values": stored_values,
                "compression_ratio": gray.size / stored_values,
            }
        )
        approximations[f"rank {rank}"] = approx
        print(f"Rank {rank:>3}: ||X - X_k|| = {error:.4f}")

    errors_path = save_dataframe(pd.DataFrame(records), case_output_dir, "svd_rank_errors.csv")

    plot_paths: list[str] = []
    if save_plots:
        plot_paths.extend(p.name for p in _save_channel_images(rgb, case_output_dir))
        grid_path = plot_grayscale_images(
            approximations, title="Low-rank SVD reconstructions", output_dir=case_output_dir
        )
        plot_paths.append(grid_path.name)
        print(f"Reconstruction grid saved to: {grid_path}")

    metadata_path = write_case_metadata(
        case_dir=case_output_dir,
        case_id=CASE_ID,
        case_name=CASE_NAME,
        package="linear_algebra",
        dataset=source,
        features=list(channels),
        target=None,
        models=("SVD",),
        extras={
            "image_shape": list(rgb.shape),
            "ranks": [int(rank) for rank in ranks],
            "full_rank_error": full_error,
            "errors_csv": errors_path.name,
            "plots": plot_paths,
        },
    )
    print(f"Metadata written to: {metadata_path}")
    return case_output_dir


if __name__ == "__main__":
    run_case()
