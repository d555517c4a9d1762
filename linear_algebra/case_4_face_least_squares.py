"""Case study 4: reconstructing a face as a least-squares mix of other faces."""

from __future__ import annotations

from pathlib import Path

if __package__ in (None, ""):
    import sys
    from pathlib import Path as _Path

    sys.path.append(str(_Path(__file__).resolve().parents[1]))

import numpy as np
import pandas as pd
import requests
from sklearn.datasets import fetch_olivetti_faces

from config import RANDOM_SEED
from core.data_fetch import fetch_dataset
from core.shared_utils import resolve_output_dir, save_dataframe, write_case_metadata
from core.visualization import plot_grayscale_images
from data_handling.file_formats import load_mat
from linear_algebra.operations import add_uniform_noise, least_squares_reconstruction
from linear_algebra.settings import (
    DEFAULT_OUTPUT_ROOT,
    FACE_SHAPE,
    FACES_FILENAME,
    FACES_KEY,
    LINEAR_ALGEBRA_CASES,
    NOISE_SCALE,
)

CASE_ID = "case_4"
CASE_CONFIG = LINEAR_ALGEBRA_CASES[CASE_ID]
CASE_NAME = CASE_CONFIG.name


def load_faces() -> tuple[np.ndarray, tuple[int, int], str]:
    """Return a ``(pixels, n_faces)`` matrix, the image shape and its source.

    Each column is one face flattened in column-major order.
    """

    try:
        path = fetch_dataset(FACES_FILENAME)
        faces = load_mat(path)[FACES_KEY]
        return np.asarray(faces, dtype=float), FACE_SHAPE, str(path)
    except (requests.RequestException, KeyError, ValueError) as exc:
        print(f"Course face matrix unavailable ({exc}); using the Olivetti faces.")

    olivetti = fetch_olivetti_faces(random_state=RANDOM_SEED)
    images = olivetti.images
    height, width = images.shape[1:]
    columns = images.transpose(0, 2, 1).reshape(images.shape[0], -1).T
    return columns.astype(float), (height, width), "olivetti_faces"


def _as_image(column: np.ndarray, shape: tuple[int, int]) -> np.ndarray:
    return np.reshape(column, shape, order="F")


def run_case(
    *,
    faces: np.ndarray | None = None,
    image_shape: tuple[int, int] | None = None,
    output_root: Path | str | None = None,
    noise_scale: float = NOISE_SCALE,
    random_state: int = RANDOM_SEED,
    save_plots: bool = True,
) -> Path:
    """Fit the first face from the rest, then repeat on a noisy copy."""

    case_output_dir = resolve_output_dir(CASE_ID, DEFAULT_OUTPUT_ROOT, output_root)
    source = "provided matrix"
    if faces is None:
        faces, image_shape, source = load_faces()
    faces = np.asarray(faces, dtype=float)
    if faces.ndim != 2 or faces.shape[1] < 2:
        raise ValueError("faces must be a 2D matrix with at least two columns (one face per column)")
    if image_shape is None:
        raise ValueError("image_shape is required when faces are provided")
    if image_shape[0] * image_shape[1] != faces.shape[0]:
        raise ValueError("image_shape does not match the number of pixels per face")

    print(f"=== Running {CASE_ID}: {CASE_NAME} ===")
    print(f"Face source: {source} ({faces.shape[1]} faces of {image_shape[0]}x{image_shape[1]})")

    target_face = faces[:, 0]
    basis = faces[:, 1:]
    _, fitted_clean, residual_clean = least_squares_reconstruction(basis, target_face)
    print(f"Clean face residual ||Ax - b|| = {residual_clean:.4f}")

    noisy_image = add_uniform_noise(_as_image(target_face, image_shape), noise_scale, random_state=random_state)
    noisy_face = noisy_image.ravel(order="F")
    _, fitted_noisy, residual_noisy = least_squares_reconstruction(basis, noisy_face)
    print(f"Noisy face residual ||Ax - b|| = {residual_noisy:.4f}")

    residuals = pd.DataFrame(
        {
            "input": ["clean", "noisy"],
            "residual": [residual_clean, residual_noisy],
            "basis_faces": [basis.shape[1], basis.shape[1]],
        }
    )
    residuals_path = save_dataframe(residuals, case_output_dir, "least_squares_residuals.csv")

    plot_name = None
    if save_plots:
        plot_path = plot_grayscale_images(
            {
                "original": _as_image(target_face, image_shape),
                "reconstructed": _as_image(fitted_clean, image_shape),
                "noisy": noisy_image,
                "reconstructed from noisy": _as_image(fitted_noisy, image_shape),
            },
            title="Least squares face reconstruction",
            output_dir=case_output_dir,
        )
        plot_name = plot_path.name
        print(f"Reconstruction images saved to: {plot_path}")

    metadata_path = write_case_metadata(
        case_dir=case_output_dir,
        case_id=CASE_ID,
        case_name=CASE_NAME,
        package="linear_algebra",
        dataset=source,
        features=["pixels"],
        target="face_0",
        models=("lstsq",),
        extras={
            "noise_scale": noise_scale,
            "residual_clean": residual_clean,
            "residual_noisy": residual_noisy,
            "residuals_csv": residuals_path.name,
            "plot": plot_name,
        },
    )
    print(f"Metadata written to: {metadata_path}")
    return case_output_dir


if __name__ == "__main__":
    run_case()
