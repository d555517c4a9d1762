"""Configuration for the linear_algebra package."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

DEFAULT_OUTPUT_ROOT = Path("linear_algebra") / "outputs"
MATRIX_SIZE: int = 10
SPARSE_SHAPE: tuple[int, int] = (5, 8)
SPARSE_DENSITY: float = 0.2
DIAGONAL_VALUES: tuple[int, ...] = (1, 2, 3, 4, 5)
IMAGE_FILENAME: str = "khiam-small.jpg"
FALLBACK_SAMPLE_IMAGE: str = "china.jpg"
SVD_RANKS: tuple[int, ...] = (4, 50)
FACES_FILENAME: str = "face_recog_qr.mat"
FACES_KEY: str = "V2"
FACE_SHAPE: tuple[int, int] = (192, 168)
NOISE_SCALE: float = 0.5


@dataclass(frozen=True)
class CaseConfig:
    """Descriptor for a linear algebra case."""

    case_id: str
    name: str
    description: str | None = None


LINEAR_ALGEBRA_CASES: Mapping[str, CaseConfig] = {
    "case_1": CaseConfig(
        case_id="case_1",
        name="Case 1: linear systems and matrix factorizations",
        description="Solve Ax=b and check LU, QR and Cholesky reconstructions.",
    ),
    "case_2": CaseConfig(
        case_id="case_2",
        name="Case 2: special and sparse matrices",
        description="Diagonal, identity and sparse random matrices with memory footprints.",
    ),
    "case_3": CaseConfig(
        case_id="case_3",
        name="Case 3: image channels and low-rank SVD",
        description="Split an image into channels and rebuild the grayscale image from top singular values.",
    ),
    "case_4": CaseConfig(
        case_id="case_4",
        name="Case 4: face reconstruction with least squares",
        description="Express a face as a least-squares combination of other faces, with and without noise.",
    ),
}


def get_case_config(case_id: str) -> CaseConfig:
    try:
        return LINEAR_ALGEBRA_CASES[case_id]
    except KeyError as exc:
        raise KeyError(f"Unknown linear algebra case id: {case_id}") from exc


AVAILABLE_CASE_IDS: tuple[str, ...] = tuple(LINEAR_ALGEBRA_CASES.keys())
