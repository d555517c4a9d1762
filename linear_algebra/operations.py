"""Linear algebra helpers used by the case studies."""

from __future__ import annotations

from typing import Dict

import numpy as np
import pandas as pd
from scipy import linalg, sparse

# ITU-R BT.601 luma weights.
_GRAY_WEIGHTS = np.array([0.299, 0.587, 0.114])


def solve_system(A: np.ndarray, b: np.ndarray) -> tuple[np.ndarray, float]:
    """Solve ``Ax = b`` and return ``x`` with the residual norm ``||Ax - b||``."""

    x = linalg.solve(A, b)
    return x, float(np.linalg.norm(A @ x - b))


def is_positive_definite(M: np.ndarray) -> bool:
    if M.ndim != 2 or M.shape[0] != M.shape[1]:
        return False
    if not np.allclose(M, M.T):
        return False
    try:
        np.linalg.cholesky(M)
    except np.linalg.LinAlgError:
        return False
    return True


def lu_factorization(A: np.ndarray) -> Dict[str, np.ndarray | float]:
    """LU with partial pivoting written as ``PA = LU``."""

    P, L, U = linalg.lu(A)
    # scipy returns A = P L U, so the row permutation applied to A is P^T.
    perm = P.T
    return {"P": perm, "L": L, "U": U, "residual": float(np.linalg.norm(L @ U - perm @ A))}


def qr_factorization(A: np.ndarray) -> Dict[str, np.ndarray | float]:
    Q, R = np.linalg.qr(A)
    return {"Q": Q, "R": R, "residual": float(np.linalg.norm(A - Q @ R))}


def cholesky_factorization(M: np.ndarray) -> Dict[str, np.ndarray | float]:
    if not is_positive_definite(M):
        raise ValueError("Cholesky factorization requires a symmetric positive definite matrix")
    L = np.linalg.cholesky(M)
    return {"L": L, "U": L.T, "residual": float(np.linalg.norm(M - L @ L.T))}


def matrix_structure(A: np.ndarray) -> Dict[str, bool | str]:
    """Structural checks on ``A`` and the factorization its structure points to.

    Checks run from most to least specific: diagonal, triangular, symmetric
    positive definite (Cholesky), symmetric indefinite (Bunch-Kaufman LDLᵀ),
    any other square matrix (LU). Rectangular matrices get QR.
    """

    M = np.asarray(A, dtype=float)
    square = M.ndim == 2 and M.shape[0] == M.shape[1]
    upper = square and np.allclose(M, np.triu(M))
    lower = square and np.allclose(M, np.tril(M))
    symmetric = square and np.allclose(M, M.T)
    positive_definite = is_positive_definite(M)

    if not square:
        factorization = "QR"
    elif upper and lower:
        factorization = "Diagonal"
    elif upper or lower:
        factorization = "Triangular"
    elif positive_definite:
        factorization = "Cholesky"
    elif symmetric:
        factorization = "Bunch-Kaufman"
    else:
        factorization = "LU"
    return {
        "square": bool(square),
        "symmetric": bool(symmetric),
        "upper_triangular": bool(upper),
        "lower_triangular": bool(lower),
        "positive_definite": positive_definite,
        "factorization": factorization,
    }


def structure_report(matrices: Dict[str, np.ndarray]) -> pd.DataFrame:
    rows = [{"matrix": name, **matrix_structure(M)} for name, M in matrices.items()]
    return pd.DataFrame(rows)


def factorization_report(A: np.ndarray) -> pd.DataFrame:
    """Reconstruction residuals for LU, QR and Cholesky (of ``A Aᵀ``)."""

    spd = A @ A.T
    rows = [
        {"factorization": "LU", "identity": "PA = LU", "residual": lu_factorization(A)["residual"]},
        {"factorization": "QR", "identity": "A = QR", "residual": qr_factorization(A)["residual"]},
        {
            "factorization": "Cholesky",
            "identity": "AAᵀ = LLᵀ",
            "residual": cholesky_factorization(spd)["residual"],
        },
    ]
    return pd.DataFrame(rows)


def sparse_random(
    shape: tuple[int, int],
    density: float,
    *,
    random_state: int | None = None,
) -> sparse.csc_matrix:
    return sparse.random(shape[0], shape[1], density=density, format="csc", random_state=random_state)


def sparse_footprint(matrix: sparse.spmatrix) -> Dict[str, int]:
    """Bytes used by the compressed storage versus a dense copy."""

    compressed = matrix.tocsc()
    sparse_bytes = compressed.data.nbytes + compressed.indices.nbytes + compressed.indptr.nbytes
    return {
        "rows": int(compressed.shape[0]),
        "cols": int(compressed.shape[1]),
        "nnz": int(compressed.nnz),
        "dense_bytes": int(compressed.toarray().nbytes),
        "sparse_bytes": int(sparse_bytes),
    }


def as_unit_float(image: np.ndarray) -> np.ndarray:
    """Scale integer images into ``[0, 1]`` floats."""

    array = np.asarray(image)
    if np.issubdtype(array.dtype, np.integer):
        return array.astype(float) / float(np.iinfo(array.dtype).max)
    return array.astype(float)


def split_rgb_channels(image: np.ndarray) -> Dict[str, np.ndarray]:
    array = as_unit_float(image)
    if array.ndim != 3 or array.shape[2] < 3:
        raise ValueError("Expected an RGB image with shape (height, width, 3)")
    return {"red": array[:, :, 0], "green": array[:, :, 1], "blue": array[:, :, 2]}


def isolate_channel(image: np.ndarray, channel: str) -> np.ndarray:
    """Return an RGB image keeping only one channel (others zeroed)."""

    channels = split_rgb_channels(image)
    if channel not in channels:
        raise KeyError(f"Unknown channel: {channel}")
    zeros = np.zeros_like(channels[channel])
    layers = [channels[name] if name == channel else zeros for name in ("red", "green", "blue")]
    return np.stack(layers, axis=2)


def to_grayscale(image: np.ndarray) -> np.ndarray:
    array = as_unit_float(image)
    if array.ndim == 2:
        return array
    return array[:, :, :3] @ _GRAY_WEIGHTS


def low_rank_approximation(matrix: np.ndarray, rank: int) -> tuple[np.ndarray, float]:
    """Rebuild ``matrix`` from its top ``rank`` singular triplets.

    Returns the approximation and the Frobenius norm of the difference.
    """

    if rank < 1:
        raise ValueError("rank must be a positive integer")
    U, S, Vt = np.linalg.svd(matrix, full_matrices=False)
    k = min(rank, S.size)
    approx = (U[:, :k] * S[:k]) @ Vt[:k, :]
    return approx, float(np.linalg.norm(matrix - approx))


def least_squares_reconstruction(A: np.ndarray, b: np.ndarray) -> tuple[np.ndarray, np.ndarray, float]:
    """Solve ``min ||Ax - b||`` and return ``(x, Ax, residual)``."""

    x, *_ = np.linalg.lstsq(A, b, rcond=None)
    fitted = A @ x
    return x, fitted, float(np.linalg.norm(fitted - b))


def add_uniform_noise(
    image: np.ndarray,
    scale: float,
    *,
    random_state: int | np.random.Generator | None = None,
) -> np.ndarray:
    """Add ``scale * U(0, 1)`` noise and rescale so the maximum equals 1."""

    rng = (
        random_state
        if isinstance(random_state, np.random.Generator)
        else np.random.default_rng(random_state)
    )
    noisy = np.asarray(image, dtype=float) + rng.random(np.shape(image)) * scale
    peak = noisy.max()
    if peak <= 0:
        raise ValueError("Noisy image has no positive values to normalise by")
    return noisy / peak


__all__ = [
    "add_uniform_noise",
    "as_unit_float",
    "cholesky_factorization",
    "factorization_report",
    "is_positive_definite",
    "isolate_channel",
    "least_squares_reconstruction",
    "low_rank_approximation",
    "lu_factorization",
    "matrix_structure",
    "qr_factorization",
    "solve_system",
    "sparse_footprint",
    "sparse_random",
    "split_rgb_channels",
    "structure_report",
    "to_grayscale",
]
