"""Clustering of house locations.

All assignment helpers return 1-based cluster ids. DBSCAN marks noise
points with ``-1``.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
import pandas as pd
from kmedoids import KMedoids
from scipy.cluster.hierarchy import fcluster, linkage
from scipy.spatial.distance import pdist, squareform
from sklearn.cluster import DBSCAN, KMeans

from clustering.settings import (
    COORDINATE_COLUMNS,
    DBSCAN_EPS,
    DBSCAN_MIN_SAMPLES,
    HCA_LINKAGE,
    NOISE_LABEL,
    PRICE_BUCKET_WIDTH,
)
from core.shared_utils import require_columns


def price_buckets(values: Sequence[float] | pd.Series, width: int = PRICE_BUCKET_WIDTH) -> np.ndarray:
    """Integer bucket index ``value // width``."""

    if width <= 0:
        raise ValueError("width must be positive")
    return np.floor_divide(np.asarray(values, dtype=float), width).astype(int)


def coordinates(frame: pd.DataFrame, columns: Sequence[str] = COORDINATE_COLUMNS) -> np.ndarray:
    require_columns(frame, list(columns), label="houses")
    return frame.loc[:, list(columns)].to_numpy(dtype=float)


def subsample(frame: pd.DataFrame, size: int, *, random_state: int | None = None) -> pd.DataFrame:
    """Reproducible random subset of rows (the whole frame if it is small enough)."""

    if size <= 0:
        raise ValueError("size must be positive")
    if len(frame) <= size:
        return frame.reset_index(drop=True)
    return frame.sample(n=size, random_state=random_state).sort_index().reset_index(drop=True)


def euclidean_distances(points: np.ndarray) -> np.ndarray:
    return squareform(pdist(points, metric="euclidean"))


def squared_euclidean_distances(points: np.ndarray) -> np.ndarray:
    return squareform(pdist(points, metric="sqeuclidean"))


def kmeans_assignments(
    points: np.ndarray,
    n_clusters: int,
    *,
    random_state: int | None = None,
) -> tuple[np.ndarray, np.ndarray]:
    """k-means labels (1-based) and the cluster centres."""

    model = KMeans(n_clusters=n_clusters, n_init=10, random_state=random_state)
    labels = model.fit_predict(points)
    return labels + 1, model.cluster_centers_


def kmedoids_assignments(
    distances: np.ndarray,
    n_clusters: int,
    *,
    max_iter: int = 200,
    random_state: int | None = None,
) -> tuple[np.ndarray, np.ndarray, float]:
    """Alternating k-medoids on a precomputed distance matrix, seeded with PAM BUILD.

    Returns 1-based assignments, medoid row indices and the total cost.
    """

    matrix = np.asarray(distances, dtype=float)
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise ValueError("distances must be a square matrix")
    if not 1 <= n_clusters <= matrix.shape[0]:
        raise ValueError("n_clusters must lie within [1, number of points]")

    model = KMedoids(
        n_clusters=n_clusters,
        metric="precomputed",
        method="alternate",
        init="build",
        max_iter=max_iter,
        random_state=random_state,
    )
    model.fit(matrix)
    labels = np.asarray(model.labels_, dtype=int)
    medoids = np.asarray(model.medoid_indices_, dtype=int)
    return labels + 1, medoids, float(model.inertia_)


def hierarchical_assignments(
    distances: np.ndarray,
    n_clusters: int,
    *,
    method: str = HCA_LINKAGE,
) -> np.ndarray:
    """Agglomerative clustering on a distance matrix, cut into ``n_clusters``."""

    condensed = squareform(np.asarray(distances, dtype=float), checks=False)
    tree = linkage(condensed, method=method)
    return fcluster(tree, t=n_clusters, criterion="maxclust")


def dbscan_assignments(
    distances: np.ndarray,
    *,
    eps: float = DBSCAN_EPS,
    min_samples: int = DBSCAN_MIN_SAMPLES,
) -> np.ndarray:
    """DBSCAN on a precomputed distance matrix; noise points get ``-1``."""

    labels = DBSCAN(eps=eps, min_samples=min_samples, metric="precomputed").fit_predict(distances)
    return np.where(labels >= 0, labels + 1, NOISE_LABEL)


def cluster_sizes(assignments: pd.DataFrame) -> pd.DataFrame:
    """Long table of ``method, cluster, size`` for every assignment column."""

    frames = []
    for column in assignments.columns:
        counts = assignments[column].value_counts().sort_index()
        frames.append(
            pd.DataFrame({"method": column, "cluster": counts.index, "size": counts.to_numpy()})
        )
    if not frames:
        return pd.DataFrame(columns=["method", "cluster", "size"])
    return pd.concat(frames, ignore_index=True)


__all__ = [
    "cluster_sizes",
    "coordinates",
    "dbscan_assignments",
    "euclidean_distances",
    "hierarchical_assignments",
    "kmeans_assignments",
    "kmedoids_assignments",
    "price_buckets",
    "squared_euclidean_distances",
    "subsample",
]
