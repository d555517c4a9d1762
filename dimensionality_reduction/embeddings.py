"""Feature preparation and low-dimensional embeddings for the cars data."""

from __future__ import annotations

from typing import Sequence

import numpy as np
import pandas as pd
from scipy.spatial.distance import pdist, squareform
from sklearn.decomposition import PCA
from sklearn.manifold import TSNE
import umap.umap_ as umap

from core.shared_utils import clean_feature_matrix, require_columns
from dimensionality_reduction.settings import (
    CARS_FEATURES,
    ORIGIN_COLUMN,
    TSNE_EARLY_EXAGGERATION,
    TSNE_PERPLEXITY,
    UMAP_COMPONENTS,
    UMAP_NEIGHBOURS,
)


def standardize(frame: pd.DataFrame) -> pd.DataFrame:
    """Z-score every column using the sample standard deviation."""

    std = frame.std(ddof=1).replace(0.0, 1.0)
    return (frame - frame.mean()) / std


def encode_labels(values: Sequence) -> tuple[np.ndarray, list]:
    """Integer codes ``1..k`` in order of first appearance, plus the label list."""

    codes, uniques = pd.factorize(pd.Series(values), sort=False)
    return codes + 1, list(uniques)


def prepare_cars(
    frame: pd.DataFrame,
    features: Sequence[str] = CARS_FEATURES,
) -> tuple[pd.DataFrame, np.ndarray, list]:
    """Drop incomplete cars and return standardised features, origin codes and names."""

    columns = list(features) + [ORIGIN_COLUMN]
    require_columns(frame, columns, label="cars data")
    complete = clean_feature_matrix(frame.loc[:, columns]).reset_index(drop=True)
    if complete.empty:
        raise ValueError("No complete rows left in cars data")

    numeric = complete.loc[:, list(features)].astype(float)
    codes, origins = encode_labels(complete[ORIGIN_COLUMN])
    return standardize(numeric), codes, origins


def fit_pca(features: pd.DataFrame | np.ndarray, n_components: int) -> tuple[PCA, np.ndarray]:
    pca = PCA(n_components=n_components)
    projection = pca.fit_transform(np.asarray(features, dtype=float))
    return pca, projection


def manual_projection(pca: PCA, row: np.ndarray) -> np.ndarray:
    """Project one observation with the fitted projection matrix."""

    return (np.asarray(row, dtype=float) - pca.mean_) @ pca.components_.T


def reconstruction_error(pca: PCA, features: pd.DataFrame | np.ndarray, projection: np.ndarray) -> float:
    """Frobenius norm of ``X - reconstruct(project(X))``."""

    restored = pca.inverse_transform(projection)
    return float(np.linalg.norm(np.asarray(features, dtype=float) - restored))


def pca_report(pca: PCA, feature_names: Sequence[str]) -> pd.DataFrame:
    """Projection matrix with explained variance per component."""

    labels = [f"PC{i + 1}" for i in range(pca.n_components_)]
    report = pd.DataFrame(pca.components_.T, index=list(feature_names), columns=labels)
    report.loc["explained_variance_ratio"] = pca.explained_variance_ratio_
    report.index.name = "feature"
    return report


def tsne_embedding(
    features: pd.DataFrame | np.ndarray,
    *,
    perplexity: float = TSNE_PERPLEXITY,
    early_exaggeration: float = TSNE_EARLY_EXAGGERATION,
    random_state: int | None = None,
) -> np.ndarray:
    data = np.asarray(features, dtype=float)
    if data.shape[0] <= perplexity:
        raise ValueError("t-SNE perplexity must be smaller than the number of observations")
    model = TSNE(
        n_components=2,
        perplexity=perplexity,
        early_exaggeration=early_exaggeration,
        random_state=random_state,
    )
    return model.fit_transform(data)


def observation_correlation(features: pd.DataFrame | np.ndarray) -> np.ndarray:
    """Pearson correlation between observations (rows), an ``n x n`` matrix."""

    return np.corrcoef(np.asarray(features, dtype=float))


def euclidean_distance_matrix(features: pd.DataFrame | np.ndarray) -> np.ndarray:
    return squareform(pdist(np.asarray(features, dtype=float), metric="euclidean"))


def umap_embedding(
    matrix: np.ndarray,
    *,
    metric: str = "euclidean",
    n_components: int = UMAP_COMPONENTS,
    n_neighbors: int = UMAP_NEIGHBOURS,
    random_state: int | None = None,
) -> np.ndarray:
    """Embed the rows of ``matrix``; pass ``metric="precomputed"`` for distances."""

    model = umap.UMAP(
        n_neighbors=n_neighbors,
        n_components=n_components,
        metric=metric,
        random_state=random_state,
    )
    return model.fit_transform(np.asarray(matrix, dtype=float))


def embedding_frame(embedding: np.ndarray, origins: Sequence, prefix: str) -> pd.DataFrame:
    frame = pd.DataFrame(
        embedding, columns=[f"{prefix}_{i + 1}" for i in range(embedding.shape[1])]
    )
    frame[ORIGIN_COLUMN] = list(origins)
    return frame


__all__ = [
    "embedding_frame",
    "encode_labels",
    "euclidean_distance_matrix",
    "fit_pca",
    "manual_projection",
    "observation_correlation",
    "pca_report",
    "prepare_cars",
    "reconstruction_error",
    "standardize",
    "tsne_embedding",
    "umap_embedding",
]
