"""Statistical helpers: kernel densities, distribution fits and tests."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np
import pandas as pd
from scipy import stats


def _rng(random_state: int | np.random.Generator | None) -> np.random.Generator:
    if isinstance(random_state, np.random.Generator):
        return random_state
    return np.random.default_rng(random_state)


def sqrt_bin_count(n_values: int) -> int:
    """Number of histogram bins under the square-root rule."""

    if n_values <= 0:
        raise ValueError("n_values must be positive")
    return int(math.ceil(math.sqrt(n_values)))


def histogram_edges(values: Sequence[float] | np.ndarray, bin_width: float) -> np.ndarray:
    """Equal-width bin edges starting at the minimum and covering the maximum.

    Pairs with :func:`kde_scaled_to_counts` called with the same
    ``bin_width``, so the scaled curve and the bars share one unit.
    """

    data = np.asarray(values, dtype=float)
    data = data[np.isfinite(data)]
    if data.size == 0:
        raise ValueError("histogram_edges requires at least one finite value")
    if bin_width <= 0:
        raise ValueError("bin_width must be positive")

    low, high = float(data.min()), float(data.max())
    n_bins = int(np.floor((high - low) / bin_width)) + 1
    edges = low + bin_width * np.arange(n_bins + 1)
    if edges[-1] <= high:
        edges = np.append(edges, edges[-1] + bin_width)
    return edges


def kde_scaled_to_counts(
    values: Sequence[float] | np.ndarray,
    bin_width: float,
    *,
    grid_points: int = 512,
) -> tuple[np.ndarray, np.ndarray]:
    """Gaussian KDE rescaled so it overlays a count histogram.

    The density is multiplied by ``len(values) * bin_width``, turning it into
    the expected count per bin of width ``bin_width``.
    """

    data = np.asarray(values, dtype=float)
    data = data[np.isfinite(data)]
    if data.size < 2:
        raise ValueError("kde_scaled_to_counts requires at least two finite values")
    if bin_width <= 0:
        raise ValueError("bin_width must be positive")

    kde = stats.gaussian_kde(data, bw_method="silverman")
    spread = 3.0 * kde.factor * data.std(ddof=1)
    grid = np.linspace(data.min() - spread, data.max() + spread, grid_points)
    density = kde(grid)
    return grid, density * data.size * bin_width


def sample_normal(size: int, *, random_state: int | np.random.Generator | None = None) -> np.ndarray:
    return stats.norm().rvs(size=size, random_state=_rng(random_state))


def sample_binomial(
    size: int,
    n_trials: int,
    probability: float,
    *,
    random_state: int | np.random.Generator | None = None,
) -> np.ndarray:
    return stats.binom(n_trials, probability).rvs(size=size, random_state=_rng(random_state))


def fit_normal(values: Sequence[float] | np.ndarray) -> tuple[float, float]:
    """Maximum-likelihood ``(mu, sigma)`` of a normal distribution."""

    data = np.asarray(values, dtype=float)
    if data.size == 0:
        raise ValueError("fit_normal requires at least one value")
    mu, sigma = stats.norm.fit(data)
    return float(mu), float(sigma)


def sample_from_normal_fit(
    mu: float,
    sigma: float,
    size: int,
    *,
    random_state: int | np.random.Generator | None = None,
) -> np.ndarray:
    return stats.norm(loc=mu, scale=sigma).rvs(size=size, random_state=_rng(random_state))


def one_sample_ttest(
    values: Sequence[float] | np.ndarray,
    popmean: float = 0.0,
    *,
    confidence: float = 0.95,
) -> dict[str, float]:
    """Two-sided one-sample t-test with a confidence interval for the mean."""

    data = np.asarray(values, dtype=float)
    if data.size < 2:
        raise ValueError("one_sample_ttest requires at least two values")

    result = stats.ttest_1samp(data, popmean)
    interval = result.confidence_interval(confidence_level=confidence)
    return {
        "n": int(data.size),
        "mean": float(data.mean()),
        "popmean": float(popmean),
        "t_statistic": float(result.statistic),
        "df": float(result.df),
        "p_value": float(result.pvalue),
        "ci_low": float(interval.low),
        "ci_high": float(interval.high),
    }


def correlation_table(x: Sequence[float], y: Sequence[float]) -> pd.DataFrame:
    """Spearman and Pearson coefficients with their p-values."""

    spearman = stats.spearmanr(x, y)
    pearson = stats.pearsonr(x, y)
    return pd.DataFrame(
        {
            "method": ["spearman", "pearson"],
            "r": [float(spearman.statistic), float(pearson.statistic)],
            "p_value": [float(spearman.pvalue), float(pearson.pvalue)],
        }
    )


__all__ = [
    "correlation_table",
    "fit_normal",
    "histogram_edges",
    "kde_scaled_to_counts",
    "one_sample_ttest",
    "sample_binomial",
    "sample_from_normal_fit",
    "sample_normal",
    "sqrt_bin_count",
]
