"""Reusable summaries and plots for univariate distribution diagnostics."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns
from scipy import stats


def compute_distribution_summary(series: pd.Series) -> dict[str, float]:
    """Return key descriptive statistics for the supplied numeric series."""

    clean = pd.to_numeric(series.dropna(), errors="coerce")
    clean = clean.astype(float).dropna()
    if clean.empty:
        raise ValueError("compute_distribution_summary requires at least one non-null value.")

    quantiles = np.percentile(clean.to_numpy(dtype=float), [25, 50, 75])
    q1, median, q3 = map(float, quantiles)
    return {
        "count": int(clean.count()),
        "mean": float(clean.mean()),
        "std": float(clean.std(ddof=1)),
        "min": float(clean.min()),
        "q1": q1,
        "median": median,
        "q3": q3,
        "max": float(clean.max()),
        "iqr": float(q3 - q1),
        "skew": float(clean.skew()),
        "kurtosis": float(clean.kurt()),
    }


def plot_distribution_grid(
    series: pd.Series,
    *,
    feature: str,
    case_id: str,
    case_name: str,
    output_dir: Path,
    summary: Mapping[str, float] | None = None,
    dpi: int = 150,
) -> Path:
    """Create a 2x2 grid (boxplot, histogram, KDE, QQ) for the given series."""

    clean = pd.to_numeric(series.dropna(), errors="coerce").astype(float).dropna()
    if clean.empty:
        raise ValueError("plot_distribution_grid requires at least one non-null value.")

    stats_summary = dict(summary) if summary is not None else compute_distribution_summary(clean)
    sns.set_theme(style="whitegrid")

    fig, axes_matrix = plt.subplots(2, 2, figsize=(11, 9))
    axes = axes_matrix.ravel()
    median = stats_summary["median"]

    sns.boxplot(y=clean, color="#86c5da", ax=axes[0])
    axes[0].set_title("Boxplot")
    axes[0].set_ylabel(feature)
    axes[0].axhline(median, ls="--", lw=1.1, color="tab:orange", label=f"median={median:.3f}")
    axes[0].legend(loc="upper right")

    sns.histplot(clean, bins="sqrt", kde=False, ax=axes[1], color="#5d9fc7")
    axes[1].set_title("Histogram")
    axes[1].set_xlabel(feature)
    axes[1].axvline(median, ls="--", lw=1.1, color="tab:orange")

    kde_ax = axes[2]
    kde_ax.set_title("KDE (Density)")
    kde_ax.set_xlabel(feature)
    if clean.nunique(dropna=True) > 1 and not np.isclose(clean.var(ddof=0), 0.0):
        sns.kdeplot(clean, fill=True, color="#6baed6", alpha=0.6, ax=kde_ax, warn_singular=False)
        kde_ax.axvline(median, ls="--", lw=1.1, color="tab:orange")
    else:
        kde_ax.text(0.5, 0.5, "Variance ~ 0\nKDE skipped", transform=kde_ax.transAxes, ha="center", va="center")
        kde_ax.set_yticks([])

    stats.probplot(clean, dist="norm", plot=axes[3])
    axes[3].set_title("QQ Plot")

    fig.suptitle(
        f"{case_name}\n"
        f"{feature} | Q1={stats_summary['q1']:.3f} | Q3={stats_summary['q3']:.3f} | "
        f"IQR={stats_summary['iqr']:.3f} | skew={stats_summary['skew']:.3f}",
        fontsize=12,
    )
    fig.tight_layout(rect=[0, 0, 1, 0.94])

    safe_feature = "".join(ch if ch.isalnum() else "_" for ch in feature).strip("_").lower() or "feature"
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / f"{safe_feature}_{case_id}_distribution.png"
    fig.savefig(output_path, dpi=dpi, bbox_inches="tight")
    plt.close(fig)
    return output_path


__all__ = ["compute_distribution_summary", "plot_distribution_grid"]
