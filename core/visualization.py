"""Common plotting utilities for the case studies."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Mapping, Sequence

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns

_DEFAULT_OUTPUT_DIR = Path("outputs")


def _sanitize_filename(title: str, suffix: str) -> str:
    base = re.sub(r"[^\w.-]+", "_", title.strip().lower())
    base = base.strip("._") or "plot"
    suffix = suffix.strip("._")
    if suffix:
        return f"{base}_{suffix}.png"
    return f"{base}.png"


def _save_figure(fig: plt.Figure, output_dir: Path | str | None, filename: str) -> Path:
    directory = Path(output_dir) if output_dir is not None else _DEFAULT_OUTPUT_DIR
    directory.mkdir(parents=True, exist_ok=True)
    filepath = directory / filename
    fig.savefig(filepath, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return filepath


def plot_histogram_with_density(
    values: Sequence[float] | np.ndarray,
    *,
    title: str,
    xlabel: str,
    label: str,
    density_x: np.ndarray | None = None,
    density_y: np.ndarray | None = None,
    bins: int | str | np.ndarray = "sqrt",
    output_dir: Path | str | None = None,
) -> Path:
    """Histogram of ``values`` with an optional density curve scaled to counts."""

    fig, ax = plt.subplots(figsize=(8, 5))
    ax.hist(np.asarray(values), bins=bins, color="lightblue", edgecolor="black", label=label)
    if density_x is not None and density_y is not None:
        ax.plot(density_x, density_y, color="black", linewidth=1.5, label="KDE fit")
    ax.set_title(title)
    ax.set_xlabel(xlabel)
    ax.set_ylabel("Frequency")
    ax.legend()
    return _save_figure(fig, output_dir, _sanitize_filename(title, "hist"))


def plot_overlaid_histograms(
    samples: Mapping[str, Sequence[float] | np.ndarray],
    *,
    title: str,
    bins: int = 20,
    output_dir: Path | str | None = None,
) -> Path:
    fig, ax = plt.subplots(figsize=(8, 5))
    for label, values in samples.items():
        ax.hist(np.asarray(values), bins=bins, alpha=0.3, edgecolor="black", label=label)
    ax.set_title(title)
    ax.set_ylabel("Frequency")
    ax.legend()
    return _save_figure(fig, output_dir, _sanitize_filename(title, "overlay"))


def plot_boxplot(
    values: pd.Series,
    *,
    title: str,
    ylabel: str,
    output_dir: Path | str | None = None,
) -> Path:
    sns.set_theme(style="whitegrid")
    fig, ax = plt.subplots(figsize=(3, 6))
    sns.boxplot(y=values.astype(float), color="#86c5da", ax=ax, whis=1.5)
    ax.set_title(title)
    ax.set_ylabel(ylabel)
    return _save_figure(fig, output_dir, _sanitize_filename(title, "boxplot"))


def plot_grouped_scatter(
    points: np.ndarray,
    groups: Sequence[str] | np.ndarray,
    *,
    title: str,
    xlabel: str = "1st Component",
    ylabel: str = "2nd Component",
    output_dir: Path | str | None = None,
) -> Path:
    """Scatter the first two columns of ``points`` with one colour per group."""

    points = np.asarray(points)
    if points.ndim != 2 or points.shape[1] < 2:
        raise ValueError("points must be a 2D array with at least two columns")

    labels = np.asarray(groups)
    fig, ax = plt.subplots(figsize=(7, 6))
    for group in pd.unique(labels):
        mask = labels == group
        ax.scatter(points[mask, 0], points[mask, 1], s=14, label=str(group))
    ax.set_title(title)
    ax.set_xlabel(xlabel)
    ax.set_ylabel(ylabel)
    ax.legend()
    return _save_figure(fig, output_dir, _sanitize_filename(title, "scatter"))


def plot_fit_lines(
    x: np.ndarray,
    y: np.ndarray,
    fits: Mapping[str, np.ndarray],
    *,
    title: str,
    xlabel: str = "X values",
    ylabel: str = "Y values",
    output_dir: Path | str | None = None,
) -> Path:
    fig, ax = plt.subplots(figsize=(8, 5))
    ax.scatter(x, y, color="black", s=12, label="Data")
    for label, y_hat in fits.items():
        ax.plot(x, y_hat, linewidth=1.5, label=label)
    ax.set_title(title)
    ax.set_xlabel(xlabel)
    ax.set_ylabel(ylabel)
    ax.legend(loc="upper left")
    return _save_figure(fig, output_dir, _sanitize_filename(title, "fit"))


def plot_geo_clusters(
    frame: pd.DataFrame,
    color_column: str,
    *,
    title: str,
    output_dir: Path | str | None = None,
) -> Path:
    """Longitude/latitude scatter coloured by a categorical column."""

    missing = [col for col in ("longitude", "latitude", color_column) if col not in frame.columns]
    if missing:
        raise KeyError(f"Missing columns in DataFrame: {', '.join(missing)}")

    fig, ax = plt.subplots(figsize=(8, 7))
    scatter = ax.scatter(
        frame["longitude"],
        frame["latitude"],
        c=frame[color_column].astype(float),
        cmap="tab20",
        s=4,
    )
    fig.colorbar(scatter, ax=ax, label=color_column)
    ax.set_title(title)
    ax.set_xlabel("Longitude")
    ax.set_ylabel("Latitude")
    return _save_figure(fig, output_dir, _sanitize_filename(title, color_column))


def plot_grayscale_images(
    images: Mapping[str, np.ndarray],
    *,
    title: str,
    output_dir: Path | str | None = None,
) -> Path:
    n_images = len(images)
    if n_images == 0:
        raise ValueError("images must contain at least one entry")

    fig, axes = plt.subplots(1, n_images, figsize=(4 * n_images, 4))
    axes_arr = np.atleast_1d(axes).ravel()
    for ax, (label, image) in zip(axes_arr, images.items()):
        ax.imshow(np.clip(image, 0.0, 1.0), cmap="gray", vmin=0.0, vmax=1.0)
        ax.set_title(label, fontsize=10)
        ax.axis("off")
    fig.suptitle(title, fontsize=14)
    fig.tight_layout(rect=[0, 0.03, 1, 0.95])
    return _save_figure(fig, output_dir, _sanitize_filename(title, "images"))


def plot_small_multiples(
    panels: Mapping[str, tuple[np.ndarray, np.ndarray, np.ndarray]],
    *,
    title: str,
    n_cols: int = 5,
    limits: tuple[float, float] = (0.0, 500.0),
    output_dir: Path | str | None = None,
) -> Path:
    """Grid of scatter panels, each with its fitted line ``(x, y, y_hat)``."""

    if not panels:
        raise ValueError("panels must contain at least one entry")

    n_cols = max(1, n_cols)
    n_rows = int(np.ceil(len(panels) / n_cols))
    fig, axes = plt.subplots(n_rows, n_cols, figsize=(3.4 * n_cols, 3 * n_rows))
    axes_arr = np.atleast_1d(axes).ravel()

    for idx, (label, (x, y, y_hat)) in enumerate(panels.items()):
        ax = axes_arr[idx]
        order = np.argsort(x)
        ax.scatter(x, y, s=4, color=f"C{idx % 10}")
        ax.plot(np.asarray(x)[order], np.asarray(y_hat)[order], color="black")
        ax.set_xlim(*limits)
        ax.set_ylim(*limits)
        ax.set_title(label, fontsize=10)

    for extra_ax in axes_arr[len(panels):]:
        fig.delaxes(extra_ax)

    fig.suptitle(title, fontsize=14)
    fig.tight_layout(rect=[0, 0.03, 1, 0.95])
    return _save_figure(fig, output_dir, _sanitize_filename(title, "grid"))


__all__ = [
    "plot_boxplot",
    "plot_fit_lines",
    "plot_geo_clusters",
    "plot_grayscale_images",
    "plot_grouped_scatter",
    "plot_histogram_with_density",
    "plot_overlaid_histograms",
    "plot_small_multiples",
]
