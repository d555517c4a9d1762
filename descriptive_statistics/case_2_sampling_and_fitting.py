"""Case study 2: sampling from distributions and fitting a normal by MLE."""

from __future__ import annotations

from pathlib import Path

if __package__ in (None, ""):
    import sys
    from pathlib import Path as _Path

    sys.path.append(str(_Path(__file__).resolve().parents[1]))

import numpy as np
import pandas as pd

from config import RANDOM_SEED
from core.data_fetch import load_faithful
from core.shared_utils import require_columns, resolve_output_dir, save_dataframe, write_case_metadata
from core.visualization import plot_histogram_with_density, plot_overlaid_histograms
from descriptive_statistics.analysis import (
    fit_normal,
    histogram_edges,
    kde_scaled_to_counts,
    sample_binomial,
    sample_from_normal_fit,
    sample_normal,
)
from descriptive_statistics.settings import (
    BINOMIAL_BIN_WIDTH,
    BINOMIAL_PROBABILITY,
    BINOMIAL_TRIALS,
    DEFAULT_OUTPUT_ROOT,
    DESCRIPTIVE_STATISTICS_CASES,
    ERUPTION_COLUMN,
    LARGE_SAMPLE_SIZE,
    NORMAL_BIN_WIDTH,
    SMALL_SAMPLE_SIZE,
)

CASE_ID = "case_2"
CASE_CONFIG = DESCRIPTIVE_STATISTICS_CASES[CASE_ID]
CASE_NAME = CASE_CONFIG.name


def run_case(
    *,
    frame: pd.DataFrame | None = None,
    output_root: Path | str | None = None,
    large_sample_size: int = LARGE_SAMPLE_SIZE,
    small_sample_size: int = SMALL_SAMPLE_SIZE,
    random_state: int = RANDOM_SEED,
    save_plots: bool = True,
) -> Path:
    """Draw normal/binomial samples and fit normals to uniform data and eruptions."""

    case_output_dir = resolve_output_dir(CASE_ID, DEFAULT_OUTPUT_ROOT, output_root)
    rng = np.random.default_rng(random_state)
    data = frame.copy() if frame is not None else load_faithful()
    require_columns(data, [ERUPTION_COLUMN], label="geyser data")

    print(f"=== Running {CASE_ID}: {CASE_NAME} ===")

    normal_data = sample_normal(large_sample_size, random_state=rng)
    binomial_data = sample_binomial(
        large_sample_size, BINOMIAL_TRIALS, BINOMIAL_PROBABILITY, random_state=rng
    )
    samples = {
        "Z ~ N(0,1)": (normal_data, NORMAL_BIN_WIDTH),
        f"Z ~ B({BINOMIAL_TRIALS},{BINOMIAL_PROBABILITY})": (binomial_data, BINOMIAL_BIN_WIDTH),
    }

    sample_rows = []
    plot_paths: list[str] = []
    for label, (values, bin_width) in samples.items():
        grid, scaled = kde_scaled_to_counts(values, bin_width)
        edges = histogram_edges(values, bin_width)
        counts, _ = np.histogram(values, bins=edges)
        sample_rows.append(
            {
                "sample": label,
                "size": int(values.size),
                "mean": float(values.mean()),
                "std": float(values.std(ddof=1)),
                "kde_peak": float(grid[scaled.argmax()]),
                "bin_width": bin_width,
                "histogram_bins": len(edges) - 1,
                "histogram_peak": int(counts.max()),
                "kde_peak_count": float(scaled.max()),
            }
        )
        print(f"{label}: mean={values.mean():.4f}, std={values.std(ddof=1):.4f}")
        if save_plots:
            plot_paths.append(
                plot_histogram_with_density(
                    values,
                    title=f"Sample {label}",
                    xlabel="Z",
                    label=label,
                    density_x=grid,
                    density_y=scaled,
                    bins=edges,
                    output_dir=case_output_dir,
                ).name
            )
    samples_path = save_dataframe(pd.DataFrame(sample_rows), case_output_dir, "sample_summary.csv")

    uniform_data = rng.random(small_sample_size)
    eruption = data[ERUPTION_COLUMN].to_numpy(dtype=float)
    fits = {"uniform": uniform_data, "eruptions": eruption}
    fit_rows = []
    for label, values in fits.items():
        mu, sigma = fit_normal(values)
        drawn = sample_from_normal_fit(mu, sigma, small_sample_size, random_state=rng)
        fit_rows.append({"data": label, "mu": mu, "sigma": sigma, "drawn_mean": float(drawn.mean())})
        print(f"Normal fit to {label}: mu={mu:.4f}, sigma={sigma:.4f}")
        if save_plots:
            plot_paths.append(
                plot_overlaid_histograms(
                    {"Normal Data": drawn, "Original Data": values},
                    title=f"Normal fit to {label} data",
                    output_dir=case_output_dir,
                ).name
            )
    fits_path = save_dataframe(pd.DataFrame(fit_rows), case_output_dir, "normal_fits.csv")

    metadata_path = write_case_metadata(
        case_dir=case_output_dir,
        case_id=CASE_ID,
        case_name=CASE_NAME,
        package="descriptive_statistics",
        dataset="generated samples + datasets::faithful",
        features=[ERUPTION_COLUMN],
        target=None,
        models=("norm", "binom"),
        extras={
            "large_sample_size": large_sample_size,
            "small_sample_size": small_sample_size,
            "samples_csv": samples_path.name,
            "fits_csv": fits_path.name,
            "plots": plot_paths,
        },
    )
    print(f"Metadata written to: {metadata_path}")
    return case_output_dir


if __name__ == "__main__":
    run_case()
