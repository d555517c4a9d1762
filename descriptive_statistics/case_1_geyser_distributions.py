"""Case study 1: describing the Old Faithful eruption data."""

from __future__ import annotations

from pathlib import Path

if __package__ in (None, ""):
    import sys
    from pathlib import Path as _Path

    sys.path.append(str(_Path(__file__).resolve().parents[1]))

import numpy as np
import pandas as pd

from core.data_fetch import load_faithful
from core.distribution_plots import compute_distribution_summary, plot_distribution_grid
from core.shared_utils import display_dataframe, require_columns, resolve_output_dir, save_dataframe, write_case_metadata
from core.visualization import plot_boxplot, plot_histogram_with_density
from descriptive_statistics.analysis import histogram_edges, kde_scaled_to_counts, sqrt_bin_count
from descriptive_statistics.settings import (
    DEFAULT_OUTPUT_ROOT,
    DESCRIPTIVE_STATISTICS_CASES,
    ERUPTION_BIN_WIDTH,
    ERUPTION_COLUMN,
    WAITING_COLUMN,
)

CASE_ID = "case_1"
CASE_CONFIG = DESCRIPTIVE_STATISTICS_CASES[CASE_ID]
CASE_NAME = CASE_CONFIG.name


def run_case(
    *,
    frame: pd.DataFrame | None = None,
    output_root: Path | str | None = None,
    save_plots: bool = True,
) -> Path:
    """Summarise eruption lengths and waiting times, and overlay a scaled KDE."""

    case_output_dir = resolve_output_dir(CASE_ID, DEFAULT_OUTPUT_ROOT, output_root)
    data = frame.copy() if frame is not None else load_faithful()
    require_columns(data, [ERUPTION_COLUMN, WAITING_COLUMN], label="geyser data")

    print(f"=== Running {CASE_ID}: {CASE_NAME} ===")
    display_dataframe(data, "Old Faithful eruptions")

    description = data.describe().transpose().reset_index().rename(columns={"index": "column"})
    print(description.to_string(index=False))
    description_path = save_dataframe(description, case_output_dir, "describe.csv")

    summaries = {
        column: compute_distribution_summary(data[column])
        for column in (ERUPTION_COLUMN, WAITING_COLUMN)
    }
    summary_df = pd.DataFrame(summaries).transpose().reset_index().rename(columns={"index": "column"})
    summary_path = save_dataframe(summary_df, case_output_dir, "distribution_summary.csv")
    print(f"Distribution summary saved to: {summary_path}")

    eruption = data[ERUPTION_COLUMN].astype(float)
    bins = sqrt_bin_count(len(eruption))
    edges = histogram_edges(eruption, ERUPTION_BIN_WIDTH)
    counts, _ = np.histogram(eruption, bins=edges)
    grid, scaled_density = kde_scaled_to_counts(eruption, ERUPTION_BIN_WIDTH)
    peak_location = float(grid[scaled_density.argmax()])
    print(f"Histogram bins (sqrt rule): {bins}, drawn as {len(edges) - 1} bins of width {ERUPTION_BIN_WIDTH}")
    print(f"KDE peak (scaled to counts) at {peak_location:.3f} minutes")
    kde_path = save_dataframe(
        pd.DataFrame({"x": grid, "scaled_density": scaled_density}),
        case_output_dir,
        "eruption_kde.csv",
    )

    plot_paths: list[str] = []
    if save_plots:
        plot_paths.append(
            plot_boxplot(
                eruption, title="Eruption Length", ylabel="Time (minutes)", output_dir=case_output_dir
            ).name
        )
        plot_paths.append(
            plot_histogram_with_density(
                eruption,
                title="Eruption length with KDE",
                xlabel="Eruption Length (minutes)",
                label="Eruption",
                density_x=grid,
                density_y=scaled_density,
                bins=edges,
                output_dir=case_output_dir,
            ).name
        )
        plot_paths.append(
            plot_distribution_grid(
                eruption,
                feature=ERUPTION_COLUMN,
                case_id=CASE_ID,
                case_name=CASE_NAME,
                output_dir=case_output_dir,
                summary=summaries[ERUPTION_COLUMN],
            ).name
        )
        print(f"Plots saved to: {case_output_dir}")

    metadata_path = write_case_metadata(
        case_dir=case_output_dir,
        case_id=CASE_ID,
        case_name=CASE_NAME,
        package="descriptive_statistics",
        dataset="datasets::faithful",
        features=[ERUPTION_COLUMN, WAITING_COLUMN],
        target=None,
        models=("gaussian_kde",),
        extras={
            "rows": int(len(data)),
            "sqrt_bins": bins,
            "bin_width": ERUPTION_BIN_WIDTH,
            "histogram_bins": len(edges) - 1,
            "histogram_peak": int(counts.max()),
            "kde_peak": peak_location,
            "describe_csv": description_path.name,
            "kde_csv": kde_path.name,
            "plots": plot_paths,
        },
    )
    print(f"Metadata written to: {metadata_path}")
    return case_output_dir


if __name__ == "__main__":
    run_case()
