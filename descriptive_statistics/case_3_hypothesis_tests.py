"""Case study 3: one-sample t-tests and rank/linear correlations."""

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
from core.visualization import plot_grouped_scatter
from descriptive_statistics.analysis import correlation_table, one_sample_ttest, sample_normal
from descriptive_statistics.settings import (
    DEFAULT_OUTPUT_ROOT,
    DESCRIPTIVE_STATISTICS_CASES,
    ERUPTION_COLUMN,
    SMALL_SAMPLE_SIZE,
    TTEST_POPULATION_MEAN,
    WAITING_COLUMN,
)

CASE_ID = "case_3"
CASE_CONFIG = DESCRIPTIVE_STATISTICS_CASES[CASE_ID]
CASE_NAME = CASE_CONFIG.name


def run_case(
    *,
    frame: pd.DataFrame | None = None,
    output_root: Path | str | None = None,
    random_state: int = RANDOM_SEED,
    save_plots: bool = True,
) -> Path:
    """Test means against zero and correlate eruption length with waiting time."""

    case_output_dir = resolve_output_dir(CASE_ID, DEFAULT_OUTPUT_ROOT, output_root)
    data = frame.copy() if frame is not None else load_faithful()
    require_columns(data, [ERUPTION_COLUMN, WAITING_COLUMN], label="geyser data")

    print(f"=== Running {CASE_ID}: {CASE_NAME} ===")

    normal_data = sample_normal(SMALL_SAMPLE_SIZE, random_state=np.random.default_rng(random_state))
    eruption = data[ERUPTION_COLUMN].to_numpy(dtype=float)
    waiting = data[WAITING_COLUMN].to_numpy(dtype=float)

    ttests = []
    for label, values in (("standard_normal", normal_data), ("eruptions", eruption)):
        result = one_sample_ttest(values, TTEST_POPULATION_MEAN)
        ttests.append({"data": label, **result})
        print(
            f"One sample t-test on {label}: t={result['t_statistic']:.3f}, "
            f"p={result['p_value']:.4g}, 95% CI=({result['ci_low']:.3f}, {result['ci_high']:.3f})"
        )
    ttest_path = save_dataframe(pd.DataFrame(ttests), case_output_dir, "one_sample_ttests.csv")

    correlations = correlation_table(eruption, waiting)
    for row in correlations.itertuples(index=False):
        print(f"r({row.method.capitalize()}) = {row.r:.4f} || p-value = {row.p_value:.4g}")
    correlations_path = save_dataframe(correlations, case_output_dir, "correlations.csv")

    plot_name = None
    if save_plots:
        plot_name = plot_grouped_scatter(
            np.column_stack([eruption, waiting]),
            np.full(eruption.shape, "eruptions"),
            title="Eruption length vs waiting time",
            xlabel="Eruption Length (minutes)",
            ylabel="Time between Eruptions (minutes)",
            output_dir=case_output_dir,
        ).name

    metadata_path = write_case_metadata(
        case_dir=case_output_dir,
        case_id=CASE_ID,
        case_name=CASE_NAME,
        package="descriptive_statistics",
        dataset="datasets::faithful",
        features=[ERUPTION_COLUMN, WAITING_COLUMN],
        target=None,
        models=("ttest_1samp", "spearmanr", "pearsonr"),
        extras={
            "popmean": TTEST_POPULATION_MEAN,
            "ttests_csv": ttest_path.name,
            "correlations_csv": correlations_path.name,
            "plot": plot_name,
        },
    )
    print(f"Metadata written to: {metadata_path}")
    return case_output_dir


if __name__ == "__main__":
    run_case()
