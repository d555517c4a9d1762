"""Case study 1: fitting a line from scratch, with numpy and with statsmodels."""

from __future__ import annotations

from pathlib import Path

if __package__ in (None, ""):
    import sys
    from pathlib import Path as _Path

    sys.path.append(str(_Path(__file__).resolve().parents[1]))

import numpy as np
import pandas as pd

from config import RANDOM_SEED
from core.shared_utils import resolve_output_dir, save_dataframe, write_case_metadata
from core.visualization import plot_fit_lines
from regression.fitting import compare_line_fits, generate_linear_sample
from regression.settings import DEFAULT_OUTPUT_ROOT, REGRESSION_CASES

CASE_ID = "case_1"
CASE_CONFIG = REGRESSION_CASES[CASE_ID]
CASE_NAME = CASE_CONFIG.name


def run_case(
    *,
    x: np.ndarray | None = None,
    y: np.ndarray | None = None,
    output_root: Path | str | None = None,
    random_state: int = RANDOM_SEED,
    save_plots: bool = True,
) -> Path:
    """Fit the same synthetic data three ways and check the coefficients agree."""

    case_output_dir = resolve_output_dir(CASE_ID, DEFAULT_OUTPUT_ROOT, output_root)
    if x is None or y is None:
        x, y = generate_linear_sample(random_state=random_state)
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)

    print(f"=== Running {CASE_ID}: {CASE_NAME} ===")
    coefficients, fitted = compare_line_fits(x, y)
    print(coefficients.round(6).to_string(index=False))
    agree = bool(
        np.allclose(coefficients["slope"], coefficients["slope"].iloc[0])
        and np.allclose(coefficients["intercept"], coefficients["intercept"].iloc[0])
    )
    print(f"All methods agree: {agree}")

    coefficients_path = save_dataframe(coefficients, case_output_dir, "line_coefficients.csv")
    fitted_path = save_dataframe(
        pd.DataFrame({"x": x, "y": y, **fitted}), case_output_dir, "fitted_values.csv"
    )

    plot_name = None
    if save_plots:
        plot_name = plot_fit_lines(x, y, fitted, title="Line fits", output_dir=case_output_dir).name

    metadata_path = write_case_metadata(
        case_dir=case_output_dir,
        case_id=CASE_ID,
        case_name=CASE_NAME,
        package="regression",
        dataset="synthetic: y = 3 + x + 2u - 1",
        features=["X"],
        target="Y",
        models=tuple(coefficients["method"]),
        extras={
            "n": int(x.size),
            "methods_agree": agree,
            "coefficients_csv": coefficients_path.name,
            "fitted_csv": fitted_path.name,
            "plot": plot_name,
        },
    )
    print(f"Metadata written to: {metadata_path}")
    return case_output_dir


if __name__ == "__main__":
    run_case()
