"""Case study 4: non-linear least squares with scipy's curve_fit."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

if __package__ in (None, ""):
    import sys
    from pathlib import Path as _Path

    sys.path.append(str(_Path(__file__).resolve().parents[1]))

import numpy as np
import pandas as pd

from config import RANDOM_SEED
from core.shared_utils import resolve_output_dir, save_dataframe, write_case_metadata
from core.visualization import plot_fit_lines
from regression.fitting import decay_wave, fit_nonlinear, generate_nonlinear_sample
from regression.settings import DEFAULT_OUTPUT_ROOT, NONLINEAR_P0, NONLINEAR_TRUE_PARAMS, REGRESSION_CASES

CASE_ID = "case_4"
CASE_CONFIG = REGRESSION_CASES[CASE_ID]
CASE_NAME = CASE_CONFIG.name
PARAM_NAMES = ("p1", "p2", "p3")


def run_case(
    *,
    true_params: Sequence[float] = NONLINEAR_TRUE_PARAMS,
    p0: Sequence[float] = NONLINEAR_P0,
    output_root: Path | str | None = None,
    random_state: int = RANDOM_SEED,
    save_plots: bool = True,
) -> Path:
    case_output_dir = resolve_output_dir(CASE_ID, DEFAULT_OUTPUT_ROOT, output_root)

    print(f"=== Running {CASE_ID}: {CASE_NAME} ===")
    x, y = generate_nonlinear_sample(true_params, random_state=random_state)
    params, std_errors = fit_nonlinear(x, y, p0)
    fitted = decay_wave(x, *params)
    rmse = float(np.sqrt(np.mean((y - fitted) ** 2)))

    table = pd.DataFrame(
        {
            "parameter": PARAM_NAMES,
            "true": [float(v) for v in true_params],
            "initial": [float(v) for v in p0],
            "estimate": params,
            "std_error": std_errors,
        }
    )
    print(table.round(4).to_string(index=False))
    print(f"RMSE = {rmse:.4f}")

    params_path = save_dataframe(table, case_output_dir, "parameters.csv")
    fitted_path = save_dataframe(pd.DataFrame({"x": x, "y": y, "fitted": fitted}), case_output_dir, "fitted_values.csv")

    plot_name = None
    if save_plots:
        plot_name = plot_fit_lines(
            x, y, {"Fitted model": fitted}, title="Non-linear least squares fit", output_dir=case_output_dir
        ).name

    metadata_path = write_case_metadata(
        case_dir=case_output_dir,
        case_id=CASE_ID,
        case_name=CASE_NAME,
        package="regression",
        dataset="synthetic: p1*exp(-x*p2) + p3*sin(0.8*pi*x) + noise",
        features=["x"],
        target="y",
        models=("curve_fit",),
        extras={
            "rmse": rmse,
            "estimates": dict(zip(PARAM_NAMES, map(float, params))),
            "parameters_csv": params_path.name,
            "fitted_csv": fitted_path.name,
            "plot": plot_name,
        },
    )
    print(f"Metadata written to: {metadata_path}")
    return case_output_dir


if __name__ == "__main__":
    run_case()
