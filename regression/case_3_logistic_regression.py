"""Case study 3: linear regression on binary data versus a logistic GLM."""

from __future__ import annotations

from pathlib import Path

if __package__ in (None, ""):
    import sys
    from pathlib import Path as _Path

    sys.path.append(str(_Path(__file__).resolve().parents[1]))

import numpy as np
import pandas as pd

from core.data_fetch import load_cats
from core.shared_utils import resolve_output_dir, save_dataframe, write_case_metadata
from core.visualization import plot_fit_lines
from regression.fitting import binary_outcome_frame, encode_cats, logistic_fit, ols_formula_fit
from regression.settings import BINARY_X, BINARY_Y, CATS_POSITIVE_SEX, DEFAULT_OUTPUT_ROOT, REGRESSION_CASES

CASE_ID = "case_3"
CASE_CONFIG = REGRESSION_CASES[CASE_ID]
CASE_NAME = CASE_CONFIG.name


def run_case(
    *,
    cats: pd.DataFrame | None = None,
    output_root: Path | str | None = None,
    save_plots: bool = True,
) -> Path:
    """Show linear predictions escaping [0, 1], then model cat sex with a logit GLM."""

    case_output_dir = resolve_output_dir(CASE_ID, DEFAULT_OUTPUT_ROOT, output_root)
    cats = cats if cats is not None else load_cats()

    print(f"=== Running {CASE_ID}: {CASE_NAME} ===")

    binary = binary_outcome_frame(BINARY_X, BINARY_Y)
    linear = ols_formula_fit(binary)
    linear_pred = np.asarray(linear.fittedvalues)
    outside = int(((linear_pred < 0) | (linear_pred > 1)).sum())
    print(linear.summary().tables[1])
    print(f"Linear predictions outside [0, 1]: {outside}")

    cats_df = encode_cats(cats)
    glm = logistic_fit(cats_df)
    probabilities = np.asarray(glm.predict(cats_df))
    print(glm.summary().tables[1])
    print(f"Predicted Pr(Sex={CATS_POSITIVE_SEX}) range: {probabilities.min():.3f} .. {probabilities.max():.3f}")

    coefficients = pd.DataFrame(
        [
            {
                "model": "linear (binary data)",
                "intercept": float(linear.params["Intercept"]),
                "slope": float(linear.params["X"]),
                "aic": float(linear.aic),
            },
            {
                "model": "logistic (cats)",
                "intercept": float(glm.params["Intercept"]),
                "slope": float(glm.params["X"]),
                "aic": float(glm.aic),
            },
        ]
    )
    coefficients_path = save_dataframe(coefficients, case_output_dir, "coefficients.csv")
    predictions_path = save_dataframe(
        cats_df.assign(probability=probabilities), case_output_dir, "cats_predictions.csv"
    )

    plot_paths: list[str] = []
    if save_plots:
        plot_paths.append(
            plot_fit_lines(
                binary["X"].to_numpy(),
                binary["Y"].to_numpy(),
                {"Linear fit": linear_pred},
                title="Linear fit to binary data",
                xlabel="X",
                ylabel="Y",
                output_dir=case_output_dir,
            ).name
        )
        order = np.argsort(cats_df["X"].to_numpy())
        plot_paths.append(
            plot_fit_lines(
                cats_df["X"].to_numpy()[order],
                cats_df["Y"].to_numpy()[order],
                {"Predictions": probabilities[order]},
                title="Logistic regression of cat sex",
                xlabel="Heart weight",
                ylabel=f"Pr(Sex={CATS_POSITIVE_SEX})",
                output_dir=case_output_dir,
            ).name
        )

    metadata_path = write_case_metadata(
        case_dir=case_output_dir,
        case_id=CASE_ID,
        case_name=CASE_NAME,
        package="regression",
        dataset="MASS::cats",
        features=["Hwt"],
        target="Sex",
        models=("ols", "glm(Binomial, logit)"),
        extras={
            "linear_outside_unit_interval": outside,
            "coefficients_csv": coefficients_path.name,
            "predictions_csv": predictions_path.name,
            "plots": plot_paths,
        },
    )
    print(f"Metadata written to: {metadata_path}")
    return case_output_dir


if __name__ == "__main__":
    run_case()
