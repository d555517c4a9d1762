"""Linear, generalised linear and non-linear regression helpers."""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np
import pandas as pd
import statsmodels.api as sm
import statsmodels.formula.api as smf
from scipy.optimize import curve_fit

from core.shared_utils import require_columns
from regression.settings import (
    CATS_POSITIVE_SEX,
    JOIN_KEY,
    LINE_X_REPEATS,
    LINE_X_START,
    LINE_X_STEP,
    LINE_X_STOP,
    LISTING_COLUMN,
    LISTING_ID_COLUMNS,
    NONLINEAR_NOISE,
    NONLINEAR_P0,
    NONLINEAR_STEP,
    NONLINEAR_TRUE_PARAMS,
    NONLINEAR_X_MAX,
    SALES_COLUMN,
    STATE_COLUMN,
    TOP_STATES,
)


def _rng(random_state: int | np.random.Generator | None) -> np.random.Generator:
    if isinstance(random_state, np.random.Generator):
        return random_state
    return np.random.default_rng(random_state)


def generate_linear_sample(
    *,
    random_state: int | np.random.Generator | None = None,
) -> tuple[np.ndarray, np.ndarray]:
    """``x`` on a 0.5 grid (each value twice) and ``y = 3 + x + 2u - 1`` with ``u ~ U(0, 1)``."""

    x = np.repeat(np.arange(LINE_X_START, LINE_X_STOP + LINE_X_STEP / 2, LINE_X_STEP), LINE_X_REPEATS)
    y = 3 + x + 2 * _rng(random_state).random(x.size) - 1
    return x, y


def find_best_fit(x: Sequence[float], y: Sequence[float]) -> tuple[float, float]:
    """Ordinary least squares slope and intercept from summary statistics.

    The slope is ``r * s_y / s_x`` and the line passes through the centre of
    mass ``(mean(x), mean(y))``.
    """

    x_arr = np.asarray(x, dtype=float)
    y_arr = np.asarray(y, dtype=float)
    if x_arr.shape != y_arr.shape or x_arr.size < 2:
        raise ValueError("x and y must have the same length of at least two")
    s_x = x_arr.std(ddof=1)
    if s_x == 0:
        raise ValueError("x must not be constant")
    s_y = y_arr.std(ddof=1)
    r = np.corrcoef(x_arr, y_arr)[0, 1] if s_y > 0 else 0.0
    slope = float(r * s_y / s_x)
    intercept = float(y_arr.mean() - slope * x_arr.mean())
    return slope, intercept


def polyfit_line(x: Sequence[float], y: Sequence[float]) -> tuple[float, float]:
    slope, intercept = np.polyfit(np.asarray(x, dtype=float), np.asarray(y, dtype=float), 1)
    return float(slope), float(intercept)


def ols_formula_fit(frame: pd.DataFrame, formula: str = "Y ~ X"):
    """Fit an OLS model from a patsy formula, e.g. ``"Y ~ X"`` or ``"Y ~ 0 + X"``."""

    return smf.ols(formula, data=frame).fit()


def compare_line_fits(x: np.ndarray, y: np.ndarray) -> tuple[pd.DataFrame, dict[str, np.ndarray]]:
    """Coefficients and fitted values of the three line-fitting approaches."""

    scratch = find_best_fit(x, y)
    numpy_fit = polyfit_line(x, y)
    ols = ols_formula_fit(pd.DataFrame({"X": x, "Y": y}))
    formula_fit = (float(ols.params["X"]), float(ols.params["Intercept"]))

    coefficients = pd.DataFrame(
        [
            {"method": "From Scratch", "slope": scratch[0], "intercept": scratch[1]},
            {"method": "Numpy", "slope": numpy_fit[0], "intercept": numpy_fit[1]},
            {"method": "statsmodels OLS", "slope": formula_fit[0], "intercept": formula_fit[1]},
        ]
    )
    fitted = {
        "From Scratch": scratch[0] * x + scratch[1],
        "Numpy": numpy_fit[0] * x + numpy_fit[1],
        "statsmodels OLS": np.asarray(ols.fittedvalues),
    }
    return coefficients, fitted


def prepare_zillow(listings: pd.DataFrame, sales: pd.DataFrame) -> pd.DataFrame:
    """Join the latest monthly listings with the latest sale counts per region.

    Listings keep their identifying columns plus the last month as
    ``listing``; sales keep ``RegionID`` plus the last month as ``sales``.
    Rows missing any value after the outer join are dropped.
    """

    if listings.shape[1] <= LISTING_ID_COLUMNS or sales.shape[1] < 2:
        raise ValueError("Listings and sales sheets are missing their monthly columns")
    require_columns(listings, [JOIN_KEY], label="listings")
    require_columns(sales, [JOIN_KEY], label="sales")

    listing_cols = list(listings.columns[:LISTING_ID_COLUMNS]) + [listings.columns[-1]]
    latest_listings = listings.loc[:, listing_cols].rename(columns={listings.columns[-1]: LISTING_COLUMN})
    latest_sales = sales.loc[:, [JOIN_KEY, sales.columns[-1]]].rename(columns={sales.columns[-1]: SALES_COLUMN})

    joined = latest_listings.merge(latest_sales, on=JOIN_KEY, how="outer").dropna()
    joined[LISTING_COLUMN] = joined[LISTING_COLUMN].astype(float)
    joined[SALES_COLUMN] = joined[SALES_COLUMN].astype(float)
    return joined.reset_index(drop=True)


def top_states(frame: pd.DataFrame, n: int = TOP_STATES) -> list[str]:
    """States with the most regions, most frequent first."""

    require_columns(frame, [STATE_COLUMN], label="zillow data")
    counts = frame[STATE_COLUMN].value_counts(sort=True)
    return [str(state) for state in counts.index[:n]]


def fit_state_models(
    frame: pd.DataFrame,
    states: Iterable[str],
    *,
    intercept: bool = True,
) -> tuple[pd.DataFrame, dict[str, tuple[np.ndarray, np.ndarray, np.ndarray]]]:
    """Per-state OLS of sales on listings.

    Returns a coefficient table and ``{state: (x, y, y_hat)}`` panels ready
    for plotting.
    """

    formula = "Y ~ X" if intercept else "Y ~ 0 + X"
    rows = []
    panels: dict[str, tuple[np.ndarray, np.ndarray, np.ndarray]] = {}
    for state in states:
        subset = frame.loc[frame[STATE_COLUMN] == state]
        data = pd.DataFrame(
            {"X": subset[LISTING_COLUMN].to_numpy(dtype=float), "Y": subset[SALES_COLUMN].to_numpy(dtype=float)}
        )
        if len(data) < 2:
            print(f"Skipping {state}: fewer than two regions")
            continue
        model = ols_formula_fit(data, formula)
        rows.append(
            {
                "state": state,
                "n": int(len(data)),
                "intercept": float(model.params.get("Intercept", 0.0)),
                "slope": float(model.params["X"]),
                "r_squared": float(model.rsquared),
            }
        )
        panels[state] = (data["X"].to_numpy(), data["Y"].to_numpy(), np.asarray(model.fittedvalues))
    return pd.DataFrame(rows), panels


def binary_outcome_frame(x: Sequence[float], y: Sequence[int]) -> pd.DataFrame:
    return pd.DataFrame({"X": np.asarray(x, dtype=float), "Y": np.asarray(y, dtype=float)})


def encode_cats(cats: pd.DataFrame, positive: str = CATS_POSITIVE_SEX) -> pd.DataFrame:
    """``X`` = heart weight, ``Y`` = 1 when the cat's sex is ``positive``."""

    require_columns(cats, ["Sex", "Hwt"], label="cats data")
    complete = cats.dropna(subset=["Sex", "Hwt"])
    return pd.DataFrame(
        {
            "X": complete["Hwt"].to_numpy(dtype=float),
            "Y": (complete["Sex"].astype(str) == positive).astype(int).to_numpy(),
        }
    )


def logistic_fit(frame: pd.DataFrame, formula: str = "Y ~ X"):
    """Binomial GLM with the canonical logit link."""

    return smf.glm(formula, data=frame, family=sm.families.Binomial()).fit()


def decay_wave(x: np.ndarray, p1: float, p2: float, p3: float) -> np.ndarray:
    """``p1 * exp(-x * p2) + p3 * sin(0.8 * pi * x)``."""

    return p1 * np.exp(-x * p2) + p3 * np.sin(0.8 * np.pi * x)


def generate_nonlinear_sample(
    params: Sequence[float] = NONLINEAR_TRUE_PARAMS,
    *,
    noise: float = NONLINEAR_NOISE,
    random_state: int | np.random.Generator | None = None,
) -> tuple[np.ndarray, np.ndarray]:
    x = np.linspace(0.0, NONLINEAR_X_MAX, int(round(NONLINEAR_X_MAX / NONLINEAR_STEP)) + 1)
    y = decay_wave(x, *params) + noise * _rng(random_state).standard_normal(x.size)
    return x, y


def fit_nonlinear(
    x: np.ndarray,
    y: np.ndarray,
    p0: Sequence[float] = NONLINEAR_P0,
) -> tuple[np.ndarray, np.ndarray]:
    """Least-squares parameters of :func:`decay_wave` and their standard errors."""

    params, covariance = curve_fit(decay_wave, np.asarray(x, dtype=float), np.asarray(y, dtype=float), p0=list(p0))
    return params, np.sqrt(np.diag(covariance))


__all__ = [
    "binary_outcome_frame",
    "compare_line_fits",
    "decay_wave",
    "encode_cats",
    "find_best_fit",
    "fit_nonlinear",
    "fit_state_models",
    "generate_linear_sample",
    "generate_nonlinear_sample",
    "logistic_fit",
    "ols_formula_fit",
    "polyfit_line",
    "prepare_zillow",
    "top_states",
]
