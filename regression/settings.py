"""Configuration for the regression package."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

DEFAULT_OUTPUT_ROOT = Path("regression") / "outputs"

LINE_X_START: float = 1.0
LINE_X_STOP: float = 10.0
LINE_X_STEP: float = 0.5
LINE_X_REPEATS: int = 2

ZILLOW_FILENAME: str = "zillow_data_download_april2020.xlsx"
LISTINGS_SHEET: str = "MonthlyListings_City"
SALES_SHEET: str = "Sale_counts_city"
JOIN_KEY: str = "RegionID"
STATE_COLUMN: str = "StateName"
LISTING_COLUMN: str = "listing"
SALES_COLUMN: str = "sales"
LISTING_ID_COLUMNS: int = 5
TOP_STATES: int = 10
PLOT_LIMITS: tuple[float, float] = (0.0, 500.0)

BINARY_X: tuple[int, ...] = (1, 2, 3, 4, 5, 6, 7)
BINARY_Y: tuple[int, ...] = (1, 0, 1, 1, 1, 1, 1)
CATS_POSITIVE_SEX: str = "M"

NONLINEAR_TRUE_PARAMS: tuple[float, float, float] = (1.0, 2.0, 2.0)
NONLINEAR_P0: tuple[float, float, float] = (0.5, 0.5, 0.5)
NONLINEAR_NOISE: float = 0.15
NONLINEAR_X_MAX: float = 10.0
NONLINEAR_STEP: float = 0.05


@dataclass(frozen=True)
class CaseConfig:
    """Descriptor for a regression case."""

    case_id: str
    name: str
    description: str | None = None


REGRESSION_CASES: Mapping[str, CaseConfig] = {
    "case_1": CaseConfig(
        case_id="case_1",
        name="Case 1: simple linear regression three ways",
        description="Closed-form OLS, numpy.polyfit and a statsmodels formula on synthetic data.",
    ),
    "case_2": CaseConfig(
        case_id="case_2",
        name="Case 2: Zillow listings vs sales per state",
        description="Per-state OLS fits (with and without intercept) for the ten most frequent states.",
    ),
    "case_3": CaseConfig(
        case_id="case_3",
        name="Case 3: linear vs logistic regression on binary outcomes",
        description="Linear fit to 0/1 data and a binomial GLM of cat sex on heart weight.",
    ),
    "case_4": CaseConfig(
        case_id="case_4",
        name="Case 4: non-linear least squares",
        description="Fit p1*exp(-x*p2) + p3*sin(0.8*pi*x) to noisy samples.",
    ),
}


def get_case_config(case_id: str) -> CaseConfig:
    try:
        return REGRESSION_CASES[case_id]
    except KeyError as exc:
        raise KeyError(f"Unknown regression case id: {case_id}") from exc


AVAILABLE_CASE_IDS: tuple[str, ...] = tuple(REGRESSION_CASES.keys())
