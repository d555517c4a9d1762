"""Configuration for the descriptive_statistics package."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

DEFAULT_OUTPUT_ROOT = Path("descriptive_statistics") / "outputs"
ERUPTION_COLUMN: str = "eruptions"
WAITING_COLUMN: str = "waiting"
ERUPTION_BIN_WIDTH: float = 0.2
LARGE_SAMPLE_SIZE: int = 100_000
SMALL_SAMPLE_SIZE: int = 1_000
NORMAL_BIN_WIDTH: float = 0.1
BINOMIAL_TRIALS: int = 40
BINOMIAL_PROBABILITY: float = 0.5
BINOMIAL_BIN_WIDTH: float = 0.5
TTEST_POPULATION_MEAN: float = 0.0

# Multi-class confusion example and binary recall/precision example.
MULTICLASS_TRUE: tuple[int, ...] = (1, 1, 1, 1, 1, 1, 1, 2)
MULTICLASS_PRED: tuple[int, ...] = (1, 1, 2, 2, 1, 1, 1, 1)
BINARY_TRUE: tuple[int, ...] = (1, 1, 1, 1, 1, 1, 1, 0)
BINARY_PRED: tuple[int, ...] = (1, 1, 0, 0, 1, 1, 1, 1)


@dataclass(frozen=True)
class CaseConfig:
    """Descriptor for a descriptive statistics case."""

    case_id: str
    name: str
    description: str | None = None


DESCRIPTIVE_STATISTICS_CASES: Mapping[str, CaseConfig] = {
    "case_1": CaseConfig(
        case_id="case_1",
        name="Case 1: geyser eruption distributions",
        description="Describe the Old Faithful data with summaries, boxplot, histogram and KDE.",
    ),
    "case_2": CaseConfig(
        case_id="case_2",
        name="Case 2: sampling and fitting distributions",
        description="Draw normal and binomial samples and fit normal distributions by maximum likelihood.",
    ),
    "case_3": CaseConfig(
        case_id="case_3",
        name="Case 3: hypothesis tests and correlations",
        description="One-sample t-tests plus Spearman and Pearson correlations with p-values.",
    ),
    "case_4": CaseConfig(
        case_id="case_4",
        name="Case 4: confusion matrix, recall and precision",
        description="Evaluate small label vectors with confusion matrices and binary metrics.",
    ),
}


def get_case_config(case_id: str) -> CaseConfig:
    try:
        return DESCRIPTIVE_STATISTICS_CASES[case_id]
    except KeyError as exc:
        raise KeyError(f"Unknown descriptive statistics case id: {case_id}") from exc


AVAILABLE_CASE_IDS: tuple[str, ...] = tuple(DESCRIPTIVE_STATISTICS_CASES.keys())
