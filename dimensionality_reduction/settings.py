"""Configuration for the dimensionality_reduction package."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

DEFAULT_OUTPUT_ROOT = Path("dimensionality_reduction") / "outputs"
CARS_FILENAME: str = "cars.json"
CARS_FEATURES: tuple[str, ...] = (
    "Miles_per_Gallon",
    "Cylinders",
    "Displacement",
    "Horsepower",
    "Weight_in_lbs",
    "Acceleration",
)
ORIGIN_COLUMN: str = "Origin"
PCA_COMPONENTS: tuple[int, ...] = (2, 3)
TSNE_PERPLEXITY: float = 20.0
TSNE_EARLY_EXAGGERATION: float = 50.0
UMAP_COMPONENTS: int = 2
UMAP_NEIGHBOURS: int = 15


@dataclass(frozen=True)
class CaseConfig:
    """Descriptor for a dimensionality reduction case."""

    case_id: str
    name: str
    description: str | None = None


DIMENSIONALITY_REDUCTION_CASES: Mapping[str, CaseConfig] = {
    "case_1": CaseConfig(
        case_id="case_1",
        name="Case 1: PCA on the cars dataset",
        description="Project standardised car features onto 2 and 3 principal components.",
    ),
    "case_2": CaseConfig(
        case_id="case_2",
        name="Case 2: t-SNE on the cars dataset",
        description="Embed standardised car features in 2D with t-SNE.",
    ),
    "case_3": CaseConfig(
        case_id="case_3",
        name="Case 3: UMAP on correlation and distance matrices",
        description="Run UMAP on the observation correlation matrix and on precomputed Euclidean distances.",
    ),
}


def get_case_config(case_id: str) -> CaseConfig:
    try:
        return DIMENSIONALITY_REDUCTION_CASES[case_id]
    except KeyError as exc:
        raise KeyError(f"Unknown dimensionality reduction case id: {case_id}") from exc


AVAILABLE_CASE_IDS: tuple[str, ...] = tuple(DIMENSIONALITY_REDUCTION_CASES.keys())
