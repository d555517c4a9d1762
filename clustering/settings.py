"""Configuration for the clustering package."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

DEFAULT_OUTPUT_ROOT = Path("clustering") / "outputs"
COORDINATE_COLUMNS: tuple[str, str] = ("latitude", "longitude")
PRICE_COLUMN: str = "median_house_value"
PRICE_BUCKET_WIDTH: int = 50_000
N_CLUSTERS: int = 10
# Row cap for the distance-matrix methods.
DISTANCE_SAMPLE_SIZE: int = 2_000
HCA_LINKAGE: str = "single"
DBSCAN_EPS: float = 0.05
DBSCAN_MIN_SAMPLES: int = 10
NOISE_LABEL: int = -1


@dataclass(frozen=True)
class CaseConfig:
    """Descriptor for a clustering case."""

    case_id: str
    name: str
    description: str | None = None


CLUSTERING_CASES: Mapping[str, CaseConfig] = {
    "case_1": CaseConfig(
        case_id="case_1",
        name="Case 1: price buckets and k-means on house locations",
        description="Bucket California house values by $50k and cluster coordinates with k-means.",
    ),
    "case_2": CaseConfig(
        case_id="case_2",
        name="Case 2: distance-matrix clustering (k-medoids, HCA, DBSCAN)",
        description="Cluster a subsample of house locations from pairwise distance matrices.",
    ),
}


def get_case_config(case_id: str) -> CaseConfig:
    try:
        return CLUSTERING_CASES[case_id]
    except KeyError as exc:
        raise KeyError(f"Unknown clustering case id: {case_id}") from exc


AVAILABLE_CASE_IDS: tuple[str, ...] = tuple(CLUSTERING_CASES.keys())
