"""Case study 2: k-medoids, hierarchical clustering and DBSCAN on distance matrices."""

from __future__ import annotations

from pathlib import Path

if __package__ in (None, ""):
    import sys
    from pathlib import Path as _Path

    sys.path.append(str(_Path(__file__).resolve().parents[1]))

import pandas as pd

from clustering.algorithms import (
    cluster_sizes,
    coordinates,
    dbscan_assignments,
    euclidean_distances,
    hierarchical_assignments,
    kmedoids_assignments,
    price_buckets,
    squared_euclidean_distances,
    subsample,
)
from clustering.settings import (
    CLUSTERING_CASES,
    COORDINATE_COLUMNS,
    DBSCAN_EPS,
    DBSCAN_MIN_SAMPLES,
    DEFAULT_OUTPUT_ROOT,
    DISTANCE_SAMPLE_SIZE,
    HCA_LINKAGE,
    N_CLUSTERS,
    NOISE_LABEL,
    PRICE_COLUMN,
)
from config import RANDOM_SEED
from core.data_fetch import load_california_houses
from core.shared_utils import require_columns, resolve_output_dir, save_dataframe, write_case_metadata
from core.visualization import plot_geo_clusters

CASE_ID = "case_2"
CASE_CONFIG = CLUSTERING_CASES[CASE_ID]
CASE_NAME = CASE_CONFIG.name


def run_case(
    *,
    frame: pd.DataFrame | None = None,
    n_clusters: int = N_CLUSTERS,
    sample_size: int = DISTANCE_SAMPLE_SIZE,
    linkage_method: str = HCA_LINKAGE,
    eps: float = DBSCAN_EPS,
    min_samples: int = DBSCAN_MIN_SAMPLES,
    output_root: Path | str | None = None,
    random_state: int = RANDOM_SEED,
    save_plots: bool = True,
) -> Path:
    case_output_dir = resolve_output_dir(CASE_ID, DEFAULT_OUTPUT_ROOT, output_root)
    houses = frame if frame is not None else load_california_houses()
    require_columns(houses, [*COORDINATE_COLUMNS, PRICE_COLUMN], label="houses")
    houses = subsample(
        houses.dropna(subset=[*COORDINATE_COLUMNS, PRICE_COLUMN]), sample_size, random_state=random_state
    )

    print(f"=== Running {CASE_ID}: {CASE_NAME} ===")
    print(f"Working on {len(houses)} houses (sample cap {sample_size})")

    points = coordinates(houses)
    distances = euclidean_distances(points)

    houses["cprice"] = price_buckets(houses[PRICE_COLUMN])
    medoid_labels, medoids, cost = kmedoids_assignments(distances, n_clusters, random_state=random_state)
    houses["cluster_medoids"] = medoid_labels
    print(f"k-medoids total cost: {cost:.4f}")

    houses["cluster_hca"] = hierarchical_assignments(distances, n_clusters, method=linkage_method)
    print(f"Hierarchical clustering ({linkage_method} linkage): {houses['cluster_hca'].nunique()} clusters")

    houses["cluster_dbscan"] = dbscan_assignments(
        squared_euclidean_distances(points), eps=eps, min_samples=min_samples
    )
    n_noise = int((houses["cluster_dbscan"] == NOISE_LABEL).sum())
    n_dense = houses.loc[houses["cluster_dbscan"] != NOISE_LABEL, "cluster_dbscan"].nunique()
    print(f"DBSCAN (eps={eps}, min_samples={min_samples}): {n_dense} clusters, {n_noise} noise points")

    assignment_columns = ["cprice", "cluster_medoids", "cluster_hca", "cluster_dbscan"]
    assignments_path = save_dataframe(houses, case_output_dir, "houses_with_clusters.csv")
    sizes_path = save_dataframe(
        cluster_sizes(houses[assignment_columns]), case_output_dir, "cluster_sizes.csv"
    )
    medoids_path = save_dataframe(
        houses.loc[medoids, list(COORDINATE_COLUMNS)].reset_index(names="row"),
        case_output_dir,
        "medoids.csv",
    )

    plot_paths: list[str] = []
    if save_plots:
        for column in assignment_columns[1:]:
            plot_paths.append(
                plot_geo_clusters(
                    houses, column, title=f"Houses by {column}", output_dir=case_output_dir
                ).name
            )

    metadata_path = write_case_metadata(
        case_dir=case_output_dir,
        case_id=CASE_ID,
        case_name=CASE_NAME,
        package="clustering",
        dataset="sklearn::fetch_california_housing",
        features=list(COORDINATE_COLUMNS),
        target=PRICE_COLUMN,
        models=("kmedoids", f"linkage({linkage_method})", "DBSCAN"),
        extras={
            "rows": int(len(houses)),
            "sample_size": sample_size,
            "kmedoids_cost": cost,
            "dbscan_eps": eps,
            "dbscan_min_samples": min_samples,
            "dbscan_noise_points": n_noise,
            "assignments_csv": assignments_path.name,
            "sizes_csv": sizes_path.name,
            "medoids_csv": medoids_path.name,
            "plots": plot_paths,
        },
    )
    print(f"Metadata written to: {metadata_path}")
    return case_output_dir


if __name__ == "__main__":
    run_case()
