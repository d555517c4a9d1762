"""Case study 1: house price buckets and k-means on coordinates."""

from __future__ import annotations

import argparse
from pathlib import Path

if __package__ in (None, ""):
    import sys
    from pathlib import Path as _Path

    sys.path.append(str(_Path(__file__).resolve().parents[1]))

import pandas as pd

from clustering.algorithms import cluster_sizes, coordinates, kmeans_assignments, price_buckets
from clustering.settings import (
    CLUSTERING_CASES,
    COORDINATE_COLUMNS,
    DEFAULT_OUTPUT_ROOT,
    N_CLUSTERS,
    PRICE_BUCKET_WIDTH,
    PRICE_COLUMN,
)
from config import RANDOM_SEED
from core.data_fetch import load_california_houses
from core.shared_utils import display_dataframe, require_columns, resolve_output_dir, save_dataframe, write_case_metadata
from core.visualization import plot_geo_clusters

CASE_ID = "case_1"
CASE_CONFIG = CLUSTERING_CASES[CASE_ID]
CASE_NAME = CASE_CONFIG.name


def run_case(
    *,
    frame: pd.DataFrame | None = None,
    n_clusters: int = N_CLUSTERS,
    output_root: Path | str | None = None,
    random_state: int = RANDOM_SEED,
    save_plots: bool = True,
) -> Path:
    """Colour houses by $50k price bucket, then by k-means cluster of their location."""

    case_output_dir = resolve_output_dir(CASE_ID, DEFAULT_OUTPUT_ROOT, output_root)
    houses = (frame if frame is not None else load_california_houses()).copy()
    require_columns(houses, [*COORDINATE_COLUMNS, PRICE_COLUMN], label="houses")
    houses = houses.dropna(subset=[*COORDINATE_COLUMNS, PRICE_COLUMN]).reset_index(drop=True)

    print(f"=== Running {CASE_ID}: {CASE_NAME} ===")
    display_dataframe(houses, "California houses")

    houses["cprice"] = price_buckets(houses[PRICE_COLUMN], PRICE_BUCKET_WIDTH)
    print(f"Price buckets of ${PRICE_BUCKET_WIDTH:,}: {houses['cprice'].nunique()} distinct")

    labels, centres = kmeans_assignments(
        coordinates(houses), n_clusters, random_state=random_state
    )
    houses["cluster_means"] = labels
    centres_df = pd.DataFrame(centres, columns=list(COORDINATE_COLUMNS))
    centres_df.insert(0, "cluster", range(1, len(centres_df) + 1))
    print(centres_df.round(4).to_string(index=False))

    assignments_path = save_dataframe(houses, case_output_dir, "houses_with_clusters.csv")
    centres_path = save_dataframe(centres_df, case_output_dir, "kmeans_centres.csv")
    sizes_path = save_dataframe(
        cluster_sizes(houses[["cprice", "cluster_means"]]), case_output_dir, "cluster_sizes.csv"
    )

    plot_paths: list[str] = []
    if save_plots:
        plot_paths.append(
            plot_geo_clusters(houses, "cprice", title="Houses by price bucket", output_dir=case_output_dir).name
        )
        plot_paths.append(
            plot_geo_clusters(
                houses, "cluster_means", title="Houses by k-means cluster", output_dir=case_output_dir
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
        models=(f"KMeans(n_clusters={n_clusters})",),
        extras={
            "rows": int(len(houses)),
            "price_bucket_width": PRICE_BUCKET_WIDTH,
            "assignments_csv": assignments_path.name,
            "centres_csv": centres_path.name,
            "sizes_csv": sizes_path.name,
            "plots": plot_paths,
        },
    )
    print(f"Metadata written to: {metadata_path}")
    return case_output_dir


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=CASE_NAME)
    parser.add_argument("--clusters", type=int, default=N_CLUSTERS)
    parser.add_argument("--output-root", type=Path, default=None)
    parser.add_argument("--no-plots", action="store_true")
    return parser.parse_args()


if __name__ == "__main__":
    args = _parse_args()
    run_case(n_clusters=args.clusters, output_root=args.output_root, save_plots=not args.no_plots)
