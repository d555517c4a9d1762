"""Case study 3: UMAP on observation correlations and precomputed distances."""

from __future__ import annotations

from pathlib import Path

if __package__ in (None, ""):
    import sys
    from pathlib import Path as _Path

    sys.path.append(str(_Path(__file__).resolve().parents[1]))

import pandas as pd

from config import RANDOM_SEED
from core.data_fetch import load_cars
from core.shared_utils import resolve_output_dir, save_dataframe, write_case_metadata
from core.visualization import plot_grouped_scatter
from dimensionality_reduction.embeddings import (
    embedding_frame,
    euclidean_distance_matrix,
    observation_correlation,
    prepare_cars,
    umap_embedding,
)
from dimensionality_reduction.settings import (
    CARS_FEATURES,
    DEFAULT_OUTPUT_ROOT,
    DIMENSIONALITY_REDUCTION_CASES,
    ORIGIN_COLUMN,
    UMAP_NEIGHBOURS,
)

CASE_ID = "case_3"
CASE_CONFIG = DIMENSIONALITY_REDUCTION_CASES[CASE_ID]
CASE_NAME = CASE_CONFIG.name


def run_case(
    *,
    frame: pd.DataFrame | None = None,
    n_neighbors: int = UMAP_NEIGHBOURS,
    output_root: Path | str | None = None,
    random_state: int = RANDOM_SEED,
    save_plots: bool = True,
) -> Path:
    """Embed cars twice: from the correlation matrix and from a distance matrix."""

    case_output_dir = resolve_output_dir(CASE_ID, DEFAULT_OUTPUT_ROOT, output_root)
    cars = frame if frame is not None else load_cars()

    print(f"=== Running {CASE_ID}: {CASE_NAME} ===")
    features, codes, origins = prepare_cars(cars)
    row_origins = [origins[code - 1] for code in codes]

    inputs = {
        "correlation": (observation_correlation(features), "euclidean"),
        "distance": (euclidean_distance_matrix(features), "precomputed"),
    }

    outputs: dict[str, str] = {}
    plot_paths: list[str] = []
    for label, (matrix, metric) in inputs.items():
        print(f"UMAP on {label} matrix {matrix.shape} (metric={metric})")
        embedding = umap_embedding(
            matrix, metric=metric, n_neighbors=n_neighbors, random_state=random_state
        )
        path = save_dataframe(
            embedding_frame(embedding, row_origins, "umap"),
            case_output_dir,
            f"umap_{label}_embedding.csv",
        )
        outputs[label] = path.name
        if save_plots:
            plot_paths.append(
                plot_grouped_scatter(
                    embedding,
                    row_origins,
                    title=f"UMAP on {label} matrix",
                    output_dir=case_output_dir,
                ).name
            )

    metadata_path = write_case_metadata(
        case_dir=case_output_dir,
        case_id=CASE_ID,
        case_name=CASE_NAME,
        package="dimensionality_reduction",
        dataset="vega-datasets::cars",
        features=list(CARS_FEATURES),
        target=ORIGIN_COLUMN,
        models=("UMAP",),
        extras={
            "n_neighbors": n_neighbors,
            "random_state": random_state,
            "embeddings": outputs,
            "plots": plot_paths,
        },
    )
    print(f"Metadata written to: {metadata_path}")
    return case_output_dir


if __name__ == "__main__":
    run_case()
