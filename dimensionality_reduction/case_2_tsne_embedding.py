"""Case study 2: t-SNE embedding of the cars dataset."""

from __future__ import annotations

import argparse
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
from dimensionality_reduction.embeddings import embedding_frame, prepare_cars, tsne_embedding
from dimensionality_reduction.settings import (
    CARS_FEATURES,
    DEFAULT_OUTPUT_ROOT,
    DIMENSIONALITY_REDUCTION_CASES,
    ORIGIN_COLUMN,
    TSNE_EARLY_EXAGGERATION,
    TSNE_PERPLEXITY,
)

CASE_ID = "case_2"
CASE_CONFIG = DIMENSIONALITY_REDUCTION_CASES[CASE_ID]
CASE_NAME = CASE_CONFIG.name


def run_case(
    *,
    frame: pd.DataFrame | None = None,
    perplexity: float = TSNE_PERPLEXITY,
    early_exaggeration: float = TSNE_EARLY_EXAGGERATION,
    output_root: Path | str | None = None,
    random_state: int = RANDOM_SEED,
    save_plots: bool = True,
) -> Path:
    case_output_dir = resolve_output_dir(CASE_ID, DEFAULT_OUTPUT_ROOT, output_root)
    cars = frame if frame is not None else load_cars()

    print(f"=== Running {CASE_ID}: {CASE_NAME} ===")
    features, codes, origins = prepare_cars(cars)
    row_origins = [origins[code - 1] for code in codes]
    print(f"t-SNE with perplexity={perplexity}, early_exaggeration={early_exaggeration}")

    embedding = tsne_embedding(
        features,
        perplexity=perplexity,
        early_exaggeration=early_exaggeration,
        random_state=random_state,
    )
    embedding_path = save_dataframe(
        embedding_frame(embedding, row_origins, "tsne"), case_output_dir, "tsne_embedding.csv"
    )
    print(f"Embedding saved to: {embedding_path}")

    plot_name = None
    if save_plots:
        plot_name = plot_grouped_scatter(
            embedding, row_origins, title="t-SNE embedding by origin", output_dir=case_output_dir
        ).name

    metadata_path = write_case_metadata(
        case_dir=case_output_dir,
        case_id=CASE_ID,
        case_name=CASE_NAME,
        package="dimensionality_reduction",
        dataset="vega-datasets::cars",
        features=list(CARS_FEATURES),
        target=ORIGIN_COLUMN,
        models=("TSNE",),
        extras={
            "perplexity": perplexity,
            "early_exaggeration": early_exaggeration,
            "random_state": random_state,
            "embedding_csv": embedding_path.name,
            "plot": plot_name,
        },
    )
    print(f"Metadata written to: {metadata_path}")
    return case_output_dir


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=CASE_NAME)
    parser.add_argument("--perplexity", type=float, default=TSNE_PERPLEXITY)
    parser.add_argument("--early-exaggeration", type=float, default=TSNE_EARLY_EXAGGERATION)
    parser.add_argument("--output-root", type=Path, default=None)
    return parser.parse_args()


if __name__ == "__main__":
    args = _parse_args()
    run_case(
        perplexity=args.perplexity,
        early_exaggeration=args.early_exaggeration,
        output_root=args.output_root,
    )
