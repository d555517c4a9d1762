"""Case study 1: principal component analysis of the cars dataset."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

if __package__ in (None, ""):
    import sys
    from pathlib import Path as _Path

    sys.path.append(str(_Path(__file__).resolve().parents[1]))

import numpy as np
import pandas as pd

from core.data_fetch import load_cars
from core.shared_utils import display_dataframe, resolve_output_dir, save_dataframe, write_case_metadata
from core.visualization import plot_grouped_scatter
from dimensionality_reduction.embeddings import (
    embedding_frame,
    fit_pca,
    manual_projection,
    pca_report,
    prepare_cars,
    reconstruction_error,
)
from dimensionality_reduction.settings import (
    CARS_FEATURES,
    DEFAULT_OUTPUT_ROOT,
    DIMENSIONALITY_REDUCTION_CASES,
    ORIGIN_COLUMN,
    PCA_COMPONENTS,
)

CASE_ID = "case_1"
CASE_CONFIG = DIMENSIONALITY_REDUCTION_CASES[CASE_ID]
CASE_NAME = CASE_CONFIG.name


def run_case(
    *,
    frame: pd.DataFrame | None = None,
    components: Sequence[int] = PCA_COMPONENTS,
    output_root: Path | str | None = None,
    save_plots: bool = True,
) -> Path:
    """Fit PCA with each requested component count and verify the projection."""

    case_output_dir = resolve_output_dir(CASE_ID, DEFAULT_OUTPUT_ROOT, output_root)
    cars = frame if frame is not None else load_cars()

    print(f"=== Running {CASE_ID}: {CASE_NAME} ===")
    features, codes, origins = prepare_cars(cars)
    row_origins = [origins[code - 1] for code in codes]
    display_dataframe(features, "Standardised car features")
    print(f"Complete cars: {len(features)} | origins: {', '.join(map(str, origins))}")

    summary_rows = []
    plot_paths: list[str] = []
    for n_components in components:
        pca, projection = fit_pca(features, n_components)
        manual = manual_projection(pca, features.iloc[0].to_numpy())
        matches = bool(np.allclose(manual, projection[0]))
        error = reconstruction_error(pca, features, projection)
        print(
            f"PCA({n_components}): explained variance {pca.explained_variance_ratio_.sum():.4f}, "
            f"reconstruction error {error:.4f}, manual projection matches: {matches}"
        )

        save_dataframe(
            pca_report(pca, CARS_FEATURES).reset_index(),
            case_output_dir,
            f"pca_{n_components}_projection_matrix.csv",
        )
        save_dataframe(
            embedding_frame(projection, row_origins, "PC"),
            case_output_dir,
            f"pca_{n_components}_embedding.csv",
        )
        summary_rows.append(
            {
                "n_components": int(n_components),
                "explained_variance": float(pca.explained_variance_ratio_.sum()),
                "reconstruction_error": error,
                "manual_projection_matches": matches,
            }
        )
        if save_plots and n_components >= 2:
            plot_paths.append(
                plot_grouped_scatter(
                    projection,
                    row_origins,
                    title=f"PCA {n_components} components by origin",
                    output_dir=case_output_dir,
                ).name
            )

    summary_path = save_dataframe(pd.DataFrame(summary_rows), case_output_dir, "pca_summary.csv")

    metadata_path = write_case_metadata(
        case_dir=case_output_dir,
        case_id=CASE_ID,
        case_name=CASE_NAME,
        package="dimensionality_reduction",
        dataset="vega-datasets::cars",
        features=list(CARS_FEATURES),
        target=ORIGIN_COLUMN,
        models=tuple(f"PCA(n_components={n})" for n in components),
        extras={
            "rows": int(len(features)),
            "origins": [str(origin) for origin in origins],
            "summary_csv": summary_path.name,
            "plots": plot_paths,
        },
    )
    print(f"Metadata written to: {metadata_path}")
    return case_output_dir


if __name__ == "__main__":
    run_case()
