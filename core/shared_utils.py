"""Shared helpers for the data science case studies."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Sequence

import json
from datetime import datetime, timezone

import numpy as np
import pandas as pd

ARTIFACT_SUFFIXES = (".csv", ".png", ".joblib", ".h5", ".npz", ".mat", ".txt")


def resolve_output_dir(
    case_id: str,
    default_output_root: Path,
    output_root: Path | str | None,
) -> Path:
    """Create and return ``<root>/<case_id>``, preferring ``output_root`` when given."""

    root = Path(output_root) if output_root is not None else default_output_root
    case_dir = root / case_id
    case_dir.mkdir(parents=True, exist_ok=True)
    return case_dir


def display_dataframe(df: pd.DataFrame, label: str, *, rows: int = 5) -> None:
    """Show the head of a frame, through IPython when running in a notebook."""

    print(f"\n{label}")
    print(f"Shape: {df.shape}")
    try:
        from IPython.display import display  # type: ignore

        display(df.head(rows))
    except ImportError:
        print(df.head(rows).to_string())


def require_columns(df: pd.DataFrame, columns: Sequence[str], *, label: str = "dataset") -> None:
    missing = [col for col in columns if col not in df.columns]
    if missing:
        raise KeyError(f"Missing columns in {label}: {', '.join(missing)}")


def clean_feature_matrix(df: pd.DataFrame) -> pd.DataFrame:
    """Drop rows holding NaN or infinite values."""

    if df.empty:
        return df
    return df.replace([np.inf, -np.inf], np.nan).dropna()


DEFAULT_CSV_KWARGS = {"index": False, "sep": ",", "decimal": "."}


def save_dataframe(
    df: pd.DataFrame,
    output_dir: Path,
    filename: str,
    *,
    csv_kwargs: Mapping[str, Any] | None = None,
) -> Path:
    output_path = output_dir / filename
    df.to_csv(output_path, **{**DEFAULT_CSV_KWARGS, **(csv_kwargs or {})})
    return output_path


def _json_default(value: Any) -> Any:
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, Path):
        return value.as_posix()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def list_artifacts(case_dir: Path) -> list[str]:
    """Names of the result files already written into a case directory."""

    return sorted(
        path.name for path in case_dir.iterdir() if path.is_file() and path.suffix in ARTIFACT_SUFFIXES
    )


def write_case_metadata(
    *,
    case_dir: Path,
    case_id: str,
    case_name: str,
    package: str,
    dataset: str | Path | None,
    features: Any,
    target: str | None,
    models: Sequence[str],
    extras: Mapping[str, Any] | None = None,
    filename: str = "meta.json",
) -> Path:
    """Write the JSON descriptor of a finished case run.

    Besides the fixed keys, the descriptor lists every artifact found in
    ``case_dir`` and merges ``extras`` (numpy scalars and arrays allowed).
    """

    case_dir.mkdir(parents=True, exist_ok=True)
    models_used = list(dict.fromkeys(str(model).strip() for model in models if model))

    payload: dict[str, Any] = {
        "case_id": case_id,
        "case_name": case_name,
        "package": package,
        "dataset": str(dataset) if dataset is not None else None,
        "target": target,
        "models_used": models_used,
        "features": features,
        "artifacts": list_artifacts(case_dir),
        "executed_at": datetime.now(timezone.utc).isoformat(),
    }
    if extras:
        payload.update(extras)

    output_path = case_dir / filename
    with output_path.open("w", encoding="utf-8") as fh:
        json.dump(payload, fh, indent=2, default=_json_default)
        fh.write("\n")
    return output_path


__all__ = [
    "clean_feature_matrix",
    "display_dataframe",
    "list_artifacts",
    "require_columns",
    "resolve_output_dir",
    "save_dataframe",
    "write_case_metadata",
]
