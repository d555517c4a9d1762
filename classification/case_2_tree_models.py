"""Case study 2: decision tree and random forest on iris."""

from __future__ import annotations

import argparse
from pathlib import Path

if __package__ in (None, ""):
    import sys
    from pathlib import Path as _Path

    sys.path.append(str(_Path(__file__).resolve().parents[1]))

import pandas as pd

from classification._shared import run_classifier_workflow
from classification.settings import CLASSIFICATION_CASES, TREE_MODEL_NAMES, TRAIN_RATIO
from config import RANDOM_SEED

CASE_ID = "case_2"
CASE_CONFIG = CLASSIFICATION_CASES[CASE_ID]
CASE_NAME = CASE_CONFIG.name


def run_case(
    *,
    frame: pd.DataFrame | None = None,
    train_ratio: float = TRAIN_RATIO,
    output_root: Path | str | None = None,
    random_state: int = RANDOM_SEED,
) -> Path:
    return run_classifier_workflow(
        case_id=CASE_ID,
        case_name=CASE_NAME,
        model_names=TREE_MODEL_NAMES,
        frame=frame,
        train_ratio=train_ratio,
        output_root=output_root,
        random_state=random_state,
        persist_best=False,
    )


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=CASE_NAME)
    parser.add_argument("--train-ratio", type=float, default=TRAIN_RATIO)
    parser.add_argument("--seed", type=int, default=RANDOM_SEED)
    parser.add_argument("--output-root", type=Path, default=None)
    return parser.parse_args()


if __name__ == "__main__":
    args = _parse_args()
    run_case(train_ratio=args.train_ratio, output_root=args.output_root, random_state=args.seed)
