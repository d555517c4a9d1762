"""Linear algebra case studies registry."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Tuple

from .case_1_factorizations import CASE_ID as CASE_1_ID
from .case_1_factorizations import CASE_NAME as CASE_1_NAME
from .case_1_factorizations import run_case as run_case_1
from .case_2_special_matrices import CASE_ID as CASE_2_ID
from .case_2_special_matrices import CASE_NAME as CASE_2_NAME
from .case_2_special_matrices import run_case as run_case_2
from .case_3_image_svd import CASE_ID as CASE_3_ID
from .case_3_image_svd import CASE_NAME as CASE_3_NAME
from .case_3_image_svd import run_case as run_case_3
from .case_4_face_least_squares import CASE_ID as CASE_4_ID
from .case_4_face_least_squares import CASE_NAME as CASE_4_NAME
from .case_4_face_least_squares import run_case as run_case_4
from .settings import AVAILABLE_CASE_IDS, LINEAR_ALGEBRA_CASES, DEFAULT_OUTPUT_ROOT, get_case_config


@dataclass(frozen=True)
class CaseStudy:
    """Descriptor for a linear algebra case study."""

    case_id: str
    title: str
    runner: Callable[..., Path]


CASE_STUDIES: Tuple[CaseStudy, ...] = (
    CaseStudy(CASE_1_ID, CASE_1_NAME, run_case_1),
    CaseStudy(CASE_2_ID, CASE_2_NAME, run_case_2),
    CaseStudy(CASE_3_ID, CASE_3_NAME, run_case_3),
    CaseStudy(CASE_4_ID, CASE_4_NAME, run_case_4),
)

_CASE_RUNNERS = {case.case_id: case.runner for case in CASE_STUDIES}


def get_case_studies() -> Tuple[CaseStudy, ...]:
    """Return the registered case studies."""

    return CASE_STUDIES


def run_case_by_id(case_id: str, **kwargs):
    """Execute a linear algebra case by its identifier."""

    try:
        runner = _CASE_RUNNERS[case_id]
    except KeyError as exc:
        raise KeyError(f"Unknown linear algebra case id: {case_id}") from exc
    return runner(**kwargs)


def run_all_cases() -> None:
    """Execute all registered case studies sequentially."""

    for case in CASE_STUDIES:
        print(f"\n>>> Running {case.case_id}: {case.title}")
        case.runner()


__all__ = [
    "AVAILABLE_CASE_IDS",
    "CASE_STUDIES",
    "CaseStudy",
    "LINEAR_ALGEBRA_CASES",
    "DEFAULT_OUTPUT_ROOT",
    "get_case_config",
    "get_case_studies",
    "run_all_cases",
    "run_case_by_id",
]
