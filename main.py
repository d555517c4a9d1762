"""Command-line entry point for running the data science case studies."""

from __future__ import annotations

from functools import partial
from typing import Callable, Dict, Sequence, Tuple

import requests

import classification
import clustering
import data_handling
import descriptive_statistics
import dimensionality_reduction
import linear_algebra
import regression
from config import DATASET_URLS, RAW_DATA_DIR
from core.data_fetch import download_all

MenuOption = Tuple[str, Callable[[], None] | None]

TOPICS = (
    ("Data handling", data_handling),
    ("Linear algebra", linear_algebra),
    ("Descriptive statistics", descriptive_statistics),
    ("Dimensionality reduction", dimensionality_reduction),
    ("Clustering", clustering),
    ("Classification", classification),
    ("Regression", regression),
)


def _prompt_menu(title: str, options: Dict[str, MenuOption]) -> str:
    """Display a menu and return the selected key."""

    print(f"\n{title}")
    for key, (label, _) in sorted(options.items(), key=lambda item: int(item[0])):
        print(f"{key}. {label}")

    return input("Choose an option: ").strip()


def _download_datasets() -> None:
    """Download every remote dataset into the raw data directory."""

    print("Datasets:")
    for filename, url in DATASET_URLS.items():
        print(f" - {filename}: {url}")

    paths = download_all()
    print(f"{len(paths)}/{len(DATASET_URLS)} datasets available in {RAW_DATA_DIR}")


def _run_safely(label: str, runner: Callable[[], object]) -> None:
    try:
        runner()
    except (requests.RequestException, FileNotFoundError) as exc:
        print(f"{label} needs data that is not available: {exc}")
    except Exception as exc:
        print(f"{label} failed: {exc}")


def _case_menu(title: str, case_studies: Sequence, run_all: Callable[[], None]) -> None:
    """Sub-menu listing the case studies of one topic."""

    while True:
        print(f"\n{title} - available case studies:")
        print("1. Run all case studies")
        for idx, case in enumerate(case_studies, start=2):
            print(f"{idx}. {case.case_id} - {case.title}")
        print("0. Return to main menu")

        choice = input("Choose an option: ").strip()

        if choice == "0":
            return
        if choice == "1":
            _run_safely(title, run_all)
            continue

        try:
            numeric_choice = int(choice)
        except ValueError:
            print("Invalid choice, please try again.")
            continue

        case_index = numeric_choice - 2
        if 0 <= case_index < len(case_studies):
            case = case_studies[case_index]
            _run_safely(case.case_id, case.runner)
        else:
            print("Invalid choice, please try again.")


def main() -> None:
    """Main CLI entry point."""

    options: Dict[str, MenuOption] = {"1": ("Download sample datasets", _download_datasets)}
    for idx, (title, package) in enumerate(TOPICS, start=2):
        options[str(idx)] = (
            title,
            partial(_case_menu, title, package.get_case_studies(), package.run_all_cases),
        )
    options["0"] = ("Exit", None)

    while True:
        choice = _prompt_menu("Main menu:", options)

        if choice == "0":
            print("Goodbye!")
            return

        action = options.get(choice, ("", None))[1]
        if action is None:
            print("Invalid choice, please try again.")
            continue

        action()


if __name__ == "__main__":
    main()
