"""Core helpers shared by the data science case studies."""

from .distribution_plots import compute_distribution_summary, plot_distribution_grid
from .model_evaluation import assign_class, find_accuracy, train_test_split
from .shared_utils import resolve_output_dir, save_dataframe, write_case_metadata

__all__ = [
    "assign_class",
    "compute_distribution_summary",
    "find_accuracy",
    "plot_distribution_grid",
    "resolve_output_dir",
    "save_dataframe",
    "train_test_split",
    "write_case_metadata",
]
