from __future__ import annotations

import importlib
import unittest

from main import TOPICS

EXPORTING_MODULES = (
    "core",
    "core.data_fetch",
    "core.distribution_plots",
    "core.model_evaluation",
    "core.shared_utils",
    "core.visualization",
    "classification",
    "classification._shared",
    "classification.models",
    "clustering",
    "clustering.algorithms",
    "data_handling",
    "data_handling.file_formats",
    "data_handling.lookups",
    "data_handling.settings",
    "descriptive_statistics",
    "descriptive_statistics.analysis",
    "dimensionality_reduction",
    "dimensionality_reduction.embeddings",
    "linear_algebra",
    "linear_algebra.operations",
    "regression",
    "regression.fitting",
)


class TestCaseRegistries(unittest.TestCase):
    def test_registered_ids_match_settings(self) -> None:
        for title, package in TOPICS:
            with self.subTest(topic=title):
                ids = tuple(case.case_id for case in package.get_case_studies())
                self.assertEqual(ids, package.AVAILABLE_CASE_IDS)
                for case in package.get_case_studies():
                    self.assertEqual(package.get_case_config(case.case_id).name, case.title)
                    self.assertTrue(callable(case.runner))

    def test_unknown_case_id_raises_key_error(self) -> None:
        for title, package in TOPICS:
            with self.subTest(topic=title):
                with self.assertRaises(KeyError):
                    package.run_case_by_id("case_99")
                with self.assertRaises(KeyError):
                    package.get_case_config("case_99")


class TestPublicExports(unittest.TestCase):
    def test_every_exported_name_exists(self) -> None:
        for module_name in EXPORTING_MODULES:
            module = importlib.import_module(module_name)
            with self.subTest(module=module_name):
                missing = [name for name in module.__all__ if not hasattr(module, name)]
                self.assertEqual(missing, [])

    def test_star_import_of_data_fetch(self) -> None:
        namespace: dict[str, object] = {}
        exec("from core.data_fetch import *", namespace)
        self.assertIn("load_iris_frame", namespace)
        self.assertNotIn("load_programming_languages", namespace)


if __name__ == "__main__":
    unittest.main()
