from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

import numpy as np
import pandas as pd

from data_handling import case_2_table_joins, case_3_file_formats, case_4_language_lookups
from data_handling.file_formats import parse_cell_range, read_excel_range, read_excel_table, roundtrip_arrays
from data_handling.lookups import (
    blank_first_year,
    build_language_index,
    drop_missing,
    langs_per_year_frame,
    langs_per_year_index,
    langs_per_year_matrix,
    matrix_to_frame,
    read_delimited,
    write_delimited,
    year_created_frame,
    year_created_index,
    year_created_matrix,
)

LANGUAGES = np.array(
    [
        [1951, "Regional Assembly Language"],
        [1952, "Autocode"],
        [1954, "IPL"],
        [1988, "Octave"],
        [1988, "Object Pascal"],
        [2012, "Julia"],
    ],
    dtype=object,
)


class TestLanguageLookups(unittest.TestCase):
    def setUp(self) -> None:
        self.frame = matrix_to_frame(LANGUAGES)
        self.index = build_language_index(LANGUAGES)

    def test_year_created_agrees_across_representations(self) -> None:
        self.assertEqual(year_created_matrix(LANGUAGES, "Julia"), 2012)
        self.assertEqual(year_created_frame(self.frame, "Julia"), 2012)
        self.assertEqual(year_created_index(self.index, "Julia"), 2012)

    def test_unknown_language_raises_key_error(self) -> None:
        with self.assertRaises(KeyError):
            year_created_matrix(LANGUAGES, "COBOL")
        with self.assertRaises(KeyError):
            year_created_frame(self.frame, "COBOL")
        with self.assertRaises(KeyError):
            year_created_index(self.index, "COBOL")

    def test_langs_per_year_counts(self) -> None:
        self.assertEqual(langs_per_year_matrix(LANGUAGES, 1988), 2)
        self.assertEqual(langs_per_year_frame(self.frame, 1988), 2)
        self.assertEqual(langs_per_year_index(self.index, 1988), 2)

    def test_langs_per_year_unknown_year_is_zero(self) -> None:
        self.assertEqual(langs_per_year_matrix(LANGUAGES, 1900), 0)
        self.assertEqual(langs_per_year_frame(self.frame, 1900), 0)
        self.assertEqual(langs_per_year_index(self.index, 1900), 0)

    def test_index_keeps_row_order(self) -> None:
        self.assertEqual(self.index[1988], ["Octave", "Object Pascal"])
        self.assertEqual(list(self.index), [1951, 1952, 1954, 1988, 2012])

    def test_blank_first_year_then_drop_missing(self) -> None:
        blanked = blank_first_year(LANGUAGES)
        self.assertTrue(pd.isna(blanked.loc[0, "Year"]))
        cleaned = drop_missing(blanked)
        self.assertEqual(len(cleaned), len(LANGUAGES) - 1)
        self.assertEqual(cleaned.loc[0, "Language"], "Autocode")


class TestDelimitedFiles(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_read_delimited_parses_numbers(self) -> None:
        path = self.tmp / "langs.csv"
        path.write_text("year,language\n1951,Autocode\n2012,Julia\n", encoding="utf-8")
        data, header = read_delimited(path, ",")
        self.assertEqual(list(header), ["year", "language"])
        self.assertEqual(data.shape, (2, 2))
        self.assertEqual(data[1, 0], 2012)
        self.assertIsInstance(data[1, 0], int)
        self.assertEqual(data[1, 1], "Julia")

    def test_read_delimited_rejects_ragged_rows(self) -> None:
        path = self.tmp / "ragged.csv"
        path.write_text("a,b\n1,2,3\n", encoding="utf-8")
        with self.assertRaises(ValueError):
            read_delimited(path)

    def test_write_delimited_uses_custom_delimiter(self) -> None:
        path = write_delimited(LANGUAGES[-2:], self.tmp / "out" / "langs.txt", "-")
        lines = path.read_text(encoding="utf-8").splitlines()
        self.assertEqual(lines, ["1988-Object Pascal", "2012-Julia"])


class TestFileFormats(unittest.TestCase):
    def test_roundtrip_every_format(self) -> None:
        matrix = np.random.default_rng(0).random((4, 5))
        with tempfile.TemporaryDirectory() as tmp:
            results = roundtrip_arrays({"tempdata": matrix}, Path(tmp))
            self.assertEqual(set(results), {"h5", "npz", "mat"})
            for result in results.values():
                self.assertTrue(result["equal"])
                self.assertTrue(Path(result["path"]).exists())

    def test_parse_cell_range(self) -> None:
        self.assertEqual(parse_cell_range("A1:F9"), (0, 8, 0, 5))
        self.assertEqual(parse_cell_range("b2:aa3"), (1, 2, 1, 26))

    def test_parse_cell_range_rejects_bad_input(self) -> None:
        with self.assertRaises(ValueError):
            parse_cell_range("A1-F9")
        with self.assertRaises(ValueError):
            parse_cell_range("F9:A1")


class TestExcelReaders(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "zillow.xlsx"
        self.frame = pd.DataFrame(
            {
                "RegionID": np.arange(100, 108),
                "RegionName": [f"City {i}" for i in range(8)],
                "StateName": ["CA", "TX", "NY", "CA", "WA", "TX", "CA", "NY"],
                "SizeRank": np.arange(8),
                "2020-02": np.linspace(10.0, 17.0, 8),
                "2020-03": np.linspace(20.0, 27.0, 8),
            }
        )
        with pd.ExcelWriter(self.path, engine="openpyxl") as writer:
            pd.DataFrame({"note": ["other sheet"]}).to_excel(writer, sheet_name="Notes", index=False)
            self.frame.to_excel(writer, sheet_name="Listings", index=False)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_read_excel_range_returns_header_row_first(self) -> None:
        block = read_excel_range(self.path, "Listings", "A1:F9")
        self.assertEqual(block.shape, (9, 6))
        self.assertEqual(block.dtype, object)
        self.assertEqual(block[0].tolist(), list(self.frame.columns))
        self.assertEqual(block[1].tolist(), self.frame.iloc[0].tolist())
        self.assertEqual(block[-1, 1], "City 7")

    def test_read_excel_range_inner_block(self) -> None:
        block = read_excel_range(self.path, "Listings", "B3:C4")
        self.assertEqual(block.tolist(), [["City 1", "TX"], ["City 2", "NY"]])

    def test_read_excel_table_whole_sheet(self) -> None:
        table = read_excel_table(self.path, "Listings")
        self.assertEqual(table.shape, (8, 6))
        self.assertEqual(list(table.columns), list(self.frame.columns))
        np.testing.assert_allclose(table["2020-03"], self.frame["2020-03"])
        self.assertEqual(read_excel_table(self.path, "Notes").shape, (1, 1))


class TestDataHandlingCases(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_join_on_item(self) -> None:
        calories, prices = case_2_table_joins.build_food_tables()
        joined = case_2_table_joins.join_on_item(calories, prices)
        self.assertEqual(list(joined.columns), ["Item", "Calories", "Price"])
        self.assertEqual(len(joined), 4)

    def test_table_joins_case(self) -> None:
        case_dir = case_2_table_joins.run_case(language_matrix=LANGUAGES, output_root=self.tmp)
        cleaned = pd.read_csv(case_dir / "languages_without_missing.csv")
        self.assertEqual(len(cleaned), len(LANGUAGES) - 1)

    def test_file_formats_case_without_workbook(self) -> None:
        case_dir = case_3_file_formats.run_case(output_root=self.tmp, include_workbook=False)
        roundtrip = pd.read_csv(case_dir / "format_roundtrip.csv")
        self.assertTrue(roundtrip["equal"].all())
        meta = json.loads((case_dir / "meta.json").read_text(encoding="utf-8"))
        self.assertIsNone(meta["workbook"])

    def test_language_lookups_case(self) -> None:
        case_dir = case_4_language_lookups.run_case(language_matrix=LANGUAGES, output_root=self.tmp)
        answers = pd.read_csv(case_dir / "lookup_answers.csv")
        self.assertTrue(answers["consistent"].all())
        julia = answers.loc[answers["argument"] == "Julia"].iloc[0]
        self.assertEqual(int(julia["matrix"]), 2012)


if __name__ == "__main__":
    unittest.main()
