from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

import numpy as np
import pandas as pd

from linear_algebra import case_1_factorizations, case_3_image_svd, case_4_face_least_squares
from linear_algebra.operations import (
    add_uniform_noise,
    as_unit_float,
    cholesky_factorization,
    is_positive_definite,
    least_squares_reconstruction,
    low_rank_approximation,
    lu_factorization,
    matrix_structure,
    qr_factorization,
    solve_system,
    sparse_footprint,
    sparse_random,
    to_grayscale,
)


class TestFactorizations(unittest.TestCase):
    def setUp(self) -> None:
        rng = np.random.default_rng(7)
        self.A = rng.random((6, 6)) + 6 * np.eye(6)
        self.b = rng.random(6)

    def test_solve_system_residual_is_small(self) -> None:
        x, residual = solve_system(self.A, self.b)
        self.assertLess(residual, 1e-10)
        np.testing.assert_allclose(self.A @ x, self.b)

    def test_lu_and_qr_reconstruct(self) -> None:
        lu = lu_factorization(self.A)
        qr = qr_factorization(self.A)
        self.assertLess(lu["residual"], 1e-10)
        self.assertLess(qr["residual"], 1e-10)
        np.testing.assert_allclose(np.tril(lu["L"]), lu["L"])
        np.testing.assert_allclose(np.triu(qr["R"]), qr["R"])

    def test_cholesky_requires_spd(self) -> None:
        spd = self.A @ self.A.T
        self.assertTrue(is_positive_definite(spd))
        result = cholesky_factorization(spd)
        self.assertLess(result["residual"], 1e-8)
        np.testing.assert_allclose(result["U"], result["L"].T)

        not_spd = np.array([[1.0, 2.0], [2.0, 1.0]])
        self.assertFalse(is_positive_definite(not_spd))
        with self.assertRaises(ValueError):
            cholesky_factorization(not_spd)

    def test_matrix_structure_picks_factorization(self) -> None:
        cases = {
            "LU": self.A,
            "Cholesky": self.A @ self.A.T,
            "Triangular": np.triu(self.A),
            "Diagonal": np.diag([1.0, 2.0, 3.0]),
            "Bunch-Kaufman": np.array([[0.0, 1.0], [1.0, 0.0]]),
            "QR": np.column_stack([self.A, self.b]),
        }
        for expected, matrix in cases.items():
            with self.subTest(factorization=expected):
                self.assertEqual(matrix_structure(matrix)["factorization"], expected)

    def test_matrix_structure_flags(self) -> None:
        flags = matrix_structure(np.tril(self.A))
        self.assertTrue(flags["square"])
        self.assertTrue(flags["lower_triangular"])
        self.assertFalse(flags["upper_triangular"])
        self.assertFalse(flags["symmetric"])
        self.assertFalse(matrix_structure(np.ones((2, 3)))["square"])


class TestSparseAndImages(unittest.TestCase):
    def test_sparse_footprint(self) -> None:
        matrix = sparse_random((5, 8), 0.2, random_state=1)
        footprint = sparse_footprint(matrix)
        self.assertEqual((footprint["rows"], footprint["cols"]), (5, 8))
        self.assertEqual(footprint["nnz"], matrix.nnz)
        self.assertEqual(footprint["dense_bytes"], 5 * 8 * 8)

    def test_unit_float_and_grayscale(self) -> None:
        image = np.full((3, 4, 3), 255, dtype=np.uint8)
        unit = as_unit_float(image)
        self.assertAlmostEqual(float(unit.max()), 1.0)
        gray = to_grayscale(unit)
        self.assertEqual(gray.shape, (3, 4))
        np.testing.assert_allclose(gray, 1.0, atol=1e-6)

    def test_low_rank_error_decreases_with_rank(self) -> None:
        matrix = np.random.default_rng(3).random((20, 15))
        errors = [low_rank_approximation(matrix, rank)[1] for rank in (1, 5, 15)]
        self.assertGreater(errors[0], errors[1])
        self.assertLess(errors[2], 1e-8)

    def test_least_squares_recovers_combination(self) -> None:
        rng = np.random.default_rng(5)
        basis = rng.random((30, 4))
        coefficients = np.array([0.5, -1.0, 2.0, 0.25])
        x, fitted, residual = least_squares_reconstruction(basis, basis @ coefficients)
        np.testing.assert_allclose(x, coefficients, atol=1e-8)
        self.assertLess(residual, 1e-8)
        self.assertEqual(fitted.shape, (30,))

    def test_uniform_noise_is_normalised(self) -> None:
        noisy = add_uniform_noise(np.ones((4, 4)), 0.5, random_state=0)
        self.assertAlmostEqual(float(noisy.max()), 1.0)


class TestLinearAlgebraCases(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_factorizations_case(self) -> None:
        case_dir = case_1_factorizations.run_case(output_root=self.tmp)
        structure = pd.read_csv(case_dir / "matrix_structure.csv").set_index("matrix")
        self.assertEqual(structure.loc["A", "factorization"], "LU")
        self.assertEqual(structure.loc["AAᵀ", "factorization"], "Cholesky")
        self.assertEqual(structure.loc["[A b]", "factorization"], "QR")
        self.assertTrue((case_dir / "meta.json").exists())

    def test_image_svd_case_with_synthetic_image(self) -> None:
        image = np.random.default_rng(0).random((24, 32, 3))
        case_dir = case_3_image_svd.run_case(image=image, ranks=(2, 8), output_root=self.tmp, save_plots=False)
        errors = pd.read_csv(case_dir / "svd_rank_errors.csv")
        self.assertEqual(errors["rank"].tolist(), [2, 8])
        self.assertGreater(errors.loc[0, "frobenius_error"], errors.loc[1, "frobenius_error"])

    def test_face_case_with_synthetic_faces(self) -> None:
        faces = np.random.default_rng(1).random((6 * 5, 8))
        case_dir = case_4_face_least_squares.run_case(
            faces=faces, image_shape=(6, 5), output_root=self.tmp, save_plots=False
        )
        residuals = pd.read_csv(case_dir / "least_squares_residuals.csv")
        self.assertEqual(residuals["input"].tolist(), ["clean", "noisy"])

    def test_face_case_rejects_mismatched_shape(self) -> None:
        with self.assertRaises(ValueError):
            case_4_face_least_squares.run_case(
                faces=np.ones((10, 3)), image_shape=(4, 4), output_root=self.tmp, save_plots=False
            )


if __name__ == "__main__":
    unittest.main()
