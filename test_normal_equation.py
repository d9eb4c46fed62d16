"""Tests for the normal-equation fitter and predictor."""
import unittest

import numpy as np

from housing_data import HOUSES, design_matrix, target_vector
from normal_equation import (
    MAX_CONDITION,
    FitError,
    NotFittedError,
    SingularMatrixError,
    fit,
    fitted_values,
    predict,
    r_squared,
    rmse,
)


class TestFit(unittest.TestCase):
    def setUp(self):
        self.X = design_matrix(HOUSES)
        self.y = target_vector(HOUSES)

    def test_seed_coefficients(self):
        theta = fit(self.X, self.y)
        self.assertEqual(theta.shape, (4,))
        # exact least-squares solution for the seed dataset
        np.testing.assert_allclose(
            theta,
            [2363636.3636, 454.5454545, 2795454.5454, 3613636.3636],
            rtol=1e-6,
        )

    def test_weights_are_non_negative(self):
        theta = fit(self.X, self.y)
        self.assertTrue(np.all(theta[1:] >= 0))
        # bigger house, same rooms -> higher price
        self.assertGreater(predict(theta, (1600, 4, 3)), predict(theta, (1500, 4, 3)))

    def test_training_residuals_are_small(self):
        theta = fit(self.X, self.y)
        for h in HOUSES:
            self.assertAlmostEqual(predict(theta, h.features()), h.price, delta=500_000)

    def test_known_training_point(self):
        theta = fit(self.X, self.y)
        self.assertAlmostEqual(predict(theta, (1000, 3, 2)), 18_000_000, delta=500_000)

    def test_fit_is_deterministic(self):
        np.testing.assert_array_equal(fit(self.X, self.y), fit(self.X, self.y))

    def test_accepts_plain_lists(self):
        theta = fit(self.X.tolist(), self.y.tolist())
        np.testing.assert_allclose(theta, fit(self.X, self.y))

    def test_exact_fit_recovers_coefficients(self):
        X = [[1, x] for x in range(5)]
        y = [3 + 2 * x for x in range(5)]
        np.testing.assert_allclose(fit(X, y), [3, 2], atol=1e-9)


class TestFitErrors(unittest.TestCase):
    def test_repeated_row_matrix_is_singular(self):
        X = [[1, 500, 2, 1]] * 7
        with self.assertRaises(SingularMatrixError):
            fit(X, [12_000_000] * 7)

    def test_collinear_columns_are_singular(self):
        X = [[1, 1, 1], [1, 2, 2], [1, 3, 3], [1, 4, 4]]
        with self.assertRaises(SingularMatrixError):
            fit(X, [1, 2, 3, 4])

    def test_nearly_collinear_columns_are_rejected(self):
        sizes = np.array([500, 700, 1000, 1200, 1500, 1800, 2000], dtype=np.float64)
        wobble = np.array([1, -1, 1, -1, 1, -1, 1], dtype=np.float64)
        rooms = np.array([1, 1, 2, 2, 3, 3, 4], dtype=np.float64)
        X = np.column_stack([np.ones(7), sizes, sizes * (1 + 1e-13 * wobble), rooms])
        with self.assertRaisesRegex(SingularMatrixError, "singular"):
            fit(X, 15_000 * sizes)

    def test_seed_fit_is_well_conditioned(self):
        X = design_matrix(HOUSES)
        self.assertLess(np.linalg.cond(X) ** 2, MAX_CONDITION)

    def test_fewer_rows_than_columns_is_singular(self):
        with self.assertRaises(SingularMatrixError):
            fit([[1, 500, 2, 1], [1, 700, 3, 1]], [1, 2])

    def test_singular_is_a_fit_error(self):
        self.assertTrue(issubclass(SingularMatrixError, FitError))
        self.assertTrue(issubclass(FitError, ValueError))

    def test_empty_matrix(self):
        with self.assertRaises(FitError):
            fit([], [])

    def test_ragged_rows(self):
        with self.assertRaises(FitError):
            fit([[1, 2], [1, 2, 3], [1, 4]], [1, 2, 3])

    def test_target_length_mismatch(self):
        with self.assertRaises(FitError):
            fit([[1, 1], [1, 2], [1, 3]], [1, 2])

    def test_non_finite_values(self):
        with self.assertRaises(FitError):
            fit([[1, 1], [1, float("nan")], [1, 3]], [1, 2, 3])


class TestPredict(unittest.TestCase):
    def test_intercept_plus_weighted_sum(self):
        self.assertEqual(predict([10, 1, 2, 3], (100, 2, 1)), 10 + 100 + 4 + 3)

    def test_unfitted_model_is_rejected(self):
        with self.assertRaises(NotFittedError):
            predict(None, (1000, 3, 2))

    def test_feature_count_mismatch(self):
        with self.assertRaises(ValueError):
            predict([1, 2, 3, 4], (1000, 3))

    def test_returns_python_float(self):
        self.assertIsInstance(predict(np.array([1.0, 2.0]), [3]), float)

    def test_fitted_values_match_predict(self):
        X = design_matrix(HOUSES)
        theta = fit(X, target_vector(HOUSES))
        expected = [predict(theta, h.features()) for h in HOUSES]
        np.testing.assert_allclose(fitted_values(theta, X), expected)


class TestGoodnessOfFit(unittest.TestCase):
    def test_rmse(self):
        self.assertAlmostEqual(rmse([1, 2, 3], [1, 2, 5]), (4 / 3) ** 0.5)
        with self.assertRaises(ValueError):
            rmse([], [])
        with self.assertRaises(ValueError):
            rmse([1, 2], [1])

    def test_r_squared_on_seed_fit(self):
        X = design_matrix(HOUSES)
        y = target_vector(HOUSES)
        self.assertGreater(r_squared(y, fitted_values(fit(X, y), X)), 0.99)

    def test_r_squared_constant_target(self):
        with self.assertRaises(ValueError):
            r_squared([5, 5, 5], [5, 5, 5])


if __name__ == "__main__":
    unittest.main()
