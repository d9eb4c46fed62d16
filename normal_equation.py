"""Closed-form least squares via the normal equation.
`fit(X, y)` returns theta = (X^T X)^-1 X^T y as a float64 vector.
`predict(theta, x)` returns a float. Column order follows the design
matrix: [intercept, size, bedrooms, bathrooms]."""
from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

MAX_CONDITION = 1.0 / np.finfo(np.float64).eps


class FitError(ValueError):
    """The design matrix or target vector cannot be fitted."""


class SingularMatrixError(FitError):
    """X^T X is not invertible, or too ill-conditioned to invert meaningfully."""


class NotFittedError(RuntimeError):
    """Prediction was requested before any coefficients were fitted."""


def _check_inputs(X, y) -> tuple[np.ndarray, np.ndarray]:
    rows = [list(r) for r in X]
    if not rows:
        raise FitError("design matrix is empty")
    width = len(rows[0])
    if width == 0 or any(len(r) != width for r in rows):
        raise FitError("design matrix rows must all have the same, non-zero length")

    X = np.asarray(rows, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64).reshape(-1)
    if y.shape[0] != X.shape[0]:
        raise FitError(f"target has {y.shape[0]} values for {X.shape[0]} rows")
    if not (np.all(np.isfinite(X)) and np.all(np.isfinite(y))):
        raise FitError("design matrix and target must be finite")
    return X, y


def fit(X: Sequence[Sequence[float]], y: Sequence[float]) -> np.ndarray:
    X, y = _check_inputs(X, y)

    # X^T X is invertible iff X has full column rank
    rank = np.linalg.matrix_rank(X)
    if rank < X.shape[1]:
        raise SingularMatrixError(
            f"X^T X is singular: design matrix has rank {rank} < {X.shape[1]} columns"
        )

    # cond(X^T X) == cond(X)**2; at 1/eps the inverse carries no significant digits
    cond = np.linalg.cond(X) ** 2
    if cond >= MAX_CONDITION:
        raise SingularMatrixError(f"X^T X is near-singular: condition number {cond:.3g}")

    XT = X.T
    try:
        XTX_inv = np.linalg.inv(XT @ X)
    except np.linalg.LinAlgError as exc:
        raise SingularMatrixError(f"X^T X is singular: {exc}") from exc

    theta = XTX_inv @ (XT @ y)
    if not np.all(np.isfinite(theta)):
        raise SingularMatrixError("X^T X is numerically singular: coefficients are not finite")
    return theta


def predict(theta: Optional[Sequence[float]], features: Sequence[float]) -> float:
    if theta is None:
        raise NotFittedError("model has not been fitted yet")
    theta = np.asarray(theta, dtype=np.float64).reshape(-1)
    x = np.asarray(features, dtype=np.float64).reshape(-1)
    if theta.shape[0] != x.shape[0] + 1:
        raise ValueError(f"expected {theta.shape[0] - 1} features, got {x.shape[0]}")
    return float(theta[0] + np.dot(theta[1:], x))


def fitted_values(theta: Sequence[float], X) -> np.ndarray:
    return np.asarray(X, dtype=np.float64) @ np.asarray(theta, dtype=np.float64)


def rmse(true: Sequence[float], pred: Sequence[float]) -> float:
    true = np.asarray(true, dtype=np.float64)
    pred = np.asarray(pred, dtype=np.float64)
    if true.shape != pred.shape:
        raise ValueError("Series must be same length")
    if true.size == 0:
        raise ValueError("Series cannot be empty")
    return float(np.sqrt(np.mean((true - pred) ** 2)))


def r_squared(true: Sequence[float], pred: Sequence[float]) -> float:
    true = np.asarray(true, dtype=np.float64)
    pred = np.asarray(pred, dtype=np.float64)
    if true.shape != pred.shape:
        raise ValueError("Series must be same length")
    ss_tot = float(np.sum((true - true.mean()) ** 2))
    if ss_tot == 0:
        raise ValueError("Target has zero variance; R^2 is undefined")
    return 1.0 - float(np.sum((true - pred) ** 2)) / ss_tot
