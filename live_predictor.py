"""Fit-once / predict-on-every-change session behind the price app.

Usage:
    session = PredictionSession(HOUSES, chart=PriceChart())
    session.initialize()                        # fit once, draw line
    session.on_input_change("1000", "3", "2")   # -> 18431818.18...

Until `initialize()` succeeds the session is not ready and input changes are
no-ops. Invalid input is also a no-op: the last displayed prediction stays.
A failed fit (singular or invalid data) is reported (stderr + chart title) instead of being ignored.
"""
from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from housing_data import Observation, design_matrix, target_vector
from normal_equation import FitError, fit, fitted_values, predict
from price_chart import format_inr


@dataclass(frozen=True)
class QueryInput:
    size: float
    bedrooms: int
    bathrooms: int

    def features(self):
        return (self.size, self.bedrooms, self.bathrooms)


def _parse_number(text) -> Optional[float]:
    if text is None:
        return None
    try:
        value = float(str(text).strip())
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def parse_query(size_text, bedrooms_text, bathrooms_text) -> Optional[QueryInput]:
    """Parse the three form fields; None if any is empty or not a number.

    Room counts are truncated toward zero ("3.7" -> 3).
    """
    size = _parse_number(size_text)
    bedrooms = _parse_number(bedrooms_text)
    bathrooms = _parse_number(bathrooms_text)
    if size is None or bedrooms is None or bathrooms is None:
        return None
    return QueryInput(size=size, bedrooms=int(bedrooms), bathrooms=int(bathrooms))


class PredictionSession:
    def __init__(self, houses: Sequence[Observation], chart=None):
        self.houses = tuple(houses)
        self.chart = chart
        self.theta: Optional[np.ndarray] = None
        self.fit_error: Optional[str] = None
        self.last_prediction: Optional[float] = None
        self.predicted_text = ""

    @property
    def ready(self) -> bool:
        return self.theta is not None

    def initialize(self) -> Optional[np.ndarray]:
        X = design_matrix(self.houses)
        y = target_vector(self.houses)
        sizes = [h.size for h in self.houses]

        if self.chart is not None:
            self.chart.draw_observed(sizes, y)

        try:
            theta = fit(X, y)
        except FitError as exc:
            self.fit_error = str(exc)
            print(f"Fit failed: {exc}", file=sys.stderr)
            if self.chart is not None:
                self.chart.show_fit_error(self.fit_error)
            return None

        self.theta = theta
        self.fit_error = None
        if self.chart is not None:
            self.chart.draw_fit_line(sizes, fitted_values(theta, X))
        return theta

    def on_input_change(self, size_text, bedrooms_text, bathrooms_text) -> Optional[float]:
        """Recompute the prediction if ready and the inputs are valid, else do nothing."""
        if not self.ready:
            return None
        query = parse_query(size_text, bedrooms_text, bathrooms_text)
        if query is None:
            return None

        price = predict(self.theta, query.features())
        self.last_prediction = price
        self.predicted_text = format_inr(price)
        if self.chart is not None:
            self.chart.draw_prediction(query.size, price)
        return price
