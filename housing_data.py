"""Seed housing dataset (prices in INR) and the matrices built from it.
`design_matrix(houses)` prepends the intercept column; column order is
[1, size, bedrooms, bathrooms]. `target_vector(houses)` holds the prices."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence, Tuple

import numpy as np
import pandas as pd

FEATURES = ("size", "bedrooms", "bathrooms")
COLUMNS = FEATURES + ("price",)


@dataclass(frozen=True)
class Observation:
    size: float
    bedrooms: int
    bathrooms: int
    price: float

    def features(self) -> Tuple[float, int, int]:
        return (self.size, self.bedrooms, self.bathrooms)


HOUSES: Tuple[Observation, ...] = (
    Observation(size=500, bedrooms=2, bathrooms=1, price=12_000_000),
    Observation(size=700, bedrooms=3, bathrooms=1, price=15_000_000),
    Observation(size=1000, bedrooms=3, bathrooms=2, price=18_000_000),
    Observation(size=1200, bedrooms=4, bathrooms=2, price=21_000_000),
    Observation(size=1500, bedrooms=4, bathrooms=3, price=25_000_000),
    Observation(size=1800, bedrooms=5, bathrooms=3, price=28_000_000),
    Observation(size=2000, bedrooms=5, bathrooms=4, price=32_000_000),
)


def design_matrix(houses: Iterable[Observation]) -> np.ndarray:
    rows = [[1.0, *h.features()] for h in houses]
    # keep the column count even for an empty dataset
    return np.array(rows, dtype=np.float64).reshape(-1, len(FEATURES) + 1)


def target_vector(houses: Iterable[Observation]) -> np.ndarray:
    return np.array([h.price for h in houses], dtype=np.float64)


def houses_frame(houses: Sequence[Observation]) -> pd.DataFrame:
    return pd.DataFrame(
        [[h.size, h.bedrooms, h.bathrooms, h.price] for h in houses],
        columns=list(COLUMNS),
    )


def load_houses(path) -> Tuple[Observation, ...]:
    """Read observations from a CSV with size, bedrooms, bathrooms and price columns.

    Extra columns are ignored. A missing column or a non-numeric cell raises
    ValueError naming the offending column.
    """
    df = pd.read_csv(Path(path))
    missing = [c for c in COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"{path}: missing column(s) {', '.join(missing)}")

    for col in COLUMNS:
        values = pd.to_numeric(df[col], errors="coerce")
        if values.isna().any():
            raise ValueError(f"{path}: column '{col}' has empty or non-numeric values")
        df[col] = values

    return tuple(
        Observation(
            size=float(row.size),
            bedrooms=int(row.bedrooms),
            bathrooms=int(row.bathrooms),
            price=float(row.price),
        )
        for row in df[list(COLUMNS)].itertuples(index=False)
    )
