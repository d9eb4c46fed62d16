#!/usr/bin/env python3
"""Fit the housing model once and write a coefficient / residual report.

Outputs land in results/: fit_summary.txt and residuals.csv
"""
from __future__ import annotations

import argparse
from pathlib import Path

from housing_data import FEATURES, HOUSES, design_matrix, houses_frame, load_houses, target_vector
from normal_equation import FitError, fit, fitted_values, r_squared, rmse
from price_chart import format_inr

RESULTS_DIR = Path("results")


def build_report(houses):
    """Return (theta, residual DataFrame, summary text) for the given observations."""
    X = design_matrix(houses)
    y = target_vector(houses)
    theta = fit(X, y)
    y_pred = fitted_values(theta, X)

    df = houses_frame(houses)
    df["predicted"] = y_pred
    df["residual"] = y_pred - y

    lines = [f"Observations: {len(df)}", "Coefficients:"]
    for name, w in zip(("intercept",) + FEATURES, theta):
        lines.append(f"  {name:<10} {w:>16.4f}")
    lines.append(f"RMSE: {format_inr(rmse(y, y_pred))}")
    lines.append(f"R^2: {r_squared(y, y_pred):.4f}")
    lines.append(f"Max |residual|: {format_inr(df['residual'].abs().max())}")
    return theta, df, "\n".join(lines) + "\n"


def main(argv=None) -> None:
    p = argparse.ArgumentParser(description="Fit the housing model and report coefficients and residuals")
    p.add_argument("--data", help="CSV with size,bedrooms,bathrooms,price columns (default: built-in dataset)")
    p.add_argument("--outdir", type=Path, default=RESULTS_DIR)
    args = p.parse_args(argv)

    try:
        houses = load_houses(args.data) if args.data else HOUSES
    except (OSError, ValueError) as exc:
        raise SystemExit(f"Loading data failed: {exc}")
    try:
        _, df, summary = build_report(houses)
    except FitError as exc:
        raise SystemExit(f"Fit failed: {exc}")

    print(summary, end="")
    print(df.to_string(index=False))

    args.outdir.mkdir(parents=True, exist_ok=True)
    (args.outdir / "fit_summary.txt").write_text(summary, encoding="utf-8")
    out_csv = args.outdir / "residuals.csv"
    df.to_csv(out_csv, index=False)
    print(f"Wrote {out_csv}")


if __name__ == "__main__":
    main()
