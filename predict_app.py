"""Interactive house price predictor.

Run examples:
  # matplotlib window with size / bedrooms / bathrooms text boxes
  python predict_app.py

  # one-shot prediction, chart saved to results/price_chart.png
  python predict_app.py --size 1000 --bedrooms 3 --bathrooms 2

  # headless: each stdin line "size bedrooms bathrooms" is one input change
  printf '1000 3 2\\n1500 4 3\\n' | python predict_app.py --no-gui

  # fit a different dataset (columns: size,bedrooms,bathrooms,price)
  python predict_app.py --data data/houses.csv --no-gui
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import matplotlib.pyplot as plt
from matplotlib.widgets import TextBox

from housing_data import HOUSES, load_houses
from live_predictor import PredictionSession
from price_chart import PriceChart

RESULTS_DIR = Path("results")
DEFAULT_CHART = RESULTS_DIR / "price_chart.png"
INPUT_FIELDS = ("size", "bedrooms", "bathrooms")


def run_stream(session: PredictionSession, lines) -> int:
    """Feed input-change events from text lines; returns the number of predictions."""
    made = 0
    for line in lines:
        fields = line.split()
        if not fields:
            continue
        fields = (fields + ["", "", ""])[:3]
        price = session.on_input_change(*fields)
        if price is None:
            continue
        made += 1
        print(f"Predicted price: {session.predicted_text}")
    return made


def run_gui(session: PredictionSession, out: Path) -> None:
    fig = plt.figure(figsize=(7.5, 6.0))
    chart = PriceChart(ax=fig.add_axes([0.14, 0.36, 0.8, 0.56]))
    session.chart = chart
    session.initialize()

    output = fig.text(0.14, 0.04, "Predicted price: -", fontsize=11, color="green")
    boxes = {}
    for i, name in enumerate(INPUT_FIELDS):
        ax_box = fig.add_axes([0.3, 0.22 - i * 0.06, 0.3, 0.045])
        boxes[name] = TextBox(ax_box, name.capitalize(), initial="")

    def on_change(_text):
        if session.on_input_change(*(boxes[n].text for n in INPUT_FIELDS)) is None:
            return
        output.set_text(f"Predicted price: {session.predicted_text}")
        fig.canvas.draw_idle()

    for box in boxes.values():
        box.on_text_change(on_change)

    plt.show()
    print(f"Saved plot to {chart.save(out).resolve()}")
    chart.close()


def main(argv=None) -> int:
    p = argparse.ArgumentParser(description="Fit a linear price model and predict as inputs change")
    p.add_argument("--data", help="CSV with size,bedrooms,bathrooms,price columns (default: built-in dataset)")
    p.add_argument("--size", help="House size in sqft (one-shot mode)")
    p.add_argument("--bedrooms", help="Number of bedrooms (one-shot mode)")
    p.add_argument("--bathrooms", help="Number of bathrooms (one-shot mode)")
    p.add_argument("--no-gui", dest="no_gui", action="store_true", help="Read 'size bedrooms bathrooms' lines from stdin")
    p.add_argument("--out", type=Path, default=DEFAULT_CHART, help="Where to save the chart PNG")
    args = p.parse_args(argv)

    try:
        houses = load_houses(args.data) if args.data else HOUSES
    except (OSError, ValueError) as exc:
        print(f"Loading data failed: {exc}", file=sys.stderr)
        return 1
    session = PredictionSession(houses)

    one_shot = any(v is not None for v in (args.size, args.bedrooms, args.bathrooms))
    if not (one_shot or args.no_gui):
        run_gui(session, args.out)
        return 0 if session.ready else 1

    plt.switch_backend("Agg")
    session.chart = PriceChart()
    session.initialize()
    if not session.ready:
        print(f"Saved plot to {session.chart.save(args.out).resolve()}")
        session.chart.close()
        return 1

    if one_shot:
        if session.on_input_change(args.size, args.bedrooms, args.bathrooms) is None:
            print("No prediction: size, bedrooms and bathrooms must all be numbers.", file=sys.stderr)
        else:
            print(f"Predicted price: {session.predicted_text}")
    else:
        run_stream(session, sys.stdin)

    print(f"Saved plot to {session.chart.save(args.out).resolve()}")
    session.chart.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
