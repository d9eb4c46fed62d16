"""Matplotlib price chart: observed houses, regression line, predicted house.

The chart only renders what it is handed; it never fits or predicts.
"""
from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
from matplotlib.ticker import FuncFormatter

RUPEE = "₹"


def format_inr(value: float, decimals: int = 0) -> str:
    """Format a price with the rupee sign and Indian digit grouping.

    Rounds to `decimals` places (whole rupees by default), unlike the
    browser's en-IN locale formatting, which shows up to three fraction
    digits ('₹1,84,31,818.182'). Pass decimals=3 to keep three places.

    >>> format_inr(18431818.18)
    '₹1,84,31,818'
    """
    text = f"{abs(float(value)):.{decimals}f}"
    whole, _, frac = text.partition(".")
    sign = "-" if value < 0 and float(text) != 0 else ""

    # last three digits, then pairs (lakh / crore grouping)
    head, tail = whole[:-3], whole[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    grouped = ",".join(groups + [tail])
    if frac:
        grouped = f"{grouped}.{frac}"
    return f"{RUPEE}{sign}{grouped}"


class PriceChart:
    """Scatter/line chart of price against size.

    Pass `ax` to embed the chart in an existing figure (the interactive app
    does this); otherwise a new figure is created.
    """
    def __init__(self, ax=None, figsize=(6.8, 4.2)):
        self._owns_figure = ax is None
        if ax is None:
            fig, ax = plt.subplots(figsize=figsize)
        self.ax = ax
        self.fig = ax.figure
        self.observed = None
        self.fit_line = None
        self.predicted = None
        self._label = None

        ax.set_xlabel("Size (sqft)")
        ax.set_ylabel(f"Price ({RUPEE})")
        ax.yaxis.set_major_formatter(FuncFormatter(lambda v, _pos: format_inr(v)))
        ax.grid(True, linestyle="--", alpha=0.4)

        self.tooltip = ax.annotate(
            "",
            (0, 0),
            textcoords="offset points",
            xytext=(8, 8),
            fontsize=8,
            bbox=dict(boxstyle="round", fc="white", alpha=0.9),
            visible=False,
        )
        self.fig.canvas.mpl_connect("motion_notify_event", self.hover)

    def draw_observed(self, sizes, prices) -> None:
        if self.observed is not None:
            self.observed.remove()
        self.observed = self.ax.scatter(sizes, prices, color="blue", label="Existing Houses", zorder=3)
        self._refresh()

    def draw_fit_line(self, sizes, prices) -> None:
        if self.fit_line is not None:
            self.fit_line.remove()
        (self.fit_line,) = self.ax.plot(sizes, prices, color="red", linewidth=2, label="Regression Line")
        self._refresh()

    def draw_prediction(self, size: float, price: float) -> None:
        # a single predicted point; the previous one is replaced
        if self.predicted is not None:
            self.predicted.remove()
            self._label.remove()
        self.predicted = self.ax.scatter([size], [price], color="green", label="Predicted House", zorder=4)
        self._label = self.ax.annotate(
            format_inr(price),
            (size, price),
            textcoords="offset points",
            xytext=(6, 6),
            fontsize=8,
        )
        self._refresh()

    def hover(self, event) -> None:
        """Show the price of the point under the cursor, hide the tooltip otherwise."""
        for points in (self.predicted, self.observed):
            if points is None:
                continue
            hit, info = points.contains(event)
            if hit:
                x, y = points.get_offsets()[info["ind"][0]]
                self.tooltip.xy = (x, y)
                self.tooltip.set_text(format_inr(y))
                self.tooltip.set_visible(True)
                self.fig.canvas.draw_idle()
                return
        if self.tooltip.get_visible():
            self.tooltip.set_visible(False)
            self.fig.canvas.draw_idle()

    def show_fit_error(self, message: str) -> None:
        self.ax.set_title(f"Fit failed: {message}", color="red", fontsize=9)
        self._refresh()

    def predicted_point(self):
        if self.predicted is None:
            return None
        x, y = self.predicted.get_offsets()[0]
        return float(x), float(y)

    def save(self, outfile, dpi: int = 160) -> Path:
        outfile = Path(outfile)
        outfile.parent.mkdir(parents=True, exist_ok=True)
        if self._owns_figure:
            self.fig.tight_layout()
        self.fig.savefig(outfile, dpi=dpi)
        return outfile

    def close(self) -> None:
        plt.close(self.fig)

    def _refresh(self) -> None:
        self.ax.relim()
        self.ax.autoscale_view()
        if self.ax.get_legend_handles_labels()[0]:
            self.ax.legend(loc="upper left")
        self.fig.canvas.draw_idle()
