from pathlib import Path
from typing import Any, Sequence

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from sheetiq.ml.forecasting import ForecastResult
from sheetiq.ml.regression import RegressionResult, prediction_line, valid_pairs


# =========================================================
# REGRESSION
# =========================================================
def plot_regression(
    xs: Sequence[Any],
    ys: Sequence[Any],
    result: RegressionResult,
    out_path,
    label_x: str = "x",
    label_y: str = "y",
):
    """Scatter of the valid pairs with the fitted line on top."""
    out = Path(out_path)
    x, y = valid_pairs(xs, ys)
    line = prediction_line(result, xs)

    fig, ax = plt.subplots(figsize=(8, 4))
    ax.scatter(x, y, alpha=0.7, label="observed")
    ax.plot(
        [p["x"] for p in line],
        [p["predicted_y"] for p in line],
        color="tab:red",
        linewidth=2,
        label=f"fit (R² = {result.r_squared:.2f})",
    )

    ax.set_xlabel(label_x)
    ax.set_ylabel(label_y)
    ax.set_title(f"{label_y} vs {label_x}")
    ax.grid(axis="y", linestyle="--", alpha=0.4)
    ax.legend()

    fig.savefig(out, dpi=150, bbox_inches="tight")
    plt.close(fig)

    return out


# =========================================================
# FORECAST
# =========================================================
def plot_forecast(result: ForecastResult, out_path, label_value: str = "value"):
    """History, smoothed series and forecast on one time axis."""
    out = Path(out_path)
    dates = [p.date for p in result.historical]

    fig, ax = plt.subplots(figsize=(8, 3))
    ax.plot(dates, [p.value for p in result.historical], marker="o", linewidth=1, label="observed")
    ax.plot(dates, result.smoothed_series, linewidth=2, label="moving average")

    if result.forecast:
        # Connect the forecast to the last observation
        f_dates = [dates[-1]] + [p.date for p in result.forecast]
        f_values = [result.historical[-1].value] + [p.value for p in result.forecast]
        ax.plot(f_dates, f_values, linestyle="--", marker="x", label="forecast")

    ax.set_title(f"{label_value} trend is {result.trend.value}")
    ax.grid(axis="y", linestyle="--", alpha=0.4)
    ax.legend()

    fig.autofmt_xdate()
    fig.savefig(out, dpi=150, bbox_inches="tight")
    plt.close(fig)

    return out
