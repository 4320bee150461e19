"""Linear regression between two numeric columns.

Ordinary least squares in closed form, on deviations from the means
so large offsets (ids, epoch seconds) keep full precision:

    slope     = sum(dx*dy) / sum(dx*dx)
    intercept = mean(y) - slope*mean(x)
    R^2       = 1 - SS_res / SS_tot

Zero-variance inputs never divide by zero: the fit is flagged
``degenerate`` and a ``DegenerateFitWarning`` is emitted.
"""

import logging
import warnings
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Tuple

import numpy as np

from sheetiq.core.cells import parse_number
from sheetiq.core.dataset import ColumnRef, column_values, resolve_column
from sheetiq.core.errors import DegenerateFitWarning, InsufficientDataError

logger = logging.getLogger(__name__)

MIN_REGRESSION_POINTS = 2
PREDICTION_STEPS = 20

# Residual sums at or below this count as an exact fit
_EXACT_FIT_TOLERANCE = 1e-12


@dataclass(frozen=True)
class RegressionResult:
    """Immutable result of a single (x, y) fit.

    Attributes:
        slope: Fitted slope
        intercept: Fitted intercept
        r_squared: Coefficient of determination, always finite
        n: Number of valid pairs used
        degenerate: True when x or y had zero variance
    """

    slope: float
    intercept: float
    r_squared: float
    n: int
    degenerate: bool = False

    def predict(self, x: float) -> float:
        return self.slope * x + self.intercept

    def to_dict(self) -> Dict[str, Any]:
        return {
            "slope": self.slope,
            "intercept": self.intercept,
            "r_squared": self.r_squared,
            "n": self.n,
            "degenerate": self.degenerate,
        }


def valid_pairs(xs: Sequence[Any], ys: Sequence[Any]) -> Tuple[np.ndarray, np.ndarray]:
    """Pair values by position, dropping pairs with a missing / non-numeric side."""
    pairs = [
        (px, py)
        for px, py in (
            (parse_number(x), parse_number(y)) for x, y in zip(xs, ys)
        )
        if px is not None and py is not None
    ]
    if not pairs:
        return np.array([], dtype=float), np.array([], dtype=float)

    x, y = zip(*pairs)
    return np.asarray(x, dtype=float), np.asarray(y, dtype=float)


def fit_linear_regression(xs: Sequence[Any], ys: Sequence[Any]) -> RegressionResult:
    """Fit y = slope * x + intercept.

    Args:
        xs: Independent values (raw cells accepted)
        ys: Dependent values, paired with xs by position

    Returns:
        RegressionResult

    Raises:
        InsufficientDataError: Fewer than 2 valid pairs
    """
    x, y = valid_pairs(xs, ys)
    n = int(x.size)

    if n < MIN_REGRESSION_POINTS:
        raise InsufficientDataError(
            f"Regression needs at least {MIN_REGRESSION_POINTS} valid pairs, got {n}",
            required=MIN_REGRESSION_POINTS,
            found=n,
        )

    x_mean = x.mean()
    y_mean = y.mean()
    dx = x - x_mean
    dy = y - y_mean

    sxx = float((dx * dx).sum())
    degenerate = False

    if np.ptp(x) == 0 or sxx == 0:
        # All x identical: no slope can be identified
        degenerate = True
        slope = 0.0
        intercept = float(y_mean)
    elif np.ptp(y) == 0:
        slope = 0.0
        intercept = float(y[0])
    else:
        slope = float((dx * dy).sum() / sxx)
        intercept = float(y_mean - slope * x_mean)

    predicted = slope * x + intercept
    ss_res = float(((y - predicted) ** 2).sum())
    ss_tot = float((dy * dy).sum())

    if np.ptp(y) == 0:
        degenerate = True
        r_squared = 1.0 if ss_res <= _EXACT_FIT_TOLERANCE else 0.0
    else:
        r_squared = 1.0 - ss_res / ss_tot

    if degenerate:
        warnings.warn(
            f"Zero-variance regression input (n={n}); R² reported as {r_squared}",
            DegenerateFitWarning,
            stacklevel=2,
        )

    logger.debug(
        "Regression fit: slope=%s intercept=%s r2=%s n=%s", slope, intercept, r_squared, n
    )

    return RegressionResult(
        slope=slope,
        intercept=intercept,
        r_squared=float(r_squared),
        n=n,
        degenerate=degenerate,
    )


def prediction_line(
    result: RegressionResult,
    xs: Sequence[Any],
    steps: int = PREDICTION_STEPS,
) -> List[Dict[str, float]]:
    """Evenly spaced points of the fitted line across [min(x), max(x)].

    Presentation helper for charts; returns ``steps + 1`` points
    (a single point when all x are equal, none when x is empty).
    """
    numbers = [n for n in (parse_number(v) for v in xs) if n is not None]
    if not numbers:
        return []

    lo, hi = min(numbers), max(numbers)
    grid = [lo] if lo == hi else np.linspace(lo, hi, steps + 1)

    return [
        {"x": float(x), "predicted_y": float(result.predict(x))}
        for x in grid
    ]


def regress_columns(
    dataset: Sequence[Sequence[Any]],
    x_column: ColumnRef,
    y_column: ColumnRef,
) -> RegressionResult:
    """Fit a regression between two dataset columns (name or index).

    Raises:
        ColumnNotFoundError: Either column absent from the header
        InsufficientDataError: Fewer than 2 valid pairs
    """
    x_index = resolve_column(dataset, x_column)
    y_index = resolve_column(dataset, y_column)

    return fit_linear_regression(
        column_values(dataset, x_index),
        column_values(dataset, y_index),
    )
