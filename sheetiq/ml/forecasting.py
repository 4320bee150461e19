"""Time series trend analysis and forecasting.

A single linear trend is fitted over (elapsed days, value); the
series is smoothed with a centered moving average and the trend line
is extrapolated forward. No seasonal model is fitted, seasonality is
only flagged.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pandas as pd

from sheetiq.core.cells import is_missing, parse_number
from sheetiq.core.dataset import ColumnRef, column_values, resolve_column
from sheetiq.core.dates import parse_date, to_days
from sheetiq.core.errors import ConfigError, InsufficientDataError
from sheetiq.ml.regression import fit_linear_regression

logger = logging.getLogger(__name__)

MIN_FORECAST_POINTS = 3
FORECAST_PERIODS = 6
SMOOTHING_WINDOW = 3
# Slope threshold in value units per day
TREND_THRESHOLD = 0.01
SEASONALITY_MIN_POINTS = 12
SEASONALITY_MAX_R_SQUARED = 0.8
CONFIDENCE_FLOOR = 0.1


class Trend(str, Enum):
    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


@dataclass
class ForecastConfig:
    periods: int = FORECAST_PERIODS
    window: int = SMOOTHING_WINDOW
    trend_threshold: float = TREND_THRESHOLD
    seasonality_min_points: int = SEASONALITY_MIN_POINTS
    seasonality_max_r_squared: float = SEASONALITY_MAX_R_SQUARED
    confidence_floor: float = CONFIDENCE_FLOOR

    def __post_init__(self):
        if self.window < 1 or self.window % 2 == 0:
            raise ConfigError(
                f"Smoothing window must be a positive odd integer, got {self.window}"
            )
        if self.periods < 0:
            raise ConfigError(f"Forecast periods must be >= 0, got {self.periods}")


@dataclass
class HistoricalPoint:
    date: datetime
    value: float
    smoothed: float

    def to_dict(self) -> Dict[str, Any]:
        return {"date": self.date.isoformat(), "value": self.value, "smoothed": self.smoothed}


@dataclass
class ForecastPoint:
    date: datetime
    value: float
    confidence: float

    def to_dict(self) -> Dict[str, Any]:
        return {"date": self.date.isoformat(), "value": self.value, "confidence": self.confidence}


@dataclass
class ForecastResult:
    """Trend, smoothing and forecast of one (date, value) series.

    ``slope`` is in value units per day and ``intercept`` is the
    fitted value at the first observation.
    """

    trend: Trend
    seasonality: bool
    r_squared: float
    slope: float
    intercept: float
    historical: List[HistoricalPoint] = field(default_factory=list)
    forecast: List[ForecastPoint] = field(default_factory=list)
    degenerate: bool = False

    @property
    def smoothed_series(self) -> List[float]:
        return [p.smoothed for p in self.historical]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "trend": self.trend.value,
            "seasonality": self.seasonality,
            "r_squared": self.r_squared,
            "slope": self.slope,
            "intercept": self.intercept,
            "degenerate": self.degenerate,
            "historical": [p.to_dict() for p in self.historical],
            "smoothed_series": self.smoothed_series,
            "forecast": [p.to_dict() for p in self.forecast],
        }


# -------------------------------------------------
# BUILDING BLOCKS
# -------------------------------------------------
def moving_average(values: Sequence[float], window: int = SMOOTHING_WINDOW) -> List[float]:
    """Centered moving average, window clipped at the series edges.

    Raises:
        ValueError: Window is not a positive odd integer
    """
    if window < 1 or window % 2 == 0:
        raise ValueError(f"Smoothing window must be a positive odd integer, got {window}")

    series = pd.Series(list(values), dtype=float)
    smoothed = series.rolling(window=window, center=True, min_periods=1).mean()
    return smoothed.tolist()


def classify_trend(slope: float, threshold: float = TREND_THRESHOLD) -> Trend:
    if slope > threshold:
        return Trend.INCREASING
    if slope < -threshold:
        return Trend.DECREASING
    return Trend.STABLE


def _prepare(pairs: Sequence[Tuple[Any, Any]]) -> List[Tuple[datetime, float]]:
    """Drop unusable pairs, parse dates and sort by date (stable)."""
    usable = [
        (raw_date, parse_number(raw_value))
        for raw_date, raw_value in pairs
        if not is_missing(raw_date) and parse_number(raw_value) is not None
    ]
    if len(usable) < MIN_FORECAST_POINTS:
        raise InsufficientDataError(
            f"Time series analysis needs at least {MIN_FORECAST_POINTS} "
            f"valid points, got {len(usable)}",
            required=MIN_FORECAST_POINTS,
            found=len(usable),
        )

    parsed = []
    for raw_date, value in usable:
        when = parse_date(raw_date)
        if when is None:
            logger.debug("Discarding unparsable date %r", raw_date)
            continue
        parsed.append((when, value))

    if len(parsed) < MIN_FORECAST_POINTS:
        raise InsufficientDataError(
            f"Only {len(parsed)} point(s) have a parsable date; "
            f"{MIN_FORECAST_POINTS} are required",
            required=MIN_FORECAST_POINTS,
            found=len(parsed),
        )

    return sorted(parsed, key=lambda p: p[0])


# -------------------------------------------------
# PUBLIC API
# -------------------------------------------------
def forecast_series(
    pairs: Sequence[Tuple[Any, Any]],
    config: Optional[ForecastConfig] = None,
) -> ForecastResult:
    """Analyse a (raw date, raw value) series and extrapolate it.

    Args:
        pairs: Raw (date, value) cells in any order
        config: Periods, smoothing window and thresholds

    Returns:
        ForecastResult

    Raises:
        InsufficientDataError: Fewer than 3 usable points
    """
    cfg = config or ForecastConfig()
    points = _prepare(pairs)

    dates = [d for d, _ in points]
    values = [v for _, v in points]

    origin = to_days(dates[0])
    elapsed = [to_days(d) - origin for d in dates]

    fit = fit_linear_regression(elapsed, values)

    trend = classify_trend(fit.slope, cfg.trend_threshold)
    seasonality = (
        len(points) > cfg.seasonality_min_points
        and fit.r_squared < cfg.seasonality_max_r_squared
    )

    smoothed = moving_average(values, cfg.window)
    historical = [
        HistoricalPoint(date=d, value=v, smoothed=s)
        for d, v, s in zip(dates, values, smoothed)
    ]

    # Mean observed spacing; one day when all dates coincide
    interval = elapsed[-1] / (len(elapsed) - 1)
    if interval <= 0:
        interval = 1.0

    confidence = max(cfg.confidence_floor, fit.r_squared)
    forecast = []
    for step in range(1, cfg.periods + 1):
        offset = elapsed[-1] + step * interval
        forecast.append(
            ForecastPoint(
                date=dates[-1] + timedelta(days=step * interval),
                value=fit.predict(offset),
                confidence=confidence,
            )
        )

    logger.info(
        "Forecast: %s point(s), trend=%s, r2=%.3f, %s period(s) ahead",
        len(points),
        trend.value,
        fit.r_squared,
        cfg.periods,
    )

    return ForecastResult(
        trend=trend,
        seasonality=seasonality,
        r_squared=fit.r_squared,
        slope=fit.slope,
        intercept=fit.intercept,
        historical=historical,
        forecast=forecast,
        degenerate=fit.degenerate,
    )


def forecast_columns(
    dataset: Sequence[Sequence[Any]],
    date_column: ColumnRef,
    value_column: ColumnRef,
    config: Optional[ForecastConfig] = None,
) -> ForecastResult:
    """Forecast a value column against a date column (name or index).

    Raises:
        ColumnNotFoundError: Either column absent from the header
        InsufficientDataError: Fewer than 3 usable points
    """
    date_index = resolve_column(dataset, date_column)
    value_index = resolve_column(dataset, value_column)

    pairs = list(zip(
        column_values(dataset, date_index),
        column_values(dataset, value_index),
    ))
    return forecast_series(pairs, config)
