import math
from datetime import datetime, timedelta

import pytest

from sheetiq.core.dates import parse_date
from sheetiq.core.errors import (
    ColumnNotFoundError,
    ConfigError,
    DegenerateFitWarning,
    InsufficientDataError,
)
from sheetiq.core.schema import ColumnType, classify_column
from sheetiq.ml.forecasting import (
    ForecastConfig,
    Trend,
    classify_trend,
    forecast_columns,
    forecast_series,
    moving_average,
)


def _daily(values, start=datetime(2023, 1, 1)):
    return [
        ((start + timedelta(days=i)).date().isoformat(), str(v))
        for i, v in enumerate(values)
    ]


def test_increasing_series(monthly_series):
    result = forecast_series(monthly_series)

    assert result.trend == Trend.INCREASING
    assert result.r_squared > 0.99
    assert len(result.forecast) == 6
    assert all(p.confidence == pytest.approx(result.r_squared) for p in result.forecast)
    assert result.forecast[0].value > 50


def test_decreasing_series():
    result = forecast_series(_daily([50, 40, 30, 20, 10]))
    assert result.trend == Trend.DECREASING
    assert result.slope == pytest.approx(-10)


def test_flat_series_is_stable():
    with pytest.warns(DegenerateFitWarning):
        result = forecast_series(_daily([7, 7, 7, 7]))

    assert result.trend == Trend.STABLE
    assert result.r_squared == 1.0


def test_confidence_floor_on_zero_fit():
    result = forecast_series(_daily([1, 3, 3, 1]))

    assert result.r_squared == pytest.approx(0, abs=1e-9)
    assert result.trend == Trend.STABLE
    assert all(p.confidence >= 0.1 for p in result.forecast)
    assert result.forecast[0].confidence == pytest.approx(0.1)


def test_observations_sorted_by_date():
    pairs = [("2023-01-03", "3"), ("2023-01-01", "1"), ("2023-01-02", "2")]
    result = forecast_series(pairs)

    assert [p.date.day for p in result.historical] == [1, 2, 3]
    assert [p.value for p in result.historical] == [1.0, 2.0, 3.0]


def test_forecast_spacing_follows_mean_interval():
    result = forecast_series(_daily([1, 2, 3, 4]))

    assert result.forecast[0].date == datetime(2023, 1, 5)
    assert result.forecast[-1].date == datetime(2023, 1, 10)
    assert result.forecast[0].value == pytest.approx(5)


def test_same_day_observations_use_one_day_spacing():
    pairs = [("2023-01-01", "1"), ("2023-01-01", "2"), ("2023-01-01", "3")]

    with pytest.warns(DegenerateFitWarning):
        result = forecast_series(pairs)

    assert result.forecast[0].date == datetime(2023, 1, 2)
    assert all(math.isfinite(p.value) for p in result.forecast)


def test_invalid_pairs_filtered():
    pairs = _daily([1, 2, 3]) + [("2023-01-09", "abc"), ("", "5"), ("someday", "6")]
    result = forecast_series(pairs)

    assert len(result.historical) == 3


def test_too_few_points_rejected():
    with pytest.raises(InsufficientDataError):
        forecast_series(_daily([1, 2]))


def test_too_few_parsable_dates_rejected():
    pairs = [("2023-01-01", "1"), ("2023-01-02", "2"), ("later", "3"), ("soon", "4")]

    with pytest.raises(InsufficientDataError) as excinfo:
        forecast_series(pairs)

    assert excinfo.value.found == 2


def test_smoothed_series_is_centered_moving_average():
    result = forecast_series(_daily([1, 2, 3, 4, 5]))
    assert result.smoothed_series == pytest.approx([1.5, 2, 3, 4, 4.5])


def test_moving_average_window():
    assert moving_average([1, 2, 3, 4, 5], window=5) == pytest.approx([2, 2.5, 3, 3.5, 4])
    assert moving_average([4, 8], window=1) == [4, 8]

    with pytest.raises(ValueError):
        moving_average([1, 2, 3], window=2)


def test_seasonality_flag():
    wave = [10 + 5 * math.sin(i * math.pi / 3) for i in range(24)]
    line = list(range(24))

    assert forecast_series(_daily(wave)).seasonality is True
    assert forecast_series(_daily(line)).seasonality is False
    # too short to flag
    assert forecast_series(_daily(wave[:12])).seasonality is False


def test_config_overrides():
    cfg = ForecastConfig(periods=3, window=1)
    result = forecast_series(_daily([1, 5, 2, 8]), cfg)

    assert len(result.forecast) == 3
    assert result.smoothed_series == [1, 5, 2, 8]


@pytest.mark.parametrize("window, periods", [(2, 6), (0, 6), (3, -1)])
def test_config_rejects_bad_values(window, periods):
    with pytest.raises(ConfigError):
        ForecastConfig(periods=periods, window=window)


def test_trend_thresholds():
    assert classify_trend(0.02) == Trend.INCREASING
    assert classify_trend(-0.02) == Trend.DECREASING
    assert classify_trend(0.01) == Trend.STABLE
    assert classify_trend(-0.005) == Trend.STABLE


def test_forecast_columns(sales_dataset):
    result = forecast_columns(sales_dataset, "order_date", "revenue")
    assert result.trend == Trend.INCREASING

    with pytest.raises(ColumnNotFoundError):
        forecast_columns(sales_dataset, "ship_date", "revenue")


def test_to_dict_is_serialisable(monthly_series):
    payload = forecast_series(monthly_series).to_dict()

    assert payload["trend"] == "increasing"
    assert payload["forecast"][0]["date"].startswith("2023-")
    assert len(payload["smoothed_series"]) == 5


# -------------------------------------------------
# Date parsing
# -------------------------------------------------
@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2023-03-15", datetime(2023, 3, 15)),
        ("2023-03-15T08:30:00", datetime(2023, 3, 15, 8, 30)),
        ("03/04/2023", datetime(2023, 3, 4)),
        ("13/04/2023", datetime(2023, 4, 13)),
        ("12-25-2023", datetime(2023, 12, 25)),
        ("1/2/23", datetime(2023, 1, 2)),
        ("Mar 5, 2023", datetime(2023, 3, 5)),
        ("1700000000", datetime(2023, 11, 14, 22, 13, 20)),
        ("2023/01/15", datetime(2023, 1, 15)),
        ("2023.01.15", datetime(2023, 1, 15)),
        ("15.01.2023", datetime(2023, 1, 15)),
        ("04.03.2023", datetime(2023, 3, 4)),
        ("03.25.2023", datetime(2023, 3, 25)),
    ],
)
def test_parse_date(raw, expected):
    assert parse_date(raw) == expected


@pytest.mark.parametrize(
    "raw",
    ["", None, "not a date", "13/13/2023", "42", "2023/13/01", "32.13.2023"],
)
def test_parse_date_rejects(raw):
    assert parse_date(raw) is None


@pytest.mark.parametrize(
    "dates",
    [
        ["2023/01/01", "2023/01/02", "2023/01/03", "2023/01/04"],
        ["01.01.2023", "02.01.2023", "03.01.2023", "04.01.2023"],
    ],
)
def test_temporal_columns_are_forecastable(dates):
    data = [["date", "units"]] + [[d, str(10 * (i + 1))] for i, d in enumerate(dates)]

    assert classify_column(data, 0) == ColumnType.TEMPORAL

    result = forecast_columns(data, "date", "units")

    assert result.historical[0].date == datetime(2023, 1, 1)
    assert result.slope == pytest.approx(10)
    assert result.trend == Trend.INCREASING
