from sheetiq.ml.forecasting import forecast_series
from sheetiq.ml.regression import fit_linear_regression
from sheetiq.visuals.predictions import plot_forecast, plot_regression


def test_regression_chart_written(tmp_path):
    xs, ys = ["1", "2", "3", ""], ["2", "4", "7", "9"]
    result = fit_linear_regression(xs, ys)

    out = plot_regression(xs, ys, result, tmp_path / "fit.png", "spend", "revenue")

    assert out.exists()
    assert out.stat().st_size > 0


def test_forecast_chart_written(tmp_path, monthly_series):
    result = forecast_series(monthly_series)

    out = plot_forecast(result, tmp_path / "forecast.png", "revenue")

    assert out.exists()
