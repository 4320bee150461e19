"""Predictive analytics: linear regression and time series forecasting.

Provides:
- Closed-form least squares between two numeric columns
- Trend classification, smoothing and forecasting over a date column
- A facade combining both with natural-language descriptions
"""

from sheetiq.ml.forecasting import ForecastConfig, ForecastResult, Trend, forecast_columns, forecast_series
from sheetiq.ml.predictors import PredictiveAnalytics
from sheetiq.ml.regression import RegressionResult, fit_linear_regression, prediction_line, regress_columns

__all__ = [
    'PredictiveAnalytics',
    'RegressionResult',
    'fit_linear_regression',
    'prediction_line',
    'regress_columns',
    'ForecastConfig',
    'ForecastResult',
    'Trend',
    'forecast_series',
    'forecast_columns',
]
