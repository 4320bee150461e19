"""Predictive Analytics facade.

Ties the regression and forecasting engines to column selection and
to the insight describer, so callers get numbers and prose from one
call. Numeric results never depend on the describer.
"""

from typing import Any, Dict, Optional, Sequence

from sheetiq.core.dataset import ColumnRef, column_label, column_values, resolve_column
from sheetiq.ml.forecasting import ForecastConfig, forecast_columns
from sheetiq.ml.regression import PREDICTION_STEPS, fit_linear_regression, prediction_line
from sheetiq.narrative.describer import InsightDescriber, InsightRequest, describe_safely


class PredictiveAnalytics:
    """Regression and time series analysis over dataset columns.

    Attributes:
        describer: Optional insight describer (LLM or rule-based)
        forecast_config: Forecast periods, smoothing and thresholds
        prediction_steps: Resolution of the prediction line
    """

    def __init__(
        self,
        describer: Optional[InsightDescriber] = None,
        forecast_config: Optional[ForecastConfig] = None,
        prediction_steps: int = PREDICTION_STEPS,
    ):
        self.describer = describer
        self.forecast_config = forecast_config or ForecastConfig()
        self.prediction_steps = prediction_steps

    def regress(
        self,
        dataset: Sequence[Sequence[Any]],
        x_column: ColumnRef,
        y_column: ColumnRef,
    ) -> Dict[str, Any]:
        """Fit y against x and describe the relationship.

        Returns:
            Dictionary with 'result', 'prediction_line' and 'description'

        Raises:
            ColumnNotFoundError: Unknown column
            InsufficientDataError: Fewer than 2 valid pairs
        """
        x_index = resolve_column(dataset, x_column)
        y_index = resolve_column(dataset, y_column)
        xs = column_values(dataset, x_index)

        result = fit_linear_regression(xs, column_values(dataset, y_index))

        request = InsightRequest.for_regression(
            result,
            column_label(dataset, x_index),
            column_label(dataset, y_index),
        )

        return {
            "result": result,
            "prediction_line": prediction_line(result, xs, self.prediction_steps),
            "description": describe_safely(self.describer, request),
        }

    def forecast(
        self,
        dataset: Sequence[Sequence[Any]],
        date_column: ColumnRef,
        value_column: ColumnRef,
    ) -> Dict[str, Any]:
        """Analyse the value column over time and describe the trend.

        Returns:
            Dictionary with 'result' and 'description'

        Raises:
            ColumnNotFoundError: Unknown column
            InsufficientDataError: Fewer than 3 usable points
        """
        result = forecast_columns(dataset, date_column, value_column, self.forecast_config)

        request = InsightRequest.for_forecast(
            result,
            column_label(dataset, resolve_column(dataset, date_column)),
            column_label(dataset, resolve_column(dataset, value_column)),
        )

        return {
            "result": result,
            "description": describe_safely(self.describer, request),
        }
