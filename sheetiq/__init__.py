"""
SheetIQ

Data-quality and predictive-analytics engine for untyped,
spreadsheet-style datasets.
"""

from .__version__ import __version__

# Keep package init lightweight
# Charts (matplotlib) and the CLI should be imported explicitly

from .core import (
    ColumnType,
    ImputationPlan,
    clean_dataset,
    classify_columns,
    deduplicate,
    impute_missing,
    quality_score,
    ColumnNotFoundError,
    InsufficientDataError,
    InvalidStrategyError,
    DegenerateFitWarning,
)
from .ml import PredictiveAnalytics, fit_linear_regression, forecast_series

__all__ = [
    "__version__",
    "ColumnType",
    "ImputationPlan",
    "clean_dataset",
    "classify_columns",
    "deduplicate",
    "impute_missing",
    "quality_score",
    "ColumnNotFoundError",
    "InsufficientDataError",
    "InvalidStrategyError",
    "DegenerateFitWarning",
    "PredictiveAnalytics",
    "fit_linear_regression",
    "forecast_series",
]
