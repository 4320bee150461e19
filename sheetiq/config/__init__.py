from .loader import (
    load_config,
    build_classifier_config,
    build_imputation_plan,
    build_forecast_config,
)
from .defaults import DEFAULT_CONFIG

__all__ = [
    "load_config",
    "build_classifier_config",
    "build_imputation_plan",
    "build_forecast_config",
    "DEFAULT_CONFIG",
]
