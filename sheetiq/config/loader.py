import copy
from pathlib import Path
from typing import Optional

import yaml

from .defaults import DEFAULT_CONFIG
from sheetiq.core.imputer import ImputationPlan
from sheetiq.core.schema import ClassifierConfig
from sheetiq.ml.forecasting import ForecastConfig


# -------------------------------------------------
# SECTION BUILDERS
# -------------------------------------------------
def _section(config: Optional[dict], name: str) -> dict:
    config = config or DEFAULT_CONFIG
    merged = dict(DEFAULT_CONFIG.get(name, {}))
    merged.update(config.get(name) or {})
    return merged


def build_classifier_config(config: Optional[dict] = None) -> ClassifierConfig:
    values = _section(config, "classification")
    return ClassifierConfig(
        sample_size=int(values["sample_size"]),
        temporal_ratio=float(values["temporal_ratio"]),
        keyword_temporal_ratio=float(values["keyword_temporal_ratio"]),
        small_sample_size=int(values["small_sample_size"]),
        numeric_ratio=float(values["numeric_ratio"]),
    )


def build_imputation_plan(config: Optional[dict] = None) -> ImputationPlan:
    """Raises InvalidStrategyError for unknown strategy names."""
    return ImputationPlan.from_dict(_section(config, "imputation"))


def build_forecast_config(config: Optional[dict] = None) -> ForecastConfig:
    values = _section(config, "forecast")
    return ForecastConfig(
        periods=int(values["periods"]),
        window=int(values["window"]),
        trend_threshold=float(values["trend_threshold"]),
        seasonality_min_points=int(values["seasonality_min_points"]),
        seasonality_max_r_squared=float(values["seasonality_max_r_squared"]),
        confidence_floor=float(values["confidence_floor"]),
    )


# -------------------------------------------------
# MAIN CONFIG LOADER
# -------------------------------------------------
def load_config(path: Optional[str]) -> dict:
    """
    Load and merge user config with engine defaults.

    Rules:
    - Defaults always win if user omits fields
    - Every section is OPTIONAL
    - output_dir MUST always exist
    """

    # -------------------------------------------------
    # 1. Load user config (if provided)
    # -------------------------------------------------
    user_config = {}

    if path:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            user_config = yaml.safe_load(f) or {}

        if not isinstance(user_config, dict):
            raise ValueError("Config file must contain a YAML dictionary")

    # -------------------------------------------------
    # 2. Merge with defaults
    # -------------------------------------------------
    config = copy.deepcopy(DEFAULT_CONFIG)

    for key, value in user_config.items():
        if isinstance(value, dict) and isinstance(config.get(key), dict):
            config[key].update(value)
        else:
            config[key] = value

    config.setdefault("output_dir", "runs")

    # -------------------------------------------------
    # 3. Validate strategy names and forecast settings early
    # -------------------------------------------------
    build_imputation_plan(config)
    build_forecast_config(config)

    return config
