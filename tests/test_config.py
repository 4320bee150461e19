import pytest

from sheetiq.config import (
    DEFAULT_CONFIG,
    build_classifier_config,
    build_forecast_config,
    build_imputation_plan,
    load_config,
)
from sheetiq.core.errors import ConfigError, InvalidStrategyError


def test_defaults_without_file():
    config = load_config(None)

    assert config == DEFAULT_CONFIG
    assert config is not DEFAULT_CONFIG


def test_yaml_merges_over_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "imputation:\n"
        "  numeric: median\n"
        "forecast:\n"
        "  periods: 12\n"
        "classification:\n"
        "  sample_size: 20\n",
        encoding="utf-8",
    )

    config = load_config(str(path))

    assert config["imputation"]["numeric"] == "median"
    assert config["imputation"]["text"] == "constant"
    assert build_imputation_plan(config).numeric == "median"
    assert build_forecast_config(config).periods == 12
    assert build_forecast_config(config).window == 3
    assert build_classifier_config(config).sample_size == 20


def test_invalid_strategy_in_config(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("imputation:\n  temporal: yesterday\n", encoding="utf-8")

    with pytest.raises(InvalidStrategyError):
        load_config(str(path))


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "nope.yaml"))


def test_non_mapping_config(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ValueError):
        load_config(str(path))


def test_even_smoothing_window_rejected(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("forecast:\n  window: 4\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(str(path))
