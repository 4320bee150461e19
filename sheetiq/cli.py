"""
SheetIQ CLI

Subcommands over a CSV file (first row = header):
    profile   column types, quality report and descriptive statistics
    clean     deduplicate + impute, write the cleaned CSV
    regress   linear regression between two columns
    forecast  trend / forecast of a value column over a date column
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from sheetiq.__version__ import __version__
from sheetiq.config.loader import (
    build_classifier_config,
    build_forecast_config,
    build_imputation_plan,
    load_config,
)
from sheetiq.core.cleaner import clean_dataset
from sheetiq.core.dataset import column_label, column_values, resolve_column
from sheetiq.core.errors import SheetIQError
from sheetiq.core.profiler import DataProfiler
from sheetiq.core.quality import assess_quality
from sheetiq.ml.predictors import PredictiveAnalytics
from sheetiq.narrative.describer import build_describer
from sheetiq.utils.logger import get_logger

logger = logging.getLogger(__name__)


# -------------------------------------------------
# IO
# -------------------------------------------------
def read_dataset(path: str) -> List[List[Any]]:
    """CSV -> header + rows of raw strings (empty cells stay "")."""
    frame = pd.read_csv(path, header=None, dtype=str, keep_default_na=False)
    frame = frame.fillna("")
    return frame.values.tolist()


def write_dataset(dataset: List[List[Any]], path: str) -> Path:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    pd.DataFrame(dataset).to_csv(out, header=False, index=False)
    return out


def _emit(payload: Dict[str, Any]) -> None:
    print(json.dumps(payload, indent=2, default=str, ensure_ascii=False))


# -------------------------------------------------
# COMMANDS
# -------------------------------------------------
def _cmd_profile(args, config) -> int:
    dataset = read_dataset(args.input)
    profiler = DataProfiler(build_classifier_config(config))

    _emit({
        "profile": profiler.profile(dataset, args.column),
        "quality": assess_quality(dataset),
    })
    return 0


def _cmd_clean(args, config) -> int:
    if args.numeric:
        config["imputation"]["numeric"] = args.numeric
    if args.text:
        config["imputation"]["text"] = args.text
    if args.temporal:
        config["imputation"]["temporal"] = args.temporal

    dataset = read_dataset(args.input)
    result = clean_dataset(
        dataset,
        plan=build_imputation_plan(config),
        classifier_config=build_classifier_config(config),
    )

    out = args.out or str(Path(config["output_dir"]) / f"{Path(args.input).stem}_cleaned.csv")
    write_dataset(result["dataset"], out)
    logger.info("Cleaned dataset written to %s", out)

    _emit({"output": out, "summary": result["summary"]})
    return 0


def _cmd_regress(args, config) -> int:
    dataset = read_dataset(args.input)
    analytics = PredictiveAnalytics(
        describer=build_describer(config.get("narrative")),
        prediction_steps=int(config["regression"]["prediction_steps"]),
    )
    outcome = analytics.regress(dataset, args.x, args.y)

    if args.plot:
        from sheetiq.visuals.predictions import plot_regression

        x_index = resolve_column(dataset, args.x)
        y_index = resolve_column(dataset, args.y)
        plot_regression(
            column_values(dataset, x_index),
            column_values(dataset, y_index),
            outcome["result"],
            args.plot,
            label_x=column_label(dataset, x_index),
            label_y=column_label(dataset, y_index),
        )

    _emit({
        "result": outcome["result"].to_dict(),
        "prediction_line": outcome["prediction_line"],
        "description": outcome["description"],
    })
    return 0


def _cmd_forecast(args, config) -> int:
    if args.periods is not None:
        config["forecast"]["periods"] = args.periods
    if args.window is not None:
        config["forecast"]["window"] = args.window

    dataset = read_dataset(args.input)
    analytics = PredictiveAnalytics(
        describer=build_describer(config.get("narrative")),
        forecast_config=build_forecast_config(config),
    )
    outcome = analytics.forecast(dataset, args.date, args.value)

    if args.plot:
        from sheetiq.visuals.predictions import plot_forecast

        plot_forecast(
            outcome["result"],
            args.plot,
            label_value=column_label(dataset, resolve_column(dataset, args.value)),
        )

    _emit({
        "result": outcome["result"].to_dict(),
        "description": outcome["description"],
    })
    return 0


def _column(value: str):
    """Header names stay strings; '#3' selects column index 3."""
    if value.startswith("#") and value[1:].isdigit():
        return int(value[1:])
    return value


# -------------------------------------------------
# CLI ENTRY
# -------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sheetiq",
        description=f"SheetIQ v{__version__}",
    )
    parser.add_argument("--config", required=False, help="Path to config YAML")
    parser.add_argument("--version", action="store_true")
    parser.add_argument("-v", "--verbose", action="store_true")

    sub = parser.add_subparsers(dest="command")

    p = sub.add_parser("profile", help="Column types and data quality report")
    p.add_argument("input", help="Input CSV file")
    p.add_argument("--column", type=_column, help="Column to describe")
    p.set_defaults(handler=_cmd_profile)

    p = sub.add_parser("clean", help="Deduplicate and impute missing values")
    p.add_argument("input", help="Input CSV file")
    p.add_argument("--out", help="Output CSV path")
    p.add_argument("--numeric", help="Numeric strategy (mean, median, mode, ...)")
    p.add_argument("--text", help="Text strategy (constant, mode, ...)")
    p.add_argument("--temporal", help="Temporal strategy (today, interpolate, ...)")
    p.set_defaults(handler=_cmd_clean)

    p = sub.add_parser("regress", help="Linear regression between two columns")
    p.add_argument("input", help="Input CSV file")
    p.add_argument("--x", required=True, type=_column, help="Independent column")
    p.add_argument("--y", required=True, type=_column, help="Dependent column")
    p.add_argument("--plot", help="Write a PNG chart to this path")
    p.set_defaults(handler=_cmd_regress)

    p = sub.add_parser("forecast", help="Trend and forecast over a date column")
    p.add_argument("input", help="Input CSV file")
    p.add_argument("--date", required=True, type=_column, help="Date column")
    p.add_argument("--value", required=True, type=_column, help="Value column")
    p.add_argument("--periods", type=int, help="Periods to forecast")
    p.add_argument("--window", type=int, help="Moving average window (odd)")
    p.add_argument("--plot", help="Write a PNG chart to this path")
    p.set_defaults(handler=_cmd_forecast)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # ---- VERSION ----
    if args.version:
        print(f"SheetIQ v{__version__}")
        return 0

    # ---- LOGGING ----
    get_logger("sheetiq", logging.DEBUG if args.verbose else logging.WARNING)

    if not args.command:
        parser.error("a command is required")

    input_path = Path(args.input)
    if not input_path.exists():
        parser.error(f"Input file not found: {input_path}")

    try:
        config = load_config(args.config)
        return args.handler(args, config)
    except SheetIQError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
