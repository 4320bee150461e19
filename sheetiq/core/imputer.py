"""
Missing value imputation.

Each column gets one strategy, picked from the ImputationPlan by the
column's inferred type. Directional strategies (forward-fill,
backward-fill, interpolate) replace the type fill value when selected.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

from .cells import cell_key, format_number, is_missing, parse_number
from .dataset import Dataset, column_label, column_values, copy_dataset, width
from .dates import from_days, parse_date, to_days
from .errors import InsufficientDataError, InvalidStrategyError
from .schema import ClassifierConfig, ColumnType, ColumnTypeMap, classify_column

logger = logging.getLogger(__name__)


class ImputationStrategy(str, Enum):
    MEAN = "mean"
    MEDIAN = "median"
    MODE = "mode"
    CONSTANT = "constant"
    TODAY = "today"
    INTERPOLATE = "interpolate"
    FORWARD_FILL = "forward-fill"
    BACKWARD_FILL = "backward-fill"


_DIRECTIONAL = {
    ImputationStrategy.FORWARD_FILL,
    ImputationStrategy.BACKWARD_FILL,
}

VALID_STRATEGIES: Dict[ColumnType, set] = {
    ColumnType.NUMERIC: {
        ImputationStrategy.MEAN,
        ImputationStrategy.MEDIAN,
        ImputationStrategy.MODE,
    } | _DIRECTIONAL,
    ColumnType.TEXT: {
        ImputationStrategy.CONSTANT,
        ImputationStrategy.MODE,
    } | _DIRECTIONAL,
    ColumnType.TEMPORAL: {
        ImputationStrategy.TODAY,
        ImputationStrategy.INTERPOLATE,
    } | _DIRECTIONAL,
}

DEFAULT_CONSTANT = "N/A"


def parse_strategy(name: Any, column_type: Optional[ColumnType] = None) -> ImputationStrategy:
    """
    Validate a strategy name, optionally against a column type.

    Raises:
        InvalidStrategyError: unknown name, or not valid for the type
    """
    try:
        strategy = ImputationStrategy(str(name).strip().lower())
    except ValueError:
        valid = (
            VALID_STRATEGIES[column_type] if column_type
            else set(ImputationStrategy)
        )
        raise InvalidStrategyError(
            name,
            [s.value for s in valid],
            column_type.value if column_type else None,
        ) from None

    if column_type is not None and strategy not in VALID_STRATEGIES[column_type]:
        raise InvalidStrategyError(
            name,
            [s.value for s in VALID_STRATEGIES[column_type]],
            column_type.value,
        )

    return strategy


# -------------------------------------------------
# PLAN
# -------------------------------------------------
@dataclass
class ImputationPlan:
    """
    Strategy per column type.

    `columns` optionally overrides the strategy of individual columns
    by header name.
    """
    numeric: str = ImputationStrategy.MEAN.value
    text: str = ImputationStrategy.CONSTANT.value
    temporal: str = ImputationStrategy.TODAY.value
    constant: str = DEFAULT_CONSTANT
    columns: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        # Fail fast on unknown names
        self.validate()

    def validate(self) -> None:
        parse_strategy(self.numeric, ColumnType.NUMERIC)
        parse_strategy(self.text, ColumnType.TEXT)
        parse_strategy(self.temporal, ColumnType.TEMPORAL)
        for strategy in self.columns.values():
            parse_strategy(strategy)

    def strategy_for(self, column_type: ColumnType, column_name: Optional[str] = None) -> ImputationStrategy:
        if column_name is not None and column_name in self.columns:
            return parse_strategy(self.columns[column_name], column_type)

        by_type = {
            ColumnType.NUMERIC: self.numeric,
            ColumnType.TEXT: self.text,
            ColumnType.TEMPORAL: self.temporal,
        }
        return parse_strategy(by_type[column_type], column_type)

    @classmethod
    def from_dict(cls, values: Optional[Dict[str, Any]]) -> "ImputationPlan":
        values = dict(values or {})
        return cls(
            numeric=values.get("numeric", ImputationStrategy.MEAN.value),
            text=values.get("text", ImputationStrategy.CONSTANT.value),
            temporal=values.get("temporal", ImputationStrategy.TODAY.value),
            constant=str(values.get("constant", DEFAULT_CONSTANT)),
            columns=dict(values.get("columns") or {}),
        )


@dataclass
class ImputationResult:
    dataset: Dataset
    values_filled: int
    filled_by_column: Dict[str, int] = field(default_factory=dict)


# -------------------------------------------------
# FILL VALUES
# -------------------------------------------------
def _mode(values: List[Any]) -> Optional[Any]:
    """Most frequent value; ties go to the first one encountered."""
    if not values:
        return None
    return Counter(values).most_common(1)[0][0]


def _numeric_fill(values: List[Any], strategy: ImputationStrategy) -> Optional[str]:
    numbers = [n for n in (parse_number(v) for v in values) if n is not None]
    if not numbers:
        return None

    if strategy == ImputationStrategy.MEAN:
        return format_number(np.mean(numbers))
    if strategy == ImputationStrategy.MEDIAN:
        return format_number(np.median(numbers))
    if strategy == ImputationStrategy.MODE:
        return format_number(_mode(numbers))
    return None


def _text_fill(values: List[Any], strategy: ImputationStrategy, constant: str) -> Optional[str]:
    if strategy == ImputationStrategy.CONSTANT:
        return constant
    if strategy == ImputationStrategy.MODE:
        return _mode([cell_key(v) for v in values if not is_missing(v)])
    return None


def fill_value(
    values: List[Any],
    column_type: ColumnType,
    strategy: ImputationStrategy,
    constant: str = DEFAULT_CONSTANT,
) -> Optional[Any]:
    """
    Single value used for every missing cell of a column, or None
    when the strategy is directional / nothing can be derived.
    """
    if column_type == ColumnType.NUMERIC:
        return _numeric_fill(values, strategy)
    if column_type == ColumnType.TEXT:
        return _text_fill(values, strategy, constant)
    if strategy == ImputationStrategy.TODAY:
        return date.today().isoformat()
    return None


# -------------------------------------------------
# DIRECTIONAL FILLS
# -------------------------------------------------
def forward_fill(values: List[Any]) -> List[Any]:
    """Propagate the last valid value down into missing cells."""
    out = list(values)
    last = None
    for i, v in enumerate(out):
        if is_missing(v):
            if last is not None:
                out[i] = last
        else:
            last = v
    return out


def backward_fill(values: List[Any]) -> List[Any]:
    """Propagate the next valid value up into missing cells."""
    return forward_fill(values[::-1])[::-1]


def interpolate_dates(values: List[Any]) -> List[Any]:
    """
    Linear interpolation by row position between the nearest parsable
    dates before and after each gap. Gaps lacking either anchor stay
    unfilled; non-empty unparsable cells are left alone.
    """
    parsed = [parse_date(v) for v in values]
    days = pd.Series(
        [to_days(d) if d is not None else np.nan for d in parsed],
        dtype=float,
    )
    filled = days.interpolate(method="linear", limit_area="inside")

    out = list(values)
    for i, v in enumerate(values):
        if is_missing(v) and not np.isnan(filled.iloc[i]):
            out[i] = from_days(filled.iloc[i]).date().isoformat()
    return out


def _directional(values: List[Any], strategy: ImputationStrategy) -> List[Any]:
    if strategy == ImputationStrategy.FORWARD_FILL:
        return forward_fill(values)
    if strategy == ImputationStrategy.BACKWARD_FILL:
        return backward_fill(values)
    return interpolate_dates(values)


# -------------------------------------------------
# PUBLIC API
# -------------------------------------------------
def impute_missing(
    dataset: Sequence[Sequence[Any]],
    column_types: Optional[ColumnTypeMap] = None,
    plan: Optional[ImputationPlan] = None,
    classifier_config: Optional[ClassifierConfig] = None,
) -> ImputationResult:
    """
    Fill missing cells column by column.

    Args:
        dataset: header + data rows (not mutated)
        column_types: inferred types; missing entries are classified here
        plan: strategy per type (defaults: mean / "N/A" / today)

    Returns:
        ImputationResult with the new dataset and fill counts

    Raises:
        InsufficientDataError: no data rows
        InvalidStrategyError: strategy not valid for a column's type
    """
    if len(dataset) < 2:
        raise InsufficientDataError(
            "Imputation needs at least one data row",
            required=1,
            found=0,
        )

    plan = plan or ImputationPlan()
    column_types = dict(column_types or {})
    result = copy_dataset(dataset)

    filled_by_column: Dict[str, int] = {}

    for index in range(width(dataset)):
        column_type = column_types.get(index)
        if column_type is None:
            column_type = classify_column(dataset, index, classifier_config)
        column_type = ColumnType(column_type)

        label = column_label(dataset, index)
        strategy = plan.strategy_for(column_type, label)

        values = column_values(dataset, index)
        targets = [i for i, v in enumerate(values) if is_missing(v)]
        if not targets:
            continue

        value = fill_value(values, column_type, strategy, plan.constant)

        if strategy in _DIRECTIONAL or strategy == ImputationStrategy.INTERPOLATE:
            new_values = _directional(values, strategy)
        elif value is not None:
            new_values = [value if is_missing(v) else v for v in values]
        else:
            new_values = values

        count = 0
        for i in targets:
            if is_missing(new_values[i]):
                continue
            row = result[i + 1]
            if index >= len(row):
                row.extend([""] * (index + 1 - len(row)))
            row[index] = new_values[i]
            count += 1

        if count:
            filled_by_column[label] = filled_by_column.get(label, 0) + count
            logger.debug(
                "Filled %s value(s) in %s using %s", count, label, strategy.value
            )

    total = sum(filled_by_column.values())
    logger.info("Imputation filled %s value(s)", total)

    return ImputationResult(
        dataset=result,
        values_filled=total,
        filled_by_column=filled_by_column,
    )
