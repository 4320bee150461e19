"""
Column type classification for untyped spreadsheet data.

Purpose:
- Decide whether a column is numeric, textual or temporal
- Feed the imputer (strategy per type) and the analytics layer

Classification is sample-based: only the first few data rows of a
column are inspected, never the whole column.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from .cells import is_missing, is_number
from .dataset import column_values, header, width
from .dates import looks_like_date

logger = logging.getLogger(__name__)


class ColumnType(str, Enum):
    NUMERIC = "numeric"
    TEXT = "text"
    TEMPORAL = "temporal"


ColumnTypeMap = Dict[int, ColumnType]

# -------------------------------------------------
# Heuristic thresholds (empirical)
# -------------------------------------------------
SAMPLE_SIZE = 10
TEMPORAL_MATCH_RATIO = 0.5
KEYWORD_TEMPORAL_MATCH_RATIO = 0.3
SMALL_SAMPLE_SIZE = 3
NUMERIC_MATCH_RATIO = 0.7

DATE_KEYWORDS = (
    "date",
    "day",
    "month",
    "year",
    "time",
    "period",
    "timestamp",
    "created",
    "updated",
    "modified",
    "when",
)


@dataclass
class ClassifierConfig:
    """
    Tunable classification thresholds.
    Defaults are the empirical constants above.
    """
    sample_size: int = SAMPLE_SIZE
    temporal_ratio: float = TEMPORAL_MATCH_RATIO
    keyword_temporal_ratio: float = KEYWORD_TEMPORAL_MATCH_RATIO
    small_sample_size: int = SMALL_SAMPLE_SIZE
    numeric_ratio: float = NUMERIC_MATCH_RATIO


def has_date_keyword(column_name: str) -> bool:
    name = (column_name or "").lower()
    return any(k in name for k in DATE_KEYWORDS)


def sample_column(
    dataset: Sequence[Sequence[Any]],
    index: int,
    sample_size: int = SAMPLE_SIZE,
) -> List[Any]:
    """First `sample_size` data-row values, empties dropped."""
    values = column_values(dataset, index)[:sample_size]
    return [v for v in values if not is_missing(v)]


def _is_temporal(samples: List[Any], keyword: bool, cfg: ClassifierConfig) -> bool:
    matches = sum(1 for v in samples if looks_like_date(v))
    ratio = matches / len(samples)

    return (
        ratio > cfg.temporal_ratio
        or (keyword and ratio > cfg.keyword_temporal_ratio)
        or (keyword and len(samples) <= cfg.small_sample_size and matches > 0)
    )


def classify_column(
    dataset: Sequence[Sequence[Any]],
    index: int,
    config: Optional[ClassifierConfig] = None,
) -> ColumnType:
    """
    Infer the semantic type of one column.

    Rules (in order):
    - fewer than 2 rows, or no valid sample -> TEXT
    - temporal pattern ratio, lowered when the name carries a date keyword
    - > numeric_ratio of samples parse as finite numbers -> NUMERIC
    - otherwise TEXT
    """
    cfg = config or ClassifierConfig()

    if len(dataset) < 2:
        return ColumnType.TEXT

    samples = sample_column(dataset, index, cfg.sample_size)
    if not samples:
        return ColumnType.TEXT

    names = header(dataset)
    name = names[index] if index < len(names) else ""

    if _is_temporal(samples, has_date_keyword(name), cfg):
        return ColumnType.TEMPORAL

    numeric = sum(1 for v in samples if is_number(v))
    if numeric / len(samples) > cfg.numeric_ratio:
        return ColumnType.NUMERIC

    return ColumnType.TEXT


def classify_columns(
    dataset: Sequence[Sequence[Any]],
    config: Optional[ClassifierConfig] = None,
) -> ColumnTypeMap:
    """Column type map for every column (header width or widest row)."""
    types = {
        index: classify_column(dataset, index, config)
        for index in range(width(dataset))
    }
    logger.debug("Column types: %s", {i: t.value for i, t in types.items()})
    return types


def columns_of_type(types: ColumnTypeMap, column_type: ColumnType) -> List[int]:
    return [i for i, t in types.items() if t == column_type]


__all__ = [
    "ColumnType",
    "ColumnTypeMap",
    "ClassifierConfig",
    "classify_column",
    "classify_columns",
    "columns_of_type",
    "has_date_keyword",
]
