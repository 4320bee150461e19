"""Core Engine Module - Column typing, quality scoring, deduplication and imputation."""

from .cleaner import clean_dataset
from .dedup import DeduplicationResult, deduplicate
from .errors import (
    ColumnNotFoundError,
    ConfigError,
    DegenerateFitWarning,
    InsufficientDataError,
    InvalidStrategyError,
    SheetIQError,
)
from .imputer import ImputationPlan, ImputationResult, ImputationStrategy, impute_missing
from .profiler import DataProfiler
from .quality import assess_quality, quality_score
from .schema import ClassifierConfig, ColumnType, classify_column, classify_columns

__all__ = [
    "clean_dataset",
    "deduplicate",
    "DeduplicationResult",
    "impute_missing",
    "ImputationPlan",
    "ImputationResult",
    "ImputationStrategy",
    "DataProfiler",
    "quality_score",
    "assess_quality",
    "ColumnType",
    "ClassifierConfig",
    "classify_column",
    "classify_columns",
    "SheetIQError",
    "InsufficientDataError",
    "ColumnNotFoundError",
    "InvalidStrategyError",
    "ConfigError",
    "DegenerateFitWarning",
]
