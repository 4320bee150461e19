"""
Error taxonomy for the data-quality & predictive engine.

Rules:
- Every error is recoverable by the caller
- No partial / garbage result accompanies an error
- Malformed cell values are filtered, never raised
"""

from typing import Iterable, List, Optional


class SheetIQError(Exception):
    """Base class for engine errors."""


class InsufficientDataError(SheetIQError, ValueError):
    """
    Raised when an operation has fewer valid points than it needs
    (2 for regression, 3 for forecasting, 1 data row for imputation).
    """

    def __init__(self, message: str, required: Optional[int] = None, found: Optional[int] = None):
        super().__init__(message)
        self.required = required
        self.found = found


class ColumnNotFoundError(SheetIQError, KeyError):
    def __init__(self, column, available: Iterable[str]):
        self.column = column
        self.available: List[str] = [str(c) for c in available]
        super().__init__(
            f"Column {column!r} not found. Available columns: {self.available}"
        )

    # KeyError repr-quotes its message
    def __str__(self):
        return self.args[0]


class InvalidStrategyError(SheetIQError, ValueError):
    def __init__(self, strategy, valid: Iterable[str], column_type: Optional[str] = None):
        self.strategy = strategy
        self.valid: List[str] = sorted(valid)
        self.column_type = column_type

        scope = f" for {column_type} columns" if column_type else ""
        super().__init__(
            f"Invalid imputation strategy {strategy!r}{scope}. "
            f"Valid strategies: {self.valid}"
        )


class ConfigError(SheetIQError, ValueError):
    """A configuration value outside its allowed range."""


class DegenerateFitWarning(UserWarning):
    """Zero-variance regression input; the fit is flagged, not raised."""


__all__ = [
    "SheetIQError",
    "InsufficientDataError",
    "ColumnNotFoundError",
    "InvalidStrategyError",
    "ConfigError",
    "DegenerateFitWarning",
]
