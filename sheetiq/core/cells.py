"""
Cell-level predicates and coercions.

Cells arrive untyped from a spreadsheet import: None, NaN, strings,
numbers or date objects. Everything here is total (never raises).
"""

import math
from datetime import date, datetime
from typing import Any, Optional

import numpy as np
import pandas as pd


# Literal strings the quality scorer counts as bad (in addition to empties)
NULL_LITERALS = {"null", "n/a"}


def is_missing(value: Any) -> bool:
    """
    True for cells an imputer should fill:
    None, NaN / NaT, and empty or whitespace-only strings.
    """
    if isinstance(value, str):
        return not value.strip()
    return bool(pd.api.types.is_scalar(value) and pd.isna(value))


def is_bad_cell(value: Any) -> bool:
    """Missing cells plus the "null" / "n/a" literals (case-insensitive)."""
    if is_missing(value):
        return True
    if isinstance(value, str) and value.strip().lower() in NULL_LITERALS:
        return True
    return False


def parse_number(value: Any) -> Optional[float]:
    """
    Parse a cell as a finite float.
    Returns None for missing, non-numeric, NaN and infinite values.
    """
    if is_missing(value) or isinstance(value, (bool, np.bool_)):
        return None

    if isinstance(value, (int, float, np.integer, np.floating)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None

    return number if math.isfinite(number) else None


def is_number(value: Any) -> bool:
    return parse_number(value) is not None


def is_date_value(value: Any) -> bool:
    return isinstance(value, (date, datetime, np.datetime64))


def cell_key(value: Any) -> str:
    """String form used for row keys and raw-value frequency counts."""
    if is_missing(value):
        return ""
    return str(value)


def format_number(value: float) -> str:
    """Shortest string for a fill value: 30.0 -> "30", 30.5 -> "30.5"."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)
