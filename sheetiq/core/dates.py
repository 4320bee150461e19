"""
Date recognition and parsing.

Two concerns live here:
- looks_like_date(): cheap recognition used by the column classifier
- parse_date(): ordered parsing used by the forecaster and the
  interpolating imputer

Only a fixed list of patterns is supported. Ambiguous slashed
day/month values follow one rule: D/M/Y is used only when the first
token exceeds 12, everything else reads as M/D/Y. Dotted dates read
as D.M.Y unless the middle token exceeds 12.
"""

import re
from datetime import date, datetime, timedelta, timezone
from typing import Any, Optional

import numpy as np
import pandas as pd
from dateutil import parser as date_parser

from .cells import is_missing

# -------------------------------------------------
# RECOGNITION PATTERNS
# -------------------------------------------------
_MONTH = r"(jan|feb|mar|apr|may|jun|jul|aug|sep|sept|oct|nov|dec)[a-z]*\.?"

DATE_PATTERNS = [
    re.compile(r"^\d{4}-\d{1,2}-\d{1,2}"),                     # YYYY-MM-DD
    re.compile(r"^\d{1,2}/\d{1,2}/\d{2,4}"),                   # M/D/Y
    re.compile(r"^\d{1,2}-\d{1,2}-\d{2,4}"),                   # M-D-Y
    re.compile(r"^\d{4}/\d{1,2}/\d{1,2}"),                     # Y/M/D
    re.compile(r"^\d{1,2}\.\d{1,2}\.\d{2,4}"),                 # D.M.Y
    re.compile(r"^\d{4}\.\d{1,2}\.\d{1,2}"),                   # Y.M.D
    re.compile(rf"^{_MONTH}\s+\d{{1,2}}(st|nd|rd|th)?(,?\s+\d{{2,4}})?$", re.I),  # Jan 5, 2023
    re.compile(rf"^\d{{1,2}}\s+{_MONTH}(,?\s+\d{{2,4}})?$", re.I),                # 5 Jan 2023
    re.compile(rf"^{_MONTH}[\s\-,]+\d{{4}}$", re.I),                              # Jan 2023
    re.compile(r"^(19|20)\d{2}$"),                             # bare year
    re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}"),             # ISO datetime
    re.compile(r"^\d{1,2}:\d{2}(:\d{2})?(\s?[ap]\.?m\.?)?$", re.I),  # bare time
    re.compile(r"^\d{13}$"),                                   # unix ms
    re.compile(r"^\d{10}$"),                                   # unix s
]

PLAUSIBLE_YEARS = range(1900, 2100)

_PLAIN_NUMBER = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")

# Parse default with an impossible year: strings without an explicit
# year keep year 1 and fail the plausibility check.
_NO_YEAR = datetime(1, 1, 1)

_EPOCH = datetime(1970, 1, 1)

_SLASH_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{2,4})$")
_DASH_DATE = re.compile(r"^(\d{1,2})-(\d{1,2})-(\d{2,4})$")
_YEAR_FIRST_DATE = re.compile(r"^(\d{4})([/.])(\d{1,2})\2(\d{1,2})$")
_DOTTED_DATE = re.compile(r"^(\d{1,2})\.(\d{1,2})\.(\d{2,4})$")
_UNIX = re.compile(r"^\d{10}(\d{3})?$")


def _generic_parse(text: str) -> Optional[datetime]:
    try:
        return date_parser.parse(text, default=_NO_YEAR)
    except (ValueError, OverflowError):
        return None


def looks_like_date(value: Any) -> bool:
    """
    True if a cell matches one of DATE_PATTERNS, or a generic parse
    yields an explicit year in 1900-2099. Plain numbers only count
    through the explicit patterns (bare year, unix timestamps).
    """
    if is_missing(value):
        return False
    if isinstance(value, (date, datetime, np.datetime64)):
        return True

    text = str(value).strip()
    if any(p.match(text) for p in DATE_PATTERNS):
        return True
    if _PLAIN_NUMBER.match(text):
        return False

    parsed = _generic_parse(text)
    return parsed is not None and parsed.year in PLAUSIBLE_YEARS


# -------------------------------------------------
# PARSING
# -------------------------------------------------
def _expand_year(year: int) -> int:
    if year >= 100:
        return year
    return 2000 + year if year < 69 else 1900 + year


def _build(year: int, month: int, day: int) -> Optional[datetime]:
    try:
        return datetime(_expand_year(year), month, day)
    except ValueError:
        return None


def _naive(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _parse_native(text: str) -> Optional[datetime]:
    if _UNIX.match(text):
        seconds = int(text) / (1000 if len(text) == 13 else 1)
        return _EPOCH + timedelta(seconds=seconds)

    try:
        return _naive(date_parser.isoparse(text))
    except (ValueError, OverflowError):
        pass

    # Month-name text ("Mar 5, 2023"); slash / dash forms go to the
    # explicit parsers below so the D/M rule stays in one place.
    if re.search(r"[a-z]", text, re.I) and not _PLAIN_NUMBER.match(text):
        parsed = _generic_parse(text)
        if parsed is not None and parsed.year in PLAUSIBLE_YEARS:
            return _naive(parsed)

    return None


def _parse_year_first(text: str) -> Optional[datetime]:
    m = _YEAR_FIRST_DATE.match(text)
    if not m:
        return None
    year, _, month, day = m.groups()
    return _build(int(year), int(month), int(day))


def _parse_mdy(text: str) -> Optional[datetime]:
    m = _SLASH_DATE.match(text)
    if not m:
        return None
    month, day, year = (int(g) for g in m.groups())
    return _build(year, month, day)


def _parse_dmy(text: str) -> Optional[datetime]:
    m = _SLASH_DATE.match(text)
    if not m:
        return None
    day, month, year = (int(g) for g in m.groups())
    if day <= 12:
        return None
    return _build(year, month, day)


def _parse_mdy_dashed(text: str) -> Optional[datetime]:
    m = _DASH_DATE.match(text)
    if not m:
        return None
    month, day, year = (int(g) for g in m.groups())
    return _build(year, month, day)


def _parse_dotted(text: str) -> Optional[datetime]:
    """D.M.Y, falling back to M.D.Y when the middle token exceeds 12."""
    m = _DOTTED_DATE.match(text)
    if not m:
        return None
    first, second, year = (int(g) for g in m.groups())
    if second > 12:
        return _build(year, first, second)
    return _build(year, second, first)


_PARSERS = (
    _parse_native,
    _parse_year_first,
    _parse_mdy,
    _parse_dmy,
    _parse_mdy_dashed,
    _parse_dotted,
)


def parse_date(value: Any) -> Optional[datetime]:
    """
    Parse a cell into a naive datetime.

    Order: native (ISO 8601, unix timestamp, month-name text),
    Y/M/D or Y.M.D, M/D/Y, D/M/Y (first token > 12 only), M-D-Y,
    D.M.Y.
    First success wins; None when nothing matches.
    """
    if is_missing(value):
        return None
    if isinstance(value, datetime):
        return _naive(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, np.datetime64):
        return pd.Timestamp(value).to_pydatetime()

    text = str(value).strip()
    for parse in _PARSERS:
        parsed = parse(text)
        if parsed is not None:
            return parsed
    return None


def to_days(value: datetime) -> float:
    """Days since the unix epoch (fractional)."""
    return (value - _EPOCH) / timedelta(days=1)


def from_days(days: float) -> datetime:
    return _EPOCH + timedelta(days=float(days))
