"""
Dataset completeness scoring.

Only data rows are scored; the header is excluded.
"""

from typing import Any, Dict, Sequence

from .cells import is_bad_cell
from .dataset import column_label, to_frame
from .dedup import duplicate_count

HIGH_QUALITY = 90
GOOD_QUALITY = 70


def _round_half_up(value: float) -> int:
    return int(value + 0.5)


def quality_score(dataset: Sequence[Sequence[Any]]) -> int:
    """
    Percentage (0-100) of good cells over all data-row cells.

    Bad cells: None / NaN, empty or whitespace strings, and the
    literals "null" / "n/a" (case-insensitive). Ragged rows are
    padded to the widest row and the padding counts as bad.
    Returns 0 when there are no cells.
    """
    frame = to_frame(dataset)
    total = frame.size
    if total == 0:
        return 0

    bad = int(frame.map(is_bad_cell).to_numpy().sum())
    return _round_half_up((total - bad) / total * 100)


def quality_label(score: int) -> str:
    if score >= HIGH_QUALITY:
        return "high"
    if score >= GOOD_QUALITY:
        return "good"
    return "poor"


def assess_quality(dataset: Sequence[Sequence[Any]]) -> Dict[str, Any]:
    """
    Audit-friendly quality report.

    Returns:
        {
            "score": 0-100,
            "label": "high" | "good" | "poor",
            "total_cells": int,
            "missing_values": int,
            "duplicate_rows": int,
            "inconsistent_date_formats": int,
            "missing_by_column": {column label: count}
        }
    """
    frame = to_frame(dataset)
    bad = frame.map(is_bad_cell)

    # Cells mixing both date separators, e.g. "01/02-2023"
    mixed = frame.map(
        lambda v: isinstance(v, str) and "/" in v and "-" in v
    )

    score = quality_score(dataset)

    return {
        "score": score,
        "label": quality_label(score),
        "total_cells": int(frame.size),
        "missing_values": int(bad.to_numpy().sum()),
        "duplicate_rows": duplicate_count(dataset),
        "inconsistent_date_formats": int(mixed.to_numpy().sum()),
        "missing_by_column": {
            column_label(dataset, i): int(bad[i].sum())
            for i in frame.columns
        },
    }
