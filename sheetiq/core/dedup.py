"""
Exact-duplicate row removal.
"""

from dataclasses import dataclass
from typing import Any, List, Sequence

from .cells import cell_key
from .dataset import Dataset, cell, data_rows, header

KEY_SEPARATOR = "|"


@dataclass
class DeduplicationResult:
    dataset: Dataset
    rows_removed: int


def row_key(row: Sequence[Any], n_cols: int) -> str:
    """
    Stable key for a data row: cells joined with a pipe.
    Rows are padded to the header width so a short row equals the
    same row written out with trailing empties.
    """
    n = max(n_cols, len(row))
    return KEY_SEPARATOR.join(cell_key(cell(row, i)) for i in range(n))


def _duplicate_flags(dataset: Sequence[Sequence[Any]]) -> List[bool]:
    n_cols = len(header(dataset))
    seen = set()
    flags = []

    for row in data_rows(dataset):
        key = row_key(row, n_cols)
        flags.append(key in seen)
        seen.add(key)

    return flags


def duplicate_count(dataset: Sequence[Sequence[Any]]) -> int:
    return sum(_duplicate_flags(dataset))


def deduplicate(dataset: Sequence[Sequence[Any]]) -> DeduplicationResult:
    """
    Drop repeated data rows, keeping the first occurrence.

    - Header row is always kept
    - Order preserving, O(N)
    - Idempotent
    """
    if not dataset:
        return DeduplicationResult(dataset=[], rows_removed=0)

    flags = _duplicate_flags(dataset)
    kept = [
        list(row)
        for row, duplicate in zip(data_rows(dataset), flags)
        if not duplicate
    ]

    return DeduplicationResult(
        dataset=[list(dataset[0])] + kept,
        rows_removed=sum(flags),
    )
