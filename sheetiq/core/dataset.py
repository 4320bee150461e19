"""
Dataset helpers.

A dataset is a list of rows: row 0 is the header, rows 1..N are records.
Rows may be ragged; missing trailing cells read as empty (None).
The engine never mutates a caller's dataset, it works on copies.
"""

from typing import Any, List, Sequence, Union

import pandas as pd

from .errors import ColumnNotFoundError

Row = List[Any]
Dataset = List[Row]
ColumnRef = Union[str, int]


def header(dataset: Sequence[Sequence[Any]]) -> List[str]:
    if not dataset:
        return []
    return ["" if c is None else str(c) for c in dataset[0]]


def data_rows(dataset: Sequence[Sequence[Any]]) -> List[Sequence[Any]]:
    return list(dataset[1:]) if dataset else []


def width(dataset: Sequence[Sequence[Any]]) -> int:
    """Widest row, header included."""
    return max((len(r) for r in dataset), default=0)


def cell(row: Sequence[Any], index: int) -> Any:
    return row[index] if index < len(row) else None


def column_values(dataset: Sequence[Sequence[Any]], index: int) -> List[Any]:
    """Data-row values of one column, ragged rows padded with None."""
    return [cell(row, index) for row in data_rows(dataset)]


def copy_dataset(dataset: Sequence[Sequence[Any]]) -> Dataset:
    return [list(row) for row in dataset]


def to_frame(dataset: Sequence[Sequence[Any]]) -> pd.DataFrame:
    """
    Data rows as an object-dtype DataFrame padded to the widest row.
    Columns are positional (0..width-1) since header names may repeat.
    """
    n_cols = width(dataset)
    rows = [
        list(row) + [None] * (n_cols - len(row))
        for row in data_rows(dataset)
    ]
    return pd.DataFrame(rows, columns=range(n_cols), dtype=object)


# -------------------------------------------------
# COLUMN SELECTION
# -------------------------------------------------
def resolve_column(dataset: Sequence[Sequence[Any]], column: ColumnRef) -> int:
    """
    Resolve a header name (first match) or a positional index.

    Raises:
        ColumnNotFoundError: name absent from the header / index out of range
    """
    names = header(dataset)

    if isinstance(column, int) and not isinstance(column, bool):
        if 0 <= column < len(names):
            return column
        raise ColumnNotFoundError(column, names)

    try:
        return names.index(str(column))
    except ValueError:
        raise ColumnNotFoundError(column, names) from None


def column_label(dataset: Sequence[Sequence[Any]], index: int) -> str:
    names = header(dataset)
    if index < len(names) and names[index]:
        return names[index]
    return f"column_{index}"
