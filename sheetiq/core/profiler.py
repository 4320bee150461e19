from typing import Any, Dict, Optional, Sequence

import pandas as pd

from .cells import parse_number
from .dataset import ColumnRef, column_label, column_values, data_rows, resolve_column
from .schema import ClassifierConfig, ColumnType, classify_columns, columns_of_type


class DataProfiler:
    def __init__(self, classifier_config: Optional[ClassifierConfig] = None):
        self.classifier_config = classifier_config

    def profile(self, dataset: Sequence[Sequence[Any]], column: Optional[ColumnRef] = None):
        """
        Descriptive statistics for one numeric column.

        Uses `column` when given, otherwise the first numeric column.
        Statistics are omitted when no numeric values exist.
        """
        types = classify_columns(dataset, self.classifier_config)

        profile: Dict[str, Any] = {
            "total_records": len(data_rows(dataset)),
            "column_types": {
                column_label(dataset, i): t.value for i, t in types.items()
            },
        }

        if column is not None:
            index = resolve_column(dataset, column)
        else:
            numeric = columns_of_type(types, ColumnType.NUMERIC)
            if not numeric:
                return profile
            index = numeric[0]

        values = pd.Series(
            [parse_number(v) for v in column_values(dataset, index)],
            dtype=float,
        ).dropna()

        profile["column"] = column_label(dataset, index)
        if values.empty:
            return profile

        # population statistics
        profile["statistics"] = {
            "count": int(values.size),
            "mean": float(values.mean()),
            "median": float(values.median()),
            "std_dev": float(values.std(ddof=0)),
            "variance": float(values.var(ddof=0)),
            "min": float(values.min()),
            "max": float(values.max()),
        }

        return profile
