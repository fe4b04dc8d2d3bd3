import logging
from typing import Any, Dict, List

import numpy as np

from .cleaning_utils import is_null, parse_number
from .models import ColumnSummary, DataSummary, Dataset
from .type_inference import NUMBER, STRING, infer_type

logger = logging.getLogger(__name__)


class DataProfiler:
    """Summary statistics engine producing per-column stats and dataset totals.

    Stateless: every call recomputes from the snapshot it is given, callers
    that need caching key it on (dataset id, snapshot).
    """

    def summarize(self, dataset: Dataset) -> DataSummary:
        """Generate the summary for every column, in dataset column order."""

        summary = DataSummary(
            total_rows=len(dataset.rows),
            total_columns=len(dataset.columns),
            column_summaries=[
                self._profile_column(dataset, column) for column in dataset.columns
            ],
        )
        logger.debug(
            "summarized %s: %d rows x %d columns",
            dataset.name,
            summary.total_rows,
            summary.total_columns,
        )
        return summary

    def column_values(self, dataset: Dataset, column: str) -> List[Any]:
        """Non-null values of one column in row order."""

        return [v for v in (row.get(column) for row in dataset.rows) if not is_null(v)]

    def _profile_column(self, dataset: Dataset, column: str) -> ColumnSummary:
        """Generate the summary for a single column."""

        values = [row.get(column) for row in dataset.rows]
        present = [v for v in values if not is_null(v)]

        if not present:
            return ColumnSummary(
                column=column,
                type=STRING,
                count=0,
                null_count=len(values),
                unique_count=0,
            )

        detected_type = infer_type(present)
        summary = ColumnSummary(
            column=column,
            type=detected_type,
            count=len(present),
            null_count=len(values) - len(present),
            unique_count=len(set(present)),
        )

        if detected_type == NUMBER:
            stats = self._get_numeric_statistics(present)
            summary.mean = stats["mean"]
            summary.median = stats["median"]
            summary.min = stats["min"]
            summary.max = stats["max"]
            summary.std = stats["std"]
        else:
            # Row order, not lexical order
            summary.min = str(present[0])
            summary.max = str(present[-1])

        return summary

    def _get_numeric_statistics(self, values: List[Any]) -> Dict[str, float]:
        """Mean, median, extremes and population standard deviation."""

        arr = np.sort(np.array([parse_number(v) for v in values], dtype=float))

        return {
            "mean": float(arr.mean()),
            "median": float(np.median(arr)),
            "min": float(arr[0]),
            "max": float(arr[-1]),
            # ddof=0: divisor is the count
            "std": float(arr.std()),
        }


def summarize(dataset: Dataset) -> DataSummary:
    return DataProfiler().summarize(dataset)
