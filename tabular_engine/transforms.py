"""Cleaning transforms.

Each transform takes the active snapshot and returns ``(new_snapshot, report)``.
The input snapshot and its rows are left untouched and the new snapshot is
flagged ``cleaned``. Arguments are validated before any row is visited, so a
rejected call has no effect.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Tuple

from .cleaning_utils import drop_fully_blank_rows
from .errors import InvalidArgument
from .models import Dataset, Row

logger = logging.getLogger(__name__)


def remove_null_rows(dataset: Dataset) -> Tuple[Dataset, Dict[str, Any]]:
    """Drop rows in which every value is null; rows with any value survive."""
    kept = [dict(row) for row in drop_fully_blank_rows(dataset.rows)]
    cleaned = dataset.with_rows(kept, cleaned=True)

    report = {
        "transform": "remove_null_rows",
        "rows_before": dataset.row_count,
        "rows_after": cleaned.row_count,
        "rows_removed": dataset.row_count - cleaned.row_count,
    }
    logger.info(
        "removed %d rows with null values from %s",
        report["rows_removed"],
        dataset.name,
    )
    return cleaned, report


def split_column(
    dataset: Dataset, column: str, delimiter: str
) -> Tuple[Dataset, Dict[str, Any]]:
    """Split string cells of ``column`` on ``delimiter`` into ``{column}_1..N``.

    Only string cells containing the delimiter are split; parts are trimmed.
    N is the largest part count seen, and the new names are appended to the
    schema once. The source column is kept.
    """
    if column not in dataset.columns:
        raise InvalidArgument(f"Column '{column}' does not exist")
    if not isinstance(delimiter, str) or delimiter == "":
        raise InvalidArgument("Delimiter cannot be empty")

    rows: List[Row] = []
    max_parts = 0
    rows_split = 0
    for row in dataset.rows:
        new_row = dict(row)
        value = row.get(column)
        if isinstance(value, str) and delimiter in value:
            parts = value.split(delimiter)
            for i, part in enumerate(parts, start=1):
                new_row[f"{column}_{i}"] = part.strip()
            max_parts = max(max_parts, len(parts))
            rows_split += 1
        rows.append(new_row)

    columns = list(dataset.columns)
    new_columns = []
    for i in range(1, max_parts + 1):
        name = f"{column}_{i}"
        if name not in columns:
            columns.append(name)
            new_columns.append(name)

    result = dataset.with_rows(rows, columns=columns, cleaned=True)
    report = {
        "transform": "split_column",
        "column": column,
        "delimiter": delimiter,
        "parts": max_parts,
        "rows_split": rows_split,
        "new_columns": new_columns,
    }
    logger.info(
        "split column %r of %s into %d parts (%d rows)",
        column,
        dataset.name,
        max_parts,
        rows_split,
    )
    return result, report


__all__ = ["remove_null_rows", "split_column"]
