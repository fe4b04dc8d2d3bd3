"""Grouped aggregation feeding the chart views."""

from __future__ import annotations

import logging
from typing import Any, List

import pandas as pd

from .cleaning_utils import is_null, parse_number, stringify
from .errors import InvalidArgument
from .models import Dataset, GroupedValue

logger = logging.getLogger(__name__)

AGGREGATE_FUNCTIONS = ("count", "sum", "avg", "min", "max")
UNKNOWN_GROUP = "Unknown"


def _group_key(value: Any) -> str:
    return UNKNOWN_GROUP if is_null(value) else stringify(value)


def group_and_aggregate(
    dataset: Dataset, group_column: str, value_column: str, fn: str = "count"
) -> List[GroupedValue]:
    """Bucket rows by ``group_column`` and reduce ``value_column`` with ``fn``.

    ``count`` counts every row of a group, nulls included. The other
    functions only see values that parse as finite numbers and yield 0 for a
    group without any. Groups come back by descending value; ties keep the
    order in which the groups were first seen.
    """
    if fn not in AGGREGATE_FUNCTIONS:
        raise InvalidArgument(
            f"Unknown aggregate function '{fn}', expected one of {AGGREGATE_FUNCTIONS}"
        )
    for column in (group_column, value_column):
        if column not in dataset.columns:
            raise InvalidArgument(f"Column '{column}' does not exist")
    if not dataset.rows:
        return []

    keys = [_group_key(row.get(group_column)) for row in dataset.rows]
    numeric = pd.Series(
        [parse_number(row.get(value_column)) for row in dataset.rows], dtype=float
    )
    grouped = numeric.groupby(keys, sort=False)

    if fn == "count":
        values = grouped.size()
    elif fn == "sum":
        values = grouped.sum()
    elif fn == "avg":
        values = grouped.mean().fillna(0.0)
    elif fn == "min":
        values = grouped.min().fillna(0.0)
    else:
        values = grouped.max().fillna(0.0)

    cast = int if fn == "count" else float
    result = [GroupedValue(group=str(k), value=cast(v)) for k, v in values.items()]
    result = sorted(result, key=lambda g: g.value, reverse=True)
    logger.debug(
        "%s of %s by %s: %d groups", fn, value_column, group_column, len(result)
    )
    return result


def top_n(groups: List[GroupedValue], n: int) -> List[GroupedValue]:
    """First ``n`` groups, for charts that only plot the leaders."""
    if n <= 0:
        raise InvalidArgument(f"n must be positive, got {n}")
    return groups[:n]


__all__ = ["AGGREGATE_FUNCTIONS", "UNKNOWN_GROUP", "group_and_aggregate", "top_n"]
