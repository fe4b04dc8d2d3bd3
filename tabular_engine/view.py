"""Read-only views over the active dataset: search, filter, sort and paginate.

Nothing here mutates a snapshot. The data table composes the steps as
filter -> sort -> paginate (see ``build_view``).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Any, Dict, List, Mapping, Optional

import pandas as pd

from .cleaning_utils import is_null, stringify
from .errors import InvalidArgument
from .models import Dataset, Row

DEFAULT_PAGE_SIZE = 50
SORT_DIRECTIONS = ("asc", "desc")


# -----------------------------
# Search / filter
# -----------------------------


def _contains(value: Any, needle: str) -> bool:
    return needle in stringify(value).lower()


def search_rows(rows: List[Row], query: Optional[str]) -> List[Row]:
    """Rows where any cell contains ``query``, case-insensitively."""
    if is_null(query):
        return list(rows)
    needle = str(query).lower()
    return [row for row in rows if any(_contains(v, needle) for v in row.values())]


def filter_data(dataset: Dataset, filters: Mapping[str, Any]) -> Dataset:
    """Snapshot holding only the rows matching every column filter.

    Each filter is a case-insensitive substring test on the rendered cell;
    empty or None queries match everything.
    """
    active = {
        column: str(query).lower()
        for column, query in filters.items()
        if not is_null(query)
    }
    for column in active:
        if column not in dataset.columns:
            raise InvalidArgument(f"Cannot filter on unknown column '{column}'")
    rows = [
        row
        for row in dataset.rows
        if all(_contains(row.get(column), q) for column, q in active.items())
    ]
    return dataset.with_rows(rows)


# -----------------------------
# Sort
# -----------------------------


def _is_missing(value: Any) -> bool:
    if value is None or value is pd.NaT:
        return True
    return isinstance(value, float) and math.isnan(value)


def _compare(a: Any, b: Any) -> int:
    try:
        if a < b:
            return -1
        if a > b:
            return 1
        return 0
    except TypeError:
        # mixed runtime types
        sa, sb = str(a), str(b)
        return (sa > sb) - (sa < sb)


def sort_rows(rows: List[Row], column: str, direction: str = "asc") -> List[Row]:
    """Sort by one column; missing values go last whatever the direction."""
    if direction not in SORT_DIRECTIONS:
        raise InvalidArgument(f"Sort direction must be 'asc' or 'desc', got '{direction}'")
    sign = -1 if direction == "desc" else 1

    def cmp(row_a: Row, row_b: Row) -> int:
        a, b = row_a.get(column), row_b.get(column)
        a_missing, b_missing = _is_missing(a), _is_missing(b)
        if a_missing or b_missing:
            return int(a_missing) - int(b_missing)
        return sign * _compare(a, b)

    return sorted(rows, key=cmp_to_key(cmp))


# -----------------------------
# Paginate
# -----------------------------


def _check_page_size(page_size: int) -> None:
    if page_size <= 0:
        raise InvalidArgument(f"page_size must be positive, got {page_size}")


def total_pages(row_count: int, page_size: int) -> int:
    _check_page_size(page_size)
    return math.ceil(row_count / page_size)


def clamp_page(page: int, pages: int) -> int:
    return min(max(page, 1), max(pages, 1))


def paginate(rows: List[Row], page: int, page_size: int = DEFAULT_PAGE_SIZE) -> List[Row]:
    """Slice ``[(page-1)*size, page*size)`` after clamping ``page`` into range."""
    page = clamp_page(page, total_pages(len(rows), page_size))
    start = (page - 1) * page_size
    return rows[start : start + page_size]


# -----------------------------
# Composition
# -----------------------------


@dataclass
class DataView:
    rows: List[Row]
    page: int
    page_size: int
    total_pages: int
    total_rows: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rows": self.rows,
            "page": self.page,
            "pageSize": self.page_size,
            "totalPages": self.total_pages,
            "totalRows": self.total_rows,
        }


def build_view(
    dataset: Dataset,
    *,
    search: Optional[str] = None,
    filters: Optional[Mapping[str, Any]] = None,
    sort_column: Optional[str] = None,
    direction: str = "asc",
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> DataView:
    """One page of the data table: filter -> sort -> paginate."""
    _check_page_size(page_size)
    if sort_column is not None and sort_column not in dataset.columns:
        raise InvalidArgument(f"Cannot sort on unknown column '{sort_column}'")
    if direction not in SORT_DIRECTIONS:
        raise InvalidArgument(f"Sort direction must be 'asc' or 'desc', got '{direction}'")

    rows = filter_data(dataset, filters).rows if filters else dataset.rows
    rows = search_rows(rows, search)
    if sort_column is not None:
        rows = sort_rows(rows, sort_column, direction)

    pages = total_pages(len(rows), page_size)
    page = clamp_page(page, pages)
    return DataView(
        rows=paginate(rows, page, page_size),
        page=page,
        page_size=page_size,
        total_pages=pages,
        total_rows=len(rows),
    )


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "SORT_DIRECTIONS",
    "search_rows",
    "filter_data",
    "sort_rows",
    "total_pages",
    "clamp_page",
    "paginate",
    "DataView",
    "build_view",
]
