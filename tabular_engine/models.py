from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from .errors import InvalidArgument

Row = Dict[str, Any]

# -----------------------------
# Dataset snapshot
# -----------------------------


def _check_columns(columns: Sequence[str]) -> None:
    seen = set()
    for col in columns:
        if col in seen:
            raise InvalidArgument(f"Duplicate column name '{col}'")
        seen.add(col)


@dataclass(frozen=True)
class Dataset:
    """Immutable snapshot of a named table of records.

    Cleaning transforms never modify a snapshot; they build a new one with
    ``with_rows`` and the caller swaps its reference.
    """

    id: str
    name: str
    columns: List[str]
    rows: List[Row]
    row_count: int
    cleaned: bool
    created_at: str

    @classmethod
    def create(cls, name: str, columns: Sequence[str], rows: Sequence[Row]) -> "Dataset":
        if not name or not name.strip():
            raise InvalidArgument("Dataset name cannot be empty")
        _check_columns(columns)
        rows = [dict(r) for r in rows]
        return cls(
            id=str(uuid.uuid4()),
            name=name.strip(),
            columns=list(columns),
            rows=rows,
            row_count=len(rows),
            cleaned=False,
            created_at=datetime.now(timezone.utc).isoformat(),
        )

    def with_rows(
        self,
        rows: List[Row],
        *,
        columns: Optional[List[str]] = None,
        cleaned: Optional[bool] = None,
    ) -> "Dataset":
        """New snapshot sharing identity with this one; ``row_count`` follows ``rows``."""
        if columns is not None:
            _check_columns(columns)
        return replace(
            self,
            rows=rows,
            row_count=len(rows),
            columns=list(self.columns) if columns is None else list(columns),
            # never reset once set
            cleaned=self.cleaned or bool(cleaned),
        )

    def rename(self, name: str) -> "Dataset":
        if not name or not name.strip():
            raise InvalidArgument("Dataset name cannot be empty")
        return replace(self, name=name.strip())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "columns": list(self.columns),
            "rows": [dict(r) for r in self.rows],
            "row_count": self.row_count,
            "cleaned": self.cleaned,
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Dataset":
        rows = [dict(r) for r in data.get("rows") or []]
        columns = list(data.get("columns") or [])
        _check_columns(columns)
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            columns=columns,
            rows=rows,
            row_count=len(rows),
            cleaned=bool(data.get("cleaned", False)),
            created_at=str(data.get("created_at", "")),
        )

    def __repr__(self) -> str:
        flag = ", cleaned" if self.cleaned else ""
        return f"Dataset({self.name!r}, id={self.id}, rows={self.row_count}, cols={len(self.columns)}{flag})"


def create_dataset(name: str, parsed: Mapping[str, Any]) -> Dataset:
    """Build a fresh dataset from the import adapter's ``{"columns", "rows"}`` output."""
    return Dataset.create(name, parsed["columns"], parsed["rows"])


# -----------------------------
# Derived summaries
# -----------------------------

Number = Union[int, float]


@dataclass
class ColumnSummary:
    column: str
    type: str
    count: int
    null_count: int
    unique_count: int
    mean: Optional[float] = None
    median: Optional[float] = None
    min: Optional[Union[Number, str]] = None
    max: Optional[Union[Number, str]] = None
    std: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "column": self.column,
            "type": self.type,
            "count": self.count,
            "nullCount": self.null_count,
            "uniqueCount": self.unique_count,
        }
        for key in ("mean", "median", "min", "max", "std"):
            value = getattr(self, key)
            if value is not None:
                out[key] = value
        return out


@dataclass
class DataSummary:
    total_rows: int
    total_columns: int
    column_summaries: List[ColumnSummary] = field(default_factory=list)

    def get(self, column: str) -> ColumnSummary:
        for summary in self.column_summaries:
            if summary.column == column:
                return summary
        raise KeyError(column)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalRows": self.total_rows,
            "totalColumns": self.total_columns,
            "columnSummaries": [c.to_dict() for c in self.column_summaries],
        }


@dataclass(frozen=True)
class GroupedValue:
    group: str
    value: float

    def to_dict(self) -> Dict[str, Any]:
        return {"group": self.group, "value": self.value}


__all__ = [
    "Row",
    "Dataset",
    "create_dataset",
    "ColumnSummary",
    "DataSummary",
    "GroupedValue",
]
