"""Dataset persistence behind one interface.

The engine modules never touch storage; ``DatasetManager`` is handed one of
these implementations:

  - SQLiteDatasetStore: embedded, single-file local store
  - HttpDatasetStore:   client for the datasets REST API
"""

from __future__ import annotations

import json
import logging
import sqlite3
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import requests

from .errors import InvalidArgument, NotFound
from .models import Dataset

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("name", "columns", "rows", "cleaned")


def apply_update(dataset: Dataset, partial: Mapping[str, Any]) -> Dataset:
    """Merge a partial update into a snapshot; ``row_count`` follows ``rows``."""
    unknown = set(partial) - set(UPDATABLE_FIELDS) - {"row_count"}
    if unknown:
        raise InvalidArgument(f"Cannot update fields: {', '.join(sorted(unknown))}")
    data = dataset.to_dict()
    for key in UPDATABLE_FIELDS:
        if partial.get(key) is not None:
            data[key] = partial[key]
    data["cleaned"] = dataset.cleaned or bool(data["cleaned"])
    updated = Dataset.from_dict(data)
    if "name" in partial:
        updated = updated.rename(updated.name)
    return updated


class DatasetStore(ABC):
    """CRUD over dataset records. Unknown ids raise NotFound."""

    @abstractmethod
    def list(self) -> List[Dataset]:
        ...

    @abstractmethod
    def get(self, dataset_id: str) -> Dataset:
        ...

    @abstractmethod
    def create(self, dataset: Dataset) -> Dataset:
        ...

    @abstractmethod
    def update(self, dataset_id: str, partial: Mapping[str, Any]) -> Dataset:
        ...

    @abstractmethod
    def delete(self, dataset_id: str) -> None:
        ...


# -----------------------------
# Embedded store
# -----------------------------

SQL_CREATE_DATASETS = """
CREATE TABLE IF NOT EXISTS datasets (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    columns_json TEXT NOT NULL,
    rows_json TEXT NOT NULL,
    row_count INTEGER NOT NULL DEFAULT 0,
    cleaned INTEGER NOT NULL DEFAULT 0,
    created_at TEXT NOT NULL
);
"""

SQL_SELECT = """
SELECT id, name, columns_json, rows_json, cleaned, created_at
FROM datasets
"""


class SQLiteDatasetStore(DatasetStore):
    """Local store keeping each dataset as one row, columns and rows as JSON."""

    def __init__(self, db_path: Union[str, Path]) -> None:
        self.db_path = Path(db_path)
        self.init_database()

    def init_database(self) -> None:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.db_path)
        try:
            conn.execute(SQL_CREATE_DATASETS)
            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _from_row(row: Any) -> Dataset:
        id_val, name, columns_json, rows_json, cleaned, created_at = row
        return Dataset.from_dict(
            {
                "id": id_val,
                "name": name,
                "columns": json.loads(columns_json),
                "rows": json.loads(rows_json),
                "cleaned": bool(cleaned),
                "created_at": created_at,
            }
        )

    def _save(self, conn: sqlite3.Connection, dataset: Dataset, *, insert: bool) -> None:
        sql = (
            "INSERT INTO datasets (name, columns_json, rows_json, row_count, cleaned, created_at, id) "
            "VALUES (?, ?, ?, ?, ?, ?, ?)"
            if insert
            else "UPDATE datasets SET name = ?, columns_json = ?, rows_json = ?, "
            "row_count = ?, cleaned = ?, created_at = ? WHERE id = ?"
        )
        conn.execute(
            sql,
            (
                dataset.name,
                json.dumps(dataset.columns),
                json.dumps(dataset.rows, default=str),
                dataset.row_count,
                int(dataset.cleaned),
                dataset.created_at,
                dataset.id,
            ),
        )

    def list(self) -> List[Dataset]:
        conn = sqlite3.connect(self.db_path)
        try:
            cursor = conn.execute(SQL_SELECT + " ORDER BY created_at")
            return [self._from_row(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def get(self, dataset_id: str) -> Dataset:
        conn = sqlite3.connect(self.db_path)
        try:
            row = conn.execute(SQL_SELECT + " WHERE id = ?", (dataset_id,)).fetchone()
        finally:
            conn.close()
        if not row:
            raise NotFound(f"Dataset '{dataset_id}' not found")
        return self._from_row(row)

    def create(self, dataset: Dataset) -> Dataset:
        conn = sqlite3.connect(self.db_path)
        try:
            self._save(conn, dataset, insert=True)
            conn.commit()
        except sqlite3.IntegrityError as exc:
            raise InvalidArgument(f"Dataset '{dataset.id}' already exists") from exc
        finally:
            conn.close()
        logger.debug("created dataset %s (%s)", dataset.id, dataset.name)
        return dataset

    def update(self, dataset_id: str, partial: Mapping[str, Any]) -> Dataset:
        updated = apply_update(self.get(dataset_id), partial)
        conn = sqlite3.connect(self.db_path)
        try:
            self._save(conn, updated, insert=False)
            conn.commit()
        finally:
            conn.close()
        return updated

    def delete(self, dataset_id: str) -> None:
        conn = sqlite3.connect(self.db_path)
        try:
            deleted = conn.execute("DELETE FROM datasets WHERE id = ?", (dataset_id,)).rowcount
            conn.commit()
        finally:
            conn.close()
        if deleted == 0:
            raise NotFound(f"Dataset '{dataset_id}' not found")


# -----------------------------
# REST client
# -----------------------------


class HttpDatasetStore(DatasetStore):
    """Client for ``/datasets`` endpoints; the server assigns ids on create."""

    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _url(self, dataset_id: Optional[str] = None) -> str:
        url = f"{self.base_url}/datasets"
        return f"{url}/{dataset_id}" if dataset_id else url

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        if response.status_code == 404:
            raise NotFound(f"Dataset not found: {url}")
        response.raise_for_status()
        return response

    def list(self) -> List[Dataset]:
        return [Dataset.from_dict(d) for d in self._request("GET", self._url()).json()]

    def get(self, dataset_id: str) -> Dataset:
        return Dataset.from_dict(self._request("GET", self._url(dataset_id)).json())

    def create(self, dataset: Dataset) -> Dataset:
        payload = dataset.to_dict()
        payload.pop("id")
        response = self._request("POST", self._url(), json=payload)
        return Dataset.from_dict(response.json())

    def update(self, dataset_id: str, partial: Mapping[str, Any]) -> Dataset:
        body: Dict[str, Any] = dict(partial)
        if body.get("rows") is not None:
            body["row_count"] = len(body["rows"])
        response = self._request("PATCH", self._url(dataset_id), json=body)
        return Dataset.from_dict(response.json())

    def delete(self, dataset_id: str) -> None:
        self._request("DELETE", self._url(dataset_id))


__all__ = [
    "UPDATABLE_FIELDS",
    "apply_update",
    "DatasetStore",
    "SQLiteDatasetStore",
    "HttpDatasetStore",
]
