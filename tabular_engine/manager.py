import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .aggregation import group_and_aggregate
from .config import load_config
from .data_profiler import DataProfiler
from .errors import NotFound
from .importer import import_file
from .models import DataSummary, Dataset, GroupedValue
from .storage import DatasetStore
from .transforms import remove_null_rows, split_column
from .view import DataView, build_view

logger = logging.getLogger(__name__)


class DatasetManager:
    """Single-user session over a dataset store.

    Holds the "current" snapshot. Cleaning transforms build a new snapshot,
    persist it and only then swap the active reference, so a failed
    transform leaves both the store and the active dataset as they were.
    """

    def __init__(self, store: DatasetStore, config: Optional[Dict[str, Any]] = None) -> None:
        self.store = store
        self.config = config if config is not None else load_config()
        self._profiler = DataProfiler()
        self._active: Optional[Dataset] = None

    # -----------------------------
    # Datasets
    # -----------------------------

    @property
    def active(self) -> Dataset:
        if self._active is None:
            raise NotFound("No active dataset")
        return self._active

    def import_file(self, file_path: Union[str, Path], name: Optional[str] = None) -> Dataset:
        """Import a CSV/Excel file, persist it and make it the active dataset."""
        dataset = self.store.create(import_file(str(file_path), name=name))
        self._active = dataset
        logger.info("imported %r as dataset %s", dataset.name, dataset.id)
        return dataset

    def list_datasets(self) -> List[Dataset]:
        return self.store.list()

    def activate(self, dataset_id: str) -> Dataset:
        self._active = self.store.get(dataset_id)
        return self._active

    def rename(self, dataset_id: str, name: str) -> Dataset:
        updated = self.store.update(dataset_id, {"name": name})
        if self._active is not None and self._active.id == dataset_id:
            self._active = updated
        return updated

    def delete(self, dataset_id: str) -> None:
        self.store.delete(dataset_id)
        if self._active is not None and self._active.id == dataset_id:
            self._active = None
        logger.info("deleted dataset %s", dataset_id)

    # -----------------------------
    # Cleaning
    # -----------------------------

    def _commit(self, dataset: Dataset) -> Dataset:
        stored = self.store.update(
            dataset.id,
            {
                "columns": dataset.columns,
                "rows": dataset.rows,
                "cleaned": dataset.cleaned,
            },
        )
        self._active = stored
        return stored

    def remove_null_rows(self) -> Dict[str, Any]:
        cleaned, report = remove_null_rows(self.active)
        self._commit(cleaned)
        return report

    def split_column(self, column: str, delimiter: Optional[str] = None) -> Dict[str, Any]:
        if delimiter is None:
            delimiter = self.config.get("split_delimiter", ",")
        split, report = split_column(self.active, column, delimiter)
        self._commit(split)
        return report

    # -----------------------------
    # Derivations
    # -----------------------------

    def summary(self) -> DataSummary:
        return self._profiler.summarize(self.active)

    def group(self, group_column: str, value_column: str, fn: str = "count") -> List[GroupedValue]:
        return group_and_aggregate(self.active, group_column, value_column, fn)

    def view(self, **kwargs: Any) -> DataView:
        kwargs.setdefault("page_size", self.config.get("page_size", 50))
        return build_view(self.active, **kwargs)
