"""Column type inference: every column is a ``number``, ``date`` or ``string``."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable

from .cleaning_utils import is_null, parse_date, parse_number
from .models import Dataset

logger = logging.getLogger(__name__)

NUMBER = "number"
DATE = "date"
STRING = "string"


def infer_type(values: Iterable[Any]) -> str:
    """Classify raw cell values.

    Nulls are ignored. A column with no values left is a string column; it is
    numeric only if every value parses as a finite number, a date column only
    if every value parses as a calendar date.
    """
    present = [v for v in values if not is_null(v)]
    if not present:
        return STRING
    if all(parse_number(v) is not None for v in present):
        return NUMBER
    if all(parse_date(v) is not None for v in present):
        return DATE
    return STRING


class TypeInferencer:
    """Infers a type for every column of a dataset, in column order."""

    def infer_types(self, dataset: Dataset) -> Dict[str, str]:
        type_info = {
            column: infer_type(row.get(column) for row in dataset.rows)
            for column in dataset.columns
        }
        logger.debug("inferred types for %s: %s", dataset.name, type_info)
        return type_info


__all__ = ["NUMBER", "DATE", "STRING", "infer_type", "TypeInferencer"]
