"""Export adapter: dataset -> CSV text / Excel workbook bytes."""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import Any, Union

import pandas as pd

from .cleaning_utils import stringify
from .models import Dataset

logger = logging.getLogger(__name__)


def _csv_field(value: Any) -> str:
    # Only text holding a comma or a quote gets quoted
    if isinstance(value, str) and ("," in value or '"' in value):
        return '"' + value.replace('"', '""') + '"'
    if value is None:
        return ""
    return stringify(value)


def to_csv_text(dataset: Dataset) -> str:
    """Header line plus one line per row, joined with ``\\n`` (no trailing newline)."""
    lines = [",".join(dataset.columns)]
    for row in dataset.rows:
        lines.append(",".join(_csv_field(row.get(col)) for col in dataset.columns))
    return "\n".join(lines)


def write_csv(dataset: Dataset, path: Union[str, Path]) -> Path:
    out_path = Path(path)
    out_path.write_text(to_csv_text(dataset), encoding="utf-8")
    logger.info("exported %s to %s", dataset.name, out_path)
    return out_path


def to_excel_bytes(dataset: Dataset) -> bytes:
    """Single-sheet ``Data`` workbook with the dataset's columns in order."""
    df = pd.DataFrame(dataset.rows, columns=dataset.columns)
    buffer_io = BytesIO()
    df.to_excel(buffer_io, sheet_name="Data", index=False, engine="openpyxl")
    return buffer_io.getvalue()


__all__ = ["to_csv_text", "write_csv", "to_excel_bytes"]
