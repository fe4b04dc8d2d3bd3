"""Import adapter: CSV / Excel file -> ``{"columns": [...], "rows": [...]}``.

CSV cells are kept as text exactly as written (blank cells become ``""``);
Excel cells keep their native number/text types and blank cells become None.
Only the first sheet of a workbook is read. The first line is the header row;
headers are sanitized (see ``cleaning_utils.sanitize_column_name``).
"""

from __future__ import annotations

import datetime
import logging
import zipfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

from .cleaning_utils import build_headers
from .errors import ParseError
from .models import Dataset

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".csv", ".xlsx", ".xls")


def _load_raw(file_path: str) -> Tuple[pd.DataFrame, str]:
    ext = Path(file_path).suffix.lower()
    try:
        if ext in (".xlsx", ".xls"):
            # Only first sheet; fully blank spreadsheet rows are not records
            df_raw = pd.read_excel(file_path, sheet_name=0, header=None, dtype=object)
            return df_raw.dropna(how="all").reset_index(drop=True), "excel"
        elif ext == ".csv":
            df_raw = pd.read_csv(
                file_path,
                header=None,
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
            )
            return df_raw, "csv"
    except pd.errors.EmptyDataError as exc:
        raise ParseError("No data found in the file") from exc
    except (pd.errors.ParserError, UnicodeDecodeError, zipfile.BadZipFile, ValueError) as exc:
        raise ParseError(f"Could not parse {Path(file_path).name}: {exc}") from exc
    raise ParseError(
        f"Unsupported file format '{ext}', expected one of {', '.join(SUPPORTED_EXTENSIONS)}"
    )


def _to_cell(value: Any) -> Any:
    if not isinstance(value, str) and pd.isna(value):
        return None
    if isinstance(value, (datetime.date, np.datetime64)):
        ts = pd.Timestamp(value)
        return ts.date().isoformat() if ts == ts.normalize() else ts.isoformat()
    if isinstance(value, np.generic):
        return value.item()
    return value


def load_file(file_path: str) -> Dict[str, List[Any]]:
    """Parse a CSV or Excel file into sanitized columns and row records.

    Raises ParseError for unsupported, malformed or empty files; no partial
    result is ever returned.
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    df_raw, file_kind = _load_raw(str(path))
    if df_raw.shape[0] < 2:
        raise ParseError("No data found in the file")

    columns = build_headers(df_raw.iloc[0].tolist())
    body = df_raw.iloc[1:]
    rows = [
        {col: _to_cell(v) for col, v in zip(columns, values)}
        for values in body.itertuples(index=False, name=None)
    ]
    logger.info(
        "loaded %s file %s: %d rows x %d columns",
        file_kind,
        path.name,
        len(rows),
        len(columns),
    )
    return {"columns": columns, "rows": rows}


def import_file(file_path: str, name: Optional[str] = None) -> Dataset:
    """Load a file and wrap it in a fresh, uncleaned dataset."""
    parsed = load_file(file_path)
    return Dataset.create(name or Path(file_path).stem, parsed["columns"], parsed["rows"])


__all__ = ["SUPPORTED_EXTENSIONS", "load_file", "import_file"]
