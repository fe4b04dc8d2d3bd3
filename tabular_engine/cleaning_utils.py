"""Cell-level helpers shared by type inference, statistics and the cleaning transforms.

  - Null detection (is_null, drop_fully_blank_rows)
  - Number / date parsing (parse_number, parse_date)
  - Header normalization (sanitize_column_name, build_headers)
  - Cell rendering (stringify)

A cell is null when it is ``None``, the empty string, or a float NaN (how
pandas hands back a blank spreadsheet cell). Whitespace-only strings are
values, not nulls.
"""

from __future__ import annotations

import datetime
import math
import re
import warnings
from typing import Any, Dict, Iterable, List, Optional, Set

import numpy as np
import pandas as pd

# -----------------------------
# Null detection
# -----------------------------


def is_null(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (float, np.floating)):
        return bool(np.isnan(value))
    return value is pd.NaT


def drop_fully_blank_rows(rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Keep rows holding at least one non-null value.

    Keys a row does not carry count as null, so an empty record is dropped.
    """
    if not rows:
        return []
    df = pd.DataFrame(rows, dtype=object)
    is_blank = df.isna() | df.eq("")
    keep_mask = ~is_blank.all(axis=1)
    return [row for row, keep in zip(rows, keep_mask.tolist()) if keep]


# -----------------------------
# Number / date parsing
# -----------------------------

_NUMBER_TEXT = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_HAS_DIGIT = re.compile(r"\d")


def parse_number(value: Any) -> Optional[float]:
    """Return ``value`` as a finite float, or None when it is not numeric."""
    if value is None or isinstance(value, (bool, np.bool_)):
        return None
    if isinstance(value, (int, float, np.integer, np.floating)):
        num = float(value)
    elif isinstance(value, str):
        s = value.strip()
        if not _NUMBER_TEXT.fullmatch(s):
            return None
        num = float(s)
    else:
        return None
    return num if math.isfinite(num) else None


def parse_date(value: Any) -> Optional[pd.Timestamp]:
    """Return ``value`` as a Timestamp when it is a valid calendar date.

    Text without a digit is never a date, so keywords like ``today`` stay strings.
    """
    if value is pd.NaT:
        return None
    if isinstance(value, (datetime.date, np.datetime64)):
        # Excel date cells arrive as datetime / Timestamp objects
        return pd.Timestamp(value)
    if not isinstance(value, str) or not _HAS_DIGIT.search(value):
        return None
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", UserWarning)
        try:
            ts = pd.to_datetime(value.strip(), errors="coerce")
        except (ValueError, OverflowError, TypeError):
            return None
    return None if pd.isna(ts) else ts


# -----------------------------
# Header normalization
# -----------------------------

_INVALID_HEADER_CHARS = re.compile(r"[^a-zA-Z0-9_\s]")
_WHITESPACE_RUN = re.compile(r"\s+")


def sanitize_column_name(name: str) -> str:
    """Trim, drop punctuation, join words with ``_`` and lowercase.

    Idempotent: sanitizing an already sanitized name returns it unchanged.
    """
    s = name.strip()
    s = _INVALID_HEADER_CHARS.sub("", s)
    s = _WHITESPACE_RUN.sub("_", s)
    return s.lower()


def _dedupe_headers(headers: List[str]) -> List[str]:
    # generated suffixes skip every name the header row already uses
    reserved = set(headers)
    seen: Dict[str, int] = {}
    emitted: Set[str] = set()
    out: List[str] = []
    for h in headers:
        name = h
        if name in emitted:
            n = seen.get(h, 0)
            while name in emitted or name in reserved:
                n += 1
                name = f"{h}_{n}"
            seen[h] = n
        emitted.add(name)
        out.append(name)
    return out


def build_headers(raw_names: Iterable[Any]) -> List[str]:
    headers: List[str] = []
    for i, val in enumerate(raw_names):
        s = "" if is_null(val) else sanitize_column_name(str(val))
        headers.append(s or f"column_{i + 1}")
    return _dedupe_headers(headers)


# -----------------------------
# Cell rendering
# -----------------------------


def stringify(value: Any) -> str:
    """Render a cell the way the data table shows it.

    Nulls render empty and integral floats lose their trailing ``.0``.
    """
    if is_null(value):
        return ""
    if isinstance(value, (float, np.floating)) and float(value).is_integer():
        return str(int(value))
    return str(value)


__all__ = [
    "is_null",
    "drop_fully_blank_rows",
    "parse_number",
    "parse_date",
    "sanitize_column_name",
    "build_headers",
    "stringify",
]
