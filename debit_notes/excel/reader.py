from __future__ import annotations

import zipfile
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import pandas as pd

"""Tabular file decoder (CSV / Excel first sheet).

The first row is treated as the header row and every following non-empty row
becomes a ``dict`` (header -> cell). Empty cells become "" so downstream code
never sees NaN. Only the first sheet of a workbook is read.
"""

__all__ = [
    "EmptyInputError",
    "TableReadError",
    "read_table",
    "read_rows",
    "rows_from_frame",
]

CSV_SUFFIXES = {".csv", ".txt"}


class TableReadError(Exception):
    """Raised when a file cannot be decoded as a table."""

class EmptyInputError(TableReadError):
    """Raised when a file decodes but holds no data rows."""


def _na_options(na_strings: Iterable[str] | None) -> dict[str, Any]:
    # 空セルのみ欠損扱い ("NA" / "None" 等の文字列はそのまま残す)
    return {"keep_default_na": False, "na_values": ["", *(na_strings or ())]}


def read_table(path: Path, na_strings: Iterable[str] | None = None) -> pd.DataFrame:
    """Read the raw (header-less) first sheet of ``path`` as a DataFrame."""
    if not path.exists():
        raise TableReadError(f"file not found: {path}")
    na = _na_options(na_strings)
    try:
        if path.suffix.lower() in CSV_SUFFIXES:
            return pd.read_csv(path, header=None, dtype=str, skip_blank_lines=True, **na)
        return pd.read_excel(path, sheet_name=0, header=None, dtype=object, **na)
    except pd.errors.EmptyDataError as e:
        raise EmptyInputError(f"no data in {path.name}") from e
    except (ValueError, OSError, zipfile.BadZipFile, pd.errors.ParserError) as e:
        raise TableReadError(f"cannot decode {path.name}: {e}") from e


def _header_label(value: Any) -> str:
    if value is None or pd.isna(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def _dedupe(headers: list[str]) -> list[str]:
    # 重複ヘッダは "Name_1", "Name_2" ... として区別
    seen: dict[str, int] = {}
    out: list[str] = []
    for h in headers:
        if h in seen:
            seen[h] += 1
            out.append(f"{h}_{seen[h]}")
        else:
            seen[h] = 0
            out.append(h)
    return out


def rows_from_frame(df: pd.DataFrame) -> list[dict[str, Any]]:
    """Convert a header-less frame into row dicts using row 0 as headers.

    Blank header cells drop their column; all-empty rows are skipped.
    """
    if df.shape[0] == 0:
        return []
    labels = [_header_label(v) for v in df.iloc[0].tolist()]
    keep = [i for i, h in enumerate(labels) if h.strip()]
    headers = _dedupe(labels)
    rows: list[dict[str, Any]] = []
    for _, raw in df.iloc[1:].iterrows():
        if raw.isna().all():
            continue
        values = raw.tolist()
        row: dict[str, Any] = {}
        for i in keep:
            val = values[i]
            row[headers[i]] = "" if pd.isna(val) else val
        rows.append(row)
    return rows


def read_rows(path: Path, na_strings: Iterable[str] | None = None) -> list[dict[str, Any]]:
    """Decode ``path`` into raw rows.

    Raises:
        EmptyInputError: the file has no data rows
        TableReadError: the file cannot be decoded
    """
    rows = rows_from_frame(read_table(path, na_strings))
    if not rows:
        raise EmptyInputError(f"no data rows in {path.name}")
    return rows
