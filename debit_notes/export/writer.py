from __future__ import annotations

import logging
import re
from pathlib import Path

import pandas as pd

from ..models.processing_result import ProcessingResult
from ..services.currency import DEFAULT_CURRENCY, CurrencySettings, format_currency
from ..services.notes import DebitNote, build_debit_note

"""Debit note export.

Writes one table per supplier (line items + totals row) and a supplier index,
as CSV or XLSX. Suppliers are written in first-seen order.
"""

__all__ = [
    "EXPORT_FORMATS",
    "ExportError",
    "slugify",
    "note_frame",
    "supplier_frame",
    "write_debit_notes",
]

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("csv", "xlsx")

NOTE_COLUMNS = [
    "Item",
    "Invoice No",
    "Planned Units",
    "Planned Amount",
    "Invoiced Units",
    "Invoiced Amount",
    "Received Units",
    "Actual Payable",
    "Debit Amount",
]


class ExportError(Exception):
    """Raised when export files cannot be written."""
    error_type = "EXPORT_ERROR"


def slugify(value: object) -> str:
    text = str(value or "").lower()
    text = re.sub(r"\s+", "-", text)
    return re.sub(r"[^a-z0-9\-]", "", text)[:60]


def note_frame(note: DebitNote, currency: CurrencySettings = DEFAULT_CURRENCY) -> pd.DataFrame:
    fmt = lambda v: format_currency(v, currency)  # noqa: E731
    records = [
        [
            line.item,
            line.invoice_no,
            line.planned_units,
            fmt(line.planned_amount),
            line.invoiced_units,
            fmt(line.invoiced_amount),
            line.received_units,
            fmt(line.actual_payable),
            fmt(line.debit_amount),
        ]
        for line in note.lines
    ]
    records.append([
        "Totals", "", "",
        fmt(note.total_planned), "", "", "",
        fmt(note.total_actual),
        fmt(note.total_debit),
    ])
    return pd.DataFrame(records, columns=NOTE_COLUMNS)


def supplier_frame(result: ProcessingResult, currency: CurrencySettings = DEFAULT_CURRENCY) -> pd.DataFrame:
    records = []
    for sup in result.aggregation:
        records.append({
            "Supplier": sup.name,
            "State": sup.state,
            "Items": len(sup.items),
            "Total Debit": round(sup.total_debit, 2),
            "Total Debit (formatted)": format_currency(sup.total_debit, currency),
        })
    return pd.DataFrame(
        records,
        columns=["Supplier", "State", "Items", "Total Debit", "Total Debit (formatted)"],
    )


def _write(df: pd.DataFrame, path: Path, fmt: str) -> None:
    if fmt == "csv":
        df.to_csv(path, index=False, encoding="utf-8")
    else:
        df.to_excel(path, index=False, engine="openpyxl")


def write_debit_notes(
    result: ProcessingResult,
    out_dir: Path,
    fmt: str = "csv",
    currency: CurrencySettings = DEFAULT_CURRENCY,
) -> list[Path]:
    """Write every supplier's debit note plus the supplier index.

    Returns the written paths (notes first, index last).

    Raises:
        ExportError: unknown format or the files cannot be written
    """
    if fmt not in EXPORT_FORMATS:
        raise ExportError(f"unsupported export format: {fmt}")
    written: list[Path] = []
    used: set[str] = set()
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
        for sup in result.aggregation:
            slug = slugify(sup.name) or "supplier"
            base, n = slug, 1
            while slug in used:
                n += 1
                slug = f"{base}-{n}"
            used.add(slug)
            path = out_dir / f"DebitNote_{slug}.{fmt}"
            _write(note_frame(build_debit_note(sup), currency), path, fmt)
            logger.debug("wrote %s", path)
            written.append(path)
        index_path = out_dir / f"suppliers.{fmt}"
        _write(supplier_frame(result, currency), index_path, fmt)
        written.append(index_path)
    except OSError as e:
        raise ExportError(f"cannot write export files to {out_dir}: {e}") from e
    return written
