from __future__ import annotations

from collections.abc import Sequence

from ..models.processing_result import ProcessingResult
from .currency import DEFAULT_CURRENCY, CurrencySettings, format_currency

"""Operator-facing status and SUMMARY line rendering."""

__all__ = [
    "render_status_line",
    "render_supplier_line",
    "render_summary_line",
]


def _format_number(value: float) -> str:
    # 整数値は小数点なしで出力
    if value == int(value):
        return str(int(value))
    if 0 < abs(value) < 0.01:
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(round(value, 2))


def render_status_line(result: ProcessingResult) -> str:
    """Status message shown after a file has been processed, e.g.

    Loaded 3 rows. Header (Debit): Debit Note. Rows with debit: 1. Found 2 supplier(s) requiring debit.
    """
    return (
        f"Loaded {len(result.rows)} rows. "
        f"Header (Debit): {result.debit_header}. "
        f"Rows with debit: {result.explicit_debit_rows}. "
        f"Found {result.supplier_count} supplier(s) requiring debit."
    )


def render_supplier_line(result: ProcessingResult, name: str,
                         currency: CurrencySettings = DEFAULT_CURRENCY) -> str:
    sup = result.aggregation.suppliers[name]
    return f"{sup.name}: {len(sup.items)} item(s), total debit {format_currency(sup.total_debit, currency)}"


def render_summary_line(results: Sequence[ProcessingResult], failed_files: int = 0) -> str:
    """Render the final SUMMARY line over every processed file.

    Format:
    SUMMARY files={ok}/{total} rows={rows} explicit={e} computed={c}
    suppliers={s} total_debit={t} elapsed_sec={x}
    """
    total_files = len(results) + failed_files
    rows = sum(len(r.rows) for r in results)
    explicit = sum(r.explicit_debit_rows for r in results)
    computed = sum(r.computed_debit_rows for r in results)
    suppliers = sum(r.supplier_count for r in results)
    total_debit = round(sum(r.total_debit for r in results), 2)
    elapsed = sum(r.elapsed_seconds for r in results)
    return (
        f"SUMMARY files={len(results)}/{total_files} "
        f"rows={rows} "
        f"explicit={explicit} "
        f"computed={computed} "
        f"suppliers={suppliers} "
        f"total_debit={total_debit:.2f} "
        f"elapsed_sec={_format_number(elapsed)}"
    )
