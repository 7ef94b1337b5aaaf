from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from ..mapping.header_map import HeaderMap
from ..models.normalized_row import AMOUNT_FIELDS, TEXT_FIELDS, NormalizedRow

"""Project raw rows through the HeaderMap into NormalizedRow records.

Unmapped fields and absent cells fall back to "" (text) or 0 (amount/unit).
Amount cells are passed through as supplied; numeric coercion is deferred to
parse_number. Pure projection, never raises.
"""

__all__ = [
    "normalize_row",
    "normalize_rows",
]


def _cell(raw: Mapping[str, Any], header_map: HeaderMap, field: str) -> Any:
    header = header_map.get(field)
    if header is None:
        return ""
    value = raw.get(header)
    return "" if value is None else value


def normalize_row(raw: Mapping[str, Any], header_map: HeaderMap) -> NormalizedRow:
    values: dict[str, Any] = {}
    for name in TEXT_FIELDS:
        values[name] = str(_cell(raw, header_map, name) or "").strip()
    for name in AMOUNT_FIELDS:
        values[name] = _cell(raw, header_map, name) or 0

    raw_debit = _cell(raw, header_map, "debit_note")
    return NormalizedRow(
        **values,
        debit_note=raw_debit or "",
        raw_debit_value=raw_debit,
    )


def normalize_rows(raws: Iterable[Mapping[str, Any]], header_map: HeaderMap) -> list[NormalizedRow]:
    return [normalize_row(raw, header_map) for raw in raws]
