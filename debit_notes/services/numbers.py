from __future__ import annotations

import math
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

"""Tolerant numeric parsing for spreadsheet cells.

Cells may hold currency symbols, thousands separators or stray whitespace
("₦1,234.50", " 1 200 "). Anything that cannot be recovered becomes 0; parse
errors never propagate.
"""

__all__ = [
    "parse_number",
    "round2",
]

_NON_NUMERIC = re.compile(r"[^0-9.\-]")
_DEGENERATE = {"", ".", "-."}
_CENT = Decimal("0.01")


def parse_number(value: Any) -> int | float:
    """Recover a finite number from a cell value, defaulting to 0.

    >>> parse_number("₦1,234.50")
    1234.5
    >>> parse_number("-.")
    0
    """
    if value is None or value == "":
        return 0
    if isinstance(value, Decimal):
        return float(value) if value.is_finite() else 0
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if isinstance(value, float) and not math.isfinite(value):
            return 0
        return value
    text = _NON_NUMERIC.sub("", str(value))
    if text in _DEGENERATE:
        return 0
    try:
        number = float(text)
    except ValueError:
        return 0
    return number if math.isfinite(number) else 0


def round2(value: float | int | Decimal) -> float:
    """Round half-up on the cent boundary (0.125 -> 0.13)."""
    try:
        quantized = Decimal(str(value)).quantize(_CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return 0.0
    return float(quantized)
