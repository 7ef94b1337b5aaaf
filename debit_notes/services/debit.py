from __future__ import annotations

from collections.abc import Iterable

from ..models.normalized_row import NormalizedRow
from .numbers import parse_number, round2

"""Row-level debit derivation.

Policy, in order:
1. an explicit debit-note cell above DEBIT_EPSILON wins outright;
2. otherwise planned - actual payable, when planned > 0, actual >= 0 and the
   difference is above DEBIT_EPSILON;
3. otherwise 0.

The planned - actual fallback is kept exactly as the source sheets use it; it
does not distinguish over-invoicing from under-delivery.
"""

__all__ = [
    "DEBIT_EPSILON",
    "compute_debit",
    "has_explicit_debit",
    "apply_debits",
]

DEBIT_EPSILON = 0.01


def has_explicit_debit(row: NormalizedRow) -> bool:
    return parse_number(row.raw_debit_value) > DEBIT_EPSILON


def compute_debit(row: NormalizedRow) -> float:
    """Return the non-negative debit for a row, rounded to 2 decimals."""
    explicit = parse_number(row.raw_debit_value)
    if explicit > DEBIT_EPSILON:
        return round2(explicit)

    planned = parse_number(row.planned_amount)
    actual = parse_number(row.actual_payable)
    if planned > 0 and actual >= 0:
        diff = planned - actual
        if diff > DEBIT_EPSILON:
            return round2(diff)
    return 0.0


def apply_debits(rows: Iterable[NormalizedRow]) -> list[NormalizedRow]:
    """Attach debit_amount to every row, preserving order."""
    return [row.with_debit(compute_debit(row)) for row in rows]
