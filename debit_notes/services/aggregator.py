from __future__ import annotations

from collections.abc import Iterable

from ..models.normalized_row import NormalizedRow
from ..models.supplier import AggregationResult, Supplier
from .debit import DEBIT_EPSILON

"""Group debit-bearing rows by supplier.

Rows at or below DEBIT_EPSILON are computed upstream but never reach a
supplier bucket. A fresh AggregationResult is built per call.
"""

__all__ = [
    "UNKNOWN_SUPPLIER",
    "aggregate",
]

UNKNOWN_SUPPLIER = "Unknown Supplier"


def aggregate(
    rows: Iterable[NormalizedRow], unknown_supplier: str = UNKNOWN_SUPPLIER
) -> AggregationResult:
    result = AggregationResult()
    for row in rows:
        debit = row.debit_amount
        if debit is None or debit <= DEBIT_EPSILON:
            continue
        name = row.supplier.strip() or unknown_supplier
        supplier = result.suppliers.get(name)
        if supplier is None:
            supplier = Supplier(name=name, state=row.state)
            result.suppliers[name] = supplier
            result.order.append(name)
        supplier.add(row)
    return result
