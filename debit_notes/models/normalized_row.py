from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

"""NormalizedRow model.

A fixed-shape projection of one source row through the HeaderMap. Every field
is present: text fields are trimmed strings, amount/unit fields keep the raw
cell value as supplied (numeric coercion happens later in parse_number).
"""

__all__ = [
    "NormalizedRow",
    "TEXT_FIELDS",
    "AMOUNT_FIELDS",
]

TEXT_FIELDS: tuple[str, ...] = (
    "month",
    "state",
    "supplier",
    "item",
    "unit_rate",
    "invoice_no",
    "remarks",
)

AMOUNT_FIELDS: tuple[str, ...] = (
    "planned_units",
    "planned_amount",
    "invoiced_units",
    "invoiced_unit_rate",
    "inv_amount",
    "received_units",
    "received_amount",
    "units_payable",
    "actual_payable",
)


@dataclass(frozen=True)
class NormalizedRow:
    """One source row after header mapping.

    debit_amount stays None until the debit calculator attaches it via
    with_debit(); it is attached once and never changed afterwards.
    """
    month: str = ""
    state: str = ""
    supplier: str = ""
    item: str = ""
    unit_rate: str = ""
    planned_units: Any = 0
    planned_amount: Any = 0
    invoiced_units: Any = 0
    invoiced_unit_rate: Any = 0
    inv_amount: Any = 0
    invoice_no: str = ""
    received_units: Any = 0
    received_amount: Any = 0
    units_payable: Any = 0
    actual_payable: Any = 0
    debit_note: Any = ""  # raw debit cell, "" when empty
    remarks: str = ""
    raw_debit_value: Any = ""  # untouched debit cell for explicit-value detection
    debit_amount: float | None = None

    def with_debit(self, amount: float) -> NormalizedRow:
        if self.debit_amount is not None:
            raise ValueError("debit amount already attached")
        return replace(self, debit_amount=amount)
