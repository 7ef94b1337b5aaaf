from __future__ import annotations

from dataclasses import dataclass

from ..models.normalized_row import NormalizedRow
from ..models.supplier import Supplier
from .currency import DEFAULT_CURRENCY, CurrencySettings, format_currency
from .numbers import parse_number

"""Debit note document model.

Turns one supplier aggregate into the figures a debit note shows: line items,
planned / actual / debit totals, the invoice month and the stated reasons.
Rendering to HTML/PDF is left to the caller.
"""

__all__ = [
    "NO_REASON",
    "DebitNote",
    "NoteLine",
    "build_debit_note",
]

NO_REASON = "Not specified"


@dataclass(frozen=True)
class NoteLine:
    item: str
    invoice_no: str
    planned_units: str
    planned_amount: float
    invoiced_units: str
    invoiced_amount: float
    received_units: str
    actual_payable: float
    debit_amount: float

    @classmethod
    def from_row(cls, row: NormalizedRow) -> NoteLine:
        return cls(
            item=row.item,
            invoice_no=row.invoice_no,
            planned_units=_units(row.planned_units),
            planned_amount=float(parse_number(row.planned_amount)),
            invoiced_units=_units(row.invoiced_units),
            invoiced_amount=float(parse_number(row.inv_amount)),
            received_units=_units(row.received_units),
            actual_payable=float(parse_number(row.actual_payable)),
            debit_amount=float(parse_number(row.debit_amount)),
        )


def _units(value: object) -> str:
    # 0 / 空は空欄表示
    if not value:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True)
class DebitNote:
    supplier: str
    state: str
    month: str
    lines: tuple[NoteLine, ...]
    total_planned: float
    total_actual: float
    total_debit: float
    reasons: tuple[str, ...]

    @property
    def reasons_text(self) -> str:
        return "; ".join(self.reasons) if self.reasons else NO_REASON

    def salutation(self) -> str:
        return f"Dear {self.supplier},"

    def body(self, currency: CurrencySettings = DEFAULT_CURRENCY) -> str:
        debit = format_currency(self.total_debit, currency)
        return (
            f"This is to notify you that a Debit Note of {debit} is being issued to your "
            f"account in relation to supplies listed below. The total planned amount across "
            f"these deliveries was {format_currency(self.total_planned, currency)}, while the "
            f"actual payable amount recorded is {format_currency(self.total_actual, currency)}. "
            f"The resulting shortfall (debit) is {debit}."
        )


def build_debit_note(supplier: Supplier) -> DebitNote:
    """Build the debit note figures for one supplier.

    Totals are recomputed from the items: total_debit equals the supplier's
    running total, planned/actual are parsed with parse_number.
    """
    items = supplier.items
    lines = tuple(NoteLine.from_row(r) for r in items)
    reasons = tuple(dict.fromkeys(r.remarks for r in items if r.remarks))
    month = next((r.month for r in items if r.month), "")
    return DebitNote(
        supplier=supplier.name,
        state=supplier.state,
        month=month,
        lines=lines,
        total_planned=sum(line.planned_amount for line in lines),
        total_actual=sum(line.actual_payable for line in lines),
        total_debit=sum(line.debit_amount for line in lines),
        reasons=reasons,
    )
