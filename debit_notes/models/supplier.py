from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from .normalized_row import NormalizedRow

"""Supplier aggregate models.

Supplier buckets are keyed by trimmed supplier name. AggregationResult keeps an
explicit first-seen order list; traversal of "all suppliers" goes through
``order`` rather than dict iteration.
"""

__all__ = [
    "Supplier",
    "AggregationResult",
]


@dataclass
class Supplier:
    """Debit-bearing rows of one supplier plus their running total."""
    name: str
    state: str = ""
    items: list[NormalizedRow] = field(default_factory=list)
    total_debit: float = 0.0

    def add(self, row: NormalizedRow) -> None:
        if not self.state and row.state:
            self.state = row.state
        self.items.append(row)
        self.total_debit += row.debit_amount or 0.0


@dataclass
class AggregationResult:
    suppliers: dict[str, Supplier] = field(default_factory=dict)
    order: list[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.order)

    def __iter__(self) -> Iterator[Supplier]:
        for name in self.order:
            yield self.suppliers[name]

    def __contains__(self, name: object) -> bool:
        return name in self.suppliers

    def get(self, name: str) -> Supplier | None:
        return self.suppliers.get(name)

    @property
    def total_debit(self) -> float:
        return sum(s.total_debit for s in self)

    @property
    def item_count(self) -> int:
        return sum(len(s.items) for s in self)
