from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..mapping.header_map import DEBIT_FIELD, HeaderMap
from .normalized_row import NormalizedRow
from .supplier import AggregationResult

"""Processing result model for one input table.

Carries everything the rendering/export side consumes: the detected header
map (for diagnostics), every normalized row with its debit attached, and the
supplier aggregate. Also records the explicit-vs-computed debit counts used
for the operator status line.
"""

__all__ = [
    "ProcessingResult",
    "NOT_FOUND",
]

NOT_FOUND = "NOT FOUND"


@dataclass(frozen=True)
class ProcessingResult:
    source: str | None  # ファイル名 (行シーケンス直接入力時は None)
    header_map: HeaderMap
    rows: list[NormalizedRow]
    aggregation: AggregationResult
    explicit_debit_rows: int  # debit cell > 0.01
    computed_debit_rows: int  # planned - actual fallback > 0.01
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float

    @property
    def debit_header(self) -> str:
        return self.header_map.get(DEBIT_FIELD) or NOT_FOUND

    @property
    def supplier_count(self) -> int:
        return len(self.aggregation)

    @property
    def total_debit(self) -> float:
        return self.aggregation.total_debit
