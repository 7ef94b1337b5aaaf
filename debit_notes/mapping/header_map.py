from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .keys import normalize_key

"""Fuzzy header detection.

Maps each semantic field to the first raw header whose canonical token
*contains* one of the field's candidate substrings. Fields are resolved in
the fixed order of FIELD_CANDIDATES; within a field, headers are scanned in
their original order and the first header hitting any candidate wins. A
header may be claimed by several fields.

Matching is deliberately substring based, so an ambiguous header can land on
an earlier field (e.g. "Planned Units" satisfies unit_rate's "unit"
candidate when no rate column comes first). That ordering is kept as-is.
"""

__all__ = [
    "FIELD_CANDIDATES",
    "FIELDS",
    "HeaderMap",
    "build_header_map",
    "merge_candidates",
]

logger = logging.getLogger(__name__)

DEBIT_FIELD = "debit_note"
DEBIT_FALLBACK_TOKEN = "debit"

# (field, canonical candidate substrings) - order matters
FIELD_CANDIDATES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("month", ("month",)),
    ("state", ("state",)),
    ("supplier", ("supplier", "suppliername")),
    ("item", ("item", "description", "product")),
    ("unit_rate", ("unitrate", "finalplannedrate", "unit")),
    ("planned_units", ("plannedunits", "plannedunit")),
    ("planned_amount", ("plannedamount", "plannedamountvated", "planned")),
    ("invoiced_units", ("invoicedunits", "invoicedunit")),
    ("invoiced_unit_rate", ("invoicedunitrate", "invoicedrate")),
    ("inv_amount", ("invamount", "invamountvated", "invoicedamount", "invoiceamount")),
    ("invoice_no", ("invoiceno", "invno", "invnumber")),
    ("received_units", ("receivedunits", "receivedunit")),
    ("received_amount", ("receivedunitsamount", "receivedamount")),
    ("units_payable", ("unitspayable", "payableunits")),
    ("actual_payable", ("actualpayable", "actualpayableamount")),
    ("debit_note", ("debitnote", "debit")),
    ("remarks", ("remarks", "remark")),
)

FIELDS: tuple[str, ...] = tuple(name for name, _ in FIELD_CANDIDATES)


@dataclass(frozen=True)
class HeaderMap:
    """Field -> original header (None when the field was not found)."""
    columns: Mapping[str, str | None] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # 全フィールドを必ず保持 (未検出は None)
        full = {name: self.columns.get(name) for name in FIELDS}
        object.__setattr__(self, "columns", MappingProxyType(full))

    def __getitem__(self, name: str) -> str | None:
        return self.columns[name]

    def __iter__(self) -> Iterator[str]:
        return iter(FIELDS)

    def get(self, name: str) -> str | None:
        return self.columns.get(name)

    def found(self) -> dict[str, str]:
        return {k: v for k, v in self.columns.items() if v is not None}

    def missing(self) -> list[str]:
        return [k for k, v in self.columns.items() if v is None]

    def as_dict(self) -> dict[str, str | None]:
        return dict(self.columns)


def merge_candidates(
    overrides: Mapping[str, Iterable[str]] | None,
    base: Sequence[tuple[str, Sequence[str]]] = FIELD_CANDIDATES,
) -> tuple[tuple[str, tuple[str, ...]], ...]:
    """Replace the candidate list of individual fields, keeping field order.

    Override candidates are canonicalized with normalize_key so config files
    may spell them naturally ("Supplier Name").
    """
    if not overrides:
        return tuple((name, tuple(cands)) for name, cands in base)
    unknown = set(overrides) - {name for name, _ in base}
    if unknown:
        raise ValueError(f"unknown header fields: {sorted(unknown)}")
    merged = []
    for name, cands in base:
        if name in overrides:
            tokens = tuple(t for t in (normalize_key(c) for c in overrides[name]) if t)
            merged.append((name, tokens))
        else:
            merged.append((name, tuple(cands)))
    return tuple(merged)


def _find_header(tokens: Sequence[tuple[str, str]], candidates: Sequence[str]) -> str | None:
    for header, token in tokens:
        for cand in candidates:
            if cand in token:
                return header
    return None


def build_header_map(
    headers: Iterable[Any],
    candidates: Sequence[tuple[str, Sequence[str]]] = FIELD_CANDIDATES,
) -> HeaderMap:
    """Build the field -> header lookup from the first row's header labels.

    Deterministic for a given header order. Never raises; unmatched fields are
    recorded as None.
    """
    raw_headers = [h for h in headers if h is not None]
    tokens = [(h, normalize_key(h)) for h in raw_headers]

    columns: dict[str, str | None] = {}
    for name, cands in candidates:
        columns[name] = _find_header(tokens, cands)

    if columns.get(DEBIT_FIELD) is None:
        # last-resort: any header mentioning "debit"
        columns[DEBIT_FIELD] = _find_header(tokens, (DEBIT_FALLBACK_TOKEN,))
        if columns[DEBIT_FIELD] is not None:
            logger.debug("debit column recovered via fallback: %s", columns[DEBIT_FIELD])

    header_map = HeaderMap(columns)
    logger.debug("Detected header map: %s", header_map.found())
    missing = header_map.missing()
    if DEBIT_FIELD in missing:
        logger.warning("debit note header not found (raw headers=%s)", raw_headers)
    if missing:
        logger.info("headers not found: %s", missing)
    return header_map
