from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ..config.loader import AppConfig
from ..excel.reader import EmptyInputError, TableReadError, read_rows
from ..mapping.header_map import build_header_map
from ..models.processing_result import ProcessingResult
from .aggregator import aggregate
from .debit import DEBIT_EPSILON, apply_debits, has_explicit_debit
from .row_normalizer import normalize_rows

"""Pipeline orchestration for one input table.

raw rows -> header map (row 0 keys) -> normalized rows -> debits -> supplier
aggregate. Every call builds its own state; nothing is shared between runs.
"""

__all__ = [
    "EMPTY_INPUT_MESSAGE",
    "ProcessingError",
    "process_rows",
    "process_file",
]

logger = logging.getLogger(__name__)

EMPTY_INPUT_MESSAGE = "File is empty or unrecognized."


class ProcessingError(Exception):
    """Unrecoverable input: nothing was processed.

    ``error_type`` is the UPPER_SNAKE classification used in the error log.
    """
    def __init__(self, message: str, error_type: str = "PROCESSING_ERROR") -> None:
        super().__init__(message)
        self.error_type = error_type


def process_rows(
    raw_rows: Sequence[Mapping[str, Any]],
    config: AppConfig | None = None,
    source: str | None = None,
) -> ProcessingResult:
    """Run the full pipeline over already decoded rows.

    Raises:
        ProcessingError: when ``raw_rows`` is empty
    """
    cfg = config or AppConfig()
    start_time = datetime.now(UTC)
    if not raw_rows:
        raise ProcessingError(EMPTY_INPUT_MESSAGE, "EMPTY_INPUT")

    header_map = build_header_map(list(raw_rows[0].keys()), cfg.field_candidates)
    logger.debug("header map: %s", header_map.as_dict())

    rows = apply_debits(normalize_rows(raw_rows, header_map))

    explicit = 0
    computed = 0
    for row in rows:
        if has_explicit_debit(row):
            explicit += 1
        elif (row.debit_amount or 0) > DEBIT_EPSILON:
            computed += 1

    aggregation = aggregate(rows, cfg.unknown_supplier)

    end_time = datetime.now(UTC)
    return ProcessingResult(
        source=source,
        header_map=header_map,
        rows=rows,
        aggregation=aggregation,
        explicit_debit_rows=explicit,
        computed_debit_rows=computed,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
    )


def process_file(path: Path, config: AppConfig | None = None) -> ProcessingResult:
    """Decode ``path`` and run the pipeline.

    Raises:
        ProcessingError: empty or undecodable file (no partial processing)
    """
    cfg = config or AppConfig()
    logger.info(f"Reading file: {path.name}...")
    try:
        raw_rows = read_rows(path, na_strings=cfg.na_strings)
    except EmptyInputError as e:
        logger.debug("empty input: %s", e)
        raise ProcessingError(EMPTY_INPUT_MESSAGE, "EMPTY_INPUT") from e
    except TableReadError as e:
        raise ProcessingError(f"Failed to read or parse the file: {e}", "READ_ERROR") from e
    return process_rows(raw_rows, cfg, source=path.name)
