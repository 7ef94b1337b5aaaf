from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from ..models.error_record import ErrorRecord

"""Per-run log of input files that could not be processed.

Written once at the end of a run to ``logs/errors-YYYYMMDD-HHMMSS.log``
(UTC, run start time) as JSON Lines. Nothing is written for a clean run.
"""

__all__ = [
    "ErrorLogBuffer",
]

LOGS_DIR = Path("./logs")


class ErrorLogBuffer:
    def __init__(self, logs_dir: Path = LOGS_DIR, started_at: datetime | None = None) -> None:
        stamp = (started_at or datetime.now(UTC)).strftime("%Y%m%d-%H%M%S")
        self.path = logs_dir / f"errors-{stamp}.log"
        self.records: list[ErrorRecord] = []

    def append(self, record: ErrorRecord) -> None:
        self.records.append(record)

    def flush(self) -> Path | None:
        """Write buffered records; returns the log path, or None when empty."""
        if not self.records:
            return None
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as f:
            f.writelines(r.to_json_line() + "\n" for r in self.records)
        self.records.clear()
        return self.path
