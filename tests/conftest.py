# Shared pytest fixtures
from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

from debit_notes.logging.init import reset_logging
from tests.sample_data import HEADERS, SAMPLE_ROWS, write_table


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def sample_config_yaml() -> str:
    return """currency:
  code: NGN
  locale: en_NG
  symbol: "₦"
unknown_supplier: Unknown Supplier
na_strings: ["-"]
field_candidates:
  supplier: [supplier, vendor]
export:
  format: csv
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "debit_notes.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def sample_csv(temp_workdir: Path) -> Path:
    return write_table(temp_workdir / "data" / "debits.csv", HEADERS, SAMPLE_ROWS)


@pytest.fixture()
def sample_xlsx(temp_workdir: Path) -> Path:
    return write_table(temp_workdir / "data" / "debits.xlsx", HEADERS, SAMPLE_ROWS)
