from __future__ import annotations

from pathlib import Path

import pytest

from debit_notes.config.loader import AppConfig
from debit_notes.mapping.header_map import merge_candidates
from debit_notes.services.orchestrator import (
    EMPTY_INPUT_MESSAGE,
    ProcessingError,
    process_file,
    process_rows,
)
from tests.sample_data import HEADERS, SAMPLE_ROWS


def _raw_rows():
    return [dict(zip(HEADERS, r)) for r in SAMPLE_ROWS]


def test_process_rows_end_to_end():
    result = process_rows(_raw_rows(), source="sheet")
    assert result.source == "sheet"
    assert result.debit_header == "Debit Note"
    assert [r.debit_amount for r in result.rows] == [120.0, 30.5, 0.0, 10.0]
    assert result.explicit_debit_rows == 2
    assert result.computed_debit_rows == 1
    assert result.aggregation.order == ["Acme Foods", "Unknown Supplier"]
    acme = result.aggregation.suppliers["Acme Foods"]
    assert len(acme.items) == 2
    assert acme.total_debit == pytest.approx(150.50)
    assert result.total_debit == pytest.approx(160.50)
    assert result.supplier_count == 2
    assert result.elapsed_seconds >= 0


def test_aggregation_completeness():
    result = process_rows(_raw_rows())
    qualifying = [r for r in result.rows if r.debit_amount > 0.01]
    assert result.total_debit == pytest.approx(sum(r.debit_amount for r in qualifying))
    listed = [id(i) for s in result.aggregation for i in s.items]
    assert sorted(listed) == sorted(id(r) for r in qualifying)


def test_header_map_uses_first_row_keys():
    rows = [{"Vendor": "A", "Debit": "5"}, {"Vendor": "B", "Debit": "6", "Supplier": "C"}]
    result = process_rows(rows)
    assert result.header_map["supplier"] is None
    assert result.aggregation.order == ["Unknown Supplier"]
    assert result.aggregation.suppliers["Unknown Supplier"].total_debit == 11


def test_missing_debit_column_reports_not_found():
    result = process_rows([{"Supplier": "A", "Planned Amount": 100, "Actual Payable": 40}])
    assert result.debit_header == "NOT FOUND"
    assert result.explicit_debit_rows == 0
    assert result.computed_debit_rows == 1
    assert result.aggregation.suppliers["A"].total_debit == 60


def test_config_candidates_and_unknown_label():
    cfg = AppConfig(
        unknown_supplier="No Name",
        field_candidates=merge_candidates({"supplier": ["vendor"]}),
    )
    result = process_rows([{"Vendor": "", "Debit": "5"}, {"Vendor": "V1", "Debit": "7"}], cfg)
    assert result.aggregation.order == ["No Name", "V1"]


def test_empty_rows_are_fatal():
    with pytest.raises(ProcessingError) as e:
        process_rows([])
    assert str(e.value) == EMPTY_INPUT_MESSAGE
    assert e.value.error_type == "EMPTY_INPUT"


def test_runs_are_independent():
    first = process_rows(_raw_rows())
    second = process_rows(_raw_rows()[:1])
    assert len(first.aggregation.suppliers["Acme Foods"].items) == 2
    assert len(second.aggregation.suppliers["Acme Foods"].items) == 1


def test_process_file_csv(sample_csv: Path):
    result = process_file(sample_csv)
    assert result.source == "debits.csv"
    assert [r.debit_amount for r in result.rows] == [120.0, 30.5, 0.0, 10.0]
    assert result.aggregation.order == ["Acme Foods", "Unknown Supplier"]


def test_process_file_xlsx(sample_xlsx: Path):
    result = process_file(sample_xlsx)
    assert result.total_debit == pytest.approx(160.50)


def test_process_file_empty(temp_workdir: Path):
    path = temp_workdir / "data" / "empty.csv"
    path.write_text("", encoding="utf-8")
    with pytest.raises(ProcessingError) as e:
        process_file(path)
    assert str(e.value) == EMPTY_INPUT_MESSAGE


def test_process_file_unreadable(temp_workdir: Path):
    path = temp_workdir / "data" / "broken.xlsx"
    path.write_bytes(b"garbage")
    with pytest.raises(ProcessingError) as e:
        process_file(path)
    assert e.value.error_type == "READ_ERROR"
    assert str(e.value).startswith("Failed to read or parse the file")
