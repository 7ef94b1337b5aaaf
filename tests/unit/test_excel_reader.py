from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from debit_notes.excel.reader import (
    EmptyInputError,
    TableReadError,
    read_rows,
    rows_from_frame,
)
from tests.sample_data import write_table


def test_read_csv_rows(sample_csv: Path):
    rows = read_rows(sample_csv)
    assert len(rows) == 4
    assert rows[0]["Supplier Name"] == "Acme Foods"
    assert rows[0]["Planned Amount (VATed)"] == "₦10,000.00"
    assert rows[1]["Debit Note"] == ""
    assert rows[3]["Supplier Name"] == ""
    assert list(rows[0].keys())[0] == "Month"


def test_read_xlsx_rows(sample_xlsx: Path):
    rows = read_rows(sample_xlsx)
    assert len(rows) == 4
    assert rows[0]["Supplier Name"] == "Acme Foods"
    assert rows[1]["Planned Amount (VATed)"] == 5000
    assert rows[1]["Debit Note"] == ""


def test_blank_rows_skipped(temp_workdir: Path):
    path = write_table(
        temp_workdir / "data" / "gaps.xlsx",
        ["Supplier", "Debit"],
        [["A", 1], [None, None], ["B", 2]],
    )
    rows = read_rows(path)
    assert [r["Supplier"] for r in rows] == ["A", "B"]


def test_na_like_text_is_kept(temp_workdir: Path):
    path = temp_workdir / "data" / "na.csv"
    path.write_text("Supplier,Debit Note,Remarks\nNA,100,None\nN/A,5,null\nB,,\n", encoding="utf-8")
    rows = read_rows(path)
    assert rows[0]["Supplier"] == "NA"
    assert rows[0]["Remarks"] == "None"
    assert rows[1]["Supplier"] == "N/A"
    assert rows[1]["Remarks"] == "null"
    assert rows[2]["Debit Note"] == ""


def test_na_like_text_is_kept_xlsx(temp_workdir: Path):
    path = write_table(
        temp_workdir / "data" / "na.xlsx",
        ["Supplier", "Debit Note", "Remarks"],
        [["NA", 100, "None"], ["B", None, "nan"]],
    )
    rows = read_rows(path)
    assert rows[0]["Supplier"] == "NA"
    assert rows[0]["Remarks"] == "None"
    assert rows[1]["Debit Note"] == ""
    assert rows[1]["Remarks"] == "nan"


def test_na_strings_opt_in(temp_workdir: Path):
    path = temp_workdir / "data" / "dash.csv"
    path.write_text("Supplier,State\nA,-\nB,NA\n", encoding="utf-8")
    rows = read_rows(path, na_strings=["-"])
    assert rows[0]["State"] == ""
    assert rows[1]["State"] == "NA"


def test_empty_csv_raises(temp_workdir: Path):
    path = temp_workdir / "data" / "empty.csv"
    path.write_text("", encoding="utf-8")
    with pytest.raises(EmptyInputError):
        read_rows(path)


def test_header_only_raises(temp_workdir: Path):
    path = temp_workdir / "data" / "header.csv"
    path.write_text("Supplier,Debit Note\n", encoding="utf-8")
    with pytest.raises(EmptyInputError):
        read_rows(path)


def test_undecodable_workbook_raises(temp_workdir: Path):
    path = temp_workdir / "data" / "broken.xlsx"
    path.write_bytes(b"this is not a workbook")
    with pytest.raises(TableReadError):
        read_rows(path)


def test_missing_file_raises(temp_workdir: Path):
    with pytest.raises(TableReadError):
        read_rows(temp_workdir / "data" / "nope.csv")


def test_rows_from_frame_blank_and_duplicate_headers():
    df = pd.DataFrame([
        ["Supplier", None, "Debit", "Debit"],
        ["A", "x", 1, 2],
    ])
    rows = rows_from_frame(df)
    assert rows == [{"Supplier": "A", "Debit": 1, "Debit_1": 2}]


def test_rows_from_frame_numeric_headers():
    df = pd.DataFrame([[2024.0, "Supplier"], [5, "A"]])
    assert rows_from_frame(df) == [{"2024": 5, "Supplier": "A"}]


def test_rows_from_frame_empty():
    assert rows_from_frame(pd.DataFrame()) == []
