from __future__ import annotations

from pathlib import Path

from debit_notes.cli import main as cli_main

"""End-to-end CLI run over the sample sheet (CSV and XLSX)."""


def test_run_single_csv(sample_csv: Path, capsys):
    code = cli_main([str(sample_csv)])
    out = capsys.readouterr().out
    assert code == 0
    assert "INFO Reading file: debits.csv..." in out
    assert (
        "INFO Loaded 4 rows. Header (Debit): Debit Note. Rows with debit: 2. "
        "Found 2 supplier(s) requiring debit."
    ) in out
    assert "INFO Acme Foods: 2 item(s), total debit" in out
    assert "INFO Unknown Supplier: 1 item(s), total debit" in out
    assert "SUMMARY files=1/1 rows=4 explicit=2 computed=1 suppliers=2 total_debit=160.50" in out
    assert not (sample_csv.parent.parent / "logs").exists()


def test_run_csv_and_xlsx(sample_csv: Path, sample_xlsx: Path, capsys):
    code = cli_main([str(sample_csv), str(sample_xlsx)])
    out = capsys.readouterr().out
    assert code == 0
    assert "SUMMARY files=2/2 rows=8 explicit=4 computed=2 suppliers=4 total_debit=321.00" in out


def test_run_with_config(write_config: Path, temp_workdir: Path, capsys):
    path = temp_workdir / "data" / "vendors.csv"
    path.write_text("Vendor,Debit\n,5\nNorth Ltd,7.5\n", encoding="utf-8")
    code = cli_main([str(path)])
    out = capsys.readouterr().out
    assert code == 0
    assert "INFO North Ltd: 1 item(s), total debit" in out
    assert "SUMMARY files=1/1 rows=2 explicit=2 computed=0 suppliers=2 total_debit=12.50" in out


def test_env_file_overrides_symbol(sample_csv: Path, temp_workdir: Path, monkeypatch, capsys):
    # setenv first so monkeypatch restores the variable after load_dotenv overrides it
    monkeypatch.setenv("DEBIT_NOTES_CURRENCY_SYMBOL", "N")
    monkeypatch.setenv("DEBIT_NOTES_LOCALE", "xx_NOPE")
    (temp_workdir / ".env").write_text("DEBIT_NOTES_CURRENCY_SYMBOL=NGN\n", encoding="utf-8")
    code = cli_main([str(sample_csv)])
    out = capsys.readouterr().out
    assert code == 0
    assert "INFO Acme Foods: 2 item(s), total debit NGN150.50" in out
