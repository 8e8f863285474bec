# tests/test_cli.py
import csv
import json

import pytest
from click.testing import CliRunner

from mortgage_calc.main import cli

ONE_YEAR = ["-p", "120k", "-r", "12", "-t", "12"]


@pytest.fixture
def runner():
    return CliRunner()


def test_schedule_prints_summary_and_table(runner):
    result = runner.invoke(cli, ["schedule", *ONE_YEAR, "--type", "differentiated"])
    assert result.exit_code == 0, result.output
    assert "Differentiated Payment" in result.output
    assert "Total interest     : 7800.00" in result.output
    assert "1\t11200.00\t1200.00\t10000.00\t110000.00" in result.output
    assert "12\t10100.00\t100.00\t10000.00\t0.00" in result.output


def test_schedule_defaults_to_annuity(runner):
    result = runner.invoke(cli, ["schedule", *ONE_YEAR])
    assert result.exit_code == 0, result.output
    assert "Annuity Payment" in result.output
    assert "1\t10661.85\t1200.00\t9461.85\t110538.15" in result.output


def test_schedule_type_from_environment(runner, monkeypatch):
    monkeypatch.setenv("MORTGAGE_SCHEDULE", "differentiated")
    result = runner.invoke(cli, ["schedule", *ONE_YEAR])
    assert result.exit_code == 0, result.output
    assert "Differentiated Payment" in result.output


def test_long_schedule_is_truncated(runner):
    result = runner.invoke(cli, ["schedule", "-p", "300000", "-r", "6", "-t", "360"])
    assert result.exit_code == 0, result.output
    assert "Schedule has 360 rows; showing first 120 rows." in result.output
    assert "\n121\t" not in result.output


def test_schedule_json_export(runner, tmp_path):
    out = tmp_path / "schedule.json"
    result = runner.invoke(cli, ["schedule", *ONE_YEAR, "--type", "differentiated", "--output", str(out)])
    assert result.exit_code == 0, result.output
    data = json.loads(out.read_text(encoding="utf-8"))
    assert len(data["schedule"]) == 12
    assert data["schedule"][0] == {
        "month": 1,
        "payment": 11200.0,
        "interest": 1200.0,
        "principal": 10000.0,
        "balance": 110000.0,
    }
    assert data["summary"]["effective_rate"] == 13


def test_schedule_csv_export(runner, tmp_path):
    out = tmp_path / "schedule.csv"
    result = runner.invoke(cli, ["schedule", *ONE_YEAR, "--output", str(out)])
    assert result.exit_code == 0, result.output
    with out.open(newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert rows[0] == ["Month", "Payment", "Interest", "Principal", "Balance"]
    assert rows[1] == ["1", "10661.85", "1200.00", "9461.85", "110538.15"]
    assert len(rows) == 13


def test_unsupported_export_format(runner, tmp_path):
    result = runner.invoke(cli, ["schedule", *ONE_YEAR, "--output", str(tmp_path / "out.xlsx")])
    assert result.exit_code == 2
    assert "Unsupported output format" in result.output


def test_summary_json_export(runner, tmp_path):
    out = tmp_path / "summary.json"
    result = runner.invoke(cli, ["summary", *ONE_YEAR, "--type", "differentiated", "--output", str(out)])
    assert result.exit_code == 0, result.output
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["summary"]["total_cost"] == 127800.0


def test_compare_shows_both_policies(runner):
    result = runner.invoke(cli, ["compare", *ONE_YEAR])
    assert result.exit_code == 0, result.output
    assert "Annuity Payment" in result.output
    assert "Differentiated" in result.output
    assert "total_interest" in result.output


@pytest.mark.parametrize(
    "args,message",
    [
        (["-p", "0", "-r", "12", "-t", "12"], "Loan amount must be positive"),
        (["-p", "120000", "-r", "12", "-t", "0"], "Loan term must be positive"),
        (["-p", "120000", "--rate=-1", "-t", "12"], "Interest rate must not be negative"),
        (["-p", "lots", "-r", "12", "-t", "12"], "Invalid numeric value"),
    ],
)
def test_invalid_input_is_reported(runner, args, message):
    result = runner.invoke(cli, ["schedule", *args])
    assert result.exit_code == 2
    assert message in result.output


def test_bad_environment_setting_is_reported(runner, monkeypatch):
    monkeypatch.setenv("MORTGAGE_LOAN_TERM", "forever")
    result = runner.invoke(cli, ["summary"])
    assert result.exit_code == 1
    assert "MORTGAGE_LOAN_TERM" in result.output
