import json

import pytest

from expense_tracker.cli import main


@pytest.fixture
def run(tmp_path):
    data_dir = tmp_path / "data"

    def invoke(*argv):
        return main(["--data-dir", str(data_dir), *argv])

    invoke.data_dir = data_dir
    return invoke


def test_list_shows_seeded_expenses(run, capsys):
    assert run("expense", "list") == 0
    out = capsys.readouterr().out
    assert "Found 6 expenses (total ₹24801.69):" in out
    assert out.index("Client Coffee") < out.index("Lunch Meeting")


def test_list_filters_by_category_and_search(run, capsys):
    assert run("expense", "list", "--category", "food", "--search", "lunch") == 0
    out = capsys.readouterr().out
    assert "Found 1 expenses" in out
    assert "Lunch Meeting" in out


def test_list_reports_no_matches(run, capsys):
    assert run("expense", "list", "--search", "zzz") == 0
    assert "No expenses found." in capsys.readouterr().out


def test_add_and_show(run, capsys):
    assert run("expense", "add", "Team Lunch", "1200", "2024-05-20", "food", "--activity", "client") == 0
    assert "[7]" in capsys.readouterr().out

    assert run("expense", "show", "7") == 0
    out = capsys.readouterr().out
    assert "Team Lunch" in out
    assert "Activity: Client" in out


def test_add_without_activity_fails_validation(run, capsys):
    assert run("expense", "add", "Team Lunch", "1200", "2024-05-20", "food") == 1
    assert "Validation error: activity is required" in capsys.readouterr().err


def test_edit_updates_fields(run, capsys):
    assert run("expense", "edit", "1", "--title", "Client Dinner", "--no-receipt") == 0
    out = capsys.readouterr().out
    assert "Client Dinner" in out
    assert "Receipt: -" in out

    stored = json.loads((run.data_dir / "expenses_data.json").read_text(encoding="utf-8"))
    assert stored[0]["hasReceipt"] is False


def test_delete_unknown_expense(run, capsys):
    assert run("expense", "delete", "99") == 1
    assert "Expense 99 not found" in capsys.readouterr().err


def test_profile_set_and_show(run, capsys):
    assert run("profile", "set", "--name", "Jane Roe", "--department", "Finance") == 0
    out = capsys.readouterr().out
    assert "Name: Jane Roe" in out
    assert "Employee ID: EMP-12345" in out

    assert run("profile", "show") == 0
    assert "Department: Finance" in capsys.readouterr().out


def test_report_writes_csv(run, capsys, tmp_path):
    out_dir = tmp_path / "reports"
    assert run("report", "2024-05-14", "2024-05-15", "--output-dir", str(out_dir)) == 0

    assert "Report with 3 expenses" in capsys.readouterr().out
    content = (out_dir / "expense_report_20240514_to_20240515.csv").read_text(encoding="utf-8")
    assert content.endswith('Total,,,,,"₹16350.70",')


def test_report_errors(run, capsys, tmp_path):
    assert run("report", "2024-05-16", "2024-05-14", "--output-dir", str(tmp_path)) == 1
    assert "Start date cannot be after end date." in capsys.readouterr().err

    assert run("report", "2020-01-01", "2020-01-31", "--output-dir", str(tmp_path)) == 1
    assert "No expenses found" in capsys.readouterr().err
    assert not list(tmp_path.glob("*.csv"))
