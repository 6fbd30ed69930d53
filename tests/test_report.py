from datetime import date
from decimal import Decimal

import pytest

from expense_core.exceptions import EmptyResultError, InvalidRangeError
from expense_core.models import UserProfile
from expense_core.report import build_report, report_filename, write_report

EXPECTED_REPORT = """EXPENSE REPORT
Generated on: June 1, 2024
Period: May 14, 2024 to May 15, 2024

USER INFORMATION
Name: John Doe
Email: john.doe@company.com
Department: Sales
Employee ID: EMP-12345

EXPENSE DETAILS
Date,Day,Title,Category,Activity,Amount,Remarks,Has Receipt
2024-05-15,Wed,"Lunch Meeting","food","client",3500.5,"Meeting with potential client",Yes
2024-05-14,Tue,"Conference Hotel","stay","meeting",12000,"Annual industry conference",Yes
2024-05-14,Tue,"Taxi from Airport","transport","field",850.2,"Transport to hotel",No

Total,,,,,"₹16350.70",\
"""


def test_report_matches_expected_layout(store):
    report = build_report(
        date(2024, 5, 14), date(2024, 5, 15), store.all(), store.profile, generated_on=date(2024, 6, 1)
    )

    assert report.content == EXPECTED_REPORT
    assert report.expense_count == 3
    assert report.total == Decimal("16350.70")
    assert report.filename == "expense_report_20240514_to_20240515.csv"


def test_report_rows_are_newest_first(store):
    report = store.report(date(2024, 5, 1), date(2024, 5, 31))
    rows = report.content.split("EXPENSE DETAILS\n")[1].splitlines()[1:7]
    assert [row[:10] for row in rows] == [
        "2024-05-16",
        "2024-05-15",
        "2024-05-14",
        "2024-05-14",
        "2024-05-13",
        "2024-05-01",
    ]
    assert report.content.endswith('Total,,,,,"₹24801.69",')


def test_other_category_carries_custom_tag(store):
    report = store.report(date(2024, 5, 1), date(2024, 5, 1), generated_on=date(2024, 6, 1))
    assert (
        '2024-05-01,Wed,"Software Subscription","other (Adobe CC)","office",2500,'
        '"Annual subscription renewal",Yes'
    ) in report.content


def test_missing_optional_fields_render_empty(make_expense):
    profile = UserProfile(name="A", email="a@b.co", department="D", employee_id="E1")
    report = build_report(
        date(2024, 5, 1), date(2024, 5, 1), [make_expense(activity=None, remarks=None)], profile
    )
    assert '2024-05-01,Wed,"Expense","food","",10,"",No' in report.content


def test_embedded_quotes_are_doubled(make_expense):
    profile = UserProfile(name="A", email="a@b.co", department="D", employee_id="E1")
    expense = make_expense(title='The "big" dinner', remarks='said "thanks"')
    report = build_report(date(2024, 5, 1), date(2024, 5, 1), [expense], profile)
    assert '"The ""big"" dinner"' in report.content
    assert '"said ""thanks"""' in report.content


def test_start_after_end_is_rejected(store):
    with pytest.raises(InvalidRangeError):
        store.report(date(2024, 5, 16), date(2024, 5, 14))


def test_range_without_expenses_is_rejected(store):
    with pytest.raises(EmptyResultError):
        store.report(date(2023, 1, 1), date(2023, 12, 31))


def test_filename_pattern():
    assert report_filename(date(2024, 1, 2), date(2024, 12, 31)) == "expense_report_20240102_to_20241231.csv"


def test_write_report_creates_utf8_file(store, tmp_path):
    report = store.report(date(2024, 5, 14), date(2024, 5, 15))
    path = write_report(report, tmp_path / "reports")

    assert path == tmp_path / "reports" / "expense_report_20240514_to_20240515.csv"
    assert path.read_text(encoding="utf-8") == report.content
