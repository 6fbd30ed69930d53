"""CSV expense report assembly."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Iterable, List, Optional

from .exceptions import EmptyResultError, InvalidRangeError, StorageError
from .formatting import day_of_week, format_currency, format_long_date, format_plain_amount
from .models import Expense, UserProfile, isoformat_date
from .query import in_date_range, sort_by_date_desc, total_amount

__all__ = ["COLUMN_HEADER", "ExpenseReport", "build_report", "report_filename", "write_report"]

COLUMN_HEADER = "Date,Day,Title,Category,Activity,Amount,Remarks,Has Receipt"


@dataclass(frozen=True)
class ExpenseReport:
    filename: str
    content: str
    expense_count: int
    total: Decimal


def report_filename(start: date, end: date) -> str:
    return f"expense_report_{start:%Y%m%d}_to_{end:%Y%m%d}.csv"


def _quote(value: Optional[str]) -> str:
    text = (value or "").replace('"', '""')
    return f'"{text}"'


def _category_label(expense: Expense) -> str:
    if expense.category == "other" and expense.custom_tag:
        return f"{expense.category} ({expense.custom_tag})"
    return expense.category


def _expense_row(expense: Expense) -> str:
    return ",".join(
        [
            isoformat_date(expense.date),
            day_of_week(expense.date),
            _quote(expense.title),
            _quote(_category_label(expense)),
            _quote(expense.activity),
            format_plain_amount(expense.amount),
            _quote(expense.remarks),
            "Yes" if expense.has_receipt else "No",
        ]
    )


def build_report(
    start: date,
    end: date,
    expenses: Iterable[Expense],
    profile: UserProfile,
    generated_on: Optional[date] = None,
) -> ExpenseReport:
    """Assemble the CSV report for expenses dated within [start, end].

    Raises InvalidRangeError when start is after end and EmptyResultError when
    the period holds no expenses; no partial report is produced in either case.
    """
    if start > end:
        raise InvalidRangeError("Start date cannot be after end date.")

    selected = sort_by_date_desc(in_date_range(expenses, start, end))
    if not selected:
        raise EmptyResultError("No expenses found in the selected date range.")

    generated_on = generated_on or date.today()
    total = total_amount(selected)

    lines: List[str] = [
        "EXPENSE REPORT",
        f"Generated on: {format_long_date(generated_on)}",
        f"Period: {format_long_date(start)} to {format_long_date(end)}",
        "",
        "USER INFORMATION",
        f"Name: {profile.name}",
        f"Email: {profile.email}",
        f"Department: {profile.department}",
        f"Employee ID: {profile.employee_id}",
        "",
        "EXPENSE DETAILS",
        COLUMN_HEADER,
    ]
    lines.extend(_expense_row(expense) for expense in selected)
    lines.append("")
    lines.append(f'Total,,,,,"{format_currency(total)}",')

    return ExpenseReport(
        filename=report_filename(start, end),
        content="\n".join(lines),
        expense_count=len(selected),
        total=total,
    )


def write_report(report: ExpenseReport, directory: Path) -> Path:
    """Write the report as UTF-8 into directory and return the file path."""
    path = Path(directory) / report.filename
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(report.content, encoding="utf-8")
    except OSError as exc:
        raise StorageError(f"Unable to write report to {path}") from exc
    return path
