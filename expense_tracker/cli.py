"""Console interface for the expense tracker."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, List, Optional

from expense_core.exceptions import RangeError, RecordNotFoundError, StorageError, ValidationError
from expense_core.formatting import format_currency, format_date_with_day, title_case
from expense_core.models import Expense
from expense_core.report import write_report
from expense_core.services import ExpenseStore
from expense_core.storage import JSONStorage
from expense_core.validators import ACTIVITIES, ALL_CATEGORIES, CATEGORIES


def _parse_date(value: str) -> str:
    try:
        date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            f"Invalid date '{value}'. Expected format YYYY-MM-DD."
        ) from exc
    return value


def _parse_amount(value: str) -> str:
    try:
        amount = Decimal(value)
    except InvalidOperation as exc:
        raise argparse.ArgumentTypeError("Amount must be a numeric value") from exc
    if not amount.is_finite() or amount <= 0:
        raise argparse.ArgumentTypeError("Amount must be greater than zero")
    return value


def _load_store(data_dir: Path) -> ExpenseStore:
    return ExpenseStore(JSONStorage(data_dir))


def _format_expense(expense: Expense) -> str:
    category = expense.category
    if expense.custom_tag:
        category = f"{category} ({expense.custom_tag})"
    receipt = expense.receipt_filename or expense.receipt_uri or "-"
    return (
        f"[{expense.id}] {format_date_with_day(expense.date)} {format_currency(expense.amount)}\n"
        f"  {expense.title}\n"
        f"  Category: {category} | Activity: {title_case(expense.activity) or '-'}\n"
        f"  Remarks: {expense.remarks or '-'}\n"
        f"  Receipt: {receipt}\n"
    )


def _expense_payload(args: argparse.Namespace) -> Dict[str, Any]:
    return {
        "title": args.title,
        "amount": args.amount,
        "date": args.date,
        "category": args.category,
        "activity": args.activity,
        "remarks": args.remarks,
        "customTag": args.custom_tag,
        "receiptFilename": args.receipt_filename,
        "receiptUri": args.receipt_uri,
    }


def handle_expense(args: argparse.Namespace, store: ExpenseStore) -> None:
    if args.command == "add":
        expense = store.add(_expense_payload(args))
        print("Expense added:\n" + _format_expense(expense))
    elif args.command == "list":
        expenses = store.query(args.category, args.search)
        if not expenses:
            print("No expenses found.")
            return
        total = store.total(expenses)
        print(f"Found {len(expenses)} expenses (total {format_currency(total)}):")
        for expense in expenses:
            print(_format_expense(expense))
    elif args.command == "show":
        print(_format_expense(store.get(args.id)))
    elif args.command == "edit":
        changes = {k: v for k, v in _expense_payload(args).items() if v is not None}
        if args.no_receipt:
            changes["receiptFilename"] = None
            changes["receiptUri"] = None
        expense = store.update(args.id, changes)
        print("Expense updated:\n" + _format_expense(expense))
    elif args.command == "delete":
        store.remove(args.id)
        print(f"Expense {args.id} deleted.")


def handle_profile(args: argparse.Namespace, store: ExpenseStore) -> None:
    if args.command == "set":
        changes = {
            "name": args.name,
            "email": args.email,
            "department": args.department,
            "profileImageUri": args.image,
        }
        payload = {**store.profile.to_dict(), **{k: v for k, v in changes.items() if v is not None}}
        store.set_profile(payload)
        print("Profile updated.")

    profile = store.profile
    print(
        f"Name: {profile.name}\n"
        f"Email: {profile.email}\n"
        f"Department: {profile.department}\n"
        f"Employee ID: {profile.employee_id}"
    )


def handle_report(args: argparse.Namespace, store: ExpenseStore) -> None:
    report = store.report(date.fromisoformat(args.start), date.fromisoformat(args.end))
    path = write_report(report, args.output_dir)
    print(
        f"Report with {report.expense_count} expenses generated successfully "
        f"(total {format_currency(report.total)}): {path}"
    )


def _add_expense_fields(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--activity", choices=ACTIVITIES)
    parser.add_argument("--remarks")
    parser.add_argument("--custom-tag", dest="custom_tag")
    parser.add_argument("--receipt-filename", dest="receipt_filename")
    parser.add_argument("--receipt-uri", dest="receipt_uri")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Expense Tracker CLI")
    parser.add_argument(
        "--data-dir",
        default=os.getenv("EXPENSE_TRACKER_DATA_DIR", "data"),
        type=Path,
        help="Directory to store JSON data (default: ./data)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="entity", required=True)

    expense_parser = subparsers.add_parser("expense", help="Manage expenses")
    expense_sub = expense_parser.add_subparsers(dest="command", required=True)

    expense_add = expense_sub.add_parser("add", help="Add a new expense")
    expense_add.add_argument("title")
    expense_add.add_argument("amount", type=_parse_amount)
    expense_add.add_argument("date", type=_parse_date)
    expense_add.add_argument("category", choices=CATEGORIES)
    _add_expense_fields(expense_add)

    expense_list = expense_sub.add_parser("list", help="List expenses, newest first")
    expense_list.add_argument("--category", default=ALL_CATEGORIES, choices=CATEGORIES + (ALL_CATEGORIES,))
    expense_list.add_argument("--search", default="")

    expense_show = expense_sub.add_parser("show", help="Show a single expense")
    expense_show.add_argument("id", type=int)

    expense_edit = expense_sub.add_parser("edit", help="Edit an existing expense")
    expense_edit.add_argument("id", type=int)
    expense_edit.add_argument("--title")
    expense_edit.add_argument("--amount", type=_parse_amount)
    expense_edit.add_argument("--date", type=_parse_date)
    expense_edit.add_argument("--category", choices=CATEGORIES)
    _add_expense_fields(expense_edit)
    expense_edit.add_argument("--no-receipt", action="store_true", help="Detach the receipt")

    expense_delete = expense_sub.add_parser("delete", help="Delete an expense")
    expense_delete.add_argument("id", type=int)

    profile_parser = subparsers.add_parser("profile", help="View or edit the user profile")
    profile_sub = profile_parser.add_subparsers(dest="command", required=True)
    profile_sub.add_parser("show", help="Show the profile")
    profile_set = profile_sub.add_parser("set", help="Update profile fields")
    profile_set.add_argument("--name")
    profile_set.add_argument("--email")
    profile_set.add_argument("--department")
    profile_set.add_argument("--image", help="Profile image URI")

    report_parser = subparsers.add_parser("report", help="Export a CSV report for a date range")
    report_parser.add_argument("start", type=_parse_date)
    report_parser.add_argument("end", type=_parse_date)
    report_parser.add_argument(
        "--output-dir",
        default=Path("."),
        type=Path,
        help="Directory to write the CSV file into (default: current directory)",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        store = _load_store(args.data_dir)
        if args.entity == "expense":
            handle_expense(args, store)
        elif args.entity == "profile":
            handle_profile(args, store)
        elif args.entity == "report":
            handle_report(args, store)
        else:  # pragma: no cover - argparse should prevent this
            parser.error(f"Unknown entity: {args.entity}")
            return 2
    except ValidationError as exc:
        print(f"Validation error: {exc}", file=sys.stderr)
        return 1
    except RecordNotFoundError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except RangeError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except StorageError as exc:
        print(f"Storage error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
