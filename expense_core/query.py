"""Filtering and ordering of expense collections for list views and reports."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional

from .models import Expense
from .validators import ALL_CATEGORIES, validate_category_filter

__all__ = ["FilterState", "filter_expenses", "in_date_range", "sort_by_date_desc", "total_amount"]


def sort_by_date_desc(expenses: Iterable[Expense]) -> List[Expense]:
    # sorted() stays stable with reverse=True, so same-day records keep their input order.
    return sorted(expenses, key=lambda exp: exp.date, reverse=True)


def filter_expenses(
    expenses: Iterable[Expense],
    category: Optional[str] = ALL_CATEGORIES,
    search: Optional[str] = "",
) -> List[Expense]:
    """Return the expenses matching category and title search, newest first.

    The category filter is either a category name or ``"all"``. The search term
    matches any case-insensitive substring of the title; an empty term matches
    everything. The input is never modified.
    """
    wanted = validate_category_filter(category)
    needle = (search or "").lower()

    def matches(expense: Expense) -> bool:
        if wanted != ALL_CATEGORIES and expense.category != wanted:
            return False
        if needle and needle not in expense.title.lower():
            return False
        return True

    return sort_by_date_desc(filter(matches, expenses))


def in_date_range(expenses: Iterable[Expense], start: date, end: date) -> List[Expense]:
    """Expenses dated within [start, end], inclusive, in input order."""
    return [expense for expense in expenses if start <= expense.date <= end]


def total_amount(expenses: Iterable[Expense]) -> Decimal:
    return sum((expense.amount for expense in expenses), start=Decimal("0.00"))


@dataclass(frozen=True)
class FilterState:
    category: str = ALL_CATEGORIES
    search: str = ""

    def apply(self, expenses: Iterable[Expense]) -> List[Expense]:
        return filter_expenses(expenses, self.category, self.search)
