"""Core business logic package for the expense tracker."""

from .models import Expense, UserProfile
from .query import FilterState, filter_expenses
from .report import ExpenseReport, build_report, write_report
from .services import ExpenseStore
from .storage import JSONStorage
from .exceptions import (
    EmptyResultError,
    InvalidRangeError,
    RangeError,
    RecordNotFoundError,
    StorageError,
    ValidationError,
)

__all__ = [
    "Expense",
    "UserProfile",
    "FilterState",
    "filter_expenses",
    "ExpenseReport",
    "build_report",
    "write_report",
    "ExpenseStore",
    "JSONStorage",
    "EmptyResultError",
    "InvalidRangeError",
    "RangeError",
    "RecordNotFoundError",
    "StorageError",
    "ValidationError",
]
