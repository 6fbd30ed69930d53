"""Framework-agnostic business services for the expense tracker."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from .exceptions import RecordNotFoundError, StorageError, ValidationError
from .models import Expense, UserProfile
from .query import filter_expenses, total_amount
from .report import ExpenseReport, build_report
from .storage import JSONStorage
from .validators import (
    ACTIVITIES,
    ALL_CATEGORIES,
    CATEGORIES,
    parse_amount,
    validate_custom_tag,
    validate_date,
    validate_email,
    validate_enum,
    validate_optional_str,
    validate_receipt,
    validate_required_str,
)

logger = logging.getLogger(__name__)

EXPENSES_RESOURCE = "expenses_data.json"
PROFILE_RESOURCE = "user_profile.json"

DEFAULT_PROFILE = UserProfile(
    name="John Doe",
    email="john.doe@company.com",
    department="Sales",
    employee_id="EMP-12345",
)

SAMPLE_EXPENSES: List[Dict[str, Any]] = [
    {
        "id": 1,
        "title": "Lunch Meeting",
        "amount": "3500.50",
        "date": "2024-05-15",
        "category": "food",
        "activity": "client",
        "remarks": "Meeting with potential client",
        "hasReceipt": True,
        "receiptFilename": "lunch_receipt.jpg",
    },
    {
        "id": 2,
        "title": "Conference Hotel",
        "amount": "12000.00",
        "date": "2024-05-14",
        "category": "stay",
        "activity": "meeting",
        "remarks": "Annual industry conference",
        "hasReceipt": True,
        "receiptFilename": "hotel_invoice.pdf",
    },
    {
        "id": 3,
        "title": "Flight to Delhi",
        "amount": "5500.99",
        "date": "2024-05-13",
        "category": "travel",
        "activity": "field",
        "remarks": "Site visit to Delhi office",
        "hasReceipt": False,
    },
    {
        "id": 4,
        "title": "Taxi from Airport",
        "amount": "850.20",
        "date": "2024-05-14",
        "category": "transport",
        "activity": "field",
        "remarks": "Transport to hotel",
        "hasReceipt": False,
    },
    {
        "id": 5,
        "title": "Client Coffee",
        "amount": "450.00",
        "date": "2024-05-16",
        "category": "food",
        "activity": "client",
        "remarks": "Follow-up discussion",
        "hasReceipt": False,
    },
    {
        "id": 6,
        "title": "Software Subscription",
        "amount": "2500.00",
        "date": "2024-05-01",
        "category": "other",
        "activity": "office",
        "remarks": "Annual subscription renewal",
        "hasReceipt": True,
        "receiptFilename": "sub_confirm.png",
        "customTag": "Adobe CC",
    },
]


class ExpenseStore:
    """Owns the expense collection and the user profile and mediates persistence.

    Every mutation builds the new state, writes it to storage and only then
    replaces the in-memory state, so a failed write leaves the store unchanged.
    """

    def __init__(
        self,
        storage: JSONStorage,
        expenses_resource: str = EXPENSES_RESOURCE,
        profile_resource: str = PROFILE_RESOURCE,
    ) -> None:
        self._storage = storage
        self._expenses_resource = expenses_resource
        self._profile_resource = profile_resource
        self._expenses: Dict[int, Expense] = {}
        self._profile: UserProfile = DEFAULT_PROFILE
        # Highest id handed out this session; ids are never recycled below it.
        self._last_id = 0
        self.load()  # Hydrate in-memory cache from persistence on construction.

    # Public API -----------------------------------------------------------
    def load(self) -> None:
        """Load expenses and profile, seeding first-run defaults.

        Unreadable or malformed data is logged and replaced by an empty
        collection or the default profile; it never raises.
        """
        self._expenses = self._load_expenses()
        self._profile = self._load_profile()
        self._last_id = max(self._expenses, default=0)

    def add(self, payload: Dict[str, object]) -> Expense:
        expense_id = max(self._last_id, max(self._expenses, default=0)) + 1
        expense = Expense(**self._validate_payload(payload, expense_id))
        updated = dict(self._expenses)
        updated[expense.id] = expense
        self._commit(updated)
        self._last_id = expense.id
        logger.info("Added expense %s (%s)", expense.id, expense.title)
        return expense

    def update(self, expense_id: int, changes: Dict[str, object]) -> Expense:
        existing = self._get_or_raise(expense_id)
        # Merge existing serialised data with incoming changes; the result replaces the record.
        merged_payload = {**existing.to_dict(), **changes}
        expense = Expense(**self._validate_payload(merged_payload, existing.id))
        updated = dict(self._expenses)
        updated[existing.id] = expense
        self._commit(updated)
        logger.info("Updated expense %s", expense.id)
        return expense

    def remove(self, expense_id: int) -> None:
        existing = self._get_or_raise(expense_id)
        updated = {key: value for key, value in self._expenses.items() if key != existing.id}
        self._commit(updated)
        logger.info("Removed expense %s", existing.id)

    def get(self, expense_id: int) -> Expense:
        """Return an expense or raise if it does not exist."""
        return self._get_or_raise(expense_id)

    def all(self) -> List[Expense]:
        """All expenses in insertion order."""
        return list(self._expenses.values())

    def query(self, category: Optional[str] = ALL_CATEGORIES, search: Optional[str] = "") -> List[Expense]:
        return filter_expenses(self._expenses.values(), category, search)

    def total(self, expenses: Optional[Iterable[Expense]] = None) -> Decimal:
        return total_amount(self._expenses.values() if expenses is None else expenses)

    def report(self, start: date, end: date, generated_on: Optional[date] = None) -> ExpenseReport:
        return build_report(start, end, self._expenses.values(), self._profile, generated_on)

    @property
    def profile(self) -> UserProfile:
        return self._profile

    def set_profile(self, payload: Dict[str, object]) -> UserProfile:
        profile = self._validate_profile(payload)
        self._save(self._profile_resource, profile.to_dict(), "profile")
        self._profile = profile
        logger.info("Updated profile for %s", profile.employee_id)
        return profile

    # Internal helpers -----------------------------------------------------
    def _load_expenses(self) -> Dict[int, Expense]:
        try:
            raw_records = self._storage.load(self._expenses_resource)
        except StorageError:
            logger.warning("Could not read stored expenses; starting empty", exc_info=True)
            return {}

        if raw_records is None:
            seeded = {payload["id"]: Expense.from_dict(payload) for payload in SAMPLE_EXPENSES}
            self._try_seed(
                self._expenses_resource, [expense.to_dict() for expense in seeded.values()], "expenses"
            )
            return seeded

        if not isinstance(raw_records, list):
            logger.warning("Stored expenses are not a list; starting empty")
            return {}

        expenses: Dict[int, Expense] = {}
        duplicates: List[Expense] = []
        for payload in raw_records:
            try:
                expense = Expense.from_dict(payload)
            except (AttributeError, KeyError, TypeError, ValueError, ArithmeticError):
                logger.warning("Skipping malformed expense record: %r", payload)
                continue
            if expense.id in expenses:
                duplicates.append(expense)
                continue
            expenses[expense.id] = expense

        # Repeated ids get fresh ones so the next write keeps every record.
        for expense in duplicates:
            new_id = max(expenses) + 1
            logger.warning("Duplicate expense id %s; reassigning to %s", expense.id, new_id)
            expenses[new_id] = replace(expense, id=new_id)
        return expenses

    def _load_profile(self) -> UserProfile:
        try:
            raw_profile = self._storage.load(self._profile_resource)
        except StorageError:
            logger.warning("Could not read stored profile; using default", exc_info=True)
            return DEFAULT_PROFILE

        if raw_profile is None:
            self._try_seed(self._profile_resource, DEFAULT_PROFILE.to_dict(), "profile")
            return DEFAULT_PROFILE

        try:
            return UserProfile.from_dict(raw_profile)
        except (KeyError, TypeError, AttributeError):
            logger.warning("Stored profile is malformed; using default")
            return DEFAULT_PROFILE

    def _try_seed(self, resource: str, payload: Any, label: str) -> None:
        try:
            self._storage.save(resource, payload)
        except StorageError:
            logger.warning("Could not persist default %s", label, exc_info=True)
        else:
            logger.info("Seeded default %s", label)

    def _commit(self, expenses: Dict[int, Expense]) -> None:
        self._save(
            self._expenses_resource, [expense.to_dict() for expense in expenses.values()], "expenses"
        )
        self._expenses = expenses

    def _save(self, resource: str, payload: Any, label: str) -> None:
        try:
            # Persist current snapshot; storage layer handles atomic writes.
            self._storage.save(resource, payload)
        except StorageError:
            logger.error("Failed to save %s", label)
            raise
        except Exception as exc:  # pragma: no cover - defensive guard
            raise StorageError(f"Unexpected error while saving {label}") from exc

    def _get_or_raise(self, expense_id: object) -> Expense:
        try:
            return self._expenses[int(expense_id)]  # type: ignore[arg-type]
        except (KeyError, TypeError, ValueError) as exc:
            raise RecordNotFoundError(f"Expense {expense_id} not found") from exc

    def _validate_payload(self, payload: Dict[str, object], expense_id: int) -> Dict[str, object]:
        category = validate_enum(payload.get("category"), "category", CATEGORIES)
        # Compose normalised fields ensuring validation across all entry points.
        return {
            "id": expense_id,
            "title": validate_required_str(payload.get("title"), "title", 100),
            "amount": parse_amount(payload.get("amount"), "amount"),
            "date": validate_date(payload.get("date"), "date"),
            "category": category,
            "activity": validate_enum(payload.get("activity"), "activity", ACTIVITIES),
            "remarks": validate_optional_str(payload.get("remarks"), "remarks", 500),
            "custom_tag": validate_custom_tag(category, payload.get("customTag")),
            **validate_receipt(payload),
        }

    def _validate_profile(self, payload: Dict[str, object]) -> UserProfile:
        current = self._profile
        employee_id = payload.get("employeeId")
        if employee_id is None:
            employee_id = current.employee_id
        else:
            employee_id = validate_required_str(employee_id, "employeeId", 50)
            if employee_id != current.employee_id:
                raise ValidationError("employeeId cannot be changed")
        return UserProfile(
            name=validate_required_str(payload.get("name"), "name", 100),
            email=validate_email(payload.get("email")),
            department=validate_required_str(payload.get("department"), "department", 100),
            employee_id=employee_id,
            profile_image_uri=validate_optional_str(
                payload.get("profileImageUri"), "profileImageUri", 2048
            ),
        )
