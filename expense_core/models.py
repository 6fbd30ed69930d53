"""Data models for the expense tracker domain."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Optional

__all__ = ["Expense", "UserProfile", "isoformat_date", "parse_date", "quantize_amount"]


def isoformat_date(value: date) -> str:
    """Return the calendar date as YYYY-MM-DD."""
    return value.strftime("%Y-%m-%d")


def quantize_amount(amount: Decimal) -> Decimal:
    """Round the amount to two decimal places using HALF_UP rounding."""
    return amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def parse_date(value: str) -> date:
    """Parse a YYYY-MM-DD string, tolerating a trailing time component."""
    value = value.strip()
    # Older records may carry a full timestamp; only the calendar date matters.
    return date.fromisoformat(value[:10])


@dataclass(frozen=True)
class Expense:
    id: int
    title: str
    amount: Decimal
    date: date
    category: str
    activity: Optional[str] = None
    remarks: Optional[str] = None
    has_receipt: bool = False
    receipt_filename: Optional[str] = None
    receipt_uri: Optional[str] = None
    custom_tag: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the expense to JSON-friendly natives."""
        return {
            "id": self.id,
            "title": self.title,
            "amount": f"{self.amount:.2f}",
            "date": isoformat_date(self.date),
            "category": self.category,
            "activity": self.activity,
            "remarks": self.remarks,
            "hasReceipt": self.has_receipt,
            "receiptFilename": self.receipt_filename,
            "receiptUri": self.receipt_uri,
            "customTag": self.custom_tag,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Expense":
        """Hydrate an Expense from JSON-native data."""
        receipt_filename = data.get("receiptFilename")
        receipt_uri = data.get("receiptUri")
        return cls(
            id=int(data["id"]),
            title=data["title"],
            amount=quantize_amount(Decimal(str(data["amount"]))),
            date=parse_date(data["date"]),
            category=data["category"],
            activity=data.get("activity"),
            remarks=data.get("remarks"),
            # The flag always follows the stored references, whatever hasReceipt says.
            has_receipt=bool(receipt_filename or receipt_uri),
            receipt_filename=receipt_filename,
            receipt_uri=receipt_uri,
            custom_tag=data.get("customTag"),
        )


@dataclass(frozen=True)
class UserProfile:
    name: str
    email: str
    department: str
    employee_id: str
    profile_image_uri: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "email": self.email,
            "department": self.department,
            "employeeId": self.employee_id,
            "profileImageUri": self.profile_image_uri,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserProfile":
        return cls(
            name=data["name"],
            email=data["email"],
            department=data["department"],
            employee_id=data["employeeId"],
            profile_image_uri=data.get("profileImageUri"),
        )
