"""Validation helpers shared across expense tracker services."""

from __future__ import annotations

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterable, Optional

from .exceptions import ValidationError
from .models import parse_date, quantize_amount

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

CATEGORIES = ("food", "travel", "stay", "transport", "other")

ACTIVITIES = ("meeting", "client", "office", "field", "other")

ALL_CATEGORIES = "all"


def parse_amount(raw: object, field: str) -> Decimal:
    """Convert raw input to a positive Decimal with exactly two fraction digits."""
    if isinstance(raw, bool) or raw is None:
        raise ValidationError(f"{field} must be a numeric value")
    try:
        amount = Decimal(str(raw).strip())
    except (InvalidOperation, TypeError) as exc:  # type: ignore[arg-type]
        raise ValidationError(f"{field} must be a numeric value") from exc

    if not amount.is_finite():
        raise ValidationError(f"{field} must be a numeric value")
    if amount <= 0:
        raise ValidationError(f"{field} must be greater than zero")

    amount = quantize_amount(amount)
    if amount <= 0:
        raise ValidationError(f"{field} must be greater than zero")
    return amount


def validate_required_str(value: object, field: str, max_length: int) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    trimmed = value.strip()
    if not trimmed:
        raise ValidationError(f"{field} cannot be empty")
    if len(trimmed) > max_length:
        raise ValidationError(f"{field} must be at most {max_length} characters")
    return trimmed


def validate_optional_str(value: object, field: str, max_length: int) -> Optional[str]:
    """Like validate_required_str, but blank or missing input collapses to None."""
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return validate_required_str(value, field, max_length)


def validate_date(value: object, field: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required")
    try:
        return parse_date(value)
    except ValueError as exc:
        raise ValidationError(f"{field} must be a date in YYYY-MM-DD format") from exc


def validate_enum(value: object, field: str, allowed: Iterable[str]) -> str:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field} is required")
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    canonical = value.strip().lower()
    if canonical not in allowed:
        raise ValidationError(f"{field} must be one of: {', '.join(sorted(allowed))}")
    return canonical


def validate_category_filter(value: object) -> str:
    """Accept any category or the 'all' wildcard; missing input means 'all'."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return ALL_CATEGORIES
    return validate_enum(value, "category", CATEGORIES + (ALL_CATEGORIES,))


def validate_email(value: object, field: str = "email") -> str:
    email = validate_required_str(value, field, 254)
    if not EMAIL_PATTERN.fullmatch(email):
        raise ValidationError(f"{field} must be a valid email address")
    return email


def validate_custom_tag(category: str, raw: object) -> Optional[str]:
    """The custom tag is required for the 'other' category and dropped for all others."""
    if category != "other":
        return None
    tag = validate_optional_str(raw, "customTag", 50)
    if tag is None:
        raise ValidationError('customTag is required for the "other" category')
    return tag


def validate_receipt(payload: Dict[str, object]) -> Dict[str, object]:
    """Normalise receipt references; hasReceipt follows the presence of a reference."""
    filename = validate_optional_str(payload.get("receiptFilename"), "receiptFilename", 255)
    uri = validate_optional_str(payload.get("receiptUri"), "receiptUri", 2048)
    return {
        "has_receipt": bool(filename or uri),
        "receipt_filename": filename,
        "receipt_uri": uri,
    }
