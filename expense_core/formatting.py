"""Display formatting and fixed presentation attributes for categories and activities."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Dict, Optional, Union

CURRENCY_SYMBOL = "₹"


@dataclass(frozen=True)
class DisplayAttributes:
    icon: str
    background: str
    foreground: str

    def to_dict(self) -> Dict[str, str]:
        return {"icon": self.icon, "background": self.background, "foreground": self.foreground}


DEFAULT_DISPLAY = DisplayAttributes(icon="tag", background="#e0e0e0", foreground="#161616")

CATEGORY_DISPLAY: Dict[str, DisplayAttributes] = {
    "food": DisplayAttributes(icon="cutlery", background="#fff1f1", foreground="#da1e28"),
    "travel": DisplayAttributes(icon="plane", background="#e5f6ff", foreground="#0043ce"),
    "stay": DisplayAttributes(icon="building", background="#f3e8ff", foreground="#8a3ffc"),
    "transport": DisplayAttributes(icon="car", background="#defbe6", foreground="#198038"),
    "other": DEFAULT_DISPLAY,
}

# The "all" chip in the category filter bar.
ALL_CATEGORIES_DISPLAY = DisplayAttributes(icon="tags", background="#e0e0e0", foreground="#161616")

CATEGORY_FILTER_DISPLAY: Dict[str, DisplayAttributes] = {**CATEGORY_DISPLAY, "all": ALL_CATEGORIES_DISPLAY}

DEFAULT_ACTIVITY_ICON = "circle"

ACTIVITY_ICONS: Dict[str, str] = {
    "meeting": "users",
    "client": "briefcase",
    "office": "building-o",
    "field": "map-marker",
    "other": "ellipsis-h",
}


def category_display(category: str) -> DisplayAttributes:
    return CATEGORY_FILTER_DISPLAY.get(category, DEFAULT_DISPLAY)


def activity_icon(activity: Optional[str]) -> str:
    return ACTIVITY_ICONS.get(activity or "", DEFAULT_ACTIVITY_ICON)


def format_currency(amount: Union[Decimal, int, float]) -> str:
    """Symbol-prefixed amount with exactly two decimals and no digit grouping."""
    return f"{CURRENCY_SYMBOL}{Decimal(str(amount)):.2f}"


def format_plain_amount(amount: Decimal) -> str:
    """Render an amount as a bare number without trailing zeros, e.g. 3500.5 or 12000."""
    normalized = amount.normalize()
    return f"{normalized:f}"


def format_long_date(value: date) -> str:
    return f"{value:%B} {value.day}, {value:%Y}"


def format_date(value: Optional[date]) -> str:
    if value is None:
        return "N/A"
    return format_long_date(value)


def format_date_with_day(value: Optional[date]) -> str:
    if value is None:
        return "N/A"
    return f"{value:%a}, {format_long_date(value)}"


def day_of_week(value: Optional[date]) -> str:
    if value is None:
        return ""
    return f"{value:%a}"


def title_case(value: Optional[str]) -> str:
    """Capitalise the first letter of an enum value for display, e.g. 'client' -> 'Client'."""
    if not value:
        return ""
    return value[:1].upper() + value[1:]
