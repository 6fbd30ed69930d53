from datetime import date
from decimal import Decimal

from expense_core.formatting import (
    ALL_CATEGORIES_DISPLAY,
    CATEGORY_DISPLAY,
    CATEGORY_FILTER_DISPLAY,
    DEFAULT_DISPLAY,
    activity_icon,
    category_display,
    day_of_week,
    format_currency,
    format_date,
    format_date_with_day,
    format_plain_amount,
    title_case,
)


def test_format_currency_uses_symbol_and_two_decimals():
    assert format_currency(Decimal("16350.7")) == "₹16350.70"
    assert format_currency(1234567) == "₹1234567.00"
    assert format_currency(0.5) == "₹0.50"


def test_format_plain_amount_drops_trailing_zeros():
    assert format_plain_amount(Decimal("3500.50")) == "3500.5"
    assert format_plain_amount(Decimal("12000.00")) == "12000"
    assert format_plain_amount(Decimal("5500.99")) == "5500.99"


def test_date_formats():
    day = date(2024, 5, 15)
    assert format_date(day) == "May 15, 2024"
    assert format_date_with_day(day) == "Wed, May 15, 2024"
    assert day_of_week(day) == "Wed"


def test_missing_dates():
    assert format_date(None) == "N/A"
    assert format_date_with_day(None) == "N/A"
    assert day_of_week(None) == ""


def test_category_display_lookup():
    assert category_display("food").icon == "cutlery"
    assert category_display("transport").foreground == "#198038"
    assert category_display("all").icon == "tags"
    assert category_display("unknown") == DEFAULT_DISPLAY


def test_activity_icon_lookup():
    assert activity_icon("field") == "map-marker"
    assert activity_icon(None) == "circle"


def test_title_case():
    assert title_case("client") == "Client"
    assert title_case(None) == ""


def test_filter_display_mapping_covers_categories_and_all():
    assert CATEGORY_FILTER_DISPLAY["all"] is ALL_CATEGORIES_DISPLAY
    for name, attributes in CATEGORY_DISPLAY.items():
        assert category_display(name) is attributes
