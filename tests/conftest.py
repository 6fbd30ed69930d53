from datetime import date
from decimal import Decimal

import pytest

from expense_core.models import Expense
from expense_core.services import ExpenseStore
from expense_core.storage import JSONStorage


@pytest.fixture
def storage(tmp_path):
    return JSONStorage(tmp_path / "data")


@pytest.fixture
def store(storage):
    """Store seeded with the first-run sample expenses and default profile."""
    return ExpenseStore(storage)


@pytest.fixture
def empty_store(storage):
    storage.save("expenses_data.json", [])
    return ExpenseStore(storage)


@pytest.fixture
def expense_payload():
    def factory(**overrides):
        payload = {
            "title": "Team Lunch",
            "amount": "1200",
            "date": "2024-05-20",
            "category": "food",
            "activity": "client",
            "remarks": "Quarterly review",
        }
        payload.update(overrides)
        return payload

    return factory


@pytest.fixture
def make_expense():
    def factory(**kwargs):
        base = dict(
            id=1,
            title="Expense",
            amount=Decimal("10.00"),
            date=date(2024, 5, 1),
            category="food",
            activity="office",
        )
        base.update(kwargs)
        return Expense(**base)

    return factory
