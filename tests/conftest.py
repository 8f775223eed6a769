"""Shared fixtures for the expense tracker tests."""

from datetime import date
from decimal import Decimal

import pytest

from expense_tracker.activity import ActivityLogger
from expense_tracker.models.expense import Expense, ExpenseCategory
from expense_tracker.services.storage import ExpenseRepository, InMemoryKeyValueStore


TODAY = date(2025, 3, 15)


class RecordingActivityLogger(ActivityLogger):
    """Keeps events in memory instead of writing them."""

    def __init__(self):
        super().__init__()
        self.events = []

    def log(self, event):
        self.events.append(event)
        return True

    def types(self):
        return [event.event_type for event in self.events]


def make_expense(
    expense_id: str,
    day: date,
    amount: str,
    category: ExpenseCategory = ExpenseCategory.FOOD,
    description: str = "Lunch",
) -> Expense:
    return Expense(
        id=expense_id,
        date=day,
        amount=Decimal(amount),
        category=category,
        description=description,
    )


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def sample_expenses() -> list[Expense]:
    """A small mixed list spanning February and March 2025."""
    return [
        make_expense("e1", date(2025, 3, 14), "12.50", ExpenseCategory.FOOD, "Lunch"),
        make_expense("e2", date(2025, 3, 1), "20", ExpenseCategory.BILLS, "Electricity bill"),
        make_expense("e3", date(2025, 2, 20), "5", ExpenseCategory.BILLS, "Phone plan"),
        make_expense("e4", date(2025, 3, 10), "42.99", ExpenseCategory.SHOPPING, "Running shoes"),
        make_expense("e5", date(2025, 2, 3), "3.75", ExpenseCategory.TRANSPORTATION, "Bus fare"),
    ]


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def repository(store: InMemoryKeyValueStore) -> ExpenseRepository:
    return ExpenseRepository(store)
