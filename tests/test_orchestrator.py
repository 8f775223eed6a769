"""Integration tests for the tracker facade."""

import json
import pytest
from datetime import date
from decimal import Decimal

from expense_tracker.config import AppSettings, Settings
from expense_tracker.exports import ExportEmptyError, ExportFormat
from expense_tracker.models import (
    ActivityEventType,
    ExpenseCategory,
    ExpenseFilters,
    ExpenseInput,
)
from expense_tracker.orchestrator import ExpenseTracker, create_tracker
from expense_tracker.services.storage import NotFoundError
from expense_tracker.validation import InvalidExpenseError

from tests.conftest import RecordingActivityLogger


TODAY = date(2025, 3, 15)


@pytest.fixture
def activity():
    return RecordingActivityLogger()


@pytest.fixture
def tracker(repository, activity):
    return ExpenseTracker(
        repository,
        clock=lambda: TODAY,
        activity_logger=activity,
        app_settings=AppSettings(daily_budget=Decimal("50")),
    )


def add(tracker, day, amount, category="Food", description="Lunch"):
    return tracker.add_expense({
        "date": day,
        "amount": amount,
        "category": category,
        "description": description,
    })


class TestExpenseLifecycle:
    """Create, edit and remove through the facade."""

    def test_add_edit_remove_scenario(self, tracker):
        created = add(tracker, "2025-01-05", "12.50")
        assert [e.id for e in tracker.list_expenses()] == [created.id]

        edited = tracker.edit_expense(created.id, {"amount": 15})
        assert edited.amount == Decimal("15")
        assert edited.description == "Lunch"
        assert edited.date == date(2025, 1, 5)
        assert tracker.list_expenses()[0].amount == Decimal("15")

        tracker.remove_expense(created.id)
        assert tracker.list_expenses() == []

    def test_add_parsed_input(self, tracker):
        created = tracker.add_expense(ExpenseInput(
            date=date(2025, 3, 1),
            amount=Decimal("20"),
            category=ExpenseCategory.BILLS,
            description="Phone",
        ))
        assert tracker.list_expenses()[0].id == created.id

    def test_invalid_input_never_stored(self, tracker, activity):
        with pytest.raises(InvalidExpenseError):
            add(tracker, "2025-01-05", "-4")

        assert tracker.list_expenses() == []
        assert activity.types() == [ActivityEventType.VALIDATION_FAILED]

    def test_huge_amount_rejected_and_others_kept(self, tracker):
        add(tracker, "2025-01-05", "12.50")
        with pytest.raises(InvalidExpenseError):
            add(tracker, "2025-01-06", "1e400")

        listed = tracker.list_expenses()
        assert len(listed) == 1
        assert listed[0].amount == Decimal("12.50")

    def test_long_amount_stored_exactly(self, repository):
        tracker = ExpenseTracker(
            repository,
            clock=lambda: TODAY,
            activity_logger=RecordingActivityLogger(),
            app_settings=AppSettings(max_expense_amount=Decimal("1e20")),
        )
        add(tracker, "2025-01-05", "12345678901234567.89", "Bills", "Mortgage")

        assert tracker.list_expenses()[0].amount == Decimal("12345678901234567.89")
        document = tracker.export_all(ExportFormat.JSON)
        assert json.loads(document.text)[0]["amount"] == "12345678901234567.89"

    def test_future_date_uses_clock(self, tracker):
        with pytest.raises(InvalidExpenseError) as exc_info:
            add(tracker, "2025-03-16", "5")
        assert exc_info.value.result.issues[0].issue_type == "future_date"

        assert add(tracker, "2025-03-15", "5").date == TODAY

    def test_edit_missing_raises_not_found(self, tracker):
        with pytest.raises(NotFoundError):
            tracker.edit_expense("missing", {"amount": 15})

    def test_edit_rejects_invalid_change(self, tracker):
        created = add(tracker, "2025-01-05", "12.50")
        with pytest.raises(InvalidExpenseError):
            tracker.edit_expense(created.id, {"category": "Pets"})
        assert tracker.list_expenses()[0].category == ExpenseCategory.FOOD


class TestFacadeAggregation:
    """Aggregations run against the stored list and the injected clock."""

    def test_filter_newest_first(self, tracker):
        add(tracker, "2025-03-01", "3", description="Coffee")
        add(tracker, "2025-03-10", "4", description="Bagel")
        add(tracker, "2025-02-01", "5", "Transportation", "Bus")

        assert [e.description for e in tracker.filter()] == ["Bagel", "Coffee", "Bus"]
        only_food = tracker.filter(ExpenseFilters(category="Food"))
        assert [e.description for e in only_food] == ["Bagel", "Coffee"]

    def test_summarize_snapshot(self, tracker):
        add(tracker, "2025-03-02", "20", "Bills", "Phone")
        add(tracker, "2025-03-03", "5", "Bills", "Water")
        add(tracker, "2025-02-10", "10", "Food", "Lunch")

        summary = tracker.summarize()
        assert summary.total_spending == Decimal("35")
        assert summary.monthly_spending == Decimal("25")
        assert summary.top_category == ExpenseCategory.BILLS

    def test_budget_streak(self, tracker):
        add(tracker, "2025-03-15", "40")
        add(tracker, "2025-03-14", "60")
        add(tracker, "2025-03-13", "10")
        assert tracker.budget_streak() == 1

    def test_recent_insights_trend(self, tracker):
        for day in range(1, 8):
            add(tracker, f"2025-03-0{day}", "1", description=f"Day {day}")

        assert [e.description for e in tracker.recent()] == [
            "Day 7", "Day 6", "Day 5", "Day 4", "Day 3",
        ]
        insights = tracker.insights()
        assert insights.month_start == date(2025, 3, 1)
        assert insights.top_categories[0].amount == Decimal("7")
        trend = tracker.trend()
        assert trend[0].period_start == date(2025, 1, 1)
        assert sum(p.amount for p in trend) == Decimal("7")

    def test_empty_store_never_fails(self, tracker):
        assert tracker.filter() == []
        assert tracker.summarize().top_category is None
        assert tracker.budget_streak() == 365
        assert tracker.insights().top_categories == []


class TestFacadeExport:
    """Exports go through the facade with activity logging."""

    def test_export_empty_logged_and_raised(self, tracker, activity):
        with pytest.raises(ExportEmptyError):
            tracker.export("json", "out", [])
        assert activity.types() == [ActivityEventType.EXPORT_EMPTY]
        assert activity.events[0].details == {"format": "json"}

    def test_export_filtered(self, tracker, activity):
        add(tracker, "2025-03-01", "3", description="Coffee")
        add(tracker, "2025-03-10", "4", "Shopping", "Socks")

        document = tracker.export(
            ExportFormat.JSON,
            "out",
            tracker.filter(ExpenseFilters(category="Shopping")),
        )
        assert document.filename == "out.json"
        assert [r["description"] for r in json.loads(document.text)] == ["Socks"]
        assert activity.types()[-1] == ActivityEventType.EXPORT_COMPLETED

    def test_export_all_default_filename(self, tracker):
        add(tracker, "2025-03-01", "3")
        document = tracker.export_all()
        assert document.filename == "expenses-export-2025-03-15.csv"
        assert tracker.default_export_filename() == "expenses-export-2025-03-15"


class TestCreateTracker:
    """Tests for building a tracker from settings."""

    def test_uses_configured_data_dir(self, tmp_path, monkeypatch):
        monkeypatch.setenv("EXPENSE_TRACKER_STORAGE_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("EXPENSE_TRACKER_DAILY_BUDGET", "20")

        tracker = create_tracker(Settings(), clock=lambda: TODAY)
        add(tracker, "2025-03-15", "25")

        assert (tmp_path / "expense-tracker-data.json").exists()
        assert tracker.settings.daily_budget == Decimal("20")
        assert tracker.budget_streak() == 0

        reopened = create_tracker(Settings(), clock=lambda: TODAY)
        assert len(reopened.list_expenses()) == 1
