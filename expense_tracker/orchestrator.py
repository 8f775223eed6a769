"""
Main Orchestrator for the Expense Tracker

This module ties the components together behind the surface the
presentation layer calls:
1. Repository - list / add / edit / remove expenses
2. Aggregation - filter, summarize, streak, insights, trend
3. Export - render a filtered list to CSV, JSON or a report

DESIGN DECISION: The orchestrator owns the clock.
Every time-dependent calculation receives `today` from the injected clock,
so a tracker built with a fixed clock is fully reproducible.
"""

from datetime import date
from typing import Any, Callable, Mapping, Optional, Union

from expense_tracker.activity import ActivityLogger, configure_logging
from expense_tracker.config import AppSettings, Settings, get_settings
from expense_tracker.exports import (
    ExportDocument,
    ExportEmptyError,
    ExportFormat,
    default_export_stem,
    export_expenses,
)
from expense_tracker.models.expense import (
    Expense,
    ExpenseFilters,
    ExpenseInput,
    ExpenseSummary,
    MonthlyInsights,
    SpendingPoint,
)
from expense_tracker.queries import aggregation
from expense_tracker.services.storage import (
    ExpenseRepository,
    LocalFileStore,
    NotFoundError,
)
from expense_tracker.validation import ExpenseValidator, InvalidExpenseError


ExpenseFields = Union[ExpenseInput, Mapping[str, Any]]


class ExpenseTracker:
    """
    Collaborator interface for the presentation layer.

    Mutations are validated (schema and semantic) before they reach the
    repository; reads and aggregations never fail on empty data.
    """

    def __init__(
        self,
        repository: ExpenseRepository,
        validator: Optional[ExpenseValidator] = None,
        clock: Callable[[], date] = date.today,
        activity_logger: Optional[ActivityLogger] = None,
        app_settings: Optional[AppSettings] = None,
    ):
        self._repository = repository
        self._settings = app_settings or AppSettings()
        self._validator = validator or ExpenseValidator(
            max_amount=self._settings.max_expense_amount,
            currency_symbol=self._settings.currency_symbol,
        )
        self._clock = clock
        self._activity = activity_logger or ActivityLogger()

    @property
    def settings(self) -> AppSettings:
        return self._settings

    def today(self) -> date:
        return self._clock()

    # -------------------------------------------------------------------------
    # Repository
    # -------------------------------------------------------------------------

    def _checked(self, fields: ExpenseFields) -> ExpenseInput:
        today = self.today()
        if isinstance(fields, ExpenseInput):
            result = self._validator.validate_input(fields, today)
        else:
            result = self._validator.validate(fields, today)

        if not result.is_valid:
            self._activity.log_validation_failed([
                {"field": i.field, "type": i.issue_type, "message": i.message}
                for i in result.issues
            ])
            raise InvalidExpenseError(result)

        if isinstance(fields, ExpenseInput):
            return fields
        return ExpenseInput.model_validate(dict(fields))

    def list_expenses(self) -> list[Expense]:
        """All stored expenses (stored order)."""
        return self._repository.list()

    def add_expense(self, fields: ExpenseFields) -> Expense:
        """
        Validate and store a new expense.

        Raises:
            InvalidExpenseError: If the input fails validation
        """
        return self._repository.create(self._checked(fields))

    def edit_expense(self, expense_id: str, fields: ExpenseFields) -> Expense:
        """
        Validate and replace an expense's fields.

        A mapping may be partial; the missing fields keep their stored values.

        Raises:
            InvalidExpenseError: If the input fails validation
            NotFoundError: If the id is unknown
        """
        if not isinstance(fields, ExpenseInput):
            current = self._repository.get(expense_id)
            if current is None:
                self._activity.log_expense_not_found(expense_id, "update")
                raise NotFoundError(f"Expense not found: {expense_id}")
            fields = {**current.to_input().model_dump(), **dict(fields)}
        return self._repository.update(expense_id, self._checked(fields))

    def remove_expense(self, expense_id: str) -> None:
        self._repository.delete(expense_id)

    # -------------------------------------------------------------------------
    # Aggregation
    # -------------------------------------------------------------------------

    def filter(
        self,
        filters: Optional[ExpenseFilters] = None,
        expenses: Optional[list[Expense]] = None,
    ) -> list[Expense]:
        """Filtered expenses, newest first, as the expense list shows them."""
        source = expenses if expenses is not None else self.list_expenses()
        return aggregation.sort_for_display(
            aggregation.filter_expenses(source, filters or ExpenseFilters())
        )

    def summarize(self, expenses: Optional[list[Expense]] = None) -> ExpenseSummary:
        source = expenses if expenses is not None else self.list_expenses()
        return aggregation.summarize(source, today=self.today())

    def budget_streak(self, expenses: Optional[list[Expense]] = None) -> int:
        """Days in a row within the configured daily budget."""
        source = expenses if expenses is not None else self.list_expenses()
        return aggregation.budget_streak(
            source,
            daily_budget=self._settings.daily_budget,
            today=self.today(),
            lookback_days=self._settings.streak_lookback_days,
        )

    def recent(self, expenses: Optional[list[Expense]] = None) -> list[Expense]:
        source = expenses if expenses is not None else self.list_expenses()
        return aggregation.recent_expenses(source, self._settings.recent_expenses_limit)

    def insights(self, expenses: Optional[list[Expense]] = None) -> MonthlyInsights:
        source = expenses if expenses is not None else self.list_expenses()
        return aggregation.monthly_insights(
            source,
            today=self.today(),
            top_n=self._settings.top_categories_limit,
        )

    def trend(self, expenses: Optional[list[Expense]] = None) -> list[SpendingPoint]:
        source = expenses if expenses is not None else self.list_expenses()
        return aggregation.weekly_spending_trend(
            source,
            today=self.today(),
            months=self._settings.trend_months,
        )

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------

    def export(
        self,
        export_format: Union[ExportFormat, str],
        filename: str,
        expenses: list[Expense],
    ) -> ExportDocument:
        """
        Render `expenses` for download.

        Raises:
            ExportEmptyError: If `expenses` is empty (nothing is produced)
        """
        try:
            document = export_expenses(
                export_format,
                filename,
                expenses,
                currency_symbol=self._settings.currency_symbol,
            )
        except ExportEmptyError:
            format_name = (
                export_format.value
                if isinstance(export_format, ExportFormat)
                else str(export_format)
            )
            self._activity.log_export_empty(format_name, filename)
            raise

        self._activity.log_export_completed(
            document.export_format.value,
            document.filename,
            document.record_count,
        )
        return document

    def export_all(
        self,
        export_format: Union[ExportFormat, str] = ExportFormat.CSV,
    ) -> ExportDocument:
        """Export every stored expense under the default dated filename."""
        return self.export(
            export_format, self.default_export_filename(), self.list_expenses()
        )

    def default_export_filename(self) -> str:
        return default_export_stem(self.today(), self._settings.export_filename_prefix)


def create_tracker(
    settings: Optional[Settings] = None,
    clock: Callable[[], date] = date.today,
) -> ExpenseTracker:
    """
    Build a tracker on the configured local file store.

    Returns:
        A ready ExpenseTracker
    """
    settings = settings or get_settings()
    storage_settings = settings.storage
    app_settings = settings.app
    configure_logging(app_settings.log_level)

    activity_logger = ActivityLogger()
    repository = ExpenseRepository(
        store=LocalFileStore(storage_settings.data_dir),
        namespace_key=storage_settings.namespace_key,
        activity_logger=activity_logger,
    )
    return ExpenseTracker(
        repository=repository,
        clock=clock,
        activity_logger=activity_logger,
        app_settings=app_settings,
    )
