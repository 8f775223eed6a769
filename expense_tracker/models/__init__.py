"""
Data Models Package

This package contains all Pydantic models used in the Expense Tracker core.
All data flowing through the system must conform to these schemas.
"""

from expense_tracker.models.expense import (
    CategoryTotal,
    Expense,
    ExpenseCategory,
    ExpenseFilters,
    ExpenseInput,
    ExpenseSummary,
    ExportStats,
    MonthlyInsights,
    SpendingPoint,
    empty_breakdown,
)
from expense_tracker.models.activity import (
    ActivityEvent,
    ActivityEventBuilder,
    ActivityEventType,
    ActivitySeverity,
)
from expense_tracker.models.validation import (
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    # Expense models
    "CategoryTotal",
    "Expense",
    "ExpenseCategory",
    "ExpenseFilters",
    "ExpenseInput",
    "ExpenseSummary",
    "ExportStats",
    "MonthlyInsights",
    "SpendingPoint",
    "empty_breakdown",
    # Activity models
    "ActivityEvent",
    "ActivityEventBuilder",
    "ActivityEventType",
    "ActivitySeverity",
    # Validation models
    "ValidationIssue",
    "ValidationResult",
]
