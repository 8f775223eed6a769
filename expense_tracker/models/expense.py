"""
Core Data Models for the Expense Tracker

These models define the strict schemas for every expense flowing through
the system. They are designed to:
1. Enforce the record invariants at runtime (positive amount, closed category set)
2. Provide clear validation error messages
3. Serialize to the persisted JSON layout without custom glue

DESIGN DECISION: Amounts are Decimal end to end.
Summaries must be exactly reproducible, so no float arithmetic is done on money,
and amounts are persisted and exported as plain decimal strings.
"""

import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class ExpenseCategory(str, Enum):
    """
    Supported expense categories.

    DESIGN DECISION: Declaration order is meaningful. It is the order of
    every category breakdown and the tie-break for the top category.
    """
    FOOD = "Food"
    TRANSPORTATION = "Transportation"
    ENTERTAINMENT = "Entertainment"
    SHOPPING = "Shopping"
    BILLS = "Bills"
    OTHER = "Other"

    @property
    def color(self) -> str:
        """Chart color used by the presentation layer."""
        return _CATEGORY_COLORS[self]

    @property
    def icon(self) -> str:
        return _CATEGORY_ICONS[self]


_CATEGORY_COLORS = {
    ExpenseCategory.FOOD: "#10b981",
    ExpenseCategory.TRANSPORTATION: "#3b82f6",
    ExpenseCategory.ENTERTAINMENT: "#8b5cf6",
    ExpenseCategory.SHOPPING: "#ec4899",
    ExpenseCategory.BILLS: "#f59e0b",
    ExpenseCategory.OTHER: "#6b7280",
}

_CATEGORY_ICONS = {
    ExpenseCategory.FOOD: "🍔",
    ExpenseCategory.TRANSPORTATION: "🚗",
    ExpenseCategory.ENTERTAINMENT: "🎬",
    ExpenseCategory.SHOPPING: "🛍️",
    ExpenseCategory.BILLS: "📄",
    ExpenseCategory.OTHER: "💰",
}


def empty_breakdown() -> dict[ExpenseCategory, Decimal]:
    """Zero-initialized mapping with every category, in declaration order."""
    return {category: Decimal("0") for category in ExpenseCategory}


# =============================================================================
# CORE EXPENSE MODEL
# =============================================================================

class ExpenseInput(BaseModel):
    """
    The user-editable fields of an expense (everything except the id).

    This is what the presentation layer hands to the repository on
    create and update.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    date: datetime.date = Field(
        ...,
        description="Calendar date of the expense (YYYY-MM-DD)"
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        description="Amount spent, in currency units"
    )
    category: ExpenseCategory = Field(
        ...,
        description="Expense category"
    )
    description: str = Field(
        ...,
        min_length=1,
        description="Short label for the expense"
    )

    @field_serializer("amount", when_used="json")
    def serialize_amount(self, amount: Decimal) -> str:
        # Plain decimal string, so no digits are lost to float conversion
        return format(amount, "f")


class Expense(ExpenseInput):
    """
    A persisted expense.

    CRITICAL: `id` is assigned by the repository at creation and never changes.
    Updates replace every other field.
    """

    id: str = Field(
        ...,
        min_length=1,
        description="Opaque unique identifier"
    )

    def to_record(self) -> dict:
        """JSON-ready dict in the persisted field order."""
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "amount": format(self.amount, "f"),
            "category": self.category.value,
            "description": self.description,
        }

    def to_input(self) -> ExpenseInput:
        """The editable fields of this expense."""
        return ExpenseInput(
            date=self.date,
            amount=self.amount,
            category=self.category,
            description=self.description,
        )


# =============================================================================
# QUERY MODELS
# =============================================================================

class ExpenseFilters(BaseModel):
    """
    Ephemeral query object used to narrow an expense list.

    Absent bounds are unbounded. `category=None` matches every category;
    the literal "All" used by the category picker is accepted too.
    """

    start_date: Optional[datetime.date] = None
    end_date: Optional[datetime.date] = None
    category: Optional[ExpenseCategory] = None
    search_query: str = ""

    @field_validator("category", mode="before")
    @classmethod
    def normalize_all(cls, v):
        """Map the "All" wildcard to None."""
        if isinstance(v, str):
            v = v.strip()
        if v is None or v == "" or (isinstance(v, str) and v.lower() == "all"):
            return None
        return v

    @field_validator("search_query", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return v or ""


# =============================================================================
# DERIVED MODELS (never stored)
# =============================================================================

class ExpenseSummary(BaseModel):
    """
    Dashboard summary for a list of expenses.

    `monthly_spending` depends on the evaluation date: treat the whole
    summary as a snapshot.
    """

    total_spending: Decimal = Decimal("0")
    monthly_spending: Decimal = Decimal("0")
    category_breakdown: dict[ExpenseCategory, Decimal] = Field(
        default_factory=empty_breakdown
    )
    top_category: Optional[ExpenseCategory] = None


class CategoryTotal(BaseModel):
    """Amount spent in one category."""

    category: ExpenseCategory
    amount: Decimal


class SpendingPoint(BaseModel):
    """One bucket of the spending trend chart."""

    period_start: datetime.date
    amount: Decimal


class MonthlyInsights(BaseModel):
    """Current-month view shown on the insights tab."""

    month_start: datetime.date
    month_end: datetime.date
    expenses: list[Expense] = Field(default_factory=list)
    category_totals: list[CategoryTotal] = Field(
        default_factory=list,
        description="Non-zero category totals, declaration order"
    )
    top_categories: list[CategoryTotal] = Field(
        default_factory=list,
        description="Largest categories first"
    )


class ExportStats(BaseModel):
    """Figures shown in the export summary and at the top of a report."""

    total_records: int = 0
    total_amount: Decimal = Decimal("0")
    category_counts: dict[ExpenseCategory, int] = Field(default_factory=dict)
    first_date: Optional[datetime.date] = None
    last_date: Optional[datetime.date] = None
