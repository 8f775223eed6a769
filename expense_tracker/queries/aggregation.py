"""
Aggregation Engine

DESIGN DECISION: Every function here is pure and DETERMINISTIC.
- No function touches storage or mutates its input list
- Nothing reads the wall clock except through the `today` argument,
  which defaults to date.today() only when the caller passes None
- All money arithmetic is Decimal, so results are exactly reproducible

Empty input never fails: it yields zero-valued summaries and empty lists.
"""

import calendar
from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, Optional, Union

from expense_tracker.formatting import format_display_date
from expense_tracker.models.expense import (
    CategoryTotal,
    Expense,
    ExpenseCategory,
    ExpenseFilters,
    ExpenseSummary,
    ExportStats,
    MonthlyInsights,
    SpendingPoint,
    empty_breakdown,
)


ZERO = Decimal("0")
DEFAULT_LOOKBACK_DAYS = 365
DAYS_PER_BUCKET = 7


def _resolve_today(today: Optional[date]) -> date:
    return today if today is not None else date.today()


def _total(expenses: Iterable[Expense]) -> Decimal:
    return sum((expense.amount for expense in expenses), ZERO)


def month_bounds(day: date) -> tuple[date, date]:
    """Return (first_day, last_day) of the calendar month containing `day`."""
    last_day = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last_day)


def _first_of_month_before(day: date, months_back: int) -> date:
    month_index = day.year * 12 + (day.month - 1) - months_back
    return date(month_index // 12, month_index % 12 + 1, 1)


# =============================================================================
# FILTERING & ORDERING
# =============================================================================

def _matches(expense: Expense, filters: ExpenseFilters, query: str) -> bool:
    if filters.start_date and expense.date < filters.start_date:
        return False
    if filters.end_date and expense.date > filters.end_date:
        return False
    if filters.category is not None and expense.category != filters.category:
        return False
    if query and (
        query not in expense.description.lower()
        and query not in expense.category.value.lower()
    ):
        return False
    return True


def filter_expenses(
    expenses: list[Expense],
    filters: ExpenseFilters,
) -> list[Expense]:
    """
    Return the expenses that satisfy every filter, in input order.

    - Date bounds are inclusive; an absent bound is unbounded
    - category None matches every category
    - search_query matches description or category name, case-insensitively
    """
    query = filters.search_query.lower()
    return [expense for expense in expenses if _matches(expense, filters, query)]


def sort_for_display(expenses: list[Expense]) -> list[Expense]:
    """Newest first. Expenses on the same date keep their input order."""
    return sorted(expenses, key=lambda expense: expense.date, reverse=True)


def recent_expenses(expenses: list[Expense], limit: int = 5) -> list[Expense]:
    """The `limit` newest expenses, as listed on the dashboard."""
    return sort_for_display(expenses)[:limit]


# =============================================================================
# SUMMARIES
# =============================================================================

def top_category(
    breakdown: dict[ExpenseCategory, Decimal],
) -> Optional[ExpenseCategory]:
    """
    Category with the largest amount, or None if nothing is above zero.

    Ties go to the category declared first in ExpenseCategory.
    """
    best: Optional[ExpenseCategory] = None
    best_amount = ZERO
    for category in ExpenseCategory:
        amount = breakdown.get(category, ZERO)
        if amount > best_amount:
            best_amount = amount
            best = category
    return best


def summarize(
    expenses: list[Expense],
    today: Optional[date] = None,
) -> ExpenseSummary:
    """
    Compute the dashboard summary.

    `monthly_spending` covers the calendar month containing `today`, so the
    result is a snapshot for that date.
    """
    month_start, month_end = month_bounds(_resolve_today(today))

    breakdown = empty_breakdown()
    for expense in expenses:
        breakdown[expense.category] += expense.amount

    monthly = _total(
        expense for expense in expenses
        if month_start <= expense.date <= month_end
    )

    return ExpenseSummary(
        total_spending=_total(expenses),
        monthly_spending=monthly,
        category_breakdown=breakdown,
        top_category=top_category(breakdown),
    )


def daily_totals(expenses: list[Expense]) -> dict[date, Decimal]:
    """Sum of amounts per calendar day. Days without expenses are absent."""
    totals: dict[date, Decimal] = defaultdict(lambda: ZERO)
    for expense in expenses:
        totals[expense.date] += expense.amount
    return dict(totals)


def budget_streak(
    expenses: list[Expense],
    daily_budget: Union[Decimal, int, str],
    today: Optional[date] = None,
    lookback_days: int = DEFAULT_LOOKBACK_DAYS,
) -> int:
    """
    Count consecutive days, walking back from `today`, spent within budget.

    A day is within budget when its total is <= daily_budget; a day with
    no expenses totals zero. Counting stops at the first day over budget
    or after `lookback_days` days.
    """
    budget = Decimal(str(daily_budget))
    totals = daily_totals(expenses)
    start = _resolve_today(today)

    streak = 0
    for offset in range(lookback_days):
        day = start - timedelta(days=offset)
        if totals.get(day, ZERO) > budget:
            break
        streak += 1
    return streak


def monthly_insights(
    expenses: list[Expense],
    today: Optional[date] = None,
    top_n: int = 3,
) -> MonthlyInsights:
    """Current-month expenses, their category totals and the top categories."""
    month_start, month_end = month_bounds(_resolve_today(today))
    in_month = [
        expense for expense in expenses
        if month_start <= expense.date <= month_end
    ]

    breakdown = empty_breakdown()
    for expense in in_month:
        breakdown[expense.category] += expense.amount

    category_totals = [
        CategoryTotal(category=category, amount=amount)
        for category, amount in breakdown.items()
        if amount > ZERO
    ]
    # Stable sort: equal amounts stay in declaration order
    ranked = sorted(category_totals, key=lambda total: total.amount, reverse=True)

    return MonthlyInsights(
        month_start=month_start,
        month_end=month_end,
        expenses=in_month,
        category_totals=category_totals,
        top_categories=ranked[:top_n],
    )


def weekly_spending_trend(
    expenses: list[Expense],
    today: Optional[date] = None,
    months: int = 3,
) -> list[SpendingPoint]:
    """
    Spending in 7-day buckets over the last `months` calendar months.

    The window runs from the first day of the month `months - 1` before
    `today` to the last day of `today`'s month. Buckets are counted from the
    window start, so the final bucket may be shorter than seven days.
    """
    current = _resolve_today(today)
    window_start = _first_of_month_before(current, months - 1)
    _, window_end = month_bounds(current)

    totals = daily_totals(expenses)
    points = []
    bucket_start = window_start
    while bucket_start <= window_end:
        bucket_end = min(bucket_start + timedelta(days=DAYS_PER_BUCKET - 1), window_end)
        amount = ZERO
        day = bucket_start
        while day <= bucket_end:
            amount += totals.get(day, ZERO)
            day += timedelta(days=1)
        points.append(SpendingPoint(period_start=bucket_start, amount=amount))
        bucket_start = bucket_end + timedelta(days=1)
    return points


def has_spending(points: list[SpendingPoint]) -> bool:
    """False when the trend has no data worth charting."""
    return any(point.amount > ZERO for point in points)


# =============================================================================
# EXPORT SELECTION
# =============================================================================

def select_for_export(
    expenses: list[Expense],
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    categories: Optional[Iterable[ExpenseCategory]] = None,
) -> list[Expense]:
    """
    The export dialog's selection, oldest first.

    No categories (None or empty) means every category.
    """
    wanted = set(categories or ())
    selected = [
        expense for expense in expenses
        if (start_date is None or expense.date >= start_date)
        and (end_date is None or expense.date <= end_date)
        and (not wanted or expense.category in wanted)
    ]
    return sorted(selected, key=lambda expense: expense.date)


def export_stats(expenses: list[Expense]) -> ExportStats:
    """Record count, total, per-category counts and covered dates."""
    if not expenses:
        return ExportStats()

    counts = {category: 0 for category in ExpenseCategory}
    for expense in expenses:
        counts[expense.category] += 1

    dates = [expense.date for expense in expenses]
    return ExportStats(
        total_records=len(expenses),
        total_amount=_total(expenses),
        category_counts={
            category: count for category, count in counts.items() if count
        },
        first_date=min(dates),
        last_date=max(dates),
    )


def describe_date_range(start: Optional[date], end: Optional[date]) -> str:
    """Human-readable span, e.g. 'Jan 5, 2025 - Feb 1, 2025'."""
    if start is None or end is None:
        return "N/A"
    if start == end:
        return format_display_date(start)
    return f"{format_display_date(start)} - {format_display_date(end)}"
