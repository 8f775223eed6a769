"""Aggregation engine package."""

from expense_tracker.queries.aggregation import (
    budget_streak,
    daily_totals,
    describe_date_range,
    export_stats,
    filter_expenses,
    has_spending,
    month_bounds,
    monthly_insights,
    recent_expenses,
    select_for_export,
    sort_for_display,
    summarize,
    top_category,
    weekly_spending_trend,
)

__all__ = [
    "budget_streak",
    "daily_totals",
    "describe_date_range",
    "export_stats",
    "filter_expenses",
    "has_spending",
    "month_bounds",
    "monthly_insights",
    "recent_expenses",
    "select_for_export",
    "sort_for_display",
    "summarize",
    "top_category",
    "weekly_spending_trend",
]
