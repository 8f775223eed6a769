"""Expense validation package."""

from expense_tracker.validation.validator import ExpenseValidator, InvalidExpenseError

__all__ = ["ExpenseValidator", "InvalidExpenseError"]
