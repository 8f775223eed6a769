"""Tests for the two-stage expense validator."""

import pytest
from datetime import date
from decimal import Decimal

from expense_tracker.models import ExpenseCategory, ValidationIssue, ValidationResult
from expense_tracker.validation import ExpenseValidator, InvalidExpenseError


TODAY = date(2025, 3, 15)


def raw_lunch(**overrides) -> dict:
    values = {
        "date": "2025-01-05",
        "amount": "12.50",
        "category": "Food",
        "description": "Lunch",
    }
    values.update(overrides)
    return values


class TestSchemaStage:
    """Stage 1: structural checks."""

    def test_valid_input(self):
        result = ExpenseValidator().validate(raw_lunch(), today=TODAY)
        assert result.is_valid
        assert result.schema_valid and result.semantic_valid
        assert result.issues == []

    def test_missing_field(self):
        raw = raw_lunch()
        del raw["description"]
        result = ExpenseValidator().validate(raw, today=TODAY)

        assert not result.schema_valid
        assert not result.is_valid
        assert [(i.field, i.issue_type) for i in result.issues] == [
            ("description", "missing"),
        ]

    @pytest.mark.parametrize("field,value", [
        ("amount", "0"),
        ("amount", "-3"),
        ("amount", "twelve"),
        ("category", "Groceries"),
        ("description", "   "),
        ("date", "05/01/2025"),
    ])
    def test_invalid_values(self, field, value):
        result = ExpenseValidator().validate(raw_lunch(**{field: value}), today=TODAY)

        assert not result.is_valid
        assert result.issues[0].field == field
        assert result.issues[0].issue_type == "invalid_value"
        assert result.issues[0].suggested_fix

    def test_semantic_stage_skipped_after_schema_failure(self):
        result = ExpenseValidator().validate(
            raw_lunch(date="2030-01-01", amount="0"), today=TODAY
        )
        assert not result.semantic_valid
        assert [i.field for i in result.issues] == ["amount"]


class TestSemanticStage:
    """Stage 2: date and amount sanity."""

    def test_future_date_is_error(self):
        result = ExpenseValidator().validate(raw_lunch(date="2025-03-16"), today=TODAY)
        assert result.schema_valid
        assert not result.is_valid
        assert result.issues[0].issue_type == "future_date"

    def test_today_is_allowed(self):
        result = ExpenseValidator().validate(raw_lunch(date="2025-03-15"), today=TODAY)
        assert result.is_valid

    def test_amount_above_maximum_is_error(self):
        validator = ExpenseValidator(max_amount=Decimal("100"))
        result = validator.validate(raw_lunch(amount="250"), today=TODAY)

        assert result.schema_valid
        assert not result.is_valid
        assert result.issues[0].issue_type == "amount_too_large"
        assert result.issues[0].message == "Amount ($250.00) is above the allowed maximum"
        assert result.issues[0].suggested_fix == "Enter an amount no larger than $100.00"

    def test_maximum_itself_is_allowed(self):
        validator = ExpenseValidator(max_amount=Decimal("100"))
        assert validator.validate(raw_lunch(amount="100"), today=TODAY).is_valid

    def test_huge_amount_rejected_by_default(self):
        result = ExpenseValidator().validate(raw_lunch(amount="1e400"), today=TODAY)
        assert not result.is_valid
        assert [i.field for i in result.issues] == ["amount"]


class TestParse:
    """Tests for parse()."""

    def test_parse_returns_input(self):
        fields = ExpenseValidator().parse(raw_lunch(), today=TODAY)
        assert fields.category == ExpenseCategory.FOOD
        assert fields.amount == Decimal("12.50")

    def test_parse_raises_with_result(self):
        with pytest.raises(InvalidExpenseError) as exc_info:
            ExpenseValidator().parse(raw_lunch(amount="-1"), today=TODAY)
        assert exc_info.value.result.error_count == 1
        assert isinstance(exc_info.value, ValueError)


class TestUserFriendlySummary:
    """Tests for the form summary text."""

    def test_valid(self):
        validator = ExpenseValidator()
        result = validator.validate(raw_lunch(), today=TODAY)
        assert validator.get_user_friendly_summary(result) == "✅ Looks good!"

    def test_errors_listed_with_fixes(self):
        validator = ExpenseValidator()
        result = validator.validate(raw_lunch(date="2025-04-01"), today=TODAY)
        summary = validator.get_user_friendly_summary(result)

        assert summary.startswith("❌ Please fix the following:")
        assert "Date (2025-04-01) is in the future" in summary
        assert "💡" in summary

    def test_warnings_listed(self):
        validator = ExpenseValidator()
        result = ValidationResult(
            schema_valid=True,
            semantic_valid=True,
            is_valid=True,
            issues=[ValidationIssue(
                field="description",
                issue_type="duplicate",
                message="Same expense already recorded today",
                severity="warning",
            )],
            warnings=["Same expense already recorded today"],
        )
        summary = validator.get_user_friendly_summary(result)

        assert summary.startswith("⚠️ Please verify the following:")
