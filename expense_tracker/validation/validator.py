"""
Two-Stage Expense Validation

The presentation layer validates form input before anything reaches the
repository. This module is the validator it uses.

STAGE 1 - SCHEMA VALIDATION:
- Required fields present
- Date parses, amount is a positive number
- Category is one of the fixed categories
- Description is not blank

STAGE 2 - SEMANTIC VALIDATION (only if stage 1 passes):
- Date is not in the future
- Amount is not above the configured maximum

IMPORTANT: Validation NEVER silently fixes issues.
It reports them for the user to correct.
"""

from datetime import date
from decimal import Decimal
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from expense_tracker.formatting import format_currency
from expense_tracker.models.expense import ExpenseCategory, ExpenseInput
from expense_tracker.models.validation import ValidationIssue, ValidationResult


class InvalidExpenseError(ValueError):
    """Raised when expense input fails validation."""

    def __init__(self, result: ValidationResult):
        self.result = result
        messages = "; ".join(
            issue.message for issue in result.issues if issue.severity == "error"
        )
        super().__init__(f"Invalid expense: {messages}")


_SCHEMA_FIXES = {
    "date": "Pick a date in YYYY-MM-DD format",
    "amount": "Enter an amount greater than zero",
    "category": f"Choose one of: {', '.join(c.value for c in ExpenseCategory)}",
    "description": "Enter a short description",
}


class ExpenseValidator:
    """Validates expense input through a two-stage pipeline."""

    def __init__(
        self,
        max_amount: Decimal = Decimal("1000000"),
        currency_symbol: str = "$",
    ):
        self._max_amount = max_amount
        self._currency_symbol = currency_symbol

    def _validate_schema(
        self,
        raw: Mapping[str, Any],
    ) -> tuple[Optional[ExpenseInput], list[ValidationIssue]]:
        """
        Stage 1: build an ExpenseInput and translate pydantic errors.

        Returns: (parsed_input_or_None, list_of_issues)
        """
        try:
            return ExpenseInput.model_validate(dict(raw)), []
        except ValidationError as e:
            issues = []
            for error in e.errors():
                field = str(error["loc"][0]) if error["loc"] else "expense"
                issue_type = "missing" if error["type"] == "missing" else "invalid_value"
                issues.append(ValidationIssue(
                    field=field,
                    issue_type=issue_type,
                    message=f"{field.capitalize()}: {error['msg']}",
                    severity="error",
                    suggested_fix=_SCHEMA_FIXES.get(field),
                ))
            return None, issues

    def _validate_semantic(
        self,
        fields: ExpenseInput,
        today: date,
    ) -> tuple[bool, list[ValidationIssue]]:
        """
        Stage 2: date and amount sanity.

        Returns: (is_valid, list_of_issues)
        """
        issues = []

        if fields.date > today:
            issues.append(ValidationIssue(
                field="date",
                issue_type="future_date",
                message=f"Date ({fields.date.isoformat()}) is in the future",
                severity="error",
                suggested_fix="Expenses can only be recorded for today or earlier",
            ))

        if fields.amount > self._max_amount:
            amount = format_currency(fields.amount, self._currency_symbol)
            issues.append(ValidationIssue(
                field="amount",
                issue_type="amount_too_large",
                message=f"Amount ({amount}) is above the allowed maximum",
                severity="error",
                suggested_fix=(
                    "Enter an amount no larger than "
                    f"{format_currency(self._max_amount, self._currency_symbol)}"
                ),
            ))

        is_valid = not any(issue.severity == "error" for issue in issues)
        return is_valid, issues

    def validate(
        self,
        raw: Mapping[str, Any],
        today: Optional[date] = None,
    ) -> ValidationResult:
        """
        Run the full two-stage pipeline on raw form values.

        Args:
            raw: Mapping with date, amount, category and description
            today: Reference date for the future-date check

        Returns:
            ValidationResult with all issues found
        """
        result, _ = self._run(raw, today)
        return result

    def validate_input(
        self,
        fields: ExpenseInput,
        today: Optional[date] = None,
    ) -> ValidationResult:
        """Stage 2 only, for input that is already a parsed ExpenseInput."""
        semantic_valid, issues = self._validate_semantic(
            fields, today if today is not None else date.today()
        )
        return ValidationResult(
            schema_valid=True,
            semantic_valid=semantic_valid,
            is_valid=semantic_valid,
            issues=issues,
            warnings=[i.message for i in issues if i.severity == "warning"],
        )

    def parse(
        self,
        raw: Mapping[str, Any],
        today: Optional[date] = None,
    ) -> ExpenseInput:
        """
        Validate and return the parsed input.

        Raises:
            InvalidExpenseError: If any error-level issue was found
        """
        result, fields = self._run(raw, today)
        if not result.is_valid or fields is None:
            raise InvalidExpenseError(result)
        return fields

    def _run(
        self,
        raw: Mapping[str, Any],
        today: Optional[date],
    ) -> tuple[ValidationResult, Optional[ExpenseInput]]:
        all_issues = []

        fields, schema_issues = self._validate_schema(raw)
        all_issues.extend(schema_issues)
        schema_valid = fields is not None

        semantic_valid = False
        if fields is not None:
            semantic_valid, semantic_issues = self._validate_semantic(
                fields, today if today is not None else date.today()
            )
            all_issues.extend(semantic_issues)

        warnings = [i.message for i in all_issues if i.severity == "warning"]

        result = ValidationResult(
            schema_valid=schema_valid,
            semantic_valid=semantic_valid,
            is_valid=schema_valid and semantic_valid,
            issues=all_issues,
            warnings=warnings,
        )
        return result, fields

    def get_user_friendly_summary(
        self,
        result: ValidationResult,
    ) -> str:
        """Summary of validation results to show next to the form."""
        if result.is_valid and not result.warnings:
            return "✅ Looks good!"

        lines = []

        if result.has_errors:
            lines.append("❌ Please fix the following:")
            for issue in result.issues:
                if issue.severity == "error":
                    lines.append(f"   • {issue.message}")
                    if issue.suggested_fix:
                        lines.append(f"     💡 {issue.suggested_fix}")

        if result.warnings:
            if lines:
                lines.append("")
            lines.append("⚠️ Please verify the following:")
            for warning in result.warnings:
                lines.append(f"   • {warning}")

        return "\n".join(lines)
