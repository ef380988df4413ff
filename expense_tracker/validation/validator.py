"""
Entry Validation

DESIGN DECISION: Everything the user types is checked here, before it
gets anywhere near the record store. The store itself never validates.

Checks that block the entry (errors):
- Date must be YYYY-MM-DD and a real calendar date
- Amount must be a number greater than zero (after rounding to cents)
  with few enough digits to record
- Kind must be INCOME or EXPENSE

Checks that only warn:
- Empty category (the chart will show a blank label)
- Unusually large amount

IMPORTANT: Validation NEVER silently fixes issues beyond trimming
surrounding whitespace, which the entry form has always done.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from expense_tracker.codec import parse_date, to_cents
from expense_tracker.config import get_settings
from expense_tracker.exceptions import InvalidEntryError
from expense_tracker.models.transaction import (
    Transaction,
    TransactionKind,
    ValidationIssue,
    ValidationResult,
)


DateInput = Union[str, date, None]
AmountInput = Union[str, int, float, Decimal, None]
KindInput = Union[str, TransactionKind, None]


class EntryValidator:
    """Turns raw entry-form values into a validated Transaction."""

    def __init__(self, max_amount: Optional[float] = None):
        """
        Initialize validator.

        Args:
            max_amount: Amounts above this produce a warning.
                        Defaults to the configured app setting.
        """
        if max_amount is None:
            max_amount = get_settings().app.max_amount
        self._max_amount = Decimal(str(max_amount))

    def _parse_date(
        self,
        value: DateInput,
        issues: list[ValidationIssue],
    ) -> Optional[date]:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value

        text = (value or "").strip()
        if not text:
            issues.append(ValidationIssue(
                field="date",
                issue_type="missing",
                message="Date is required",
                severity="error",
                suggested_fix="Enter the date as YYYY-MM-DD",
            ))
            return None

        try:
            return parse_date(text)
        except ValueError:
            issues.append(ValidationIssue(
                field="date",
                issue_type="invalid_format",
                message=f"'{text}' is not a valid date",
                severity="error",
                suggested_fix="Enter the date as YYYY-MM-DD",
            ))
            return None

    def _parse_amount(
        self,
        value: AmountInput,
        issues: list[ValidationIssue],
    ) -> Optional[Decimal]:
        text = str(value).strip() if value is not None else ""
        if not text:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="missing",
                message="Amount is required",
                severity="error",
            ))
            return None

        try:
            amount = Decimal(text)
        except InvalidOperation:
            amount = None

        if amount is None or not amount.is_finite():
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_format",
                message=f"'{text}' is not a number",
                severity="error",
                suggested_fix="Enter a number such as 12.50",
            ))
            return None

        try:
            amount = to_cents(amount)
        except ValueError:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="too_large",
                message=f"'{text}' has too many digits to record",
                severity="error",
                suggested_fix="Enter a smaller amount",
            ))
            return None

        if amount <= 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="not_positive",
                message="Amount must be positive",
                severity="error",
                suggested_fix="Pick Income or Expense for the direction, not a minus sign",
            ))
            return None

        if amount > self._max_amount:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="suspicious_value",
                message=f"Amount ({amount:,.2f}) seems unusually high",
                severity="warning",
                suggested_fix="Please verify this amount is correct",
            ))
        return amount

    def _parse_kind(
        self,
        value: KindInput,
        issues: list[ValidationIssue],
    ) -> Optional[TransactionKind]:
        if isinstance(value, TransactionKind):
            return value
        try:
            return TransactionKind((value or "").strip().upper())
        except ValueError:
            issues.append(ValidationIssue(
                field="kind",
                issue_type="invalid_value",
                message=f"Type must be INCOME or EXPENSE, got '{value}'",
                severity="error",
            ))
            return None

    def validate_entry(
        self,
        date_value: DateInput,
        category: Optional[str],
        description: Optional[str],
        amount: AmountInput,
        kind: KindInput,
    ) -> ValidationResult:
        """
        Validate one entry form submission.

        Returns:
            ValidationResult with every issue found. When valid, it also
            carries the Transaction ready to append.
        """
        issues: list[ValidationIssue] = []

        parsed_date = self._parse_date(date_value, issues)
        parsed_amount = self._parse_amount(amount, issues)
        parsed_kind = self._parse_kind(kind, issues)
        category = (category or "").strip()
        description = (description or "").strip()

        if not category:
            issues.append(ValidationIssue(
                field="category",
                issue_type="missing",
                message="Category is empty",
                severity="warning",
                suggested_fix="Add a category so the chart can group this entry",
            ))

        is_valid = not any(issue.severity == "error" for issue in issues)
        transaction = None
        if is_valid:
            transaction = Transaction(
                date=parsed_date,
                category=category,
                description=description,
                amount=parsed_amount,
                kind=parsed_kind,
            )

        return ValidationResult(
            is_valid=is_valid,
            transaction=transaction,
            issues=issues,
        )

    def build_entry(
        self,
        date_value: DateInput,
        category: Optional[str],
        description: Optional[str],
        amount: AmountInput,
        kind: KindInput,
    ) -> Transaction:
        """
        Validate and return the Transaction.

        Raises:
            InvalidEntryError: If any error-level issue was found
        """
        result = self.validate_entry(date_value, category, description, amount, kind)
        if not result.is_valid:
            raise InvalidEntryError(
                [issue for issue in result.issues if issue.severity == "error"]
            )
        return result.transaction

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """Short message for the entry form."""
        if result.is_valid and not result.warnings:
            return "Entry added."

        lines = []
        if result.has_errors:
            lines.append("Invalid input:")
            for issue in result.issues:
                if issue.severity == "error":
                    lines.append(f"   • {issue.message}")
                    if issue.suggested_fix:
                        lines.append(f"     {issue.suggested_fix}")

        if result.warnings:
            lines.append("Please check:")
            for warning in result.warnings:
                lines.append(f"   • {warning}")

        return "\n".join(lines)
