"""
Core Data Models for Smart Expense Tracker

These models define the schemas for all data flowing through the system.
They are designed to:
1. Be immutable once built, so the store can hand out read-only views
2. Keep amounts exact (Decimal, never float)
3. Provide clear validation error messages for the entry form

DESIGN DECISION: `amount` is always a magnitude.
Whether money came in or went out is carried by `kind` alone.
"""

import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionKind(str, Enum):
    """
    Direction of a transaction.

    The value doubles as the canonical name written to the data file.
    """
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


# =============================================================================
# CORE TRANSACTION MODEL
# =============================================================================

class Transaction(BaseModel):
    """
    One financial event.

    The store performs no validation of its own: anything that reaches
    it has already been through the entry validator, or was decoded
    from the data file.
    """
    model_config = ConfigDict(frozen=True)

    date: datetime.date = Field(
        ...,
        description="Calendar date of the transaction"
    )
    category: str = Field(
        default="",
        description="Free-text grouping label"
    )
    description: str = Field(
        default="",
        description="Free-text note, may be empty"
    )
    amount: Decimal = Field(
        ...,
        description="Magnitude of the transaction"
    )
    kind: TransactionKind = Field(
        ...,
        description="Income or expense"
    )

    @property
    def is_expense(self) -> bool:
        return self.kind == TransactionKind.EXPENSE

    @property
    def signed_amount(self) -> Decimal:
        """Amount with the sign implied by kind (expenses negative)."""
        return -self.amount if self.is_expense else self.amount


class Summary(BaseModel):
    """Dashboard totals."""

    total_income: Decimal = Field(
        default=Decimal("0"),
        description="Sum of all income amounts"
    )
    total_expense: Decimal = Field(
        default=Decimal("0"),
        description="Sum of all expense amounts"
    )
    transaction_count: int = Field(
        default=0,
        ge=0
    )

    @property
    def balance(self) -> Decimal:
        return self.total_income - self.total_expense


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single problem found in user-supplied entry data."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format', 'not_positive')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class ValidationResult(BaseModel):
    """
    Result of validating one entry form submission.

    When `is_valid` is True, `transaction` holds the value ready
    to append to the store.
    """

    is_valid: bool = Field(
        ...,
        description="Overall validation result"
    )
    transaction: Optional[Transaction] = Field(
        default=None,
        description="The parsed transaction, present only when valid"
    )
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All validation issues found"
    )

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def warnings(self) -> list[str]:
        return [issue.message for issue in self.issues if issue.severity == "warning"]
