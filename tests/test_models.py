"""
Tests for Smart Expense Tracker

Test strategy:
1. Unit tests for individual components (models, codec, validator, aggregator)
2. Store tests against in-memory storage, file tests against tmp_path
3. No UI in tests
"""

import pytest
from datetime import date
from decimal import Decimal

from pydantic import ValidationError

from expense_tracker.models.transaction import (
    Summary,
    Transaction,
    TransactionKind,
    ValidationIssue,
    ValidationResult,
)
from expense_tracker.models.chart import ChartLayout, ChartSlice
from expense_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)


def make_transaction(**overrides) -> Transaction:
    fields = dict(
        date=date(2024, 1, 5),
        category="Food",
        description="Lunch",
        amount=Decimal("12.50"),
        kind=TransactionKind.EXPENSE,
    )
    fields.update(overrides)
    return Transaction(**fields)


class TestTransactionModel:
    """Tests for the Transaction model."""

    def test_transaction_creation(self):
        """Test Transaction model creation."""
        t = make_transaction()
        assert t.date == date(2024, 1, 5)
        assert t.category == "Food"
        assert t.amount == Decimal("12.50")
        assert t.kind == TransactionKind.EXPENSE

    def test_transaction_is_immutable(self):
        """Test that a built transaction cannot be changed."""
        t = make_transaction()
        with pytest.raises(ValidationError):
            t.amount = Decimal("1.00")

    def test_transactions_compare_by_value(self):
        """Test that identical fields mean equal transactions."""
        assert make_transaction() == make_transaction()
        assert make_transaction() != make_transaction(description="Dinner")

    def test_store_model_does_not_reject_non_positive_amounts(self):
        """Test that the model leaves amount checks to the entry layer."""
        t = make_transaction(amount=Decimal("0"))
        assert t.amount == Decimal("0")

    def test_signed_amount_follows_kind(self):
        """Test that direction comes from kind, not the number."""
        expense = make_transaction(amount=Decimal("5.00"))
        income = make_transaction(amount=Decimal("5.00"), kind=TransactionKind.INCOME)
        assert expense.signed_amount == Decimal("-5.00")
        assert income.signed_amount == Decimal("5.00")

    def test_kind_values_are_canonical_names(self):
        """Test kind string values."""
        assert TransactionKind.INCOME.value == "INCOME"
        assert TransactionKind.EXPENSE.value == "EXPENSE"
        assert TransactionKind("EXPENSE") is TransactionKind.EXPENSE


class TestSummaryModel:
    """Tests for Summary."""

    def test_balance(self):
        """Test balance is income minus expense."""
        summary = Summary(
            total_income=Decimal("1000.00"),
            total_expense=Decimal("12.50"),
            transaction_count=2,
        )
        assert summary.balance == Decimal("987.50")

    def test_empty_summary(self):
        """Test defaults."""
        summary = Summary()
        assert summary.balance == Decimal("0")
        assert summary.transaction_count == 0


class TestChartModels:
    """Tests for chart layout models."""

    def test_slice_legend_label(self):
        """Test legend label uses two decimals."""
        s = ChartSlice(
            category="Food",
            total_amount=Decimal("12.5"),
            start_angle=0,
            sweep_angle=360,
            color="#e65c5c",
        )
        assert s.legend_label == "Food (12.50)"

    def test_slice_rejects_bad_color(self):
        """Test colour must be #rrggbb."""
        with pytest.raises(ValueError):
            ChartSlice(
                category="Food",
                total_amount=Decimal("1"),
                start_angle=0,
                sweep_angle=360,
                color="red",
            )

    def test_empty_layout_means_no_data(self):
        """Test an empty layout reports no expense data."""
        layout = ChartLayout()
        assert layout.no_expense_data is True
        assert layout.total_sweep == 0
        assert layout.legend_labels() == []


class TestValidationResult:
    """Tests for ValidationResult model."""

    def test_validation_result_has_errors(self):
        """Test has_errors property."""
        result = ValidationResult(
            is_valid=False,
            issues=[
                ValidationIssue(
                    field="amount",
                    issue_type="not_positive",
                    message="Amount must be positive",
                    severity="error",
                ),
            ],
        )
        assert result.has_errors is True
        assert len([i for i in result.issues if i.severity == "error"]) == 1
        assert result.transaction is None

    def test_validation_result_warnings_only(self):
        """Test that warnings don't count as errors."""
        result = ValidationResult(
            is_valid=True,
            transaction=make_transaction(),
            issues=[
                ValidationIssue(
                    field="category",
                    issue_type="missing",
                    message="Category is empty",
                    severity="warning",
                ),
            ],
        )
        assert result.has_errors is False
        assert result.is_valid is True
        assert result.warnings == ["Category is empty"]

    def test_validation_issue_severity_pattern(self):
        """Test that unknown severities are rejected."""
        with pytest.raises(ValueError):
            ValidationIssue(
                field="amount",
                issue_type="x",
                message="x",
                severity="fatal",
            )


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.STORE_SAVED,
            description="Saved",
        )
        assert event.event_type == AuditEventType.STORE_SAVED
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEventBuilder.transaction_added(
            index=0,
            category="Food",
            amount="12.50",
            kind="EXPENSE",
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "transaction_added"
        assert log_dict["details"]["category"] == "Food"
        assert log_dict["is_user_action"] is True

    def test_audit_event_builder_save_failed(self):
        """Test AuditEventBuilder.save_failed."""
        event = AuditEventBuilder.save_failed(
            path="transactions.csv",
            error_message="Permission denied",
        )
        assert event.event_type == AuditEventType.SAVE_FAILED
        assert event.severity == AuditSeverity.ERROR
        assert event.error_message == "Permission denied"

    def test_audit_event_builder_store_loaded_with_skips_warns(self):
        """Test that skipped lines raise the load event to a warning."""
        clean = AuditEventBuilder.store_loaded(path="f", loaded=5, skipped=0)
        dirty = AuditEventBuilder.store_loaded(path="f", loaded=4, skipped=1)
        assert clean.severity == AuditSeverity.INFO
        assert dirty.severity == AuditSeverity.WARNING
        assert dirty.details["skipped"] == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
