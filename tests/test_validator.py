"""Tests for entry-form validation."""

import pytest
from datetime import date, datetime
from decimal import Decimal

from expense_tracker.exceptions import InvalidEntryError
from expense_tracker.models.transaction import TransactionKind
from expense_tracker.validation import EntryValidator


@pytest.fixture
def validator():
    return EntryValidator(max_amount=10000)


def issue_fields(result, severity="error"):
    return {issue.field for issue in result.issues if issue.severity == severity}


class TestValidEntries:
    """Tests for entries that pass."""

    def test_valid_entry_builds_transaction(self, validator):
        """Test a clean submission produces the transaction."""
        result = validator.validate_entry("2024-01-05", "Food", "Lunch", "12.50", "EXPENSE")
        assert result.is_valid is True
        assert result.issues == []
        t = result.transaction
        assert t.date == date(2024, 1, 5)
        assert t.category == "Food"
        assert t.description == "Lunch"
        assert t.amount == Decimal("12.50")
        assert t.kind == TransactionKind.EXPENSE

    def test_text_fields_are_trimmed(self, validator):
        """Test surrounding whitespace is removed from every text input."""
        t = validator.build_entry(" 2024-01-05 ", "  Food ", " Lunch  ", " 12.5 ", " income ")
        assert t.category == "Food"
        assert t.description == "Lunch"
        assert t.amount == Decimal("12.50")
        assert t.kind == TransactionKind.INCOME

    def test_inner_whitespace_is_kept(self, validator):
        t = validator.build_entry("2024-01-05", "Eating  out", "a  b", "1", "EXPENSE")
        assert t.category == "Eating  out"
        assert t.description == "a  b"

    def test_accepts_date_objects(self, validator):
        """Test date and datetime values from a date picker."""
        assert validator.build_entry(date(2024, 1, 5), "Food", "", "1", "EXPENSE").date == date(2024, 1, 5)
        assert validator.build_entry(datetime(2024, 1, 5, 13, 0), "Food", "", "1", "EXPENSE").date == date(2024, 1, 5)

    def test_accepts_kind_enum(self, validator):
        t = validator.build_entry("2024-01-05", "Pay", "", "1000", TransactionKind.INCOME)
        assert t.kind == TransactionKind.INCOME

    @pytest.mark.parametrize("amount, expected", [
        ("12.505", Decimal("12.51")),
        ("0.005", Decimal("0.01")),
        (7, Decimal("7.00")),
        (Decimal("3.1"), Decimal("3.10")),
        (2.5, Decimal("2.50")),
    ])
    def test_amount_is_rounded_to_cents(self, validator, amount, expected):
        """Test amounts are stored as they will be persisted."""
        t = validator.build_entry("2024-01-05", "Food", "", amount, "EXPENSE")
        assert t.amount == expected

    def test_empty_description_is_fine(self, validator):
        result = validator.validate_entry("2024-01-05", "Food", None, "1", "EXPENSE")
        assert result.is_valid is True
        assert result.transaction.description == ""


class TestRejectedEntries:
    """Tests for entries that are refused."""

    @pytest.mark.parametrize("amount", ["0", "-5", "-0.01", "0.004", "abc", "", None, "NaN", "inf", "1,000"])
    def test_rejects_bad_amounts(self, validator, amount):
        """Test non-numeric and non-positive amounts are errors."""
        result = validator.validate_entry("2024-01-05", "Food", "", amount, "EXPENSE")
        assert result.is_valid is False
        assert result.transaction is None
        assert issue_fields(result) == {"amount"}

    @pytest.mark.parametrize("value", ["", None, "05/01/2024", "2024-1-5", "2024-02-30", "yesterday"])
    def test_rejects_bad_dates(self, validator, value):
        """Test malformed and impossible dates are errors."""
        result = validator.validate_entry(value, "Food", "", "1", "EXPENSE")
        assert result.is_valid is False
        assert issue_fields(result) == {"date"}

    @pytest.mark.parametrize("kind", ["", None, "TRANSFER", "in come"])
    def test_rejects_bad_kind(self, validator, kind):
        result = validator.validate_entry("2024-01-05", "Food", "", "1", kind)
        assert result.is_valid is False
        assert issue_fields(result) == {"kind"}

    @pytest.mark.parametrize("amount", ["1e30", "9" * 27, "9" * 29 + ".5"])
    def test_rejects_amounts_too_large_to_record(self, validator, amount):
        """Test oversize amounts are an entry error, not a crash."""
        result = validator.validate_entry("2024-01-05", "Food", "", amount, "EXPENSE")
        assert result.is_valid is False
        assert [i.issue_type for i in result.issues if i.severity == "error"] == ["too_large"]

    def test_build_entry_rejects_oversize_amount(self, validator):
        with pytest.raises(InvalidEntryError) as exc_info:
            validator.build_entry("2024-01-05", "Food", "", "1e30", "EXPENSE")
        assert [issue.field for issue in exc_info.value.issues] == ["amount"]

    def test_reports_every_problem_at_once(self, validator):
        """Test all failing fields are reported together."""
        result = validator.validate_entry("bad", "", "", "-1", "nope")
        assert issue_fields(result) == {"date", "amount", "kind"}
        assert result.has_errors is True

    def test_build_entry_raises_with_issues(self, validator):
        """Test InvalidEntryError carries the error-level issues."""
        with pytest.raises(InvalidEntryError) as exc_info:
            validator.build_entry("2024-01-05", "", "", "0", "EXPENSE")
        issues = exc_info.value.issues
        assert [issue.field for issue in issues] == ["amount"]
        assert all(issue.severity == "error" for issue in issues)
        assert "Amount must be positive" in str(exc_info.value)


class TestWarnings:
    """Tests for issues that do not block the entry."""

    def test_empty_category_warns(self, validator):
        """Test a blank category is accepted with a warning."""
        result = validator.validate_entry("2024-01-05", "   ", "", "1", "EXPENSE")
        assert result.is_valid is True
        assert result.transaction.category == ""
        assert issue_fields(result, "warning") == {"category"}

    def test_large_amount_warns(self, validator):
        """Test amounts above the limit are flagged but kept."""
        result = validator.validate_entry("2024-01-05", "Car", "", "25000", "EXPENSE")
        assert result.is_valid is True
        assert result.transaction.amount == Decimal("25000.00")
        assert issue_fields(result, "warning") == {"amount"}


class TestUserFriendlySummary:
    """Tests for get_user_friendly_summary."""

    def test_clean_entry(self, validator):
        result = validator.validate_entry("2024-01-05", "Food", "", "1", "EXPENSE")
        assert validator.get_user_friendly_summary(result) == "Entry added."

    def test_errors_and_fixes_listed(self, validator):
        result = validator.validate_entry("2024-01-05", "Food", "", "-3", "EXPENSE")
        summary = validator.get_user_friendly_summary(result)
        assert summary.startswith("Invalid input:")
        assert "Amount must be positive" in summary

    def test_warnings_listed(self, validator):
        result = validator.validate_entry("2024-01-05", "", "", "1", "EXPENSE")
        summary = validator.get_user_friendly_summary(result)
        assert "Please check:" in summary
        assert "Category is empty" in summary
