"""
Data Models Package

This package contains all Pydantic models used in Smart Expense Tracker.
All data flowing through the system must conform to these schemas.
"""

from expense_tracker.models.transaction import (
    Summary,
    Transaction,
    TransactionKind,
    ValidationIssue,
    ValidationResult,
)
from expense_tracker.models.chart import (
    ChartLayout,
    ChartSlice,
)
from expense_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Transaction models
    "Summary",
    "Transaction",
    "TransactionKind",
    "ValidationIssue",
    "ValidationResult",
    # Chart models
    "ChartLayout",
    "ChartSlice",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
