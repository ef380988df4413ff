"""
Audit Models for Smart Expense Tracker

Every change to the store, and every failure to persist it, is recorded
as an audit event. This gives:
1. A readable history of what happened to the data file
2. Debugging information when a save fails or a line is skipped

DESIGN DECISION: Audit events are append-only. We never delete or modify them.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Loading
    STORE_LOADED = "store_loaded"
    RECORD_SKIPPED = "record_skipped"

    # Mutations
    TRANSACTION_ADDED = "transaction_added"
    TRANSACTION_REMOVED = "transaction_removed"
    REMOVE_IGNORED = "remove_ignored"

    # Persistence
    STORE_SAVED = "store_saved"
    SAVE_FAILED = "save_failed"
    STORE_EXPORTED = "store_exported"

    # Entry form
    ENTRY_REJECTED = "entry_rejected"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant action creates one of these.
    """

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the event occurred (local time)"
    )
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )
    description: str = Field(
        ...,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    error_message: Optional[str] = None
    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.transaction_added(index, "Food", "12.50", "EXPENSE")
        event = AuditEventBuilder.save_failed("transactions.csv", "Permission denied")
    """

    @staticmethod
    def store_loaded(
        path: str,
        loaded: int,
        skipped: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORE_LOADED,
            severity=AuditSeverity.WARNING if skipped else AuditSeverity.INFO,
            description=f"Loaded {loaded} transactions from {path}",
            details={
                "path": path,
                "loaded": loaded,
                "skipped": skipped,
            },
        )

    @staticmethod
    def record_skipped(
        path: str,
        line_number: int,
        reason: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECORD_SKIPPED,
            severity=AuditSeverity.WARNING,
            description=f"Skipped malformed line {line_number} in {path}",
            details={
                "path": path,
                "line_number": line_number,
            },
            error_message=reason,
        )

    @staticmethod
    def transaction_added(
        index: int,
        category: str,
        amount: str,
        kind: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_ADDED,
            description=f"Transaction added: {category} - {amount} ({kind})",
            details={
                "index": index,
                "category": category,
                "amount": amount,
                "kind": kind,
            },
            is_user_action=True,
        )

    @staticmethod
    def transaction_removed(
        index: int,
        category: str,
        amount: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_REMOVED,
            description=f"Transaction removed at position {index}",
            details={
                "index": index,
                "category": category,
                "amount": amount,
            },
            is_user_action=True,
        )

    @staticmethod
    def remove_ignored(
        index: int,
        size: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REMOVE_IGNORED,
            severity=AuditSeverity.DEBUG,
            description=f"Remove ignored: position {index} outside store of {size}",
            details={
                "index": index,
                "size": size,
            },
            is_user_action=True,
        )

    @staticmethod
    def store_saved(
        path: str,
        count: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORE_SAVED,
            severity=AuditSeverity.DEBUG,
            description=f"Saved {count} transactions to {path}",
            details={
                "path": path,
                "count": count,
            },
        )

    @staticmethod
    def save_failed(
        path: str,
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            description=f"Failed to save transactions to {path}",
            details={
                "path": path,
            },
            error_message=error_message,
        )

    @staticmethod
    def store_exported(
        path: str,
        count: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORE_EXPORTED,
            description=f"Exported {count} transactions to {path}",
            details={
                "path": path,
                "count": count,
            },
            is_user_action=True,
        )

    @staticmethod
    def entry_rejected(
        issues: list[dict],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRY_REJECTED,
            severity=AuditSeverity.WARNING,
            description=f"Entry rejected with {len(issues)} issues",
            details={
                "issues": issues,
            },
            is_user_action=True,
        )
