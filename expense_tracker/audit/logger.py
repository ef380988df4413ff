"""
Audit Logger

DESIGN DECISION: Every change to the store is logged.
This provides:
1. Traceability of what happened to the data file
2. Debugging capability when a save fails or a line is dropped on load

The audit logger:
- Is synchronous, like the rest of the tracker
- Never raises into the caller
- Keeps a bounded in-memory history the UI can show
"""

import logging
from collections import deque
from typing import Any, Callable, Optional

import structlog

from expense_tracker.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


_SHARED_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
]


def configure_logging(level: str = "INFO", json_logs: bool = True) -> None:
    """
    Configure structlog on top of the standard logging module.

    Safe to call more than once; the last call wins.
    """
    logging.basicConfig(format="%(message)s", level=level, force=True)

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=_SHARED_PROCESSORS + [renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: Optional[str] = None):
    """Get a structlog logger bound to a module name."""
    return structlog.get_logger(name)


class AuditLogger:
    """
    Central audit logging service.

    Logs events to the structured local log and remembers the most
    recent ones. A failure to build or log an event is itself logged
    as `audit_failed` and never reaches the caller.
    """

    def __init__(self, history_size: int = 200):
        """
        Initialize audit logger.

        Args:
            history_size: How many recent events to keep in memory.
        """
        self._logger = get_logger("expense_tracker.audit")
        self._history: deque[AuditEvent] = deque(maxlen=history_size)

    @property
    def history(self) -> list[AuditEvent]:
        """Recent events, oldest first."""
        return list(self._history)

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event locally and keep it in the history.

        Returns True if the event was logged.
        """
        try:
            log_dict = event.to_log_dict()

            if event.severity == AuditSeverity.ERROR:
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception as e:
            # Log failure but don't raise
            self._logger.error(
                "audit_failed",
                error=str(e),
                event_id=str(event.event_id),
            )
            return False

        self._history.append(event)
        return True

    def _record(self, build: Callable[..., AuditEvent], **fields: Any) -> bool:
        """Build an event with an AuditEventBuilder method and log it."""
        try:
            event = build(**fields)
        except Exception as e:
            self._logger.error(
                "audit_failed",
                error=str(e),
                builder=getattr(build, "__name__", repr(build)),
            )
            return False
        return self.log(event)

    def log_store_loaded(self, path: str, loaded: int, skipped: int) -> bool:
        return self._record(
            AuditEventBuilder.store_loaded,
            path=path,
            loaded=loaded,
            skipped=skipped,
        )

    def log_record_skipped(self, path: str, line_number: int, reason: str) -> bool:
        return self._record(
            AuditEventBuilder.record_skipped,
            path=path,
            line_number=line_number,
            reason=reason,
        )

    def log_transaction_added(
        self,
        index: int,
        category: str,
        amount: str,
        kind: str,
    ) -> bool:
        return self._record(
            AuditEventBuilder.transaction_added,
            index=index,
            category=category,
            amount=amount,
            kind=kind,
        )

    def log_transaction_removed(self, index: int, category: str, amount: str) -> bool:
        return self._record(
            AuditEventBuilder.transaction_removed,
            index=index,
            category=category,
            amount=amount,
        )

    def log_remove_ignored(self, index: int, size: int) -> bool:
        return self._record(AuditEventBuilder.remove_ignored, index=index, size=size)

    def log_store_saved(self, path: str, count: int) -> bool:
        return self._record(AuditEventBuilder.store_saved, path=path, count=count)

    def log_save_failed(self, path: str, error_message: str) -> bool:
        return self._record(
            AuditEventBuilder.save_failed,
            path=path,
            error_message=error_message,
        )

    def log_store_exported(self, path: str, count: int) -> bool:
        return self._record(AuditEventBuilder.store_exported, path=path, count=count)

    def log_entry_rejected(self, issues: list[dict]) -> bool:
        return self._record(AuditEventBuilder.entry_rejected, issues=issues)
