"""Record store package."""

from expense_tracker.store.record_store import RecordStore

__all__ = ["RecordStore"]
