"""
Domain exceptions for Smart Expense Tracker.

None of these are fatal. Each one means "that operation had no effect,
tell the user", and the in-memory store stays authoritative.
"""

from pathlib import Path
from typing import Optional


class TrackerError(Exception):
    """Base exception for everything the tracker raises on purpose."""
    pass


class MalformedRecordError(TrackerError):
    """A persisted line could not be decoded into a transaction."""

    def __init__(self, message: str, line: Optional[str] = None):
        super().__init__(message)
        self.line = line


class StorageError(TrackerError):
    """Base exception for storage operations."""
    pass


class StorageWriteError(StorageError):
    """The store could not be written to its destination."""

    def __init__(self, path: Path, cause: Optional[BaseException] = None):
        reason = f": {cause}" if cause else ""
        super().__init__(f"Failed to write transactions to {path}{reason}")
        self.path = path
        self.cause = cause


class StorageReadError(StorageError):
    """The data file exists but could not be read at all."""
    pass


class InvalidEntryError(TrackerError):
    """User-supplied entry data failed validation before reaching the store."""

    def __init__(self, issues: list):
        messages = "; ".join(issue.message for issue in issues)
        super().__init__(f"Invalid entry: {messages}")
        self.issues = issues
