"""
In-Memory Storage Implementation

Keeps lines in a list. Used by tests and by anything that wants a store
without touching the filesystem.
"""

from pathlib import Path
from typing import Iterable, Iterator, Optional

from expense_tracker.services.storage.interface import (
    StorageReadError,
    StorageWriteError,
    TransactionStorageInterface,
)


class InMemoryStorage(TransactionStorageInterface):
    """Line storage held in memory."""

    def __init__(self, lines: Optional[Iterable[str]] = None):
        self._lines: Optional[list[str]] = list(lines) if lines is not None else None
        self.write_count = 0
        self.fail_writes = False
        self.fail_reads = False

    @property
    def location(self) -> str:
        return "memory"

    @property
    def lines(self) -> list[str]:
        return list(self._lines or [])

    def exists(self) -> bool:
        return self._lines is not None

    def read_lines(self) -> Iterator[str]:
        if self.fail_reads:
            raise StorageReadError("Failed to read transactions from memory: reads disabled")
        yield from self.lines

    def write_lines(self, lines: Iterable[str]) -> int:
        if self.fail_writes:
            raise StorageWriteError(Path(self.location), OSError("writes disabled"))
        self._lines = list(lines)
        self.write_count += 1
        return len(self._lines)
