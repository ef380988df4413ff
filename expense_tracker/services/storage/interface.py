"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Keep the flat file as the default backend
2. Use in-memory storage for testing
3. Keep the record store decoupled from where the lines actually live

The interface is intentionally tiny: the store always rewrites everything,
so a backend only has to read all lines and replace all lines.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Iterator

from expense_tracker.exceptions import (
    StorageError,
    StorageReadError,
    StorageWriteError,
)


class TransactionStorageInterface(ABC):
    """
    Abstract interface for transaction persistence.

    Backends deal in encoded lines; the codec lives above them.
    """

    @property
    @abstractmethod
    def location(self) -> str:
        """Human-readable name of where data is kept (used in logs)."""
        pass

    @abstractmethod
    def exists(self) -> bool:
        """
        Check whether anything has been persisted yet.

        A missing store is not an error; it just loads empty.
        """
        pass

    @abstractmethod
    def read_lines(self) -> Iterator[str]:
        """
        Yield persisted lines in order, without line terminators.

        Raises:
            StorageReadError: If existing data cannot be read
        """
        pass

    @abstractmethod
    def write_lines(self, lines: Iterable[str]) -> int:
        """
        Replace all persisted data with the given lines.

        Args:
            lines: Encoded records, in store order

        Returns:
            Number of lines written

        Raises:
            StorageWriteError: If the destination cannot be written
        """
        pass


__all__ = [
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    "TransactionStorageInterface",
]
