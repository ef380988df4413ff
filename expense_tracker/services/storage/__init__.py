"""
Storage Services Package

Provides the abstract storage interface and concrete implementations.
The flat file is the default backend; in-memory storage backs the tests.
"""

from expense_tracker.services.storage.interface import (
    StorageError,
    StorageReadError,
    StorageWriteError,
    TransactionStorageInterface,
)
from expense_tracker.services.storage.flat_file import FlatFileStorage
from expense_tracker.services.storage.memory import InMemoryStorage

__all__ = [
    # Interfaces
    "TransactionStorageInterface",
    # Exceptions
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    # Implementations
    "FlatFileStorage",
    "InMemoryStorage",
]
