"""Services package."""

from expense_tracker.services.storage import (
    FlatFileStorage,
    InMemoryStorage,
    StorageError,
    StorageReadError,
    StorageWriteError,
    TransactionStorageInterface,
)

__all__ = [
    "FlatFileStorage",
    "InMemoryStorage",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    "TransactionStorageInterface",
]
