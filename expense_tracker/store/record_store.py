"""
Record Store

An ordered, mutable list of transactions bound to a storage backend.

GUARANTEES:
- Insertion order is preserved; duplicates are allowed
- Every mutation rewrites the whole backend synchronously
- A failed write never touches the in-memory list, which stays
  authoritative until the next successful save
- Removing an out-of-range position is a silent no-op

The store does not validate what it is given. Validation is the entry
layer's job (see expense_tracker.validation).
"""

from decimal import Decimal
from pathlib import Path
from typing import Optional, Union

from expense_tracker.audit import AuditLogger, get_logger
from expense_tracker.codec import decode_record, encode_record
from expense_tracker.exceptions import MalformedRecordError
from expense_tracker.models.transaction import Summary, Transaction, TransactionKind
from expense_tracker.services.storage import (
    FlatFileStorage,
    StorageReadError,
    StorageWriteError,
    TransactionStorageInterface,
)


logger = get_logger(__name__)


class RecordStore:
    """
    Ordered collection of transactions plus its persistence binding.

    Stores are plain objects: create as many as you like, each with its
    own backend.
    """

    def __init__(
        self,
        storage: TransactionStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._audit_logger = audit_logger
        self._transactions: list[Transaction] = []
        self.skipped_lines = 0
        self._load_error: Optional[StorageReadError] = None

    @property
    def storage(self) -> TransactionStorageInterface:
        return self._storage

    def __len__(self) -> int:
        return len(self._transactions)

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    @property
    def writable(self) -> bool:
        """False while the backend holds data that could not be loaded."""
        return self._load_error is None

    def load(self) -> int:
        """
        Replace the in-memory list with what the backend holds.

        Lines that fail to decode are dropped and logged; the remaining
        lines still load. A backend with nothing persisted yields an
        empty store.

        If the backend cannot be read at all, the store keeps its current
        contents and refuses to save until a later load succeeds, so the
        unread data is never overwritten.

        Returns:
            Number of transactions loaded

        Raises:
            StorageReadError: If existing data cannot be read at all
        """
        loaded: list[Transaction] = []
        skipped = 0

        try:
            if self._storage.exists():
                for line_number, line in enumerate(self._storage.read_lines(), start=1):
                    try:
                        loaded.append(decode_record(line))
                    except MalformedRecordError as e:
                        skipped += 1
                        logger.warning(
                            "record_skipped",
                            location=self._storage.location,
                            line_number=line_number,
                            reason=str(e),
                        )
                        if self._audit_logger:
                            self._audit_logger.log_record_skipped(
                                path=self._storage.location,
                                line_number=line_number,
                                reason=str(e),
                            )
        except StorageReadError as e:
            self._load_error = e
            logger.error("load_failed", location=self._storage.location, error=str(e))
            raise

        self._transactions = loaded
        self.skipped_lines = skipped
        self._load_error = None

        if self._audit_logger:
            self._audit_logger.log_store_loaded(
                path=self._storage.location,
                loaded=len(loaded),
                skipped=skipped,
            )
        return len(loaded)

    def save(self) -> None:
        """
        Rewrite the backend with the whole store, in current order.

        Raises:
            StorageWriteError: If the backend cannot be written, a record
                               cannot be encoded, or the last load failed
        """
        try:
            if self._load_error is not None:
                raise StorageWriteError(Path(self._storage.location), self._load_error)
            try:
                lines = [encode_record(t) for t in self._transactions]
            except MalformedRecordError as e:
                raise StorageWriteError(Path(self._storage.location), e) from e
            self._storage.write_lines(lines)
        except StorageWriteError as e:
            logger.error("save_failed", location=self._storage.location, error=str(e))
            if self._audit_logger:
                self._audit_logger.log_save_failed(
                    path=self._storage.location,
                    error_message=str(e),
                )
            raise

        if self._audit_logger:
            self._audit_logger.log_store_saved(
                path=self._storage.location,
                count=len(lines),
            )

    def export_to(self, path: Union[str, Path], encoding: str = "utf-8") -> int:
        """
        Write a copy of the store to another file in the same line format.

        Returns:
            Number of transactions exported

        Raises:
            StorageWriteError: If the file cannot be written or a record
                               cannot be encoded
        """
        target = FlatFileStorage(path, encoding=encoding)
        try:
            lines = [encode_record(t) for t in self._transactions]
        except MalformedRecordError as e:
            raise StorageWriteError(target.path, e) from e
        count = target.write_lines(lines)

        if self._audit_logger:
            self._audit_logger.log_store_exported(path=target.location, count=count)
        return count

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def append(self, transaction: Transaction) -> None:
        """
        Add a transaction at the end and persist.

        The transaction stays in memory even if the save fails.

        Raises:
            StorageWriteError: If the store could not be persisted
        """
        self._transactions.append(transaction)
        try:
            self.save()
        finally:
            if self._audit_logger:
                self._audit_logger.log_transaction_added(
                    index=len(self._transactions) - 1,
                    category=transaction.category,
                    amount=str(transaction.amount),
                    kind=transaction.kind.value,
                )

    def remove_at(self, index: int) -> bool:
        """
        Remove the transaction at a position and persist.

        Positions outside [0, size) are ignored without error; negative
        positions never count from the end.

        Returns:
            True if a transaction was removed

        Raises:
            StorageWriteError: If the store could not be persisted
        """
        if not 0 <= index < len(self._transactions):
            if self._audit_logger:
                self._audit_logger.log_remove_ignored(
                    index=index,
                    size=len(self._transactions),
                )
            return False

        removed = self._transactions.pop(index)
        try:
            self.save()
        finally:
            if self._audit_logger:
                self._audit_logger.log_transaction_removed(
                    index=index,
                    category=removed.category,
                    amount=str(removed.amount),
                )
        return True

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def list_transactions(self) -> tuple[Transaction, ...]:
        """Read-only view of the store, in order."""
        return tuple(self._transactions)

    def filter_by_category(self, category: Optional[str]) -> tuple[Transaction, ...]:
        """Transactions whose category matches exactly. None means all."""
        if category is None:
            return self.list_transactions()
        return tuple(t for t in self._transactions if t.category == category)

    def distinct_categories(self) -> set[str]:
        return {t.category for t in self._transactions}

    def _total(self, kind: TransactionKind) -> Decimal:
        return sum(
            (t.amount for t in self._transactions if t.kind == kind),
            Decimal("0"),
        )

    def total_income(self) -> Decimal:
        return self._total(TransactionKind.INCOME)

    def total_expense(self) -> Decimal:
        return self._total(TransactionKind.EXPENSE)

    def balance(self) -> Decimal:
        return sum((t.signed_amount for t in self._transactions), Decimal("0"))

    def summary(self) -> Summary:
        return Summary(
            total_income=self.total_income(),
            total_expense=self.total_expense(),
            transaction_count=len(self._transactions),
        )
