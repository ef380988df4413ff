"""
Main Orchestrator for Smart Expense Tracker

This module ties the components together behind one plain object the UI
talks to. The UI (Streamlit today, anything tomorrow) never touches the
store, the codec or the aggregator directly.

Flows:
1. Add entry (raw form values -> validate -> append -> persist)
2. Delete (position -> lenient remove -> persist)
3. Chart (store contents -> layout -> figure)
4. Export (store -> another file, same format)

DESIGN DECISION: The session is passed around explicitly. There is no
module-level store, so tests can run as many independent sessions as
they like.
"""

from datetime import date
from pathlib import Path
from typing import Optional, Union

from matplotlib.figure import Figure

from expense_tracker.audit import AuditLogger, configure_logging, get_logger
from expense_tracker.charts import render_pie
from expense_tracker.config import Settings, get_settings
from expense_tracker.exceptions import InvalidEntryError, StorageReadError
from expense_tracker.models.chart import ChartLayout
from expense_tracker.models.transaction import Summary, Transaction
from expense_tracker.queries import build_chart_layout
from expense_tracker.services.storage import FlatFileStorage
from expense_tracker.store import RecordStore
from expense_tracker.validation import EntryValidator
from expense_tracker.validation.validator import AmountInput, DateInput, KindInput


logger = get_logger(__name__)


class TrackerSession:
    """
    One user's tracker: a store plus the services around it.

    Every method is synchronous and returns once the data file has been
    rewritten (or the write has failed).
    """

    def __init__(
        self,
        store: RecordStore,
        validator: Optional[EntryValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
        settings: Optional[Settings] = None,
    ):
        self._store = store
        self._validator = validator or EntryValidator()
        self._audit_logger = audit_logger
        self._settings = settings

    @property
    def store(self) -> RecordStore:
        return self._store

    @property
    def validator(self) -> EntryValidator:
        return self._validator

    @property
    def audit_logger(self) -> Optional[AuditLogger]:
        return self._audit_logger

    def add_entry(
        self,
        date_value: DateInput,
        category: Optional[str],
        description: Optional[str],
        amount: AmountInput,
        kind: KindInput,
    ) -> Transaction:
        """
        Validate raw form values and append the resulting transaction.

        An omitted date means today.

        Raises:
            InvalidEntryError: If validation fails (store untouched)
            StorageWriteError: If the append could not be persisted
                               (the transaction stays in memory)
        """
        if date_value is None:
            date_value = date.today()

        try:
            transaction = self._validator.build_entry(
                date_value, category, description, amount, kind
            )
        except InvalidEntryError as e:
            if self._audit_logger:
                self._audit_logger.log_entry_rejected(
                    issues=[issue.model_dump() for issue in e.issues]
                )
            raise

        self._store.append(transaction)
        return transaction

    def delete(self, index: int) -> bool:
        """
        Remove the transaction at a store position.

        Returns False, without error, for positions outside the store.
        """
        return self._store.remove_at(index)

    def transactions(self, category: Optional[str] = None) -> tuple[Transaction, ...]:
        """Store contents in order, optionally limited to one category."""
        return self._store.filter_by_category(category)

    def categories(self) -> list[str]:
        """Distinct categories, sorted, for filter pickers."""
        return sorted(self._store.distinct_categories())

    def summary(self) -> Summary:
        return self._store.summary()

    def chart_layout(self) -> ChartLayout:
        return build_chart_layout(self._store.list_transactions())

    def chart_figure(self) -> Figure:
        chart_settings = self._settings.chart if self._settings else None
        return render_pie(self.chart_layout(), chart_settings)

    def export(self, path: Union[str, Path]) -> int:
        """
        Copy the store to another file.

        Raises:
            StorageWriteError: If the file cannot be written
        """
        return self._store.export_to(path)


def create_session(settings: Optional[Settings] = None) -> TrackerSession:
    """
    Factory function to create a ready-to-use session from configuration.

    Loads the configured data file. A missing file gives an empty store.
    Lines that fail to decode are skipped. If the file cannot be read at
    all the session starts empty and read-only, so the file is never
    overwritten with a partial store.
    """
    settings = settings or get_settings()
    log_settings = settings.logging
    storage_settings = settings.storage

    configure_logging(level=log_settings.log_level, json_logs=log_settings.json_logs)
    audit_logger = AuditLogger(history_size=log_settings.audit_history_size)

    storage = FlatFileStorage(
        storage_settings.data_file,
        encoding=storage_settings.file_encoding,
    )
    store = RecordStore(storage, audit_logger=audit_logger)

    try:
        store.load()
    except StorageReadError as e:
        logger.warning("store_read_only", location=storage.location, error=str(e))

    validator = EntryValidator(max_amount=settings.app.max_amount)

    return TrackerSession(
        store=store,
        validator=validator,
        audit_logger=audit_logger,
        settings=settings,
    )
