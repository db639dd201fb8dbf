# -*- coding: utf-8 -*-
"""
Settings Table Controller - Stage, commit, and revert process settings.

Owns the working set of process settings records, an immutable
baseline snapshot for revert, the staging map of edited records, and
the grouped projection derived from the working set. Every mutating
operation recomputes the projection from scratch.

Saving is split so the network round trip can run on a worker thread:
``begin_commit`` and ``finish_commit`` touch controller state and run
on the UI thread, ``persist_batch`` touches only the service.

License
-------
MIT License
Copyright (c) 2026 serialproc contributors
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

# Standard library
import logging
from typing import Any, Dict, List, Optional, Sequence

logger = logging.getLogger(__name__)

# serialproc internal
from serialproc.core.notify import Notification, Notifier, Severity
from serialproc.core.projection import GroupProjection, build_projection
from serialproc.core.records import ConfigRecord
from serialproc.service.base import ProcessService, ServiceError


class RecordLookupError(LookupError):
    """Raised when an edit targets an unknown record identifier."""


class SettingsTableController:
    """Editing state for the process settings table.

    Parameters
    ----------
    service : ProcessService
        Backend used to fetch and persist records.
    notifier : Optional[Notifier]
        Receives user-facing notifications. Defaults to a no-op.
    """

    def __init__(
        self,
        service: ProcessService,
        notifier: Optional[Notifier] = None,
    ) -> None:
        self._service = service
        self._notify = notifier or (lambda _n: None)
        self._baseline: List[ConfigRecord] = []
        self._records: List[ConfigRecord] = []
        self._changes: Dict[str, ConfigRecord] = {}
        self._in_flight: Dict[str, ConfigRecord] = {}
        self._groups: List[GroupProjection] = []
        self.is_loading = False

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def records(self) -> List[ConfigRecord]:
        """Working set, in load order."""
        return list(self._records)

    @property
    def baseline(self) -> List[ConfigRecord]:
        """Copies of the last loaded records, with identifiers derived."""
        return [r.with_key() for r in self._baseline]

    @property
    def changes(self) -> Dict[str, ConfigRecord]:
        """Staged snapshots keyed by identifier."""
        return {key: r.copy() for key, r in self._changes.items()}

    @property
    def groups(self) -> List[GroupProjection]:
        return self._groups

    def has_pending_changes(self) -> bool:
        return bool(self._changes)

    def find(self, record_id: str) -> Optional[ConfigRecord]:
        for record in self._records:
            if record.key == record_id:
                return record
        return None

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> bool:
        """Fetch records from the service and make them the baseline.

        Returns
        -------
        bool
            True on success. On failure the prior state is kept.
        """
        try:
            records = self._service.fetch_config_records()
        except ServiceError as e:
            self.report_load_error(e)
            return False
        self.apply_load(records)
        return True

    def fetch_records(self) -> List[ConfigRecord]:
        """Fetch without touching controller state (worker-thread safe)."""
        return self._service.fetch_config_records()

    def apply_load(self, records: Sequence[ConfigRecord]) -> None:
        """Install freshly fetched records as the new baseline."""
        self._baseline = [r.copy() for r in records]
        self._records = self._derive_working_set()
        self._changes.clear()
        self.recompute()
        logger.debug("Loaded %d process settings", len(self._records))

    def report_load_error(self, error: Exception) -> None:
        """Log a failed fetch and notify the operator."""
        logger.warning("Loading process settings failed: %s", error)
        self._notify(Notification(
            'Error',
            f"Error loading process settings: {_message(error)}",
            Severity.ERROR,
        ))

    def _derive_working_set(self) -> List[ConfigRecord]:
        return [r.with_key() for r in self._baseline]

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def apply_edit(self, record_id: str, field_name: str, value: Any) -> None:
        """Apply a single field edit and stage the full record snapshot.

        Parameters
        ----------
        record_id : str
            Identifier of the working record.
        field_name : str
            One of the editable ConfigRecord fields.
        value : Any
            Raw input value; coerced per field type.

        Raises
        ------
        RecordLookupError
            If no working record has ``record_id``.
        ValueError
            If ``field_name`` is not editable.
        """
        index = self._index_of(record_id)
        updated = self._records[index].copy()
        updated.set_field(field_name, value)
        self._records[index] = updated

        original = self._original(record_id)
        if original is not None and updated == original:
            self._changes.pop(record_id, None)
        else:
            self._changes[record_id] = updated.copy()

        self.recompute()

    def _index_of(self, record_id: str) -> int:
        for i, record in enumerate(self._records):
            if record.key == record_id:
                return i
        raise RecordLookupError(f"No process setting with id {record_id!r}")

    def _original(self, record_id: str) -> Optional[ConfigRecord]:
        for record in self._baseline:
            if record.key == record_id:
                return record.with_key()
        return None

    def recompute(self) -> List[GroupProjection]:
        """Rebuild the grouped projection from the working set."""
        self._groups = build_projection(self._records)
        return self._groups

    # ------------------------------------------------------------------
    # Saving
    # ------------------------------------------------------------------

    def commit_changes(self) -> bool:
        """Persist staged records and reload the baseline, synchronously.

        Returns
        -------
        bool
            True if the batch was persisted.
        """
        batch = self.begin_commit()
        if batch is None:
            return False
        try:
            result = self.persist_batch(batch)
        except ServiceError as e:
            self.finish_commit(error=e)
            return False
        self.finish_commit(result=result)
        return True

    def begin_commit(self) -> Optional[List[ConfigRecord]]:
        """Start a save and return the batch to send, or None.

        Returns None, with an informational notification, when nothing
        is staged or a save is already in flight.
        """
        if self.is_loading:
            self._notify(Notification(
                'Info', 'A save is already in progress', Severity.INFO,
            ))
            return None
        if not self._changes:
            self._notify(Notification(
                'Info', 'No changes to save', Severity.INFO,
            ))
            return None

        self.is_loading = True
        self._in_flight = {key: r.copy() for key, r in self._changes.items()}
        return [r.copy() for r in self._in_flight.values()]

    def persist_batch(self, batch: Sequence[ConfigRecord]) -> 'CommitResult':
        """Send a batch and re-fetch the baseline. Touches only the service.

        Raises
        ------
        ServiceError
            If the batch could not be persisted.
        """
        logger.info("Persisting %d process settings", len(batch))
        self._service.persist_config_records(batch)
        try:
            return CommitResult(self._service.fetch_config_records())
        except ServiceError as e:
            return CommitResult(None, refresh_error=e)

    def finish_commit(
        self,
        result: Optional['CommitResult'] = None,
        error: Optional[Exception] = None,
    ) -> None:
        """Apply the outcome of ``persist_batch``.

        Edits staged after ``begin_commit`` are kept: they are applied
        again on top of the refreshed baseline and stay staged while
        they differ from it.
        """
        self.is_loading = False
        sent, self._in_flight = self._in_flight, {}

        if error is not None:
            logger.warning("Saving process settings failed: %s", error)
            self._notify(Notification(
                'Error',
                f"Error updating records: {_message(error)}",
                Severity.ERROR,
            ))
            return

        pending = {
            key: r for key, r in self._changes.items() if sent.get(key) != r
        }
        self._changes.clear()
        self._notify(Notification(
            'Success',
            'Process settings updated successfully',
            Severity.SUCCESS,
        ))

        if result is not None and result.records is not None:
            self.apply_load(result.records)
        else:
            self._rebase_on_saved(sent)
            if result is not None and result.refresh_error is not None:
                self.report_load_error(result.refresh_error)
        if pending:
            self._restage(pending)

    def _rebase_on_saved(self, sent: Dict[str, ConfigRecord]) -> None:
        """Adopt the sent snapshots as baseline when no refresh is available."""
        self._baseline = [sent.get(r.key, r).copy() for r in self._baseline]
        self.recompute()

    def _restage(self, pending: Dict[str, ConfigRecord]) -> None:
        """Re-apply snapshots on the current baseline, staging real changes."""
        for key, snapshot in pending.items():
            try:
                index = self._index_of(key)
            except RecordLookupError:
                logger.warning("Dropping edit to %r: record no longer exists", key)
                continue
            self._records[index] = snapshot.copy()
            if snapshot != self._original(key):
                self._changes[key] = snapshot.copy()
        self.recompute()

    # ------------------------------------------------------------------
    # Reverting
    # ------------------------------------------------------------------

    def discard_changes(self) -> None:
        """Restore the working set from the baseline and clear staging."""
        self._records = self._derive_working_set()
        self._changes.clear()
        self.recompute()
        self._notify(Notification('Info', 'Changes cancelled', Severity.INFO))


class CommitResult:
    """Outcome of a persisted batch.

    Parameters
    ----------
    records : Optional[List[ConfigRecord]]
        Authoritative records fetched after the save, or None if the
        refresh failed.
    refresh_error : Optional[Exception]
        Error raised by the refresh, if any.
    """

    def __init__(
        self,
        records: Optional[List[ConfigRecord]],
        refresh_error: Optional[Exception] = None,
    ) -> None:
        self.records = records
        self.refresh_error = refresh_error


def _message(error: Exception) -> str:
    return getattr(error, 'message', None) or str(error)
