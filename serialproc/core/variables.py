# -*- coding: utf-8 -*-
"""
Process Variables Controller - Load, edit, and save the engine flags.

Holds the committed values of the serial engine on/off flag and its
timestamp, an in-edit copy of each, and their display labels. Edits
are discarded on cancel and replaced by the backend's values on save.

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
from datetime import tzinfo
from enum import Enum
from typing import Dict, Optional

logger = logging.getLogger(__name__)

# serialproc internal
from serialproc.core.coercion import (
    EMPTY_DISPLAY,
    ConversionError,
    canonical_to_local,
    format_display,
    local_to_canonical,
)
from serialproc.core.notify import Notification, Notifier, Severity
from serialproc.core.records import ProcessVariables
from serialproc.service.base import ProcessService, ServiceError


DEFAULT_LABEL_ENGINE_ON = "Serial Engine On"
DEFAULT_LABEL_TIMESTAMP = "Serial Engine Timestamp"

ENGINE_ON = 'engine_on'
TIMESTAMP = 'timestamp'


class EditState(Enum):
    """Lifecycle of one editable variable."""

    LOADED = "loaded"
    EDITING = "editing"
    SAVED = "saved"
    CANCELLED = "cancelled"


class ProcessVariablesController:
    """Form state for the process variables widget.

    Parameters
    ----------
    service : ProcessService
        Backend holding the variables.
    notifier : Optional[Notifier]
        Receives user-facing notifications. Defaults to a no-op.
    tz : Optional[tzinfo]
        Zone in which timestamps are displayed and edited. None uses
        the machine's local rules, including daylight saving.
    """

    def __init__(
        self,
        service: ProcessService,
        notifier: Optional[Notifier] = None,
        tz: Optional[tzinfo] = None,
    ) -> None:
        self._service = service
        self._notify = notifier or (lambda _n: None)
        self._tz = tz

        self.engine_on = False
        self.raw_timestamp: Optional[str] = None
        self.timestamp_display = EMPTY_DISPLAY

        self.edit_engine_on = False
        self.edit_timestamp = ""

        self.label_engine_on = DEFAULT_LABEL_ENGINE_ON
        self.label_timestamp = DEFAULT_LABEL_TIMESTAMP

        self.states: Dict[str, EditState] = {
            ENGINE_ON: EditState.LOADED,
            TIMESTAMP: EditState.LOADED,
        }
        self.is_loading = False

    @property
    def pill_class(self) -> str:
        return f"pill {'green' if self.engine_on else 'red'}"

    @property
    def pill_label(self) -> str:
        return 'Running' if self.engine_on else 'Stopped'

    def has_edits(self) -> bool:
        return EditState.EDITING in self.states.values()

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> None:
        """Load labels and values; either may fail independently."""
        self.load_labels()
        self.load_vars()

    def load_labels(self) -> bool:
        try:
            labels = self._service.fetch_label_overrides()
        except ServiceError as e:
            logger.warning("Loading process variable labels failed: %s", e)
            self._notify(Notification(
                'Error', f"Error loading labels: {e.message}", Severity.ERROR,
            ))
            return False
        self.apply_labels(labels or {})
        return True

    def apply_labels(self, labels: Dict[str, str]) -> None:
        if labels.get(ENGINE_ON):
            self.label_engine_on = labels[ENGINE_ON]
        if labels.get(TIMESTAMP):
            self.label_timestamp = labels[TIMESTAMP]

    def load_vars(self) -> bool:
        try:
            variables = self._service.fetch_process_variables()
        except ServiceError as e:
            logger.warning("Loading process variables failed: %s", e)
            self._notify(Notification(
                'Error',
                f"Error loading process variables: {e.message}",
                Severity.ERROR,
            ))
            return False
        if variables is not None:
            self.apply_values(variables)
            self.states = dict.fromkeys(self.states, EditState.LOADED)
        return True

    def apply_values(self, variables: ProcessVariables) -> None:
        """Replace committed and in-edit values with ``variables``."""
        self.engine_on = variables.engine_on is True
        self.raw_timestamp = variables.timestamp or None
        self.timestamp_display = format_display(self.raw_timestamp, self._tz)
        self.edit_engine_on = self.engine_on
        self.edit_timestamp = self._to_input(self.raw_timestamp)

    def _to_input(self, iso: Optional[str]) -> str:
        try:
            return canonical_to_local(iso, self._tz)
        except ConversionError:
            logger.warning("Backend returned unreadable timestamp %r", iso)
            return ""

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def set_engine_on(self, value: bool) -> None:
        self.edit_engine_on = bool(value)
        self.states[ENGINE_ON] = EditState.EDITING

    def set_timestamp(self, text: Optional[str]) -> None:
        self.edit_timestamp = text or ""
        self.states[TIMESTAMP] = EditState.EDITING

    def cancel(self) -> None:
        """Revert edits to the last loaded or saved values."""
        self.edit_engine_on = self.engine_on
        self.edit_timestamp = self._to_input(self.raw_timestamp)
        self.states = dict.fromkeys(self.states, EditState.CANCELLED)

    # ------------------------------------------------------------------
    # Saving
    # ------------------------------------------------------------------

    def save(self) -> bool:
        """Persist the in-edit values.

        Returns
        -------
        bool
            True if the backend accepted the values.
        """
        if self.is_loading:
            return False
        try:
            timestamp_iso = local_to_canonical(self.edit_timestamp, self._tz)
        except ConversionError as e:
            self._notify(Notification('Error saving', str(e), Severity.ERROR))
            return False

        self.is_loading = True
        try:
            saved = self._service.persist_process_variables(
                self.edit_engine_on, timestamp_iso,
            )
        except ServiceError as e:
            logger.warning("Saving process variables failed: %s", e)
            self._notify(Notification(
                'Error saving',
                e.message or 'Unable to save changes',
                Severity.ERROR,
            ))
            return False
        finally:
            self.is_loading = False

        if saved is not None:
            self.apply_values(saved)
        else:
            self.load_vars()
        self.states = dict.fromkeys(self.states, EditState.SAVED)
        self._notify(Notification(
            'Saved', 'Process variables updated', Severity.SUCCESS,
        ))
        return True
