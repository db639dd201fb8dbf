# -*- coding: utf-8 -*-
"""
Tests for serialproc.core.variables — ProcessVariablesController.

Created
-------
2026-10-19
"""

from datetime import timedelta, timezone
from unittest.mock import MagicMock

import pytest

from serialproc.core.coercion import EMPTY_DISPLAY
from serialproc.core.notify import Severity
from serialproc.core.records import ProcessVariables
from serialproc.service.base import SaveError
from serialproc.core.variables import (
    DEFAULT_LABEL_ENGINE_ON,
    DEFAULT_LABEL_TIMESTAMP,
    EditState,
    ProcessVariablesController,
)


PLUS_TWO = timezone(timedelta(hours=2))


@pytest.fixture
def variables_service(empty_service):
    empty_service.variables = ProcessVariables(True, "2026-10-19T06:30:00Z")
    return empty_service


@pytest.fixture
def controller(variables_service, notifier):
    ctrl = ProcessVariablesController(variables_service, notifier=notifier, tz=PLUS_TWO)
    ctrl.load()
    return ctrl


class TestLoad:
    def test_values(self, controller):
        assert controller.engine_on is True
        assert controller.raw_timestamp == "2026-10-19T06:30:00Z"
        assert controller.timestamp_display == "2026-10-19 08:30:00"
        assert controller.edit_engine_on is True
        assert controller.edit_timestamp == "2026-10-19T08:30"
        assert controller.pill_class == "pill green"
        assert controller.pill_label == "Running"

    def test_unset_timestamp(self, empty_service):
        ctrl = ProcessVariablesController(empty_service, tz=PLUS_TWO)
        ctrl.load()
        assert ctrl.timestamp_display == EMPTY_DISPLAY
        assert ctrl.edit_timestamp == ""
        assert ctrl.pill_class == "pill red"
        assert ctrl.pill_label == "Stopped"

    def test_default_labels(self, controller):
        assert controller.label_engine_on == DEFAULT_LABEL_ENGINE_ON
        assert controller.label_timestamp == DEFAULT_LABEL_TIMESTAMP

    def test_label_overrides(self, variables_service):
        variables_service.labels = {'engine_on': "Engine", 'timestamp': ""}
        ctrl = ProcessVariablesController(variables_service, tz=PLUS_TWO)
        ctrl.load()
        assert ctrl.label_engine_on == "Engine"
        assert ctrl.label_timestamp == DEFAULT_LABEL_TIMESTAMP

    def test_label_failure_keeps_defaults_and_loads_values(self, variables_service, notifier):
        variables_service.fail_labels = "no access"
        ctrl = ProcessVariablesController(variables_service, notifier=notifier, tz=PLUS_TWO)
        ctrl.load()
        assert ctrl.label_engine_on == DEFAULT_LABEL_ENGINE_ON
        assert ctrl.engine_on is True
        assert notifier.severities() == [Severity.ERROR]

    def test_value_failure(self, variables_service, notifier):
        variables_service.fail_fetch = "timeout"
        ctrl = ProcessVariablesController(variables_service, notifier=notifier, tz=PLUS_TWO)
        assert ctrl.load_vars() is False
        assert ctrl.engine_on is False
        assert notifier.last.severity is Severity.ERROR


class TestEditing:
    def test_states(self, controller):
        assert controller.states == {
            'engine_on': EditState.LOADED, 'timestamp': EditState.LOADED,
        }
        controller.set_engine_on(False)
        assert controller.states['engine_on'] is EditState.EDITING
        assert controller.states['timestamp'] is EditState.LOADED
        assert controller.has_edits() is True

    def test_edit_does_not_touch_committed(self, controller):
        controller.set_engine_on(False)
        controller.set_timestamp("2026-11-01T10:00")
        assert controller.engine_on is True
        assert controller.raw_timestamp == "2026-10-19T06:30:00Z"

    def test_cancel_reverts(self, controller, variables_service):
        controller.set_engine_on(False)
        controller.set_timestamp("2026-11-01T10:00")
        controller.cancel()
        assert controller.edit_engine_on is True
        assert controller.edit_timestamp == "2026-10-19T08:30"
        assert controller.states['timestamp'] is EditState.CANCELLED
        assert variables_service.variable_calls == []


class TestSave:
    def test_converts_local_to_utc(self, controller, variables_service, notifier):
        controller.set_engine_on(False)
        controller.set_timestamp("2026-11-01T10:00")
        assert controller.save() is True
        assert variables_service.variable_calls == [(False, "2026-11-01T08:00:00Z")]
        assert controller.engine_on is False
        assert controller.raw_timestamp == "2026-11-01T08:00:00Z"
        assert controller.edit_timestamp == "2026-11-01T10:00"
        assert controller.states['engine_on'] is EditState.SAVED
        assert notifier.last.title == 'Saved'
        assert notifier.last.severity is Severity.SUCCESS

    def test_blank_timestamp_clears(self, controller, variables_service):
        controller.set_timestamp("")
        controller.save()
        assert variables_service.variable_calls == [(True, None)]
        assert controller.timestamp_display == EMPTY_DISPLAY

    def test_reloads_when_backend_returns_nothing(self, controller, variables_service):
        variables_service.return_none_on_save = True
        controller.set_engine_on(False)
        assert controller.save() is True
        assert controller.engine_on is False

    def test_malformed_timestamp_not_sent(self, controller, variables_service, notifier):
        controller.set_timestamp("tomorrow")
        assert controller.save() is False
        assert variables_service.variable_calls == []
        assert notifier.last.title == 'Error saving'

    def test_failure_keeps_edits(self, controller, variables_service, notifier):
        variables_service.fail_save = "Read-only org"
        controller.set_engine_on(False)
        assert controller.save() is False
        assert controller.edit_engine_on is False
        assert controller.engine_on is True
        assert notifier.last.message == "Read-only org"
        assert controller.is_loading is False

    def test_failure_without_message(self, notifier):
        service = MagicMock()
        service.fetch_label_overrides.return_value = {}
        service.fetch_process_variables.return_value = ProcessVariables()
        service.persist_process_variables.side_effect = SaveError("")
        ctrl = ProcessVariablesController(service, notifier=notifier, tz=PLUS_TWO)
        ctrl.load()
        assert ctrl.save() is False
        assert notifier.last.message == "Unable to save changes"

    def test_gated_while_loading(self, controller, variables_service):
        controller.is_loading = True
        assert controller.save() is False
        assert variables_service.variable_calls == []
