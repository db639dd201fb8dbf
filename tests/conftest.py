# -*- coding: utf-8 -*-
"""
Shared fixtures - In-memory process service and sample records.

Created
-------
2026-10-19
"""

from typing import Dict, List, Optional

import pytest

from serialproc.core.notify import RecordingNotifier
from serialproc.core.records import ConfigRecord, ProcessVariables
from serialproc.service.base import (
    FetchError,
    ProcessService,
    SaveError,
)


class FakeProcessService(ProcessService):
    """ProcessService keeping records in memory and recording calls."""

    def __init__(self, records: Optional[List[ConfigRecord]] = None) -> None:
        self.records = [r.copy() for r in (records or [])]
        self.variables = ProcessVariables()
        self.labels: Dict[str, str] = {}
        self.persist_calls: List[List[ConfigRecord]] = []
        self.variable_calls: List[tuple] = []
        self.fetch_count = 0
        self.fail_fetch: Optional[str] = None
        self.fail_save: Optional[str] = None
        self.fail_labels: Optional[str] = None
        self.return_none_on_save = False

    def fetch_config_records(self) -> List[ConfigRecord]:
        self.fetch_count += 1
        if self.fail_fetch:
            raise FetchError(self.fail_fetch)
        return [r.copy() for r in self.records]

    def persist_config_records(self, records) -> None:
        self.persist_calls.append([r.copy() for r in records])
        if self.fail_save:
            raise SaveError(self.fail_save)
        for record in records:
            for i, existing in enumerate(self.records):
                if existing.key == record.key:
                    self.records[i] = record.copy()
                    break
            else:
                self.records.append(record.copy())

    def fetch_process_variables(self) -> ProcessVariables:
        if self.fail_fetch:
            raise FetchError(self.fail_fetch)
        return ProcessVariables(self.variables.engine_on, self.variables.timestamp)

    def fetch_label_overrides(self) -> Dict[str, str]:
        if self.fail_labels:
            raise FetchError(self.fail_labels)
        return dict(self.labels)

    def persist_process_variables(self, engine_on, timestamp_iso):
        self.variable_calls.append((engine_on, timestamp_iso))
        if self.fail_save:
            raise SaveError(self.fail_save)
        self.variables = ProcessVariables(engine_on, timestamp_iso)
        if self.return_none_on_save:
            return None
        return ProcessVariables(engine_on, timestamp_iso)


@pytest.fixture
def sample_records():
    """Three records in two groups, plus one ungrouped record."""
    return [
        ConfigRecord(name="Invoice_Sync", active=True, group="Billing",
                     handler_class="InvoiceSyncHandler",
                     target_object="Invoice__c", order=1, id="a01"),
        ConfigRecord(name="Credit_Check", active=False, group="Billing",
                     handler_class="CreditCheckHandler",
                     target_object="Account", order=2, id="a02"),
        ConfigRecord(name="Lead_Router", active=True, group="Sales",
                     handler_class="LeadRouterHandler",
                     target_object="Lead", order=1, id="a03"),
        ConfigRecord(name="Cleanup", active=False, group=None,
                     handler_class="CleanupHandler",
                     target_object="Task"),
    ]


@pytest.fixture
def service(sample_records):
    return FakeProcessService(sample_records)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def empty_service():
    return FakeProcessService()
