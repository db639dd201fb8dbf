# -*- coding: utf-8 -*-
"""
Tests for serialproc.core.records — ConfigRecord and ProcessVariables.

Created
-------
2026-10-19
"""

import pytest

from serialproc.core.records import ConfigRecord, ProcessVariables


class TestConfigRecord:
    def test_key_falls_back_to_name(self):
        assert ConfigRecord(name="Cleanup").key == "Cleanup"
        assert ConfigRecord(name="Cleanup", id="a09").key == "a09"

    def test_with_key_materializes_id(self):
        record = ConfigRecord(name="Cleanup").with_key()
        assert record.id == "Cleanup"

    def test_derived_classes(self):
        on = ConfigRecord(name="A", active=True)
        off = ConfigRecord(name="B", active=False)
        assert on.row_class == 'tr active'
        assert off.row_class == 'tr inactive'
        assert on.status_class == 'process-box active-process'
        assert off.status_class == 'process-box inactive-process'

    def test_group_name_sentinel(self):
        assert ConfigRecord(name="A").group_name == "Ungrouped"
        assert ConfigRecord(name="A", group="Ops").group_name == "Ops"

    def test_copy_is_independent(self):
        record = ConfigRecord(name="A", order=1)
        clone = record.copy()
        clone.order = 5
        assert record.order == 1
        assert clone != record

    def test_equality_is_field_for_field(self):
        assert ConfigRecord(name="A", order=1) == ConfigRecord(name="A", order=1)
        assert ConfigRecord(name="A", id="x") != ConfigRecord(name="A")

    def test_set_field_coerces(self):
        record = ConfigRecord(name="A")
        record.set_field('order', "7")
        record.set_field('active', "true")
        record.set_field('group', "")
        assert record.order == 7
        assert record.active is True
        assert record.group is None

    def test_set_field_rejects_unknown(self):
        with pytest.raises(ValueError):
            ConfigRecord(name="A").set_field('id', "b")


class TestWireFormat:
    def test_from_wire(self):
        record = ConfigRecord.from_wire({
            'Id': 'a01',
            'Name': 'Invoice_Sync',
            'Active__c': True,
            'Group__c': 'Billing',
            'Handler_Class__c': 'InvoiceSyncHandler',
            'Object__c': 'Invoice__c',
            'Order__c': 2,
            'attributes': {'type': 'Serial_Process__mdt'},
        })
        assert record.key == 'a01'
        assert record.group == 'Billing'
        assert record.order == 2
        assert record.active is True

    def test_from_wire_defaults(self):
        record = ConfigRecord.from_wire({'Name': 'Bare'})
        assert record.id is None
        assert record.active is False
        assert record.group is None
        assert record.order is None
        assert record.handler_class == ""

    def test_to_wire_omits_missing_id(self):
        payload = ConfigRecord(name="A", order=3).to_wire()
        assert 'Id' not in payload
        assert payload['Name'] == "A"
        assert payload['Order__c'] == 3

    def test_wire_round_trip(self):
        record = ConfigRecord(name="A", active=True, group="G",
                              handler_class="H", target_object="O",
                              order=1, id="x")
        assert ConfigRecord.from_wire(record.to_wire()) == record


class TestProcessVariables:
    def test_from_wire_requires_true(self):
        assert ProcessVariables.from_wire({'serialEngineOn': 'true'}).engine_on is False
        assert ProcessVariables.from_wire({'serialEngineOn': True}).engine_on is True

    def test_blank_timestamp_is_none(self):
        assert ProcessVariables.from_wire({'serialEngineTimestamp': ''}).timestamp is None

    def test_to_wire(self):
        variables = ProcessVariables(True, "2026-10-19T06:30:00Z")
        assert variables.to_wire() == {
            'serialEngineOn': True,
            'serialEngineTimestamp': "2026-10-19T06:30:00Z",
        }
