# -*- coding: utf-8 -*-
"""
Process Records - Data models for process settings and variables.

Defines the ConfigRecord model edited by the process settings table,
its conversion to and from the backend wire shape, and the
ProcessVariables transfer object used by the process variables form.

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
from typing import Any, Dict, Optional

# serialproc internal
from serialproc.core.coercion import (
    coerce_bool,
    coerce_group,
    coerce_order,
    coerce_text,
)


# Wire key -> attribute name
WIRE_FIELDS: Dict[str, str] = {
    'Id': 'id',
    'Name': 'name',
    'Active__c': 'active',
    'Group__c': 'group',
    'Handler_Class__c': 'handler_class',
    'Object__c': 'target_object',
    'Order__c': 'order',
}

# Attribute name -> coercion applied to UI input
EDITABLE_FIELDS = {
    'name': coerce_text,
    'active': coerce_bool,
    'group': coerce_group,
    'handler_class': coerce_text,
    'target_object': coerce_text,
    'order': coerce_order,
}

UNGROUPED = "Ungrouped"


class ConfigRecord:
    """A single process configuration record.

    Parameters
    ----------
    name : str
        Process name. Used as the identifier when no surrogate id is set.
    active : bool
        Whether the process is enabled.
    group : Optional[str]
        Group name. None is displayed under 'Ungrouped'.
    handler_class : str
        Handler class reference.
    target_object : str
        Target object reference.
    order : Optional[int]
        Position within the group. None sorts last.
    id : Optional[str]
        Surrogate identifier assigned by the backend.
    """

    __slots__ = (
        'id', 'name', 'active', 'group',
        'handler_class', 'target_object', 'order',
    )

    def __init__(
        self,
        name: str,
        active: bool = False,
        group: Optional[str] = None,
        handler_class: str = "",
        target_object: str = "",
        order: Optional[int] = None,
        id: Optional[str] = None,
    ) -> None:
        self.id = id
        self.name = name
        self.active = active
        self.group = group
        self.handler_class = handler_class
        self.target_object = target_object
        self.order = order

    @property
    def key(self) -> str:
        """Identifier of the record: the surrogate id, else the name."""
        return self.id or self.name

    @property
    def group_name(self) -> str:
        return self.group or UNGROUPED

    @property
    def row_class(self) -> str:
        return 'tr active' if self.active else 'tr inactive'

    @property
    def status_class(self) -> str:
        if self.active:
            return 'process-box active-process'
        return 'process-box inactive-process'

    def copy(self) -> 'ConfigRecord':
        return ConfigRecord(
            name=self.name,
            active=self.active,
            group=self.group,
            handler_class=self.handler_class,
            target_object=self.target_object,
            order=self.order,
            id=self.id,
        )

    def with_key(self) -> 'ConfigRecord':
        """Copy with the identifier materialized (id falls back to name)."""
        record = self.copy()
        record.id = self.key
        return record

    def set_field(self, field_name: str, value: Any) -> None:
        """Set an editable field, coercing the raw input value.

        Raises
        ------
        ValueError
            If ``field_name`` is not an editable field.
        """
        try:
            coerce = EDITABLE_FIELDS[field_name]
        except KeyError:
            raise ValueError(
                f"Field {field_name!r} is not editable; expected one of "
                f"{sorted(EDITABLE_FIELDS)}"
            ) from None
        setattr(self, field_name, coerce(value))

    def to_dict(self) -> Dict[str, Any]:
        return {attr: getattr(self, attr) for attr in self.__slots__}

    def to_wire(self) -> Dict[str, Any]:
        """Serialize to the backend field names."""
        payload = {
            wire: getattr(self, attr) for wire, attr in WIRE_FIELDS.items()
        }
        if payload['Id'] is None:
            del payload['Id']
        return payload

    @classmethod
    def from_wire(cls, payload: Dict[str, Any]) -> 'ConfigRecord':
        """Build a record from a backend payload, ignoring unknown keys."""
        return cls(
            id=payload.get('Id') or None,
            name=coerce_text(payload.get('Name')),
            active=coerce_bool(payload.get('Active__c', False)),
            group=coerce_group(payload.get('Group__c')),
            handler_class=coerce_text(payload.get('Handler_Class__c')),
            target_object=coerce_text(payload.get('Object__c')),
            order=coerce_order(payload.get('Order__c')),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigRecord):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"ConfigRecord(key={self.key!r}, group={self.group!r}, "
            f"order={self.order!r}, active={self.active!r})"
        )


class ProcessVariables:
    """Global process-control variables.

    Parameters
    ----------
    engine_on : bool
        Whether the serial engine is running.
    timestamp : Optional[str]
        Canonical ISO 8601 timestamp, or None when unset.
    """

    def __init__(
        self,
        engine_on: bool = False,
        timestamp: Optional[str] = None,
    ) -> None:
        self.engine_on = engine_on
        self.timestamp = timestamp

    @classmethod
    def from_wire(cls, payload: Dict[str, Any]) -> 'ProcessVariables':
        return cls(
            engine_on=payload.get('serialEngineOn') is True,
            timestamp=payload.get('serialEngineTimestamp') or None,
        )

    def to_wire(self) -> Dict[str, Any]:
        return {
            'serialEngineOn': self.engine_on,
            'serialEngineTimestamp': self.timestamp,
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProcessVariables):
            return NotImplemented
        return (self.engine_on, self.timestamp) == (
            other.engine_on, other.timestamp
        )

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"ProcessVariables(engine_on={self.engine_on!r}, "
            f"timestamp={self.timestamp!r})"
        )
