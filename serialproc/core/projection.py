# -*- coding: utf-8 -*-
"""
Grouped Projection - Group, sort, and classify process records.

Builds the read-only grouped view shown by the process settings table.
The projection is a pure function of the working set: it is rebuilt in
full after every mutation and never patched in place.

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
from enum import Enum
from typing import Dict, Iterable, List, Tuple

# serialproc internal
from serialproc.core.records import ConfigRecord


class GroupStatus(Enum):
    """Header classification of a group."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    MIXED = "mixed"


_HEADER_CLASSES = {
    GroupStatus.ACTIVE: 'group-header active-group-header',
    GroupStatus.INACTIVE: 'group-header inactive-group-header',
    GroupStatus.MIXED: 'group-header mixed-group-header',
}


class GroupProjection:
    """One group of the grouped view.

    Parameters
    ----------
    group_name : str
        Display name of the group.
    records : List[ConfigRecord]
        Member records, already sorted.
    """

    def __init__(self, group_name: str, records: List[ConfigRecord]) -> None:
        self.group_name = group_name
        self.records = records
        self.total_count = len(records)
        self.active_count = sum(1 for r in records if r.active)
        self.all_active = self.active_count == self.total_count

        if self.all_active:
            self.status = GroupStatus.ACTIVE
        elif self.active_count == 0:
            self.status = GroupStatus.INACTIVE
        else:
            self.status = GroupStatus.MIXED

    @property
    def header_class(self) -> str:
        return _HEADER_CLASSES[self.status]

    @property
    def status_text(self) -> str:
        return f"{self.active_count}/{self.total_count} Active"

    def __repr__(self) -> str:
        return (
            f"GroupProjection({self.group_name!r}, "
            f"{self.status_text!r}, {self.status.value})"
        )


def name_sort_key(name: str) -> Tuple[str, str]:
    """Locale-style ordering: case-insensitive, lowercase first on ties."""
    return (name.casefold(), name.swapcase())


def record_sort_key(record: ConfigRecord) -> tuple:
    """Order ascending with absent orders last, then by name."""
    return (
        record.order is None,
        record.order if record.order is not None else 0,
        name_sort_key(record.name),
    )


def build_projection(records: Iterable[ConfigRecord]) -> List[GroupProjection]:
    """Partition records into sorted, classified groups.

    Parameters
    ----------
    records : Iterable[ConfigRecord]
        The working set. Not modified.

    Returns
    -------
    List[GroupProjection]
        Groups sorted by name, each holding copies of its members.
    """
    partitions: Dict[str, List[ConfigRecord]] = {}
    for record in records:
        partitions.setdefault(record.group_name, []).append(record.copy())

    groups = [
        GroupProjection(name, sorted(members, key=record_sort_key))
        for name, members in partitions.items()
    ]
    groups.sort(key=lambda g: name_sort_key(g.group_name))
    return groups
