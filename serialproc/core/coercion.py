# -*- coding: utf-8 -*-
"""
Coercion - Convert raw UI input into typed field values.

One function per field type: integer-or-absent ordering values,
booleans, free text, optional group names, and the local-time /
canonical-timestamp round trip used by the process variables form.

Timestamp contract: the editable string is wall-clock time in the
display zone (the machine's local zone unless configured otherwise).
Canonical timestamps are always UTC ISO 8601 with a ``Z`` suffix.
Incoming canonical values without an offset are read as UTC.

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
import math
import re
from datetime import datetime, timezone, tzinfo
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)


_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_LOCAL_INPUT = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})[T ](\d{2}):(\d{2})(?::(\d{2}))?$"
)
_TRUE_STRINGS = ('true', '1', 'yes', 'on')

_LOCAL_FORMAT = "%Y-%m-%dT%H:%M"
_DISPLAY_FORMAT = "%Y-%m-%d %H:%M:%S"
EMPTY_DISPLAY = "—"


class ConversionError(ValueError):
    """Raised when user-entered text cannot be converted."""


def coerce_order(value: Any) -> Optional[int]:
    """Parse an ordering value, returning None when absent or invalid.

    Text is parsed by its leading integer, so ``"3.9"`` yields 3.
    Unparsable text is treated as absent and logged.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None

    text = str(value)
    if not text.strip():
        return None
    match = _LEADING_INT.match(text)
    if match is None:
        logger.warning("Ignoring invalid order value %r", value)
        return None
    return int(match.group(1))


def coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return bool(value)


def coerce_text(value: Any) -> str:
    return "" if value is None else str(value)


def coerce_group(value: Any) -> Optional[str]:
    """Blank group names collapse to None (shown as 'Ungrouped')."""
    text = coerce_text(value).strip()
    return text or None


def resolve_timezone(name: Optional[str] = None) -> Optional[tzinfo]:
    """Return the named IANA zone, or None for the machine's local rules.

    Parameters
    ----------
    name : Optional[str]
        IANA zone name such as ``"Europe/Paris"``. None or blank selects
        the local zone.

    Returns
    -------
    Optional[tzinfo]
        None means "use the system's local rules", which the conversion
        helpers apply per instant so daylight saving is honored.

    Raises
    ------
    ConversionError
        If the zone name is unknown.
    """
    if not name or not name.strip():
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConversionError(f"Unknown time zone: {name!r}") from e


def _wall_to_utc(naive: datetime, tz: Optional[tzinfo]) -> datetime:
    if tz is None:
        # Naive datetimes are interpreted in system local time
        return naive.astimezone(timezone.utc)
    return naive.replace(tzinfo=tz).astimezone(timezone.utc)


def _utc_to_wall(aware: datetime, tz: Optional[tzinfo]) -> datetime:
    if tz is None:
        return aware.astimezone()
    return aware.astimezone(tz)


def parse_canonical(iso: str) -> datetime:
    """Parse a canonical ISO 8601 timestamp into an aware datetime.

    Accepts a trailing ``Z``, explicit offsets and fractional seconds.
    Naive values are taken as UTC.
    """
    text = iso.strip()
    if text.endswith(('Z', 'z')):
        text = text[:-1] + '+00:00'
    # Older interpreters reject offsets without a colon (e.g. +0000)
    text = re.sub(r"([+-]\d{2})(\d{2})$", r"\1:\2", text)
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as e:
        raise ConversionError(f"Invalid timestamp: {iso!r}") from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def local_to_canonical(
    text: Optional[str],
    tz: Optional[tzinfo] = None,
) -> Optional[str]:
    """Convert a local date-time input string to a canonical timestamp.

    Parameters
    ----------
    text : Optional[str]
        ``YYYY-MM-DDTHH:MM`` with optional ``:SS``. Seconds are
        appended as ``:00`` when absent.
    tz : Optional[tzinfo]
        Zone the wall-clock value is expressed in. None uses the
        machine's local rules, including daylight saving.

    Returns
    -------
    Optional[str]
        ``YYYY-MM-DDTHH:MM:SSZ`` in UTC, or None for blank input.

    Raises
    ------
    ConversionError
        If the text is not a valid local date-time.
    """
    if text is None or not text.strip():
        return None

    value = text.strip()
    if _LOCAL_INPUT.match(value) is None:
        raise ConversionError(f"Invalid date-time: {text!r}")
    if len(value) < 19:
        value += ':00'

    try:
        naive = datetime.strptime(value.replace(' ', 'T'), "%Y-%m-%dT%H:%M:%S")
    except ValueError as e:
        raise ConversionError(f"Invalid date-time: {text!r}") from e

    return _wall_to_utc(naive, tz).strftime("%Y-%m-%dT%H:%M:%SZ")


def canonical_to_local(
    iso: Optional[str],
    tz: Optional[tzinfo] = None,
) -> str:
    """Format a canonical timestamp as a ``YYYY-MM-DDTHH:MM`` input value."""
    if not iso or not iso.strip():
        return ""
    return _utc_to_wall(parse_canonical(iso), tz).strftime(_LOCAL_FORMAT)


def format_display(
    iso: Optional[str],
    tz: Optional[tzinfo] = None,
) -> str:
    """Human-readable local time, or an em dash when unset."""
    if not iso or not iso.strip():
        return EMPTY_DISPLAY
    try:
        return _utc_to_wall(parse_canonical(iso), tz).strftime(_DISPLAY_FORMAT)
    except ConversionError:
        logger.warning("Cannot display timestamp %r", iso)
        return EMPTY_DISPLAY
