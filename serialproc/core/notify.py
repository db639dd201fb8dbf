# -*- coding: utf-8 -*-
"""
Notifications - User-facing messages raised by the controllers.

A notifier is any callable accepting a Notification. Controllers fire
notifications and never wait for a response. Widgets route them to
Orange message bars; the CLI and tests use the notifiers below.

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
from enum import Enum
from typing import Callable, List

logger = logging.getLogger(__name__)


class Severity(Enum):
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"


class Notification:
    """A titled message with a severity.

    Parameters
    ----------
    title : str
    message : str
    severity : Severity
    """

    def __init__(self, title: str, message: str, severity: Severity) -> None:
        self.title = title
        self.message = message
        self.severity = severity

    def __repr__(self) -> str:
        return (
            f"Notification({self.title!r}, {self.message!r}, "
            f"{self.severity.value})"
        )


Notifier = Callable[[Notification], None]


_LOG_LEVELS = {
    Severity.INFO: logging.INFO,
    Severity.SUCCESS: logging.INFO,
    Severity.ERROR: logging.ERROR,
}


class LoggingNotifier:
    """Notifier that writes each notification to a logger."""

    def __init__(self, target: logging.Logger = logger) -> None:
        self._logger = target

    def __call__(self, notification: Notification) -> None:
        self._logger.log(
            _LOG_LEVELS[notification.severity],
            "%s: %s", notification.title, notification.message,
        )


class RecordingNotifier:
    """Notifier that keeps every notification it receives."""

    def __init__(self) -> None:
        self.notifications: List[Notification] = []

    def __call__(self, notification: Notification) -> None:
        self.notifications.append(notification)

    @property
    def last(self) -> Notification:
        return self.notifications[-1]

    def severities(self) -> List[Severity]:
        return [n.severity for n in self.notifications]
