# -*- coding: utf-8 -*-
"""
Tests for serialproc.core.notify — notifiers.

Created
-------
2026-10-19
"""

import logging

from serialproc.core.notify import (
    LoggingNotifier,
    Notification,
    RecordingNotifier,
    Severity,
)


def test_recording_notifier_keeps_order():
    notifier = RecordingNotifier()
    notifier(Notification("Info", "a", Severity.INFO))
    notifier(Notification("Error", "b", Severity.ERROR))
    assert notifier.severities() == [Severity.INFO, Severity.ERROR]
    assert notifier.last.message == "b"


def test_logging_notifier_levels(caplog):
    target = logging.getLogger("serialproc.test")
    notifier = LoggingNotifier(target)
    with caplog.at_level(logging.INFO, logger="serialproc.test"):
        notifier(Notification("Saved", "ok", Severity.SUCCESS))
        notifier(Notification("Error", "bad", Severity.ERROR))
    assert [r.levelno for r in caplog.records] == [logging.INFO, logging.ERROR]
    assert caplog.records[1].getMessage() == "Error: bad"
