# -*- coding: utf-8 -*-
"""
Widget Messages - Route controller notifications to Orange message bars.

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

# serialproc internal
from serialproc.core.notify import Notification, Severity

logger = logging.getLogger(__name__)


class WidgetNotifier:
    """Notifier that shows notifications on an OWBaseWidget.

    The widget must declare ``Error.service_error`` and
    ``Information.notice`` messages taking one format argument.

    Parameters
    ----------
    widget : OWBaseWidget
    """

    def __init__(self, widget) -> None:
        self._widget = widget

    def __call__(self, notification: Notification) -> None:
        text = f"{notification.title}: {notification.message}"
        if notification.severity is Severity.ERROR:
            logger.error("%s", text)
            self._widget.Information.notice.clear()
            self._widget.Error.service_error(text)
        else:
            logger.info("%s", text)
            self._widget.Error.service_error.clear()
            self._widget.Information.notice(text)
