# -*- coding: utf-8 -*-
"""
Tests for serialproc.widgets._messages — WidgetNotifier.

Created
-------
2026-10-19
"""

from serialproc.core.notify import Notification, Severity
from serialproc.widgets._messages import WidgetNotifier


class TestWidgetNotifier:
    def test_error_goes_to_error_bar(self, mock_widget):
        WidgetNotifier(mock_widget)(Notification("Error", "boom", Severity.ERROR))
        mock_widget.Error.service_error.assert_called_once_with("Error: boom")
        mock_widget.Information.notice.clear.assert_called_once_with()

    def test_info_goes_to_information_bar(self, mock_widget):
        WidgetNotifier(mock_widget)(Notification("Info", "No changes to save", Severity.INFO))
        mock_widget.Information.notice.assert_called_once_with("Info: No changes to save")
        mock_widget.Error.service_error.clear.assert_called_once_with()

    def test_success_clears_previous_error(self, mock_widget):
        notifier = WidgetNotifier(mock_widget)
        notifier(Notification("Success", "Saved", Severity.SUCCESS))
        mock_widget.Error.service_error.clear.assert_called_once_with()
        mock_widget.Information.notice.assert_called_once_with("Success: Saved")
