# -*- coding: utf-8 -*-
"""
Conftest for widget tests.

Provides a QApplication fixture, a mock widget exposing the Orange
message groups used by the admin widgets, and a helper that opens an
admin widget on the in-memory process service.

Created
-------
2026-10-19
"""

import os
import sys
from unittest.mock import MagicMock, patch

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(scope="session")
def qapp():
    """Create a QApplication for the test session."""
    try:
        from AnyQt.QtWidgets import QApplication
    except ImportError:
        pytest.skip("Qt not available")
        return

    app = QApplication.instance()
    if app is None:
        app = QApplication(sys.argv)
    yield app


@pytest.fixture
def mock_widget():
    """Stand-in for an OWBaseWidget with Error/Information messages."""
    widget = MagicMock()
    return widget


@pytest.fixture
def open_widget(qapp, service):
    """Factory opening an admin widget class against ``service``."""
    from serialproc.core.config import AdminConfig

    opened = []

    def _open(widget_cls, **config):
        with patch("serialproc.service.resolver.open_service",
                   return_value=service), \
             patch("serialproc.core.config.load_config",
                   return_value=AdminConfig(**config)):
            widget = widget_cls()
        opened.append(widget)
        return widget

    yield _open

    for widget in opened:
        widget.onDeleteWidget()
        widget.deleteLater()
    qapp.processEvents()
