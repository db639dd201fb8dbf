# -*- coding: utf-8 -*-
"""
OWProcessVariables Widget - Toggle the serial engine flag and timestamp.

Form-based interface for the two global process-control variables.
Shows the committed values with a running/stopped indicator and lets
the operator edit, save, or cancel.

Dependencies
------------
orange-widget-base

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

# Third-party
from orangewidget import gui
from orangewidget.widget import OWBaseWidget, Msg

from AnyQt.QtWidgets import (
    QCheckBox,
    QLabel,
    QLineEdit,
    QPushButton,
)

# serialproc internal
from serialproc.core.variables import ProcessVariablesController
from serialproc.widgets._messages import WidgetNotifier


_PILL_STYLES = {
    'pill green': "font-weight: bold; color: white; background: #22c55e;"
                  " border-radius: 8px; padding: 2px 8px;",
    'pill red': "font-weight: bold; color: white; background: #ef4444;"
                " border-radius: 8px; padding: 2px 8px;",
}


class OWProcessVariables(OWBaseWidget):
    """View and edit the serial engine on/off flag and timestamp."""

    name = "Process Variables"
    description = "Toggle the serial engine flag and timestamp"
    icon = "icons/process_variables.svg"
    category = "Serial Process Admin"
    priority = 20

    class Error(OWBaseWidget.Error):
        service_error = Msg("{}")
        backend_error = Msg("Failed to open backend: {}")

    class Information(OWBaseWidget.Information):
        notice = Msg("{}")

    want_main_area = True

    def __init__(self) -> None:
        super().__init__()

        self._service = None
        self._controller = None

        # --- Control area ---
        box = gui.vBox(self.controlArea, "Actions")

        btn_save = QPushButton("Save", self)
        btn_save.clicked.connect(self._on_save)
        box.layout().addWidget(btn_save)

        btn_cancel = QPushButton("Cancel", self)
        btn_cancel.clicked.connect(self._on_cancel)
        box.layout().addWidget(btn_cancel)

        btn_reload = QPushButton("Reload", self)
        btn_reload.clicked.connect(self._on_reload)
        box.layout().addWidget(btn_reload)

        # --- Main area: current values and form ---
        layout = self.mainArea.layout()

        self._engine_label = QLabel(self)
        layout.addWidget(self._engine_label)
        self._pill = QLabel(self)
        layout.addWidget(self._pill)

        self._timestamp_label = QLabel(self)
        layout.addWidget(self._timestamp_label)
        self._timestamp_value = QLabel(self)
        layout.addWidget(self._timestamp_value)

        self._engine_check = QCheckBox(self)
        self._engine_check.toggled.connect(self._on_toggle)
        layout.addWidget(self._engine_check)

        self._timestamp_edit = QLineEdit(self)
        self._timestamp_edit.setPlaceholderText("YYYY-MM-DDTHH:MM")
        self._timestamp_edit.textEdited.connect(self._on_timestamp_edited)
        layout.addWidget(self._timestamp_edit)

        self._open_backend()
        self._on_reload()

    def _open_backend(self) -> None:
        """Open the resolved backend."""
        try:
            from serialproc.core.coercion import resolve_timezone
            from serialproc.core.config import load_config
            from serialproc.service.resolver import open_service

            config = load_config()
            self._service = open_service(config)
            self._controller = ProcessVariablesController(
                self._service,
                notifier=WidgetNotifier(self),
                tz=resolve_timezone(config.display_timezone),
            )
            self.Error.backend_error.clear()
        except Exception as e:
            self.Error.backend_error(str(e))
            self._controller = None

    def _on_reload(self) -> None:
        if self._controller is None:
            return
        self._controller.load()
        self._refresh_view()

    def _on_toggle(self, checked: bool) -> None:
        if self._controller is not None:
            self._controller.set_engine_on(checked)

    def _on_timestamp_edited(self, text: str) -> None:
        if self._controller is not None:
            self._controller.set_timestamp(text)

    def _on_save(self) -> None:
        if self._controller is None:
            return
        self._controller.save()
        self._refresh_view()

    def _on_cancel(self) -> None:
        if self._controller is None:
            return
        self._controller.cancel()
        self._refresh_view()

    def _refresh_view(self) -> None:
        """Copy controller state into the form."""
        c = self._controller
        self._engine_label.setText(c.label_engine_on)
        self._engine_check.setText(c.label_engine_on)
        self._timestamp_label.setText(c.label_timestamp)

        self._pill.setText(c.pill_label)
        self._pill.setStyleSheet(_PILL_STYLES[c.pill_class])
        self._timestamp_value.setText(c.timestamp_display)

        self._engine_check.blockSignals(True)
        self._engine_check.setChecked(c.edit_engine_on)
        self._engine_check.blockSignals(False)
        self._timestamp_edit.setText(c.edit_timestamp)

    def onDeleteWidget(self) -> None:
        """Close the backend on widget removal."""
        if self._service is not None:
            self._service.close()
        super().onDeleteWidget()
