# -*- coding: utf-8 -*-
"""
OWProcessSettings Widget - Grouped, inline-editable process settings.

Shows process settings records grouped by their group name with a
status header per group, lets the operator edit fields in place, and
saves all staged edits as one batch. Backend round trips run on a
ServiceExecutorPool and are polled with a QTimer.

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

# Standard library
from typing import Optional

# Third-party
from orangewidget import gui
from orangewidget.widget import OWBaseWidget, Msg

from AnyQt.QtWidgets import (
    QHeaderView,
    QLabel,
    QPushButton,
    QTreeWidget,
    QTreeWidgetItem,
)
from AnyQt.QtCore import Qt, QTimer
from AnyQt.QtGui import QBrush, QColor

# serialproc internal
from serialproc.core.projection import GroupStatus
from serialproc.core.staging import RecordLookupError, SettingsTableController
from serialproc.service.base import ServiceError
from serialproc.widgets._messages import WidgetNotifier


# (header, field) per column
_COLUMNS = [
    ("Name", 'name'),
    ("Active", 'active'),
    ("Group", 'group'),
    ("Handler Class", 'handler_class'),
    ("Object", 'target_object'),
    ("Order", 'order'),
]
_ACTIVE_COLUMN = 1

_HEADER_COLORS = {
    GroupStatus.ACTIVE: "#22c55e",
    GroupStatus.INACTIVE: "#ef4444",
    GroupStatus.MIXED: "#f59e0b",
}
_INACTIVE_ROW_COLOR = "#9ca3af"


class OWProcessSettings(OWBaseWidget):
    """Edit process settings grouped by group name.

    Edits are staged locally. Save sends every staged record to the
    backend and reloads; Cancel restores the last loaded values.
    """

    name = "Process Settings"
    description = "Edit, group, and order serial process settings"
    icon = "icons/process_settings.svg"
    category = "Serial Process Admin"
    priority = 10

    class Error(OWBaseWidget.Error):
        service_error = Msg("{}")
        backend_error = Msg("Failed to open backend: {}")
        edit_error = Msg("Invalid edit: {}")

    class Information(OWBaseWidget.Information):
        notice = Msg("{}")
        loading = Msg("Contacting backend...")

    want_main_area = True

    def __init__(self) -> None:
        super().__init__()

        self._service = None
        self._pool = None
        self._controller: Optional[SettingsTableController] = None
        self._future = None
        self._pending_kind: Optional[str] = None
        self._rebuilding = False

        # --- Control area ---
        box = gui.vBox(self.controlArea, "Changes")

        self._btn_save = QPushButton("Save Changes", self)
        self._btn_save.clicked.connect(self._on_save)
        box.layout().addWidget(self._btn_save)

        self._btn_cancel = QPushButton("Cancel Changes", self)
        self._btn_cancel.clicked.connect(self._on_cancel)
        box.layout().addWidget(self._btn_cancel)

        self._btn_refresh = QPushButton("Refresh", self)
        self._btn_refresh.clicked.connect(self._on_refresh)
        box.layout().addWidget(self._btn_refresh)

        self._pending_label = QLabel("No pending changes", self)
        box.layout().addWidget(self._pending_label)

        # --- Main area: grouped tree ---
        self._tree = QTreeWidget(self.mainArea)
        self._tree.setColumnCount(len(_COLUMNS))
        self._tree.setHeaderLabels([header for header, _ in _COLUMNS])
        header = self._tree.header()
        header.setStretchLastSection(True)
        header.setSectionResizeMode(QHeaderView.ResizeMode.ResizeToContents)
        self._tree.itemChanged.connect(self._on_item_changed)
        self.mainArea.layout().addWidget(self._tree)

        self._poll_timer = QTimer(self)
        self._poll_timer.timeout.connect(self._poll_future)

        self._open_backend()
        self._update_buttons()
        self._on_refresh()

    def _open_backend(self) -> None:
        """Open the resolved backend and the worker pool."""
        try:
            from serialproc.core.config import load_config
            from serialproc.service.pool import ServiceExecutorPool
            from serialproc.service.resolver import open_service

            config = load_config()
            self._service = open_service(config)
            self._pool = ServiceExecutorPool(max_workers=config.max_workers)
            self._poll_timer.setInterval(config.poll_interval_ms)
            self._controller = SettingsTableController(
                self._service, notifier=WidgetNotifier(self),
            )
            self.Error.backend_error.clear()
        except Exception as e:
            self.Error.backend_error(str(e))
            self._controller = None

    # ------------------------------------------------------------------
    # Background round trips
    # ------------------------------------------------------------------

    def _start(self, kind: str, future) -> None:
        self._pending_kind = kind
        self._future = future
        self.Information.loading()
        self._update_buttons()
        self._poll_timer.start()

    def _on_refresh(self) -> None:
        """Fetch the authoritative records in the background."""
        if self._controller is None or self._future is not None:
            return
        if self._controller.has_pending_changes():
            self.Information.notice(
                "Save or cancel pending changes before refreshing"
            )
            return
        self._start('fetch', self._pool.submit_fetch(self._controller))

    def _on_save(self) -> None:
        """Send staged edits in the background."""
        if self._controller is None or self._future is not None:
            return
        batch = self._controller.begin_commit()
        if batch is None:
            return
        self._start('commit', self._pool.submit_commit(self._controller, batch))

    def _poll_future(self) -> None:
        """Apply a finished round trip to the controller."""
        if self._future is None or not self._future.done():
            return

        self._poll_timer.stop()
        self.Information.loading.clear()
        future, kind = self._future, self._pending_kind
        self._future = None
        self._pending_kind = None

        try:
            result = future.result()
        except ServiceError as e:
            if kind == 'commit':
                self._controller.finish_commit(error=e)
            else:
                self._controller.report_load_error(e)
        else:
            if kind == 'commit':
                self._controller.finish_commit(result=result)
            else:
                self._controller.apply_load(result)

        self._rebuild_tree()

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def _on_cancel(self) -> None:
        if self._controller is None or self._future is not None:
            return
        self._controller.discard_changes()
        self._rebuild_tree()

    def _on_item_changed(self, item: QTreeWidgetItem, column: int) -> None:
        """Stage an inline edit made in the tree."""
        if self._rebuilding or self._controller is None:
            return
        record_id = item.data(0, Qt.ItemDataRole.UserRole)
        if record_id is None:
            return

        field_name = _COLUMNS[column][1]
        if column == _ACTIVE_COLUMN:
            value = item.checkState(column) == Qt.CheckState.Checked
        else:
            value = item.text(column)

        try:
            self._controller.apply_edit(record_id, field_name, value)
            self.Error.edit_error.clear()
        except (RecordLookupError, ValueError) as e:
            self.Error.edit_error(str(e))

        # Regrouping may move the edited row; rebuild outside the signal
        QTimer.singleShot(0, self._rebuild_tree)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _rebuild_tree(self) -> None:
        """Render the controller's grouped projection."""
        if self._controller is None:
            return

        self._rebuilding = True
        try:
            self._tree.clear()
            for group in self._controller.groups:
                header = QTreeWidgetItem([
                    f"{group.group_name}  ({group.status_text})"
                ])
                header.setFlags(Qt.ItemFlag.ItemIsEnabled)
                header.setForeground(
                    0, QBrush(QColor(_HEADER_COLORS[group.status]))
                )
                font = header.font(0)
                font.setBold(True)
                header.setFont(0, font)
                self._tree.addTopLevelItem(header)

                for record in group.records:
                    header.addChild(self._make_row(record))
                header.setExpanded(True)
                header.setFirstColumnSpanned(True)
        finally:
            self._rebuilding = False
        self._update_buttons()

    def _make_row(self, record) -> QTreeWidgetItem:
        item = QTreeWidgetItem([
            record.name,
            "",
            record.group or "",
            record.handler_class,
            record.target_object,
            "" if record.order is None else str(record.order),
        ])
        item.setData(0, Qt.ItemDataRole.UserRole, record.key)
        item.setFlags(
            Qt.ItemFlag.ItemIsEnabled
            | Qt.ItemFlag.ItemIsSelectable
            | Qt.ItemFlag.ItemIsEditable
            | Qt.ItemFlag.ItemIsUserCheckable
        )
        item.setCheckState(
            _ACTIVE_COLUMN,
            Qt.CheckState.Checked if record.active else Qt.CheckState.Unchecked,
        )
        if not record.active:
            for column in range(len(_COLUMNS)):
                item.setForeground(column, QBrush(QColor(_INACTIVE_ROW_COLOR)))
        return item

    def _update_buttons(self) -> None:
        busy = self._future is not None
        ready = self._controller is not None
        pending = ready and self._controller.has_pending_changes()

        self._btn_save.setEnabled(ready and pending and not busy)
        self._btn_cancel.setEnabled(ready and pending and not busy)
        # Refresh would replace the working set; Cancel first
        self._btn_refresh.setEnabled(ready and not busy and not pending)
        self._tree.setEnabled(not busy)
        if pending:
            count = len(self._controller.changes)
            self._pending_label.setText(f"{count} pending change(s)")
        else:
            self._pending_label.setText("No pending changes")

    def onDeleteWidget(self) -> None:
        """Clean up on widget removal."""
        self._poll_timer.stop()
        if self._pool is not None:
            self._pool.shutdown(wait=False)
        if self._service is not None:
            self._service.close()
        super().onDeleteWidget()
