"""Task list for the Tasks tab.

Add tasks with an optional due date, tick them off, delete them, and
see a one-line summary of progress.
"""

from __future__ import annotations

from datetime import date

from PyQt6.QtCore import Qt, QDate, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
    QLineEdit, QDateEdit, QCheckBox, QListWidget, QListWidgetItem,
)

from ..errors import PomoTaskError
from ..tasks.stats import summarize
from ..tasks.store import TaskRecord, TaskStore


def task_item_text(task: TaskRecord) -> str:
    parts = [task.title]
    if task.due_date is not None:
        parts.append(f"due {task.due_date.isoformat()}")
    parts.append(f"{task.pomodoros} pomos")
    return " · ".join(parts)


class TaskListWidget(QWidget):
    """Editable list of tasks backed by a ``TaskStore``."""

    error = pyqtSignal(str)

    def __init__(self, store: TaskStore, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._store = store
        self._editing_id: str | None = None
        self._build_ui()
        self._connect_signals()
        self.refresh()

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(24, 20, 24, 20)
        layout.setSpacing(10)

        add_row = QHBoxLayout()
        self._title_input = QLineEdit(self)
        self._title_input.setPlaceholderText("New task")
        self._title_input.setMaxLength(255)
        self._due_cb = QCheckBox("Due", self)
        self._due_edit = QDateEdit(self)
        self._due_edit.setCalendarPopup(True)
        self._due_edit.setDate(QDate.currentDate())
        self._due_edit.setEnabled(False)
        self._add_btn = QPushButton("Add", self)
        add_row.addWidget(self._title_input, 1)
        add_row.addWidget(self._due_cb)
        add_row.addWidget(self._due_edit)
        add_row.addWidget(self._add_btn)
        layout.addLayout(add_row)

        self._list = QListWidget(self)
        layout.addWidget(self._list, 1)

        bottom = QHBoxLayout()
        self._stats_label = QLabel(self)
        self._stats_label.setObjectName("statsLabel")
        self._edit_btn = QPushButton("Edit", self)
        self._delete_btn = QPushButton("Delete", self)
        self._delete_btn.setObjectName("dangerButton")
        bottom.addWidget(self._stats_label, 1)
        bottom.addWidget(self._edit_btn)
        bottom.addWidget(self._delete_btn)
        layout.addLayout(bottom)

    def _connect_signals(self) -> None:
        self._add_btn.clicked.connect(self._on_add)
        self._title_input.returnPressed.connect(self._on_add)
        self._due_cb.toggled.connect(self._due_edit.setEnabled)
        self._edit_btn.clicked.connect(self._on_edit)
        self._delete_btn.clicked.connect(self._on_delete)
        self._list.itemChanged.connect(self._on_item_changed)
        # Queued: toggling from itemChanged must not rebuild the list
        # underneath the item being edited.
        self._store.tasks_changed.connect(
            self.refresh, Qt.ConnectionType.QueuedConnection,
        )

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_add(self) -> None:
        due: date | None = None
        if self._due_cb.isChecked():
            due = self._due_edit.date().toPyDate()
        try:
            if self._editing_id is None:
                self._store.add_task(self._title_input.text(), due)
            else:
                self._store.update_task(self._editing_id, self._title_input.text(), due)
        except PomoTaskError as exc:
            self.error.emit(str(exc))
            return
        self._end_edit()

    def _on_edit(self) -> None:
        """Load the selected task into the input row; Save writes it back."""
        item = self._list.currentItem()
        if item is None:
            return
        task = self._store.get_task(item.data(Qt.ItemDataRole.UserRole))
        if task is None:
            return
        self._editing_id = task.id
        self._title_input.setText(task.title)
        self._due_cb.setChecked(task.due_date is not None)
        if task.due_date is not None:
            self._due_edit.setDate(QDate(task.due_date.year, task.due_date.month, task.due_date.day))
        self._add_btn.setText("Save")
        self._title_input.setFocus()

    def _end_edit(self) -> None:
        self._editing_id = None
        self._add_btn.setText("Add")
        self._title_input.clear()
        self._due_cb.setChecked(False)

    def _on_item_changed(self, item: QListWidgetItem) -> None:
        task_id = item.data(Qt.ItemDataRole.UserRole)
        checked = item.checkState() == Qt.CheckState.Checked
        task = self._store.get_task(task_id)
        if task is not None and task.completed != checked:
            self._store.toggle_task(task_id)

    def _on_delete(self) -> None:
        item = self._list.currentItem()
        if item is None:
            return
        try:
            self._store.delete_task(item.data(Qt.ItemDataRole.UserRole))
        except PomoTaskError as exc:
            self.error.emit(str(exc))

    # ── refresh ───────────────────────────────────────────────────────────

    def refresh(self) -> None:
        tasks = self._store.list_tasks()
        self._list.blockSignals(True)
        self._list.clear()
        for task in tasks:
            item = QListWidgetItem(task_item_text(task))
            item.setData(Qt.ItemDataRole.UserRole, task.id)
            item.setFlags(item.flags() | Qt.ItemFlag.ItemIsUserCheckable)
            item.setCheckState(
                Qt.CheckState.Checked if task.completed else Qt.CheckState.Unchecked
            )
            self._list.addItem(item)
        self._list.blockSignals(False)

        stats = summarize(tasks)
        self._stats_label.setText(
            f"{stats.completed}/{stats.total} done ({stats.completion_rate}%) · "
            f"{stats.total_pomodoros} pomodoros · {stats.overdue} overdue\n"
            f"{stats.incomplete} open · {stats.due_today} due today · "
            f"{stats.average_pomodoros} pomodoros per task"
        )

    @property
    def count(self) -> int:
        return self._list.count()
