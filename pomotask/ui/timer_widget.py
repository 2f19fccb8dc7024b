"""Main timer display widget for the Focus tab.

Layout (top → bottom):
    - Phase selector (Work / Short Break / Long Break)
    - Clock and progress bar
    - Start/Pause and Reset buttons
    - Completed-cycle counter
    - Task selector with clear button
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
    QComboBox, QProgressBar, QButtonGroup,
)

from ..errors import InvalidOperation
from ..tasks.store import TaskStore
from ..timer.attributor import SessionAttributor
from ..timer.engine import TimerEngine, Phase, format_clock
from .styles import phase_color

PHASE_LABELS: dict[Phase, str] = {
    Phase.WORK:        "Work",
    Phase.SHORT_BREAK: "Short Break",
    Phase.LONG_BREAK:  "Long Break",
}

NO_TASK_TEXT = "Select a task..."


def task_option_text(title: str, pomodoros: int) -> str:
    return f"{title} (Pomos: {pomodoros})"


class TimerWidget(QWidget):
    """The timer card shown in the Focus tab."""

    error = pyqtSignal(str)

    def __init__(
        self,
        engine: TimerEngine,
        attributor: SessionAttributor,
        store: TaskStore,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._engine = engine
        self._attributor = attributor
        self._store = store
        self._build_ui()
        self._connect_signals()
        self.refresh_tasks()
        self._on_phase_changed(engine.phase)
        self._on_running_changed(engine.is_running)

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(32, 24, 32, 28)
        layout.setSpacing(12)

        # ── phase selector ───────────────────────────────────────────
        phase_row = QHBoxLayout()
        phase_row.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._phase_group = QButtonGroup(self)
        self._phase_group.setExclusive(True)
        self._phase_buttons: dict[Phase, QPushButton] = {}
        for phase in Phase:
            btn = QPushButton(self)
            btn.setObjectName("phaseButton")
            btn.setCheckable(True)
            self._phase_group.addButton(btn)
            self._phase_buttons[phase] = btn
            phase_row.addWidget(btn)
        layout.addLayout(phase_row)
        self._refresh_phase_labels()

        # ── clock ────────────────────────────────────────────────────
        self._clock = QLabel(self)
        self._clock.setObjectName("clockLabel")
        self._clock.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._clock)

        self._phase_label = QLabel(self)
        self._phase_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._phase_label)

        self._progress = QProgressBar(self)
        self._progress.setRange(0, 1000)
        self._progress.setTextVisible(False)
        layout.addWidget(self._progress)

        # ── main controls ────────────────────────────────────────────
        btn_row = QHBoxLayout()
        btn_row.setSpacing(12)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._start_pause_btn = QPushButton("Start", self)
        self._start_pause_btn.setObjectName("primaryButton")
        self._reset_btn = QPushButton("Reset", self)

        btn_row.addWidget(self._start_pause_btn)
        btn_row.addWidget(self._reset_btn)
        layout.addLayout(btn_row)

        self._cycles_label = QLabel(self)
        self._cycles_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._cycles_label)

        # ── task selector ────────────────────────────────────────────
        layout.addWidget(QLabel("Focusing on task:", self))
        task_row = QHBoxLayout()
        self._task_combo = QComboBox(self)
        self._clear_task_btn = QPushButton("✕", self)
        self._clear_task_btn.setObjectName("dangerButton")
        self._clear_task_btn.setToolTip("Clear task")
        task_row.addWidget(self._task_combo, 1)
        task_row.addWidget(self._clear_task_btn)
        layout.addLayout(task_row)

        self._hint = QLabel("Stop the timer to change the focused task.", self)
        self._hint.setObjectName("hintLabel")
        layout.addWidget(self._hint)

        layout.addStretch()

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._start_pause_btn.clicked.connect(self._on_start_pause)
        self._reset_btn.clicked.connect(self._engine.reset)
        for phase, btn in self._phase_buttons.items():
            btn.clicked.connect(lambda _checked=False, p=phase: self._on_select_phase(p))
        self._task_combo.activated.connect(self._on_task_activated)
        self._clear_task_btn.clicked.connect(self._on_clear_task)

        self._engine.ticked.connect(self._refresh_display)
        self._engine.running_changed.connect(self._on_running_changed)
        self._engine.phase_changed.connect(self._on_phase_changed)
        self._engine.durations_changed.connect(lambda _cfg: self._refresh_phase_labels())
        self._engine.active_task_changed.connect(lambda _tid: self._sync_task_combo())
        self._store.tasks_changed.connect(self.refresh_tasks)

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_start_pause(self) -> None:
        if self._engine.is_running:
            self._engine.pause()
        else:
            self._engine.start()

    def _on_select_phase(self, phase: Phase) -> None:
        try:
            self._engine.select_phase(phase)
        except InvalidOperation as exc:
            self.error.emit(str(exc))
            self._sync_phase_buttons()

    def _on_task_activated(self, index: int) -> None:
        task_id = self._task_combo.itemData(index) or None
        try:
            self._attributor.set_active_task(task_id)
        except InvalidOperation as exc:
            self.error.emit(str(exc))
            self._sync_task_combo()

    def _on_clear_task(self) -> None:
        try:
            self._attributor.clear_active_task()
        except InvalidOperation as exc:
            self.error.emit(str(exc))

    def _on_running_changed(self, running: bool) -> None:
        self._start_pause_btn.setText("Pause" if running else "Start")
        for btn in self._phase_buttons.values():
            btn.setEnabled(not running)
        self._task_combo.setEnabled(not running)
        self._clear_task_btn.setEnabled(
            not running and self._attributor.active_task_id is not None
        )
        self._hint.setVisible(running)
        if not running:
            self._drop_unlisted_task()

    def _on_phase_changed(self, phase: Phase) -> None:
        self._sync_phase_buttons()
        self._phase_label.setText(PHASE_LABELS[phase])
        color = phase_color(phase)
        self._progress.setStyleSheet(
            f"QProgressBar::chunk {{ background-color: {color}; border-radius: 4px; }}"
        )
        self._refresh_display(self._engine.remaining)

    def _refresh_display(self, remaining: int) -> None:
        self._clock.setText(format_clock(remaining))
        self._progress.setValue(int(self._engine.percent_complete * 1000))
        self._cycles_label.setText(
            f"Cycles completed: {self._engine.completed_work_cycles}"
        )

    # ── tasks ─────────────────────────────────────────────────────────────

    def refresh_tasks(self) -> None:
        """Reload the task selector from the store."""
        self._task_combo.blockSignals(True)
        self._task_combo.clear()
        self._task_combo.addItem(NO_TASK_TEXT, "")
        for task in self._store.incomplete_tasks():
            self._task_combo.addItem(task_option_text(task.title, task.pomodoros), task.id)
        self._task_combo.blockSignals(False)
        if not self._drop_unlisted_task():
            self._sync_task_combo()

    def _drop_unlisted_task(self) -> bool:
        """Clear an active task that is no longer offered (completed or
        deleted).  Only possible while idle; returns True if cleared."""
        active = self._attributor.active_task_id
        if active is None or self._engine.is_running:
            return False
        if self._task_combo.findData(active) >= 0:
            return False
        self._attributor.clear_active_task()
        return True

    def _sync_task_combo(self) -> None:
        index = self._task_combo.findData(self._attributor.active_task_id or "")
        self._task_combo.setCurrentIndex(max(0, index))
        self._clear_task_btn.setEnabled(
            not self._engine.is_running and self._attributor.active_task_id is not None
        )

    def _sync_phase_buttons(self) -> None:
        self._phase_buttons[self._engine.phase].setChecked(True)

    def _refresh_phase_labels(self) -> None:
        for phase, btn in self._phase_buttons.items():
            minutes = self._engine.config.minutes_for(phase)
            btn.setText(f"{PHASE_LABELS[phase]} ({minutes} min)")
