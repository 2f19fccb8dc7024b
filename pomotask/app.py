"""Main application window for PomoTask."""

from __future__ import annotations

import logging
from pathlib import Path

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import QMainWindow, QMessageBox, QTabWidget

from .audio.sounds import SoundManager
from .errors import PomoTaskError
from .settings import Settings, load_settings, save_settings
from .tasks.store import TaskStore
from .timer.attributor import Dispatcher, SessionAttributor
from .timer.driver import TickDriver
from .timer.engine import Phase, TimerEngine
from .ui.settings_dialog import SettingsDialog
from .ui.styles import build_stylesheet
from .ui.task_list import TaskListWidget
from .ui.timer_widget import TimerWidget

logger = logging.getLogger(__name__)

STATUS_TIMEOUT_MS = 5000


class PomoTaskApp(QMainWindow):
    """Main application window."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        dispatch: Dispatcher | None = None,
        sounds_dir: Path | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle("PomoTask")
        self.setMinimumSize(480, 640)

        # ── geometry save timer ──────────────────────────────────────
        self._geometry_save_timer = QTimer(self)
        self._geometry_save_timer.setSingleShot(True)
        self._geometry_save_timer.setInterval(500)
        self._geometry_save_timer.timeout.connect(self._save_geometry)

        # ── settings ──────────────────────────────────────────────────
        self._settings: Settings = settings or load_settings()

        # ── engines ───────────────────────────────────────────────────
        self._store = TaskStore(self)
        try:
            config = self._settings.duration_config()
            self._timer_engine = TimerEngine(self, config=config)
        except PomoTaskError as exc:
            logger.warning("Invalid saved durations (%s); using defaults", exc)
            self._timer_engine = TimerEngine(self)
        self._attributor = SessionAttributor(
            self._timer_engine, self._store, self, dispatch=dispatch,
        )
        self._driver = TickDriver(self._timer_engine, self)

        self._sound_manager = SoundManager(self, sounds_dir=sounds_dir)
        self._sound_manager.set_volume(self._settings.sound_volume)
        self._sound_manager.set_enabled(self._settings.sound_enabled)

        # ── widgets ───────────────────────────────────────────────────
        self._tabs = QTabWidget(self)
        self._timer_widget = TimerWidget(
            self._timer_engine, self._attributor, self._store, self._tabs,
        )
        self._task_list = TaskListWidget(self._store, self._tabs)
        self._tabs.addTab(self._timer_widget, "Focus")
        self._tabs.addTab(self._task_list, "Tasks")
        self.setCentralWidget(self._tabs)
        self.setStyleSheet(build_stylesheet())

        self._build_menu_bar()
        self._connect_signals()
        self._restore_geometry()

    # ══════════════════════════════════════════════════════════════════
    #  BUILD
    # ══════════════════════════════════════════════════════════════════

    def _build_menu_bar(self) -> None:
        menu_bar = self.menuBar()
        app_menu = menu_bar.addMenu("PomoTask")

        prefs_action = QAction("Settings…", self)
        prefs_action.setMenuRole(QAction.MenuRole.PreferencesRole)
        prefs_action.setShortcut(QKeySequence("Ctrl+,"))
        prefs_action.triggered.connect(self._open_settings)
        app_menu.addAction(prefs_action)

        about_action = QAction("About PomoTask", self)
        about_action.setMenuRole(QAction.MenuRole.AboutRole)
        about_action.triggered.connect(self._show_about)
        app_menu.addAction(about_action)

        quit_action = QAction("Quit", self)
        quit_action.setMenuRole(QAction.MenuRole.QuitRole)
        quit_action.setShortcut(QKeySequence("Ctrl+Q"))
        quit_action.triggered.connect(self.close)
        app_menu.addAction(quit_action)

    def _connect_signals(self) -> None:
        self._timer_engine.phase_completed.connect(self._on_phase_completed)
        self._attributor.attribution_failed.connect(self._on_attribution_failed)
        self._timer_widget.error.connect(self._show_status)
        self._task_list.error.connect(self._show_status)

    def _show_about(self) -> None:
        QMessageBox.about(
            self,
            "About PomoTask",
            "<h3>PomoTask</h3>"
            "<p>A Pomodoro timer that credits each focus session "
            "to the task you were working on.</p>",
        )

    # ══════════════════════════════════════════════════════════════════
    #  TIMER EVENTS
    # ══════════════════════════════════════════════════════════════════

    def _on_phase_completed(self, completed: Phase, next_phase: Phase) -> None:
        if completed == Phase.WORK:
            self._sound_manager.play("work_complete")
            self._show_status("Focus session done. Time for a break.")
        else:
            self._sound_manager.play("break_complete")
            self._show_status("Break over. Ready when you are.")

    def _on_attribution_failed(self, task_id: str, message: str) -> None:
        self._show_status(f"Could not record pomodoro for task: {message}")

    def _show_status(self, message: str) -> None:
        self.statusBar().showMessage(message, STATUS_TIMEOUT_MS)

    # ══════════════════════════════════════════════════════════════════
    #  SETTINGS
    # ══════════════════════════════════════════════════════════════════

    def _open_settings(self) -> None:
        dlg = SettingsDialog(
            self._settings,
            parent=self,
            timer_locked=self._timer_engine.is_running,
        )
        if dlg.exec():
            self._apply_settings(dlg.settings)

    def _apply_settings(self, new_settings: Settings) -> None:
        """Push edited settings into the engine and sound manager, then save."""
        config = new_settings.duration_config()
        if config != self._timer_engine.config:
            try:
                self._timer_engine.set_durations(config)
            except PomoTaskError as exc:
                self._show_status(str(exc))
                new_settings = new_settings.with_durations(self._timer_engine.config)

        self._sound_manager.set_volume(new_settings.sound_volume)
        self._sound_manager.set_enabled(new_settings.sound_enabled)

        self._settings = new_settings
        save_settings(self._settings)

    # ══════════════════════════════════════════════════════════════════
    #  GEOMETRY
    # ══════════════════════════════════════════════════════════════════

    def _restore_geometry(self) -> None:
        s = self._settings
        if s.window_x is not None and s.window_y is not None:
            self.move(s.window_x, s.window_y)
        if s.window_width and s.window_height:
            self.resize(s.window_width, s.window_height)

    def _save_geometry(self) -> None:
        if not self.isVisible():
            return
        pos = self.pos()
        size = self.size()
        self._settings.window_x = pos.x()
        self._settings.window_y = pos.y()
        self._settings.window_width = size.width()
        self._settings.window_height = size.height()
        save_settings(self._settings)

    def _schedule_geometry_save(self) -> None:
        """Debounce geometry saves; restart 500ms timer on each move/resize."""
        if hasattr(self, "_geometry_save_timer"):
            self._geometry_save_timer.start()

    # ══════════════════════════════════════════════════════════════════
    #  QT EVENTS
    # ══════════════════════════════════════════════════════════════════

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._save_geometry()
        self._driver.stop()
        self._timer_engine.pause()
        event.accept()

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self._schedule_geometry_save()

    def moveEvent(self, event) -> None:  # type: ignore[override]
        super().moveEvent(event)
        self._schedule_geometry_save()

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        """Space toggles start/pause."""
        if event.key() == Qt.Key.Key_Space and not event.modifiers():
            if self._timer_engine.is_running:
                self._timer_engine.pause()
            else:
                self._timer_engine.start()
            event.accept()
            return
        super().keyPressEvent(event)

    # ══════════════════════════════════════════════════════════════════
    #  ACCESSORS
    # ══════════════════════════════════════════════════════════════════

    @property
    def timer_engine(self) -> TimerEngine:
        return self._timer_engine

    @property
    def attributor(self) -> SessionAttributor:
        return self._attributor

    @property
    def store(self) -> TaskStore:
        return self._store
