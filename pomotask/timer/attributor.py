"""Credit completed work phases to the active task.

The engine announces each finished work phase through its
``work_completed`` signal.  ``SessionAttributor`` turns that message into
an increment request against the task store, run off the GUI thread.
Whatever the store does, nothing flows back into the engine: the local
cycle count stays authoritative and a failed write only means one
pomodoro went unrecorded for that task.
"""

from __future__ import annotations

import logging
from typing import Callable

from PyQt6.QtCore import QObject, QThreadPool, pyqtSignal

from .engine import TimerEngine

logger = logging.getLogger(__name__)

Job = Callable[[], None]
Dispatcher = Callable[[Job], None]


def thread_pool_dispatch(job: Job) -> None:
    """Run *job* on Qt's global thread pool."""
    QThreadPool.globalInstance().start(job)


class SessionAttributor(QObject):
    """Bridge between finished work phases and the task store.

    *store* needs ``pomodoro_count(task_id)`` and
    ``increment_pomodoro_count(task_id, current_count)``.

    Signals
    -------
    attributed(task_id: str, new_count: int)
    attribution_failed(task_id: str, message: str)
    """

    attributed = pyqtSignal(object, int)
    attribution_failed = pyqtSignal(object, str)

    def __init__(
        self,
        engine: TimerEngine,
        store,
        parent: QObject | None = None,
        *,
        dispatch: Dispatcher | None = None,
    ) -> None:
        super().__init__(parent)
        self._engine = engine
        self._store = store
        self._dispatch: Dispatcher = dispatch or thread_pool_dispatch
        engine.work_completed.connect(self._on_work_completed)

    @property
    def active_task_id(self) -> str | None:
        return self._engine.active_task_id

    def set_active_task(self, task_id: str | None) -> None:
        """Raises ``InvalidOperation`` while the timer is running."""
        self._engine.set_active_task(task_id)

    def clear_active_task(self) -> None:
        self._engine.clear_active_task()

    def attribute(self, task_id: str | None) -> None:
        """Queue a +1 for *task_id*.  Never raises; no-op for ``None``."""
        if task_id is None:
            return
        try:
            self._dispatch(lambda: self._increment(task_id))
        except Exception as exc:
            logger.exception("Could not dispatch attribution for task %s", task_id)
            self.attribution_failed.emit(task_id, str(exc))

    # ── internal ──────────────────────────────────────────────────────

    def _on_work_completed(self, task_id: str | None, _cycles: int) -> None:
        self.attribute(task_id)

    def _increment(self, task_id: str) -> None:
        try:
            current = self._store.pomodoro_count(task_id)
            self._store.increment_pomodoro_count(task_id, current)
        except Exception as exc:
            logger.exception("Failed to record pomodoro for task %s", task_id)
            self.attribution_failed.emit(task_id, str(exc))
            return
        logger.info("Recorded pomodoro %d for task %s", current + 1, task_id)
        self.attributed.emit(task_id, current + 1)
