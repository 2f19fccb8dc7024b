"""Once-per-second trigger that drives a ``TimerEngine``."""

from __future__ import annotations

from PyQt6.QtCore import QObject, QTimer

from .engine import TimerEngine

TICK_INTERVAL_MS = 1000


class TickDriver(QObject):
    """Calls ``engine.tick()`` every second while the engine is running.

    The ``QTimer`` follows ``engine.running_changed``, so pausing,
    resetting or finishing a phase stops it.
    """

    def __init__(
        self,
        engine: TimerEngine,
        parent: QObject | None = None,
        *,
        interval_ms: int = TICK_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)
        self._engine = engine
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(interval_ms)
        self._qt_timer.timeout.connect(engine.tick)
        engine.running_changed.connect(self._on_running_changed)
        self._attached = True
        if engine.is_running:
            self._qt_timer.start()

    @property
    def is_active(self) -> bool:
        return self._qt_timer.isActive()

    def stop(self) -> None:
        """Detach from the engine; used on teardown."""
        self._qt_timer.stop()
        if self._attached:
            self._engine.running_changed.disconnect(self._on_running_changed)
            self._attached = False

    def _on_running_changed(self, running: bool) -> None:
        if running:
            self._qt_timer.start()
        else:
            self._qt_timer.stop()
