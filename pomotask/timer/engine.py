"""Countdown state machine for PomoTask.

Phases
------
WORK          Focus interval; credited to the active task on completion.
SHORT_BREAK   Break after a work phase.
LONG_BREAK    Break after every ``cycles_per_long_break``-th work phase.

Transitions
-----------
WORK → SHORT_BREAK | LONG_BREAK     (tick reaches 0)
SHORT_BREAK | LONG_BREAK → WORK     (tick reaches 0)
Any → Any                           (select_phase, idle only)

The clock stops at every boundary; ``start()`` must be called again to
begin the next phase.  The engine owns no timer: something else (see
``TickDriver``) calls ``tick()`` once per second while it is running.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from enum import Enum

from PyQt6.QtCore import QObject, pyqtSignal

from ..errors import InvalidArgument, InvalidOperation

logger = logging.getLogger(__name__)


# ── enums ─────────────────────────────────────────────────────────────────


class Phase(Enum):
    WORK = "work"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"


# ── configuration ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class DurationConfig:
    """Phase lengths in minutes plus the long-break cadence."""

    work_minutes: int = 25
    short_break_minutes: int = 5
    long_break_minutes: int = 15
    cycles_per_long_break: int = 4

    def validate(self) -> None:
        """Raise ``InvalidArgument`` unless every value is an int >= 1."""
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidArgument(f"{f.name} must be an integer, got {value!r}")
            if value < 1:
                raise InvalidArgument(f"{f.name} must be at least 1, got {value}")

    def minutes_for(self, phase: Phase) -> int:
        if phase == Phase.WORK:
            return self.work_minutes
        if phase == Phase.SHORT_BREAK:
            return self.short_break_minutes
        if phase == Phase.LONG_BREAK:
            return self.long_break_minutes
        raise InvalidArgument(f"Unknown phase {phase!r}")

    def seconds_for(self, phase: Phase) -> int:
        return self.minutes_for(phase) * 60


@dataclass(frozen=True)
class TimerSnapshot:
    phase: Phase
    remaining: int
    is_running: bool
    completed_work_cycles: int
    active_task_id: str | None
    total_duration: int


def format_clock(seconds: int) -> str:
    """Format *seconds* as ``MM:SS``."""
    minutes, secs = divmod(seconds, 60)
    return f"{minutes:02d}:{secs:02d}"


# ── engine ────────────────────────────────────────────────────────────────


class TimerEngine(QObject):
    """Single authoritative Pomodoro countdown.

    All commands are expected on the thread that owns the engine (the Qt
    GUI thread); ``tick()`` is not reentrant.

    Signals
    -------
    ticked(remaining_seconds: int)
        Emitted after every accepted tick.
    running_changed(is_running: bool)
        Emitted whenever the clock starts or stops.
    phase_changed(phase: Phase)
        Emitted when the phase changes, by transition or ``select_phase``.
    phase_completed(completed: Phase, next: Phase)
        Emitted after a tick-driven transition only.
    work_completed(task_id: str | None, completed_cycles: int)
        Emitted once per naturally completed work phase, carrying the
        active task at that moment.  Receivers must not raise.
    durations_changed(config: DurationConfig)
    active_task_changed(task_id: str | None)
    """

    ticked = pyqtSignal(int)
    running_changed = pyqtSignal(bool)
    phase_changed = pyqtSignal(object)
    phase_completed = pyqtSignal(object, object)
    work_completed = pyqtSignal(object, int)
    durations_changed = pyqtSignal(object)
    active_task_changed = pyqtSignal(object)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        config: DurationConfig | None = None,
    ) -> None:
        super().__init__(parent)

        config = config or DurationConfig()
        config.validate()
        self._config: DurationConfig = config

        self._phase: Phase = Phase.WORK
        self._remaining: int = config.seconds_for(Phase.WORK)
        self._is_running: bool = False
        self._completed_work_cycles: int = 0
        self._active_task_id: str | None = None

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def remaining(self) -> int:
        """Seconds left on the clock."""
        return self._remaining

    @property
    def is_running(self) -> bool:
        return self._is_running

    @property
    def completed_work_cycles(self) -> int:
        """Work phases finished during this engine's lifetime."""
        return self._completed_work_cycles

    @property
    def active_task_id(self) -> str | None:
        return self._active_task_id

    @property
    def config(self) -> DurationConfig:
        return self._config

    @property
    def total_duration(self) -> int:
        """Full length of the current phase in seconds."""
        return self._config.seconds_for(self._phase)

    @property
    def percent_complete(self) -> float:
        """0.0 → 1.0 progress through the current phase."""
        total = self.total_duration
        if total <= 0:
            return 0.0
        elapsed = total - self._remaining
        return max(0.0, min(1.0, elapsed / total))

    def duration_for(self, phase: Phase) -> int:
        return self._config.seconds_for(phase)

    def snapshot(self) -> TimerSnapshot:
        return TimerSnapshot(
            phase=self._phase,
            remaining=self._remaining,
            is_running=self._is_running,
            completed_work_cycles=self._completed_work_cycles,
            active_task_id=self._active_task_id,
            total_duration=self.total_duration,
        )

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Start the clock.  No-op if already running."""
        if self._is_running:
            return
        logger.debug("start %s with %ds left", self._phase.value, self._remaining)
        self._set_running(True)

    def pause(self) -> None:
        """Stop the clock, keeping phase and remaining time."""
        if not self._is_running:
            return
        logger.debug("pause %s with %ds left", self._phase.value, self._remaining)
        self._set_running(False)

    def reset(self) -> None:
        """Stop the clock and refill the current phase."""
        self._remaining = self._config.seconds_for(self._phase)
        self._set_running(False)
        self.ticked.emit(self._remaining)

    def select_phase(self, phase: Phase) -> None:
        """Jump to *phase*.  Does not count a cycle or attribute."""
        self._require_idle("switch phase")
        if not isinstance(phase, Phase):
            raise InvalidArgument(f"Unknown phase {phase!r}")
        self._phase = phase
        self._remaining = self._config.seconds_for(phase)
        self.phase_changed.emit(phase)
        self.ticked.emit(self._remaining)

    def set_durations(self, config: DurationConfig) -> None:
        """Replace the duration config and refill the current phase."""
        self._require_idle("change durations")
        config.validate()
        self._config = config
        self._remaining = config.seconds_for(self._phase)
        logger.info(
            "durations set: work=%d short=%d long=%d every=%d",
            config.work_minutes,
            config.short_break_minutes,
            config.long_break_minutes,
            config.cycles_per_long_break,
        )
        self.durations_changed.emit(config)
        self.ticked.emit(self._remaining)

    def set_active_task(self, task_id: str | None) -> None:
        """Choose the task credited when the current work phase ends."""
        self._require_idle("change the active task")
        if task_id == self._active_task_id:
            return
        self._active_task_id = task_id
        self.active_task_changed.emit(task_id)

    def clear_active_task(self) -> None:
        self.set_active_task(None)

    def tick(self) -> None:
        """Advance the clock by one second.

        Reaching zero completes the phase within the same tick, so a
        phase of N seconds takes exactly N ticks.  Ticks delivered while
        idle are ignored.
        """
        if not self._is_running:
            return
        self._remaining = max(0, self._remaining - 1)
        if self._remaining <= 0:
            self._finish_phase()
        else:
            self.ticked.emit(self._remaining)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _finish_phase(self) -> None:
        completed = self._phase

        if completed == Phase.WORK:
            self._completed_work_cycles += 1
            logger.info(
                "work phase %d complete (task=%s)",
                self._completed_work_cycles,
                self._active_task_id,
            )
            self.work_completed.emit(
                self._active_task_id, self._completed_work_cycles,
            )
            if self._completed_work_cycles % self._config.cycles_per_long_break == 0:
                next_phase = Phase.LONG_BREAK
            else:
                next_phase = Phase.SHORT_BREAK
        else:
            logger.info("%s complete", completed.value)
            next_phase = Phase.WORK

        self._phase = next_phase
        self._remaining = self._config.seconds_for(next_phase)
        self._set_running(False)

        self.phase_changed.emit(next_phase)
        self.phase_completed.emit(completed, next_phase)
        self.ticked.emit(self._remaining)

    def _require_idle(self, action: str) -> None:
        if self._is_running:
            raise InvalidOperation(f"Cannot {action} while the timer is running")

    def _set_running(self, running: bool) -> None:
        if self._is_running == running:
            return
        self._is_running = running
        self.running_changed.emit(running)
