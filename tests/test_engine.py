"""Tests for the PomoTask timer engine.

Covers: initial state, start/pause/reset, tick countdown, work/break
transitions and long-break cadence, select_phase and set_durations
guards, active task guard, signals, DurationConfig validation.
"""

import pytest

from pomotask.errors import InvalidArgument, InvalidOperation
from pomotask.timer.engine import (
    TimerEngine, Phase, DurationConfig, TimerSnapshot, format_clock,
)

from helpers import SignalCollector, run_ticks, complete_phase


# ═══════════════════════════════════════════════════════════════════════════
#  INITIAL STATE
# ═══════════════════════════════════════════════════════════════════════════


class TestInitialState:

    def test_starts_idle_in_work(self, engine):
        assert engine.phase == Phase.WORK
        assert engine.remaining == 25 * 60
        assert engine.is_running is False
        assert engine.completed_work_cycles == 0
        assert engine.active_task_id is None

    def test_custom_config_seeds_remaining(self, qapp):
        engine = TimerEngine(config=DurationConfig(work_minutes=50))
        assert engine.remaining == 50 * 60

    def test_invalid_config_rejected(self, qapp):
        with pytest.raises(InvalidArgument):
            TimerEngine(config=DurationConfig(work_minutes=0))

    def test_snapshot(self, engine):
        snap = engine.snapshot()
        assert snap == TimerSnapshot(
            phase=Phase.WORK,
            remaining=1500,
            is_running=False,
            completed_work_cycles=0,
            active_task_id=None,
            total_duration=1500,
        )


# ═══════════════════════════════════════════════════════════════════════════
#  START / PAUSE / RESET
# ═══════════════════════════════════════════════════════════════════════════


class TestStartPauseReset:

    def test_start_sets_running(self, engine):
        engine.start()
        assert engine.is_running is True

    def test_start_does_not_touch_remaining(self, engine):
        before = engine.remaining
        engine.start()
        assert engine.remaining == before

    def test_start_twice_is_same_as_once(self, engine):
        c = SignalCollector()
        engine.running_changed.connect(c)
        engine.start()
        engine.start()
        assert engine.is_running is True
        assert c.items == [True]

    def test_pause_twice_is_same_as_once(self, engine):
        engine.start()
        run_ticks(engine, 5)
        c = SignalCollector()
        engine.running_changed.connect(c)
        engine.pause()
        engine.pause()
        assert engine.is_running is False
        assert engine.remaining == 1500 - 5
        assert c.items == [False]

    def test_pause_when_idle_is_noop(self, engine):
        engine.pause()
        assert engine.is_running is False
        assert engine.remaining == 1500

    def test_pause_then_start_keeps_remaining(self, engine):
        engine.start()
        run_ticks(engine, 10)
        remaining = engine.remaining
        engine.pause()
        engine.start()
        assert engine.remaining == remaining
        assert engine.phase == Phase.WORK

    def test_resume_continues_countdown(self, engine):
        engine.start()
        run_ticks(engine, 10)
        engine.pause()
        engine.start()
        engine.tick()
        assert engine.remaining == 1500 - 11

    def test_reset_stops_and_refills(self, engine):
        engine.start()
        run_ticks(engine, 42)
        engine.reset()
        assert engine.is_running is False
        assert engine.remaining == 1500
        assert engine.phase == Phase.WORK

    def test_reset_keeps_phase_and_cycles(self, engine):
        complete_phase(engine)
        engine.start()
        run_ticks(engine, 30)
        engine.reset()
        assert engine.phase == Phase.SHORT_BREAK
        assert engine.remaining == 5 * 60
        assert engine.completed_work_cycles == 1

    @pytest.mark.parametrize("config", [
        DurationConfig(),
        DurationConfig(1, 1, 1, 1),
        DurationConfig(50, 10, 30, 3),
    ])
    @pytest.mark.parametrize("phase", list(Phase))
    def test_reset_matches_phase_duration(self, engine, config, phase):
        engine.set_durations(config)
        engine.select_phase(phase)
        engine.start()
        engine.tick()
        engine.reset()
        assert engine.remaining == config.minutes_for(phase) * 60


# ═══════════════════════════════════════════════════════════════════════════
#  TICK / COUNTDOWN
# ═══════════════════════════════════════════════════════════════════════════


class TestTick:

    def test_tick_decrements_by_one(self, engine):
        engine.start()
        engine.tick()
        assert engine.remaining == 1499

    def test_tick_ignored_when_idle(self, engine):
        engine.tick()
        assert engine.remaining == 1500
        assert engine.phase == Phase.WORK

    def test_tick_ignored_after_pause(self, engine):
        engine.start()
        engine.tick()
        engine.pause()
        engine.tick()
        assert engine.remaining == 1499

    def test_ticked_signal_carries_remaining(self, engine):
        c = SignalCollector()
        engine.ticked.connect(c)
        engine.start()
        engine.tick()
        assert c.last == 1499

    def test_full_work_phase_takes_exactly_duration_ticks(self, engine):
        engine.start()
        run_ticks(engine, 1499)
        assert engine.phase == Phase.WORK
        assert engine.remaining == 1
        engine.tick()
        assert engine.phase == Phase.SHORT_BREAK
        assert engine.completed_work_cycles == 1

    def test_remaining_stays_within_phase_bounds(self, qapp):
        engine = TimerEngine(config=DurationConfig(1, 1, 1, 2))
        for _ in range(4):
            engine.start()
            while engine.is_running:
                engine.tick()
                assert 0 < engine.remaining <= engine.total_duration

    def test_percent_complete(self, engine):
        engine.start()
        run_ticks(engine, 750)
        assert engine.percent_complete == pytest.approx(0.5)

    def test_percent_starts_at_zero(self, engine):
        assert engine.percent_complete == 0.0


# ═══════════════════════════════════════════════════════════════════════════
#  PHASE TRANSITIONS
# ═══════════════════════════════════════════════════════════════════════════


class TestPhaseTransitions:

    def test_work_session_scenario(self, engine):
        """25/5/15 × 4 with task t1: 1500 ticks land on a short break."""
        c = SignalCollector()
        engine.work_completed.connect(c)
        engine.set_active_task("t1")
        engine.start()

        run_ticks(engine, 25 * 60)

        assert engine.phase == Phase.SHORT_BREAK
        assert engine.remaining == 300
        assert engine.completed_work_cycles == 1
        assert engine.is_running is False
        assert c.items == [("t1", 1)]

    def test_clock_stops_at_every_boundary(self, engine):
        complete_phase(engine)
        assert engine.is_running is False
        complete_phase(engine)
        assert engine.is_running is False
        assert engine.phase == Phase.WORK

    def test_break_returns_to_work(self, engine):
        complete_phase(engine)
        complete_phase(engine)
        assert engine.phase == Phase.WORK
        assert engine.remaining == 1500

    def test_break_completion_does_not_count_cycle(self, engine):
        complete_phase(engine)
        complete_phase(engine)
        assert engine.completed_work_cycles == 1

    def test_fourth_work_phase_goes_to_long_break(self, engine):
        expected = [Phase.SHORT_BREAK, Phase.SHORT_BREAK, Phase.SHORT_BREAK, Phase.LONG_BREAK]
        for n, next_phase in enumerate(expected, start=1):
            assert engine.phase == Phase.WORK
            complete_phase(engine)
            assert engine.completed_work_cycles == n
            assert engine.phase == next_phase
            complete_phase(engine)  # the break

    def test_long_break_evaluated_on_new_total(self, engine):
        engine._completed_work_cycles = 3
        complete_phase(engine)
        assert engine.completed_work_cycles == 4
        assert engine.phase == Phase.LONG_BREAK
        assert engine.remaining == 15 * 60

    def test_cadence_repeats(self, engine):
        long_breaks = []
        for n in range(1, 13):
            complete_phase(engine)
            if engine.phase == Phase.LONG_BREAK:
                long_breaks.append(n)
            complete_phase(engine)
        assert long_breaks == [4, 8, 12]

    def test_every_cycle_long_break(self, qapp):
        engine = TimerEngine(config=DurationConfig(cycles_per_long_break=1))
        complete_phase(engine)
        assert engine.phase == Phase.LONG_BREAK
        complete_phase(engine)
        complete_phase(engine)
        assert engine.phase == Phase.LONG_BREAK

    def test_long_break_returns_to_work(self, engine):
        engine._completed_work_cycles = 3
        complete_phase(engine)
        complete_phase(engine)
        assert engine.phase == Phase.WORK

    def test_phase_completed_signal(self, engine):
        c = SignalCollector()
        engine.phase_completed.connect(c)
        complete_phase(engine)
        complete_phase(engine)
        assert c.items == [
            (Phase.WORK, Phase.SHORT_BREAK),
            (Phase.SHORT_BREAK, Phase.WORK),
        ]

    def test_work_completed_without_task(self, engine):
        c = SignalCollector()
        engine.work_completed.connect(c)
        complete_phase(engine)
        assert c.items == [(None, 1)]

    def test_work_completed_not_emitted_for_breaks(self, engine):
        complete_phase(engine)
        c = SignalCollector()
        engine.work_completed.connect(c)
        complete_phase(engine)
        assert len(c) == 0


# ═══════════════════════════════════════════════════════════════════════════
#  SELECT PHASE
# ═══════════════════════════════════════════════════════════════════════════


class TestSelectPhase:

    def test_select_phase_when_idle(self, engine):
        engine.select_phase(Phase.LONG_BREAK)
        assert engine.phase == Phase.LONG_BREAK
        assert engine.remaining == 15 * 60

    def test_select_phase_while_running_fails(self, engine):
        engine.start()
        engine.tick()
        with pytest.raises(InvalidOperation):
            engine.select_phase(Phase.SHORT_BREAK)
        assert engine.phase == Phase.WORK
        assert engine.remaining == 1499
        assert engine.is_running is True

    def test_select_phase_after_pause(self, engine):
        engine.start()
        engine.tick()
        engine.pause()
        engine.select_phase(Phase.SHORT_BREAK)
        assert engine.remaining == 300

    def test_select_phase_does_not_count_or_attribute(self, engine):
        c = SignalCollector()
        engine.work_completed.connect(c)
        engine.set_active_task("t1")
        engine.select_phase(Phase.SHORT_BREAK)
        engine.select_phase(Phase.WORK)
        assert engine.completed_work_cycles == 0
        assert len(c) == 0

    def test_select_phase_keeps_cycle_count(self, engine):
        complete_phase(engine)
        engine.select_phase(Phase.WORK)
        assert engine.completed_work_cycles == 1

    def test_select_phase_emits_phase_changed(self, engine):
        c = SignalCollector()
        engine.phase_changed.connect(c)
        engine.select_phase(Phase.SHORT_BREAK)
        assert c.last == Phase.SHORT_BREAK

    @pytest.mark.parametrize("value", ["work", None, 0])
    def test_select_phase_rejects_non_phase(self, engine, value):
        c = SignalCollector()
        engine.phase_changed.connect(c)
        with pytest.raises(InvalidArgument):
            engine.select_phase(value)
        assert engine.phase == Phase.WORK
        assert engine.remaining == 1500
        assert len(c) == 0
        engine.start()
        assert engine.is_running is True


# ═══════════════════════════════════════════════════════════════════════════
#  SET DURATIONS
# ═══════════════════════════════════════════════════════════════════════════


class TestSetDurations:

    def test_set_durations_when_idle(self, engine):
        engine.set_durations(DurationConfig(50, 10, 20, 3))
        assert engine.config.work_minutes == 50
        assert engine.remaining == 50 * 60
        assert engine.duration_for(Phase.SHORT_BREAK) == 600

    def test_set_durations_reseeds_current_phase(self, engine):
        engine.select_phase(Phase.SHORT_BREAK)
        engine.set_durations(DurationConfig(short_break_minutes=7))
        assert engine.remaining == 7 * 60

    def test_set_durations_while_running_fails(self, engine):
        engine.start()
        with pytest.raises(InvalidOperation):
            engine.set_durations(DurationConfig(work_minutes=10))
        assert engine.config == DurationConfig()
        assert engine.remaining == 1500

    def test_running_check_comes_first(self, engine):
        engine.start()
        with pytest.raises(InvalidOperation):
            engine.set_durations(DurationConfig(work_minutes=0))

    def test_zero_work_minutes_rejected(self, engine):
        with pytest.raises(InvalidArgument):
            engine.set_durations(DurationConfig(work_minutes=0))

    @pytest.mark.parametrize("field", [
        "work_minutes", "short_break_minutes", "long_break_minutes",
        "cycles_per_long_break",
    ])
    def test_each_field_must_be_positive(self, engine, field):
        with pytest.raises(InvalidArgument):
            engine.set_durations(DurationConfig(**{field: -1}))

    def test_rejected_config_leaves_state_untouched(self, engine):
        engine.start()
        run_ticks(engine, 3)
        engine.pause()
        with pytest.raises(InvalidArgument):
            engine.set_durations(DurationConfig(long_break_minutes=0))
        assert engine.config == DurationConfig()
        assert engine.remaining == 1497

    def test_invalid_argument_is_value_error(self, engine):
        with pytest.raises(ValueError):
            engine.set_durations(DurationConfig(work_minutes=0))

    def test_cadence_follows_new_config(self, engine):
        engine.set_durations(DurationConfig(cycles_per_long_break=2))
        complete_phase(engine)
        assert engine.phase == Phase.SHORT_BREAK
        complete_phase(engine)
        complete_phase(engine)
        assert engine.phase == Phase.LONG_BREAK

    def test_durations_changed_signal(self, engine):
        c = SignalCollector()
        engine.durations_changed.connect(c)
        cfg = DurationConfig(30, 5, 15, 4)
        engine.set_durations(cfg)
        assert c.last == cfg


# ═══════════════════════════════════════════════════════════════════════════
#  ACTIVE TASK
# ═══════════════════════════════════════════════════════════════════════════


class TestActiveTask:

    def test_set_and_clear(self, engine):
        engine.set_active_task("t1")
        assert engine.active_task_id == "t1"
        engine.clear_active_task()
        assert engine.active_task_id is None

    def test_set_while_running_fails(self, engine):
        engine.set_active_task("t1")
        engine.start()
        with pytest.raises(InvalidOperation):
            engine.set_active_task("t2")
        assert engine.active_task_id == "t1"

    def test_clear_while_running_fails(self, engine):
        engine.set_active_task("t1")
        engine.start()
        with pytest.raises(InvalidOperation):
            engine.clear_active_task()

    def test_active_task_changed_signal(self, engine):
        c = SignalCollector()
        engine.active_task_changed.connect(c)
        engine.set_active_task("t1")
        engine.set_active_task("t1")
        engine.clear_active_task()
        assert c.items == ["t1", None]

    def test_task_survives_phase_changes(self, engine):
        engine.set_active_task("t1")
        complete_phase(engine)
        complete_phase(engine)
        assert engine.active_task_id == "t1"


# ═══════════════════════════════════════════════════════════════════════════
#  CONFIG / HELPERS
# ═══════════════════════════════════════════════════════════════════════════


class TestDurationConfig:

    def test_defaults(self):
        cfg = DurationConfig()
        assert (cfg.work_minutes, cfg.short_break_minutes,
                cfg.long_break_minutes, cfg.cycles_per_long_break) == (25, 5, 15, 4)

    def test_seconds_for(self):
        cfg = DurationConfig()
        assert cfg.seconds_for(Phase.WORK) == 1500
        assert cfg.seconds_for(Phase.SHORT_BREAK) == 300
        assert cfg.seconds_for(Phase.LONG_BREAK) == 900

    @pytest.mark.parametrize("value", [0, -5, 1.5, "25", True, None])
    def test_validate_rejects(self, value):
        with pytest.raises(InvalidArgument):
            DurationConfig(work_minutes=value).validate()

    def test_validate_accepts_minimum(self):
        DurationConfig(1, 1, 1, 1).validate()

    def test_minutes_for_unknown_phase(self):
        with pytest.raises(InvalidArgument):
            DurationConfig().minutes_for("long_break")


class TestFormatClock:

    @pytest.mark.parametrize("seconds, text", [
        (1500, "25:00"),
        (300, "05:00"),
        (61, "01:01"),
        (0, "00:00"),
        (6000, "100:00"),
    ])
    def test_format(self, seconds, text):
        assert format_clock(seconds) == text
