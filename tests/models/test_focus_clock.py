"""Unit tests for the Pomodoro session clock.

Covers the focus/break state machine, drift-corrected ticking, the long-break
cadence, derived snapshot stats and clock-regression handling. Time is always
passed in explicitly so no test depends on the real wall clock.
"""

from __future__ import annotations

import dataclasses
import logging
from datetime import datetime, timedelta, timezone

import pytest

from pomodoro_cli.models.focus.clock import (
    IntervalCompletion,
    SessionClock,
    SessionState,
    default_state,
)
from pomodoro_cli.models.focus.cycling import PomodoroConfig

T0 = datetime(2026, 3, 2, 9, 0, 0, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _clock(config: PomodoroConfig | None = None, **overrides) -> SessionClock:
    config = config or PomodoroConfig()
    state = default_state(config, T0)
    for name, value in overrides.items():
        setattr(state, name, value)
    return SessionClock(state, config)


def _at(seconds: float):
    return T0 + timedelta(seconds=seconds)


def _run_interval(clock: SessionClock, start_at: float) -> IntervalCompletion:
    """Start the current interval at *start_at* and let it run out."""
    clock.start(_at(start_at))
    event = clock.tick(_at(start_at + clock.state.time_left))
    assert event is not None
    return event


# ---------------------------------------------------------------------------
# Defaults and durations
# ---------------------------------------------------------------------------


class TestDefaults:
    def test_default_state(self):
        state = default_state(PomodoroConfig(), T0)

        assert state.is_focus is True
        assert state.is_running is False
        assert state.time_left == 1500
        assert state.total_sessions == 0
        assert state.consecutive_sessions == 0
        assert state.is_long_break is False
        assert state.last_updated == T0

    def test_mode_property(self):
        clock = _clock()
        assert clock.state.mode == "focus"
        clock.switch_mode()
        assert clock.state.mode == "break"


class TestIntervalDuration:
    @pytest.mark.parametrize(
        "is_focus, consecutive, expected",
        [
            (True, 0, 1500),
            (True, 3, 1500),
            (False, 0, 300),
            (False, 3, 300),
            (False, 4, 900),
            (False, 5, 900),
        ],
    )
    def test_interval_duration(self, is_focus, consecutive, expected):
        assert _clock().interval_duration(is_focus, consecutive) == expected

    def test_custom_config(self):
        config = PomodoroConfig(
            focus_seconds=50 * 60,
            short_break_seconds=600,
            long_break_seconds=1800,
            sessions_before_long_break=2,
        )
        clock = _clock(config)

        assert clock.interval_duration(True, 0) == 3000
        assert clock.interval_duration(False, 1) == 600
        assert clock.interval_duration(False, 2) == 1800


# ---------------------------------------------------------------------------
# start / pause
# ---------------------------------------------------------------------------


class TestStartPause:
    def test_start_anchors_last_updated(self):
        clock = _clock()

        assert clock.start(_at(42)) is True
        assert clock.state.is_running is True
        assert clock.state.last_updated == _at(42)

    def test_start_when_running_is_noop(self):
        clock = _clock()
        clock.start(_at(0))

        assert clock.start(_at(30)) is False
        assert clock.state.last_updated == _at(0)

    def test_pause_stops_countdown(self):
        clock = _clock()
        clock.start(_at(0))
        clock.pause(_at(10))

        assert clock.state.is_running is False
        assert clock.state.time_left == 1490

    def test_pause_keeps_only_whole_seconds(self):
        clock = _clock()
        clock.start(_at(0))
        clock.pause(_at(10.7))

        assert clock.state.time_left == 1490

    def test_pause_when_paused_is_noop(self):
        clock = _clock()
        before = clock.copy_state()

        assert clock.pause(_at(100)) is None
        assert clock.state == before

    def test_ticks_after_pause_never_change_time_left(self):
        clock = _clock()
        clock.start(_at(0))
        clock.pause(_at(100))

        for seconds in (101, 500, 1500, 10_000):
            assert clock.tick(_at(seconds)) is None
            assert clock.state.time_left == 1400

    def test_resume_does_not_count_paused_time(self):
        clock = _clock()
        clock.start(_at(0))
        clock.pause(_at(100))
        clock.start(_at(1000))
        clock.tick(_at(1060))

        assert clock.state.time_left == 1340


# ---------------------------------------------------------------------------
# tick
# ---------------------------------------------------------------------------


class TestTick:
    def test_tick_while_paused_is_noop(self):
        clock = _clock()

        assert clock.tick(_at(600)) is None
        assert clock.state.time_left == 1500

    def test_sub_second_tick_is_noop(self):
        clock = _clock()
        clock.start(_at(0))
        clock.tick(_at(0.9))

        assert clock.state.time_left == 1500
        assert clock.state.last_updated == _at(0)

    def test_tick_consumes_whole_seconds(self):
        clock = _clock()
        clock.start(_at(0))
        clock.tick(_at(61.5))

        assert clock.state.time_left == 1439
        assert clock.state.last_updated == _at(61)

    @pytest.mark.parametrize(
        "chunks",
        [
            [700],
            [1] * 700,
            [0.25] * 2800,
            [0.3] * 2333 + [0.1],
            [350, 0.5, 0.5, 349],
            [699.999, 0.001],
        ],
    )
    def test_tick_granularity_does_not_matter(self, chunks):
        clock = _clock()
        clock.start(_at(0))
        elapsed = 0.0
        for chunk in chunks:
            elapsed += chunk
            clock.tick(_at(elapsed))

        assert clock.state.time_left == 1500 - 700

    def test_long_suspension_catches_up_in_one_tick(self):
        clock = _clock()
        clock.start(_at(0))
        clock.tick(_at(1200))

        assert clock.state.time_left == 300
        assert clock.state.is_running is True

    def test_time_left_never_negative(self):
        clock = _clock()
        clock.start(_at(0))
        clock.tick(_at(99_999))

        assert clock.state.time_left > 0
        assert clock.state.is_running is False

    def test_clock_regression_elapses_nothing(self, caplog):
        clock = _clock()
        clock.start(_at(0))

        with caplog.at_level(logging.WARNING, logger="pomodoro_cli.clock"):
            assert clock.tick(_at(-60)) is None

        assert clock.state.time_left == 1500
        assert clock.state.is_running is True
        assert clock.state.last_updated == _at(-60)
        assert "backwards" in caplog.text

    def test_clock_regression_then_counts_from_new_anchor(self):
        clock = _clock()
        clock.start(_at(0))
        clock.tick(_at(-60))
        clock.tick(_at(-55))

        assert clock.state.time_left == 1495


# ---------------------------------------------------------------------------
# Completion and cadence
# ---------------------------------------------------------------------------


class TestCompletion:
    def test_first_focus_completion(self):
        clock = _clock()
        clock.start(_at(0))
        event = clock.tick(_at(1500))

        state = clock.state
        assert state.is_focus is False
        assert state.time_left == 300
        assert state.consecutive_sessions == 1
        assert state.total_sessions == 1
        assert state.is_running is False
        assert event == IntervalCompletion(prior_mode="focus", new_mode="break")

    def test_break_completion_returns_to_focus(self):
        clock = _clock()
        _run_interval(clock, 0)
        event = _run_interval(clock, 2000)

        assert clock.state.is_focus is True
        assert clock.state.time_left == 1500
        assert clock.state.is_running is False
        assert event.prior_mode == "break"
        assert event.new_mode == "focus"

    def test_break_completion_does_not_count_session(self):
        clock = _clock()
        _run_interval(clock, 0)
        _run_interval(clock, 2000)

        assert clock.state.total_sessions == 1
        assert clock.state.consecutive_sessions == 1

    def test_fourth_focus_completion_gives_long_break(self):
        clock = _clock()
        now = 0
        for i in range(4):
            event = _run_interval(clock, now)
            now += 2000
            if i < 3:
                assert clock.state.time_left == 300
                assert clock.state.consecutive_sessions == i + 1
                _run_interval(clock, now)
                now += 2000

        state = clock.state
        assert state.is_focus is False
        assert state.time_left == 900
        assert state.consecutive_sessions == 0
        assert state.total_sessions == 4
        assert state.is_long_break is True
        assert event.is_long_break is True

    def test_streak_restarts_after_long_break(self):
        clock = _clock()
        now = 0
        for _ in range(4):
            _run_interval(clock, now)
            _run_interval(clock, now + 2000)
            now += 4000

        assert clock.state.is_focus is True
        assert clock.state.is_long_break is False
        _run_interval(clock, now)
        assert clock.state.time_left == 300
        assert clock.state.consecutive_sessions == 1
        assert clock.state.total_sessions == 5

    def test_complete_interval_directly(self):
        clock = _clock(is_running=True, time_left=12)
        event = clock.complete_interval()

        assert event.prior_mode == "focus"
        assert clock.state.is_running is False
        assert clock.state.total_sessions == 1

    def test_custom_cadence(self):
        clock = _clock(PomodoroConfig(sessions_before_long_break=2))
        _run_interval(clock, 0)
        _run_interval(clock, 2000)
        _run_interval(clock, 4000)

        assert clock.state.time_left == 900
        assert clock.state.consecutive_sessions == 0


# ---------------------------------------------------------------------------
# reset / switch_mode
# ---------------------------------------------------------------------------


class TestReset:
    def test_reset_restores_focus_duration(self):
        clock = _clock()
        clock.start(_at(0))
        clock.tick(_at(700))
        clock.reset()

        assert clock.state.time_left == 1500
        assert clock.state.is_running is False

    def test_reset_keeps_counters(self):
        clock = _clock()
        _run_interval(clock, 0)
        clock.start(_at(2000))
        clock.tick(_at(2100))
        clock.reset()

        assert clock.state.time_left == 300
        assert clock.state.total_sessions == 1
        assert clock.state.consecutive_sessions == 1

    def test_reset_during_long_break_restores_long_break(self):
        clock = _clock(is_focus=False, is_long_break=True, time_left=400)
        clock.reset()

        assert clock.state.time_left == 900


class TestSwitchMode:
    def test_switch_running_focus_to_break(self):
        clock = _clock(is_running=True, time_left=800)
        clock.switch_mode()

        assert clock.state.is_focus is False
        assert clock.state.is_running is False
        assert clock.state.time_left == 300
        assert clock.state.total_sessions == 0

    def test_switch_break_to_focus_does_not_count(self):
        clock = _clock(is_focus=False, time_left=120, total_sessions=2, consecutive_sessions=2)
        clock.switch_mode()

        assert clock.state.is_focus is True
        assert clock.state.time_left == 1500
        assert clock.state.total_sessions == 2
        assert clock.state.consecutive_sessions == 2

    def test_switch_out_of_long_break_clears_flag(self):
        clock = _clock(is_focus=False, is_long_break=True, time_left=900)
        clock.switch_mode()
        clock.switch_mode()

        assert clock.state.is_long_break is False
        assert clock.state.time_left == 300


# ---------------------------------------------------------------------------
# snapshot
# ---------------------------------------------------------------------------


class TestSnapshot:
    @pytest.mark.parametrize(
        "consecutive, next_long, long_next",
        [(0, 4, False), (1, 3, False), (2, 2, False), (3, 1, True)],
    )
    def test_derived_stats(self, consecutive, next_long, long_next):
        snapshot = _clock(consecutive_sessions=consecutive).snapshot()

        assert snapshot.next_long_break == next_long
        assert snapshot.is_long_break_next is long_next

    def test_snapshot_is_immutable(self):
        snapshot = _clock().snapshot()

        with pytest.raises(dataclasses.FrozenInstanceError):
            snapshot.time_left = 5  # type: ignore[misc]

    def test_snapshot_is_a_copy(self):
        clock = _clock()
        snapshot = clock.snapshot()
        clock.start(_at(0))
        clock.tick(_at(10))

        assert snapshot.time_left == 1500
        assert snapshot.is_running is False

    def test_progress(self):
        snapshot = _clock(time_left=1200).snapshot()

        assert snapshot.duration == 1500
        assert snapshot.progress == pytest.approx(0.2)

    def test_long_break_duration_and_label(self):
        snapshot = _clock(is_focus=False, is_long_break=True, time_left=450).snapshot()

        assert snapshot.duration == 900
        assert snapshot.progress == pytest.approx(0.5)
        assert snapshot.label == "LONG BREAK"

    @pytest.mark.parametrize(
        "is_focus, label", [(True, "FOCUS TIME"), (False, "BREAK TIME")]
    )
    def test_labels(self, is_focus, label):
        time_left = 1500 if is_focus else 300
        assert _clock(is_focus=is_focus, time_left=time_left).snapshot().label == label

    def test_to_dict(self):
        data = _clock().snapshot().to_dict()

        assert data["mode"] == "focus"
        assert data["time_left"] == 1500
        assert data["progress"] == 0.0
        assert data["last_updated"] == T0.isoformat()


def test_session_state_equality_includes_long_break_flag():
    a = SessionState(False, False, 300, 0, 0, T0)
    b = SessionState(False, False, 300, 0, 0, T0, is_long_break=True)
    assert a != b
