"""Pomodoro session clock: countdown, mode switching and long-break cadence.

The clock is a plain in-memory state machine. It never reads the system time
itself; every time-dependent operation receives ``now`` from the caller so the
owner decides where wall-clock time comes from (and tests can drive it).

Timekeeping is drift-corrected: instead of decrementing once per tick, each
``tick`` recomputes the whole seconds elapsed since ``last_updated``. A process
that was suspended, or a terminal that was closed while the timer ran, catches
up on the next tick.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Literal

from .cycling import PomodoroConfig

Mode = Literal["focus", "break"]

logger = logging.getLogger("pomodoro_cli.clock")


@dataclass
class SessionState:
    """Mutable timer record, owned by a single SessionClock."""

    is_running: bool
    is_focus: bool
    time_left: int  # seconds
    total_sessions: int
    consecutive_sessions: int
    last_updated: datetime
    is_long_break: bool = False

    @property
    def mode(self) -> Mode:
        return "focus" if self.is_focus else "break"


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only projection of a SessionState plus derived display stats."""

    is_running: bool
    is_focus: bool
    is_long_break: bool
    time_left: int
    total_sessions: int
    consecutive_sessions: int
    last_updated: datetime
    duration: int
    next_long_break: int
    is_long_break_next: bool

    @property
    def mode(self) -> Mode:
        return "focus" if self.is_focus else "break"

    @property
    def progress(self) -> float:
        """Fraction of the current interval already elapsed, 0.0 - 1.0."""
        if self.duration <= 0:
            return 0.0
        return (self.duration - self.time_left) / self.duration

    @property
    def label(self) -> str:
        if self.is_focus:
            return "FOCUS TIME"
        if self.is_long_break:
            return "LONG BREAK"
        return "BREAK TIME"

    def to_dict(self) -> dict:
        return {
            "is_running": self.is_running,
            "is_focus": self.is_focus,
            "is_long_break": self.is_long_break,
            "mode": self.mode,
            "time_left": self.time_left,
            "duration": self.duration,
            "progress": round(self.progress, 4),
            "total_sessions": self.total_sessions,
            "consecutive_sessions": self.consecutive_sessions,
            "next_long_break": self.next_long_break,
            "is_long_break_next": self.is_long_break_next,
            "last_updated": self.last_updated.isoformat(),
        }


@dataclass(frozen=True)
class IntervalCompletion:
    """Emitted once when an interval runs out naturally."""

    prior_mode: Mode
    new_mode: Mode
    is_long_break: bool = False


def default_state(config: PomodoroConfig, now: datetime) -> SessionState:
    """Fresh state: focus, paused, full focus interval, zero counters."""
    return SessionState(
        is_running=False,
        is_focus=True,
        time_left=config.focus_seconds,
        total_sessions=0,
        consecutive_sessions=0,
        last_updated=now,
    )


class SessionClock:
    """Focus/break state machine with an orthogonal running flag."""

    def __init__(self, state: SessionState, config: PomodoroConfig | None = None):
        self.config = config or PomodoroConfig()
        self._state = state

    @property
    def state(self) -> SessionState:
        return self._state

    def interval_duration(self, is_focus: bool, consecutive_sessions: int) -> int:
        """Length in seconds of an interval of the given kind."""
        if is_focus:
            return self.config.focus_seconds
        if consecutive_sessions >= self.config.sessions_before_long_break:
            return self.config.long_break_seconds
        return self.config.short_break_seconds

    @property
    def current_duration(self) -> int:
        """Length of the interval the clock is currently in."""
        if self._state.is_long_break and not self._state.is_focus:
            return self.config.long_break_seconds
        return self.interval_duration(
            self._state.is_focus, self._state.consecutive_sessions
        )

    def start(self, now: datetime) -> bool:
        """Start counting down. Returns False if already running."""
        if self._state.is_running:
            return False
        self._state.is_running = True
        self._state.last_updated = now
        return True

    def pause(self, now: datetime) -> IntervalCompletion | None:
        """Stop counting down, keeping the seconds already used."""
        if not self._state.is_running:
            return None
        event = self.tick(now)
        self._state.is_running = False
        return event

    def reset(self) -> None:
        self._state.is_running = False
        self._state.time_left = self.current_duration

    def switch_mode(self) -> None:
        """Toggle focus/break by hand. Counters are never touched here."""
        state = self._state
        state.is_focus = not state.is_focus
        state.is_long_break = False
        state.time_left = self.interval_duration(
            state.is_focus, state.consecutive_sessions
        )
        state.is_running = False

    def tick(self, now: datetime) -> IntervalCompletion | None:
        """Advance by the whole seconds elapsed since the last update."""
        state = self._state
        if not state.is_running:
            return None

        delta = (now - state.last_updated).total_seconds()
        if delta < 0:
            logger.warning(
                "clock moved backwards by %.3fs; re-anchoring without elapsing",
                -delta,
            )
            state.last_updated = now
            return None

        elapsed = math.floor(delta)
        if elapsed <= 0:
            return None

        # Keep the sub-second remainder so tick granularity never loses time.
        state.last_updated = state.last_updated + timedelta(seconds=elapsed)
        state.time_left = max(0, state.time_left - elapsed)
        if state.time_left == 0:
            return self.complete_interval()
        return None

    def complete_interval(self) -> IntervalCompletion:
        """Finish the current interval and move to the next one, paused."""
        state = self._state
        state.is_running = False
        prior: Mode = state.mode

        if state.is_focus:
            state.total_sessions += 1
            state.consecutive_sessions += 1
            long_break = (
                state.consecutive_sessions >= self.config.sessions_before_long_break
            )
            state.time_left = self.interval_duration(False, state.consecutive_sessions)
            if long_break:
                state.consecutive_sessions = 0
            state.is_focus = False
            state.is_long_break = long_break
        else:
            state.is_focus = True
            state.is_long_break = False
            state.time_left = self.config.focus_seconds

        event = IntervalCompletion(
            prior_mode=prior,
            new_mode=state.mode,
            is_long_break=state.is_long_break,
        )
        logger.info(
            "interval complete: %s -> %s (total=%d streak=%d)",
            event.prior_mode,
            event.new_mode,
            state.total_sessions,
            state.consecutive_sessions,
        )
        return event

    def snapshot(self) -> SessionSnapshot:
        state = self._state
        cadence = self.config.sessions_before_long_break
        return SessionSnapshot(
            is_running=state.is_running,
            is_focus=state.is_focus,
            is_long_break=state.is_long_break,
            time_left=state.time_left,
            total_sessions=state.total_sessions,
            consecutive_sessions=state.consecutive_sessions,
            last_updated=state.last_updated,
            duration=self.current_duration,
            next_long_break=max(0, cadence - state.consecutive_sessions),
            is_long_break_next=state.consecutive_sessions >= cadence - 1,
        )

    def copy_state(self) -> SessionState:
        return replace(self._state)
