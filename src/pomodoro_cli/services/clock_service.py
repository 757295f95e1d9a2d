"""Clock service: the single owner of the running SessionClock.

Wraps the pure state machine with its side effects. Every mutating call is
followed by a save, and every natural completion is published to the
registered subscribers (sound, desktop notification, the live view).

Callers must serialize access themselves; the service holds no locks.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from pomodoro_cli.models.focus.clock import (
    IntervalCompletion,
    SessionClock,
    SessionSnapshot,
    default_state,
)
from pomodoro_cli.models.focus.cycling import PomodoroConfig
from pomodoro_cli.models.focus.state import SessionStateManager

logger = logging.getLogger("pomodoro_cli.service")

CompletionSubscriber = Callable[[IntervalCompletion], None]


def local_now() -> datetime:
    return datetime.now().astimezone()


class ClockService:
    """Applies commands and ticks to a SessionClock and persists the result."""

    def __init__(
        self,
        state_manager: SessionStateManager,
        config: PomodoroConfig | None = None,
        now: Callable[[], datetime] = local_now,
        subscribers: tuple[CompletionSubscriber, ...] = (),
    ):
        self.state_manager = state_manager
        self.config = config or PomodoroConfig()
        self.now = now
        self.read_only = False
        self._subscribers: list[CompletionSubscriber] = list(subscribers)

        state = state_manager.load()
        if state is None:
            logger.info("no usable saved session; starting from defaults")
            state = default_state(self.config, self.now())
        self.clock = SessionClock(state, self.config)

        # Catch up on time that passed while no process was running.
        if self.clock.state.is_running:
            self.tick()

    def subscribe(self, callback: CompletionSubscriber) -> Callable[[], None]:
        """Register a completion callback. Returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _publish(self, event: IntervalCompletion | None) -> None:
        if event is None:
            return
        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception:
                logger.exception("completion subscriber %r failed", callback)

    def _persist(self) -> None:
        try:
            self.state_manager.save(self.clock.state)
        except OSError as e:
            if not self.read_only:
                logger.error("session state not saved, continuing read-only: %s", e)
            self.read_only = True
        else:
            if self.read_only:
                logger.info("session state storage available again")
            self.read_only = False

    def start(self) -> SessionSnapshot:
        if self.clock.start(self.now()):
            self._persist()
        return self.snapshot()

    def pause(self) -> SessionSnapshot:
        if self.clock.state.is_running:
            event = self.clock.pause(self.now())
            self._persist()
            self._publish(event)
        return self.snapshot()

    def toggle(self) -> SessionSnapshot:
        if self.clock.state.is_running:
            return self.pause()
        return self.start()

    def reset(self) -> SessionSnapshot:
        self.clock.reset()
        self._persist()
        return self.snapshot()

    def switch_mode(self) -> SessionSnapshot:
        self.clock.switch_mode()
        self._persist()
        return self.snapshot()

    def tick(self) -> IntervalCompletion | None:
        """Advance the clock to now. Saves only when whole seconds elapsed."""
        state = self.clock.state
        if not state.is_running:
            return None

        before = (state.time_left, state.last_updated)
        event = self.clock.tick(self.now())
        if (state.time_left, state.last_updated) != before or event is not None:
            self._persist()
        self._publish(event)
        return event

    def snapshot(self) -> SessionSnapshot:
        return self.clock.snapshot()
