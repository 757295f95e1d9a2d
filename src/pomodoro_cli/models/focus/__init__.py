"""Focus mode - Pomodoro session clock and its adapters."""

from .clock import (
    IntervalCompletion,
    SessionClock,
    SessionSnapshot,
    SessionState,
    default_state,
)
from .cycling import PomodoroConfig
from .exceptions import InvalidPersistedStateError, PomodoroError
from .keyboard import KeyboardHandler
from .notifier import CompletionNotifier
from .state import SessionStateManager
from .ui import TimerDisplay

__all__ = [
    "SessionClock",
    "SessionState",
    "SessionSnapshot",
    "IntervalCompletion",
    "default_state",
    "PomodoroConfig",
    "PomodoroError",
    "InvalidPersistedStateError",
    "SessionStateManager",
    "CompletionNotifier",
    "KeyboardHandler",
    "TimerDisplay",
]
