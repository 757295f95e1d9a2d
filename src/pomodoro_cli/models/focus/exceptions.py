"""Custom exceptions for the Pomodoro clock."""


class PomodoroError(Exception):
    """Base exception for all Pomodoro CLI errors."""


class InvalidPersistedStateError(PomodoroError):
    """Raised when a saved session snapshot is malformed or out of range."""
