"""Pomodoro CLI - a terminal Pomodoro timer with drift-corrected timekeeping."""

__version__ = "0.1.0"
