"""Pomodoro cycle configuration and cadence helpers."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PomodoroConfig:
    """Interval lengths (seconds) and long-break cadence."""

    focus_seconds: int = 25 * 60
    short_break_seconds: int = 5 * 60
    long_break_seconds: int = 15 * 60
    sessions_before_long_break: int = 4

    def __post_init__(self):
        for name in (
            "focus_seconds",
            "short_break_seconds",
            "long_break_seconds",
            "sessions_before_long_break",
        ):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be at least 1")


def get_progress_dots(
    consecutive_sessions: int, is_focus: bool, config: PomodoroConfig
) -> str:
    """Dots showing where the current streak sits in the long-break cycle."""
    dots = []
    for i in range(config.sessions_before_long_break):
        if i < consecutive_sessions:
            dots.append("●")  # completed
        elif i == consecutive_sessions and is_focus:
            dots.append("◉")  # current
        else:
            dots.append("○")  # upcoming
    return " ".join(dots)
