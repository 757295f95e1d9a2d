"""Console utilities for Pomodoro CLI."""

from functools import lru_cache

from rich.console import Console


@lru_cache(maxsize=4)
def get_console(highlight: bool = True, stderr: bool = False) -> Console:
    """Shared Rich console. ``stderr=True`` is for alerts that must stay out
    of structured stdout output (the completion bell)."""
    return Console(highlight=highlight, stderr=stderr)
