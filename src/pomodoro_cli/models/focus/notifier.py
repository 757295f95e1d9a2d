"""Completion notifications: terminal bell and desktop notifications."""

from __future__ import annotations

import logging
import platform
import shutil
import subprocess

from rich.console import Console

from pomodoro_cli.utils.ui.console import get_console

from .clock import IntervalCompletion

logger = logging.getLogger("pomodoro_cli.notifier")

_MESSAGES = {
    ("focus", "break"): ("Focus session complete", "Time for a break."),
    ("break", "focus"): ("Break over", "Back to focus."),
}


def completion_message(event: IntervalCompletion) -> tuple[str, str]:
    """Title and body for a completion event."""
    title, body = _MESSAGES[(event.prior_mode, event.new_mode)]
    if event.is_long_break:
        body = "You earned a long break."
    return title, body


def _desktop_command(title: str, body: str) -> list[str] | None:
    system = platform.system()
    if system == "Darwin":
        script = f'display notification "{body}" with title "{title}"'
        return ["osascript", "-e", script]
    if system == "Linux" and shutil.which("notify-send"):
        return ["notify-send", "--app-name=pomodoro", title, body]
    return None


class CompletionNotifier:
    """Sound and desktop alert for finished intervals.

    Never blocks the caller: the desktop notification runs as a detached
    subprocess and every failure is logged instead of raised.
    """

    def __init__(
        self,
        console: Console | None = None,
        sound: bool = True,
        desktop: bool = False,
    ):
        self.console = console or get_console(stderr=True)
        self.sound = sound
        self.desktop = desktop

    def __call__(self, event: IntervalCompletion) -> None:
        self.on_interval_complete(event)

    def on_interval_complete(self, event: IntervalCompletion) -> None:
        if self.sound:
            self.console.bell()

        if not self.desktop:
            return

        title, body = completion_message(event)
        command = _desktop_command(title, body)
        if command is None:
            logger.debug("no desktop notifier available on %s", platform.system())
            return

        try:
            subprocess.Popen(
                command,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as e:
            logger.warning("desktop notification failed: %s", e)
