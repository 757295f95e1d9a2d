"""Unit tests for completion notifications."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from pomodoro_cli.models.focus.clock import IntervalCompletion
from pomodoro_cli.models.focus.notifier import CompletionNotifier, completion_message

FOCUS_DONE = IntervalCompletion(prior_mode="focus", new_mode="break")
LONG_BREAK = IntervalCompletion(prior_mode="focus", new_mode="break", is_long_break=True)
BREAK_DONE = IntervalCompletion(prior_mode="break", new_mode="focus")


class TestCompletionMessage:
    def test_focus_done(self):
        assert completion_message(FOCUS_DONE) == ("Focus session complete", "Time for a break.")

    def test_long_break(self):
        title, body = completion_message(LONG_BREAK)
        assert title == "Focus session complete"
        assert "long break" in body

    def test_break_done(self):
        assert completion_message(BREAK_DONE)[0] == "Break over"


class TestCompletionNotifier:
    def test_rings_bell(self):
        console = MagicMock()
        notifier = CompletionNotifier(console, sound=True, desktop=False)

        notifier(FOCUS_DONE)

        console.bell.assert_called_once()

    def test_silent_when_sound_disabled(self):
        console = MagicMock()
        CompletionNotifier(console, sound=False).on_interval_complete(FOCUS_DONE)

        console.bell.assert_not_called()

    def test_desktop_notification_on_linux(self):
        notifier = CompletionNotifier(MagicMock(), sound=False, desktop=True)

        with (
            patch("pomodoro_cli.models.focus.notifier.platform.system", return_value="Linux"),
            patch("pomodoro_cli.models.focus.notifier.shutil.which", return_value="/usr/bin/notify-send"),
            patch("pomodoro_cli.models.focus.notifier.subprocess.Popen") as popen,
        ):
            notifier(FOCUS_DONE)

        command = popen.call_args[0][0]
        assert command[0] == "notify-send"
        assert "Focus session complete" in command
        assert popen.call_args[1]["start_new_session"] is True

    def test_desktop_notification_on_macos(self):
        notifier = CompletionNotifier(MagicMock(), sound=False, desktop=True)

        with (
            patch("pomodoro_cli.models.focus.notifier.platform.system", return_value="Darwin"),
            patch("pomodoro_cli.models.focus.notifier.subprocess.Popen") as popen,
        ):
            notifier(BREAK_DONE)

        command = popen.call_args[0][0]
        assert command[0] == "osascript"
        assert "Break over" in command[2]

    def test_no_notifier_available(self):
        notifier = CompletionNotifier(MagicMock(), sound=False, desktop=True)

        with (
            patch("pomodoro_cli.models.focus.notifier.platform.system", return_value="Linux"),
            patch("pomodoro_cli.models.focus.notifier.shutil.which", return_value=None),
            patch("pomodoro_cli.models.focus.notifier.subprocess.Popen") as popen,
        ):
            notifier(FOCUS_DONE)

        popen.assert_not_called()

    @pytest.mark.parametrize("error", [FileNotFoundError("gone"), PermissionError("denied")])
    def test_spawn_failure_is_logged_not_raised(self, error, caplog):
        notifier = CompletionNotifier(MagicMock(), sound=False, desktop=True)

        with (
            patch("pomodoro_cli.models.focus.notifier.platform.system", return_value="Darwin"),
            patch("pomodoro_cli.models.focus.notifier.subprocess.Popen", side_effect=error),
        ):
            notifier(FOCUS_DONE)

        assert "desktop notification failed" in caplog.text
