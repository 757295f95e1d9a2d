"""Pomodoro timer commands."""

import typer

from pomodoro_cli.models.focus.clock import IntervalCompletion
from pomodoro_cli.models.focus.notifier import CompletionNotifier, completion_message
from pomodoro_cli.models.focus.state import SessionStateManager
from pomodoro_cli.models.focus.ui import TimerDisplay
from pomodoro_cli.services.clock_service import ClockService
from pomodoro_cli.services.config_service import get_config_service
from pomodoro_cli.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_STORAGE
from pomodoro_cli.utils.logger import get_logger
from pomodoro_cli.utils.ui.console import get_console
from pomodoro_cli.utils.ui.formatters import (
    OUTPUT_FORMATS,
    format_info,
    format_stats,
    format_status,
    format_success,
)

from .decorators import AppError, command_wrapper

console = get_console()

OutputOption = typer.Option(
    "pretty", "--output", "-o", help="Output format: pretty, json or yaml"
)


def _announce(event: IntervalCompletion) -> None:
    title, body = completion_message(event)
    format_info(f"{title}. {body}")


def get_clock_service(announce: bool = True) -> ClockService:
    """Build a ClockService wired to the configured storage and notifiers.

    Subscribers are attached before the service catches up on elapsed time,
    so an interval that ran out while no command was running is still
    announced once.
    """
    config = get_config_service().config
    pomodoro = config.timer.to_pomodoro_config()
    subscribers = [
        CompletionNotifier(
            sound=config.notifications.sound,
            desktop=config.notifications.desktop,
        )
    ]
    if announce:
        subscribers.append(_announce)
    return ClockService(
        SessionStateManager(config=pomodoro),
        pomodoro,
        subscribers=tuple(subscribers),
    )


def _check_saved(service: ClockService) -> None:
    if service.read_only:
        raise AppError(
            "Could not save the session state; see the log for details",
            exit_code=ERROR_STORAGE,
        )


def _check_output(output: str) -> None:
    if output not in OUTPUT_FORMATS:
        raise AppError(
            f"Invalid output format '{output}'. Choose from: {', '.join(OUTPUT_FORMATS)}",
            exit_code=ERROR_INVALID_ARGS,
        )


def _run_live_view(service: ClockService) -> None:
    config_service = get_config_service()
    config = config_service.config
    display = TimerDisplay(
        console,
        theme=config.ui.theme,
        config=service.config,
        refresh_per_second=config.ui.refresh_per_second,
    )

    def save_theme(theme: str) -> None:
        try:
            config_service.set("ui.theme", theme)
        except OSError as e:
            get_logger().warning("theme preference not saved: %s", e)

    result = display.run(service, on_theme_change=save_theme)
    snapshot = service.snapshot()
    if snapshot.is_running:
        console.print(
            "[dim]Timer keeps running. Use 'pomodoro watch' to return "
            "or 'pomodoro pause' to pause it.[/dim]"
        )
    if result == "interrupted":
        console.print("[yellow]Interrupted. State saved.[/yellow]")


@command_wrapper
def start_timer(
    detach: bool = typer.Option(
        False, "--detach", "-d", help="Start the countdown without opening the live view"
    ),
):
    """Start (or resume) the countdown."""
    service = get_clock_service(announce=detach)
    service.start()

    if detach:
        _check_saved(service)
        format_status(service.snapshot())
        return
    # The live view keeps timing in memory and shows a read-only banner.
    _run_live_view(service)


@command_wrapper
def watch_timer():
    """Open the live view without changing the timer."""
    _run_live_view(get_clock_service(announce=False))


@command_wrapper
def pause_timer():
    """Pause the countdown."""
    service = get_clock_service()
    snapshot = service.pause()
    _check_saved(service)
    format_status(snapshot)


@command_wrapper
def reset_timer():
    """Restore the full length of the current interval and pause."""
    service = get_clock_service()
    snapshot = service.reset()
    _check_saved(service)
    format_status(snapshot)


@command_wrapper
def switch_mode():
    """Switch between focus and break by hand. Session counters are kept."""
    service = get_clock_service()
    snapshot = service.switch_mode()
    _check_saved(service)
    format_status(snapshot)


@command_wrapper
def show_status(output: str = OutputOption):
    """Show the current interval and time left."""
    _check_output(output)
    format_status(get_clock_service(announce=output == "pretty").snapshot(), output)


@command_wrapper
def show_stats(output: str = OutputOption):
    """Show completed sessions and the long-break cadence."""
    _check_output(output)
    format_stats(get_clock_service(announce=output == "pretty").snapshot(), output)


@command_wrapper
def set_theme(
    theme: str = typer.Argument(
        "toggle", help="light, dark, or toggle to flip the current theme"
    ),
):
    """Set the live view theme."""
    config_service = get_config_service()
    if theme == "toggle":
        theme = "dark" if config_service.config.ui.theme == "light" else "light"
    if theme not in ("light", "dark"):
        raise AppError(
            f"Invalid theme '{theme}'. Choose light, dark or toggle",
            exit_code=ERROR_INVALID_ARGS,
        )
    config_service.set("ui.theme", theme)
    format_success(f"Theme set to {theme}")
