"""Configuration management commands."""

import typer
from pydantic import ValidationError
from rich.table import Table

from pomodoro_cli.services.config_service import ConfigKeyError, get_config_service
from pomodoro_cli.utils.exit_codes import ERROR_INVALID_ARGS
from pomodoro_cli.utils.ui.console import get_console
from pomodoro_cli.utils.ui.formatters import format_success

from .decorators import AppError, command_wrapper

app = typer.Typer(help="Configuration management commands")
console = get_console()


@app.command("list")
@command_wrapper
def list_config():
    """List every setting and its value."""
    table = Table(show_header=True)
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    for key, value in get_config_service().flatten().items():
        table.add_row(key, str(value))
    console.print(table)


@app.command("get")
@command_wrapper
def get_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., ui.theme)"),
):
    """Get a configuration value."""
    try:
        value = get_config_service().get(key)
    except ConfigKeyError as e:
        raise AppError(
            f"Configuration key '{key}' not found", exit_code=ERROR_INVALID_ARGS
        ) from e
    console.print(value)


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., timer.focus_seconds)"),
    value: str = typer.Argument(..., help="Configuration value"),
):
    """Set a configuration value."""
    try:
        get_config_service().set(key, value)
    except ConfigKeyError as e:
        raise AppError(
            f"Configuration key '{key}' not found", exit_code=ERROR_INVALID_ARGS
        ) from e
    except ValidationError as e:
        reason = e.errors()[0]["msg"]
        raise AppError(
            f"Invalid value '{value}' for {key}: {reason}",
            exit_code=ERROR_INVALID_ARGS,
        ) from e
    format_success(f"Set {key} = {value}")


@app.command("reset")
@command_wrapper
def reset_config(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation prompt"),
):
    """Reset configuration to defaults."""
    if not yes and not typer.confirm("Reset all settings to defaults?", default=False):
        console.print("[yellow]Reset cancelled.[/yellow]")
        return
    get_config_service().reset_config()
    format_success("Configuration reset to defaults")
