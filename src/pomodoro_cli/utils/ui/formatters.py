"""Output formatters for timer status and messages."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import yaml
from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from pomodoro_cli.models.focus.clock import SessionSnapshot

console = Console()

OUTPUT_FORMATS = ("pretty", "json", "yaml")


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {message}")


def format_time(seconds: int) -> str:
    """Seconds as MM:SS. Minutes are not wrapped at 60."""
    seconds = max(0, int(seconds))
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


def get_progress_bar(fraction: float, width: int = 40) -> str:
    """Get a progress bar representation."""
    fraction = min(1.0, max(0.0, fraction))
    filled = int(width * fraction)
    return "▓" * filled + "░" * (width - filled)


def format_structured(data: Any, output: str) -> None:
    """Print *data* as JSON or YAML."""
    if output == "json":
        console.print_json(json.dumps(data))
    elif output == "yaml":
        console.print(yaml.safe_dump(data, sort_keys=False), end="", markup=False)
    else:
        raise ValueError(f"Unsupported output format: {output}")


def format_status(snapshot: SessionSnapshot, output: str = "pretty") -> None:
    """Show the current timer status."""
    if output != "pretty":
        format_structured(snapshot.to_dict(), output)
        return

    run_label = "[green]RUNNING[/green]" if snapshot.is_running else "[yellow]PAUSED[/yellow]"
    console.print(f"\n[bold]{snapshot.label}[/bold]  {run_label}")
    console.print(
        f"[bold cyan]{format_time(snapshot.time_left)}[/bold cyan] "
        f"[dim]of {format_time(snapshot.duration)}[/dim]"
    )
    console.print(
        f"[dim]{get_progress_bar(snapshot.progress)}  "
        f"{int(snapshot.progress * 100)}%[/dim]\n"
    )


def format_stats(snapshot: SessionSnapshot, output: str = "pretty") -> None:
    """Show session counters and long-break cadence."""
    stats = {
        "total_sessions": snapshot.total_sessions,
        "consecutive_sessions": snapshot.consecutive_sessions,
        "next_long_break": snapshot.next_long_break,
        "is_long_break_next": snapshot.is_long_break_next,
    }
    if output != "pretty":
        format_structured(stats, output)
        return

    table = Table(title="Pomodoro Statistics", show_header=True)
    table.add_column("Total", justify="right", style="cyan")
    table.add_column("Streak", justify="right")
    table.add_column("To long break", justify="right")
    table.add_column("Long break next", justify="center")
    table.add_row(
        str(stats["total_sessions"]),
        str(stats["consecutive_sessions"]),
        str(stats["next_long_break"]),
        "[green]yes[/green]" if stats["is_long_break_next"] else "[dim]no[/dim]",
    )
    console.print(table)
