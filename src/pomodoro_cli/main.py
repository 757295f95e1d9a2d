"""Main entry point for Pomodoro CLI."""

import typer

from pomodoro_cli import __version__
from pomodoro_cli.commands import config, timer
from pomodoro_cli.utils.typer_helpers import SuggestingGroup
from pomodoro_cli.utils.ui.console import get_console

app = typer.Typer(
    name="pomodoro",
    cls=SuggestingGroup,
    help="A terminal Pomodoro timer: 25 minutes of focus, then a break",
    no_args_is_help=True,
)

console = get_console()

# Timer commands
app.command("start")(timer.start_timer)
app.command("watch")(timer.watch_timer)
app.command("pause")(timer.pause_timer)
app.command("reset")(timer.reset_timer)
app.command("switch")(timer.switch_mode)
app.command("status")(timer.show_status)
app.command("stats")(timer.show_stats)
app.command("theme")(timer.set_theme)

app.add_typer(config.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]Pomodoro CLI[/bold] version [cyan]{__version__}[/cyan]")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
