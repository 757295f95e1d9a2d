"""Typer helper utilities."""

from difflib import get_close_matches

import typer
from typer.core import TyperGroup

from pomodoro_cli.utils.ui.console import get_console

# Words people reach for out of habit from other timers.
COMMAND_ALIASES = {
    "resume": "start",
    "go": "start",
    "stop": "pause",
    "break": "switch",
    "info": "status",
}


class SuggestingGroup(TyperGroup):
    """Typer group that resolves command aliases and suggests on typos."""

    def resolve_command(self, ctx, args):
        if args and args[0] not in self.commands and args[0] in COMMAND_ALIASES:
            target = COMMAND_ALIASES[args[0]]
            if target in self.commands:
                args = [target, *args[1:]]

        try:
            return super().resolve_command(ctx, args)
        except Exception as e:
            if not args:
                raise
            attempted = args[0]
            suggestions = get_close_matches(
                attempted, list(self.commands), n=3, cutoff=0.6
            )
            if not suggestions:
                raise

            console = get_console()
            console.print(
                f'[red]Error:[/red] unknown command "{attempted}" for "{ctx.info_name}"'
            )
            console.print()
            if len(suggestions) == 1:
                console.print("[yellow]Did you mean this?[/yellow]")
            else:
                console.print("[yellow]Did you mean one of these?[/yellow]")
            for suggestion in suggestions:
                console.print(f"        {suggestion}")
            raise typer.Exit(1) from e
