"""Full-screen timer UI for the live view."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from rich.align import Align
from rich.console import Console, Group
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from pomodoro_cli.utils.ui.formatters import format_time

from .clock import IntervalCompletion, SessionSnapshot
from .cycling import PomodoroConfig, get_progress_dots
from .notifier import completion_message


@dataclass(frozen=True)
class Palette:
    """Colours for one theme."""

    text: str
    muted: str
    accent: str
    warning: str
    background: str


THEMES = {
    "light": Palette(
        text="black", muted="grey50", accent="black", warning="red3", background="white"
    ),
    "dark": Palette(
        text="white", muted="grey62", accent="bright_white", warning="red1", background="grey11"
    ),
}

# Seconds a completion message stays in the header.
_FLASH_SECONDS = 5


class TimerDisplay:
    """Renders snapshots and runs the tick loop for the live view."""

    def __init__(
        self,
        console: Console | None = None,
        theme: str = "light",
        config: PomodoroConfig | None = None,
        refresh_per_second: int = 4,
    ):
        self.console = console or Console()
        self.theme = theme if theme in THEMES else "light"
        self.config = config or PomodoroConfig()
        self.refresh_per_second = refresh_per_second
        self._flash: tuple[str, float] | None = None

    @property
    def palette(self) -> Palette:
        return THEMES[self.theme]

    def toggle_theme(self) -> str:
        self.theme = "dark" if self.theme == "light" else "light"
        return self.theme

    def on_completion(self, event: IntervalCompletion) -> None:
        title, body = completion_message(event)
        self._flash = (f"{title}. {body}", time.monotonic())

    def create_layout(self, snapshot: SessionSnapshot, read_only: bool = False) -> Layout:
        """Create the timer layout with all components."""
        palette = self.palette
        layout = Layout()
        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=3),
        )

        header = Text("POMODORO", style=f"bold {palette.text}", justify="center")
        header.append(f"  {snapshot.label}", style=palette.muted)
        flash = self._current_flash()
        if flash:
            header.append(f"\n{flash}", style=f"bold {palette.accent}")
        layout["header"].update(Align.center(header, vertical="middle"))

        layout["body"].update(
            Align.center(self._create_body_content(snapshot, read_only), vertical="middle")
        )
        layout["footer"].update(
            Align.center(self._create_footer_text(snapshot), vertical="middle")
        )
        return layout

    def _current_flash(self) -> str | None:
        if self._flash is None:
            return None
        message, shown_at = self._flash
        if time.monotonic() - shown_at > _FLASH_SECONDS:
            self._flash = None
            return None
        return message

    def _create_body_content(self, snapshot: SessionSnapshot, read_only: bool) -> Group:
        palette = self.palette
        components = []

        if read_only:
            components.append(
                Text(
                    "State cannot be saved - running read-only",
                    style=f"bold {palette.warning}",
                    justify="center",
                )
            )
            components.append(Text(""))

        if snapshot.is_running and snapshot.time_left < 60:
            timer_color = palette.warning
        else:
            timer_color = palette.accent
        components.append(
            Text(format_time(snapshot.time_left), style=f"bold {timer_color}", justify="center")
        )
        components.append(
            Text(
                "RUNNING" if snapshot.is_running else "PAUSED",
                style=palette.muted,
                justify="center",
            )
        )
        components.append(Text(""))

        bar_width = 40
        filled = int(bar_width * snapshot.progress)
        progress = Text(justify="center")
        progress.append("━" * filled, style=palette.accent)
        progress.append("━" * (bar_width - filled), style=palette.muted)
        progress.append(f"  {int(snapshot.progress * 100)}%", style=palette.muted)
        components.append(progress)
        components.append(Text(""))

        stats = Text(justify="center")
        stats.append(f"{snapshot.total_sessions}", style=f"bold {palette.text}")
        stats.append(" TOTAL    ", style=palette.muted)
        stats.append(f"{snapshot.consecutive_sessions}", style=f"bold {palette.text}")
        stats.append(" STREAK    ", style=palette.muted)
        stats.append(f"{snapshot.next_long_break}", style=f"bold {palette.text}")
        stats.append(" TO LONG BREAK", style=palette.muted)
        components.append(stats)
        components.append(
            Text(
                get_progress_dots(snapshot.consecutive_sessions, snapshot.is_focus, self.config),
                style=palette.muted,
                justify="center",
            )
        )

        return Group(*components)

    def _create_footer_text(self, snapshot: SessionSnapshot) -> Text:
        action = "pause" if snapshot.is_running else "start"
        target = "break" if snapshot.is_focus else "focus"
        hints = (
            f"space {action}  ·  r reset  ·  s switch to {target}  ·  "
            f"t theme  ·  q quit"
        )
        return Text(hints, style=self.palette.muted, justify="center")

    def run(
        self,
        service,
        keyboard=None,
        on_theme_change: Callable[[str], None] | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> str:
        """Drive the service from the keyboard until the user quits.

        Returns 'quit' or 'interrupted'. The clock state is left as it is
        either way; a running timer keeps counting while nothing watches it.
        """
        if keyboard is None:
            from .keyboard import KeyboardHandler

            keyboard = KeyboardHandler()

        unsubscribe = service.subscribe(self.on_completion)
        interval = 1 / self.refresh_per_second
        try:
            with Live(
                self._render(service),
                console=self.console,
                refresh_per_second=self.refresh_per_second,
                screen=True,
            ) as live:
                while True:
                    command = keyboard.get_command()
                    if command == "quit":
                        return "quit"
                    if command == "toggle":
                        service.toggle()
                    elif command == "reset":
                        service.reset()
                    elif command == "switch":
                        service.switch_mode()
                    elif command == "theme":
                        theme = self.toggle_theme()
                        if on_theme_change:
                            on_theme_change(theme)

                    service.tick()
                    live.update(self._render(service))
                    sleep(interval)
        except KeyboardInterrupt:
            return "interrupted"
        finally:
            unsubscribe()
            keyboard.stop()

    def _render(self, service) -> Panel:
        return Panel(
            self.create_layout(service.snapshot(), service.read_only),
            style=f"on {self.palette.background}",
            border_style=self.palette.muted,
        )
