"""Non-blocking keyboard input for the live timer view."""

import select
import sys
import termios
import tty
from typing import Optional

# Key -> command understood by the live view.
KEY_COMMANDS = {
    " ": "toggle",
    "p": "toggle",
    "r": "reset",
    "s": "switch",
    "t": "theme",
    "q": "quit",
}


class KeyboardHandler:
    """Reads single keypresses from a cbreak-mode terminal."""

    def __init__(self, stream=None):
        self.stream = stream or sys.stdin
        self.old_settings = None
        self._setup()

    def _setup(self):
        """Put the terminal in cbreak mode so keys arrive without Enter."""
        try:
            self.fd = self.stream.fileno()
            self.old_settings = termios.tcgetattr(self.fd)
            tty.setcbreak(self.fd)
        except (termios.error, OSError, ValueError):
            # Not a TTY (piped input, test runner); keys are simply never seen.
            self.old_settings = None

    def get_key(self) -> Optional[str]:
        """Return the pending key, lowercased, or None without blocking."""
        if self.old_settings is None:
            return None
        if select.select([self.stream], [], [], 0)[0]:
            key = self.stream.read(1)
            return key.lower() if key else None
        return None

    def get_command(self) -> Optional[str]:
        key = self.get_key()
        if key is None:
            return None
        return KEY_COMMANDS.get(key)

    def stop(self):
        """Restore terminal settings."""
        if self.old_settings is not None:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self.old_settings)
            self.old_settings = None
