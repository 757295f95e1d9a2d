"""Session state persistence."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path

from platformdirs import user_data_dir
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .clock import SessionState
from .cycling import PomodoroConfig
from .exceptions import InvalidPersistedStateError

logger = logging.getLogger("pomodoro_cli.state")


class PersistedSession(BaseModel):
    """On-disk shape of a SessionState."""

    model_config = ConfigDict(extra="ignore", strict=True)

    is_running: bool
    is_focus: bool
    is_long_break: bool = False
    time_left: int = Field(ge=0)
    total_sessions: int = Field(ge=0)
    consecutive_sessions: int = Field(ge=0)
    last_updated: datetime

    @classmethod
    def from_state(cls, state: SessionState) -> PersistedSession:
        return cls(
            is_running=state.is_running,
            is_focus=state.is_focus,
            is_long_break=state.is_long_break,
            time_left=state.time_left,
            total_sessions=state.total_sessions,
            consecutive_sessions=state.consecutive_sessions,
            last_updated=state.last_updated,
        )

    def to_state(self) -> SessionState:
        last_updated = self.last_updated
        if last_updated.tzinfo is None:
            last_updated = last_updated.astimezone()
        return SessionState(
            is_running=self.is_running,
            is_focus=self.is_focus,
            is_long_break=self.is_long_break,
            time_left=self.time_left,
            total_sessions=self.total_sessions,
            consecutive_sessions=self.consecutive_sessions,
            last_updated=last_updated,
        )


def parse_session(raw: str, config: PomodoroConfig) -> SessionState:
    """Parse a persisted snapshot and fit it to the current config.

    Structural problems reject the whole snapshot. Values that were valid
    under an earlier config (an interval or cadence since shortened) are
    clamped instead, so the lifetime session count survives a config change.

    Raises:
        InvalidPersistedStateError: If the payload is not a usable snapshot.
    """
    try:
        persisted = PersistedSession.model_validate_json(raw)
    except ValidationError as e:
        raise InvalidPersistedStateError(str(e)) from e

    if persisted.is_long_break and persisted.is_focus:
        raise InvalidPersistedStateError("long break flag set during focus")
    if persisted.time_left == 0:
        raise InvalidPersistedStateError("time_left=0 outside a completion")

    state = persisted.to_state()

    cadence = config.sessions_before_long_break
    if state.consecutive_sessions >= cadence:
        logger.warning(
            "streak %d not below cadence %d; restarting the streak",
            state.consecutive_sessions,
            cadence,
        )
        state.consecutive_sessions = 0

    if state.is_focus:
        limit = config.focus_seconds
    elif state.is_long_break:
        limit = config.long_break_seconds
    else:
        limit = config.short_break_seconds
    if state.time_left > limit:
        logger.warning(
            "time_left %d longer than the configured interval; clamping to %d",
            state.time_left,
            limit,
        )
        state.time_left = limit

    return state


class SessionStateManager:
    """Loads and saves the timer state as JSON."""

    def __init__(
        self, state_dir: Path | None = None, config: PomodoroConfig | None = None
    ):
        if state_dir is None:
            state_dir = Path(user_data_dir("pomodoro_cli")) / "state"

        self.state_dir = state_dir
        self.state_file = self.state_dir / "current_session.json"
        self.config = config or PomodoroConfig()

    def save(self, state: SessionState) -> None:
        """Write the state to disk. Raises OSError if storage is unavailable."""
        self.state_dir.mkdir(parents=True, exist_ok=True)
        payload = PersistedSession.from_state(state).model_dump(mode="json")
        with open(self.state_file, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)

        self.state_file.chmod(0o600)

    def load(self) -> SessionState | None:
        """Load the saved state. Returns None if the file is missing or invalid."""
        if not self.state_file.exists():
            return None

        try:
            raw = self.state_file.read_text(encoding="utf-8")
            return parse_session(raw, self.config)
        except (InvalidPersistedStateError, UnicodeDecodeError) as e:
            logger.warning("discarding invalid session state: %s", e)
            return None
        except OSError as e:
            logger.warning("could not read session state: %s", e)
            return None

    def delete(self) -> None:
        if self.state_file.exists():
            self.state_file.unlink()
