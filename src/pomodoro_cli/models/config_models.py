"""Configuration models for Pomodoro CLI."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from pomodoro_cli.models.focus.cycling import PomodoroConfig

Theme = Literal["light", "dark"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class TimerConfig(BaseModel):
    """Interval lengths in seconds and long-break cadence."""

    focus_seconds: int = Field(default=25 * 60, ge=1)
    short_break_seconds: int = Field(default=5 * 60, ge=1)
    long_break_seconds: int = Field(default=15 * 60, ge=1)
    sessions_before_long_break: int = Field(default=4, ge=1)

    def to_pomodoro_config(self) -> PomodoroConfig:
        return PomodoroConfig(**self.model_dump())


class UIConfig(BaseModel):
    """Live view configuration."""

    theme: Theme = Field(default="light")
    refresh_per_second: int = Field(default=4, ge=1, le=20)


class NotificationConfig(BaseModel):
    """Completion alert configuration."""

    sound: bool = Field(default=True)
    desktop: bool = Field(default=False)


class LoggingConfig(BaseModel):
    """Log file configuration."""

    level: LogLevel = Field(default="INFO")
    max_megabytes: int = Field(default=5, ge=1)
    backup_count: int = Field(default=3, ge=0)


class AppConfig(BaseModel):
    """Main Pomodoro CLI configuration."""

    timer: TimerConfig = Field(default_factory=TimerConfig)
    ui: UIConfig = Field(default_factory=UIConfig)
    notifications: NotificationConfig = Field(default_factory=NotificationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
