"""Data models for Pomodoro CLI."""

from .config_models import (
    AppConfig,
    LoggingConfig,
    NotificationConfig,
    TimerConfig,
    UIConfig,
)

__all__ = ["AppConfig", "TimerConfig", "UIConfig", "NotificationConfig", "LoggingConfig"]
