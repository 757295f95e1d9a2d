"""Services module for Pomodoro CLI - Business logic layer."""

from .clock_service import ClockService
from .config_service import ConfigService, get_config_service

__all__ = ["ClockService", "ConfigService", "get_config_service"]
