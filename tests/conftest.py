"""Shared test fixtures and configuration.

Keeps every test away from the real platformdirs locations: config, session
state and the log file all land in *tmp_path*.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest

T0 = datetime(2026, 3, 2, 9, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Controllable wall clock for ClockService."""

    def __init__(self, start: datetime = T0):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current = self.current + timedelta(seconds=seconds)


@pytest.fixture()
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture(autouse=True)
def isolate_dirs(tmp_path):
    """Point platformdirs at tmp_path and reset process-wide singletons."""
    import pomodoro_cli.utils.logger as logger_mod
    from pomodoro_cli.services.config_service import get_config_service

    app_logger = logging.getLogger("pomodoro_cli")
    tmpdir = str(tmp_path)
    get_config_service.cache_clear()
    logger_mod._logger = None
    app_logger.handlers.clear()
    app_logger.propagate = True
    with (
        patch("pomodoro_cli.services.config_service.user_config_dir", return_value=tmpdir),
        patch("pomodoro_cli.services.config_service.user_data_dir", return_value=tmpdir),
        patch("pomodoro_cli.models.focus.state.user_data_dir", return_value=tmpdir),
        patch("pomodoro_cli.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")),
    ):
        yield tmp_path
    get_config_service.cache_clear()
    logger_mod._logger = None
    app_logger.handlers.clear()
    app_logger.propagate = True
