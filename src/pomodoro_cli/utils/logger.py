"""Application-wide logger writing to platformdirs user_log_dir.

Level, file size and rotation come from the ``logging`` section of the config
(``pomodoro config set logging.level DEBUG``).
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from platformdirs import user_log_dir

from pomodoro_cli.models.config_models import LoggingConfig
from pomodoro_cli.services.config_service import get_config_service

_APP_NAME = "pomodoro_cli"
_LOG_FILE = "pomodoro.log"
_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

_logger: logging.Logger | None = None


def _file_handler(settings: LoggingConfig) -> logging.Handler:
    log_dir = Path(user_log_dir(_APP_NAME))
    log_dir.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        log_dir / _LOG_FILE,
        maxBytes=settings.max_megabytes * 1024 * 1024,
        backupCount=settings.backup_count,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
    return handler


def get_logger() -> logging.Logger:
    """Return the singleton application logger, initialising it on first call.

    Module loggers (``pomodoro_cli.clock``, ``pomodoro_cli.state`` ...) are
    children of this one and share its file handler.
    """
    global _logger
    if _logger is not None:
        return _logger

    settings = get_config_service().config.logging

    logger = logging.getLogger(_APP_NAME)
    logger.setLevel(settings.level)
    if not logger.handlers:
        logger.addHandler(_file_handler(settings))
    logger.propagate = False

    _logger = logger
    return _logger
