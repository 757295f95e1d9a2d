"""Configuration service for Pomodoro CLI.

Single source of truth for ``config.json``: loading with fallback to defaults,
saving, and dot-separated key access (``ui.theme``, ``timer.focus_seconds``)
used by the ``config`` and ``theme`` commands.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel, ValidationError

from pomodoro_cli.models.config_models import AppConfig

logger = logging.getLogger("pomodoro_cli.config")


class ConfigKeyError(KeyError):
    """Raised for a configuration key that does not exist."""


class ConfigService:
    """Loads, saves and edits the application configuration."""

    def __init__(self):
        self.config_dir = Path(user_config_dir("pomodoro_cli"))
        self.config_path = self.config_dir / "config.json"
        self.data_dir = Path(user_data_dir("pomodoro_cli"))

        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> AppConfig:
        """Load configuration from disk, falling back to defaults."""
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # First run
            self._config = AppConfig()
        except (ValidationError, OSError) as e:
            logger.warning("ignoring unreadable config %s: %s", self.config_path, e)
            self._config = AppConfig()

        return self._config

    def save_config(self) -> None:
        """Write the current configuration to disk."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w", encoding="utf-8") as f:
            f.write(self.config.model_dump_json(indent=4))

        self.config_path.chmod(0o600)

    def reset_config(self) -> AppConfig:
        """Reset configuration to defaults."""
        self._config = AppConfig()
        self.save_config()
        return self._config

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key."""
        value: Any = self.config
        for part in key.split("."):
            if not isinstance(value, BaseModel) or part not in type(value).model_fields:
                raise ConfigKeyError(key)
            value = getattr(value, part)
        return value

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key.

        Raises:
            ConfigKeyError: If the key does not name a leaf setting.
            ValidationError: If the value is rejected by the model.
        """
        parts = key.split(".")
        if isinstance(self.get(key), BaseModel):
            raise ConfigKeyError(key)

        data = self.config.model_dump()
        current = data
        for part in parts[:-1]:
            current = current[part]
        current[parts[-1]] = value

        self._config = AppConfig.model_validate(data)
        self.save_config()

    def flatten(self) -> dict[str, Any]:
        """All leaf settings keyed by their dotted path."""
        flat: dict[str, Any] = {}

        def walk(prefix: str, node: dict) -> None:
            for name, val in node.items():
                path = f"{prefix}.{name}" if prefix else name
                if isinstance(val, dict):
                    walk(path, val)
                else:
                    flat[path] = val

        walk("", self.config.model_dump())
        return flat


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get the process-wide ConfigService."""
    return ConfigService()
