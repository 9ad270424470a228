"""Configuration management for p2roll.

Settings are loaded with pydantic-settings from environment variables and an
optional ``.env`` file. The command line can still override the roster path
with ``--config``.

Example:
    >>> from p2roll.core.config import get_settings, resolve_roster_path
    >>> settings = get_settings()
    >>> resolve_roster_path(settings=settings)
    PosixPath('/home/sam/.p2roll')

Environment Variables:
    P2ROLL_ROSTER_PATH: Path of the roster file (default: $HOME/.p2roll)
    P2ROLL_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    P2ROLL_JSON_LOGS: Emit logs as JSON instead of console output
    P2ROLL_LOG_FILE: Also write logs to this file
    P2ROLL_DISPLAY_COLOR: Enable ANSI colors in command output
    P2ROLL_DISPLAY_ICONS: Show degree-of-success icons in roll output
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from p2roll.core.exceptions import ConfigurationError


DEFAULT_ROSTER_FILENAME = ".p2roll"


class StorageSettings(BaseSettings):
    """Configuration for the roster file location.

    Attributes:
        roster_path: Explicit roster file path. When unset the path is
            derived from the user's home directory.
    """

    model_config = SettingsConfigDict(
        env_prefix="P2ROLL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    roster_path: Path | None = Field(
        default=None,
        description="Path of the roster file",
    )


class DisplaySettings(BaseSettings):
    """Configuration for terminal output.

    Attributes:
        color: Use ANSI colors when writing to a terminal.
        icons: Prefix roll lines with a degree-of-success icon.
    """

    model_config = SettingsConfigDict(
        env_prefix="P2ROLL_DISPLAY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    color: bool = Field(default=True, description="Use ANSI colors")
    icons: bool = Field(default=True, description="Show degree-of-success icons")


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        json_logs: Render logs as JSON.
        log_file: Optional file receiving a copy of the logs.
        storage: Roster file settings.
        display: Terminal output settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="P2ROLL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(default="p2roll", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Logging level",
    )
    json_logs: bool = Field(default=False, description="Render logs as JSON")
    log_file: Path | None = Field(default=None, description="Also write logs to this file")

    storage: StorageSettings = Field(default_factory=StorageSettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)

    @property
    def effective_log_level(self) -> str:
        """Log level after applying debug mode.

        Returns:
            'DEBUG' when debug mode is on, the configured level otherwise.
        """
        return "DEBUG" if self.debug else self.log_level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The cached Settings instance.

    Raises:
        ConfigurationError: If the environment holds invalid values.
    """
    try:
        return Settings()
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


def resolve_roster_path(
    override: str | Path | None = None,
    settings: Settings | None = None,
) -> Path:
    """Work out which roster file to use.

    Resolution order: the explicit override (``--config``), then
    ``P2ROLL_ROSTER_PATH``, then ``$HOME/.p2roll``.

    Args:
        override: Path given on the command line, if any.
        settings: Settings to consult; defaults to the cached singleton.

    Returns:
        Path of the roster file. The file itself need not exist.

    Raises:
        ConfigurationError: If no path can be resolved.
    """
    if override:
        return Path(override).expanduser()

    settings = settings or get_settings()
    if settings.storage.roster_path is not None:
        return settings.storage.roster_path.expanduser()

    home = os.environ.get("HOME", "")
    if not home:
        raise ConfigurationError(
            "no config path given and HOME envvar not set",
            config_key="roster_path",
        )
    return Path(home) / DEFAULT_ROSTER_FILENAME


__all__ = [
    "DEFAULT_ROSTER_FILENAME",
    "StorageSettings",
    "DisplaySettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
    "resolve_roster_path",
]
