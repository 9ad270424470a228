"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        P2RollError: Base exception for all application errors.
        ConfigurationError, ValidationError, RosterError,
        DuplicateIdentityError, CharacterNotFoundError,
        PersistenceError, DiceRollError.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.
        resolve_roster_path: Pick the roster file location.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from p2roll.core.config import (
    DisplaySettings,
    Settings,
    StorageSettings,
    clear_settings_cache,
    get_settings,
    resolve_roster_path,
)
from p2roll.core.exceptions import (
    CharacterNotFoundError,
    ConfigurationError,
    DiceRollError,
    DuplicateIdentityError,
    P2RollError,
    PersistenceError,
    RosterError,
    ValidationError,
)
from p2roll.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)


__all__ = [
    # Exceptions
    "P2RollError",
    "ConfigurationError",
    "ValidationError",
    "RosterError",
    "DuplicateIdentityError",
    "CharacterNotFoundError",
    "PersistenceError",
    "DiceRollError",
    # Configuration
    "Settings",
    "StorageSettings",
    "DisplaySettings",
    "get_settings",
    "clear_settings_cache",
    "resolve_roster_path",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
