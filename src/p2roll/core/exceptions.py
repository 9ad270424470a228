"""Custom exception hierarchy for p2roll.

All exceptions inherit from P2RollError so the command-line boundary can
report any domain failure uniformly while still preserving the context each
failure carries.

Example:
    >>> from p2roll.core.exceptions import CharacterNotFoundError
    >>> raise CharacterNotFoundError("character not found", field_name="name", value="Amiri")
"""

from __future__ import annotations

from pathlib import Path
from typing import Any


class P2RollError(Exception):
    """Base exception for all p2roll errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(P2RollError):
    """Raised when the application configuration is invalid or incomplete.

    The most common cause is that no roster path can be resolved: no
    ``--config`` override, no ``P2ROLL_ROSTER_PATH`` and no ``HOME``.
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class ValidationError(P2RollError):
    """Raised when user input or stored data fails validation.

    This covers missing required fields, unknown proficiency ranks and
    selector misuse (zero or several of name/player given).
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


# =============================================================================
# Roster Exceptions
# =============================================================================


class RosterError(P2RollError):
    """Base exception for roster lookups and mutations."""

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        value: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize roster error with the identity that was involved.

        Args:
            message: Human-readable error description.
            field_name: Identity field involved ('name' or 'player').
            value: The identity value that was looked up or inserted.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if value is not None:
            combined_details["value"] = value
        self.field_name = field_name
        self.value = value
        super().__init__(message, details=combined_details)


class DuplicateIdentityError(RosterError):
    """Raised when a name or player is already taken in the roster."""


class CharacterNotFoundError(RosterError):
    """Raised when no character matches the requested name or player."""


# =============================================================================
# Persistence Exceptions
# =============================================================================


class PersistenceError(P2RollError):
    """Raised when the roster file cannot be read, parsed or written."""

    def __init__(
        self,
        message: str,
        *,
        path: str | Path | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize persistence error with file context.

        Args:
            message: Human-readable error description.
            path: Path of the roster file involved.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if path is not None:
            combined_details["path"] = str(path)
        super().__init__(message, details=combined_details)


# =============================================================================
# Dice Exceptions
# =============================================================================


class DiceRollError(P2RollError):
    """Raised when a die produces an impossible value or cannot be rolled."""

    def __init__(
        self,
        message: str,
        *,
        expression: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize dice roll error with expression context.

        Args:
            message: Human-readable error description.
            expression: The dice expression that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if expression:
            combined_details["expression"] = expression
        super().__init__(message, details=combined_details)


__all__ = [
    "P2RollError",
    "ConfigurationError",
    "ValidationError",
    "RosterError",
    "DuplicateIdentityError",
    "CharacterNotFoundError",
    "PersistenceError",
    "DiceRollError",
]
