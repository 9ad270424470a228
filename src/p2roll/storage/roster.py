"""YAML-backed character roster.

The roster is a single human-readable YAML file with a top-level
``players`` list. It is loaded once per command, mutated in memory, and
written back in full only after a mutation has succeeded.

Default location: ~/.p2roll
"""

from __future__ import annotations

import os
import tempfile
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import yaml

from p2roll.core.exceptions import (
    CharacterNotFoundError,
    DuplicateIdentityError,
    PersistenceError,
    ValidationError,
)
from p2roll.core.logging import get_logger
from p2roll.models.character import Character, CharacterUpdate, validate_character


logger = get_logger(__name__)

ROSTER_KEY = "players"
FILE_MODE = 0o640


class Roster:
    """In-memory roster bound to a file path.

    Names and players are unique case-insensitively. Records are kept in
    insertion order while in memory and sorted by name when saved.
    """

    def __init__(self, path: str | Path, characters: list[Character] | None = None) -> None:
        """Initialize the roster.

        Args:
            path: File the roster is saved to.
            characters: Initial records.
        """
        self.path = Path(path)
        self._characters: list[Character] = list(characters or [])

    # =========================================================================
    # Persistence
    # =========================================================================

    @classmethod
    def load(cls, path: str | Path) -> Roster:
        """Load a roster from disk.

        A missing or empty file is an empty roster.

        Args:
            path: Roster file path.

        Returns:
            The loaded roster.

        Raises:
            PersistenceError: If the file cannot be read or parsed.
        """
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("Roster file not found, starting empty", path=str(path))
            return cls(path)
        except (OSError, UnicodeDecodeError) as exc:
            raise PersistenceError(f"opening file for loading: {exc}", path=path) from exc

        try:
            document = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise PersistenceError(f"parsing roster file: {exc}", path=path) from exc

        characters = [
            cls._load_record(record, index, path)
            for index, record in enumerate(cls._records(document, path))
        ]
        logger.debug("Roster loaded", path=str(path), count=len(characters))
        return cls(path, characters)

    @staticmethod
    def _records(document: Any, path: Path) -> list[Any]:
        if document is None:
            return []
        if not isinstance(document, dict):
            raise PersistenceError("roster file must contain a mapping", path=path)
        records = document.get(ROSTER_KEY) or []
        if not isinstance(records, list):
            raise PersistenceError(f"'{ROSTER_KEY}' must be a list", path=path)
        return records

    @staticmethod
    def _load_record(record: Any, index: int, path: Path) -> Character:
        if not isinstance(record, dict):
            raise PersistenceError(
                "character record must be a mapping",
                path=path,
                details={"index": index},
            )
        try:
            return validate_character(record)
        except ValidationError as exc:
            raise PersistenceError(
                f"invalid character record: {exc.message}",
                path=path,
                details={"index": index},
            ) from exc

    def to_document(self) -> dict[str, Any]:
        """Serializable form of the roster."""
        return {ROSTER_KEY: [character.model_dump(mode="json") for character in self._characters]}

    def sort(self) -> None:
        """Sort records by name."""
        self._characters.sort(key=lambda character: character.name)

    def save(self) -> None:
        """Write the roster to disk, sorted by name.

        The file is written to a temporary sibling and moved into place so
        a failed write never leaves a truncated roster behind.

        Raises:
            PersistenceError: If the file cannot be written.
        """
        self.sort()
        try:
            text = yaml.safe_dump(
                self.to_document(),
                sort_keys=False,
                default_flow_style=False,
                allow_unicode=True,
            )
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(text)
                os.chmod(tmp_name, FILE_MODE)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, yaml.YAMLError) as exc:
            raise PersistenceError(f"writing roster file: {exc}", path=self.path) from exc

        logger.info("Roster saved", path=str(self.path), count=len(self._characters))

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def characters(self) -> list[Character]:
        """All characters, in current order."""
        return list(self._characters)

    def __iter__(self) -> Iterator[Character]:
        return iter(list(self._characters))

    def __len__(self) -> int:
        return len(self._characters)

    def _index_by_name(self, name: str) -> int:
        for index, character in enumerate(self._characters):
            if character.matches_name(name):
                return index
        raise CharacterNotFoundError("character not found", field_name="name", value=name)

    def _index_by_player(self, player: str) -> int:
        for index, character in enumerate(self._characters):
            if character.matches_player(player):
                return index
        raise CharacterNotFoundError("character not found", field_name="player", value=player)

    def find_by_name(self, name: str) -> Character:
        """Find a character by name (case-insensitive).

        Raises:
            CharacterNotFoundError: If no character has that name.
        """
        return self._characters[self._index_by_name(name)]

    def find_by_player(self, player: str) -> Character:
        """Find a character by player (case-insensitive).

        Raises:
            CharacterNotFoundError: If no character belongs to that player.
        """
        return self._characters[self._index_by_player(player)]

    def select(self, *, name: str | None = None, player: str | None = None) -> Character:
        """Find a character by exactly one of name or player.

        Args:
            name: Character name to look up.
            player: Player name to look up.

        Returns:
            The matching character.

        Raises:
            ValidationError: If neither or both selectors are given.
            CharacterNotFoundError: If nothing matches.
        """
        if (name is None) == (player is None):
            raise ValidationError(
                "exactly one of name or player must be given",
                details={"name": name, "player": player},
            )
        if name is not None:
            return self.find_by_name(name)
        return self.find_by_player(player)

    # =========================================================================
    # Mutations
    # =========================================================================

    def _check_unique(self, character: Character, *, ignore: int | None = None) -> None:
        for index, existing in enumerate(self._characters):
            if index == ignore:
                continue
            if existing.matches_name(character.name):
                raise DuplicateIdentityError(
                    "character with name already exists in game",
                    field_name="name",
                    value=character.name,
                )
            if existing.matches_player(character.player):
                raise DuplicateIdentityError(
                    "character with player name already exists in game",
                    field_name="player",
                    value=character.player,
                )

    def add(self, character: Character) -> Character:
        """Add a new character.

        Raises:
            DuplicateIdentityError: If the name or player is already taken.
        """
        self._check_unique(character)
        self._characters.append(character)
        logger.info("Character added", name=character.name, player=character.player)
        return character

    def _remove_at(self, index: int) -> Character:
        removed = self._characters.pop(index)
        logger.info("Character removed", name=removed.name, player=removed.player)
        return removed

    def remove_by_name(self, name: str) -> Character:
        """Remove the character with this name.

        Raises:
            CharacterNotFoundError: If no character has that name.
        """
        return self._remove_at(self._index_by_name(name))

    def remove_by_player(self, player: str) -> Character:
        """Remove the character belonging to this player.

        Raises:
            CharacterNotFoundError: If no character belongs to that player.
        """
        return self._remove_at(self._index_by_player(player))

    def edit(self, character: Character, update: CharacterUpdate) -> Character:
        """Apply a partial update to a character in the roster.

        The edited record takes the original's position. Nothing changes if
        the update is invalid or would duplicate another character's name or
        player.

        Args:
            character: Record previously returned by a find method.
            update: Fields to overwrite.

        Returns:
            The edited character.

        Raises:
            CharacterNotFoundError: If the character is not in this roster.
            DuplicateIdentityError: If the new name or player is taken.
            ValidationError: If the updated character is invalid.
        """
        index = next(
            (i for i, existing in enumerate(self._characters) if existing is character),
            None,
        )
        if index is None:
            raise CharacterNotFoundError(
                "character not found",
                field_name="name",
                value=character.name,
            )

        edited = update.apply_to(character)
        self._check_unique(edited, ignore=index)
        self._characters[index] = edited
        logger.info(
            "Character edited",
            name=edited.name,
            player=edited.player,
            fields=sorted(update.supplied),
        )
        return edited


__all__ = [
    "ROSTER_KEY",
    "Roster",
]
