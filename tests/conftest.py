"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the p2roll test suite.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest


if TYPE_CHECKING:
    from collections.abc import Generator

    from p2roll.engine.dice import RollResolver
    from p2roll.models.character import Character


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from p2roll.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME at a temporary directory and drop any p2roll variables.

    Returns:
        The temporary home directory.
    """
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    for key in (
        "P2ROLL_ROSTER_PATH",
        "P2ROLL_LOG_LEVEL",
        "P2ROLL_LOG_FILE",
        "P2ROLL_JSON_LOGS",
        "P2ROLL_DEBUG",
        "P2ROLL_DISPLAY_COLOR",
        "P2ROLL_DISPLAY_ICONS",
        "NO_COLOR",
    ):
        monkeypatch.delenv(key, raising=False)
    return home


@pytest.fixture
def roster_path(tmp_path: Path) -> Path:
    """Path for a roster file that does not exist yet."""
    return tmp_path / "roster.yaml"


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def sample_character_data() -> dict[str, Any]:
    """Provide raw data for a level 3 barbarian.

    Returns:
        Nested character data as stored in the roster file.
    """
    return {
        "name": "Amiri",
        "player": "Sam",
        "level": 3,
        "modifiers": {
            "strength": 4,
            "dexterity": 2,
            "constitution": 2,
            "intellect": 0,
            "wisdom": 1,
            "charisma": -1,
        },
        "proficiencies": {
            "perception": "expert",
            "stealth": "trained",
            "saves": {"reflex": "trained", "fortitude": "expert", "will": "trained"},
            "identify": {
                "arcana": "untrained",
                "nature": "trained",
                "occultism": "untrained",
                "religion": "untrained",
            },
        },
        "armor_penalty": 1,
    }


@pytest.fixture
def sample_character(sample_character_data: dict[str, Any]) -> Character:
    """Create the sample Character."""
    from p2roll.models.character import Character

    return Character.model_validate(sample_character_data)


@pytest.fixture
def second_character() -> Character:
    """A level 1 wizard belonging to another player."""
    from p2roll.models.character import (
        AbilityModifiers,
        Character,
        IdentifyProficiencies,
        Proficiencies,
    )
    from p2roll.models.enums import ProficiencyRank

    return Character(
        name="Ezren",
        player="Alex",
        level=1,
        modifiers=AbilityModifiers(intellect=4, wisdom=1, dexterity=1),
        proficiencies=Proficiencies(
            identify=IdentifyProficiencies(
                arcana=ProficiencyRank.TRAINED,
                occultism=ProficiencyRank.EXPERT,
            ),
        ),
    )


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def fixed_die() -> Callable[..., Callable[[], int]]:
    """Build a die that returns the given values in order.

    Returns:
        Factory taking the values to return.
    """

    def factory(*values: int) -> Callable[[], int]:
        iterator: Iterator[int] = iter(values)
        return lambda: next(iterator)

    return factory


@pytest.fixture
def resolver_with(fixed_die: Callable[..., Callable[[], int]]) -> Callable[..., RollResolver]:
    """Build a RollResolver whose die returns the given values in order."""
    from p2roll.engine.dice import RollResolver

    def factory(*values: int) -> RollResolver:
        return RollResolver(die=fixed_die(*values))

    return factory
