"""Pydantic V2 data model for p2roll.

Submodules:
    enums: ProficiencyRank, Statistic, DegreeOfSuccess
    character: Character and its components, CharacterUpdate

Example:
    >>> from p2roll.models import Character, ProficiencyRank
    >>> Character(name="Amiri", player="Sam").perception()
    0
"""

from __future__ import annotations

from p2roll.models.character import (
    AbilityModifiers,
    Character,
    CharacterUpdate,
    IdentifyProficiencies,
    Proficiencies,
    SaveProficiencies,
    derived_modifier,
    validate_character,
    validate_update,
)
from p2roll.models.enums import DegreeOfSuccess, ProficiencyRank, Statistic


__all__ = [
    # Enumerations
    "DegreeOfSuccess",
    "ProficiencyRank",
    "Statistic",
    # Character
    "AbilityModifiers",
    "SaveProficiencies",
    "IdentifyProficiencies",
    "Proficiencies",
    "Character",
    "CharacterUpdate",
    "derived_modifier",
    "validate_character",
    "validate_update",
]
