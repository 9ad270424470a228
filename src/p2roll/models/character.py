"""Character model and derived statistics.

A character stores raw numbers only: ability modifiers, proficiency ranks,
level and armor penalty. Every rollable total is derived on demand from
those numbers, so a character can never hold a stale or partial statistic.

Example:
    >>> amiri = Character(
    ...     name="Amiri",
    ...     player="Sam",
    ...     level=3,
    ...     modifiers=AbilityModifiers(strength=4, dexterity=1, wisdom=1),
    ...     proficiencies=Proficiencies(perception=ProficiencyRank.EXPERT),
    ... )
    >>> amiri.perception()
    8
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from p2roll.core.exceptions import ValidationError
from p2roll.models.enums import ProficiencyRank, Statistic


def _coerce_rank(value: Any) -> ProficiencyRank:
    try:
        return ProficiencyRank.parse(value)
    except ValidationError as exc:
        raise ValueError(exc.message) from exc


Rank = Annotated[ProficiencyRank, BeforeValidator(_coerce_rank)]
Identity = Annotated[str, Field(min_length=1)]


def derived_modifier(ability_mod: int, rank: ProficiencyRank, level: int) -> int:
    """Compute a skill or save total.

    Args:
        ability_mod: The governing ability modifier.
        rank: Proficiency rank in the skill or save.
        level: Character level.

    Returns:
        ``ability_mod`` when untrained, else ``ability_mod + level + offset``.
    """
    return ability_mod + rank.bonus(level)


# =============================================================================
# Components
# =============================================================================


class AbilityModifiers(BaseModel):
    """The six ability modifiers (not scores)."""

    model_config = ConfigDict(extra="ignore")

    strength: int = 0
    dexterity: int = 0
    constitution: int = 0
    intellect: int = 0
    wisdom: int = 0
    charisma: int = 0


class SaveProficiencies(BaseModel):
    """Proficiency ranks for the three saving throws."""

    model_config = ConfigDict(extra="ignore")

    reflex: Rank = ProficiencyRank.UNTRAINED
    fortitude: Rank = ProficiencyRank.UNTRAINED
    will: Rank = ProficiencyRank.UNTRAINED


class IdentifyProficiencies(BaseModel):
    """Proficiency ranks for the knowledge skills used to identify things."""

    model_config = ConfigDict(extra="ignore")

    arcana: Rank = ProficiencyRank.UNTRAINED
    nature: Rank = ProficiencyRank.UNTRAINED
    occultism: Rank = ProficiencyRank.UNTRAINED
    religion: Rank = ProficiencyRank.UNTRAINED


class Proficiencies(BaseModel):
    """All proficiency ranks tracked for a character."""

    model_config = ConfigDict(extra="ignore")

    perception: Rank = ProficiencyRank.UNTRAINED
    stealth: Rank = ProficiencyRank.UNTRAINED
    saves: SaveProficiencies = Field(default_factory=SaveProficiencies)
    identify: IdentifyProficiencies = Field(default_factory=IdentifyProficiencies)


# =============================================================================
# Character
# =============================================================================


class Character(BaseModel):
    """A player character in the roster.

    Attributes:
        name: Character name, unique in the roster (case-insensitive).
        player: Owning player, unique in the roster (case-insensitive).
        level: Character level, added to every trained-or-better statistic.
        modifiers: Ability modifiers.
        proficiencies: Proficiency ranks.
        armor_penalty: Amount subtracted from stealth only.
    """

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    name: Identity
    player: Identity
    level: int = 1
    modifiers: AbilityModifiers = Field(default_factory=AbilityModifiers)
    proficiencies: Proficiencies = Field(default_factory=Proficiencies)
    armor_penalty: int = 0

    def matches_name(self, name: str) -> bool:
        """Case-insensitive name comparison."""
        return self.name.casefold() == name.strip().casefold()

    def matches_player(self, player: str) -> bool:
        """Case-insensitive player comparison."""
        return self.player.casefold() == player.strip().casefold()

    @property
    def label(self) -> str:
        """Display label, e.g. 'Amiri (Sam)'."""
        return f"{self.name} ({self.player})"

    def _derive(self, ability_mod: int, rank: ProficiencyRank) -> int:
        return derived_modifier(ability_mod, rank, self.level)

    def perception(self) -> int:
        return self._derive(self.modifiers.wisdom, self.proficiencies.perception)

    def stealth(self) -> int:
        return self._derive(self.modifiers.dexterity, self.proficiencies.stealth) - self.armor_penalty

    def reflex_save(self) -> int:
        return self._derive(self.modifiers.dexterity, self.proficiencies.saves.reflex)

    def fortitude_save(self) -> int:
        return self._derive(self.modifiers.constitution, self.proficiencies.saves.fortitude)

    def will_save(self) -> int:
        return self._derive(self.modifiers.wisdom, self.proficiencies.saves.will)

    def arcana(self) -> int:
        return self._derive(self.modifiers.intellect, self.proficiencies.identify.arcana)

    def nature(self) -> int:
        return self._derive(self.modifiers.wisdom, self.proficiencies.identify.nature)

    def occultism(self) -> int:
        return self._derive(self.modifiers.intellect, self.proficiencies.identify.occultism)

    def religion(self) -> int:
        return self._derive(self.modifiers.wisdom, self.proficiencies.identify.religion)

    def generic_identify(self) -> int:
        """Best of the four knowledge skills."""
        return max(self.arcana(), self.nature(), self.occultism(), self.religion())

    def statistic(self, stat: Statistic) -> int:
        """Get the modifier for a rollable statistic.

        Args:
            stat: The statistic to compute.

        Returns:
            The derived total; always 0 for a flat roll.
        """
        return _STATISTIC_GETTERS[stat](self)


_STATISTIC_GETTERS: dict[Statistic, Callable[[Character], int]] = {
    Statistic.PERCEPTION: Character.perception,
    Statistic.STEALTH: Character.stealth,
    Statistic.REFLEX: Character.reflex_save,
    Statistic.FORTITUDE: Character.fortitude_save,
    Statistic.WILL: Character.will_save,
    Statistic.IDENTIFY: Character.generic_identify,
    Statistic.ARCANA: Character.arcana,
    Statistic.NATURE: Character.nature,
    Statistic.OCCULTISM: Character.occultism,
    Statistic.RELIGION: Character.religion,
    Statistic.FLAT: lambda _character: 0,
}


def validate_character(data: dict[str, Any]) -> Character:
    """Build a Character from raw data, raising the application's error type.

    Args:
        data: Nested character data as stored or collected from the CLI.

    Returns:
        The validated Character.

    Raises:
        ValidationError: If any field is missing or invalid.
    """
    try:
        return Character.model_validate(data)
    except PydanticValidationError as exc:
        raise _convert_error(exc, "character") from exc


def _convert_error(exc: PydanticValidationError, kind: str) -> ValidationError:
    first = exc.errors()[0]
    field_name = ".".join(str(part) for part in first["loc"])
    return ValidationError(
        f"invalid {kind} data: {field_name}: {first['msg']}",
        field_name=field_name,
        details={"error_count": exc.error_count()},
    )


# =============================================================================
# Partial updates
# =============================================================================


# Where each editable field lives inside a dumped Character.
_UPDATE_PATHS: dict[str, tuple[str, ...]] = {
    "name": ("name",),
    "player": ("player",),
    "level": ("level",),
    "strength": ("modifiers", "strength"),
    "dexterity": ("modifiers", "dexterity"),
    "constitution": ("modifiers", "constitution"),
    "intellect": ("modifiers", "intellect"),
    "wisdom": ("modifiers", "wisdom"),
    "charisma": ("modifiers", "charisma"),
    "perception": ("proficiencies", "perception"),
    "stealth": ("proficiencies", "stealth"),
    "reflex": ("proficiencies", "saves", "reflex"),
    "fortitude": ("proficiencies", "saves", "fortitude"),
    "will": ("proficiencies", "saves", "will"),
    "arcana": ("proficiencies", "identify", "arcana"),
    "nature": ("proficiencies", "identify", "nature"),
    "occultism": ("proficiencies", "identify", "occultism"),
    "religion": ("proficiencies", "identify", "religion"),
    "armor_penalty": ("armor_penalty",),
}


class CharacterUpdate(BaseModel):
    """A partial edit of a character.

    Every field is optional. ``None`` means the caller did not supply the
    field and the existing value is kept; any other value, including ``0``
    and ``ProficiencyRank.UNTRAINED``, overwrites it.
    """

    name: Identity | None = None
    player: Identity | None = None
    level: int | None = None

    strength: int | None = None
    dexterity: int | None = None
    constitution: int | None = None
    intellect: int | None = None
    wisdom: int | None = None
    charisma: int | None = None

    perception: Rank | None = None
    stealth: Rank | None = None
    reflex: Rank | None = None
    fortitude: Rank | None = None
    will: Rank | None = None
    arcana: Rank | None = None
    nature: Rank | None = None
    occultism: Rank | None = None
    religion: Rank | None = None

    armor_penalty: int | None = None

    @property
    def supplied(self) -> dict[str, Any]:
        """Fields the caller actually supplied."""
        return self.model_dump(exclude_none=True)

    @property
    def is_empty(self) -> bool:
        """Whether the update would change nothing."""
        return not self.supplied

    def apply_to(self, character: Character) -> Character:
        """Produce an updated copy of a character.

        The original character is left untouched.

        Args:
            character: The character to update.

        Returns:
            A new validated Character with the supplied fields replaced.

        Raises:
            ValidationError: If the result is not a valid character.
        """
        data = character.model_dump()
        for field_name, value in self.supplied.items():
            *parents, leaf = _UPDATE_PATHS[field_name]
            target = data
            for key in parents:
                target = target[key]
            target[leaf] = value
        return validate_character(data)


def validate_update(data: dict[str, Any]) -> CharacterUpdate:
    """Build a CharacterUpdate from raw data.

    Raises:
        ValidationError: If a supplied field is invalid.
    """
    try:
        return CharacterUpdate.model_validate(data)
    except PydanticValidationError as exc:
        raise _convert_error(exc, "update") from exc


__all__ = [
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
