"""Enumeration types for p2roll.

This module defines proficiency ranks, the statistics that can be rolled,
and the four degrees of success a check can produce.
"""

from __future__ import annotations

from enum import IntEnum, StrEnum
from typing import Any

from p2roll.core.exceptions import ValidationError


class ProficiencyRank(StrEnum):
    """Pathfinder 2e proficiency ranks.

    Every rank above Untrained adds the character level plus a fixed offset
    to the statistics it governs. Untrained adds nothing at all.
    """

    UNTRAINED = "untrained"
    TRAINED = "trained"
    EXPERT = "expert"
    MASTER = "master"
    LEGENDARY = "legendary"

    @property
    def offset(self) -> int:
        """Fixed bonus added on top of level for this rank.

        Returns:
            0, 2, 4, 6 or 8 from Untrained up to Legendary.
        """
        return _RANK_OFFSETS[self]

    @property
    def abbreviation(self) -> str:
        """Single-letter abbreviation used on the command line.

        Returns:
            One of 'U', 'T', 'E', 'M', 'L'.
        """
        return self.value[0].upper()

    def bonus(self, level: int) -> int:
        """Get the proficiency bonus at a given level.

        Args:
            level: Character level.

        Returns:
            0 for Untrained, otherwise level plus the rank offset.
        """
        if self is ProficiencyRank.UNTRAINED:
            return 0
        return level + self.offset

    @classmethod
    def parse(cls, value: Any) -> ProficiencyRank:
        """Parse a rank from user input or stored data.

        Accepts a rank, its name, its single-letter abbreviation (any case),
        or the integer offset older roster files were written with. Older
        files may also hold the "unknown" marker -100 where an edit skipped a
        rank; that reads as Untrained.

        Args:
            value: Value to interpret.

        Returns:
            The matching ProficiencyRank.

        Raises:
            ValidationError: If the value does not name a rank.
        """
        if isinstance(value, cls):
            return value
        # bool is an int subclass; True/False are never ranks
        if isinstance(value, int) and not isinstance(value, bool):
            if value == LEGACY_UNKNOWN_RANK:
                return cls.UNTRAINED
            for rank, offset in _RANK_OFFSETS.items():
                if offset == value:
                    return rank
        elif isinstance(value, str):
            text = value.strip().lower()
            for rank in cls:
                if text in (rank.value, rank.value[0]):
                    return rank
        raise ValidationError(
            "invalid proficiency rank, expected one of U, T, E, M, L",
            invalid_value=value,
        )


# Written by older versions for ranks an edit did not set.
LEGACY_UNKNOWN_RANK = -100

_RANK_OFFSETS: dict[ProficiencyRank, int] = {
    ProficiencyRank.UNTRAINED: 0,
    ProficiencyRank.TRAINED: 2,
    ProficiencyRank.EXPERT: 4,
    ProficiencyRank.MASTER: 6,
    ProficiencyRank.LEGENDARY: 8,
}


class Statistic(StrEnum):
    """Statistics a character can roll."""

    PERCEPTION = "perception"
    STEALTH = "stealth"
    REFLEX = "reflex"
    FORTITUDE = "fortitude"
    WILL = "will"
    IDENTIFY = "identify"
    ARCANA = "arcana"
    NATURE = "nature"
    OCCULTISM = "occultism"
    RELIGION = "religion"
    FLAT = "flat"

    @property
    def description(self) -> str:
        """Short help text for the statistic."""
        return _STATISTIC_HELP[self]


_STATISTIC_HELP: dict[Statistic, str] = {
    Statistic.PERCEPTION: "roll perception (wisdom)",
    Statistic.STEALTH: "roll stealth (dexterity, less armor penalty)",
    Statistic.REFLEX: "roll a reflex save (dexterity)",
    Statistic.FORTITUDE: "roll a fortitude save (constitution)",
    Statistic.WILL: "roll a will save (wisdom)",
    Statistic.IDENTIFY: "roll the best of arcana, nature, occultism and religion",
    Statistic.ARCANA: "roll arcana (intelligence)",
    Statistic.NATURE: "roll nature (wisdom)",
    Statistic.OCCULTISM: "roll occultism (intelligence)",
    Statistic.RELIGION: "roll religion (wisdom)",
    Statistic.FLAT: "roll a flat d20 with no modifier",
}


class DegreeOfSuccess(IntEnum):
    """Outcome of a check against a DC, ordered from worst to best."""

    CRITICAL_FAILURE = 0
    FAILURE = 1
    SUCCESS = 2
    CRITICAL_SUCCESS = 3

    @property
    def label(self) -> str:
        """Human-readable name, e.g. 'Critical Success'."""
        return self.name.replace("_", " ").title()

    def shift(self, steps: int) -> DegreeOfSuccess:
        """Move the degree up (positive) or down (negative).

        The result is clamped to the ends of the scale; it never wraps.

        Args:
            steps: Number of steps to move.

        Returns:
            The shifted degree.
        """
        lowest = DegreeOfSuccess.CRITICAL_FAILURE.value
        highest = DegreeOfSuccess.CRITICAL_SUCCESS.value
        return DegreeOfSuccess(max(lowest, min(self.value + steps, highest)))


__all__ = [
    "ProficiencyRank",
    "Statistic",
    "DegreeOfSuccess",
]
