"""d20 roll resolution with Pathfinder 2e degrees of success.

A check is one d20 plus a modifier, optionally compared against a DC. The
total is first classified by how far it lands from the DC, then a natural 1
or natural 20 moves the result one degree down or up.

Example:
    >>> resolver = RollResolver(die=lambda: 11)
    >>> outcome = resolver.resolve(7, target=18)
    >>> outcome.degree
    <DegreeOfSuccess.SUCCESS: 2>
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

import d20

from p2roll.core.exceptions import DiceRollError
from p2roll.core.logging import get_logger
from p2roll.models.character import Character
from p2roll.models.enums import DegreeOfSuccess, Statistic


logger = get_logger(__name__)

D20_EXPRESSION = "1d20"
NATURAL_ONE = 1
NATURAL_TWENTY = 20

# Distance from the DC at which a result becomes critical.
CRITICAL_MARGIN = 10

Die = Callable[[], int]


def roll_d20() -> int:
    """Roll a single d20 with the d20 library.

    Returns:
        A value from 1 to 20 inclusive.
    """
    return d20.roll(D20_EXPRESSION).total


def classify(total: int, target: int) -> DegreeOfSuccess:
    """Classify a total against a DC, ignoring the natural die value.

    Args:
        total: Die value plus modifier.
        target: The DC to meet or beat.

    Returns:
        The degree of success before any natural 1/20 adjustment.
    """
    if total <= target - CRITICAL_MARGIN:
        return DegreeOfSuccess.CRITICAL_FAILURE
    if total < target:
        return DegreeOfSuccess.FAILURE
    if total >= target + CRITICAL_MARGIN:
        return DegreeOfSuccess.CRITICAL_SUCCESS
    return DegreeOfSuccess.SUCCESS


def apply_natural_shift(degree: DegreeOfSuccess, natural: int) -> DegreeOfSuccess:
    """Adjust a degree for a natural 1 or natural 20.

    A natural 1 drops the result one degree and a natural 20 raises it one
    degree. Results already at the end of the scale stay there.

    Args:
        degree: Degree from :func:`classify`.
        natural: The unmodified die value.

    Returns:
        The final degree of success.
    """
    if natural == NATURAL_ONE:
        return degree.shift(-1)
    if natural == NATURAL_TWENTY:
        return degree.shift(1)
    return degree


@dataclass(frozen=True)
class RollOutcome:
    """Result of one d20 check.

    Attributes:
        natural: The unmodified die value.
        modifier: Modifier added to the die.
        total: ``natural + modifier``.
        target: The DC, or None for an informational roll.
        degree: Final degree of success, or None when there is no DC.
    """

    natural: int
    modifier: int
    total: int
    target: int | None = None
    degree: DegreeOfSuccess | None = None

    @property
    def is_natural_one(self) -> bool:
        return self.natural == NATURAL_ONE

    @property
    def is_natural_twenty(self) -> bool:
        return self.natural == NATURAL_TWENTY

    @property
    def is_emphasized(self) -> bool:
        """Natural 1s and 20s are highlighted whether or not a DC was set."""
        return self.is_natural_one or self.is_natural_twenty


@dataclass(frozen=True)
class CharacterRoll:
    """A roll made for one character."""

    character: Character
    statistic: Statistic
    outcome: RollOutcome


class RollResolver:
    """Rolls d20 checks and classifies them.

    The die is injectable so tests can force specific natural values.

    Example:
        >>> resolver = RollResolver(die=lambda: 20)
        >>> resolver.resolve(0, target=25).degree
        <DegreeOfSuccess.SUCCESS: 2>
    """

    def __init__(self, *, die: Die | None = None) -> None:
        """Initialize the resolver.

        Args:
            die: Zero-argument callable returning a d20 value. Defaults to
                :func:`roll_d20`.
        """
        self._die = die or roll_d20

    def _draw(self) -> int:
        natural = self._die()
        if not NATURAL_ONE <= natural <= NATURAL_TWENTY:
            raise DiceRollError(
                f"d20 produced impossible value {natural}",
                expression=D20_EXPRESSION,
            )
        return natural

    def resolve(self, modifier: int, target: int | None = None) -> RollOutcome:
        """Roll one d20 check.

        Args:
            modifier: Modifier added to the die.
            target: Optional DC. Without one no degree is computed.

        Returns:
            The roll outcome.

        Raises:
            DiceRollError: If the die returns a value outside 1-20.
        """
        natural = self._draw()
        total = natural + modifier

        degree = None
        if target is not None:
            degree = apply_natural_shift(classify(total, target), natural)

        logger.debug(
            "Rolled d20",
            natural=natural,
            modifier=modifier,
            total=total,
            target=target,
            degree=degree.label if degree is not None else None,
        )
        return RollOutcome(
            natural=natural,
            modifier=modifier,
            total=total,
            target=target,
            degree=degree,
        )

    def roll_for(
        self,
        characters: Iterable[Character],
        statistic: Statistic,
        target: int | None = None,
    ) -> list[CharacterRoll]:
        """Roll a statistic for each character in turn.

        Each character gets an independent die draw against its own
        derived modifier.

        Args:
            characters: Characters to roll for, in output order.
            statistic: Statistic to roll.
            target: Optional DC shared by every roll.

        Returns:
            One CharacterRoll per character, in iteration order.
        """
        rolls = [
            CharacterRoll(
                character=character,
                statistic=statistic,
                outcome=self.resolve(character.statistic(statistic), target),
            )
            for character in characters
        ]
        logger.info("Rolled statistic", statistic=str(statistic), count=len(rolls), target=target)
        return rolls


__all__ = [
    "CRITICAL_MARGIN",
    "CharacterRoll",
    "RollOutcome",
    "RollResolver",
    "apply_natural_shift",
    "classify",
    "roll_d20",
]
