"""Terminal formatting for p2roll output.

Roll lines, DC headers and error messages are styled with ANSI SGR codes.
Styling is switched off for non-terminal streams, when ``NO_COLOR`` is set,
or when the caller disables it.
"""

from __future__ import annotations

import os
from enum import StrEnum
from typing import TextIO

from p2roll.engine.dice import CharacterRoll, RollOutcome
from p2roll.models.enums import DegreeOfSuccess


class Color(StrEnum):
    """ANSI SGR sequences used by the CLI."""

    RED = "\033[1;31m"
    YELLOW = "\033[1;33m"
    CYAN = "\033[1;36m"
    RESET = "\033[0m"


DEGREE_ICONS: dict[DegreeOfSuccess, str] = {
    DegreeOfSuccess.CRITICAL_FAILURE: "\N{COLLISION SYMBOL}",
    DegreeOfSuccess.FAILURE: "\N{CROSS MARK}",
    DegreeOfSuccess.SUCCESS: "\N{WHITE HEAVY CHECK MARK}",
    DegreeOfSuccess.CRITICAL_SUCCESS: "\N{GLOWING STAR}",
}
UNKNOWN_ICON = "\N{WHITE QUESTION MARK ORNAMENT}"


def color_enabled(stream: TextIO, *, requested: bool = True) -> bool:
    """Decide whether to style output written to a stream.

    Args:
        stream: Destination stream.
        requested: Whether the user wants color at all.

    Returns:
        True if ANSI codes should be emitted.
    """
    if not requested or os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def colorize(text: str, color: Color, *, enabled: bool = True) -> str:
    """Wrap text in an ANSI color sequence."""
    if not enabled:
        return text
    return f"{color}{text}{Color.RESET}"


def degree_icon(degree: DegreeOfSuccess | None) -> str:
    if degree is None:
        return UNKNOWN_ICON
    return DEGREE_ICONS[degree]


def format_die(outcome: RollOutcome, *, color: bool = True) -> str:
    """Render the natural die value, highlighting natural 1s and 20s."""
    text = f"<{outcome.natural}>"
    if outcome.is_natural_one:
        return colorize(text, Color.RED, enabled=color)
    if outcome.is_natural_twenty:
        return colorize(text, Color.YELLOW, enabled=color)
    return text


def format_modifier(modifier: int) -> str:
    sign = "-" if modifier < 0 else "+"
    return f"{sign} {abs(modifier)}"


def format_target(target: int, *, color: bool = True) -> str:
    return colorize(f"DC {target}", Color.CYAN, enabled=color)


def format_roll(roll: CharacterRoll, *, color: bool = True, icons: bool = True) -> str:
    """Render one roll line.

    Example output: ``✅ Amiri (Sam)\t<14> + 5 = 19``
    """
    outcome = roll.outcome
    prefix = ""
    if icons and outcome.degree is not None:
        prefix = f"{degree_icon(outcome.degree)} "
    elif outcome.degree is not None:
        prefix = f"[{outcome.degree.label}] "
    return (
        f"{prefix}{roll.character.label}\t"
        f"{format_die(outcome, color=color)} {format_modifier(outcome.modifier)} = {outcome.total}"
    )


def format_error(command: str, message: str, *, color: bool = True) -> str:
    return colorize(f" !! Error running `{command}': {message}", Color.RED, enabled=color)


__all__ = [
    "Color",
    "DEGREE_ICONS",
    "color_enabled",
    "colorize",
    "degree_icon",
    "format_die",
    "format_error",
    "format_modifier",
    "format_roll",
    "format_target",
]
