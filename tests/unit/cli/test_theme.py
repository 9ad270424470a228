"""Tests for terminal formatting."""

from __future__ import annotations

import io

import pytest

from p2roll.cli.theme import (
    Color,
    color_enabled,
    colorize,
    degree_icon,
    format_die,
    format_error,
    format_modifier,
    format_roll,
    format_target,
)
from p2roll.engine.dice import CharacterRoll, RollOutcome
from p2roll.models.character import Character
from p2roll.models.enums import DegreeOfSuccess, Statistic


class _TTY(io.StringIO):
    def isatty(self) -> bool:
        return True


class TestColor:
    """Tests for color handling."""

    def test_colorize(self) -> None:
        """Test text is wrapped in the color and reset codes."""
        assert colorize("hi", Color.RED) == f"{Color.RED}hi{Color.RESET}"

    def test_colorize_disabled(self) -> None:
        """Test disabled color returns plain text."""
        assert colorize("hi", Color.RED, enabled=False) == "hi"

    def test_non_tty_disables_color(self) -> None:
        """Test plain streams get no ANSI codes."""
        assert not color_enabled(io.StringIO())

    def test_tty_enables_color(self) -> None:
        """Test terminals get color unless switched off."""
        assert color_enabled(_TTY())
        assert not color_enabled(_TTY(), requested=False)

    def test_no_color_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test NO_COLOR wins over a terminal."""
        monkeypatch.setenv("NO_COLOR", "1")

        assert not color_enabled(_TTY())


class TestRollFormatting:
    """Tests for roll line rendering."""

    def _roll(self, natural: int, modifier: int, degree: DegreeOfSuccess | None) -> CharacterRoll:
        return CharacterRoll(
            character=Character(name="Amiri", player="Sam"),
            statistic=Statistic.PERCEPTION,
            outcome=RollOutcome(
                natural=natural,
                modifier=modifier,
                total=natural + modifier,
                target=15 if degree is not None else None,
                degree=degree,
            ),
        )

    def test_plain_line(self) -> None:
        """Test a roll without a DC has no icon."""
        line = format_roll(self._roll(12, 5, None), color=False)

        assert line == "Amiri (Sam)\t<12> + 5 = 17"

    def test_icon_prefix(self) -> None:
        """Test a roll against a DC starts with its degree icon."""
        line = format_roll(self._roll(12, 5, DegreeOfSuccess.SUCCESS), color=False)

        assert line.startswith(degree_icon(DegreeOfSuccess.SUCCESS) + " Amiri (Sam)")

    def test_label_prefix_without_icons(self) -> None:
        """Test degree labels replace icons when icons are off."""
        line = format_roll(self._roll(3, 0, DegreeOfSuccess.FAILURE), color=False, icons=False)

        assert line.startswith("[Failure] Amiri (Sam)")

    def test_negative_modifier(self) -> None:
        """Test negative modifiers render with a minus sign."""
        assert format_modifier(-2) == "- 2"
        assert format_modifier(0) == "+ 0"

    def test_natural_one_red(self) -> None:
        """Test a natural 1 is shown in red."""
        assert format_die(self._roll(1, 0, None).outcome) == colorize("<1>", Color.RED)

    def test_natural_twenty_yellow(self) -> None:
        """Test a natural 20 is shown in yellow."""
        assert format_die(self._roll(20, 0, None).outcome) == colorize("<20>", Color.YELLOW)

    def test_ordinary_die_unstyled(self) -> None:
        """Test other values are never styled."""
        assert format_die(self._roll(9, 0, None).outcome) == "<9>"

    def test_distinct_icons(self) -> None:
        """Test each degree has its own icon."""
        assert len({degree_icon(degree) for degree in DegreeOfSuccess}) == 4

    def test_target_header(self) -> None:
        """Test the DC header."""
        assert format_target(20, color=False) == "DC 20"

    def test_error_line(self) -> None:
        """Test the error line format."""
        assert format_error("roll will", "character not found", color=False) == (
            " !! Error running `roll will': character not found"
        )
