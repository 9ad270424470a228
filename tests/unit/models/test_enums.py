"""Tests for enumeration types."""

from __future__ import annotations

import pytest

from p2roll.core.exceptions import ValidationError
from p2roll.models.enums import DegreeOfSuccess, ProficiencyRank, Statistic


class TestProficiencyRank:
    """Tests for ProficiencyRank."""

    @pytest.mark.parametrize(
        ("rank", "offset"),
        [
            (ProficiencyRank.UNTRAINED, 0),
            (ProficiencyRank.TRAINED, 2),
            (ProficiencyRank.EXPERT, 4),
            (ProficiencyRank.MASTER, 6),
            (ProficiencyRank.LEGENDARY, 8),
        ],
    )
    def test_offsets(self, rank: ProficiencyRank, offset: int) -> None:
        """Test each rank's fixed offset."""
        assert rank.offset == offset

    def test_untrained_ignores_level(self) -> None:
        """Test untrained adds nothing at any level."""
        assert all(ProficiencyRank.UNTRAINED.bonus(level) == 0 for level in range(0, 21))

    def test_trained_ranks_add_level(self) -> None:
        """Test trained and above add level plus offset."""
        assert ProficiencyRank.TRAINED.bonus(1) == 3
        assert ProficiencyRank.LEGENDARY.bonus(20) == 28

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("U", ProficiencyRank.UNTRAINED),
            ("t", ProficiencyRank.TRAINED),
            ("Expert", ProficiencyRank.EXPERT),
            (" master ", ProficiencyRank.MASTER),
            (8, ProficiencyRank.LEGENDARY),
            (0, ProficiencyRank.UNTRAINED),
            (ProficiencyRank.TRAINED, ProficiencyRank.TRAINED),
        ],
    )
    def test_parse(self, raw: object, expected: ProficiencyRank) -> None:
        """Test the accepted spellings of a rank."""
        assert ProficiencyRank.parse(raw) is expected

    def test_parse_legacy_unknown_marker(self) -> None:
        """Test the unknown marker from older edits reads as untrained."""
        assert ProficiencyRank.parse(-100) is ProficiencyRank.UNTRAINED

    @pytest.mark.parametrize("raw", ["X", "", 3, -2, True, None])
    def test_parse_rejects_unknown(self, raw: object) -> None:
        """Test that anything else is a validation error."""
        with pytest.raises(ValidationError):
            ProficiencyRank.parse(raw)

    def test_abbreviation(self) -> None:
        """Test single-letter abbreviations."""
        assert [rank.abbreviation for rank in ProficiencyRank] == ["U", "T", "E", "M", "L"]


class TestStatistic:
    """Tests for Statistic."""

    def test_all_statistics_present(self) -> None:
        """Test the rollable statistics."""
        assert {stat.value for stat in Statistic} == {
            "perception",
            "stealth",
            "reflex",
            "fortitude",
            "will",
            "identify",
            "arcana",
            "nature",
            "occultism",
            "religion",
            "flat",
        }

    def test_every_statistic_has_help(self) -> None:
        """Test each statistic has a description."""
        assert all(stat.description for stat in Statistic)


class TestDegreeOfSuccess:
    """Tests for DegreeOfSuccess."""

    def test_ordering(self) -> None:
        """Test degrees are ordered worst to best."""
        assert (
            DegreeOfSuccess.CRITICAL_FAILURE
            < DegreeOfSuccess.FAILURE
            < DegreeOfSuccess.SUCCESS
            < DegreeOfSuccess.CRITICAL_SUCCESS
        )

    def test_shift_moves_one_step(self) -> None:
        """Test shifting by one degree."""
        assert DegreeOfSuccess.SUCCESS.shift(-1) is DegreeOfSuccess.FAILURE
        assert DegreeOfSuccess.FAILURE.shift(1) is DegreeOfSuccess.SUCCESS

    def test_shift_clamps(self) -> None:
        """Test shifting never passes the ends of the scale."""
        assert DegreeOfSuccess.CRITICAL_FAILURE.shift(-1) is DegreeOfSuccess.CRITICAL_FAILURE
        assert DegreeOfSuccess.CRITICAL_SUCCESS.shift(1) is DegreeOfSuccess.CRITICAL_SUCCESS

    def test_label(self) -> None:
        """Test human-readable labels."""
        assert DegreeOfSuccess.CRITICAL_SUCCESS.label == "Critical Success"
