"""Tests for the dice notation parser."""

from __future__ import annotations

import pytest

from arcane_engine.core.exceptions import (
    DiceRollError,
    InvalidDiceCountError,
    InvalidDiceSidesError,
    InvalidNotationError,
)
from arcane_engine.engine.notation import ParsedDice, parse_notation


class TestParseNotation:
    """Tests for parse_notation."""

    @pytest.mark.parametrize(
        ("notation", "expected"),
        [
            ("d20", ParsedDice(count=1, sides=20)),
            ("1d20", ParsedDice(count=1, sides=20)),
            ("2d6+3", ParsedDice(count=2, sides=6, modifier=3)),
            ("1d20-2", ParsedDice(count=1, sides=20, modifier=-2)),
            ("4d6kh3", ParsedDice(count=4, sides=6, keep_highest=3)),
            ("2d20kl1", ParsedDice(count=2, sides=20, keep_lowest=1)),
            ("4d6kh3+1", ParsedDice(count=4, sides=6, modifier=1, keep_highest=3)),
            ("100d100", ParsedDice(count=100, sides=100)),
        ],
    )
    def test_valid_notation(self, notation: str, expected: ParsedDice) -> None:
        """Test valid notation parses to the expected roll."""
        assert parse_notation(notation) == expected

    def test_case_and_whitespace_insensitive(self) -> None:
        """Test case and whitespace are ignored."""
        assert parse_notation(" 2D6 + 3 ") == ParsedDice(count=2, sides=6, modifier=3)
        assert parse_notation("4D6KH3") == ParsedDice(count=4, sides=6, keep_highest=3)

    @pytest.mark.parametrize("notation", ["", "   ", "invalid", "2x6", "d", "2d6kh", "1d20+", "2d6kh3kl1"])
    def test_invalid_notation(self, notation: str) -> None:
        """Test strings outside the grammar are rejected."""
        with pytest.raises(InvalidNotationError):
            parse_notation(notation)

    @pytest.mark.parametrize("notation", ["0d6", "101d6"])
    def test_invalid_count(self, notation: str) -> None:
        """Test die counts outside 1..100 are rejected."""
        with pytest.raises(InvalidDiceCountError):
            parse_notation(notation)

    @pytest.mark.parametrize("notation", ["1d0", "1d101"])
    def test_invalid_sides(self, notation: str) -> None:
        """Test die sizes outside 1..100 are rejected."""
        with pytest.raises(InvalidDiceSidesError):
            parse_notation(notation)

    def test_errors_are_dice_roll_errors(self) -> None:
        """Test callers can catch every parse failure as DiceRollError."""
        with pytest.raises(DiceRollError) as exc_info:
            parse_notation("0d6")

        assert exc_info.value.details["count"] == 0
        assert exc_info.value.details["expression"] == "0d6"


class TestParsedDice:
    """Tests for the ParsedDice value."""

    def test_with_count(self) -> None:
        """Test only the count changes."""
        parsed = ParsedDice(count=2, sides=6, modifier=3, keep_highest=1)

        doubled = parsed.with_count(4)

        assert doubled == ParsedDice(count=4, sides=6, modifier=3, keep_highest=1)
        assert parsed.count == 2
