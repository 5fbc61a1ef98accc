"""Dice notation parser.

Grammar (case-insensitive, whitespace ignored)::

    [count]d<sides>[kh<N>|kl<N>][+|-modifier]

Examples: ``d20``, ``2d6+3``, ``1d20-2``, ``4d6kh3``, ``2d20kl1``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from arcane_engine.core.constants import (
    MAX_DICE_COUNT,
    MAX_DICE_SIDES,
    MIN_DICE_COUNT,
    MIN_DICE_SIDES,
)
from arcane_engine.core.exceptions import (
    InvalidDiceCountError,
    InvalidDiceSidesError,
    InvalidNotationError,
)


_NOTATION_PATTERN = re.compile(
    r"^(?P<count>\d*)d(?P<sides>\d+)(?:kh(?P<keep_highest>\d+)|kl(?P<keep_lowest>\d+))?(?P<modifier>[+-]\d+)?$"
)
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class ParsedDice:
    """A parsed dice notation.

    Attributes:
        count: Number of dice to roll.
        sides: Sides per die.
        modifier: Flat modifier added to the kept dice.
        keep_highest: Keep only this many of the highest dice.
        keep_lowest: Keep only this many of the lowest dice.
    """

    count: int
    sides: int
    modifier: int = 0
    keep_highest: int | None = None
    keep_lowest: int | None = None

    def with_count(self, count: int) -> ParsedDice:
        """Return a copy rolling ``count`` dice instead."""
        return ParsedDice(
            count=count,
            sides=self.sides,
            modifier=self.modifier,
            keep_highest=self.keep_highest,
            keep_lowest=self.keep_lowest,
        )


def parse_notation(notation: str) -> ParsedDice:
    """Parse a dice notation string.

    Args:
        notation: Dice expression (e.g., '2d6+3', '4d6kh3').

    Returns:
        ParsedDice describing the roll.

    Raises:
        InvalidNotationError: If the notation does not match the grammar.
        InvalidDiceCountError: If the count is outside 1..100.
        InvalidDiceSidesError: If the sides are outside 1..100.
    """
    normalized = _WHITESPACE.sub("", notation).lower()
    match = _NOTATION_PATTERN.match(normalized)
    if match is None:
        raise InvalidNotationError(f"Invalid dice notation: {notation}", expression=notation)

    count = int(match["count"]) if match["count"] else 1
    sides = int(match["sides"])
    modifier = int(match["modifier"]) if match["modifier"] else 0
    keep_highest = int(match["keep_highest"]) if match["keep_highest"] else None
    keep_lowest = int(match["keep_lowest"]) if match["keep_lowest"] else None

    if not MIN_DICE_COUNT <= count <= MAX_DICE_COUNT:
        raise InvalidDiceCountError(
            f"Invalid dice count: {count}",
            count=count,
            expression=notation,
        )
    if not MIN_DICE_SIDES <= sides <= MAX_DICE_SIDES:
        raise InvalidDiceSidesError(
            f"Invalid dice sides: {sides}",
            sides=sides,
            expression=notation,
        )

    return ParsedDice(
        count=count,
        sides=sides,
        modifier=modifier,
        keep_highest=keep_highest,
        keep_lowest=keep_lowest,
    )


__all__ = [
    "ParsedDice",
    "parse_notation",
]
