"""Rules constants for the Arcane rules engine.

This module defines the fixed numbers of the D&D 5E rules the engine
implements, together with the hard limits of the dice notation.
"""

from __future__ import annotations

# =============================================================================
# Dice Notation Limits
# =============================================================================

MIN_DICE_COUNT = 1
"""Smallest number of dice accepted in a single notation."""

MAX_DICE_COUNT = 100
"""Largest number of dice accepted in a single notation."""

MIN_DICE_SIDES = 1
"""Smallest die size accepted in a notation."""

MAX_DICE_SIDES = 100
"""Largest die size accepted in a notation."""

# =============================================================================
# D20 Thresholds
# =============================================================================

NATURAL_MAX = 20
"""A natural 20 always succeeds on checks, saves and attacks."""

NATURAL_MIN = 1
"""A natural 1 always fails on checks, saves and attacks."""

DEATH_SAVE_DC = 10
"""Death saving throw succeeds on 10 or higher."""

MAX_DEATH_SAVES = 3
"""Death save counters are clamped to 0..3 (3 successes = stable, 3 failures = dead)."""

DEFAULT_ENCOUNTER_DC = 18
"""Default d20 threshold for a random encounter check."""

# =============================================================================
# Ability Score Generation
# =============================================================================

ABILITY_SCORE_DICE = 4
"""Number of d6 rolled per ability score (the lowest is dropped)."""

ABILITY_SCORE_COUNT = 6
"""Number of scores in a full ability score set."""

# =============================================================================
# Combat Constants
# =============================================================================

DEFAULT_SPEED = 30
"""Default walking speed in feet (most medium creatures)."""

FLAT_XP_PER_ENEMY = 50
"""Flat XP per defeated enemy when XP is not taken from stat blocks."""

BLOODIED_THRESHOLD = 0.5
"""Fraction of max HP at or below which a combatant is bloodied."""


__all__ = [
    # Dice notation
    "MIN_DICE_COUNT",
    "MAX_DICE_COUNT",
    "MIN_DICE_SIDES",
    "MAX_DICE_SIDES",
    # D20
    "NATURAL_MAX",
    "NATURAL_MIN",
    "DEATH_SAVE_DC",
    "MAX_DEATH_SAVES",
    "DEFAULT_ENCOUNTER_DC",
    # Ability scores
    "ABILITY_SCORE_DICE",
    "ABILITY_SCORE_COUNT",
    # Combat
    "DEFAULT_SPEED",
    "FLAT_XP_PER_ENEMY",
    "BLOODIED_THRESHOLD",
]
