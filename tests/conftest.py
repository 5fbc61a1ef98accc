"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the Arcane Engine test suite.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import pytest

from arcane_engine.engine.combat import CombatEngine
from arcane_engine.engine.dice import DiceRoller
from arcane_engine.engine.random_source import SequenceRandomSource
from arcane_engine.models.character import (
    AbilityScores,
    Character,
    MonsterAction,
    MonsterSpeed,
    MonsterStatBlock,
    Proficiencies,
)
from arcane_engine.models.enums import Ability, DamageType, Size, Skill


if TYPE_CHECKING:
    from collections.abc import Generator


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from arcane_engine.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "ARCANE_ENGINE_DEBUG": "true",
        "ARCANE_ENGINE_LOG_LEVEL": "DEBUG",
        "ARCANE_ENGINE_DICE_SOURCE": "seeded",
        "ARCANE_ENGINE_DICE_SEED": "1234",
        "ARCANE_ENGINE_GAME_XP_AWARD_MODE": "flat",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Dice Fixtures
# =============================================================================


@pytest.fixture
def dice_roller() -> DiceRoller:
    """Provide a seeded dice roller for reproducible tests."""
    return DiceRoller(seed=42)


@pytest.fixture
def scripted_roller() -> Callable[..., DiceRoller]:
    """Provide a factory for rollers that replay fixed die values.

    Example:
        >>> roller = scripted_roller(20, 1)
        >>> roller.roll_d20().roll
        20
    """

    def factory(*values: int) -> DiceRoller:
        return DiceRoller(SequenceRandomSource(values))

    return factory


@pytest.fixture
def scripted_engine(
    scripted_roller: Callable[..., DiceRoller],
) -> Callable[..., CombatEngine]:
    """Provide a factory for combat engines whose initiative is scripted."""

    def factory(*values: int) -> CombatEngine:
        return CombatEngine(scripted_roller(*values))

    return factory


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def sample_ability_scores() -> AbilityScores:
    """Provide sample character ability scores."""
    return AbilityScores(
        strength=16,
        dexterity=14,
        constitution=15,
        intelligence=10,
        wisdom=12,
        charisma=8,
    )


@pytest.fixture
def sample_character(sample_ability_scores: AbilityScores) -> Character:
    """Provide a level 3 fighter with athletics and a stealth expertise."""
    return Character(
        id="char_thorin",
        name="Thorin",
        race="Dwarf",
        character_class="Fighter",
        level=3,
        ability_scores=sample_ability_scores,
        max_hp=28,
        current_hp=28,
        armor_class=16,
        speed=25,
        proficiencies=Proficiencies(
            saving_throws=[Ability.STR, Ability.CON],
            skills=[Skill.ATHLETICS, Skill.PERCEPTION],
            expertise=[Skill.STEALTH],
        ),
    )


@pytest.fixture
def sample_goblin() -> MonsterStatBlock:
    """Provide a goblin stat block."""
    return MonsterStatBlock(
        name="Goblin",
        size=Size.SMALL,
        creature_type="humanoid",
        alignment="neutral evil",
        armor_class=15,
        hit_points=7,
        hit_dice="2d6",
        speed=MonsterSpeed(walk=30),
        ability_scores=AbilityScores(strength=8, dexterity=14, constitution=10, charisma=8),
        actions=[
            MonsterAction(
                name="Scimitar",
                attack_bonus=4,
                damage="1d6+2",
                damage_type=DamageType.SLASHING,
                reach=5,
            ),
        ],
        challenge_rating="1/4",
        xp=50,
    )


@pytest.fixture
def sample_wolf() -> MonsterStatBlock:
    """Provide a wolf stat block."""
    return MonsterStatBlock(
        name="Dire Wolf",
        size=Size.LARGE,
        creature_type="beast",
        armor_class=14,
        hit_points=37,
        speed=MonsterSpeed(walk=50),
        ability_scores=AbilityScores(strength=17, dexterity=15, constitution=15),
        challenge_rating="1",
        xp=200,
    )
