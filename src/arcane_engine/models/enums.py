"""Enumeration types for the Arcane rules engine.

This module defines the closed vocabularies the engine dispatches on:
abilities, skills, conditions, damage types, combatant tags and the
duration kinds of active conditions.
"""

from __future__ import annotations

from enum import StrEnum


class Ability(StrEnum):
    """D&D 5E ability scores."""

    STR = "strength"
    DEX = "dexterity"
    CON = "constitution"
    INT = "intelligence"
    WIS = "wisdom"
    CHA = "charisma"

    @property
    def full_name(self) -> str:
        """Get the full name of the ability.

        Returns:
            Full ability name (e.g., 'Strength' for STR).
        """
        return self.value.capitalize()

    @property
    def abbreviation(self) -> str:
        """Get the three-letter abbreviation.

        Returns:
            Three-letter abbreviation (e.g., 'STR').
        """
        return self.name


class Skill(StrEnum):
    """D&D 5E skills and their governing abilities."""

    # Strength skills
    ATHLETICS = "athletics"

    # Dexterity skills
    ACROBATICS = "acrobatics"
    SLEIGHT_OF_HAND = "sleight_of_hand"
    STEALTH = "stealth"

    # Intelligence skills
    ARCANA = "arcana"
    HISTORY = "history"
    INVESTIGATION = "investigation"
    NATURE = "nature"
    RELIGION = "religion"

    # Wisdom skills
    ANIMAL_HANDLING = "animal_handling"
    INSIGHT = "insight"
    MEDICINE = "medicine"
    PERCEPTION = "perception"
    SURVIVAL = "survival"

    # Charisma skills
    DECEPTION = "deception"
    INTIMIDATION = "intimidation"
    PERFORMANCE = "performance"
    PERSUASION = "persuasion"

    @property
    def ability(self) -> Ability:
        """Get the governing ability for this skill.

        Returns:
            The Ability enum value associated with this skill.
        """
        return _SKILL_ABILITIES[self]

    @property
    def display_name(self) -> str:
        """Get human-readable skill name.

        Returns:
            Formatted skill name (e.g., 'Sleight Of Hand').
        """
        return self.value.replace("_", " ").title()


_SKILL_ABILITIES: dict[Skill, Ability] = {
    Skill.ATHLETICS: Ability.STR,
    Skill.ACROBATICS: Ability.DEX,
    Skill.SLEIGHT_OF_HAND: Ability.DEX,
    Skill.STEALTH: Ability.DEX,
    Skill.ARCANA: Ability.INT,
    Skill.HISTORY: Ability.INT,
    Skill.INVESTIGATION: Ability.INT,
    Skill.NATURE: Ability.INT,
    Skill.RELIGION: Ability.INT,
    Skill.ANIMAL_HANDLING: Ability.WIS,
    Skill.INSIGHT: Ability.WIS,
    Skill.MEDICINE: Ability.WIS,
    Skill.PERCEPTION: Ability.WIS,
    Skill.SURVIVAL: Ability.WIS,
    Skill.DECEPTION: Ability.CHA,
    Skill.INTIMIDATION: Ability.CHA,
    Skill.PERFORMANCE: Ability.CHA,
    Skill.PERSUASION: Ability.CHA,
}


class Condition(StrEnum):
    """Conditions that can affect a combatant."""

    BLINDED = "blinded"
    CHARMED = "charmed"
    DEAFENED = "deafened"
    EXHAUSTION = "exhaustion"
    FRIGHTENED = "frightened"
    GRAPPLED = "grappled"
    INCAPACITATED = "incapacitated"
    INVISIBLE = "invisible"
    PARALYZED = "paralyzed"
    PETRIFIED = "petrified"
    POISONED = "poisoned"
    PRONE = "prone"
    RESTRAINED = "restrained"
    STUNNED = "stunned"
    UNCONSCIOUS = "unconscious"
    CONCENTRATING = "concentrating"


class DamageType(StrEnum):
    """D&D 5E damage types."""

    ACID = "acid"
    BLUDGEONING = "bludgeoning"
    COLD = "cold"
    FIRE = "fire"
    FORCE = "force"
    LIGHTNING = "lightning"
    NECROTIC = "necrotic"
    PIERCING = "piercing"
    POISON = "poison"
    PSYCHIC = "psychic"
    RADIANT = "radiant"
    SLASHING = "slashing"
    THUNDER = "thunder"


class Size(StrEnum):
    """D&D 5E creature sizes."""

    TINY = "tiny"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    HUGE = "huge"
    GARGANTUAN = "gargantuan"


class RestType(StrEnum):
    """Types of rest in D&D 5E."""

    SHORT_REST = "short_rest"
    LONG_REST = "long_rest"


class AdvantageStatus(StrEnum):
    """How many d20s a roll uses and which one is kept."""

    NORMAL = "normal"
    ADVANTAGE = "advantage"
    DISADVANTAGE = "disadvantage"


class DurationType(StrEnum):
    """How long an active condition lasts.

    Only ROUNDS is counted down at the end of each round; the other
    kinds are open-ended and removed explicitly by the caller.
    """

    ROUNDS = "rounds"
    UNTIL_SAVE = "until_save"
    UNTIL_DISPELLED = "until_dispelled"
    UNTIL_REST = "until_rest"


class CombatantType(StrEnum):
    """Which side of the encounter a combatant fights on."""

    PLAYER_CHARACTER = "player_character"
    ENEMY = "enemy"
    ALLY = "ally"
    NEUTRAL = "neutral"


class CombatantStatus(StrEnum):
    """Participation status of a combatant; exactly one holds at a time."""

    ACTIVE = "active"
    DEFEATED = "defeated"
    FLED = "fled"


class CombatOutcome(StrEnum):
    """How an encounter ended."""

    VICTORY = "victory"
    DEFEAT = "defeat"
    FLED = "fled"
    NEGOTIATED = "negotiated"


class HpStatus(StrEnum):
    """Coarse health band used for display."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


__all__ = [
    "Ability",
    "Skill",
    "Condition",
    "DamageType",
    "Size",
    "RestType",
    "AdvantageStatus",
    "DurationType",
    "CombatantType",
    "CombatantStatus",
    "CombatOutcome",
    "HpStatus",
]
