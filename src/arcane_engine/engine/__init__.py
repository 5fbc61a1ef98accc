"""Game engine: dice resolution and the combat state machine."""

from __future__ import annotations

from arcane_engine.engine.combat import (
    CombatEndCheck,
    CombatEndResult,
    CombatEngine,
    DamageApplication,
    HealingApplication,
    create_combatant_from_character,
    create_combatant_from_monster,
)
from arcane_engine.engine.dice import (
    AbilityCheckResult,
    AbilityScoreRoll,
    AbilityScoreSet,
    AdditionalDamageRoll,
    AttackRollResult,
    BasicRollResult,
    D20Roll,
    DamageRollResult,
    DamageSource,
    DeathSaveResult,
    DiceRoller,
    EncounterCheckResult,
    InitiativeRequest,
    InitiativeResult,
    SavingThrowResult,
    roll,
)
from arcane_engine.engine.formatting import (
    format_ability_check_result,
    format_attack_result,
    format_damage_result,
    format_death_save_result,
    format_roll_result,
    format_saving_throw_result,
)
from arcane_engine.engine.notation import ParsedDice, parse_notation
from arcane_engine.engine.random_source import (
    RandomSource,
    SeededRandomSource,
    SequenceRandomSource,
    SystemRandomSource,
    create_random_source,
)


__all__ = [
    # Randomness
    "RandomSource",
    "SystemRandomSource",
    "SeededRandomSource",
    "SequenceRandomSource",
    "create_random_source",
    # Notation
    "ParsedDice",
    "parse_notation",
    # Dice
    "DiceRoller",
    "roll",
    "BasicRollResult",
    "D20Roll",
    "AbilityCheckResult",
    "SavingThrowResult",
    "AttackRollResult",
    "DamageSource",
    "AdditionalDamageRoll",
    "DamageRollResult",
    "InitiativeRequest",
    "InitiativeResult",
    "DeathSaveResult",
    "AbilityScoreRoll",
    "AbilityScoreSet",
    "EncounterCheckResult",
    # Formatting
    "format_roll_result",
    "format_attack_result",
    "format_damage_result",
    "format_ability_check_result",
    "format_saving_throw_result",
    "format_death_save_result",
    # Combat
    "CombatEngine",
    "DamageApplication",
    "HealingApplication",
    "CombatEndCheck",
    "CombatEndResult",
    "create_combatant_from_character",
    "create_combatant_from_monster",
]
