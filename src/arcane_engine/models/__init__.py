"""Pydantic V2 schemas for the rules engine.

This package contains the read-only snapshots the engine consumes
(characters and monster stat blocks) and the frozen Combat aggregate it
produces. All models use strict validation and forbid unknown fields.
"""

from __future__ import annotations

from arcane_engine.models.character import (
    AbilityScores,
    Character,
    DeathSaves,
    MonsterAction,
    MonsterSpeed,
    MonsterStatBlock,
    Proficiencies,
    calculate_modifier,
    calculate_proficiency_bonus,
)
from arcane_engine.models.combat import (
    Combat,
    Combatant,
    InitiativeScore,
    TurnResources,
    hp_percentage,
    hp_status,
    is_bloodied,
)
from arcane_engine.models.conditions import ActiveCondition, Duration
from arcane_engine.models.enums import (
    Ability,
    AdvantageStatus,
    CombatantStatus,
    CombatantType,
    CombatOutcome,
    Condition,
    DamageType,
    DurationType,
    HpStatus,
    RestType,
    Size,
    Skill,
)


__all__ = [
    # Enums
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
    # Conditions
    "Duration",
    "ActiveCondition",
    # Characters and monsters
    "calculate_modifier",
    "calculate_proficiency_bonus",
    "AbilityScores",
    "Proficiencies",
    "DeathSaves",
    "Character",
    "MonsterSpeed",
    "MonsterAction",
    "MonsterStatBlock",
    # Combat
    "is_bloodied",
    "hp_percentage",
    "hp_status",
    "TurnResources",
    "InitiativeScore",
    "Combatant",
    "Combat",
]
