"""Arcane Engine - D&D 5E rules engine.

Resolves dice and runs combat encounters for a surrounding game
application. The engine holds no encounter state: callers pass the
current Combat value in and get a new one back.

Example:
    >>> from arcane_engine import CombatEngine, DiceRoller
    >>>
    >>> engine = CombatEngine(DiceRoller(seed=42))
    >>> combat = engine.start_combat([hero], [goblin])
    >>> result = engine.apply_damage(combat, "goblin_1", 7, DamageType.SLASHING, "Longsword")
    >>> engine.check_combat_end(result.combat).suggested_outcome
    <CombatOutcome.VICTORY: 'victory'>

Modules:
    core: Configuration, logging, and base exceptions.
    models: Pydantic V2 schemas for characters, monsters and combat.
    engine: Dice resolution and the combat state machine.
"""

from __future__ import annotations

# Core
from arcane_engine.core.config import Settings, get_settings
from arcane_engine.core.exceptions import ArcaneEngineError
from arcane_engine.core.logging import (
    configure_logging,
    configure_logging_from_settings,
    get_logger,
)

# Engine
from arcane_engine.engine.combat import CombatEngine
from arcane_engine.engine.dice import DiceRoller, roll

# Models
from arcane_engine.models.character import Character, MonsterStatBlock
from arcane_engine.models.combat import Combat, Combatant


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "ArcaneEngineError",
    "Settings",
    "get_settings",
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
    # Engine
    "CombatEngine",
    "DiceRoller",
    "roll",
    # Models
    "Character",
    "MonsterStatBlock",
    "Combat",
    "Combatant",
]
