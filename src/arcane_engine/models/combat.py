"""Pydantic V2 schemas for combat encounters.

This module defines the Combat aggregate and everything beneath it. All
models are frozen: the combat engine never edits a value in place, it
returns a new Combat built with ``model_copy(update=...)``. The caller owns
the value between operations.

Models validate in strict mode, so enum fields only accept enum members
from Python input. Persist a Combat with ``model_dump_json()`` and load it
with ``model_validate_json()``; a ``model_dump(mode="json")`` dict fed back
through ``model_validate()`` is rejected.
"""

from __future__ import annotations

from typing import Annotated
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator

from arcane_engine.core.constants import BLOODIED_THRESHOLD
from arcane_engine.models.conditions import ActiveCondition
from arcane_engine.models.enums import CombatantStatus, CombatantType, Condition, HpStatus


def is_bloodied(current_hp: int, max_hp: int) -> bool:
    """Check if a creature is bloodied (at or below half its max HP)."""
    return current_hp <= max_hp * BLOODIED_THRESHOLD


def hp_percentage(current_hp: int, max_hp: int) -> float:
    """Get HP as a percentage of max, clamped to 0..100."""
    if max_hp <= 0:
        return 0.0
    return max(0.0, min(100.0, current_hp / max_hp * 100))


def hp_status(current_hp: int, max_hp: int) -> HpStatus:
    """Get the display health band for a creature.

    Args:
        current_hp: Current hit points.
        max_hp: Maximum hit points.

    Returns:
        HIGH above 50%, MEDIUM above 25%, LOW otherwise.
    """
    percentage = hp_percentage(current_hp, max_hp)
    if percentage > 50:
        return HpStatus.HIGH
    if percentage > 25:
        return HpStatus.MEDIUM
    return HpStatus.LOW


class TurnResources(BaseModel):
    """Action economy of a combatant for the current turn.

    Attributes:
        has_action: Whether the action is available.
        has_bonus_action: Whether the bonus action is available.
        has_reaction: Whether the reaction is available.
        movement_remaining: Remaining movement in feet.
    """

    model_config = ConfigDict(frozen=True, strict=True, extra="forbid")

    has_action: bool = True
    has_bonus_action: bool = True
    has_reaction: bool = True
    movement_remaining: Annotated[int, Field(ge=0)] = 0

    @classmethod
    def full(cls, speed: int) -> TurnResources:
        """Fresh resources for the start of a turn."""
        return cls(movement_remaining=max(0, speed))


class InitiativeScore(BaseModel):
    """Initiative of a combatant, fixed at encounter start."""

    model_config = ConfigDict(frozen=True, strict=True, extra="forbid")

    roll: int = Field(description="Natural d20 roll")
    modifier: int = Field(default=0, description="Dexterity modifier")
    total: int = Field(description="roll + modifier")


class Combatant(BaseModel):
    """Per-encounter projection of a character or monster.

    Attributes:
        id: Unique combatant identifier within the encounter.
        name: Display name in combat.
        combatant_type: Side the combatant fights on.
        initiative: Initiative roll, modifier and total.
        current_hp: Current hit points.
        max_hp: Maximum hit points.
        temp_hp: Temporary hit points.
        armor_class: Current armor class.
        speed: Walking speed in feet.
        conditions: Active conditions, at most one per condition name.
        status: Participation status.
        turn_resources: Action economy for the current turn.
        source_id: Character id or monster stat block name.
        is_player: Whether a player controls this combatant.
        xp_value: XP awarded when this combatant is defeated.
    """

    model_config = ConfigDict(frozen=True, strict=True, extra="forbid")

    id: str = Field(min_length=1, description="Unique combatant ID")
    name: str = Field(min_length=1, max_length=100, description="Display name")
    combatant_type: CombatantType = Field(description="Combatant type")
    initiative: InitiativeScore = Field(description="Initiative")
    current_hp: Annotated[int, Field(ge=0, description="Current HP")]
    max_hp: Annotated[int, Field(ge=1, description="Maximum HP")]
    temp_hp: Annotated[int, Field(ge=0, description="Temporary HP")] = 0
    armor_class: Annotated[int, Field(ge=1, le=30, description="Armor class")]
    speed: Annotated[int, Field(ge=0, description="Walking speed")] = 30
    conditions: list[ActiveCondition] = Field(default_factory=list)
    status: CombatantStatus = CombatantStatus.ACTIVE
    turn_resources: TurnResources = Field(default_factory=TurnResources)
    source_id: str | None = Field(default=None, description="Source reference")
    is_player: bool = False
    xp_value: Annotated[int, Field(ge=0)] = 0

    @model_validator(mode="after")
    def validate_hp(self) -> "Combatant":
        """Ensure current HP does not exceed maximum HP.

        Returns:
            Self if validation passes.

        Raises:
            ValueError: If current_hp > max_hp.
        """
        if self.current_hp > self.max_hp:
            msg = f"current_hp ({self.current_hp}) cannot exceed max_hp ({self.max_hp})"
            raise ValueError(msg)
        return self

    @property
    def is_active(self) -> bool:
        """Whether the combatant still takes turns."""
        return self.status == CombatantStatus.ACTIVE

    @property
    def is_bloodied(self) -> bool:
        """Whether current HP is at or below half of max HP."""
        return is_bloodied(self.current_hp, self.max_hp)

    @property
    def hp_percentage(self) -> float:
        """Current HP as a percentage of max HP."""
        return hp_percentage(self.current_hp, self.max_hp)

    @property
    def hp_status(self) -> HpStatus:
        """Display health band."""
        return hp_status(self.current_hp, self.max_hp)

    def get_condition(self, name: Condition) -> ActiveCondition | None:
        """Find the active condition with the given name, if any."""
        for condition in self.conditions:
            if condition.name == name:
                return condition
        return None

    def has_condition(self, name: Condition) -> bool:
        """Check whether a condition with the given name is active."""
        return self.get_condition(name) is not None


class Combat(BaseModel):
    """State of a combat encounter.

    Attributes:
        id: Unique encounter identifier.
        round: Current round number, starting at 1.
        initiative_order: Combatants in turn order, fixed at encounter start.
        current_turn_index: Index of the combatant whose turn it is.
        surprised_combatant_ids: Combatants that cannot act in round 1.
        environmental_effects: Free-text battlefield effects.
        is_active: False once the encounter has ended.
    """

    model_config = ConfigDict(frozen=True, strict=True, extra="forbid")

    id: str = Field(default_factory=lambda: str(uuid4()), description="Encounter ID")
    round: Annotated[int, Field(ge=1, description="Current round")] = 1
    initiative_order: list[Combatant] = Field(default_factory=list)
    current_turn_index: Annotated[int, Field(ge=0, description="Current turn index")] = 0
    surprised_combatant_ids: list[str] = Field(default_factory=list)
    environmental_effects: list[str] = Field(default_factory=list)
    is_active: bool = True

    def index_of(self, combatant_id: str) -> int | None:
        """Get the initiative position of a combatant.

        Args:
            combatant_id: Combatant to find.

        Returns:
            Index in initiative_order, or None if absent.
        """
        for index, combatant in enumerate(self.initiative_order):
            if combatant.id == combatant_id:
                return index
        return None

    def with_combatant(self, index: int, combatant: Combatant) -> Combat:
        """Return a copy with the combatant at ``index`` replaced."""
        order = list(self.initiative_order)
        order[index] = combatant
        return self.model_copy(update={"initiative_order": order})


__all__ = [
    "is_bloodied",
    "hp_percentage",
    "hp_status",
    "TurnResources",
    "InitiativeScore",
    "Combatant",
    "Combat",
]
