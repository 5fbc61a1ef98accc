"""Character and monster snapshots consumed by the engine.

The surrounding application owns these records and validates them before
they reach the engine; the engine only reads them. Ability modifiers and
proficiency bonuses are derived here so the dice and combat layers share
one definition.

Strict validation applies here too: store snapshots with
``model_dump_json()`` and reload them with ``model_validate_json()``.
"""

from __future__ import annotations

import math
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, model_validator

from arcane_engine.core.constants import DEFAULT_SPEED
from arcane_engine.models.conditions import ActiveCondition
from arcane_engine.models.enums import Ability, Condition, DamageType, Size, Skill


# =============================================================================
# Validators and Type Definitions
# =============================================================================


def calculate_modifier(score: int) -> int:
    """Calculate the ability modifier from an ability score.

    The modifier is calculated as: (score - 10) // 2

    Args:
        score: The ability score (1-30).

    Returns:
        The ability modifier (-5 to +10).

    Example:
        >>> calculate_modifier(10)
        0
        >>> calculate_modifier(18)
        4
        >>> calculate_modifier(7)
        -2
    """
    return (score - 10) // 2


def calculate_proficiency_bonus(level: int) -> int:
    """Calculate the proficiency bonus for a character level.

    Args:
        level: Character level (1-20).

    Returns:
        ceil(level / 4) + 1, i.e. +2 at level 1 up to +6 at level 17.
    """
    return math.ceil(level / 4) + 1


AbilityScore = Annotated[int, Field(ge=1, le=30, description="Ability score (1-30)")]

CharacterLevel = Annotated[int, Field(ge=1, le=20, description="Character level (1-20)")]

ChallengeRating = Annotated[
    str,
    Field(
        pattern=r"^(0|1/8|1/4|1/2|[1-9]|1[0-9]|2[0-9]|30)$",
        description="Challenge rating (0, 1/8, 1/4, 1/2, or 1-30)",
    ),
]


# =============================================================================
# Ability Scores
# =============================================================================


class AbilityScores(BaseModel):
    """The six ability scores of a creature.

    Example:
        >>> scores = AbilityScores(strength=16, dexterity=14)
        >>> scores.get_modifier(Ability.DEX)
        2
    """

    model_config = ConfigDict(frozen=True, strict=True, extra="forbid")

    strength: AbilityScore = 10
    dexterity: AbilityScore = 10
    constitution: AbilityScore = 10
    intelligence: AbilityScore = 10
    wisdom: AbilityScore = 10
    charisma: AbilityScore = 10

    def get_score(self, ability: Ability) -> int:
        """Get the score for a specific ability.

        Args:
            ability: The ability to look up.

        Returns:
            The ability score value.
        """
        return getattr(self, ability.value)

    def get_modifier(self, ability: Ability) -> int:
        """Get the modifier for a specific ability.

        Args:
            ability: The ability to look up.

        Returns:
            The ability modifier.
        """
        return calculate_modifier(self.get_score(ability))

    @property
    def dexterity_modifier(self) -> int:
        """Dexterity modifier, used for initiative."""
        return calculate_modifier(self.dexterity)


# =============================================================================
# Player Characters
# =============================================================================


class Proficiencies(BaseModel):
    """Saving throw and skill training of a character.

    A skill listed in ``expertise`` receives double the proficiency bonus,
    whether or not it is also listed in ``skills``.
    """

    model_config = ConfigDict(frozen=True, strict=True, extra="forbid")

    saving_throws: list[Ability] = Field(default_factory=list)
    skills: list[Skill] = Field(default_factory=list)
    expertise: list[Skill] = Field(default_factory=list)


class DeathSaves(BaseModel):
    """Death saving throw counters."""

    model_config = ConfigDict(frozen=True, strict=True, extra="forbid")

    successes: Annotated[int, Field(ge=0, le=3)] = 0
    failures: Annotated[int, Field(ge=0, le=3)] = 0


class Character(BaseModel):
    """Read-only snapshot of a player character.

    Attributes:
        id: Stable character identifier.
        campaign_id: Owning campaign, if any.
        name: Display name.
        race: Character race.
        character_class: Class name.
        subclass: Subclass name, if chosen.
        level: Character level.
        ability_scores: The six ability scores.
        max_hp: Maximum hit points.
        current_hp: Current hit points.
        temp_hp: Temporary hit points.
        armor_class: Armor class.
        speed: Walking speed in feet.
        proficiencies: Saving throw and skill training.
        conditions: Conditions carried into the next encounter.
        death_saves: Death save counters.
    """

    model_config = ConfigDict(frozen=True, strict=True, extra="forbid")

    id: str = Field(min_length=1, description="Character ID")
    campaign_id: str | None = Field(default=None, description="Owning campaign")
    name: str = Field(min_length=1, max_length=100, description="Character name")
    race: str = Field(default="Human", max_length=50)
    character_class: str = Field(default="Fighter", max_length=50)
    subclass: str | None = Field(default=None, max_length=50)
    level: CharacterLevel = 1
    ability_scores: AbilityScores = Field(default_factory=AbilityScores)
    max_hp: Annotated[int, Field(ge=1, description="Maximum HP")]
    current_hp: Annotated[int, Field(ge=0, description="Current HP")]
    temp_hp: Annotated[int, Field(ge=0, description="Temporary HP")] = 0
    armor_class: Annotated[int, Field(ge=1, le=30, description="Armor class")] = 10
    speed: Annotated[int, Field(ge=0, description="Walking speed in feet")] = DEFAULT_SPEED
    proficiencies: Proficiencies = Field(default_factory=Proficiencies)
    conditions: list[ActiveCondition] = Field(default_factory=list)
    death_saves: DeathSaves = Field(default_factory=DeathSaves)

    @model_validator(mode="after")
    def validate_hp(self) -> "Character":
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
    def proficiency_bonus(self) -> int:
        """Proficiency bonus derived from level."""
        return calculate_proficiency_bonus(self.level)


# =============================================================================
# Monsters
# =============================================================================


class MonsterSpeed(BaseModel):
    """Movement speeds of a monster in feet."""

    model_config = ConfigDict(frozen=True, strict=True, extra="forbid")

    walk: Annotated[int, Field(ge=0)] = DEFAULT_SPEED
    fly: Annotated[int, Field(ge=0)] | None = None
    swim: Annotated[int, Field(ge=0)] | None = None
    burrow: Annotated[int, Field(ge=0)] | None = None
    climb: Annotated[int, Field(ge=0)] | None = None


class MonsterAction(BaseModel):
    """An action available to a monster.

    Attributes:
        name: Action name.
        description: Full action description.
        attack_bonus: Attack roll bonus (if attack).
        damage: Damage expression (e.g., "2d6+4").
        damage_type: Type of damage dealt.
        reach: Reach in feet.
        range: Range (e.g., "30/120").
    """

    model_config = ConfigDict(frozen=True, strict=True, extra="forbid")

    name: str = Field(min_length=1, max_length=100, description="Action name")
    description: str = Field(default="", max_length=2000, description="Full description")
    attack_bonus: int | None = Field(default=None, description="Attack roll bonus")
    damage: str | None = Field(default=None, description="Damage expression (e.g., '2d6+4')")
    damage_type: DamageType | None = Field(default=None, description="Damage type")
    reach: int | None = Field(default=None, description="Reach in feet")
    range: str | None = Field(default=None, description="Range (e.g., '30/120')")


class MonsterStatBlock(BaseModel):
    """Read-only monster stat block.

    Size, creature type and alignment are descriptive only; the engine
    reads armor class, hit points, speed, dexterity and XP.

    Example:
        >>> goblin = MonsterStatBlock(
        ...     name="Goblin",
        ...     armor_class=15,
        ...     hit_points=7,
        ...     ability_scores=AbilityScores(dexterity=14),
        ...     challenge_rating="1/4",
        ...     xp=50,
        ... )
    """

    model_config = ConfigDict(frozen=True, strict=True, extra="forbid")

    name: str = Field(min_length=1, max_length=100, description="Monster name")
    size: Size = Size.MEDIUM
    creature_type: str = Field(default="humanoid", max_length=50)
    alignment: str = Field(default="unaligned", max_length=50)
    armor_class: Annotated[int, Field(ge=1, le=30, description="Armor class")]
    hit_points: Annotated[int, Field(ge=1, description="Hit points")]
    hit_dice: str | None = Field(default=None, description="Hit dice (e.g., '2d8+2')")
    speed: MonsterSpeed = Field(default_factory=MonsterSpeed)
    ability_scores: AbilityScores = Field(default_factory=AbilityScores)
    damage_resistances: list[DamageType] = Field(default_factory=list)
    damage_immunities: list[DamageType] = Field(default_factory=list)
    damage_vulnerabilities: list[DamageType] = Field(default_factory=list)
    condition_immunities: list[Condition] = Field(default_factory=list)
    actions: list[MonsterAction] = Field(default_factory=list)
    challenge_rating: ChallengeRating = "0"
    xp: Annotated[int, Field(ge=0, description="XP awarded when defeated")] = 0


__all__ = [
    "calculate_modifier",
    "calculate_proficiency_bonus",
    "AbilityScore",
    "CharacterLevel",
    "ChallengeRating",
    "AbilityScores",
    "Proficiencies",
    "DeathSaves",
    "Character",
    "MonsterSpeed",
    "MonsterAction",
    "MonsterStatBlock",
]
