"""Active condition models.

An ActiveCondition pairs a Condition with its provenance and a Duration.
Duration is a tagged union over DurationType: a round count that the
engine decrements at the end of every round, or one of the open-ended
kinds that only the caller removes.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, model_validator

from arcane_engine.models.enums import Ability, Condition, DurationType, RestType


class Duration(BaseModel):
    """How long an active condition lasts.

    Attributes:
        type: Duration kind.
        value: Rounds remaining for ROUNDS, the save DC for UNTIL_SAVE.
        ability: Ability used for the ending save (UNTIL_SAVE only).
        rest_type: Rest that ends the condition (UNTIL_REST only).

    Example:
        >>> Duration.for_rounds(3).value
        3
    """

    model_config = ConfigDict(frozen=True, strict=True, extra="forbid")

    type: DurationType = Field(description="Duration kind")
    value: Annotated[int, Field(ge=0)] | None = Field(
        default=None,
        description="Rounds remaining, or save DC",
    )
    ability: Ability | None = Field(default=None, description="Saving throw ability")
    rest_type: RestType | None = Field(default=None, description="Rest that ends it")

    @model_validator(mode="after")
    def validate_rounds_value(self) -> "Duration":
        """Ensure round-counted durations carry a round count.

        Returns:
            Self if validation passes.

        Raises:
            ValueError: If a ROUNDS duration has no value.
        """
        if self.type == DurationType.ROUNDS and self.value is None:
            msg = "A rounds duration requires a value"
            raise ValueError(msg)
        return self

    @property
    def is_round_counted(self) -> bool:
        """Whether the end-of-round tick applies to this duration."""
        return self.type == DurationType.ROUNDS

    @classmethod
    def for_rounds(cls, rounds: int) -> Duration:
        """Build a duration that expires after ``rounds`` end-of-round ticks."""
        return cls(type=DurationType.ROUNDS, value=rounds)

    @classmethod
    def until_save(cls, dc: int | None = None, ability: Ability | None = None) -> Duration:
        """Build a duration that lasts until a successful saving throw."""
        return cls(type=DurationType.UNTIL_SAVE, value=dc, ability=ability)

    @classmethod
    def until_dispelled(cls) -> Duration:
        """Build a duration that lasts until explicitly removed."""
        return cls(type=DurationType.UNTIL_DISPELLED)

    @classmethod
    def until_rest(cls, rest_type: RestType | None = None) -> Duration:
        """Build a duration that lasts until the next rest."""
        return cls(type=DurationType.UNTIL_REST, rest_type=rest_type)


class ActiveCondition(BaseModel):
    """A condition currently applied to a creature.

    Attributes:
        name: The condition.
        source: Free-text provenance (spell, monster, "damage", ...).
        duration: How long it lasts.
    """

    model_config = ConfigDict(frozen=True, strict=True, extra="forbid")

    name: Condition = Field(description="Condition applied")
    source: str = Field(default="", max_length=200, description="Where it came from")
    duration: Duration = Field(description="How long it lasts")


__all__ = [
    "Duration",
    "ActiveCondition",
]
