"""Tests for Pydantic V2 schemas."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from arcane_engine.models.character import (
    AbilityScores,
    Character,
    DeathSaves,
    MonsterStatBlock,
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
    CombatantType,
    Condition,
    DurationType,
    HpStatus,
    RestType,
    Skill,
)


def _combatant(**overrides: object) -> Combatant:
    values: dict[str, object] = {
        "id": "goblin_1",
        "name": "Goblin",
        "combatant_type": CombatantType.ENEMY,
        "initiative": InitiativeScore(roll=10, modifier=2, total=12),
        "current_hp": 7,
        "max_hp": 7,
        "armor_class": 15,
    }
    values.update(overrides)
    return Combatant(**values)


class TestAbilityMath:
    """Tests for modifier and proficiency helpers."""

    @pytest.mark.parametrize(
        ("score", "modifier"),
        [(1, -5), (7, -2), (8, -1), (9, -1), (10, 0), (11, 0), (18, 4), (30, 10)],
    )
    def test_modifier(self, score: int, modifier: int) -> None:
        """Test modifiers round down."""
        assert calculate_modifier(score) == modifier

    @pytest.mark.parametrize(
        ("level", "bonus"),
        [(1, 2), (4, 2), (5, 3), (8, 3), (9, 4), (13, 5), (17, 6), (20, 6)],
    )
    def test_proficiency_bonus(self, level: int, bonus: int) -> None:
        """Test proficiency bonus by level."""
        assert calculate_proficiency_bonus(level) == bonus


class TestEnums:
    """Tests for enum helpers."""

    def test_skill_abilities(self) -> None:
        """Test every skill has a governing ability."""
        assert Skill.ATHLETICS.ability == Ability.STR
        assert Skill.STEALTH.ability == Ability.DEX
        assert Skill.ARCANA.ability == Ability.INT
        assert Skill.INSIGHT.ability == Ability.WIS
        assert Skill.PERSUASION.ability == Ability.CHA
        assert all(isinstance(skill.ability, Ability) for skill in Skill)

    def test_ability_names(self) -> None:
        """Test ability display names."""
        assert Ability.CON.full_name == "Constitution"
        assert Ability.CON.abbreviation == "CON"


class TestAbilityScores:
    """Tests for AbilityScores."""

    def test_defaults(self) -> None:
        """Test every score defaults to 10."""
        scores = AbilityScores()

        assert all(scores.get_score(ability) == 10 for ability in Ability)

    def test_modifiers(self, sample_ability_scores: AbilityScores) -> None:
        """Test modifier lookup."""
        assert sample_ability_scores.get_modifier(Ability.STR) == 3
        assert sample_ability_scores.get_modifier(Ability.CHA) == -1
        assert sample_ability_scores.dexterity_modifier == 2

    @pytest.mark.parametrize("score", [0, 31])
    def test_range(self, score: int) -> None:
        """Test scores are limited to 1..30."""
        with pytest.raises(ValidationError):
            AbilityScores(strength=score)

    def test_strict_types(self) -> None:
        """Test strings are not coerced to scores."""
        with pytest.raises(ValidationError):
            AbilityScores(strength="16")


class TestCharacter:
    """Tests for the Character snapshot."""

    def test_proficiency_bonus(self, sample_character: Character) -> None:
        """Test the level-derived bonus."""
        assert sample_character.proficiency_bonus == 2

    def test_current_hp_above_max(self) -> None:
        """Test current HP cannot exceed max HP."""
        with pytest.raises(ValidationError, match="cannot exceed max_hp"):
            Character(id="c", name="Hero", max_hp=10, current_hp=11)

    def test_level_range(self) -> None:
        """Test level is limited to 1..20."""
        with pytest.raises(ValidationError):
            Character(id="c", name="Hero", level=21, max_hp=10, current_hp=10)

    def test_frozen(self, sample_character: Character) -> None:
        """Test snapshots are immutable."""
        with pytest.raises(ValidationError):
            sample_character.current_hp = 1

    def test_unknown_field_rejected(self) -> None:
        """Test unknown fields are rejected."""
        with pytest.raises(ValidationError):
            Character(id="c", name="Hero", max_hp=10, current_hp=10, mana=5)

    def test_death_saves_range(self) -> None:
        """Test death save counters stay within 0..3."""
        with pytest.raises(ValidationError):
            DeathSaves(failures=4)


class TestMonsterStatBlock:
    """Tests for monster stat blocks."""

    def test_sample(self, sample_goblin: MonsterStatBlock) -> None:
        """Test the sample goblin."""
        assert sample_goblin.ability_scores.dexterity_modifier == 2
        assert sample_goblin.actions[0].damage == "1d6+2"

    @pytest.mark.parametrize("rating", ["1/3", "31", "-1"])
    def test_invalid_challenge_rating(self, rating: str) -> None:
        """Test challenge ratings must be standard values."""
        with pytest.raises(ValidationError):
            MonsterStatBlock(name="Blob", armor_class=10, hit_points=5, challenge_rating=rating)


class TestDuration:
    """Tests for condition durations."""

    def test_for_rounds(self) -> None:
        """Test a round-counted duration."""
        duration = Duration.for_rounds(3)

        assert duration.type == DurationType.ROUNDS
        assert duration.value == 3
        assert duration.is_round_counted

    def test_rounds_require_value(self) -> None:
        """Test a rounds duration needs a count."""
        with pytest.raises(ValidationError, match="requires a value"):
            Duration(type=DurationType.ROUNDS)

    def test_open_ended(self) -> None:
        """Test open-ended durations."""
        save = Duration.until_save(dc=14, ability=Ability.WIS)
        rest = Duration.until_rest(RestType.LONG_REST)

        assert save.value == 14
        assert save.ability == Ability.WIS
        assert rest.rest_type == RestType.LONG_REST
        assert not Duration.until_dispelled().is_round_counted

    def test_negative_rounds_rejected(self) -> None:
        """Test round counts cannot be negative."""
        with pytest.raises(ValidationError):
            Duration.for_rounds(-1)


class TestCombatant:
    """Tests for the Combatant projection."""

    def test_hp_bounds(self) -> None:
        """Test HP invariants."""
        with pytest.raises(ValidationError):
            _combatant(current_hp=8)
        with pytest.raises(ValidationError):
            _combatant(current_hp=-1)
        with pytest.raises(ValidationError):
            _combatant(temp_hp=-1)

    def test_movement_not_negative(self) -> None:
        """Test movement cannot be negative."""
        with pytest.raises(ValidationError):
            TurnResources(movement_remaining=-5)

    def test_full_resources(self) -> None:
        """Test fresh turn resources."""
        resources = TurnResources.full(35)

        assert resources.has_action
        assert resources.has_bonus_action
        assert resources.has_reaction
        assert resources.movement_remaining == 35

    def test_health_properties(self) -> None:
        """Test bloodied and health band."""
        combatant = _combatant(current_hp=3)

        assert combatant.is_bloodied
        assert combatant.hp_status == HpStatus.MEDIUM
        assert combatant.hp_percentage == pytest.approx(42.857, rel=1e-3)
        assert combatant.is_active

    def test_conditions(self) -> None:
        """Test condition lookup by name."""
        prone = ActiveCondition(
            name=Condition.PRONE, source="Shove", duration=Duration.until_dispelled()
        )
        combatant = _combatant(conditions=[prone])

        assert combatant.get_condition(Condition.PRONE) == prone
        assert combatant.has_condition(Condition.PRONE)
        assert not combatant.has_condition(Condition.BLINDED)


class TestHealthHelpers:
    """Tests for module-level health helpers."""

    def test_is_bloodied(self) -> None:
        """Test the half-HP threshold."""
        assert is_bloodied(5, 10)
        assert not is_bloodied(6, 10)

    def test_hp_percentage_clamped(self) -> None:
        """Test percentage stays in range."""
        assert hp_percentage(15, 10) == 100.0
        assert hp_percentage(0, 0) == 0.0

    @pytest.mark.parametrize(
        ("current", "expected"),
        [(10, HpStatus.HIGH), (6, HpStatus.HIGH), (5, HpStatus.MEDIUM), (3, HpStatus.MEDIUM), (2, HpStatus.LOW)],
    )
    def test_hp_status(self, current: int, expected: HpStatus) -> None:
        """Test the health bands."""
        assert hp_status(current, 10) == expected


class TestCombat:
    """Tests for the Combat aggregate."""

    def test_defaults(self) -> None:
        """Test a new encounter."""
        combat = Combat()

        assert combat.round == 1
        assert combat.is_active
        assert combat.initiative_order == []
        assert combat.id

    def test_index_of(self) -> None:
        """Test lookup by id."""
        combat = Combat(initiative_order=[_combatant(), _combatant(id="goblin_2")])

        assert combat.index_of("goblin_2") == 1
        assert combat.index_of("nobody") is None

    def test_with_combatant_copies(self) -> None:
        """Test replacing a combatant leaves the original untouched."""
        combat = Combat(initiative_order=[_combatant()])

        updated = combat.with_combatant(0, _combatant(current_hp=1))

        assert updated.initiative_order[0].current_hp == 1
        assert combat.initiative_order[0].current_hp == 7

    def test_round_must_be_positive(self) -> None:
        """Test rounds start at 1."""
        with pytest.raises(ValidationError):
            Combat(round=0)

    def test_json_persistence(self) -> None:
        """Test an encounter with enums and conditions survives JSON storage."""
        poisoned = ActiveCondition(
            name=Condition.POISONED, source="Venom", duration=Duration.for_rounds(2)
        )
        combat = Combat(
            initiative_order=[_combatant(conditions=[poisoned])],
            environmental_effects=["Darkness"],
        )

        assert Combat.model_validate_json(combat.model_dump_json()) == combat

    def test_json_mode_dict_rejected_in_strict_mode(self) -> None:
        """Test a JSON-mode dict is not accepted back through model_validate."""
        combat = Combat(initiative_order=[_combatant()])

        with pytest.raises(ValidationError):
            Combat.model_validate(combat.model_dump(mode="json"))
