"""Integration tests for combat flow.

Tests complete combat scenarios from initiative to resolution.
"""

from __future__ import annotations

from collections.abc import Callable

from arcane_engine.engine.combat import CombatEngine
from arcane_engine.engine.dice import DiceRoller
from arcane_engine.engine.formatting import format_attack_result, format_damage_result
from arcane_engine.models.character import Character, MonsterStatBlock
from arcane_engine.models.combat import Combat
from arcane_engine.models.conditions import ActiveCondition, Duration
from arcane_engine.models.enums import (
    CombatantStatus,
    CombatOutcome,
    Condition,
    DamageType,
)


class TestCombatFlow:
    """Test complete combat scenarios."""

    def test_overwhelming_damage_ends_in_victory(
        self,
        sample_character: Character,
        sample_goblin: MonsterStatBlock,
    ) -> None:
        """One character against one monster, both with +2 dexterity."""
        engine = CombatEngine(DiceRoller(seed=2024))

        combat = engine.start_combat([sample_character], [sample_goblin])

        order = combat.initiative_order
        assert len(order) == 2
        assert order[0].initiative.total >= order[1].initiative.total
        assert order[0].initiative.modifier == order[1].initiative.modifier == 2
        if order[0].initiative.total == order[1].initiative.total:
            assert order[0].id == sample_character.id

        goblin_id = next(c.id for c in order if not c.is_player)
        result = engine.apply_damage(combat, goblin_id, 1000, DamageType.FORCE, "Disintegrate")

        goblin = engine.get_combatant(result.combat, goblin_id)
        assert goblin.current_hp == 0
        assert goblin.status == CombatantStatus.DEFEATED

        check = engine.check_combat_end(result.combat)
        assert check.should_end
        assert check.suggested_outcome == CombatOutcome.VICTORY

    def test_tied_initiative_keeps_input_order(
        self,
        scripted_roller: Callable[..., DiceRoller],
        sample_character: Character,
        sample_goblin: MonsterStatBlock,
    ) -> None:
        """Equal totals and modifiers keep characters ahead of monsters."""
        engine = CombatEngine(scripted_roller(11, 11))

        combat = engine.start_combat([sample_character], [sample_goblin])

        assert [c.id for c in combat.initiative_order] == [sample_character.id, "goblin_1"]

    def test_full_skirmish(
        self,
        scripted_roller: Callable[..., DiceRoller],
        sample_character: Character,
        sample_goblin: MonsterStatBlock,
    ) -> None:
        """Run a short fight: attacks, a downed hero, healing and victory."""
        # Initiative: hero 17, goblin 12
        roller = scripted_roller(15, 10)
        engine = CombatEngine(roller)
        combat = engine.start_combat([sample_character], [sample_goblin])
        hero_id, goblin_id = sample_character.id, "goblin_1"

        # Round 1: the hero swings and misses
        hero = engine.get_current_combatant(combat)
        attack = scripted_roller(3).roll_attack(
            hero.id, hero.name, goblin_id, "Goblin", 15, 5, "Longsword"
        )
        assert not attack.hits
        assert "❌ Miss!" in format_attack_result(attack)
        combat = engine.use_action(combat, hero_id)
        combat = engine.use_movement(combat, hero_id, 20)

        # The goblin drops the hero and stands over the body
        combat = engine.next_turn(combat)
        assert engine.get_current_combatant(combat).id == goblin_id
        downed = engine.apply_damage(combat, hero_id, 40, DamageType.SLASHING, "Scimitar")
        assert downed.was_downed
        combat = downed.combat
        assert engine.has_condition(combat, hero_id, Condition.UNCONSCIOUS)
        assert engine.check_combat_end(combat).suggested_outcome == CombatOutcome.DEFEAT

        # An ally's potion arrives between rounds
        healed = engine.apply_healing(combat, hero_id, 6, "Potion of Healing")
        assert healed.was_revived
        combat = healed.combat
        combat = engine.add_condition(
            combat,
            goblin_id,
            ActiveCondition(
                name=Condition.FRIGHTENED,
                source="Menacing Attack",
                duration=Duration.for_rounds(1),
            ),
        )

        # Round 2: resources refreshed, fear wears off at the end of round 1
        combat = engine.next_turn(combat)
        assert combat.round == 2
        hero = engine.get_current_combatant(combat)
        assert hero.id == hero_id
        assert hero.turn_resources.has_action
        assert hero.turn_resources.movement_remaining == 25
        assert not engine.has_condition(combat, goblin_id, Condition.FRIGHTENED)

        # The hero lands a critical hit
        damage = scripted_roller(8).roll_damage("1d8+3", DamageType.SLASHING, is_critical=True)
        assert damage.total_damage == 19
        assert format_damage_result(damage) == "⚔️ 19 slashing damage (CRITICAL)"
        finished = engine.apply_damage(
            combat, goblin_id, damage.total_damage, DamageType.SLASHING, "Longsword"
        )
        combat = finished.combat

        assert finished.actual_damage == 7
        check = engine.check_combat_end(combat)
        assert check.should_end
        assert check.suggested_outcome == CombatOutcome.VICTORY

        ended = engine.end_combat(combat, check.suggested_outcome)
        assert ended.xp_earned == 50
        assert ended.surviving_players == [hero_id]
        assert engine.get_combat_summary(ended.combat) == "Combat has ended."
        assert engine.next_turn(ended.combat) is ended.combat

    def test_state_survives_serialization_between_calls(
        self,
        scripted_roller: Callable[..., DiceRoller],
        sample_character: Character,
        sample_goblin: MonsterStatBlock,
    ) -> None:
        """A caller may persist the encounter between every operation."""
        engine = CombatEngine(scripted_roller(15, 10))
        combat = engine.start_combat([sample_character], [sample_goblin, sample_goblin])

        stored = combat.model_dump_json()
        combat = Combat.model_validate_json(stored)
        combat = engine.apply_damage(combat, "goblin_2", 3, DamageType.FIRE, "Fire Bolt").combat
        combat = Combat.model_validate_json(combat.model_dump_json())

        goblin = engine.get_combatant(combat, "goblin_2")
        assert goblin.name == "Goblin 2"
        assert goblin.current_hp == 4
        assert goblin.is_bloodied is False
