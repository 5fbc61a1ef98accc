"""Combat state machine.

The CombatEngine owns no encounter state. Every operation takes the
current Combat value and returns a new one (plus any facts about what
happened), so the caller decides where the encounter lives between calls.

Unknown combatant ids raise CombatantNotFoundError for damage, healing
and condition changes, but are silently ignored by the turn resource
operations, temporary HP and fleeing. Those calls typically arrive from
a UI after the combatant has already left the fight.
"""

from __future__ import annotations

import functools
import re
from collections import Counter
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any, TypeVar

from arcane_engine.core.config import Settings, get_settings
from arcane_engine.core.exceptions import CombatantNotFoundError, CombatError
from arcane_engine.core.logging import combat_context, get_logger
from arcane_engine.engine.dice import DiceRoller, InitiativeRequest, InitiativeResult
from arcane_engine.models.character import Character, MonsterStatBlock
from arcane_engine.models.combat import Combat, Combatant, InitiativeScore, TurnResources
from arcane_engine.models.conditions import ActiveCondition, Duration
from arcane_engine.models.enums import (
    CombatantStatus,
    CombatantType,
    CombatOutcome,
    Condition,
    DamageType,
)


logger = get_logger(__name__)

SUMMARY_RULE = "═" * 47
_WHITESPACE = re.compile(r"\s+")

_T = TypeVar("_T")


# =============================================================================
# Operation Results
# =============================================================================


@dataclass(frozen=True)
class DamageApplication:
    """Result of applying damage to a combatant.

    Attributes:
        combat: The updated encounter.
        actual_damage: HP removed across temp and current HP.
        was_knocked_out: Whether HP went from above 0 to exactly 0.
        was_downed: Knocked out and controlled by a player.
    """

    combat: Combat
    actual_damage: int
    was_knocked_out: bool
    was_downed: bool


@dataclass(frozen=True)
class HealingApplication:
    """Result of healing a combatant.

    Attributes:
        combat: The updated encounter.
        actual_healing: HP actually regained.
        was_revived: Whether the target went from 0 HP to above 0.
    """

    combat: Combat
    actual_healing: int
    was_revived: bool


@dataclass(frozen=True)
class CombatEndCheck:
    """Advisory result of checking whether combat should end."""

    should_end: bool
    suggested_outcome: CombatOutcome | None = None


@dataclass(frozen=True)
class CombatEndResult:
    """Result of ending an encounter.

    Attributes:
        combat: The encounter, now inactive.
        outcome: How the encounter ended.
        xp_earned: XP awarded for defeated enemies.
        surviving_players: Ids of player combatants still active.
    """

    combat: Combat
    outcome: CombatOutcome
    xp_earned: int
    surviving_players: list[str] = field(default_factory=list)


# =============================================================================
# Combatant Factories
# =============================================================================


def _slugify(name: str) -> str:
    return _WHITESPACE.sub("_", name.lower())


def _unconscious_from_damage() -> ActiveCondition:
    return ActiveCondition(
        name=Condition.UNCONSCIOUS,
        source="damage",
        duration=Duration.until_dispelled(),
    )


def _initiative_score(initiative: InitiativeResult) -> InitiativeScore:
    return InitiativeScore(
        roll=initiative.roll,
        modifier=initiative.modifier,
        total=initiative.total,
    )


def create_combatant_from_character(
    character: Character,
    initiative: InitiativeResult,
) -> Combatant:
    """Project a player character into an encounter.

    A character entering at 0 HP stays active but is unconscious.

    Args:
        character: Character snapshot.
        initiative: The character's initiative roll.

    Returns:
        A player-controlled Combatant.
    """
    conditions = list(character.conditions)
    if character.current_hp == 0 and not any(
        c.name == Condition.UNCONSCIOUS for c in conditions
    ):
        conditions.append(_unconscious_from_damage())

    return Combatant(
        id=character.id,
        name=character.name,
        combatant_type=CombatantType.PLAYER_CHARACTER,
        initiative=_initiative_score(initiative),
        current_hp=character.current_hp,
        max_hp=character.max_hp,
        temp_hp=character.temp_hp,
        armor_class=character.armor_class,
        speed=character.speed,
        conditions=conditions,
        status=CombatantStatus.ACTIVE,
        turn_resources=TurnResources.full(character.speed),
        source_id=character.id,
        is_player=True,
    )


def create_combatant_from_monster(
    monster: MonsterStatBlock,
    initiative: InitiativeResult,
    combatant_type: CombatantType = CombatantType.ENEMY,
    *,
    combatant_id: str | None = None,
    name: str | None = None,
) -> Combatant:
    """Project a monster stat block into an encounter.

    Args:
        monster: Monster stat block.
        initiative: The monster's initiative roll.
        combatant_type: Side the monster fights on.
        combatant_id: Instance id; defaults to the slugged monster name.
        name: Display name; defaults to the monster name.

    Returns:
        A non-player Combatant at full hit points.
    """
    return Combatant(
        id=combatant_id or _slugify(monster.name),
        name=name or monster.name,
        combatant_type=combatant_type,
        initiative=_initiative_score(initiative),
        current_hp=monster.hit_points,
        max_hp=monster.hit_points,
        armor_class=monster.armor_class,
        speed=monster.speed.walk,
        turn_resources=TurnResources.full(monster.speed.walk),
        source_id=monster.name,
        is_player=False,
        xp_value=monster.xp,
    )


@dataclass(frozen=True)
class _Participant:
    """A participant waiting for initiative."""

    request: InitiativeRequest
    combatant_type: CombatantType
    character: Character | None = None
    monster: MonsterStatBlock | None = None


def _check_unique_ids(participants: Sequence[_Participant]) -> None:
    seen: set[str] = set()
    for participant in participants:
        combatant_id = participant.request.combatant_id
        if combatant_id in seen:
            raise CombatError(
                f"Duplicate combatant id: {combatant_id}",
                combatant_id=combatant_id,
                details={"combatant_name": participant.request.combatant_name},
            )
        seen.add(combatant_id)


def _logged_in_combat(method: Callable[..., _T]) -> Callable[..., _T]:
    """Tag every event logged by ``method`` with the encounter id and round."""

    @functools.wraps(method)
    def wrapper(self: CombatEngine, combat: Combat, *args: Any, **kwargs: Any) -> _T:
        with combat_context(combat.id, round=combat.round):
            return method(self, combat, *args, **kwargs)

    return wrapper


# =============================================================================
# Combat Engine
# =============================================================================


class CombatEngine:
    """Rules for running a combat encounter.

    The engine holds only its dice roller and game settings; Combat
    values pass through it untouched and come back as new values.

    Example:
        >>> engine = CombatEngine(DiceRoller(seed=3))
        >>> combat = engine.start_combat([hero], [goblin])
        >>> combat = engine.next_turn(combat)
    """

    def __init__(
        self,
        dice_roller: DiceRoller | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the combat engine.

        Args:
            dice_roller: Roller used for initiative. Built from the
                settings when omitted.
            settings: Engine settings; the cached settings when omitted.
        """
        self._settings = settings or get_settings()
        self._dice = dice_roller or DiceRoller.from_settings(self._settings)

    @property
    def dice_roller(self) -> DiceRoller:
        """The roller used for initiative."""
        return self._dice

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start_combat(
        self,
        characters: Sequence[Character],
        monsters: Sequence[MonsterStatBlock],
        *,
        ally_monsters: Sequence[MonsterStatBlock] = (),
        surprised_ids: Iterable[str] = (),
    ) -> Combat:
        """Start a new encounter and roll initiative for everyone.

        Enemies sharing a name are numbered by their position in
        ``monsters`` ("Goblin 1", "Goblin 2"); allies are tagged "(Ally)".

        Args:
            characters: Player characters joining the fight.
            monsters: Enemy stat blocks, one per instance.
            ally_monsters: Monsters fighting alongside the party.
            surprised_ids: Combatants that cannot act in round 1.

        Returns:
            A new active Combat in initiative order at round 1.

        Raises:
            CombatError: If two participants share a combatant id, such as
                a character whose id matches a generated monster id.
        """
        participants: list[_Participant] = []

        for character in characters:
            participants.append(
                _Participant(
                    request=InitiativeRequest(
                        combatant_id=character.id,
                        combatant_name=character.name,
                        dexterity_modifier=character.ability_scores.dexterity_modifier,
                    ),
                    combatant_type=CombatantType.PLAYER_CHARACTER,
                    character=character,
                )
            )

        name_counts = Counter(monster.name for monster in monsters)
        for index, monster in enumerate(monsters):
            name = monster.name
            if name_counts[monster.name] > 1:
                name = f"{monster.name} {index + 1}"
            participants.append(
                _Participant(
                    request=InitiativeRequest(
                        combatant_id=f"{_slugify(monster.name)}_{index + 1}",
                        combatant_name=name,
                        dexterity_modifier=monster.ability_scores.dexterity_modifier,
                    ),
                    combatant_type=CombatantType.ENEMY,
                    monster=monster,
                )
            )

        for index, monster in enumerate(ally_monsters):
            participants.append(
                _Participant(
                    request=InitiativeRequest(
                        combatant_id=f"ally_{_slugify(monster.name)}_{index + 1}",
                        combatant_name=f"{monster.name} (Ally)",
                        dexterity_modifier=monster.ability_scores.dexterity_modifier,
                    ),
                    combatant_type=CombatantType.ALLY,
                    monster=monster,
                )
            )

        _check_unique_ids(participants)
        by_id = {p.request.combatant_id: p for p in participants}
        results = self._dice.roll_initiative(p.request for p in participants)

        order = []
        for result in results:
            participant = by_id[result.combatant_id]
            if participant.character is not None:
                order.append(create_combatant_from_character(participant.character, result))
            else:
                order.append(
                    create_combatant_from_monster(
                        participant.monster,
                        result,
                        participant.combatant_type,
                        combatant_id=result.combatant_id,
                        name=result.combatant_name,
                    )
                )

        combat = Combat(
            initiative_order=order,
            surprised_combatant_ids=list(surprised_ids),
        )

        with combat_context(combat.id, round=combat.round):
            logger.info(
                "Combat started",
                combatants=len(order),
                surprised=combat.surprised_combatant_ids,
            )
        return combat

    @_logged_in_combat
    def end_combat(self, combat: Combat, outcome: CombatOutcome) -> CombatEndResult:
        """End an encounter and tally its rewards.

        XP is summed over defeated enemies: each enemy's stat block XP,
        or a flat award per enemy when the game settings ask for it.

        Args:
            combat: The encounter.
            outcome: How it ended.

        Returns:
            CombatEndResult with the inactive encounter.
        """
        game = self._settings.game
        defeated_enemies = [
            c
            for c in combat.initiative_order
            if c.combatant_type == CombatantType.ENEMY and c.status == CombatantStatus.DEFEATED
        ]

        if game.xp_award_mode == "flat":
            xp_earned = len(defeated_enemies) * game.flat_xp_per_enemy
        else:
            xp_earned = sum(c.xp_value for c in defeated_enemies)

        surviving_players = [
            c.id for c in combat.initiative_order if c.is_player and c.is_active
        ]

        logger.info(
            "Combat ended",
            outcome=outcome.value,
            rounds=combat.round,
            xp_earned=xp_earned,
            surviving_players=surviving_players,
        )

        return CombatEndResult(
            combat=combat.model_copy(update={"is_active": False}),
            outcome=outcome,
            xp_earned=xp_earned,
            surviving_players=surviving_players,
        )

    def check_combat_end(self, combat: Combat) -> CombatEndCheck:
        """Check whether one side has been eliminated.

        Returns:
            VICTORY when only players remain, DEFEAT when only enemies
            remain or nobody does, otherwise should_end is False.
        """
        active_players = [
            c for c in combat.initiative_order if c.is_player and c.is_active and c.current_hp > 0
        ]
        active_enemies = self.get_active_combatants_by_type(combat, CombatantType.ENEMY)

        if not active_enemies and active_players:
            return CombatEndCheck(should_end=True, suggested_outcome=CombatOutcome.VICTORY)
        if not active_players:
            # Covers the stalemate where neither side is left standing
            return CombatEndCheck(should_end=True, suggested_outcome=CombatOutcome.DEFEAT)
        return CombatEndCheck(should_end=False)

    # -------------------------------------------------------------------------
    # Turn Progression
    # -------------------------------------------------------------------------

    def get_current_combatant(self, combat: Combat) -> Combatant | None:
        """Get the combatant whose turn it is, if combat is running."""
        if not combat.is_active or not combat.initiative_order:
            return None
        return combat.initiative_order[combat.current_turn_index]

    @_logged_in_combat
    def next_turn(self, combat: Combat) -> Combat:
        """Advance to the next active combatant.

        Passing index 0 closes the round (condition durations tick down
        and the round counter increments). The landed combatant's turn
        resources are refreshed. Surprised combatants are skipped for
        the whole of round 1.

        Args:
            combat: The encounter.

        Returns:
            The encounter on the next combatant's turn. An inactive
            encounter is returned unchanged; one with nobody left active
            is marked inactive.
        """
        if not combat.is_active:
            return combat

        surprised = set(combat.surprised_combatant_ids)
        size = len(combat.initiative_order)

        # Each pass lands on one combatant; a surprise skip moves on again
        for _ in range(size + 1):
            if not any(c.is_active for c in combat.initiative_order):
                logger.info("No active combatants remain")
                return combat.model_copy(update={"is_active": False})

            index = combat.current_turn_index
            for _ in range(size):
                index = (index + 1) % size
                if index == 0:
                    combat = self.process_end_of_round(combat)
                if combat.initiative_order[index].is_active:
                    break

            landed = combat.initiative_order[index]
            landed = landed.model_copy(update={"turn_resources": TurnResources.full(landed.speed)})
            combat = combat.with_combatant(index, landed).model_copy(
                update={"current_turn_index": index}
            )

            if combat.round == 1 and landed.id in surprised:
                logger.debug("Surprised combatant skipped", combatant=landed.name)
                continue

            logger.info(
                "Next turn",
                combatant=landed.name,
                round=combat.round,
            )
            return combat

        return combat

    @_logged_in_combat
    def process_end_of_round(self, combat: Combat) -> Combat:
        """Tick round-counted conditions and advance the round counter.

        Every ROUNDS condition loses one round and is removed at 0;
        open-ended conditions are untouched.

        Args:
            combat: The encounter.

        Returns:
            The encounter in the next round.
        """
        order = []
        for combatant in combat.initiative_order:
            conditions = []
            for condition in combatant.conditions:
                if condition.duration.is_round_counted:
                    remaining = max(0, condition.duration.value - 1)
                    if remaining == 0:
                        logger.debug(
                            "Condition expired",
                            combatant=combatant.name,
                            condition=condition.name.value,
                        )
                        continue
                    condition = condition.model_copy(
                        update={"duration": condition.duration.model_copy(update={"value": remaining})}
                    )
                conditions.append(condition)
            order.append(combatant.model_copy(update={"conditions": conditions}))

        logger.info("Round ended")
        return combat.model_copy(update={"initiative_order": order, "round": combat.round + 1})

    # -------------------------------------------------------------------------
    # Hit Points
    # -------------------------------------------------------------------------

    def _require_index(self, combat: Combat, combatant_id: str) -> int:
        index = combat.index_of(combatant_id)
        if index is None:
            raise CombatantNotFoundError(
                f"Combatant not found: {combatant_id}",
                combatant_id=combatant_id,
                round_number=combat.round,
            )
        return index

    @_logged_in_combat
    def apply_damage(
        self,
        combat: Combat,
        target_id: str,
        amount: int,
        damage_type: DamageType,
        source: str,
    ) -> DamageApplication:
        """Apply damage to a combatant.

        Temporary HP absorbs damage first. A player dropped to 0 HP stays
        active and falls unconscious; anyone else at 0 HP is defeated.

        Args:
            combat: The encounter.
            target_id: Combatant taking the damage.
            amount: Damage dealt; negative amounts count as 0.
            damage_type: Type of damage.
            source: What dealt the damage.

        Returns:
            DamageApplication with the updated encounter.

        Raises:
            CombatantNotFoundError: If ``target_id`` is not in the encounter.
        """
        index = self._require_index(combat, target_id)
        target = combat.initiative_order[index]
        remaining = max(0, amount)

        absorbed = min(target.temp_hp, remaining)
        temp_hp = target.temp_hp - absorbed
        remaining -= absorbed

        lost = min(target.current_hp, remaining)
        current_hp = target.current_hp - lost

        was_knocked_out = target.current_hp > 0 and current_hp == 0
        was_downed = was_knocked_out and target.is_player

        status = target.status
        conditions = list(target.conditions)
        if current_hp == 0:
            if target.is_player:
                if not target.has_condition(Condition.UNCONSCIOUS):
                    conditions.append(_unconscious_from_damage())
            else:
                status = CombatantStatus.DEFEATED

        updated = target.model_copy(
            update={
                "current_hp": current_hp,
                "temp_hp": temp_hp,
                "status": status,
                "conditions": conditions,
            }
        )

        logger.info(
            "Damage applied",
            target=target.name,
            amount=absorbed + lost,
            damage_type=damage_type.value,
            source=source,
            current_hp=current_hp,
            knocked_out=was_knocked_out,
        )

        return DamageApplication(
            combat=combat.with_combatant(index, updated),
            actual_damage=absorbed + lost,
            was_knocked_out=was_knocked_out,
            was_downed=was_downed,
        )

    @_logged_in_combat
    def apply_healing(
        self,
        combat: Combat,
        target_id: str,
        amount: int,
        source: str,
    ) -> HealingApplication:
        """Heal a combatant, up to its maximum HP.

        Healing a combatant from exactly 0 HP revives it: unconscious is
        removed and its status returns to active.

        Args:
            combat: The encounter.
            target_id: Combatant being healed.
            amount: HP to restore; negative amounts count as 0.
            source: What provided the healing.

        Returns:
            HealingApplication with the updated encounter.

        Raises:
            CombatantNotFoundError: If ``target_id`` is not in the encounter.
        """
        index = self._require_index(combat, target_id)
        target = combat.initiative_order[index]

        current_hp = min(target.max_hp, target.current_hp + max(0, amount))
        actual_healing = current_hp - target.current_hp
        was_revived = target.current_hp == 0 and current_hp > 0

        update: dict[str, object] = {"current_hp": current_hp}
        if was_revived:
            update["conditions"] = [
                c for c in target.conditions if c.name != Condition.UNCONSCIOUS
            ]
            update["status"] = CombatantStatus.ACTIVE

        logger.info(
            "Healing applied",
            target=target.name,
            amount=actual_healing,
            source=source,
            current_hp=current_hp,
            revived=was_revived,
        )

        return HealingApplication(
            combat=combat.with_combatant(index, target.model_copy(update=update)),
            actual_healing=actual_healing,
            was_revived=was_revived,
        )

    def add_temp_hp(self, combat: Combat, target_id: str, amount: int) -> Combat:
        """Grant temporary HP; keeps the larger of old and new."""
        index = combat.index_of(target_id)
        if index is None:
            return combat
        target = combat.initiative_order[index]
        temp_hp = max(target.temp_hp, amount)
        return combat.with_combatant(index, target.model_copy(update={"temp_hp": temp_hp}))

    # -------------------------------------------------------------------------
    # Conditions
    # -------------------------------------------------------------------------

    @_logged_in_combat
    def add_condition(
        self,
        combat: Combat,
        target_id: str,
        condition: ActiveCondition,
    ) -> Combat:
        """Apply a condition to a combatant.

        Conditions never stack. A condition already present is only
        replaced when both durations are round-counted and the new one
        lasts strictly longer.

        Args:
            combat: The encounter.
            target_id: Combatant receiving the condition.
            condition: The condition to apply.

        Returns:
            The updated encounter, or the same value if nothing changed.

        Raises:
            CombatantNotFoundError: If ``target_id`` is not in the encounter.
        """
        index = self._require_index(combat, target_id)
        target = combat.initiative_order[index]
        existing = target.get_condition(condition.name)

        if existing is None:
            conditions = [*target.conditions, condition]
        elif (
            condition.duration.is_round_counted
            and existing.duration.is_round_counted
            and condition.duration.value > existing.duration.value
        ):
            conditions = [condition if c.name == condition.name else c for c in target.conditions]
        else:
            return combat

        logger.info(
            "Condition added",
            target=target.name,
            condition=condition.name.value,
            source=condition.source,
        )
        return combat.with_combatant(index, target.model_copy(update={"conditions": conditions}))

    @_logged_in_combat
    def remove_condition(self, combat: Combat, target_id: str, name: Condition) -> Combat:
        """Remove a condition from a combatant.

        Raises:
            CombatantNotFoundError: If ``target_id`` is not in the encounter.
        """
        index = self._require_index(combat, target_id)
        target = combat.initiative_order[index]
        conditions = [c for c in target.conditions if c.name != name]
        return combat.with_combatant(index, target.model_copy(update={"conditions": conditions}))

    def has_condition(self, combat: Combat, combatant_id: str, name: Condition) -> bool:
        """Check a combatant for a condition; unknown ids have none."""
        combatant = self.get_combatant(combat, combatant_id)
        return combatant is not None and combatant.has_condition(name)

    # -------------------------------------------------------------------------
    # Turn Resources
    # -------------------------------------------------------------------------

    def _update_resources(self, combat: Combat, combatant_id: str, **changes: object) -> Combat:
        index = combat.index_of(combatant_id)
        if index is None:
            return combat
        combatant = combat.initiative_order[index]
        resources = combatant.turn_resources.model_copy(update=changes)
        return combat.with_combatant(
            index, combatant.model_copy(update={"turn_resources": resources})
        )

    def use_action(self, combat: Combat, combatant_id: str) -> Combat:
        """Spend a combatant's action."""
        return self._update_resources(combat, combatant_id, has_action=False)

    def use_bonus_action(self, combat: Combat, combatant_id: str) -> Combat:
        """Spend a combatant's bonus action."""
        return self._update_resources(combat, combatant_id, has_bonus_action=False)

    def use_reaction(self, combat: Combat, combatant_id: str) -> Combat:
        """Spend a combatant's reaction."""
        return self._update_resources(combat, combatant_id, has_reaction=False)

    def use_movement(self, combat: Combat, combatant_id: str, amount: int) -> Combat:
        """Spend movement in feet; remaining movement never drops below 0."""
        combatant = self.get_combatant(combat, combatant_id)
        if combatant is None:
            return combat
        remaining = max(0, combatant.turn_resources.movement_remaining - amount)
        return self._update_resources(combat, combatant_id, movement_remaining=remaining)

    @_logged_in_combat
    def flee(self, combat: Combat, combatant_id: str) -> Combat:
        """Mark a combatant as having fled the encounter."""
        index = combat.index_of(combatant_id)
        if index is None:
            return combat
        combatant = combat.initiative_order[index]
        logger.info("Combatant fled", combatant=combatant.name)
        return combat.with_combatant(
            index, combatant.model_copy(update={"status": CombatantStatus.FLED})
        )

    # -------------------------------------------------------------------------
    # Environment
    # -------------------------------------------------------------------------

    def add_environmental_effect(self, combat: Combat, effect: str) -> Combat:
        """Add a battlefield effect description."""
        return combat.model_copy(
            update={"environmental_effects": [*combat.environmental_effects, effect]}
        )

    def remove_environmental_effect(self, combat: Combat, effect: str) -> Combat:
        """Remove every battlefield effect matching ``effect`` exactly."""
        return combat.model_copy(
            update={
                "environmental_effects": [e for e in combat.environmental_effects if e != effect]
            }
        )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_combatant(self, combat: Combat, combatant_id: str) -> Combatant | None:
        """Look up a combatant by id."""
        index = combat.index_of(combatant_id)
        return None if index is None else combat.initiative_order[index]

    def get_active_combatants_by_type(
        self,
        combat: Combat,
        combatant_type: CombatantType,
    ) -> list[Combatant]:
        """Get active combatants of one type, in initiative order."""
        return [
            c
            for c in combat.initiative_order
            if c.combatant_type == combatant_type and c.is_active
        ]

    def get_combat_summary(self, combat: Combat) -> str:
        """Render the encounter as a text status block.

        Args:
            combat: The encounter.

        Returns:
            Multi-line summary, or "Combat has ended." when inactive.
        """
        if not combat.is_active:
            return "Combat has ended."

        lines = [
            SUMMARY_RULE,
            f"⚔️ COMBAT STATUS - Round {combat.round}",
            SUMMARY_RULE,
            "",
        ]

        current = self.get_current_combatant(combat)
        if current is not None:
            resources = current.turn_resources
            temp = f" (+{current.temp_hp} temp)" if current.temp_hp > 0 else ""
            action = "✓ Action" if resources.has_action else "✗ Action"
            bonus = "✓ Bonus" if resources.has_bonus_action else "✗ Bonus"
            lines.append(f"CURRENT TURN: {current.name}")
            lines.append(f"  HP: {current.current_hp}/{current.max_hp}{temp}")
            lines.append(
                f"  Actions: {action} | {bonus} | Movement: {resources.movement_remaining}ft"
            )
            if current.conditions:
                names = ", ".join(c.name.value for c in current.conditions)
                lines.append(f"  Conditions: {names}")
            lines.append("")

        lines.append("INITIATIVE ORDER:")
        for index, combatant in enumerate(combat.initiative_order):
            marker = "▶" if index == combat.current_turn_index else " "
            if combatant.status == CombatantStatus.DEFEATED:
                tag = "[Defeated]"
            elif combatant.status == CombatantStatus.FLED:
                tag = "[Fled]"
            elif combatant.is_bloodied:
                tag = "[Bloodied]"
            else:
                tag = ""
            lines.append(
                f"{marker} {combatant.initiative.total:>2} | {combatant.name} "
                f"({combatant.current_hp}/{combatant.max_hp} HP) {tag}"
            )

        if combat.environmental_effects:
            lines.append("")
            lines.append("ENVIRONMENTAL EFFECTS:")
            lines.extend(f"  • {effect}" for effect in combat.environmental_effects)

        lines.append(SUMMARY_RULE)
        return "\n".join(lines)


__all__ = [
    "DamageApplication",
    "HealingApplication",
    "CombatEndCheck",
    "CombatEndResult",
    "create_combatant_from_character",
    "create_combatant_from_monster",
    "CombatEngine",
]
