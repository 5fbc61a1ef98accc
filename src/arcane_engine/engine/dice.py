"""Dice rolling mechanics for D&D 5E.

This module provides every typed roll the engine performs: plain notation
rolls, d20 rolls with advantage or disadvantage, ability checks, saving
throws, attacks, damage, initiative, death saves and ability score
generation. All randomness is drawn from the roller's RandomSource.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from arcane_engine.core.config import Settings, get_settings
from arcane_engine.core.constants import (
    ABILITY_SCORE_COUNT,
    ABILITY_SCORE_DICE,
    DEATH_SAVE_DC,
    MAX_DEATH_SAVES,
    NATURAL_MAX,
    NATURAL_MIN,
)
from arcane_engine.core.exceptions import InvalidNotationError
from arcane_engine.core.logging import get_logger
from arcane_engine.engine.notation import ParsedDice, parse_notation
from arcane_engine.engine.random_source import RandomSource, create_random_source
from arcane_engine.models.character import Character
from arcane_engine.models.enums import Ability, AdvantageStatus, DamageType, Skill


logger = get_logger(__name__)


# =============================================================================
# Roll Results
# =============================================================================


@dataclass(frozen=True)
class BasicRollResult:
    """Result of rolling a dice notation.

    Attributes:
        notation: The notation that was rolled.
        rolls: The kept dice.
        modifier: Flat modifier from the notation.
        total: Sum of kept dice plus modifier.
        reason: Opaque caller annotation.
    """

    notation: str
    rolls: list[int]
    modifier: int
    total: int
    reason: str | None = None


@dataclass(frozen=True)
class D20Roll:
    """A d20 roll, possibly with advantage or disadvantage.

    Attributes:
        roll: The kept d20.
        rolls: Every d20 rolled (two with advantage/disadvantage).
        had_advantage: Whether the higher of two was kept.
        had_disadvantage: Whether the lower of two was kept.
    """

    roll: int
    rolls: list[int]
    had_advantage: bool = False
    had_disadvantage: bool = False

    @property
    def is_natural_max(self) -> bool:
        """Whether the kept die is a natural 20."""
        return self.roll == NATURAL_MAX

    @property
    def is_natural_min(self) -> bool:
        """Whether the kept die is a natural 1."""
        return self.roll == NATURAL_MIN


@dataclass(frozen=True)
class AbilityCheckResult:
    """Result of an ability or skill check."""

    character_id: str
    character_name: str
    ability: Ability
    skill: Skill | None
    roll: int
    modifier: int
    proficiency_bonus: int
    total: int
    dc: int
    success: bool
    is_critical_success: bool
    is_critical_failure: bool
    had_advantage: bool
    had_disadvantage: bool


@dataclass(frozen=True)
class SavingThrowResult:
    """Result of a saving throw."""

    character_id: str
    character_name: str
    ability: Ability
    roll: int
    modifier: int
    proficiency_bonus: int
    total: int
    dc: int
    success: bool
    is_critical_success: bool
    is_critical_failure: bool
    had_advantage: bool
    had_disadvantage: bool


@dataclass(frozen=True)
class AttackRollResult:
    """Result of an attack roll against a target's armor class."""

    attacker_id: str
    attacker_name: str
    target_id: str
    target_name: str
    weapon: str
    roll: int
    attack_bonus: int
    total: int
    target_ac: int
    hits: bool
    is_critical_hit: bool
    is_critical_miss: bool
    had_advantage: bool
    had_disadvantage: bool


@dataclass(frozen=True)
class DamageSource:
    """Extra damage riding on an attack (sneak attack, a flaming blade, ...).

    Attributes:
        dice: Damage notation (e.g., '2d6').
        type: Damage type.
        source: What grants the damage.
    """

    dice: str
    type: DamageType
    source: str


@dataclass(frozen=True)
class AdditionalDamageRoll:
    """A rolled additional damage source."""

    dice: str
    type: DamageType
    source: str
    rolls: list[int]
    total: int


@dataclass(frozen=True)
class DamageRollResult:
    """Result of a damage roll.

    Attributes:
        rolls: Base damage dice.
        modifier: Flat modifier added to the base damage.
        base_damage: Base dice plus modifier (may be negative).
        damage_type: Base damage type.
        additional_damage: Each additional source with its own rolls.
        total_damage: Base plus additional, never below 0.
        is_critical: Whether dice counts were doubled.
    """

    rolls: list[int]
    modifier: int
    base_damage: int
    damage_type: DamageType
    additional_damage: list[AdditionalDamageRoll]
    total_damage: int
    is_critical: bool


@dataclass(frozen=True)
class InitiativeRequest:
    """A participant asking for an initiative roll."""

    combatant_id: str
    combatant_name: str
    dexterity_modifier: int = 0


@dataclass(frozen=True)
class InitiativeResult:
    """A rolled initiative."""

    combatant_id: str
    combatant_name: str
    roll: int
    modifier: int
    total: int


@dataclass(frozen=True)
class DeathSaveResult:
    """Outcome of a death saving throw with the updated counters."""

    roll: int
    success: bool
    stable: bool
    dead: bool
    new_successes: int
    new_failures: int


@dataclass(frozen=True)
class AbilityScoreRoll:
    """A 4d6-drop-lowest ability score roll.

    Attributes:
        rolls: All four dice, highest first.
        dropped: The lowest die, excluded from the total.
        total: Sum of the three highest dice.
    """

    rolls: list[int]
    dropped: int
    total: int


@dataclass(frozen=True)
class AbilityScoreSet:
    """Six rolled ability scores."""

    scores: list[int]
    details: list[AbilityScoreRoll] = field(default_factory=list)


@dataclass(frozen=True)
class EncounterCheckResult:
    """Result of a random encounter check."""

    roll: int
    dc: int
    encounter_triggered: bool


def _clamp_death_saves(value: int) -> int:
    return max(0, min(MAX_DEATH_SAVES, value))


def _parse_damage_dice(notation: str, *, is_critical: bool) -> ParsedDice:
    """Parse damage dice, doubling the die count on a critical hit.

    Every damage die counts toward the total, so keep suffixes are rejected.
    """
    parsed = parse_notation(notation)
    if parsed.keep_highest is not None or parsed.keep_lowest is not None:
        raise InvalidNotationError(
            f"Damage dice cannot keep a subset of dice: {notation}",
            expression=notation,
        )
    if is_critical:
        parsed = parsed.with_count(parsed.count * 2)
    return parsed


# =============================================================================
# Dice Roller
# =============================================================================


class DiceRoller:
    """Dice rolling with D&D 5E mechanics.

    The roller holds its random source and, optionally, the settings it
    was built from; every method is a pure function of its arguments,
    those settings and the draws it makes.

    Example:
        >>> roller = DiceRoller(seed=7)
        >>> result = roller.roll("1d20+5")
        >>> 6 <= result.total <= 25
        True
    """

    def __init__(
        self,
        random_source: RandomSource | None = None,
        *,
        seed: int | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the dice roller.

        Args:
            random_source: Source of random integers. Defaults to the OS
                CSPRNG, or a seeded generator when ``seed`` is given.
            seed: Optional random seed for reproducible rolls.
            settings: Settings supplying rule defaults such as the
                encounter check DC. The cached settings are read when
                omitted.
        """
        self._random = random_source or create_random_source(seed)
        self._settings = settings
        logger.debug(
            "DiceRoller initialized",
            source=type(self._random).__name__,
            seed=seed,
        )

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> DiceRoller:
        """Build a roller from the dice settings.

        Args:
            settings: Engine settings; the cached settings when omitted.

        Returns:
            A roller on the configured random source.
        """
        settings = settings or get_settings()
        seed = settings.dice.seed if settings.dice.source == "seeded" else None
        return cls(seed=seed, settings=settings)

    @property
    def random_source(self) -> RandomSource:
        """The random source draws are taken from."""
        return self._random

    def roll_die(self, sides: int) -> int:
        """Roll a single die.

        Args:
            sides: Number of sides.

        Returns:
            A value in 1..sides.
        """
        return self._random.randint(1, sides)

    def _roll_dice(self, count: int, sides: int) -> list[int]:
        return [self.roll_die(sides) for _ in range(count)]

    def _roll_parsed(self, parsed: ParsedDice) -> list[int]:
        """Roll parsed dice and apply keep-highest / keep-lowest."""
        rolls = self._roll_dice(parsed.count, parsed.sides)
        if parsed.keep_highest is not None:
            rolls = sorted(rolls, reverse=True)[: parsed.keep_highest]
        elif parsed.keep_lowest is not None:
            rolls = sorted(rolls)[: parsed.keep_lowest]
        return rolls

    def roll(self, notation: str, reason: str | None = None) -> BasicRollResult:
        """Roll dice according to the given notation.

        Args:
            notation: Dice notation (e.g., '1d20+5', '4d6kh3').
            reason: Optional annotation carried on the result.

        Returns:
            BasicRollResult with the kept dice and total.

        Raises:
            InvalidNotationError: If the notation is malformed.
            InvalidDiceCountError: If the die count is out of range.
            InvalidDiceSidesError: If the die size is out of range.
        """
        parsed = parse_notation(notation)
        rolls = self._roll_parsed(parsed)
        total = sum(rolls) + parsed.modifier

        logger.info("Dice rolled", notation=notation, rolls=rolls, total=total, reason=reason)

        return BasicRollResult(
            notation=notation,
            rolls=rolls,
            modifier=parsed.modifier,
            total=total,
            reason=reason,
        )

    def roll_d20(self, advantage_status: AdvantageStatus = AdvantageStatus.NORMAL) -> D20Roll:
        """Roll a d20 with advantage or disadvantage.

        Args:
            advantage_status: Normal rolls one d20; advantage and
                disadvantage roll two and keep the higher or lower.

        Returns:
            D20Roll with the kept value and every die rolled.
        """
        first = self.roll_die(20)

        if advantage_status == AdvantageStatus.NORMAL:
            return D20Roll(roll=first, rolls=[first])

        second = self.roll_die(20)
        rolls = [first, second]

        if advantage_status == AdvantageStatus.ADVANTAGE:
            return D20Roll(roll=max(rolls), rolls=rolls, had_advantage=True)

        return D20Roll(roll=min(rolls), rolls=rolls, had_disadvantage=True)

    @staticmethod
    def _resolve_success(d20: D20Roll, total: int, target: int) -> bool:
        """Natural 20 always succeeds, natural 1 always fails."""
        if d20.is_natural_max:
            return True
        if d20.is_natural_min:
            return False
        return total >= target

    def roll_ability_check(
        self,
        character: Character,
        ability: Ability,
        dc: int,
        *,
        skill: Skill | None = None,
        advantage_status: AdvantageStatus = AdvantageStatus.NORMAL,
    ) -> AbilityCheckResult:
        """Roll an ability check, optionally using a skill.

        When a skill governed by a different ability is supplied, that
        skill's own ability modifier is used. Expertise doubles the
        proficiency bonus; proficiency only applies with a skill.

        Args:
            character: The character making the check.
            ability: The ability being checked.
            dc: Difficulty class.
            skill: Skill applied to the check.
            advantage_status: Advantage state of the roll.

        Returns:
            AbilityCheckResult with the outcome.
        """
        d20 = self.roll_d20(advantage_status)
        scores = character.ability_scores

        modifier = scores.get_modifier(ability)
        proficiency_bonus = 0

        if skill is not None:
            if skill.ability != ability:
                modifier = scores.get_modifier(skill.ability)
            if skill in character.proficiencies.expertise:
                proficiency_bonus = character.proficiency_bonus * 2
            elif skill in character.proficiencies.skills:
                proficiency_bonus = character.proficiency_bonus

        total = d20.roll + modifier + proficiency_bonus
        success = self._resolve_success(d20, total, dc)

        logger.debug(
            "Ability check rolled",
            character=character.name,
            ability=ability.value,
            skill=skill.value if skill else None,
            total=total,
            dc=dc,
            success=success,
        )

        return AbilityCheckResult(
            character_id=character.id,
            character_name=character.name,
            ability=ability,
            skill=skill,
            roll=d20.roll,
            modifier=modifier,
            proficiency_bonus=proficiency_bonus,
            total=total,
            dc=dc,
            success=success,
            is_critical_success=d20.is_natural_max,
            is_critical_failure=d20.is_natural_min,
            had_advantage=d20.had_advantage,
            had_disadvantage=d20.had_disadvantage,
        )

    def roll_saving_throw(
        self,
        character: Character,
        ability: Ability,
        dc: int,
        advantage_status: AdvantageStatus = AdvantageStatus.NORMAL,
    ) -> SavingThrowResult:
        """Roll a saving throw.

        Args:
            character: The character saving.
            ability: The saving throw ability.
            dc: Save DC.
            advantage_status: Advantage state of the roll.

        Returns:
            SavingThrowResult with the outcome.
        """
        d20 = self.roll_d20(advantage_status)
        modifier = character.ability_scores.get_modifier(ability)
        proficiency_bonus = (
            character.proficiency_bonus
            if ability in character.proficiencies.saving_throws
            else 0
        )

        total = d20.roll + modifier + proficiency_bonus
        success = self._resolve_success(d20, total, dc)

        logger.debug(
            "Saving throw rolled",
            character=character.name,
            ability=ability.value,
            total=total,
            dc=dc,
            success=success,
        )

        return SavingThrowResult(
            character_id=character.id,
            character_name=character.name,
            ability=ability,
            roll=d20.roll,
            modifier=modifier,
            proficiency_bonus=proficiency_bonus,
            total=total,
            dc=dc,
            success=success,
            is_critical_success=d20.is_natural_max,
            is_critical_failure=d20.is_natural_min,
            had_advantage=d20.had_advantage,
            had_disadvantage=d20.had_disadvantage,
        )

    def roll_attack(
        self,
        attacker_id: str,
        attacker_name: str,
        target_id: str,
        target_name: str,
        target_ac: int,
        attack_bonus: int,
        weapon: str,
        advantage_status: AdvantageStatus = AdvantageStatus.NORMAL,
    ) -> AttackRollResult:
        """Roll an attack against a target's armor class.

        Args:
            attacker_id: Attacking combatant id.
            attacker_name: Attacking combatant name.
            target_id: Target combatant id.
            target_name: Target combatant name.
            target_ac: Target armor class.
            attack_bonus: Attack roll bonus.
            weapon: Weapon or attack name.
            advantage_status: Advantage state of the roll.

        Returns:
            AttackRollResult; a natural 20 always hits and a natural 1
            always misses.
        """
        d20 = self.roll_d20(advantage_status)
        total = d20.roll + attack_bonus
        hits = self._resolve_success(d20, total, target_ac)

        logger.debug(
            "Attack rolled",
            attacker=attacker_name,
            target=target_name,
            weapon=weapon,
            total=total,
            target_ac=target_ac,
            hits=hits,
        )

        return AttackRollResult(
            attacker_id=attacker_id,
            attacker_name=attacker_name,
            target_id=target_id,
            target_name=target_name,
            weapon=weapon,
            roll=d20.roll,
            attack_bonus=attack_bonus,
            total=total,
            target_ac=target_ac,
            hits=hits,
            is_critical_hit=d20.is_natural_max,
            is_critical_miss=d20.is_natural_min,
            had_advantage=d20.had_advantage,
            had_disadvantage=d20.had_disadvantage,
        )

    def roll_damage(
        self,
        damage_dice: str,
        damage_type: DamageType,
        modifier: int = 0,
        is_critical: bool = False,
        additional_damage: Sequence[DamageSource] = (),
    ) -> DamageRollResult:
        """Roll damage for a hit.

        On a critical hit the number of dice (never the sides or the
        modifier) is doubled for the base notation and for every
        additional source independently.

        Args:
            damage_dice: Base damage notation (e.g., '1d8+3').
            damage_type: Base damage type.
            modifier: Extra flat modifier on the base damage.
            is_critical: Whether this is a critical hit.
            additional_damage: Extra damage sources.

        Returns:
            DamageRollResult whose total is never negative.

        Raises:
            InvalidNotationError: If any notation is malformed or carries a
                keep suffix.
        """
        parsed = _parse_damage_dice(damage_dice, is_critical=is_critical)
        rolls = self._roll_dice(parsed.count, parsed.sides)
        base_modifier = parsed.modifier + modifier
        base_damage = sum(rolls) + base_modifier

        additional_rolls: list[AdditionalDamageRoll] = []
        for source in additional_damage:
            extra = _parse_damage_dice(source.dice, is_critical=is_critical)
            extra_rolls = self._roll_dice(extra.count, extra.sides)
            additional_rolls.append(
                AdditionalDamageRoll(
                    dice=source.dice,
                    type=source.type,
                    source=source.source,
                    rolls=extra_rolls,
                    total=sum(extra_rolls) + extra.modifier,
                )
            )

        total_damage = max(0, base_damage + sum(r.total for r in additional_rolls))

        logger.debug(
            "Damage rolled",
            dice=damage_dice,
            damage_type=damage_type.value,
            is_critical=is_critical,
            total=total_damage,
        )

        return DamageRollResult(
            rolls=rolls,
            modifier=base_modifier,
            base_damage=base_damage,
            damage_type=damage_type,
            additional_damage=additional_rolls,
            total_damage=total_damage,
            is_critical=is_critical,
        )

    def roll_initiative(self, requests: Iterable[InitiativeRequest]) -> list[InitiativeResult]:
        """Roll initiative for a group of participants.

        Args:
            requests: One request per participant.

        Returns:
            Results sorted by total, then modifier, highest first; equal
            keys keep their input order.
        """
        results = []
        for request in requests:
            roll = self.roll_die(20)
            results.append(
                InitiativeResult(
                    combatant_id=request.combatant_id,
                    combatant_name=request.combatant_name,
                    roll=roll,
                    modifier=request.dexterity_modifier,
                    total=roll + request.dexterity_modifier,
                )
            )

        # sorted() is stable with reverse=True
        ordered = sorted(results, key=lambda r: (r.total, r.modifier), reverse=True)

        logger.info(
            "Initiative rolled",
            order=[(r.combatant_name, r.total) for r in ordered],
        )
        return ordered

    def roll_death_save(self, successes: int, failures: int) -> DeathSaveResult:
        """Roll a death saving throw.

        A natural 20 stabilizes immediately, a natural 1 counts as two
        failures, 10 or higher is a success and anything else a failure.
        Counters are clamped to 0..3.

        Args:
            successes: Current successes.
            failures: Current failures.

        Returns:
            DeathSaveResult with the updated counters.
        """
        successes = _clamp_death_saves(successes)
        failures = _clamp_death_saves(failures)
        roll = self.roll_die(20)

        if roll == NATURAL_MAX:
            result = DeathSaveResult(
                roll=roll,
                success=True,
                stable=True,
                dead=False,
                new_successes=MAX_DEATH_SAVES,
                new_failures=failures,
            )
        elif roll == NATURAL_MIN:
            new_failures = _clamp_death_saves(failures + 2)
            result = DeathSaveResult(
                roll=roll,
                success=False,
                stable=False,
                dead=new_failures >= MAX_DEATH_SAVES,
                new_successes=successes,
                new_failures=new_failures,
            )
        elif roll >= DEATH_SAVE_DC:
            new_successes = _clamp_death_saves(successes + 1)
            result = DeathSaveResult(
                roll=roll,
                success=True,
                stable=new_successes >= MAX_DEATH_SAVES,
                dead=False,
                new_successes=new_successes,
                new_failures=failures,
            )
        else:
            new_failures = _clamp_death_saves(failures + 1)
            result = DeathSaveResult(
                roll=roll,
                success=False,
                stable=False,
                dead=new_failures >= MAX_DEATH_SAVES,
                new_successes=successes,
                new_failures=new_failures,
            )

        logger.info(
            "Death save rolled",
            roll=roll,
            successes=result.new_successes,
            failures=result.new_failures,
            stable=result.stable,
            dead=result.dead,
        )
        return result

    def roll_ability_score(self) -> AbilityScoreRoll:
        """Roll 4d6 and drop the lowest die.

        Returns:
            AbilityScoreRoll with a total in 3..18.
        """
        rolls = sorted(self._roll_dice(ABILITY_SCORE_DICE, 6), reverse=True)
        return AbilityScoreRoll(rolls=rolls, dropped=rolls[-1], total=sum(rolls[:-1]))

    def roll_ability_score_set(self) -> AbilityScoreSet:
        """Roll a full set of six ability scores.

        Returns:
            AbilityScoreSet with each score and its dice.
        """
        details = [self.roll_ability_score() for _ in range(ABILITY_SCORE_COUNT)]
        return AbilityScoreSet(scores=[d.total for d in details], details=details)

    def roll_encounter_check(self, dc: int | None = None) -> EncounterCheckResult:
        """Roll a d20 to see whether a random encounter occurs.

        Args:
            dc: Threshold at or above which an encounter is triggered.
                Defaults to the roller's configured encounter check DC.

        Returns:
            EncounterCheckResult.
        """
        if dc is None:
            dc = (self._settings or get_settings()).game.encounter_check_dc
        roll = self.roll_die(20)
        return EncounterCheckResult(roll=roll, dc=dc, encounter_triggered=roll >= dc)

    def roll_percentile(self) -> int:
        """Roll percentile dice (d100)."""
        return self.roll_die(100)


# Module-level convenience roller
_default_roller: DiceRoller | None = None


def get_default_roller() -> DiceRoller:
    """Get the lazily created roller built from the engine settings."""
    global _default_roller  # noqa: PLW0603
    if _default_roller is None:
        _default_roller = DiceRoller.from_settings()
    return _default_roller


def roll(notation: str, reason: str | None = None) -> BasicRollResult:
    """Convenience function to roll dice.

    Args:
        notation: Dice notation (e.g., '1d20+5').
        reason: Optional annotation carried on the result.

    Returns:
        BasicRollResult containing roll results.

    Example:
        >>> result = roll("1d20+5")
        >>> print(result.total)
    """
    return get_default_roller().roll(notation, reason)


__all__ = [
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
    "DiceRoller",
    "get_default_roller",
    "roll",
]
