"""Human-readable rendering of dice results.

Display only: these functions read result records and return text.
"""

from __future__ import annotations

from arcane_engine.engine.dice import (
    AbilityCheckResult,
    AttackRollResult,
    BasicRollResult,
    DamageRollResult,
    DeathSaveResult,
    SavingThrowResult,
)


def _signed(value: int) -> str:
    """Render a modifier as '+ 3' or '- 2'."""
    return f"+ {value}" if value >= 0 else f"- {abs(value)}"


def _advantage_text(had_advantage: bool, had_disadvantage: bool) -> str:
    if had_advantage:
        return " (advantage)"
    if had_disadvantage:
        return " (disadvantage)"
    return ""


def _natural_text(is_critical_success: bool, is_critical_failure: bool) -> str:
    if is_critical_success:
        return " 🌟 NAT 20!"
    if is_critical_failure:
        return " 💀 NAT 1!"
    return ""


def format_roll_result(result: BasicRollResult) -> str:
    """Format a basic roll.

    Example:
        >>> format_roll_result(BasicRollResult("2d6+3", [4, 2], 3, 9))
        '🎲 [4 + 2] + 3 = 9'
    """
    rolls = " + ".join(str(r) for r in result.rolls)
    reason = f" ({result.reason})" if result.reason else ""
    if result.modifier == 0:
        return f"🎲 [{rolls}] = {result.total}{reason}"
    return f"🎲 [{rolls}] {_signed(result.modifier)} = {result.total}{reason}"


def format_attack_result(result: AttackRollResult) -> str:
    """Format an attack roll against armor class."""
    if result.is_critical_hit:
        crit = " 💥 CRITICAL HIT!"
    elif result.is_critical_miss:
        crit = " 💀 CRITICAL MISS!"
    else:
        crit = ""
    hit = "✅ Hit!" if result.hits else "❌ Miss!"
    advantage = _advantage_text(result.had_advantage, result.had_disadvantage)
    return (
        f"🎲 {result.roll} {_signed(result.attack_bonus)} = {result.total} "
        f"vs AC {result.target_ac} - {hit}{crit}{advantage}"
    )


def format_damage_result(result: DamageRollResult) -> str:
    """Format a damage roll, listing any additional damage sources."""
    crit = " (CRITICAL)" if result.is_critical else ""
    extra = ""
    if result.additional_damage:
        sources = ", ".join(f"{d.source}: {d.type.value}" for d in result.additional_damage)
        extra = f" [+{sources}]"
    return f"⚔️ {result.total_damage} {result.damage_type.value} damage{crit}{extra}"


def format_ability_check_result(result: AbilityCheckResult) -> str:
    """Format an ability or skill check."""
    skill = f" ({result.skill.display_name})" if result.skill else ""
    outcome = "✅ Success!" if result.success else "❌ Failure!"
    bonus = result.modifier + result.proficiency_bonus
    return (
        f"🎲 {result.ability.full_name}{skill}: {result.roll} {_signed(bonus)} = {result.total} "
        f"vs DC {result.dc} - {outcome}"
        f"{_natural_text(result.is_critical_success, result.is_critical_failure)}"
        f"{_advantage_text(result.had_advantage, result.had_disadvantage)}"
    )


def format_saving_throw_result(result: SavingThrowResult) -> str:
    """Format a saving throw."""
    outcome = "✅ Success!" if result.success else "❌ Failure!"
    bonus = result.modifier + result.proficiency_bonus
    return (
        f"🎲 {result.ability.abbreviation} Save: {result.roll} {_signed(bonus)} = {result.total} "
        f"vs DC {result.dc} - {outcome}"
        f"{_natural_text(result.is_critical_success, result.is_critical_failure)}"
        f"{_advantage_text(result.had_advantage, result.had_disadvantage)}"
    )


def format_death_save_result(result: DeathSaveResult) -> str:
    """Format a death saving throw with the running tally."""
    outcome = "✅ Success!" if result.success else "❌ Failure!"
    if result.dead:
        state = " ☠️ DEAD"
    elif result.stable:
        state = " 💚 STABLE"
    else:
        state = ""
    return (
        f"🎲 Death Save: {result.roll} - {outcome} "
        f"({result.new_successes}/3 successes, {result.new_failures}/3 failures){state}"
    )


__all__ = [
    "format_roll_result",
    "format_attack_result",
    "format_damage_result",
    "format_ability_check_result",
    "format_saving_throw_result",
    "format_death_save_result",
]
