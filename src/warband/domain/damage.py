"""Damage formula and damage application for characters and soldier stacks."""
from __future__ import annotations

from dataclasses import replace

from warband.domain.entities import Character, SoldierStack

MIN_DAMAGE = 1


def base_damage(attack: int, defense: int) -> int:
    """Return ``attack - defense`` floored at MIN_DAMAGE so every hit makes progress."""
    return max(MIN_DAMAGE, attack - defense)


def apply_damage_to_character(character: Character, damage: int) -> Character:
    return replace(character, current_hp=max(0, character.current_hp - damage))


def apply_damage_to_soldier_stack(soldier: SoldierStack, damage: int) -> SoldierStack:
    """Absorb ``damage`` unit by unit from the front of the stack.

    A hit smaller than the front unit's HP only wounds it. Otherwise the front
    unit dies and the excess kills ``excess // max_hp`` more whole units; the new
    front unit is left with ``max_hp - excess % max_hp``. Excess never carries
    over to the lead character. Emptied stacks are pinned at zero HP.
    """
    if soldier.quantity <= 0:
        return replace(soldier, quantity=0, current_hp=0)

    if damage < soldier.current_hp:
        return replace(soldier, current_hp=soldier.current_hp - damage)

    excess = damage - soldier.current_hp
    units_lost = 1 + excess // soldier.max_hp
    quantity = max(0, soldier.quantity - units_lost)
    if quantity == 0:
        return replace(soldier, quantity=0, current_hp=0)
    return replace(soldier, quantity=quantity, current_hp=soldier.max_hp - excess % soldier.max_hp)
