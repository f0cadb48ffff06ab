"""Liveness predicates and HP helpers for characters and soldier stacks."""
from __future__ import annotations

from dataclasses import replace

from warband.domain.entities import Character, SoldierStack


def is_character_alive(character: Character) -> bool:
    return character.current_hp > 0


def is_soldier_alive(soldier: SoldierStack) -> bool:
    return soldier.current_hp > 0 and soldier.quantity > 0


def is_side_alive(character: Character) -> bool:
    """Return True while the lead character or any of its stacks can still fight."""
    if is_character_alive(character):
        return True
    return any(is_soldier_alive(soldier) for soldier in character.soldiers)


def first_alive_soldier(character: Character) -> SoldierStack | None:
    for soldier in character.soldiers:
        if is_soldier_alive(soldier):
            return soldier
    return None


def update_character_hp(character: Character, new_hp: int) -> Character:
    """Return a copy of ``character`` with HP clamped to ``[0, max_hp]``."""
    return replace(character, current_hp=max(0, min(new_hp, character.max_hp)))


def update_soldier_hp(soldier: SoldierStack, new_hp: int) -> SoldierStack:
    """Return a copy of ``soldier`` with front-unit HP clamped; empty stacks stay at 0."""
    if soldier.quantity <= 0:
        return replace(soldier, current_hp=0)
    return replace(soldier, current_hp=max(0, min(new_hp, soldier.max_hp)))


def heal_character(character: Character, amount: int) -> Character:
    return update_character_hp(character, character.current_hp + max(0, amount))


def replace_soldier(character: Character, updated: SoldierStack) -> Character:
    """Return a copy of ``character`` with the stack sharing ``updated.id`` swapped in."""
    soldiers = tuple(updated if soldier.id == updated.id else soldier for soldier in character.soldiers)
    return replace(character, soldiers=soldiers)
