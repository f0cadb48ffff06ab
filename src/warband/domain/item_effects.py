"""Pure helpers for applying consumable effects to combatants."""
from __future__ import annotations

from dataclasses import dataclass, replace

from warband.core.types import Side
from warband.domain.entities import Character, Item, SoldierStack
from warband.domain.units import heal_character


@dataclass(frozen=True, slots=True)
class ItemEffectResult:
    """Updated item and target produced by one use of a consumable."""

    item: Item
    target: Character
    hp_delta: int = 0

    @property
    def had_effect(self) -> bool:
        return self.hp_delta != 0


def can_use_item(item: Item) -> bool:
    return item.is_usable


def use_healing_potion(item: Item, character: Character) -> ItemEffectResult | None:
    """Consume one potion on ``character``; return None when the item cannot heal."""
    if not can_use_item(item) or item.type != "healing_potion" or item.heal <= 0:
        return None

    healed = heal_character(character, item.heal)
    return ItemEffectResult(
        item=replace(item, quantity=item.quantity - 1),
        target=healed,
        hp_delta=healed.current_hp - character.current_hp,
    )


def soldier_as_character(soldier: SoldierStack, side: Side) -> Character:
    """Project a stack's front unit as a character so character effects can target it."""
    return Character(
        id=soldier.id,
        name=soldier.name,
        max_hp=soldier.max_hp,
        current_hp=soldier.current_hp,
        attack=soldier.attack,
        defense=soldier.defense,
        side=side,
    )
