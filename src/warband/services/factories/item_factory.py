"""Factory for building the player's starting inventory."""
from __future__ import annotations

from typing import Iterable, List

from warband.data.repositories import ItemsRepository
from warband.domain.defs import ItemDef
from warband.domain.entities import Item


def create_items(item_defs: Iterable[ItemDef]) -> List[Item]:
    return [
        Item(id=item_def.id, name=item_def.name, type=item_def.type, heal=item_def.heal, quantity=item_def.quantity)
        for item_def in item_defs
    ]


def create_starting_inventory(items_repo: ItemsRepository) -> List[Item]:
    """Every defined item, in id order, with its configured starting quantity."""
    return create_items(items_repo.all())
