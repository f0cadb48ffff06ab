"""Inventory item runtime models."""
from __future__ import annotations

from dataclasses import dataclass

from warband.core.types import ItemType


@dataclass(frozen=True, slots=True)
class Item:
    """A stack of identical consumables held by the player."""

    id: str
    name: str
    type: ItemType
    heal: int
    quantity: int

    @property
    def is_usable(self) -> bool:
        return self.quantity > 0
