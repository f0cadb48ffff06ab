"""Item definition structures."""
from __future__ import annotations

from dataclasses import dataclass

from warband.core.types import ItemType


@dataclass(frozen=True, slots=True)
class ItemDef:
    """Consumable item definition with its starting stock."""

    id: str
    name: str
    type: ItemType
    heal: int = 0
    quantity: int = 0
