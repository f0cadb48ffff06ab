"""Domain definition exports."""

from .character_def import CharacterDef
from .item_def import ItemDef
from .soldier_def import SoldierDef

__all__ = [
    "CharacterDef",
    "ItemDef",
    "SoldierDef",
]
