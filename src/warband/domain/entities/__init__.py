"""Runtime entity exports."""

from .character import Character
from .item import Item
from .soldier import SoldierStack

__all__ = [
    "Character",
    "Item",
    "SoldierStack",
]
