"""Soldier stack runtime models."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SoldierStack:
    """A group of identical units fighting as one participant.

    ``current_hp`` is the health of the front unit only; every unit behind it is
    at ``max_hp``. A stack with ``quantity == 0`` always holds ``current_hp == 0``.
    """

    id: str
    name: str
    max_hp: int
    current_hp: int
    attack: int
    defense: int
    quantity: int
    max_quantity: int

    @property
    def hp_pool(self) -> int:
        if self.quantity <= 0:
            return 0
        return (self.quantity - 1) * self.max_hp + self.current_hp
