"""Lead character runtime models."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from warband.core.types import Formation, Side

from .soldier import SoldierStack


@dataclass(frozen=True, slots=True)
class Character:
    """The lead combatant of one side, together with the stacks it commands."""

    id: str
    name: str
    max_hp: int
    current_hp: int
    attack: int
    defense: int
    side: Side
    soldiers: Tuple[SoldierStack, ...] = ()
    formation: Formation = "player-first"

    def find_soldier(self, soldier_id: str) -> SoldierStack | None:
        for soldier in self.soldiers:
            if soldier.id == soldier_id:
                return soldier
        return None
