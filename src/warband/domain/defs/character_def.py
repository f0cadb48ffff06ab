"""Lead character definition structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from warband.core.types import Formation, Side


@dataclass(frozen=True, slots=True)
class CharacterDef:
    """Base stats for a lead character, before an instance id is assigned."""

    id: str
    name: str
    side: Side
    max_hp: int
    attack: int
    defense: int
    formation: Formation = "player-first"
    soldier_ids: Tuple[str, ...] = ()
