"""Shared type aliases for the core and domain layers."""
from typing import Literal

BattlePhase = Literal["preparation", "battle", "resolution"]
Side = Literal["player", "enemy"]
Formation = Literal["soldiers-first", "player-first"]
TargetType = Literal["character", "soldier"]
ItemType = Literal["healing_potion"]

__all__ = ["BattlePhase", "Formation", "ItemType", "Side", "TargetType"]
