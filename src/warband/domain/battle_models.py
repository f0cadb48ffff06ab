"""Battle domain models."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from warband.core.types import BattlePhase, Side, TargetType
from warband.domain.entities import Character, Item


@dataclass(frozen=True, slots=True)
class PendingAction:
    """An attack intent queued during the battle phase."""

    attacker_id: str
    target_id: str


@dataclass(frozen=True, slots=True)
class DamageRecord:
    """Damage computed in the battle phase and applied once during resolution."""

    attacker_id: str
    attacker_name: str
    target_id: str  # id of the defending lead character, even for soldier hits
    target_name: str
    damage: int
    target_type: TargetType
    soldier_id: str | None = None
    soldier_name: str | None = None


@dataclass(frozen=True, slots=True)
class BattleLogEntry:
    phase: BattlePhase
    message: str
    round: int


@dataclass(frozen=True, slots=True)
class PendingItemUse:
    """An item chosen during preparation, consumed when the battle phase runs."""

    item_id: str
    target_id: str


@dataclass(frozen=True, slots=True)
class BattleState:
    """Immutable snapshot of a battle between the player and one enemy."""

    player: Character
    enemy: Character
    player_items: Tuple[Item, ...] = ()
    current_round: int = 1
    current_phase: BattlePhase = "preparation"
    battle_log: Tuple[BattleLogEntry, ...] = ()
    pending_actions: Tuple[PendingAction, ...] = ()
    calculated_damages: Tuple[DamageRecord, ...] = ()
    is_game_over: bool = False
    winner: Side | None = None
    preparation_timer: int = 30
    preparation_action_taken: bool = False
    pending_item_use: PendingItemUse | None = None

    def find_item(self, item_id: str) -> Item | None:
        for item in self.player_items:
            if item.id == item_id:
                return item
        return None
