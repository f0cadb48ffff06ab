"""Shared CLI rendering helpers."""
from __future__ import annotations

from typing import Iterable, List

from warband.domain.battle_models import BattleLogEntry, BattleState
from warband.domain.entities import Character


def format_log_entry(entry: BattleLogEntry) -> str:
    return f"[R{entry.round} {entry.phase}] {entry.message}"


def format_log(entries: Iterable[BattleLogEntry]) -> List[str]:
    return [format_log_entry(entry) for entry in entries]


def format_side(character: Character) -> str:
    """One-line summary such as ``Warrior 90/100 HP | Footmen x4 (30/30, 120 HP)``."""
    parts = [f"{character.name} {character.current_hp}/{character.max_hp} HP"]
    for soldier in character.soldiers:
        parts.append(f"{soldier.name} x{soldier.quantity} ({soldier.current_hp}/{soldier.max_hp}, {soldier.hp_pool} HP)")
    return " | ".join(parts)


def format_outcome(state: BattleState) -> str:
    if not state.is_game_over:
        return f"No winner after {state.current_round - 1} rounds."
    if state.winner == "player":
        return f"Victory for {state.player.name} in round {state.current_round}."
    return f"Defeat: {state.enemy.name} wins in round {state.current_round}."
