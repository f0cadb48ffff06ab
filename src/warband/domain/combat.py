"""Round simulation: who attacks whom, and for how much.

Attackers act in a fixed order (player lead, player stacks, enemy lead, enemy
stacks). Each attack re-resolves its target against a running copy of the
defender's stacks, so a stack emptied earlier in the round stops screening
its lead for later attackers. Character HP is left untouched; the records are
applied by the resolution phase.
"""
from __future__ import annotations

from typing import List

from warband.domain.battle_models import DamageRecord
from warband.domain.damage import base_damage
from warband.domain.entities import Character, SoldierStack
from warband.domain.targeting import resolve_target
from warband.domain.units import is_character_alive, is_soldier_alive


def calculate_battle_damages(
    player: Character,
    enemy: Character,
    *,
    player_lead_acts: bool = True,
) -> List[DamageRecord]:
    """Return the damage records for one round in attack order."""
    records: List[DamageRecord] = []
    enemy_stacks = list(enemy.soldiers)
    player_stacks = list(player.soldiers)
    _side_attacks(player, enemy, enemy_stacks, records, lead_acts=player_lead_acts)
    _side_attacks(enemy, player, player_stacks, records, lead_acts=True)
    return records


def _side_attacks(
    attacker: Character,
    defender: Character,
    defender_stacks: List[SoldierStack],
    records: List[DamageRecord],
    *,
    lead_acts: bool,
) -> None:
    if lead_acts and is_character_alive(attacker):
        records.append(_strike(attacker.id, attacker.name, attacker.attack, defender, defender_stacks))
    for soldier in attacker.soldiers:
        if not is_soldier_alive(soldier):
            continue
        label = f"{attacker.name}'s {soldier.name}"
        records.append(_strike(soldier.id, label, soldier.attack, defender, defender_stacks))


def _strike(
    attacker_id: str,
    attacker_name: str,
    attack: int,
    defender: Character,
    defender_stacks: List[SoldierStack],
) -> DamageRecord:
    target = resolve_target(defender, defender_stacks)
    damage = base_damage(attack, target.defense)
    target.absorb(defender_stacks, damage)
    return target.to_record(attacker_id, attacker_name, damage)
