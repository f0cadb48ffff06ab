"""Formation-based target resolution."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Union

from warband.domain.battle_models import DamageRecord
from warband.domain.damage import apply_damage_to_soldier_stack
from warband.domain.entities import Character, SoldierStack
from warband.domain.units import is_soldier_alive


@dataclass(frozen=True, slots=True)
class CharacterTarget:
    """The attack lands on the defending lead character."""

    character: Character

    @property
    def defense(self) -> int:
        return self.character.defense

    def absorb(self, stacks: List[SoldierStack], damage: int) -> None:
        # Character HP is only committed during resolution.
        return None

    def to_record(self, attacker_id: str, attacker_name: str, damage: int) -> DamageRecord:
        return DamageRecord(
            attacker_id=attacker_id,
            attacker_name=attacker_name,
            target_id=self.character.id,
            target_name=self.character.name,
            damage=damage,
            target_type="character",
        )


@dataclass(frozen=True, slots=True)
class SoldierTarget:
    """The attack lands on one of the defender's soldier stacks."""

    owner: Character
    soldier: SoldierStack

    @property
    def defense(self) -> int:
        return self.soldier.defense

    def absorb(self, stacks: List[SoldierStack], damage: int) -> None:
        """Apply ``damage`` to the matching stack inside a round simulation."""
        for index, stack in enumerate(stacks):
            if stack.id == self.soldier.id:
                stacks[index] = apply_damage_to_soldier_stack(stack, damage)
                return

    def to_record(self, attacker_id: str, attacker_name: str, damage: int) -> DamageRecord:
        return DamageRecord(
            attacker_id=attacker_id,
            attacker_name=attacker_name,
            target_id=self.owner.id,
            target_name=self.owner.name,
            damage=damage,
            target_type="soldier",
            soldier_id=self.soldier.id,
            soldier_name=self.soldier.name,
        )


AttackTarget = Union[CharacterTarget, SoldierTarget]


def resolve_target(defender: Character, soldiers: Sequence[SoldierStack] | None = None) -> AttackTarget:
    """Pick what an incoming attack hits.

    ``soldiers`` is the defender's current stack state, which may differ from
    ``defender.soldiers`` while a round is being simulated. A soldiers-first
    defender is screened by its first living stack in declaration order.
    """
    stacks = defender.soldiers if soldiers is None else soldiers
    if defender.formation == "soldiers-first":
        for soldier in stacks:
            if is_soldier_alive(soldier):
                return SoldierTarget(owner=defender, soldier=soldier)
    return CharacterTarget(character=defender)
