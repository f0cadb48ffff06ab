"""Factory for creating characters and their soldier stacks from definitions."""
from __future__ import annotations

from typing import Sequence

from warband.core.rng import RNG
from warband.data.repositories import CharactersRepository, SoldiersRepository
from warband.domain.defs import CharacterDef, SoldierDef
from warband.domain.entities import Character, SoldierStack
from warband.services.errors import FactoryError

from .id_factory import make_instance_id


def create_soldier_stack(soldier_def: SoldierDef, instance_id: str) -> SoldierStack:
    """Instantiate a stack with a fresh front unit; an empty stack starts at 0 HP."""
    return SoldierStack(
        id=instance_id,
        name=soldier_def.name,
        max_hp=soldier_def.max_hp,
        current_hp=soldier_def.max_hp if soldier_def.quantity > 0 else 0,
        attack=soldier_def.attack,
        defense=soldier_def.defense,
        quantity=soldier_def.quantity,
        max_quantity=soldier_def.max_quantity,
    )


def create_character(
    character_def: CharacterDef,
    instance_id: str,
    soldier_defs: Sequence[SoldierDef] = (),
) -> Character:
    """Instantiate a character at full HP, numbering its stacks in declaration order."""
    soldiers = tuple(
        create_soldier_stack(soldier_def, f"{instance_id}-soldier-{index}")
        for index, soldier_def in enumerate(soldier_defs, start=1)
    )
    return Character(
        id=instance_id,
        name=character_def.name,
        max_hp=character_def.max_hp,
        current_hp=character_def.max_hp,
        attack=character_def.attack,
        defense=character_def.defense,
        side=character_def.side,
        soldiers=soldiers,
        formation=character_def.formation,
    )


def create_character_from_def_id(
    character_id: str,
    characters_repo: CharactersRepository,
    soldiers_repo: SoldiersRepository,
    rng: RNG,
) -> Character:
    """Instantiate a character and its stacks using the provided repositories."""
    try:
        character_def = characters_repo.get(character_id)
    except KeyError as exc:
        raise FactoryError(f"Character '{character_id}' not found.") from exc

    soldier_defs = []
    for soldier_id in character_def.soldier_ids:
        try:
            soldier_defs.append(soldiers_repo.get(soldier_id))
        except KeyError as exc:
            raise FactoryError(
                f"Soldier '{soldier_id}' not found for character '{character_id}'."
            ) from exc

    return create_character(character_def, make_instance_id(character_def.side, rng), soldier_defs)
