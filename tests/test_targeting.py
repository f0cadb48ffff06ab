from __future__ import annotations

from warband.domain.targeting import CharacterTarget, SoldierTarget, resolve_target
from tests.helpers.battle_builders import make_enemy, make_soldier


def test_player_first_defender_is_hit_directly() -> None:
    enemy = make_enemy(soldiers=[make_soldier()], formation="player-first")

    target = resolve_target(enemy)

    assert isinstance(target, CharacterTarget)
    assert target.defense == enemy.defense


def test_soldiers_first_defender_is_screened_by_first_living_stack() -> None:
    depleted = make_soldier("dead", quantity=0, current_hp=0)
    screen = make_soldier("screen", defense=7)
    enemy = make_enemy(soldiers=[depleted, screen, make_soldier("rear")], formation="soldiers-first")

    target = resolve_target(enemy)

    assert isinstance(target, SoldierTarget)
    assert target.soldier.id == "screen"
    assert target.defense == 7


def test_soldiers_first_without_living_stacks_falls_back_to_character() -> None:
    enemy = make_enemy(soldiers=[make_soldier(quantity=0, current_hp=0)], formation="soldiers-first")

    assert isinstance(resolve_target(enemy), CharacterTarget)


def test_resolution_uses_supplied_stack_state() -> None:
    enemy = make_enemy(soldiers=[make_soldier("screen")], formation="soldiers-first")
    emptied = [make_soldier("screen", quantity=0, current_hp=0)]

    assert isinstance(resolve_target(enemy, emptied), CharacterTarget)


def test_soldier_target_records_owner_and_stack() -> None:
    enemy = make_enemy(soldiers=[make_soldier("screen", name="Raiders")], formation="soldiers-first")
    target = resolve_target(enemy)

    record = target.to_record("player_1", "Warrior", 18)

    assert record.target_id == enemy.id
    assert record.target_type == "soldier"
    assert record.soldier_id == "screen"
    assert record.soldier_name == "Raiders"
    assert record.damage == 18


def test_soldier_target_absorb_updates_simulated_stacks() -> None:
    stacks = [make_soldier("screen", quantity=2)]
    enemy = make_enemy(soldiers=stacks, formation="soldiers-first")

    resolve_target(enemy, stacks).absorb(stacks, 40)

    assert stacks[0].quantity == 1
    assert stacks[0].current_hp == 20
