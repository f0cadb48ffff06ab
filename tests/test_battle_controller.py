"""Battle controller drives the engine without any presentation dependency."""
from __future__ import annotations

from dataclasses import replace

import pytest

from warband.domain.battle_models import BattleState
from warband.services import BattleController, BattleService
from warband.services.errors import InvalidPhaseError
from tests.helpers.battle_builders import make_enemy, make_player, make_potion


def _build_battle_controller(preparation_seconds: int = 30, **enemy_overrides) -> tuple[BattleController, BattleState]:
    service = BattleService(preparation_seconds=preparation_seconds)
    controller = BattleController(service)
    state = service.initialize_battle(make_player(), make_enemy(**enemy_overrides), [make_potion(quantity=1)])
    return controller, service.start_preparation_phase(state)


def test_choose_fight_marks_action_taken() -> None:
    controller, state = _build_battle_controller()

    state = controller.choose(state, "fight")

    assert state.preparation_action_taken is True
    assert state.battle_log[-1].message == "Warrior chooses to fight"


def test_choose_item_queues_item_and_marks_action() -> None:
    controller, state = _build_battle_controller()

    state = controller.choose(state, "item", item_id="healing_potion")

    assert state.pending_item_use is not None
    assert state.preparation_action_taken is True


def test_choose_formation_does_not_count_as_action() -> None:
    controller, state = _build_battle_controller()

    state = controller.choose(state, "formation")

    assert state.player.formation == "soldiers-first"
    assert state.preparation_action_taken is False


def test_choose_rejects_bad_input() -> None:
    controller, state = _build_battle_controller()

    with pytest.raises(ValueError):
        controller.choose(state, "item")
    with pytest.raises(ValueError):
        controller.choose(state, "flee")  # type: ignore[arg-type]


def test_tick_counts_down_without_running_round() -> None:
    controller, state = _build_battle_controller()

    state = controller.tick(state)

    assert state.preparation_timer == 29
    assert state.current_round == 1
    assert state.current_phase == "preparation"


def test_timer_expiry_runs_the_round_automatically() -> None:
    controller, state = _build_battle_controller()

    for _ in range(30):
        state = controller.tick(state)

    messages = [entry.message for entry in state.battle_log]
    assert "Preparation time is up, advancing to battle" in messages
    assert state.current_round == 2
    assert state.current_phase == "preparation"
    assert state.preparation_timer == 30
    assert state.enemy.current_hp == 63
    assert messages[-1] == "Round 2 - preparation phase"


def test_timer_expiry_after_action_waits_for_caller() -> None:
    controller, state = _build_battle_controller(preparation_seconds=2)
    state = controller.choose(state, "fight")

    state = controller.tick(controller.tick(state))

    assert state.preparation_timer == 0
    assert state.current_round == 1


def test_run_round_stops_at_game_over() -> None:
    controller, state = _build_battle_controller(current_hp=5)

    state = controller.run_round(controller.choose(state, "fight"))

    assert state.is_game_over is True
    assert state.winner == "player"
    assert state.current_phase == "resolution"


def test_available_actions_follow_state() -> None:
    controller, state = _build_battle_controller()

    actions = controller.get_available_actions(state)
    assert actions.can_fight is True
    assert actions.can_use_item is True
    assert actions.can_toggle_formation is True
    assert [item.id for item in actions.items] == ["healing_potion"]

    queued = controller.choose(state, "item", item_id="healing_potion")
    assert controller.get_available_actions(queued).can_use_item is False

    finished = replace(state, is_game_over=True, winner="enemy")
    finished_actions = controller.get_available_actions(finished)
    assert finished_actions.can_fight is False
    assert finished_actions.can_toggle_formation is False
    assert finished_actions.items == []


def test_spent_potion_is_no_longer_offered() -> None:
    controller, state = _build_battle_controller()

    state = controller.run_round(controller.choose(state, "item", item_id="healing_potion"))

    assert state.player_items[0].quantity == 0
    assert controller.get_available_actions(state).can_use_item is False


def test_tick_outside_preparation_is_rejected() -> None:
    controller, state = _build_battle_controller()

    with pytest.raises(InvalidPhaseError):
        controller.tick(replace(state, current_phase="battle"))


def test_restart_resets_round_counter() -> None:
    controller, initial = _build_battle_controller()
    played = controller.run_round(controller.choose(initial, "fight"))

    restarted = controller.restart(initial)

    assert played.current_round == 2
    assert restarted.current_round == 1
    assert [entry.message for entry in restarted.battle_log] == ["Battle restarted"]
