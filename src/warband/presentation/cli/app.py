"""Console runner that plays one battle automatically and prints its log."""
from __future__ import annotations

import logging
import secrets
from pathlib import Path
from typing import Any, Dict

from warband.core.rng import RNG
from warband.data.repositories import CharactersRepository, ItemsRepository, SoldiersRepository
from warband.domain.battle_models import BattleState
from warband.domain.units import first_alive_soldier
from warband.services import BattleController, BattleError, BattleService
from warband.services.factories import create_character_from_def_id, create_starting_inventory

from .config import load_config
from .render import format_log, format_outcome, format_side

PLAYER_CHARACTER_ID = "warrior"
ENEMY_CHARACTER_ID = "goblin"
_MAX_RANDOM_SEED = 2**31 - 1
# Drink a potion once the leader drops to this fraction of max HP.
_POTION_THRESHOLD = 0.4

logger = logging.getLogger(__name__)


def main(config_path: Path | None = None) -> int:
    """Run one automatic battle using the per-user options file."""
    config = load_config(config_path)
    logging.basicConfig(level=config["log_level"], format="%(levelname)s %(name)s: %(message)s")
    try:
        state = run_auto_battle(config)
    except BattleError as exc:
        print(f"Battle aborted: {exc}")
        return 1
    for line in format_log(state.battle_log):
        print(line)
    print()
    print(format_side(state.player))
    print(format_side(state.enemy))
    print(format_outcome(state))
    return 0


def build_initial_state(
    service: BattleService,
    seed: int,
    definitions_path: Path | str | None = None,
) -> BattleState:
    rng = RNG(seed)
    soldiers_repo = SoldiersRepository(definitions_path)
    characters_repo = CharactersRepository(definitions_path, soldiers_repo=soldiers_repo)
    items_repo = ItemsRepository(definitions_path)
    player = create_character_from_def_id(PLAYER_CHARACTER_ID, characters_repo, soldiers_repo, rng)
    enemy = create_character_from_def_id(ENEMY_CHARACTER_ID, characters_repo, soldiers_repo, rng)
    return service.initialize_battle(player, enemy, create_starting_inventory(items_repo))


def run_auto_battle(config: Dict[str, Any], definitions_path: Path | str | None = None) -> BattleState:
    """Play rounds until the battle ends or ``max_rounds`` is reached."""
    seed = config.get("seed")
    if seed is None:
        seed = secrets.randbelow(_MAX_RANDOM_SEED)
    logger.info(f"Starting battle with seed {seed}")

    service = BattleService()
    controller = BattleController(service)
    state = service.start_preparation_phase(build_initial_state(service, seed, definitions_path))
    if state.player.formation != config["formation"]:
        state = controller.choose(state, "formation")

    for _ in range(config["max_rounds"]):
        if state.is_game_over:
            break
        state = _choose_preparation(controller, state)
        state = controller.run_round(state)
    return state


def _choose_preparation(controller: BattleController, state: BattleState) -> BattleState:
    actions = controller.get_available_actions(state)
    player = state.player
    wounded = player.current_hp > 0 and player.current_hp <= player.max_hp * _POTION_THRESHOLD
    # Soldiers in front take the heal instead of the leader.
    lead_is_heal_target = player.formation == "player-first" or first_alive_soldier(player) is None
    if wounded and lead_is_heal_target and actions.can_use_item:
        return controller.choose(state, "item", actions.items[0].id)
    if actions.can_fight:
        return controller.choose(state, "fight")
    return state
