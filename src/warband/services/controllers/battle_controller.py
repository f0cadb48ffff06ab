"""UI-agnostic battle controller that separates state progression from rendering."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Literal

from warband.domain.battle_models import BattleState
from warband.domain.entities import Item
from warband.domain.item_effects import can_use_item
from warband.domain.units import is_side_alive
from warband.services.battle_service import BattleService

logger = logging.getLogger(__name__)

PreparationChoice = Literal["fight", "item", "formation"]


@dataclass(frozen=True, slots=True)
class AvailableActions:
    """What the player may do in the current state."""

    can_fight: bool
    can_use_item: bool
    can_toggle_formation: bool
    items: List[Item]


class BattleController:
    """
    Collaborator-facing wrapper around BattleService.

    Responsibilities:
    - Translate player intents into engine calls, marking the preparation action
    - Drive countdown ticks and the automatic advance when time runs out
    - Run a full round (enemy intent, battle phase, next preparation header)

    Non-responsibilities (handled by presentation layer):
    - Wall-clock scheduling of ticks
    - Rendering the battle log or prompting for input
    """

    def __init__(self, battle_service: BattleService) -> None:
        self._service = battle_service

    def get_available_actions(self, state: BattleState) -> AvailableActions:
        in_preparation = state.current_phase == "preparation" and not state.is_game_over
        items = [item for item in state.player_items if can_use_item(item)] if in_preparation else []
        return AvailableActions(
            can_fight=in_preparation and is_side_alive(state.player),
            can_use_item=in_preparation and state.pending_item_use is None and bool(items),
            can_toggle_formation=not state.is_game_over,
            items=items,
        )

    def choose(self, state: BattleState, choice: PreparationChoice, item_id: str | None = None) -> BattleState:
        """Apply a preparation-phase choice and flag that the player acted."""
        if choice == "fight":
            state = self._service.enter_battle(state)
        elif choice == "item":
            if not item_id:
                raise ValueError("Item choice requires item_id.")
            state = self._service.select_item(state, item_id)
        elif choice == "formation":
            return self._service.toggle_formation(state)
        else:
            raise ValueError(f"Unknown choice: {choice}")
        return self._service.mark_preparation_action_taken(state)

    def tick(self, state: BattleState) -> BattleState:
        """Advance the countdown one step, running the round if it expired untouched."""
        state = self._service.decrease_preparation_timer(state)
        if state.preparation_timer == 0 and not state.preparation_action_taken:
            logger.debug(f"Round {state.current_round}: preparation timed out")
            return self.run_round(state)
        return state

    def run_round(self, state: BattleState) -> BattleState:
        """Play the battle and resolution phases, then open the next preparation phase."""
        state = self._service.process_enemy_turn(state)
        state = self._service.start_battle_phase(state)
        if state.is_game_over:
            return state
        return self._service.start_preparation_phase(state)

    def restart(self, initial_state: BattleState) -> BattleState:
        return self._service.reset_battle(initial_state)
