"""Battle service driving the preparation/battle/resolution round cycle.

Every public method takes a ``BattleState`` and returns a new one; published
states are never mutated. Damage is computed during the battle phase and only
committed to characters and stacks during resolution.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, Sequence, Tuple

from warband.core.types import BattlePhase
from warband.domain.battle_models import (
    BattleLogEntry,
    BattleState,
    DamageRecord,
    PendingAction,
    PendingItemUse,
)
from warband.domain.combat import calculate_battle_damages
from warband.domain.damage import apply_damage_to_character, apply_damage_to_soldier_stack
from warband.domain.entities import Character, Item
from warband.domain.item_effects import can_use_item, soldier_as_character, use_healing_potion
from warband.domain.units import (
    first_alive_soldier,
    is_side_alive,
    replace_soldier,
    update_soldier_hp,
)
from warband.services.errors import (
    BattleAlreadyEndedError,
    CharacterDeadError,
    InsufficientItemsError,
    InvalidActionError,
    InvalidPhaseError,
)

logger = logging.getLogger(__name__)

PREPARATION_TIMER_SECONDS = 30


class BattleService:
    """Deterministic round engine for a player-versus-enemy battle."""

    def __init__(self, preparation_seconds: int = PREPARATION_TIMER_SECONDS) -> None:
        self._preparation_seconds = preparation_seconds

    # -----------------------
    # Battle Lifecycle
    # -----------------------
    def initialize_battle(self, player: Character, enemy: Character, items: Iterable[Item]) -> BattleState:
        logger.debug(f"Initializing battle: {player.name} vs {enemy.name}")
        return BattleState(
            player=player,
            enemy=enemy,
            player_items=tuple(items),
            current_round=1,
            current_phase="preparation",
            preparation_timer=self._preparation_seconds,
            preparation_action_taken=False,
        )

    def reset_battle(self, initial_state: BattleState) -> BattleState:
        """Restart from round one, keeping the entities carried by ``initial_state``."""
        logger.debug("Resetting battle")
        return replace(
            initial_state,
            current_round=1,
            current_phase="preparation",
            battle_log=(BattleLogEntry(phase="preparation", message="Battle restarted", round=1),),
            pending_actions=(),
            calculated_damages=(),
            is_game_over=False,
            winner=None,
            preparation_timer=self._preparation_seconds,
            preparation_action_taken=False,
            pending_item_use=None,
        )

    # -----------------------
    # Preparation Phase
    # -----------------------
    def start_preparation_phase(self, state: BattleState) -> BattleState:
        self._require_not_over(state)
        return replace(
            state,
            current_phase="preparation",
            preparation_timer=self._preparation_seconds,
            preparation_action_taken=False,
            battle_log=self._log(state, "preparation", f"Round {state.current_round} - preparation phase"),
        )

    def enter_battle(self, state: BattleState) -> BattleState:
        self._require_phase(state, "preparation", "enter battle")
        self._require_not_over(state)
        if not is_side_alive(state.player):
            raise CharacterDeadError(
                f"{state.player.name} has no living units and cannot enter battle.",
                {"character_id": state.player.id},
            )
        return replace(
            state,
            battle_log=self._log(state, "preparation", f"{state.player.name} chooses to fight"),
        )

    def select_item(self, state: BattleState, item_id: str) -> BattleState:
        """Queue an item for use when the battle phase runs."""
        self._require_phase(state, "preparation", "select an item")
        self._require_not_over(state)
        if state.pending_item_use is not None:
            raise InvalidActionError(
                "Only one item can be selected per round.",
                {"pending_item_id": state.pending_item_use.item_id},
            )
        item = state.find_item(item_id)
        if item is None:
            raise InvalidActionError(f"Unknown item '{item_id}'.", {"item_id": item_id})
        if not can_use_item(item):
            raise InsufficientItemsError(f"No {item.name} left.", {"item_id": item_id})

        return replace(
            state,
            pending_item_use=PendingItemUse(item_id=item.id, target_id=state.player.id),
            battle_log=self._log(state, "preparation", f"{state.player.name} readies {item.name}"),
        )

    def toggle_formation(self, state: BattleState) -> BattleState:
        self._require_not_over(state)
        formation = "player-first" if state.player.formation == "soldiers-first" else "soldiers-first"
        label = "soldiers in front" if formation == "soldiers-first" else "leader in front"
        return replace(
            state,
            player=replace(state.player, formation=formation),
            battle_log=self._log(state, "preparation", f"Formation switched: {label}"),
        )

    def decrease_preparation_timer(self, state: BattleState) -> BattleState:
        """Advance the preparation countdown by one tick.

        Reaching zero without a player action only logs a notice; the caller is
        responsible for moving on to the battle phase.
        """
        self._require_phase(state, "preparation", "tick the preparation timer")
        self._require_not_over(state)
        new_timer = max(0, state.preparation_timer - 1)
        if new_timer == 0 and state.preparation_timer > 0 and not state.preparation_action_taken:
            return replace(
                state,
                preparation_timer=0,
                battle_log=self._log(state, "preparation", "Preparation time is up, advancing to battle"),
            )
        return replace(state, preparation_timer=new_timer)

    def mark_preparation_action_taken(self, state: BattleState) -> BattleState:
        self._require_phase(state, "preparation", "mark a preparation action")
        self._require_not_over(state)
        return replace(state, preparation_action_taken=True)

    def process_enemy_turn(self, state: BattleState) -> BattleState:
        """Record the enemy's intent; its attacks are generated by the battle phase."""
        if state.current_phase not in ("preparation", "battle"):
            raise InvalidPhaseError(
                f"The enemy cannot act during the {state.current_phase} phase.",
                {"phase": state.current_phase},
            )
        self._require_not_over(state)
        if not is_side_alive(state.enemy):
            raise CharacterDeadError(f"{state.enemy.name} has no living units.", {"character_id": state.enemy.id})
        if state.current_phase != "preparation":
            return state
        return replace(
            state,
            battle_log=self._log(state, "preparation", f"{state.enemy.name} chooses to fight"),
        )

    # -----------------------
    # Battle Phase
    # -----------------------
    def start_battle_phase(self, state: BattleState) -> BattleState:
        """Enter the battle phase and run it through to resolution."""
        self._require_phase(state, "preparation", "start the battle phase")
        logger.debug(f"Round {state.current_round}: battle phase")
        battle_state = replace(
            state,
            current_phase="battle",
            battle_log=self._log(state, "battle", f"Round {state.current_round} - battle phase"),
        )
        return self.auto_execute_battle_phase(battle_state)

    def auto_execute_battle_phase(self, state: BattleState) -> BattleState:
        self._require_phase(state, "battle", "run the battle phase")
        self._require_not_over(state)

        working = state
        player_lead_acts = True
        if state.pending_item_use is not None:
            working = self.execute_pending_item_use(working)
            working = replace(
                working,
                battle_log=self._log(
                    working, "battle", f"{working.player.name} used an item and does not attack this round"
                ),
            )
            player_lead_acts = False

        records = calculate_battle_damages(working.player, working.enemy, player_lead_acts=player_lead_acts)
        entries = [
            self._entry(working, "battle", self._describe_pending_damage(record))
            for record in records
            if record.damage > 0
        ]
        working = replace(
            working,
            pending_actions=tuple(PendingAction(r.attacker_id, r.target_id) for r in records),
            calculated_damages=tuple(records),
            battle_log=working.battle_log + tuple(entries),
        )
        return self.start_resolution_phase(working)

    def execute_pending_item_use(self, state: BattleState) -> BattleState:
        """Consume the item chosen during preparation."""
        self._require_phase(state, "battle", "use an item")
        self._require_not_over(state)
        pending = state.pending_item_use
        if pending is None:
            return state

        item_index, item = self._find_item(state.player_items, pending.item_id)
        if not can_use_item(item):
            raise InsufficientItemsError(f"No {item.name} left.", {"item_id": item.id})

        player, enemy = state.player, state.enemy
        front = first_alive_soldier(player) if player.formation == "soldiers-first" else None
        if front is not None:
            result = use_healing_potion(item, soldier_as_character(front, player.side))
            if result is None:
                raise InvalidActionError(f"{item.name} cannot be used.", {"item_id": item.id})
            healed = update_soldier_hp(front, result.target.current_hp)
            player = replace_soldier(player, healed)
            target_name = front.name
        else:
            if pending.target_id == player.id:
                target = player
            elif pending.target_id == enemy.id:
                target = enemy
            else:
                raise InvalidActionError(f"Unknown item target '{pending.target_id}'.", {"target_id": pending.target_id})
            result = use_healing_potion(item, target)
            if result is None:
                raise InvalidActionError(f"{item.name} cannot be used.", {"item_id": item.id})
            if target.id == player.id:
                player = result.target
            else:
                enemy = result.target
            target_name = target.name

        message = f"{player.name} used {item.name} on {target_name}"
        if result.had_effect:
            message += f", restoring {result.hp_delta} HP"
        else:
            message += ", but it had no effect"

        items = list(state.player_items)
        items[item_index] = result.item
        return replace(
            state,
            player=player,
            enemy=enemy,
            player_items=tuple(items),
            pending_item_use=None,
            battle_log=self._log(state, "battle", message),
        )

    # -----------------------
    # Resolution Phase
    # -----------------------
    def start_resolution_phase(self, state: BattleState) -> BattleState:
        """Commit the round's damage records and decide whether the battle continues."""
        self._require_phase(state, "battle", "start the resolution phase")

        player, enemy = state.player, state.enemy
        entries = []
        for record in state.calculated_damages:
            if record.target_id == player.id:
                player = self._apply_record(player, record)
            elif record.target_id == enemy.id:
                enemy = self._apply_record(enemy, record)
            else:
                raise InvalidActionError(
                    f"Damage record targets unknown character '{record.target_id}'.",
                    {"target_id": record.target_id},
                )
            entries.append(self._entry(state, "resolution", self._describe_applied_damage(record)))

        player_alive = is_side_alive(player)
        enemy_alive = is_side_alive(enemy)
        resolved = replace(
            state,
            player=player,
            enemy=enemy,
            current_phase="resolution",
            pending_actions=(),
            calculated_damages=(),
            battle_log=state.battle_log + tuple(entries),
        )

        if player_alive and enemy_alive:
            return self.next_round(resolved)

        # A mutual kill counts as a loss for the player.
        if player_alive:
            winner, message = "player", f"Battle over! {player.name} wins!"
        else:
            winner, message = "enemy", f"Battle over! {enemy.name} wins!"
        logger.info(f"Round {state.current_round}: {message}")
        return replace(
            resolved,
            is_game_over=True,
            winner=winner,
            battle_log=self._log(resolved, "resolution", message),
        )

    def next_round(self, state: BattleState) -> BattleState:
        return self._advance_round(state, announce=True)

    def auto_proceed_to_next_round(self, state: BattleState) -> BattleState:
        """Advance like ``next_round`` without writing a round-complete log line."""
        return self._advance_round(state, announce=False)

    # -----------------------
    # Helpers
    # -----------------------
    def _advance_round(self, state: BattleState, *, announce: bool) -> BattleState:
        self._require_phase(state, "resolution", "advance to the next round")
        self._require_not_over(state)
        log = state.battle_log
        if announce:
            log = self._log(state, "resolution", f"Round {state.current_round} complete")
        logger.debug(f"Advancing to round {state.current_round + 1}")
        return replace(
            state,
            current_round=state.current_round + 1,
            current_phase="preparation",
            preparation_timer=self._preparation_seconds,
            preparation_action_taken=False,
            battle_log=log,
        )

    @staticmethod
    def _apply_record(character: Character, record: DamageRecord) -> Character:
        if record.target_type == "character":
            return apply_damage_to_character(character, record.damage)
        soldier = character.find_soldier(record.soldier_id or "")
        if soldier is None:
            raise InvalidActionError(
                f"{character.name} has no soldier stack '{record.soldier_id}'.",
                {"soldier_id": record.soldier_id},
            )
        return replace_soldier(character, apply_damage_to_soldier_stack(soldier, record.damage))

    @staticmethod
    def _find_item(items: Sequence[Item], item_id: str) -> Tuple[int, Item]:
        for index, item in enumerate(items):
            if item.id == item_id:
                return index, item
        raise InvalidActionError(f"Unknown item '{item_id}'.", {"item_id": item_id})

    @staticmethod
    def _describe_pending_damage(record: DamageRecord) -> str:
        if record.target_type == "soldier":
            target = f"{record.target_name}'s {record.soldier_name}"
        else:
            target = record.target_name
        return f"{target} will take {record.damage} damage from {record.attacker_name}"

    @staticmethod
    def _describe_applied_damage(record: DamageRecord) -> str:
        if record.target_type == "soldier":
            target = f"{record.target_name}'s {record.soldier_name}"
        else:
            target = record.target_name
        return f"{record.attacker_name} dealt {record.damage} damage to {target}"

    @staticmethod
    def _entry(state: BattleState, phase: BattlePhase, message: str) -> BattleLogEntry:
        return BattleLogEntry(phase=phase, message=message, round=state.current_round)

    def _log(self, state: BattleState, phase: BattlePhase, message: str) -> Tuple[BattleLogEntry, ...]:
        return state.battle_log + (self._entry(state, phase, message),)

    @staticmethod
    def _require_phase(state: BattleState, phase: BattlePhase, action: str) -> None:
        if state.current_phase != phase:
            logger.debug(f"Rejected '{action}' during {state.current_phase} phase")
            raise InvalidPhaseError(
                f"Cannot {action} during the {state.current_phase} phase.",
                {"phase": state.current_phase, "required_phase": phase},
            )

    @staticmethod
    def _require_not_over(state: BattleState) -> None:
        if state.is_game_over:
            logger.debug("Rejected operation on a finished battle")
            raise BattleAlreadyEndedError("The battle has already ended.", {"winner": state.winner})
