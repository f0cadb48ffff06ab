"""Controllers for driving the battle engine from a UI."""

from .battle_controller import AvailableActions, BattleController

__all__ = ["AvailableActions", "BattleController"]
