"""Service layer exports."""

from .battle_service import BattleService
from .controllers import AvailableActions, BattleController
from .errors import (
    BattleAlreadyEndedError,
    BattleError,
    CharacterDeadError,
    FactoryError,
    InsufficientItemsError,
    InvalidActionError,
    InvalidPhaseError,
)

__all__ = [
    "AvailableActions",
    "BattleAlreadyEndedError",
    "BattleController",
    "BattleError",
    "BattleService",
    "CharacterDeadError",
    "FactoryError",
    "InsufficientItemsError",
    "InvalidActionError",
    "InvalidPhaseError",
]
