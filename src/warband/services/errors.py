"""Service-layer exceptions."""
from __future__ import annotations

from typing import Any, Mapping


class FactoryError(Exception):
    """Raised when a runtime entity cannot be created."""


class BattleError(Exception):
    """Base class for rejected battle operations.

    These signal a caller asking for something the current state does not allow.
    The engine never retries them.
    """

    def __init__(self, message: str, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.context: dict[str, Any] = dict(context or {})


class InvalidPhaseError(BattleError):
    """Raised when an operation is attempted outside its required phase."""


class BattleAlreadyEndedError(BattleError):
    """Raised when a state-changing operation is attempted after the battle ended."""


class InvalidActionError(BattleError):
    """Raised for unknown item or target ids and duplicate item selections."""


class InsufficientItemsError(BattleError):
    """Raised when an item has no remaining quantity."""


class CharacterDeadError(BattleError):
    """Raised when an action needs a side that can no longer fight."""
