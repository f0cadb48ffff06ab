"""Repository exports."""

from .characters_repo import CharactersRepository
from .items_repo import ItemsRepository
from .soldiers_repo import SoldiersRepository

__all__ = [
    "CharactersRepository",
    "ItemsRepository",
    "SoldiersRepository",
]
