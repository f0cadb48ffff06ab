"""Factory helpers for runtime entities."""

from .character_factory import create_character, create_character_from_def_id, create_soldier_stack
from .id_factory import make_instance_id
from .item_factory import create_items, create_starting_inventory

__all__ = [
    "create_character",
    "create_character_from_def_id",
    "create_items",
    "create_soldier_stack",
    "create_starting_inventory",
    "make_instance_id",
]
