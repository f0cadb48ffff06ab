"""Soldier stack definition structures."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SoldierDef:
    """Per-unit stats and stack size for a soldier stack."""

    id: str
    name: str
    max_hp: int
    attack: int
    defense: int
    quantity: int
    max_quantity: int
