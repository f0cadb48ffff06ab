"""Utilities for creating deterministic instance identifiers."""
from __future__ import annotations

from warband.core.rng import RNG


def make_instance_id(prefix: str, rng: RNG) -> str:
    """Generate an id such as ``player_483920`` from the seeded RNG."""
    return f"{prefix}_{rng.randint(100000, 999999)}"
