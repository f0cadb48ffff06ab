"""Soldier stack definitions repository."""
from __future__ import annotations

from pathlib import Path
from typing import Dict

from warband.data.errors import DataValidationError
from warband.data.repositories.base import RepositoryBase
from warband.domain.defs import SoldierDef


class SoldiersRepository(RepositoryBase[SoldierDef]):
    """Loads and validates soldier stack definitions."""

    def __init__(self, base_path: Path | str | None = None) -> None:
        super().__init__("soldiers.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, SoldierDef]:
        soldiers: Dict[str, SoldierDef] = {}
        for raw_id, payload in raw.items():
            context = f"soldier '{raw_id}'"
            data = self._require_mapping(payload, context)
            self._assert_fields(
                data,
                {"name", "max_hp", "attack", "defense", "quantity", "max_quantity"},
                context,
            )
            quantity = self._require_int(data["quantity"], f"{context} quantity")
            max_quantity = self._require_int(data["max_quantity"], f"{context} max_quantity", minimum=1)
            if quantity > max_quantity:
                raise DataValidationError(f"{context} quantity exceeds max_quantity.")

            soldiers[raw_id] = SoldierDef(
                id=raw_id,
                name=self._require_str(data["name"], f"{context} name"),
                max_hp=self._require_int(data["max_hp"], f"{context} max_hp", minimum=1),
                attack=self._require_int(data["attack"], f"{context} attack"),
                defense=self._require_int(data["defense"], f"{context} defense"),
                quantity=quantity,
                max_quantity=max_quantity,
            )
        return soldiers
