"""Items repository."""
from __future__ import annotations

from pathlib import Path
from typing import Dict

from warband.data.repositories.base import RepositoryBase
from warband.domain.defs import ItemDef

_ITEM_TYPES = ("healing_potion",)


class ItemsRepository(RepositoryBase[ItemDef]):
    """Loads and validates consumable definitions and their starting stock."""

    def __init__(self, base_path: Path | str | None = None) -> None:
        super().__init__("items.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, ItemDef]:
        items: Dict[str, ItemDef] = {}
        for raw_id, payload in raw.items():
            context = f"item '{raw_id}'"
            item_data = self._require_mapping(payload, context)
            self._assert_fields(item_data, {"name", "type", "effect", "quantity"}, context)

            effect = self._require_mapping(item_data["effect"], f"{context} effect")
            self._assert_fields(effect, set(), f"{context} effect", optional={"heal"})

            items[raw_id] = ItemDef(
                id=raw_id,
                name=self._require_str(item_data["name"], f"{context} name"),
                type=self._require_choice(item_data["type"], _ITEM_TYPES, f"{context} type"),  # type: ignore[arg-type]
                heal=self._require_int(effect.get("heal", 0), f"{context} effect heal"),
                quantity=self._require_int(item_data["quantity"], f"{context} quantity"),
            )
        return items
