"""Lead character definitions repository."""
from __future__ import annotations

from pathlib import Path
from typing import Dict

from warband.data.errors import DataReferenceError, DataValidationError
from warband.data.repositories.base import RepositoryBase
from warband.data.repositories.soldiers_repo import SoldiersRepository
from warband.domain.defs import CharacterDef

_SIDES = ("player", "enemy")
_FORMATIONS = ("soldiers-first", "player-first")


class CharactersRepository(RepositoryBase[CharacterDef]):
    """Loads character definitions and checks their soldier references."""

    def __init__(
        self,
        base_path: Path | str | None = None,
        soldiers_repo: SoldiersRepository | None = None,
    ) -> None:
        super().__init__("characters.json", base_path)
        self._soldiers_repo = soldiers_repo

    def _build(self, raw: dict[str, object]) -> Dict[str, CharacterDef]:
        characters: Dict[str, CharacterDef] = {}
        for raw_id, payload in raw.items():
            context = f"character '{raw_id}'"
            data = self._require_mapping(payload, context)
            self._assert_fields(
                data,
                {"name", "side", "max_hp", "attack", "defense"},
                context,
                optional={"formation", "soldier_ids"},
            )
            soldier_ids = self._parse_soldier_ids(data.get("soldier_ids", []), context)
            characters[raw_id] = CharacterDef(
                id=raw_id,
                name=self._require_str(data["name"], f"{context} name"),
                side=self._require_choice(data["side"], _SIDES, f"{context} side"),  # type: ignore[arg-type]
                max_hp=self._require_int(data["max_hp"], f"{context} max_hp", minimum=1),
                attack=self._require_int(data["attack"], f"{context} attack"),
                defense=self._require_int(data["defense"], f"{context} defense"),
                formation=self._require_choice(  # type: ignore[arg-type]
                    data.get("formation", "player-first"), _FORMATIONS, f"{context} formation"
                ),
                soldier_ids=soldier_ids,
            )
        return characters

    def _parse_soldier_ids(self, value: object, context: str) -> tuple[str, ...]:
        if not isinstance(value, list):
            raise DataValidationError(f"{context} soldier_ids must be a list.")
        soldier_ids = tuple(self._require_str(entry, f"{context} soldier_ids entry") for entry in value)
        if self._soldiers_repo is not None:
            for soldier_id in soldier_ids:
                try:
                    self._soldiers_repo.get(soldier_id)
                except KeyError as exc:
                    raise DataReferenceError(f"{context} references unknown soldier '{soldier_id}'.") from exc
        return soldier_ids
