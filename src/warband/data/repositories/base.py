"""Base repository implementation for JSON definition data."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Generic, TypeVar

from warband.data import paths
from warband.data.errors import DataValidationError
from warband.data.json_loader import load_definition_table

T = TypeVar("T")


class RepositoryBase(Generic[T]):
    """Common caching, loading and field validation for definition repositories."""

    def __init__(self, filename: str, base_path: Path | str | None = None) -> None:
        self._filename = filename
        self._base_path = Path(base_path) if base_path is not None else None
        self._definitions: Dict[str, T] | None = None

    def _get_file_path(self) -> Path:
        return paths.get_definitions_path(self._base_path) / self._filename

    def _build(self, raw: dict[str, object]) -> Dict[str, T]:
        """Convert a raw dict into typed definitions."""
        raise NotImplementedError

    def _ensure_loaded(self) -> Dict[str, T]:
        if self._definitions is None:
            self._definitions = self._build(load_definition_table(self._get_file_path()))
        return self._definitions

    def get(self, def_id: str) -> T:
        """Return a definition by id."""
        definitions = self._ensure_loaded()
        try:
            return definitions[def_id]
        except KeyError as exc:
            raise KeyError(def_id) from exc

    def all(self) -> list[T]:
        """Return all definitions sorted deterministically by id."""
        definitions = self._ensure_loaded()
        return [definitions[key] for key in sorted(definitions)]

    @staticmethod
    def _require_mapping(value: object, context: str) -> dict[str, object]:
        if not isinstance(value, dict):
            raise DataValidationError(f"{context} must be an object/dict.")
        return value

    @staticmethod
    def _require_str(value: object, context: str) -> str:
        if not isinstance(value, str) or not value:
            raise DataValidationError(f"{context} must be a non-empty string.")
        return value

    @staticmethod
    def _require_int(value: object, context: str, *, minimum: int = 0) -> int:
        # bool is an int subclass; reject it explicitly.
        if isinstance(value, bool) or not isinstance(value, int):
            raise DataValidationError(f"{context} must be an integer.")
        if value < minimum:
            raise DataValidationError(f"{context} must be >= {minimum}.")
        return value

    @staticmethod
    def _require_choice(value: object, choices: tuple[str, ...], context: str) -> str:
        if value not in choices:
            raise DataValidationError(f"{context} must be one of {list(choices)}.")
        return value  # type: ignore[return-value]

    @staticmethod
    def _assert_fields(
        payload: dict[str, object],
        required: set[str],
        context: str,
        optional: set[str] | None = None,
    ) -> None:
        allowed = required | (optional or set())
        actual_keys = set(payload.keys())
        missing = required - actual_keys
        unknown = actual_keys - allowed
        if missing or unknown:
            pieces = []
            if missing:
                pieces.append(f"missing fields: {sorted(missing)}")
            if unknown:
                pieces.append(f"unknown fields: {sorted(unknown)}")
            raise DataValidationError(f"{context} has schema issues ({'; '.join(pieces)}).")
