"""CLI configuration helpers for options persistence."""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
_FORMATIONS = ("soldiers-first", "player-first")

DEFAULT_CONFIG: Dict[str, Any] = {
    "log_level": "WARNING",
    "max_rounds": 50,
    "formation": "player-first",
    "seed": None,
}


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "Warband"
        return Path.home() / "Warband"
    return Path.home() / ".config" / "warband"


def get_default_config_path() -> Path:
    return get_user_data_dir() / "config.json"


def normalize_config(raw: object) -> Dict[str, Any]:
    """Return a complete config, replacing unknown or malformed values with defaults."""
    config = dict(DEFAULT_CONFIG)
    if not isinstance(raw, dict):
        return config

    level = raw.get("log_level")
    if isinstance(level, str) and level.upper() in _LOG_LEVELS:
        config["log_level"] = level.upper()

    max_rounds = raw.get("max_rounds")
    if isinstance(max_rounds, int) and not isinstance(max_rounds, bool) and max_rounds > 0:
        config["max_rounds"] = max_rounds

    if raw.get("formation") in _FORMATIONS:
        config["formation"] = raw["formation"]

    seed = raw.get("seed")
    if isinstance(seed, int) and not isinstance(seed, bool):
        config["seed"] = seed
    return config


def load_config(path: Path | None = None) -> Dict[str, Any]:
    """Load config from disk or return defaults."""
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return dict(DEFAULT_CONFIG)
    return normalize_config(raw)


def save_config(config: Dict[str, Any], path: Path | None = None) -> None:
    """Persist config to disk."""
    config_path = path or get_default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    payload = normalize_config(config)
    config_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
