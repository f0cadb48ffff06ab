import json
from pathlib import Path

import pytest

from warband.data.errors import DataLoadError, DataReferenceError, DataValidationError
from warband.data.repositories import CharactersRepository, ItemsRepository, SoldiersRepository


def test_bundled_definitions_load() -> None:
    soldiers_repo = SoldiersRepository()
    characters_repo = CharactersRepository(soldiers_repo=soldiers_repo)
    items_repo = ItemsRepository()

    warrior = characters_repo.get("warrior")
    goblin = characters_repo.get("goblin")

    assert warrior.side == "player"
    assert (warrior.max_hp, warrior.attack, warrior.defense) == (100, 20, 5)
    assert warrior.soldier_ids == ("footmen",)
    assert goblin.side == "enemy"
    assert goblin.formation == "soldiers-first"
    assert soldiers_repo.get("footmen").quantity == 5
    assert items_repo.get("healing_potion").heal == 30


def test_soldiers_repo_loads_and_sorts(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(
        definitions_dir / "soldiers.json",
        {
            "pikes": _soldier_payload("Pikes"),
            "archers": _soldier_payload("Archers", quantity=2, max_quantity=4),
        },
    )

    repo = SoldiersRepository(base_path=definitions_dir)

    assert [soldier.id for soldier in repo.all()] == ["archers", "pikes"]
    archers = repo.get("archers")
    assert archers.quantity == 2
    assert archers.max_quantity == 4


def test_soldiers_repo_rejects_quantity_above_max(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(definitions_dir / "soldiers.json", {"pikes": _soldier_payload("Pikes", quantity=6, max_quantity=5)})

    with pytest.raises(DataValidationError):
        SoldiersRepository(base_path=definitions_dir).all()


def test_soldiers_repo_rejects_missing_and_unknown_fields(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    payload = _soldier_payload("Pikes")
    del payload["attack"]
    payload["morale"] = 3
    _write_json(definitions_dir / "soldiers.json", {"pikes": payload})

    with pytest.raises(DataValidationError) as excinfo:
        SoldiersRepository(base_path=definitions_dir).get("pikes")
    assert "missing fields: ['attack']" in str(excinfo.value)
    assert "unknown fields: ['morale']" in str(excinfo.value)


def test_soldiers_repo_rejects_boolean_numbers(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(definitions_dir / "soldiers.json", {"pikes": _soldier_payload("Pikes", attack=True)})

    with pytest.raises(DataValidationError):
        SoldiersRepository(base_path=definitions_dir).all()


def test_characters_repo_defaults_formation_and_soldiers(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(
        definitions_dir / "characters.json",
        {"knight": {"name": "Knight", "side": "player", "max_hp": 50, "attack": 9, "defense": 4}},
    )

    knight = CharactersRepository(base_path=definitions_dir).get("knight")

    assert knight.formation == "player-first"
    assert knight.soldier_ids == ()


def test_characters_repo_rejects_unknown_side(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(
        definitions_dir / "characters.json",
        {"knight": {"name": "Knight", "side": "neutral", "max_hp": 50, "attack": 9, "defense": 4}},
    )

    with pytest.raises(DataValidationError):
        CharactersRepository(base_path=definitions_dir).all()


def test_characters_repo_rejects_unknown_soldier_reference(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(definitions_dir / "soldiers.json", {"pikes": _soldier_payload("Pikes")})
    _write_json(
        definitions_dir / "characters.json",
        {
            "knight": {
                "name": "Knight",
                "side": "player",
                "max_hp": 50,
                "attack": 9,
                "defense": 4,
                "soldier_ids": ["pikes", "cavalry"],
            }
        },
    )
    soldiers_repo = SoldiersRepository(base_path=definitions_dir)

    with pytest.raises(DataReferenceError):
        CharactersRepository(base_path=definitions_dir, soldiers_repo=soldiers_repo).all()


def test_items_repo_loads_potion(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(
        definitions_dir / "items.json",
        {"big_potion": {"name": "Big Potion", "type": "healing_potion", "effect": {"heal": 60}, "quantity": 2}},
    )

    potion = ItemsRepository(base_path=definitions_dir).get("big_potion")

    assert potion.name == "Big Potion"
    assert potion.heal == 60
    assert potion.quantity == 2


def test_items_repo_rejects_unknown_type_and_effect(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(
        definitions_dir / "items.json",
        {"bomb": {"name": "Bomb", "type": "explosive", "effect": {"damage": 10}, "quantity": 1}},
    )

    with pytest.raises(DataValidationError):
        ItemsRepository(base_path=definitions_dir).all()


def test_repo_get_unknown_id_raises_key_error(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(definitions_dir / "soldiers.json", {"pikes": _soldier_payload("Pikes")})

    with pytest.raises(KeyError):
        SoldiersRepository(base_path=definitions_dir).get("cavalry")


def test_missing_and_malformed_files_raise_load_errors(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)

    with pytest.raises(DataLoadError):
        SoldiersRepository(base_path=definitions_dir).all()

    (definitions_dir / "soldiers.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(DataLoadError):
        SoldiersRepository(base_path=definitions_dir).all()


def test_top_level_must_be_an_object(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    (definitions_dir / "items.json").write_text("[]", encoding="utf-8")

    with pytest.raises(DataValidationError):
        ItemsRepository(base_path=definitions_dir).all()


def _soldier_payload(name: str, **overrides) -> dict:
    payload = {"name": name, "max_hp": 30, "attack": 8, "defense": 2, "quantity": 5, "max_quantity": 5}
    payload.update(overrides)
    return payload


def _write_json(path: Path, data: dict) -> None:
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def _make_definitions_dir(tmp_path: Path) -> Path:
    definitions_dir = tmp_path / "definitions"
    definitions_dir.mkdir()
    return definitions_dir
