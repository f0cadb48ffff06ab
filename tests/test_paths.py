from pathlib import Path

from warband.data import paths


def test_get_definitions_path_base_path(tmp_path: Path) -> None:
    assert paths.get_definitions_path(tmp_path) == tmp_path


def test_get_definitions_path_source_repo_exists(monkeypatch) -> None:
    monkeypatch.delenv(paths.DEFINITIONS_ENV_VAR, raising=False)
    definitions_path = paths.get_definitions_path()
    assert definitions_path.name == "definitions"
    assert (definitions_path / "characters.json").exists()


def test_get_definitions_path_env_override(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv(paths.DEFINITIONS_ENV_VAR, str(tmp_path))
    assert paths.get_definitions_path() == tmp_path


def test_explicit_base_path_beats_env_override(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv(paths.DEFINITIONS_ENV_VAR, str(tmp_path / "elsewhere"))
    assert paths.get_definitions_path(tmp_path) == tmp_path
