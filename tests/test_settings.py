from __future__ import annotations

from pathlib import Path

import pytest

from love_packager.engine.budget import DEFAULT_MEMORY_BYTES
from love_packager.errors import ConfigurationError
from love_packager.settings import describe_settings, parse_memory, resolve_settings


def test_explicit_values_win(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOVE_PACKAGER_MEMORY", "10")

    settings = resolve_settings(input_path="game", memory_bytes=2048, workspace_root=tmp_path)

    assert settings.input_path == (tmp_path / "game").resolve()
    assert settings.output_dir == (tmp_path / "build").resolve()
    assert settings.memory_bytes == 2048
    assert settings.sources == {"input_path": "explicit", "output_dir": "default", "memory_bytes": "explicit"}


def test_environment_fills_missing_values(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOVE_PACKAGER_INPUT", str(tmp_path / "from-env"))
    monkeypatch.setenv("LOVE_PACKAGER_MEMORY", "4096")

    settings = resolve_settings(workspace_root=tmp_path)

    assert settings.input_path == (tmp_path / "from-env").resolve()
    assert settings.memory_bytes == 4096
    assert settings.sources["input_path"] == "env"


def test_dotenv_file_consulted_after_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(
        'LOVE_PACKAGER_INPUT="dotenv-game"  # inline comment\nLOVE_PACKAGER_MEMORY=999\n',
        encoding="utf-8",
    )
    monkeypatch.setenv("LOVE_PACKAGER_MEMORY", "1234")

    settings = resolve_settings(env_file=env_file, workspace_root=tmp_path)

    assert settings.input_path == (tmp_path / "dotenv-game").resolve()
    assert settings.memory_bytes == 1234
    assert settings.sources["input_path"] == "dotenv"
    assert settings.sources["memory_bytes"] == "env"


def test_defaults_apply(tmp_path: Path) -> None:
    settings = resolve_settings(input_path=tmp_path)

    assert settings.memory_bytes == DEFAULT_MEMORY_BYTES
    assert settings.sources["memory_bytes"] == "default"


def test_missing_input_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="LOVE_PACKAGER_INPUT"):
        resolve_settings(env_file=tmp_path / "absent.env", workspace_root=tmp_path)


@pytest.mark.parametrize("value", ["lots", "-1", "1.5"])
def test_parse_memory_rejects_invalid(value: str) -> None:
    with pytest.raises(ConfigurationError):
        parse_memory(value)


def test_parse_memory_accepts_integers() -> None:
    assert parse_memory(" 512 ") == 512
    assert parse_memory("0") == 0
    assert parse_memory(None) == DEFAULT_MEMORY_BYTES


def test_describe_settings_reports_attempts(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("LOVE_PACKAGER_OUTPUT=out\n", encoding="utf-8")

    payload = {entry["name"]: entry for entry in describe_settings(env_file=env_file)}

    assert payload["input_path"]["present"] is False
    assert [attempt["resolver"] for attempt in payload["input_path"]["attempts"]] == [
        "explicit",
        "env",
        "dotenv",
        "default",
    ]
    assert payload["output_dir"]["source"] == "dotenv"
    assert payload["output_dir"]["value"] == "out"
    dotenv_attempt = payload["output_dir"]["attempts"][2]
    assert dotenv_attempt["details"]["path"] == str(env_file)
    assert payload["memory_bytes"]["source"] == "default"
