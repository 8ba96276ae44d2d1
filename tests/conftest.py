from __future__ import annotations

from pathlib import Path
from typing import Mapping

import pytest


def write_tree(root: Path, files: Mapping[str, bytes], dirs: tuple[str, ...] = ()) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    for relative in dirs:
        (root / relative).mkdir(parents=True, exist_ok=True)
    for relative, content in files.items():
        target = root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
    return root


@pytest.fixture()
def game_dir(tmp_path: Path) -> Path:
    return write_tree(
        tmp_path / "game",
        {
            "main.lua": b"function love.draw() end\n",
            "conf.lua": b"function love.conf(t) end\n",
            "assets/music/theme.ogg": b"OggS" + b"\x00" * 60,
            "assets/sprites/player.png": b"\x89PNG" + b"\x01" * 20,
            "lib/util.lua": b"return {}\n",
        },
        dirs=("empty",),
    )


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("LOVE_PACKAGER_INPUT", "LOVE_PACKAGER_OUTPUT", "LOVE_PACKAGER_MEMORY"):
        monkeypatch.delenv(name, raising=False)
