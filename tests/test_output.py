from __future__ import annotations

import errno
import hashlib
import json
from pathlib import Path

import pytest

from love_packager import output
from love_packager.engine.builder import PackageBuilder, PackageConfig
from love_packager.output import write_package


def test_write_package_persists_all_products(game_dir: Path, tmp_path: Path) -> None:
    result = PackageBuilder().build(PackageConfig(input_path=game_dir))

    artifacts = write_package(result, tmp_path / "out")

    assert artifacts.data_path.read_bytes() == result.blob
    assert artifacts.sha256 == hashlib.sha256(result.blob).hexdigest()
    manifest = json.loads(artifacts.manifest_path.read_text(encoding="utf-8"))
    assert manifest["remote_package_size"] == len(result.blob)
    assert manifest["package_uuid"] == str(result.manifest.package_uuid)
    directives = artifacts.create_paths_path.read_text(encoding="utf-8").splitlines()
    assert directives[0] == "Module['FS_createPath']('/', 'assets', true, true);"
    assert len(directives) == len(result.directory_ops)


def test_write_package_archive_has_empty_directives(tmp_path: Path) -> None:
    archive = tmp_path / "game.love"
    archive.write_bytes(b"PK")
    result = PackageBuilder().build(PackageConfig(input_path=archive))

    artifacts = write_package(result, tmp_path / "out")

    assert artifacts.create_paths_path.read_text(encoding="utf-8") == ""


def test_write_package_failure_leaves_no_partial_output(
    game_dir: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    result = PackageBuilder().build(PackageConfig(input_path=game_dir))
    output_dir = tmp_path / "out"

    def failing_dump(manifest, path):
        raise OSError(errno.ENOSPC, "No space left on device", str(path))

    monkeypatch.setattr(output, "dump_manifest", failing_dump)

    with pytest.raises(OSError):
        write_package(result, output_dir)

    assert list(output_dir.iterdir()) == []


def test_write_package_replaces_previous_artifacts(game_dir: Path, tmp_path: Path) -> None:
    output_dir = tmp_path / "out"
    first = write_package(PackageBuilder().build(PackageConfig(input_path=game_dir)), output_dir)
    (game_dir / "main.lua").write_bytes(b"-- changed\n")

    second = write_package(PackageBuilder().build(PackageConfig(input_path=game_dir)), output_dir)

    assert first.sha256 != second.sha256
    assert sorted(path.name for path in output_dir.iterdir()) == ["create_paths.js", "game.data", "manifest.json"]
