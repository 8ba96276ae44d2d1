"""Persistence of packaging results."""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from .engine.builder import PackageResult
from .engine.manifest import dump_manifest
from .engine.utils import compute_sha256, write_bytes, write_text

logger = logging.getLogger(__name__)

DATA_FILENAME = "game.data"
MANIFEST_FILENAME = "manifest.json"
CREATE_PATHS_FILENAME = "create_paths.js"


@dataclass(slots=True)
class PackageArtifacts:
    data_path: Path
    manifest_path: Path
    create_paths_path: Path
    sha256: str


def write_package(result: PackageResult, output_dir: Path) -> PackageArtifacts:
    """Write the data blob, manifest and directory directives to ``output_dir``.

    Files are staged next to their destination and only moved into place once
    all of them were written, so a failed write leaves ``output_dir`` untouched.
    """

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    with tempfile.TemporaryDirectory(prefix=".love-packager-", dir=output_dir) as tmp_dir:
        staging_root = Path(tmp_dir)
        write_bytes(staging_root / DATA_FILENAME, result.blob)
        dump_manifest(result.manifest, staging_root / MANIFEST_FILENAME)
        directives = result.render_directory_ops()
        write_text(staging_root / CREATE_PATHS_FILENAME, directives + "\n" if directives else "")

        for name in (DATA_FILENAME, MANIFEST_FILENAME, CREATE_PATHS_FILENAME):
            os.replace(staging_root / name, output_dir / name)

    data_path = output_dir / DATA_FILENAME
    sha = compute_sha256(data_path)
    logger.info("Wrote %s (%d bytes, sha256=%s)", data_path, result.total_size, sha)
    return PackageArtifacts(
        data_path=data_path,
        manifest_path=output_dir / MANIFEST_FILENAME,
        create_paths_path=output_dir / CREATE_PATHS_FILENAME,
        sha256=sha,
    )
