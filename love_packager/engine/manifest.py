"""Manifest construction and persistence helpers."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, List, Tuple
from uuid import UUID, uuid4

from pydantic import ValidationError

from ..errors import ManifestValidationError
from ..schemas.manifest import FileRecord, PackageManifest

logger = logging.getLogger(__name__)

AUDIO_SUFFIXES: Tuple[str, ...] = (".ogg", ".wav", ".mp3", ".flac", ".xm")


def is_audio_path(virtual_path: str) -> bool:
    """Case-sensitive suffix test used by the loader to route files to the audio backend."""

    return virtual_path.endswith(AUDIO_SUFFIXES)


def build_file_records(sized_paths: Iterable[Tuple[str, int]], *, start: int = 0) -> List[FileRecord]:
    """Assign contiguous byte ranges to ``(virtual_path, size)`` pairs in order."""

    records: List[FileRecord] = []
    cursor = start
    for virtual_path, size in sized_paths:
        record = FileRecord(
            filename=virtual_path,
            start=cursor,
            end=cursor + size,
            audio=is_audio_path(virtual_path),
        )
        logger.debug("Assigned %s to [%d, %d)", virtual_path, record.start, record.end)
        records.append(record)
        cursor = record.end
    return records


def build_manifest(records: Iterable[FileRecord], *, package_uuid: UUID | None = None) -> PackageManifest:
    """Wrap records in a manifest with a fresh package identifier."""

    files = list(records)
    total = files[-1].end if files else 0
    return PackageManifest(
        package_uuid=package_uuid or uuid4(),
        remote_package_size=total,
        files=files,
    )


def load_manifest(path: Path) -> PackageManifest:
    """Load a manifest from JSON."""

    payload = json.loads(path.read_text(encoding="utf-8"))
    try:
        return PackageManifest.model_validate(payload)
    except ValidationError as exc:
        raise ManifestValidationError(f"Invalid manifest {path}: {exc}") from exc


def dump_manifest(manifest: PackageManifest, path: Path) -> None:
    """Write a manifest to disk."""

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(manifest.model_dump_json(indent=2) + "\n", encoding="utf-8")


def verify_blob(manifest: PackageManifest, blob_path: Path) -> None:
    """Check that ``blob_path`` is the data file ``manifest`` indexes into."""

    if not blob_path.exists():
        raise ManifestValidationError(f"Data file not found: {blob_path}")
    size = blob_path.stat().st_size
    if size != manifest.remote_package_size:
        raise ManifestValidationError(
            f"Data file size mismatch. Manifest={manifest.remote_package_size} Data={size}"
        )
