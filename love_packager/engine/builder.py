"""Package assembly orchestration."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple
from uuid import UUID

from ..errors import PackagingError
from ..schemas.manifest import PackageManifest
from .blob import BlobAssembler
from .budget import DEFAULT_MEMORY_BYTES, validate_memory_budget
from .collector import SourceEntry, collect_entries, is_directory_input
from .directories import DirectoryOp, build_directory_ops, render_directory_ops, validate_directory_ops
from .manifest import build_file_records, build_manifest

logger = logging.getLogger(__name__)

DIRECTORY_LAUNCH_ARGUMENTS: Tuple[str, ...] = ("./",)
ARCHIVE_LAUNCH_ARGUMENTS: Tuple[str, ...] = ("./game.love",)


@dataclass(slots=True)
class PackageConfig:
    """Configuration describing one packaging run."""

    input_path: Path
    memory_bytes: int = DEFAULT_MEMORY_BYTES
    recursive: bool = True
    package_uuid: Optional[UUID] = None


@dataclass(slots=True)
class PackageResult:
    """Data products of a packaging run, ready for the output stage."""

    manifest: PackageManifest
    directory_ops: List[DirectoryOp]
    blob: bytes
    launch_arguments: Sequence[str] = field(default_factory=tuple)

    @property
    def total_size(self) -> int:
        return self.manifest.remote_package_size

    def metadata_json(self) -> str:
        """Compact manifest JSON as embedded in the loader script."""

        return self.manifest.model_dump_json()

    def render_directory_ops(self, separator: str = "\n") -> str:
        return render_directory_ops(self.directory_ops, separator=separator)


class PackageBuilder:
    """Coordinates collection, layout and assembly of a game package."""

    def build(self, config: PackageConfig) -> PackageResult:
        """Build the manifest, directory ops and data blob for ``config.input_path``."""

        entries = collect_entries(config.input_path, recursive=config.recursive)
        directory_mode = is_directory_input(config.input_path)

        directory_ops = build_directory_ops(entries)
        validate_directory_ops(directory_ops)

        files = [entry for entry in entries if not entry.is_directory]
        assembler = BlobAssembler()
        sized_paths: List[Tuple[str, int]] = []
        for entry in files:
            start, end = assembler.append(_read_entry(entry))
            sized_paths.append((entry.virtual_path, end - start))

        records = build_file_records(sized_paths)
        manifest = build_manifest(records, package_uuid=config.package_uuid)
        if manifest.remote_package_size != len(assembler):
            raise PackagingError("Manifest size diverged from assembled blob")

        validate_memory_budget(config.memory_bytes, manifest.remote_package_size)

        logger.info(
            "Packaged %d files and %d directories (%d bytes) from %s",
            len(records),
            len(directory_ops),
            manifest.remote_package_size,
            config.input_path,
        )
        return PackageResult(
            manifest=manifest,
            directory_ops=directory_ops,
            blob=assembler.getvalue(),
            launch_arguments=DIRECTORY_LAUNCH_ARGUMENTS if directory_mode else ARCHIVE_LAUNCH_ARGUMENTS,
        )


def _read_entry(entry: SourceEntry) -> bytes:
    with entry.absolute_path.open("rb") as handle:
        data = handle.read()
    if entry.size_bytes is not None and entry.size_bytes != len(data):
        logger.warning(
            "%s changed size during packaging (%d -> %d bytes)",
            entry.absolute_path,
            entry.size_bytes,
            len(data),
        )
    return data
