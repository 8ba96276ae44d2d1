"""Input tree traversal."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Iterator, List, Optional, Set

from ..errors import NotFoundError

logger = logging.getLogger(__name__)

ARCHIVE_VIRTUAL_PATH = "/game.love"


@dataclass(frozen=True, slots=True)
class SourceEntry:
    """One file or directory discovered under the input path.

    :ivar absolute_path: Resolved location on the local filesystem.
    :ivar virtual_path: Location inside the virtual filesystem, rooted at ``/``.
    :ivar is_directory: Whether the entry is a directory.
    :ivar size_bytes: File size at collection time (``None`` for directories).
    """

    absolute_path: Path
    virtual_path: str
    is_directory: bool
    size_bytes: Optional[int] = None


def collect_entries(input_path: Path | str, *, recursive: bool = True) -> List[SourceEntry]:
    """Return the ordered entries for ``input_path``.

    A single file is packaged as ``/game.love``. Directories are walked
    depth-first with siblings sorted by name, so every directory precedes its
    descendants and repeated runs yield the same order.
    """

    path = Path(input_path)
    if not path.exists():
        raise NotFoundError(path)

    root = path.resolve()
    if not root.is_dir():
        entry = SourceEntry(
            absolute_path=root,
            virtual_path=ARCHIVE_VIRTUAL_PATH,
            is_directory=False,
            size_bytes=root.stat().st_size,
        )
        logger.debug("Collected archive %s as %s", root, ARCHIVE_VIRTUAL_PATH)
        return [entry]

    entries = list(_walk(root, root, recursive=recursive, visited={root}))
    logger.debug("Collected %d entries under %s", len(entries), root)
    return entries


def is_directory_input(input_path: Path | str) -> bool:
    path = Path(input_path)
    if not path.exists():
        raise NotFoundError(path)
    return path.is_dir()


def virtual_path_for(path: Path, root: Path) -> str:
    """Map ``path`` below ``root`` to its rooted, forward-slash virtual path."""

    relative = path.relative_to(root)
    return str(PurePosixPath("/", *relative.parts))


def _walk(directory: Path, root: Path, *, recursive: bool, visited: Set[Path]) -> Iterator[SourceEntry]:
    with os.scandir(directory) as iterator:
        children = sorted(iterator, key=lambda item: item.name)

    for child in children:
        child_path = directory / child.name
        virtual_path = virtual_path_for(child_path, root)
        if child.is_dir():
            yield SourceEntry(absolute_path=child_path, virtual_path=virtual_path, is_directory=True)
            if not recursive:
                continue
            real_path = child_path.resolve()
            if real_path in visited:
                logger.warning("Skipping already visited directory %s (symlink loop)", child_path)
                continue
            yield from _walk(child_path, root, recursive=recursive, visited=visited | {real_path})
        else:
            yield SourceEntry(
                absolute_path=child_path,
                virtual_path=virtual_path,
                is_directory=False,
                size_bytes=child.stat().st_size,
            )
