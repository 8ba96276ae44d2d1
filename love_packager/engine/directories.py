"""Virtual filesystem directory operations."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Iterable, List, Sequence

from ..errors import PackagingError
from .collector import SourceEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DirectoryOp:
    """Create directory ``name`` under the existing virtual directory ``parent``."""

    parent: str
    name: str

    @property
    def path(self) -> str:
        return str(PurePosixPath(self.parent) / self.name)

    def render(self) -> str:
        return f"Module['FS_createPath']({_js_string(self.parent)}, {_js_string(self.name)}, true, true);"


def directory_op_for(virtual_path: str) -> DirectoryOp:
    path = PurePosixPath(virtual_path)
    return DirectoryOp(parent=str(path.parent), name=path.name)


def build_directory_ops(entries: Iterable[SourceEntry]) -> List[DirectoryOp]:
    """Convert directory entries, in collector order, into creation ops."""

    ops = [directory_op_for(entry.virtual_path) for entry in entries if entry.is_directory]
    logger.debug("Built %d directory operations", len(ops))
    return ops


def validate_directory_ops(ops: Sequence[DirectoryOp]) -> None:
    """Raise if any op would run before its parent directory exists."""

    created = {"/"}
    for op in ops:
        if op.parent not in created:
            raise PackagingError(f"Directory {op.path} is created before its parent {op.parent}")
        created.add(op.path)


def render_directory_ops(ops: Iterable[DirectoryOp], *, separator: str = "\n") -> str:
    return separator.join(op.render() for op in ops)


def _js_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"
