"""Asset packaging engine."""

from .builder import PackageBuilder, PackageConfig, PackageResult
from .collector import SourceEntry, collect_entries
from .directories import DirectoryOp, build_directory_ops, render_directory_ops
from .manifest import build_file_records, dump_manifest, load_manifest

__all__ = [
    "PackageConfig",
    "PackageBuilder",
    "PackageResult",
    "SourceEntry",
    "collect_entries",
    "DirectoryOp",
    "build_directory_ops",
    "render_directory_ops",
    "build_file_records",
    "load_manifest",
    "dump_manifest",
]
