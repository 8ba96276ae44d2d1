"""Schema definitions for package metadata."""

from .manifest import FileRecord, PackageManifest

__all__ = [
    "FileRecord",
    "PackageManifest",
]
