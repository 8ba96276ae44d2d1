"""Web packaging helpers for LÖVE games."""

__version__ = "0.1.0"
from .engine.builder import PackageBuilder, PackageConfig, PackageResult
from .engine.directories import DirectoryOp
from .errors import (
    BudgetExceededError,
    ConfigurationError,
    ManifestValidationError,
    NotFoundError,
    PackagingError,
)
from .output import PackageArtifacts, write_package
from .schemas.manifest import FileRecord, PackageManifest
from .settings import PackagerSettings, resolve_settings

__all__ = [
    "__version__",
    "PackageConfig",
    "PackageBuilder",
    "PackageResult",
    "DirectoryOp",
    "FileRecord",
    "PackageManifest",
    "PackageArtifacts",
    "write_package",
    "PackagerSettings",
    "resolve_settings",
    "PackagingError",
    "NotFoundError",
    "BudgetExceededError",
    "ConfigurationError",
    "ManifestValidationError",
]
