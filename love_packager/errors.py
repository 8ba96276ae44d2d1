"""Exceptions raised by the packaging engine."""

from __future__ import annotations

from pathlib import Path


class PackagingError(RuntimeError):
    """Raised when packaging fails."""


class NotFoundError(FileNotFoundError, PackagingError):
    """Raised when the input path does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__(f"Input path not found: {self.path}")


class BudgetExceededError(PackagingError):
    """Raised when the assembled assets do not fit in the memory budget."""

    def __init__(self, total_size: int, budget_bytes: int) -> None:
        self.total_size = total_size
        self.budget_bytes = budget_bytes
        super().__init__(
            "The memory (-m, --memory [bytes]) allocated for your game should at least be as big as "
            f"your assets. The total size of your assets is {total_size} bytes "
            f"(budget: {budget_bytes} bytes)."
        )


class ConfigurationError(PackagingError):
    """Raised when packager settings cannot be resolved."""


class ManifestValidationError(PackagingError):
    """Raised when a manifest or data blob fails validation."""
