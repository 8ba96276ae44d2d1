"""Memory budget checks."""

from __future__ import annotations

from ..errors import BudgetExceededError

DEFAULT_MEMORY_BYTES = 16 * 1024 * 1024


def validate_memory_budget(budget_bytes: int, total_size: int) -> None:
    """Raise :class:`BudgetExceededError` when ``total_size`` exceeds ``budget_bytes``."""

    if budget_bytes < total_size:
        raise BudgetExceededError(total_size=total_size, budget_bytes=budget_bytes)
