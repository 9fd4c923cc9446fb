"""Surplus-allocation strategies for debt repayment."""

from __future__ import annotations

from debtplan.engine.errors import InvalidInputError
from debtplan.strategies.avalanche import AvalancheStrategy
from debtplan.strategies.base_strategy import PayoffStrategy
from debtplan.strategies.snowball import SnowballStrategy

ALL_STRATEGIES = [
    AvalancheStrategy,
    SnowballStrategy,
]


def get_strategy(strategy: str | PayoffStrategy) -> PayoffStrategy:
    """Resolve a strategy name ("avalanche", "snowball") or pass an instance through."""
    if isinstance(strategy, PayoffStrategy):
        return strategy
    by_name = {cls().name: cls for cls in ALL_STRATEGIES}
    key = str(strategy).strip().lower()
    if key not in by_name:
        valid = ", ".join(sorted(by_name))
        raise InvalidInputError(f"Unknown strategy {strategy!r}. Valid: {valid}")
    return by_name[key]()


__all__ = [
    "PayoffStrategy",
    "AvalancheStrategy",
    "SnowballStrategy",
    "ALL_STRATEGIES",
    "get_strategy",
]
