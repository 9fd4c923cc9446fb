"""Abstract base class for surplus-allocation strategies."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable

from debtplan.engine.models import Debt


class PayoffStrategy(ABC):
    """Interface for ordering debts that receive surplus payments.

    Subclasses implement `sort_key()`; `rank()` applies it to the active debts
    with the debt id as a final tie-break so the order is reproducible.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Lower-case identifier for this strategy."""
        ...

    @abstractmethod
    def sort_key(self, debt: Debt) -> Any:
        """Primary ordering key; smaller sorts first."""
        ...

    def rank(self, debts: Iterable[Debt]) -> list[str]:
        """Order active debt ids from highest to lowest allocation priority.

        Args:
            debts: Debts to rank. Paid-off or zero-balance debts are dropped.

        Returns:
            Debt ids, first one receives surplus first.
        """
        active = [d for d in debts if d.is_active]
        active.sort(key=lambda d: (self.sort_key(d), d.id))
        return [d.id for d in active]

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
