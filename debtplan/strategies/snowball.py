"""Snowball strategy: all surplus to the smallest balance first."""

from __future__ import annotations

from debtplan.engine.models import Debt
from debtplan.strategies.base_strategy import PayoffStrategy


class SnowballStrategy(PayoffStrategy):
    """Debt snowball: direct all surplus to the debt with the smallest balance.

    Psychologically motivated strategy: quick wins by eliminating small debts.
    """

    @property
    def name(self) -> str:
        return "snowball"

    def sort_key(self, debt: Debt):
        return debt.current_balance
