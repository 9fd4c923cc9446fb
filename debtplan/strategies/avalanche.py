"""Avalanche strategy: all surplus to the highest APR debt first."""

from __future__ import annotations

from debtplan.engine.models import Debt
from debtplan.strategies.base_strategy import PayoffStrategy


class AvalancheStrategy(PayoffStrategy):
    """Debt avalanche: direct all surplus to the debt with the highest APR.

    Minimizes total interest among single-target strategies.
    """

    @property
    def name(self) -> str:
        return "avalanche"

    def sort_key(self, debt: Debt):
        return -debt.interest_rate
