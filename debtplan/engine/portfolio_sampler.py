"""PortfolioSampler: generates varied debt portfolios for benchmarking.

Produces random debt lists with 1–5 debts across categories, APRs (3%–29%)
and balances ($500–$25,000). Minimum payments always exceed the first
month's interest so every sampled portfolio converges.
Also provides named presets for reproducible comparisons.
"""

from __future__ import annotations

import numpy as np

from debtplan.engine.models import Debt, DebtCategory

# Typical APR band per category
_APR_RANGES: dict[DebtCategory, tuple[float, float]] = {
    DebtCategory.CREDIT_CARD: (0.18, 0.29),
    DebtCategory.PERSONAL_LOAN: (0.08, 0.20),
    DebtCategory.AUTO_LOAN: (0.04, 0.12),
    DebtCategory.STUDENT_LOAN: (0.03, 0.08),
    DebtCategory.MEDICAL: (0.0, 0.10),
    DebtCategory.OTHER: (0.05, 0.25),
}


class PortfolioSampler:
    """Generate randomized or preset debt portfolios."""

    def __init__(
        self,
        num_debts_range: tuple[int, int] = (1, 5),
        balance_range: tuple[float, float] = (500.0, 25000.0),
        min_payment_ratio_range: tuple[float, float] = (0.02, 0.05),
        min_payment_floor: float = 25.0,
    ):
        self.num_debts_range = num_debts_range
        self.balance_range = balance_range
        self.min_payment_ratio_range = min_payment_ratio_range
        self.min_payment_floor = min_payment_floor

    def sample(self, rng: np.random.Generator | None = None) -> list[Debt]:
        """Sample a random portfolio.

        Args:
            rng: Numpy random Generator for reproducibility.

        Returns:
            Debts with ids "d1", "d2", ...
        """
        if rng is None:
            rng = np.random.default_rng()

        num_debts = int(rng.integers(self.num_debts_range[0], self.num_debts_range[1] + 1))
        categories = list(_APR_RANGES)

        debts = []
        for i in range(num_debts):
            category = categories[int(rng.integers(len(categories)))]
            apr = round(float(rng.uniform(*_APR_RANGES[category])), 4)
            balance = round(float(rng.uniform(*self.balance_range)), 2)
            original = round(balance * float(rng.uniform(1.0, 1.5)), 2)
            ratio = float(rng.uniform(*self.min_payment_ratio_range))
            # Interest-only plus a slice of principal, never below the floor
            minimum = max(self.min_payment_floor, balance * (apr / 12 + ratio))
            debts.append(
                Debt(
                    id=f"d{i + 1}",
                    name=f"{category.value.replace('_', ' ').title()} {i + 1}",
                    category=category,
                    current_balance=balance,
                    original_balance=original,
                    interest_rate=apr,
                    minimum_payment=round(minimum, 2),
                    due_date=int(rng.integers(1, 29)),
                )
            )
        return debts

    @staticmethod
    def preset(name: str) -> list[Debt]:
        """Return a named preset portfolio for reproducible experiments.

        Available presets:
            - "two_debt": The classic avalanche-vs-snowball example
            - "household": Card, car, student loan and a medical bill
            - "single_card": One high-APR credit card

        Raises:
            ValueError: If preset name is unknown.
        """
        presets = {
            "two_debt": [
                Debt("A", "Card A", current_balance=1000, interest_rate=0.24, minimum_payment=50,
                     category=DebtCategory.CREDIT_CARD),
                Debt("B", "Loan B", current_balance=500, interest_rate=0.10, minimum_payment=30,
                     category=DebtCategory.PERSONAL_LOAN),
            ],
            "household": [
                Debt("visa", "Visa", current_balance=6500, original_balance=8000,
                     interest_rate=0.2499, minimum_payment=195,
                     category=DebtCategory.CREDIT_CARD, due_date=15),
                Debt("car", "Car loan", current_balance=14200, original_balance=22000,
                     interest_rate=0.069, minimum_payment=410,
                     category=DebtCategory.AUTO_LOAN, due_date=1),
                Debt("student", "Student loan", current_balance=18750, original_balance=27000,
                     interest_rate=0.045, minimum_payment=240,
                     category=DebtCategory.STUDENT_LOAN, due_date=28),
                Debt("er", "ER visit", current_balance=1200, original_balance=1800,
                     interest_rate=0.0, minimum_payment=100,
                     category=DebtCategory.MEDICAL, due_date=10),
            ],
            "single_card": [
                Debt("card", "High APR Card", current_balance=10000, interest_rate=0.289,
                     minimum_payment=300, category=DebtCategory.CREDIT_CARD),
            ],
        }

        if name not in presets:
            valid = ", ".join(sorted(presets.keys()))
            raise ValueError(f"Unknown preset {name!r}. Valid: {valid}")

        return presets[name]
