"""Side-by-side comparison of payoff strategies on one portfolio."""

from __future__ import annotations

from datetime import date
from typing import Iterable

import pandas as pd

from debtplan.engine.amortization import DEFAULT_MAX_MONTHS
from debtplan.engine.models import Debt
from debtplan.engine.money import MoneyLike
from debtplan.engine.scheduler import simulate
from debtplan.strategies import ALL_STRATEGIES, PayoffStrategy, get_strategy


def compare_strategies(
    debts: Iterable[Debt],
    extra_payment: MoneyLike = 0,
    strategies: Iterable[str | PayoffStrategy | type[PayoffStrategy]] | None = None,
    max_months: int = DEFAULT_MAX_MONTHS,
    start_date: date | None = None,
) -> pd.DataFrame:
    """Simulate each strategy on the same debts and tabulate the outcome.

    Args:
        debts: Portfolio to simulate (not modified).
        extra_payment: Monthly amount on top of the minimums.
        strategies: Names, instances or classes. Defaults to ALL_STRATEGIES.
        max_months: Safety cap passed to the scheduler.
        start_date: Projection start, shared by every run.

    Returns:
        DataFrame with one row per strategy: strategy, months, payoff_date,
        total_interest, first_paid_off, payoff_order. Sorted by total interest.
    """
    debts = list(debts)
    start = start_date or date.today()
    if strategies is None:
        strategies = ALL_STRATEGIES

    rows = []
    for entry in strategies:
        policy = entry() if isinstance(entry, type) else get_strategy(entry)
        schedule = simulate(debts, extra_payment, policy, max_months=max_months, start_date=start)
        order = schedule.payoff_order
        rows.append({
            "strategy": policy.name,
            "months": schedule.payoff_month,
            "payoff_date": schedule.payoff_date,
            "total_interest": float(schedule.total_interest_paid),
            "first_paid_off": order[0] if order else None,
            "payoff_order": order,
        })

    columns = ["strategy", "months", "payoff_date", "total_interest", "first_paid_off", "payoff_order"]
    df = pd.DataFrame(rows, columns=columns)
    return df.sort_values(["total_interest", "strategy"], kind="stable").reset_index(drop=True)
