"""Portfolio scheduler: month-by-month payoff simulation for a set of debts.

Each month every active debt pays its minimum; the surplus pool (caller's
extra payment plus minimums freed by debts already cleared) goes to the
strategy's top-priority debt and cascades down the ranking when a debt is
paid off mid-month.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Iterable

import pandas as pd

from debtplan.engine.amortization import DEFAULT_MAX_MONTHS, advance
from debtplan.engine.errors import InvalidInputError, NonConvergenceError
from debtplan.engine.models import Debt, index_by_id
from debtplan.engine.money import ZERO, MoneyLike, accrue_interest, add_months, to_money
from debtplan.strategies import PayoffStrategy, get_strategy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MonthSnapshot:
    """Per-debt state at the end of one simulated month."""

    month: int
    balances: dict[str, Decimal]
    payments: dict[str, Decimal]
    interest: dict[str, Decimal]
    paid_off: tuple[str, ...] = ()

    @property
    def total_balance(self) -> Decimal:
        return sum(self.balances.values(), ZERO)

    @property
    def total_interest(self) -> Decimal:
        return sum(self.interest.values(), ZERO)


@dataclass(frozen=True)
class Schedule:
    """Full payoff projection for a portfolio."""

    strategy: str
    extra_payment: Decimal
    start_date: date
    months: tuple[MonthSnapshot, ...]
    total_interest_paid: Decimal
    payoff_months_by_debt: dict[str, int]      # 0 for debts already paid off
    interest_by_debt: dict[str, Decimal]
    negative_amortization: frozenset[str] = field(default_factory=frozenset)

    @property
    def payoff_month(self) -> int:
        """Number of months until every debt is cleared."""
        return len(self.months)

    @property
    def payoff_date(self) -> date:
        return add_months(self.start_date, self.payoff_month)

    @property
    def payoff_order(self) -> list[str]:
        """Debt ids in the order they were paid off."""
        return [debt_id for snap in self.months for debt_id in snap.paid_off]

    def balance_history(self, debt_id: str) -> list[Decimal]:
        """End-of-month balances for one debt."""
        if debt_id not in self.payoff_months_by_debt:
            raise KeyError(debt_id)
        return [snap.balances[debt_id] for snap in self.months]

    def to_frame(self) -> pd.DataFrame:
        """One row per (month, debt) with balance, payment and interest columns."""
        rows: list[dict[str, Any]] = []
        for snap in self.months:
            for debt_id, balance in snap.balances.items():
                rows.append({
                    "month": snap.month,
                    "date": add_months(self.start_date, snap.month),
                    "debt_id": debt_id,
                    "balance": float(balance),
                    "payment": float(snap.payments[debt_id]),
                    "interest": float(snap.interest[debt_id]),
                    "paid_off": debt_id in snap.paid_off,
                })
        columns = ["month", "date", "debt_id", "balance", "payment", "interest", "paid_off"]
        return pd.DataFrame(rows, columns=columns)


def simulate(
    debts: Iterable[Debt],
    extra_payment: MoneyLike = 0,
    strategy: str | PayoffStrategy = "avalanche",
    max_months: int = DEFAULT_MAX_MONTHS,
    start_date: date | None = None,
) -> Schedule:
    """Simulate paying off ``debts`` month by month.

    Pipeline per month:
        1. Accrue interest and pay each active debt's minimum
        2. Build the surplus pool: extra payment + freed minimums + unused minimums
        3. Allocate the pool by strategy rank, cascading on payoff
        4. Advance every debt once and record the snapshot
        5. Stop when everything is paid off

    Args:
        debts: Caller-owned debt records (never mutated).
        extra_payment: Monthly amount on top of the minimums (≥ 0).
        strategy: "avalanche", "snowball" or a PayoffStrategy instance.
        max_months: Safety cap on simulated months.
        start_date: Date the projection starts from (defaults to today).

    Returns:
        Schedule with per-month snapshots and totals.

    Raises:
        InvalidInputError: Negative extra payment, bad horizon, duplicate ids.
        NonConvergenceError: Debts cannot be cleared within ``max_months``.
    """
    extra = to_money(extra_payment)
    if extra < 0:
        raise InvalidInputError(f"extra_payment must be ≥ 0, got {extra}")
    if int(max_months) < 1:
        raise InvalidInputError(f"max_months must be ≥ 1, got {max_months}")
    policy = get_strategy(strategy)
    start = start_date or date.today()

    # Private working copies keyed by id; the caller's list is left alone
    working = index_by_id(list(debts))
    balances = {debt_id: d.current_balance if d.is_active else ZERO for debt_id, d in working.items()}
    payoff_month = {debt_id: 0 for debt_id, bal in balances.items() if bal == 0}
    interest_by_debt = {debt_id: ZERO for debt_id in working}
    negative: set[str] = set()
    freed = ZERO
    snapshots: list[MonthSnapshot] = []

    logger.debug(
        "Simulating %d debts: strategy=%s extra=%s max_months=%d",
        len(working), policy.name, extra, max_months,
    )

    month = 0
    while any(bal > 0 for bal in balances.values()):
        if month >= max_months:
            remaining = sum(balances.values(), ZERO)
            raise NonConvergenceError(max_months, remaining)
        month += 1

        active = [
            working[debt_id].with_balance(bal)
            for debt_id, bal in sorted(balances.items())
            if bal > 0
        ]

        # ── 1. Minimums ───────────────────────────────────────────────────
        payments: dict[str, Decimal] = {}
        room: dict[str, Decimal] = {}
        pool = extra + freed
        for debt in active:
            owed = debt.current_balance + accrue_interest(debt.current_balance, debt.interest_rate)
            paid = min(debt.minimum_payment, owed)
            pool += debt.minimum_payment - paid
            payments[debt.id] = paid
            room[debt.id] = owed - paid

        # ── 2-3. Surplus cascade ──────────────────────────────────────────
        for debt_id in policy.rank(active):
            if pool <= 0:
                break
            add = min(pool, room[debt_id])
            payments[debt_id] += add
            pool -= add

        # ── 4. Advance balances ───────────────────────────────────────────
        month_interest: dict[str, Decimal] = {}
        newly_paid: list[str] = []
        for debt in active:
            step = advance(debt.current_balance, debt.interest_rate, payments[debt.id])
            if step.negative_amortization and debt.id not in negative:
                negative.add(debt.id)
                logger.warning(
                    "Debt %r: payment %s does not cover interest in month %d (negative amortization)",
                    debt.id, payments[debt.id], month,
                )
            balances[debt.id] = step.new_balance
            month_interest[debt.id] = step.interest_paid
            interest_by_debt[debt.id] += step.interest_paid
            if step.paid_off:
                newly_paid.append(debt.id)
                payoff_month[debt.id] = month

        snapshots.append(
            MonthSnapshot(
                month=month,
                balances=dict(balances),
                payments={debt_id: payments.get(debt_id, ZERO) for debt_id in balances},
                interest={debt_id: month_interest.get(debt_id, ZERO) for debt_id in balances},
                paid_off=tuple(newly_paid),
            )
        )

        # An unchanged month repeats forever
        if not newly_paid and all(balances[d.id] == d.current_balance for d in active):
            remaining = sum(balances.values(), ZERO)
            raise NonConvergenceError(
                month, remaining, "payments do not cover interest on any remaining debt"
            )

        freed += sum((working[debt_id].minimum_payment for debt_id in newly_paid), ZERO)

    total = sum(interest_by_debt.values(), ZERO)
    logger.debug("Paid off in %d months, total interest %s", month, total)

    return Schedule(
        strategy=policy.name,
        extra_payment=extra,
        start_date=start,
        months=tuple(snapshots),
        total_interest_paid=total,
        payoff_months_by_debt=payoff_month,
        interest_by_debt=interest_by_debt,
        negative_amortization=frozenset(negative),
    )
