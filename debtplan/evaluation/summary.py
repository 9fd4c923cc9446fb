"""Point-in-time portfolio summaries (no simulation).

Provides:
- Aggregate totals and overall progress
- Per-debt and per-category payoff progress
- Debts with a payment due in the next few days
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from debtplan.engine.models import Debt, DebtCategory, Payment
from debtplan.engine.money import ZERO


@dataclass(frozen=True)
class DebtSummary:
    """Aggregate totals for a debt list."""

    total_balance: Decimal
    total_original_balance: Decimal
    total_minimum_payment: Decimal
    total_interest_paid: Decimal
    debt_count: int
    active_count: int
    progress_percent: int
    highest_rate_debt: Debt | None  # Reference into the input list


@dataclass(frozen=True)
class CategoryProgress:
    category: DebtCategory
    current_balance: Decimal
    original_balance: Decimal
    progress_percent: int


@dataclass(frozen=True)
class UpcomingPayment:
    debt: Debt
    due_on: date
    days_until_due: int


def progress_percent(original: Decimal, current: Decimal) -> int:
    """Share of the original balance already repaid, as a whole percentage.

    Formula: round((original − current) / original × 100); 0 when original is 0.
    """
    if original <= 0:
        return 0
    ratio = (original - current) / original * 100
    return int(ratio.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def summarize(debts: Iterable[Debt], payments: Iterable[Payment] = ()) -> DebtSummary:
    """Reduce a debt list to its totals.

    Args:
        debts: Debts to aggregate (not modified).
        payments: Optional payment history; its ``interest_paid`` values are
            summed into ``total_interest_paid``.

    Returns:
        DebtSummary. ``highest_rate_debt`` is the active debt with the highest
        APR (ties → lowest id), or None when nothing is active.
    """
    debts = list(debts)
    active = [d for d in debts if d.is_active]

    total_balance = sum((d.current_balance for d in debts), ZERO)
    total_original = sum((d.original_balance for d in debts), ZERO)
    highest = min(active, key=lambda d: (-d.interest_rate, d.id)) if active else None

    return DebtSummary(
        total_balance=total_balance,
        total_original_balance=total_original,
        total_minimum_payment=sum((d.minimum_payment for d in active), ZERO),
        total_interest_paid=sum((p.interest_paid for p in payments), ZERO),
        debt_count=len(debts),
        active_count=len(active),
        progress_percent=progress_percent(total_original, total_balance),
        highest_rate_debt=highest,
    )


def debt_progress(debt: Debt) -> int:
    """Payoff progress of one debt in whole percent."""
    return progress_percent(debt.original_balance, debt.current_balance)


def category_progress(debts: Iterable[Debt]) -> list[CategoryProgress]:
    """Progress grouped by category, largest original balance first."""
    totals: dict[DebtCategory, list[Decimal]] = {}
    for debt in debts:
        current, original = totals.setdefault(debt.category, [ZERO, ZERO])
        totals[debt.category] = [current + debt.current_balance, original + debt.original_balance]

    groups = [
        CategoryProgress(
            category=category,
            current_balance=current,
            original_balance=original,
            progress_percent=progress_percent(original, current),
        )
        for category, (current, original) in totals.items()
    ]
    groups.sort(key=lambda g: (-g.original_balance, g.category.value))
    return groups


def next_due_date(due_day: int, today: date) -> date:
    """Next date (today included) falling on ``due_day``, clamped to short months."""
    last_day = calendar.monthrange(today.year, today.month)[1]
    candidate = today.replace(day=min(due_day, last_day))
    if candidate >= today:
        return candidate
    year, month = (today.year + 1, 1) if today.month == 12 else (today.year, today.month + 1)
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(due_day, last_day))


def upcoming_payments(
    debts: Iterable[Debt],
    today: date,
    within_days: int = 7,
    limit: int = 5,
    paid_ids: Iterable[str] = (),
) -> list[UpcomingPayment]:
    """Active debts due within ``within_days`` of ``today``, soonest first.

    Debts in ``paid_ids`` (already paid this cycle) are skipped.
    """
    skip = set(paid_ids)
    upcoming = []
    for debt in debts:
        if not debt.is_active or debt.id in skip:
            continue
        due_on = next_due_date(debt.due_date, today)
        days = (due_on - today).days
        if days <= within_days:
            upcoming.append(UpcomingPayment(debt=debt, due_on=due_on, days_until_due=days))
    upcoming.sort(key=lambda u: (u.days_until_due, u.debt.id))
    return upcoming[:limit]
