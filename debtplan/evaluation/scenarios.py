"""What-if scenarios: extra monthly payments and refinancing one debt.

Both evaluators run the portfolio scheduler twice (baseline and modified) with
the same strategy, horizon and start date, and report the difference.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable

from debtplan.engine.amortization import DEFAULT_MAX_MONTHS, amortizing_payment
from debtplan.engine.errors import DebtNotFoundError, InvalidInputError, InvalidRateError
from debtplan.engine.models import MAX_INTEREST_RATE, Debt, index_by_id
from debtplan.engine.money import ZERO, MoneyLike, to_money, to_rate
from debtplan.engine.scheduler import Schedule, simulate
from debtplan.strategies import PayoffStrategy, get_strategy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DebtScenario:
    """Effect of paying ``extra_payment`` on top of the minimums every month."""

    extra_payment: Decimal
    strategy: str
    original_payoff_date: date
    new_payoff_date: date
    original_months: int
    new_months: int
    baseline_interest: Decimal
    scenario_interest: Decimal

    @property
    def months_saved(self) -> int:
        return self.original_months - self.new_months

    @property
    def total_interest_saved(self) -> Decimal:
        return self.baseline_interest - self.scenario_interest


@dataclass(frozen=True)
class RefinanceScenario:
    """Effect of moving one debt to ``new_rate`` with a re-amortized payment."""

    debt_id: str
    new_rate: Decimal
    new_monthly_payment: Decimal
    strategy: str
    original_payoff_date: date
    new_payoff_date: date
    original_months: int
    new_months: int
    baseline_interest: Decimal
    scenario_interest: Decimal

    @property
    def months_saved(self) -> int:
        return self.original_months - self.new_months

    @property
    def total_interest_saved(self) -> Decimal:
        return self.baseline_interest - self.scenario_interest


def _baseline(
    debts: list[Debt],
    policy: PayoffStrategy,
    max_months: int,
    start_date: date | None,
) -> Schedule:
    return simulate(debts, 0, policy, max_months=max_months, start_date=start_date)


def evaluate_extra_payment(
    debts: Iterable[Debt],
    extra_amount: MoneyLike,
    strategy: str | PayoffStrategy = "avalanche",
    max_months: int = DEFAULT_MAX_MONTHS,
    start_date: date | None = None,
) -> DebtScenario:
    """Compare minimum-only payoff against paying ``extra_amount`` more each month.

    Raises:
        InvalidInputError: If ``extra_amount`` is negative.
        NonConvergenceError: If the baseline cannot be paid off in ``max_months``.
    """
    debts = list(debts)
    extra = to_money(extra_amount)
    if extra < 0:
        raise InvalidInputError(f"extra_amount must be ≥ 0, got {extra}")
    policy = get_strategy(strategy)
    start = start_date or date.today()

    baseline = _baseline(debts, policy, max_months, start)
    scenario = simulate(debts, extra, policy, max_months=max_months, start_date=start)

    logger.debug(
        "Extra payment %s: %d -> %d months, interest %s -> %s",
        extra, baseline.payoff_month, scenario.payoff_month,
        baseline.total_interest_paid, scenario.total_interest_paid,
    )
    return DebtScenario(
        extra_payment=extra,
        strategy=policy.name,
        original_payoff_date=baseline.payoff_date,
        new_payoff_date=scenario.payoff_date,
        original_months=baseline.payoff_month,
        new_months=scenario.payoff_month,
        baseline_interest=baseline.total_interest_paid,
        scenario_interest=scenario.total_interest_paid,
    )


def evaluate_refinance(
    debts: Iterable[Debt],
    target_debt_id: str,
    new_rate: MoneyLike,
    strategy: str | PayoffStrategy = "avalanche",
    max_months: int = DEFAULT_MAX_MONTHS,
    start_date: date | None = None,
) -> RefinanceScenario:
    """Compare the current plan against refinancing one debt to ``new_rate``.

    The refinanced debt's minimum payment becomes the level payment that
    amortizes its balance at the new rate over the number of months the
    baseline plan takes to clear it. Whatever that frees from the old minimum
    is paid as extra by strategy, so the monthly budget does not shrink.

    Raises:
        InvalidRateError: If ``new_rate`` is negative (or above 1).
        DebtNotFoundError: If ``target_debt_id`` is not among ``debts``.
        InvalidInputError: If the target debt is already paid off.
        NonConvergenceError: If the baseline cannot be paid off in ``max_months``.
    """
    debts = list(debts)
    rate = to_rate(new_rate)
    if rate < 0 or rate > MAX_INTEREST_RATE:
        raise InvalidRateError(rate)
    by_id = index_by_id(debts)
    target_id = str(target_debt_id)
    if target_id not in by_id:
        raise DebtNotFoundError(target_id)
    target = by_id[target_id]
    if not target.is_active:
        raise InvalidInputError(f"Debt {target_id!r} is already paid off")

    policy = get_strategy(strategy)
    start = start_date or date.today()
    baseline = _baseline(debts, policy, max_months, start)

    term = baseline.payoff_months_by_debt[target_id]
    new_payment = amortizing_payment(target.current_balance, rate, term)
    refinanced = target.with_rate(rate, new_payment)
    modified = [refinanced if d.id == target_id else d for d in debts]

    # The monthly budget stays as in the baseline; a lower minimum joins the surplus pool
    released = max(ZERO, target.minimum_payment - new_payment)
    scenario = simulate(modified, released, policy, max_months=max_months, start_date=start)

    logger.debug(
        "Refinance %r to %s over %d months: payment %s -> %s, %s back to the pool",
        target_id, rate, term, target.minimum_payment, new_payment, released,
    )
    return RefinanceScenario(
        debt_id=target_id,
        new_rate=rate,
        new_monthly_payment=new_payment,
        strategy=policy.name,
        original_payoff_date=baseline.payoff_date,
        new_payoff_date=scenario.payoff_date,
        original_months=baseline.payoff_month,
        new_months=scenario.payoff_month,
        baseline_interest=baseline.total_interest_paid,
        scenario_interest=scenario.total_interest_paid,
    )
