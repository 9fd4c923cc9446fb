"""Amortization simulator for a single debt.

Implements the per-period math every higher-level computation reuses:
- Interest accrual on the outstanding balance (half-even to the cent)
- Interest/principal split of a payment
- Overpayment and negative-amortization detection
- Single-debt schedules, payoff horizon and closed-form level payments
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from debtplan.engine.errors import InvalidInputError, NonConvergenceError
from debtplan.engine.money import (
    ZERO,
    MoneyLike,
    accrue_interest,
    monthly_rate,
    round_up_money,
    to_money,
    to_rate,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_MONTHS = 600


@dataclass(frozen=True)
class PeriodResult:
    """Outcome of advancing one debt by one billing period."""

    new_balance: Decimal
    interest_paid: Decimal
    principal_paid: Decimal
    overpayment: Decimal = ZERO      # Payment left over once the balance hit zero
    unpaid_interest: Decimal = ZERO  # Interest the payment failed to cover
    negative_amortization: bool = False

    @property
    def paid_off(self) -> bool:
        return self.new_balance == 0


@dataclass(frozen=True)
class ScheduleRow:
    """One month of a single-debt amortization table."""

    month: int
    payment: Decimal
    principal: Decimal
    interest: Decimal
    balance: Decimal


def advance(
    balance: MoneyLike,
    annual_rate: MoneyLike,
    payment: MoneyLike,
    days_in_period: int | None = None,
) -> PeriodResult:
    """Advance one balance by one billing period.

    Formula: B_{t+1} = max(0, B_t − (P − I_t)),  I_t = B_t × (APR / 12)

    If the payment does not exceed the accrued interest, the whole payment
    goes to interest, the balance stays where it is, and the result is flagged
    as negative amortization.

    Args:
        balance: Balance at the start of the period (≥ 0).
        annual_rate: APR as a decimal fraction (≥ 0).
        payment: Amount paid this period (> 0).
        days_in_period: Optional day count for daily accrual.

    Returns:
        PeriodResult with the new balance and the interest/principal split.

    Raises:
        InvalidInputError: On a negative balance or rate, or a non-positive payment.
    """
    balance = to_money(balance)
    annual_rate = to_rate(annual_rate)
    payment = to_money(payment)

    if balance < 0:
        raise InvalidInputError(f"balance must be ≥ 0, got {balance}")
    if annual_rate < 0:
        raise InvalidInputError(f"annual_rate must be ≥ 0, got {annual_rate}")
    if payment <= 0:
        raise InvalidInputError(f"payment must be > 0, got {payment}")
    if days_in_period is not None and days_in_period <= 0:
        raise InvalidInputError(f"days_in_period must be > 0, got {days_in_period}")

    interest = accrue_interest(balance, annual_rate, days_in_period)

    if balance > 0 and payment <= interest:
        logger.debug(
            "Payment %s does not cover interest %s on balance %s; balance will not decrease",
            payment, interest, balance,
        )
        return PeriodResult(
            new_balance=balance,
            interest_paid=payment,
            principal_paid=ZERO,
            unpaid_interest=interest - payment,
            negative_amortization=True,
        )

    principal = payment - interest
    overpayment = ZERO
    if principal >= balance:
        overpayment = principal - balance
        principal = balance

    return PeriodResult(
        new_balance=balance - principal,
        interest_paid=interest,
        principal_paid=principal,
        overpayment=overpayment,
    )


def amortization_schedule(
    balance: MoneyLike,
    annual_rate: MoneyLike,
    payment: MoneyLike,
    max_months: int | None = None,
) -> list[ScheduleRow]:
    """Month-by-month table for one debt paying a fixed amount.

    Stops when the balance reaches zero or after ``max_months`` rows. Without a
    cap the payment must amortize the balance, otherwise NonConvergenceError.
    """
    horizon = DEFAULT_MAX_MONTHS if max_months is None else max_months
    rows: list[ScheduleRow] = []
    current = to_money(balance)

    month = 0
    while current > 0 and month < horizon:
        month += 1
        step = advance(current, annual_rate, payment)
        if step.negative_amortization and max_months is None:
            raise NonConvergenceError(month, current, "payment does not cover monthly interest")
        rows.append(
            ScheduleRow(
                month=month,
                payment=step.interest_paid + step.principal_paid,
                principal=step.principal_paid,
                interest=step.interest_paid,
                balance=step.new_balance,
            )
        )
        current = step.new_balance

    if current > 0 and max_months is None:
        raise NonConvergenceError(horizon, current)
    return rows


def payoff_months(balance: MoneyLike, annual_rate: MoneyLike, payment: MoneyLike) -> int:
    """Number of months until a fixed payment clears the balance."""
    return len(amortization_schedule(balance, annual_rate, payment))


def total_interest(balance: MoneyLike, annual_rate: MoneyLike, payment: MoneyLike) -> Decimal:
    """Total interest paid over the life of a fixed-payment payoff."""
    rows = amortization_schedule(balance, annual_rate, payment)
    return sum((row.interest for row in rows), ZERO)


def amortizing_payment(balance: MoneyLike, annual_rate: MoneyLike, months: int) -> Decimal:
    """Level monthly payment that repays ``balance`` within ``months``.

    Formula: P = B × r / (1 − (1 + r)^−n),  r = APR / 12;  P = B / n when r = 0

    Rounded up to the cent so the payment never falls short of the term.
    """
    balance = to_money(balance)
    annual_rate = to_rate(annual_rate)
    if months < 1:
        raise InvalidInputError(f"months must be ≥ 1, got {months}")
    if balance < 0 or annual_rate < 0:
        raise InvalidInputError("balance and annual_rate must be ≥ 0")
    if balance == 0:
        return ZERO

    r = monthly_rate(annual_rate)
    if r == 0:
        return round_up_money(balance / months)
    return round_up_money(balance * r / (1 - (1 + r) ** -months))
