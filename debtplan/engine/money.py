"""Money and rate primitives.

Amounts are ``Decimal`` values quantized to the currency's minor unit (cents).
Interest accrual rounds half-to-even so hundreds of simulated periods do not
drift in one direction.
"""

from __future__ import annotations

import calendar
from datetime import date
from decimal import ROUND_HALF_EVEN, ROUND_UP, Decimal, InvalidOperation
from typing import Union

from debtplan.engine.errors import InvalidInputError

MoneyLike = Union[Decimal, int, float, str]

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
MONTHS_PER_YEAR = Decimal(12)
DAYS_PER_YEAR = Decimal(365)


def _to_decimal(value: MoneyLike) -> Decimal:
    if isinstance(value, bool):
        raise InvalidInputError(f"Expected a number, got {value!r}")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            # str() first so 0.1 becomes Decimal("0.1"), not its binary expansion
            result = Decimal(str(value))
        except (InvalidOperation, ValueError) as exc:
            raise InvalidInputError(f"Not a number: {value!r}") from exc
    if not result.is_finite():
        raise InvalidInputError(f"Not a finite number: {value!r}")
    return result


def to_money(value: MoneyLike) -> Decimal:
    """Convert to a currency amount rounded half-even to cents."""
    return _to_decimal(value).quantize(CENT, rounding=ROUND_HALF_EVEN)


def to_rate(value: MoneyLike) -> Decimal:
    """Convert an APR (decimal fraction, e.g. 0.2499) to Decimal without rounding."""
    return _to_decimal(value)


def round_up_money(value: Decimal) -> Decimal:
    """Round away from zero to whole cents."""
    return value.quantize(CENT, rounding=ROUND_UP)


def monthly_rate(annual_rate: Decimal) -> Decimal:
    """APR ÷ 12, the periodic rate used for monthly billing."""
    return annual_rate / MONTHS_PER_YEAR


def accrue_interest(
    balance: Decimal,
    annual_rate: Decimal,
    days_in_period: int | None = None,
) -> Decimal:
    """Interest accrued over one billing period, rounded to cents.

    Formula:
        monthly (default):  I = B × (APR / 12)
        daily:              I = B × APR × days / 365

    Args:
        balance: Outstanding balance at the start of the period.
        annual_rate: APR as a decimal fraction.
        days_in_period: Length of the billing period in days. ``None`` means
            a standard monthly cycle.

    Returns:
        Interest amount (≥ 0 for non-negative inputs).
    """
    if days_in_period is None:
        raw = balance * monthly_rate(annual_rate)
    else:
        raw = balance * annual_rate * Decimal(days_in_period) / DAYS_PER_YEAR
    return raw.quantize(CENT, rounding=ROUND_HALF_EVEN)


def add_months(start: date, months: int) -> date:
    """Shift ``start`` forward by whole months, clamping to the month's last day."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)
