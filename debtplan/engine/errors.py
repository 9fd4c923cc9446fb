"""Error taxonomy for the repayment engine.

All errors derive from ``DebtPlanError`` (itself a ``ValueError``), so callers
can catch the whole family with one clause.
"""

from __future__ import annotations

from decimal import Decimal


class DebtPlanError(ValueError):
    """Base class for every error raised by debtplan."""


class InvalidInputError(DebtPlanError):
    """Malformed numeric input: negative balance/rate, non-positive payment, etc."""


class InvalidRateError(InvalidInputError):
    """A proposed interest rate is outside the accepted range."""

    def __init__(self, rate: Decimal | float):
        self.rate = rate
        super().__init__(f"Invalid interest rate {rate!r}: expected a decimal fraction in [0, 1]")


class DebtNotFoundError(DebtPlanError):
    """A scenario references a debt id that is not in the input list."""

    def __init__(self, debt_id: str):
        self.debt_id = debt_id
        super().__init__(f"Unknown debt id {debt_id!r}")


class NonConvergenceError(DebtPlanError):
    """Simulation could not pay off every debt within the month horizon."""

    def __init__(self, months: int, remaining_balance: Decimal, reason: str | None = None):
        self.months = months
        self.remaining_balance = remaining_balance
        msg = (
            f"Debts not paid off after {months} months "
            f"(remaining balance {remaining_balance})"
        )
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)
