"""Data model for debts and payments.

Records are frozen dataclasses: the engine works on snapshots and returns new
instances instead of mutating what the caller owns.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

from debtplan.engine.errors import InvalidInputError
from debtplan.engine.money import ZERO, MoneyLike, to_money, to_rate

# Rates above this are almost certainly percentages that skipped the ÷100 step
MAX_INTEREST_RATE = Decimal(1)


class DebtCategory(str, Enum):
    CREDIT_CARD = "credit_card"
    PERSONAL_LOAN = "personal_loan"
    AUTO_LOAN = "auto_loan"
    STUDENT_LOAN = "student_loan"
    MORTGAGE = "mortgage"
    MEDICAL = "medical"
    OTHER = "other"


class DebtStatus(str, Enum):
    ACTIVE = "active"
    PAID_OFF = "paid_off"


def _day_of_month(debt_id: str, value) -> int:
    if isinstance(value, bool):
        raise InvalidInputError(f"Debt {debt_id!r}: due_date must be an integer, got {value!r}")
    try:
        day = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"Debt {debt_id!r}: due_date must be an integer, got {value!r}") from exc
    if not day.is_integer():
        raise InvalidInputError(f"Debt {debt_id!r}: due_date must be a whole day, got {value!r}")
    return int(day)


@dataclass(frozen=True)
class Debt:
    """A single outstanding debt as supplied by the caller.

    Numeric fields accept int/float/str/Decimal and are normalized to Decimal
    on construction.
    """

    id: str
    name: str
    current_balance: Decimal        # Outstanding balance, ≥ 0
    interest_rate: Decimal          # APR as decimal fraction (0.2499 for 24.99%)
    minimum_payment: Decimal        # Required monthly payment
    original_balance: Decimal | None = None  # Defaults to current_balance
    category: DebtCategory = DebtCategory.OTHER
    status: DebtStatus = DebtStatus.ACTIVE
    due_date: int = 1               # Day of month (1-31)
    paid_off_date: date | None = None

    def __post_init__(self) -> None:
        current = to_money(self.current_balance)
        original = current if self.original_balance is None else to_money(self.original_balance)
        rate = to_rate(self.interest_rate)
        minimum = to_money(self.minimum_payment)

        object.__setattr__(self, "id", str(self.id))
        object.__setattr__(self, "current_balance", current)
        object.__setattr__(self, "original_balance", original)
        object.__setattr__(self, "interest_rate", rate)
        object.__setattr__(self, "minimum_payment", minimum)
        try:
            object.__setattr__(self, "category", DebtCategory(self.category))
            object.__setattr__(self, "status", DebtStatus(self.status))
        except ValueError as exc:
            raise InvalidInputError(f"Debt {self.id!r}: {exc}") from exc
        object.__setattr__(self, "due_date", _day_of_month(self.id, self.due_date))

        if current < 0:
            raise InvalidInputError(f"Debt {self.id!r}: current_balance must be ≥ 0, got {current}")
        if current > original:
            raise InvalidInputError(
                f"Debt {self.id!r}: current_balance {current} exceeds original_balance {original}"
            )
        if rate < 0 or rate > MAX_INTEREST_RATE:
            raise InvalidInputError(
                f"Debt {self.id!r}: interest_rate {rate} outside [0, {MAX_INTEREST_RATE}] "
                "(expected a decimal fraction, not a percentage)"
            )
        if minimum < 0:
            raise InvalidInputError(f"Debt {self.id!r}: minimum_payment must be ≥ 0, got {minimum}")
        if self.status is DebtStatus.ACTIVE and current > 0 and minimum <= 0:
            raise InvalidInputError(f"Debt {self.id!r}: active debt needs a positive minimum_payment")
        if not 1 <= self.due_date <= 31:
            raise InvalidInputError(f"Debt {self.id!r}: due_date must be a day of month 1-31")
        if self.status is DebtStatus.PAID_OFF and current != 0:
            raise InvalidInputError(f"Debt {self.id!r}: paid_off debt must have zero balance")

    @property
    def is_active(self) -> bool:
        return self.status is DebtStatus.ACTIVE and self.current_balance > 0

    def with_balance(self, balance: MoneyLike) -> Debt:
        """Copy with a new balance; status is left untouched."""
        return dataclasses.replace(self, current_balance=balance)

    def with_rate(self, rate: MoneyLike, minimum_payment: MoneyLike | None = None) -> Debt:
        """Copy with a new APR and, optionally, a new minimum payment."""
        if minimum_payment is None:
            minimum_payment = self.minimum_payment
        return dataclasses.replace(self, interest_rate=rate, minimum_payment=minimum_payment)

    def mark_paid_off(self, when: date) -> Debt:
        """Copy marked paid off on ``when``. The payoff date is only ever set once."""
        if self.status is DebtStatus.PAID_OFF:
            raise InvalidInputError(f"Debt {self.id!r} is already paid off")
        return dataclasses.replace(
            self,
            current_balance=ZERO,
            minimum_payment=ZERO,
            status=DebtStatus.PAID_OFF,
            paid_off_date=when,
        )


@dataclass(frozen=True)
class Payment:
    """A payment applied to one debt, split into interest and principal."""

    debt_id: str
    amount: Decimal
    principal_paid: Decimal
    interest_paid: Decimal
    payment_date: date
    unapplied: Decimal = ZERO  # Excess the debt could not absorb; caller's concern

    def __post_init__(self) -> None:
        for field_name in ("amount", "principal_paid", "interest_paid", "unapplied"):
            value = to_money(getattr(self, field_name))
            if value < 0:
                raise InvalidInputError(f"Payment {field_name} must be ≥ 0, got {value}")
            object.__setattr__(self, field_name, value)
        if self.principal_paid + self.interest_paid + self.unapplied != self.amount:
            raise InvalidInputError(
                "Payment split does not add up: "
                f"{self.principal_paid} + {self.interest_paid} + {self.unapplied} != {self.amount}"
            )


def index_by_id(debts: list[Debt]) -> dict[str, Debt]:
    """Map debt id → debt, rejecting duplicate ids."""
    by_id: dict[str, Debt] = {}
    for debt in debts:
        if debt.id in by_id:
            raise InvalidInputError(f"Duplicate debt id {debt.id!r}")
        by_id[debt.id] = debt
    return by_id
