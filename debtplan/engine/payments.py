"""Record a single payment against a debt.

The payment is split the way the issuer would: one month of interest first,
then principal up to the remaining balance. Anything beyond that is reported
as unapplied and left for the caller to handle.
"""

from __future__ import annotations

from datetime import date

from debtplan.engine.amortization import advance
from debtplan.engine.errors import InvalidInputError
from debtplan.engine.models import Debt, DebtStatus, Payment
from debtplan.engine.money import MoneyLike, to_money


def record_payment(debt: Debt, amount: MoneyLike, payment_date: date) -> tuple[Payment, Debt]:
    """Apply ``amount`` to ``debt`` and return the payment plus the updated debt.

    The input debt is not modified. When the balance reaches zero, the returned
    copy is marked paid off on ``payment_date`` and its minimum payment drops
    to zero.

    Raises:
        InvalidInputError: If the debt is already paid off or the amount ≤ 0.
    """
    amount = to_money(amount)
    if debt.status is DebtStatus.PAID_OFF:
        raise InvalidInputError(f"Debt {debt.id!r} is already paid off")
    if amount <= 0:
        raise InvalidInputError(f"Payment amount must be > 0, got {amount}")

    step = advance(debt.current_balance, debt.interest_rate, amount)
    payment = Payment(
        debt_id=debt.id,
        amount=amount,
        principal_paid=step.principal_paid,
        interest_paid=step.interest_paid,
        payment_date=payment_date,
        unapplied=step.overpayment,
    )

    if step.paid_off:
        updated = debt.mark_paid_off(payment_date)
    else:
        updated = debt.with_balance(step.new_balance)
    return payment, updated
