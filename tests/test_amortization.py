"""Unit tests for money primitives, the amortization simulator and payment recording.

Expected values are hand-calculated to the cent.
"""

from datetime import date
from decimal import Decimal

import pytest

from debtplan.engine.amortization import (
    advance,
    amortization_schedule,
    amortizing_payment,
    payoff_months,
    total_interest,
)
from debtplan.engine.errors import InvalidInputError, NonConvergenceError
from debtplan.engine.models import Debt, DebtStatus
from debtplan.engine.money import accrue_interest, add_months, to_money
from debtplan.engine.payments import record_payment


# ── Fixtures ──────────────────────────────────────────────────────────────

@pytest.fixture
def loan() -> Debt:
    """$1200 at 12% APR (1% monthly), $104 minimum."""
    return Debt("loan", "Loan", current_balance=1200, interest_rate=0.12, minimum_payment=104)


# ── Money primitives ──────────────────────────────────────────────────────

class TestMoney:

    def test_float_noise_does_not_leak(self):
        assert to_money(0.1 + 0.2) == Decimal("0.30")

    def test_interest_rounds_half_to_even(self):
        # 100.50 × 1% = 1.005 → 1.00 ; 101.50 × 1% = 1.015 → 1.02
        assert accrue_interest(Decimal("100.50"), Decimal("0.12")) == Decimal("1.00")
        assert accrue_interest(Decimal("101.50"), Decimal("0.12")) == Decimal("1.02")

    def test_daily_accrual(self):
        # 3650 × 10% × 30 / 365 = 30.00
        assert accrue_interest(Decimal("3650"), Decimal("0.10"), days_in_period=30) == Decimal("30.00")

    def test_non_numeric_rejected(self):
        with pytest.raises(InvalidInputError):
            to_money("twelve")

    def test_add_months_clamps_day(self):
        assert add_months(date(2026, 1, 31), 1) == date(2026, 2, 28)
        assert add_months(date(2026, 11, 15), 3) == date(2027, 2, 15)


# ── Advance one period ────────────────────────────────────────────────────

class TestAdvance:

    def test_first_month_split(self):
        """1200 at 1%/month paying 104 → 12 interest, 92 principal."""
        step = advance(1200, 0.12, 104)
        assert step.interest_paid == Decimal("12.00")
        assert step.principal_paid == Decimal("92.00")
        assert step.new_balance == Decimal("1108.00")
        assert step.negative_amortization is False

    def test_payment_below_interest_is_negative_amortization(self):
        step = advance(1000, 0.50, 10)  # interest 41.67
        assert step.interest_paid == Decimal("10.00")
        assert step.principal_paid == Decimal("0.00")
        assert step.new_balance == Decimal("1000.00")
        assert step.unpaid_interest == Decimal("31.67")
        assert step.negative_amortization is True

    def test_payment_equal_to_interest_flags_warning(self):
        step = advance(1200, 0.12, 12)
        assert step.negative_amortization is True
        assert step.new_balance == Decimal("1200.00")

    def test_overpayment_capped_at_balance(self):
        step = advance(100, 0.12, 150)  # interest 1.00
        assert step.principal_paid == Decimal("100.00")
        assert step.overpayment == Decimal("49.00")
        assert step.new_balance == Decimal("0.00")
        assert step.paid_off is True

    def test_zero_rate(self):
        step = advance(500, 0, 100)
        assert step.interest_paid == Decimal("0.00")
        assert step.new_balance == Decimal("400.00")

    def test_daily_period(self):
        step = advance(3650, 0.10, 100, days_in_period=30)
        assert step.interest_paid == Decimal("30.00")
        assert step.new_balance == Decimal("3580.00")

    @pytest.mark.parametrize("balance, rate, payment", [
        (-1, 0.1, 50),
        (100, -0.01, 50),
        (100, 0.1, 0),
        (100, 0.1, -5),
    ])
    def test_invalid_inputs(self, balance, rate, payment):
        with pytest.raises(InvalidInputError):
            advance(balance, rate, payment)


# ── Single-debt schedule ──────────────────────────────────────────────────

class TestSchedule:

    def test_schedule_reaches_zero(self):
        rows = amortization_schedule(1200, 0.12, 104)
        assert rows[0].interest == Decimal("12.00")
        assert rows[0].balance == Decimal("1108.00")
        assert rows[-1].balance == Decimal("0.00")
        balances = [r.balance for r in rows]
        assert balances == sorted(balances, reverse=True)

    def test_zero_rate_payoff(self):
        assert payoff_months(1200, 0, 100) == 12
        assert total_interest(1200, 0, 100) == Decimal("0.00")

    def test_never_pays_off(self):
        with pytest.raises(NonConvergenceError):
            payoff_months(1000, 0.50, 10)

    def test_capped_table_does_not_raise(self):
        rows = amortization_schedule(1000, 0.50, 10, max_months=3)
        assert len(rows) == 3
        assert all(r.balance == Decimal("1000.00") for r in rows)

    def test_interest_total_matches_rows(self):
        rows = amortization_schedule(5000, 0.24, 250)
        assert total_interest(5000, 0.24, 250) == sum(r.interest for r in rows)


# ── Closed-form level payment ─────────────────────────────────────────────

class TestAmortizingPayment:

    def test_zero_rate_divides_evenly(self):
        assert amortizing_payment(1200, 0, 12) == Decimal("100.00")

    def test_zero_rate_rounds_up(self):
        assert amortizing_payment(1000, 0, 3) == Decimal("333.34")

    def test_standard_formula(self):
        """10000 at 6% over 12 months → 860.66…, rounded up to 860.67."""
        payment = amortizing_payment(10000, 0.06, 12)
        assert payment == Decimal("860.67")
        assert payoff_months(10000, 0.06, payment) == 12

    def test_zero_balance(self):
        assert amortizing_payment(0, 0.2, 12) == Decimal("0")

    def test_term_must_be_positive(self):
        with pytest.raises(InvalidInputError):
            amortizing_payment(1000, 0.1, 0)


# ── Recording payments ────────────────────────────────────────────────────

class TestRecordPayment:

    def test_minimum_payment_split(self, loan):
        payment, updated = record_payment(loan, 104, date(2026, 10, 1))
        assert payment.interest_paid == Decimal("12.00")
        assert payment.principal_paid == Decimal("92.00")
        assert payment.unapplied == Decimal("0.00")
        assert updated.current_balance == Decimal("1108.00")
        assert updated.status is DebtStatus.ACTIVE

    def test_input_debt_untouched(self, loan):
        record_payment(loan, 104, date(2026, 10, 1))
        assert loan.current_balance == Decimal("1200.00")

    def test_payoff_marks_debt(self, loan):
        when = date(2026, 10, 1)
        payment, updated = record_payment(loan, 2000, when)
        assert payment.principal_paid == Decimal("1200.00")
        assert payment.unapplied == Decimal("788.00")
        assert updated.status is DebtStatus.PAID_OFF
        assert updated.current_balance == Decimal("0.00")
        assert updated.paid_off_date == when
        assert updated.minimum_payment == Decimal("0.00")

    def test_cannot_pay_paid_off_debt(self, loan):
        _, done = record_payment(loan, 2000, date(2026, 10, 1))
        with pytest.raises(InvalidInputError):
            record_payment(done, 50, date(2026, 11, 1))

    def test_amount_must_be_positive(self, loan):
        with pytest.raises(InvalidInputError):
            record_payment(loan, 0, date(2026, 10, 1))
