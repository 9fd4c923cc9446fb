"""Unit tests for extra-payment and refinance scenarios."""

from datetime import date
from decimal import Decimal

import numpy as np
import pytest

from debtplan.engine.amortization import amortizing_payment
from debtplan.engine.errors import (
    DebtNotFoundError,
    InvalidInputError,
    InvalidRateError,
    NonConvergenceError,
)
from debtplan.engine.models import Debt
from debtplan.engine.money import add_months
from debtplan.engine.portfolio_sampler import PortfolioSampler
from debtplan.engine.scheduler import simulate
from debtplan.evaluation.scenarios import evaluate_extra_payment, evaluate_refinance

START = date(2026, 3, 1)


@pytest.fixture
def two_debts() -> list[Debt]:
    return PortfolioSampler.preset("two_debt")


@pytest.fixture
def household() -> list[Debt]:
    return PortfolioSampler.preset("household")


# ── Extra payment ─────────────────────────────────────────────────────────

class TestExtraPayment:

    def test_extra_saves_time_and_interest(self, two_debts):
        scenario = evaluate_extra_payment(two_debts, 100, "avalanche", start_date=START)
        assert scenario.months_saved > 0
        assert scenario.total_interest_saved > 0
        assert scenario.new_payoff_date < scenario.original_payoff_date

    def test_matches_direct_simulation(self, two_debts):
        scenario = evaluate_extra_payment(two_debts, 100, "snowball", start_date=START)
        baseline = simulate(two_debts, 0, "snowball", start_date=START)
        boosted = simulate(two_debts, 100, "snowball", start_date=START)
        assert scenario.original_months == baseline.payoff_month
        assert scenario.new_months == boosted.payoff_month
        assert scenario.total_interest_saved == (
            baseline.total_interest_paid - boosted.total_interest_paid
        )
        assert scenario.original_payoff_date == add_months(START, baseline.payoff_month)

    def test_zero_extra_changes_nothing(self, household):
        scenario = evaluate_extra_payment(household, 0, start_date=START)
        assert scenario.months_saved == 0
        assert scenario.total_interest_saved == Decimal("0")

    def test_monotonic_in_extra_amount(self, household):
        extras = [0, 25, 50, 100, 250, 500, 1000]
        results = [evaluate_extra_payment(household, x, "avalanche", start_date=START) for x in extras]
        for lower, higher in zip(results, results[1:]):
            assert higher.months_saved >= lower.months_saved
            assert higher.total_interest_saved >= lower.total_interest_saved

    def test_monotonic_on_sampled_portfolios(self):
        rng = np.random.default_rng(7)
        sampler = PortfolioSampler()
        for _ in range(10):
            debts = sampler.sample(rng)
            small = evaluate_extra_payment(debts, 50, "avalanche", start_date=START)
            large = evaluate_extra_payment(debts, 200, "avalanche", start_date=START)
            assert large.months_saved >= small.months_saved
            assert large.total_interest_saved >= small.total_interest_saved

    def test_negative_extra_rejected(self, two_debts):
        with pytest.raises(InvalidInputError):
            evaluate_extra_payment(two_debts, -10, start_date=START)

    def test_baseline_non_convergence_propagates(self):
        debts = [Debt("bad", "Bad", current_balance=1000, interest_rate=0.50, minimum_payment=10)]
        with pytest.raises(NonConvergenceError):
            evaluate_extra_payment(debts, 500, start_date=START)


# ── Refinance ─────────────────────────────────────────────────────────────

class TestRefinance:

    def test_zero_rate_saves_interest(self, two_debts):
        refi = evaluate_refinance(two_debts, "A", 0, start_date=START)
        assert refi.total_interest_saved > 0
        assert refi.scenario_interest < refi.baseline_interest

    def test_payment_amortizes_over_baseline_term(self, two_debts):
        baseline = simulate(two_debts, 0, "avalanche", start_date=START)
        term = baseline.payoff_months_by_debt["A"]
        refi = evaluate_refinance(two_debts, "A", 0.06, start_date=START)
        assert refi.new_monthly_payment == amortizing_payment(1000, 0.06, term)
        assert refi.new_rate == Decimal("0.06")
        assert refi.debt_id == "A"

    @pytest.mark.parametrize("debt_id", ["visa", "car", "student", "er"])
    def test_zero_rate_never_increases_interest(self, household, debt_id):
        refi = evaluate_refinance(household, debt_id, 0, start_date=START)
        assert refi.scenario_interest <= refi.baseline_interest

    def test_already_zero_rate_unchanged(self, household):
        refi = evaluate_refinance(household, "er", 0, start_date=START)
        assert refi.total_interest_saved == Decimal("0")
        assert refi.months_saved == 0

    def test_inputs_not_mutated(self, two_debts):
        evaluate_refinance(two_debts, "A", 0.05, start_date=START)
        assert two_debts[0].interest_rate == Decimal("0.24")
        assert two_debts[0].minimum_payment == Decimal("50.00")

    def test_unknown_debt(self, two_debts):
        with pytest.raises(DebtNotFoundError) as exc_info:
            evaluate_refinance(two_debts, "Z", 0.05, start_date=START)
        assert exc_info.value.debt_id == "Z"

    @pytest.mark.parametrize("rate", [-0.01, 4.5])
    def test_invalid_rate(self, two_debts, rate):
        with pytest.raises(InvalidRateError):
            evaluate_refinance(two_debts, "A", rate, start_date=START)

    def test_paid_off_target(self, two_debts):
        done = Debt("C", "Done", current_balance=0, original_balance=400, interest_rate=0.3,
                    minimum_payment=0, status="paid_off")
        with pytest.raises(InvalidInputError):
            evaluate_refinance(two_debts + [done], "C", 0.1, start_date=START)

    @pytest.mark.parametrize("strategy", ["avalanche", "snowball"])
    def test_lower_minimum_stays_in_budget(self, strategy):
        """Refinancing to 0% shrinks d1's minimum; the difference must keep paying debt."""
        debts = [
            Debt("d1", "Medical", current_balance=610.15, interest_rate=0.0008, minimum_payment=30.48),
            Debt("d2", "Card", current_balance=17628.26, interest_rate=0.1398, minimum_payment=643.66),
            Debt("d3", "Student", current_balance=8839.20, interest_rate=0.039, minimum_payment=374.49),
            Debt("d4", "Auto", current_balance=1807.17, interest_rate=0.0667, minimum_payment=55.16),
        ]
        refi = evaluate_refinance(debts, "d1", 0, strategy, start_date=START)
        assert refi.new_monthly_payment < Decimal("30.48")
        assert refi.scenario_interest <= refi.baseline_interest
        assert refi.months_saved >= 0

    def test_zero_rate_on_sampled_portfolios(self):
        rng = np.random.default_rng(2)
        sampler = PortfolioSampler()
        for _ in range(120):
            debts = sampler.sample(rng)
            cheapest = min(debts, key=lambda d: (d.interest_rate, d.id))
            refi = evaluate_refinance(debts, cheapest.id, 0, "avalanche", start_date=START)
            assert refi.scenario_interest <= refi.baseline_interest
