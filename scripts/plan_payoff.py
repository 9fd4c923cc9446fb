"""Print a payoff plan for a YAML portfolio, plus what-if scenarios.

Usage:
    python scripts/plan_payoff.py
    python scripts/plan_payoff.py --config configs/portfolio/two_debt.yaml --strategy snowball
    python scripts/plan_payoff.py --refinance visa --new-rate 0.099
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from debtplan.engine.errors import DebtPlanError
from debtplan.engine.scheduler import simulate
from debtplan.evaluation.scenarios import evaluate_extra_payment, evaluate_refinance
from debtplan.evaluation.summary import summarize
from debtplan.utils.config import load_plan_config


def print_schedule(schedule, every: int = 6) -> None:
    """Print every ``every``-th month plus each month a debt is paid off."""
    ids = list(schedule.payoff_months_by_debt)
    header = "  Month " + "".join(f"{debt_id:>14s}" for debt_id in ids) + "      Interest"
    print(header)
    print(f"  {'─' * (len(header) - 2)}")
    for snap in schedule.months:
        if snap.month % every and not snap.paid_off and snap.month != schedule.payoff_month:
            continue
        cells = "".join(f"{snap.balances[debt_id]:>14,.2f}" for debt_id in ids)
        marker = f"  ✓ {', '.join(snap.paid_off)}" if snap.paid_off else ""
        print(f"  {snap.month:>5d} {cells}{snap.total_interest:>14,.2f}{marker}")


def main():
    parser = argparse.ArgumentParser(description="Print a debt payoff plan")
    parser.add_argument("--config", type=str, default="configs/portfolio/household.yaml")
    parser.add_argument("--strategy", type=str, default=None, help="Override strategy from config")
    parser.add_argument("--extra", type=float, default=None, help="Override extra monthly payment")
    parser.add_argument("--every", type=int, default=6, help="Print every N-th month")
    parser.add_argument("--refinance", type=str, default=None, help="Debt id to refinance")
    parser.add_argument("--new-rate", type=float, default=None, help="Refinance APR (decimal)")
    args = parser.parse_args()

    try:
        plan = load_plan_config(args.config)
        strategy = args.strategy or plan.strategy
        extra = plan.extra_payment if args.extra is None else args.extra

        debts = plan.to_debts()
        summary = summarize(debts)
        print(f"\n{'=' * 60}")
        print(f"  {summary.active_count} active debts, balance {summary.total_balance:,.2f}, "
              f"{summary.progress_percent}% repaid")
        if summary.highest_rate_debt is not None:
            top = summary.highest_rate_debt
            print(f"  Highest APR: {top.name} ({top.interest_rate:.2%})")
        print(f"{'=' * 60}\n")

        schedule = simulate(debts, extra, strategy, max_months=plan.max_months)
        print_schedule(schedule, every=args.every)
        print(f"\n  Strategy {schedule.strategy}: debt-free in {schedule.payoff_month} months "
              f"({schedule.payoff_date:%b %Y}), interest {schedule.total_interest_paid:,.2f}")

        if extra > 0:
            scenario = evaluate_extra_payment(debts, extra, strategy, max_months=plan.max_months)
            print(f"  Paying {extra:,.2f} extra saves {scenario.months_saved} months "
                  f"and {scenario.total_interest_saved:,.2f} in interest")

        if args.refinance:
            if args.new_rate is None:
                parser.error("--refinance requires --new-rate")
            refi = evaluate_refinance(
                debts, args.refinance, args.new_rate, strategy, max_months=plan.max_months
            )
            print(f"  Refinancing {refi.debt_id} to {refi.new_rate:.2%}: new payment "
                  f"{refi.new_monthly_payment:,.2f}, saves {refi.total_interest_saved:,.2f} "
                  f"({refi.months_saved:+d} months)")
    except DebtPlanError as exc:
        print(f"Error: {exc}")
        sys.exit(1)


if __name__ == "__main__":
    main()
