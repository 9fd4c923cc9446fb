"""Plot per-debt balances over time for each strategy.

Usage:
    python scripts/plot_payoff.py
    python scripts/plot_payoff.py --config configs/portfolio/two_debt.yaml --output results/two_debt.png
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend
import matplotlib.pyplot as plt

from debtplan.engine.scheduler import simulate
from debtplan.strategies import ALL_STRATEGIES
from debtplan.utils.config import load_plan_config


def make_balance_plot(debts, extra_payment: float, max_months: int, output_path: str) -> None:
    """One panel per strategy, one line per debt."""
    strategies = [cls() for cls in ALL_STRATEGIES]
    fig, axes = plt.subplots(1, len(strategies), figsize=(7 * len(strategies), 5), sharey=True)
    fig.suptitle("Balance by Debt", fontsize=16, fontweight="bold")

    for ax, policy in zip(axes, strategies):
        schedule = simulate(debts, extra_payment, policy, max_months=max_months)
        df = schedule.to_frame()
        for debt_id, group in df.groupby("debt_id", sort=True):
            ax.plot(group["month"], group["balance"], label=debt_id, linewidth=1.8)
        ax.set_title(
            f"{policy.name.title()}: {schedule.payoff_month} months, "
            f"interest {schedule.total_interest_paid:,.0f}",
            fontsize=12,
        )
        ax.set_xlabel("Month")
        ax.grid(alpha=0.3)
        ax.legend(fontsize=9)
    axes[0].set_ylabel("Balance")

    plt.tight_layout(rect=[0, 0, 1, 0.93])
    out = Path(output_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(str(out), dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"Balance plot saved to {out}")


def main():
    parser = argparse.ArgumentParser(description="Plot payoff balances per strategy")
    parser.add_argument("--config", type=str, default="configs/portfolio/household.yaml")
    parser.add_argument("--output", type=str, default="results/payoff_balances.png")
    args = parser.parse_args()

    plan = load_plan_config(args.config)
    make_balance_plot(plan.to_debts(), plan.extra_payment, plan.max_months, args.output)


if __name__ == "__main__":
    main()
