"""Run every strategy on randomized portfolios and produce a benchmark CSV.

Usage:
    python scripts/compare_strategies.py                    # 1000 portfolios × 3 seeds
    python scripts/compare_strategies.py --quick            # 50 portfolios × 1 seed
    python scripts/compare_strategies.py --extra 300
"""

import argparse
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import numpy as np
import pandas as pd

from debtplan.engine.portfolio_sampler import PortfolioSampler
from debtplan.evaluation.comparison import compare_strategies


def run_benchmark(
    num_portfolios: int = 1000,
    seeds: list[int] | None = None,
    extra_payment: float = 0.0,
    output_dir: str = "results",
) -> pd.DataFrame:
    """Compare strategies across seeds × sampled portfolios.

    Returns:
        DataFrame with one row per (seed, portfolio, strategy).
    """
    if seeds is None:
        seeds = [42]

    sampler = PortfolioSampler()
    frames: list[pd.DataFrame] = []
    total_runs = len(seeds) * num_portfolios
    completed = 0
    t0 = time.time()

    for seed in seeds:
        rng = np.random.default_rng(seed)
        for idx in range(num_portfolios):
            debts = sampler.sample(rng)
            df = compare_strategies(debts, extra_payment)
            df.insert(0, "portfolio", idx)
            df.insert(0, "seed", seed)
            df["num_debts"] = len(debts)
            frames.append(df)

            completed += 1
            if completed % 500 == 0:
                elapsed = time.time() - t0
                rate = completed / elapsed if elapsed > 0 else 0
                eta = (total_runs - completed) / rate if rate > 0 else 0
                print(f"  [{completed}/{total_runs}] {elapsed:.0f}s elapsed, ~{eta:.0f}s remaining")

    results = pd.concat(frames, ignore_index=True).drop(columns=["payoff_order"])

    out_path = Path(output_dir)
    out_path.mkdir(parents=True, exist_ok=True)
    csv_path = out_path / "strategies_per_portfolio.csv"
    results.to_csv(csv_path, index=False)
    print(f"\nPer-portfolio results saved to {csv_path}")

    return results


def print_summary(df: pd.DataFrame) -> None:
    """Print summary stats grouped by strategy."""
    summary = df.groupby("strategy").agg(
        interest_mean=("total_interest", "mean"),
        interest_std=("total_interest", "std"),
        months_mean=("months", "mean"),
        months_std=("months", "std"),
    )
    print("\n" + "=" * 70)
    print("  STRATEGY COMPARISON: Summary Statistics")
    print("=" * 70)
    print(summary.round(1).to_string())
    print()


def sanity_checks(df: pd.DataFrame) -> None:
    """Avalanche should never pay more interest than snowball on the same portfolio."""
    print("Sanity checks:")
    pivot = df.pivot_table(index=["seed", "portfolio"], columns="strategy", values="total_interest")
    worse = pivot[pivot["avalanche"] > pivot["snowball"] + 0.01]
    if worse.empty:
        print(f"  [PASS] Avalanche ≤ Snowball on interest in all {len(pivot)} portfolios")
    else:
        print(f"  [NOTE] Avalanche paid more interest in {len(worse)} of {len(pivot)} portfolios")
    print()


def main():
    parser = argparse.ArgumentParser(description="Benchmark payoff strategies")
    parser.add_argument("--portfolios", type=int, default=1000)
    parser.add_argument("--seeds", type=int, nargs="+", default=[42, 123, 456])
    parser.add_argument("--extra", type=float, default=0.0, help="Extra monthly payment")
    parser.add_argument("--quick", action="store_true", help="Quick run: 50 portfolios, 1 seed")
    parser.add_argument("--output", type=str, default="results", help="Output directory")
    args = parser.parse_args()

    if args.quick:
        num_portfolios, seeds = 50, [42]
        print("Quick mode: 50 portfolios × 1 seed")
    else:
        num_portfolios, seeds = args.portfolios, args.seeds
        print(f"Full mode: {num_portfolios} portfolios × {len(seeds)} seeds")

    df = run_benchmark(num_portfolios, seeds, args.extra, args.output)
    print_summary(df)
    sanity_checks(df)


if __name__ == "__main__":
    main()
