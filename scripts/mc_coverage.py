"""Check the Monte Carlo confidence interval against the analytic price.

Runs one simulation per seed, reports how often the 95% interval contains the
Black-Scholes price, and prints the standard-error scaling table.

Run from the repository root:

    PYTHONPATH=src python scripts/mc_coverage.py --seeds 20 --paths 100000 --steps 252
    PYTHONPATH=src python scripts/mc_coverage.py --kind put --workers 4 -v
"""

from __future__ import annotations

import argparse
import logging

from option_engine import (
    OptionType,
    PricingParameters,
    SimulationConfig,
    SimulationParameters,
)
from option_engine.diagnostics import coverage_rate, se_scaling_table, seed_coverage


def main() -> int:
    ap = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    ap.add_argument("--spot", type=float, default=100.0)
    ap.add_argument("--strike", type=float, default=100.0)
    ap.add_argument("--maturity", type=float, default=1.0)
    ap.add_argument("--rate", type=float, default=0.05)
    ap.add_argument("--vol", type=float, default=0.2)
    ap.add_argument("--div", type=float, default=0.0)
    ap.add_argument("--kind", choices=[k.value for k in OptionType], default="call")
    ap.add_argument("--paths", type=int, default=100_000)
    ap.add_argument("--steps", type=int, default=252)
    ap.add_argument("--seeds", type=int, default=20)
    ap.add_argument("--workers", type=int, default=1)
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    p = PricingParameters(
        spot=args.spot,
        strike=args.strike,
        maturity=args.maturity,
        rate=args.rate,
        volatility=args.vol,
        dividend_yield=args.div,
        kind=args.kind,
    )
    sp = SimulationParameters(pricing=p, n_paths=args.paths, n_steps=args.steps)
    cfg = SimulationConfig(n_workers=args.workers)

    df = seed_coverage(sp, seeds=range(args.seeds), config=cfg)
    cols = ["seed", "analytic", "mc", "se", "ci_low", "ci_high", "z", "covered"]
    print(df[cols].to_string(index=False, float_format=lambda v: f"{v:.5f}"))
    print(f"\ncoverage: {coverage_rate(df):.0%} of {len(df)} runs\n")

    scaling = se_scaling_table(sp, config=cfg)
    print(scaling.to_string(index=False, float_format=lambda v: f"{v:.5f}"))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
