from __future__ import annotations

import logging
from collections.abc import Iterable

import numpy as np
import pandas as pd

from option_engine.config import SimulationConfig
from option_engine.pricers.analytic import bs_price
from option_engine.pricers.mc import price_by_simulation
from option_engine.types import (
    PricingParameters,
    SimulationParameters,
    SimulationResult,
)

logger = logging.getLogger(__name__)


def _compare_row(
    p: PricingParameters, res: SimulationResult, analytic: float
) -> dict[str, object]:
    lo, hi = res.confidence_interval
    err = res.price - analytic
    se = res.standard_error
    z = err / se if se > 0 else np.nan
    return {
        "kind": p.kind.value,
        "spot": p.S,
        "strike": p.K,
        "maturity": p.T,
        "analytic": analytic,
        "mc": res.price,
        "se": se,
        "ci_low": lo,
        "ci_high": hi,
        "err": err,
        "abs_err": abs(err),
        "z": z,
        "abs_z": abs(z) if np.isfinite(z) else np.nan,
        "covered": bool(lo <= analytic <= hi),
        "seed": res.seed,
        "n_paths": res.n_paths,
        "n_steps": res.n_steps,
    }


def run_cases(
    cases: Iterable[tuple[str, PricingParameters]],
    *,
    n_paths: int,
    n_steps: int = 1,
    seed: int | None = 123,
    per_case_seed: bool = True,
    config: SimulationConfig | None = None,
) -> pd.DataFrame:
    """Run one MC estimate per case and compare to the analytic benchmark.

    Returns a tidy DataFrame with columns:
        case, kind, spot, strike, maturity, analytic, mc, se, ci_low, ci_high,
        err, abs_err, z, abs_z, covered, seed, n_paths, n_steps
    """
    rows: list[dict[str, object]] = []
    for i, (name, p) in enumerate(cases):
        seed_i = None
        if seed is not None:
            seed_i = int(seed + i) if per_case_seed else int(seed)

        sp = SimulationParameters(
            pricing=p, n_paths=int(n_paths), n_steps=int(n_steps), seed=seed_i
        )
        res = price_by_simulation(sp, config=config)
        row = _compare_row(p, res, bs_price(p))
        logger.debug(
            "case %r: mc=%.6f analytic=%.6f z=%.2f",
            name,
            row["mc"],
            row["analytic"],
            row["z"],
        )
        rows.append({"case": name, **row})

    return pd.DataFrame(rows)


def seed_coverage(
    sp: SimulationParameters,
    seeds: Iterable[int],
    *,
    config: SimulationConfig | None = None,
) -> pd.DataFrame:
    """Repeat one simulation over several seeds; one comparison row per seed.

    ``sp.seed`` is ignored. See :func:`coverage_rate` for the summary.
    """
    p = sp.pricing
    analytic = bs_price(p)
    rows = []
    for s in seeds:
        res = price_by_simulation(
            SimulationParameters(
                pricing=p, n_paths=sp.n_paths, n_steps=sp.n_steps, seed=int(s)
            ),
            config=config,
        )
        rows.append(_compare_row(p, res, analytic))
    return pd.DataFrame(rows)


def coverage_rate(df: pd.DataFrame) -> float:
    """Fraction of runs whose confidence interval contains the analytic price."""
    if len(df) == 0:
        return float("nan")
    return float(df["covered"].astype(bool).mean())


def se_scaling_table(
    sp: SimulationParameters,
    *,
    n_paths_list: Iterable[int] = (1_000, 2_000, 4_000, 8_000, 16_000),
    seeds: Iterable[int] = (0, 1, 2, 3, 4),
    config: SimulationConfig | None = None,
) -> pd.DataFrame:
    """Mean reported SE per path count, next to the ``1/sqrt(n)`` reference.

    Columns: n_paths, se, se_ref, ratio (``se / se_ref``).
    """
    seeds = list(seeds)
    rows = []
    for n in sorted(int(n) for n in n_paths_list):
        se = [
            price_by_simulation(
                SimulationParameters(
                    pricing=sp.pricing, n_paths=n, n_steps=sp.n_steps, seed=int(s)
                ),
                config=config,
            ).standard_error
            for s in seeds
        ]
        rows.append({"n_paths": n, "se": float(np.mean(se))})

    df = pd.DataFrame(rows)
    if len(df):
        n0 = float(df["n_paths"].iloc[0])
        se0 = float(df["se"].iloc[0])
        df["se_ref"] = se0 * np.sqrt(n0 / df["n_paths"].astype(float))
        df["ratio"] = df["se"] / df["se_ref"]
    return df


def convergence_frame(res: SimulationResult) -> pd.DataFrame:
    """Convergence path with the number of paths behind each point."""
    step = res.convergence_cadence
    counts = list(range(step, res.n_paths + 1, step))
    if not counts or counts[-1] != res.n_paths:
        counts.append(res.n_paths)
    return pd.DataFrame({"n_paths": counts, "price": res.convergence_path})


__all__ = [
    "convergence_frame",
    "coverage_rate",
    "run_cases",
    "se_scaling_table",
    "seed_coverage",
]
