from __future__ import annotations

import logging
import math
import threading
import time
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass

import numpy as np

from ..config import SimulationConfig
from ..exceptions import InvalidParameter, SimulationCancelled, SimulationTimeout
from ..models.gbm import GBMPathSimulator
from ..numerics.random_stream import RandomStream, time_seed
from ..numerics.stats import RunningStats
from ..types import SimulationParameters, SimulationResult
from ..typing import FloatArray
from ..vanilla import make_vanilla_payoff

logger = logging.getLogger(__name__)

MIN_PATHS = 1000


def _validate(sp: SimulationParameters) -> None:
    p = sp.pricing
    if p.T <= 0.0:
        raise InvalidParameter("Time to maturity must be positive")
    if p.sigma <= 0.0:
        raise InvalidParameter("Volatility must be positive")
    if sp.n_paths < MIN_PATHS:
        raise InvalidParameter(
            f"Number of paths should be at least {MIN_PATHS:,} for reliable results"
        )
    if sp.n_steps < 1:
        raise InvalidParameter("Number of steps must be at least 1")


@dataclass(frozen=True, slots=True)
class _Batch:
    index: int
    start: int  # global index of the first path
    size: int


@dataclass(frozen=True, slots=True)
class _BatchOutput:
    stats: RunningStats
    # 1-based global path counts at which a convergence point is due, and the
    # within-batch payoff sum at each of them
    checkpoints: np.ndarray
    partial_sums: FloatArray
    paths: FloatArray


def _make_cancel_check(
    cancel_event: threading.Event | None, deadline: float | None
) -> Callable[[], None] | None:
    if cancel_event is None and deadline is None:
        return None

    def check() -> None:
        if cancel_event is not None and cancel_event.is_set():
            raise SimulationCancelled("Monte Carlo run was cancelled")
        if deadline is not None and time.monotonic() > deadline:
            raise SimulationTimeout("Monte Carlo run exceeded its timeout")

    return check


def _plan_batches(n_paths: int, batch_size: int) -> list[_Batch]:
    return [
        _Batch(index=i, start=start, size=min(batch_size, n_paths - start))
        for i, start in enumerate(range(0, n_paths, batch_size))
    ]


def _checkpoints(start: int, size: int, cadence: int, n_paths: int) -> np.ndarray:
    """Global 1-based path counts in ``(start, start + size]`` that get a point."""
    counts = np.arange(start + 1, start + size + 1, dtype=np.int64)
    due = (counts % cadence == 0) | (counts == n_paths)
    return counts[due]


def _run_batch(
    batch: _Batch,
    *,
    sim: GBMPathSimulator,
    root: RandomStream,
    payoff: Callable[[np.ndarray], np.ndarray],
    n_paths: int,
    cadence: int,
    n_stored: int,
    check_cancel: Callable[[], None] | None,
) -> _BatchOutput:
    if check_cancel is not None:
        check_cancel()

    # The batch owns the uniforms [start * draws, (start + size) * draws) of the
    # seeded stream; each path gets its own lane inside that block.
    sub = root.substream(batch.start * sim.draws_per_path)
    states = sub.lane_states(batch.size, sim.draws_per_path)

    n_record = max(0, min(n_stored - batch.start, batch.size))
    ST, paths = sim.simulate(states, n_record=n_record, check_cancel=check_cancel)
    payoffs = payoff(ST)

    checkpoints = _checkpoints(batch.start, batch.size, cadence, n_paths)
    partial_sums = np.cumsum(payoffs)[checkpoints - batch.start - 1]

    return _BatchOutput(
        stats=RunningStats.from_values(payoffs),
        checkpoints=checkpoints,
        partial_sums=partial_sums,
        paths=paths,
    )


def _collect(futures: list[Future[_BatchOutput]]) -> list[_BatchOutput]:
    try:
        return [f.result() for f in futures]
    except BaseException:
        for f in futures:
            f.cancel()
        raise


def price_by_simulation(
    sp: SimulationParameters,
    *,
    config: SimulationConfig | None = None,
    cancel_event: threading.Event | None = None,
) -> SimulationResult:
    """
    Price a European vanilla option by Monte Carlo simulation of GBM paths.

    Each path starts at ``S``, takes ``n_steps`` exact GBM steps driven by the
    seeded Park-Miller stream, and contributes its terminal payoff to a running
    mean/variance. The first ``max_stored_paths`` trajectories are kept, and the
    discounted running mean is recorded every ``ceil(n_paths / convergence_points)``
    paths and at the final path.

    Parameters
    ----------
    sp : SimulationParameters
        Pricing inputs plus ``n_paths``, ``n_steps`` and ``seed``.
    config : SimulationConfig | None
        Batching, threading, capture sizes, ``zcrit`` and timeout. The numbers
        do not depend on ``n_workers``.
    cancel_event : threading.Event | None
        Setting the event aborts the run at the next time step.

    Returns
    -------
    SimulationResult
        Price (floored at zero), standard error of the discounted estimator,
        ``[max(0, price - zcrit*se), price + zcrit*se]``, the convergence path
        and the stored sample paths.

    Raises
    ------
    InvalidParameter
        If ``T <= 0``, ``sigma <= 0``, ``n_paths < 1000`` or ``n_steps < 1``;
        raised before any draw or allocation.
    SimulationCancelled
        If ``cancel_event`` is set during the run.
    SimulationTimeout
        If the run takes longer than ``config.timeout`` seconds.

    Notes
    -----
    The variance is the population variance of the per-path payoffs, and the
    interval relies on the normal approximation to the sampling distribution
    of the mean. ``examples/quickstart.py`` prices the reference call.
    """
    _validate(sp)
    cfg = config or SimulationConfig()
    p = sp.pricing

    n_paths = int(sp.n_paths)
    seed = int(sp.seed) if sp.seed is not None else time_seed()

    sim = GBMPathSimulator(
        S0=p.S, r=p.r, q=p.q, sigma=p.sigma, tau=p.T, n_steps=int(sp.n_steps)
    )
    payoff = make_vanilla_payoff(p.kind, K=p.K)
    root = RandomStream(seed)

    n_stored = min(n_paths, cfg.max_stored_paths)
    cadence = math.ceil(n_paths / cfg.convergence_points)
    batches = _plan_batches(n_paths, cfg.batch_size)

    deadline = time.monotonic() + cfg.timeout if cfg.timeout is not None else None
    check_cancel = _make_cancel_check(cancel_event, deadline)

    logger.debug(
        "MC start: kind=%s n_paths=%d n_steps=%d seed=%d batches=%d workers=%d",
        p.kind.value,
        n_paths,
        sim.n_steps,
        seed,
        len(batches),
        cfg.n_workers,
    )
    t0 = time.perf_counter()

    def run(batch: _Batch) -> _BatchOutput:
        return _run_batch(
            batch,
            sim=sim,
            root=root,
            payoff=payoff,
            n_paths=n_paths,
            cadence=cadence,
            n_stored=n_stored,
            check_cancel=check_cancel,
        )

    try:
        if cfg.n_workers == 1 or len(batches) == 1:
            outputs = [run(b) for b in batches]
        else:
            with ThreadPoolExecutor(max_workers=cfg.n_workers) as executor:
                outputs = _collect([executor.submit(run, b) for b in batches])
    except SimulationCancelled as e:
        logger.info("MC run stopped after %.2fs: %s", time.perf_counter() - t0, e)
        raise

    disc = math.exp(-p.r * p.T)

    # Merge in batch order so the result is independent of scheduling.
    stats = RunningStats()
    convergence: list[float] = []
    for out in outputs:
        prefix = stats.mean * stats.count
        for count, partial in zip(out.checkpoints, out.partial_sums, strict=True):
            convergence.append(disc * (prefix + float(partial)) / int(count))
        stats.merge(out.stats)

    sample_paths = (
        np.vstack([out.paths for out in outputs if out.paths.shape[0] > 0])
        if n_stored > 0
        else np.empty((0, sim.n_steps + 1), dtype=np.float64)
    )

    mean_payoff = stats.mean
    price = disc * mean_payoff
    price_se = disc * stats.standard_error
    half_width = cfg.zcrit * price_se
    ci = (max(0.0, price - half_width), price + half_width)

    logger.debug(
        "MC done in %.3fs: price=%.6f se=%.6f", time.perf_counter() - t0, price, price_se
    )

    return SimulationResult(
        price=max(0.0, price),
        standard_error=price_se,
        confidence_interval=ci,
        convergence_path=np.asarray(convergence, dtype=np.float64),
        sample_paths=sample_paths,
        seed=seed,
        n_paths=n_paths,
        n_steps=sim.n_steps,
        convergence_cadence=cadence,
    )


__all__ = ["MIN_PATHS", "price_by_simulation"]
