from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

from ..exceptions import InvalidParameter
from ..numerics.random_stream import RandomStream, lane_gaussians
from ..typing import FloatArray, IntArray


@dataclass(frozen=True, slots=True)
class GBMPathSimulator:
    """
    Step-by-step path generator for risk-neutral geometric Brownian motion.

    The underlying follows

        dS_t = (r - q) S_t dt + sigma S_t dW_t

    and each step applies the exact solution

        S_{t+dt} = S_t * exp((r - q - sigma^2 / 2) dt + sigma sqrt(dt) Z)

    so there is no discretization bias for any ``n_steps``.

    Parameters
    ----------
    S0
        Spot price at time 0. Must be positive.
    r
        Continuously-compounded risk-free rate.
    q
        Continuous dividend yield.
    sigma
        Volatility (annualized). Must be positive.
    tau
        Time to maturity in years. Must be positive.
    n_steps
        Number of time steps per path. Must be at least 1.

    Notes
    -----
    Every path consumes ``2 * n_steps`` uniforms (one Box-Muller normal per
    step). Paths are advanced as independent lanes: lane ``k`` starts at the
    state the sequential stream would have after ``k`` earlier paths.
    """

    S0: float
    r: float
    q: float
    sigma: float
    tau: float
    n_steps: int

    def __post_init__(self) -> None:
        if self.tau <= 0.0:
            raise InvalidParameter("Time to maturity must be positive")
        if self.sigma <= 0.0:
            raise InvalidParameter("Volatility must be positive")
        if self.n_steps < 1:
            raise InvalidParameter("Number of steps must be at least 1")
        if self.S0 <= 0.0:
            raise InvalidParameter("S0 must be positive")

    @property
    def dt(self) -> float:
        return self.tau / self.n_steps

    @property
    def drift(self) -> float:
        return (self.r - self.q - 0.5 * self.sigma * self.sigma) * self.dt

    @property
    def diffusion(self) -> float:
        return self.sigma * math.sqrt(self.dt)

    @property
    def draws_per_path(self) -> int:
        return 2 * self.n_steps

    def simulate(
        self,
        states: IntArray,
        *,
        n_record: int = 0,
        check_cancel: Callable[[], None] | None = None,
    ) -> tuple[FloatArray, FloatArray]:
        """
        Advance one path per lane from ``S0`` to maturity.

        Parameters
        ----------
        states
            Start state of each lane (int64), e.g. from
            :meth:`RandomStream.lane_states`.
        n_record
            Number of leading lanes whose full trajectory is returned.
        check_cancel
            Called once per time step; expected to raise to abort the run.

        Returns
        -------
        (ST, paths)
            ``ST`` has shape ``(n_lanes,)``. ``paths`` has shape
            ``(n_record, n_steps + 1)`` with ``paths[:, 0] == S0``.
        """
        s = np.array(states, dtype=np.int64, copy=True)
        n_record = max(0, min(int(n_record), s.size))

        drift = self.drift
        diffusion = self.diffusion

        prices = np.full(s.size, float(self.S0), dtype=np.float64)
        paths = np.empty((n_record, self.n_steps + 1), dtype=np.float64)
        paths[:, 0] = self.S0

        for j in range(self.n_steps):
            if check_cancel is not None:
                check_cancel()
            z, s = lane_gaussians(s)
            prices *= np.exp(drift + diffusion * z)
            if n_record:
                paths[:, j + 1] = prices[:n_record]

        return prices, paths

    def sequential_path(self, stream: RandomStream) -> FloatArray:
        """One trajectory drawn straight from ``stream`` (scalar reference)."""
        drift = self.drift
        diffusion = self.diffusion
        out = np.empty(self.n_steps + 1, dtype=np.float64)
        price = float(self.S0)
        out[0] = price
        for j in range(self.n_steps):
            price *= math.exp(drift + diffusion * stream.gaussian())
            out[j + 1] = price
        return out
