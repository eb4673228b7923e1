from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum

import numpy as np

from .exceptions import InvalidParameter


class OptionType(str, Enum):
    """Option contract type.

    An enumeration of plain-vanilla option types.

    Attributes
    ----------
    CALL : str
        Call option ("call").
    PUT : str
        Put option ("put").
    """

    CALL = "call"
    PUT = "put"


@dataclass(frozen=True, slots=True)
class PricingParameters:
    """Inputs shared by the analytic and Monte Carlo pricers.

    Parameters
    ----------
    spot : float
        Current spot price of the underlying, typically denoted :math:`S`.
        Must be positive.
    strike : float
        Strike price of the option, typically denoted :math:`K`. Must be positive.
    maturity : float
        Time to expiry in years, typically denoted :math:`T`.
    rate : float
        Continuously-compounded risk-free rate as a decimal (0.05 = 5%).
    volatility : float
        Annualized Black-Scholes volatility as a decimal (0.2 = 20%).
    dividend_yield : float, default 0.0
        Continuously-compounded dividend yield as a decimal.
    kind : OptionType, default OptionType.CALL
        Call or put. Plain strings ``"call"`` / ``"put"`` are accepted.

    Raises
    ------
    InvalidParameter
        If ``spot <= 0`` or ``strike <= 0``, or ``kind`` is not a known option type.

    Notes
    -----
    Maturity and volatility are validated by the pricers, not here, so a record
    with ``T = 0`` can be built and is rejected when priced. The engine only
    requires ``sigma > 0``; any upper bound on volatility (e.g. 100%) belongs to
    the input layer of the caller.
    """

    spot: float
    strike: float
    maturity: float
    rate: float
    volatility: float
    dividend_yield: float = 0.0
    kind: OptionType = OptionType.CALL

    def __post_init__(self) -> None:
        if self.spot <= 0.0:
            raise InvalidParameter("spot must be positive")
        if self.strike <= 0.0:
            raise InvalidParameter("strike must be positive")
        try:
            kind = OptionType(self.kind)
        except ValueError as e:
            raise InvalidParameter(f"Unsupported option kind: {self.kind!r}") from e
        object.__setattr__(self, "kind", kind)

    @property
    def S(self) -> float:
        return self.spot

    @property
    def K(self) -> float:
        return self.strike

    @property
    def T(self) -> float:
        return self.maturity

    @property
    def r(self) -> float:
        return self.rate

    @property
    def q(self) -> float:
        return self.dividend_yield

    @property
    def sigma(self) -> float:
        return self.volatility

    def with_kind(self, kind: OptionType | str) -> PricingParameters:
        """Return a copy of these parameters for another option kind."""
        return replace(self, kind=OptionType(kind))


@dataclass(frozen=True, slots=True)
class Greeks:
    """Black-Scholes sensitivities in trading-desk units.

    Attributes
    ----------
    delta : float
        dPrice/dS.
    gamma : float
        d2Price/dS2, identical for calls and puts.
    theta : float
        Price change per calendar day (annual theta / 365).
    vega : float
        Price change for a one percentage point move in volatility.
    rho : float
        Price change for a one percentage point move in the rate.
    """

    delta: float
    gamma: float
    theta: float
    vega: float
    rho: float

    def as_dict(self) -> dict[str, float]:
        return {
            "delta": self.delta,
            "gamma": self.gamma,
            "theta": self.theta,
            "vega": self.vega,
            "rho": self.rho,
        }


@dataclass(frozen=True, slots=True)
class AnalyticResult:
    """Closed-form price (floored at zero) and Greeks."""

    price: float
    greeks: Greeks


@dataclass(frozen=True, slots=True)
class SimulationParameters:
    """Inputs for a Monte Carlo run.

    Parameters
    ----------
    pricing : PricingParameters
        Contract and market inputs.
    n_paths : int
        Number of simulated paths. The pricer requires at least 1000.
    n_steps : int
        Number of time steps per path. The pricer requires at least 1.
    seed : int | None, default None
        Seed of the Park-Miller stream. ``None`` derives a seed from the wall
        clock (milliseconds), so the run is only reproducible through the
        ``seed`` recorded on the result.
    """

    pricing: PricingParameters
    n_paths: int
    n_steps: int
    seed: int | None = None


@dataclass(frozen=True, slots=True, eq=False)
class SimulationResult:
    """Output of :func:`~option_engine.pricers.mc.price_by_simulation`.

    Attributes
    ----------
    price : float
        Discounted mean payoff, floored at zero.
    standard_error : float
        Standard error of the discounted estimator.
    confidence_interval : tuple[float, float]
        Normal-approximation interval ``price -/+ zcrit * standard_error``
        with the lower end floored at zero.
    convergence_path : np.ndarray
        Discounted running-mean price, sampled every ``convergence_cadence``
        paths and at the last path.
    sample_paths : np.ndarray
        Shape ``(min(n_paths, 100), n_steps + 1)``; each row starts at the spot.
    seed : int
        Seed actually used (useful when the input seed was ``None``).
    n_paths, n_steps : int
        Simulation size.
    convergence_cadence : int
        Paths between convergence points, ``ceil(n_paths / convergence_points)``.
    """

    price: float
    standard_error: float
    confidence_interval: tuple[float, float]
    convergence_path: np.ndarray = field(repr=False)
    sample_paths: np.ndarray = field(repr=False)
    seed: int
    n_paths: int
    n_steps: int
    convergence_cadence: int

    @property
    def ci_width(self) -> float:
        return self.confidence_interval[1] - self.confidence_interval[0]

    @property
    def relative_error(self) -> float:
        """Relative standard error (SE / price)."""
        if abs(self.price) < 1e-10:
            return float("inf")
        return self.standard_error / abs(self.price)
