from __future__ import annotations

from ..config import AnalyticConfig
from ..exceptions import InvalidParameter
from ..models import black_scholes as bs_model
from ..types import AnalyticResult, Greeks, OptionType, PricingParameters

DAYS_PER_YEAR = 365.0
PER_PERCENT = 100.0


def _validate(p: PricingParameters) -> None:
    if p.T <= 0.0:
        raise InvalidParameter("Time to maturity must be positive")
    if p.sigma <= 0.0:
        raise InvalidParameter("Volatility must be positive")


def _raw_greeks(p: PricingParameters, cfg: AnalyticConfig) -> dict[str, float]:
    kwargs = dict(
        spot=p.S,
        strike=p.K,
        r=p.r,
        q=p.q,
        sigma=p.sigma,
        tau=p.T,
        method=cfg.cdf_method,
    )
    if p.kind == OptionType.CALL:
        return bs_model.call_greeks(**kwargs)
    if p.kind == OptionType.PUT:
        return bs_model.put_greeks(**kwargs)
    raise ValueError(f"Unsupported option kind: {p.kind}")


def bs_price(p: PricingParameters, *, config: AnalyticConfig | None = None) -> float:
    """Closed-form price floored at zero."""
    return price_analytic(p, config=config).price


def bs_greeks(p: PricingParameters, *, config: AnalyticConfig | None = None) -> Greeks:
    return price_analytic(p, config=config).greeks


def price_analytic(
    p: PricingParameters, *, config: AnalyticConfig | None = None
) -> AnalyticResult:
    """
    Price a European option and its Greeks with the Black-Scholes-Merton formula.

    Parameters
    ----------
    p : PricingParameters
        Spot, strike, maturity, rate, volatility, dividend yield and kind.
    config : AnalyticConfig | None
        Choice of normal CDF backend. Defaults to the Abramowitz-Stegun
        approximation.

    Returns
    -------
    AnalyticResult
        ``price`` is floored at zero. Greeks are reported in desk units:
        theta per calendar day, vega per one volatility point and rho per one
        rate point.

    Raises
    ------
    InvalidParameter
        If ``T <= 0`` or ``sigma <= 0``. Nothing is computed in that case.
    """
    _validate(p)
    cfg = config or AnalyticConfig()
    g = _raw_greeks(p, cfg)

    greeks = Greeks(
        delta=float(g["delta"]),
        gamma=float(g["gamma"]),
        theta=float(g["theta"]) / DAYS_PER_YEAR,
        vega=float(g["vega"]) / PER_PERCENT,
        rho=float(g["rho"]) / PER_PERCENT,
    )
    return AnalyticResult(price=max(0.0, float(g["price"])), greeks=greeks)


__all__ = ["bs_greeks", "bs_price", "price_analytic"]
