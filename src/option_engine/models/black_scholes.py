from __future__ import annotations

import math

from ..exceptions import InvalidParameter
from ..numerics.normal import CdfMethod, norm_cdf, norm_pdf


def _validate_scalar_inputs(
    *, spot: float, strike: float, sigma: float, tau: float
) -> None:
    if tau <= 0.0:
        raise InvalidParameter("Time to maturity must be positive")
    if sigma <= 0.0:
        raise InvalidParameter("Volatility must be positive")
    if spot <= 0.0:
        raise InvalidParameter("spot must be positive")
    if strike <= 0.0:
        raise InvalidParameter("strike must be positive")


def discount_factor(rate: float, tau: float) -> float:
    return math.exp(-rate * tau)


def d1_d2(
    *, spot: float, strike: float, r: float, q: float, sigma: float, tau: float
) -> tuple[float, float]:
    _validate_scalar_inputs(spot=spot, strike=strike, sigma=sigma, tau=tau)
    vol_sqrt_t = sigma * math.sqrt(tau)
    num = math.log(spot / strike) + (r - q + 0.5 * sigma * sigma) * tau
    d1 = num / vol_sqrt_t
    d2 = d1 - vol_sqrt_t
    return float(d1), float(d2)


def call_price(
    *,
    spot: float,
    strike: float,
    r: float,
    q: float,
    sigma: float,
    tau: float,
    method: CdfMethod = CdfMethod.ABRAMOWITZ_STEGUN,
) -> float:
    """
    Black–Scholes European call with continuous dividend yield q (not floored).
    """
    d1, d2 = d1_d2(spot=spot, strike=strike, r=r, q=q, sigma=sigma, tau=tau)
    df_r = discount_factor(r, tau)
    df_q = discount_factor(q, tau)
    return spot * df_q * norm_cdf(d1, method=method) - strike * df_r * norm_cdf(
        d2, method=method
    )


def put_price(
    *,
    spot: float,
    strike: float,
    r: float,
    q: float,
    sigma: float,
    tau: float,
    method: CdfMethod = CdfMethod.ABRAMOWITZ_STEGUN,
) -> float:
    """
    Black–Scholes European put with continuous dividend yield q (not floored).
    """
    d1, d2 = d1_d2(spot=spot, strike=strike, r=r, q=q, sigma=sigma, tau=tau)
    df_r = discount_factor(r, tau)
    df_q = discount_factor(q, tau)
    return strike * df_r * norm_cdf(-d2, method=method) - spot * df_q * norm_cdf(
        -d1, method=method
    )


def call_greeks(
    *,
    spot: float,
    strike: float,
    r: float,
    q: float,
    sigma: float,
    tau: float,
    method: CdfMethod = CdfMethod.ABRAMOWITZ_STEGUN,
) -> dict[str, float]:
    """
    Analytic Greeks for BS European call (with dividend yield q).

    Raw model units: theta is ∂Price/∂t per year, vega per unit volatility,
    rho per unit rate.
    """
    d1, d2 = d1_d2(spot=spot, strike=strike, r=r, q=q, sigma=sigma, tau=tau)
    sqrt_tau = math.sqrt(tau)
    df_r = discount_factor(r, tau)
    df_q = discount_factor(q, tau)

    Nd1 = norm_cdf(d1, method=method)
    Nd2 = norm_cdf(d2, method=method)
    phi_d1 = norm_pdf(d1)

    price = spot * df_q * Nd1 - strike * df_r * Nd2
    delta = df_q * Nd1
    gamma = df_q * phi_d1 / (spot * sigma * sqrt_tau)
    vega = spot * df_q * phi_d1 * sqrt_tau
    theta = (
        -(spot * df_q * phi_d1 * sigma) / (2.0 * sqrt_tau)
        - r * strike * df_r * Nd2
        + q * spot * df_q * Nd1
    )
    rho = strike * tau * df_r * Nd2

    return {
        "price": price,
        "delta": delta,
        "gamma": gamma,
        "vega": vega,
        "theta": theta,
        "rho": rho,
    }


def put_greeks(
    *,
    spot: float,
    strike: float,
    r: float,
    q: float,
    sigma: float,
    tau: float,
    method: CdfMethod = CdfMethod.ABRAMOWITZ_STEGUN,
) -> dict[str, float]:
    """
    Analytic Greeks for BS European put (with dividend yield q).

    Raw model units: theta is ∂Price/∂t per year, vega per unit volatility,
    rho per unit rate.
    """
    d1, d2 = d1_d2(spot=spot, strike=strike, r=r, q=q, sigma=sigma, tau=tau)
    sqrt_tau = math.sqrt(tau)
    df_r = discount_factor(r, tau)
    df_q = discount_factor(q, tau)

    Nmd1 = norm_cdf(-d1, method=method)
    Nmd2 = norm_cdf(-d2, method=method)
    phi_d1 = norm_pdf(d1)

    price = strike * df_r * Nmd2 - spot * df_q * Nmd1
    delta = -df_q * Nmd1
    gamma = df_q * phi_d1 / (spot * sigma * sqrt_tau)
    vega = spot * df_q * phi_d1 * sqrt_tau
    theta = (
        -(spot * df_q * phi_d1 * sigma) / (2.0 * sqrt_tau)
        + r * strike * df_r * Nmd2
        - q * spot * df_q * Nmd1
    )
    rho = -strike * tau * df_r * Nmd2

    return {
        "price": price,
        "delta": delta,
        "gamma": gamma,
        "vega": vega,
        "theta": theta,
        "rho": rho,
    }
