import math

import numpy as np
import pytest

from option_engine.config import AnalyticConfig
from option_engine.models import black_scholes as bs_model
from option_engine.numerics.normal import CdfMethod
from option_engine.pricers.analytic import bs_greeks, bs_price, price_analytic
from option_engine.types import OptionType


def test_reference_atm_call(make_params, base_params):
    p = make_params(**base_params)
    assert price_analytic(p).price == pytest.approx(10.4506, abs=1e-3)


def test_reference_atm_put(make_params, base_params):
    p = make_params(**base_params, kind=OptionType.PUT)
    assert price_analytic(p).price == pytest.approx(5.5735, abs=1e-3)


@pytest.mark.parametrize("q", [0.0, 0.03])
def test_put_call_parity(make_params, q):
    """C - P = S e^{-qT} - K e^{-rT}."""
    kw = dict(S=100.0, K=105.0, r=0.03, sigma=0.25, T=1.2, q=q)
    C = price_analytic(make_params(**kw, kind=OptionType.CALL)).price
    P = price_analytic(make_params(**kw, kind=OptionType.PUT)).price

    rhs = 100.0 * math.exp(-q * 1.2) - 105.0 * math.exp(-0.03 * 1.2)
    assert abs((C - P) - rhs) < 1e-9 * max(1.0, abs(rhs))


def test_call_bounds(make_params):
    """max(S e^{-qT} - K*df, 0) <= C <= S e^{-qT}."""
    S, K, r, q, sigma, T = 120.0, 100.0, 0.04, 0.01, 0.3, 0.75
    C = bs_price(make_params(S=S, K=K, r=r, q=q, sigma=sigma, T=T))

    lower = max(S * math.exp(-q * T) - K * math.exp(-r * T), 0.0)
    upper = S * math.exp(-q * T)
    assert lower - 1e-6 <= C <= upper + 1e-12


@pytest.mark.parametrize("S", [50.0, 80.0, 100.0, 120.0, 200.0])
@pytest.mark.parametrize("q", [0.0, 0.04])
def test_delta_bounds_and_gamma_symmetry(make_params, S, q):
    kw = dict(S=S, K=100.0, r=0.05, sigma=0.3, T=0.8, q=q)
    gc = bs_greeks(make_params(**kw, kind=OptionType.CALL))
    gp = bs_greeks(make_params(**kw, kind=OptionType.PUT))
    df_q = math.exp(-q * 0.8)

    assert 0.0 <= gc.delta <= df_q
    assert -df_q <= gp.delta <= 0.0
    assert gc.gamma >= 0.0
    assert gc.gamma == gp.gamma
    assert gc.vega == gp.vega
    assert gc.delta - gp.delta == pytest.approx(df_q, abs=1e-12)


def test_call_monotone_decreasing_in_strike(make_params):
    strikes = np.array([60, 80, 100, 120, 140], dtype=float)
    prices = np.array(
        [bs_price(make_params(S=100.0, K=float(K), r=0.05, sigma=0.2, T=1.0)) for K in strikes]
    )
    assert np.all(np.diff(prices) <= 1e-10)


def test_small_vol_limit_is_discounted_intrinsic(make_params):
    S, K, r, T = 100.0, 95.0, 0.05, 1.0
    C = bs_price(make_params(S=S, K=K, r=r, sigma=1e-6, T=T))
    assert C == pytest.approx(max(S - K * math.exp(-r * T), 0.0), abs=1e-4)

    # out of the money in the forward sense -> worthless
    C_otm = bs_price(make_params(S=S, K=110.0, r=r, sigma=1e-6, T=T))
    assert C_otm == pytest.approx(0.0, abs=1e-4)


def test_price_is_floored_at_zero(make_params):
    # deep OTM put with tiny vol: raw formula can dip a hair below zero
    p = make_params(S=200.0, K=50.0, r=0.0, sigma=1e-4, T=0.1, kind=OptionType.PUT)
    assert price_analytic(p).price >= 0.0


def test_greeks_units_match_finite_differences(make_params, base_params):
    """theta per day, vega/rho per percentage point."""
    cfg = AnalyticConfig(cdf_method=CdfMethod.SCIPY)
    for kind in (OptionType.CALL, OptionType.PUT):
        kw = {**base_params, "q": 0.02, "kind": kind}
        g = price_analytic(make_params(**kw), config=cfg).greeks

        def price(**bump):
            return price_analytic(make_params(**{**kw, **bump}), config=cfg).price

        h = 1e-4
        delta = (price(S=kw["S"] + h) - price(S=kw["S"] - h)) / (2 * h)
        gamma = (price(S=kw["S"] + h) - 2 * price() + price(S=kw["S"] - h)) / h**2
        vega = (price(sigma=kw["sigma"] + h) - price(sigma=kw["sigma"] - h)) / (2 * h)
        rho = (price(r=kw["r"] + h) - price(r=kw["r"] - h)) / (2 * h)
        # theta: value change as calendar time passes = -dPrice/dT
        theta = -(price(T=kw["T"] + h) - price(T=kw["T"] - h)) / (2 * h)

        assert g.delta == pytest.approx(delta, abs=1e-6)
        assert g.gamma == pytest.approx(gamma, abs=1e-3)
        assert g.vega == pytest.approx(vega / 100.0, abs=1e-6)
        assert g.rho == pytest.approx(rho / 100.0, abs=1e-6)
        assert g.theta == pytest.approx(theta / 365.0, abs=1e-7)


def test_cdf_backends_agree(make_params, base_params):
    p = make_params(**{**base_params, "q": 0.01})
    a = price_analytic(p).price
    b = price_analytic(p, config=AnalyticConfig(cdf_method=CdfMethod.SCIPY)).price
    assert a == pytest.approx(b, abs=1e-4)


def test_model_functions_match_pricer(make_params, base_params):
    p = make_params(**base_params)
    raw = bs_model.call_price(spot=100.0, strike=100.0, r=0.05, q=0.0, sigma=0.2, tau=1.0)
    assert raw == pytest.approx(price_analytic(p).price, rel=1e-15)

    g = bs_model.call_greeks(spot=100.0, strike=100.0, r=0.05, q=0.0, sigma=0.2, tau=1.0)
    assert g["price"] == pytest.approx(raw, rel=1e-15)


def test_greeks_as_dict(make_params, base_params):
    d = bs_greeks(make_params(**base_params)).as_dict()
    assert set(d) == {"delta", "gamma", "theta", "vega", "rho"}
