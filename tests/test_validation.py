import pytest

from option_engine import (
    InvalidParameter,
    OptionType,
    PricingParameters,
    SimulationConfig,
    price_analytic,
    price_by_simulation,
)
from option_engine.pricers import mc as mc_module


@pytest.mark.parametrize("n_paths, ok", [(999, False), (1_000, True)])
def test_path_count_boundary(make_sim, n_paths, ok):
    sp = make_sim(n_paths=n_paths)
    if ok:
        assert price_by_simulation(sp).price > 0.0
    else:
        with pytest.raises(InvalidParameter):
            price_by_simulation(sp)


@pytest.mark.parametrize("n_steps, ok", [(0, False), (-3, False), (1, True)])
def test_step_count_boundary(make_sim, n_steps, ok):
    sp = make_sim(n_paths=1_000, n_steps=n_steps)
    if ok:
        assert price_by_simulation(sp).sample_paths.shape[1] == 2
    else:
        with pytest.raises(InvalidParameter):
            price_by_simulation(sp)


@pytest.mark.parametrize("field", ["T", "sigma"])
@pytest.mark.parametrize("value", [0.0, -0.5])
def test_non_positive_maturity_or_vol_fails_for_both_pricers(
    make_params, make_sim, base_params, field, value
):
    p = make_params(**{**base_params, field: value})
    with pytest.raises(InvalidParameter):
        price_analytic(p)
    with pytest.raises(InvalidParameter):
        price_by_simulation(make_sim(n_paths=1_000, **{field: value}))


def test_invalid_parameter_is_a_value_error(make_params, base_params):
    with pytest.raises(ValueError):
        price_analytic(make_params(**{**base_params, "T": 0.0}))


def test_checks_happen_before_any_draw(make_sim, monkeypatch):
    def boom(*args, **kwargs):
        raise AssertionError("random stream touched before validation")

    monkeypatch.setattr(mc_module, "RandomStream", boom)
    with pytest.raises(InvalidParameter):
        price_by_simulation(make_sim(n_paths=999))


@pytest.mark.parametrize("field", ["spot", "strike"])
def test_non_positive_spot_or_strike_rejected_at_construction(field):
    kw = dict(spot=100.0, strike=100.0, maturity=1.0, rate=0.05, volatility=0.2)
    kw[field] = 0.0
    with pytest.raises(InvalidParameter):
        PricingParameters(**kw)


def test_kind_accepts_strings():
    p = PricingParameters(
        spot=100.0, strike=100.0, maturity=1.0, rate=0.05, volatility=0.2, kind="put"
    )
    assert p.kind is OptionType.PUT
    assert p.with_kind("call").kind is OptionType.CALL

    with pytest.raises(InvalidParameter):
        PricingParameters(
            spot=100.0, strike=100.0, maturity=1.0, rate=0.05, volatility=0.2, kind="straddle"
        )


def test_volatility_above_one_is_allowed_by_the_engine(make_params, base_params):
    p = make_params(**{**base_params, "sigma": 1.5})
    assert price_analytic(p).price > 0.0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"batch_size": 0},
        {"n_workers": 0},
        {"max_stored_paths": -1},
        {"convergence_points": 0},
        {"zcrit": 0.0},
        {"timeout": -1.0},
    ],
)
def test_simulation_config_rejects_bad_knobs(kwargs):
    with pytest.raises(ValueError):
        SimulationConfig(**kwargs)
