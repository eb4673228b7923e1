"""Pytest helpers for the option_engine library."""

from __future__ import annotations

import pytest

from option_engine.types import OptionType, PricingParameters, SimulationParameters


@pytest.fixture
def base_params() -> dict:
    """A small set of canonical parameters used across tests."""
    return {
        "S": 100.0,
        "K": 100.0,
        "r": 0.05,
        "sigma": 0.2,
        "T": 1.0,
        "q": 0.0,
    }


@pytest.fixture
def make_params():
    """Factory fixture for constructing PricingParameters from short names."""

    def _make(
        *,
        S: float,
        K: float,
        r: float,
        sigma: float,
        T: float,
        q: float = 0.0,
        kind: OptionType = OptionType.CALL,
    ) -> PricingParameters:
        return PricingParameters(
            spot=S,
            strike=K,
            maturity=T,
            rate=r,
            volatility=sigma,
            dividend_yield=q,
            kind=kind,
        )

    return _make


@pytest.fixture
def make_sim(make_params, base_params):
    """Factory for SimulationParameters around the canonical ATM call."""

    def _make(
        *,
        n_paths: int = 2_000,
        n_steps: int = 1,
        seed: int | None = 7,
        **overrides,
    ) -> SimulationParameters:
        p = make_params(**{**base_params, **overrides})
        return SimulationParameters(
            pricing=p, n_paths=n_paths, n_steps=n_steps, seed=seed
        )

    return _make
