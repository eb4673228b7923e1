"""
option_engine

European option pricing engine: closed-form Black-Scholes prices and Greeks,
and a seeded Monte Carlo pricer with confidence intervals.

This package exposes the main user-facing functions at the top level, so you
can write, for example:

    from option_engine import price_analytic, price_by_simulation
"""

# Re-export pricing entrypoints (nice public names)
from .config import AnalyticConfig, SimulationConfig
from .exceptions import (
    InvalidParameter,
    OptionEngineError,
    SimulationCancelled,
    SimulationTimeout,
)
from .pricers.analytic import bs_greeks, bs_price, price_analytic
from .pricers.mc import price_by_simulation
from .types import (
    AnalyticResult,
    Greeks,
    OptionType,
    PricingParameters,
    SimulationParameters,
    SimulationResult,
)

__all__ = [
    # Types
    "OptionType",
    "PricingParameters",
    "SimulationParameters",
    "Greeks",
    "AnalyticResult",
    "SimulationResult",
    # Config
    "AnalyticConfig",
    "SimulationConfig",
    # Errors
    "OptionEngineError",
    "InvalidParameter",
    "SimulationCancelled",
    "SimulationTimeout",
    # Pricers
    "price_analytic",
    "price_by_simulation",
    "bs_price",
    "bs_greeks",
]
