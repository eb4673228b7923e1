from .analytic import bs_greeks, bs_price, price_analytic
from .mc import MIN_PATHS, price_by_simulation

__all__ = [
    "bs_greeks",
    "bs_price",
    "price_analytic",
    "MIN_PATHS",
    "price_by_simulation",
]
