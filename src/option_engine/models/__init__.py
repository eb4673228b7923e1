from . import black_scholes
from .gbm import GBMPathSimulator

__all__ = ["GBMPathSimulator", "black_scholes"]
