"""
Numerical building blocks (advanced API).

Top-level package `option_engine` exposes the everyday pricing API.
This subpackage exposes the normal distribution, the seeded random stream and
the running statistics used by the pricers.
"""

from .normal import CdfMethod, erf_as, norm_cdf, norm_pdf
from .random_stream import (
    MODULUS,
    MULTIPLIER,
    RandomStream,
    advance,
    gaussian_step,
    lane_gaussians,
    seed_state,
    step,
)
from .stats import RunningStats

__all__ = [
    # Normal distribution
    "CdfMethod",
    "erf_as",
    "norm_cdf",
    "norm_pdf",
    # Random stream
    "MODULUS",
    "MULTIPLIER",
    "RandomStream",
    "advance",
    "gaussian_step",
    "lane_gaussians",
    "seed_state",
    "step",
    # Statistics
    "RunningStats",
]
