"""MC-vs-analytic diagnostics: comparison tables and plots.

Tables are plain ``pandas.DataFrame`` objects. Plot helpers import matplotlib
lazily and return ``(fig, ax)``.
"""

from .cases import default_cases
from .plots import (
    plot_case_intervals,
    plot_convergence_path,
    plot_sample_paths,
    plot_se_scaling,
)
from .tables import (
    convergence_frame,
    coverage_rate,
    run_cases,
    se_scaling_table,
    seed_coverage,
)

__all__ = [
    "default_cases",
    "run_cases",
    "seed_coverage",
    "coverage_rate",
    "se_scaling_table",
    "convergence_frame",
    "plot_convergence_path",
    "plot_sample_paths",
    "plot_case_intervals",
    "plot_se_scaling",
]
