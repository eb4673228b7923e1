from __future__ import annotations

from dataclasses import dataclass

from option_engine.numerics.normal import CdfMethod


@dataclass(frozen=True, slots=True)
class AnalyticConfig:
    cdf_method: CdfMethod = CdfMethod.ABRAMOWITZ_STEGUN


@dataclass(frozen=True, slots=True)
class SimulationConfig:
    """Execution knobs for the Monte Carlo pricer.

    The defaults reproduce the reference output: 100 stored sample paths,
    about 100 convergence points and a 95% interval (``zcrit = 1.96``).
    ``batch_size`` fixes how paths are split into independent sub-streams;
    ``n_workers`` only decides how many batches run at once, so it never
    changes the numbers.
    """

    batch_size: int = 10_000
    n_workers: int = 1
    max_stored_paths: int = 100
    convergence_points: int = 100
    zcrit: float = 1.96
    timeout: float | None = None  # seconds

    def __post_init__(self) -> None:
        if self.batch_size <= 0:
            raise ValueError("batch_size must be > 0")
        if self.n_workers <= 0:
            raise ValueError("n_workers must be > 0")
        if self.max_stored_paths < 0:
            raise ValueError("max_stored_paths must be >= 0")
        if self.convergence_points <= 0:
            raise ValueError("convergence_points must be > 0")
        if self.zcrit <= 0:
            raise ValueError("zcrit must be > 0")
        if self.timeout is not None and self.timeout < 0:
            raise ValueError("timeout must be >= 0")
