from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np


@dataclass(slots=True)
class RunningStats:
    """Online mean / variance accumulator (Welford).

    Keeps ``(count, mean, m2)`` where ``m2`` is the sum of squared deviations
    from the current mean. Memory use is O(1) in the number of observations,
    and two accumulators combine exactly with :meth:`merge` (Chan et al.), so
    batches can be reduced in any fixed order.

    Notes
    -----
    :attr:`variance` is the population variance (``ddof=0``), matching a
    ``mean(x**2) - mean(x)**2`` estimator without its cancellation error.
    """

    count: int = 0
    mean: float = 0.0
    m2: float = 0.0

    @classmethod
    def from_values(cls, values: np.ndarray) -> RunningStats:
        out = cls()
        out.update_batch(values)
        return out

    def update(self, x: float) -> None:
        self.count += 1
        delta = x - self.mean
        self.mean += delta / self.count
        self.m2 += delta * (x - self.mean)

    def update_batch(self, values: np.ndarray) -> None:
        v = np.asarray(values, dtype=np.float64).ravel()
        if v.size == 0:
            return
        batch_mean = float(v.mean())
        batch_m2 = float(np.sum((v - batch_mean) ** 2))
        self.merge(RunningStats(count=int(v.size), mean=batch_mean, m2=batch_m2))

    def merge(self, other: RunningStats) -> RunningStats:
        """Fold ``other`` into ``self`` and return ``self``."""
        if other.count == 0:
            return self
        if self.count == 0:
            self.count, self.mean, self.m2 = other.count, other.mean, other.m2
            return self

        n = self.count + other.count
        delta = other.mean - self.mean
        self.mean += delta * other.count / n
        self.m2 += other.m2 + delta * delta * self.count * other.count / n
        self.count = n
        return self

    @property
    def variance(self) -> float:
        if self.count == 0:
            return 0.0
        return max(self.m2, 0.0) / self.count

    @property
    def sample_variance(self) -> float:
        if self.count < 2:
            return 0.0
        return max(self.m2, 0.0) / (self.count - 1)

    @property
    def std(self) -> float:
        return math.sqrt(self.variance)

    @property
    def standard_error(self) -> float:
        """Standard error of the mean, ``sqrt(variance / count)``."""
        if self.count == 0:
            return 0.0
        return math.sqrt(self.variance / self.count)


__all__ = ["RunningStats"]
