"""Park-Miller "minimal standard" generator with explicit state.

The generator state is a plain integer in ``[1, MODULUS - 1]``. The module
exposes pure step functions ``(state) -> (value, next_state)`` plus a small
single-owner wrapper, :class:`RandomStream`, for sequential use.

Because the transition is multiplicative, ``n`` steps collapse into one
multiplication by ``MULTIPLIER**n mod MODULUS`` (jump-ahead). This lets a
simulation hand every path (or batch of paths) its own sub-stream that starts
exactly where the sequential stream would be, so results do not depend on how
the work is split or scheduled.
"""

from __future__ import annotations

import math
import time

import numpy as np

from ..typing import FloatArray, IntArray, StateDType

MODULUS = 2_147_483_647  # 2**31 - 1
MULTIPLIER = 16_807
_SPAN = MODULUS - 1

# Smallest positive uniform; replaces u1 == 0 in Box-Muller so log(u1) is finite.
_MIN_UNIFORM = 1.0 / _SPAN
_TWO_PI = 2.0 * math.pi


def time_seed() -> int:
    """Seed derived from the wall clock, in milliseconds."""
    return time.time_ns() // 1_000_000


def seed_state(seed: int) -> int:
    """Reduce any integer seed to a valid generator state.

    The seed is reduced modulo ``MODULUS`` keeping the sign of the seed, and
    non-positive results are shifted up by ``MODULUS - 1``.
    """
    seed = int(seed)
    s = abs(seed) % MODULUS
    if seed < 0:
        s = -s
    if s <= 0:
        s += _SPAN
    if s == 0:
        # only seed == -(MODULUS - 1) (mod MODULUS) lands here
        s = _SPAN
    return s


def _check_state(state: int) -> int:
    state = int(state)
    if not 1 <= state < MODULUS:
        raise ValueError(f"state must lie in [1, {MODULUS - 1}], got {state}")
    return state


def step(state: int) -> tuple[float, int]:
    """Advance once and return ``(uniform in [0, 1), next_state)``."""
    nxt = (state * MULTIPLIER) % MODULUS
    return (nxt - 1) / _SPAN, nxt


def _box_muller(u1: float, u2: float) -> float:
    u1 = max(u1, _MIN_UNIFORM)
    return math.sqrt(-2.0 * math.log(u1)) * math.cos(_TWO_PI * u2)


def gaussian_step(state: int) -> tuple[float, int]:
    """Standard normal draw from two fresh uniforms (Box-Muller, cosine branch)."""
    u1, state = step(state)
    u2, state = step(state)
    return _box_muller(u1, u2), state


def advance(state: int, n: int) -> int:
    """Jump ahead ``n`` uniform draws in O(log n)."""
    if n < 0:
        raise ValueError("n must be >= 0")
    return (int(state) * pow(MULTIPLIER, int(n), MODULUS)) % MODULUS


# -------------------------
# Vectorized lanes
# -------------------------
def lane_uniforms(states: IntArray) -> tuple[FloatArray, IntArray]:
    """One uniform per lane; ``states`` is an int64 array of independent states."""
    nxt = (states * MULTIPLIER) % MODULUS
    return (nxt - 1) / _SPAN, nxt


def lane_gaussians(states: IntArray) -> tuple[FloatArray, IntArray]:
    """One Box-Muller normal per lane, consuming two uniforms per lane."""
    u1, states = lane_uniforms(states)
    u2, states = lane_uniforms(states)
    u1 = np.maximum(u1, _MIN_UNIFORM)
    z = np.sqrt(-2.0 * np.log(u1)) * np.cos(_TWO_PI * u2)
    return z, states


class RandomStream:
    """Sequential Park-Miller stream.

    A stream is owned by one consumer. Sharing an instance between threads
    makes the draw order (and hence every result) depend on scheduling; hand
    each worker its own :meth:`substream` or :meth:`lane_states` instead.

    Parameters
    ----------
    seed : int | None, default None
        Any integer. ``None`` uses :func:`time_seed`.

    Examples
    --------
    >>> a, b = RandomStream(42), RandomStream(42)
    >>> [a.uniform() for _ in range(3)] == [b.uniform() for _ in range(3)]
    True
    """

    __slots__ = ("_state",)

    def __init__(self, seed: int | None = None) -> None:
        self._state = seed_state(time_seed() if seed is None else seed)

    @classmethod
    def from_state(cls, state: int) -> RandomStream:
        """Rebuild a stream from a :attr:`state` snapshot."""
        out = cls.__new__(cls)
        out._state = _check_state(state)
        return out

    @property
    def state(self) -> int:
        return self._state

    def uniform(self) -> float:
        u, self._state = step(self._state)
        return u

    def gaussian(self) -> float:
        z, self._state = gaussian_step(self._state)
        return z

    def uniforms(self, n: int) -> FloatArray:
        out = np.empty(int(n), dtype=np.float64)
        for i in range(out.size):
            out[i] = self.uniform()
        return out

    def gaussians(self, n: int) -> FloatArray:
        out = np.empty(int(n), dtype=np.float64)
        for i in range(out.size):
            out[i] = self.gaussian()
        return out

    def skip(self, n: int) -> None:
        """Discard the next ``n`` uniforms."""
        self._state = advance(self._state, n)

    def substream(self, offset: int) -> RandomStream:
        """Independent stream starting ``offset`` uniforms ahead; ``self`` is untouched."""
        return RandomStream.from_state(advance(self._state, offset))

    def lane_states(self, n_lanes: int, draws_per_lane: int) -> IntArray:
        """Start states of ``n_lanes`` consecutive blocks of ``draws_per_lane`` uniforms.

        Lane ``k`` begins at uniform number ``k * draws_per_lane`` of this
        stream. ``self`` is not advanced.
        """
        if n_lanes < 0 or draws_per_lane < 0:
            raise ValueError("n_lanes and draws_per_lane must be >= 0")
        jump = pow(MULTIPLIER, int(draws_per_lane), MODULUS)
        out = np.empty(int(n_lanes), dtype=StateDType)
        s = self._state
        for k in range(out.size):
            out[k] = s
            s = (s * jump) % MODULUS
        return out

    def __repr__(self) -> str:
        return f"RandomStream(state={self._state})"


__all__ = [
    "MODULUS",
    "MULTIPLIER",
    "RandomStream",
    "advance",
    "gaussian_step",
    "lane_gaussians",
    "lane_uniforms",
    "seed_state",
    "step",
    "time_seed",
]
