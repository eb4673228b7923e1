class OptionEngineError(Exception):
    """Base class for errors raised by :mod:`option_engine`."""


class InvalidParameter(OptionEngineError, ValueError):
    """Raised when pricing inputs are outside the domain of a pricer.

    The checks run before any computation, so no partial work is done:

    - maturity ``T <= 0`` or volatility ``sigma <= 0`` (both pricers),
    - ``n_paths < 1000`` or ``n_steps < 1`` (Monte Carlo only),
    - ``spot <= 0`` or ``strike <= 0`` (when building
      :class:`~option_engine.types.PricingParameters`).

    Notes
    -----
    The condition is deterministic; calling again with the same inputs fails
    again. Fix the inputs instead of retrying.
    """


class SimulationCancelled(OptionEngineError):
    """Raised when a Monte Carlo run is cancelled through its cancel event.

    No partial result is returned.
    """


class SimulationTimeout(SimulationCancelled, TimeoutError):
    """Raised when a Monte Carlo run exceeds ``SimulationConfig.timeout``."""
