"""
Error Types
===========

Exceptions raised by the simulation core. All of them fail the call
synchronously; nothing in the core retries.
"""


class OrbitError(ValueError):
    """Invalid orbital input or geometry."""


class MissingAnomalyError(OrbitError):
    """Orbital elements supplied without a true or mean anomaly."""


class HyperbolicOrbitError(OrbitError):
    """Trajectory is not a closed ellipse (e >= 1 or energy >= 0)."""


class DegenerateOrbitError(OrbitError):
    """Near-zero position or angular momentum magnitude."""


class BatchPropagationError(OrbitError):
    """A state in a propagation batch failed."""

    def __init__(self, index: int, cause: Exception):
        super().__init__(f"Propagation failed for state {index}: {cause}")
        self.index = index
        self.cause = cause


class DeltaVBudgetError(ValueError):
    """Delta-v request cannot be covered by the remaining budget."""

    def __init__(self, message: str, requested: float = 0.0, available: float = 0.0):
        super().__init__(message)
        self.requested = requested
        self.available = available


class UnknownAgentError(KeyError):
    """Command addressed to an agent id that is not loaded."""
