"""
Kepler Propagator
=================

Analytic two-body propagation by mean-anomaly stepping. Deterministic:
identical (state, dt) inputs always produce bit-identical outputs.
"""

import logging
from typing import List, Sequence

from ..core.errors import BatchPropagationError, OrbitError
from .elements import CartesianState, MeanAnomaly, normalize_angle
from .kepler import mean_from_true
from .orbital import cartesian_to_elements, elements_to_cartesian, mean_motion

logger = logging.getLogger(__name__)


def propagate_kepler(state: CartesianState, dt: float) -> CartesianState:
    """
    Propagate a state by dt seconds along its osculating ellipse.

    Args:
        state: Initial Cartesian state in ECI frame
        dt: Time step in seconds (may be negative)

    Returns:
        Propagated Cartesian state
    """
    elements = cartesian_to_elements(state)

    n = mean_motion(elements.a)
    M0 = mean_from_true(elements.true_anomaly, elements.e)

    # Wrapping keeps M bounded over long runs without changing the state
    M1 = normalize_angle(M0 + n * dt)

    return elements_to_cartesian(elements.with_anomaly(MeanAnomaly(M1)))


def propagate_kepler_batch(states: Sequence[CartesianState], dt: float) -> List[CartesianState]:
    """
    Propagate each state independently by dt seconds.

    Args:
        states: Cartesian states in ECI frame
        dt: Time step in seconds

    Returns:
        Propagated states, in input order

    Raises:
        BatchPropagationError: the first state that fails aborts the batch
    """
    propagated = []
    for index, state in enumerate(states):
        try:
            propagated.append(propagate_kepler(state, dt))
        except OrbitError as exc:
            logger.debug("Batch propagation aborted at index %d: %s", index, exc)
            raise BatchPropagationError(index, exc) from exc
    return propagated
