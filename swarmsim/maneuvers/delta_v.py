"""
Impulsive Maneuvers
===================

RTN to ECI conversion of delta-v commands and budget-constrained
impulsive burns. A burn changes velocity only; position is unchanged.
"""

import logging
import numpy as np
from dataclasses import dataclass
from typing import List

from ..core.errors import DeltaVBudgetError
from ..dynamics.elements import CartesianState
from ..dynamics.orbital import cartesian_to_elements, orbital_period
from ..dynamics.propagator import propagate_kepler
from ..swarm.frames import compute_local_frame, local_vector_to_eci

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BurnResult:
    """State after a burn and the remaining budget [m/s]."""
    state: CartesianState
    dv_remaining: float


def rtn_to_eci(rtn_vector, state: CartesianState) -> np.ndarray:
    """
    Convert a (radial, along-track, normal) vector to ECI.

    Args:
        rtn_vector: Vector in the RTN frame of `state` [m/s]
        state: Orbital state defining the RTN axes

    Returns:
        Vector in ECI frame [m/s]
    """
    return local_vector_to_eci(rtn_vector, compute_local_frame(state))


def apply_delta_v(state: CartesianState, dv_vector, dv_remaining: float) -> BurnResult:
    """
    Apply an impulsive burn.

    Args:
        state: Current state (ECI)
        dv_vector: Delta-v in ECI [m/s]
        dv_remaining: Available budget [m/s]

    Returns:
        BurnResult with the new state and reduced budget

    Raises:
        DeltaVBudgetError: budget is negative or smaller than |dv|
    """
    if dv_remaining < 0:
        raise DeltaVBudgetError(
            f"Delta-v budget cannot be negative (got {dv_remaining} m/s)",
            available=dv_remaining,
        )

    dv = np.asarray(dv_vector, dtype=float)
    dv_magnitude = float(np.linalg.norm(dv))

    if dv_magnitude > dv_remaining:
        raise DeltaVBudgetError(
            f"Delta-v magnitude ({dv_magnitude:.2f} m/s) exceeds available "
            f"budget ({dv_remaining:.2f} m/s)",
            requested=dv_magnitude,
            available=dv_remaining,
        )

    new_remaining = max(0.0, dv_remaining - dv_magnitude)
    logger.debug("Burn |dv|=%.3f m/s, budget %.3f -> %.3f m/s",
                 dv_magnitude, dv_remaining, new_remaining)

    return BurnResult(
        state=state.with_velocity(state.velocity + dv),
        dv_remaining=new_remaining,
    )


def preview_trajectory(state: CartesianState, rtn_vector, dv_remaining: float,
                       num_points: int = 100,
                       max_seconds: float = 7200.0) -> np.ndarray:
    """
    Predict the path after a burn without committing it.

    Samples num_points + 1 positions over one post-burn period, capped
    at max_seconds.

    Returns:
        (num_points + 1, 3) array of ECI positions [m]
    """
    burn = apply_delta_v(state, rtn_to_eci(rtn_vector, state), dv_remaining)

    period = orbital_period(cartesian_to_elements(burn.state).a)
    horizon = min(period, max_seconds)
    times = np.linspace(0.0, horizon, num_points + 1)

    points: List[np.ndarray] = [propagate_kepler(burn.state, t).position for t in times]
    return np.array(points)
