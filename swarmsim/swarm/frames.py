"""
Local (RTN) Frame
=================

Reference frame centered on a formation centroid and aligned with its
orbital plane:

- Radial: from Earth center through the origin
- Along-track: in the orbital plane, prograde
- Cross-track: orbit normal (angular momentum direction)
"""

import numpy as np
from dataclasses import dataclass
from typing import Sequence

from ..core.errors import DegenerateOrbitError
from ..dynamics.elements import CartesianState

# Magnitudes below this are treated as zero when building the basis
FRAME_TOLERANCE = 1e-6


@dataclass(frozen=True)
class LocalFrame:
    """Origin (ECI) and orthonormal basis vectors."""
    origin: np.ndarray
    radial: np.ndarray
    along_track: np.ndarray
    cross_track: np.ndarray

    @property
    def basis(self) -> np.ndarray:
        """3x3 matrix whose rows are (radial, along-track, cross-track)."""
        return np.vstack([self.radial, self.along_track, self.cross_track])


@dataclass(frozen=True)
class LocalFrameState:
    """Position [m] and velocity [m/s] in a LocalFrame's basis."""
    position: np.ndarray
    velocity: np.ndarray


def compute_local_frame(reference_state: CartesianState) -> LocalFrame:
    """
    Compute the local frame of a reference state.

    Purely radial motion (no angular momentum) falls back to world Z as
    cross-track and the velocity direction (or world X) as along-track.

    Args:
        reference_state: Reference state in ECI frame

    Returns:
        LocalFrame with origin at the reference position

    Raises:
        DegenerateOrbitError: reference position is at Earth center
    """
    r = reference_state.position
    v = reference_state.velocity

    r_mag = np.linalg.norm(r)
    if r_mag < FRAME_TOLERANCE:
        raise DegenerateOrbitError("Reference position too close to Earth center")
    radial = r / r_mag

    h = np.cross(r, v)
    h_mag = np.linalg.norm(h)

    if h_mag < FRAME_TOLERANCE:
        v_mag = np.linalg.norm(v)
        cross_track = np.array([0.0, 0.0, 1.0])
        if v_mag > FRAME_TOLERANCE:
            along_track = v / v_mag
        else:
            along_track = np.array([1.0, 0.0, 0.0])
        return LocalFrame(r.copy(), radial, along_track, cross_track)

    cross_track = h / h_mag

    along = np.cross(cross_track, radial)
    along_mag = np.linalg.norm(along)
    if along_mag > FRAME_TOLERANCE:
        along_track = along / along_mag
    else:
        along_track = np.array([1.0, 0.0, 0.0])

    return LocalFrame(r.copy(), radial, along_track, cross_track)


def eci_to_local_frame(state: CartesianState, frame: LocalFrame) -> LocalFrameState:
    """Project an ECI state onto the frame (position relative to origin)."""
    return LocalFrameState(
        position=frame.basis @ (state.position - frame.origin),
        velocity=frame.basis @ state.velocity,
    )


def local_vector_to_eci(vector: np.ndarray, frame: LocalFrame) -> np.ndarray:
    """Rotate a free vector from local components to ECI (no origin offset)."""
    return frame.basis.T @ np.asarray(vector, dtype=float)


def local_frame_to_eci(local_state: LocalFrameState, frame: LocalFrame) -> CartesianState:
    """Reconstruct an ECI state from local-frame components."""
    return CartesianState(
        position=frame.origin + local_vector_to_eci(local_state.position, frame),
        velocity=local_vector_to_eci(local_state.velocity, frame),
    )


def compute_centroid(states: Sequence[CartesianState]) -> CartesianState:
    """
    Componentwise mean position and velocity.

    Raises:
        ValueError: states is empty
    """
    if len(states) == 0:
        raise ValueError("Cannot compute centroid of an empty set")

    positions = np.array([s.position for s in states])
    velocities = np.array([s.velocity for s in states])
    return CartesianState(
        position=positions.mean(axis=0),
        velocity=velocities.mean(axis=0),
    )
