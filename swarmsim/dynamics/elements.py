"""
Orbital State Types
===================

Classical orbital elements and Cartesian ECI state vectors.

All units are SI: meters, seconds, meters per second, radians.
ECI axes: X toward the vernal equinox, Z toward the north pole,
Y completing the right-handed system.
"""

import numpy as np
from dataclasses import dataclass, replace
from typing import Optional, Union

from ..core.errors import OrbitError, MissingAnomalyError, HyperbolicOrbitError


def normalize_angle(angle: float) -> float:
    """Wrap an angle to [0, 2π)."""
    angle = float(np.fmod(angle, 2 * np.pi))
    if angle < 0:
        angle += 2 * np.pi
    # fmod of values just below zero can land exactly on 2π after the shift
    if angle >= 2 * np.pi:
        angle = 0.0
    return angle


@dataclass(frozen=True)
class TrueAnomaly:
    """True anomaly ν [rad]."""
    value: float


@dataclass(frozen=True)
class MeanAnomaly:
    """Mean anomaly M [rad]."""
    value: float


Anomaly = Union[TrueAnomaly, MeanAnomaly]


@dataclass(frozen=True)
class OrbitalElements:
    """
    Classical (Keplerian) orbital elements for a closed elliptical orbit.

    Exactly one anomaly representation is carried, either a TrueAnomaly
    or a MeanAnomaly. RAAN, argument of periapsis and the anomaly are
    normalized to [0, 2π) on construction.
    """
    a: float  # Semi-major axis [m]
    e: float  # Eccentricity, 0 <= e < 1
    i: float  # Inclination [rad], 0..π
    raan: float  # Right ascension of ascending node Ω [rad]
    arg_periapsis: float  # Argument of periapsis ω [rad]
    anomaly: Optional[Anomaly] = None

    def __post_init__(self):
        if not isinstance(self.anomaly, (TrueAnomaly, MeanAnomaly)):
            raise MissingAnomalyError(
                "Orbital elements must have either a true anomaly or a mean anomaly"
            )
        if not np.isfinite(self.a) or self.a <= 0:
            raise OrbitError(f"Semi-major axis must be positive (got {self.a} m)")
        if not 0 <= self.e < 1:
            raise HyperbolicOrbitError(
                f"Only elliptical orbits are supported (got e={self.e})"
            )
        if not 0 <= self.i <= np.pi:
            raise OrbitError(f"Inclination must be within [0, π] (got {self.i} rad)")
        object.__setattr__(self, 'raan', normalize_angle(self.raan))
        object.__setattr__(self, 'arg_periapsis', normalize_angle(self.arg_periapsis))
        object.__setattr__(
            self, 'anomaly', type(self.anomaly)(normalize_angle(self.anomaly.value))
        )

    @classmethod
    def from_true_anomaly(cls, a: float, e: float, i: float,
                          raan: float, arg_periapsis: float,
                          nu: float) -> 'OrbitalElements':
        """Build elements carrying a true anomaly."""
        return cls(a, e, i, raan, arg_periapsis, TrueAnomaly(nu))

    @classmethod
    def from_mean_anomaly(cls, a: float, e: float, i: float,
                          raan: float, arg_periapsis: float,
                          mean_anomaly: float) -> 'OrbitalElements':
        """Build elements carrying a mean anomaly."""
        return cls(a, e, i, raan, arg_periapsis, MeanAnomaly(mean_anomaly))

    @property
    def true_anomaly(self) -> Optional[float]:
        """True anomaly if that is the carried representation, else None."""
        if isinstance(self.anomaly, TrueAnomaly):
            return self.anomaly.value
        return None

    @property
    def mean_anomaly(self) -> Optional[float]:
        """Mean anomaly if that is the carried representation, else None."""
        if isinstance(self.anomaly, MeanAnomaly):
            return self.anomaly.value
        return None

    @property
    def semi_latus_rectum(self) -> float:
        return self.a * (1 - self.e**2)

    def with_anomaly(self, anomaly: Anomaly) -> 'OrbitalElements':
        """Return a copy with a different anomaly representation."""
        return replace(self, anomaly=anomaly)


def _as_vector(values) -> np.ndarray:
    return np.array(values, dtype=float).reshape(3)


@dataclass(frozen=True)
class CartesianState:
    """Position [m] and velocity [m/s] in the ECI frame."""
    position: np.ndarray
    velocity: np.ndarray

    def __post_init__(self):
        position = _as_vector(self.position)
        velocity = _as_vector(self.velocity)
        if not (np.all(np.isfinite(position)) and np.all(np.isfinite(velocity))):
            raise OrbitError("Cartesian state components must be finite")
        if np.linalg.norm(position) <= 0:
            raise OrbitError("Cartesian state radius must be positive")
        position.setflags(write=False)
        velocity.setflags(write=False)
        object.__setattr__(self, 'position', position)
        object.__setattr__(self, 'velocity', velocity)

    @property
    def radius(self) -> float:
        """Orbital radius magnitude [m]."""
        return float(np.linalg.norm(self.position))

    @property
    def speed(self) -> float:
        """Speed magnitude [m/s]."""
        return float(np.linalg.norm(self.velocity))

    def to_array(self) -> np.ndarray:
        """Return state as 6-element array."""
        return np.concatenate([self.position, self.velocity])

    @classmethod
    def from_array(cls, state: np.ndarray) -> 'CartesianState':
        """Create from 6-element array."""
        state = np.asarray(state, dtype=float)
        return cls(position=state[:3], velocity=state[3:6])

    def with_velocity(self, velocity: np.ndarray) -> 'CartesianState':
        """Return a copy with the same position and a new velocity."""
        return CartesianState(position=self.position, velocity=velocity)

    def __eq__(self, other):
        if not isinstance(other, CartesianState):
            return NotImplemented
        return (np.array_equal(self.position, other.position)
                and np.array_equal(self.velocity, other.velocity))

    def __hash__(self):
        return hash((self.position.tobytes(), self.velocity.tobytes()))


OrbitState = Union[OrbitalElements, CartesianState]
