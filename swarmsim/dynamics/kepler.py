"""
Kepler Solver
=============

Newton-Raphson solution of Kepler's equation and conversions between
true, eccentric and mean anomaly for elliptical orbits.
"""

import numpy as np

from .elements import normalize_angle


MAX_ITERATIONS = 50
TOLERANCE = 1e-12
# Below this derivative magnitude a Newton step is skipped
MIN_DERIVATIVE = 1e-10
HIGH_ECCENTRICITY = 0.8


def solve_kepler_equation(mean_anomaly: float, e: float) -> float:
    """
    Solve M = E - e·sin(E) for the eccentric anomaly E.

    Args:
        mean_anomaly: Mean anomaly M [rad]
        e: Eccentricity (0 <= e < 1)

    Returns:
        Eccentric anomaly E in [0, 2π)
    """
    M = normalize_angle(mean_anomaly)

    E = np.pi if e > HIGH_ECCENTRICITY else M

    for _ in range(MAX_ITERATIONS):
        f = E - e * np.sin(E) - M
        if abs(f) < TOLERANCE:
            break

        f_prime = 1 - e * np.cos(E)
        if abs(f_prime) < MIN_DERIVATIVE:
            continue

        E = E - f / f_prime

        if not np.isfinite(E):
            E = M
            break

    return normalize_angle(E)


def true_from_eccentric(E: float, e: float) -> float:
    """Convert eccentric anomaly to true anomaly in [0, 2π)."""
    cos_E = np.cos(E)
    sin_E = np.sin(E)
    denom = 1 - e * cos_E

    cos_nu = (cos_E - e) / denom
    sin_nu = np.sqrt(1 - e**2) * sin_E / denom

    return normalize_angle(np.arctan2(sin_nu, cos_nu))


def eccentric_from_true(nu: float, e: float) -> float:
    """Convert true anomaly to eccentric anomaly in (-π, π]."""
    cos_nu = np.cos(nu)
    sin_nu = np.sin(nu)
    denom = 1 + e * cos_nu

    cos_E = (e + cos_nu) / denom
    sin_E = np.sqrt(1 - e**2) * sin_nu / denom

    return float(np.arctan2(sin_E, cos_E))


def mean_from_true(nu: float, e: float) -> float:
    """Convert true anomaly to mean anomaly in [0, 2π)."""
    E = eccentric_from_true(nu, e)
    return normalize_angle(E - e * np.sin(E))


def true_from_mean(mean_anomaly: float, e: float) -> float:
    """Convert mean anomaly to true anomaly in [0, 2π)."""
    return true_from_eccentric(solve_kepler_equation(mean_anomaly, e), e)
