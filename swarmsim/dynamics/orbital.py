"""
Orbit Conversions
=================

Transforms between classical orbital elements and Cartesian ECI state
for two-body elliptical orbits.
"""

import numpy as np

from ..core.constants import EARTH_MU
from ..core.errors import DegenerateOrbitError, HyperbolicOrbitError
from .elements import (
    CartesianState,
    OrbitalElements,
    TrueAnomaly,
    normalize_angle,
)
from .kepler import true_from_mean


# Node and eccentricity magnitudes below this are treated as zero
SINGULARITY_TOLERANCE = 1e-10


def perifocal_to_eci_matrix(raan: float, inclination: float, arg_periapsis: float) -> np.ndarray:
    """
    Rotation matrix from the perifocal (PQW) frame to ECI.

    3-1-3 Euler sequence: R = Rz(Ω) · Rx(i) · Rz(ω)
    """
    R3_Omega = np.array([
        [np.cos(raan), -np.sin(raan), 0],
        [np.sin(raan), np.cos(raan), 0],
        [0, 0, 1]
    ])

    R1_i = np.array([
        [1, 0, 0],
        [0, np.cos(inclination), -np.sin(inclination)],
        [0, np.sin(inclination), np.cos(inclination)]
    ])

    R3_omega = np.array([
        [np.cos(arg_periapsis), -np.sin(arg_periapsis), 0],
        [np.sin(arg_periapsis), np.cos(arg_periapsis), 0],
        [0, 0, 1]
    ])

    return R3_Omega @ R1_i @ R3_omega


def elements_to_cartesian(elements: OrbitalElements) -> CartesianState:
    """
    Convert orbital elements to Cartesian state.

    Args:
        elements: Orbital elements carrying a true or mean anomaly

    Returns:
        CartesianState in ECI frame
    """
    a, e = elements.a, elements.e

    if elements.true_anomaly is not None:
        nu = elements.true_anomaly
    else:
        nu = true_from_mean(elements.mean_anomaly, e)

    # Semi-latus rectum
    p = a * (1 - e**2)
    r = p / (1 + e * np.cos(nu))

    # Position and velocity in perifocal frame
    r_pqw = r * np.array([np.cos(nu), np.sin(nu), 0.0])
    h = np.sqrt(EARTH_MU * p)
    v_pqw = (EARTH_MU / h) * np.array([-np.sin(nu), e + np.cos(nu), 0.0])

    Q = perifocal_to_eci_matrix(elements.raan, elements.i, elements.arg_periapsis)

    return CartesianState(position=Q @ r_pqw, velocity=Q @ v_pqw)


def cartesian_to_elements(state: CartesianState) -> OrbitalElements:
    """
    Convert Cartesian state to orbital elements.

    Equatorial orbits get Ω = 0 and carry the longitude of periapsis in ω.
    Circular orbits get ω = 0 and measure ν as the argument of latitude
    (true longitude when also equatorial).

    Args:
        state: Cartesian state in ECI frame

    Returns:
        OrbitalElements carrying a true anomaly

    Raises:
        DegenerateOrbitError: angular momentum is near zero
        HyperbolicOrbitError: trajectory is unbound
    """
    r = state.position
    v = state.velocity
    r_mag = np.linalg.norm(r)
    v_mag = np.linalg.norm(v)

    # Specific angular momentum
    h = np.cross(r, v)
    h_mag = np.linalg.norm(h)

    energy = v_mag**2 / 2 - EARTH_MU / r_mag

    # Vis-viva: 1/a = 2/r - v²/μ
    with np.errstate(divide='ignore'):
        a = 1.0 / (2.0 / r_mag - v_mag**2 / EARTH_MU)
    if a < 0 or not np.isfinite(a):
        if energy < 0:
            a = -EARTH_MU / (2 * energy)
        else:
            raise HyperbolicOrbitError(
                f"Invalid orbit: hyperbolic trajectory detected (energy={energy:.3e} J/kg)"
            )

    # Eccentricity vector
    rv = np.dot(r, v)
    e_vec = ((v_mag**2 - EARTH_MU / r_mag) * r - rv * v) / EARTH_MU
    e = np.linalg.norm(e_vec)

    if h_mag < SINGULARITY_TOLERANCE:
        raise DegenerateOrbitError("Invalid orbit: angular momentum is too small")
    if e >= 1:
        raise HyperbolicOrbitError(f"Invalid orbit: eccentricity {e:.6f} is not elliptical")

    # Inclination
    i = np.arctan2(np.hypot(h[0], h[1]), h[2])

    # Node vector (k × h)
    n = np.array([-h[1], h[0], 0.0])
    n_mag = np.linalg.norm(n)

    h_hat = h / h_mag
    equatorial = n_mag < SINGULARITY_TOLERANCE
    circular = e < SINGULARITY_TOLERANCE
    # Angles in an equatorial plane are measured from +X, mirrored when retrograde
    sense = 1.0 if h[2] >= 0 else -1.0

    # RAAN
    if equatorial:
        Omega = 0.0
    else:
        Omega = np.arctan2(n[1], n[0])

    # Argument of periapsis (longitude of periapsis when equatorial)
    if circular:
        omega = 0.0
    elif equatorial:
        omega = sense * np.arctan2(e_vec[1], e_vec[0])
    else:
        omega = np.arctan2(np.dot(np.cross(n, e_vec), h_hat), np.dot(n, e_vec))

    # True anomaly
    if circular:
        if equatorial:
            # True longitude
            nu = sense * np.arctan2(r[1], r[0])
        else:
            # Argument of latitude measured from the ascending node
            nu = np.arctan2(np.dot(np.cross(n, r), h_hat), np.dot(n, r))
    else:
        cos_nu = np.dot(r, e_vec) / (r_mag * e)
        sin_nu = rv * h_mag / (EARTH_MU * e * r_mag)
        nu = np.arctan2(sin_nu, cos_nu)

    return OrbitalElements(
        a=float(a),
        e=float(e),
        i=float(i),
        raan=normalize_angle(Omega),
        arg_periapsis=normalize_angle(omega),
        anomaly=TrueAnomaly(normalize_angle(nu)),
    )


def mean_motion(a: float) -> float:
    """Mean motion n = √(μ/a³) [rad/s]."""
    return float(np.sqrt(EARTH_MU / a**3))


def orbital_period(a: float) -> float:
    """Orbital period from Kepler's third law [s]."""
    return 2 * np.pi / mean_motion(a)


def specific_energy(state: CartesianState) -> float:
    """Specific orbital energy v²/2 - μ/r [J/kg]."""
    return float(state.speed**2 / 2 - EARTH_MU / state.radius)
