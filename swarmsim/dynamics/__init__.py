"""
Dynamics Module
===============

Orbital state types, Kepler solver, element conversions and analytic
two-body propagation.
"""

from .elements import (
    OrbitalElements,
    CartesianState,
    TrueAnomaly,
    MeanAnomaly,
    normalize_angle,
)
from .kepler import solve_kepler_equation, true_from_mean, mean_from_true
from .orbital import (
    elements_to_cartesian,
    cartesian_to_elements,
    mean_motion,
    orbital_period,
    specific_energy,
)
from .propagator import propagate_kepler, propagate_kepler_batch

__all__ = [
    'OrbitalElements',
    'CartesianState',
    'TrueAnomaly',
    'MeanAnomaly',
    'normalize_angle',
    'solve_kepler_equation',
    'true_from_mean',
    'mean_from_true',
    'elements_to_cartesian',
    'cartesian_to_elements',
    'mean_motion',
    'orbital_period',
    'specific_energy',
    'propagate_kepler',
    'propagate_kepler_batch',
]
