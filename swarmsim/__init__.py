"""
Orbital Swarm Simulation Core
=============================

Deterministic orbital-mechanics and multi-agent coordination engine.

Components:
- Orbital element / Cartesian conversions and Kepler propagation
- Local (RTN) frames around a formation centroid
- Swarm behaviors (cohesion, separation, alignment) and formations
- Objective allocation, steering and completion
- Budget-constrained impulsive maneuvers
- Deterministic simulation clock with seeded RNG
"""

__version__ = "1.0.0"

from swarmsim.core.simulator import SwarmSimulator
from swarmsim.core.agent import Agent, BehaviorFlags, FormationType, Team
from swarmsim.core.time_manager import SimClock
from swarmsim.dynamics.elements import OrbitalElements, CartesianState

__all__ = [
    'SwarmSimulator',
    'Agent',
    'BehaviorFlags',
    'FormationType',
    'Team',
    'SimClock',
    'OrbitalElements',
    'CartesianState',
]
