"""
Simulation Core Module
======================

Core simulation components.
"""

from .constants import EARTH_RADIUS, EARTH_MU, EARTH_G
from .errors import (
    OrbitError,
    MissingAnomalyError,
    HyperbolicOrbitError,
    DegenerateOrbitError,
    BatchPropagationError,
    DeltaVBudgetError,
    UnknownAgentError,
)
from .config import BehaviorParams, ObjectiveSteeringParams, ClockParameters, SimulationConfig
from .rng import SeededRandom
from .time_manager import SimClock, SimClockState
from .agent import Agent, BehaviorFlags, FormationType, Team
from .simulator import SwarmSimulator, TickRecord, TickResult

__all__ = [
    'EARTH_RADIUS',
    'EARTH_MU',
    'EARTH_G',
    'OrbitError',
    'MissingAnomalyError',
    'HyperbolicOrbitError',
    'DegenerateOrbitError',
    'BatchPropagationError',
    'DeltaVBudgetError',
    'UnknownAgentError',
    'BehaviorParams',
    'ObjectiveSteeringParams',
    'ClockParameters',
    'SimulationConfig',
    'SeededRandom',
    'SimClock',
    'SimClockState',
    'Agent',
    'BehaviorFlags',
    'FormationType',
    'Team',
    'SwarmSimulator',
    'TickRecord',
    'TickResult',
]
