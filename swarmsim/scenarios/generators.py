"""
Agent Generators
================

Seeded random agent populations for tests and large-swarm runs.
"""

import numpy as np
from typing import List

from ..core.agent import Agent, BehaviorFlags, Team
from ..core.constants import EARTH_RADIUS
from ..core.rng import SeededRandom
from ..dynamics.elements import OrbitalElements
from ..dynamics.orbital import elements_to_cartesian


def generate_test_agents(count: int,
                         rng: SeededRandom,
                         behaviors: BehaviorFlags = None,
                         dv_budget: float = 1000.0) -> List[Agent]:
    """
    Generate agents on random elliptical orbits.

    Altitude 400-2000 km, e < 0.3, any inclination and orientation.
    Teams alternate friendly/enemy starting with friendly.

    Args:
        count: Number of agents
        rng: Random source (same seed -> same agents)
        behaviors: Behavior flags for every agent (all off by default)
        dv_budget: Delta-v budget per agent [m/s]

    Returns:
        Agents with ids agent-0 .. agent-{count-1}
    """
    behaviors = behaviors or BehaviorFlags()
    agents = []

    for i in range(count):
        altitude = rng.uniform(400e3, 2000e3)
        elements = OrbitalElements.from_true_anomaly(
            a=EARTH_RADIUS + altitude,
            e=rng.uniform(0.0, 0.3),
            i=rng.uniform(0.0, np.pi),
            raan=rng.uniform(0.0, 2 * np.pi),
            arg_periapsis=rng.uniform(0.0, 2 * np.pi),
            nu=rng.uniform(0.0, 2 * np.pi),
        )

        agents.append(Agent(
            id=f"agent-{i}",
            state=elements_to_cartesian(elements),
            behaviors=behaviors,
            team=Team.FRIENDLY if i % 2 == 0 else Team.ENEMY,
            dv_remaining=dv_budget,
        ))

    return agents
