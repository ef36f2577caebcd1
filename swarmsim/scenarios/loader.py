"""
Scenario Loading
================

Converts scenario agent and objective records into core entities and
loads them into a simulator.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Union

from ..core.agent import Agent, BehaviorFlags, FormationType, Team
from ..core.simulator import SwarmSimulator
from ..dynamics.elements import CartesianState, OrbitalElements, MeanAnomaly, TrueAnomaly
from ..dynamics.orbital import elements_to_cartesian
from ..tasks.objectives import Objective, objective_from_record

logger = logging.getLogger(__name__)

DEFAULT_DV_BUDGET = 1000.0  # m/s


@dataclass
class AgentRecord:
    """Initial conditions for one agent."""
    id: str
    orbit: Union[OrbitalElements, CartesianState]
    behaviors: BehaviorFlags = field(default_factory=BehaviorFlags)
    team: Team = Team.FRIENDLY
    dv_remaining: Optional[float] = None  # DEFAULT_DV_BUDGET when unset


@dataclass
class Scenario:
    """Complete scenario definition."""
    name: str
    agents: List[AgentRecord] = field(default_factory=list)
    objectives: List[Objective] = field(default_factory=list)
    seed: str = 'default'
    description: str = ''
    initial_time: float = 0.0  # s
    time_step: float = 1.0  # s


def record_to_agent(record: AgentRecord, default_dv: float = DEFAULT_DV_BUDGET) -> Agent:
    """Build an Agent, converting elements to Cartesian when needed."""
    if isinstance(record.orbit, CartesianState):
        state = record.orbit
    else:
        state = elements_to_cartesian(record.orbit)

    return Agent(
        id=record.id,
        state=state,
        behaviors=record.behaviors,
        team=record.team,
        dv_remaining=default_dv if record.dv_remaining is None else record.dv_remaining,
    )


def scenario_to_agents(scenario: Scenario, default_dv: float = DEFAULT_DV_BUDGET) -> List[Agent]:
    """Agents for every record in the scenario, in order."""
    return [record_to_agent(record, default_dv) for record in scenario.agents]


def load_scenario(simulator: SwarmSimulator, scenario: Scenario):
    """
    Load a scenario into a simulator.

    The seed is applied before anything else so any seeded generation
    downstream is reproducible.
    """
    logger.info("Loading scenario %r", scenario.name)
    simulator.clock.set_seed(scenario.seed)
    simulator.clock.set_step_delta(scenario.time_step)
    simulator.load(
        agents=scenario_to_agents(scenario, simulator.config.default_dv_budget),
        objectives=list(scenario.objectives),
        initial_time=scenario.initial_time,
    )


def _orbit_from_mapping(orbit: Mapping) -> Union[OrbitalElements, CartesianState]:
    if 'position' in orbit and 'velocity' in orbit:
        return CartesianState(position=orbit['position'], velocity=orbit['velocity'])

    if 'nu' in orbit:
        anomaly = TrueAnomaly(orbit['nu'])
    elif 'M' in orbit:
        anomaly = MeanAnomaly(orbit['M'])
    else:
        anomaly = None
    return OrbitalElements(
        a=orbit['a'],
        e=orbit['e'],
        i=orbit['i'],
        raan=orbit.get('raan', orbit.get('Omega', 0.0)),
        arg_periapsis=orbit.get('arg_periapsis', orbit.get('omega', 0.0)),
        anomaly=anomaly,
    )


def scenario_from_dict(data: Mapping) -> Scenario:
    """
    Build a Scenario from plain data (e.g. parsed JSON).

    Records are trusted: structural validation belongs to the caller.
    """
    agents = []
    for item in data.get('agents', []):
        behaviors = item.get('behaviors', {})
        agents.append(AgentRecord(
            id=item['id'],
            orbit=_orbit_from_mapping(item['orbit']),
            behaviors=BehaviorFlags(
                cohesion=behaviors.get('cohesion', False),
                separation=behaviors.get('separation', False),
                alignment=behaviors.get('alignment', False),
                formation=FormationType(behaviors.get('formation', 'none')),
            ),
            team=Team(item.get('team', 'friendly')),
            dv_remaining=item.get('dv_remaining', item.get('dvRemaining')),
        ))

    sim = data.get('sim', {})
    return Scenario(
        name=data.get('name', 'unnamed'),
        description=data.get('description', ''),
        seed=data.get('seed', 'default'),
        agents=agents,
        objectives=[objective_from_record(o) for o in data.get('objectives', [])],
        initial_time=sim.get('initial_time', sim.get('initialTime', 0.0)),
        time_step=sim.get('time_step', sim.get('timeStep', 1.0)),
    )
