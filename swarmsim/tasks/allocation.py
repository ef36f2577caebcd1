"""
Task Allocation
===============

Greedy, type-specific assignment of agents to objectives. Allocation is
pure: it returns new objective values and never modifies its inputs.
"""

import logging
import numpy as np
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Sequence, Set

from ..core.agent import Agent
from .objectives import HoldFormationZone, InspectPoint, Objective, RelayNode

logger = logging.getLogger(__name__)


@dataclass
class AllocationResult:
    """Objectives after allocation and the agents claimed during the pass."""
    objectives: List[Objective]
    # agent id -> id of the objective that claimed it this pass
    claims: Dict[str, str] = field(default_factory=dict)


def _distances(agents: Sequence[Agent], point: np.ndarray) -> np.ndarray:
    if not agents:
        return np.zeros(0)
    positions = np.array([agent.state.position for agent in agents])
    return np.linalg.norm(positions - point, axis=1)


def find_nearest_agent(agents: Sequence[Agent], point: np.ndarray,
                       exclude: Set[str] = frozenset()) -> Optional[Agent]:
    """Nearest agent to a point whose id is not excluded (first wins ties)."""
    nearest = None
    nearest_distance = np.inf
    for agent, distance in zip(agents, _distances(agents, point)):
        if agent.id in exclude:
            continue
        if distance < nearest_distance:
            nearest = agent
            nearest_distance = distance
    return nearest


def find_agents_in_radius(agents: Sequence[Agent], point: np.ndarray,
                          radius: float) -> List[Agent]:
    """Agents within radius (inclusive) of a point."""
    return [agent for agent, distance in zip(agents, _distances(agents, point))
            if distance <= radius]


def allocate_tasks(agents: Sequence[Agent], objectives: Sequence[Objective]) -> AllocationResult:
    """
    Assign agents to objectives for this tick.

    - InspectPoint: the nearest unclaimed agent is claimed, nothing stored
    - RelayNode: an existing assignment to a live agent is kept; otherwise
      the nearest unclaimed agent is assigned
    - HoldFormationZone: assignments to missing agents are dropped, agents
      inside the zone are added, and nearest unclaimed agents fill up to
      required_agents

    Args:
        agents: Agents eligible for assignment
        objectives: Current objectives

    Returns:
        AllocationResult with new objective values in input order
    """
    live_ids = {agent.id for agent in agents}
    claimed: Set[str] = set()
    claims: Dict[str, str] = {}
    updated: List[Objective] = []

    def claim(agent_id: str, objective_id: str):
        claimed.add(agent_id)
        claims.setdefault(agent_id, objective_id)

    for objective in objectives:
        if objective.completed:
            updated.append(objective)
            continue

        if isinstance(objective, InspectPoint):
            nearest = find_nearest_agent(agents, objective.position, claimed)
            if nearest is not None:
                claim(nearest.id, objective.id)
            updated.append(objective)

        elif isinstance(objective, RelayNode):
            if objective.assigned_agent_id in live_ids:
                claim(objective.assigned_agent_id, objective.id)
                updated.append(objective)
                continue

            if objective.assigned_agent_id is not None:
                logger.info("Relay %s lost agent %s", objective.id, objective.assigned_agent_id)
            nearest = find_nearest_agent(agents, objective.position, claimed)
            if nearest is not None:
                claim(nearest.id, objective.id)
            updated.append(replace(
                objective,
                assigned_agent_id=nearest.id if nearest is not None else None,
            ))

        elif isinstance(objective, HoldFormationZone):
            assigned = [agent_id for agent_id in objective.assigned_agent_ids
                        if agent_id in live_ids]

            for agent in find_agents_in_radius(agents, objective.position, objective.radius):
                if agent.id not in assigned:
                    assigned.append(agent.id)
                claim(agent.id, objective.id)

            while len(assigned) < objective.required_agents:
                nearest = find_nearest_agent(agents, objective.position, claimed)
                if nearest is None:
                    break
                assigned.append(nearest.id)
                claim(nearest.id, objective.id)

            updated.append(replace(objective, assigned_agent_ids=tuple(assigned)))

        else:
            raise TypeError(f"Unsupported objective type: {type(objective).__name__}")

    return AllocationResult(objectives=updated, claims=claims)

