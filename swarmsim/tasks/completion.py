"""
Objective Completion
====================

Per-objective completion state machine: pending -> completed, one way.

- InspectPoint: any agent within threshold and at or below the speed limit
- RelayNode: the assigned agent holds within threshold for hold_duration;
  leaving resets the hold timer, losing the agent resets assignment too
- HoldFormationZone: required_agents inside radius, counted fresh each pass
"""

import logging
from dataclasses import dataclass, field, replace
from typing import List, Sequence

from ..core.agent import Agent
from .allocation import find_agents_in_radius
from .objectives import HoldFormationZone, InspectPoint, Objective, RelayNode

logger = logging.getLogger(__name__)


@dataclass
class CompletionResult:
    """Objectives after a completion pass and the ids completed by it."""
    objectives: List[Objective]
    newly_completed: List[str] = field(default_factory=list)


def update_objective_state(objectives: Sequence[Objective],
                           agents: Sequence[Agent],
                           sim_time: float) -> CompletionResult:
    """
    Advance each objective's completion state machine.

    Args:
        objectives: Current objectives
        agents: All agents (post-propagation states)
        sim_time: Current simulation time [s]

    Returns:
        CompletionResult with new objective values in input order and
        the ids that completed during this pass
    """
    by_id = {agent.id: agent for agent in agents}
    updated: List[Objective] = []
    newly_completed: List[str] = []

    for objective in objectives:
        if objective.completed:
            updated.append(objective)
            continue

        if isinstance(objective, InspectPoint):
            done = any(
                objective.distance_to(agent.state.position) <= objective.threshold
                and agent.state.speed <= objective.speed_limit
                for agent in agents
            )
            if done:
                objective = objective.mark_completed()

        elif isinstance(objective, RelayNode):
            if objective.assigned_agent_id is not None:
                agent = by_id.get(objective.assigned_agent_id)
                if agent is None:
                    objective = replace(objective, assigned_agent_id=None, hold_start=None)
                elif objective.distance_to(agent.state.position) <= objective.threshold:
                    if objective.hold_start is None:
                        objective = replace(objective, hold_start=sim_time)
                    if sim_time - objective.hold_start >= objective.hold_duration:
                        objective = objective.mark_completed()
                elif objective.hold_start is not None:
                    objective = replace(objective, hold_start=None)

        elif isinstance(objective, HoldFormationZone):
            inside = find_agents_in_radius(agents, objective.position, objective.radius)
            if len(inside) >= objective.required_agents:
                objective = objective.mark_completed()

        else:
            raise TypeError(f"Unsupported objective type: {type(objective).__name__}")

        if objective.completed:
            newly_completed.append(objective.id)
            logger.info("Objective %s completed at t=%.2fs", objective.id, sim_time)
        updated.append(objective)

    return CompletionResult(objectives=updated, newly_completed=newly_completed)
