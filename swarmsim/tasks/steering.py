"""
Objective Steering
==================

Velocity bias that pulls each agent toward the objective it is tied to.
"""

import numpy as np
from typing import List, Optional, Sequence

from ..core.agent import Agent
from ..core.config import ObjectiveSteeringParams
from ..swarm.system import VelocityAdjustment
from .objectives import HoldFormationZone, InspectPoint, Objective, RelayNode

ARRIVAL_TOLERANCE = 1e-6  # m


def select_objective(agent: Agent, objectives: Sequence[Objective]) -> Optional[Objective]:
    """
    Pick the single objective an agent steers toward.

    Objectives are scanned in order. A RelayNode or HoldFormationZone that
    lists the agent becomes the target; an uncompleted InspectPoint
    becomes the target when nothing is selected yet or it is closer than
    the current selection.
    """
    target = None
    position = agent.state.position

    for objective in objectives:
        if objective.completed:
            continue

        if isinstance(objective, InspectPoint):
            if target is None or objective.distance_to(position) < target.distance_to(position):
                target = objective
        elif isinstance(objective, RelayNode):
            if objective.assigned_agent_id == agent.id:
                target = objective
        elif isinstance(objective, HoldFormationZone):
            if agent.id in objective.assigned_agent_ids:
                target = objective
        else:
            raise TypeError(f"Unsupported objective type: {type(objective).__name__}")

    return target


def compute_objective_steering(agent: Agent,
                               objectives: Sequence[Objective],
                               params: ObjectiveSteeringParams = None) -> VelocityAdjustment:
    """
    Unit direction to the agent's objective scaled by objective_weight.

    Returns:
        ECI velocity adjustment; zero when there is no eligible objective
        or the agent is already on it
    """
    params = params or ObjectiveSteeringParams()
    target = select_objective(agent, objectives)
    if target is None:
        return VelocityAdjustment.zero()

    direction = target.position - agent.state.position
    distance = np.linalg.norm(direction)
    if distance < ARRIVAL_TOLERANCE:
        return VelocityAdjustment.zero()

    return VelocityAdjustment(direction / distance * params.objective_weight)


def compute_objective_steering_batch(agents: Sequence[Agent],
                                     objectives: Sequence[Objective],
                                     params: ObjectiveSteeringParams = None) -> List[VelocityAdjustment]:
    """Objective steering for each agent, in input order."""
    return [compute_objective_steering(agent, objectives, params) for agent in agents]
