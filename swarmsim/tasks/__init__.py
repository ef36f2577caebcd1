"""
Tasks Module
============

Objective types, task allocation, objective steering and completion.
"""

from .objectives import (
    ObjectiveType,
    InspectPoint,
    RelayNode,
    HoldFormationZone,
    Objective,
    objective_from_record,
)
from .allocation import AllocationResult, allocate_tasks, find_nearest_agent, find_agents_in_radius
from .steering import select_objective, compute_objective_steering, compute_objective_steering_batch
from .completion import CompletionResult, update_objective_state

__all__ = [
    'ObjectiveType',
    'InspectPoint',
    'RelayNode',
    'HoldFormationZone',
    'Objective',
    'objective_from_record',
    'AllocationResult',
    'allocate_tasks',
    'find_nearest_agent',
    'find_agents_in_radius',
    'select_objective',
    'compute_objective_steering',
    'compute_objective_steering_batch',
    'CompletionResult',
    'update_objective_state',
]
