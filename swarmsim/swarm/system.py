"""
Swarm System
============

Per-tick orchestration of swarm behaviors: builds the shared local
frame around the active agents' centroid, evaluates each agent's enabled
behaviors and formation steering, and returns ECI velocity adjustments.
"""

import logging
import numpy as np
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..core.agent import Agent
from ..core.config import BehaviorParams
from .behaviors import (
    LocalSnapshot,
    compute_alignment,
    compute_cohesion,
    compute_separation,
)
from .formations import get_formation_target
from .frames import compute_centroid, compute_local_frame, eci_to_local_frame, local_vector_to_eci

logger = logging.getLogger(__name__)

# Squared-distance floor below which two agents are treated as coincident
COINCIDENT_DISTANCE_SQ = 1e-12
STEER_TOLERANCE = 1e-6


@dataclass(frozen=True)
class VelocityAdjustment:
    """ECI velocity delta for one agent [m/s]."""
    delta: np.ndarray

    @classmethod
    def zero(cls) -> 'VelocityAdjustment':
        return cls(np.zeros(3))

    def __add__(self, other: 'VelocityAdjustment') -> 'VelocityAdjustment':
        return VelocityAdjustment(self.delta + other.delta)


def _steer_toward(target: np.ndarray, position: np.ndarray, weight: float) -> np.ndarray:
    direction = target - position
    magnitude = np.linalg.norm(direction)
    if magnitude <= STEER_TOLERANCE:
        return np.zeros(3)
    return direction / magnitude * weight


def compute_swarm_forces(agents: Sequence[Agent],
                         params: Optional[BehaviorParams] = None,
                         dt: float = 0.0) -> List[VelocityAdjustment]:
    """
    Compute swarm velocity adjustments for all agents.

    Args:
        agents: Agents with current states and behavior flags
        params: Behavior parameters (defaults if None)
        dt: Tick length [s]; adjustments are rates, so dt is informational

    Returns:
        One VelocityAdjustment per agent, in input order. Inactive agents
        get a zero adjustment.
    """
    params = params or BehaviorParams()
    if len(agents) == 0:
        return []

    active = [agent for agent in agents if agent.behaviors.is_active]
    if not active:
        return [VelocityAdjustment.zero() for _ in agents]

    centroid = compute_centroid([agent.state for agent in active])
    frame = compute_local_frame(centroid)
    snapshot = LocalSnapshot.from_states(
        [eci_to_local_frame(agent.state, frame) for agent in active]
    )

    logger.debug("Swarm forces: %d active of %d agents, dt=%.3f",
                 len(active), len(agents), dt)

    adjustments = []
    index = -1
    for agent in agents:
        if not agent.behaviors.is_active:
            adjustments.append(VelocityAdjustment.zero())
            continue
        # Position of this agent within the active group
        index += 1

        flags = agent.behaviors
        local = np.zeros(3)

        if flags.cohesion:
            local += compute_cohesion(snapshot, index, params)
        if flags.separation:
            local += compute_separation(snapshot, index, params)
        if flags.alignment:
            local += compute_alignment(snapshot, index, params)

        if flags.has_formation:
            target = get_formation_target(flags.formation, index, len(active))
            if target is not None:
                local += _steer_toward(target, snapshot.positions[index],
                                       params.formation_weight)

        adjustments.append(VelocityAdjustment(local_vector_to_eci(local, frame)))

    return adjustments


def enforce_minimum_separation(agents: Sequence[Agent],
                               adjustments: Sequence[VelocityAdjustment],
                               params: Optional[BehaviorParams] = None,
                               safety_factor: float = 10.0) -> List[VelocityAdjustment]:
    """
    Add equal-and-opposite repulsion for every pair closer than min_separation.

    Runs over all agents, active or not. Repulsion for a pair at distance d
    is separation_weight · safety_factor · (min_separation - d) / min_separation
    along the line joining them.

    Args:
        agents: All agents
        adjustments: Current adjustments, aligned with agents
        params: Behavior parameters (defaults if None)
        safety_factor: Gain over the base separation weight

    Returns:
        New list of adjustments; the inputs are not modified
    """
    params = params or BehaviorParams()
    if len(agents) != len(adjustments):
        raise ValueError("Adjustments must align with agents")
    if len(agents) < 2:
        return [VelocityAdjustment(np.array(a.delta, dtype=float)) for a in adjustments]

    positions = np.array([agent.state.position for agent in agents])
    deltas = np.array([a.delta for a in adjustments], dtype=float)

    offsets = positions[:, None, :] - positions[None, :, :]
    dist_sq = np.einsum('ijk,ijk->ij', offsets, offsets)
    too_close = (dist_sq < params.min_separation**2) & (dist_sq > COINCIDENT_DISTANCE_SQ)

    if np.any(too_close):
        dist = np.sqrt(np.where(too_close, dist_sq, 1.0))
        strength = np.where(
            too_close,
            params.separation_weight * safety_factor
            * (params.min_separation - dist) / params.min_separation,
            0.0,
        )
        deltas = deltas + np.sum(offsets / dist[:, :, None] * strength[:, :, None], axis=1)
        logger.debug("Minimum separation violated by %d pairs", int(np.count_nonzero(too_close)) // 2)

    return [VelocityAdjustment(delta) for delta in deltas]
