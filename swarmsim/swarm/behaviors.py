"""
Swarm Behaviors
===============

Cohesion, separation and alignment kernels. All inputs and outputs are
in local-frame coordinates (radial, along-track, cross-track); each
kernel returns a velocity adjustment for one agent.
"""

import numpy as np
from dataclasses import dataclass
from typing import Sequence

from ..core.config import BehaviorParams
from .frames import LocalFrameState

MIN_DISTANCE = 1e-6


@dataclass(frozen=True)
class LocalSnapshot:
    """Stacked local-frame positions and velocities of one formation group."""
    positions: np.ndarray  # (N, 3)
    velocities: np.ndarray  # (N, 3)

    @classmethod
    def from_states(cls, states: Sequence[LocalFrameState]) -> 'LocalSnapshot':
        if len(states) == 0:
            return cls(np.zeros((0, 3)), np.zeros((0, 3)))
        return cls(
            positions=np.array([s.position for s in states], dtype=float),
            velocities=np.array([s.velocity for s in states], dtype=float),
        )

    def __len__(self) -> int:
        return len(self.positions)


def _neighbor_offsets(snapshot: LocalSnapshot, index: int):
    """Offsets from the agent to every other agent, and their lengths."""
    others = np.arange(len(snapshot)) != index
    offsets = snapshot.positions[others] - snapshot.positions[index]
    distances = np.linalg.norm(offsets, axis=1)
    return others, offsets, distances


def compute_cohesion(snapshot: LocalSnapshot, index: int,
                     params: BehaviorParams) -> np.ndarray:
    """
    Steer toward the mean position of neighbors within the neighbor radius.

    Returns:
        Unit direction scaled by cohesion_weight, or zero
    """
    if len(snapshot) <= 1:
        return np.zeros(3)

    others, offsets, distances = _neighbor_offsets(snapshot, index)
    in_range = distances < params.neighbor_radius
    if not np.any(in_range):
        return np.zeros(3)

    center = snapshot.positions[others][in_range].mean(axis=0)
    direction = center - snapshot.positions[index]
    magnitude = np.linalg.norm(direction)
    if magnitude < MIN_DISTANCE:
        return np.zeros(3)

    return direction / magnitude * params.cohesion_weight


def compute_separation(snapshot: LocalSnapshot, index: int,
                       params: BehaviorParams) -> np.ndarray:
    """
    Inverse-square repulsion from each neighbor within the neighbor radius.

    Contributions are summed and not renormalized, so crowding stacks.
    """
    if len(snapshot) <= 1:
        return np.zeros(3)

    _, offsets, distances = _neighbor_offsets(snapshot, index)
    close = (distances < params.neighbor_radius) & (distances > MIN_DISTANCE)
    if not np.any(close):
        return np.zeros(3)

    away = -offsets[close]
    d = distances[close]
    weights = params.separation_weight / d**2
    return np.sum(away / d[:, None] * weights[:, None], axis=0)


def compute_alignment(snapshot: LocalSnapshot, index: int,
                      params: BehaviorParams) -> np.ndarray:
    """Steer own velocity toward the mean velocity of neighbors in range."""
    if len(snapshot) <= 1:
        return np.zeros(3)

    others, _, distances = _neighbor_offsets(snapshot, index)
    in_range = distances < params.neighbor_radius
    if not np.any(in_range):
        return np.zeros(3)

    mean_velocity = snapshot.velocities[others][in_range].mean(axis=0)
    return (mean_velocity - snapshot.velocities[index]) * params.alignment_weight
