"""
Formation Generators
====================

Target positions in local-frame coordinates (radial, along-track,
cross-track) as pure functions of agent index and group size.
"""

import math
import numpy as np
from typing import Optional

from ..core.agent import FormationType

DEFAULT_SPACING = 5000.0  # m
RING_RADIUS_PER_AGENT = 10000.0  # m


def _check_total(total_agents: int):
    if total_agents <= 0:
        raise ValueError("Total agents must be positive")


def compute_ring_formation(agent_index: int, total_agents: int,
                           radius: float = None) -> np.ndarray:
    """
    Evenly spaced circle in the along-track/cross-track plane.

    Args:
        agent_index: Index of the agent (0-based)
        total_agents: Agents in the formation
        radius: Ring radius [m]; defaults to 10 km per agent

    Returns:
        Target position [radial, along-track, cross-track]
    """
    _check_total(total_agents)
    if radius is None:
        radius = RING_RADIUS_PER_AGENT * max(total_agents, 1)

    angle = agent_index / total_agents * 2 * np.pi
    return np.array([0.0, radius * np.cos(angle), radius * np.sin(angle)])


def compute_plane_formation(agent_index: int, total_agents: int,
                            spacing: float = DEFAULT_SPACING) -> np.ndarray:
    """Centered square-ish grid in the along-track/cross-track plane."""
    _check_total(total_agents)

    grid_size = math.ceil(math.sqrt(total_agents))
    row = agent_index // grid_size
    col = agent_index % grid_size

    center = (grid_size - 1) / 2
    return np.array([0.0, (col - center) * spacing, (row - center) * spacing])


def _cube_root_ceil(n: int) -> int:
    size = round(n ** (1.0 / 3.0))
    # Float cube roots can land just below or above an exact cube
    while size**3 < n:
        size += 1
    while size > 1 and (size - 1)**3 >= n:
        size -= 1
    return max(size, 1)


def compute_lattice_formation(agent_index: int, total_agents: int,
                              spacing: float = DEFAULT_SPACING) -> np.ndarray:
    """Centered cubic grid spanning all three local axes."""
    _check_total(total_agents)

    size = _cube_root_ceil(total_agents)
    layer = agent_index // (size * size)
    remainder = agent_index % (size * size)
    row = remainder // size
    col = remainder % size

    center = (size - 1) / 2
    return np.array([
        (layer - center) * spacing,
        (col - center) * spacing,
        (row - center) * spacing,
    ])


def get_formation_target(formation: Optional[FormationType],
                         agent_index: int,
                         total_agents: int,
                         radius: float = None,
                         spacing: float = None) -> Optional[np.ndarray]:
    """
    Dispatch to the generator for a formation type.

    Returns:
        Target position in local frame, or None for NONE/unset
    """
    if formation is None or formation == FormationType.NONE:
        return None

    if formation == FormationType.RING:
        return compute_ring_formation(agent_index, total_agents, radius)
    if formation == FormationType.PLANE:
        return compute_plane_formation(agent_index, total_agents,
                                       DEFAULT_SPACING if spacing is None else spacing)
    if formation == FormationType.LATTICE:
        return compute_lattice_formation(agent_index, total_agents,
                                         DEFAULT_SPACING if spacing is None else spacing)
    raise ValueError(f"Unknown formation type: {formation}")
