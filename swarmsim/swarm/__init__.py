"""
Swarm Module
============

Local reference frames, behavior kernels, formation generators and the
per-tick swarm system.
"""

from .frames import (
    LocalFrame,
    LocalFrameState,
    compute_local_frame,
    eci_to_local_frame,
    local_frame_to_eci,
    local_vector_to_eci,
    compute_centroid,
)
from .behaviors import LocalSnapshot, compute_cohesion, compute_separation, compute_alignment
from .formations import (
    compute_ring_formation,
    compute_plane_formation,
    compute_lattice_formation,
    get_formation_target,
)
from .system import VelocityAdjustment, compute_swarm_forces, enforce_minimum_separation

__all__ = [
    'LocalFrame',
    'LocalFrameState',
    'compute_local_frame',
    'eci_to_local_frame',
    'local_frame_to_eci',
    'local_vector_to_eci',
    'compute_centroid',
    'LocalSnapshot',
    'compute_cohesion',
    'compute_separation',
    'compute_alignment',
    'compute_ring_formation',
    'compute_plane_formation',
    'compute_lattice_formation',
    'get_formation_target',
    'VelocityAdjustment',
    'compute_swarm_forces',
    'enforce_minimum_separation',
]
