"""
Objective Types
===============

Tagged union of mission objectives. Objectives are immutable; updates
produce new values via dataclasses.replace. Completion is monotonic.
"""

import numpy as np
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple, Union


class ObjectiveType(Enum):
    """Objective kinds."""
    INSPECT_POINT = 'inspect_point'
    RELAY_NODE = 'relay_node'
    HOLD_FORMATION_ZONE = 'hold_formation_zone'


DEFAULT_V_THRESHOLD = 10.0  # m/s


class _ObjectiveBase:
    """Behavior shared by all objective variants."""

    def _freeze_position(self):
        position = np.array(self.position, dtype=float).reshape(3)
        position.setflags(write=False)
        object.__setattr__(self, 'position', position)

    def distance_to(self, point: np.ndarray) -> float:
        """Euclidean distance from the objective to a point [m]."""
        return float(np.linalg.norm(np.asarray(point) - self.position))

    def mark_completed(self):
        """Return the completed version of this objective."""
        return replace(self, completed=True)


@dataclass(frozen=True, eq=False)
class InspectPoint(_ObjectiveBase):
    """Any agent must come within `threshold` while slower than `v_threshold`."""
    id: str
    position: np.ndarray  # ECI [m]
    threshold: float  # m
    v_threshold: Optional[float] = None  # m/s, DEFAULT_V_THRESHOLD when unset
    points: int = 100
    completed: bool = False

    type = ObjectiveType.INSPECT_POINT

    def __post_init__(self):
        self._freeze_position()
        if self.threshold < 0:
            raise ValueError(f"Objective {self.id}: threshold cannot be negative")

    @property
    def speed_limit(self) -> float:
        return DEFAULT_V_THRESHOLD if self.v_threshold is None else self.v_threshold


@dataclass(frozen=True, eq=False)
class RelayNode(_ObjectiveBase):
    """The assigned agent must stay within `threshold` for `hold_duration` seconds."""
    id: str
    position: np.ndarray
    hold_duration: float  # s
    threshold: float  # m
    points: int = 100
    completed: bool = False
    assigned_agent_id: Optional[str] = None
    hold_start: Optional[float] = None  # sim time of entry [s]

    type = ObjectiveType.RELAY_NODE

    def __post_init__(self):
        self._freeze_position()
        if self.hold_duration < 0:
            raise ValueError(f"Objective {self.id}: hold duration cannot be negative")


@dataclass(frozen=True, eq=False)
class HoldFormationZone(_ObjectiveBase):
    """At least `required_agents` agents must be inside `radius` at once."""
    id: str
    position: np.ndarray
    radius: float  # m
    required_agents: int
    points: int = 100
    completed: bool = False
    assigned_agent_ids: Tuple[str, ...] = ()

    type = ObjectiveType.HOLD_FORMATION_ZONE

    def __post_init__(self):
        self._freeze_position()
        object.__setattr__(self, 'assigned_agent_ids', tuple(self.assigned_agent_ids))
        if self.required_agents < 1:
            raise ValueError(f"Objective {self.id}: at least one agent is required")


Objective = Union[InspectPoint, RelayNode, HoldFormationZone]


def objective_from_record(record: dict) -> Objective:
    """
    Build an objective from a scenario record.

    Args:
        record: Mapping with a 'type' key naming the ObjectiveType value
            plus that variant's fields (camelCase or snake_case)

    Returns:
        Objective instance
    """
    kind = ObjectiveType(record['type'])
    common = dict(
        id=record['id'],
        position=record['position'],
        points=record.get('points', 100),
        completed=record.get('completed', False),
    )

    if kind == ObjectiveType.INSPECT_POINT:
        return InspectPoint(
            threshold=record['threshold'],
            v_threshold=record.get('v_threshold', record.get('vThreshold')),
            **common,
        )
    if kind == ObjectiveType.RELAY_NODE:
        return RelayNode(
            hold_duration=record.get('hold_duration', record.get('holdDuration')),
            threshold=record['threshold'],
            assigned_agent_id=record.get('assigned_agent_id', record.get('assignedAgentId')),
            hold_start=record.get('hold_start', record.get('startTime')),
            **common,
        )
    return HoldFormationZone(
        radius=record['radius'],
        required_agents=record.get('required_agents', record.get('requiredAgents')),
        assigned_agent_ids=record.get('assigned_agent_ids', record.get('assignedAgentIds', ())),
        **common,
    )
