"""
Agent Model
===========

Swarm agent record: identity, ECI state, behavior flags, team and
delta-v budget.
"""

from dataclasses import dataclass, field, replace
from enum import Enum

from ..dynamics.elements import CartesianState


class FormationType(Enum):
    """Formation an agent steers toward."""
    NONE = 'none'
    RING = 'ring'
    PLANE = 'plane'
    LATTICE = 'lattice'


class Team(Enum):
    """Agent faction."""
    FRIENDLY = 'friendly'
    ENEMY = 'enemy'


@dataclass(frozen=True)
class BehaviorFlags:
    """Swarm behaviors enabled for one agent."""
    cohesion: bool = False
    separation: bool = False
    alignment: bool = False
    formation: FormationType = FormationType.NONE

    @property
    def has_formation(self) -> bool:
        return self.formation is not None and self.formation != FormationType.NONE

    @property
    def is_active(self) -> bool:
        """True when any behavior is enabled."""
        return self.cohesion or self.separation or self.alignment or self.has_formation


@dataclass(frozen=True)
class Agent:
    """
    One swarm member.

    `selected` and `hovered` belong to the presentation layer; the core
    only reads `selected` (selected agents are player-controlled and are
    not steered) and passes both through unchanged.
    """
    id: str
    state: CartesianState
    behaviors: BehaviorFlags = field(default_factory=BehaviorFlags)
    team: Team = Team.FRIENDLY
    dv_remaining: float = 1000.0  # m/s
    selected: bool = False
    hovered: bool = False

    def __post_init__(self):
        if self.dv_remaining < 0:
            raise ValueError(f"Agent {self.id}: delta-v budget cannot be negative")

    @property
    def position(self):
        return self.state.position

    @property
    def velocity(self):
        return self.state.velocity

    def with_state(self, state: CartesianState) -> 'Agent':
        """Return a copy with a new orbital state."""
        return replace(self, state=state)
