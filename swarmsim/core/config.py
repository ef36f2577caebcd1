"""
Simulation Configuration
========================

Behavior tuning, steering, clock and run parameters for the swarm
simulator.
"""

from dataclasses import dataclass, field


@dataclass
class BehaviorParams:
    """Weights and radii for swarm behaviors."""
    cohesion_weight: float = 0.1  # m/s²
    separation_weight: float = 1.0  # m/s²
    alignment_weight: float = 0.5  # m/s²
    neighbor_radius: float = 50000.0  # m
    min_separation: float = 1000.0  # m
    formation_weight: float = 0.3

    def __post_init__(self):
        """Validate configuration."""
        for name in ('cohesion_weight', 'separation_weight',
                     'alignment_weight', 'formation_weight'):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")
        if self.neighbor_radius <= 0:
            raise ValueError("Neighbor radius must be positive")
        if self.min_separation <= 0:
            raise ValueError("Minimum separation must be positive")


@dataclass
class ObjectiveSteeringParams:
    """Objective-directed steering."""
    objective_weight: float = 0.5  # m/s²


@dataclass
class ClockParameters:
    """Initial simulation clock settings."""
    seed: str = 'default'
    time_scale: float = 1.0
    step_delta: float = 1.0  # seconds per manual step
    initial_time: float = 0.0


@dataclass
class SimulationConfig:
    """Complete simulation configuration."""
    behavior: BehaviorParams = field(default_factory=BehaviorParams)
    steering: ObjectiveSteeringParams = field(default_factory=ObjectiveSteeringParams)
    clock: ClockParameters = field(default_factory=ClockParameters)

    # Delta-v budget given to agents that do not specify one [m/s]
    default_dv_budget: float = 1000.0

    # Repulsion gain applied by minimum-separation enforcement
    min_separation_safety_factor: float = 10.0

    # Maneuver trajectory preview
    preview_points: int = 100
    preview_max_seconds: float = 7200.0

    # Output options
    history_rate_hz: float = 1.0
    save_history: bool = True
    verbose: bool = True

    def __post_init__(self):
        """Validate configuration."""
        if self.default_dv_budget < 0:
            raise ValueError("Default delta-v budget cannot be negative")
        if self.history_rate_hz <= 0:
            raise ValueError("History rate must be positive")
        if self.preview_points < 1:
            raise ValueError("Preview needs at least one point")


# Pre-defined configurations
def create_default_config() -> SimulationConfig:
    """Create configuration with default tuning."""
    return SimulationConfig()


def create_large_swarm_config() -> SimulationConfig:
    """Create configuration for hundreds of agents: sparser history, tighter neighborhoods."""
    return SimulationConfig(
        behavior=BehaviorParams(neighbor_radius=20000.0),
        clock=ClockParameters(seed='large-swarm', time_scale=10.0),
        history_rate_hz=0.1,
        verbose=False,
    )


def create_task_demo_config() -> SimulationConfig:
    """Create configuration for objective-driven runs."""
    return SimulationConfig(
        steering=ObjectiveSteeringParams(objective_weight=1.0),
        clock=ClockParameters(seed='task-demo', time_scale=2.0),
    )
