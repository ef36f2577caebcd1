"""
Ring Formation Scenario
=======================

A cluster of agents sharing one LEO orbit, separated by small along-track
phase offsets, steering into a ring around their centroid.
"""

import numpy as np
from typing import Dict, List, Optional
from dataclasses import dataclass
from ..core.agent import BehaviorFlags, FormationType
from ..core.config import SimulationConfig, create_default_config
from ..core.constants import EARTH_RADIUS
from ..core.simulator import SwarmSimulator, TickResult
from ..dynamics.elements import OrbitalElements
from ..swarm.formations import RING_RADIUS_PER_AGENT
from ..swarm.frames import compute_centroid
from .loader import AgentRecord, Scenario, load_scenario

RING_SPREAD_MARGIN = 1.5


@dataclass
class RingFormationScenarioConfig:
    """Configuration for ring formation scenario."""
    duration_minutes: float = 30.0
    num_agents: int = 8
    altitude_km: float = 500.0
    inclination_deg: float = 51.6
    phase_spacing_deg: float = 0.02   # Along-track spacing between agents
    # Success if all agents stay within this of the centroid.
    # Defaults to the ring radius plus margin for num_agents.
    target_spread_m: Optional[float] = None

    @property
    def target_spread(self) -> float:
        if self.target_spread_m is not None:
            return self.target_spread_m
        return RING_SPREAD_MARGIN * RING_RADIUS_PER_AGENT * max(self.num_agents, 1)


class RingFormationScenario:
    """
    Ring formation keeping scenario.

    Simulates:
    - Co-orbiting agents with cohesion, separation and ring formation
    - Minimum-separation enforcement between neighbors

    Success criteria:
    - No agent pair closer than the minimum separation at the end
    - Final spread below target
    """

    def __init__(self, config: RingFormationScenarioConfig = None,
                 sim_config: SimulationConfig = None):
        """
        Initialize ring formation scenario.

        Args:
            config: Scenario configuration
            sim_config: Simulator configuration (defaults if None)
        """
        self.config = config or RingFormationScenarioConfig()
        self.sim_config = sim_config or create_default_config()

        self.simulator: Optional[SwarmSimulator] = None
        self.results: Dict = {}

        # Spread history for analysis
        self.spread_history: List[float] = []
        self.time_history: List[float] = []

    def build_scenario(self) -> Scenario:
        """Scenario definition with agents phased along one orbit."""
        behaviors = BehaviorFlags(
            cohesion=True,
            separation=True,
            formation=FormationType.RING,
        )
        a = EARTH_RADIUS + self.config.altitude_km * 1000
        inc = np.radians(self.config.inclination_deg)
        spacing = np.radians(self.config.phase_spacing_deg)

        agents = [
            AgentRecord(
                id=f"ring-{i}",
                orbit=OrbitalElements.from_true_anomaly(a, 0.0, inc, 0.0, 0.0, i * spacing),
                behaviors=behaviors,
            )
            for i in range(self.config.num_agents)
        ]

        return Scenario(
            name='ring-formation',
            description='Co-orbiting agents forming a ring',
            seed='ring-formation',
            agents=agents,
        )

    def setup(self):
        """Setup scenario with phased initial conditions."""
        self.simulator = SwarmSimulator(self.sim_config)
        load_scenario(self.simulator, self.build_scenario())

        self.spread_history.clear()
        self.time_history.clear()
        self.simulator.add_step_callback(self._track_spread)

    def _track_spread(self, sim: SwarmSimulator, result: TickResult):
        positions = np.array([agent.position for agent in sim.agents])
        centroid = compute_centroid([agent.state for agent in sim.agents]).position
        self.spread_history.append(float(np.max(np.linalg.norm(positions - centroid, axis=1))))
        self.time_history.append(result.sim_time)

    def run(self, progress_callback=None) -> Dict:
        """
        Run ring formation scenario.

        Returns:
            Results dictionary with success/failure and metrics
        """
        if self.simulator is None:
            self.setup()

        if self.sim_config.verbose:
            print(f"Running Ring Formation Scenario: {self.config.duration_minutes} minutes")
            print(f"  Agents: {self.config.num_agents} at {self.config.altitude_km} km")

        self.simulator.run(
            self.config.duration_minutes * 60,
            progress_callback=progress_callback,
        )

        self.results = self._analyze_results()
        return self.results

    def _min_pair_distance(self) -> float:
        positions = np.array([agent.position for agent in self.simulator.agents])
        if len(positions) < 2:
            return float('inf')
        diff = positions[:, None, :] - positions[None, :, :]
        dist = np.linalg.norm(diff, axis=-1)
        np.fill_diagonal(dist, np.inf)
        return float(dist.min())

    def _analyze_results(self) -> Dict:
        """Analyze formation keeping."""
        if not self.spread_history:
            return {'success': False, 'reason': 'No data'}

        min_distance = self._min_pair_distance()
        final_spread = self.spread_history[-1]
        min_separation = self.sim_config.behavior.min_separation

        success = final_spread < self.config.target_spread and min_distance >= min_separation

        return {
            'success': success,
            'initial_spread_m': self.spread_history[0],
            'final_spread_m': final_spread,
            'max_spread_m': max(self.spread_history),
            'min_pair_distance_m': min_distance,
            'dv_used_m_s': sum(
                self.sim_config.default_dv_budget - agent.dv_remaining
                for agent in self.simulator.agents
            ),
            'duration_s': self.time_history[-1],
        }

    def get_summary(self) -> str:
        """Get human-readable summary."""
        if not self.results:
            return "Scenario not yet run."

        if 'reason' in self.results:
            return f"Ring Formation Scenario: no result ({self.results['reason']})"

        status = "SUCCESS" if self.results['success'] else "FAILED"

        return f"""
Ring Formation Scenario Summary
===============================
Result: {status}

Initial spread: {self.results['initial_spread_m']/1000:.2f} km
Final spread: {self.results['final_spread_m']/1000:.2f} km
Max spread: {self.results['max_spread_m']/1000:.2f} km
Closest pair: {self.results['min_pair_distance_m']:.0f} m

Duration: {self.results['duration_s']/60:.1f} min
"""

    def plot_results(self):
        """Plot swarm spread over time."""
        import matplotlib.pyplot as plt

        fig, ax = plt.subplots(figsize=(10, 6))

        ax.plot(np.array(self.time_history) / 60, np.array(self.spread_history) / 1000)
        ax.axhline(y=self.config.target_spread / 1000, color='r',
                   linestyle='--', label=f'Target: {self.config.target_spread/1000:.0f} km')

        ax.set_xlabel('Time (minutes)')
        ax.set_ylabel('Max distance from centroid (km)')
        ax.set_title('Ring Formation Spread')
        ax.legend()
        ax.grid(True)

        plt.tight_layout()
        return fig
