"""
Swarm Simulator
===============

Central engine orchestrating one deterministic tick over the agent and
objective collections.
"""

import logging
import numpy as np
from dataclasses import dataclass, field, replace
from typing import Callable, Dict, List, Optional, Sequence

from .agent import Agent
from .config import SimulationConfig
from .errors import OrbitError, UnknownAgentError
from .time_manager import SimClock
from ..dynamics.propagator import propagate_kepler
from ..maneuvers.delta_v import BurnResult, apply_delta_v, preview_trajectory, rtn_to_eci
from ..swarm.system import VelocityAdjustment, compute_swarm_forces, enforce_minimum_separation
from ..tasks.allocation import allocate_tasks
from ..tasks.completion import update_objective_state
from ..tasks.objectives import Objective
from ..tasks.steering import compute_objective_steering_batch

logger = logging.getLogger(__name__)


@dataclass
class TickRecord:
    """Logged snapshot of the swarm."""
    time_s: float = 0.0
    agent_ids: List[str] = field(default_factory=list)
    positions: np.ndarray = field(default_factory=lambda: np.zeros((0, 3)))
    velocities: np.ndarray = field(default_factory=lambda: np.zeros((0, 3)))
    score: int = 0
    objectives_completed: int = 0


@dataclass
class TickResult:
    """Outcome of one simulated tick."""
    sim_time: float = 0.0
    dt: float = 0.0
    newly_completed: List[str] = field(default_factory=list)
    failed_agent_ids: List[str] = field(default_factory=list)


class SwarmSimulator:
    """
    Swarm simulation engine.

    Each tick, computed from the pre-tick snapshot and applied as one batch:
    - Selected (player-controlled) agents coast on pure Kepler orbits
    - Remaining agents: task allocation, objective steering, swarm
      behaviors, minimum-separation enforcement, then Kepler propagation
    - Objective completion over all agents; points are awarded once
    """

    def __init__(self, config: SimulationConfig = None):
        """
        Initialize simulator.

        Args:
            config: Simulation configuration
        """
        self.config = config or SimulationConfig()

        clock_params = self.config.clock
        self.clock = SimClock(
            time_scale=clock_params.time_scale,
            sim_time=clock_params.initial_time,
            seed=clock_params.seed,
            step_delta=clock_params.step_delta,
        )

        self.agents: List[Agent] = []
        self.objectives: List[Objective] = []

        # Scoring
        self.score = 0
        self.game_time = 0.0
        self.timer_running = False

        self.tick_count = 0
        self.is_running = False

        # Data logging
        self.history: List[TickRecord] = []

        # Callbacks
        self.step_callbacks: List[Callable] = []

        # Restored by reset()
        self._initial_agents: List[Agent] = []
        self._initial_objectives: List[Objective] = []

    def load(self,
             agents: Sequence[Agent],
             objectives: Sequence[Objective] = (),
             seed: str = None,
             initial_time: float = 0.0):
        """
        Load a scenario's agents and objectives.

        Args:
            agents: Initial agents
            objectives: Initial objectives
            seed: RNG seed (keeps the current seed if None)
            initial_time: Simulation time at load [s]
        """
        ids = [agent.id for agent in agents]
        if len(set(ids)) != len(ids):
            raise ValueError("Agent ids must be unique")

        if seed is not None:
            self.clock.set_seed(seed)
        self.clock.set_time(initial_time)

        self._initial_agents = list(agents)
        self._initial_objectives = list(objectives)
        self._restore()

        logger.info("Loaded %d agents and %d objectives (seed=%r)",
                    len(self.agents), len(self.objectives), self.clock.seed)

    def _restore(self):
        self.agents = list(self._initial_agents)
        self.objectives = list(self._initial_objectives)
        self.score = 0
        self.game_time = 0.0
        self.timer_running = any(not o.completed for o in self.objectives)
        self.history.clear()
        self.tick_count = 0

    def reset(self):
        """Reset to the loaded scenario at time zero."""
        self.clock.reset()
        self._restore()
        logger.info("Simulation reset")

    def get_agent(self, agent_id: str) -> Agent:
        for agent in self.agents:
            if agent.id == agent_id:
                return agent
        raise UnknownAgentError(agent_id)

    def update(self, frame_delta: float) -> TickResult:
        """
        Advance by one render frame through the clock.

        Args:
            frame_delta: Wall-clock frame time [s]

        Returns:
            TickResult (dt = 0 and nothing simulated while paused)

        Raises:
            ValueError: frame_delta is negative
        """
        dt = self.clock.update(frame_delta)
        if dt <= 0:
            return TickResult(sim_time=self.clock.time, dt=0.0)
        return self._advance(dt)

    def step(self) -> TickResult:
        """Advance by the clock's fixed step, even while paused."""
        return self._advance(self.clock.step())

    def _advance(self, dt: float) -> TickResult:
        sim_time = self.clock.time
        agents = list(self.agents)
        objectives = list(self.objectives)

        auto_indices = [i for i, agent in enumerate(agents) if not agent.selected]
        auto_agents = [agents[i] for i in auto_indices]

        # === Steering (auto agents only) ===

        if objectives and auto_agents:
            objectives = allocate_tasks(auto_agents, objectives).objectives
            steering = compute_objective_steering_batch(
                auto_agents, objectives, self.config.steering
            )
        else:
            steering = [VelocityAdjustment.zero() for _ in auto_agents]

        swarm = compute_swarm_forces(auto_agents, self.config.behavior, dt)

        adjustments = [VelocityAdjustment.zero() for _ in agents]
        for k, i in enumerate(auto_indices):
            adjustments[i] = swarm[k] + steering[k]

        # Selected agents coast, so their share of each pair push is dropped
        adjustments = enforce_minimum_separation(
            agents, adjustments, self.config.behavior,
            safety_factor=self.config.min_separation_safety_factor,
        )

        # === Propagation ===

        updated: List[Agent] = []
        failed: List[str] = []
        for agent, adjustment in zip(agents, adjustments):
            state = agent.state
            if not agent.selected:
                state = state.with_velocity(state.velocity + adjustment.delta * dt)
            try:
                updated.append(agent.with_state(propagate_kepler(state, dt)))
            except OrbitError as exc:
                logger.warning("Agent %s held at previous state: %s", agent.id, exc)
                failed.append(agent.id)
                updated.append(agent)

        # === Objectives ===

        newly_completed: List[str] = []
        if objectives:
            completion = update_objective_state(objectives, updated, sim_time)
            objectives = completion.objectives
            newly_completed = completion.newly_completed
            self._award(objectives, newly_completed, dt)

        self.agents = updated
        self.objectives = objectives
        self.tick_count += 1

        result = TickResult(
            sim_time=sim_time,
            dt=dt,
            newly_completed=newly_completed,
            failed_agent_ids=failed,
        )
        self._record(sim_time)

        for callback in self.step_callbacks:
            callback(self, result)

        return result

    def _award(self, objectives: Sequence[Objective], newly_completed: Sequence[str], dt: float):
        by_id = {objective.id: objective for objective in objectives}
        for objective_id in newly_completed:
            self.score += by_id[objective_id].points

        if self.timer_running:
            self.game_time += dt
        if all(objective.completed for objective in objectives):
            self.timer_running = False

    def _record(self, sim_time: float):
        if not self.config.save_history:
            return
        if self.history and \
           (sim_time - self.history[-1].time_s) < (1.0 / self.config.history_rate_hz):
            return

        self.history.append(TickRecord(
            time_s=sim_time,
            agent_ids=[agent.id for agent in self.agents],
            positions=np.array([agent.state.position for agent in self.agents]).reshape(-1, 3),
            velocities=np.array([agent.state.velocity for agent in self.agents]).reshape(-1, 3),
            score=self.score,
            objectives_completed=sum(1 for o in self.objectives if o.completed),
        ))

    def run(self,
            duration_seconds: float,
            frame_delta: float = None,
            progress_callback: Callable = None) -> List[TickRecord]:
        """
        Run for a span of simulation time.

        Args:
            duration_seconds: Simulated time to cover [s]
            frame_delta: Wall-clock frame time fed to update(); when None
                the clock's fixed step is used
            progress_callback: Called with progress (0-1)

        Returns:
            List of logged records
        """
        end_time = self.clock.time + duration_seconds
        start_time = self.clock.time

        self.is_running = True

        while self.clock.time < end_time:
            if frame_delta is None:
                self.step()
            else:
                if self.update(frame_delta).dt == 0:
                    break

            if progress_callback and self.tick_count % 100 == 0:
                progress_callback((self.clock.time - start_time) / duration_seconds)

        self.is_running = False

        if self.config.verbose:
            print(f"Simulation complete: {self.tick_count} ticks, "
                  f"score {self.score}, {len(self.history)} logged states")

        return self.history

    def command_maneuver(self, agent_id: str, rtn_vector) -> BurnResult:
        """
        Execute an impulsive burn on one agent.

        Args:
            agent_id: Target agent
            rtn_vector: Delta-v in the agent's RTN frame [m/s]

        Returns:
            BurnResult applied to the agent

        Raises:
            UnknownAgentError: no agent with that id
            DeltaVBudgetError: burn exceeds the agent's budget (no change applied)
        """
        agent = self.get_agent(agent_id)
        dv_eci = rtn_to_eci(rtn_vector, agent.state)
        try:
            burn = apply_delta_v(agent.state, dv_eci, agent.dv_remaining)
        except ValueError as exc:
            logger.warning("Maneuver rejected for %s: %s", agent_id, exc)
            raise

        self.agents = [
            replace(a, state=burn.state, dv_remaining=burn.dv_remaining) if a.id == agent_id else a
            for a in self.agents
        ]
        logger.info("Agent %s burned %.2f m/s, %.2f m/s remaining",
                    agent_id, agent.dv_remaining - burn.dv_remaining, burn.dv_remaining)
        return burn

    def preview_maneuver(self, agent_id: str, rtn_vector) -> np.ndarray:
        """Predicted ECI positions after a burn, without applying it."""
        agent = self.get_agent(agent_id)
        return preview_trajectory(
            agent.state, rtn_vector, agent.dv_remaining,
            num_points=self.config.preview_points,
            max_seconds=self.config.preview_max_seconds,
        )

    def set_selected(self, agent_id: Optional[str]):
        """Mark one agent (or none) as player-controlled."""
        if agent_id is not None:
            self.get_agent(agent_id)
        self.agents = [replace(a, selected=(a.id == agent_id)) for a in self.agents]

    def add_step_callback(self, callback: Callable):
        """Add callback to be called each tick with (simulator, result)."""
        self.step_callbacks.append(callback)

    def get_telemetry(self) -> Dict:
        """
        Get current telemetry data.

        Returns:
            Dictionary of telemetry values
        """
        return {
            'time_s': self.clock.time,
            'time_str': self.clock.format_time(),
            'paused': self.clock.paused,
            'time_scale': self.clock.time_scale,
            'seed': self.clock.seed,
            'tick_count': self.tick_count,
            'score': self.score,
            'game_time_s': self.game_time,
            'num_agents': len(self.agents),
            'objectives_completed': sum(1 for o in self.objectives if o.completed),
            'objectives_total': len(self.objectives),
            'agents': {
                agent.id: {
                    'position_m': agent.state.position.tolist(),
                    'velocity_m_s': agent.state.velocity.tolist(),
                    'dv_remaining_m_s': agent.dv_remaining,
                }
                for agent in self.agents
            },
        }

    def export_trajectory(self, filename: str = None) -> np.ndarray:
        """
        Export logged trajectories.

        Args:
            filename: Optional CSV filename

        Returns:
            (K, 8) array: time, agent index, x, y, z, vx, vy, vz
        """
        rows = []
        for record in self.history:
            for index in range(len(record.agent_ids)):
                rows.append(np.concatenate([
                    [record.time_s, index],
                    record.positions[index],
                    record.velocities[index],
                ]))

        if not rows:
            return np.zeros((0, 8))

        data = np.array(rows)

        if filename:
            header = "time_s,agent_index,x_m,y_m,z_m,vx_m_s,vy_m_s,vz_m_s"
            np.savetxt(filename, data, delimiter=',', header=header)

        return data

    def __repr__(self) -> str:
        return (f"SwarmSimulator(t={self.clock.time:.1f}s, agents={len(self.agents)}, "
                f"score={self.score})")
