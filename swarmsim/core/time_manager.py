"""
Simulation Clock
================

Deterministic simulation time accumulator. Handles pause/play, time
scaling, fixed single-stepping and the lifecycle of the seeded RNG.
"""

import logging
from dataclasses import dataclass, replace

from .rng import SeededRandom

logger = logging.getLogger(__name__)


@dataclass
class SimClockState:
    """Serializable clock state."""
    paused: bool = False
    time_scale: float = 1.0
    sim_time: float = 0.0  # seconds
    seed: str = 'default'
    step_delta: float = 1.0  # seconds per manual step


class SimClock:
    """
    Manages simulation time.

    Provides:
    - Frame-driven time advance scaled by the time-scale multiplier
    - Pause/play and manual single-step
    - Ownership of the seeded RNG (created here, reseeded on reset)
    """

    MIN_TIME_SCALE = 0.1
    MAX_TIME_SCALE = 100.0

    def __init__(self,
                 paused: bool = False,
                 time_scale: float = 1.0,
                 sim_time: float = 0.0,
                 seed: str = 'default',
                 step_delta: float = 1.0):
        """
        Initialize simulation clock.

        Args:
            paused: Start paused
            time_scale: Sim seconds per wall second
            sim_time: Initial simulation time [s]
            seed: Seed string for the RNG
            step_delta: Fixed step size for step() [s]
        """
        if sim_time < 0:
            raise ValueError(f"Simulation time cannot be negative (got {sim_time})")
        if step_delta <= 0:
            raise ValueError(f"Step delta must be positive (got {step_delta})")

        self._state = SimClockState(
            paused=paused,
            time_scale=1.0,
            sim_time=float(sim_time),
            seed=seed,
            step_delta=float(step_delta),
        )
        self.set_time_scale(time_scale)
        self.rng = SeededRandom(seed)

    @property
    def time(self) -> float:
        """Current simulation time [s]."""
        return self._state.sim_time

    @property
    def time_scale(self) -> float:
        return self._state.time_scale

    @property
    def paused(self) -> bool:
        return self._state.paused

    @property
    def seed(self) -> str:
        return self._state.seed

    @property
    def step_delta(self) -> float:
        return self._state.step_delta

    @property
    def state(self) -> SimClockState:
        """Copy of the current clock state."""
        return replace(self._state)

    def pause(self):
        self._state.paused = True

    def play(self):
        self._state.paused = False

    def toggle(self):
        self._state.paused = not self._state.paused

    def set_time_scale(self, scale: float):
        """
        Set the time-scale multiplier.

        Values are clamped to [0.1, 100]. A non-positive request pauses
        the clock and leaves the scale at the lower bound.
        """
        if scale <= 0:
            self._state.paused = True
        self._state.time_scale = max(self.MIN_TIME_SCALE, min(self.MAX_TIME_SCALE, scale))

    def set_seed(self, seed: str):
        """Set seed and reinitialize the RNG."""
        self._state.seed = seed
        self.rng.reseed(seed)
        logger.debug("Clock seed set to %r", seed)

    def set_time(self, sim_time: float):
        """Set simulation time directly (scenario load)."""
        if sim_time < 0:
            raise ValueError(f"Simulation time cannot be negative (got {sim_time})")
        self._state.sim_time = float(sim_time)

    def set_step_delta(self, step_delta: float):
        if step_delta <= 0:
            raise ValueError(f"Step delta must be positive (got {step_delta})")
        self._state.step_delta = float(step_delta)

    def update(self, frame_delta: float) -> float:
        """
        Advance by one render frame.

        Args:
            frame_delta: Wall-clock seconds since the previous frame

        Returns:
            Simulation delta to use for physics (0 while paused)
        """
        if frame_delta < 0:
            raise ValueError(f"Frame delta cannot be negative (got {frame_delta})")
        if self._state.paused or self._state.time_scale <= 0:
            return 0.0

        sim_delta = frame_delta * self._state.time_scale
        self._state.sim_time += sim_delta
        return sim_delta

    def step(self) -> float:
        """
        Advance by the fixed step regardless of pause state.

        Returns:
            The step delta [s]
        """
        delta = self._state.step_delta
        self._state.sim_time += delta
        return delta

    def reset(self):
        """Zero the time and restart the RNG from the current seed."""
        self._state.sim_time = 0.0
        self.rng.reseed()

    def format_time(self) -> str:
        """Human-readable simulation time, e.g. '1h 2m 5s'."""
        total_seconds = int(self._state.sim_time)
        days = total_seconds // 86400
        hours = (total_seconds % 86400) // 3600
        minutes = (total_seconds % 3600) // 60
        seconds = total_seconds % 60

        if days > 0:
            return f"{days}d {hours}h {minutes}m {seconds}s"
        if hours > 0:
            return f"{hours}h {minutes}m {seconds}s"
        if minutes > 0:
            return f"{minutes}m {seconds}s"
        return f"{seconds}s"

    def __repr__(self) -> str:
        return (f"SimClock(time={self._state.sim_time:.3f}s, "
                f"scale={self._state.time_scale}, paused={self._state.paused})")
