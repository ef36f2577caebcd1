#!/usr/bin/env python3
"""
Swarm Simulation Example
========================

Example script demonstrating the swarm simulation engine.
"""

import argparse
import time
from pathlib import Path

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from swarmsim.core.config import create_large_swarm_config
from swarmsim.core.simulator import SwarmSimulator
from swarmsim.core.rng import SeededRandom
from swarmsim.dynamics.orbital import orbital_period, cartesian_to_elements
from swarmsim.logging_config import setup_logging
from swarmsim.scenarios import (
    RingFormationScenario,
    RingFormationScenarioConfig,
    TaskDemoScenario,
    TaskDemoScenarioConfig,
    generate_test_agents,
)


def run_large_swarm(count: int, minutes: float, out_dir: Path):
    """Propagate a seeded random swarm and plot ground-frame tracks."""
    print("=" * 60)
    print(f"Large Swarm: {count} agents, {minutes} minutes")
    print("=" * 60)

    config = create_large_swarm_config()
    config.clock.step_delta = 10.0
    sim = SwarmSimulator(config)
    sim.load(generate_test_agents(count, SeededRandom(config.clock.seed)))

    periods = [orbital_period(cartesian_to_elements(a.state).a) for a in sim.agents]
    print(f"  Orbital periods: {min(periods)/60:.1f} - {max(periods)/60:.1f} min")

    start = time.time()
    sim.run(minutes * 60)
    elapsed = time.time() - start
    print(f"  {sim.tick_count} ticks in {elapsed:.2f}s "
          f"({sim.tick_count * len(sim.agents) / max(elapsed, 1e-9):.0f} agent-steps/s)")

    data = sim.export_trajectory(str(out_dir / "large_swarm.csv"))

    fig = plt.figure(figsize=(8, 8))
    ax = fig.add_subplot(projection='3d')
    for index in np.unique(data[:, 1]).astype(int)[:50]:
        rows = data[data[:, 1] == index]
        ax.plot(rows[:, 2] / 1000, rows[:, 3] / 1000, rows[:, 4] / 1000, linewidth=0.6)
    ax.set_xlabel('X (km)')
    ax.set_ylabel('Y (km)')
    ax.set_zlabel('Z (km)')
    ax.set_title('Swarm tracks (ECI)')
    fig.savefig(out_dir / "large_swarm.png", dpi=120)
    plt.close(fig)


def run_ring_formation(out_dir: Path):
    """Run ring formation scenario."""
    print("\n" + "=" * 60)
    print("Ring Formation Scenario")
    print("=" * 60)

    scenario = RingFormationScenario(RingFormationScenarioConfig(duration_minutes=10.0))
    scenario.run()
    print(scenario.get_summary())

    fig = scenario.plot_results()
    fig.savefig(out_dir / "ring_formation.png", dpi=120)
    plt.close(fig)


def run_task_demo():
    """Run task demo scenario."""
    print("\n" + "=" * 60)
    print("Task Demo Scenario")
    print("=" * 60)

    scenario = TaskDemoScenario(TaskDemoScenarioConfig(duration_minutes=10.0))
    scenario.run()
    print(scenario.get_summary())


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Swarm Simulation Examples")
    parser.add_argument('--all', action='store_true', help='Run all examples')
    parser.add_argument('--swarm', action='store_true', help='Run large random swarm')
    parser.add_argument('--ring', action='store_true', help='Run ring formation scenario')
    parser.add_argument('--tasks', action='store_true', help='Run task demo scenario')
    parser.add_argument('--count', type=int, default=200, help='Agents in the large swarm')
    parser.add_argument('--minutes', type=float, default=30.0, help='Large swarm duration')
    parser.add_argument('--out', type=Path, default=Path('build/reports'), help='Output directory')

    args = parser.parse_args()

    setup_logging()
    args.out.mkdir(parents=True, exist_ok=True)

    if not any((args.all, args.swarm, args.ring, args.tasks)):
        args.swarm = True

    if args.all or args.swarm:
        run_large_swarm(args.count, args.minutes, args.out)

    if args.all or args.ring:
        run_ring_formation(args.out)

    if args.all or args.tasks:
        run_task_demo()

    print("\n" + "=" * 60)
    print("Examples complete!")
    print("=" * 60)
