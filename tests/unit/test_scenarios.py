import numpy as np
import pytest

from swarmsim.core.agent import BehaviorFlags, FormationType, Team
from swarmsim.core.config import SimulationConfig
from swarmsim.core.constants import EARTH_RADIUS
from swarmsim.core.rng import SeededRandom
from swarmsim.core.simulator import SwarmSimulator
from swarmsim.dynamics.elements import CartesianState, OrbitalElements
from swarmsim.dynamics.orbital import cartesian_to_elements
from swarmsim.scenarios import (
    AgentRecord,
    RingFormationScenario,
    RingFormationScenarioConfig,
    Scenario,
    TaskDemoScenario,
    TaskDemoScenarioConfig,
    generate_test_agents,
    load_scenario,
    scenario_from_dict,
    scenario_to_agents,
)
from swarmsim.tasks.objectives import RelayNode


def test_generated_agents_are_reproducible():
    a = generate_test_agents(10, SeededRandom('gen'))
    b = generate_test_agents(10, SeededRandom('gen'))

    assert [x.state for x in a] == [y.state for y in b]
    assert [x.id for x in a] == [f"agent-{i}" for i in range(10)]


def test_generated_agents_follow_distributions():
    agents = generate_test_agents(40, SeededRandom('dist'))

    for index, agent in enumerate(agents):
        elements = cartesian_to_elements(agent.state)
        # Perigee may dip with e up to 0.3, semi-major axis stays in range
        assert EARTH_RADIUS + 400e3 - 1 <= elements.a <= EARTH_RADIUS + 2000e3 + 1
        assert elements.e < 0.3
        assert agent.team == (Team.FRIENDLY if index % 2 == 0 else Team.ENEMY)
        assert agent.dv_remaining == 1000.0
        assert not agent.behaviors.is_active


def test_records_convert_elements_and_cartesian():
    cartesian = CartesianState(position=[7e6, 0.0, 0.0], velocity=[0.0, 7500.0, 0.0])
    scenario = Scenario(name='mixed', agents=[
        AgentRecord(id='e', orbit=OrbitalElements.from_true_anomaly(7e6, 0.0, 0.0, 0.0, 0.0, 0.0)),
        AgentRecord(id='c', orbit=cartesian, dv_remaining=50.0),
    ])

    agents = scenario_to_agents(scenario)

    assert np.allclose(agents[0].state.position, [7e6, 0.0, 0.0])
    assert agents[0].dv_remaining == 1000.0
    assert agents[1].state is cartesian
    assert agents[1].dv_remaining == 50.0


def test_load_scenario_seeds_clock():
    sim = SwarmSimulator(SimulationConfig(verbose=False))
    scenario = Scenario(
        name='seeded',
        seed='abc',
        initial_time=100.0,
        time_step=5.0,
        agents=[AgentRecord(id='a', orbit=OrbitalElements.from_true_anomaly(7e6, 0.0, 0.0, 0.0, 0.0, 0.0))],
    )

    load_scenario(sim, scenario)

    assert sim.clock.seed == 'abc'
    assert sim.clock.time == 100.0
    assert sim.step().dt == 5.0
    assert sim.clock.rng.random() == SeededRandom('abc').random()


def test_scenario_from_dict():
    scenario = scenario_from_dict({
        'name': 'from-json',
        'seed': 's1',
        'agents': [
            {'id': 'a', 'orbit': {'a': 7e6, 'e': 0.01, 'i': 0.2, 'nu': 1.0},
             'behaviors': {'cohesion': True, 'formation': 'ring'}, 'team': 'enemy'},
            {'id': 'b', 'orbit': {'position': [7e6, 0, 0], 'velocity': [0, 7500, 0]},
             'dvRemaining': 20},
        ],
        'objectives': [
            {'type': 'relay_node', 'id': 'r1', 'position': [7e6, 0, 0],
             'holdDuration': 30, 'threshold': 1000},
        ],
        'sim': {'timeStep': 2.0},
    })

    assert scenario.seed == 's1'
    assert scenario.time_step == 2.0
    assert scenario.agents[0].behaviors == BehaviorFlags(cohesion=True, formation=FormationType.RING)
    assert scenario.agents[0].team == Team.ENEMY
    assert isinstance(scenario.agents[1].orbit, CartesianState)
    assert scenario.agents[1].dv_remaining == 20
    assert isinstance(scenario.objectives[0], RelayNode)


def test_scenario_from_dict_requires_anomaly():
    from swarmsim.core.errors import MissingAnomalyError

    with pytest.raises(MissingAnomalyError):
        scenario_from_dict({'agents': [{'id': 'a', 'orbit': {'a': 7e6, 'e': 0.0, 'i': 0.0}}]})


def test_ring_formation_scenario_runs():
    scenario = RingFormationScenario(
        RingFormationScenarioConfig(duration_minutes=1.0, num_agents=4),
        SimulationConfig(verbose=False),
    )

    results = scenario.run()

    assert len(scenario.spread_history) == 60
    assert 'success' in results
    assert results['min_pair_distance_m'] > 0
    assert "Ring Formation Scenario Summary" in scenario.get_summary()


def test_ring_target_spread_follows_ring_radius():
    from swarmsim.swarm.formations import RING_RADIUS_PER_AGENT

    config = RingFormationScenarioConfig(num_agents=4)

    assert config.target_spread > RING_RADIUS_PER_AGENT * 4
    assert RingFormationScenarioConfig(num_agents=4, target_spread_m=5000.0).target_spread == 5000.0


def test_ring_formation_stays_within_default_target():
    scenario = RingFormationScenario(
        RingFormationScenarioConfig(duration_minutes=1.0, num_agents=4),
        SimulationConfig(verbose=False),
    )

    results = scenario.run()

    assert results['final_spread_m'] < scenario.config.target_spread


def test_task_demo_scenario_runs():
    scenario = TaskDemoScenario(
        TaskDemoScenarioConfig(duration_minutes=1.0),
        SimulationConfig(verbose=False),
    )

    results = scenario.run()

    assert results['objectives_total'] == 3
    assert results['score'] == sum(
        o.points for o in scenario.simulator.objectives if o.completed
    )
    assert "Task Demo Scenario Summary" in scenario.get_summary()


def test_summary_before_run():
    assert RingFormationScenario().get_summary() == "Scenario not yet run."
    assert TaskDemoScenario().get_summary() == "Scenario not yet run."


def test_ring_formation_plot(tmp_path):
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    scenario = RingFormationScenario(
        RingFormationScenarioConfig(duration_minutes=0.5, num_agents=3),
        SimulationConfig(verbose=False),
    )
    scenario.run()

    fig = scenario.plot_results()
    fig.savefig(tmp_path / "spread.png")
    plt.close(fig)

    assert (tmp_path / "spread.png").exists()
