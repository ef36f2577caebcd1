import numpy as np
import pytest

from swarmsim.core.agent import Agent, BehaviorFlags, FormationType
from swarmsim.core.config import BehaviorParams
from swarmsim.dynamics.elements import CartesianState
from swarmsim.swarm.system import (
    VelocityAdjustment,
    compute_swarm_forces,
    enforce_minimum_separation,
)


def _agent(agent_id, y, behaviors=None, vy=7500.0):
    return Agent(
        id=agent_id,
        state=CartesianState(position=[7e6, y, 0.0], velocity=[0.0, vy, 0.0]),
        behaviors=behaviors or BehaviorFlags(),
    )


def test_no_agents_gives_no_adjustments():
    assert compute_swarm_forces([]) == []


def test_inactive_agents_get_zero():
    adjustments = compute_swarm_forces([_agent('a', 0.0), _agent('b', 2000.0)])

    assert len(adjustments) == 2
    assert all(np.allclose(a.delta, 0.0) for a in adjustments)


def test_separation_pushes_pair_apart_symmetrically():
    flags = BehaviorFlags(separation=True)
    adjustments = compute_swarm_forces([_agent('a', 0.0, flags), _agent('b', 2000.0, flags)])

    assert adjustments[0].delta[1] < 0
    assert adjustments[1].delta[1] > 0
    assert np.allclose(adjustments[0].delta + adjustments[1].delta, 0.0)


def test_cohesion_pulls_pair_together():
    flags = BehaviorFlags(cohesion=True)
    adjustments = compute_swarm_forces([_agent('a', 0.0, flags), _agent('b', 2000.0, flags)])

    assert adjustments[0].delta[1] > 0
    assert adjustments[1].delta[1] < 0
    assert np.isclose(np.linalg.norm(adjustments[0].delta), BehaviorParams().cohesion_weight)


def test_inactive_agents_are_left_out_of_the_group():
    flags = BehaviorFlags(cohesion=True)
    agents = [_agent('a', 0.0, flags), _agent('idle', 1000.0), _agent('b', 2000.0, flags)]

    adjustments = compute_swarm_forces(agents)

    assert np.allclose(adjustments[1].delta, 0.0)
    assert adjustments[0].delta[1] > 0
    assert adjustments[2].delta[1] < 0


def test_formation_steers_toward_target():
    flags = BehaviorFlags(formation=FormationType.RING)
    agents = [_agent('a', 0.0, flags), _agent('b', 2000.0, flags)]

    adjustments = compute_swarm_forces(agents)

    for adjustment in adjustments:
        assert np.isclose(np.linalg.norm(adjustment.delta), BehaviorParams().formation_weight)


def test_adjustment_addition():
    total = VelocityAdjustment(np.array([1.0, 0.0, 0.0])) + VelocityAdjustment(np.array([0.0, 2.0, 0.0]))
    assert np.allclose(total.delta, [1.0, 2.0, 0.0])
    assert np.allclose(VelocityAdjustment.zero().delta, 0.0)


def test_minimum_separation_repels_close_pair():
    agents = [_agent('a', 0.0), _agent('b', 500.0)]
    adjustments = [VelocityAdjustment.zero(), VelocityAdjustment.zero()]

    result = enforce_minimum_separation(agents, adjustments, BehaviorParams(), safety_factor=10.0)

    # 1.0 * 10 * (1000 - 500) / 1000
    assert np.allclose(result[0].delta, [0.0, -5.0, 0.0])
    assert np.allclose(result[1].delta, [0.0, 5.0, 0.0])
    # Inputs untouched
    assert np.allclose(adjustments[0].delta, 0.0)


def test_minimum_separation_ignores_distant_and_coincident_pairs():
    distant = [_agent('a', 0.0), _agent('b', 5000.0)]
    coincident = [_agent('a', 0.0), _agent('b', 0.0)]
    zeros = [VelocityAdjustment.zero(), VelocityAdjustment.zero()]

    for agents in (distant, coincident):
        result = enforce_minimum_separation(agents, zeros)
        assert all(np.allclose(r.delta, 0.0) for r in result)


def test_minimum_separation_keeps_existing_adjustments():
    agents = [_agent('a', 0.0), _agent('b', 500.0)]
    adjustments = [VelocityAdjustment(np.array([1.0, 0.0, 0.0])), VelocityAdjustment.zero()]

    result = enforce_minimum_separation(agents, adjustments)

    assert np.allclose(result[0].delta, [1.0, -5.0, 0.0])


def test_minimum_separation_requires_aligned_inputs():
    with pytest.raises(ValueError):
        enforce_minimum_separation([_agent('a', 0.0)], [])
