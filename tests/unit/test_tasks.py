import numpy as np
import pytest

from swarmsim.core.agent import Agent
from swarmsim.core.config import ObjectiveSteeringParams
from swarmsim.dynamics.elements import CartesianState
from swarmsim.tasks.allocation import allocate_tasks, find_agents_in_radius, find_nearest_agent
from swarmsim.tasks.completion import update_objective_state
from swarmsim.tasks.objectives import (
    HoldFormationZone,
    InspectPoint,
    ObjectiveType,
    RelayNode,
    objective_from_record,
)
from swarmsim.tasks.steering import compute_objective_steering, select_objective

ORIGIN = np.array([7e6, 0.0, 0.0])


def _agent(agent_id, offset, speed=7500.0):
    return Agent(
        id=agent_id,
        state=CartesianState(position=ORIGIN + np.asarray(offset, dtype=float),
                             velocity=[0.0, speed, 0.0]),
    )


# --- Allocation ---

def test_nearest_agent_respects_exclusions():
    agents = [_agent('a', [100.0, 0, 0]), _agent('b', [500.0, 0, 0])]

    assert find_nearest_agent(agents, ORIGIN).id == 'a'
    assert find_nearest_agent(agents, ORIGIN, exclude={'a'}).id == 'b'
    assert find_nearest_agent(agents, ORIGIN, exclude={'a', 'b'}) is None
    assert find_nearest_agent([], ORIGIN) is None


def test_agents_in_radius_is_inclusive():
    agents = [_agent('a', [1000.0, 0, 0]), _agent('b', [1001.0, 0, 0])]

    assert [a.id for a in find_agents_in_radius(agents, ORIGIN, 1000.0)] == ['a']


def test_inspect_point_claims_without_storing():
    agents = [_agent('a', [100.0, 0, 0]), _agent('b', [500.0, 0, 0])]
    inspect = InspectPoint(id='i1', position=ORIGIN, threshold=50.0)

    result = allocate_tasks(agents, [inspect])

    assert result.claims == {'a': 'i1'}
    assert result.objectives[0] is inspect


def test_claimed_agents_are_not_reused():
    agents = [_agent('a', [100.0, 0, 0]), _agent('b', [500.0, 0, 0])]
    objectives = [
        InspectPoint(id='i1', position=ORIGIN, threshold=50.0),
        RelayNode(id='r1', position=ORIGIN, hold_duration=30.0, threshold=100.0),
    ]

    result = allocate_tasks(agents, objectives)

    assert result.objectives[1].assigned_agent_id == 'b'


def test_relay_keeps_live_assignment_and_replaces_lost_one():
    agents = [_agent('a', [100.0, 0, 0]), _agent('b', [500.0, 0, 0])]

    kept = RelayNode(id='r1', position=ORIGIN, hold_duration=30.0, threshold=100.0,
                     assigned_agent_id='b')
    lost = RelayNode(id='r2', position=ORIGIN, hold_duration=30.0, threshold=100.0,
                     assigned_agent_id='gone')

    result = allocate_tasks(agents, [kept, lost])

    assert result.objectives[0].assigned_agent_id == 'b'
    assert result.objectives[1].assigned_agent_id == 'a'
    # Inputs are values; allocation never edits them
    assert lost.assigned_agent_id == 'gone'


def test_zone_fills_to_required_agents():
    agents = [_agent('in', [100.0, 0, 0]), _agent('near', [3000.0, 0, 0]),
              _agent('far', [9000.0, 0, 0])]
    zone = HoldFormationZone(id='z1', position=ORIGIN, radius=1000.0, required_agents=2,
                             assigned_agent_ids=('gone',))

    result = allocate_tasks(agents, [zone])

    assert result.objectives[0].assigned_agent_ids == ('in', 'near')


def test_completed_objectives_are_skipped():
    agents = [_agent('a', [100.0, 0, 0])]
    relay = RelayNode(id='r1', position=ORIGIN, hold_duration=30.0, threshold=100.0,
                      completed=True)

    result = allocate_tasks(agents, [relay])

    assert result.objectives[0].assigned_agent_id is None
    assert result.claims == {}


# --- Completion ---

def test_inspect_point_needs_proximity_and_low_speed():
    inspect = InspectPoint(id='i1', position=ORIGIN, threshold=100.0, v_threshold=8000.0)

    result = update_objective_state([inspect], [_agent('a', [50.0, 0, 0])], 0.0)
    assert result.newly_completed == ['i1']
    assert result.objectives[0].completed

    fast = InspectPoint(id='i2', position=ORIGIN, threshold=100.0)
    result = update_objective_state([fast], [_agent('a', [50.0, 0, 0])], 0.0)
    assert result.newly_completed == []
    assert fast.speed_limit == 10.0


def _relay_step(relay, inside, t):
    offset = [0.0, 0, 0] if inside else [5000.0, 0, 0]
    return update_objective_state([relay], [_agent('a', offset)], t).objectives[0]


def test_relay_completes_after_continuous_hold():
    relay = RelayNode(id='r1', position=ORIGIN, hold_duration=30.0, threshold=1000.0,
                      assigned_agent_id='a')

    relay = _relay_step(relay, False, 5.0)
    assert relay.hold_start is None

    relay = _relay_step(relay, True, 10.0)
    assert relay.hold_start == 10.0
    relay = _relay_step(relay, True, 39.0)
    assert not relay.completed
    relay = _relay_step(relay, True, 40.0)
    assert relay.completed


def test_relay_timer_resets_on_exit():
    relay = RelayNode(id='r1', position=ORIGIN, hold_duration=30.0, threshold=1000.0,
                      assigned_agent_id='a')

    relay = _relay_step(relay, True, 10.0)
    relay = _relay_step(relay, False, 25.0)
    assert relay.hold_start is None

    relay = _relay_step(relay, True, 30.0)
    relay = _relay_step(relay, True, 40.0)
    assert not relay.completed
    relay = _relay_step(relay, True, 59.0)
    assert not relay.completed
    relay = _relay_step(relay, True, 60.0)
    assert relay.completed


def test_relay_with_zero_hold_completes_on_entry():
    relay = RelayNode(id='r1', position=ORIGIN, hold_duration=0.0, threshold=1000.0,
                      assigned_agent_id='a')

    assert _relay_step(relay, True, 3.0).completed


def test_relay_lost_agent_resets():
    relay = RelayNode(id='r1', position=ORIGIN, hold_duration=30.0, threshold=1000.0,
                      assigned_agent_id='gone', hold_start=1.0)

    updated = update_objective_state([relay], [_agent('a', [0.0, 0, 0])], 5.0).objectives[0]

    assert updated.assigned_agent_id is None
    assert updated.hold_start is None


def test_zone_counts_agents_each_pass():
    zone = HoldFormationZone(id='z1', position=ORIGIN, radius=1000.0, required_agents=2)

    one = update_objective_state([zone], [_agent('a', [0.0, 0, 0]), _agent('b', [5000.0, 0, 0])], 0.0)
    assert one.newly_completed == []

    two = update_objective_state([zone], [_agent('a', [0.0, 0, 0]), _agent('b', [900.0, 0, 0])], 1.0)
    assert two.newly_completed == ['z1']


def test_completion_is_reported_once():
    zone = HoldFormationZone(id='z1', position=ORIGIN, radius=1000.0, required_agents=1)
    agents = [_agent('a', [0.0, 0, 0])]

    first = update_objective_state([zone], agents, 0.0)
    second = update_objective_state(first.objectives, agents, 1.0)

    assert first.newly_completed == ['z1']
    assert second.newly_completed == []
    assert second.objectives[0].completed


# --- Steering ---

def test_steering_prefers_assigned_objective():
    agent = _agent('a', [0.0, 0, 0])
    inspect = InspectPoint(id='i1', position=ORIGIN + [100.0, 0, 0], threshold=10.0)
    relay = RelayNode(id='r1', position=ORIGIN + [0.0, 0, 5000.0], hold_duration=1.0,
                      threshold=10.0, assigned_agent_id='a')

    assert select_objective(agent, [inspect, relay]) is relay

    steer = compute_objective_steering(agent, [inspect, relay], ObjectiveSteeringParams(2.0))
    assert np.allclose(steer.delta, [0.0, 0.0, 2.0])


def test_steering_picks_nearest_inspect_point():
    agent = _agent('a', [0.0, 0, 0])
    far = InspectPoint(id='far', position=ORIGIN + [9000.0, 0, 0], threshold=10.0)
    near = InspectPoint(id='near', position=ORIGIN - [200.0, 0, 0], threshold=10.0)

    assert select_objective(agent, [far, near]) is near
    assert np.allclose(compute_objective_steering(agent, [far, near]).delta, [-0.5, 0.0, 0.0])


def test_no_steering_without_target_or_on_arrival():
    agent = _agent('a', [0.0, 0, 0])
    done = InspectPoint(id='i1', position=ORIGIN + [100.0, 0, 0], threshold=10.0, completed=True)
    here = InspectPoint(id='i2', position=ORIGIN, threshold=10.0)

    assert np.allclose(compute_objective_steering(agent, [done]).delta, 0.0)
    assert np.allclose(compute_objective_steering(agent, [here]).delta, 0.0)


# --- Records ---

def test_objective_from_record_accepts_camel_case():
    relay = objective_from_record({
        'type': 'relay_node', 'id': 'r1', 'position': [7e6, 0, 0],
        'holdDuration': 30, 'threshold': 1000, 'assignedAgentId': 'a',
    })
    zone = objective_from_record({
        'type': 'hold_formation_zone', 'id': 'z1', 'position': [7e6, 0, 0],
        'radius': 500, 'requiredAgents': 3,
    })

    assert relay.type == ObjectiveType.RELAY_NODE
    assert relay.hold_duration == 30
    assert relay.assigned_agent_id == 'a'
    assert zone.required_agents == 3


def test_objective_validation():
    with pytest.raises(ValueError):
        HoldFormationZone(id='z', position=ORIGIN, radius=1.0, required_agents=0)
    with pytest.raises(ValueError):
        RelayNode(id='r', position=ORIGIN, hold_duration=-1.0, threshold=1.0)
