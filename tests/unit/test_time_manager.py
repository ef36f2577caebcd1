import numpy as np
import pytest

from swarmsim.core.rng import SeededRandom, seed_to_int
from swarmsim.core.time_manager import SimClock


def test_time_scale_invariance_across_frame_rates():
    fast = SimClock()
    slow = SimClock()

    for _ in range(60):
        fast.update(0.016)
    for _ in range(30):
        slow.update(0.032)

    assert abs(fast.time - slow.time) < 1e-5
    assert np.isclose(fast.time, 0.96)


def test_time_scale_multiplies_frame_delta():
    clock = SimClock(time_scale=10.0)

    assert np.isclose(clock.update(0.5), 5.0)
    assert np.isclose(clock.time, 5.0)


def test_paused_clock_does_not_advance():
    clock = SimClock()
    clock.pause()

    assert clock.update(1.0) == 0.0
    assert clock.time == 0.0

    clock.toggle()
    assert not clock.paused
    assert clock.update(1.0) == 1.0


def test_negative_frame_delta_is_rejected():
    clock = SimClock()

    with pytest.raises(ValueError):
        clock.update(-1.0)
    assert clock.time == 0.0

    clock.pause()
    with pytest.raises(ValueError):
        clock.update(-1.0)


def test_step_advances_even_when_paused():
    clock = SimClock(paused=True, step_delta=2.5)

    assert clock.step() == 2.5
    assert clock.time == 2.5


def test_time_scale_is_clamped():
    clock = SimClock()

    clock.set_time_scale(1000.0)
    assert clock.time_scale == SimClock.MAX_TIME_SCALE

    clock.set_time_scale(0.01)
    assert clock.time_scale == SimClock.MIN_TIME_SCALE
    assert not clock.paused


def test_non_positive_time_scale_pauses():
    clock = SimClock()

    clock.set_time_scale(0.0)

    assert clock.paused
    assert clock.time_scale == SimClock.MIN_TIME_SCALE
    assert clock.update(1.0) == 0.0


def test_reset_zeroes_time_and_restarts_rng():
    clock = SimClock(seed='alpha')
    first = [clock.rng.random() for _ in range(3)]
    clock.update(10.0)

    clock.reset()

    assert clock.time == 0.0
    assert [clock.rng.random() for _ in range(3)] == first


def test_set_seed_changes_sequence():
    clock = SimClock(seed='alpha')
    alpha = clock.rng.random()

    clock.set_seed('beta')

    assert clock.seed == 'beta'
    assert clock.rng.random() != alpha


def test_invalid_clock_arguments():
    with pytest.raises(ValueError):
        SimClock(sim_time=-1.0)
    with pytest.raises(ValueError):
        SimClock(step_delta=0.0)
    with pytest.raises(ValueError):
        SimClock().set_step_delta(-1.0)


def test_state_is_a_copy():
    clock = SimClock()
    state = clock.state
    state.sim_time = 99.0

    assert clock.time == 0.0


def test_format_time():
    clock = SimClock()
    clock.set_time(3725.0)
    assert clock.format_time() == "1h 2m 5s"

    clock.set_time(90061.0)
    assert clock.format_time() == "1d 1h 1m 1s"


def test_seeded_random_is_reproducible():
    a = SeededRandom('swarm')
    b = SeededRandom('swarm')

    assert [a.random() for _ in range(5)] == [b.random() for _ in range(5)]
    assert seed_to_int('swarm') == seed_to_int('swarm')
    assert seed_to_int('swarm') != seed_to_int('swarm2')


def test_seeded_random_ranges():
    rng = SeededRandom('ranges')

    for _ in range(200):
        assert 2.0 <= rng.uniform(2.0, 3.0) < 3.0
        assert 0 <= rng.integers(0, 5) < 5
