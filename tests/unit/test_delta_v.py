import numpy as np
import pytest

from swarmsim.core.errors import DeltaVBudgetError
from swarmsim.dynamics.elements import CartesianState
from swarmsim.maneuvers.delta_v import apply_delta_v, preview_trajectory, rtn_to_eci


def _state():
    return CartesianState(position=[7e6, 0.0, 0.0], velocity=[0.0, 7500.0, 0.0])


def test_burn_changes_velocity_and_budget():
    state = _state()

    burn = apply_delta_v(state, [0.0, 30.0, 40.0], 100.0)

    assert np.allclose(burn.state.velocity, [0.0, 7530.0, 40.0])
    assert np.array_equal(burn.state.position, state.position)
    assert np.isclose(burn.dv_remaining, 50.0)


def test_burn_over_budget_fails_without_side_effects():
    state = _state()
    before = state.to_array()

    with pytest.raises(DeltaVBudgetError) as excinfo:
        apply_delta_v(state, [150.0, 0.0, 0.0], 100.0)

    assert excinfo.value.requested == pytest.approx(150.0)
    assert excinfo.value.available == 100.0
    assert np.array_equal(state.to_array(), before)


def test_negative_budget_is_rejected():
    with pytest.raises(DeltaVBudgetError):
        apply_delta_v(_state(), [0.0, 0.0, 0.0], -1.0)


def test_exact_budget_burn_leaves_zero():
    burn = apply_delta_v(_state(), [0.0, 100.0, 0.0], 100.0)
    assert burn.dv_remaining == 0.0


def test_rtn_axes_map_to_eci():
    state = _state()

    assert np.allclose(rtn_to_eci([1.0, 0.0, 0.0], state), [1.0, 0.0, 0.0])
    assert np.allclose(rtn_to_eci([0.0, 1.0, 0.0], state), [0.0, 1.0, 0.0])
    assert np.allclose(rtn_to_eci([0.0, 0.0, 1.0], state), [0.0, 0.0, 1.0])


def test_preview_starts_at_burn_point():
    state = _state()

    points = preview_trajectory(state, [0.0, 10.0, 0.0], 100.0, num_points=20, max_seconds=600.0)

    assert points.shape == (21, 3)
    assert np.allclose(points[0], state.position, atol=1e-3)
    assert not np.allclose(points[-1], state.position)


def test_preview_respects_budget():
    with pytest.raises(DeltaVBudgetError):
        preview_trajectory(_state(), [0.0, 200.0, 0.0], 100.0)
