"""Tests for the flow-state evaluator."""

import numpy as np
import pytest

from ballistics6dof.environment import Environment
from ballistics6dof.flow import body_velocity, compute_flow_numbers
from ballistics6dof.frames import quaternion_from_axis_angle
from ballistics6dof.state import State


def test_aligned_flow(atmosphere, env):
    s = State(v=[800.0, 0.0, 0.0])
    flow = compute_flow_numbers(s, atmosphere, env)
    rho, a = atmosphere.density_and_speed_of_sound(env, 0.0)
    assert flow.alpha == 0.0
    assert flow.beta == 0.0
    assert flow.rho == rho
    assert flow.mach == pytest.approx(800.0 / a)
    assert flow.qbar == pytest.approx(0.5 * rho * 800.0 ** 2)


def test_angle_of_attack_sign(atmosphere, env):
    """A body +z velocity component (w > 0) gives negative alpha."""
    s = State(v=[100.0, 0.0, 5.0])
    flow = compute_flow_numbers(s, atmosphere, env)
    assert flow.alpha == pytest.approx(np.arctan2(-5.0, 100.0))
    assert flow.beta == pytest.approx(0.0)


def test_sideslip(atmosphere, env):
    s = State(v=[100.0, 10.0, 0.0])
    flow = compute_flow_numbers(s, atmosphere, env)
    assert flow.beta == pytest.approx(np.arctan2(10.0, 100.0))
    assert flow.alpha == pytest.approx(0.0)


def test_rotated_body(atmosphere, env):
    """Bore pitched up 0.1 rad above a level velocity."""
    q = quaternion_from_axis_angle(np.array([0.0, -1.0, 0.0]), 0.1)
    s = State(v=[300.0, 0.0, 0.0], q=q)
    u, v, w = body_velocity(s, env)
    assert np.hypot(u, w) == pytest.approx(300.0)
    flow = compute_flow_numbers(s, atmosphere, env)
    assert abs(flow.alpha) == pytest.approx(0.1)


def test_zero_speed_is_finite(atmosphere, env):
    flow = compute_flow_numbers(State(), atmosphere, env)
    assert all(np.isfinite(flow))
    assert flow.mach > 0.0


def test_wind_changes_airspeed(atmosphere):
    s = State(v=[800.0, 0.0, 0.0])
    headwind = Environment(wind=np.array([-10.0, 0.0, 0.0]))
    calm = Environment()
    assert (compute_flow_numbers(s, atmosphere, headwind).mach
            > compute_flow_numbers(s, atmosphere, calm).mach)
    crosswind = Environment(wind=np.array([0.0, 5.0, 0.0]))
    assert compute_flow_numbers(s, atmosphere, crosswind).beta < 0.0
