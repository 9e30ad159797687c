"""Tests for the equations of motion."""

import numpy as np
import pytest

from ballistics6dof import constants as C
from ballistics6dof import dynamics
from ballistics6dof.environment import Gravity
from ballistics6dof.flow import FlowNumbers, compute_flow_numbers
from ballistics6dof.frames import quaternion_from_axis_angle
from ballistics6dof.state import State


def test_at_rest_only_gravity(projectile, aero, gravity, atmosphere, env):
    s = State(r=[0.0, 0.0, 10.0])
    d = dynamics.compute_state_derivative(s, projectile, aero, gravity, atmosphere, env)
    np.testing.assert_array_equal(d.r, np.zeros(3))
    np.testing.assert_allclose(d.v, [0.0, 0.0, -C.G0], atol=1e-9)
    np.testing.assert_array_equal(d.q, np.zeros(4))
    np.testing.assert_allclose(d.omega, np.zeros(3), atol=1e-12)


def test_aligned_flight_drag_and_spin_damping(projectile, aero, gravity, atmosphere, env):
    s = State(v=[800.0, 0.0, 0.0], omega=[4000.0, 0.0, 0.0])
    d = dynamics.compute_state_derivative(s, projectile, aero, gravity, atmosphere, env)

    flow = compute_flow_numbers(s, atmosphere, env)
    qs = flow.qbar * projectile.area
    drag = qs * aero.drag_coefficient(flow.mach, 0.0, 0.0)
    np.testing.assert_allclose(d.r, [800.0, 0.0, 0.0])
    assert d.v[0] == pytest.approx(-drag / projectile.mass)
    assert d.v[1] == pytest.approx(0.0, abs=1e-12)
    assert d.v[2] == pytest.approx(-C.G0)

    rate_nd = 0.5 * projectile.diameter / 800.0
    p_dot = qs * projectile.diameter * C.CL_P_DEFAULT * 4000.0 * rate_nd / projectile.ixx
    assert d.omega[0] == pytest.approx(p_dot)
    assert d.omega[0] < 0.0
    assert d.omega[1] == pytest.approx(0.0, abs=1e-9)
    assert d.omega[2] == pytest.approx(0.0, abs=1e-9)
    np.testing.assert_allclose(d.q, [0.0, 2000.0, 0.0, 0.0])


def test_body_forces_directions():
    flow = FlowNumbers(mach=2.0, qbar=1000.0, rho=1.2, alpha=0.1, beta=-0.05)
    coeffs = {'c_d': 0.3, 'c_l_alpha': 2.0, 'c_y_beta': 1.5, 'c_m_alpha': -1.0,
              'c_m_q': -10.0, 'c_l_p': -0.01, 'c_magnus': 0.0}
    loads = dynamics.compute_aero_force_body(flow, coeffs, np.array([680.0, 0.0, 0.0]),
                                             np.zeros(3), area=2.0)
    np.testing.assert_allclose(loads['drag'], [-600.0, 0.0, 0.0])
    np.testing.assert_allclose(loads['lift'], [0.0, 0.0, -400.0])
    np.testing.assert_allclose(loads['side'], [0.0, -150.0, 0.0])
    np.testing.assert_allclose(loads['force_total'], [-600.0, -150.0, -400.0])


def test_magnus_has_no_axial_component():
    flow = FlowNumbers(mach=2.0, qbar=0.0, rho=1.2, alpha=0.0, beta=0.0)
    coeffs = {'c_d': 0.0, 'c_l_alpha': 0.0, 'c_y_beta': 0.0, 'c_m_alpha': 0.0,
              'c_m_q': 0.0, 'c_l_p': 0.0, 'c_magnus': 0.1}
    omega = np.array([100.0, 2.0, -3.0])
    v_body = np.array([500.0, 1.0, 2.0])
    loads = dynamics.compute_aero_force_body(flow, coeffs, v_body, omega, area=1.0)
    wxv = np.cross(omega, v_body)
    assert loads['magnus'][0] == 0.0
    assert loads['magnus'][1] == pytest.approx(0.1 * wxv[1])
    assert loads['magnus'][2] == pytest.approx(-0.1 * wxv[2])


def test_damping_uses_current_speed():
    flow = FlowNumbers(mach=1.0, qbar=500.0, rho=1.2, alpha=0.0, beta=0.0)
    coeffs = {'c_d': 0.0, 'c_l_alpha': 0.0, 'c_y_beta': 0.0, 'c_m_alpha': 0.0,
              'c_m_q': -20.0, 'c_l_p': -0.02, 'c_magnus': 0.0}
    omega = np.array([100.0, 5.0, -5.0])
    fast = dynamics.compute_aero_moment_body(flow, coeffs, omega, 800.0, 1e-4, 0.01)
    slow = dynamics.compute_aero_moment_body(flow, coeffs, omega, 400.0, 1e-4, 0.01)
    np.testing.assert_allclose(slow, 2.0 * fast)
    assert fast[1] < 0.0 < fast[2]


def test_overturning_moment_terms():
    flow = FlowNumbers(mach=1.0, qbar=100.0, rho=1.2, alpha=0.02, beta=0.01)
    coeffs = {'c_d': 0.0, 'c_l_alpha': 0.0, 'c_y_beta': 0.0, 'c_m_alpha': -0.9,
              'c_m_q': 0.0, 'c_l_p': 0.0, 'c_magnus': 0.0}
    m = dynamics.compute_aero_moment_body(flow, coeffs, np.zeros(3), 300.0, 0.5, 0.2)
    qsd = 100.0 * 0.5 * 0.2
    np.testing.assert_allclose(m, [0.0, qsd * -0.9 * 0.02, qsd * -0.9 * 0.01])


def test_euler_gyroscopic_term():
    omega = np.array([1.0, 2.0, 3.0])
    inertia = np.array([1.0, 2.0, 3.0])
    result = dynamics.compute_angular_acceleration(omega, np.zeros(3), inertia)
    expected = -np.cross(omega, inertia * omega) / inertia
    np.testing.assert_allclose(result, expected)


def test_symmetric_body_spin_is_free():
    """Pure spin about a symmetry axis has no gyroscopic torque."""
    result = dynamics.compute_angular_acceleration(
        np.array([4000.0, 0.0, 0.0]), np.zeros(3), np.array([1e-7, 1e-6, 1e-6]))
    np.testing.assert_array_equal(result, np.zeros(3))


def test_zero_inertia_is_floored():
    result = dynamics.compute_angular_acceleration(
        np.zeros(3), np.array([1e-9, 0.0, 0.0]), np.zeros(3))
    assert np.all(np.isfinite(result))
    assert result[0] == pytest.approx(1.0)


def test_linear_acceleration_rotates_body_force():
    q = quaternion_from_axis_angle(np.array([0.0, 0.0, 1.0]), np.pi / 2)
    a = dynamics.compute_linear_acceleration(np.array([-2.0, 0.0, 0.0]), q, 2.0, Gravity(g=-4.0))
    np.testing.assert_allclose(a, [0.0, -1.0, -4.0], atol=1e-12)


def test_custom_gravity(projectile, aero, atmosphere, env):
    s = State(r=[0.0, 0.0, 5.0])
    d = dynamics.compute_state_derivative(s, projectile, aero, Gravity(g=-1.62),
                                          atmosphere, env)
    assert d.v[2] == pytest.approx(-1.62)


def test_loads_breakdown_totals(projectile, aero, atmosphere, env):
    s = State(v=[600.0, 2.0, -3.0], omega=[2000.0, 1.0, 0.5])
    loads = dynamics.compute_loads(s, projectile, aero, atmosphere, env)
    total = loads['drag'] + loads['lift'] + loads['side'] + loads['magnus']
    np.testing.assert_allclose(loads['force_total'], total)
    assert loads['moment_total'].shape == (3,)
    assert loads['moment_total'][0] < 0.0
