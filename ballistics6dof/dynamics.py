"""
Ballistics 6DoF - Dynamics Equations

This module implements the right-hand side of the coupled equations of motion:
- Translational dynamics: r̈ = (R(q) F_aero,body + m g ẑ) / m
- Rotational dynamics: ω̇ = I⁻¹ (M − ω × (Iω)), diagonal I
- Quaternion kinematics: q̇ = 0.5 * q ⊗ (0, ω)

Degeneracies are handled by flooring (body speed, principal inertias), never
by raising.
"""

from typing import Callable

import numpy as np

from . import constants as C
from .aero import AeroModel
from .atmosphere import Atmosphere
from .environment import Environment, Gravity
from .flow import FlowNumbers, body_velocity, compute_flow_numbers
from .frames import quaternion_derivative, rotate_vector_by_quaternion
from .projectile import Projectile
from .state import State
from .types import AeroCoefficients, LoadBreakdown


def compute_aero_force_body(flow: FlowNumbers, coeffs: AeroCoefficients,
                            v_body: np.ndarray, omega: np.ndarray,
                            area: float) -> LoadBreakdown:
    """
    Aerodynamic forces in the body frame.

    Drag along -x, lift along -z (small-angle C_Lα α), side force along +y
    (C_Yβ β), and a Magnus term from C_mag (ω × v_body) on the y/z axes only.

    Returns:
        LoadBreakdown with the moment_total entry left at zero
    """
    qs = flow.qbar * area

    drag = np.array([-qs * coeffs['c_d'], 0.0, 0.0])
    lift = np.array([0.0, 0.0, -qs * coeffs['c_l_alpha'] * flow.alpha])
    side = np.array([0.0, qs * coeffs['c_y_beta'] * flow.beta, 0.0])

    # Magnus is perpendicular to velocity: no bore-axis component
    wxv = np.cross(omega, v_body)
    c_mag = coeffs['c_magnus']
    magnus = np.array([0.0, c_mag * wxv[1], -c_mag * wxv[2]])

    return {
        'drag': drag,
        'lift': lift,
        'side': side,
        'magnus': magnus,
        'force_total': drag + lift + side + magnus,
        'moment_total': np.zeros(3),
    }


def compute_aero_moment_body(flow: FlowNumbers, coeffs: AeroCoefficients,
                             omega: np.ndarray, body_speed: float,
                             area: float, diameter: float) -> np.ndarray:
    """
    Aerodynamic moment about the centre of mass (body frame).

    Overturning: qbar S D C_mα α (pitch), qbar S D C_mα β (yaw).
    Damping: qbar S D C_mq (ω D / 2V) on pitch/yaw, qbar S D C_lp (p D / 2V) on roll.

    body_speed is the speed at *this* evaluation; RK4 stages must not reuse
    the value from the start of the step.
    """
    qsd = flow.qbar * area * diameter
    rate_nd = 0.5 * diameter / max(body_speed, C.MIN_SPEED)

    m_pitch = qsd * coeffs['c_m_alpha'] * flow.alpha
    m_yaw = qsd * coeffs['c_m_alpha'] * flow.beta
    m_damp_pitch = qsd * coeffs['c_m_q'] * omega[1] * rate_nd
    m_damp_yaw = qsd * coeffs['c_m_q'] * omega[2] * rate_nd
    m_roll_damp = qsd * coeffs['c_l_p'] * omega[0] * rate_nd

    return np.array([m_roll_damp, m_pitch + m_damp_pitch, m_yaw + m_damp_yaw])


def compute_angular_acceleration(omega: np.ndarray, moment: np.ndarray,
                                 inertia: np.ndarray) -> np.ndarray:
    """
    Euler's rigid-body equation for a diagonal inertia tensor.

    ω̇ = I⁻¹ (M − ω × (Iω)), evaluated per axis.

    Args:
        omega: Angular velocity in body frame (rad/s)
        moment: Total moment in body frame (N·m)
        inertia: Principal inertias [Ixx, Iyy, Izz] (kg·m²)

    Returns:
        Angular acceleration in body frame (rad/s²)
    """
    I = np.maximum(np.asarray(inertia, dtype=np.float64), C.MIN_INERTIA)
    gyroscopic = np.cross(omega, I * omega)
    return (moment - gyroscopic) / I


def compute_linear_acceleration(force_body: np.ndarray, q: np.ndarray,
                                mass: float, gravity: Gravity) -> np.ndarray:
    """Rotate the body force to inertial, add the weight m g on z, divide by mass."""
    force = rotate_vector_by_quaternion(force_body, q)
    force[2] += mass * gravity.g
    return force / mass


def compute_state_derivative(state: State, projectile: Projectile, aero: AeroModel,
                             gravity: Gravity, atmosphere: Atmosphere,
                             env: Environment) -> State:
    """
    Compute the full state derivative.

    Returns:
        State carrying (velocity, acceleration, quaternion rate, angular
        acceleration) in the (r, v, q, omega) slots
    """
    flow = compute_flow_numbers(state, atmosphere, env)
    v_body = body_velocity(state, env)
    body_speed = max(float(np.linalg.norm(v_body)), C.MIN_SPEED)

    coeffs = aero.coefficients(flow.mach, flow.alpha, flow.beta)

    loads = compute_aero_force_body(flow, coeffs, v_body, state.omega, projectile.area)
    a_inertial = compute_linear_acceleration(
        loads['force_total'], state.q, projectile.mass, gravity
    )

    moment = compute_aero_moment_body(
        flow, coeffs, state.omega, body_speed, projectile.area, projectile.diameter
    )
    omega_dot = compute_angular_acceleration(
        state.omega, moment, projectile.inertia_diagonal
    )

    q_dot = quaternion_derivative(state.q, state.omega)

    return State(r=state.v.copy(), v=a_inertial, q=q_dot, omega=omega_dot)


def compute_loads(state: State, projectile: Projectile, aero: AeroModel,
                  atmosphere: Atmosphere, env: Environment) -> LoadBreakdown:
    """Aerodynamic force and moment breakdown at one state, for logging/analysis."""
    flow = compute_flow_numbers(state, atmosphere, env)
    v_body = body_velocity(state, env)
    body_speed = max(float(np.linalg.norm(v_body)), C.MIN_SPEED)
    coeffs = aero.coefficients(flow.mach, flow.alpha, flow.beta)

    loads = compute_aero_force_body(flow, coeffs, v_body, state.omega, projectile.area)
    loads['moment_total'] = compute_aero_moment_body(
        flow, coeffs, state.omega, body_speed, projectile.area, projectile.diameter
    )
    return loads


def make_derivative_function(projectile: Projectile, aero: AeroModel, gravity: Gravity,
                             atmosphere: Atmosphere,
                             env: Environment) -> Callable[[State], State]:
    """Bind the immutable inputs, leaving f(state) -> derivative for the stepper."""
    def derivative(state: State) -> State:
        return compute_state_derivative(state, projectile, aero, gravity, atmosphere, env)
    return derivative
