"""
Ballistics 6DoF - Numerical Integration

This module implements a generic fixed-step RK4 integrator over the
flat 13-vector [r, v, q, omega], with quaternion normalization at each
stage and after each step. The quaternion is blended as an ordinary
4-vector and then renormalized.
"""

from typing import Callable

import numpy as np

from .frames import quaternion_normalize
from .state import State

DerivativeFn = Callable[[State], State]

_Q = slice(6, 10)


def _evaluate(derivative_fn: DerivativeFn, y: np.ndarray) -> np.ndarray:
    return derivative_fn(State.from_vector(y)).to_vector()


def rk4_step(derivative_fn: DerivativeFn, state: State, dt: float) -> State:
    """
    Perform a single RK4 integration step.

    The RK4 method computes:
    k1 = f(y)
    k2 = f(y + dt/2 * k1)
    k3 = f(y + dt/2 * k2)
    k4 = f(y + dt * k3)
    y_new = y + dt/6 * (k1 + 2*k2 + 2*k3 + k4)

    Args:
        derivative_fn: f(state) -> derivative State
        state: Current state
        dt: Time step (s)

    Returns:
        New state after integration

    Raises:
        ValueError: If dt <= 0
    """
    if dt <= 0:
        raise ValueError(f"Time step dt must be positive, got {dt}")

    y = state.to_vector()

    k1 = _evaluate(derivative_fn, y)

    y2 = y + 0.5 * dt * k1
    y2[_Q] = quaternion_normalize(y2[_Q])
    k2 = _evaluate(derivative_fn, y2)

    y3 = y + 0.5 * dt * k2
    y3[_Q] = quaternion_normalize(y3[_Q])
    k3 = _evaluate(derivative_fn, y3)

    y4 = y + dt * k3
    y4[_Q] = quaternion_normalize(y4[_Q])
    k4 = _evaluate(derivative_fn, y4)

    y_new = y + (dt / 6.0) * (k1 + 2*k2 + 2*k3 + k4)
    y_new[_Q] = quaternion_normalize(y_new[_Q])

    return State.from_vector(y_new)


def euler_step(derivative_fn: DerivativeFn, state: State, dt: float) -> State:
    """
    Perform a single Euler integration step.

    This is a first-order method, primarily for testing/comparison.
    """
    if dt <= 0:
        raise ValueError(f"Time step dt must be positive, got {dt}")

    y = state.to_vector()
    y_new = y + dt * _evaluate(derivative_fn, y)
    y_new[_Q] = quaternion_normalize(y_new[_Q])

    return State.from_vector(y_new)


def integrate(derivative_fn: DerivativeFn, state: State, dt: float,
              method: str = 'rk4') -> State:
    """
    Integrate the state forward by one timestep.

    Args:
        derivative_fn: f(state) -> derivative State
        state: Current state
        dt: Time step (s)
        method: Integration method ('rk4' or 'euler')

    Returns:
        New state after integration
    """
    if method == 'rk4':
        return rk4_step(derivative_fn, state, dt)
    elif method == 'euler':
        return euler_step(derivative_fn, state, dt)
    else:
        raise ValueError(f"Unknown integration method: {method}")
