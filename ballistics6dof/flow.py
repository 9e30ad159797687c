"""
Ballistics 6DoF - Flow-State Evaluation

Derives Mach number, dynamic pressure, density, angle of attack and sideslip
from the rigid-body state. Body axes: x along the bore, y right, z down, so
aerodynamic "up" is -z_body and alpha = atan2(-w, u).
"""

from typing import NamedTuple

import numpy as np

from . import constants as C
from .atmosphere import Atmosphere
from .environment import Environment, compute_relative_velocity
from .frames import rotate_vector_inverse
from .state import State


class FlowNumbers(NamedTuple):
    """Flow quantities at one state."""
    mach: float
    qbar: float     # dynamic pressure (Pa)
    rho: float      # density (kg/m^3)
    alpha: float    # angle of attack (rad)
    beta: float     # sideslip (rad)


def body_velocity(state: State, env: Environment) -> np.ndarray:
    """Air-relative velocity expressed in body axes [u, v, w]."""
    return rotate_vector_inverse(compute_relative_velocity(state.v, env), state.q)


def compute_flow_numbers(state: State, atmosphere: Atmosphere,
                         env: Environment) -> FlowNumbers:
    """
    Evaluate the flow state.

    Args:
        state: Current rigid-body state
        atmosphere: Atmosphere model
        env: Launch environment (reference conditions, wind)

    Returns:
        FlowNumbers(mach, qbar, rho, alpha, beta)
    """
    u, v, w = body_velocity(state, env)
    speed = max(np.sqrt(u*u + v*v + w*w), C.MIN_SPEED)

    alpha = np.arctan2(-w, u)
    beta = np.arctan2(v, np.sqrt(u*u + w*w))

    rho, a = atmosphere.density_and_speed_of_sound(env, state.r[2])
    mach = speed / max(a, C.MIN_SPEED_OF_SOUND)
    qbar = 0.5 * rho * speed * speed

    return FlowNumbers(float(mach), float(qbar), float(rho), float(alpha), float(beta))
