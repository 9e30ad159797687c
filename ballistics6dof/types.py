"""
Ballistics 6DoF - Type Definitions

This module provides TypedDict definitions for structured return types,
improving type safety and IDE support.
"""

from typing import TypedDict

import numpy as np
from numpy.typing import NDArray


class AtmosphereProperties(TypedDict):
    """Return type for atmosphere model output."""
    temperature: float  # Temperature (K)
    pressure: float  # Pressure (Pa)
    density: float  # Density (kg/m³)
    speed_of_sound: float  # Speed of sound (m/s)


class AeroCoefficients(TypedDict):
    """The seven dimensionless coefficients queried once per evaluation."""
    c_d: float  # Drag
    c_l_alpha: float  # Lift slope (per rad)
    c_y_beta: float  # Side-force slope (per rad)
    c_m_alpha: float  # Pitching-moment slope (per rad)
    c_m_q: float  # Pitch/yaw damping
    c_l_p: float  # Roll (spin) damping
    c_magnus: float  # Magnus side-force factor


class LoadBreakdown(TypedDict):
    """Aerodynamic forces and moments in the BODY frame, for diagnostics."""
    drag: NDArray[np.float64]  # Drag force (N), along -x_body
    lift: NDArray[np.float64]  # Lift force (N), along -z_body
    side: NDArray[np.float64]  # Side force (N), along +y_body
    magnus: NDArray[np.float64]  # Magnus force (N), y/z only
    force_total: NDArray[np.float64]  # Sum of aerodynamic forces (N)
    moment_total: NDArray[np.float64]  # Aerodynamic moment (N·m)
