"""
Ballistics 6DoF Trajectory Package

Six-degree-of-freedom rigid-body trajectory integration for
spin-stabilized projectiles in a lapse-rate atmosphere.

Modules:
    - constants: Physical constants and integration defaults
    - frames: Quaternion operations and frame transformations
    - environment: Launch conditions, wind and gravity
    - atmosphere: Density and speed of sound vs height
    - aero: Aerodynamic coefficient models
    - projectile: Mass properties
    - state: Rigid-body state and muzzle initial conditions
    - flow: Mach, dynamic pressure, angle of attack and sideslip
    - dynamics: Equations of motion
    - integrators: RK4 numerical integration
    - trajectory: Sampling/termination driver
    - validation: Physics validation checks
    - dispersion: Shot dispersion campaigns
"""

from .aero import AeroModel, DefaultAeroApprox, TabulatedAeroModel
from .atmosphere import Atmosphere, standard_atmosphere
from .config import IntegrateOpts, create_default_opts, create_test_opts
from .environment import Environment, Gravity, standard_environment
from .projectile import Projectile, projectile_cylindrical
from .state import State, initial_state_from_muzzle
from .trajectory import (
    Sample,
    TerminationReason,
    TrajectoryResult,
    integrate_6dof,
    run_trajectory,
    simulate_shot,
)

__version__ = "0.3.0"

__all__ = [
    'AeroModel',
    'DefaultAeroApprox',
    'TabulatedAeroModel',
    'Atmosphere',
    'standard_atmosphere',
    'IntegrateOpts',
    'create_default_opts',
    'create_test_opts',
    'Environment',
    'Gravity',
    'standard_environment',
    'Projectile',
    'projectile_cylindrical',
    'State',
    'initial_state_from_muzzle',
    'Sample',
    'TerminationReason',
    'TrajectoryResult',
    'integrate_6dof',
    'run_trajectory',
    'simulate_shot',
]
