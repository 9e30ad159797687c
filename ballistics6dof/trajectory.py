"""
Ballistics 6DoF - Trajectory Driver

This module implements the termination/sampling loop:
- One Sample emitted per iteration, before the termination check, so the
  first sample always reflects the initial condition
- Ground impact, time budget, step budget (and an optional caller-supplied
  cancellation check) end the flight; all are normal termination
- Logging framework for diagnostics

Coordinate Frames:
- Position/Velocity: inertial frame, x downrange, z up
- Attitude: body frame, x along the bore
- Quaternion convention: [w, x, y, z] (scalar-first)
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from .aero import AeroModel, DefaultAeroApprox
from .atmosphere import Atmosphere, standard_atmosphere
from .config import IntegrateOpts, create_default_opts
from .dynamics import make_derivative_function
from .environment import Environment, Gravity
from .flow import compute_flow_numbers
from .frames import quaternion_normalize
from .integrators import integrate
from .projectile import Projectile
from .state import State, initial_state_from_muzzle

# Configure module logger
logger = logging.getLogger(__name__)


class TerminationReason(Enum):
    """Why the driver stopped."""
    GROUND_IMPACT = "ground impact"
    MAX_TIME = "time budget exhausted"
    MAX_STEPS = "step budget exhausted"
    CANCELLED = "cancelled by caller"


@dataclass(frozen=True)
class Sample:
    """
    Read-only snapshot at one instant.

    Attributes:
        t: Simulation time (s)
        state: Full rigid-body state
        mach: Mach number
        qbar: Dynamic pressure (Pa)
        rho: Air density (kg/m^3)
        alpha: Angle of attack (rad)
        beta: Sideslip (rad)
    """
    t: float
    state: State
    mach: float
    qbar: float
    rho: float
    alpha: float
    beta: float


@dataclass
class TrajectoryResult:
    """Sample sequence together with the termination reason."""
    samples: List[Sample]
    reason: TerminationReason
    wall_time_s: float = 0.0

    @property
    def final(self) -> Sample:
        return self.samples[-1]

    @property
    def time_of_flight(self) -> float:
        return self.samples[-1].t

    def __len__(self) -> int:
        return len(self.samples)


def run_trajectory(projectile: Projectile, env: Environment, gravity: Gravity,
                   atmosphere: Atmosphere, aero: AeroModel, initial: State,
                   opts: IntegrateOpts,
                   should_stop: Optional[Callable[[], bool]] = None) -> TrajectoryResult:
    """
    Integrate one trajectory and report why it ended.

    Args:
        projectile: Mass properties
        env: Launch environment
        gravity: Signed vertical gravity
        atmosphere: Density / speed-of-sound model
        aero: Aerodynamic coefficient provider
        initial: State at t = 0
        opts: Timestep and termination budgets
        should_stop: Optional callable polled between iterations; returning
                     True ends the flight after the current sample

    Returns:
        TrajectoryResult with the fully materialized sample list
    """
    derivative = make_derivative_function(projectile, aero, gravity, atmosphere, env)

    logger.info(f"Starting 6DoF integration: dt={opts.dt}s, max_time={opts.max_time}s, "
                f"max_steps={opts.max_steps}, method={opts.method}")
    logger.debug(f"Initial state: {initial}")

    start = time.time()
    samples: List[Sample] = []
    s = initial
    t = 0.0
    steps = 0
    reason = None

    while t <= opts.max_time and steps < opts.max_steps:
        flow = compute_flow_numbers(s, atmosphere, env)
        samples.append(Sample(t, s, flow.mach, flow.qbar, flow.rho, flow.alpha, flow.beta))

        if s.r[2] <= opts.ground_z and t > 0.0:
            reason = TerminationReason.GROUND_IMPACT
            break

        if should_stop is not None and should_stop():
            reason = TerminationReason.CANCELLED
            break

        s = integrate(derivative, s, opts.dt, method=opts.method)
        s.q = quaternion_normalize(s.q)

        steps += 1
        t = steps * opts.dt

    if reason is None:
        reason = (TerminationReason.MAX_STEPS if steps >= opts.max_steps
                  else TerminationReason.MAX_TIME)

    elapsed = time.time() - start
    final = samples[-1]
    logger.info(f"Integration terminated: {reason.value} after {steps} steps "
                f"({elapsed:.3f}s wall)")
    logger.info(f"Final sample: t={final.t:.4f}s, {final.state}, Mach={final.mach:.3f}")

    return TrajectoryResult(samples=samples, reason=reason, wall_time_s=elapsed)


def integrate_6dof(projectile: Projectile, env: Environment, gravity: Gravity,
                   atmosphere: Atmosphere, aero: AeroModel, initial: State,
                   opts: IntegrateOpts,
                   should_stop: Optional[Callable[[], bool]] = None) -> List[Sample]:
    """
    Main integration entry point.

    Returns:
        Ordered list of Samples from t = 0 to termination
    """
    return run_trajectory(projectile, env, gravity, atmosphere, aero,
                          initial, opts, should_stop).samples


def simulate_shot(projectile: Projectile, muzzle_speed: float,
                  elevation: float = 0.0, azimuth: float = 0.0,
                  muzzle_position=(0.0, 0.0, 0.0),
                  env: Optional[Environment] = None,
                  gravity: Optional[Gravity] = None,
                  atmosphere: Optional[Atmosphere] = None,
                  aero: Optional[AeroModel] = None,
                  opts: Optional[IntegrateOpts] = None) -> TrajectoryResult:
    """
    Convenience wrapper: build the muzzle state and run with defaults.

    Unset collaborators fall back to the standard environment and
    atmosphere, standard gravity, DefaultAeroApprox and default options.
    """
    env = env if env is not None else Environment()
    gravity = gravity if gravity is not None else Gravity()
    atmosphere = atmosphere if atmosphere is not None else standard_atmosphere()
    aero = aero if aero is not None else DefaultAeroApprox()
    opts = opts if opts is not None else create_default_opts()

    initial = initial_state_from_muzzle(
        muzzle_position, muzzle_speed, elevation, azimuth, projectile.spin
    )
    return run_trajectory(projectile, env, gravity, atmosphere, aero, initial, opts)
