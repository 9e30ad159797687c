"""
Ballistics 6DoF - Integration Configuration

This module provides the IntegrateOpts dataclass for dependency injection,
allowing the timestep and termination budgets to be passed explicitly
instead of read from global constants.
"""

from dataclasses import dataclass

import numpy as np

from . import constants as C

INTEGRATION_METHODS = ('rk4', 'euler')


@dataclass(frozen=True)
class IntegrateOpts:
    """
    Immutable integration options.

    Using frozen=True ensures options cannot be accidentally modified.
    Create new options via dataclasses.replace() if needed.

    Attributes:
        dt: Fixed step size (s)
        max_time: Maximum flight time (s)
        max_steps: Maximum number of integration steps
        ground_z: Stop once inertial z drops to or below this height (m)
        method: 'rk4' (default) or 'euler' for comparison runs

    Raises:
        ValueError: On a non-positive dt or step budget, a negative time
                    budget, or an unknown method
    """
    dt: float = C.DT
    max_time: float = C.MAX_TIME
    max_steps: int = C.MAX_STEPS
    ground_z: float = C.GROUND_Z
    method: str = 'rk4'

    def __post_init__(self):
        if not np.isfinite(self.dt) or self.dt <= 0:
            raise ValueError(f"Time step dt must be positive, got {self.dt}")
        if not np.isfinite(self.max_time) or self.max_time < 0:
            raise ValueError(f"max_time must be non-negative, got {self.max_time}")
        if int(self.max_steps) != self.max_steps or self.max_steps <= 0:
            raise ValueError(f"max_steps must be a positive integer, got {self.max_steps}")
        if self.method not in INTEGRATION_METHODS:
            raise ValueError(f"Unknown integration method: {self.method}")


def create_default_opts() -> IntegrateOpts:
    """Create IntegrateOpts with default values from constants."""
    return IntegrateOpts()


def create_test_opts(dt: float = 0.01, max_time: float = 0.5,
                     **overrides) -> IntegrateOpts:
    """Create short, coarse options suitable for testing.

    Any keyword arg accepted by IntegrateOpts can be passed as an override.
    """
    defaults = dict(dt=dt, max_time=max_time, max_steps=1000)
    defaults.update(overrides)
    return IntegrateOpts(**defaults)
