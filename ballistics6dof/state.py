"""
Ballistics 6DoF - Rigid-Body State Vector

This module defines the 13-scalar integrated state (position, velocity,
orientation quaternion, body angular rate) and the muzzle initial-condition
builder. Each integration step produces a new State; no State is mutated
in place by the integrator.
"""

from dataclasses import dataclass, field

import numpy as np

from . import constants as C
from .frames import normalize_or_zero, quaternion_from_axis_angle


@dataclass
class State:
    """
    Full 6DoF state.

    Attributes:
        r: Position in inertial frame (m) [3], z up
        v: Velocity in inertial frame (m/s) [3]
        q: Orientation quaternion body->inertial [w, x, y, z]
        omega: Body angular rate [p, q, r] (rad/s) [3]

    When a State carries a derivative (see dynamics), the fields hold the
    rates: r <- velocity, v <- acceleration, q <- quaternion rate,
    omega <- angular acceleration.
    """

    # Position in inertial frame (m)
    r: np.ndarray = field(default_factory=lambda: np.zeros(3))

    # Velocity in inertial frame (m/s)
    v: np.ndarray = field(default_factory=lambda: np.zeros(3))

    # Orientation quaternion [w, x, y, z]
    q: np.ndarray = field(default_factory=lambda: C.IDENTITY_QUATERNION.copy())

    # Angular velocity in body frame (rad/s)
    omega: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def __post_init__(self):
        """Ensure arrays are numpy arrays with correct dtype and shape."""
        for attr, size in (('r', 3), ('v', 3), ('q', 4), ('omega', 3)):
            arr = np.asarray(getattr(self, attr), dtype=np.float64)
            if arr.shape != (size,):
                raise ValueError(f"State.{attr} must have shape ({size},), got {arr.shape}")
            setattr(self, attr, arr)

    def copy(self) -> 'State':
        """Create a deep copy of the state."""
        return State(
            r=self.r.copy(),
            v=self.v.copy(),
            q=self.q.copy(),
            omega=self.omega.copy(),
        )

    def to_vector(self) -> np.ndarray:
        """Flatten to [r(3), v(3), q(4), omega(3)]."""
        return np.concatenate([self.r, self.v, self.q, self.omega])

    @classmethod
    def from_vector(cls, vec: np.ndarray) -> 'State':
        """Create a State from a flat 13-vector."""
        return cls(
            r=vec[0:3].copy(),
            v=vec[3:6].copy(),
            q=vec[6:10].copy(),
            omega=vec[10:13].copy(),
        )

    @property
    def altitude(self) -> float:
        """Height along inertial z (m)."""
        return float(self.r[2])

    @property
    def speed(self) -> float:
        """Magnitude of inertial velocity (m/s)."""
        return float(np.linalg.norm(self.v))

    @property
    def spin_rate(self) -> float:
        """Roll rate about the bore axis (rad/s)."""
        return float(self.omega[0])

    def __str__(self) -> str:
        return (
            f"State(x={self.r[0]:.2f}m, "
            f"z={self.r[2]:.3f}m, "
            f"v={self.speed:.1f}m/s, "
            f"p={self.omega[0]:.1f}rad/s)"
        )


def initial_state_from_muzzle(muzzle_position: np.ndarray, muzzle_speed: float,
                              elevation: float, azimuth: float,
                              spin: float) -> State:
    """
    Build the initial state from muzzle conditions.

    The bore unit vector (z up) is
        forward = (cos e cos a, cos e sin a, sin e)
    and the orientation is the minimal rotation taking body +x onto it.

    Args:
        muzzle_position: Inertial muzzle position (m) [3]
        muzzle_speed: Muzzle speed along the bore (m/s)
        elevation: Bore elevation above horizontal (rad)
        azimuth: Bore azimuth from inertial +x toward +y (rad)
        spin: Initial spin rate about +x_body (rad/s)

    Returns:
        State with velocity along the bore and omega = (spin, 0, 0)
    """
    ce, se = np.cos(elevation), np.sin(elevation)
    ca, sa = np.cos(azimuth), np.sin(azimuth)
    forward = np.array([ce * ca, ce * sa, se])

    axis = normalize_or_zero(np.cross(C.BODY_X_AXIS, forward))
    angle = np.arccos(np.clip(np.dot(C.BODY_X_AXIS, forward), -1.0, 1.0))
    if abs(angle) < C.ALIGNMENT_TOL:
        q = C.IDENTITY_QUATERNION.copy()
    else:
        q = quaternion_from_axis_angle(axis, angle)

    return State(
        r=np.asarray(muzzle_position, dtype=np.float64).copy(),
        v=forward * muzzle_speed,
        q=q,
        omega=np.array([spin, 0.0, 0.0]),
    )
