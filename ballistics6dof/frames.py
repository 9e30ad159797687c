"""
Ballistics 6DoF - Vector and Quaternion Algebra

This module implements the 3-vector and quaternion operations used by the
integrator. All orientation representation uses quaternions exclusively.

Quaternion Convention: [w, x, y, z] where w is the scalar component.
The orientation quaternion maps body-frame vectors onto the inertial frame.
"""

import numpy as np

from . import constants as C


def normalize_or_zero(v: np.ndarray) -> np.ndarray:
    """
    Return the unit vector along v, or the zero vector when |v| is tiny.

    A zero direction is a meaningful degenerate result (no rotation needed),
    so this never raises.
    """
    v = np.asarray(v, dtype=np.float64)
    norm = np.linalg.norm(v)
    if norm < C.VECTOR_NORM_EPS:
        return np.zeros(3)
    return v / norm


def quaternion_normalize(q: np.ndarray) -> np.ndarray:
    """
    Normalize a quaternion to unit length.

    Args:
        q: Quaternion [w, x, y, z]

    Returns:
        Normalized quaternion, or identity if the input is degenerate
    """
    q = np.asarray(q, dtype=np.float64)
    norm = np.linalg.norm(q)
    if norm < C.QUATERNION_NORM_EPS:
        return C.IDENTITY_QUATERNION.copy()
    return q / norm


def quaternion_multiply(q1: np.ndarray, q2: np.ndarray) -> np.ndarray:
    """
    Hamilton product q1 * q2.

    Args:
        q1: First quaternion [w, x, y, z]
        q2: Second quaternion [w, x, y, z]

    Returns:
        Product quaternion [w, x, y, z]
    """
    w1, x1, y1, z1 = q1
    w2, x2, y2, z2 = q2

    return np.array([
        w1*w2 - x1*x2 - y1*y2 - z1*z2,
        w1*x2 + x1*w2 + y1*z2 - z1*y2,
        w1*y2 - x1*z2 + y1*w2 + z1*x2,
        w1*z2 + x1*y2 - y1*x2 + z1*w2
    ])


def quaternion_conjugate(q: np.ndarray) -> np.ndarray:
    """Conjugate [w, -x, -y, -z]; equals the inverse for unit quaternions."""
    return np.array([q[0], -q[1], -q[2], -q[3]])


def rotate_vector_by_quaternion(v: np.ndarray, q: np.ndarray) -> np.ndarray:
    """
    Rotate a vector by a unit quaternion: v' = q (0, v) q*.

    Transforms v from body frame to inertial frame. The caller guarantees
    q is unit-norm; the stepper renormalizes after every step.

    Args:
        v: Vector to rotate [3]
        q: Unit quaternion [w, x, y, z]

    Returns:
        Rotated vector [3]
    """
    qv = np.array([0.0, v[0], v[1], v[2]])
    r = quaternion_multiply(quaternion_multiply(q, qv), quaternion_conjugate(q))
    return r[1:4]


def rotate_vector_inverse(v: np.ndarray, q: np.ndarray) -> np.ndarray:
    """
    Rotate a vector by the conjugate of a unit quaternion.

    Transforms v from inertial frame to body frame.
    """
    return rotate_vector_by_quaternion(v, quaternion_conjugate(q))


def quaternion_from_axis_angle(axis: np.ndarray, angle: float) -> np.ndarray:
    """
    Build a quaternion from a rotation axis and angle (rad).

    The axis is normalized with normalize_or_zero, so a zero axis yields a
    pure-scalar quaternion [cos(angle/2), 0, 0, 0].
    """
    half_angle = 0.5 * angle
    n = normalize_or_zero(axis)
    s = np.sin(half_angle)
    return np.array([np.cos(half_angle), n[0]*s, n[1]*s, n[2]*s])


def quaternion_derivative(q: np.ndarray, omega: np.ndarray) -> np.ndarray:
    """
    Compute the quaternion time derivative.

    q_dot = 0.5 * q ⊗ (0, p, q, r)

    Args:
        q: Current quaternion [w, x, y, z]
        omega: Angular velocity in body frame (rad/s)

    Returns:
        Quaternion derivative [w_dot, x_dot, y_dot, z_dot]
    """
    omega_q = np.array([0.0, omega[0], omega[1], omega[2]])
    return 0.5 * quaternion_multiply(q, omega_q)


def quaternion_to_rotation_matrix(q: np.ndarray) -> np.ndarray:
    """
    Convert a quaternion to a rotation matrix R(q).

    v_inertial = R(q) @ v_body

    Args:
        q: Unit quaternion [w, x, y, z]

    Returns:
        3x3 rotation matrix
    """
    w, x, y, z = quaternion_normalize(q)

    xx, yy, zz = x*x, y*y, z*z
    xy, xz, yz = x*y, x*z, y*z
    wx, wy, wz = w*x, w*y, w*z

    return np.array([
        [1 - 2*(yy + zz),     2*(xy - wz),     2*(xz + wy)],
        [    2*(xy + wz), 1 - 2*(xx + zz),     2*(yz - wx)],
        [    2*(xz - wy),     2*(yz + wx), 1 - 2*(xx + yy)]
    ])


def body_axis_inertial(q: np.ndarray) -> np.ndarray:
    """Bore (body +x) direction expressed in the inertial frame."""
    return rotate_vector_by_quaternion(C.BODY_X_AXIS, q)
