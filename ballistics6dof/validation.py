"""
Ballistics 6DoF - Validation Checks

This module implements post-run physics checks:
- Quaternion norm check
- Finite state check
- Sample sequence check (norms, finite values, monotonic time)

The integration loop never calls these; they are for callers and tests.
"""

from typing import List, Optional, Sequence, Tuple

import numpy as np

from . import constants as C
from .state import State


class ValidationError(Exception):
    """Raised when a physics validation check fails."""
    pass


def check_quaternion_norm(q: np.ndarray, tolerance: float = None) -> bool:
    """
    Verify quaternion is unit-normalized.

    Args:
        q: Quaternion [w, x, y, z]
        tolerance: Allowable deviation from 1.0

    Returns:
        True if valid, raises ValidationError otherwise
    """
    if tolerance is None:
        tolerance = C.QUATERNION_NORM_TOL

    norm = np.linalg.norm(q)
    if not np.isfinite(norm) or abs(norm - 1.0) > tolerance:
        raise ValidationError(
            f"Quaternion norm violation: |q| = {norm:.10f}, "
            f"deviation = {abs(norm - 1.0):.2e}, tolerance = {tolerance:.2e}"
        )
    return True


def check_state_finite(state: State) -> bool:
    """
    Check that every state component is finite.

    Returns:
        True if valid, raises ValidationError otherwise
    """
    for name in ('r', 'v', 'q', 'omega'):
        value = getattr(state, name)
        if not np.all(np.isfinite(value)):
            raise ValidationError(f"Non-finite {name}: {value}")
    return True


def check_time_monotonic(times: Sequence[float]) -> bool:
    """Sample times must be strictly increasing."""
    t = np.asarray(times, dtype=np.float64)
    if t.size > 1 and np.any(np.diff(t) <= 0):
        idx = int(np.argmax(np.diff(t) <= 0))
        raise ValidationError(
            f"Sample time not increasing at index {idx + 1}: "
            f"{t[idx]:.6f} -> {t[idx + 1]:.6f}"
        )
    return True


def validate_samples(samples: List, abort_on_error: bool = True,
                     tolerance: Optional[float] = None) -> Tuple[bool, Optional[str]]:
    """
    Perform all validation checks on a sample sequence.

    Args:
        samples: Output of integrate_6dof
        abort_on_error: If True, raise exception on first error
        tolerance: Quaternion norm tolerance (default QUATERNION_NORM_TOL)
    """
    try:
        if not samples:
            raise ValidationError("Empty sample sequence")
        check_time_monotonic([s.t for s in samples])
        for i, sample in enumerate(samples):
            try:
                check_state_finite(sample.state)
                check_quaternion_norm(sample.state.q, tolerance)
            except ValidationError as e:
                raise ValidationError(f"Sample {i} (t={sample.t:.4f}s): {e}") from e
        return True, None
    except ValidationError as e:
        if abort_on_error:
            raise
        return False, str(e)
