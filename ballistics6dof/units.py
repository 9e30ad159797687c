"""
Ballistics 6DoF - Unit Conversions

Range-card units at the user boundary. The core works in SI only.
"""

import numpy as np

METERS_PER_YARD = 0.9144
METERS_PER_FOOT = 0.3048
MOA_PER_MIL = 3.43774677  # 1 mil = 0.1 / (pi / 10800) arcmin


def m_to_yards(m: float) -> float:
    return m / METERS_PER_YARD


def yards_to_m(yd: float) -> float:
    return yd * METERS_PER_YARD


def mps_to_fps(v: float) -> float:
    return v / METERS_PER_FOOT


def fps_to_mps(v: float) -> float:
    return v * METERS_PER_FOOT


def mil_to_moa(mil: float) -> float:
    return mil * MOA_PER_MIL


def moa_to_mil(moa: float) -> float:
    return moa / MOA_PER_MIL


def rps_to_rad_s(rps: float) -> float:
    """Spin in revolutions per second to rad/s."""
    return rps * 2.0 * np.pi


def rad_to_mil(angle: float) -> float:
    """Angle in radians to milliradians."""
    return angle * 1000.0


def drop_to_mil(drop_m: float, range_m: float) -> float:
    """Angular size of a vertical drop seen from range_m (mil)."""
    if range_m <= 0:
        raise ValueError(f"Range must be positive, got {range_m}")
    return rad_to_mil(np.arctan2(drop_m, range_m))
