"""
Ballistics 6DoF - Aerodynamic Coefficient Models

The integrator consumes aerodynamics only through the AeroModel interface:
seven pure coefficient queries evaluated at the current Mach number (and,
for drag, the aerodynamic angles). DefaultAeroApprox makes the integrator
runnable without external data; TabulatedAeroModel interpolates
projectile-specific tables.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional, Sequence

import numpy as np

from . import constants as C
from .types import AeroCoefficients


class AeroModel(ABC):
    """Aerodynamic coefficient provider. Implementations must be stateless."""

    @abstractmethod
    def drag_coefficient(self, mach: float, alpha: float, beta: float) -> float:
        """Axial drag coefficient C_D."""

    @abstractmethod
    def lift_slope(self, mach: float) -> float:
        """Lift-force slope C_Lα (per rad)."""

    @abstractmethod
    def side_slope(self, mach: float) -> float:
        """Side-force slope C_Yβ (per rad)."""

    @abstractmethod
    def pitch_moment_slope(self, mach: float) -> float:
        """Overturning moment slope C_mα (per rad)."""

    @abstractmethod
    def pitch_yaw_damping(self, mach: float) -> float:
        """Pitch/yaw damping coefficient C_mq."""

    @abstractmethod
    def roll_damping(self, mach: float) -> float:
        """Spin damping coefficient C_lp."""

    @abstractmethod
    def magnus_factor(self, mach: float) -> float:
        """Magnus side-force factor."""

    def coefficients(self, mach: float, alpha: float, beta: float) -> AeroCoefficients:
        """Query all seven coefficients at one flow condition."""
        return {
            'c_d': self.drag_coefficient(mach, alpha, beta),
            'c_l_alpha': self.lift_slope(mach),
            'c_y_beta': self.side_slope(mach),
            'c_m_alpha': self.pitch_moment_slope(mach),
            'c_m_q': self.pitch_yaw_damping(mach),
            'c_l_p': self.roll_damping(mach),
            'c_magnus': self.magnus_factor(mach),
        }


class DefaultAeroApprox(AeroModel):
    """
    Coarse slender-body approximation.

    Four-band drag curve (subsonic / transonic / low-supersonic /
    high-supersonic) and constants for the remaining six coefficients.
    """

    def drag_coefficient(self, mach: float, alpha: float, beta: float) -> float:
        for limit, cd in zip(C.DRAG_BAND_MACH, C.DRAG_BAND_CD):
            if mach < limit:
                return cd
        return C.DRAG_BAND_CD[-1]

    def lift_slope(self, mach: float) -> float:
        return C.CL_ALPHA_DEFAULT

    def side_slope(self, mach: float) -> float:
        return C.CY_BETA_DEFAULT

    def pitch_moment_slope(self, mach: float) -> float:
        return C.CM_ALPHA_DEFAULT

    def pitch_yaw_damping(self, mach: float) -> float:
        return C.CM_Q_DEFAULT

    def roll_damping(self, mach: float) -> float:
        return C.CL_P_DEFAULT

    def magnus_factor(self, mach: float) -> float:
        return C.C_MAGNUS_DEFAULT


class TabulatedAeroModel(AeroModel):
    """
    Table-driven coefficients, linearly interpolated in Mach.

    Values outside the breakpoint range are clamped to the end values
    (np.interp behaviour). Any coefficient without a table falls back to
    the constant of DefaultAeroApprox. Drag is tabulated against Mach only;
    alpha and beta are accepted but unused.

    Args:
        mach: Strictly increasing Mach breakpoints
        c_d: Drag coefficient at each breakpoint
        tables: Optional per-coefficient tables keyed by 'c_l_alpha',
                'c_y_beta', 'c_m_alpha', 'c_m_q', 'c_l_p', 'c_magnus'

    Raises:
        ValueError: If breakpoints are not increasing or a table length
                    does not match
    """

    _KEYS = ('c_l_alpha', 'c_y_beta', 'c_m_alpha', 'c_m_q', 'c_l_p', 'c_magnus')

    def __init__(self, mach: Sequence[float], c_d: Sequence[float],
                 tables: Optional[Dict[str, Sequence[float]]] = None):
        self._mach = np.asarray(mach, dtype=np.float64)
        if self._mach.ndim != 1 or len(self._mach) < 2:
            raise ValueError("Need at least two Mach breakpoints")
        if np.any(np.diff(self._mach) <= 0.0):
            raise ValueError("Mach breakpoints must be strictly increasing")

        self._tables = {'c_d': self._check_table('c_d', c_d)}
        for key, values in (tables or {}).items():
            if key not in self._KEYS:
                raise ValueError(f"Unknown coefficient table: {key}")
            self._tables[key] = self._check_table(key, values)
        self._fallback = DefaultAeroApprox()

    def _check_table(self, key: str, values: Sequence[float]) -> np.ndarray:
        arr = np.asarray(values, dtype=np.float64)
        if arr.shape != self._mach.shape:
            raise ValueError(
                f"Table '{key}' has {arr.size} values for {self._mach.size} breakpoints"
            )
        return arr

    def _lookup(self, key: str, mach: float, fallback: float) -> float:
        table = self._tables.get(key)
        if table is None:
            return fallback
        return float(np.interp(mach, self._mach, table))

    def drag_coefficient(self, mach: float, alpha: float, beta: float) -> float:
        return self._lookup('c_d', mach, 0.0)

    def lift_slope(self, mach: float) -> float:
        return self._lookup('c_l_alpha', mach, self._fallback.lift_slope(mach))

    def side_slope(self, mach: float) -> float:
        return self._lookup('c_y_beta', mach, self._fallback.side_slope(mach))

    def pitch_moment_slope(self, mach: float) -> float:
        return self._lookup('c_m_alpha', mach, self._fallback.pitch_moment_slope(mach))

    def pitch_yaw_damping(self, mach: float) -> float:
        return self._lookup('c_m_q', mach, self._fallback.pitch_yaw_damping(mach))

    def roll_damping(self, mach: float) -> float:
        return self._lookup('c_l_p', mach, self._fallback.roll_damping(mach))

    def magnus_factor(self, mach: float) -> float:
        return self._lookup('c_magnus', mach, self._fallback.magnus_factor(mach))
