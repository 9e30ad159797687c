"""
Ballistics 6DoF - Environment and Gravity

Immutable ambient conditions for one integration: the launch-point weather,
an optional launch-site altitude offset, a constant wind vector, and the
signed gravitational acceleration along the inertial vertical axis.
"""

from dataclasses import dataclass, field

import numpy as np

from . import constants as C


@dataclass(frozen=True)
class Environment:
    """
    Ambient conditions at the launch point.

    Attributes:
        temperature_c: Sea-level reference temperature (°C)
        pressure_hpa: Sea-level reference pressure (hPa)
        humidity_pct: Relative humidity (%)
        altitude_m: Launch-site elevation above the reference level (m)
        wind: Constant wind velocity in the inertial frame (m/s) [3]
    """
    temperature_c: float = C.STANDARD_TEMPERATURE_C
    pressure_hpa: float = C.STANDARD_PRESSURE_HPA
    humidity_pct: float = C.STANDARD_HUMIDITY_PCT
    altitude_m: float = 0.0
    wind: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def __post_init__(self):
        values = (self.temperature_c, self.pressure_hpa, self.humidity_pct, self.altitude_m)
        if not all(np.isfinite(values)):
            raise ValueError(f"Environment parameters must be finite, got {values}")
        if self.temperature_c <= -C.KELVIN_OFFSET:
            raise ValueError(f"Temperature must be above absolute zero, got {self.temperature_c} °C")
        if self.pressure_hpa <= 0:
            raise ValueError(f"Pressure must be positive, got {self.pressure_hpa} hPa")
        if not 0.0 <= self.humidity_pct <= 100.0:
            raise ValueError(f"Relative humidity must be in [0, 100], got {self.humidity_pct}")

        wind = np.asarray(self.wind, dtype=np.float64)
        if wind.shape != (3,):
            raise ValueError(f"Wind must have shape (3,), got {wind.shape}")
        object.__setattr__(self, 'wind', wind)


@dataclass(frozen=True)
class Gravity:
    """Signed acceleration along inertial z (negative = downward)."""
    g: float = -C.G0


def standard_environment() -> Environment:
    """Sea-level standard conditions (15 °C, 1013.25 hPa, 50 % RH, no wind)."""
    return Environment()


def compute_relative_velocity(v: np.ndarray, env: Environment) -> np.ndarray:
    """
    Air-relative velocity in the inertial frame.

    v_rel = v_inertial - v_wind
    """
    return v - env.wind
