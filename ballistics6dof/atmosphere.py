"""
Ballistics 6DoF - Atmosphere Model

ISA-style lapse-rate atmosphere anchored at the caller's sea-level
environment. Temperature falls linearly with altitude down to a floor,
pressure follows the barometric formula for that lapse, density follows the
ideal-gas law and the speed of sound follows sqrt(gamma R T).

The model constants live on the Atmosphere instance so a caller can model
another planet or a non-standard atmosphere without patching module globals.
"""

from dataclasses import dataclass

import numpy as np

from . import constants as C
from .environment import Environment
from .types import AtmosphereProperties


def saturation_vapor_pressure(temp_c: float) -> float:
    """Saturation vapour pressure over water (Pa), Tetens formula."""
    return C.TETENS_E0 * np.exp((C.TETENS_A * temp_c) / (temp_c + C.TETENS_B))


@dataclass(frozen=True)
class Atmosphere:
    """
    Lapse-rate atmosphere.

    Attributes:
        lapse_rate: dT/dh (K/m), negative for cooling with height
        gas_constant: Specific gas constant of dry air (J/(kg·K))
        gamma: Ratio of specific heats
        g0: Gravitational acceleration used in the barometric formula (m/s^2)
        temperature_floor: Lowest absolute temperature returned (K)
        include_humidity: Reduce density for water vapour (humid-air law)
        vapor_gas_constant: Specific gas constant of water vapour (J/(kg·K))
    """
    lapse_rate: float = C.LAPSE_RATE
    gas_constant: float = C.R_AIR
    gamma: float = C.GAMMA
    g0: float = C.G0
    temperature_floor: float = C.TEMPERATURE_FLOOR
    include_humidity: bool = False
    vapor_gas_constant: float = C.R_VAPOR

    def properties(self, env: Environment, z: float) -> AtmosphereProperties:
        """
        Compute atmospheric properties at inertial height z.

        Args:
            env: Sea-level reference conditions and site altitude offset
            z: Height above the launch-site reference (m)

        Returns:
            AtmosphereProperties with T in K, P in Pa, rho in kg/m^3, a in m/s
        """
        R = self.gas_constant
        t0_k = max(env.temperature_c + C.KELVIN_OFFSET, self.temperature_floor)
        p0_pa = env.pressure_hpa * 100.0
        h = env.altitude_m + z
        lapse = self.lapse_rate

        t_k = max(t0_k + lapse * h, self.temperature_floor)
        if abs(lapse) > C.LAPSE_EPSILON:
            p_pa = p0_pa * (t_k / t0_k) ** (-self.g0 / (lapse * R))
        else:
            p_pa = p0_pa * np.exp(-self.g0 * h / (R * t0_k))

        if self.include_humidity:
            rh = float(np.clip(env.humidity_pct / 100.0, 0.0, 1.0))
            e = rh * saturation_vapor_pressure(t_k - C.KELVIN_OFFSET)
            rho = (p_pa - e) / (R * t_k) + e / (self.vapor_gas_constant * t_k)
        else:
            rho = p_pa / (R * t_k)

        speed_of_sound = np.sqrt(self.gamma * R * t_k)

        return {
            'temperature': float(t_k),
            'pressure': float(p_pa),
            'density': float(rho),
            'speed_of_sound': float(speed_of_sound),
        }

    def density_and_speed_of_sound(self, env: Environment, z: float) -> tuple:
        """Return (density, speed_of_sound) at height z."""
        props = self.properties(env, z)
        return props['density'], props['speed_of_sound']


def standard_atmosphere() -> Atmosphere:
    """ISA troposphere lapse (-6.5 K/km) with dry-air constants."""
    return Atmosphere()
