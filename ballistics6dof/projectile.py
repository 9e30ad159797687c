"""
Ballistics 6DoF - Projectile Mass Properties

Immutable physical parameters for one solve, and a factory that derives
reference area and a slender-body inertia estimate from simple dimensions.
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Projectile:
    """
    Physical projectile parameters (constant during flight).

    Attributes:
        mass: Mass (kg)
        diameter: Reference diameter D (m)
        area: Reference area S (m^2)
        ixx: Spin-axis moment of inertia (kg·m^2)
        iyy: Transverse moment of inertia (kg·m^2)
        izz: Transverse moment of inertia (kg·m^2)
        spin: Initial spin rate about +x_body (rad/s)
    """
    mass: float
    diameter: float
    area: float
    ixx: float
    iyy: float
    izz: float
    spin: float = 0.0

    def __post_init__(self):
        values = (self.mass, self.diameter, self.area,
                  self.ixx, self.iyy, self.izz, self.spin)
        if not all(np.isfinite(values)):
            raise ValueError(f"Projectile parameters must be finite, got {values}")
        if self.mass <= 0:
            raise ValueError(f"Mass must be positive, got {self.mass}")
        if self.diameter <= 0:
            raise ValueError(f"Diameter must be positive, got {self.diameter}")
        if self.area <= 0:
            raise ValueError(f"Reference area must be positive, got {self.area}")
        if min(self.ixx, self.iyy, self.izz) < 0:
            raise ValueError("Moments of inertia must be non-negative")

    @property
    def inertia_diagonal(self) -> np.ndarray:
        """Principal inertias [Ixx, Iyy, Izz] (kg·m^2)."""
        return np.array([self.ixx, self.iyy, self.izz])


def projectile_cylindrical(mass: float, diameter: float, length: float,
                           spin: float) -> Projectile:
    """
    Build a projectile approximated as a solid cylinder.

    Ixx = m r^2 / 2 (spin axis)
    Iyy = Izz = m (3 r^2 + L^2) / 12

    Args:
        mass: Mass (kg)
        diameter: Caliber (m)
        length: Overall length (m)
        spin: Initial spin rate (rad/s)

    Raises:
        ValueError: If any dimension is non-positive
    """
    if length <= 0:
        raise ValueError(f"Length must be positive, got {length}")

    radius = 0.5 * diameter
    area = np.pi * 0.25 * diameter * diameter
    ixx = 0.5 * mass * radius ** 2
    iyy = (1.0 / 12.0) * mass * (3.0 * radius ** 2 + length ** 2)

    return Projectile(
        mass=mass,
        diameter=diameter,
        area=float(area),
        ixx=ixx,
        iyy=iyy,
        izz=iyy,
        spin=spin,
    )
