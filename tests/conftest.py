import numpy as np
import pytest

from ballistics6dof import (
    DefaultAeroApprox, Environment, Gravity, TabulatedAeroModel,
    projectile_cylindrical, standard_atmosphere,
)

LATERAL_KEYS = ('c_l_alpha', 'c_y_beta', 'c_m_alpha', 'c_m_q', 'c_magnus')


def make_drag_only_aero(c_d=0.25):
    """Constant drag with every lateral force and pitch/yaw moment zeroed."""
    return TabulatedAeroModel(
        mach=[0.0, 5.0], c_d=[c_d, c_d],
        tables={key: [0.0, 0.0] for key in LATERAL_KEYS},
    )


@pytest.fixture
def projectile():
    """10 g, 7.82 mm, 35 mm long, 4000 rad/s."""
    return projectile_cylindrical(mass=0.01, diameter=0.00782, length=0.035, spin=4000.0)


@pytest.fixture
def env():
    return Environment(temperature_c=15.0, pressure_hpa=1013.25, humidity_pct=50.0)


@pytest.fixture
def gravity():
    return Gravity()


@pytest.fixture
def atmosphere():
    return standard_atmosphere()


@pytest.fixture
def aero():
    return DefaultAeroApprox()


@pytest.fixture
def drag_only_aero():
    return make_drag_only_aero()


@pytest.fixture
def muzzle_origin():
    return np.zeros(3)
