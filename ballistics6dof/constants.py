"""
Ballistics 6DoF - Physical Constants and Default Parameters

This module defines the physical constants, atmosphere parameters,
default aerodynamic coefficients and integration defaults used throughout
the package. Values here are *defaults* only: the atmosphere, gravity and
integration options are threaded through explicit instances so alternate
planets or atmospheres can be modelled without touching this module.
"""

import numpy as np

# =============================================================================
# GRAVITY
# =============================================================================

# Standard gravitational acceleration (m/s^2)
G0 = 9.80665

# =============================================================================
# ATMOSPHERE (ISA-style lapse model)
# =============================================================================

# Celsius -> Kelvin offset
KELVIN_OFFSET = 273.15

# Specific gas constant for dry air (J/(kg·K))
R_AIR = 287.05

# Specific gas constant for water vapour (J/(kg·K))
R_VAPOR = 461.495

# Ratio of specific heats for air
GAMMA = 1.4

# Temperature lapse rate (K/m), negative = cooling with height
LAPSE_RATE = -0.0065

# Absolute temperature floor (K) for extreme altitude extrapolation
TEMPERATURE_FLOOR = 150.0

# Below this |lapse| the isothermal barometric branch is used
LAPSE_EPSILON = 1e-9

# Tetens saturation vapour pressure coefficients (Pa, -, °C)
TETENS_E0 = 610.94
TETENS_A = 17.625
TETENS_B = 243.04

# Standard sea-level conditions
STANDARD_TEMPERATURE_C = 15.0
STANDARD_PRESSURE_HPA = 1013.25
STANDARD_HUMIDITY_PCT = 50.0

# =============================================================================
# DEFAULT AERODYNAMIC APPROXIMATION
# =============================================================================

# Four-band drag curve: upper Mach limits and C_D per band
DRAG_BAND_MACH = (0.8, 1.2, 2.0)
DRAG_BAND_CD = (0.25, 0.40, 0.30, 0.25)

CL_ALPHA_DEFAULT = 2.8      # lift slope (per rad)
CY_BETA_DEFAULT = 2.8       # side-force slope (per rad)
CM_ALPHA_DEFAULT = -0.9     # pitching-moment slope (overturning)
CM_Q_DEFAULT = -20.0        # pitch/yaw damping
CL_P_DEFAULT = -0.02        # spin damping
C_MAGNUS_DEFAULT = 0.1      # Magnus side-force factor

# =============================================================================
# FRAMES
# =============================================================================

BODY_X_AXIS = np.array([1.0, 0.0, 0.0])  # Bore axis in body frame
IDENTITY_QUATERNION = np.array([1.0, 0.0, 0.0, 0.0])

# =============================================================================
# NUMERICAL TOLERANCES
# =============================================================================

VECTOR_NORM_EPS = 1e-12      # normalize_or_zero threshold
QUATERNION_NORM_EPS = 1e-15  # below this, normalize returns identity
MIN_SPEED = 1e-6             # body speed floor (m/s)
MIN_SPEED_OF_SOUND = 1e-6    # speed-of-sound floor for Mach (m/s)
MIN_INERTIA = 1e-9           # principal inertia floor (kg·m^2)
ALIGNMENT_TOL = 1e-9         # muzzle axis-angle identity fallback (rad)
QUATERNION_NORM_TOL = 1e-6   # allowable deviation from unit norm in checks

# =============================================================================
# INTEGRATION DEFAULTS
# =============================================================================

DT = 0.002          # s
MAX_TIME = 2.0      # s
MAX_STEPS = 10000
GROUND_Z = 0.0      # m
