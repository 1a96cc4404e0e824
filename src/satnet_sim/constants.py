"""Fixed constants: time units, body defaults, solver limits, clock policy bounds.

Values for the bodies and the clock come from the Satnet scene configuration.
"""

import math

TWOPI = 2.0 * math.pi

# Time: seconds per unit
SECONDS_PER_MINUTE = 60.0
SECONDS_PER_HOUR = 3600.0
SECONDS_PER_DAY = 86400.0
MINUTES_PER_HOUR = 60
HOURS_PER_DAY = 24
MONTHS_PER_YEAR = 12

# Scene scale: Earth radius (6371 km) maps to 10 scene units
REALWORLD_SCALE_FACTOR = 10.0 / 6371.0

# Body sizes (scene units)
SUN_SIZE = 8000.0
EARTH_SIZE = 10.0
MOON_SIZE = 2.5

# Spin rates (radians per simulated second, pre-divided as in the scene config)
SUN_ROTATION_SPEED = 0.4
EARTH_ROTATION_SPEED = 0.0000727 / 47
MOON_ROTATION_SPEED = 0.00000266 / 48

# Axial tilts (degrees)
SUN_TILT_DEG = 0.0
EARTH_TILT_DEG = 23.5
MOON_TILT_DEG = 6.68

# Earth orbit (km, degrees, seconds); also drives the Sun in the geocentric scene
EARTH_PERIGEE = 1471000000.0
EARTH_APOGEE = 1521000000.0
EARTH_ECCENTRICITY = 0.0167
EARTH_INCLINATION_DEG = 7.155
EARTH_PERIOD = 31557600.0

# Moon orbit (km, degrees, seconds)
MOON_PERIGEE = 402541.95
MOON_APOGEE = 405000.0
MOON_ECCENTRICITY = 0.0549
MOON_INCLINATION_DEG = 5.1
MOON_PERIOD = 2546800.0

# Kepler solve limits
NEWTON_TOLERANCE = 1e-6
NEWTON_MAX_ITERATIONS = 100
FIXED_POINT_ITERATIONS = 10
PLANET_INCLINATION_BIAS_DEG = 90.0

# Clock policy
FLOOR_YEAR = 1974
MIN_YEAR = 1
MAX_YEAR = 2025
DEFAULT_YEAR = 2024
DEFAULT_TIME_SCALE = 200.0
MIN_TIME_SCALE = -8000000.0
MAX_TIME_SCALE = 8000000.0

# Catalogs
DEFAULT_MAX_SATELLITES = 7560
LAUNCH_SITE_PROXIMITY_DEG = 0.1
LAUNCH_SITE_BAR_HEIGHT = 0.02

# Satellite user categories: GUI label -> three-letter filter prefix
USER_CATEGORIES: dict[str, str] = {
    'ALL': 'all',
    'CIVIL': 'civ',
    'COMMERCIAL': 'com',
    'GOVERNMENT': 'gov',
    'MILITARY': 'mil',
}
