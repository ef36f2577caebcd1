"""
Physical Constants
==================

Earth constants for orbital mechanics. All values in SI units
(meters, seconds, m³/s²).
"""

# Mean radius (WGS84 ellipsoid mean) [m]
EARTH_RADIUS = 6.371e6

# Standard gravitational parameter GM [m³/s²]
EARTH_MU = 3.986004418e14

# Standard surface gravity [m/s²]
EARTH_G = 9.80665
