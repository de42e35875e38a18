"""
Constants declarations for geoinverse

Lengths are in kilometers, matching the degenerate-radius threshold used by
the Olson converter.
"""

# WGS84 Ellipsoid Constants
WGS84_A = 6378.137  # Major axis (kilometers)
WGS84_F = 1 / 298.257223563  # Flattening
WGS84_B = (1 - WGS84_F) * WGS84_A

# GRS80 differs from WGS84 only in flattening
GRS80_A = 6378.137
GRS80_F = 1 / 298.257222101
GRS80_B = (1 - GRS80_F) * GRS80_A

# IAU mean radius, treated as a sphere
MOON_RADIUS = 1737.4

MARS_A = 3396.19
MARS_B = 3376.20

# Olson degenerate guard; assumes kilometer inputs
OLSON_MIN_RADIUS = 100.0
OLSON_SENTINEL_ALTITUDE = -1.0e7

# Olson regime switch on cos^2 of the geocentric latitude
OLSON_REGIME_SPLIT = 0.3
