"""
Geodetic coordinate container and the forward (geodetic to Cartesian) transform
"""

__all__ = ['GeodeticResult', 'geodetic_to_cartesian']

from typing import Any, NamedTuple, Tuple

import numpy as np

from geoinverse.ellipsoid import eccentricity_squared


class GeodeticResult(NamedTuple):
    """
    Output of a Cartesian to geodetic conversion.

    Fields are ordered (h, lon, lat) so the result unpacks like a bare triple.
    Each field is a float for scalar input, or an ndarray of the broadcast
    input shape.

    Attributes:
        h:
            Altitude above the ellipsoid, in the input length unit. Negative
            values are below the surface.

        lon:
            Longitude in radians, in the range of atan2 (-pi, pi]

        lat:
            Geodetic latitude in radians, in [-pi/2, pi/2]
    """
    h: Any
    lon: Any
    lat: Any

    def to_degrees(self) -> 'GeodeticResult':
        """Returns a copy with longitude and latitude converted to degrees"""
        return GeodeticResult(self.h, np.degrees(self.lon), np.degrees(self.lat))


def geodetic_to_cartesian(h, lon, lat, a, b) -> Tuple[Any, Any, Any]:
    """
    Converts geodetic coordinates to body-fixed Cartesian coordinates using the
    prime vertical radius of curvature N = a / sqrt(1 - e^2 sin^2(lat)).

    Inputs broadcast against each other.

    Args:
        h:
            Altitude above the ellipsoid

        lon:
            Longitude, in radians

        lat:
            Geodetic latitude, in radians

        a:
            The ellipsoid semimajor axis

        b:
            The ellipsoid semiminor axis

    Returns:
        Tuple of (x, y, z) in the same length unit as h, a and b
    """
    h, lon, lat = np.broadcast_arrays(
        np.asarray(h, dtype=float),
        np.asarray(lon, dtype=float),
        np.asarray(lat, dtype=float),
    )
    e2 = eccentricity_squared(a, b)

    sin_lat = np.sin(lat)
    cos_lat = np.cos(lat)
    n = a / np.sqrt(1.0 - e2 * sin_lat * sin_lat)

    x = (n + h) * cos_lat * np.cos(lon)
    y = (n + h) * cos_lat * np.sin(lon)
    z = ((1.0 - e2) * n + h) * sin_lat

    return x[()], y[()], z[()]
