"""
Reference ellipsoids and the shape parameters derived from their axes
"""

__all__ = [
    'Ellipsoid', 'GRS80', 'MARS', 'MOON', 'WGS84',
    'eccentricity_squared', 'flattening', 'second_eccentricity',
]

from functools import cached_property
from typing import Optional

import numpy as np

from geoinverse._const import (
    GRS80_A, GRS80_F, MARS_A, MARS_B, MOON_RADIUS, WGS84_A, WGS84_F
)


def flattening(a, b):
    """Flattening f = (a - b) / a"""
    return (a - b) / a


def eccentricity_squared(a, b):
    """
    First eccentricity squared, e^2 = 2f - f^2

    Args:
        a:
            The semimajor (equatorial) axis

        b:
            The semiminor (polar) axis

    Returns:
        float
    """
    f = flattening(a, b)
    return 2.0 * f - f * f


def second_eccentricity(a, b):
    """Second eccentricity e' = sqrt(a^2 / b^2 - 1)"""
    return np.sqrt(a * a / (b * b) - 1.0)


class Ellipsoid:
    """
    An oblate (or spherical) reference ellipsoid, defined by its semimajor
    axis `a` and semiminor axis `b`.

    The converters in geoinverse.conversion accept bare axis lengths and
    never validate them; this class is the validated way to carry a shape
    around.

    Args:
        a:
            The semimajor (equatorial) axis. Must be positive.

        b:
            The semiminor (polar) axis. Must be positive and no greater than a.

        name: (Optional)
            A label used in the repr
    """

    def __init__(self, a: float, b: float, name: Optional[str] = None):
        a, b = float(a), float(b)
        if not (a > 0 and b > 0):
            raise ValueError(f'Ellipsoid axes must be positive, got a={a}, b={b}')

        if b > a:
            raise ValueError(
                f'Semiminor axis must not exceed semimajor axis, got a={a}, b={b}'
            )

        self._a = a
        self._b = b
        self.name = name

    @property
    def a(self) -> float:
        return self._a

    @property
    def b(self) -> float:
        return self._b

    def __eq__(self, other):
        if not isinstance(other, Ellipsoid):
            return False

        return self.a == other.a and self.b == other.b

    def __hash__(self):
        return hash((self.a, self.b))

    def __repr__(self):
        if self.name:
            return f'<Ellipsoid {self.name} (a={self.a}, b={self.b})>'

        return f'<Ellipsoid(a={self.a}, b={self.b})>'

    @classmethod
    def from_flattening(cls, a: float, f: float, name: Optional[str] = None):
        """
        Creates an Ellipsoid from its semimajor axis and flattening

        Args:
            a:
                The semimajor axis

            f:
                The flattening, (a - b) / a. Zero yields a sphere.

            name: (Optional)
                A label used in the repr

        Returns:
            Ellipsoid
        """
        return cls(a, (1 - f) * a, name=name)

    @cached_property
    def flattening(self) -> float:
        return flattening(self.a, self.b)

    @cached_property
    def eccentricity_squared(self) -> float:
        return eccentricity_squared(self.a, self.b)

    @cached_property
    def second_eccentricity(self) -> float:
        return float(second_eccentricity(self.a, self.b))

    def to_geodetic(self, x, y, z, algorithm: Optional[str] = None):
        """
        Converts Cartesian coordinates on or near this ellipsoid to geodetic
        coordinates.

        Args:
            x, y, z:
                Body-fixed Cartesian position, in the same unit as the axes

            algorithm: (Optional)
                'heikkinen' or 'olson'. Defaults to the active converter (see
                geoinverse.conversion.set_conversion_algorithm)

        Returns:
            GeodeticResult of (h, lon, lat)
        """
        from geoinverse.conversion import get_converter  # pylint: disable=import-outside-toplevel
        return get_converter(algorithm)(x, y, z, self.a, self.b)

    def to_cartesian(self, h, lon, lat):
        """
        Converts geodetic coordinates (altitude, longitude and latitude in
        radians) to body-fixed Cartesian coordinates.

        Returns:
            Tuple of (x, y, z)
        """
        from geoinverse.geodetic import geodetic_to_cartesian  # pylint: disable=import-outside-toplevel
        return geodetic_to_cartesian(h, lon, lat, self.a, self.b)


# Reference bodies, in kilometers
WGS84 = Ellipsoid.from_flattening(WGS84_A, WGS84_F, name='WGS84')
GRS80 = Ellipsoid.from_flattening(GRS80_A, GRS80_F, name='GRS80')
MOON = Ellipsoid(MOON_RADIUS, MOON_RADIUS, name='Moon')
MARS = Ellipsoid(MARS_A, MARS_B, name='Mars')
