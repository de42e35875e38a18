"""
Cartesian to geodetic conversion.

Two interchangeable converters solve the inverse geodetic problem:

    heikkinen:
        Closed-form algebraic solution, no iteration.
        M. Heikkinen, "Geschlossene Formeln zur Berechnung raeumlicher
        geodaetischer Koordinaten aus rechtwinkligen Koordinaten",
        Z. Vermess. 107 (1982), 207-211.

    olson:
        Series approximation followed by exactly one correction step.
        D. K. Olson, "Converting Earth-Centered, Earth-Fixed Coordinates to
        Geodetic Coordinates", IEEE Transactions on Aerospace and Electronic
        Systems, 32 (1996), 473-476.

Both accept scalars or broadcast-compatible array-likes for x, y, z, and
return a GeodeticResult of (h, lon, lat) with angles in radians and altitude
in the input length unit.
"""

__all__ = [
    'CONVERTERS', 'OlsonCoefficients',
    'cartesian_to_geodetic', 'convert_position', 'get_converter', 'heikkinen',
    'olson', 'olson_coefficients', 'series_cos_latitude', 'series_sin_latitude',
    'set_conversion_algorithm',
]

from typing import Callable, Dict, Literal, NamedTuple, Optional

import numpy as np

from geoinverse._const import (
    OLSON_MIN_RADIUS, OLSON_REGIME_SPLIT, OLSON_SENTINEL_ALTITUDE
)
from geoinverse.ellipsoid import eccentricity_squared, second_eccentricity
from geoinverse.geodetic import GeodeticResult
from geoinverse.utils.logging import LOGGER, warn_once


def _broadcast_position(x, y, z):
    return np.broadcast_arrays(
        np.asarray(x, dtype=float),
        np.asarray(y, dtype=float),
        np.asarray(z, dtype=float),
    )


# -------------------------------------------------------------------------
# Heikkinen Implementation (Closed Form)
# -------------------------------------------------------------------------

def heikkinen(x, y, z, a, b) -> GeodeticResult:
    """
    Convert Cartesian coordinates to geodetic coordinates using Heikkinen's
    closed-form solution.

    Never raises for finite input. Points within roughly sqrt(e^2 (a^2 - b^2))
    of the body center have no real solution in this formulation and come
    back as NaN.

    Args:
        x, y, z:
            Body-fixed Cartesian position

        a:
            The ellipsoid semimajor axis, same unit as the position

        b:
            The ellipsoid semiminor axis, same unit as the position

    Returns:
        GeodeticResult of (h, lon, lat)
    """
    x, y, z = _broadcast_position(x, y, z)

    a2 = a * a
    b2 = b * b
    e_2 = eccentricity_squared(a, b)
    ep = second_eccentricity(a, b)

    with np.errstate(invalid='ignore', divide='ignore'):
        z2 = z * z
        r = np.sqrt(x * x + y * y)
        r2 = r * r
        ff = 54.0 * b2 * z2
        g = r2 + (1.0 - e_2) * z2 - e_2 * (a2 - b2)
        c = e_2 ** 2 * ff * r2 / g ** 3
        s = np.cbrt(1.0 + c + np.sqrt(c ** 2 + 2.0 * c))
        p = ff / (3.0 * (s + 1.0 / s + 1.0) ** 2 * g ** 2)
        q = np.sqrt(1.0 + 2.0 * e_2 ** 2 * p)

        # Radicand dips below zero from rounding near the poles and equator
        radicand = (
            0.5 * a2 * (1.0 + 1.0 / q)
            - p * (1.0 - e_2) * z2 / (q * (1.0 + q))
            - 0.5 * p * r2
        )
        r0 = -p * e_2 * r / (1.0 + q) + np.sqrt(np.maximum(0.0, radicand))

        u = np.sqrt((r - e_2 * r0) ** 2 + z2)
        v = np.sqrt((r - e_2 * r0) ** 2 + (1.0 - e_2) * z2)
        z0 = b2 * z / (a * v)

        h = u * (1.0 - b2 / (a * v))
        lat = np.arctan2(z + ep ** 2 * z0, r)

    lon = np.arctan2(y, x)

    if np.isnan(h).any():
        warn_once(
            'Heikkinen conversion produced NaN; positions this close to the body '
            'center have no closed-form solution. (this warning will not repeat)'
        )

    return GeodeticResult(h[()], lon[()], lat[()])


# -------------------------------------------------------------------------
# Olson Implementation (Series + One Correction Step)
# -------------------------------------------------------------------------

class OlsonCoefficients(NamedTuple):
    """Ellipsoid-dependent constants of Olson's series approximation"""
    e2: float
    a1: float
    a2: float
    a3: float
    a4: float
    a5: float
    a6: float


def olson_coefficients(a, b) -> OlsonCoefficients:
    """
    Precompute the series coefficients for an ellipsoid.

    Args:
        a:
            The ellipsoid semimajor axis

        b:
            The ellipsoid semiminor axis

    Returns:
        OlsonCoefficients
    """
    f = (a - b) / a
    e2 = f * (2.0 - f)
    a1 = a * e2
    a2 = a1 * a1
    a3 = a1 * e2 / 2.0
    a4 = 2.5 * a2
    a5 = a1 + a3
    a6 = 1.0 - e2
    return OlsonCoefficients(e2, a1, a2, a3, a4, a5, a6)


def _series_terms(w, zp, coeffs: OlsonCoefficients):
    w2 = w * w
    z2 = zp * zp
    r2 = z2 + w2
    r = np.sqrt(r2)
    return r, z2 / r2, w2 / r2, coeffs.a2 / r, coeffs.a3 - coeffs.a4 / r


def series_sin_latitude(w, zp, coeffs: OlsonCoefficients):
    """
    Series approximation of sin(geodetic latitude), solved directly.

    Well conditioned while cos^2 of the geocentric latitude exceeds 0.3,
    i.e. away from the poles.

    Args:
        w:
            Distance from the polar axis, sqrt(x^2 + y^2)

        zp:
            Absolute height above the equatorial plane, |z|

        coeffs:
            Output of olson_coefficients()

    Returns:
        The approximate sine of the (unsigned) geodetic latitude
    """
    r, s2, c2, u, v = _series_terms(w, zp, coeffs)
    return (zp / r) * (1.0 + c2 * (coeffs.a1 + u + s2 * v) / r)


def series_cos_latitude(w, zp, coeffs: OlsonCoefficients):
    """
    Series approximation of cos(geodetic latitude), solved directly.

    Used when cos^2 of the geocentric latitude is at most 0.3, i.e. near the
    poles where solving for the sine loses precision.

    Takes the same arguments as series_sin_latitude().
    """
    r, s2, c2, u, v = _series_terms(w, zp, coeffs)
    return (w / r) * (1.0 - s2 * (coeffs.a5 - u - c2 * v) / r)


def olson(x, y, z, a, b) -> GeodeticResult:
    """
    Convert Cartesian coordinates to geodetic coordinates using Olson's
    method: a series estimate of the latitude refined by exactly one
    Newton-like correction.

    Positions closer than 100 length units to the origin cannot be resolved.
    They are NOT converted; the sentinel (h=-1e7, lon=0, lat=0) is returned
    in their place and callers must check for it. The threshold assumes
    kilometer inputs.

    Args:
        x, y, z:
            Body-fixed Cartesian position

        a:
            The ellipsoid semimajor axis, same unit as the position

        b:
            The ellipsoid semiminor axis, same unit as the position

    Returns:
        GeodeticResult of (h, lon, lat)
    """
    x, y, z = _broadcast_position(x, y, z)
    coeffs = olson_coefficients(a, b)

    zp = np.abs(z)
    w = np.sqrt(x * x + y * y)
    r = np.sqrt(z * z + w * w)
    degenerate = r < OLSON_MIN_RADIUS

    with np.errstate(invalid='ignore', divide='ignore'):
        solve_sine = (w * w) / (r * r) > OLSON_REGIME_SPLIT

        sin_est = series_sin_latitude(w, zp, coeffs)
        cos_est = series_cos_latitude(w, zp, coeffs)

        lat = np.where(solve_sine, np.arcsin(sin_est), np.arccos(cos_est))
        ss = np.where(solve_sine, sin_est * sin_est, 1.0 - cos_est * cos_est)
        s = np.where(solve_sine, sin_est, np.sqrt(ss))
        c = np.where(solve_sine, np.sqrt(1.0 - ss), cos_est)

        g = 1.0 - coeffs.e2 * ss
        rg = a / np.sqrt(g)
        rf = coeffs.a6 * rg
        u = w - rg * c
        v = zp - rf * s
        f = c * u + s * v
        m = c * v - s * u
        p = m / (rf / g + f)

        lat = lat + p
        lat = np.where(z < 0.0, -lat, lat)
        h = f + m * p / 2.0

    lon = np.arctan2(y, x)

    if degenerate.any():
        warn_once(
            'Olson conversion received %d position(s) within %s units of the origin; '
            'returning sentinel altitude %s. (this warning will not repeat)',
            int(np.count_nonzero(degenerate)), OLSON_MIN_RADIUS, OLSON_SENTINEL_ALTITUDE
        )
        h = np.where(degenerate, OLSON_SENTINEL_ALTITUDE, h)
        lon = np.where(degenerate, 0.0, lon)
        lat = np.where(degenerate, 0.0, lat)

    return GeodeticResult(h[()], lon[()], lat[()])


# -------------------------------------------------------------------------
# Dynamic Dispatch & Configuration
# -------------------------------------------------------------------------

# Declares the converter in use (default heikkinen). Read it through
# get_converter(); a `from ... import` binding will not follow updates.
cartesian_to_geodetic: Callable[..., GeodeticResult] = heikkinen


CONVERTERS: Dict[str, Callable[..., GeodeticResult]] = {
    'heikkinen': heikkinen,
    'olson': olson,
}


def _lookup(algorithm: str) -> Callable[..., GeodeticResult]:
    if algorithm not in CONVERTERS:
        raise ValueError(f"Unknown algorithm '{algorithm}'. Options: {list(CONVERTERS.keys())}")

    return CONVERTERS[algorithm]


def set_conversion_algorithm(algorithm: Literal['heikkinen', 'olson']):
    """
    Set the global Cartesian to geodetic conversion method.

    Args:
        algorithm: 'heikkinen' or 'olson'
    """
    global cartesian_to_geodetic

    cartesian_to_geodetic = _lookup(algorithm)
    LOGGER.debug('Cartesian to geodetic conversion set to %s', algorithm)


def get_converter(algorithm: Optional[str] = None) -> Callable[..., GeodeticResult]:
    """
    Return a converter by name, or the active one if no name is given.

    Args:
        algorithm: (Optional)
            'heikkinen' or 'olson'

    Returns:
        A function of (x, y, z, a, b) returning a GeodeticResult
    """
    if algorithm is None:
        return cartesian_to_geodetic

    return _lookup(algorithm)


def convert_position(position, a, b, algorithm: Optional[str] = None) -> GeodeticResult:
    """
    Convert a position vector, or an array of them, to geodetic coordinates.

    Args:
        position:
            A length-3 sequence (x, y, z), or an array of shape (..., 3)

        a:
            The ellipsoid semimajor axis

        b:
            The ellipsoid semiminor axis

        algorithm: (Optional)
            'heikkinen' or 'olson'. Defaults to the active converter.

    Returns:
        GeodeticResult of (h, lon, lat), each shaped like position[..., 0]
    """
    pos = np.asarray(position, dtype=float)
    if pos.ndim == 0 or pos.shape[-1] != 3:
        raise ValueError(
            f'Position must have a trailing dimension of length 3, got shape {pos.shape}'
        )

    return get_converter(algorithm)(pos[..., 0], pos[..., 1], pos[..., 2], a, b)
