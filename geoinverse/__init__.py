from geoinverse._version import __version__  # noqa: F401
from geoinverse.utils.logging import LOGGER
from geoinverse.ellipsoid import Ellipsoid, GRS80, MARS, MOON, WGS84
from geoinverse.geodetic import GeodeticResult, geodetic_to_cartesian
from geoinverse.conversion import (
    convert_position, get_converter, heikkinen, olson, set_conversion_algorithm
)


__all__ = [
    'Ellipsoid',
    'GeodeticResult',
    'GRS80',
    'MARS',
    'MOON',
    'WGS84',
    'convert_position',
    'geodetic_to_cartesian',
    'get_converter',
    'heikkinen',
    'olson',
    'set_conversion_algorithm',
    'LOGGER',
]
