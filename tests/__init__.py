import numpy as np

from geoinverse import WGS84
from geoinverse.geodetic import geodetic_to_cartesian


def geodetic_grid(ellipsoid=WGS84):
    """
    A sample of (h, lon, lat) values spanning pole to pole, and their Cartesian
    positions on the given ellipsoid. Altitudes are expressed in the
    ellipsoid's length unit, scaled from kilometers.
    """
    scale = ellipsoid.a / WGS84.a
    lat = np.radians([-89.5, -75., -60., -45., -30., -10., 0., 10., 30., 45., 60., 75., 89.5])
    lon = np.radians([-170., -90., 0., 45., 179.])
    h = np.array([-5., 0., 1., 400., 35786.]) * scale

    h, lon, lat = (arr.ravel() for arr in np.meshgrid(h, lon, lat, indexing='ij'))
    x, y, z = geodetic_to_cartesian(h, lon, lat, ellipsoid.a, ellipsoid.b)
    return (h, lon, lat), (x, y, z)
