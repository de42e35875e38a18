import math

import numpy as np
import pytest
from pytest import approx

from geoinverse import WGS84, MOON
from geoinverse.conversion import *
from geoinverse.geodetic import GeodeticResult
from geoinverse.utils.logging import reset_warnings

from tests import geodetic_grid
from tests.functions import assert_geodetic_equal


A, B = WGS84.a, WGS84.b
BOTH = pytest.mark.parametrize('converter', [heikkinen, olson], ids=['heikkinen', 'olson'])


@pytest.fixture(autouse=True)
def fresh_warnings():
    reset_warnings()
    yield
    reset_warnings()


@BOTH
def test_equatorial_surface_point(converter):
    h, lon, lat = converter(A, 0., 0., A, B)
    assert h == approx(0., abs=1e-9 * A)
    assert lon == 0.
    assert lat == approx(0., abs=1e-9)


@BOTH
def test_polar_surface_point(converter):
    h, lon, lat = converter(0., 0., B, A, B)
    assert h == approx(0., abs=1e-9 * A)
    assert lon == 0.
    assert lat == approx(math.pi / 2, abs=1e-9)

    h, lon, lat = converter(0., 0., -B, A, B)
    assert h == approx(0., abs=1e-9 * A)
    assert lat == approx(-math.pi / 2, abs=1e-9)


@BOTH
def test_sphere_reduces_to_spherical_coordinates(converter):
    r = MOON.a + 100.
    x, y, z = r * math.cos(0.3) * math.cos(1.2), r * math.cos(0.3) * math.sin(1.2), r * math.sin(0.3)
    h, lon, lat = converter(x, y, z, MOON.a, MOON.b)
    assert h == approx(100., abs=1e-9)
    assert lon == approx(1.2, abs=1e-12)
    assert lat == approx(0.3, abs=1e-12)


@BOTH
def test_round_trip(converter):
    expected, (x, y, z) = geodetic_grid()
    assert_geodetic_equal(
        converter(x, y, z, A, B),
        expected,
        angle_tol=1e-6,
        altitude_tol=1e-6 * A,
    )


@BOTH
def test_round_trip_meters(converter):
    ellipsoid = WGS84.from_flattening(WGS84.a * 1000., WGS84.flattening)
    expected, (x, y, z) = geodetic_grid(ellipsoid)
    assert_geodetic_equal(
        converter(x, y, z, ellipsoid.a, ellipsoid.b),
        expected,
        angle_tol=1e-6,
        altitude_tol=1e-6 * ellipsoid.a,
    )


def test_converters_agree():
    _, (x, y, z) = geodetic_grid()
    closed = heikkinen(x, y, z, A, B)
    series = olson(x, y, z, A, B)

    assert series.lat == approx(closed.lat, abs=1e-6)
    assert series.lon == approx(closed.lon, abs=1e-6)
    assert series.h == approx(closed.h, abs=1e-6 * A)


@BOTH
def test_longitude_is_atan2(converter):
    _, (x, y, z) = geodetic_grid()
    result = converter(x, y, z, A, B)
    assert np.array_equal(result.lon, np.arctan2(y, x))


@BOTH
def test_equatorial_symmetry(converter):
    _, (x, y, z) = geodetic_grid()
    north = converter(x, y, z, A, B)
    south = converter(x, y, -z, A, B)

    assert np.array_equal(south.lon, north.lon)
    assert np.array_equal(south.h, north.h)
    assert south.lat == approx(-north.lat, abs=1e-15)


@BOTH
def test_broadcasting(converter):
    x = np.array([[7000., 6500.], [6400., 8000.]])
    result = converter(x, 10., 1000., A, B)
    assert result.h.shape == (2, 2)
    assert result.lon.shape == (2, 2)
    assert result.lat.shape == (2, 2)

    for i in range(2):
        for j in range(2):
            single = converter(x[i, j], 10., 1000., A, B)
            assert result.h[i, j] == approx(single.h, abs=1e-12)
            assert result.lat[i, j] == approx(single.lat, abs=1e-15)


@BOTH
def test_scalar_input_returns_floats(converter):
    result = converter(7000., 100., 100., A, B)
    assert isinstance(result, GeodeticResult)
    assert all(isinstance(val, float) for val in result)


def test_heikkinen_near_origin_is_finite():
    for position in [(0., 0., 0.), (0., 0., 50.), (99., 0., 0.)]:
        h, lon, lat = heikkinen(*position, A, B)
        assert np.isfinite(h)
        assert np.isfinite(lon)
        assert np.isfinite(lat)


def test_heikkinen_deep_interior_warns(caplog):
    h, lon, lat = heikkinen(10., 0., 10., A, B)
    assert np.isnan(h)
    assert lon == 0.
    assert 'NaN' in caplog.text


def test_olson_degenerate_sentinel(caplog):
    for position in [(0., 0., 0.), (99.9, 0., 0.), (50., 50., 50.), (0., 0., -99.)]:
        assert olson(*position, A, B) == (-1e7, 0., 0.)

    assert 'sentinel' in caplog.text

    # Radius of exactly 100 is converted
    h, _, _ = olson(100., 0., 0., A, B)
    assert h != -1e7


def test_olson_degenerate_sentinel_in_array():
    x = np.array([0., 7000., 60.])
    h, lon, lat = olson(x, 0., 0., A, B)
    assert h[0] == -1e7 and lon[0] == 0. and lat[0] == 0.
    assert h[2] == -1e7 and lon[2] == 0. and lat[2] == 0.
    assert h[1] == approx(7000. - A, abs=1e-9)


def test_olson_coefficients():
    coeffs = olson_coefficients(MOON.a, MOON.b)
    assert coeffs == (0., 0., 0., 0., 0., 0., 1.)

    coeffs = olson_coefficients(A, B)
    assert coeffs.e2 == approx(WGS84.eccentricity_squared, rel=1e-12)
    assert coeffs.a1 == approx(A * coeffs.e2)
    assert coeffs.a4 == approx(2.5 * coeffs.a1 ** 2)
    assert coeffs.a5 == approx(coeffs.a1 + coeffs.a3)
    assert coeffs.a6 == approx(1 - coeffs.e2)


def test_series_latitude_on_sphere():
    coeffs = olson_coefficients(MOON.a, MOON.b)
    assert series_sin_latitude(3000., 4000., coeffs) == approx(0.8, abs=1e-15)
    assert series_cos_latitude(3000., 4000., coeffs) == approx(0.6, abs=1e-15)


def test_series_sin_latitude_on_ellipsoid():
    coeffs = olson_coefficients(A, B)
    for lat_deg in (5., 30., 50.):
        lat = math.radians(lat_deg)
        w, _, zp = WGS84.to_cartesian(0., 0., lat)
        estimate = series_sin_latitude(w, zp, coeffs)
        geocentric = zp / math.hypot(w, zp)

        assert estimate == approx(math.sin(lat), abs=1e-5)
        assert abs(estimate - math.sin(lat)) < abs(geocentric - math.sin(lat))


def test_series_cos_latitude_on_ellipsoid():
    coeffs = olson_coefficients(A, B)
    for lat_deg in (60., 75., 85.):
        lat = math.radians(lat_deg)
        w, _, zp = WGS84.to_cartesian(0., 0., lat)
        estimate = series_cos_latitude(w, zp, coeffs)
        geocentric = w / math.hypot(w, zp)

        assert estimate == approx(math.cos(lat), abs=1e-5)
        assert abs(estimate - math.cos(lat)) < abs(geocentric - math.cos(lat))


def test_set_conversion_algorithm():
    try:
        assert get_converter() is heikkinen

        set_conversion_algorithm('olson')
        assert get_converter() is olson

        set_conversion_algorithm('heikkinen')
        assert get_converter() is heikkinen

        with pytest.raises(ValueError):
            set_conversion_algorithm('bowring')

        assert get_converter() is heikkinen
    finally:
        set_conversion_algorithm('heikkinen')


def test_get_converter():
    assert get_converter('olson') is olson
    assert get_converter('heikkinen') is heikkinen

    with pytest.raises(ValueError):
        get_converter('vincenty')


def test_convert_position():
    result = convert_position([A, 0., 0.], A, B, algorithm='olson')
    assert result.h == approx(0., abs=1e-9)
    assert result.lat == 0.

    positions = np.array([[7000., 0., 0.], [0., 0., 7000.], [0., 0., 0.]])
    result = convert_position(positions, A, B, algorithm='olson')
    assert result.h.shape == (3,)
    assert result.h[0] == approx(7000. - A, abs=1e-9)
    assert result.lat[1] == approx(math.pi / 2, abs=1e-9)
    assert result.h[2] == -1e7

    try:
        set_conversion_algorithm('olson')
        assert convert_position([0., 0., 0.], A, B).h == -1e7
    finally:
        set_conversion_algorithm('heikkinen')

    with pytest.raises(ValueError):
        convert_position([1., 2.], A, B)

    with pytest.raises(ValueError):
        convert_position(5., A, B)
