import math

import pytest

from delivery_coverage.models.domain import Bounds, GeoPoint
from delivery_coverage.services.geospatial import (
    distance_km,
    haversine_km,
    point_in_bounds,
)


def _bounds(sw_lat: float, sw_lon: float, ne_lat: float, ne_lon: float) -> Bounds:
    return Bounds(northeast=GeoPoint(ne_lat, ne_lon), southwest=GeoPoint(sw_lat, sw_lon))


def test_haversine_same_point_is_zero():
    assert haversine_km(31.5204, 74.3587, 31.5204, 74.3587) == 0.0


def test_haversine_one_degree_along_meridian():
    expected = 6371.0 * math.radians(1.0)
    assert haversine_km(0.0, 10.0, 1.0, 10.0) == pytest.approx(expected, rel=1e-12)


@pytest.mark.parametrize(
    "a, b",
    [
        (GeoPoint(31.5204, 74.3587), GeoPoint(31.9, 74.9)),
        (GeoPoint(-33.8688, 151.2093), GeoPoint(51.5074, -0.1278)),
        (GeoPoint(24.86, 67.0), GeoPoint(24.8607, 67.0011)),
    ],
)
def test_distance_is_symmetric(a: GeoPoint, b: GeoPoint):
    assert distance_km(a, b) == distance_km(b, a)


def test_point_in_bounds_includes_edges():
    bounds = _bounds(24.80, 67.01, 24.84, 67.04)

    assert point_in_bounds(24.82, 67.02, bounds)
    assert point_in_bounds(24.80, 67.01, bounds)
    assert point_in_bounds(24.84, 67.04, bounds)
    assert not point_in_bounds(24.85, 67.02, bounds)
    assert not point_in_bounds(24.82, 67.05, bounds)


def test_point_in_bounds_rejects_inverted_and_nan_rectangles():
    inverted = _bounds(24.84, 67.04, 24.80, 67.01)
    broken = _bounds(math.nan, 67.01, 24.84, 67.04)

    assert not point_in_bounds(24.82, 67.02, inverted)
    assert not point_in_bounds(24.82, 67.02, broken)


def test_point_in_bounds_degenerate_rectangle():
    line = _bounds(24.80, 67.01, 24.80, 67.04)

    assert point_in_bounds(24.80, 67.02, line)
    assert not point_in_bounds(24.81, 67.02, line)
