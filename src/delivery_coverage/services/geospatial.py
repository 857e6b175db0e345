"""Geospatial helper functions."""

from __future__ import annotations

import math

from shapely.geometry import Point, box

from ..models.domain import Bounds, GeoPoint

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_km(a: GeoPoint, b: GeoPoint) -> float:
    return haversine_km(a.lat, a.lon, b.lat, b.lon)


def point_in_bounds(lat: float, lon: float, bounds: Bounds) -> bool:
    """Return True if the point lies inside the rectangle, edges included."""

    sw, ne = bounds.southwest, bounds.northeast
    if not all(math.isfinite(value) for value in (sw.lat, sw.lon, ne.lat, ne.lon, lat, lon)):
        return False
    # An inverted rectangle contains nothing; box() would silently reorder it.
    if sw.lat > ne.lat or sw.lon > ne.lon:
        return False
    if sw.lat == ne.lat or sw.lon == ne.lon:
        # Zero-area boxes are invalid polygons for shapely predicates.
        return sw.lat <= lat <= ne.lat and sw.lon <= lon <= ne.lon
    rectangle = box(sw.lon, sw.lat, ne.lon, ne.lat)
    return rectangle.covers(Point(lon, lat))
