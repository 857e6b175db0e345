"""Evaluate a single delivery zone against a coverage query."""

from __future__ import annotations

from typing import Optional

from ...models.domain import (
    CitySubArea,
    CoverageQuery,
    GeoPoint,
    Hit,
    MatchResult,
    Miss,
    Zone,
    ZoneKind,
    normalize_name,
)
from ..geospatial import distance_km, point_in_bounds


def _find_city_sub_area(zone: Zone, society: str) -> Optional[CitySubArea]:
    wanted = normalize_name(society)
    for sub_area in zone.city_sub_areas:
        if normalize_name(sub_area.name) == wanted:
            return sub_area
    return None


def _match_city(zone: Zone, query: CoverageQuery) -> MatchResult:
    if not normalize_name(zone.city) or normalize_name(zone.city) != normalize_name(query.city):
        return Miss()
    if not normalize_name(query.society):
        return Hit("city")

    sub_area = _find_city_sub_area(zone, query.society or "")
    if sub_area is None:
        # An unknown society adds no constraint beyond the city itself.
        return Hit("city")
    if sub_area.bounds is None or point_in_bounds(query.lat, query.lon, sub_area.bounds):
        return Hit("subarea-city", sub_area=sub_area.name)
    return Miss()


def _match_radius(center: GeoPoint, radius_km: float, query: CoverageQuery) -> tuple[bool, float]:
    distance = distance_km(query.point, center)
    return distance <= radius_km, distance


def _match_range(zone: Zone, query: CoverageQuery) -> MatchResult:
    if zone.shop_location is None or not zone.is_range_eligible:
        return Miss()
    inside, distance = _match_radius(zone.shop_location, zone.radius_km, query)
    if inside:
        return Hit("range", distance_km=distance, radius_km=zone.radius_km)
    return Miss(distance_km=distance, radius_km=zone.radius_km)


def _closer(current: Miss, candidate: Miss) -> Miss:
    if candidate.distance_km is None:
        return current
    if current.distance_km is None or candidate.distance_km < current.distance_km:
        return candidate
    return current


def match_zone(zone: Zone, query: CoverageQuery) -> MatchResult:
    """Match ``query`` against ``zone`` and its range sub-areas.

    The parent zone is checked first according to its kind. When it does not
    hit, every eligible range sub-area is tried in order; the first one that
    contains the point yields ``Hit("subarea-range")``. A miss carries the
    smallest distance seen among the parent and its sub-areas, or no distance
    when nothing radius-based was eligible.
    """

    match zone.kind:
        case ZoneKind.CITY:
            parent = _match_city(zone, query)
        case ZoneKind.RANGE:
            parent = _match_range(zone, query)
        case _:
            parent = Miss()

    if isinstance(parent, Hit):
        return parent

    closest = parent
    for sub_area in zone.range_sub_areas:
        if not sub_area.is_eligible:
            continue
        inside, distance = _match_radius(sub_area.center, sub_area.radius_km, query)
        if inside:
            return Hit(
                "subarea-range",
                distance_km=distance,
                radius_km=sub_area.radius_km,
                sub_area=sub_area.name,
            )
        closest = _closer(closest, Miss(distance_km=distance, radius_km=sub_area.radius_km))
    return closest

