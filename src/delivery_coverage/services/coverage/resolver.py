"""Resolve a coverage query against a snapshot of delivery zones."""

from __future__ import annotations

import math
from numbers import Real
from typing import Optional, Sequence

from ...models.domain import CoverageDecision, CoverageQuery, Hit, Matched, NoMatch, Zone
from .errors import InvalidCoverageQuery
from .matcher import match_zone

_COORDINATE_LIMITS = {"lat": 90.0, "lon": 180.0}


def validate_query(query: CoverageQuery) -> None:
    """Raise :class:`InvalidCoverageQuery` unless lat/lon are usable degrees."""

    for field, limit in _COORDINATE_LIMITS.items():
        value = getattr(query, field)
        if value is None:
            raise InvalidCoverageQuery(field, f"{field} is required.")
        if isinstance(value, bool) or not isinstance(value, Real):
            raise InvalidCoverageQuery(field, f"{field} must be a number, got {value!r}.")
        if not math.isfinite(value):
            raise InvalidCoverageQuery(field, f"{field} must be a finite number, got {value!r}.")
        if abs(value) > limit:
            raise InvalidCoverageQuery(field, f"{field} must be within [-{limit:g}, {limit:g}], got {value!r}.")


def resolve(zones: Sequence[Zone], query: CoverageQuery) -> CoverageDecision:
    """Return the first zone covering ``query``, or the closest-miss diagnostics.

    Zones are tried in the order given; when two zones cover the point, the
    earlier one wins even if the later one is nearer. Inactive zones are
    ignored. Zones with unusable shop coordinates or radius never raise, they
    simply cannot match by radius.
    """

    validate_query(query)

    closest_distance: Optional[float] = None
    closest_radius: Optional[float] = None
    for zone in zones:
        if not zone.is_active:
            continue
        result = match_zone(zone, query)
        if isinstance(result, Hit):
            return Matched(
                zone_id=zone.id,
                matched_via=result.via,
                city=zone.city,
                distance_km=result.distance_km,
                radius_km=result.radius_km,
                sub_area=result.sub_area,
            )
        if result.distance_km is None:
            continue
        if closest_distance is None or result.distance_km < closest_distance:
            closest_distance = result.distance_km
            closest_radius = result.radius_km

    return NoMatch(closest_distance_km=closest_distance, closest_radius_km=closest_radius)
