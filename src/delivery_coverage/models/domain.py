"""Domain models for delivery zones and coverage decisions."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Literal, Optional, Union

MatchedVia = Literal["city", "range", "subarea-range", "subarea-city"]


def _usable(value: float) -> bool:
    # Zero is how the admin form stores an unset coordinate.
    return math.isfinite(value) and value != 0


def normalize_name(value: Optional[str]) -> str:
    """Case-fold and trim a city or society name for comparison."""

    return (value or "").strip().lower()


class ZoneKind(str, Enum):
    CITY = "city"
    RANGE = "range"


@dataclass(frozen=True, slots=True)
class GeoPoint:
    lat: float
    lon: float


@dataclass(frozen=True, slots=True)
class Bounds:
    """Axis-aligned rectangle given by its north-east and south-west corners."""

    northeast: GeoPoint
    southwest: GeoPoint


@dataclass(frozen=True, slots=True)
class CitySubArea:
    """Named society inside a city zone, optionally restricted to a rectangle."""

    name: str
    bounds: Optional[Bounds] = None


@dataclass(frozen=True, slots=True)
class RangeSubArea:
    """Secondary circular geofence attached to a zone."""

    lat: float
    lon: float
    radius_km: float
    name: Optional[str] = None

    @property
    def is_eligible(self) -> bool:
        return (
            _usable(self.lat)
            and _usable(self.lon)
            and math.isfinite(self.radius_km)
            and self.radius_km > 0
        )

    @property
    def center(self) -> GeoPoint:
        return GeoPoint(self.lat, self.lon)


SubArea = Union[CitySubArea, RangeSubArea]


@dataclass(frozen=True, slots=True)
class Zone:
    """A configured delivery capability, matched by city name or by radius."""

    id: str
    kind: ZoneKind
    city: str
    shop_location: Optional[GeoPoint] = None
    radius_km: float = 0.0
    sub_areas: tuple[SubArea, ...] = ()
    is_active: bool = True
    display_order: int = 0
    name: Optional[str] = None

    @property
    def is_range_eligible(self) -> bool:
        """True when the shop location and radius can back a radius check.

        Zones failing this are skipped for their own range check rather than
        treated as errors; their range sub-areas are still evaluated.
        """

        if self.shop_location is None:
            return False
        return (
            _usable(self.shop_location.lat)
            and _usable(self.shop_location.lon)
            and math.isfinite(self.radius_km)
            and self.radius_km > 0
        )

    @property
    def city_sub_areas(self) -> tuple[CitySubArea, ...]:
        return tuple(area for area in self.sub_areas if isinstance(area, CitySubArea))

    @property
    def range_sub_areas(self) -> tuple[RangeSubArea, ...]:
        return tuple(area for area in self.sub_areas if isinstance(area, RangeSubArea))


@dataclass(frozen=True, slots=True)
class CoverageQuery:
    lat: float
    lon: float
    city: str = ""
    society: Optional[str] = None

    @property
    def point(self) -> GeoPoint:
        return GeoPoint(self.lat, self.lon)


@dataclass(frozen=True, slots=True)
class Hit:
    via: MatchedVia
    distance_km: Optional[float] = None
    radius_km: Optional[float] = None
    sub_area: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Miss:
    distance_km: Optional[float] = None
    radius_km: Optional[float] = None


MatchResult = Union[Hit, Miss]


@dataclass(frozen=True, slots=True)
class Matched:
    zone_id: str
    matched_via: MatchedVia
    city: str
    distance_km: Optional[float] = None
    radius_km: Optional[float] = None
    sub_area: Optional[str] = None


@dataclass(frozen=True, slots=True)
class NoMatch:
    closest_distance_km: Optional[float] = None
    closest_radius_km: Optional[float] = None


CoverageDecision = Union[Matched, NoMatch]
