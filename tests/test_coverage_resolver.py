import math
import random

import pytest

from delivery_coverage.models.domain import (
    CitySubArea,
    CoverageQuery,
    GeoPoint,
    Matched,
    NoMatch,
    RangeSubArea,
    Zone,
    ZoneKind,
)
from delivery_coverage.services.coverage import (
    InvalidCoverageQuery,
    resolve,
    validate_and_resolve_for_save,
    validate_for_order,
)
from delivery_coverage.services.geospatial import haversine_km


def _range_zone(zone_id: str, lat: float, lon: float, radius_km: float, city: str = "Lahore", **kwargs) -> Zone:
    return Zone(
        id=zone_id,
        kind=ZoneKind.RANGE,
        city=city,
        shop_location=GeoPoint(lat, lon),
        radius_km=radius_km,
        **kwargs,
    )


def _north_of(lat: float, distance_km: float) -> float:
    return lat + math.degrees(distance_km / 6371.0)


def test_end_to_end_lahore_scenario():
    zones = [_range_zone("lahore", 31.5204, 74.3587, 10.0)]

    inside = resolve(zones, CoverageQuery(lat=31.55, lon=74.40, city="Lahore"))
    outside = resolve(zones, CoverageQuery(lat=31.9, lon=74.9, city="Lahore"))

    assert isinstance(inside, Matched)
    assert inside.zone_id == "lahore"
    assert inside.matched_via == "range"
    assert inside.city == "Lahore"
    assert isinstance(outside, NoMatch)
    assert outside.closest_distance_km == pytest.approx(haversine_km(31.9, 74.9, 31.5204, 74.3587))
    assert outside.closest_distance_km > 10.0
    assert outside.closest_radius_km == 10.0


def test_first_listed_zone_wins_over_nearer_zone():
    zone_a = _range_zone("A", 31.5204, 74.3587, 20.0)
    zone_b = _range_zone("B", 31.55, 74.40, 5.0)
    query = CoverageQuery(lat=31.551, lon=74.401, city="Lahore")

    assert resolve([zone_a, zone_b], query).zone_id == "A"
    assert resolve([zone_b, zone_a], query).zone_id == "B"


def test_diagnostics_report_closest_miss():
    origin_lat, origin_lon = 31.0, 74.0
    zones = [
        _range_zone(f"Z{index}", _north_of(origin_lat, distance), origin_lon, 2.0)
        for index, distance in enumerate([12.4, 3.1, 8.0])
    ]

    decision = resolve(zones, CoverageQuery(lat=origin_lat, lon=origin_lon, city="Lahore"))

    assert isinstance(decision, NoMatch)
    assert decision.closest_distance_km == pytest.approx(3.1, abs=1e-6)
    assert decision.closest_radius_km == 2.0


def test_city_only_misses_have_no_diagnostics():
    zones = [
        Zone(id="K", kind=ZoneKind.CITY, city="Karachi"),
        _range_zone("broken", 31.5204, 74.3587, 0.0),
    ]

    decision = resolve(zones, CoverageQuery(lat=31.55, lon=74.40, city="Lahore"))

    assert decision == NoMatch()
    assert decision.closest_distance_km is None
    assert decision.closest_radius_km is None


def test_empty_snapshot_is_no_match():
    assert resolve([], CoverageQuery(lat=31.55, lon=74.40, city="Lahore")) == NoMatch()


def test_inactive_zones_are_ignored():
    zones = [
        _range_zone("inactive", 31.5204, 74.3587, 10.0, is_active=False),
        _range_zone("far", 33.7215, 73.0433, 8.0),
    ]

    decision = resolve(zones, CoverageQuery(lat=31.55, lon=74.40, city="Lahore"))

    assert isinstance(decision, NoMatch)
    assert decision.closest_radius_km == 8.0


def test_city_zone_match_returns_canonical_city():
    zones = [Zone(id="K", kind=ZoneKind.CITY, city="Karachi")]

    decision = validate_and_resolve_for_save(zones, GeoPoint(24.86, 67.0), "  karachi ")

    assert isinstance(decision, Matched)
    assert decision.city == "Karachi"
    assert decision.matched_via == "city"


@pytest.mark.parametrize(
    "lat, lon, field",
    [
        (math.nan, 74.4, "lat"),
        (31.5, math.inf, "lon"),
        (None, 74.4, "lat"),
        (31.5, None, "lon"),
        ("31.5", 74.4, "lat"),
        (120.0, 74.4, "lat"),
        (-90.5, 74.4, "lat"),
        (31.5, 180.5, "lon"),
    ],
)
def test_invalid_query_fails_fast(lat, lon, field):
    with pytest.raises(InvalidCoverageQuery) as excinfo:
        resolve([_range_zone("Z", 31.5204, 74.3587, 10.0)], CoverageQuery(lat=lat, lon=lon, city="Lahore"))

    assert excinfo.value.field == field
    assert excinfo.value.error_code == "INVALID_INPUT"


def test_invalid_query_raises_even_without_zones():
    with pytest.raises(InvalidCoverageQuery):
        resolve([], CoverageQuery(lat=math.nan, lon=74.0))


def test_save_and_order_flows_agree():
    zones = [
        Zone(
            id="K",
            kind=ZoneKind.CITY,
            city="Karachi",
            sub_areas=(CitySubArea(name="Saddar"),),
        ),
        _range_zone("L", 31.5204, 74.3587, 10.0, sub_areas=(RangeSubArea(31.4697, 74.4545, 4.0),)),
    ]
    points = [GeoPoint(31.55, 74.40), GeoPoint(31.47, 74.45), GeoPoint(31.9, 74.9), GeoPoint(24.86, 67.0)]

    for point in points:
        for city in ("Lahore", "Karachi"):
            assert validate_and_resolve_for_save(zones, point, city) == validate_for_order(zones, point, city)


def _random_zone(rng: random.Random, index: int) -> Zone:
    sub_areas = tuple(
        RangeSubArea(
            lat=rng.uniform(30.0, 33.0),
            lon=rng.uniform(73.0, 75.0),
            radius_km=rng.choice([0.0, rng.uniform(1.0, 15.0)]),
        )
        for _ in range(rng.randint(0, 3))
    )
    if rng.random() < 0.3:
        return Zone(id=f"C{index}", kind=ZoneKind.CITY, city=rng.choice(["Lahore", "Karachi"]), sub_areas=sub_areas)
    return _range_zone(
        f"R{index}",
        rng.uniform(30.0, 33.0),
        rng.uniform(73.0, 75.0),
        rng.choice([0.0, -1.0, rng.uniform(1.0, 40.0)]),
        sub_areas=sub_areas,
        is_active=rng.random() > 0.1,
    )


def test_resolve_is_deterministic_over_random_snapshots():
    rng = random.Random(20240101)
    for _ in range(200):
        zones = tuple(_random_zone(rng, index) for index in range(rng.randint(0, 6)))
        query = CoverageQuery(
            lat=rng.uniform(29.5, 33.5),
            lon=rng.uniform(72.5, 75.5),
            city=rng.choice(["Lahore", "Karachi", "Multan"]),
        )

        first = resolve(zones, query)
        second = resolve(zones, query)

        assert first == second
