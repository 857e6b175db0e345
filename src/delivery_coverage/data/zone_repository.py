"""Load delivery zone snapshots from the admin export file."""

from __future__ import annotations

import functools
import json
import logging
import math
from pathlib import Path
from typing import Any, Optional

from ..config import settings
from ..models.domain import Bounds, CitySubArea, GeoPoint, RangeSubArea, SubArea, Zone, ZoneKind


def _coerce_float(value: Any, *, context: str) -> float:
    """Parse a number from admin data, returning NaN for anything unusable."""

    if value is None or value == "":
        return math.nan
    if isinstance(value, bool):
        logging.warning(f"Ignoring boolean value for {context}")
        return math.nan
    try:
        return float(str(value).replace(",", "")) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        logging.warning(f"Unable to parse number for {context}: {value!r}")
        return math.nan


def _coerce_bool(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in {"true", "1", "yes", "y"}
    return bool(value)


def _coerce_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _parse_kind(value: Any) -> ZoneKind:
    text = str(value or "").strip().lower()
    if text == ZoneKind.CITY.value:
        return ZoneKind.CITY
    # Records saved before the city option existed have no type and are radius based.
    return ZoneKind.RANGE


def _parse_corner(raw: Any, *, context: str) -> GeoPoint:
    raw = raw if isinstance(raw, dict) else {}
    return GeoPoint(
        lat=_coerce_float(raw.get("lat", raw.get("latitude")), context=f"{context}.lat"),
        lon=_coerce_float(raw.get("lng", raw.get("lon", raw.get("longitude"))), context=f"{context}.lng"),
    )


def _has_values(raw: Any) -> bool:
    if not isinstance(raw, dict):
        return False
    return any(
        isinstance(corner, dict) and any(value not in (None, "") for value in corner.values())
        for corner in raw.values()
    )


def _parse_bounds(raw: Any, *, context: str) -> Optional[Bounds]:
    """Build bounds from a ``{northeast, southwest}`` record.

    A bounds record that is present but partly unparseable keeps NaN corners,
    which contain no point; only a missing or empty record means "no bounds".
    """

    if not _has_values(raw):
        return None
    return Bounds(
        northeast=_parse_corner(raw.get("northeast"), context=f"{context}.northeast"),
        southwest=_parse_corner(raw.get("southwest"), context=f"{context}.southwest"),
    )


def _parse_sub_areas(raw_areas: Any, parent_radius: float, *, zone_id: str) -> tuple[SubArea, ...]:
    if not isinstance(raw_areas, list):
        return ()

    sub_areas: list[SubArea] = []
    for index, raw in enumerate(raw_areas):
        if not isinstance(raw, dict):
            logging.warning(f"Skipping malformed sub-area #{index} in zone {zone_id}")
            continue
        context = f"zone {zone_id} sub-area #{index}"
        name = str(raw.get("name") or "").strip() or None
        if name:
            sub_areas.append(CitySubArea(name=name, bounds=_parse_bounds(raw.get("bounds"), context=context)))

        lat = _coerce_float(raw.get("latitude", raw.get("lat")), context=f"{context}.latitude")
        lon = _coerce_float(raw.get("longitude", raw.get("lon")), context=f"{context}.longitude")
        radius = _coerce_float(raw.get("radius", raw.get("radiusKm")), context=f"{context}.radius")
        if not (math.isfinite(radius) and radius > 0):
            # A radius of 0 means the society uses the zone-wide radius.
            radius = parent_radius
        if math.isnan(lat) and math.isnan(lon):
            continue
        sub_areas.append(RangeSubArea(lat=lat, lon=lon, radius_km=radius, name=name))
    return tuple(sub_areas)


def parse_zone(raw: dict, *, index: int = 0) -> Zone:
    """Convert one admin zone record into an immutable :class:`Zone`."""

    zone_id = str(raw.get("_id") or raw.get("id") or f"zone-{index}")
    shop = raw.get("shopLocation") if isinstance(raw.get("shopLocation"), dict) else None
    shop_location = None
    if shop is not None:
        shop_location = GeoPoint(
            lat=_coerce_float(shop.get("latitude", shop.get("lat")), context=f"zone {zone_id} shop latitude"),
            lon=_coerce_float(shop.get("longitude", shop.get("lon")), context=f"zone {zone_id} shop longitude"),
        )
    radius = _coerce_float(raw.get("deliveryRadius", raw.get("radiusKm")), context=f"zone {zone_id} radius")

    zone = Zone(
        id=zone_id,
        kind=_parse_kind(raw.get("deliveryType", raw.get("kind"))),
        city=str(raw.get("city") or "").strip(),
        shop_location=shop_location,
        radius_km=radius,
        sub_areas=_parse_sub_areas(raw.get("deliveryAreas", raw.get("subAreas")), radius, zone_id=zone_id),
        is_active=_coerce_bool(raw.get("isActive"), default=True),
        display_order=_coerce_int(raw.get("displayOrder")),
        name=(shop or {}).get("address"),
    )
    if zone.kind is ZoneKind.RANGE and not zone.is_range_eligible:
        logging.warning(
            f"Zone {zone_id} ({zone.city or 'no city'}) has no usable shop location or radius; "
            f"it can only match through its sub-areas"
        )
    return zone


@functools.lru_cache(maxsize=1)
def load_zones(source: Optional[Path] = None) -> tuple[Zone, ...]:
    """Load every configured zone, in file order."""

    json_path = source or settings.zones_file
    if not json_path.exists():
        raise FileNotFoundError(f"Zone file not found: {json_path}")

    with json_path.open(mode="r", encoding="utf-8") as handle:
        payload = json.load(handle)

    records = payload.get("zones", []) if isinstance(payload, dict) else payload
    if not isinstance(records, list):
        raise ValueError(f"Zone file '{json_path}' must contain a list of zones.")

    zones: list[Zone] = []
    for index, raw in enumerate(records):
        if not isinstance(raw, dict):
            logging.warning(f"Skipping malformed zone record #{index} in {json_path}")
            continue
        zones.append(parse_zone(raw, index=index))
    logging.info(f"Loaded {len(zones)} delivery zones from {json_path}")
    return tuple(zones)


def list_active_zones(source: Optional[Path] = None) -> tuple[Zone, ...]:
    """Active zones in file order; this order decides which zone wins an overlap."""

    return tuple(zone for zone in load_zones(source) if zone.is_active)


def set_zones_file(path: Path) -> None:
    """Update the active zone file and clear the cached snapshot."""

    settings.zones_file = path
    load_zones.cache_clear()
