"""API routes for delivery coverage checks and address validation."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...data.zone_repository import list_active_zones
from ...models.domain import GeoPoint, Matched, Zone
from ...schemas.coverage import (
    CoverageCheckRequest,
    CoverageResponse,
    SaveLocationRequest,
    SavedLocationResponse,
)
from ...services.coverage import InvalidCoverageQuery, validate_and_resolve_for_save
from ...services.outputs.formatter import NO_ZONES_MESSAGE, decision_to_response, out_of_range_detail

router = APIRouter(prefix="/coverage", tags=["coverage"])


def active_zones() -> tuple[Zone, ...]:
    try:
        return list_active_zones()
    except FileNotFoundError as exc:
        logging.error(f"Delivery zones unavailable: {exc}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Delivery areas are not configured yet.",
        ) from exc
    except ValueError as exc:
        logging.exception(f"Failed to load delivery zones: {exc}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Delivery areas could not be loaded: {exc}",
        ) from exc


def invalid_input(exc: InvalidCoverageQuery) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail={"error": exc.error_code, "field": exc.field, "message": exc.message},
    )


@router.post("/check", response_model=CoverageResponse, status_code=status.HTTP_200_OK)
def check_coverage(payload: CoverageCheckRequest) -> CoverageResponse:
    """Public availability check; an uncovered point is a normal answer, not an error."""

    zones = active_zones()
    try:
        decision = validate_and_resolve_for_save(
            zones, GeoPoint(payload.lat, payload.lon), payload.city, payload.society
        )
    except InvalidCoverageQuery as exc:
        raise invalid_input(exc) from exc

    logging.info(
        f"[COVERAGE CHECK] ({payload.lat}, {payload.lon}) city={payload.city!r}: "
        f"{'matched ' + decision.zone_id if isinstance(decision, Matched) else 'not covered'}"
    )
    return decision_to_response(decision)


@router.post("/locations", response_model=SavedLocationResponse, status_code=status.HTTP_200_OK)
def save_location(payload: SaveLocationRequest) -> SavedLocationResponse:
    """Validate an address the customer is saving and return it normalized.

    Storing the result is up to the caller; the returned city is the matched
    zone's canonical city, not the one typed by the customer.
    """

    zones = active_zones()
    if not zones:
        logging.warning("[LOCATION SAVE] No active delivery areas configured")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "OUT_OF_RANGE", "message": NO_ZONES_MESSAGE},
        )

    try:
        decision = validate_and_resolve_for_save(
            zones, GeoPoint(payload.lat, payload.lon), payload.city, payload.society
        )
    except InvalidCoverageQuery as exc:
        raise invalid_input(exc) from exc

    if not isinstance(decision, Matched):
        logging.info(
            f"[LOCATION SAVE] Delivery not available at ({payload.lat}, {payload.lon}); "
            f"closest={decision.closest_distance_km} radius={decision.closest_radius_km} "
            f"checked={len(zones)} zones"
        )
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=out_of_range_detail(decision))

    logging.info(
        f"[LOCATION SAVE] Location validated: zone={decision.zone_id} via={decision.matched_via} "
        f"city={decision.city!r} (typed {payload.city!r})"
    )

    def _clean(value: str | None) -> str | None:
        return value.strip() if value and value.strip() else None

    return SavedLocationResponse(
        address=payload.address.strip(),
        lat=payload.lat,
        lon=payload.lon,
        city=decision.city or payload.city.strip(),
        society=_clean(payload.society),
        street_number=_clean(payload.street_number),
        house_number=_clean(payload.house_number),
        landmark=_clean(payload.landmark),
        zone_id=decision.zone_id,
    )
