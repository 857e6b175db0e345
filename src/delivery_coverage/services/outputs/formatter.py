"""Turn coverage decisions into API payloads and customer-facing messages."""

from __future__ import annotations

from typing import Optional

from ...models.domain import CoverageDecision, Matched, NoMatch
from ...schemas.coverage import CoverageResponse

NOT_AVAILABLE_MESSAGE = "Delivery is not available at this location."
NO_ZONES_MESSAGE = (
    "No delivery areas are configured with a usable shop location and delivery radius."
)


def round_km(value: Optional[float]) -> Optional[float]:
    """Round a distance for display; the engine itself never rounds."""

    if value is None:
        return None
    return round(value, 1)


def _format_km(value: float) -> str:
    return f"{value:g}"


def no_coverage_message(decision: NoMatch) -> str:
    if decision.closest_distance_km is None or decision.closest_radius_km is None:
        return f"{NOT_AVAILABLE_MESSAGE} {NO_ZONES_MESSAGE}"
    return (
        f"{NOT_AVAILABLE_MESSAGE} Your location is {_format_km(round_km(decision.closest_distance_km))}km "
        f"away from the shop, but delivery is only available within "
        f"{_format_km(decision.closest_radius_km)}km radius."
    )


def decision_to_response(decision: CoverageDecision) -> CoverageResponse:
    if isinstance(decision, Matched):
        return CoverageResponse(
            matched=True,
            zone_id=decision.zone_id,
            matched_via=decision.matched_via,
            normalized_city=decision.city,
            distance_km=round_km(decision.distance_km),
            radius_km=decision.radius_km,
            sub_area=decision.sub_area,
            message="Delivery available",
        )
    return CoverageResponse(
        matched=False,
        closest_distance_km=round_km(decision.closest_distance_km),
        closest_radius_km=decision.closest_radius_km,
        message=no_coverage_message(decision),
    )


def out_of_range_detail(decision: NoMatch) -> dict:
    """Error body for flows that reject an uncovered location."""

    return {
        "error": "OUT_OF_RANGE",
        "message": no_coverage_message(decision),
        "distance": round_km(decision.closest_distance_km),
        "radius": decision.closest_radius_km,
    }
