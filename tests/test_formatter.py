from delivery_coverage.models.domain import Matched, NoMatch
from delivery_coverage.services.outputs.formatter import (
    decision_to_response,
    no_coverage_message,
    out_of_range_detail,
)


def test_no_coverage_message_with_diagnostics():
    message = no_coverage_message(NoMatch(closest_distance_km=12.449, closest_radius_km=5.0))

    assert message == (
        "Delivery is not available at this location. Your location is 12.4km away from the shop, "
        "but delivery is only available within 5km radius."
    )


def test_no_coverage_message_without_diagnostics():
    message = no_coverage_message(NoMatch())

    assert message.startswith("Delivery is not available at this location.")
    assert "No delivery areas are configured" in message


def test_matched_response_rounds_distance_only():
    response = decision_to_response(
        Matched(zone_id="Z", matched_via="range", city="Lahore", distance_km=5.1149, radius_km=10.25)
    )

    assert response.matched
    assert response.distance_km == 5.1
    assert response.radius_km == 10.25
    assert response.model_dump(by_alias=True)["normalizedCity"] == "Lahore"


def test_out_of_range_detail():
    detail = out_of_range_detail(NoMatch(closest_distance_km=3.14159, closest_radius_km=2.0))

    assert detail["error"] == "OUT_OF_RANGE"
    assert detail["distance"] == 3.1
    assert detail["radius"] == 2.0
