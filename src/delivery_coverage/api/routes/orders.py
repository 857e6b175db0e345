"""API routes for order placement checks."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...models.domain import GeoPoint, Matched
from ...schemas.coverage import OrderQuoteRequest, OrderQuoteResponse
from ...services.coverage import InvalidCoverageQuery, quote_order, validate_for_order
from ...services.outputs.formatter import out_of_range_detail
from ...services.pricing import delivery_days_label
from .coverage import active_zones, invalid_input

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("/quote", response_model=OrderQuoteResponse, status_code=status.HTTP_200_OK)
def quote(payload: OrderQuoteRequest) -> OrderQuoteResponse:
    """Re-validate the saved delivery location and price the delivery.

    The coordinates and city must be the ones stored when the location was
    saved, so this verdict matches the one given at save time.
    """

    zones = active_zones()
    try:
        decision = validate_for_order(zones, GeoPoint(payload.lat, payload.lon), payload.city)
    except InvalidCoverageQuery as exc:
        if getattr(payload, exc.field, None) is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={
                    "error": "NO_LOCATION",
                    "field": exc.field,
                    "message": "Please select a delivery location before placing an order.",
                },
            ) from exc
        raise invalid_input(exc) from exc

    if not isinstance(decision, Matched):
        logging.info(
            f"[ORDER VALIDATION] Delivery not available at saved location "
            f"({payload.lat}, {payload.lon}); closest={decision.closest_distance_km}"
        )
        detail = out_of_range_detail(decision)
        detail["message"] += " Please update your delivery location to a valid area."
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)

    try:
        order_quote = quote_order(
            payment_method=payload.payment_method,
            delivery_type=payload.delivery_type,
            prior_cod_order_count=payload.prior_cod_order_count,
            order_date=payload.order_date,
            subtotal=payload.subtotal,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    logging.info(
        f"[ORDER VALIDATION] zone={decision.zone_id} fee={order_quote.delivery_fee} "
        f"expected={order_quote.expected_delivery_date.isoformat()}"
    )
    return OrderQuoteResponse(
        zone_id=decision.zone_id,
        normalized_city=decision.city,
        payment_method=order_quote.payment_method.value,
        delivery_type=order_quote.delivery_type.value,
        delivery_fee=order_quote.delivery_fee,
        is_first_cod_free=order_quote.is_first_cod_free,
        max_days=order_quote.max_days,
        expected_delivery_date=order_quote.expected_delivery_date,
        delivery_days_label=delivery_days_label(decision.city),
        total=order_quote.total,
    )
