"""Entry points used by the address-save and order-placement flows.

Both flows go through the same :func:`resolve`, so a point that was accepted
when the customer saved it is judged identically when they check out against
the same zone snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Sequence, Union

from ...models.domain import CoverageDecision, CoverageQuery, GeoPoint, Zone
from ..pricing.delivery_dates import estimate_delivery_window
from ..pricing.fees import (
    CodFeeSchedule,
    DeliveryType,
    PaymentMethod,
    coerce_delivery_type,
    coerce_payment_method,
    compute_fee,
    is_first_order_free,
)
from .resolver import resolve


def validate_and_resolve_for_save(
    zones: Sequence[Zone],
    point: GeoPoint,
    city: str,
    society: Optional[str] = None,
) -> CoverageDecision:
    """Check a delivery address the customer is saving.

    On a match, callers should store ``decision.city`` rather than the typed
    city so later lookups use the zone's canonical spelling.
    """

    query = CoverageQuery(lat=point.lat, lon=point.lon, city=city, society=society or None)
    return resolve(zones, query)


def validate_for_order(zones: Sequence[Zone], point: GeoPoint, city: str) -> CoverageDecision:
    """Re-check the customer's saved address at order placement."""

    return resolve(zones, CoverageQuery(lat=point.lat, lon=point.lon, city=city))


@dataclass(frozen=True, slots=True)
class OrderQuote:
    payment_method: PaymentMethod
    delivery_type: DeliveryType
    delivery_fee: float
    is_first_cod_free: bool
    max_days: int
    expected_delivery_date: date
    total: Optional[float] = None


def quote_order(
    *,
    payment_method: Union[PaymentMethod, str],
    delivery_type: Union[DeliveryType, str, None],
    prior_cod_order_count: int,
    order_date: Union[date, datetime],
    subtotal: Optional[float] = None,
    cod_schedule: Optional[CodFeeSchedule] = None,
) -> OrderQuote:
    """Combine the delivery fee and delivery window for an order being placed."""

    method = coerce_payment_method(payment_method)
    speed = coerce_delivery_type(delivery_type)
    fee = compute_fee(method, speed, prior_cod_order_count, cod_schedule=cod_schedule)
    window = estimate_delivery_window(order_date, speed)
    first_cod_free = (
        method is PaymentMethod.COD and is_first_order_free(prior_cod_order_count) and fee == 0
    )
    return OrderQuote(
        payment_method=method,
        delivery_type=speed,
        delivery_fee=fee,
        is_first_cod_free=first_cod_free,
        max_days=window.max_days,
        expected_delivery_date=window.expected_date,
        total=None if subtotal is None else subtotal + fee,
    )
