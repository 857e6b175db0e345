"""Expected delivery dates by delivery speed."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional, Sequence, Union

from ...config import settings
from ...models.domain import normalize_name
from .fees import DeliveryType, coerce_delivery_type

MAX_DELIVERY_DAYS = {
    DeliveryType.EXPRESS: 2,
    DeliveryType.STANDARD: 5,
}


@dataclass(frozen=True, slots=True)
class DeliveryWindow:
    max_days: int
    expected_date: date


def estimate_delivery_window(
    order_date: Union[date, datetime],
    delivery_type: Union[DeliveryType, str, None],
) -> DeliveryWindow:
    """Add the speed tier's day allowance to the order's calendar date."""

    if isinstance(order_date, datetime):
        order_date = order_date.date()
    max_days = MAX_DELIVERY_DAYS[coerce_delivery_type(delivery_type)]
    return DeliveryWindow(max_days=max_days, expected_date=order_date + timedelta(days=max_days))


def delivery_days_label(city: Optional[str], fast_cities: Optional[Sequence[str]] = None) -> str:
    """Human-readable delivery estimate shown on product and checkout pages."""

    if not normalize_name(city):
        return "3-5 days"
    fast = {normalize_name(name) for name in (fast_cities if fast_cities is not None else settings.fast_delivery_cities)}
    return "1-3 days" if normalize_name(city) in fast else "3-5 days"
