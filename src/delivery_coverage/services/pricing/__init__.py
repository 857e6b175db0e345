"""Order pricing helpers."""

from .delivery_dates import DeliveryWindow, delivery_days_label, estimate_delivery_window
from .fees import (
    CodFeeSchedule,
    DeliveryType,
    PaymentMethod,
    compute_fee,
    is_first_order_free,
)

__all__ = [
    "CodFeeSchedule",
    "DeliveryType",
    "DeliveryWindow",
    "PaymentMethod",
    "compute_fee",
    "delivery_days_label",
    "estimate_delivery_window",
    "is_first_order_free",
]
