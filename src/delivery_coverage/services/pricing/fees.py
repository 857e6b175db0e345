"""Delivery fee rules for prepaid and cash-on-delivery orders."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from ...config import Settings, settings as default_settings

EXPRESS_DELIVERY_FEE = 500.0
STANDARD_DELIVERY_FEE = 200.0


class PaymentMethod(str, Enum):
    COD = "COD"
    JAZZCASH = "JAZZCASH"
    EASYPAISA = "EASYPAISA"


class DeliveryType(str, Enum):
    STANDARD = "STANDARD"
    EXPRESS = "EXPRESS"


def coerce_payment_method(value: Union[PaymentMethod, str]) -> PaymentMethod:
    try:
        return PaymentMethod(str(value.value if isinstance(value, Enum) else value).strip().upper())
    except ValueError as exc:
        raise ValueError(f"Unknown payment method '{value}'.") from exc


def coerce_delivery_type(value: Union[DeliveryType, str, None]) -> DeliveryType:
    if value is None or value == "":
        return DeliveryType.STANDARD
    try:
        return DeliveryType(str(value.value if isinstance(value, Enum) else value).strip().upper())
    except ValueError as exc:
        raise ValueError(f"Unknown delivery type '{value}'.") from exc


def _check_count(prior_cod_order_count: int) -> int:
    if isinstance(prior_cod_order_count, bool) or not isinstance(prior_cod_order_count, int):
        raise ValueError(f"prior_cod_order_count must be an integer, got {prior_cod_order_count!r}.")
    if prior_cod_order_count < 0:
        raise ValueError("prior_cod_order_count must be >= 0")
    return prior_cod_order_count


@dataclass(frozen=True, slots=True)
class CodFeeSchedule:
    """COD fee table keyed by how many COD orders the customer placed before.

    ``overrides`` maps specific prior-order counts to a fee; every other count
    pays ``default_fee``.
    """

    default_fee: float
    overrides: tuple[tuple[int, float], ...] = ()

    def fee_for(self, prior_cod_order_count: int) -> float:
        count = _check_count(prior_cod_order_count)
        for overridden_count, fee in self.overrides:
            if overridden_count == count:
                return fee
        return self.default_fee

    @classmethod
    def flat(cls, fee: float) -> "CodFeeSchedule":
        return cls(default_fee=fee)

    @classmethod
    def first_order_free(cls, fee: float) -> "CodFeeSchedule":
        return cls(default_fee=fee, overrides=((0, 0.0),))

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "CodFeeSchedule":
        config = config or default_settings
        if config.cod_free_delivery_first_order:
            return cls.first_order_free(config.cod_default_delivery_fee)
        return cls.flat(config.cod_default_delivery_fee)


def is_first_order_free(prior_cod_order_count: int) -> bool:
    """True when the customer has never placed a COD order before."""

    return _check_count(prior_cod_order_count) == 0


def compute_fee(
    payment_method: Union[PaymentMethod, str],
    delivery_type: Union[DeliveryType, str, None],
    prior_cod_order_count: int,
    *,
    cod_schedule: Optional[CodFeeSchedule] = None,
) -> float:
    """Return the delivery fee for an order.

    COD orders follow ``cod_schedule`` (built from settings when omitted) and
    ignore the delivery speed. Prepaid orders pay a flat fee per speed tier.
    """

    method = coerce_payment_method(payment_method)
    speed = coerce_delivery_type(delivery_type)
    count = _check_count(prior_cod_order_count)

    if method is PaymentMethod.COD:
        schedule = cod_schedule or CodFeeSchedule.from_settings()
        return schedule.fee_for(count)
    if speed is DeliveryType.EXPRESS:
        return EXPRESS_DELIVERY_FEE
    return STANDARD_DELIVERY_FEE
