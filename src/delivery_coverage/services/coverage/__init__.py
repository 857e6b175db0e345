"""Delivery coverage engine."""

from .errors import InvalidCoverageQuery
from .matcher import match_zone
from .resolver import resolve, validate_query
from .service import OrderQuote, quote_order, validate_and_resolve_for_save, validate_for_order

__all__ = [
    "InvalidCoverageQuery",
    "OrderQuote",
    "match_zone",
    "quote_order",
    "resolve",
    "validate_and_resolve_for_save",
    "validate_for_order",
    "validate_query",
]
