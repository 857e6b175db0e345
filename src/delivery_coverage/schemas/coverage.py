"""Pydantic request/response models for coverage and order endpoints."""

from __future__ import annotations

from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CoverageCheckRequest(CamelModel):
    # Coordinates stay optional here so a missing value reaches the engine's
    # INVALID_INPUT path with a field name instead of a generic schema error.
    lat: Optional[float] = Field(default=None, description="Latitude in degrees.")
    lon: Optional[float] = Field(default=None, description="Longitude in degrees.")
    city: str = Field(default="", description="City typed or reverse-geocoded for the address.")
    society: Optional[str] = Field(default=None, description="Society or neighbourhood name.")


class SaveLocationRequest(CoverageCheckRequest):
    address: str = Field(..., min_length=1)
    street_number: Optional[str] = None
    house_number: Optional[str] = None
    landmark: Optional[str] = None


class CoverageResponse(CamelModel):
    matched: bool
    zone_id: Optional[str] = None
    matched_via: Optional[Literal["city", "range", "subarea-range", "subarea-city"]] = None
    normalized_city: Optional[str] = None
    distance_km: Optional[float] = None
    radius_km: Optional[float] = None
    sub_area: Optional[str] = None
    closest_distance_km: Optional[float] = None
    closest_radius_km: Optional[float] = None
    message: str


class SavedLocationResponse(CamelModel):
    address: str
    lat: float
    lon: float
    city: str
    society: Optional[str] = None
    street_number: Optional[str] = None
    house_number: Optional[str] = None
    landmark: Optional[str] = None
    zone_id: str


class OrderQuoteRequest(CamelModel):
    lat: Optional[float] = Field(default=None, description="Latitude of the saved delivery location.")
    lon: Optional[float] = Field(default=None, description="Longitude of the saved delivery location.")
    city: str = Field(default="", description="City stored with the saved delivery location.")
    payment_method: Literal["COD", "JAZZCASH", "EASYPAISA"]
    delivery_type: Optional[Literal["STANDARD", "EXPRESS"]] = None
    prior_cod_order_count: int = Field(default=0, ge=0)
    order_date: date
    subtotal: Optional[float] = Field(default=None, ge=0.0)


class OrderQuoteResponse(CamelModel):
    zone_id: str
    normalized_city: str
    payment_method: str
    delivery_type: str
    delivery_fee: float
    is_first_cod_free: bool
    max_days: int
    expected_delivery_date: date
    delivery_days_label: str
    total: Optional[float] = None
