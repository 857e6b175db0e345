"""Application configuration and settings management."""

from pathlib import Path
from typing import Any

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="DCE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Delivery Coverage API"
    api_prefix: str = "/api"
    zones_file: Path = Field(
        default=Path("data/delivery_zones.json"),
        description="Delivery zone snapshot exported from the admin panel.",
    )
    cod_default_delivery_fee: float = Field(
        default=200.0,
        ge=0.0,
        description="Delivery fee charged on cash-on-delivery orders.",
    )
    cod_free_delivery_first_order: bool = Field(
        default=True,
        description="Waive the COD delivery fee on a customer's first COD order.",
    )
    fast_delivery_cities: tuple[str, ...] = Field(
        default=("Lahore", "Karachi", "Islamabad", "Rawalpindi"),
        description="Cities served by the fast delivery lane (shown as 1-3 days).",
    )
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("zones_file", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", "fast_delivery_cities", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
