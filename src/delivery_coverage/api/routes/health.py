"""Health endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, status

from ...config import settings

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/zones", status_code=status.HTTP_200_OK)
def health_zones() -> dict:
    """Report whether the zone snapshot loads and how many zones are active."""
    from ...data.zone_repository import list_active_zones, load_zones

    try:
        zones = load_zones()
        active = list_active_zones()
        return {
            "service": "zones",
            "healthy": True,
            "zones_file": str(settings.zones_file),
            "total_zones": len(zones),
            "active_zones": len(active),
        }
    except (FileNotFoundError, ValueError) as e:
        logging.warning(f"Zone health check failed: {e}")
        return {"service": "zones", "healthy": False, "error": str(e)}
