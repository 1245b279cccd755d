"""Health and status endpoints."""
from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter

from worldclock.config.timezones import get_all_zones
from worldclock.utils.time_utils import device_zone

router = APIRouter(tags=["status"])


@router.get("/health")
def healthcheck() -> dict:
    now = datetime.now(timezone.utc)
    return {
        "status": "ok",
        "timestamp": now.isoformat(),
        "device_timezone": device_zone(),
        "catalog_size": len(get_all_zones()),
    }
