"""Metadata endpoints for UI configuration options."""
from __future__ import annotations

from fastapi import APIRouter

from worldclock.config.settings import get_settings
from worldclock.utils.time_utils import device_zone

router = APIRouter(prefix="/api/meta", tags=["meta"])


@router.get("/options", response_model=dict)
def get_options() -> dict:
    settings = get_settings()
    return {
        "app_name": settings.app_name,
        "device_timezone": device_zone(),
        "refresh_interval_seconds": settings.refresh_interval_seconds,
        "minus_sign": settings.minus_sign,
        "search_limit": settings.search_limit,
    }
