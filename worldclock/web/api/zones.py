"""Routes for browsing and searching the timezone catalog."""
from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query

from worldclock.config.settings import get_settings
from worldclock.config.timezones import ZoneCatalogEntry, city_from_zone_id, get_all_zones, search_zones
from worldclock.utils import time_utils

from . import deps, schemas

router = APIRouter(prefix="/api/zones", tags=["zones"])


@router.get("", response_model=schemas.ZoneSearchResponse)
def list_zones(
    q: str = Query("", description="City, country or zone id fragment"),
    limit: int | None = Query(default=None, ge=1, le=1000),
):
    catalog = get_all_zones()
    matches = search_zones(q, catalog, limit=limit or get_settings().search_limit)
    return schemas.ZoneSearchResponse(
        query=q,
        count=len(matches),
        total=len(catalog),
        zones=[schemas.ZoneEntryResponse.model_validate(entry) for entry in matches],
    )


@router.get("/{zone_id:path}", response_model=schemas.ZoneDetailResponse)
def get_zone_detail(zone_id: str, at: datetime = Depends(deps.get_instant)):
    settings = get_settings()
    entry = next((item for item in get_all_zones() if item.id == zone_id), None)
    if entry is None:
        entry = ZoneCatalogEntry(id=zone_id, city=city_from_zone_id(zone_id))

    device = time_utils.device_zone()
    try:
        return schemas.ZoneDetailResponse(
            id=entry.id,
            city=entry.city,
            country=entry.country,
            offset_minutes=time_utils.offset_minutes(zone_id, at),
            offset_label=time_utils.diff_label(zone_id, at, device=device, minus=settings.minus_sign),
            time=time_utils.time_hhmm(zone_id, at),
            day=time_utils.day_relative(zone_id, at, device=device),
            device_timezone=device,
        )
    except time_utils.UnknownZoneError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
