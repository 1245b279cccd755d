"""Pydantic models shared across API routes."""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, field_validator

from worldclock.utils.time_utils import DayRelation, UnknownZoneError, get_zone


class ZoneEntryResponse(BaseModel):
    id: str
    city: str
    country: Optional[str] = None

    class Config:
        from_attributes = True


class ZoneSearchResponse(BaseModel):
    query: str
    count: int
    total: int
    zones: List[ZoneEntryResponse]


class ZoneDetailResponse(ZoneEntryResponse):
    offset_minutes: int
    offset_label: str
    time: str
    day: DayRelation
    device_timezone: str


class ClockResponse(BaseModel):
    zone_id: str
    city: str
    time: Optional[str] = None
    offset_label: Optional[str] = None
    day: Optional[DayRelation] = None
    error: Optional[str] = None

    class Config:
        from_attributes = True


class ClockBoardResponse(BaseModel):
    device_timezone: str
    generated_at: datetime
    clocks: List[ClockResponse]


class ClockCreate(BaseModel):
    zone: str

    @field_validator("zone")
    @classmethod
    def validate_zone(cls, value: str) -> str:
        value = value.strip()
        try:
            get_zone(value)
        except UnknownZoneError as exc:
            raise ValueError(str(exc)) from exc
        return value
