"""Render saved zones into clock rows for display."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from worldclock.config.timezones import city_from_zone_id
from worldclock.utils.time_utils import (
    MINUS_SIGN,
    DayRelation,
    UnknownZoneError,
    day_relative,
    device_zone,
    diff_label,
    time_hhmm,
    to_utc,
)

logger = logging.getLogger("worldclock.board")


@dataclass(frozen=True)
class ClockRow:
    zone_id: str
    city: str
    time: Optional[str] = None
    offset_label: Optional[str] = None
    day: Optional[DayRelation] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class ClockBoard:
    device_zone: str
    instant: datetime
    rows: list[ClockRow]


def render_clock(zone_id: str, instant: datetime, *, device: str, minus: str = MINUS_SIGN) -> ClockRow:
    """Render one row; an unknown zone yields an error row instead of raising."""
    city = city_from_zone_id(zone_id)
    try:
        return ClockRow(
            zone_id=zone_id,
            city=city,
            time=time_hhmm(zone_id, instant),
            offset_label=diff_label(zone_id, instant, device=device, minus=minus),
            day=day_relative(zone_id, instant, device=device),
        )
    except UnknownZoneError as exc:
        logger.warning("Cannot render clock for %s: %s", zone_id, exc)
        return ClockRow(zone_id=zone_id, city=city, error=str(exc))


def render_board(
    zone_ids: Iterable[str],
    instant: datetime | None = None,
    *,
    device: str | None = None,
    minus: str = MINUS_SIGN,
) -> ClockBoard:
    """Render every saved zone against one instant and one device zone."""
    moment = to_utc(instant)
    device = device or device_zone()
    rows = [render_clock(zone_id, moment, device=device, minus=minus) for zone_id in zone_ids]
    return ClockBoard(device_zone=device, instant=moment, rows=rows)
