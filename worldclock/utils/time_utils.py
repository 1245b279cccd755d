"""Timezone-aware clock computations.

Every function takes an explicit instant; ``None`` means "now" and is read at
call time. Offsets are derived from zone-local calendar fields rather than a
table so fractional offsets (+5:30, +5:45) and DST transitions come out right.
"""
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from enum import Enum
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from worldclock.config.settings import detect_device_timezone

MINUS_SIGN = "−"

# Every zone-local rendering of an instant in this range stays within datetime limits.
MIN_INSTANT = datetime.min.replace(tzinfo=timezone.utc) + timedelta(days=2)
MAX_INSTANT = datetime.max.replace(tzinfo=timezone.utc) - timedelta(days=2)


class UnknownZoneError(LookupError):
    """Raised when a zone id is not recognised by the tz database."""

    def __init__(self, zone_id: str) -> None:
        super().__init__(f"Unknown time zone '{zone_id}'")
        self.zone_id = zone_id


class InstantOutOfRangeError(ValueError):
    """Raised when an instant is too close to the datetime limits to render in every zone."""

    def __init__(self, instant: datetime) -> None:
        super().__init__(
            f"Instant {instant.isoformat()} is outside the supported range "
            f"{MIN_INSTANT.isoformat()} to {MAX_INSTANT.isoformat()}"
        )
        self.instant = instant


class DayRelation(str, Enum):
    TODAY = "Today"
    TOMORROW = "Tomorrow"
    YESTERDAY = "Yesterday"


def device_zone() -> str:
    """Return the device zone id, resolved fresh on every call."""
    return detect_device_timezone()


def get_zone(zone_id: str) -> ZoneInfo:
    # Directory names such as "America" surface as OSError from the tz loader.
    try:
        return ZoneInfo(zone_id)
    except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
        raise UnknownZoneError(zone_id) from exc


def to_utc(instant: datetime | None = None) -> datetime:
    """Normalise an instant to aware UTC; naive values are assumed to be UTC."""
    if instant is None:
        return datetime.now(timezone.utc)

    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)

    try:
        moment = instant.astimezone(timezone.utc)
    except OverflowError as exc:
        raise InstantOutOfRangeError(instant) from exc
    if not MIN_INSTANT <= moment <= MAX_INSTANT:
        raise InstantOutOfRangeError(instant)
    return moment


def local_datetime(zone_id: str, instant: datetime | None = None) -> datetime:
    """Wall-clock datetime in ``zone_id`` at ``instant``."""
    return to_utc(instant).astimezone(get_zone(zone_id))


def offset_minutes(zone_id: str, instant: datetime | None = None) -> int:
    """UTC offset of ``zone_id`` at ``instant`` in whole minutes (DST-aware)."""
    moment = to_utc(instant)
    local = moment.astimezone(get_zone(zone_id))
    # Same calendar fields read back as if they were UTC.
    as_if_utc = datetime(
        local.year,
        local.month,
        local.day,
        local.hour,
        local.minute,
        local.second,
        tzinfo=timezone.utc,
    )
    return round((as_if_utc - moment).total_seconds() / 60)


def diff_label(
    target_zone: str,
    instant: datetime | None = None,
    *,
    device: str | None = None,
    minus: str = MINUS_SIGN,
) -> str:
    """Offset of ``target_zone`` relative to the device zone, e.g. ``+3h`` or ``−2h 30m``."""
    moment = to_utc(instant)
    device = device or device_zone()
    diff = offset_minutes(target_zone, moment) - offset_minutes(device, moment)
    sign = "+" if diff >= 0 else minus
    hours, minutes = divmod(abs(diff), 60)
    if minutes:
        return f"{sign}{hours}h {minutes}m"
    return f"{sign}{hours}h"


def local_date(zone_id: str, instant: datetime | None = None) -> date:
    return local_datetime(zone_id, instant).date()


def day_delta(target_zone: str, instant: datetime | None = None, *, device: str | None = None) -> int:
    """Calendar days between the device's local date and the target's local date."""
    moment = to_utc(instant)
    device = device or device_zone()
    return (local_date(target_zone, moment) - local_date(device, moment)).days


def day_relative(
    target_zone: str,
    instant: datetime | None = None,
    *,
    device: str | None = None,
) -> DayRelation:
    delta = day_delta(target_zone, instant, device=device)
    if delta == 0:
        return DayRelation.TODAY
    # Only the +14/-12 extremes reach two days apart; they still read as tomorrow/yesterday.
    return DayRelation.TOMORROW if delta > 0 else DayRelation.YESTERDAY


def time_hhmm(target_zone: str, instant: datetime | None = None) -> str:
    """24-hour ``HH:MM`` wall-clock time in ``target_zone``."""
    return local_datetime(target_zone, instant).strftime("%H:%M")
