"""Data access helpers for the key-value store and the saved zone list."""
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from worldclock.clocks.saved_list import SavedZoneList
from worldclock.config.settings import get_settings
from worldclock.data import models
from worldclock.utils.time_utils import device_zone

logger = logging.getLogger("worldclock.repositories")


async def get_value(session: AsyncSession, key: str) -> Optional[str]:
    result = await session.execute(select(models.KeyValue.value).where(models.KeyValue.key == key))
    return result.scalar_one_or_none()


async def set_value(session: AsyncSession, key: str, value: str) -> None:
    record = await session.get(models.KeyValue, key)
    if record is None:
        session.add(models.KeyValue(key=key, value=value))
    else:
        record.value = value
    await session.flush()


async def save_saved_zones(
    session: AsyncSession,
    zones: SavedZoneList,
    *,
    key: str | None = None,
) -> None:
    """Persist ``zones`` as a JSON array; the last write wins."""
    key = key or get_settings().storage_key
    await set_value(session, key, zones.to_json())


async def get_saved_zones(session: AsyncSession, *, key: str | None = None) -> SavedZoneList:
    """Load the saved list, seeding it with the device zone on first launch.

    A malformed stored value is replaced by the seed as well.
    """
    key = key or get_settings().storage_key
    raw = await get_value(session, key)
    if raw is not None:
        try:
            return SavedZoneList.from_json(raw)
        except ValueError as exc:
            logger.warning("Discarding malformed saved zones under %s: %s", key, exc)

    zones = SavedZoneList([device_zone()])
    await save_saved_zones(session, zones, key=key)
    logger.info("Seeded saved zones with device zone %s", zones.as_list()[0])
    return zones
