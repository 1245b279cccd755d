"""FastAPI dependencies used across routers."""
from __future__ import annotations

from datetime import datetime
from typing import AsyncGenerator

from fastapi import HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from worldclock.data.database import SessionLocal
from worldclock.utils.time_utils import InstantOutOfRangeError, to_utc


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with SessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


def get_instant(
    at: datetime | None = Query(default=None, description="Instant to render; defaults to now"),
) -> datetime:
    try:
        return to_utc(at)
    except InstantOutOfRangeError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
