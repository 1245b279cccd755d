"""Async database engine and session factory."""
from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from worldclock.config.settings import get_settings
from worldclock.data.models import Base

logger = logging.getLogger("worldclock.database")

settings = get_settings()

engine = create_async_engine(settings.database_url)
SessionLocal = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


async def init_db() -> None:
    if settings.database_url.startswith("sqlite") and ":memory:" not in settings.database_url:
        path = settings.database_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        logger.debug("Using sqlite database at %s", path)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
