"""Prepare the database and the saved clock list before the app starts."""
from __future__ import annotations

import asyncio
import logging

from worldclock.config.settings import get_settings
from worldclock.data import repositories
from worldclock.data.database import SessionLocal, init_db
from worldclock.utils.logging import setup_logging


async def _prepare() -> None:
    settings = get_settings()
    await init_db()
    async with SessionLocal() as session:
        zones = await repositories.get_saved_zones(session)
        await session.commit()
    logger = logging.getLogger("worldclock.prestart")
    logger.info("Database initialised at %s", settings.database_url)
    logger.info("Tracking %d clock(s): %s", len(zones), ", ".join(zones))


def main() -> None:
    setup_logging()
    asyncio.run(_prepare())


if __name__ == "__main__":
    main()
