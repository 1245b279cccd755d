"""FastAPI application entry point."""
from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from worldclock.config.settings import get_settings
from worldclock.config.timezones import get_all_zones
from worldclock.data.database import init_db
from worldclock.utils.logging import setup_logging
from .api import (
    clocks as clock_routes,
    meta as meta_routes,
    status as status_routes,
    zones as zone_routes,
)

settings = get_settings()
setup_logging()
logger = logging.getLogger("worldclock.web")

app = FastAPI(title=settings.app_name)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(status_routes.router)
app.include_router(meta_routes.router)
app.include_router(zone_routes.router)
app.include_router(clock_routes.router)


@app.get("/")
async def index() -> dict:
    return {"message": "World clocks API running", "docs": "/docs", "health": "/health"}


@app.on_event("startup")
async def on_startup() -> None:
    logger.info("Initialising database")
    await init_db()
    # Warm the catalog so the first search does not pay for the build.
    get_all_zones()


def main() -> None:
    import uvicorn

    uvicorn.run("worldclock.web.main:app", host="0.0.0.0", port=8000)
