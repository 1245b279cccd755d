"""Routes for the user's saved world clocks."""
from __future__ import annotations

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from worldclock.clocks.board import ClockBoard, render_board
from worldclock.clocks.saved_list import SavedZoneList
from worldclock.config.settings import get_settings
from worldclock.data import repositories

from . import deps, schemas

router = APIRouter(prefix="/api/clocks", tags=["clocks"])
logger = logging.getLogger("worldclock.web.clocks")


def _serialize_board(board: ClockBoard) -> schemas.ClockBoardResponse:
    return schemas.ClockBoardResponse(
        device_timezone=board.device_zone,
        generated_at=board.instant,
        clocks=[schemas.ClockResponse.model_validate(row) for row in board.rows],
    )


def _render(zones: SavedZoneList, at: datetime | None = None) -> schemas.ClockBoardResponse:
    board = render_board(zones, at, minus=get_settings().minus_sign)
    return _serialize_board(board)


@router.get("", response_model=schemas.ClockBoardResponse)
async def list_clocks(
    at: datetime = Depends(deps.get_instant),
    db: AsyncSession = Depends(deps.get_db),
):
    zones = await repositories.get_saved_zones(db)
    await db.commit()
    return _render(zones, at)


@router.post("", response_model=schemas.ClockBoardResponse, status_code=status.HTTP_201_CREATED)
async def add_clock(
    payload: schemas.ClockCreate,
    response: Response,
    db: AsyncSession = Depends(deps.get_db),
):
    zones = await repositories.get_saved_zones(db)
    if zones.add(payload.zone):
        await repositories.save_saved_zones(db, zones)
        logger.info("Added clock %s", payload.zone)
    else:
        response.status_code = status.HTTP_200_OK
    await db.commit()
    return _render(zones)


@router.delete("/{zone_id:path}", response_model=schemas.ClockBoardResponse)
async def remove_clock(zone_id: str, db: AsyncSession = Depends(deps.get_db)):
    zones = await repositories.get_saved_zones(db)
    if not zones.remove(zone_id):
        await db.commit()
        raise HTTPException(status_code=404, detail="Clock not found")
    await repositories.save_saved_zones(db, zones)
    await db.commit()
    logger.info("Removed clock %s", zone_id)
    return _render(zones)
