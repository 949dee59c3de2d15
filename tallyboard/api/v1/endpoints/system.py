"""System status endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status

from tallyboard.dependencies import Clock, get_tally_service
from tallyboard.schemas.system import ClockResponse, WatcherStatusResponse
from tallyboard.services.tally_service import TallyService

router = APIRouter()


@router.get("/clock", response_model=ClockResponse)
async def get_clock_status(
    clock: Clock,
    service: Annotated[TallyService, Depends(get_tally_service)],
) -> ClockResponse:
    """Current civil time and day key for the configured zone."""
    return ClockResponse(
        timezone=clock.zone_name,
        now=clock.timestamp(),
        date_key=clock.date_key(),
        is_boundary_minute=clock.is_boundary_minute(),
        active_date_key=service.active_date_key,
    )


@router.get("/watcher", response_model=WatcherStatusResponse)
async def get_watcher_status(request: Request) -> WatcherStatusResponse:
    """Status of the midnight rollover watcher."""
    watcher = getattr(request.app.state, "midnight_watcher", None)
    if watcher is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Midnight watcher is not enabled",
        )
    return WatcherStatusResponse(**watcher.get_status())
