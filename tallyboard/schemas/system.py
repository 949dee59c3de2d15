"""System status schemas."""

from typing import Optional

from pydantic import BaseModel


class ClockResponse(BaseModel):
    """Civil clock reading for the configured zone."""

    timezone: str
    now: str
    date_key: str
    is_boundary_minute: bool
    active_date_key: Optional[str] = None


class WatcherStatusResponse(BaseModel):
    """Midnight watcher status."""

    running: bool
    interval_seconds: float
    last_checked_at: Optional[str] = None
    rollover_count: int
