"""Background task that polls for the midnight rollover."""

import asyncio
from contextlib import suppress
from datetime import datetime
from typing import Optional

from loguru import logger

from ..config import settings
from ..exceptions import TallyError
from .tally_service import TallyService


class MidnightWatcher:
    """Polls the tally service on a fixed period so the day rolls over unattended."""

    def __init__(self, tally_service: TallyService, interval: Optional[float] = None):
        self.tally_service = tally_service
        self.interval = interval if interval is not None else settings.midnight_check_interval
        self._task: Optional[asyncio.Task] = None
        self.last_checked_at: Optional[datetime] = None
        self.rollover_count = 0

    def check_once(self) -> bool:
        """Run a single midnight check; failures are logged, never raised."""
        self.last_checked_at = datetime.now()
        try:
            rolled_over = self.tally_service.check_midnight()
        except TallyError as e:
            logger.error(f"Midnight check failed: {e}")
            return False
        except Exception:
            # Keep polling; the next check may succeed
            logger.exception("Unexpected error during midnight check")
            return False

        if rolled_over:
            self.rollover_count += 1
            logger.info("Tallies have been automatically reset for the new day")
        return rolled_over

    async def _run(self) -> None:
        while True:
            self.check_once()
            await asyncio.sleep(self.interval)

    def start(self) -> None:
        """Start polling; the first check runs immediately."""
        if self._task and not self._task.done():
            logger.warning("Midnight watcher already running")
            return

        self._task = asyncio.create_task(self._run())
        logger.info(f"Started midnight watcher (every {self.interval}s)")

    async def stop(self) -> None:
        if self._task and not self._task.done():
            self._task.cancel()
            with suppress(asyncio.CancelledError):
                await self._task
            logger.info("Stopped midnight watcher")
        self._task = None

    def get_status(self) -> dict:
        """Get watcher status."""
        return {
            "running": bool(self._task and not self._task.done()),
            "interval_seconds": self.interval,
            "last_checked_at": self.last_checked_at.isoformat() if self.last_checked_at else None,
            "rollover_count": self.rollover_count,
        }
