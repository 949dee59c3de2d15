"""FastAPI dependencies for the shared tally services."""

from functools import lru_cache
from typing import Annotated, Optional

from fastapi import Depends

from tallyboard.config import settings
from tallyboard.models.enums import SyncState
from tallyboard.services.civil_clock import CivilDayClock
from tallyboard.services.document_store import get_document_store
from tallyboard.services.history_service import HistoryService
from tallyboard.services.tally_service import TallyService

# One synchronizer session per server process
_tally_service: Optional[TallyService] = None


@lru_cache
def get_clock() -> CivilDayClock:
    """Civil-day clock for the configured zone."""
    return CivilDayClock(settings.timezone)


def get_tally_service() -> TallyService:
    """Get the process-wide tally service, creating it on first use."""
    global _tally_service

    if _tally_service is None:
        _tally_service = TallyService(
            get_document_store(),
            get_clock(),
            builtin_types=settings.builtin_tally_types,
        )

    return _tally_service


def reset_tally_service() -> None:
    """Reset the tally service singleton. Useful for testing."""
    global _tally_service
    _tally_service = None


def get_loaded_tally_service(
    service: Annotated[TallyService, Depends(get_tally_service)],
) -> TallyService:
    """Tally service with today's snapshot loaded."""
    if service.state is SyncState.UNINITIALIZED:
        service.load()
    return service


def get_history_service() -> HistoryService:
    return HistoryService(
        get_document_store(),
        get_clock(),
        builtin_types=settings.builtin_tally_types,
    )


# Common dependency annotations
Tallies = Annotated[TallyService, Depends(get_loaded_tally_service)]
History = Annotated[HistoryService, Depends(get_history_service)]
Clock = Annotated[CivilDayClock, Depends(get_clock)]
