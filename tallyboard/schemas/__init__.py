"""Pydantic schemas for API request/response validation."""

from .tally import (
    TallyEntry,
    TallyBoardResponse,
    TallyNameRequest,
    ClearTalliesRequest,
    TallyMoveRequest,
    TallyOrderResponse,
)
from .history import HistoryDayResponse, HistoryListResponse
from .system import ClockResponse, WatcherStatusResponse

__all__ = [
    "TallyEntry",
    "TallyBoardResponse",
    "TallyNameRequest",
    "ClearTalliesRequest",
    "TallyMoveRequest",
    "TallyOrderResponse",
    "HistoryDayResponse",
    "HistoryListResponse",
    "ClockResponse",
    "WatcherStatusResponse",
]
