"""History schemas for request/response validation."""

from typing import Dict, List

from pydantic import BaseModel


class HistoryDayResponse(BaseModel):
    """One archived day."""

    id: str
    formatted_date: str
    display_time: str
    tallies: Dict[str, int]
    custom_types: List[str]


class HistoryListResponse(BaseModel):
    """Archived days, newest first."""

    items: List[HistoryDayResponse]
    total: int
