"""Tally board schemas for request/response validation."""

from typing import List, Optional

from pydantic import BaseModel, Field


class TallyEntry(BaseModel):
    """One tally in display order."""

    name: str
    count: int = Field(..., ge=0)
    builtin: bool

    model_config = {"from_attributes": True}


class TallyBoardResponse(BaseModel):
    """Today's tallies as shown on the board."""

    date: str
    timezone: str
    created_at: Optional[str] = None
    state: str
    tallies: List[TallyEntry]
    custom_tally_types: List[str]
    tally_order: List[str]
    message: Optional[str] = None


class TallyNameRequest(BaseModel):
    """Schema naming a single tally."""

    name: str = Field(..., min_length=1, max_length=200)


class ClearTalliesRequest(BaseModel):
    """Schema for clearing all of today's tallies."""

    confirmation: str = Field(..., description="Confirmation phrase")


class TallyMoveRequest(BaseModel):
    """Schema for moving a tally to another tally's position."""

    source: str = Field(..., min_length=1)
    target: str = Field(..., min_length=1)


class TallyOrderResponse(BaseModel):
    """Current global display order."""

    tally_order: List[str]
