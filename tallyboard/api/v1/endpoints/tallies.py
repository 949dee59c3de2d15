"""Tally board endpoints."""

from typing import Optional

from fastapi import APIRouter, status

from tallyboard.dependencies import Tallies
from tallyboard.models.enums import MutationKind
from tallyboard.schemas.tally import (
    ClearTalliesRequest,
    TallyBoardResponse,
    TallyEntry,
    TallyMoveRequest,
    TallyNameRequest,
    TallyOrderResponse,
)
from tallyboard.services.tally_service import TallyService

router = APIRouter()


def _board_response(
    service: TallyService, message: Optional[str] = None
) -> TallyBoardResponse:
    snapshot = service.snapshot
    return TallyBoardResponse(
        date=snapshot.date_key,
        timezone=snapshot.timezone,
        created_at=snapshot.created_at,
        state=service.state.value,
        tallies=[TallyEntry.model_validate(entry) for entry in service.board()],
        custom_tally_types=snapshot.custom_types,
        tally_order=service.ordered_types(),
        message=message,
    )


@router.get("", response_model=TallyBoardResponse)
async def get_board(service: Tallies) -> TallyBoardResponse:
    """Get today's tallies in display order."""
    return _board_response(service)


@router.post("/increment", response_model=TallyBoardResponse)
async def increment_tally(tally_in: TallyNameRequest, service: Tallies) -> TallyBoardResponse:
    """Add one to a tally."""
    service.apply_mutation(MutationKind.INCREMENT, tally_in.name)
    return _board_response(service)


@router.post("/decrement", response_model=TallyBoardResponse)
async def decrement_tally(tally_in: TallyNameRequest, service: Tallies) -> TallyBoardResponse:
    """Subtract one from a tally; a tally at zero stays at zero."""
    service.apply_mutation(MutationKind.DECREMENT, tally_in.name)
    return _board_response(service)


@router.post("", response_model=TallyBoardResponse, status_code=status.HTTP_201_CREATED)
async def add_tally(tally_in: TallyNameRequest, service: Tallies) -> TallyBoardResponse:
    """Add a custom tally type for today and every following day."""
    service.apply_mutation(MutationKind.ADD_CUSTOM, tally_in.name)
    return _board_response(service, message="New tally type added successfully.")


@router.delete("/{name:path}", response_model=TallyBoardResponse)
async def remove_tally(name: str, service: Tallies) -> TallyBoardResponse:
    """Remove a custom tally type."""
    service.apply_mutation(MutationKind.REMOVE_CUSTOM, name)
    return _board_response(service, message="Tally type removed successfully.")


@router.post("/clear", response_model=TallyBoardResponse)
async def clear_tallies(clear_in: ClearTalliesRequest, service: Tallies) -> TallyBoardResponse:
    """Reset every tally for today to zero."""
    service.clear_all(clear_in.confirmation)
    return _board_response(service, message="All tallies have been cleared successfully.")


@router.get("/order", response_model=TallyOrderResponse)
async def get_order(service: Tallies) -> TallyOrderResponse:
    """Get the global display order."""
    return TallyOrderResponse(tally_order=service.ordered_types())


@router.put("/order", response_model=TallyOrderResponse)
async def move_tally(move_in: TallyMoveRequest, service: Tallies) -> TallyOrderResponse:
    """Move a tally to another tally's position."""
    return TallyOrderResponse(tally_order=service.move(move_in.source, move_in.target))


@router.post("/check-midnight", response_model=TallyBoardResponse)
async def check_midnight(service: Tallies) -> TallyBoardResponse:
    """Run the midnight rollover check now."""
    if service.check_midnight():
        return _board_response(
            service, message="Tallies have been automatically reset for the new day."
        )
    return _board_response(service)
