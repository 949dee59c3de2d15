"""Tally history endpoints."""

from fastapi import APIRouter, Response

from tallyboard.dependencies import History, Tallies
from tallyboard.schemas.history import HistoryDayResponse, HistoryListResponse

router = APIRouter()

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.get("", response_model=HistoryListResponse)
async def list_history(history: History) -> HistoryListResponse:
    """List every archived day, newest first."""
    rows = history.to_history_rows(history.load_all())
    return HistoryListResponse(
        items=[HistoryDayResponse(**row) for row in rows],
        total=len(rows),
    )


@router.get("/export")
async def export_history(history: History, service: Tallies) -> Response:
    """Download the history as an Excel workbook, oldest day first."""
    names = service.ordered_types()
    rows = history.to_export_rows(history.load_all(), names)
    content = history.export_to_excel(rows, names)
    file_name = history.export_file_name()
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{file_name}"'},
    )
