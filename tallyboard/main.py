"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tallyboard.api.v1 import api_router
from tallyboard.config import settings
from tallyboard.database import init_db
from tallyboard.dependencies import get_tally_service
from tallyboard.exceptions import (
    DuplicateCounter,
    InvalidConfirmation,
    InvalidCounterName,
    ProtectedCounter,
    StoreUnavailable,
    TallyError,
    UnknownCounter,
)
from tallyboard.models.enums import SyncState
from tallyboard.services.midnight_watcher import MidnightWatcher
from tallyboard.services.tally_service import TallyService
from tallyboard.utils.logger import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    init_db()
    service = get_tally_service()
    try:
        service.load()
    except TallyError as e:
        logger.error(f"Initial tally load failed: {e}")

    watcher = None
    if settings.enable_midnight_watcher:
        watcher = MidnightWatcher(service)
        watcher.start()
    app.state.midnight_watcher = watcher

    yield

    # Shutdown
    if watcher:
        await watcher.stop()


app = FastAPI(
    title=settings.app_name,
    description="Tally Board API",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

# CORS middleware for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API router
app.include_router(api_router, prefix="/api/v1")


def _status_for(exc: TallyError) -> int:
    if isinstance(exc, UnknownCounter):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, DuplicateCounter):
        return status.HTTP_409_CONFLICT
    if isinstance(exc, ProtectedCounter):
        return status.HTTP_403_FORBIDDEN
    if isinstance(exc, (InvalidCounterName, InvalidConfirmation)):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, StoreUnavailable):
        return status.HTTP_503_SERVICE_UNAVAILABLE
    return status.HTTP_400_BAD_REQUEST


@app.exception_handler(TallyError)
async def tally_exception_handler(request: Request, exc: TallyError):
    """Turn tally errors into notification payloads."""
    status_code = _status_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc}")
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Prevent stack traces from leaking to clients in production."""
    if settings.debug:
        raise exc
    logger.error(f"Unhandled exception on {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


@app.get("/api/health")
async def health_check(
    request: Request,
    service: Annotated[TallyService, Depends(get_tally_service)],
):
    """Health check; degraded until today's tallies have loaded."""
    watcher = getattr(request.app.state, "midnight_watcher", None)
    return {
        "status": "degraded" if service.state is SyncState.UNINITIALIZED else "healthy",
        "app": settings.app_name,
        "environment": settings.environment,
        "active_date": service.active_date_key,
        "midnight_watcher": bool(watcher and watcher.get_status()["running"]),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "tallyboard.main:app",
        host="0.0.0.0",
        port=8009,
        reload=settings.debug,
    )
