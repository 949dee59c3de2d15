"""API v1 module."""

from fastapi import APIRouter

from tallyboard.api.v1.endpoints import tallies, history, system

api_router = APIRouter()

api_router.include_router(tallies.router, prefix="/tallies", tags=["Tallies"])
api_router.include_router(history.router, prefix="/history", tags=["History"])
api_router.include_router(system.router, prefix="/system", tags=["System"])
