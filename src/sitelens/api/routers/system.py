"""System health endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ... import __version__
from ..dependencies import get_storage_manager

router = APIRouter()


class HealthCheckResponse(BaseModel):
    """Response model for health checks."""

    status: str
    timestamp: datetime
    version: str
    sessions: int


@router.get("/health", response_model=HealthCheckResponse)
async def health_check(storage=Depends(get_storage_manager)) -> HealthCheckResponse:
    """Simple health check endpoint."""
    return HealthCheckResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=__version__,
        sessions=await storage.count_sessions(),
    )
