"""Scraping session API endpoints."""

from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...utils.logging import get_structured_logger
from ..dependencies import get_orchestrator, get_settings, get_storage_manager
from ..types import CreateSessionRequest

logger = get_structured_logger(__name__)

router = APIRouter()


def _parse_limit(raw_limit: Optional[str], default: int) -> int:
    """Positive integer from the query string, else ``default``."""
    try:
        limit = int(raw_limit)
    except (TypeError, ValueError):
        return default
    return limit if limit > 0 else default


@router.get("")
async def list_sessions(storage=Depends(get_storage_manager)) -> list[dict[str, Any]]:
    """List all sessions, most recently requested first."""
    sessions = await storage.list_sessions()
    return [session.to_dict() for session in sessions]


@router.get("/recent")
async def list_recent_sessions(
    limit: Optional[str] = Query(None, description="Maximum number of sessions"),
    storage=Depends(get_storage_manager),
    settings=Depends(get_settings),
) -> list[dict[str, Any]]:
    """List the most recent sessions."""
    limit_value = _parse_limit(limit, settings.sessions.recent_limit)
    sessions = await storage.get_recent_sessions(limit_value)
    return [session.to_dict() for session in sessions]


@router.get("/statistics")
async def get_statistics(storage=Depends(get_storage_manager)) -> dict[str, Any]:
    """Aggregate statistics over all sessions."""
    stats = await storage.get_statistics()
    return stats.to_dict()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_session(
    request: CreateSessionRequest,
    orchestrator=Depends(get_orchestrator),
) -> dict[str, Any]:
    """Create a session and start scraping it in the background."""
    url = request.url
    logger.info("Creating scraping session", url=url)

    session = await orchestrator.create_session(url, request.options.to_options())
    return session.to_dict()


@router.get("/{session_id}")
async def get_session(
    session_id: int, storage=Depends(get_storage_manager)
) -> dict[str, Any]:
    """Get a specific session by ID."""
    session = await storage.get_session(session_id)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Scraping session not found: {session_id}",
        )
    return session.to_dict()


@router.delete("/{session_id}")
async def delete_session(
    session_id: int, storage=Depends(get_storage_manager)
) -> dict[str, Any]:
    """Delete a session."""
    deleted = await storage.delete_session(session_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Scraping session not found: {session_id}",
        )
    return {"deleted": True, "id": session_id}
