"""Request dependencies resolving components attached to the running app."""

from typing import TYPE_CHECKING, Any

from fastapi import HTTPException, Request, status

if TYPE_CHECKING:
    from ..config import AppSettings
    from ..scraper.orchestrator import ScrapingOrchestrator
    from ..storage.interface import SessionStorage


def _from_state(request: Request, attribute: str, label: str) -> Any:
    component = getattr(request.app.state, attribute, None)
    if component is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"{label} not initialized",
        )
    return component


async def get_storage_manager(request: Request) -> "SessionStorage":
    return _from_state(request, "storage", "Session storage")


async def get_orchestrator(request: Request) -> "ScrapingOrchestrator":
    return _from_state(request, "orchestrator", "Scraping orchestrator")


async def get_settings(request: Request) -> "AppSettings":
    return _from_state(request, "settings", "Settings")
