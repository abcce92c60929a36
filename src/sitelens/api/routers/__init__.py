"""API routers for different endpoint groups."""

from .export import router as export_router
from .sessions import router as sessions_router
from .system import router as system_router

__all__ = ["sessions_router", "export_router", "system_router"]
