"""Storage contract for scraping sessions."""

from abc import ABC, abstractmethod
from typing import Any, Optional

from .types import ScrapingOptions, ScrapingSession, SessionStatistics


class SessionStorage(ABC):
    """Operations every session store provides.

    Lookups of unknown ids are not errors: ``get_session`` and
    ``update_session`` return ``None`` and ``delete_session`` returns ``False``.
    """

    @abstractmethod
    async def create_session(
        self, url: str, domain: str, options: ScrapingOptions
    ) -> ScrapingSession:
        """Store a new pending session and return it with its assigned id."""

    @abstractmethod
    async def get_session(self, session_id: int) -> Optional[ScrapingSession]:
        """Get a session by id."""

    @abstractmethod
    async def list_sessions(self) -> list[ScrapingSession]:
        """All sessions, most recently requested first."""

    @abstractmethod
    async def update_session(
        self, session_id: int, update_data: dict[str, Any]
    ) -> Optional[ScrapingSession]:
        """Merge ``update_data`` into an existing session."""

    @abstractmethod
    async def delete_session(self, session_id: int) -> bool:
        """Remove a session, returning whether it existed."""

    @abstractmethod
    async def get_statistics(self) -> SessionStatistics:
        """Aggregate statistics over all sessions."""

    async def get_recent_sessions(self, limit: int = 10) -> list[ScrapingSession]:
        """The ``limit`` most recent sessions."""
        sessions = await self.list_sessions()
        return sessions[:limit]

    async def count_sessions(self) -> int:
        return len(await self.list_sessions())

    async def setup(self) -> None:
        """Prepare the store for use."""

    async def cleanup(self) -> None:
        """Release resources held by the store."""
