"""In-memory session store.

Sessions live only in process memory and are lost on restart.
"""

import asyncio
import copy
from dataclasses import fields
from datetime import datetime, timezone
from typing import Any, Optional

from ..utils.logging import get_structured_logger
from .interface import SessionStorage
from .types import (
    ScrapingOptions,
    ScrapingSession,
    SessionStatistics,
    SessionStatus,
    StorageError,
)

logger = get_structured_logger(__name__)

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)
_MUTABLE_FIELDS = {f.name for f in fields(ScrapingSession)} - {"id"}


class MemorySessionStorage(SessionStorage):
    """Session table keyed by an incrementing integer id.

    The store owns every record; callers always receive copies, so a record
    only changes through ``update_session``.
    """

    def __init__(self):
        self._sessions: dict[int, ScrapingSession] = {}
        self._current_id = 1
        self._lock = asyncio.Lock()

    async def create_session(
        self, url: str, domain: str, options: ScrapingOptions
    ) -> ScrapingSession:
        async with self._lock:
            session_id = self._current_id
            self._current_id += 1

            session = ScrapingSession(
                id=session_id,
                url=url,
                domain=domain,
                status=SessionStatus.PENDING,
                scraped_at=datetime.now(timezone.utc),
                options=copy.copy(options),
            )
            self._sessions[session_id] = session

        logger.debug("Session stored", session_id=session_id, url=url)
        return copy.deepcopy(session)

    async def get_session(self, session_id: int) -> Optional[ScrapingSession]:
        async with self._lock:
            session = self._sessions.get(session_id)
            return copy.deepcopy(session) if session else None

    async def list_sessions(self) -> list[ScrapingSession]:
        async with self._lock:
            sessions = [copy.deepcopy(s) for s in self._sessions.values()]

        # Missing timestamps sort as the oldest; equal timestamps by newest id
        sessions.sort(key=lambda s: (s.scraped_at or _EPOCH, s.id), reverse=True)
        return sessions

    async def update_session(
        self, session_id: int, update_data: dict[str, Any]
    ) -> Optional[ScrapingSession]:
        if "status" in update_data:
            update_data = {
                **update_data,
                "status": _coerce_status(update_data["status"]),
            }

        async with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                logger.debug("Update for unknown session", session_id=session_id)
                return None

            for key, value in update_data.items():
                if key not in _MUTABLE_FIELDS:
                    logger.warning(
                        "Ignoring session field", session_id=session_id, field=key
                    )
                    continue
                setattr(session, key, value)

            logger.debug(
                "Session updated", session_id=session_id, fields=list(update_data)
            )
            return copy.deepcopy(session)

    async def delete_session(self, session_id: int) -> bool:
        async with self._lock:
            existed = self._sessions.pop(session_id, None) is not None

        if existed:
            logger.info("Session deleted", session_id=session_id)
        return existed

    async def count_sessions(self) -> int:
        async with self._lock:
            return len(self._sessions)

    async def get_statistics(self) -> SessionStatistics:
        async with self._lock:
            sessions = list(self._sessions.values())

            completed = [s for s in sessions if s.status == SessionStatus.COMPLETED]
            stats = SessionStatistics(total_scrapes=len(sessions))
            for session in completed:
                if session.results is None:
                    continue
                stats.total_images += session.results.count("images")
                stats.total_colors += session.results.count("colors")
                stats.total_typography += session.results.count("typography")

        if sessions:
            stats.success_rate = len(completed) / len(sessions) * 100
        return stats

    async def cleanup(self) -> None:
        async with self._lock:
            self._sessions.clear()


def _coerce_status(value: Any) -> SessionStatus:
    try:
        return SessionStatus(value)
    except ValueError as e:
        raise StorageError(f"Invalid session status: {value!r}") from e


# Global storage manager instance
_storage_manager: Optional[SessionStorage] = None


async def get_storage_manager() -> SessionStorage:
    """Get or create the global session store."""
    global _storage_manager

    if _storage_manager is None:
        _storage_manager = MemorySessionStorage()
        await _storage_manager.setup()
        logger.info("Session storage initialized", backend="memory")

    return _storage_manager


async def cleanup_storage_manager() -> None:
    """Clean up the global session store."""
    global _storage_manager

    if _storage_manager:
        await _storage_manager.cleanup()
        _storage_manager = None
