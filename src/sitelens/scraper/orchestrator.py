"""Scraping session lifecycle: fetch, parse, extract, record the outcome."""

import asyncio
from typing import Optional, Protocol
from urllib.parse import urlparse

from ..config import get_settings
from ..storage import ScrapingOptions, ScrapingSession, SessionStatus, SessionStorage
from ..utils.async_utils import AsyncContextManager, create_task_with_error_handling
from ..utils.logging import get_structured_logger
from .extractor import FeatureExtractor
from .fetcher import DocumentFetcher
from .types import FetchResult

logger = get_structured_logger(__name__)

UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"


class PageFetcher(Protocol):
    """Anything able to retrieve a page body."""

    async def fetch(self, url: str) -> FetchResult:
        ...


def derive_domain(url: str) -> str:
    """Host component of a URL ("https://Example.com:8080/a" -> "example.com")."""
    return urlparse(url).hostname or ""


class ScrapingOrchestrator(AsyncContextManager):
    """Creates sessions and drives each one to completed or failed.

    Every session is scraped by its own detached task. The only way back to
    the caller is the session store, which the task updates when it ends.
    """

    def __init__(
        self,
        storage: SessionStorage,
        fetcher: Optional[PageFetcher] = None,
        extractor: Optional[FeatureExtractor] = None,
    ):
        self.storage = storage
        self.fetcher = fetcher or DocumentFetcher(get_settings().scraping)
        self.extractor = extractor or FeatureExtractor()
        self._tasks: set[asyncio.Task] = set()

    async def cleanup(self) -> None:
        """Abandon in-flight sessions and release the fetcher."""
        pending = [task for task in self._tasks if not task.done()]
        if pending:
            logger.info("Abandoning in-flight scraping tasks", count=len(pending))
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)
        self._tasks.clear()

        if isinstance(self.fetcher, AsyncContextManager):
            await self.fetcher.cleanup()

    async def create_session(
        self, url: str, options: Optional[ScrapingOptions] = None
    ) -> ScrapingSession:
        """Store a pending session and start scraping it in the background.

        Returns as soon as the session record exists.
        """
        options = options or ScrapingOptions()
        session = await self.storage.create_session(
            url=url, domain=derive_domain(url), options=options
        )

        logger.info("Scraping session created", session_id=session.id, url=url)
        self.start_scraping(session.id, url, options)
        return session

    def start_scraping(
        self, session_id: int, url: str, options: ScrapingOptions
    ) -> asyncio.Task:
        """Launch ``scrape_session`` as a detached task."""
        task = create_task_with_error_handling(
            self.scrape_session(session_id, url, options),
            task_name=f"scrape-session-{session_id}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def scrape_session(
        self, session_id: int, url: str, options: ScrapingOptions
    ) -> Optional[ScrapingSession]:
        """Run one session to its terminal state and return the stored record."""
        session_logger = logger.bind(session_id=session_id, url=url)

        try:
            await self.storage.update_session(
                session_id, {"status": SessionStatus.PENDING}
            )
            session_logger.info("Scraping started")

            page = await self.fetcher.fetch(url)
            soup = self.extractor.parse(page.html)
            results = self.extractor.extract(soup, url, options)

        except Exception as e:
            message = str(e) or UNKNOWN_ERROR_MESSAGE
            session_logger.warning("Scraping failed", error=message)
            return await self.storage.update_session(
                session_id, {"status": SessionStatus.FAILED, "error_message": message}
            )

        session_logger.info(
            "Scraping completed",
            images=results.count("images"),
            colors=results.count("colors"),
            typography=results.count("typography"),
            content=results.count("content"),
        )
        return await self.storage.update_session(
            session_id, {"status": SessionStatus.COMPLETED, "results": results}
        )

    @property
    def active_tasks(self) -> int:
        return sum(1 for task in self._tasks if not task.done())

    async def wait_for_idle(self) -> None:
        """Wait until every session started so far has finished."""
        while True:
            pending = [task for task in self._tasks if not task.done()]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)


# Global orchestrator instance
_scraping_orchestrator: Optional[ScrapingOrchestrator] = None


async def get_scraping_orchestrator(storage: SessionStorage) -> ScrapingOrchestrator:
    """Get or create the global scraping orchestrator."""
    global _scraping_orchestrator

    if _scraping_orchestrator is None:
        _scraping_orchestrator = ScrapingOrchestrator(storage)
        await _scraping_orchestrator.setup()

    return _scraping_orchestrator


async def cleanup_scraping_orchestrator() -> None:
    """Clean up the global scraping orchestrator."""
    global _scraping_orchestrator

    if _scraping_orchestrator:
        await _scraping_orchestrator.cleanup()
        _scraping_orchestrator = None
