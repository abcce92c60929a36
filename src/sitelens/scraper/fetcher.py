"""Plain HTTP page retrieval."""

from typing import Optional

import httpx

from ..config import ScrapingSettings
from ..utils.async_utils import AsyncContextManager
from ..utils.logging import get_structured_logger
from .types import FetchError, FetchResult

logger = get_structured_logger(__name__)


class DocumentFetcher(AsyncContextManager):
    """Fetches raw HTML over HTTP GET.

    No retries are attempted. A timeout is only applied when one is
    configured.
    """

    def __init__(
        self,
        settings: Optional[ScrapingSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or ScrapingSettings()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def setup(self) -> None:
        if self._client is not None:
            return

        self._client = httpx.AsyncClient(
            headers={"User-Agent": self.settings.user_agent},
            follow_redirects=self.settings.follow_redirects,
            timeout=httpx.Timeout(self.settings.timeout_seconds),
            transport=self._transport,
        )

    async def cleanup(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def fetch(self, url: str) -> FetchResult:
        """GET ``url`` and return its body, raising FetchError on failure."""
        if self._client is None:
            await self.setup()

        try:
            response = await self._client.get(url)
        except httpx.HTTPError as e:
            message = str(e) or type(e).__name__
            logger.warning("Fetch failed", url=url, error=message)
            raise FetchError(message) from e

        if not response.is_success:
            logger.warning(
                "Fetch returned error status", url=url, status=response.status_code
            )
            raise FetchError(
                f"HTTP {response.status_code}: {response.reason_phrase}",
                status_code=response.status_code,
            )

        logger.debug(
            "Fetch completed",
            url=url,
            status=response.status_code,
            bytes=len(response.content),
        )
        return FetchResult(
            url=str(response.url), status_code=response.status_code, html=response.text
        )
