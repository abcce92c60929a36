"""Shared test doubles and sample documents."""

import time
from typing import Optional

from fastapi.testclient import TestClient

from sitelens.scraper import FetchError, FetchResult

SAMPLE_PAGE_URL = "http://site.test/articles/page"

SAMPLE_HTML = """
<html>
  <head>
    <title>Sample</title>
    <style>body { color: #FF0000; background: rgb(1,2,3); }</style>
  </head>
  <body style="border-color: #abc">
    <h1 style="font-family: Georgia, serif; font-size: 32px; font-weight: 700">Main Title</h1>
    <p>First paragraph.</p>
    <img src="/img/logo.png" alt="Logo" width="120" height="40px">
    <img src="https://cdn.test/banner.jpg">
    <img alt="no source">
    <h2>Subheading</h2>
    <p>   </p>
    <span style="color: #FF0000">Accent</span>
  </body>
</html>
"""


class StaticFetcher:
    """Serves canned pages; unknown URLs fail like an HTTP 404."""

    def __init__(
        self,
        pages: Optional[dict[str, str]] = None,
        errors: Optional[dict[str, Exception]] = None,
    ):
        self.pages = pages or {}
        self.errors = errors or {}
        self.requested: list[str] = []

    async def fetch(self, url: str) -> FetchResult:
        self.requested.append(url)
        if url in self.errors:
            raise self.errors[url]
        if url not in self.pages:
            raise FetchError("HTTP 404: Not Found", status_code=404)
        return FetchResult(url=url, status_code=200, html=self.pages[url])


def wait_for_status(client: TestClient, session_id: int, timeout: float = 5.0) -> dict:
    """Poll a session over the API until it leaves ``pending``."""
    deadline = time.monotonic() + timeout
    while True:
        data = client.get(f"/api/sessions/{session_id}").json()
        if data["status"] != "pending" or time.monotonic() > deadline:
            return data
        time.sleep(0.01)
