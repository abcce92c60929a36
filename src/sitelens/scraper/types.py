"""Type definitions for the scraper module."""

from dataclasses import dataclass
from typing import Optional


class ScrapingError(Exception):
    """Base exception for scraping-related errors."""

    pass


class FetchError(ScrapingError):
    """Raised when a page cannot be retrieved or answers with a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ExtractionError(ScrapingError):
    """Raised when a fetched document cannot be turned into a tree."""

    pass


@dataclass
class FetchResult:
    """Raw response of a page fetch."""

    url: str
    status_code: int
    html: str
