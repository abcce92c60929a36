"""Session storage for scraping runs."""

from .interface import SessionStorage
from .memory import MemorySessionStorage, cleanup_storage_manager, get_storage_manager
from .types import (
    ColorInfo,
    ContentBlock,
    ImageInfo,
    ScrapedResults,
    ScrapingOptions,
    ScrapingSession,
    SessionStatistics,
    SessionStatus,
    StorageError,
    TypographyInfo,
)

__all__ = [
    # Interface
    "SessionStorage",
    "MemorySessionStorage",
    "get_storage_manager",
    "cleanup_storage_manager",
    # Types
    "StorageError",
    "SessionStatus",
    "ScrapingOptions",
    "ScrapingSession",
    "SessionStatistics",
    "ScrapedResults",
    "ImageInfo",
    "ColorInfo",
    "TypographyInfo",
    "ContentBlock",
]
