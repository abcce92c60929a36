"""Page scraping for sitelens.

This module provides:
- Plain HTTP page retrieval
- Image, color, typography and content extraction from parsed HTML
- Scraping session orchestration from creation to completed or failed
"""

from .extractor import FeatureExtractor
from .fetcher import DocumentFetcher
from .orchestrator import (
    ScrapingOrchestrator,
    cleanup_scraping_orchestrator,
    derive_domain,
    get_scraping_orchestrator,
)
from .types import ExtractionError, FetchError, FetchResult, ScrapingError

__all__ = [
    # Types
    "ScrapingError",
    "FetchError",
    "ExtractionError",
    "FetchResult",
    # Components
    "DocumentFetcher",
    "FeatureExtractor",
    # Orchestration
    "ScrapingOrchestrator",
    "derive_domain",
    "get_scraping_orchestrator",
    "cleanup_scraping_orchestrator",
]
