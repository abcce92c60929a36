"""Type definitions for scraping sessions and their results."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class StorageError(Exception):
    """Base exception for storage-related errors."""

    pass


class SessionStatus(str, Enum):
    """Lifecycle state of a scraping session."""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class ScrapingOptions:
    """Feature extractors selected for a session."""

    images: bool = True
    colors: bool = True
    typography: bool = False
    content: bool = False

    def to_dict(self) -> dict[str, bool]:
        return {
            "images": self.images,
            "colors": self.colors,
            "typography": self.typography,
            "content": self.content,
        }


@dataclass
class ImageInfo:
    """An image referenced by the page."""

    src: str
    alt: str = ""
    width: Optional[int] = None
    height: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"src": self.src, "alt": self.alt}
        if self.width is not None:
            data["width"] = self.width
        if self.height is not None:
            data["height"] = self.height
        return data


@dataclass
class ColorInfo:
    """A color token found in the page styles.

    Exactly one of ``hex``/``rgb`` is non-empty.
    """

    hex: str = ""
    rgb: str = ""
    usage: str = "unknown"

    def to_dict(self) -> dict[str, str]:
        return {"hex": self.hex, "rgb": self.rgb, "usage": self.usage}


@dataclass
class TypographyInfo:
    """Inline font declarations of a text element."""

    font_family: str
    font_size: str
    font_weight: str
    element: str

    def to_dict(self) -> dict[str, str]:
        return {
            "fontFamily": self.font_family,
            "fontSize": self.font_size,
            "fontWeight": self.font_weight,
            "element": self.element,
        }


@dataclass
class ContentBlock:
    """A heading or paragraph with its outline level (7 for paragraphs)."""

    text: str
    element: str
    hierarchy: int

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "element": self.element, "hierarchy": self.hierarchy}


@dataclass
class ScrapedResults:
    """Merged output of the extractors that ran for a session.

    A ``None`` section means the corresponding option was disabled.
    """

    images: Optional[list[ImageInfo]] = None
    colors: Optional[list[ColorInfo]] = None
    typography: Optional[list[TypographyInfo]] = None
    content: Optional[list[ContentBlock]] = None

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        data = {}
        for key in ("images", "colors", "typography", "content"):
            items = getattr(self, key)
            if items is not None:
                data[key] = [item.to_dict() for item in items]
        return data

    def count(self, key: str) -> int:
        """Number of entries in a section, 0 when the section is absent."""
        items = getattr(self, key, None)
        return len(items) if items else 0


@dataclass
class ScrapingSession:
    """A single scraping run and its outcome."""

    id: int
    url: str
    domain: str
    status: SessionStatus = SessionStatus.PENDING
    scraped_at: Optional[datetime] = None
    options: ScrapingOptions = field(default_factory=ScrapingOptions)
    results: Optional[ScrapedResults] = None
    error_message: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "url": self.url,
            "domain": self.domain,
            "status": self.status.value,
            "scrapedAt": self.scraped_at.isoformat() if self.scraped_at else None,
            "options": self.options.to_dict(),
            "results": self.results.to_dict() if self.results is not None else None,
            "errorMessage": self.error_message,
        }


@dataclass
class SessionStatistics:
    """Aggregate figures over all stored sessions."""

    total_scrapes: int = 0
    total_images: int = 0
    total_colors: int = 0
    total_typography: int = 0
    success_rate: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalScrapes": self.total_scrapes,
            "totalImages": self.total_images,
            "totalColors": self.total_colors,
            "totalTypography": self.total_typography,
            "successRate": self.success_rate,
        }
