"""Type definitions for the API module."""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import (
    BaseModel,
    Field,
    HttpUrl,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from ..storage import ScrapingOptions

_HTTP_URL = TypeAdapter(HttpUrl)


class APIError(Exception):
    """Base exception for API-related errors."""

    pass


class ScrapingOptionsRequest(BaseModel):
    """Extractor selection for a new session."""

    images: bool = True
    colors: bool = True
    typography: bool = False
    content: bool = False

    def to_options(self) -> ScrapingOptions:
        return ScrapingOptions(**self.model_dump())


class CreateSessionRequest(BaseModel):
    """Request model for starting a scraping session."""

    url: str
    options: ScrapingOptionsRequest = Field(default_factory=ScrapingOptionsRequest)

    @field_validator("url")
    @classmethod
    def validate_url(cls, v):
        # Checked as an http(s) URL but stored exactly as sent
        try:
            _HTTP_URL.validate_python(v)
        except ValidationError as e:
            raise ValueError(f"Invalid URL: {v}") from e
        return v


class ExportRequest(BaseModel):
    """Request model for exporting sessions."""

    format: str
    session_ids: Optional[list[int]] = Field(default=None, alias="sessionIds")

    model_config = {"populate_by_name": True}


class ErrorResponse(BaseModel):
    """Response model for API errors."""

    error: str
    message: str
    details: Optional[dict[str, Any]] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
