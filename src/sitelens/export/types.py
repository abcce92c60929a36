"""Type definitions for session export."""

from dataclasses import dataclass
from enum import Enum


class ExportError(Exception):
    """Raised when sessions cannot be exported in the requested format."""

    pass


class ExportFormat(str, Enum):
    """Supported export formats."""

    JSON = "json"
    CSV = "csv"


@dataclass
class ExportPayload:
    """Rendered export ready to be written to a file or HTTP response."""

    content: str
    media_type: str
    filename: str
