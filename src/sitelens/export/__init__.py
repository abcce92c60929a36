"""Session export in JSON and CSV."""

from .formatter import CSV_HEADERS, ExportFormatter
from .types import ExportError, ExportFormat, ExportPayload

__all__ = [
    "ExportFormatter",
    "ExportError",
    "ExportFormat",
    "ExportPayload",
    "CSV_HEADERS",
]
