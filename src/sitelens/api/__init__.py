"""FastAPI web interface components."""

from .app import create_app, main
from .types import APIError, ErrorResponse

__all__ = ["APIError", "ErrorResponse", "create_app", "main"]
