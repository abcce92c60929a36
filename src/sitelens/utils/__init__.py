"""Shared utilities for sitelens."""

from .async_utils import AsyncContextManager, create_task_with_error_handling
from .logging import get_logger, get_structured_logger, setup_logging

__all__ = [
    "setup_logging",
    "get_logger",
    "get_structured_logger",
    "AsyncContextManager",
    "create_task_with_error_handling",
]
