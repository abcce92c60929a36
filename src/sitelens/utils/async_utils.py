"""Async utility functions and helpers."""

import asyncio
from collections.abc import Coroutine
from typing import Any, TypeVar

from .logging import get_structured_logger

logger = get_structured_logger(__name__)

T = TypeVar("T")


class AsyncContextManager:
    """Base class for async context managers."""

    async def __aenter__(self):
        await self.setup()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.cleanup()

    async def setup(self) -> None:
        """Setup the context manager."""
        pass

    async def cleanup(self) -> None:
        """Cleanup the context manager."""
        pass


def create_task_with_error_handling(
    coro: Coroutine[Any, Any, T], task_name: str = "unnamed_task"
) -> asyncio.Task[T]:
    """Create a task that logs any exception escaping the coroutine."""

    async def wrapped_coro() -> T:
        try:
            return await coro
        except asyncio.CancelledError:
            logger.debug("Task cancelled", task=task_name)
            raise
        except Exception as e:
            logger.error(f"Task '{task_name}' failed: {str(e)}", exc_info=True)
            raise

    task = asyncio.create_task(wrapped_coro())
    task.set_name(task_name)
    return task
