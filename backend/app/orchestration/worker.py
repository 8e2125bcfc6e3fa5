"""Fire-and-forget job runner for background trip processing.

HTTP handlers hand a coroutine to `submit` and return immediately. The worker
keeps a strong reference to each task until it finishes and logs any exception
that escapes the job, so a failed job never disappears silently.
"""

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any

logger = logging.getLogger(__name__)


class BackgroundWorker:
    """Tracks background tasks for the lifetime of the application."""

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task[Any]] = set()

    def submit(self, job: Coroutine[Any, Any, Any], *, name: str) -> asyncio.Task[Any]:
        """Schedule job on the running loop.

        Args:
            job: Coroutine to run
            name: Task name used in logs (e.g. "trip-42")
        """
        task = asyncio.create_task(job, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.info(f"Background job {task.get_name()} cancelled")
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                f"Background job {task.get_name()} failed: {exc}",
                exc_info=(type(exc), exc, exc.__traceback__),
            )

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def drain(self, timeout_s: float | None = None) -> None:
        """Wait for in-flight jobs (used by tests and shutdown)."""
        if not self._tasks:
            return
        await asyncio.wait(set(self._tasks), timeout=timeout_s)

    async def shutdown(self) -> None:
        """Cancel whatever is still running."""
        for task in list(self._tasks):
            task.cancel()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
