"""
Background Tasks
================
Fire-and-forget execution of blocking work from async request handlers.
"""

import asyncio
from functools import partial
from typing import Any, Callable, Set
import structlog

logger = structlog.get_logger(__name__)


class BackgroundTasks:
    """
    Runs blocking callables in the default executor as tracked tasks.

    Failures are logged with the action name and never reach the caller.
    Call ``wait()`` on shutdown to let pending work finish.
    """

    def __init__(self):
        self._tasks: Set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def run(self, action: str, fn: Callable[..., Any], *args: Any) -> asyncio.Task:
        loop = asyncio.get_running_loop()
        task = loop.create_task(self._execute(action, partial(fn, *args)))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _execute(self, action: str, fn: Callable[[], Any]) -> None:
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, fn)
        except Exception as e:
            logger.error(
                "background_task_failed",
                action=action,
                error=str(e),
                error_type=type(e).__name__,
            )

    async def wait(self) -> None:
        """Wait for all pending tasks to finish."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks))
