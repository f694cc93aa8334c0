"""Detached background tasks whose failures are logged, never raised."""

import asyncio
from collections.abc import Coroutine
from typing import Any

from loguru import logger


class DetachedTasks:
    """Owns fire-and-forget tasks so they are not garbage collected mid-flight.

    A failing task is logged and counted; the code that spawned it never sees
    the exception. ``drain()`` waits for everything still pending.
    """

    def __init__(self):
        self._tasks: set[asyncio.Task] = set()
        self.failed = 0

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def spawn(self, coro: Coroutine[Any, Any, Any], name: str | None = None) -> asyncio.Task:
        """Schedule ``coro`` on the running loop."""
        task = asyncio.get_running_loop().create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.debug("Detached task {} cancelled", task.get_name())
            return
        exc = task.exception()
        if exc is not None:
            self.failed += 1
            logger.opt(exception=exc).warning("Detached task {} failed: {}", task.get_name(), exc)

    async def drain(self) -> None:
        """Wait until no detached task is pending."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
