"""Run catalog mutations in the background of the request that started them."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Coroutine

logger = logging.getLogger(__name__)


class TaskRunner:
    """Keeps references to in-flight tasks and logs their failures."""

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def start(self, coro: Coroutine[Any, Any, Any], *, name: str | None = None) -> asyncio.Task:
        """Schedule ``coro`` and return once it reached its first suspension point.

        Optimistic changes made before the first network await are therefore
        visible to the caller when this returns.
        """
        task = asyncio.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        await asyncio.sleep(0)
        return task

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.warning(f"Task {task.get_name()} was cancelled")
            return
        exc = task.exception()
        if exc is not None:
            logger.error(f"Task {task.get_name()} failed: {exc}", exc_info=exc)

    async def wait_idle(self) -> None:
        """Wait until every started task (and any it started) has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
            # let done callbacks run before re-checking
            await asyncio.sleep(0)
