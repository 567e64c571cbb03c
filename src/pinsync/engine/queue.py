"""Single-flight, coalescing push scheduling."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

logger = logging.getLogger(__name__)


class PushQueue:
    """Runs at most one push at a time.

    Requests that arrive while a push is in flight collapse into a single
    follow-up push, which reads the cache when it starts and so always
    carries the latest local state. Requests made outside a running event
    loop stay pending until :meth:`flush`.
    """

    def __init__(self, push: Callable[[], Awaitable[Any]]) -> None:
        self._push = push
        self._pending = False
        self._in_flight = False
        self._task: asyncio.Task[None] | None = None

    @property
    def pending(self) -> bool:
        return self._pending

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @property
    def busy(self) -> bool:
        return self._pending or self._in_flight

    def request(self) -> None:
        self._pending = True
        if self._task is not None and not self._task.done():
            logger.debug("Push already scheduled; coalescing request")
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop; push deferred until flush")
            return
        self._task = loop.create_task(self._drain())

    async def flush(self) -> None:
        """Wait until no push is pending or in flight."""
        while True:
            if self._task is not None and not self._task.done():
                await self._task
            elif self._pending:
                self._task = asyncio.get_running_loop().create_task(self._drain())
            else:
                return

    async def _drain(self) -> None:
        while self._pending:
            self._pending = False
            self._in_flight = True
            try:
                await self._push()
            except Exception:
                logger.exception("Push failed")
            finally:
                self._in_flight = False
