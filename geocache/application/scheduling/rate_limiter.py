"""RateLimitedScheduler — one global FIFO queue with minimum spacing between dispatches."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from geocache.application.ports.clock_port import ClockPort

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MIN_INTERVAL = 1.0  # seconds, Nominatim usage policy


class RateLimitedScheduler:
    """Serializes every outbound provider call, regardless of cache key.

    A single worker task consumes an ``asyncio.Queue`` in submission order.
    Before each dispatch it waits until ``min_interval`` seconds have passed
    since the previous dispatch. Enqueued tasks always run to completion:
    cancelling the returned future does not cancel the task itself.
    """

    def __init__(self, clock: ClockPort, min_interval: float = DEFAULT_MIN_INTERVAL):
        if min_interval < 0:
            raise ValueError("min_interval must be >= 0")
        self._clock = clock
        self._min_interval = min_interval
        self._queue: asyncio.Queue[tuple[Callable[[], Awaitable[Any]], asyncio.Future]] | None = None
        self._worker: asyncio.Task | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._last_dispatch: float | None = None

    @property
    def min_interval(self) -> float:
        return self._min_interval

    @property
    def pending(self) -> int:
        """Tasks waiting in the queue (not counting the one running)."""
        return self._queue.qsize() if self._queue is not None else 0

    def enqueue(self, task: Callable[[], Awaitable[T]]) -> asyncio.Future[T]:
        """Append *task* to the queue; the future resolves with its result."""
        loop = asyncio.get_running_loop()
        self._ensure_worker(loop)
        future: asyncio.Future[T] = loop.create_future()
        self._queue.put_nowait((task, future))
        return future

    def _ensure_worker(self, loop: asyncio.AbstractEventLoop) -> None:
        if self._worker is not None and not self._worker.done() and self._loop is loop:
            return
        self._loop = loop
        self._queue = asyncio.Queue()
        self._worker = loop.create_task(self._run(self._queue), name="geocache-rate-limiter")

    async def _run(self, queue: asyncio.Queue) -> None:
        while True:
            task, future = await queue.get()
            try:
                await self._wait_for_slot()
                self._last_dispatch = self._clock.monotonic()
                try:
                    result = await task()
                except asyncio.CancelledError:
                    raise
                except Exception as exc:
                    logger.debug("Scheduled task failed: %r", exc)
                    if not future.done():
                        future.set_exception(exc)
                else:
                    if not future.done():
                        future.set_result(result)
            except asyncio.CancelledError:
                if not future.done():
                    future.cancel()
                raise
            finally:
                queue.task_done()

    async def _wait_for_slot(self) -> None:
        if self._last_dispatch is None:
            return
        elapsed = self._clock.monotonic() - self._last_dispatch
        wait = self._min_interval - elapsed
        if wait > 0:
            logger.debug("Rate limit: waiting %.3fs before next dispatch", wait)
            await self._clock.sleep(wait)

    async def aclose(self) -> None:
        """Stop the worker; futures of tasks still queued are cancelled."""
        worker, self._worker = self._worker, None
        queue, self._queue = self._queue, None
        if worker is not None and not worker.done():
            worker.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await worker
        while queue is not None and not queue.empty():
            _, future = queue.get_nowait()
            if not future.done():
                future.cancel()
