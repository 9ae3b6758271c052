"""Tests for RateLimitedScheduler with an injected fake clock."""

import asyncio

import pytest

from geocache.application.scheduling.rate_limiter import RateLimitedScheduler


def _recorder(log: list, value, clock=None, times: list | None = None):
    async def task():
        log.append(value)
        if clock is not None and times is not None:
            times.append(clock.monotonic())
        return value
    return task


@pytest.mark.asyncio
async def test_runs_in_submission_order(fake_clock):
    scheduler = RateLimitedScheduler(fake_clock, min_interval=1.0)
    log: list[int] = []
    futures = [scheduler.enqueue(_recorder(log, i)) for i in range(3)]

    results = await asyncio.gather(*futures)

    assert results == [0, 1, 2]
    assert log == [0, 1, 2]
    await scheduler.aclose()


@pytest.mark.asyncio
async def test_first_dispatch_immediate_then_spaced(fake_clock):
    scheduler = RateLimitedScheduler(fake_clock, min_interval=1.0)
    log: list[int] = []
    times: list[float] = []

    await asyncio.gather(*(scheduler.enqueue(_recorder(log, i, fake_clock, times)) for i in range(4)))

    assert fake_clock.sleeps == pytest.approx([1.0, 1.0, 1.0])
    assert times[0] == 0.0
    assert all(b - a >= 1.0 for a, b in zip(times, times[1:]))
    assert times[-1] - times[0] >= 3.0
    await scheduler.aclose()


@pytest.mark.asyncio
async def test_waits_only_the_remaining_interval(fake_clock):
    scheduler = RateLimitedScheduler(fake_clock, min_interval=1.0)
    await scheduler.enqueue(_recorder([], "a"))

    fake_clock.advance(0.4)
    await scheduler.enqueue(_recorder([], "b"))

    assert fake_clock.sleeps == pytest.approx([0.6])
    await scheduler.aclose()


@pytest.mark.asyncio
async def test_no_wait_after_interval_elapsed(fake_clock):
    scheduler = RateLimitedScheduler(fake_clock, min_interval=1.0)
    await scheduler.enqueue(_recorder([], "a"))

    fake_clock.advance(2.5)
    await scheduler.enqueue(_recorder([], "b"))

    assert fake_clock.sleeps == []
    await scheduler.aclose()


@pytest.mark.asyncio
async def test_failing_task_does_not_block_queue(fake_clock):
    scheduler = RateLimitedScheduler(fake_clock, min_interval=1.0)

    async def boom():
        raise RuntimeError("provider exploded")

    failing = scheduler.enqueue(boom)
    following = scheduler.enqueue(_recorder([], "after"))

    with pytest.raises(RuntimeError, match="provider exploded"):
        await failing
    assert await following == "after"
    await scheduler.aclose()


@pytest.mark.asyncio
async def test_cancelling_future_does_not_cancel_task(fake_clock):
    scheduler = RateLimitedScheduler(fake_clock, min_interval=0.0)
    gate = asyncio.Event()
    finished: list[str] = []

    async def slow():
        await gate.wait()
        finished.append("slow")
        return "slow"

    future = scheduler.enqueue(slow)
    await asyncio.sleep(0)
    future.cancel()
    gate.set()

    assert await scheduler.enqueue(_recorder([], "next")) == "next"
    assert finished == ["slow"]
    await scheduler.aclose()


@pytest.mark.asyncio
async def test_aclose_cancels_queued_futures(fake_clock):
    scheduler = RateLimitedScheduler(fake_clock, min_interval=0.0)
    gate = asyncio.Event()

    async def blocked():
        await gate.wait()

    running = scheduler.enqueue(blocked)
    queued = scheduler.enqueue(_recorder([], "never"))
    await asyncio.sleep(0)
    assert scheduler.pending == 1

    await scheduler.aclose()

    assert running.cancelled()
    assert queued.cancelled()
    assert scheduler.pending == 0


@pytest.mark.asyncio
async def test_usable_again_after_aclose(fake_clock):
    scheduler = RateLimitedScheduler(fake_clock, min_interval=0.0)
    await scheduler.aclose()
    assert await scheduler.enqueue(_recorder([], "again")) == "again"
    await scheduler.aclose()


def test_negative_interval_rejected(fake_clock):
    with pytest.raises(ValueError, match="min_interval"):
        RateLimitedScheduler(fake_clock, min_interval=-1.0)
