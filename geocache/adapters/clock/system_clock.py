"""System clock adapter — implements ClockPort on top of time / asyncio."""

import asyncio
import time

from geocache.application.ports.clock_port import ClockPort


class SystemClock(ClockPort):
    def monotonic(self) -> float:
        return time.monotonic()

    def now_ms(self) -> int:
        return int(time.time() * 1000)

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)
