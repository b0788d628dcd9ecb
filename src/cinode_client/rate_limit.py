"""Request pacing for the vendor's rate limit."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable

import structlog

logger = structlog.get_logger()


class RateLimiter:
    """Leaky-bucket pacer allowing one request per min_interval seconds.

    acquire() sleeps until at least min_interval has passed since the
    previous acquire. With leading=True the first acquire also waits a full
    interval, matching the historic "wait, then request" loop.
    Clock and sleep are injectable so tests run without wall-clock waits.
    """

    def __init__(
        self,
        min_interval: float,
        *,
        leading: bool = True,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        name: str = "api",
    ) -> None:
        """Initialize with the minimum interval in seconds."""
        if min_interval < 0:
            msg = f"min_interval must be >= 0, got {min_interval}"
            raise ValueError(msg)
        self.min_interval = min_interval
        self._leading = leading
        self._clock = clock
        self._sleep = sleep
        self._name = name
        self._last: float | None = None

    @classmethod
    def from_millis(cls, delay_ms: int, **kwargs: object) -> RateLimiter:
        """Build a limiter from a delay in milliseconds."""
        return cls(delay_ms / 1000.0, **kwargs)  # type: ignore[arg-type]

    @classmethod
    def per_second(cls, requests_per_second: float, **kwargs: object) -> RateLimiter:
        """Build a limiter from a requests-per-second budget."""
        if requests_per_second <= 0:
            msg = f"requests_per_second must be > 0, got {requests_per_second}"
            raise ValueError(msg)
        return cls(1.0 / requests_per_second, **kwargs)  # type: ignore[arg-type]

    @property
    def requests_per_second(self) -> float:
        """Request budget implied by min_interval (inf when unpaced)."""
        if self.min_interval == 0:
            return float("inf")
        return 1.0 / self.min_interval

    def _wait_time(self, now: float) -> float:
        if self._last is None:
            return self.min_interval if self._leading else 0.0
        return max(0.0, self._last + self.min_interval - now)

    async def acquire(self) -> None:
        """Wait for the next slot."""
        wait = self._wait_time(self._clock())
        if wait > 0:
            logger.debug("rate_limit_wait", limiter=self._name, seconds=round(wait, 3))
            await self._sleep(wait)
        self._last = self._clock()

    def reset(self) -> None:
        """Forget the previous request so the next acquire starts afresh."""
        self._last = None
