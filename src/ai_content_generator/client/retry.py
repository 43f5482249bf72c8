"""Bounded retry policy with a fixed delay between attempts."""
from __future__ import annotations
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, TypeVar

T = TypeVar("T")

LOGGER = logging.getLogger("contentgen.retry")


@dataclass(frozen=True)
class RetryPolicy:
    """
    Retry an attempt while its result is retryable.

    Args:
        max_attempts: Total attempts including the first one.
        delay_s: Pause between attempts in seconds.
        sleep: Async sleep used for the pause; injectable for tests.
    """
    max_attempts: int = 3
    delay_s: float = 3.0
    sleep: Callable[[float], Awaitable[None]] = field(default=asyncio.sleep, compare=False)

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.delay_s < 0:
            raise ValueError("delay_s must be non-negative")

    async def run(
        self,
        attempt: Callable[[], Awaitable[T]],
        should_retry: Callable[[T], bool],
    ) -> tuple[T, int]:
        """
        Run ``attempt`` until it returns a non-retryable result or attempts run out.

        Returns:
            The last result and the number of attempts made. The caller decides
            what a still-retryable last result means.
        """
        attempts = 0
        while True:
            result = await attempt()
            attempts += 1
            if not should_retry(result):
                return result, attempts
            if attempts >= self.max_attempts:
                LOGGER.warning("Giving up after %s attempts", attempts)
                return result, attempts
            LOGGER.info("Retryable result, waiting %.1fs... attempt %s", self.delay_s, attempts)
            await self.sleep(self.delay_s)
