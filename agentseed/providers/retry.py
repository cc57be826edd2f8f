"""Exponential-backoff retry for transient provider failures."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

import structlog

log = structlog.get_logger("agentseed.providers")

T = TypeVar("T")

_MAX_ATTEMPTS = 3
_RETRY_BASE_DELAY = 1.0  # seconds

RETRYABLE_SIGNATURES: tuple[str, ...] = (
    "rate_limit",
    "429",
    "500",
    "502",
    "503",
    "overloaded",
    "ECONNRESET",
    "ETIMEDOUT",
    "Connection reset",
    "timed out",
)


def is_retryable(exc: BaseException) -> bool:
    if isinstance(exc, (ConnectionResetError, TimeoutError)):
        return True
    message = str(exc)
    return any(sig in message for sig in RETRYABLE_SIGNATURES)


async def with_retry(
    fn: Callable[[], Awaitable[T]],
    max_attempts: int = _MAX_ATTEMPTS,
    base_delay: float = _RETRY_BASE_DELAY,
) -> T:
    """Await ``fn()``, retrying transient failures with delays base, 2*base, 4*base...

    Non-retryable errors and the final failure propagate unchanged.
    """
    for attempt in range(1, max_attempts + 1):
        try:
            return await fn()
        except Exception as exc:
            if not is_retryable(exc) or attempt == max_attempts:
                raise
            delay = base_delay * 2 ** (attempt - 1)
            log.warning(
                "provider.retry",
                attempt=attempt,
                max_attempts=max_attempts,
                delay_seconds=delay,
                error=str(exc),
            )
            await asyncio.sleep(delay)
    raise RuntimeError("retry loop exited without a result")
