"""Exponential backoff for transient provider errors on a single call."""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable
from typing import TypeVar

from .config import get_config

logger = logging.getLogger(__name__)

T = TypeVar("T")

_RETRYABLE_PATTERNS: tuple[str, ...] = (
    "429",
    "quota",
    "resource_exhausted",
    "timeout",
    "503",
    "unavailable",
)


def _is_retryable(exc: Exception) -> bool:
    """Check if an exception message matches known transient patterns."""
    msg = str(exc).lower()
    return any(p in msg for p in _RETRYABLE_PATTERNS)


async def with_retry(coro_factory: Callable[[], Awaitable[T]]) -> T:
    """Await ``coro_factory()``, retrying transient failures with jittered backoff.

    Args:
        coro_factory: Zero-arg callable that returns a fresh awaitable each attempt.

    Raises:
        The last exception once attempts run out, or any non-transient exception.
    """
    cfg = get_config()
    attempts = cfg.retry_max_attempts

    for attempt in range(1, attempts + 1):
        try:
            return await coro_factory()
        except Exception as exc:
            if attempt == attempts or not _is_retryable(exc):
                raise
            delay = min(cfg.retry_base_delay * 2 ** (attempt - 1) + random.random(), cfg.retry_max_delay)
            logger.warning("Transient error (attempt %d/%d), retrying in %.1fs: %s", attempt, attempts, delay, exc)
            await asyncio.sleep(delay)
    raise AssertionError("unreachable")
