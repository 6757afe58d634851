"""Polling for long-running provider operations (video generation)."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from ..errors import EmptyResultError, GenerationError, PollTimeoutError
from .contracts import AsyncGenerationClient, OperationStatus
from .models import LongRunningOperation

logger = logging.getLogger(__name__)


async def poll_operation(
    check_status: Callable[[str], Awaitable[OperationStatus]],
    operation_handle: str,
    *,
    interval: float,
    max_attempts: int,
) -> LongRunningOperation:
    """Query an operation's status until it reports done.

    Status is checked immediately, then every ``interval`` seconds, for at
    most ``max_attempts`` checks. Only the awaiting task is suspended.

    Args:
        check_status: One status query for a handle.
        operation_handle: Opaque handle returned when the job was submitted.
        interval: Seconds to wait between checks.
        max_attempts: Upper bound on status checks.

    Returns:
        The finished operation, carrying the provider's response or error.

    Raises:
        PollTimeoutError: No ``done`` reading within ``max_attempts`` checks.
        EmptyResultError: ``done`` reported with neither response nor error.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be >= 1")

    operation = LongRunningOperation(operation_handle)
    loop = asyncio.get_running_loop()
    start = loop.time()

    for attempt in range(1, max_attempts + 1):
        status = await check_status(operation_handle)
        if status.done:
            logger.info(
                "Operation %s done after %d check(s), %.1fs",
                operation_handle, attempt, loop.time() - start,
            )
            if status.response is None and status.error is None:
                raise EmptyResultError(operation_handle)
            operation.done = True
            operation.response = status.response
            operation.error = status.error
            return operation
        logger.debug("Operation %s pending (check %d/%d)", operation_handle, attempt, max_attempts)
        if attempt < max_attempts:
            await asyncio.sleep(interval)

    raise PollTimeoutError(operation_handle, max_attempts)


class LongRunningTaskClient:
    """Present a submit-then-poll provider as an immediate client.

    Lets the orchestrator treat a video job like any other task: the
    operation's response becomes the payload, and a reported error,
    timeout or empty completion becomes a ``GenerationError``.
    """

    def __init__(self, client: AsyncGenerationClient, *, interval: float, max_attempts: int) -> None:
        self._client = client
        self._interval = interval
        self._max_attempts = max_attempts

    async def generate_immediate(self, prompt: str, media: Any) -> Any:
        handle = await self._client.generate_async(prompt, media)
        logger.info("Submitted long-running operation %s", handle)
        operation = await poll_operation(
            self._client.check_status,
            handle,
            interval=self._interval,
            max_attempts=self._max_attempts,
        )
        if operation.error is not None:
            raise GenerationError(f"Operation {handle} failed: {operation.error}", cause=operation.error)
        return operation.response
