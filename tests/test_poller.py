"""Tests for long-running operation polling and the submit-then-poll adapter."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest

from artisan_studio_mcp.errors import EmptyResultError, GenerationError, PollTimeoutError
from artisan_studio_mcp.pipeline import (
    GenerationOrchestrator,
    GenerationRequest,
    LongRunningTaskClient,
    OperationStatus,
    PromptPair,
    TaskStatus,
    poll_operation,
)
from tests.conftest import FakeAsyncClient

PENDING = OperationStatus(done=False)


def finished(response="video-bytes") -> OperationStatus:
    return OperationStatus(done=True, response=response)


@patch("artisan_studio_mcp.pipeline.poller.asyncio.sleep", new_callable=AsyncMock)
class TestPollOperation:
    @pytest.mark.parametrize("n", [1, 2, 5, 10])
    async def test_returns_after_exactly_n_checks(self, mock_sleep, n):
        """GIVEN a status source that is done on the Nth check (N <= max_attempts),
        WHEN polling,
        THEN the response is returned after exactly N checks and N-1 sleeps.
        """
        client = FakeAsyncClient([PENDING] * (n - 1) + [finished("X")])

        op = await poll_operation(client.check_status, "op-1", interval=5.0, max_attempts=10)

        assert op.done is True
        assert op.response == "X"
        assert op.operation_handle == "op-1"
        assert len(client.checks) == n
        assert mock_sleep.await_count == n - 1

    async def test_times_out_after_exactly_max_attempts(self, mock_sleep):
        client = FakeAsyncClient([PENDING] * 5 + [finished()])

        with pytest.raises(PollTimeoutError) as exc_info:
            await poll_operation(client.check_status, "op-1", interval=5.0, max_attempts=4)

        assert len(client.checks) == 4
        assert mock_sleep.await_count == 3
        assert exc_info.value.attempts == 4
        assert exc_info.value.operation_handle == "op-1"

    async def test_sleeps_use_interval(self, mock_sleep):
        client = FakeAsyncClient([PENDING, PENDING, finished()])

        await poll_operation(client.check_status, "op-1", interval=2.5, max_attempts=5)

        assert [c.args[0] for c in mock_sleep.await_args_list] == [2.5, 2.5]

    async def test_done_without_response_or_error_raises_empty_result(self, mock_sleep):
        client = FakeAsyncClient([PENDING, OperationStatus(done=True)])

        with pytest.raises(EmptyResultError, match="op-1"):
            await poll_operation(client.check_status, "op-1", interval=1.0, max_attempts=5)

    async def test_done_with_error_is_returned_not_raised(self, mock_sleep):
        client = FakeAsyncClient([OperationStatus(done=True, error={"message": "quota"})])

        op = await poll_operation(client.check_status, "op-1", interval=1.0, max_attempts=5)

        assert op.done is True
        assert op.error == {"message": "quota"}
        assert op.response is None

    async def test_rejects_non_positive_max_attempts(self, mock_sleep):
        client = FakeAsyncClient([finished()])
        with pytest.raises(ValueError, match="max_attempts"):
            await poll_operation(client.check_status, "op-1", interval=1.0, max_attempts=0)
        assert client.checks == []

    async def test_status_check_errors_propagate(self, mock_sleep):
        client = FakeAsyncClient([PENDING, GenerationError("status endpoint down")])

        with pytest.raises(GenerationError, match="status endpoint down"):
            await poll_operation(client.check_status, "op-1", interval=1.0, max_attempts=5)


@patch("artisan_studio_mcp.pipeline.poller.asyncio.sleep", new_callable=AsyncMock)
class TestLongRunningTaskClient:
    async def test_submits_then_polls_to_response(self, mock_sleep):
        client = FakeAsyncClient([PENDING, finished("clip")])
        adapter = LongRunningTaskClient(client, interval=5.0, max_attempts=120)

        payload = await adapter.generate_immediate("make a video", b"img")

        assert payload == "clip"
        assert client.submitted == [("make a video", b"img")]
        assert client.checks == ["operations/op-1", "operations/op-1"]

    async def test_operation_error_becomes_generation_error(self, mock_sleep):
        client = FakeAsyncClient([OperationStatus(done=True, error="RAI filtered")])
        adapter = LongRunningTaskClient(client, interval=5.0, max_attempts=3)

        with pytest.raises(GenerationError, match="RAI filtered") as exc_info:
            await adapter.generate_immediate("p", None)
        assert exc_info.value.cause == "RAI filtered"

    async def test_video_task_succeeds_after_five_intervals(self, mock_sleep):
        """GIVEN check_status reports not-done five times, then done with a response,
        WHEN a single video task runs through the orchestrator,
        THEN it succeeds with that response after five 5-second waits (25s simulated).
        """
        response = {"uri": "gs://bucket/video.mp4"}
        client = FakeAsyncClient([PENDING] * 5 + [finished(response)])
        adapter = LongRunningTaskClient(client, interval=5.0, max_attempts=120)
        request = GenerationRequest(media=None, variations=("video",))

        result = await GenerationOrchestrator(adapter, lambda r, v: PromptPair("festival video")).run(request)

        outcome = result.get("video")
        assert outcome.status == TaskStatus.SUCCEEDED
        assert outcome.payload == response
        assert mock_sleep.await_count == 5
        assert sum(c.args[0] for c in mock_sleep.await_args_list) >= 25.0

    async def test_timeout_triggers_fallback_submission(self, mock_sleep):
        client = FakeAsyncClient([PENDING, PENDING, finished("fallback clip")])
        adapter = LongRunningTaskClient(client, interval=5.0, max_attempts=2)
        request = GenerationRequest(media=None, variations=("video",))

        result = await GenerationOrchestrator(
            adapter, lambda r, v: PromptPair("long prompt", "short prompt"),
        ).run(request)

        assert result.get("video").status == TaskStatus.FALLBACK_SUCCEEDED
        assert [p for p, _ in client.submitted] == ["long prompt", "short prompt"]
